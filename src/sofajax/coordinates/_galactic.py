"""Galactic coordinates (IAU 1958 system, Hipparcos realisation)."""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.config import get_dtype
from sofajax.vector_matrix import anp, anpm, c2s, rxp, s2c, trxp

# fmt: off
# ICRS to Galactic rotation matrix, R_3(-R) R_1(pi/2-Q) R_3(pi/2+P) with
#   P = 192.85948 deg  RA of the Galactic north pole (ICRS)
#   Q =  27.12825 deg  Dec of the Galactic north pole (ICRS)
#   R =  32.93192 deg  Galactic longitude of the ascending node of the
#                      Galactic equator on the ICRS equator
_ICRS_TO_GALACTIC = (
    (-0.054875560416215368492398900454, -0.873437090234885048760383168409, -0.483835015548713226831774175116),
    ( 0.494109427875583673525222371358, -0.444829629960011178146614061616,  0.746982244497218890527388004556),
    (-0.867666149019004701181616534570, -0.198076373431201528180486091412,  0.455983776175066922272100478348),
)
# fmt: on


def g2icrs(dl: ArrayLike, db: ArrayLike) -> tuple[Array, Array]:
    """Transformation from Galactic coordinates to ICRS.

    Args:
        dl: Galactic longitude (radians).
        db: Galactic latitude (radians).

    Returns:
        Tuple of (dr, dd): ICRS right ascension (0 to 2pi) and declination.
    """
    r = jnp.array(_ICRS_TO_GALACTIC, dtype=get_dtype())
    dr, dd = c2s(trxp(r, s2c(dl, db)))
    return anp(dr), anpm(dd)


def icrs2g(dr: ArrayLike, dd: ArrayLike) -> tuple[Array, Array]:
    """Transformation from ICRS to Galactic coordinates.

    Args:
        dr: ICRS right ascension (radians).
        dd: ICRS declination (radians).

    Returns:
        Tuple of (dl, db): Galactic longitude (0 to 2pi) and latitude.
    """
    r = jnp.array(_ICRS_TO_GALACTIC, dtype=get_dtype())
    dl, db = c2s(rxp(r, s2c(dr, dd)))
    return anp(dl), anpm(db)
