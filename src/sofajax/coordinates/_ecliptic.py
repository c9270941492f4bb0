"""Ecliptic coordinates: IAU 2006 (mean ecliptic and equinox of date) and
long-term (Vondrak et al. 2011) models.

The IAU 2006 routines take a TT two-part Julian Date; the long-term
routines take a Julian epoch and are valid for +/- 200,000 years.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.constants import DAS2R
from sofajax.precession_nutation import ltpecl, ltpequ, obl06, pmat06
from sofajax.vector_matrix import Rx, anp, anpm, c2s, pn, pxp, rxp, s2c, trxp


def _to_sphere(v: Array) -> tuple[Array, Array]:
    a, b = c2s(v)
    return anp(a), anpm(b)


def ecm06(date1: ArrayLike, date2: ArrayLike) -> Array:
    """ICRS equatorial to ecliptic rotation matrix, IAU 2006.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        3x3 ICRS to ecliptic rotation matrix.
    """
    ob = obl06(date1, date2)
    bp = pmat06(date1, date2)
    return Rx(ob) @ bp


def eqec06(date1: ArrayLike, date2: ArrayLike, dr: ArrayLike, dd: ArrayLike) -> tuple[Array, Array]:
    """Transformation from ICRS equatorial coordinates to ecliptic
    coordinates (mean equinox and ecliptic of date) using IAU 2006
    precession model.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).
        dr: ICRS right ascension (radians).
        dd: ICRS declination (radians).

    Returns:
        Tuple of (dl, db): ecliptic longitude and latitude (radians).
    """
    return _to_sphere(rxp(ecm06(date1, date2), s2c(dr, dd)))


def eceq06(date1: ArrayLike, date2: ArrayLike, dl: ArrayLike, db: ArrayLike) -> tuple[Array, Array]:
    """Transformation from ecliptic coordinates (mean equinox and ecliptic
    of date) to ICRS RA,Dec, using the IAU 2006 precession model.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).
        dl: Ecliptic longitude (radians).
        db: Ecliptic latitude (radians).

    Returns:
        Tuple of (dr, dd): ICRS right ascension and declination (radians).
    """
    return _to_sphere(trxp(ecm06(date1, date2), s2c(dl, db)))


def ltecm(epj: ArrayLike) -> Array:
    """ICRS equatorial to ecliptic rotation matrix, long-term.

    Args:
        epj: Julian epoch (TT).

    Returns:
        3x3 ICRS to ecliptic rotation matrix.
    """
    # Frame bias (IERS Conventions 2010, Eqs. 5.21 and 5.33)
    dx = -0.016617 * DAS2R
    de = -0.0068192 * DAS2R
    dr = -0.0146 * DAS2R

    # Equator pole, ecliptic pole (bottom row) and equinox (top row)
    p = ltpequ(epj)
    z = ltpecl(epj)
    _, x = pn(pxp(p, z))
    y = pxp(z, x)

    rows = jnp.stack([x, y, z])
    return jnp.stack(
        [
            rows[:, 0] - rows[:, 1] * dr + rows[:, 2] * dx,
            rows[:, 0] * dr + rows[:, 1] + rows[:, 2] * de,
            -rows[:, 0] * dx - rows[:, 1] * de + rows[:, 2],
        ],
        axis=1,
    )


def lteqec(epj: ArrayLike, dr: ArrayLike, dd: ArrayLike) -> tuple[Array, Array]:
    """Transformation from ICRS equatorial coordinates to ecliptic
    coordinates (mean equinox and ecliptic of date) using a long-term
    precession model.

    Args:
        epj: Julian epoch (TT).
        dr: ICRS right ascension (radians).
        dd: ICRS declination (radians).

    Returns:
        Tuple of (dl, db): ecliptic longitude and latitude (radians).
    """
    return _to_sphere(rxp(ltecm(epj), s2c(dr, dd)))


def lteceq(epj: ArrayLike, dl: ArrayLike, db: ArrayLike) -> tuple[Array, Array]:
    """Transformation from ecliptic coordinates (mean equinox and ecliptic
    of date) to ICRS RA,Dec, using a long-term precession model.

    Args:
        epj: Julian epoch (TT).
        dl: Ecliptic longitude (radians).
        db: Ecliptic latitude (radians).

    Returns:
        Tuple of (dr, dd): ICRS right ascension and declination (radians).
    """
    return _to_sphere(trxp(ltecm(epj), s2c(dl, db)))
