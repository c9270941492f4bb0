"""FK5 (J2000.0) to and from Hipparcos.

The FK5 frame is rotated with respect to Hipparcos by a fixed orientation
and spins at a constant rate (Feissel & Mignard 1998).
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.config import get_dtype
from sofajax.constants import DAS2R, DJ00, DJY
from sofajax.vector_matrix import anp, c2s, pmp, ppp, pv2s, pxp, rv2m, rxp, rxr, s2c, sxp, trxp

from ._space_motion import pvstar, starpv

# FK5 wrt Hipparcos orientation (arcsec) and spin (arcsec/year)
_ORIENTATION = (-19.9e-3, -9.1e-3, 22.9e-3)
_SPIN = (-0.30e-3, 0.60e-3, 0.70e-3)


def fk5hip() -> tuple[Array, Array]:
    """FK5 to Hipparcos rotation and spin.

    Returns:
        Tuple of (r5h, s5h): the 3x3 r-matrix FK5 rotation wrt Hipparcos
        and the r-vector FK5 spin wrt Hipparcos (radians/year).
    """
    v = jnp.array(_ORIENTATION, dtype=get_dtype()) * DAS2R
    s5h = jnp.array(_SPIN, dtype=get_dtype()) * DAS2R
    return rv2m(v), s5h


def fk52h(
    r5: ArrayLike,
    d5: ArrayLike,
    dr5: ArrayLike,
    dd5: ArrayLike,
    px5: ArrayLike,
    rv5: ArrayLike,
) -> tuple[Array, Array, Array, Array, Array, Array]:
    """Transform FK5 (J2000.0) star data into the Hipparcos system.

    Args:
        r5: RA (radians).
        d5: Dec (radians).
        dr5: Proper motion in RA (dRA/dt, radians/Julian year).
        dd5: Proper motion in Dec (dDec/dt, radians/Julian year).
        px5: Parallax (arcsec).
        rv5: Radial velocity (km/s, positive = receding).

    Returns:
        Tuple of (rh, dh, drh, ddh, pxh, rvh) in the Hipparcos system.
    """
    pv5, _ = starpv(r5, d5, dr5, dd5, px5, rv5)

    # Spin in radians per day
    r5h, s5h = fk5hip()
    s5h = s5h / 365.25

    pvh = jnp.stack([
        rxp(r5h, pv5[0]),
        rxp(r5h, ppp(pxp(pv5[0], s5h), pv5[1])),
    ])

    rh, dh, drh, ddh, pxh, rvh, _ = pvstar(pvh)
    return rh, dh, drh, ddh, pxh, rvh


def h2fk5(
    rh: ArrayLike,
    dh: ArrayLike,
    drh: ArrayLike,
    ddh: ArrayLike,
    pxh: ArrayLike,
    rvh: ArrayLike,
) -> tuple[Array, Array, Array, Array, Array, Array]:
    """Transform Hipparcos star data into the FK5 (J2000.0) system.

    Args:
        rh: RA (radians).
        dh: Dec (radians).
        drh: Proper motion in RA (dRA/dt, radians/Julian year).
        ddh: Proper motion in Dec (dDec/dt, radians/Julian year).
        pxh: Parallax (arcsec).
        rvh: Radial velocity (km/s, positive = receding).

    Returns:
        Tuple of (r5, d5, dr5, dd5, px5, rv5) in the FK5 system.
    """
    pvh, _ = starpv(rh, dh, drh, ddh, pxh, rvh)

    r5h, s5h = fk5hip()
    sh = rxp(r5h, s5h / 365.25)

    pv5 = jnp.stack([
        trxp(r5h, pvh[0]),
        trxp(r5h, pmp(pvh[1], pxp(pvh[0], sh))),
    ])

    r5, d5, dr5, dd5, px5, rv5, _ = pvstar(pv5)
    return r5, d5, dr5, dd5, px5, rv5


def fk5hz(r5: ArrayLike, d5: ArrayLike, date1: ArrayLike, date2: ArrayLike) -> tuple[Array, Array]:
    """Transform an FK5 (J2000.0) star position into the system of the
    Hipparcos catalogue, assuming zero Hipparcos proper motion.

    Args:
        r5: FK5 RA (radians), equinox J2000.0, at date.
        d5: FK5 Dec (radians), equinox J2000.0, at date.
        date1: TDB date (part 1).
        date2: TDB date (part 2).

    Returns:
        Tuple of (rh, dh): Hipparcos RA and Dec (radians).
    """
    # Interval from the given date back to J2000.0 (Julian years)
    t = -((jnp.asarray(date1) - DJ00) + date2) / DJY

    r5h, s5h = fk5hip()

    # Derotate the FK5 axes back to date, then into Hipparcos
    rst = rv2m(sxp(t, s5h))
    ph = rxp(r5h, trxp(rst, s2c(r5, d5)))

    w, dh = c2s(ph)
    return anp(w), dh


def hfk5z(
    rh: ArrayLike, dh: ArrayLike, date1: ArrayLike, date2: ArrayLike
) -> tuple[Array, Array, Array, Array]:
    """Transform a Hipparcos star position into FK5 J2000.0, assuming zero
    Hipparcos proper motion.

    Args:
        rh: Hipparcos RA (radians).
        dh: Hipparcos Dec (radians).
        date1: TDB date (part 1).
        date2: TDB date (part 2).

    Returns:
        Tuple of (r5, d5, dr5, dd5): FK5 RA and Dec (radians) and the
        fictitious FK5 proper motion (radians/year).
    """
    t = ((jnp.asarray(date1) - DJ00) + date2) / DJY

    ph = s2c(rh, dh)
    r5h, s5h = fk5hip()
    sh = rxp(r5h, s5h)

    # Accumulated spin, then FK5 to Hipparcos
    r5ht = rxr(r5h, rv2m(sxp(t, s5h)))

    pv5e = jnp.stack([trxp(r5ht, ph), trxp(r5ht, pxp(sh, ph))])

    w, d5, _, dr5, dd5, _ = pv2s(pv5e)
    return anp(w), d5, dr5, dd5
