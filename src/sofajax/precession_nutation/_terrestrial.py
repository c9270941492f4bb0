"""Celestial (GCRS) to terrestrial (ITRS) matrices.

These combine precession-nutation with Earth rotation and polar motion.
TT drives the precession-nutation and UT1 the rotation; *xp*, *yp* are the
pole coordinates in radians.
"""

from __future__ import annotations

from jax import Array
from jax.typing import ArrayLike

from sofajax.earth_rotation import ee00, era00, gmst00

from ._cio import sp00
from ._matrices import c2i00a, c2i00b, c2i06a, c2ixy, c2tcio, c2teqx, pn00, pom00


def c2t00a(
    tta: ArrayLike, ttb: ArrayLike, uta: ArrayLike, utb: ArrayLike, xp: ArrayLike, yp: ArrayLike
) -> Array:
    """Form the celestial to terrestrial matrix given the date, the UT1 and
    the polar motion, using the IAU 2000A precession-nutation model.

    Args:
        tta: TT as 2-part Julian Date (part 1).
        ttb: TT as 2-part Julian Date (part 2).
        uta: UT1 as 2-part Julian Date (part 1).
        utb: UT1 as 2-part Julian Date (part 2).
        xp: Pole x coordinate (radians).
        yp: Pole y coordinate (radians).

    Returns:
        3x3 celestial-to-terrestrial matrix.
    """
    rc2i = c2i00a(tta, ttb)
    era = era00(uta, utb)
    rpom = pom00(xp, yp, sp00(tta, ttb))
    return c2tcio(rc2i, era, rpom)


def c2t00b(
    tta: ArrayLike, ttb: ArrayLike, uta: ArrayLike, utb: ArrayLike, xp: ArrayLike, yp: ArrayLike
) -> Array:
    """Form the celestial to terrestrial matrix given the date, the UT1 and
    the polar motion, using the IAU 2000B precession-nutation model.

    The TIO locator s' is ignored, consistent with the accuracy of 2000B.

    Returns:
        3x3 celestial-to-terrestrial matrix.
    """
    rc2i = c2i00b(tta, ttb)
    era = era00(uta, utb)
    rpom = pom00(xp, yp, 0.0)
    return c2tcio(rc2i, era, rpom)


def c2t06a(
    tta: ArrayLike, ttb: ArrayLike, uta: ArrayLike, utb: ArrayLike, xp: ArrayLike, yp: ArrayLike
) -> Array:
    """Form the celestial to terrestrial matrix given the date, the UT1 and
    the polar motion, using the IAU 2006/2000A precession-nutation model.

    Returns:
        3x3 celestial-to-terrestrial matrix.
    """
    rc2i = c2i06a(tta, ttb)
    era = era00(uta, utb)
    rpom = pom00(xp, yp, sp00(tta, ttb))
    return c2tcio(rc2i, era, rpom)


def c2tpe(
    tta: ArrayLike,
    ttb: ArrayLike,
    uta: ArrayLike,
    utb: ArrayLike,
    dpsi: ArrayLike,
    deps: ArrayLike,
    xp: ArrayLike,
    yp: ArrayLike,
) -> Array:
    """Form the celestial to terrestrial matrix given the date, the UT1, the
    nutation and the polar motion.  IAU 2000, equinox based.

    Args:
        tta: TT as 2-part Julian Date (part 1).
        ttb: TT as 2-part Julian Date (part 2).
        uta: UT1 as 2-part Julian Date (part 1).
        utb: UT1 as 2-part Julian Date (part 2).
        dpsi: Nutation in longitude (radians).
        deps: Nutation in obliquity (radians).
        xp: Pole x coordinate (radians).
        yp: Pole y coordinate (radians).

    Returns:
        3x3 celestial-to-terrestrial matrix.
    """
    epsa, _, _, _, _, rbpn = pn00(tta, ttb, dpsi, deps)
    gmst = gmst00(uta, utb, tta, ttb)
    ee = ee00(tta, ttb, epsa, dpsi)
    rpom = pom00(xp, yp, sp00(tta, ttb))
    return c2teqx(rbpn, gmst + ee, rpom)


def c2txy(
    tta: ArrayLike,
    ttb: ArrayLike,
    uta: ArrayLike,
    utb: ArrayLike,
    x: ArrayLike,
    y: ArrayLike,
    xp: ArrayLike,
    yp: ArrayLike,
) -> Array:
    """Form the celestial to terrestrial matrix given the date, the UT1, the
    CIP coordinates and the polar motion.  IAU 2000.

    Args:
        tta: TT as 2-part Julian Date (part 1).
        ttb: TT as 2-part Julian Date (part 2).
        uta: UT1 as 2-part Julian Date (part 1).
        utb: UT1 as 2-part Julian Date (part 2).
        x: CIP x coordinate.
        y: CIP y coordinate.
        xp: Pole x coordinate (radians).
        yp: Pole y coordinate (radians).

    Returns:
        3x3 celestial-to-terrestrial matrix.
    """
    rc2i = c2ixy(tta, ttb, x, y)
    era = era00(uta, utb)
    rpom = pom00(xp, yp, sp00(tta, ttb))
    return c2tcio(rc2i, era, rpom)
