"""Coordinate frames.

This sub-module provides:

- **Horizon**: azimuth/altitude and hour angle/declination, parallactic
  angle
- **Geodetic**: reference ellipsoids and geocentric/geodetic conversion
- **Galactic**: ICRS to and from Galactic coordinates
- **Ecliptic**: ICRS to and from ecliptic coordinates, IAU 2006 and
  long-term precession
"""

from ._ecliptic import eceq06, ecm06, eqec06, ltecm, lteceq, lteqec
from ._galactic import g2icrs, icrs2g
from ._geodetic import eform, gc2gd, gc2gde, gd2gc, gd2gce
from ._horizon import ae2hd, hd2ae, hd2pa

__all__ = [
    # Horizon
    "ae2hd",
    "hd2ae",
    "hd2pa",
    # Geodetic
    "eform",
    "gc2gd",
    "gc2gde",
    "gd2gc",
    "gd2gce",
    # Galactic
    "g2icrs",
    "icrs2g",
    # Ecliptic
    "ecm06",
    "eqec06",
    "eceq06",
    "ltecm",
    "lteqec",
    "lteceq",
]
