"""
The `constants` module defines the mathematical, time and physical constants
shared by the SOFA routines.

Values are taken from the IAU SOFA ``sofam.h`` header.  They are plain Python
floats so that they can be folded into traced computations at any dtype.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Angular constants
# ---------------------------------------------------------------------------

DPI: float = 3.141592653589793238462643
"""Pi."""

D2PI: float = 6.283185307179586476925287
"""2*pi."""

DR2D: float = 57.29577951308232087679815
"""Radians to degrees. Units: *deg/rad*"""

DD2R: float = 1.745329251994329576923691e-2
"""Degrees to radians. Units: *rad/deg*"""

DR2AS: float = 206264.8062470963551564734
"""Radians to arcseconds. Units: *as/rad*"""

DAS2R: float = 4.848136811095359935899141e-6
"""Arcseconds to radians. Units: *rad/as*"""

DS2R: float = 7.272205216643039903848712e-5
"""Seconds of time to radians. Units: *rad/s*"""

TURNAS: float = 1296000.0
"""Arcseconds in a full circle."""

DMAS2R: float = DAS2R / 1e3
"""Milliarcseconds to radians."""

# ---------------------------------------------------------------------------
# Time constants
# ---------------------------------------------------------------------------

DTY: float = 365.242198781
"""Length of tropical year B1900. Units: *days*"""

DAYSEC: float = 86400.0
"""Seconds per day."""

DJY: float = 365.25
"""Days per Julian year."""

DJC: float = 36525.0
"""Days per Julian century."""

DJM: float = 365250.0
"""Days per Julian millennium."""

DJ00: float = 2451545.0
"""Reference epoch (J2000.0), Julian Date."""

DJM0: float = 2400000.5
"""Julian Date of Modified Julian Date zero."""

DJM00: float = 51544.5
"""Reference epoch (J2000.0), Modified Julian Date."""

DJM77: float = 43144.0
"""1977 Jan 1.0 as MJD."""

TTMTAI: float = 32.184
"""TT minus TAI. Units: *s*"""

D1900: float = 36524.68648
"""Offset of B1900.0 from J2000.0 used by the Besselian epoch routines. Units: *days*"""

# ---------------------------------------------------------------------------
# Physical constants
# ---------------------------------------------------------------------------

DAU: float = 149597870.7e3
"""Astronomical unit (IAU 2012). Units: *m*"""

CMPS: float = 299792458.0
"""Speed of light. Units: *m/s*"""

AULT: float = DAU / CMPS
"""Light time for 1 au. Units: *s*"""

DC: float = DAYSEC / AULT
"""Speed of light. Units: *au/day*"""

ELG: float = 6.969290134e-10
"""L_G = 1 - d(TT)/d(TCG)."""

ELB: float = 1.550519768e-8
"""L_B = 1 - d(TDB)/d(TCB)."""

TDB0: float = -6.55e-5
"""TDB (s) at TAI 1977/1/1.0."""

SRS: float = 1.97412574336e-8
"""Schwarzschild radius of the Sun (au), ``2 * 1.32712440041e20 / (2.99792458e8)^2 / 1.49597870700e11``."""

# ---------------------------------------------------------------------------
# Reference ellipsoids
# ---------------------------------------------------------------------------

WGS84: int = 1
"""Identifier of the WGS84 reference ellipsoid."""

GRS80: int = 2
"""Identifier of the GRS80 reference ellipsoid."""

WGS72: int = 3
"""Identifier of the WGS72 reference ellipsoid."""
