"""Star catalog conversions.

This sub-module provides:

- **Space motion**: catalog coordinates to and from pv-vectors with the
  relativistic Doppler correction, and proper motion propagation between
  epochs
- **FK4/FK5**: B1950.0 FK4 to and from J2000.0 FK5
- **Hipparcos**: FK5 to and from the Hipparcos frame
"""

from ._fk4 import fk45z, fk54z, fk425, fk524
from ._hipparcos import fk5hip, fk5hz, fk52h, h2fk5, hfk5z
from ._space_motion import pmsafe, pvstar, starpm, starpv

__all__ = [
    # Space motion
    "starpv",
    "pvstar",
    "starpm",
    "pmsafe",
    # FK4/FK5
    "fk425",
    "fk45z",
    "fk524",
    "fk54z",
    # Hipparcos
    "fk5hip",
    "fk52h",
    "fk5hz",
    "h2fk5",
    "hfk5z",
]
