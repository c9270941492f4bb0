"""Time scales.

This sub-module provides:

- **Leap seconds**: :func:`dat` and the hand-maintained TAI-UTC table
- **Scale conversions**: TAI, TT, TCG, TDB, TCB, UTC and UT1, all on
  two-part Julian Dates
- **Formatting**: two-part Julian Date to and from calendar date and
  time-of-day fields, aware of UTC leap seconds
"""

from ._formatting import d2dtf, dtf2d
from ._leap_seconds import LEAP_SECOND_TABLE_YEAR, dat
from ._scales import (
    taitt,
    taiut1,
    taiutc,
    tcbtdb,
    tcgtt,
    tdbtcb,
    tdbtt,
    tttai,
    tttcg,
    tttdb,
    ttut1,
    ut1tai,
    ut1tt,
    ut1utc,
    utctai,
    utcut1,
)

__all__ = [
    "LEAP_SECOND_TABLE_YEAR",
    "dat",
    "d2dtf",
    "dtf2d",
    "taitt",
    "tttai",
    "taiut1",
    "ut1tai",
    "ttut1",
    "ut1tt",
    "tttcg",
    "tcgtt",
    "tttdb",
    "tdbtt",
    "tdbtcb",
    "tcbtdb",
    "utctai",
    "taiutc",
    "utcut1",
    "ut1utc",
]
