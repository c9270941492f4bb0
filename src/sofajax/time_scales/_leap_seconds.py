"""TAI-UTC (Delta(AT)) from the built-in leap-second table.

The table must be updated by hand whenever IERS announces a new leap
second: append the new entry to :data:`_CHANGES` and move
:data:`LEAP_SECOND_TABLE_YEAR` to the year of the release.  Dates more than
five years after that year are flagged as dubious.

Before 1972 UTC was a rubber time scale; for those eras Delta(AT) drifts
linearly with the MJD and the table carries the drift parameters.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.calendars import cal2jd
from sofajax.config import get_dtype

LEAP_SECOND_TABLE_YEAR: int = 2023
"""Release year of the leap-second table."""

# fmt: off
# Dates and Delta(AT)s: (year, month, TAI-UTC in seconds)
_CHANGES = (
    (1960,  1,  1.4178180),
    (1961,  1,  1.4228180),
    (1961,  8,  1.3728180),
    (1962,  1,  1.8458580),
    (1963, 11,  1.9458580),
    (1964,  1,  3.2401300),
    (1964,  4,  3.3401300),
    (1964,  9,  3.4401300),
    (1965,  1,  3.5401300),
    (1965,  3,  3.6401300),
    (1965,  7,  3.7401300),
    (1965,  9,  3.8401300),
    (1966,  1,  4.3131700),
    (1968,  2,  4.2131700),
    (1972,  1, 10.0),
    (1972,  7, 11.0),
    (1973,  1, 12.0),
    (1974,  1, 13.0),
    (1975,  1, 14.0),
    (1976,  1, 15.0),
    (1977,  1, 16.0),
    (1978,  1, 17.0),
    (1979,  1, 18.0),
    (1980,  1, 19.0),
    (1981,  7, 20.0),
    (1982,  7, 21.0),
    (1983,  7, 22.0),
    (1985,  7, 23.0),
    (1988,  1, 24.0),
    (1990,  1, 25.0),
    (1991,  1, 26.0),
    (1992,  7, 27.0),
    (1993,  7, 28.0),
    (1994,  7, 29.0),
    (1996,  1, 30.0),
    (1997,  7, 31.0),
    (1999,  1, 32.0),
    (2006,  1, 33.0),
    (2009,  1, 34.0),
    (2012,  7, 35.0),
    (2015,  7, 36.0),
    (2017,  1, 37.0),
)

# Reference MJD and drift rate (s/day) for the pre-1972 entries
_DRIFT = (
    (37300.0, 0.0012960),
    (37300.0, 0.0012960),
    (37300.0, 0.0012960),
    (37665.0, 0.0011232),
    (37665.0, 0.0011232),
    (38761.0, 0.0012960),
    (38761.0, 0.0012960),
    (38761.0, 0.0012960),
    (38761.0, 0.0012960),
    (38761.0, 0.0012960),
    (38761.0, 0.0012960),
    (38761.0, 0.0012960),
    (39126.0, 0.0025920),
    (39126.0, 0.0025920),
)
# fmt: on


def dat(iy: ArrayLike, im: ArrayLike, id: ArrayLike, fd: ArrayLike) -> tuple[Array, Array]:
    """For a given UTC date, calculate Delta(AT) = TAI-UTC.

    UTC began at 1960 January 1.0; before then the status is +1 and the
    returned value is zero.  Leap seconds can only be predicted for the few
    months after the latest table entry, so dates more than five years past
    :data:`LEAP_SECOND_TABLE_YEAR` are also flagged +1.

    Args:
        iy: UTC year.
        im: UTC month.
        id: UTC day.
        fd: Fraction of day, used only for pre-1972 dates.

    Returns:
        Tuple of (deltat, status). ``deltat`` is TAI-UTC in seconds.
        Status: 1 dubious year, 0 OK, -1 bad year, -2 bad month,
        -3 bad day, -4 bad fraction, -5 internal error.

    Examples:
        >>> deltat, j = dat(2017, 9, 1, 0.0)
        >>> float(deltat)
        37.0
    """
    dtype = get_dtype()
    iy = jnp.asarray(iy, dtype=jnp.int64)
    im = jnp.asarray(im, dtype=jnp.int64)
    fd = jnp.asarray(fd, dtype=dtype)

    changes = jnp.array(_CHANGES, dtype=dtype)
    drift = jnp.array(_DRIFT, dtype=dtype)

    _, djm, jc = cal2jd(iy, im, id)

    # Index of the latest change not after the given month
    keys = 12 * changes[:, 0].astype(jnp.int64) + changes[:, 1].astype(jnp.int64)
    m = 12 * iy + im
    i = jnp.sum(keys <= m) - 1
    ic = jnp.clip(i, 0, len(_CHANGES) - 1)

    da = changes[ic, 2]
    pre72 = ic < len(_DRIFT)
    idr = jnp.clip(ic, 0, len(_DRIFT) - 1)
    da = jnp.where(pre72, da + (djm + fd - drift[idr, 0]) * drift[idr, 1], da)

    before_utc = iy < _CHANGES[0][0]
    da = jnp.where(before_utc, 0.0, da)

    status = jnp.where(
        (fd < 0.0) | (fd > 1.0), -4,
        jnp.where(
            jc < 0, jc,
            jnp.where(
                before_utc, 1,
                jnp.where(i < 0, -5,
                          jnp.where(iy > LEAP_SECOND_TABLE_YEAR + 5, 1, 0)),
            ),
        ),
    ).astype(jnp.int32)
    da = jnp.where(status < 0, 0.0, da)
    return da, status
