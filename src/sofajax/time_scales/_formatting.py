"""Conversion between two-part Julian Dates and calendar date + time fields.

Both routines know about UTC leap seconds when *scale* is ``"UTC"``: a day
ending in a leap second is 86401 SI seconds long and its final minute has
61 seconds.  For any other scale name the day is always 86400 seconds.

*scale* and *ndp* select code paths and must be static (Python values).
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.calendars import cal2jd, jd2cal
from sofajax.constants import DAYSEC
from sofajax.vector_matrix import d2tf_fields

from ._leap_seconds import dat


def d2dtf(
    scale: str, ndp: int, d1: ArrayLike, d2: ArrayLike
) -> tuple[Array, Array, Array, Array, Array]:
    """Format a two-part Julian Date for output.

    Args:
        scale: Time scale ID, e.g. ``"UTC"``, ``"TAI"``, ``"TT"`` (static).
        ndp: Resolution of the seconds field (static, see
            :func:`~sofajax.vector_matrix.d2tf_fields`).
        d1: Time as a 2-part Julian Date (part 1).
        d2: Time as a 2-part Julian Date (part 2).

    Returns:
        Tuple of (iy, im, id, ihmsf, status) where ``ihmsf`` holds hours,
        minutes, seconds and fraction.  Status: 1 dubious year, 0 OK,
        -1 unacceptable date.

    Examples:
        >>> iy, im, id, ihmsf, j = d2dtf("UTC", 5, 2400000.5, 49533.99999)
        >>> [int(v) for v in ihmsf]
        [23, 59, 60, 13599]
    """
    a1 = jnp.asarray(d1, dtype=jnp.float64)
    b1 = jnp.asarray(d2, dtype=jnp.float64)

    # Provisional calendar date
    iy1, im1, id1, fd, j1 = jd2cal(a1, b1)
    err = j1 < 0
    js = jnp.int32(0)

    # Is this a leap second day?
    leap = jnp.zeros_like(err)
    if scale == "UTC":
        # TAI-UTC at 0h today, at 12h today (to detect drift) and at 0h
        # tomorrow (to detect jumps)
        dat0, j2 = dat(iy1, im1, id1, 0.0)
        dat12, j3 = dat(iy1, im1, id1, 0.5)
        iy2, im2, id2, _, j4 = jd2cal(a1 + 1.5, b1 - fd)
        dat24, j5 = dat(iy2, im2, id2, 0.0)
        err = err | (j2 < 0) | (j3 < 0) | (j4 < 0) | (j5 < 0)
        js = j5

        # Any sudden change in TAI-UTC (seconds)
        dleap = dat24 - (2.0 * dat12 - dat0)

        # If leap second day, scale the fraction of a day into SI
        leap = jnp.abs(dleap) > 0.5
        fd = jnp.where(leap, fd + fd * dleap / DAYSEC, fd)

    # Provisional time of day
    _, ihmsf = d2tf_fields(ndp, fd)

    # Has the (rounded) time gone past 24h?  If so we probably need
    # tomorrow's calendar date.
    rollover = ihmsf[0] > 23
    iyt, imt, idt, _, jt = jd2cal(a1 + 1.5, b1 - fd)

    # Use 0h tomorrow unless this is a leap second day and we are still
    # inside the leap second itself (rounding to 10s or coarser always goes
    # up to the new day).
    tomorrow = rollover & (~leap | (ihmsf[2] > 0) | (ndp < 0))
    sixty = rollover & ~tomorrow

    iy = jnp.where(tomorrow, iyt, iy1)
    im = jnp.where(tomorrow, imt, im1)
    id = jnp.where(tomorrow, idt, id1)
    hms = jnp.where(
        tomorrow,
        jnp.array([0, 0, 0]),
        jnp.where(sixty, jnp.array([23, 59, 60]), ihmsf[:3]),
    )
    ihmsf = jnp.concatenate([hms, ihmsf[3:]]).astype(jnp.int32)

    status = jnp.where(
        err | (rollover & (jt < 0)), -1, jnp.where(rollover, 0, js)
    ).astype(jnp.int32)
    return iy, im, id, ihmsf, status


def dtf2d(
    scale: str,
    iy: ArrayLike,
    im: ArrayLike,
    id: ArrayLike,
    ihr: ArrayLike,
    imn: ArrayLike,
    sec: ArrayLike,
) -> tuple[Array, Array, Array]:
    """Encode date and time fields into a two-part Julian Date.

    Args:
        scale: Time scale ID (static). Only ``"UTC"`` is treated specially.
        iy: Year in Gregorian calendar.
        im: Month in Gregorian calendar.
        id: Day in Gregorian calendar.
        ihr: Hour.
        imn: Minute.
        sec: Seconds.

    Returns:
        Tuple of (d1, d2, status). Status: 3 time out of range and dubious
        year, 2 time out of range, 1 dubious year, 0 OK, -1 bad year,
        -2 bad month, -3 bad day, -4 bad hour, -5 bad minute, -6 bad second.
    """
    ihr = jnp.asarray(ihr)
    imn = jnp.asarray(imn)
    sec = jnp.asarray(sec, dtype=jnp.float64)

    # Today's Julian Day Number
    djm0, djm, jc = cal2jd(iy, im, id)
    dj = djm0 + djm

    # Day length and final minute length in seconds (provisional)
    day = jnp.asarray(DAYSEC)
    seclim = jnp.asarray(60.0)
    js = jnp.int32(0)

    if scale == "UTC":
        dat0, j1 = dat(iy, im, id, 0.0)
        dat12, j2 = dat(iy, im, id, 0.5)
        iy2, im2, id2, _, j3 = jd2cal(dj, 1.5)
        dat24, j4 = dat(iy2, im2, id2, 0.0)
        js = jnp.where(
            j1 < 0, j1, jnp.where(j2 < 0, j2, jnp.where(j3 < 0, j3, j4))
        )

        # Any sudden change in TAI-UTC between today and tomorrow
        dleap = dat24 - (2.0 * dat12 - dat0)

        # If leap second day, correct the day and final minute lengths
        day = day + dleap
        seclim = jnp.where((ihr == 23) & (imn == 59), seclim + dleap, seclim)

    # Validate the time
    tstat = jnp.where(
        (ihr < 0) | (ihr > 23), -4,
        jnp.where((imn < 0) | (imn > 59), -5,
                  jnp.where(sec < 0.0, -6, jnp.where(sec >= seclim, 2, 0))),
    )
    status = jnp.where(
        jc < 0, jc,
        jnp.where(js < 0, js, jnp.where(tstat < 0, tstat, js + tstat)),
    ).astype(jnp.int32)

    # The time in days
    time = (60.0 * (60 * ihr + imn) + sec) / day
    return dj, time, status
