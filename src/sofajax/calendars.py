"""Gregorian calendar and Julian Date conversions, Besselian and Julian epochs.

Calendar arithmetic follows the integer algorithm of Explanatory Supplement
to the Astronomical Almanac (1992), section 12.92.  All integer divisions
truncate towards zero as in C, which matters for the month term of
:func:`cal2jd`.  Everything is traceable; invalid dates are reported through
the returned status rather than by raising.

References:
    1. P. Kenneth Seidelmann (ed), *Explanatory Supplement to the
       Astronomical Almanac*, University Science Books, 1992, Section 12.92.
    2. A. Klein, *A Generalized Kahan-Babuska-Summation-Algorithm*,
       Computing 76, 279-293, 2006.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.config import get_dtype
from sofajax.constants import D1900, DJ00, DJM0, DJM00, DJY, DTY
from sofajax.utils import dnint

IYMIN: int = -4799
"""Earliest year allowed by :func:`cal2jd` (4800BC)."""

# Month lengths in days
_MTAB = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

_DBL_EPSILON = 2.220446049250313e-16

_DJMIN = -68569.5
_DJMAX = 1e9


def _div(a: Array, b: int) -> Array:
    """C-style integer division (truncation towards zero)."""
    return jax.lax.div(a, jnp.asarray(b, dtype=a.dtype))


def is_leap_year(iy: ArrayLike) -> Array:
    """Gregorian leap year test.

    Args:
        iy: Year.

    Returns:
        Boolean array, ``True`` for leap years.
    """
    iy = jnp.asarray(iy)
    return (iy % 4 == 0) & ((iy % 100 != 0) | (iy % 400 == 0))


def cal2jd(iy: ArrayLike, im: ArrayLike, id: ArrayLike) -> tuple[Array, Array, Array]:
    """Gregorian Calendar to Julian Date.

    The algorithm is valid from -4800 March 1, but this implementation
    rejects dates before -4799 January 1.  The Julian Date is returned in
    two pieces: the MJD zero-point and the MJD (at 0 hrs).

    Args:
        iy: Year in Gregorian calendar.
        im: Month in Gregorian calendar.
        id: Day in Gregorian calendar.

    Returns:
        Tuple of (djm0, djm, status). ``djm0`` is always 2400000.5.
        Status: 0 OK, -1 bad year (outputs zero), -2 bad month (outputs
        zero), -3 bad day (outputs computed).

    Examples:
        >>> djm0, djm, j = cal2jd(2003, 6, 1)
        >>> float(djm)
        52791.0
    """
    iy = jnp.asarray(iy, dtype=jnp.int64)
    im = jnp.asarray(im, dtype=jnp.int64)
    id = jnp.asarray(id, dtype=jnp.int64)

    bad_year = iy < IYMIN
    bad_month = (im < 1) | (im > 12)

    mtab = jnp.array(_MTAB, dtype=jnp.int64)
    ly = jnp.where((im == 2) & is_leap_year(iy), 1, 0)
    mlen = mtab[jnp.clip(im - 1, 0, 11)] + ly
    bad_day = (id < 1) | (id > mlen)

    my = _div(im - 14, 12)
    iypmy = iy + my
    djm = (
        _div(1461 * (iypmy + 4800), 4)
        + _div(367 * (im - 2 - 12 * my), 12)
        - _div(3 * _div(iypmy + 4900, 100), 4)
        + id
        - 2432076
    ).astype(get_dtype())

    status = jnp.where(bad_year, -1, jnp.where(bad_month, -2, jnp.where(bad_day, -3, 0)))
    unusable = bad_year | bad_month
    djm0 = jnp.where(unusable, 0.0, jnp.asarray(DJM0, dtype=get_dtype()))
    djm = jnp.where(unusable, 0.0, djm)
    return djm0, djm, status.astype(jnp.int32)


def jd2cal(dj1: ArrayLike, dj2: ArrayLike) -> tuple[Array, Array, Array, Array, Array]:
    """Julian Date to Gregorian year, month, day, and fraction of a day.

    The earliest valid date is -68569.5 (-4900 March 1); dates after
    JD 1e9 are also rejected.  The two date parts may be apportioned in
    any convenient way; the fraction is computed with compensated
    summation so that no precision is lost.

    Args:
        dj1: Julian Date (part 1).
        dj2: Julian Date (part 2).

    Returns:
        Tuple of (iy, im, id, fd, status).  Status is 0 for success and
        -1 for an unacceptable date, in which case the other outputs are
        zero.
    """
    dj1 = jnp.asarray(dj1, dtype=jnp.float64)
    dj2 = jnp.asarray(dj2, dtype=jnp.float64)

    dj = dj1 + dj2
    bad = (dj < _DJMIN) | (dj > _DJMAX)
    dj1 = jnp.where(bad, 0.0, dj1)
    dj2 = jnp.where(bad, 0.0, dj2)

    # Separate day and fraction (-0.5 <= fraction < 0.5)
    d1 = dnint(dj1)
    f1 = dj1 - d1
    d2 = dnint(dj2)
    f2 = dj2 - d2
    jd = d1.astype(jnp.int64) + d2.astype(jnp.int64)

    # f1 + f2 + 0.5 by compensated summation
    s = jnp.asarray(0.5, dtype=jnp.float64)
    cs = jnp.zeros_like(s)
    for x in (f1, f2):
        t = s + x
        cs = cs + jnp.where(jnp.abs(s) >= jnp.abs(x), (s - t) + x, (x - t) + s)
        s = t
        wrap = s >= 1.0
        jd = jd + wrap.astype(jnp.int64)
        s = jnp.where(wrap, s - 1.0, s)
    f = s + cs
    cs = f - s

    # Negative f
    neg = f < 0.0
    fn = s + 1.0
    cs_n = cs + ((1.0 - fn) + s)
    s_n = fn
    f_n = s_n + cs_n
    cs = jnp.where(neg, f_n - s_n, cs)
    s = jnp.where(neg, s_n, s)
    f = jnp.where(neg, f_n, f)
    jd = jd - neg.astype(jnp.int64)

    # f that is 1.0 or more when rounded to double
    over = (f - 1.0) >= -_DBL_EPSILON / 4.0
    t = s - 1.0
    cs_o = cs + ((s - t) - 1.0)
    f_o = t + cs_o
    carry = over & (-_DBL_EPSILON / 2.0 < f_o)
    f = jnp.where(over, jnp.where(carry, jnp.maximum(f_o, 0.0), f_o), f)
    jd = jd + carry.astype(jnp.int64)

    # Express day in Gregorian calendar
    l = jd + 68569
    n = _div(4 * l, 146097)
    l = l - _div(146097 * n + 3, 4)
    i = _div(4000 * (l + 1), 1461001)
    l = l - _div(1461 * i, 4) + 31
    k = _div(80 * l, 2447)
    iday = l - _div(2447 * k, 80)
    l = _div(k, 11)
    imonth = k + 2 - 12 * l
    iyear = 100 * (n - 49) + i + l

    zero = jnp.zeros_like(iyear)
    return (
        jnp.where(bad, zero, iyear).astype(jnp.int32),
        jnp.where(bad, zero, imonth).astype(jnp.int32),
        jnp.where(bad, zero, iday).astype(jnp.int32),
        jnp.where(bad, 0.0, f),
        jnp.where(bad, -1, 0).astype(jnp.int32),
    )


def jdcalf(ndp: int, dj1: ArrayLike, dj2: ArrayLike) -> tuple[Array, Array, Array, Array, Array]:
    """Julian Date to Gregorian Calendar, rounded to a given number of places.

    Args:
        ndp: Number of decimal places of days in the fraction (static).
            Values outside 0-9 are treated as 0 and flagged.
        dj1: Julian Date (part 1).
        dj2: Julian Date (part 2).

    Returns:
        Tuple of (iy, im, id, ifrac, status) where ``ifrac`` is the
        fraction of day as an integer in units of ``10**-ndp``.  Status:
        -1 date out of range, 0 OK, +1 ndp not in 0-9.
    """
    if 0 <= ndp <= 9:
        j = 0
        denom = float(10 ** ndp)
    else:
        j = 1
        denom = 1.0

    dj1 = jnp.asarray(dj1, dtype=jnp.float64)
    dj2 = jnp.asarray(dj2, dtype=jnp.float64)

    # Copy the date, big then small
    big_first = jnp.abs(dj1) >= jnp.abs(dj2)
    d1 = jnp.where(big_first, dj1, dj2)
    d2 = jnp.where(big_first, dj2, dj1)

    # Realign to midnight
    d1 = d1 - 0.5

    # Separate day and fraction
    d = dnint(d1)
    f1 = d1 - d
    djd = d
    d = dnint(d2)
    f2 = d2 - d
    djd = djd + d
    d = dnint(f1 + f2)
    f = (f1 - d) + f2
    neg = f < 0.0
    f = jnp.where(neg, f + 1.0, f)
    d = jnp.where(neg, d - 1.0, d)
    djd = djd + d

    # Round the total fraction to the specified number of places
    rf = dnint(f * denom) / denom

    # Re-align to noon
    djd = djd + 0.5

    iy, im, id, fd, js = jd2cal(djd, rf)
    ifrac = dnint(fd * denom).astype(jnp.int32)
    status = jnp.where(js < 0, js, j).astype(jnp.int32)
    return iy, im, id, ifrac, status


# ---------------------------------------------------------------------------
# Epochs
# ---------------------------------------------------------------------------


def epb(dj1: ArrayLike, dj2: ArrayLike) -> Array:
    """Julian Date to Besselian Epoch.

    Args:
        dj1: Julian Date (part 1).
        dj2: Julian Date (part 2).

    Returns:
        Besselian Epoch.
    """
    return 1900.0 + ((dj1 - DJ00) + (dj2 + D1900)) / DTY


def epb2jd(epb: ArrayLike) -> tuple[Array, Array]:
    """Besselian Epoch to Julian Date.

    Returns:
        Tuple of (djm0, djm): the MJD zero-point and the Modified Julian Date.
    """
    djm = 15019.81352 + (jnp.asarray(epb) - 1900.0) * DTY
    return jnp.full_like(djm, DJM0), djm


def epj(dj1: ArrayLike, dj2: ArrayLike) -> Array:
    """Julian Date to Julian Epoch.

    Args:
        dj1: Julian Date (part 1).
        dj2: Julian Date (part 2).

    Returns:
        Julian Epoch.
    """
    return 2000.0 + ((dj1 - DJ00) + dj2) / DJY


def epj2jd(epj: ArrayLike) -> tuple[Array, Array]:
    """Julian Epoch to Julian Date.

    Returns:
        Tuple of (djm0, djm): the MJD zero-point and the Modified Julian Date.
    """
    djm = DJM00 + (jnp.asarray(epj) - 2000.0) * 365.25
    return jnp.full_like(djm, DJM0), djm
