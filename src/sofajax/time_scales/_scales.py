"""Conversions between the TAI, TT, TCG, TDB, TCB, UTC and UT1 time scales.

Every routine takes and returns a two-part Julian Date.  The offset is
applied to whichever part has the smaller magnitude so that precision is
preserved.  The UTC routines depend on the leap-second table through
:func:`~sofajax.time_scales.dat` and return a status as their last element;
the others cannot fail.

UTC is represented with the SOFA "quasi-JD" convention: on a day ending in
a leap second, the fraction of day runs slightly slower so that the leap
second fits before the next midnight.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.calendars import cal2jd, jd2cal
from sofajax.constants import DAYSEC, DJM0, DJM77, ELB, ELG, TDB0, TTMTAI

from ._leap_seconds import dat

# TT minus TAI (days)
_DTAT = TTMTAI / DAYSEC

# 1977 Jan 1 00:00:32.184 TT, as MJD
_T77T = DJM77 + TTMTAI / DAYSEC

# L_G / (1 - L_G)
_ELGG = ELG / (1.0 - ELG)

# 1977 Jan 1.0 TAI as two-part JD, TDB0 in days, L_B / (1 - L_B)
_T77TD = DJM0 + DJM77
_T77TF = TTMTAI / DAYSEC
_TDB0D = TDB0 / DAYSEC
_ELBB = ELB / (1.0 - ELB)


def _add_to_smaller(a1: ArrayLike, a2: ArrayLike, offset: ArrayLike) -> tuple[Array, Array]:
    a1 = jnp.asarray(a1)
    a2 = jnp.asarray(a2)
    first_big = jnp.abs(a1) > jnp.abs(a2)
    return (
        jnp.where(first_big, a1, a1 + offset),
        jnp.where(first_big, a2 + offset, a2),
    )


def _first_error(*statuses: Array) -> Array:
    """Combine statuses: the first negative one, otherwise the last."""
    out = statuses[-1]
    for s in reversed(statuses[:-1]):
        out = jnp.where(s < 0, s, out)
    return out.astype(jnp.int32)


# ---------------------------------------------------------------------------
# TAI, TT, UT1
# ---------------------------------------------------------------------------


def taitt(tai1: ArrayLike, tai2: ArrayLike) -> tuple[Array, Array]:
    """Time scale transformation: International Atomic Time, TAI, to
    Terrestrial Time, TT.

    Args:
        tai1: TAI as a 2-part Julian Date (part 1).
        tai2: TAI as a 2-part Julian Date (part 2).

    Returns:
        Tuple of (tt1, tt2).
    """
    return _add_to_smaller(tai1, tai2, _DTAT)


def tttai(tt1: ArrayLike, tt2: ArrayLike) -> tuple[Array, Array]:
    """Time scale transformation: Terrestrial Time, TT, to International
    Atomic Time, TAI.

    Returns:
        Tuple of (tai1, tai2).
    """
    return _add_to_smaller(tt1, tt2, -_DTAT)


def taiut1(tai1: ArrayLike, tai2: ArrayLike, dta: ArrayLike) -> tuple[Array, Array]:
    """Time scale transformation: TAI to Universal Time, UT1.

    Args:
        tai1: TAI as a 2-part Julian Date (part 1).
        tai2: TAI as a 2-part Julian Date (part 2).
        dta: UT1-TAI in seconds.

    Returns:
        Tuple of (ut11, ut12).
    """
    return _add_to_smaller(tai1, tai2, jnp.asarray(dta) / DAYSEC)


def ut1tai(ut11: ArrayLike, ut12: ArrayLike, dta: ArrayLike) -> tuple[Array, Array]:
    """Time scale transformation: UT1 to TAI.

    Args:
        ut11: UT1 as a 2-part Julian Date (part 1).
        ut12: UT1 as a 2-part Julian Date (part 2).
        dta: UT1-TAI in seconds.

    Returns:
        Tuple of (tai1, tai2).
    """
    return _add_to_smaller(ut11, ut12, -jnp.asarray(dta) / DAYSEC)


def ttut1(tt1: ArrayLike, tt2: ArrayLike, dt: ArrayLike) -> tuple[Array, Array]:
    """Time scale transformation: TT to UT1.

    Args:
        tt1: TT as a 2-part Julian Date (part 1).
        tt2: TT as a 2-part Julian Date (part 2).
        dt: TT-UT1 in seconds.

    Returns:
        Tuple of (ut11, ut12).
    """
    return _add_to_smaller(tt1, tt2, -jnp.asarray(dt) / DAYSEC)


def ut1tt(ut11: ArrayLike, ut12: ArrayLike, dt: ArrayLike) -> tuple[Array, Array]:
    """Time scale transformation: UT1 to TT.

    Args:
        ut11: UT1 as a 2-part Julian Date (part 1).
        ut12: UT1 as a 2-part Julian Date (part 2).
        dt: TT-UT1 in seconds.

    Returns:
        Tuple of (tt1, tt2).
    """
    return _add_to_smaller(ut11, ut12, jnp.asarray(dt) / DAYSEC)


# ---------------------------------------------------------------------------
# Relativistic scales: TCG, TDB, TCB
# ---------------------------------------------------------------------------


def tttcg(tt1: ArrayLike, tt2: ArrayLike) -> tuple[Array, Array]:
    """Time scale transformation: TT to Geocentric Coordinate Time, TCG.

    Returns:
        Tuple of (tcg1, tcg2).
    """
    tt1 = jnp.asarray(tt1)
    tt2 = jnp.asarray(tt2)
    first_big = jnp.abs(tt1) > jnp.abs(tt2)
    return (
        jnp.where(first_big, tt1, tt1 + ((tt2 - DJM0) + (tt1 - _T77T)) * _ELGG),
        jnp.where(first_big, tt2 + ((tt1 - DJM0) + (tt2 - _T77T)) * _ELGG, tt2),
    )


def tcgtt(tcg1: ArrayLike, tcg2: ArrayLike) -> tuple[Array, Array]:
    """Time scale transformation: TCG to TT.

    Returns:
        Tuple of (tt1, tt2).
    """
    tcg1 = jnp.asarray(tcg1)
    tcg2 = jnp.asarray(tcg2)
    first_big = jnp.abs(tcg1) > jnp.abs(tcg2)
    return (
        jnp.where(first_big, tcg1, tcg1 - ((tcg2 - DJM0) + (tcg1 - _T77T)) * ELG),
        jnp.where(first_big, tcg2 - ((tcg1 - DJM0) + (tcg2 - _T77T)) * ELG, tcg2),
    )


def tttdb(tt1: ArrayLike, tt2: ArrayLike, dtr: ArrayLike) -> tuple[Array, Array]:
    """Time scale transformation: TT to Barycentric Dynamical Time, TDB.

    Args:
        tt1: TT as a 2-part Julian Date (part 1).
        tt2: TT as a 2-part Julian Date (part 2).
        dtr: TDB-TT in seconds. This quasi-periodic quantity depends on the
            observer location and must be supplied by the caller.

    Returns:
        Tuple of (tdb1, tdb2).
    """
    return _add_to_smaller(tt1, tt2, jnp.asarray(dtr) / DAYSEC)


def tdbtt(tdb1: ArrayLike, tdb2: ArrayLike, dtr: ArrayLike) -> tuple[Array, Array]:
    """Time scale transformation: TDB to TT.

    Args:
        tdb1: TDB as a 2-part Julian Date (part 1).
        tdb2: TDB as a 2-part Julian Date (part 2).
        dtr: TDB-TT in seconds.

    Returns:
        Tuple of (tt1, tt2).
    """
    return _add_to_smaller(tdb1, tdb2, -jnp.asarray(dtr) / DAYSEC)


def tdbtcb(tdb1: ArrayLike, tdb2: ArrayLike) -> tuple[Array, Array]:
    """Time scale transformation: TDB to Barycentric Coordinate Time, TCB.

    Uses the IAU 2006 Resolution B3 definition of TDB.

    Returns:
        Tuple of (tcb1, tcb2).
    """
    tdb1 = jnp.asarray(tdb1)
    tdb2 = jnp.asarray(tdb2)
    first_big = jnp.abs(tdb1) > jnp.abs(tdb2)

    d = _T77TD - jnp.where(first_big, tdb1, tdb2)
    f = jnp.where(first_big, tdb2, tdb1) - _TDB0D
    corrected = f - (d - (f - _T77TF)) * _ELBB
    return (
        jnp.where(first_big, tdb1, corrected),
        jnp.where(first_big, corrected, tdb2),
    )


def tcbtdb(tcb1: ArrayLike, tcb2: ArrayLike) -> tuple[Array, Array]:
    """Time scale transformation: TCB to TDB.

    Returns:
        Tuple of (tdb1, tdb2).
    """
    tcb1 = jnp.asarray(tcb1)
    tcb2 = jnp.asarray(tcb2)
    first_big = jnp.abs(tcb1) > jnp.abs(tcb2)

    big = jnp.where(first_big, tcb1, tcb2)
    small = jnp.where(first_big, tcb2, tcb1)
    d = big - _T77TD
    corrected = small + _TDB0D - (d + (small - _T77TF)) * ELB
    return (
        jnp.where(first_big, tcb1, corrected),
        jnp.where(first_big, corrected, tcb2),
    )


# ---------------------------------------------------------------------------
# UTC
# ---------------------------------------------------------------------------


def utctai(utc1: ArrayLike, utc2: ArrayLike) -> tuple[Array, Array, Array]:
    """Time scale transformation: Coordinated Universal Time, UTC, to TAI.

    Args:
        utc1: UTC as a 2-part quasi Julian Date (part 1).
        utc2: UTC as a 2-part quasi Julian Date (part 2).

    Returns:
        Tuple of (tai1, tai2, status). Status: 1 dubious year, 0 OK,
        -1 unacceptable date.
    """
    utc1 = jnp.asarray(utc1, dtype=jnp.float64)
    utc2 = jnp.asarray(utc2, dtype=jnp.float64)

    # Put the two parts of the UTC into big-first order
    big1 = jnp.abs(utc1) >= jnp.abs(utc2)
    u1 = jnp.where(big1, utc1, utc2)
    u2 = jnp.where(big1, utc2, utc1)

    # Get TAI-UTC at 0h today
    iy, im, id, fd, j1 = jd2cal(u1, u2)
    dat0, j2 = dat(iy, im, id, 0.0)

    # TAI-UTC at 12h today (to detect drift)
    dat12, j3 = dat(iy, im, id, 0.5)

    # TAI-UTC at 0h tomorrow (to detect jumps)
    iyt, imt, idt, _, j4 = jd2cal(u1 + 1.5, u2 - fd)
    dat24, j5 = dat(iyt, imt, idt, 0.0)

    # Separate TAI-UTC change into per-day (DLOD) and any jump (DLEAP)
    dlod = 2.0 * (dat12 - dat0)
    dleap = dat24 - (dat0 + dlod)

    # Remove any scaling applied to spread leap into preceding day
    fd = fd * (DAYSEC + dleap) / DAYSEC

    # Scale from (pre-1972) UTC seconds to SI seconds
    fd = fd * (DAYSEC + dlod) / DAYSEC

    # Today's calendar date to 2-part JD
    z1, z2, j6 = cal2jd(iy, im, id)

    # Assemble the TAI result, preserving the UTC split and order
    a2 = z1 - u1
    a2 = a2 + z2
    a2 = a2 + (fd + dat0 / DAYSEC)

    status = _first_error(j1, j2, j3, j4, j6, j5)
    tai1 = jnp.where(big1, u1, a2)
    tai2 = jnp.where(big1, a2, u1)
    return tai1, tai2, status


def taiutc(tai1: ArrayLike, tai2: ArrayLike) -> tuple[Array, Array, Array]:
    """Time scale transformation: TAI to UTC.

    Inverts :func:`utctai` by iteration (three passes).

    Args:
        tai1: TAI as a 2-part Julian Date (part 1).
        tai2: TAI as a 2-part Julian Date (part 2).

    Returns:
        Tuple of (utc1, utc2, status). Status: 1 dubious year, 0 OK,
        -1 unacceptable date.
    """
    tai1 = jnp.asarray(tai1, dtype=jnp.float64)
    tai2 = jnp.asarray(tai2, dtype=jnp.float64)

    # Put the two parts of the TAI into big-first order
    big1 = jnp.abs(tai1) >= jnp.abs(tai2)
    a1 = jnp.where(big1, tai1, tai2)
    a2 = jnp.where(big1, tai2, tai1)

    # Initial guess for UTC
    u1 = a1
    u2 = a2

    status = jnp.int32(0)
    err = jnp.int32(0)
    for _ in range(3):
        g1, g2, j = utctai(u1, u2)
        err = jnp.where((err == 0) & (j < 0), j, err)
        status = j
        u2 = u2 + (a1 - g1)
        u2 = u2 + (a2 - g2)

    status = jnp.where(err < 0, err, status).astype(jnp.int32)
    return jnp.where(big1, u1, u2), jnp.where(big1, u2, u1), status


def utcut1(utc1: ArrayLike, utc2: ArrayLike, dut1: ArrayLike) -> tuple[Array, Array, Array]:
    """Time scale transformation: UTC to UT1.

    Args:
        utc1: UTC as a 2-part quasi Julian Date (part 1).
        utc2: UTC as a 2-part quasi Julian Date (part 2).
        dut1: Delta UT1 = UT1-UTC in seconds.

    Returns:
        Tuple of (ut11, ut12, status). Status: 1 dubious year, 0 OK,
        -1 unacceptable date.
    """
    # Look up TAI-UTC
    iy, im, id, _, j1 = jd2cal(utc1, utc2)
    dat0, j2 = dat(iy, im, id, 0.0)

    # Form UT1-TAI
    dta = dut1 - dat0

    # UTC to TAI to UT1
    tai1, tai2, jw = utctai(utc1, utc2)
    ut11, ut12 = taiut1(tai1, tai2, dta)

    err = (j1 < 0) | (j2 < 0) | (jw < 0)
    status = jnp.where(err, -1, jnp.where(jw > 0, jw, j2)).astype(jnp.int32)
    return ut11, ut12, status


def ut1utc(ut11: ArrayLike, ut12: ArrayLike, dut1: ArrayLike) -> tuple[Array, Array, Array]:
    """Time scale transformation: UT1 to UTC.

    Args:
        ut11: UT1 as a 2-part Julian Date (part 1).
        ut12: UT1 as a 2-part Julian Date (part 2).
        dut1: Delta UT1 = UT1-UTC in seconds.

    Returns:
        Tuple of (utc1, utc2, status). Status: 1 dubious year, 0 OK,
        -1 unacceptable date.
    """
    ut11 = jnp.asarray(ut11, dtype=jnp.float64)
    ut12 = jnp.asarray(ut12, dtype=jnp.float64)
    duts = jnp.asarray(dut1, dtype=jnp.float64)

    # Put the two parts of the UT1 into big-first order
    big1 = jnp.abs(ut11) >= jnp.abs(ut12)
    u1 = jnp.where(big1, ut11, ut12)
    u2 = jnp.where(big1, ut12, ut11)

    # See if the UT1 can possibly be in a leap-second day
    d1 = u1
    dats1 = jnp.zeros_like(u1)
    done = jnp.zeros_like(u1, dtype=bool)
    err = jnp.zeros_like(u1, dtype=bool)
    js = jnp.int32(0)
    for i in range(-1, 4):
        d2 = u2 + float(i)
        iy, im, id, _, jc = jd2cal(d1, d2)
        dats2, jd = dat(iy, im, id, 0.0)
        active = ~done
        err = err | (active & ((jc < 0) | (jd < 0)))
        js = jnp.where(active, jd, js)
        if i == -1:
            dats1 = dats2
        ddats = dats2 - dats1
        leap = active & (jnp.abs(ddats) >= 0.5)

        # Leap second nearby: ensure UT1-UTC is "before" value
        duts_b = jnp.where(ddats * duts >= 0.0, duts - ddats, duts)

        # UT1 for the start of the UTC day that ends in a leap
        us1, us2, jc2 = cal2jd(iy, im, id)
        us2 = us2 - 1.0 + duts_b / DAYSEC

        # Is the UT1 after this point?
        du = u1 - us1
        du = du + (u2 - us2)

        # Fraction of the current UTC day that has elapsed, ramping UT1-UTC
        fd = du * DAYSEC / (DAYSEC + ddats)
        duts_b = jnp.where(du > 0.0, duts_b + ddats * jnp.minimum(fd, 1.0), duts_b)

        err = err | (leap & (jc2 < 0))
        duts = jnp.where(leap, duts_b, duts)
        done = done | leap
        dats1 = jnp.where(active, dats2, dats1)

    # Subtract the (possibly adjusted) UT1-UTC from UT1 to give UTC
    u2 = u2 - duts / DAYSEC

    status = jnp.where(err, -1, js).astype(jnp.int32)
    return jnp.where(big1, u1, u2), jnp.where(big1, u2, u1), status
