"""Angle normalisation and sexagesimal conversions.

The decomposition helpers (:func:`a2af`, :func:`a2tf`, :func:`d2tf`) return
a sign *character* and Python integers, so they run eagerly and cannot be
used under ``jax.jit``.  They are built on the traceable
:func:`d2tf_fields`, which returns the sign as ``+1``/``-1`` and the fields
as integer arrays; use that inside compiled code.

The inverse conversions (:func:`af2a`, :func:`tf2a`, :func:`tf2d`) take the
sign as a static character and are traceable.  Like the SOFA originals they
always compute the result and report out-of-range fields through a status.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.constants import D2PI, DAS2R, DAYSEC, DPI, DS2R
from sofajax.utils import dnint


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------


def anp(a: ArrayLike) -> Array:
    """Normalize angle into the range 0 <= a < 2pi.

    Args:
        a: Angle (radians).

    Returns:
        Angle in range 0-2pi.
    """
    w = jnp.fmod(a, D2PI)
    return jnp.where(w < 0.0, w + D2PI, w)


def anpm(a: ArrayLike) -> Array:
    """Normalize angle into the range -pi <= a < +pi.

    Args:
        a: Angle (radians).

    Returns:
        Angle in range +/-pi.
    """
    w = jnp.fmod(a, D2PI)
    return jnp.where(jnp.abs(w) >= DPI, w - jnp.where(a < 0.0, -D2PI, D2PI), w)


# ---------------------------------------------------------------------------
# Decomposition into sexagesimal fields
# ---------------------------------------------------------------------------


def d2tf_fields(ndp: int, days: ArrayLike) -> tuple[Array, Array]:
    """Decompose days into hours, minutes, seconds, fraction (traceable).

    Args:
        ndp: Resolution (static). Non-negative values are the number of
            decimal places in the seconds field. Negative values round to
            units of 10s, 1m, 10m, 1h and 10h for -1 to -5.
        days: Interval in days.

    Returns:
        Tuple of (sign, fields): ``sign`` is +1 or -1, ``fields`` an int64
        array ``[hours, minutes, seconds, fraction]``.  The hours field can
        reach 24 after rounding.
    """
    days = jnp.asarray(days)
    sign = jnp.where(days >= 0.0, 1, -1)
    a = DAYSEC * jnp.abs(days)

    if ndp < 0:
        nrs = 1
        for i in range(1, -ndp + 1):
            nrs *= 6 if i in (2, 4) else 10
        a = nrs * dnint(a / nrs)

    rs = float(10 ** max(ndp, 0))
    rm = rs * 60.0
    rh = rm * 60.0

    a = dnint(rs * a)
    ah = jnp.floor(a / rh)
    a = a - ah * rh
    am = jnp.floor(a / rm)
    a = a - am * rm
    a_s = jnp.floor(a / rs)
    af = a - a_s * rs

    return sign, jnp.array([ah, am, a_s, af]).astype(jnp.int64)


def _to_python(sign: Array, fields: Array) -> tuple[str, tuple[int, int, int, int]]:
    return ("+" if int(sign) > 0 else "-"), tuple(int(v) for v in fields)


def d2tf(ndp: int, days: ArrayLike) -> tuple[str, tuple[int, int, int, int]]:
    """Decompose days to hours, minutes, seconds, fraction.

    Runs eagerly; see :func:`d2tf_fields` for the traceable variant.

    Args:
        ndp: Resolution (see :func:`d2tf_fields`).
        days: Interval in days.

    Returns:
        Tuple of (sign, (hours, minutes, seconds, fraction)) where sign is
        ``'+'`` or ``'-'``.

    Examples:
        >>> d2tf(4, -0.987654321)
        ('-', (23, 42, 13, 3333))
    """
    return _to_python(*d2tf_fields(ndp, days))


def a2tf(ndp: int, angle: ArrayLike) -> tuple[str, tuple[int, int, int, int]]:
    """Decompose radians into hours, minutes, seconds, fraction.

    Args:
        ndp: Resolution (see :func:`d2tf_fields`).
        angle: Angle (radians).

    Returns:
        Tuple of (sign, (hours, minutes, seconds, fraction)).
    """
    return d2tf(ndp, jnp.asarray(angle) / D2PI)


def a2af(ndp: int, angle: ArrayLike) -> tuple[str, tuple[int, int, int, int]]:
    """Decompose radians into degrees, arcminutes, arcseconds, fraction.

    Args:
        ndp: Resolution (see :func:`d2tf_fields`, with degrees in place of
            hours).
        angle: Angle (radians).

    Returns:
        Tuple of (sign, (degrees, arcminutes, arcseconds, fraction)).
    """
    # Hours to degrees * radians to turns
    f = 15.0 / D2PI
    return d2tf(ndp, jnp.asarray(angle) * f)


# ---------------------------------------------------------------------------
# Composition from sexagesimal fields
# ---------------------------------------------------------------------------


def _sign_factor(s: str) -> float:
    return -1.0 if s == "-" else 1.0


def af2a(s: str, ideg: ArrayLike, iamin: ArrayLike, asec: ArrayLike) -> tuple[Array, Array]:
    """Convert degrees, arcminutes, arcseconds to radians.

    Args:
        s: Sign, ``'-'`` means negative, anything else positive (static).
        ideg: Degrees.
        iamin: Arcminutes.
        asec: Arcseconds.

    Returns:
        Tuple of (rad, status). Status: 0 OK, 1 ideg outside 0-359,
        2 iamin outside 0-59, 3 asec outside 0-59.999...  The angle is
        computed from the absolute values of the fields in every case.
    """
    rad = _sign_factor(s) * (
        60.0 * (60.0 * jnp.abs(ideg) + jnp.abs(iamin)) + jnp.abs(asec)
    ) * DAS2R
    status = jnp.where(
        (ideg < 0) | (ideg > 359), 1,
        jnp.where((iamin < 0) | (iamin > 59), 2,
                  jnp.where((asec < 0.0) | (asec >= 60.0), 3, 0)),
    ).astype(jnp.int32)
    return rad, status


def _tf_status(ihour: ArrayLike, imin: ArrayLike, sec: ArrayLike) -> Array:
    return jnp.where(
        (ihour < 0) | (ihour > 23), 1,
        jnp.where((imin < 0) | (imin > 59), 2,
                  jnp.where((sec < 0.0) | (sec >= 60.0), 3, 0)),
    ).astype(jnp.int32)


def tf2a(s: str, ihour: ArrayLike, imin: ArrayLike, sec: ArrayLike) -> tuple[Array, Array]:
    """Convert hours, minutes, seconds to radians.

    Args:
        s: Sign, ``'-'`` means negative, anything else positive (static).
        ihour: Hours.
        imin: Minutes.
        sec: Seconds.

    Returns:
        Tuple of (rad, status). Status: 0 OK, 1 ihour outside 0-23,
        2 imin outside 0-59, 3 sec outside 0-59.999...
    """
    rad = _sign_factor(s) * (
        60.0 * (60.0 * jnp.abs(ihour) + jnp.abs(imin)) + jnp.abs(sec)
    ) * DS2R
    return rad, _tf_status(ihour, imin, sec)


def tf2d(s: str, ihour: ArrayLike, imin: ArrayLike, sec: ArrayLike) -> tuple[Array, Array]:
    """Convert hours, minutes, seconds to days.

    Args:
        s: Sign, ``'-'`` means negative, anything else positive (static).
        ihour: Hours.
        imin: Minutes.
        sec: Seconds.

    Returns:
        Tuple of (days, status) with the same status codes as :func:`tf2a`.
    """
    days = _sign_factor(s) * (
        60.0 * (60.0 * jnp.abs(ihour) + jnp.abs(imin)) + jnp.abs(sec)
    ) / DAYSEC
    return days, _tf_status(ihour, imin, sec)
