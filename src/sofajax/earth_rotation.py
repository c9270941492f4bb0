"""Earth rotation angle, sidereal time and the equation of the equinoxes.

Greenwich sidereal time comes in three generations:

- **IAU 1982/1994**: :func:`gmst82`, :func:`eqeq94`, :func:`gst94`
- **IAU 2000**: :func:`gmst00`, :func:`ee00`, :func:`gst00a`,
  :func:`gst00b`, built on the Earth Rotation Angle :func:`era00`
- **IAU 2006**: :func:`gmst06`, :func:`gst06`, :func:`gst06a`, which are
  CIO based (``GST = ERA - EO``)

Routines taking both UT1 and TT need the two dates separately; for the
IAU 2000 and 2006 models TT drives the precession-nutation part and UT1
the rotation.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.config import get_dtype
from sofajax.constants import D2PI, DAS2R, DAYSEC, DJ00, DJC, DS2R
from sofajax.fundamental_arguments import fad03, fae03, faf03, fal03, falp03, faom03, fapa03, fave03
from sofajax.precession_nutation._cio import eors, s06
from sofajax.precession_nutation._matrices import bpn2xy, pnm06a
from sofajax.precession_nutation._nutation import nut00a, nut00b, nut80
from sofajax.precession_nutation._precession import obl80, pr00
from sofajax.utils import julian_centuries
from sofajax.vector_matrix import anp, anpm


def _ordered(dj1: ArrayLike, dj2: ArrayLike) -> tuple[Array, Array]:
    """Order a two-part date so that the smaller part comes first."""
    dj1 = jnp.asarray(dj1, dtype=get_dtype())
    dj2 = jnp.asarray(dj2, dtype=get_dtype())
    swap = dj1 >= dj2
    return jnp.where(swap, dj2, dj1), jnp.where(swap, dj1, dj2)


# ---------------------------------------------------------------------------
# Earth Rotation Angle and mean sidereal time
# ---------------------------------------------------------------------------


def era00(dj1: ArrayLike, dj2: ArrayLike) -> Array:
    """Earth Rotation Angle (IAU 2000 model).

    Args:
        dj1: UT1 as 2-part Julian Date (part 1).
        dj2: UT1 as 2-part Julian Date (part 2).

    Returns:
        Earth Rotation Angle in radians, range 0 to 2pi.

    Examples:
        >>> float(era00(2400000.5, 54388.0))  # doctest: +ELLIPSIS
        0.40228372...
    """
    d1, d2 = _ordered(dj1, dj2)

    # Days since fundamental epoch
    t = d1 + (d2 - DJ00)

    # Fractional part of T (days)
    f = jnp.fmod(d1, 1.0) + jnp.fmod(d2, 1.0)

    return anp(D2PI * (f + 0.7790572732640 + 0.00273781191135448 * t))


def gmst00(uta: ArrayLike, utb: ArrayLike, tta: ArrayLike, ttb: ArrayLike) -> Array:
    """Greenwich mean sidereal time, consistent with IAU 2000 resolutions.

    Args:
        uta: UT1 as 2-part Julian Date (part 1).
        utb: UT1 as 2-part Julian Date (part 2).
        tta: TT as 2-part Julian Date (part 1).
        ttb: TT as 2-part Julian Date (part 2).

    Returns:
        Greenwich mean sidereal time in radians.
    """
    t = julian_centuries(tta, ttb)
    return anp(
        era00(uta, utb)
        + (0.014506 + (4612.15739966 + (1.39667721 + (-0.00009344 + (0.00001882) * t) * t) * t) * t)
        * DAS2R
    )


def gmst06(uta: ArrayLike, utb: ArrayLike, tta: ArrayLike, ttb: ArrayLike) -> Array:
    """Greenwich mean sidereal time, consistent with IAU 2006 precession.

    Args:
        uta: UT1 as 2-part Julian Date (part 1).
        utb: UT1 as 2-part Julian Date (part 2).
        tta: TT as 2-part Julian Date (part 1).
        ttb: TT as 2-part Julian Date (part 2).

    Returns:
        Greenwich mean sidereal time in radians.
    """
    t = julian_centuries(tta, ttb)
    return anp(
        era00(uta, utb)
        + (
            0.014506
            + (4612.156534 + (1.3915817 + (-0.00000044 + (-0.000029956 + (-0.0000000368) * t) * t) * t) * t)
            * t
        )
        * DAS2R
    )


def gmst82(dj1: ArrayLike, dj2: ArrayLike) -> Array:
    """Universal Time to Greenwich mean sidereal time, IAU 1982 model.

    Args:
        dj1: UT1 as 2-part Julian Date (part 1).
        dj2: UT1 as 2-part Julian Date (part 2).

    Returns:
        Greenwich mean sidereal time in radians.
    """
    # Coefficients of IAU 1982 GMST-UT1 model
    a = 24110.54841 - DAYSEC / 2.0
    b = 8640184.812866
    c = 0.093104
    d = -6.2e-6

    d1, d2 = _ordered(dj1, dj2)
    t = (d1 + (d2 - DJ00)) / DJC

    # Fractional part of JD(UT1), in seconds
    f = DAYSEC * (jnp.fmod(d1, 1.0) + jnp.fmod(d2, 1.0))

    return anp(DS2R * ((a + (b + (c + d * t) * t) * t) + f))


# ---------------------------------------------------------------------------
# Equation of the equinoxes
# ---------------------------------------------------------------------------

# fmt: off
# Complementary terms: multipliers of (l, l', F, D, Om, LVe, LE, pA), then
# sine and cosine amplitudes in arcsec.  Order t^0 ...
_EECT_T0 = (
    (0, 0, 0,  0,  1,  0,   0,  0, 2640.96e-6, -0.39e-6),
    (0, 0, 0,  0,  2,  0,   0,  0,   63.52e-6, -0.02e-6),
    (0, 0, 2, -2,  3,  0,   0,  0,   11.75e-6,  0.01e-6),
    (0, 0, 2, -2,  1,  0,   0,  0,   11.21e-6,  0.01e-6),
    (0, 0, 2, -2,  2,  0,   0,  0,   -4.55e-6,  0.00e-6),
    (0, 0, 2,  0,  3,  0,   0,  0,    2.02e-6,  0.00e-6),
    (0, 0, 2,  0,  1,  0,   0,  0,    1.98e-6,  0.00e-6),
    (0, 0, 0,  0,  3,  0,   0,  0,   -1.72e-6,  0.00e-6),
    (0, 1, 0,  0,  1,  0,   0,  0,   -1.41e-6, -0.01e-6),
    (0, 1, 0,  0, -1,  0,   0,  0,   -1.26e-6, -0.01e-6),
    (1, 0, 0,  0, -1,  0,   0,  0,   -0.63e-6,  0.00e-6),
    (1, 0, 0,  0,  1,  0,   0,  0,   -0.63e-6,  0.00e-6),
    (0, 1, 2, -2,  3,  0,   0,  0,    0.46e-6,  0.00e-6),
    (0, 1, 2, -2,  1,  0,   0,  0,    0.45e-6,  0.00e-6),
    (0, 0, 4, -4,  4,  0,   0,  0,    0.36e-6,  0.00e-6),
    (0, 0, 1, -1,  1, -8,  12,  0,   -0.24e-6, -0.12e-6),
    (0, 0, 2,  0,  0,  0,   0,  0,    0.32e-6,  0.00e-6),
    (0, 0, 2,  0,  2,  0,   0,  0,    0.28e-6,  0.00e-6),
    (1, 0, 2,  0,  3,  0,   0,  0,    0.27e-6,  0.00e-6),
    (1, 0, 2,  0,  1,  0,   0,  0,    0.26e-6,  0.00e-6),
    (0, 0, 2, -2,  0,  0,   0,  0,   -0.21e-6,  0.00e-6),
    (0, 1, -2, 2, -3,  0,   0,  0,    0.19e-6,  0.00e-6),
    (0, 1, -2, 2, -1,  0,   0,  0,    0.18e-6,  0.00e-6),
    (0, 0, 0,  0,  0,  8, -13, -1,   -0.10e-6,  0.05e-6),
    (0, 0, 0,  2,  0,  0,   0,  0,    0.15e-6,  0.00e-6),
    (2, 0, -2, 0, -1,  0,   0,  0,   -0.14e-6,  0.00e-6),
    (1, 0, 0, -2,  1,  0,   0,  0,    0.14e-6,  0.00e-6),
    (0, 1, 2, -2,  2,  0,   0,  0,   -0.14e-6,  0.00e-6),
    (1, 0, 0, -2, -1,  0,   0,  0,    0.14e-6,  0.00e-6),
    (0, 0, 4, -2,  4,  0,   0,  0,    0.13e-6,  0.00e-6),
    (0, 0, 2, -2,  4,  0,   0,  0,   -0.11e-6,  0.00e-6),
    (1, 0, -2, 0, -3,  0,   0,  0,    0.11e-6,  0.00e-6),
    (1, 0, -2, 0, -1,  0,   0,  0,    0.11e-6,  0.00e-6),
)
# ... and order t^1
_EECT_T1 = (
    (0, 0, 0, 0, 1, 0, 0, 0, -0.87e-6, 0.00e-6),
)
# fmt: on


def _eect_sum(rows: tuple, fa: Array) -> Array:
    table = jnp.array(rows, dtype=get_dtype())
    a = table[:, :8] @ fa
    return jnp.sum(table[:, 8] * jnp.sin(a) + table[:, 9] * jnp.cos(a))


def eect00(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Equation of the equinoxes complementary terms, consistent with
    IAU 2000 resolutions.

    The complementary terms are the part of the equation of the equinoxes
    beyond the classical ``dpsi * cos(eps)``; they are part of the
    definition of GAST from 2003 January 1.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Complementary terms in radians.
    """
    t = julian_centuries(date1, date2)
    fa = jnp.array(
        [fal03(t), falp03(t), faf03(t), fad03(t), faom03(t), fave03(t), fae03(t), fapa03(t)]
    )
    s0 = _eect_sum(_EECT_T0, fa)
    s1 = _eect_sum(_EECT_T1, fa)
    return (s0 + s1 * t) * DAS2R


def ee00(date1: ArrayLike, date2: ArrayLike, epsa: ArrayLike, dpsi: ArrayLike) -> Array:
    """The equation of the equinoxes, compatible with IAU 2000 resolutions,
    given the nutation in longitude and the mean obliquity.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).
        epsa: Mean obliquity (radians).
        dpsi: Nutation in longitude (radians).

    Returns:
        Equation of the equinoxes in radians.
    """
    return dpsi * jnp.cos(epsa) + eect00(date1, date2)


def _ee00_obliquity(date1: ArrayLike, date2: ArrayLike) -> Array:
    _, depspr = pr00(date1, date2)
    return obl80(date1, date2) + depspr


def ee00a(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Equation of the equinoxes, compatible with IAU 2000 resolutions
    (IAU 2000A nutation).

    Returns:
        Equation of the equinoxes in radians.
    """
    dpsi, _ = nut00a(date1, date2)
    return ee00(date1, date2, _ee00_obliquity(date1, date2), dpsi)


def ee00b(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Equation of the equinoxes, compatible with IAU 2000 resolutions but
    using the truncated nutation model IAU 2000B.

    Returns:
        Equation of the equinoxes in radians.
    """
    dpsi, _ = nut00b(date1, date2)
    return ee00(date1, date2, _ee00_obliquity(date1, date2), dpsi)


def ee06a(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Equation of the equinoxes, compatible with IAU 2000 resolutions and
    IAU 2006/2000A precession-nutation.

    Returns:
        Equation of the equinoxes in radians, range -pi to +pi.
    """
    # The Earth Rotation Angle cancels, so UT1 = 0 will do
    return anpm(gst06a(0.0, 0.0, date1, date2) - gmst06(0.0, 0.0, date1, date2))


def eqeq94(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Equation of the equinoxes, IAU 1994 model.

    Args:
        date1: TDB as 2-part Julian Date (part 1).
        date2: TDB as 2-part Julian Date (part 2).

    Returns:
        Equation of the equinoxes in radians.
    """
    t = julian_centuries(date1, date2)

    # Longitude of the mean ascending node of the lunar orbit on the
    # ecliptic, measured from the mean equinox of date
    om = anpm(
        (450160.280 + (-482890.539 + (7.455 + 0.008 * t) * t) * t) * DAS2R
        + jnp.fmod(-5.0 * t, 1.0) * D2PI
    )

    dpsi, _ = nut80(date1, date2)
    eps0 = obl80(date1, date2)
    return dpsi * jnp.cos(eps0) + DAS2R * (0.00264 * jnp.sin(om) + 0.000063 * jnp.sin(om + om))


# ---------------------------------------------------------------------------
# Apparent sidereal time
# ---------------------------------------------------------------------------


def gst00a(uta: ArrayLike, utb: ArrayLike, tta: ArrayLike, ttb: ArrayLike) -> Array:
    """Greenwich apparent sidereal time, consistent with IAU 2000
    resolutions.

    Returns:
        Greenwich apparent sidereal time in radians.
    """
    return anp(gmst00(uta, utb, tta, ttb) + ee00a(tta, ttb))


def gst00b(uta: ArrayLike, utb: ArrayLike) -> Array:
    """Greenwich apparent sidereal time, consistent with IAU 2000
    resolutions but using the truncated nutation model IAU 2000B.

    UT1 stands in for TT in the precession-nutation part, which costs
    less than the 1 mas accuracy of IAU 2000B.

    Returns:
        Greenwich apparent sidereal time in radians.
    """
    return anp(gmst00(uta, utb, uta, utb) + ee00b(uta, utb))


def gst06(uta: ArrayLike, utb: ArrayLike, tta: ArrayLike, ttb: ArrayLike, rnpb: ArrayLike) -> Array:
    """Greenwich apparent sidereal time, IAU 2006, given the NPB matrix.

    Args:
        uta: UT1 as 2-part Julian Date (part 1).
        utb: UT1 as 2-part Julian Date (part 2).
        tta: TT as 2-part Julian Date (part 1).
        ttb: TT as 2-part Julian Date (part 2).
        rnpb: 3x3 nutation x precession x bias matrix.

    Returns:
        Greenwich apparent sidereal time in radians.
    """
    x, y = bpn2xy(rnpb)
    s = s06(tta, ttb, x, y)
    return anp(era00(uta, utb) - eors(rnpb, s))


def gst06a(uta: ArrayLike, utb: ArrayLike, tta: ArrayLike, ttb: ArrayLike) -> Array:
    """Greenwich apparent sidereal time, consistent with IAU 2000 and 2006
    resolutions.

    Returns:
        Greenwich apparent sidereal time in radians.
    """
    return gst06(uta, utb, tta, ttb, pnm06a(tta, ttb))


def gst94(uta: ArrayLike, utb: ArrayLike) -> Array:
    """Greenwich apparent sidereal time, consistent with IAU 1982/94
    resolutions.

    Returns:
        Greenwich apparent sidereal time in radians.
    """
    return anp(gmst82(uta, utb) + eqeq94(uta, utb))
