"""Nutation series: IAU 1980, IAU 2000A/B and IAU 2006/2000A.

The series are evaluated as dense matrix products over the whole
coefficient table, so each call is a handful of fused kernels rather than a
Python loop over terms.  Tables live in :mod:`._nutation_data` as Python
tuples and are converted with :func:`~sofajax.config.get_dtype` at call
time.

References:
    1. Mathews, P. M., Herring, T. A., Buffett, B. A., *J. Geophys. Res.*
       107, B4 (2002).  The MHB2000 code itself is available from the IERS.
    2. McCarthy, D. D., Luzum, B. J., *Celest. Mech.* 85, 37 (2003) for
       the IAU 2000B truncation.
    3. Wallace, P. T., Capitaine, N., *Astron. Astrophys.* 459, 981 (2006)
       for the IAU 2006 adjustments.
    4. Seidelmann, P. K. (ed.), *Explanatory Supplement to the Astronomical
       Almanac* (1992), Section 3.222 for IAU 1980.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.config import get_dtype
from sofajax.constants import D2PI, DAS2R, DMAS2R, TURNAS
from sofajax.fundamental_arguments import (
    fae03,
    faf03,
    faju03,
    fal03,
    fama03,
    fame03,
    faom03,
    fapa03,
    fasa03,
    faur03,
    fave03,
)
from sofajax.utils import julian_centuries
from sofajax.vector_matrix import anpm

from ._nutation_data import LUNI_SOLAR_COEFFS, NUT80_COEFFS, PLANETARY_COEFFS

# Units of 0.1 microarcsecond to radians
_U2R: float = DAS2R / 1e7

# Number of luni-solar terms kept by IAU 2000B
_NLS_2000B = 77

# Fixed offsets in lieu of planetary terms (IAU 2000B)
_DPPLAN: float = -0.135 * DMAS2R
_DEPLAN: float = 0.388 * DMAS2R


def _luni_solar(table: Array, args: Array, t: Array) -> tuple[Array, Array]:
    """Sum a luni-solar table (see :data:`LUNI_SOLAR_COEFFS` for the layout)."""
    arg = jnp.fmod(table[:, :5] @ args, D2PI)
    sarg = jnp.sin(arg)
    carg = jnp.cos(arg)
    dp = jnp.sum((table[:, 5] + table[:, 6] * t) * sarg + table[:, 7] * carg)
    de = jnp.sum((table[:, 8] + table[:, 9] * t) * carg + table[:, 10] * sarg)
    return dp, de


# ---------------------------------------------------------------------------
# IAU 2000
# ---------------------------------------------------------------------------


def nut00a(date1: ArrayLike, date2: ArrayLike) -> tuple[Array, Array]:
    """Nutation, IAU 2000A model (MHB2000 luni-solar and planetary terms).

    The luni-solar part uses 678 terms and the planetary part 687 terms.
    The free-core nutation is not included.  Precision is about 0.1 mas
    over the interval 1995-2050 compared with the full MHB2000 model.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Tuple of (dpsi, deps) nutation in longitude and obliquity
        [radians], with respect to the equinox and ecliptic of date.

    Examples:
        >>> dpsi, deps = nut00a(2400000.5, 53736.0)
        >>> float(dpsi)  # doctest: +ELLIPSIS
        -9.630909107115...e-06
    """
    dtype = get_dtype()
    t = julian_centuries(date1, date2)

    # Luni-solar arguments: l and F from IERS 2003, l' and D from MHB2000
    el = fal03(t)
    elp = (
        jnp.fmod(
            1287104.79305
            + t * (129596581.0481 + t * (-0.5532 + t * (0.000136 + t * (-0.00001149)))),
            TURNAS,
        )
        * DAS2R
    )
    f = faf03(t)
    d = (
        jnp.fmod(
            1072260.70369
            + t * (1602961601.2090 + t * (-6.3706 + t * (0.006593 + t * (-0.00003169)))),
            TURNAS,
        )
        * DAS2R
    )
    om = faom03(t)
    delaunay = jnp.array([el, elp, f, d, om])

    dp_ls, de_ls = _luni_solar(jnp.array(LUNI_SOLAR_COEFFS, dtype=dtype), delaunay, t)

    # Planetary arguments: MHB2000 linear forms for l, F, D, Om and Ne
    al = jnp.fmod(2.35555598 + 8328.6914269554 * t, D2PI)
    af = jnp.fmod(1.627905234 + 8433.466158131 * t, D2PI)
    ad = jnp.fmod(5.198466741 + 7771.3771468121 * t, D2PI)
    aom = jnp.fmod(2.18243920 - 33.757045 * t, D2PI)
    alne = jnp.fmod(5.321159000 + 3.8127774000 * t, D2PI)
    planetary = jnp.array(
        [
            al,
            af,
            ad,
            aom,
            fame03(t),
            fave03(t),
            fae03(t),
            fama03(t),
            faju03(t),
            fasa03(t),
            faur03(t),
            alne,
            fapa03(t),
        ]
    )

    pl = jnp.array(PLANETARY_COEFFS, dtype=dtype)
    pl_arg = jnp.fmod(pl[:, :13] @ planetary, D2PI)
    pl_sin = jnp.sin(pl_arg)
    pl_cos = jnp.cos(pl_arg)
    dp_pl = jnp.sum(pl[:, 13] * pl_sin + pl[:, 14] * pl_cos)
    de_pl = jnp.sum(pl[:, 15] * pl_sin + pl[:, 16] * pl_cos)

    dpsi = (dp_pl + dp_ls) * _U2R
    deps = (de_pl + de_ls) * _U2R
    return dpsi, deps


def nut00b(date1: ArrayLike, date2: ArrayLike) -> tuple[Array, Array]:
    """Nutation, IAU 2000B model.

    A truncated form of IAU 2000A: the 77 largest luni-solar terms with
    linear fundamental arguments, plus constant offsets standing in for the
    planetary terms.  Agrees with IAU 2000A to about 1 mas over 1995-2050.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Tuple of (dpsi, deps) nutation in longitude and obliquity [radians].
    """
    t = julian_centuries(date1, date2)

    # Fundamental (Delaunay) arguments from Simon et al. (1994)
    el = jnp.fmod(485868.249036 + 1717915923.2178 * t, TURNAS) * DAS2R
    elp = jnp.fmod(1287104.79305 + 129596581.0481 * t, TURNAS) * DAS2R
    f = jnp.fmod(335779.526232 + 1739527262.8478 * t, TURNAS) * DAS2R
    d = jnp.fmod(1072260.70369 + 1602961601.2090 * t, TURNAS) * DAS2R
    om = jnp.fmod(450160.398036 - 6962890.5431 * t, TURNAS) * DAS2R
    delaunay = jnp.array([el, elp, f, d, om])

    table = jnp.array(LUNI_SOLAR_COEFFS[:_NLS_2000B], dtype=get_dtype())
    dp, de = _luni_solar(table, delaunay, t)

    dpsi = dp * _U2R + _DPPLAN
    deps = de * _U2R + _DEPLAN
    return dpsi, deps


# ---------------------------------------------------------------------------
# IAU 2006/2000A
# ---------------------------------------------------------------------------


def nut06a(date1: ArrayLike, date2: ArrayLike) -> tuple[Array, Array]:
    """Nutation, IAU 2000A model with the IAU 2006 (P03) adjustments.

    The amplitudes are scaled to account for the secular change in the
    Earth's dynamical form factor J2 and for the new value of the
    obliquity at J2000.0.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Tuple of (dpsi, deps) nutation in longitude and obliquity [radians].
    """
    t = julian_centuries(date1, date2)

    # Factor correcting for secular variation of J2
    fj2 = -2.7774e-6 * t

    dp, de = nut00a(date1, date2)

    dpsi = dp + dp * (0.4697e-6 + fj2)
    deps = de + de * fj2
    return dpsi, deps


# ---------------------------------------------------------------------------
# IAU 1980
# ---------------------------------------------------------------------------


def nut80(date1: ArrayLike, date2: ArrayLike) -> tuple[Array, Array]:
    """Nutation, IAU 1980 model.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Tuple of (dpsi, deps) nutation in longitude and obliquity [radians].
    """
    t = julian_centuries(date1, date2)

    # Delaunay arguments: polynomial in arcsec plus whole revolutions
    el = anpm(
        (485866.733 + (715922.633 + (31.310 + 0.064 * t) * t) * t) * DAS2R
        + jnp.fmod(1325.0 * t, 1.0) * D2PI
    )
    elp = anpm(
        (1287099.804 + (1292581.224 + (-0.577 - 0.012 * t) * t) * t) * DAS2R
        + jnp.fmod(99.0 * t, 1.0) * D2PI
    )
    f = anpm(
        (335778.877 + (295263.137 + (-13.257 + 0.011 * t) * t) * t) * DAS2R
        + jnp.fmod(1342.0 * t, 1.0) * D2PI
    )
    d = anpm(
        (1072261.307 + (1105601.328 + (-6.891 + 0.019 * t) * t) * t) * DAS2R
        + jnp.fmod(1236.0 * t, 1.0) * D2PI
    )
    om = anpm(
        (450160.280 + (-482890.539 + (7.455 + 0.008 * t) * t) * t) * DAS2R
        + jnp.fmod(-5.0 * t, 1.0) * D2PI
    )

    table = jnp.array(NUT80_COEFFS, dtype=get_dtype())
    arg = table[:, :5] @ jnp.array([el, elp, f, d, om])
    dp = jnp.sum((table[:, 5] + table[:, 6] * t) * jnp.sin(arg))
    de = jnp.sum((table[:, 7] + table[:, 8] * t) * jnp.cos(arg))

    # Units of 0.1 milliarcsecond to radians
    u2r = DAS2R / 1e4
    return dp * u2r, de * u2r
