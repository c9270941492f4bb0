"""CIO locator s, TIO locator s' and the equation of the origins.

The s series (Capitaine et al. 2003) is tabulated for the quantity
``s + XY/2``; the routines subtract ``XY/2`` using the caller's CIP
coordinates.  The IAU 2000 and IAU 2006 versions share their argument
multipliers and differ in a handful of amplitudes.

References:
    1. Capitaine, N., Chapront, J., Lambert, S., Wallace, P. T.,
       *Astron. Astrophys.* 400, 1145-1154 (2003).
    2. Wallace, P. T., Capitaine, N., *Astron. Astrophys.* 459, 981 (2006).
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.config import get_dtype
from sofajax.constants import DAS2R
from sofajax.fundamental_arguments import fad03, fae03, faf03, fal03, falp03, faom03, fapa03, fave03
from sofajax.utils import julian_centuries

# fmt: off
# Rows: multipliers of (l, l', F, D, Om, LVe, LE, pA), then sine and cosine
# amplitudes in arcsec.

# Terms of order t^0 (common to IAU 2000 and 2006)
_S_T0 = (
    (0, 0, 0,  0,  1,  0,   0,  0, -2640.73e-6,  0.39e-6),
    (0, 0, 0,  0,  2,  0,   0,  0,   -63.53e-6,  0.02e-6),
    (0, 0, 2, -2,  3,  0,   0,  0,   -11.75e-6, -0.01e-6),
    (0, 0, 2, -2,  1,  0,   0,  0,   -11.21e-6, -0.01e-6),
    (0, 0, 2, -2,  2,  0,   0,  0,     4.57e-6,  0.00e-6),
    (0, 0, 2,  0,  3,  0,   0,  0,    -2.02e-6,  0.00e-6),
    (0, 0, 2,  0,  1,  0,   0,  0,    -1.98e-6,  0.00e-6),
    (0, 0, 0,  0,  3,  0,   0,  0,     1.72e-6,  0.00e-6),
    (0, 1, 0,  0,  1,  0,   0,  0,     1.41e-6,  0.01e-6),
    (0, 1, 0,  0, -1,  0,   0,  0,     1.26e-6,  0.01e-6),
    (1, 0, 0,  0, -1,  0,   0,  0,     0.63e-6,  0.00e-6),
    (1, 0, 0,  0,  1,  0,   0,  0,     0.63e-6,  0.00e-6),
    (0, 1, 2, -2,  3,  0,   0,  0,    -0.46e-6,  0.00e-6),
    (0, 1, 2, -2,  1,  0,   0,  0,    -0.45e-6,  0.00e-6),
    (0, 0, 4, -4,  4,  0,   0,  0,    -0.36e-6,  0.00e-6),
    (0, 0, 1, -1,  1, -8,  12,  0,     0.24e-6,  0.12e-6),
    (0, 0, 2,  0,  0,  0,   0,  0,    -0.32e-6,  0.00e-6),
    (0, 0, 2,  0,  2,  0,   0,  0,    -0.28e-6,  0.00e-6),
    (1, 0, 2,  0,  3,  0,   0,  0,    -0.27e-6,  0.00e-6),
    (1, 0, 2,  0,  1,  0,   0,  0,    -0.26e-6,  0.00e-6),
    (0, 0, 2, -2,  0,  0,   0,  0,     0.21e-6,  0.00e-6),
    (0, 1, -2, 2, -3,  0,   0,  0,    -0.19e-6,  0.00e-6),
    (0, 1, -2, 2, -1,  0,   0,  0,    -0.18e-6,  0.00e-6),
    (0, 0, 0,  0,  0,  8, -13, -1,     0.10e-6, -0.05e-6),
    (0, 0, 0,  2,  0,  0,   0,  0,    -0.15e-6,  0.00e-6),
    (2, 0, -2, 0, -1,  0,   0,  0,     0.14e-6,  0.00e-6),
    (0, 1, 2, -2,  2,  0,   0,  0,     0.14e-6,  0.00e-6),
    (1, 0, 0, -2,  1,  0,   0,  0,    -0.14e-6,  0.00e-6),
    (1, 0, 0, -2, -1,  0,   0,  0,    -0.14e-6,  0.00e-6),
    (0, 0, 4, -2,  4,  0,   0,  0,    -0.13e-6,  0.00e-6),
    (0, 0, 2, -2,  4,  0,   0,  0,     0.11e-6,  0.00e-6),
    (1, 0, -2, 0, -3,  0,   0,  0,    -0.11e-6,  0.00e-6),
    (1, 0, -2, 0, -1,  0,   0,  0,    -0.11e-6,  0.00e-6),
)

# Terms of order t^1
_S00_T1 = (
    (0, 0, 0,  0, 2, 0, 0, 0, -0.07e-6,  3.57e-6),
    (0, 0, 0,  0, 1, 0, 0, 0,  1.71e-6, -0.03e-6),
    (0, 0, 2, -2, 3, 0, 0, 0,  0.00e-6,  0.48e-6),
)
_S06_T1 = (
    (0, 0, 0,  0, 2, 0, 0, 0, -0.07e-6,  3.57e-6),
    (0, 0, 0,  0, 1, 0, 0, 0,  1.73e-6, -0.03e-6),
    (0, 0, 2, -2, 3, 0, 0, 0,  0.00e-6,  0.48e-6),
)

# Terms of order t^2; the IAU 2000 table differs only in the first amplitude
_S06_T2 = (
    (0, 0,  0,  0,  1, 0, 0, 0, 743.52e-6, -0.17e-6),
    (0, 0,  2, -2,  2, 0, 0, 0,  56.91e-6,  0.06e-6),
    (0, 0,  2,  0,  2, 0, 0, 0,   9.84e-6, -0.01e-6),
    (0, 0,  0,  0,  2, 0, 0, 0,  -8.85e-6,  0.01e-6),
    (0, 1,  0,  0,  0, 0, 0, 0,  -6.38e-6, -0.05e-6),
    (1, 0,  0,  0,  0, 0, 0, 0,  -3.07e-6,  0.00e-6),
    (0, 1,  2, -2,  2, 0, 0, 0,   2.23e-6,  0.00e-6),
    (0, 0,  2,  0,  1, 0, 0, 0,   1.67e-6,  0.00e-6),
    (1, 0,  2,  0,  2, 0, 0, 0,   1.30e-6,  0.00e-6),
    (0, 1, -2,  2, -2, 0, 0, 0,   0.93e-6,  0.00e-6),
    (1, 0,  0, -2,  0, 0, 0, 0,   0.68e-6,  0.00e-6),
    (0, 0,  2, -2,  1, 0, 0, 0,  -0.55e-6,  0.00e-6),
    (1, 0, -2,  0, -2, 0, 0, 0,   0.53e-6,  0.00e-6),
    (0, 0,  0,  2,  0, 0, 0, 0,  -0.27e-6,  0.00e-6),
    (1, 0,  0,  0,  1, 0, 0, 0,  -0.27e-6,  0.00e-6),
    (1, 0, -2, -2, -2, 0, 0, 0,  -0.26e-6,  0.00e-6),
    (1, 0,  0,  0, -1, 0, 0, 0,  -0.25e-6,  0.00e-6),
    (1, 0,  2,  0,  1, 0, 0, 0,   0.22e-6,  0.00e-6),
    (2, 0,  0, -2,  0, 0, 0, 0,  -0.21e-6,  0.00e-6),
    (2, 0, -2,  0, -1, 0, 0, 0,   0.20e-6,  0.00e-6),
    (0, 0,  2,  2,  2, 0, 0, 0,   0.17e-6,  0.00e-6),
    (2, 0,  2,  0,  2, 0, 0, 0,   0.13e-6,  0.00e-6),
    (2, 0,  0,  0,  0, 0, 0, 0,  -0.13e-6,  0.00e-6),
    (1, 0,  2, -2,  2, 0, 0, 0,  -0.12e-6,  0.00e-6),
    (0, 0,  2,  0,  0, 0, 0, 0,  -0.11e-6,  0.00e-6),
)
_S00_T2 = ((0, 0, 0, 0, 1, 0, 0, 0, 743.53e-6, -0.17e-6),) + _S06_T2[1:]

# Terms of order t^3
_S00_T3 = (
    (0, 0, 0,  0, 1, 0, 0, 0,  0.30e-6, -23.51e-6),
    (0, 0, 2, -2, 2, 0, 0, 0, -0.03e-6,  -1.39e-6),
    (0, 0, 2,  0, 2, 0, 0, 0, -0.01e-6,  -0.24e-6),
    (0, 0, 0,  0, 2, 0, 0, 0,  0.00e-6,   0.22e-6),
)
_S06_T3 = (
    (0, 0, 0,  0, 1, 0, 0, 0,  0.30e-6, -23.42e-6),
    (0, 0, 2, -2, 2, 0, 0, 0, -0.03e-6,  -1.46e-6),
    (0, 0, 2,  0, 2, 0, 0, 0, -0.01e-6,  -0.25e-6),
    (0, 0, 0,  0, 2, 0, 0, 0,  0.00e-6,   0.23e-6),
)

# Terms of order t^4 (common)
_S_T4 = (
    (0, 0, 0, 0, 1, 0, 0, 0, -0.26e-6, -0.01e-6),
)

# Polynomial coefficients, t^0 .. t^5
_S00_SP = (94.00e-6, 3808.35e-6, -119.94e-6, -72574.09e-6, 27.70e-6, 15.61e-6)
_S06_SP = (94.00e-6, 3808.65e-6, -122.68e-6, -72574.11e-6, 27.98e-6, 15.62e-6)
# fmt: on

_S00_SERIES = (_S_T0, _S00_T1, _S00_T2, _S00_T3, _S_T4)
_S06_SERIES = (_S_T0, _S06_T1, _S06_T2, _S06_T3, _S_T4)


def _series_fundamental_arguments(t: Array) -> Array:
    return jnp.array(
        [
            fal03(t),  # l
            falp03(t),  # l'
            faf03(t),  # F
            fad03(t),  # D
            faom03(t),  # Om
            fave03(t),  # LVe
            fae03(t),  # LE
            fapa03(t),  # pA
        ]
    )


def _order_sum(rows: tuple, fa: Array) -> Array:
    """Sum ``s*sin(a) + c*cos(a)`` over one order of a series table."""
    table = jnp.array(rows, dtype=get_dtype())
    args = table[:, :8] @ fa
    return jnp.sum(table[:, 8] * jnp.sin(args) + table[:, 9] * jnp.cos(args))


def _cio_locator(
    sp: tuple, series: tuple, date1: ArrayLike, date2: ArrayLike, x: ArrayLike, y: ArrayLike
) -> Array:
    t = julian_centuries(date1, date2)
    fa = _series_fundamental_arguments(t)
    w0, w1, w2, w3, w4 = (c + _order_sum(rows, fa) for c, rows in zip(sp, series))
    w5 = sp[5]
    return (w0 + (w1 + (w2 + (w3 + (w4 + w5 * t) * t) * t) * t) * t) * DAS2R - x * y / 2.0


def s00(date1: ArrayLike, date2: ArrayLike, x: ArrayLike, y: ArrayLike) -> Array:
    """CIO locator s, given the CIP X,Y coordinates.  Compatible with
    IAU 2000A precession-nutation.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).
        x: CIP x coordinate.
        y: CIP y coordinate.

    Returns:
        CIO locator s in radians.
    """
    return _cio_locator(_S00_SP, _S00_SERIES, date1, date2, x, y)


def s06(date1: ArrayLike, date2: ArrayLike, x: ArrayLike, y: ArrayLike) -> Array:
    """CIO locator s, positioning the Celestial Intermediate Origin on the
    equator of the CIP.  Compatible with IAU 2006/2000A precession-nutation.

    The series is actually for s + XY/2. The function subtracts XY/2 to
    return s itself.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).
        x: CIP x coordinate.
        y: CIP y coordinate.

    Returns:
        CIO locator s in radians.
    """
    return _cio_locator(_S06_SP, _S06_SERIES, date1, date2, x, y)


def sp00(date1: ArrayLike, date2: ArrayLike) -> Array:
    """TIO locator s', positioning the Terrestrial Intermediate Origin on
    the equator of the CIP.

    Only the dominant secular term is modelled, ``s' = -47 uas * t``.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        TIO locator s' in radians.
    """
    t = julian_centuries(date1, date2)
    return -47e-6 * t * DAS2R


def eors(rnpb: ArrayLike, s: ArrayLike) -> Array:
    """Equation of the origins, given the classical NPB matrix and s.

    The equation of the origins is the distance between the true equinox
    and the celestial intermediate origin, so that ``GST = ERA - EO``.

    Args:
        rnpb: 3x3 classical nutation x precession x bias matrix.
        s: CIO locator (radians).

    Returns:
        Equation of the origins in radians.
    """
    rnpb = jnp.asarray(rnpb)

    # Evaluate Wallace & Capitaine (2006) expression (16)
    x = rnpb[2, 0]
    ax = x / (1.0 + rnpb[2, 2])
    xs = 1.0 - ax * x
    ys = -ax * rnpb[2, 1]
    zs = -x
    p = rnpb[0, 0] * xs + rnpb[0, 1] * ys + rnpb[0, 2] * zs
    q = rnpb[1, 0] * xs + rnpb[1, 1] * ys + rnpb[1, 2] * zs
    return jnp.where((p != 0.0) | (q != 0.0), s - jnp.arctan2(q, p), s)
