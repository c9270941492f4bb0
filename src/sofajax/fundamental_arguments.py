"""Fundamental arguments for nutation theory (IERS Conventions 2003).

The five Delaunay arguments are quartic polynomials in arcseconds, reduced
modulo a full turn before conversion to radians.  The planetary mean
longitudes are linear in radians.  Strictly the argument *t* is TDB, but
TT makes no significant difference.

References:
    1. McCarthy, D. D., Petit, G. (eds.), *IERS Conventions (2003)*,
       IERS Technical Note No. 32, BKG (2004).
    2. Simon, J.-L. et al., *Astron. Astrophys.* 282, 663-683 (1994).
    3. Souchay, J. et al., *Astron. Astrophys. Supp. Ser.* 135, 111 (1999).
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.constants import D2PI, DAS2R, TURNAS

# fmt: off
# Delaunay arguments: polynomial coefficients in arcseconds, t^0 .. t^4
_FAL03  = (485868.249036, 1717915923.2178,  31.8792,  0.051635, -0.00024470)
_FALP03 = (1287104.793048, 129596581.0481,  -0.5532,  0.000136, -0.00001149)
_FAF03  = (335779.526232, 1739527262.8478, -12.7512, -0.001037,  0.00000417)
_FAD03  = (1072260.703692, 1602961601.2090, -6.3706,  0.006593, -0.00003169)
_FAOM03 = (450160.398036,   -6962890.5431,   7.4722,  0.007702, -0.00005939)
# fmt: on


def _delaunay(coeffs: tuple[float, ...], t: ArrayLike) -> Array:
    c0, c1, c2, c3, c4 = coeffs
    arcsec = c0 + t * (c1 + t * (c2 + t * (c3 + t * c4)))
    return jnp.fmod(arcsec, TURNAS) * DAS2R


def _longitude(l0: float, rate: float, t: ArrayLike) -> Array:
    return jnp.fmod(l0 + rate * t, D2PI)


# ---------------------------------------------------------------------------
# Delaunay arguments
# ---------------------------------------------------------------------------


def fal03(t: ArrayLike) -> Array:
    """Mean anomaly of the Moon, l.

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        l in radians.
    """
    return _delaunay(_FAL03, t)


def falp03(t: ArrayLike) -> Array:
    """Mean anomaly of the Sun, l'.

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        l' in radians.
    """
    return _delaunay(_FALP03, t)


def faf03(t: ArrayLike) -> Array:
    """Mean longitude of the Moon minus that of the ascending node, F.

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        F in radians.
    """
    return _delaunay(_FAF03, t)


def fad03(t: ArrayLike) -> Array:
    """Mean elongation of the Moon from the Sun, D.

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        D in radians.
    """
    return _delaunay(_FAD03, t)


def faom03(t: ArrayLike) -> Array:
    """Mean longitude of the Moon's ascending node, Omega.

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        Omega in radians.
    """
    return _delaunay(_FAOM03, t)


# ---------------------------------------------------------------------------
# Planetary longitudes
# ---------------------------------------------------------------------------


def fame03(t: ArrayLike) -> Array:
    """Mean longitude of Mercury (radians)."""
    return _longitude(4.402608842, 2608.7903141574, t)


def fave03(t: ArrayLike) -> Array:
    """Mean longitude of Venus (radians)."""
    return _longitude(3.176146697, 1021.3285546211, t)


def fae03(t: ArrayLike) -> Array:
    """Mean longitude of Earth (radians)."""
    return _longitude(1.753470314, 628.3075849991, t)


def fama03(t: ArrayLike) -> Array:
    """Mean longitude of Mars (radians)."""
    return _longitude(6.203480913, 334.0612426700, t)


def faju03(t: ArrayLike) -> Array:
    """Mean longitude of Jupiter (radians)."""
    return _longitude(0.599546497, 52.9690962641, t)


def fasa03(t: ArrayLike) -> Array:
    """Mean longitude of Saturn (radians)."""
    return _longitude(0.874016757, 21.3299104960, t)


def faur03(t: ArrayLike) -> Array:
    """Mean longitude of Uranus (radians)."""
    return _longitude(5.481293872, 7.4781598567, t)


def fane03(t: ArrayLike) -> Array:
    """Mean longitude of Neptune (radians)."""
    return _longitude(5.311886287, 3.8133035638, t)


def fapa03(t: ArrayLike) -> Array:
    """General accumulated precession in longitude, p_A.

    Args:
        t: TDB Julian centuries since J2000.0.

    Returns:
        General precession in longitude (radians).
    """
    return (0.024381750 + 0.00000538691 * t) * t
