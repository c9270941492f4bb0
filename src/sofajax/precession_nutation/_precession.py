"""Frame bias and precession: IAU 1976, IAU 2000, IAU 2006 and long-term.

All rotation matrices follow the SOFA convention of :mod:`sofajax.vector_matrix`
and act on column vectors: ``v_date = R @ v_J2000``.
"""

from __future__ import annotations

from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.config import get_dtype
from sofajax.constants import D2PI, DAS2R, DJ00, DJC, DJM0, DJM00
from sofajax.utils import julian_centuries
from sofajax.vector_matrix import Rx, Ry, Rz, pn, pxp

# J2000.0 obliquity (Lieske et al. 1977)
_EPS0_1977: float = 84381.448 * DAS2R

# J2000.0 obliquity (IAU 2006)
_EPS0_2006: float = 84381.406 * DAS2R

# IAU 2000 precession-rate adjustments (radian per century)
_PRECOR: float = -0.29965 * DAS2R
_OBLCOR: float = -0.02524 * DAS2R


# ---------------------------------------------------------------------------
# Frame bias
# ---------------------------------------------------------------------------


def bi00() -> tuple[float, float, float]:
    """Frame bias components of IAU 2000 precession-nutation models.

    Returns:
        Tuple of (dpsibi, depsbi, dra) in radians: the longitude and
        obliquity corrections and the ICRS RA of the J2000.0 mean equinox.
    """
    return -0.041775 * DAS2R, -0.0068192 * DAS2R, -0.0146 * DAS2R


def pr00(date1: ArrayLike, date2: ArrayLike) -> tuple[Array, Array]:
    """Precession-rate part of the IAU 2000 precession-nutation models.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Tuple of (dpsipr, depspr): precession corrections in longitude and
        obliquity [radians].
    """
    t = julian_centuries(date1, date2)
    return _PRECOR * t, _OBLCOR * t


def bp00(date1: ArrayLike, date2: ArrayLike) -> tuple[Array, Array, Array]:
    """Frame bias and precession, IAU 2000.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Tuple of (rb, rp, rbp): frame bias matrix, precession matrix and
        bias-precession matrix.
    """
    t = julian_centuries(date1, date2)

    dpsibi, depsbi, dra0 = bi00()

    # Precession angles (Lieske et al. 1977)
    psia77 = (5038.7784 + (-1.07259 + (-0.001147) * t) * t) * t * DAS2R
    oma77 = _EPS0_1977 + ((0.05127 + (-0.007726) * t) * t) * t * DAS2R
    chia = (10.5526 + (-2.38064 + (-0.001125) * t) * t) * t * DAS2R

    # Apply IAU 2000 precession corrections
    dpsipr, depspr = pr00(date1, date2)
    psia = psia77 + dpsipr
    oma = oma77 + depspr

    rb = Rx(-depsbi) @ Ry(dpsibi * jnp.sin(_EPS0_1977)) @ Rz(dra0)
    rp = Rz(chia) @ Rx(-oma) @ Rz(-psia) @ Rx(_EPS0_1977)
    return rb, rp, rp @ rb


def pmat00(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Precession matrix (including frame bias) from GCRS to a specified
    date, IAU 2000 model.

    Returns:
        3x3 bias-precession matrix.
    """
    return bp00(date1, date2)[2]


# ---------------------------------------------------------------------------
# IAU 2006
# ---------------------------------------------------------------------------


def obl06(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Mean obliquity of the ecliptic, IAU 2006 precession model.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Obliquity of the ecliptic in radians.
    """
    t = julian_centuries(date1, date2)
    eps0 = 84381.406 + t * (
        -46.836769 + t * (-0.0001831 + t * (0.00200340 + t * (-0.000000576 + t * (-0.0000000434))))
    )
    return eps0 * DAS2R


def pfw06(date1: ArrayLike, date2: ArrayLike) -> tuple[Array, Array, Array, Array]:
    """Precession angles, IAU 2006, Fukushima-Williams 4-angle formulation.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Tuple of (gamb, phib, psib, epsa) in radians.
    """
    t = julian_centuries(date1, date2)

    gamb = (
        -0.052928
        + t
        * (
            10.556378
            + t * (0.4932044 + t * (-0.00031238 + t * (-0.000002788 + t * (0.0000000260))))
        )
    ) * DAS2R

    phib = (
        84381.412819
        + t
        * (
            -46.811016
            + t * (0.0511268 + t * (0.00053289 + t * (-0.000000440 + t * (-0.0000000176))))
        )
    ) * DAS2R

    psib = (
        -0.041775
        + t
        * (
            5038.481484
            + t * (1.5584175 + t * (-0.00018522 + t * (-0.000026452 + t * (-0.0000000148))))
        )
    ) * DAS2R

    epsa = obl06(date1, date2)

    return gamb, phib, psib, epsa


def fw2m(gamb: ArrayLike, phib: ArrayLike, psi: ArrayLike, eps: ArrayLike) -> Array:
    """Form the rotation matrix given the Fukushima-Williams angles.

    ``NxPxB = R_1(-eps) . R_3(-psi) . R_1(phib) . R_3(gamb)``.  With the
    nutation added to *psi* and *eps* the result is the full
    bias-precession-nutation matrix.

    Args:
        gamb: F-W angle gamma_bar (radians).
        phib: F-W angle phi_bar (radians).
        psi: F-W angle psi (radians).
        eps: F-W angle epsilon (radians).

    Returns:
        3x3 rotation matrix.
    """
    return Rx(-eps) @ Rz(-psi) @ Rx(phib) @ Rz(gamb)


def fw2xy(gamb: ArrayLike, phib: ArrayLike, psi: ArrayLike, eps: ArrayLike) -> tuple[Array, Array]:
    """CIP X,Y given Fukushima-Williams bias-precession-nutation angles.

    Returns:
        Tuple of (x, y) CIP unit vector components.
    """
    r = fw2m(gamb, phib, psi, eps)
    return r[2, 0], r[2, 1]


def pmat06(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Precession matrix (including frame bias) from GCRS to a specified
    date, IAU 2006 model.

    Returns:
        3x3 bias-precession matrix.
    """
    gamb, phib, psib, epsa = pfw06(date1, date2)
    return fw2m(gamb, phib, psib, epsa)


def bp06(date1: ArrayLike, date2: ArrayLike) -> tuple[Array, Array, Array]:
    """Frame bias and precession, IAU 2006.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Tuple of (rb, rp, rbp): frame bias matrix, precession matrix and
        bias-precession matrix.
    """
    # B matrix
    gamb, phib, psib, epsa = pfw06(DJM0, DJM00)
    rb = fw2m(gamb, phib, psib, epsa)

    # PxB matrix, then P = PxB x B'
    rbp = pmat06(date1, date2)
    rp = rbp @ rb.T
    return rb, rp, rbp


def pb06(date1: ArrayLike, date2: ArrayLike) -> tuple[Array, Array, Array]:
    """Precession angles, IAU 2006, equinox based, including frame bias.

    The three angles are such that ``Rz(-z) @ Ry(theta) @ Rz(-zeta)``
    reproduces :func:`pmat06`.  The angles are obtained by decomposing that
    matrix and so include the frame bias.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Tuple of (bzeta, bz, btheta) in radians.
    """
    r = pmat06(date1, date2)

    # Solve for z, choosing the +/- pi alternative
    y = r[1, 2]
    x = -r[0, 2]
    flip = x < 0.0
    y = jnp.where(flip, -y, y)
    x = jnp.where(flip, -x, x)
    bz = jnp.where((x != 0.0) | (y != 0.0), -jnp.arctan2(y, x), 0.0)

    # Derotate it out of the matrix, then solve for the remaining two
    r = Rz(bz) @ r
    y = r[0, 2]
    x = r[2, 2]
    btheta = jnp.where((x != 0.0) | (y != 0.0), -jnp.arctan2(y, x), 0.0)
    y = -r[1, 0]
    x = r[1, 1]
    bzeta = jnp.where((x != 0.0) | (y != 0.0), -jnp.arctan2(y, x), 0.0)
    return bzeta, bz, btheta


class PrecessionAngles(NamedTuple):
    """IAU 2006 precession angles returned by :func:`p06e`, all in radians.

    Attributes:
        eps0: Obliquity of the ecliptic at J2000.0.
        psia: Luni-solar precession.
        oma: Inclination of mean equator with respect to J2000.0 ecliptic.
        bpa: Ecliptic pole x, J2000.0 ecliptic triad.
        bqa: Ecliptic pole -y, J2000.0 ecliptic triad.
        pia: Angle between moving and J2000.0 ecliptics.
        bpia: Longitude of ascending node of the ecliptic.
        epsa: Obliquity of the ecliptic of date.
        chia: Planetary precession.
        za: Equatorial precession: -3rd 323 Euler angle.
        zetaa: Equatorial precession: -1st 323 Euler angle.
        thetaa: Equatorial precession: 2nd 323 Euler angle.
        pa: General precession.
        gam: Fukushima-Williams angle gamma_J2000.
        phi: Fukushima-Williams angle phi_J2000.
        psi: Fukushima-Williams angle psi_J2000.
    """

    eps0: Array
    psia: Array
    oma: Array
    bpa: Array
    bqa: Array
    pia: Array
    bpia: Array
    epsa: Array
    chia: Array
    za: Array
    zetaa: Array
    thetaa: Array
    pa: Array
    gam: Array
    phi: Array
    psi: Array


def p06e(date1: ArrayLike, date2: ArrayLike) -> PrecessionAngles:
    """Precession angles, IAU 2006, equinox based.

    Capitaine et al. (2003) and Hilton et al. (2006) polynomials for the
    full set of classical precession quantities.  The angles are with
    respect to the J2000.0 mean equator and equinox and exclude frame bias.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        :class:`PrecessionAngles` (a NamedTuple, so it also unpacks).
    """
    t = julian_centuries(date1, date2)
    eps0 = jnp.asarray(_EPS0_2006, dtype=get_dtype())

    # fmt: off
    psia = (5038.481507 + (-1.0790069 + (-0.00114045 + (0.000132851 + (-0.0000000951) * t) * t) * t) * t) * t * DAS2R
    oma = eps0 + (-0.025754 + (0.0512623 + (-0.00772503 + (-0.000000467 + (0.0000003337) * t) * t) * t) * t) * t * DAS2R
    bpa = (4.199094 + (0.1939873 + (-0.00022466 + (-0.000000912 + (0.0000000120) * t) * t) * t) * t) * t * DAS2R
    bqa = (-46.811015 + (0.0510283 + (0.00052413 + (-0.000000646 + (-0.0000000172) * t) * t) * t) * t) * t * DAS2R
    pia = (46.998973 + (-0.0334926 + (-0.00012559 + (0.000000113 + (-0.0000000022) * t) * t) * t) * t) * t * DAS2R
    bpia = (629546.7936 + (-867.95758 + (0.157992 + (-0.0005371 + (-0.00004797 + (0.000000072) * t) * t) * t) * t) * t) * DAS2R
    epsa = obl06(date1, date2)
    chia = (10.556403 + (-2.3814292 + (-0.00121197 + (0.000170663 + (-0.0000000560) * t) * t) * t) * t) * t * DAS2R
    za = (-2.650545 + (2306.077181 + (1.0927348 + (0.01826837 + (-0.000028596 + (-0.0000002904) * t) * t) * t) * t) * t) * DAS2R
    zetaa = (2.650545 + (2306.083227 + (0.2988499 + (0.01801828 + (-0.000005971 + (-0.0000003173) * t) * t) * t) * t) * t) * DAS2R
    thetaa = (2004.191903 + (-0.4294934 + (-0.04182264 + (-0.000007089 + (-0.0000001274) * t) * t) * t) * t) * t * DAS2R
    pa = (5028.796195 + (1.1054348 + (0.00007964 + (-0.000023857 + (-0.0000000383) * t) * t) * t) * t) * t * DAS2R
    gam = (10.556403 + (0.4932044 + (-0.00031238 + (-0.000002788 + (0.0000000260) * t) * t) * t) * t) * t * DAS2R
    phi = eps0 + (-46.811015 + (0.0511269 + (0.00053289 + (-0.000000440 + (-0.0000000176) * t) * t) * t) * t) * t * DAS2R
    psi = (5038.481507 + (1.5584176 + (-0.00018522 + (-0.000026452 + (-0.0000000148) * t) * t) * t) * t) * t * DAS2R
    # fmt: on

    return PrecessionAngles(
        eps0, psia, oma, bpa, bqa, pia, bpia, epsa, chia, za, zetaa, thetaa, pa, gam, phi, psi
    )


# ---------------------------------------------------------------------------
# IAU 1976
# ---------------------------------------------------------------------------


def obl80(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Mean obliquity of the ecliptic, IAU 1980 model.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Obliquity of the ecliptic in radians.
    """
    t = julian_centuries(date1, date2)
    return DAS2R * (84381.448 + (-46.8150 + (-0.00059 + 0.001813 * t) * t) * t)


def prec76(
    date01: ArrayLike, date02: ArrayLike, date11: ArrayLike, date12: ArrayLike
) -> tuple[Array, Array, Array]:
    """IAU 1976 precession model (Lieske et al. 1977).

    Both epochs are TDB two-part Julian Dates, but TT can be used without
    significant loss of accuracy.

    Args:
        date01: Starting epoch (part 1).
        date02: Starting epoch (part 2).
        date11: Ending epoch (part 1).
        date12: Ending epoch (part 2).

    Returns:
        Tuple of (zeta, z, theta), the 3-2-3 Euler angles [radians] such
        that the precession matrix is ``Rz(-z) @ Ry(theta) @ Rz(-zeta)``.
    """
    date01 = jnp.asarray(date01)
    date11 = jnp.asarray(date11)

    # Interval between fundamental epoch J2000.0 and start date (JC)
    t0 = jnp.asarray(((date01 - DJ00) + date02) / DJC, dtype=get_dtype())

    # Interval over which precession required (JC)
    t = jnp.asarray(((date11 - date01) + (date12 - date02)) / DJC, dtype=get_dtype())

    tas2r = t * DAS2R
    w = 2306.2181 + (1.39656 - 0.000139 * t0) * t0

    zeta = (w + ((0.30188 - 0.000344 * t0) + 0.017998 * t) * t) * tas2r
    z = (w + ((1.09468 + 0.000066 * t0) + 0.018203 * t) * t) * tas2r
    theta = (
        (2004.3109 + (-0.85330 - 0.000217 * t0) * t0)
        + ((-0.42665 - 0.000217 * t0) - 0.041833 * t) * t
    ) * tas2r
    return zeta, z, theta


def pmat76(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Precession matrix from J2000.0 to a specified date, IAU 1976 model.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        3x3 precession matrix, J2000.0 to date.
    """
    zeta, z, theta = prec76(DJ00, 0.0, date1, date2)
    return Rz(-z) @ Ry(theta) @ Rz(-zeta)


# ---------------------------------------------------------------------------
# Long-term precession (Vondrak et al. 2011)
# ---------------------------------------------------------------------------

# fmt: off
# Ecliptic pole: polynomial (P_A, Q_A) and periodic terms
# (period in years, P cos, Q cos, P sin, Q sin), arcsec
_PQPOL = (
    (5851.607687, -0.1189000, -0.00028913,  0.000000101),
    (-1600.886300, 1.1689818, -0.00000020, -0.000000437),
)
_PQPER = (
    ( 708.15, -5486.751211, -684.661560,   667.666730, -5523.863691),
    (2309.00,   -17.127623, 2446.283880, -2354.886252,  -549.747450),
    (1620.00,  -617.517403,  399.671049,  -428.152441,  -310.998056),
    ( 492.20,   413.442940, -356.652376,   376.202861,   421.535876),
    (1183.00,    78.614193, -186.387003,   184.778874,   -36.776172),
    ( 622.00,  -180.732815, -316.800070,   335.321713,  -145.278396),
    ( 882.00,   -87.676083,  198.296701,  -185.138669,   -34.744450),
    ( 547.00,    46.140315,  101.135679,  -120.972830,    22.885731),
)

# Equator pole: polynomial (X, Y) and periodic terms
# (period in years, X cos, Y cos, X sin, Y sin), arcsec
_XYPOL = (
    (5453.282155,    0.4252841, -0.00037173, -0.000000152),
    (-73750.930350, -0.7675452, -0.00018725,  0.000000231),
)
_XYPER = (
    ( 256.75,  -819.940624, 75004.344875, 81491.287984,  1558.515853),
    ( 708.15, -8444.676815,   624.033993,   787.163481,  7774.939698),
    ( 274.20,  2600.009459,  1251.136893,  1251.296102, -2219.534038),
    ( 241.45,  2755.175630, -1102.212834, -1257.950837, -2523.969396),
    (2309.00,  -167.659835, -2660.664980, -2966.799730,   247.850422),
    ( 492.20,   871.855056,   699.291817,   639.744522,  -846.485643),
    ( 396.10,    44.769698,   153.167220,   131.600209, -1393.124055),
    ( 288.90,  -512.313065,  -950.865637,  -445.040117,   368.526116),
    ( 231.10,  -819.415595,   499.754645,   584.522874,   749.045012),
    (1610.00,  -538.071099,  -145.188210,   -89.756563,   444.704518),
    ( 620.00,  -189.793622,   558.116553,   524.429630,   235.934465),
    ( 157.87,  -402.922932,   -23.923029,   -13.549067,   374.049623),
    ( 220.30,   179.516345,  -165.405086,  -210.157124,  -171.330180),
    (1200.00,    -9.814756,     9.344131,   -44.919798,   -22.899655),
)
# fmt: on


def _long_term_pair(pol: tuple, per: tuple, epj: ArrayLike) -> tuple[Array, Array]:
    """Evaluate a polynomial-plus-periodic long-term series, in radians."""
    dtype = get_dtype()
    t = (jnp.asarray(epj, dtype=dtype) - 2000.0) / 100.0

    per = jnp.array(per, dtype=dtype)
    a = D2PI * t / per[:, 0]
    s = jnp.sin(a)
    c = jnp.cos(a)
    u = jnp.sum(c * per[:, 1] + s * per[:, 3])
    v = jnp.sum(c * per[:, 2] + s * per[:, 4])

    pol = jnp.array(pol, dtype=dtype)
    powers = t ** jnp.arange(pol.shape[1])
    u = u + jnp.sum(pol[0] * powers)
    v = v + jnp.sum(pol[1] * powers)
    return u * DAS2R, v * DAS2R


def ltpecl(epj: ArrayLike) -> Array:
    """Long-term precession of the ecliptic.

    Valid for +/- 200,000 years around J2000.

    Args:
        epj: Julian epoch (TT).

    Returns:
        Ecliptic pole unit vector, with respect to the J2000.0 mean equator
        and equinox.
    """
    p, q = _long_term_pair(_PQPOL, _PQPER, epj)
    w = 1.0 - p * p - q * q
    w = jnp.sqrt(jnp.maximum(w, 0.0))
    s = jnp.sin(_EPS0_2006)
    c = jnp.cos(_EPS0_2006)
    return jnp.array([p, -q * c - w * s, -q * s + w * c])


def ltpequ(epj: ArrayLike) -> Array:
    """Long-term precession of the equator.

    Valid for +/- 200,000 years around J2000.

    Args:
        epj: Julian epoch (TT).

    Returns:
        Equator pole unit vector, with respect to the J2000.0 mean equator
        and equinox.
    """
    x, y = _long_term_pair(_XYPOL, _XYPER, epj)
    w = 1.0 - x * x - y * y
    w = jnp.sqrt(jnp.maximum(w, 0.0))
    return jnp.array([x, y, w])


def ltp(epj: ArrayLike) -> Array:
    """Long-term precession matrix.

    The matrix is in the sense ``P_date = R @ P_J2000`` where ``P_J2000``
    is with respect to the J2000.0 mean equator and equinox.  Unlike
    :func:`pmat06` it does not include frame bias.

    Args:
        epj: Julian epoch (TT).

    Returns:
        3x3 precession matrix, J2000.0 to date.
    """
    peqr = ltpequ(epj)
    pecl = ltpecl(epj)

    # Equinox (top row), then middle row
    _, eqx = pn(pxp(peqr, pecl))
    v = pxp(peqr, eqx)
    return jnp.stack([eqx, v, peqr])


def ltpb(epj: ArrayLike) -> Array:
    """Long-term precession matrix, including ICRS frame bias.

    Args:
        epj: Julian epoch (TT).

    Returns:
        3x3 bias-precession matrix, GCRS to mean of date.
    """
    # Frame bias (IERS Conventions 2010, Eqs. 5.21 and 5.33)
    dx = -0.016617 * DAS2R
    de = -0.0068192 * DAS2R
    dr = -0.0146 * DAS2R

    rp = ltp(epj)
    return jnp.stack(
        [
            rp[:, 0] - rp[:, 1] * dr + rp[:, 2] * dx,
            rp[:, 0] * dr + rp[:, 1] + rp[:, 2] * de,
            -rp[:, 0] * dx - rp[:, 1] * de + rp[:, 2],
        ],
        axis=1,
    )
