"""Nutation, precession-nutation and celestial-to-intermediate matrices.

Two families of routines are provided:

- **Equinox based**: the classical NPB matrix built from mean obliquity,
  nutation and precession (``pn00``, ``pnm06a``, ...).
- **CIO based**: the GCRS to CIRS matrix built from the CIP coordinates
  X, Y and the CIO locator s (``c2ixys``, ``c2i06a``, ...).

The ``pn*`` routines return every intermediate matrix, the ``pnm*`` and
``c2i*`` routines only the final one.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.constants import DJM0, DJM00
from sofajax.vector_matrix import Rx, Ry, Rz

from ._cio import eors, s00, s06
from ._nutation import nut00a, nut00b, nut06a, nut80
from ._precession import bp00, fw2m, obl06, obl80, pfw06, pmat76, pr00


# ---------------------------------------------------------------------------
# Nutation matrices
# ---------------------------------------------------------------------------


def numat(epsa: ArrayLike, dpsi: ArrayLike, deps: ArrayLike) -> Array:
    """Form the matrix of nutation.

    Args:
        epsa: Mean obliquity of date (radians).
        dpsi: Nutation in longitude (radians).
        deps: Nutation in obliquity (radians).

    Returns:
        3x3 nutation matrix, mean of date to true of date.
    """
    return Rx(-(epsa + deps)) @ Rz(-dpsi) @ Rx(epsa)


def nutm80(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Form the matrix of nutation for a given date, IAU 1980 model.

    Returns:
        3x3 nutation matrix, mean of date to true of date.
    """
    dpsi, deps = nut80(date1, date2)
    epsa = obl80(date1, date2)
    return numat(epsa, dpsi, deps)


def num00a(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Form the matrix of nutation for a given date, IAU 2000A model.

    Returns:
        3x3 nutation matrix.
    """
    return pn00a(date1, date2)[6]


def num00b(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Form the matrix of nutation for a given date, IAU 2000B model.

    Returns:
        3x3 nutation matrix.
    """
    return pn00b(date1, date2)[6]


def num06a(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Form the matrix of nutation for a given date, IAU 2006/2000A model.

    Returns:
        3x3 nutation matrix.
    """
    eps = obl06(date1, date2)
    dp, de = nut06a(date1, date2)
    return numat(eps, dp, de)


# ---------------------------------------------------------------------------
# Precession-nutation, equinox based
# ---------------------------------------------------------------------------


def pn00(
    date1: ArrayLike, date2: ArrayLike, dpsi: ArrayLike, deps: ArrayLike
) -> tuple[Array, Array, Array, Array, Array, Array]:
    """Precession-nutation, IAU 2000 model: a multi-purpose routine,
    supporting classical (equinox-based) use directly and CIO-based use
    indirectly.

    The caller supplies the nutation components, which allows nutation
    models other than IAU 2000A/B (or observed corrections) to be used.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).
        dpsi: Nutation in longitude (radians).
        deps: Nutation in obliquity (radians).

    Returns:
        Tuple of (epsa, rb, rp, rbp, rn, rbpn): mean obliquity, frame bias
        matrix, precession matrix, bias-precession matrix, nutation matrix
        and the GCRS to true matrix.
    """
    # IAU 2000 precession-rate adjustments
    _, depspr = pr00(date1, date2)

    # Mean obliquity, consistent with IAU 2000 precession-nutation
    epsa = obl80(date1, date2) + depspr

    rb, rp, rbp = bp00(date1, date2)
    rn = numat(epsa, dpsi, deps)
    return epsa, rb, rp, rbp, rn, rn @ rbp


def pn00a(date1: ArrayLike, date2: ArrayLike) -> tuple[Array, ...]:
    """Precession-nutation, IAU 2000A model.

    Returns:
        Tuple of (dpsi, deps, epsa, rb, rp, rbp, rn, rbpn), see :func:`pn00`.
    """
    dpsi, deps = nut00a(date1, date2)
    return (dpsi, deps) + pn00(date1, date2, dpsi, deps)


def pn00b(date1: ArrayLike, date2: ArrayLike) -> tuple[Array, ...]:
    """Precession-nutation, IAU 2000B model.

    Returns:
        Tuple of (dpsi, deps, epsa, rb, rp, rbp, rn, rbpn), see :func:`pn00`.
    """
    dpsi, deps = nut00b(date1, date2)
    return (dpsi, deps) + pn00(date1, date2, dpsi, deps)


def pn06(
    date1: ArrayLike, date2: ArrayLike, dpsi: ArrayLike, deps: ArrayLike
) -> tuple[Array, Array, Array, Array, Array, Array]:
    """Precession-nutation, IAU 2006 model: a multi-purpose routine,
    supporting classical (equinox-based) use directly and CIO-based use
    indirectly.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).
        dpsi: Nutation in longitude (radians).
        deps: Nutation in obliquity (radians).

    Returns:
        Tuple of (epsa, rb, rp, rbp, rn, rbpn), see :func:`pn00`.
    """
    # Bias-precession Fukushima-Williams angles of J2000.0 = frame bias
    gamb, phib, psib, eps = pfw06(DJM0, DJM00)
    rb = fw2m(gamb, phib, psib, eps)

    # Bias-precession Fukushima-Williams angles of date
    gamb, phib, psib, eps = pfw06(date1, date2)
    rbp = fw2m(gamb, phib, psib, eps)
    rp = rbp @ rb.T

    # Equinox based bias-precession-nutation matrix
    rbpn = fw2m(gamb, phib, psib + dpsi, eps + deps)
    rn = rbpn @ rbp.T
    return eps, rb, rp, rbp, rn, rbpn


def pn06a(date1: ArrayLike, date2: ArrayLike) -> tuple[Array, ...]:
    """Precession-nutation, IAU 2006/2000A models.

    Returns:
        Tuple of (dpsi, deps, epsa, rb, rp, rbp, rn, rbpn), see :func:`pn00`.
    """
    dpsi, deps = nut06a(date1, date2)
    return (dpsi, deps) + pn06(date1, date2, dpsi, deps)


def pnm00a(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Form the matrix of precession-nutation for a given date (including
    frame bias), equinox-based, IAU 2000A model.

    Returns:
        3x3 bias-precession-nutation matrix.
    """
    return pn00a(date1, date2)[7]


def pnm00b(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Form the matrix of precession-nutation for a given date (including
    frame bias), equinox-based, IAU 2000B model.

    Returns:
        3x3 bias-precession-nutation matrix.
    """
    return pn00b(date1, date2)[7]


def pnm06a(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Form the bias-precession-nutation matrix, IAU 2006/2000A.

    Combines Fukushima-Williams precession angles with IAU 2006/2000A
    nutation to form the complete GCRS-to-true (BPN) rotation matrix.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        3x3 bias-precession-nutation matrix.
    """
    gamb, phib, psib, epsa = pfw06(date1, date2)
    dpsi, deps = nut06a(date1, date2)
    return fw2m(gamb, phib, psib + dpsi, epsa + deps)


def pnm80(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Form the matrix of precession/nutation for a given date, IAU 1976
    precession model, IAU 1980 nutation model.

    Returns:
        3x3 combined precession/nutation matrix, ``N @ P``.
    """
    return nutm80(date1, date2) @ pmat76(date1, date2)


# ---------------------------------------------------------------------------
# CIO based
# ---------------------------------------------------------------------------


def bpn2xy(rbpn: ArrayLike) -> tuple[Array, Array]:
    """Extract CIP X, Y coordinates from the bias-precession-nutation matrix.

    Args:
        rbpn: 3x3 bias-precession-nutation matrix.

    Returns:
        Tuple of (x, y) CIP coordinates.
    """
    rbpn = jnp.asarray(rbpn)
    return rbpn[2, 0], rbpn[2, 1]


def c2ixys(x: ArrayLike, y: ArrayLike, s: ArrayLike) -> Array:
    """Form the celestial-to-intermediate matrix given CIP X, Y and the CIO
    locator s.

    The matrix is ``Rz(-(e+s)) @ Ry(d) @ Rz(e)`` where ``e = atan2(y, x)``
    and ``d = arctan(sqrt((x^2 + y^2) / (1 - x^2 - y^2)))``.

    Args:
        x: CIP x coordinate.
        y: CIP y coordinate.
        s: CIO locator (radians).

    Returns:
        3x3 celestial-to-intermediate matrix.
    """
    r2 = x * x + y * y
    e = jnp.where(r2 > 0.0, jnp.arctan2(y, x), 0.0)
    d = jnp.arctan(jnp.sqrt(r2 / (1.0 - r2)))
    return Rz(-(e + s)) @ Ry(d) @ Rz(e)


def c2ixy(date1: ArrayLike, date2: ArrayLike, x: ArrayLike, y: ArrayLike) -> Array:
    """Form the celestial to intermediate-frame-of-date matrix given the CIP
    X,Y and the date, with s from the IAU 2000 series.

    Returns:
        3x3 celestial-to-intermediate matrix.
    """
    return c2ixys(x, y, s00(date1, date2, x, y))


def c2ibpn(date1: ArrayLike, date2: ArrayLike, rbpn: ArrayLike) -> Array:
    """Form the celestial-to-intermediate matrix given the date and the
    bias-precession-nutation matrix, IAU 2000.

    Returns:
        3x3 celestial-to-intermediate matrix.
    """
    x, y = bpn2xy(rbpn)
    return c2ixy(date1, date2, x, y)


def c2i00a(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Form the celestial-to-intermediate matrix for a given date using the
    IAU 2000A precession-nutation model.

    Returns:
        3x3 celestial-to-intermediate matrix.
    """
    return c2ibpn(date1, date2, pnm00a(date1, date2))


def c2i00b(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Form the celestial-to-intermediate matrix for a given date using the
    IAU 2000B precession-nutation model.

    Returns:
        3x3 celestial-to-intermediate matrix.
    """
    return c2ibpn(date1, date2, pnm00b(date1, date2))


def c2i06a(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Form the celestial-to-intermediate matrix for a given date using the
    IAU 2006 precession and IAU 2000A nutation models.

    Returns:
        3x3 celestial-to-intermediate matrix.
    """
    x, y, s = xys06a(date1, date2)
    return c2ixys(x, y, s)


def _xys(rbpn: Array, locator, date1: ArrayLike, date2: ArrayLike) -> tuple[Array, Array, Array]:
    x, y = bpn2xy(rbpn)
    return x, y, locator(date1, date2, x, y)


def xys00a(date1: ArrayLike, date2: ArrayLike) -> tuple[Array, Array, Array]:
    """CIP X,Y and CIO locator s, IAU 2000A.

    Returns:
        Tuple of (x, y, s) in radians.
    """
    return _xys(pnm00a(date1, date2), s00, date1, date2)


def xys00b(date1: ArrayLike, date2: ArrayLike) -> tuple[Array, Array, Array]:
    """CIP X,Y and CIO locator s, IAU 2000B.

    Returns:
        Tuple of (x, y, s) in radians.
    """
    return _xys(pnm00b(date1, date2), s00, date1, date2)


def xys06a(date1: ArrayLike, date2: ArrayLike) -> tuple[Array, Array, Array]:
    """CIP X, Y coordinates and CIO locator s, IAU 2006/2000A.

    Combines :func:`pnm06a`, :func:`bpn2xy` and :func:`s06`.

    Args:
        date1: TT as 2-part Julian Date (part 1).
        date2: TT as 2-part Julian Date (part 2).

    Returns:
        Tuple of (x, y, s) where x,y are CIP coordinates and s is the
        CIO locator, all in radians.
    """
    return _xys(pnm06a(date1, date2), s06, date1, date2)


def s00a(date1: ArrayLike, date2: ArrayLike) -> Array:
    """CIO locator s, IAU 2000A precession-nutation.

    Returns:
        CIO locator s in radians.
    """
    return xys00a(date1, date2)[2]


def s00b(date1: ArrayLike, date2: ArrayLike) -> Array:
    """CIO locator s, IAU 2000B precession-nutation.

    Returns:
        CIO locator s in radians.
    """
    return xys00b(date1, date2)[2]


def s06a(date1: ArrayLike, date2: ArrayLike) -> Array:
    """CIO locator s, IAU 2006 precession and IAU 2000A nutation.

    Returns:
        CIO locator s in radians.
    """
    return xys06a(date1, date2)[2]


def eo06a(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Equation of the origins, IAU 2006 precession and IAU 2000A nutation.

    Returns:
        Equation of the origins in radians.
    """
    r = pnm06a(date1, date2)
    x, y = bpn2xy(r)
    return eors(r, s06(date1, date2, x, y))


# ---------------------------------------------------------------------------
# Polar motion and celestial-to-terrestrial assembly
# ---------------------------------------------------------------------------


def pom00(xp: ArrayLike, yp: ArrayLike, sp: ArrayLike) -> Array:
    """Form the polar motion matrix (TIRS -> ITRS), IERS 2003.

    The matrix is ``Rx(-yp) @ Ry(-xp) @ Rz(sp)``.

    Args:
        xp: Polar motion x-component (radians, positive towards Greenwich).
        yp: Polar motion y-component (radians, positive towards 90W).
        sp: TIO locator s' (radians).

    Returns:
        3x3 polar motion matrix.
    """
    return Rx(-yp) @ Ry(-xp) @ Rz(sp)


def c2tcio(rc2i: ArrayLike, era: ArrayLike, rpom: ArrayLike) -> Array:
    """Assemble the celestial to terrestrial matrix from CIO-based
    components (the celestial-to-intermediate matrix, the Earth Rotation
    Angle and the polar motion matrix).

    Returns:
        3x3 celestial-to-terrestrial matrix, ``RPOM @ R_3(ERA) @ RC2I``.
    """
    return jnp.asarray(rpom) @ Rz(era) @ jnp.asarray(rc2i)


def c2teqx(rbpn: ArrayLike, gst: ArrayLike, rpom: ArrayLike) -> Array:
    """Assemble the celestial to terrestrial matrix from equinox-based
    components (the NPB matrix, Greenwich Apparent Sidereal Time and the
    polar motion matrix).

    Returns:
        3x3 celestial-to-terrestrial matrix, ``RPOM @ R_3(GST) @ RBPN``.
    """
    return jnp.asarray(rpom) @ Rz(gst) @ jnp.asarray(rbpn)
