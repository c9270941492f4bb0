"""p-vector and pv-vector operations, spherical/Cartesian conversion,
separation and position angle.

A p-vector is an array of shape ``(3,)``.  A pv-vector is an array of shape
``(2, 3)`` whose first row is a position and second row the corresponding
velocity.  All functions return new arrays.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.config import get_dtype


def _safe(den: Array) -> Array:
    return jnp.where(den != 0.0, den, 1.0)


# ---------------------------------------------------------------------------
# Initialisation and copying
# ---------------------------------------------------------------------------


def zp() -> Array:
    """Zero a p-vector."""
    return jnp.zeros(3, dtype=get_dtype())


def cp(p: ArrayLike) -> Array:
    """Copy a p-vector."""
    return jnp.array(p)


def zpv() -> Array:
    """Zero a pv-vector."""
    return jnp.zeros((2, 3), dtype=get_dtype())


def cpv(pv: ArrayLike) -> Array:
    """Copy a pv-vector."""
    return jnp.array(pv)


def p2pv(p: ArrayLike) -> Array:
    """Extend a p-vector to a pv-vector by appending a zero velocity."""
    p = jnp.asarray(p)
    return jnp.stack([p, jnp.zeros_like(p)])


def pv2p(pv: ArrayLike) -> Array:
    """Discard the velocity component of a pv-vector."""
    return jnp.asarray(pv)[0]


# ---------------------------------------------------------------------------
# p-vector operations
# ---------------------------------------------------------------------------


def pdp(a: ArrayLike, b: ArrayLike) -> Array:
    """Inner (scalar) product of two p-vectors."""
    return jnp.dot(jnp.asarray(a), jnp.asarray(b))


def pxp(a: ArrayLike, b: ArrayLike) -> Array:
    """Outer (vector) product of two p-vectors."""
    return jnp.cross(jnp.asarray(a), jnp.asarray(b))


def pm(p: ArrayLike) -> Array:
    """Modulus of a p-vector."""
    p = jnp.asarray(p)
    return jnp.sqrt(jnp.sum(p * p))


def pn(p: ArrayLike) -> tuple[Array, Array]:
    """Convert a p-vector into modulus and unit vector.

    Args:
        p: p-vector.

    Returns:
        Tuple of (r, u): the modulus and the unit vector.  If *p* is null,
        both are zero.
    """
    p = jnp.asarray(p)
    w = pm(p)
    u = jnp.where(w == 0.0, jnp.zeros_like(p), p / _safe(w))
    return w, u


def ppp(a: ArrayLike, b: ArrayLike) -> Array:
    """p-vector addition."""
    return jnp.asarray(a) + jnp.asarray(b)


def pmp(a: ArrayLike, b: ArrayLike) -> Array:
    """p-vector subtraction, ``a - b``."""
    return jnp.asarray(a) - jnp.asarray(b)


def ppsp(a: ArrayLike, s: ArrayLike, b: ArrayLike) -> Array:
    """p-vector plus scaled p-vector, ``a + s * b``."""
    return jnp.asarray(a) + s * jnp.asarray(b)


def sxp(s: ArrayLike, p: ArrayLike) -> Array:
    """Multiply a p-vector by a scalar."""
    return s * jnp.asarray(p)


# ---------------------------------------------------------------------------
# pv-vector operations
# ---------------------------------------------------------------------------


def s2xpv(s1: ArrayLike, s2: ArrayLike, pv: ArrayLike) -> Array:
    """Multiply a pv-vector by two scalars, *s1* for position and *s2* for velocity."""
    pv = jnp.asarray(pv)
    return jnp.stack([s1 * pv[0], s2 * pv[1]])


def sxpv(s: ArrayLike, pv: ArrayLike) -> Array:
    """Multiply a pv-vector by a scalar."""
    return s2xpv(s, s, pv)


def pvppv(a: ArrayLike, b: ArrayLike) -> Array:
    """Add one pv-vector to another."""
    return jnp.asarray(a) + jnp.asarray(b)


def pvmpv(a: ArrayLike, b: ArrayLike) -> Array:
    """Subtract one pv-vector from another, ``a - b``."""
    return jnp.asarray(a) - jnp.asarray(b)


def pvm(pv: ArrayLike) -> tuple[Array, Array]:
    """Modulus of pv-vector.

    Returns:
        Tuple of (r, s): modulus of the position and of the velocity.
    """
    pv = jnp.asarray(pv)
    return pm(pv[0]), pm(pv[1])


def pvdpv(a: ArrayLike, b: ArrayLike) -> Array:
    """Inner (scalar) product of two pv-vectors.

    Returns:
        Array ``[a.b, d(a.b)/dt]``.
    """
    a = jnp.asarray(a)
    b = jnp.asarray(b)
    adb = pdp(a[0], b[0])
    adbd = pdp(a[0], b[1]) + pdp(a[1], b[0])
    return jnp.array([adb, adbd])


def pvxpv(a: ArrayLike, b: ArrayLike) -> Array:
    """Outer (vector) product of two pv-vectors.

    Returns:
        pv-vector ``[a x b, d(a x b)/dt]``.
    """
    a = jnp.asarray(a)
    b = jnp.asarray(b)
    axb = pxp(a[0], b[0])
    axbd = pxp(a[0], b[1]) + pxp(a[1], b[0])
    return jnp.stack([axb, axbd])


def pvu(dt: ArrayLike, pv: ArrayLike) -> Array:
    """Update a pv-vector, discarding the acceleration.

    Args:
        dt: Time interval.
        pv: pv-vector.

    Returns:
        pv-vector with the position advanced by ``dt * velocity``.
    """
    pv = jnp.asarray(pv)
    return jnp.stack([pv[0] + dt * pv[1], pv[1]])


def pvup(dt: ArrayLike, pv: ArrayLike) -> Array:
    """Update a pv-vector, returning only the position."""
    pv = jnp.asarray(pv)
    return pv[0] + dt * pv[1]


# ---------------------------------------------------------------------------
# Spherical and Cartesian coordinates
# ---------------------------------------------------------------------------


def s2c(theta: ArrayLike, phi: ArrayLike) -> Array:
    """Convert spherical coordinates to a Cartesian unit vector.

    Args:
        theta: Longitude angle (radians).
        phi: Latitude angle (radians).

    Returns:
        Direction cosines.
    """
    cp_ = jnp.cos(phi)
    return jnp.array([jnp.cos(theta) * cp_, jnp.sin(theta) * cp_, jnp.sin(phi)])


def c2s(p: ArrayLike) -> tuple[Array, Array]:
    """P-vector to spherical coordinates.

    Args:
        p: p-vector (not necessarily unit length).

    Returns:
        Tuple of (theta, phi) in radians. At either pole, theta is zero.
    """
    x, y, z = jnp.asarray(p)
    d2 = x * x + y * y
    theta = jnp.where(d2 == 0.0, 0.0, jnp.arctan2(y, x))
    phi = jnp.where(z == 0.0, 0.0, jnp.arctan2(z, jnp.sqrt(d2)))
    return theta, phi


def s2p(theta: ArrayLike, phi: ArrayLike, r: ArrayLike) -> Array:
    """Convert spherical polar coordinates to a p-vector."""
    return r * s2c(theta, phi)


def p2s(p: ArrayLike) -> tuple[Array, Array, Array]:
    """P-vector to spherical polar coordinates.

    Returns:
        Tuple of (theta, phi, r).
    """
    theta, phi = c2s(p)
    return theta, phi, pm(p)


def s2pv(
    theta: ArrayLike,
    phi: ArrayLike,
    r: ArrayLike,
    td: ArrayLike,
    pd: ArrayLike,
    rd: ArrayLike,
) -> Array:
    """Convert position/velocity from spherical to Cartesian coordinates.

    Args:
        theta: Longitude angle (radians).
        phi: Latitude angle (radians).
        r: Radial distance.
        td: Rate of change of theta.
        pd: Rate of change of phi.
        rd: Rate of change of r.

    Returns:
        pv-vector, shape (2, 3).
    """
    st = jnp.sin(theta)
    ct = jnp.cos(theta)
    sp = jnp.sin(phi)
    cp_ = jnp.cos(phi)
    rcp = r * cp_
    x = rcp * ct
    y = rcp * st
    rpd = r * pd
    w = rpd * sp - cp_ * rd

    return jnp.array([
        [x, y, r * sp],
        [-y * td - w * ct, x * td - w * st, rpd * cp_ + sp * rd],
    ])


def pv2s(pv: ArrayLike) -> tuple[Array, Array, Array, Array, Array, Array]:
    """Convert position/velocity from Cartesian to spherical coordinates.

    If the position is null, the velocity is used to fix the direction.
    At the poles, theta, its rate and the latitude rate are set to zero.

    Args:
        pv: pv-vector, shape (2, 3).

    Returns:
        Tuple of (theta, phi, r, td, pd, rd).
    """
    pv = jnp.asarray(pv)
    p = pv[0]
    v = pv[1]
    xd, yd, zd = v

    rtrue = pm(p)
    null = rtrue == 0.0
    x, y, z = jnp.where(null, v, p)

    rxy2 = x * x + y * y
    r2 = rxy2 + z * z
    rw = jnp.sqrt(r2)
    rxy = jnp.sqrt(rxy2)
    xyp = x * xd + y * yd

    polar = rxy2 == 0.0
    theta = jnp.where(polar, 0.0, jnp.arctan2(y, x))
    phi = jnp.where(polar & (z == 0.0), 0.0, jnp.arctan2(z, rxy))
    td = jnp.where(polar, 0.0, (x * yd - y * xd) / _safe(rxy2))
    pd = jnp.where(polar, 0.0, (zd * rxy2 - z * xyp) / _safe(r2 * rxy))
    rd = jnp.where(rw != 0.0, (xyp + z * zd) / _safe(rw), 0.0)

    return theta, phi, rtrue, td, pd, rd


# ---------------------------------------------------------------------------
# Separation and position angle
# ---------------------------------------------------------------------------


def sepp(a: ArrayLike, b: ArrayLike) -> Array:
    """Angular separation between two p-vectors.

    Args:
        a: First p-vector (not necessarily unit length).
        b: Second p-vector (not necessarily unit length).

    Returns:
        Angular separation (radians, always positive).
    """
    ss = pm(pxp(a, b))
    cs = pdp(a, b)
    return jnp.where((ss != 0.0) | (cs != 0.0), jnp.arctan2(ss, cs), 0.0)


def seps(al: ArrayLike, ap: ArrayLike, bl: ArrayLike, bp: ArrayLike) -> Array:
    """Angular separation between two sets of spherical coordinates.

    Args:
        al: First longitude (radians).
        ap: First latitude (radians).
        bl: Second longitude (radians).
        bp: Second latitude (radians).

    Returns:
        Angular separation (radians).
    """
    return sepp(s2c(al, ap), s2c(bl, bp))


def pap(a: ArrayLike, b: ArrayLike) -> Array:
    """Position-angle from two p-vectors.

    Args:
        a: Direction of the reference point.
        b: Direction of the point whose position angle is required.

    Returns:
        Position angle of *b* with respect to *a* (radians), in the range
        -pi to +pi, measured from north through east.
    """
    a = jnp.asarray(a)
    b = jnp.asarray(b)
    am, au = pn(a)
    bm = pm(b)

    xa, ya, za = a
    eta = jnp.array([-xa * za, -ya * za, xa * xa + ya * ya])
    xi = pxp(eta, au)
    a2b = b - a
    st = pdp(a2b, xi)
    ct = pdp(a2b, eta)

    degenerate = (am == 0.0) | (bm == 0.0)
    st = jnp.where(degenerate, 0.0, st)
    ct = jnp.where(degenerate | ((st == 0.0) & (ct == 0.0)), 1.0, ct)
    return jnp.arctan2(st, ct)


def pas(al: ArrayLike, ap: ArrayLike, bl: ArrayLike, bp: ArrayLike) -> Array:
    """Position-angle from spherical coordinates.

    Args:
        al: Longitude of point A (radians).
        ap: Latitude of point A (radians).
        bl: Longitude of point B (radians).
        bp: Latitude of point B (radians).

    Returns:
        Position angle of B with respect to A (radians).
    """
    dl = bl - al
    y = jnp.sin(dl) * jnp.cos(bp)
    x = jnp.sin(bp) * jnp.cos(ap) - jnp.cos(bp) * jnp.sin(ap) * jnp.cos(dl)
    return jnp.where((x != 0.0) | (y != 0.0), jnp.arctan2(y, x), 0.0)
