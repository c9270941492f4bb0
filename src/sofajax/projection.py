"""Gnomonic (tangent-plane) projection.

A star at spherical coordinates (a, b) or direction vector *v* is projected
onto the plane tangent to the celestial sphere at the tangent point
(a0, b0) / *v0*, giving rectangular coordinates (xi, eta) in radians.

- ``tpxes``/``tpxev``: star and tangent point to (xi, eta)
- ``tpsts``/``tpstv``: (xi, eta) and tangent point to star
- ``tpors``/``tporv``: (xi, eta) and star to tangent point (0, 1 or 2
  solutions)
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.vector_matrix import anp

# Star vector length limit for the dubious cases of tpxes/tpxev
_TINY = 1e-6


def _projection_status(d: Array) -> tuple[Array, Array]:
    """Clamp the reciprocal star vector length and classify it.

    Returns:
        Tuple of (d, status): 0 OK, 1 star too far from axis, 2 antistar on
        tangent plane, 3 antistar too far from axis.
    """
    status = jnp.where(d > _TINY, 0, jnp.where(d >= 0.0, 1, jnp.where(d > -_TINY, 2, 3)))
    d = jnp.where(status == 1, _TINY, jnp.where(status == 2, -_TINY, d))
    return d, status.astype(jnp.int32)


def tpxes(a: ArrayLike, b: ArrayLike, a0: ArrayLike, b0: ArrayLike) -> tuple[Array, Array, Array]:
    """In the tangent plane projection, given celestial spherical
    coordinates for a star and the tangent point, solve for the star's
    rectangular coordinates in the tangent plane.

    Args:
        a: Star's spherical longitude (radians).
        b: Star's spherical latitude (radians).
        a0: Tangent point's spherical longitude (radians).
        b0: Tangent point's spherical latitude (radians).

    Returns:
        Tuple of (xi, eta, status). The coordinates are returned even in
        the dubious cases (status 1 to 3).
    """
    sb0 = jnp.sin(b0)
    sb = jnp.sin(b)
    cb0 = jnp.cos(b0)
    cb = jnp.cos(b)
    da = jnp.asarray(a) - a0
    sda = jnp.sin(da)
    cda = jnp.cos(da)

    d, status = _projection_status(sb * sb0 + cb * cb0 * cda)

    xi = cb * sda / d
    eta = (sb * cb0 - cb * sb0 * cda) / d
    return xi, eta, status


def tpxev(v: ArrayLike, v0: ArrayLike) -> tuple[Array, Array, Array]:
    """In the tangent plane projection, given celestial direction cosines
    for a star and the tangent point, solve for the star's rectangular
    coordinates in the tangent plane.

    Args:
        v: Direction cosines of star.
        v0: Direction cosines of tangent point.

    Returns:
        Tuple of (xi, eta, status), as :func:`tpxes`.
    """
    x, y, z = jnp.asarray(v)
    x0, y0, z0 = jnp.asarray(v0)

    # Polar case
    r2 = x0 * x0 + y0 * y0
    r = jnp.sqrt(r2)
    polar = r == 0.0
    r = jnp.where(polar, 1e-20, r)
    x0 = jnp.where(polar, r, x0)

    w = x * x0 + y * y0
    d, status = _projection_status(w + z * z0)

    d = d * r
    xi = (y * x0 - x * y0) / d
    eta = (z * r2 - z0 * w) / d
    return xi, eta, status


def tpsts(xi: ArrayLike, eta: ArrayLike, a0: ArrayLike, b0: ArrayLike) -> tuple[Array, Array]:
    """In the tangent plane projection, given the star's rectangular
    coordinates and the spherical coordinates of the tangent point, solve
    for the spherical coordinates of the star.

    Returns:
        Tuple of (a, b): star's spherical coordinates (radians).
    """
    sb0 = jnp.sin(b0)
    cb0 = jnp.cos(b0)
    d = cb0 - eta * sb0
    a = anp(jnp.arctan2(xi, d) + a0)
    b = jnp.arctan2(sb0 + eta * cb0, jnp.sqrt(xi * xi + d * d))
    return a, b


def tpstv(xi: ArrayLike, eta: ArrayLike, v0: ArrayLike) -> Array:
    """In the tangent plane projection, given the star's rectangular
    coordinates and the direction cosines of the tangent point, solve for
    the direction cosines of the star.

    Returns:
        Direction cosines of the star (unit vector).
    """
    x, y, z = jnp.asarray(v0)

    # Polar case
    r = jnp.sqrt(x * x + y * y)
    polar = r == 0.0
    r = jnp.where(polar, 1e-20, r)
    x = jnp.where(polar, r, x)

    # Star vector length to tangent plane
    f = jnp.sqrt(1.0 + xi * xi + eta * eta)

    return jnp.stack([
        (x - (xi * y + eta * x * z) / r) / f,
        (y + (xi * x - eta * y * z) / r) / f,
        (z + eta * r) / f,
    ])


def tpors(
    xi: ArrayLike, eta: ArrayLike, a: ArrayLike, b: ArrayLike
) -> tuple[Array, Array, Array, Array, Array]:
    """In the tangent plane projection, given the rectangular coordinates
    of a star and its spherical coordinates, determine the spherical
    coordinates of the tangent point.

    Args:
        xi: Rectangular coordinates of star image (radians).
        eta: Rectangular coordinates of star image (radians).
        a: Star's spherical longitude (radians).
        b: Star's spherical latitude (radians).

    Returns:
        Tuple of (a01, b01, a02, b02, n): the two possible tangent points
        and the number of solutions (0, 1 or 2). With one solution only the
        first is meaningful; with none both are zero.
    """
    xi = jnp.asarray(xi)
    xi2 = xi * xi
    r = jnp.sqrt(1.0 + xi2 + eta * eta)
    sb = jnp.sin(b)
    cb = jnp.cos(b)
    rsb = r * sb
    rcb = r * cb
    w2 = rcb * rcb - xi2
    ok = w2 >= 0.0

    w = jnp.sqrt(jnp.where(ok, w2, 0.0))
    s = rsb - eta * w
    c = rsb * eta + w
    w = jnp.where((xi == 0.0) & (w == 0.0), 1.0, w)
    a01 = anp(a - jnp.arctan2(xi, w))
    b01 = jnp.arctan2(s, c)

    w = -w
    s = rsb - eta * w
    c = rsb * eta + w
    a02 = anp(a - jnp.arctan2(xi, w))
    b02 = jnp.arctan2(s, c)

    n = jnp.where(ok, jnp.where(jnp.abs(rsb) < 1.0, 1, 2), 0).astype(jnp.int32)
    return (
        jnp.where(ok, a01, 0.0),
        jnp.where(ok, b01, 0.0),
        jnp.where(ok, a02, 0.0),
        jnp.where(ok, b02, 0.0),
        n,
    )


def tporv(xi: ArrayLike, eta: ArrayLike, v: ArrayLike) -> tuple[Array, Array, Array]:
    """In the tangent plane projection, given the rectangular coordinates
    of a star and its direction cosines, determine the direction cosines of
    the tangent point.

    Returns:
        Tuple of (v01, v02, n): the two possible tangent-point vectors and
        the number of solutions (0, 1 or 2), as :func:`tpors`.
    """
    x, y, z = jnp.asarray(v)
    xi = jnp.asarray(xi)
    rxy2 = x * x + y * y
    xi2 = xi * xi
    eta2p1 = eta * eta + 1.0
    r = jnp.sqrt(xi2 + eta2p1)
    rsb = r * z
    rcb = r * jnp.sqrt(rxy2)
    w2 = rcb * rcb - xi2
    ok = w2 > 0.0

    w = jnp.sqrt(jnp.where(ok, w2, 1.0))
    den = eta2p1 * jnp.sqrt(jnp.where(ok, rxy2 * (w2 + xi2), 1.0))

    def _solution(w):
        c = (rsb * eta + w) / den
        return jnp.stack([c * (x * w + y * xi), c * (y * w - x * xi), (rsb - eta * w) / eta2p1])

    n = jnp.where(ok, jnp.where(jnp.abs(rsb) < 1.0, 1, 2), 0).astype(jnp.int32)
    v01 = jnp.where(ok, _solution(w), 0.0)
    v02 = jnp.where(ok, _solution(-w), 0.0)
    return v01, v02, n
