"""Rotation matrices and matrix-vector products.

SOFA convention: a rotation of angle ``phi`` about an axis rotates the
*coordinate frame* anticlockwise as seen looking towards the origin from a
point on the positive axis.  The elementary matrices are therefore::

    Rx(phi) = [[1,    0,     0  ],
               [0,  cos,  +sin  ],
               [0, -sin,   cos  ]]

and likewise for y and z.  The SOFA routines ``rx``, ``ry`` and ``rz``
apply such a rotation to an existing matrix, i.e. return ``Rx(phi) @ r``.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.config import get_dtype


# ---------------------------------------------------------------------------
# Elementary rotation matrices
# ---------------------------------------------------------------------------


def Rx(angle: ArrayLike) -> Array:
    """Elementary rotation matrix about the x-axis.

    Args:
        angle: Rotation angle (radians).

    Returns:
        3x3 rotation matrix.
    """
    c = jnp.cos(angle)
    s = jnp.sin(angle)
    one = jnp.ones_like(c)
    zero = jnp.zeros_like(c)
    return jnp.array([[one, zero, zero],
                      [zero,  +c,   +s],
                      [zero,  -s,   +c]])


def Ry(angle: ArrayLike) -> Array:
    """Elementary rotation matrix about the y-axis.

    Args:
        angle: Rotation angle (radians).

    Returns:
        3x3 rotation matrix.
    """
    c = jnp.cos(angle)
    s = jnp.sin(angle)
    one = jnp.ones_like(c)
    zero = jnp.zeros_like(c)
    return jnp.array([[  +c, zero,   -s],
                      [zero,  one, zero],
                      [  +s, zero,   +c]])


def Rz(angle: ArrayLike) -> Array:
    """Elementary rotation matrix about the z-axis.

    Args:
        angle: Rotation angle (radians).

    Returns:
        3x3 rotation matrix.
    """
    c = jnp.cos(angle)
    s = jnp.sin(angle)
    one = jnp.ones_like(c)
    zero = jnp.zeros_like(c)
    return jnp.array([[  +c,   +s, zero],
                      [  -s,   +c, zero],
                      [zero, zero,  one]])


# ---------------------------------------------------------------------------
# Initialisation
# ---------------------------------------------------------------------------


def ir() -> Array:
    """Identity r-matrix."""
    return jnp.eye(3, dtype=get_dtype())


def zr() -> Array:
    """Null r-matrix."""
    return jnp.zeros((3, 3), dtype=get_dtype())


def cr(r: ArrayLike) -> Array:
    """Copy an r-matrix."""
    return jnp.array(r)


# ---------------------------------------------------------------------------
# Rotating an existing matrix
# ---------------------------------------------------------------------------


def rx(phi: ArrayLike, r: ArrayLike) -> Array:
    """Rotate an r-matrix about the x-axis.

    Args:
        phi: Angle (radians).
        r: 3x3 matrix to be rotated.

    Returns:
        ``Rx(phi) @ r``.
    """
    return Rx(phi) @ jnp.asarray(r)


def ry(theta: ArrayLike, r: ArrayLike) -> Array:
    """Rotate an r-matrix about the y-axis.

    Args:
        theta: Angle (radians).
        r: 3x3 matrix to be rotated.

    Returns:
        ``Ry(theta) @ r``.
    """
    return Ry(theta) @ jnp.asarray(r)


def rz(psi: ArrayLike, r: ArrayLike) -> Array:
    """Rotate an r-matrix about the z-axis.

    Args:
        psi: Angle (radians).
        r: 3x3 matrix to be rotated.

    Returns:
        ``Rz(psi) @ r``.
    """
    return Rz(psi) @ jnp.asarray(r)


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


def rxr(a: ArrayLike, b: ArrayLike) -> Array:
    """Multiply two r-matrices, ``a @ b``."""
    return jnp.asarray(a) @ jnp.asarray(b)


def tr(r: ArrayLike) -> Array:
    """Transpose an r-matrix."""
    return jnp.asarray(r).T


def rxp(r: ArrayLike, p: ArrayLike) -> Array:
    """Multiply a p-vector by an r-matrix, ``r @ p``."""
    return jnp.asarray(r) @ jnp.asarray(p)


def trxp(r: ArrayLike, p: ArrayLike) -> Array:
    """Multiply a p-vector by the transpose of an r-matrix, ``r.T @ p``."""
    return jnp.asarray(r).T @ jnp.asarray(p)


def rxpv(r: ArrayLike, pv: ArrayLike) -> Array:
    """Multiply a pv-vector by an r-matrix.

    Args:
        r: 3x3 matrix.
        pv: Position-velocity vector, shape (2, 3).

    Returns:
        ``r`` applied to both the position and the velocity, shape (2, 3).
    """
    return jnp.asarray(pv) @ jnp.asarray(r).T


def trxpv(r: ArrayLike, pv: ArrayLike) -> Array:
    """Multiply a pv-vector by the transpose of an r-matrix.

    Args:
        r: 3x3 matrix.
        pv: Position-velocity vector, shape (2, 3).

    Returns:
        ``r.T`` applied to both the position and the velocity, shape (2, 3).
    """
    return jnp.asarray(pv) @ jnp.asarray(r)


# ---------------------------------------------------------------------------
# Rotation vectors
# ---------------------------------------------------------------------------


def rv2m(w: ArrayLike) -> Array:
    """Form the r-matrix corresponding to a given rotation vector.

    Args:
        w: Rotation vector. Its direction is the Euler axis and its
            magnitude the angle (radians).

    Returns:
        3x3 rotation matrix. A null vector gives the identity matrix.
    """
    w = jnp.asarray(w)
    phi = jnp.sqrt(jnp.sum(w * w))
    s = jnp.sin(phi)
    c = jnp.cos(phi)
    f = 1.0 - c
    safe_phi = jnp.where(phi > 0.0, phi, 1.0)
    x, y, z = w / safe_phi

    return jnp.array([
        [x * x * f + c, x * y * f + z * s, x * z * f - y * s],
        [y * x * f - z * s, y * y * f + c, y * z * f + x * s],
        [z * x * f + y * s, z * y * f - x * s, z * z * f + c],
    ])


def rm2v(r: ArrayLike) -> Array:
    """Express an r-matrix as a rotation vector.

    Args:
        r: 3x3 rotation matrix.

    Returns:
        Rotation vector. The angle is in the range 0 to pi; for an identity
        matrix the null vector is returned.
    """
    r = jnp.asarray(r)
    x = r[1, 2] - r[2, 1]
    y = r[2, 0] - r[0, 2]
    z = r[0, 1] - r[1, 0]
    s2 = jnp.sqrt(x * x + y * y + z * z)
    c2 = r[0, 0] + r[1, 1] + r[2, 2] - 1.0
    phi = jnp.arctan2(s2, c2)
    f = jnp.where(s2 > 0.0, phi / jnp.where(s2 > 0.0, s2, 1.0), 0.0)
    return jnp.array([x, y, z]) * f
