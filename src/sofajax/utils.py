"""Shared numerical helpers.

SOFA rounds halves away from zero, which differs from the banker's rounding
of :func:`jax.numpy.round`, so :func:`dnint` is written out explicitly.
"""

from jax import Array
import jax.numpy as jnp
from jax.typing import ArrayLike

from sofajax.config import get_dtype
from sofajax.constants import DJ00, DJC


def as_float(x: ArrayLike) -> Array:
    """Convert *x* to an array of the configured float dtype.

    Args:
        x (ArrayLike): Scalar or array input.

    Returns:
        Array of dtype :func:`~sofajax.config.get_dtype`.
    """
    return jnp.asarray(x, dtype=get_dtype())


def dnint(a: ArrayLike) -> Array:
    """Round to the nearest whole number, halves away from zero.

    Args:
        a (ArrayLike): Value to round.

    Returns:
        Whole-number valued array of the same dtype.
    """
    a = jnp.asarray(a)
    return jnp.where(a < 0.0, jnp.ceil(a - 0.5), jnp.floor(a + 0.5))


def julian_centuries(date1: ArrayLike, date2: ArrayLike) -> Array:
    """Julian centuries since J2000.0 for a two-part Julian Date.

    Args:
        date1 (ArrayLike): Julian Date (part 1).
        date2 (ArrayLike): Julian Date (part 2).

    Returns:
        ``((date1 - DJ00) + date2) / DJC`` in the configured float dtype.
    """
    return as_float(((jnp.asarray(date1) - DJ00) + jnp.asarray(date2)) / DJC)
