"""Geocentric and geodetic coordinates on a reference ellipsoid.

The ellipsoid is chosen either by identifier (:data:`~sofajax.constants.WGS84`,
:data:`~sofajax.constants.GRS80`, :data:`~sofajax.constants.WGS72`) or by
explicit equatorial radius *a* (metres) and flattening *f*.  Unknown
identifiers and illegal ellipsoids are reported through the status, with
the outputs set to the SOFA sentinels (-1e9 for the geodetic routines,
zeros for the geocentric ones).
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.config import get_dtype
from sofajax.constants import DPI, GRS80, WGS72, WGS84

# fmt: off
# Identifier, equatorial radius (m), flattening
_ELLIPSOIDS = (
    (WGS84, 6378137.0, 1.0 / 298.257223563),
    (GRS80, 6378137.0, 1.0 / 298.257222101),
    (WGS72, 6378135.0, 1.0 / 298.26),
)
# fmt: on


def eform(n: ArrayLike) -> tuple[Array, Array, Array]:
    """Earth reference ellipsoids.

    Args:
        n: Ellipsoid identifier: 1 = WGS84, 2 = GRS80, 3 = WGS72.

    Returns:
        Tuple of (a, f, status): equatorial radius in metres, flattening
        and status (0 OK, -1 illegal identifier, with ``a = f = 0``).

    Examples:
        >>> a, f, j = eform(1)
        >>> float(a), int(j)
        (6378137.0, 0)
    """
    n = jnp.asarray(n)
    dtype = get_dtype()
    a = jnp.zeros((), dtype=dtype)
    f = jnp.zeros((), dtype=dtype)
    for ident, radius, flattening in _ELLIPSOIDS:
        a = jnp.where(n == ident, radius, a)
        f = jnp.where(n == ident, flattening, f)
    known = (n == WGS84) | (n == GRS80) | (n == WGS72)
    return a, f, jnp.where(known, 0, -1).astype(jnp.int32)


def gc2gde(a: ArrayLike, f: ArrayLike, xyz: ArrayLike) -> tuple[Array, Array, Array, Array]:
    """Transform geocentric coordinates to geodetic for a reference
    ellipsoid of specified form.

    Uses the closed-form Fukushima (2006) method: one Newton step followed
    by one Halley correction, accurate to a few nanometres.

    Args:
        a: Equatorial radius (metres).
        f: Flattening.
        xyz: Geocentric vector (metres).

    Returns:
        Tuple of (elong, phi, height, status): longitude and geodetic
        latitude (radians), height above ellipsoid (metres) and status
        (0 OK, -1 illegal f, -2 illegal a).
    """
    dtype = get_dtype()
    a = jnp.asarray(a, dtype=dtype)
    f = jnp.asarray(f, dtype=dtype)
    x, y, z = jnp.asarray(xyz, dtype=dtype)

    # Functions of ellipsoid parameters (with further validation of f)
    aeps2 = a * a * 1e-32
    e2 = (2.0 - f) * f
    e4t = e2 * e2 * 1.5
    ec2 = 1.0 - e2
    ec = jnp.sqrt(jnp.where(ec2 > 0.0, ec2, 1.0))
    b = a * ec

    status = jnp.where(
        (f < 0.0) | (f >= 1.0), -1, jnp.where(a <= 0.0, -2, jnp.where(ec2 <= 0.0, -1, 0))
    ).astype(jnp.int32)

    # Distance from polar axis squared, longitude
    p2 = x * x + y * y
    elong = jnp.where(p2 > 0.0, jnp.arctan2(y, x), 0.0)
    absz = jnp.abs(z)

    # Normalisation
    p = jnp.sqrt(p2)
    a_safe = jnp.where(a > 0.0, a, 1.0)
    s0 = absz / a_safe
    pn = p / a_safe
    zc = ec * s0

    # Prepare Newton correction factors
    c0 = ec * pn
    c02 = c0 * c0
    c03 = c02 * c0
    s02 = s0 * s0
    s03 = s02 * s0
    a02 = c02 + s02
    a0 = jnp.sqrt(a02)
    a03 = a02 * a0
    d0 = zc * a03 + e2 * s03
    f0 = pn * a03 - e2 * c03

    # Prepare Halley correction factor
    b0 = e4t * s02 * c02 * pn * (a0 - ec)
    s1 = d0 * f0 - b0 * s0
    cc = ec * (f0 * f0 - b0 * c0)

    # Evaluate latitude and height, unless on the polar axis
    polar = p2 <= aeps2
    s12 = s1 * s1
    cc2 = cc * cc
    den = jnp.where(polar, 1.0, jnp.sqrt(s12 + cc2))
    phi = jnp.where(polar, DPI / 2.0, jnp.arctan2(s1, cc))
    height = jnp.where(
        polar, absz - b, (p * cc + absz * s1 - a * jnp.sqrt(ec2 * s12 + cc2)) / den
    )

    # Restore sign of latitude
    phi = jnp.where(z < 0.0, -phi, phi)

    bad = status != 0
    return (
        jnp.where(bad, -1e9, elong),
        jnp.where(bad, -1e9, phi),
        jnp.where(bad, -1e9, height),
        status,
    )


def gc2gd(n: ArrayLike, xyz: ArrayLike) -> tuple[Array, Array, Array, Array]:
    """Transform geocentric coordinates to geodetic using the specified
    reference ellipsoid.

    Args:
        n: Ellipsoid identifier (see :func:`eform`).
        xyz: Geocentric vector (metres).

    Returns:
        Tuple of (elong, phi, height, status). Status: 0 OK, -1 illegal
        identifier, -2 internal error.
    """
    a, f, j = eform(n)
    elong, phi, height, k = gc2gde(a, f, xyz)
    status = jnp.where(j < 0, j, jnp.where(k < 0, -2, 0)).astype(jnp.int32)
    bad = status != 0
    return (
        jnp.where(bad, -1e9, elong),
        jnp.where(bad, -1e9, phi),
        jnp.where(bad, -1e9, height),
        status,
    )


def gd2gce(
    a: ArrayLike, f: ArrayLike, elong: ArrayLike, phi: ArrayLike, height: ArrayLike
) -> tuple[Array, Array]:
    """Transform geodetic coordinates to geocentric for a reference
    ellipsoid of specified form.

    Args:
        a: Equatorial radius (metres).
        f: Flattening.
        elong: Longitude (radians, east +ve).
        phi: Geodetic latitude (radians).
        height: Height above ellipsoid (metres).

    Returns:
        Tuple of (xyz, status): geocentric vector (metres) and status
        (0 OK, -1 illegal case).
    """
    sp = jnp.sin(phi)
    cp = jnp.cos(phi)
    w = (1.0 - f) * (1.0 - f)
    d = cp * cp + w * sp * sp
    ok = d > 0.0
    ac = a / jnp.sqrt(jnp.where(ok, d, 1.0))
    as_ = w * ac

    r = (ac + height) * cp
    xyz = jnp.array([r * jnp.cos(elong), r * jnp.sin(elong), (as_ + height) * sp])
    return jnp.where(ok, xyz, 0.0), jnp.where(ok, 0, -1).astype(jnp.int32)


def gd2gc(
    n: ArrayLike, elong: ArrayLike, phi: ArrayLike, height: ArrayLike
) -> tuple[Array, Array]:
    """Transform geodetic coordinates to geocentric using the specified
    reference ellipsoid.

    Args:
        n: Ellipsoid identifier (see :func:`eform`).
        elong: Longitude (radians, east +ve).
        phi: Latitude (geodetic, radians).
        height: Height above ellipsoid (geodetic, metres).

    Returns:
        Tuple of (xyz, status). Status: 0 OK, -1 illegal identifier,
        -2 illegal case.

    Examples:
        >>> xyz, j = gd2gc(1, 3.1, -0.5, 2500.0)
        >>> int(j)
        0
    """
    a, f, j = eform(n)
    xyz, k = gd2gce(a, f, elong, phi, height)
    status = jnp.where(j < 0, j, jnp.where(k < 0, -2, 0)).astype(jnp.int32)
    return jnp.where(status != 0, 0.0, xyz), status
