"""Horizon coordinates for an observer at geodetic latitude *phi*.

Azimuth is measured from north through east; hour angle is positive
westwards.  All angles are in radians.  Refraction and the slight offset
between geodetic and astronomical latitude are ignored.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.constants import D2PI


def hd2ae(ha: ArrayLike, dec: ArrayLike, phi: ArrayLike) -> tuple[Array, Array]:
    """Equatorial to horizon coordinates: transform hour angle and
    declination to azimuth and altitude.

    Args:
        ha: Hour angle (local).
        dec: Declination.
        phi: Site latitude.

    Returns:
        Tuple of (az, el): azimuth in the range 0 to 2pi and altitude
        (informally, elevation).
    """
    sh = jnp.sin(ha)
    ch = jnp.cos(ha)
    sd = jnp.sin(dec)
    cd = jnp.cos(dec)
    sp = jnp.sin(phi)
    cp = jnp.cos(phi)

    # Az,Alt unit vector
    x = -ch * cd * sp + sd * cp
    y = -sh * cd
    z = ch * cd * cp + sd * sp

    r = jnp.sqrt(x * x + y * y)
    a = jnp.where(r != 0.0, jnp.arctan2(y, x), 0.0)
    az = jnp.where(a < 0.0, a + D2PI, a)
    el = jnp.arctan2(z, r)
    return az, el


def ae2hd(az: ArrayLike, el: ArrayLike, phi: ArrayLike) -> tuple[Array, Array]:
    """Horizon to equatorial coordinates: transform azimuth and altitude
    to hour angle and declination.

    Args:
        az: Azimuth.
        el: Altitude (informally, elevation).
        phi: Site latitude.

    Returns:
        Tuple of (ha, dec): hour angle (local) in the range -pi to +pi and
        declination.
    """
    sa = jnp.sin(az)
    ca = jnp.cos(az)
    se = jnp.sin(el)
    ce = jnp.cos(el)
    sp = jnp.sin(phi)
    cp = jnp.cos(phi)

    # HA,Dec unit vector
    x = -ca * ce * sp + se * cp
    y = -sa * ce
    z = ca * ce * cp + se * sp

    r = jnp.sqrt(x * x + y * y)
    ha = jnp.where(r != 0.0, jnp.arctan2(y, x), 0.0)
    dec = jnp.arctan2(z, r)
    return ha, dec


def hd2pa(ha: ArrayLike, dec: ArrayLike, phi: ArrayLike) -> Array:
    """Parallactic angle for a given hour angle and declination.

    The parallactic angle is the angle between the direction to the zenith
    and the direction to the north celestial pole, measured at the object.
    It is positive when the object is west of the meridian.

    Args:
        ha: Hour angle.
        dec: Declination.
        phi: Site latitude.

    Returns:
        Parallactic angle in radians.
    """
    cp = jnp.cos(phi)
    sqsz = cp * jnp.sin(ha)
    cqsz = jnp.sin(phi) * jnp.cos(dec) - cp * jnp.sin(dec) * jnp.cos(ha)
    return jnp.where((sqsz != 0.0) | (cqsz != 0.0), jnp.arctan2(sqsz, cqsz), 0.0)
