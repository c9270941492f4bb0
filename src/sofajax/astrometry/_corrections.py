"""Building blocks of the astrometry pipeline: proper motion and parallax,
light deflection and stellar aberration, applied to direction vectors.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.constants import AULT, DAS2R, DAU, DAYSEC, DJM, DJY, SRS
from sofajax.vector_matrix import pdp, pmp, pn, ppsp, pxp

from ._types import LdBody


def ab(pnat: ArrayLike, v: ArrayLike, s: ArrayLike, bm1: ArrayLike) -> Array:
    """Apply aberration to transform natural direction into proper
    direction.

    Args:
        pnat: Natural direction to the source (unit vector).
        v: Observer barycentric velocity in units of c.
        s: Distance between the Sun and the observer (au).
        bm1: sqrt(1-|v|^2), reciprocal of the Lorentz factor.

    Returns:
        Proper direction to the source (unit vector).
    """
    pnat = jnp.asarray(pnat)
    v = jnp.asarray(v)
    pdv = pdp(pnat, v)
    w1 = 1.0 + pdv / (1.0 + bm1)
    w2 = SRS / s
    p = pnat * bm1 + w1 * v + w2 * (v - pdv * pnat)
    return p / jnp.sqrt(jnp.sum(p * p))


def ld(
    bm: ArrayLike,
    p: ArrayLike,
    q: ArrayLike,
    e: ArrayLike,
    em: ArrayLike,
    dlim: ArrayLike,
) -> Array:
    """Apply light deflection by a solar-system body, as part of
    transforming coordinate direction into natural direction.

    Args:
        bm: Mass of the gravitating body (solar masses).
        p: Direction from observer to source (unit vector).
        q: Direction from body to source (unit vector).
        e: Direction from body to observer (unit vector).
        em: Distance from body to observer (au).
        dlim: Deflection limiter.

    Returns:
        Observer to deflected source (unit vector).
    """
    q = jnp.asarray(q)
    e = jnp.asarray(e)
    qdqpe = pdp(q, q + e)
    w = bm * SRS / em / jnp.maximum(qdqpe, dlim)
    return jnp.asarray(p) + w * pxp(p, pxp(e, q))


def ldsun(p: ArrayLike, e: ArrayLike, em: ArrayLike) -> Array:
    """Deflection of starlight by the Sun.

    Args:
        p: Direction from observer to star (unit vector).
        e: Direction from Sun to observer (unit vector).
        em: Distance from Sun to observer (au).

    Returns:
        Observer to deflected star (unit vector).
    """
    # Deflection limiter, smaller for distant observers
    em2 = jnp.maximum(jnp.asarray(em) * em, 1.0)
    dlim = 1e-6 / em2
    return ld(1.0, p, p, e, em, dlim)


def ldn(b: LdBody, ob: ArrayLike, sc: ArrayLike) -> Array:
    """For a star, apply light deflection by multiple solar-system bodies,
    as part of transforming coordinate direction into natural direction.

    Args:
        b: Bodies stacked with :meth:`LdBody.stack`.
        ob: Barycentric position of the observer (au).
        sc: Observer to star coordinate direction (unit vector).

    Returns:
        Observer to deflected star (unit vector).
    """
    # Light time for 1 au (days)
    cr = AULT / DAYSEC
    ob = jnp.asarray(ob)

    def body(i, sn):
        pv = b.pv[i]

        # Body to observer vector at epoch of observation (au)
        v = pmp(ob, pv[0])

        # Minus the time since the light passed the body, zero if the star
        # is "behind" the observer
        dt = jnp.minimum(pdp(sn, v) * cr, 0.0)

        # Backtrack the body to the time the light was passing it
        em, e = pn(ppsp(v, -dt, pv[1]))
        return ld(b.bm[i], sn, sn, e, em, b.dl[i])

    return jax.lax.fori_loop(0, b.bm.shape[0], body, jnp.asarray(sc))


def pmpx(
    rc: ArrayLike,
    dc: ArrayLike,
    pr: ArrayLike,
    pd: ArrayLike,
    px: ArrayLike,
    rv: ArrayLike,
    pmt: ArrayLike,
    pob: ArrayLike,
) -> Array:
    """Proper motion and parallax.

    Args:
        rc: ICRS RA at catalog epoch (radians).
        dc: ICRS Dec at catalog epoch (radians).
        pr: RA proper motion (radians/year).
        pd: Dec proper motion (radians/year).
        px: Parallax (arcsec).
        rv: Radial velocity (km/s, +ve if receding).
        pmt: Proper motion time interval (SSB, Julian years).
        pob: SSB to observer vector (au).

    Returns:
        Coordinate direction (BCRS unit vector).
    """
    # Km/s to au/year, light time for 1 au (Julian years)
    vf = DAYSEC * DJM / DAU
    aulty = AULT / DAYSEC / DJY

    pob = jnp.asarray(pob)
    sr = jnp.sin(rc)
    cr = jnp.cos(rc)
    sd = jnp.sin(dc)
    cd = jnp.cos(dc)
    x = cr * cd
    y = sr * cd
    z = sd
    p = jnp.stack([x, y, z])

    # Proper motion time interval (y) including Roemer effect
    dt = pmt + pdp(p, pob) * aulty

    # Space motion (radians per year)
    pxr = px * DAS2R
    w = vf * rv * pxr
    pdz = pd * z
    pm = jnp.stack([
        -pr * y - pdz * cr + w * x,
        pr * x - pdz * sr + w * y,
        pd * cd + w * z,
    ])

    _, u = pn(p + dt * pm - pxr * pob)
    return u
