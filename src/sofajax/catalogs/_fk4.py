"""FK4 (B1950.0) to and from FK5 (J2000.0) conversions.

These follow the Standish (1982) method as given in the Explanatory
Supplement (Seidelmann 1992, section 3.591), including the E-terms of
aberration.  FK4 proper motions are per tropical century internally and
per tropical year in the interface; the FK5 ones are per Julian year.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.calendars import epb2jd, epj
from sofajax.config import get_dtype
from sofajax.constants import DR2AS
from sofajax.vector_matrix import anp, c2s, pdp, pm, pmp, ppp, ppsp, pv2s, pvmpv, pvppv, pvu, s2c, s2pv, sxp

# Radians per year to arcsec per century
_PMF = 100.0 * DR2AS

# Small number to avoid arithmetic problems
_TINY = 1e-30

# Km per sec to au per tropical century, 86400 * 36524.2198782 / 149597870.7
_VF = 21.095

# fmt: off
# E-terms: constant pv-vector, vectors A and Adot (Seidelmann 3.591-2)
_A = (
    (-1.62557e-6, -0.31919e-6, -0.13843e-6),
    (+1.245e-3,   -1.580e-3,   -0.659e-3),
)

# FK4 to FK5, 3x2 matrix of pv-vectors (Seidelmann 3.591-4, matrix M)
_EM = (
    (
        ((+0.9999256782,     -0.0111820611,     -0.0048579477),
         (+0.00000242395018, -0.00000002710663, -0.00000001177656)),
        ((+0.0111820610,     +0.9999374784,     -0.0000271765),
         (+0.00000002710663, +0.00000242397878, -0.00000000006587)),
        ((+0.0048579479,     -0.0000271474,     +0.9999881997),
         (+0.00000001177656, -0.00000000006582, +0.00000242410173)),
    ),
    (
        ((-0.000551,         -0.238565,         +0.435739),
         (+0.99994704,       -0.01118251,       -0.00485767)),
        ((+0.238514,         -0.002667,         -0.008541),
         (+0.01118251,       +0.99995883,       -0.00002718)),
        ((-0.435623,         +0.012254,         +0.002117),
         (+0.00485767,       -0.00002714,       +1.00000956)),
    ),
)

# FK5 to FK4, matrix M^-1 (Seidelmann 3.592-1)
_EM_INV = (
    (
        ((+0.9999256795,     +0.0111814828,     +0.0048590039),
         (-0.00000242389840, -0.00000002710544, -0.00000001177742)),
        ((-0.0111814828,     +0.9999374849,     -0.0000271771),
         (+0.00000002710544, -0.00000242392702, +0.00000000006585)),
        ((-0.0048590040,     -0.0000271557,     +0.9999881946),
         (+0.00000001177742, +0.00000000006585, -0.00000242404995)),
    ),
    (
        ((-0.000551,         +0.238509,         -0.435614),
         (+0.99990432,       +0.01118145,       +0.00485852)),
        ((-0.238560,         -0.002667,         +0.012254),
         (-0.01118145,       +0.99991613,       -0.00002717)),
        ((+0.435730,         -0.008541,         +0.002117),
         (-0.00485852,       -0.00002716,       +0.99996684)),
    ),
)
# fmt: on


def _to_catalog(pv: Array, px: Array, rv: Array, pxvf: Array):
    r, d, w, ur, ud, rd = pv2s(pv)
    ok = px > _TINY
    rv = jnp.where(ok, rd / jnp.where(ok, pxvf, 1.0), rv)
    px = jnp.where(ok, px / w, px)
    return anp(r), d, ur / _PMF, ud / _PMF, px, rv


def fk425(
    r1950: ArrayLike,
    d1950: ArrayLike,
    dr1950: ArrayLike,
    dd1950: ArrayLike,
    p1950: ArrayLike,
    v1950: ArrayLike,
) -> tuple[Array, Array, Array, Array, Array, Array]:
    """Convert B1950.0 FK4 star catalog data to J2000.0 FK5.

    Args:
        r1950: B1950.0 RA (radians).
        d1950: B1950.0 Dec (radians).
        dr1950: RA proper motion (radians/tropical year).
        dd1950: Dec proper motion (radians/tropical year).
        p1950: Parallax (arcsec).
        v1950: Radial velocity (km/s, positive = receding).

    Returns:
        Tuple of (r2000, d2000, dr2000, dd2000, p2000, v2000), with proper
        motions per Julian year.
    """
    a = jnp.array(_A, dtype=get_dtype())
    em = jnp.array(_EM, dtype=get_dtype())
    px = jnp.asarray(p1950, dtype=get_dtype())
    rv = jnp.asarray(v1950, dtype=get_dtype())

    # FK4 data as a pv-vector
    pxvf = px * _VF
    r0 = s2pv(r1950, d1950, 1.0, dr1950 * _PMF, dd1950 * _PMF, rv * pxvf)

    # Allow for E-terms
    pv1 = pvmpv(r0, a)
    pv2 = jnp.stack([sxp(pdp(r0[0], a[0]), r0[0]), sxp(pdp(r0[0], a[1]), r0[0])])
    pv1 = pvppv(pv1, pv2)

    # Convert to the Fricke system
    pv2 = jnp.einsum("ijkl,kl->ij", em, pv1)

    return _to_catalog(pv2, px, rv, pxvf)


def fk524(
    r2000: ArrayLike,
    d2000: ArrayLike,
    dr2000: ArrayLike,
    dd2000: ArrayLike,
    p2000: ArrayLike,
    v2000: ArrayLike,
) -> tuple[Array, Array, Array, Array, Array, Array]:
    """Convert J2000.0 FK5 star catalog data to B1950.0 FK4.

    Args:
        r2000: J2000.0 RA (radians).
        d2000: J2000.0 Dec (radians).
        dr2000: RA proper motion (radians/Julian year).
        dd2000: Dec proper motion (radians/Julian year).
        p2000: Parallax (arcsec).
        v2000: Radial velocity (km/s, positive = receding).

    Returns:
        Tuple of (r1950, d1950, dr1950, dd1950, p1950, v1950), with proper
        motions per tropical year.
    """
    a = jnp.array(_A, dtype=get_dtype())
    em = jnp.array(_EM_INV, dtype=get_dtype())
    px = jnp.asarray(p2000, dtype=get_dtype())
    rv = jnp.asarray(v2000, dtype=get_dtype())

    pxvf = px * _VF
    r0 = s2pv(r2000, d2000, 1.0, dr2000 * _PMF, dd2000 * _PMF, rv * pxvf)

    # Convert to the Bessel-Newcomb system
    r1 = jnp.einsum("ijkl,kl->ij", em, r0)

    # Apply E-terms, one iteration of Seidelmann 3.592-3
    def _eterm(w):
        return ppp(r1[0], pmp(sxp(w, a[0]), sxp(pdp(r1[0], a[0]), r1[0])))

    w = pm(_eterm(pm(r1[0])))
    p = _eterm(w)
    v = ppp(r1[1], pmp(sxp(w, a[1]), sxp(pdp(r1[0], a[1]), p)))

    return _to_catalog(jnp.stack([p, v]), px, rv, pxvf)


def fk45z(r1950: ArrayLike, d1950: ArrayLike, bepoch: ArrayLike) -> tuple[Array, Array]:
    """Convert a B1950.0 FK4 star position to J2000.0 FK5, assuming zero
    proper motion in the FK5 system.

    The FK4 position is referred to the Besselian epoch *bepoch*; fictitious
    proper motion is applied to bring it to J2000.0.

    Args:
        r1950: B1950.0 FK4 RA at epoch (radians).
        d1950: B1950.0 FK4 Dec at epoch (radians).
        bepoch: Besselian epoch (e.g. 1979.3).

    Returns:
        Tuple of (r2000, d2000): J2000.0 FK5 RA and Dec (radians).
    """
    a = jnp.array(_A, dtype=get_dtype())
    em = jnp.array(_EM, dtype=get_dtype())[:, :, 0, :]

    r0 = s2c(r1950, d1950)

    # Adjust A to give zero proper motion in FK5
    p = ppsp(a[0], (bepoch - 1950.0) / _PMF, a[1])

    # Remove E-terms
    p = pmp(r0, ppsp(p, -pdp(r0, p), r0))

    # Fricke system pv-vector
    pv = jnp.einsum("ijk,k->ij", em, p)

    # Allow for fictitious proper motion
    djm0, djm = epb2jd(bepoch)
    pv = pvu((epj(djm0, djm) - 2000.0) / _PMF, pv)

    w, d2000 = c2s(pv[0])
    return anp(w), d2000


def fk54z(r2000: ArrayLike, d2000: ArrayLike, bepoch: ArrayLike) -> tuple[Array, Array, Array, Array]:
    """Convert a J2000.0 FK5 star position to B1950.0 FK4, assuming zero
    proper motion in FK5 and parallax.

    Args:
        r2000: J2000.0 FK5 RA (radians).
        d2000: J2000.0 FK5 Dec (radians).
        bepoch: Besselian epoch (e.g. 1950.0).

    Returns:
        Tuple of (r1950, d1950, dr1950, dd1950): B1950.0 FK4 position at
        *bepoch* and the fictitious proper motion (radians/tropical year).
    """
    r, d, pr, pd, _, _ = fk524(r2000, d2000, 0.0, 0.0, 0.0, 0.0)

    p = s2c(r, d)
    v = jnp.stack([
        -pr * p[1] - pd * jnp.cos(r) * jnp.sin(d),
        pr * p[0] - pd * jnp.sin(r) * jnp.sin(d),
        pd * jnp.cos(d),
    ])

    # Apply the motion
    p = p + (jnp.asarray(bepoch) - 1950.0) * v

    w, d1950 = c2s(p)
    return anp(w), d1950, pr, pd
