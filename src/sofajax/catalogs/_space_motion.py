"""Star catalog coordinates and space motion.

Catalog data are (ra, dec, pmr, pmd, px, rv): RA and Dec in radians, proper
motions in radians per Julian year (RA rate is dRA/dt, not cos(Dec) dRA/dt),
parallax in arcseconds and radial velocity in km/s (positive receding).
Space motion pv-vectors are in au and au/day.

The conversions include the special-relativity Doppler correction that
relates the observed (light-time affected) quantities to the inertial ones.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.constants import DAU, DAYSEC, DC, DJY, DR2AS
from sofajax.vector_matrix import anp, pdp, pm, pmp, pn, ppp, pv2s, pvu, s2pv, seps, sxp

# Smallest allowed parallax (arcsec)
_PXMIN = 1e-7

# Largest allowed speed (fraction of c)
_VMAX = 0.5

# Maximum number of iterations for the relativistic solution
_IMAX = 100


def _doppler(betsr: Array, betst: Array) -> tuple[Array, Array, Array]:
    """Iterate the inertial-to-observed correction terms.

    Stops when successive changes in both terms stop decreasing, or after
    ``_IMAX`` iterations.

    Returns:
        Tuple of (d, del, converged).
    """
    zero = jnp.zeros_like(betsr)

    def cond(state):
        i, *_, done = state
        return (~done) & (i < _IMAX)

    def body(state):
        i, _, _, od, odel, odd, oddel, betr, bett, _ = state
        d = 1.0 + betr
        w = betr * betr + bett * bett
        dl = -w / (jnp.sqrt(1.0 - w) + 1.0)
        betr = d * betsr + dl
        bett = d * betst
        dd = jnp.abs(d - od)
        ddel = jnp.abs(dl - odel)
        stop = (i > 1) & (dd >= odd) & (ddel >= oddel)
        odd = jnp.where(i > 0, dd, odd)
        oddel = jnp.where(i > 0, ddel, oddel)
        i = jnp.where(stop, i, i + 1)
        return (i, d, dl, d, dl, odd, oddel, betr, bett, stop)

    init = (jnp.int32(0), zero, zero, zero, zero, zero, zero, betsr, betst, jnp.bool_(False))
    i, d, dl, *_ = jax.lax.while_loop(cond, body, init)
    return d, dl, i < _IMAX


def starpv(
    ra: ArrayLike,
    dec: ArrayLike,
    pmr: ArrayLike,
    pmd: ArrayLike,
    px: ArrayLike,
    rv: ArrayLike,
) -> tuple[Array, Array]:
    """Convert star catalog coordinates to position+velocity vector.

    Args:
        ra: Right ascension (radians).
        dec: Declination (radians).
        pmr: RA proper motion (radians/year).
        pmd: Dec proper motion (radians/year).
        px: Parallax (arcsec).
        rv: Radial velocity (km/s, positive = receding).

    Returns:
        Tuple of (pv, status). *pv* is the pv-vector (au, au/day). *status*
        is a sum of flags: 1 distance overridden (parallax below 1e-7
        arcsec), 2 excessive speed (velocity set to zero), 4 iteration did
        not converge.
    """
    px = jnp.asarray(px)
    small = px < _PXMIN
    w = jnp.where(small, _PXMIN, px)
    iwarn = jnp.where(small, 1, 0).astype(jnp.int32)

    # Distance (au), radial velocity (au/day) and proper motion (rad/day)
    r = DR2AS / w
    rd = DAYSEC * jnp.asarray(rv) * 1e3 / DAU
    rad = jnp.asarray(pmr) / DJY
    decd = jnp.asarray(pmd) / DJY

    pv = s2pv(ra, dec, r, rad, decd, rd)

    # Cap speed at VMAX by dropping the velocity
    fast = pm(pv[1]) / DC > _VMAX
    pv = pv.at[1].set(jnp.where(fast, 0.0, pv[1]))
    iwarn = iwarn + jnp.where(fast, 2, 0).astype(jnp.int32)

    # Radial and transverse components of the observed velocity
    _, pu = pn(pv[0])
    vsr = pdp(pu, pv[1])
    usr = sxp(vsr, pu)
    ust = pmp(pv[1], usr)
    vst = pm(ust)

    d, dl, converged = _doppler(vsr / DC, vst / DC)
    iwarn = iwarn + jnp.where(converged, 0, 4).astype(jnp.int32)

    # Scale observed into inertial velocity
    ut = sxp(d, ust)
    ur = sxp(DC * (d * (vsr / DC) + dl), pu)
    pv = pv.at[1].set(ppp(ur, ut))

    return pv, iwarn


def pvstar(pv: ArrayLike) -> tuple[Array, Array, Array, Array, Array, Array, Array]:
    """Convert star position+velocity vector to catalog coordinates.

    Args:
        pv: pv-vector (au, au/day).

    Returns:
        Tuple of (ra, dec, pmr, pmd, px, rv, status). *status* is 0 on
        success, -1 if the speed is superluminal, -2 if the position is null.
    """
    pv = jnp.asarray(pv)

    # Radial and transverse components of the inertial velocity
    _, x = pn(pv[0])
    vr = pdp(x, pv[1])
    ur = sxp(vr, x)
    ut = pmp(pv[1], ur)
    vt = pm(ut)

    bett = vt / DC
    betr = vr / DC

    # Inertial-to-observed correction terms
    d = 1.0 + betr
    w = betr * betr + bett * bett
    superluminal = (d == 0.0) | (w > 1.0)
    d = jnp.where(superluminal, 1.0, d)
    dl = -w / (jnp.sqrt(jnp.maximum(1.0 - w, 0.0)) + 1.0)

    ust = sxp(1.0 / d, ut)
    usr = sxp(DC * (betr - dl) / d, x)
    a, dec, r, rad, decd, rd = pv2s(jnp.stack([pv[0], ppp(usr, ust)]))

    null = r == 0.0
    status = jnp.where(superluminal, -1, jnp.where(null, -2, 0)).astype(jnp.int32)

    ra = anp(a)
    pmr = rad * DJY
    pmd = decd * DJY
    px = DR2AS / jnp.where(null, 1.0, r)
    rv = 1e-3 * rd * DAU / DAYSEC

    return ra, dec, pmr, pmd, px, rv, status


def starpm(
    ra1: ArrayLike,
    dec1: ArrayLike,
    pmr1: ArrayLike,
    pmd1: ArrayLike,
    px1: ArrayLike,
    rv1: ArrayLike,
    ep1a: ArrayLike,
    ep1b: ArrayLike,
    ep2a: ArrayLike,
    ep2b: ArrayLike,
) -> tuple[Array, Array, Array, Array, Array, Array, Array]:
    """Star proper motion: update star catalog data for space motion.

    The "before" and "after" epochs are TDB two-part Julian Dates. Light
    time is taken into account, so the star moves from its observed place
    at the first epoch to its observed place at the second.

    Args:
        ra1: Right ascension, before (radians).
        dec1: Declination, before (radians).
        pmr1: RA proper motion, before (radians/year).
        pmd1: Dec proper motion, before (radians/year).
        px1: Parallax, before (arcsec).
        rv1: Radial velocity, before (km/s).
        ep1a: "before" epoch, part A.
        ep1b: "before" epoch, part B.
        ep2a: "after" epoch, part A.
        ep2b: "after" epoch, part B.

    Returns:
        Tuple of (ra2, dec2, pmr2, pmd2, px2, rv2, status). *status* is the
        ``starpv`` flags on success and -1 if the "after" place could not be
        formed.
    """
    pv1, j1 = starpv(ra1, dec1, pmr1, pmd1, px1, rv1)

    # Light time when observed (days) and interval (days)
    tl1 = pm(pv1[0]) / DC
    dt = (jnp.asarray(ep2a) - ep1a) + (jnp.asarray(ep2b) - ep1b)

    # Geometric position at the "after" epoch
    pv = pvu(dt + tl1, pv1)

    # Observed light time at the "after" epoch
    r2 = pdp(pv[0], pv[0])
    rdv = pdp(pv[0], pv[1])
    v2 = pdp(pv[1], pv[1])
    c2mv2 = DC * DC - v2
    bad = c2mv2 <= 0.0
    c2mv2 = jnp.where(bad, 1.0, c2mv2)
    tl2 = (-rdv + jnp.sqrt(rdv * rdv + c2mv2 * r2)) / c2mv2

    pv2 = pvu(dt + (tl1 - tl2), pv1)
    ra2, dec2, pmr2, pmd2, px2, rv2, j2 = pvstar(pv2)

    status = jnp.where(bad | (j2 != 0), -1, j1).astype(jnp.int32)
    return ra2, dec2, pmr2, pmd2, px2, rv2, status


def pmsafe(
    ra1: ArrayLike,
    dec1: ArrayLike,
    pmr1: ArrayLike,
    pmd1: ArrayLike,
    px1: ArrayLike,
    rv1: ArrayLike,
    ep1a: ArrayLike,
    ep1b: ArrayLike,
    ep2a: ArrayLike,
    ep2b: ArrayLike,
) -> tuple[Array, Array, Array, Array, Array, Array, Array]:
    """Star proper motion with protection against zero or tiny parallax.

    As :func:`starpm`, but the parallax is raised where needed so that the
    transverse speed stays below about 1% of c. Status bit 1 is set when
    this happens.

    Returns:
        Tuple of (ra2, dec2, pmr2, pmd2, px2, rv2, status).
    """
    # Minimum allowed parallax (arcsec), factor for ~1% c transverse speed
    pxmin = 5e-7
    f = 326.0

    # Proper motion in one year (radians)
    pm1 = seps(ra1, dec1, jnp.asarray(ra1) + pmr1, jnp.asarray(dec1) + pmd1) * f

    px1 = jnp.asarray(px1)
    px1a = jnp.maximum(px1, pm1)
    px1a = jnp.maximum(px1a, pxmin)
    jpx = jnp.where(px1a != px1, 1, 0).astype(jnp.int32)

    ra2, dec2, pmr2, pmd2, px2, rv2, j = starpm(
        ra1, dec1, pmr1, pmd1, px1a, rv1, ep1a, ep1b, ep2a, ep2b
    )
    j = jnp.where((j >= 0) & (j % 2 == 0), j + jpx, j)
    return ra2, dec2, pmr2, pmd2, px2, rv2, j
