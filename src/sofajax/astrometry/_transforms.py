"""Quick astrometric transformations using a prepared :class:`Astrom`.

ICRS <-> CIRS routines chain proper motion and parallax, light deflection,
aberration and the bias-precession-nutation matrix.  CIRS <-> observed
routines apply Earth rotation, polar motion, diurnal aberration and
refraction.  The inverse (``atic*``) routines invert aberration and light
deflection by fixed-count iteration.
"""

from __future__ import annotations

from typing import Callable

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.vector_matrix import anp, c2s, rxp, s2c, trxp

from ._corrections import ab, ldn, ldsun, pmpx
from ._parameters import apio13
from ._types import Astrom, LdBody


def _unit(p: Array) -> Array:
    return p / jnp.sqrt(jnp.sum(p * p))


def _invert(target: Array, forward: Callable[[Array], Array], iterations: int) -> Array:
    """Find *p* with ``forward(p) == target`` by repeatedly removing the
    displacement that *forward* introduces."""
    d = jnp.zeros_like(target)
    result = target
    for _ in range(iterations):
        before = _unit(target - d)
        d = forward(before) - before
        result = _unit(target - d)
    return result


def _to_radec(p: Array) -> tuple[Array, Array]:
    w, d = c2s(p)
    return anp(w), d


# ---------------------------------------------------------------------------
# ICRS <-> CIRS
# ---------------------------------------------------------------------------


def atccq(
    rc: ArrayLike,
    dc: ArrayLike,
    pr: ArrayLike,
    pd: ArrayLike,
    px: ArrayLike,
    rv: ArrayLike,
    astrom: Astrom,
) -> tuple[Array, Array]:
    """Quick transformation of a star's ICRS catalog entry (epoch J2000.0)
    into ICRS astrometric place.

    Returns:
        Tuple of (ra, da): ICRS astrometric RA and Dec (radians).
    """
    return _to_radec(pmpx(rc, dc, pr, pd, px, rv, astrom.pmt, astrom.eb))


def atciq(
    rc: ArrayLike,
    dc: ArrayLike,
    pr: ArrayLike,
    pd: ArrayLike,
    px: ArrayLike,
    rv: ArrayLike,
    astrom: Astrom,
) -> tuple[Array, Array]:
    """Quick ICRS, epoch J2000.0, to CIRS transformation, given precomputed
    star-independent astrometry parameters.

    Only the Sun is taken into account in the light deflection.

    Args:
        rc: ICRS RA at J2000.0 (radians).
        dc: ICRS Dec at J2000.0 (radians).
        pr: RA proper motion (radians/year).
        pd: Dec proper motion (radians/year).
        px: Parallax (arcsec).
        rv: Radial velocity (km/s, +ve if receding).
        astrom: Star-independent astrometry parameters.

    Returns:
        Tuple of (ri, di): CIRS RA and Dec (radians).
    """
    pco = pmpx(rc, dc, pr, pd, px, rv, astrom.pmt, astrom.eb)
    pnat = ldsun(pco, astrom.eh, astrom.em)
    ppr = ab(pnat, astrom.v, astrom.em, astrom.bm1)
    return _to_radec(rxp(astrom.bpn, ppr))


def atciqn(
    rc: ArrayLike,
    dc: ArrayLike,
    pr: ArrayLike,
    pd: ArrayLike,
    px: ArrayLike,
    rv: ArrayLike,
    astrom: Astrom,
    b: LdBody,
) -> tuple[Array, Array]:
    """Quick ICRS, epoch J2000.0, to CIRS transformation, given precomputed
    star-independent astrometry parameters plus a list of light-deflecting
    bodies.

    Args:
        rc: ICRS RA at J2000.0 (radians).
        dc: ICRS Dec at J2000.0 (radians).
        pr: RA proper motion (radians/year).
        pd: Dec proper motion (radians/year).
        px: Parallax (arcsec).
        rv: Radial velocity (km/s, +ve if receding).
        astrom: Star-independent astrometry parameters.
        b: Light-deflecting bodies, stacked with :meth:`LdBody.stack`.
            Include the Sun, normally last.

    Returns:
        Tuple of (ri, di): CIRS RA and Dec (radians).
    """
    pco = pmpx(rc, dc, pr, pd, px, rv, astrom.pmt, astrom.eb)
    pnat = ldn(b, astrom.eb, pco)
    ppr = ab(pnat, astrom.v, astrom.em, astrom.bm1)
    return _to_radec(rxp(astrom.bpn, ppr))


def atciqz(rc: ArrayLike, dc: ArrayLike, astrom: Astrom) -> tuple[Array, Array]:
    """Quick ICRS to CIRS transformation, given precomputed star-independent
    astrometry parameters, and assuming zero parallax and proper motion.

    Returns:
        Tuple of (ri, di): CIRS RA and Dec (radians).
    """
    pco = s2c(rc, dc)
    pnat = ldsun(pco, astrom.eh, astrom.em)
    ppr = ab(pnat, astrom.v, astrom.em, astrom.bm1)
    return _to_radec(rxp(astrom.bpn, ppr))


def aticq(ri: ArrayLike, di: ArrayLike, astrom: Astrom) -> tuple[Array, Array]:
    """Quick CIRS RA,Dec to ICRS astrometric place, given the
    star-independent astrometry parameters.

    Inverts the aberration (two iterations) and the light deflection by
    the Sun (five iterations).

    Args:
        ri: CIRS RA (radians).
        di: CIRS Dec (radians).
        astrom: Star-independent astrometry parameters.

    Returns:
        Tuple of (rc, dc): ICRS astrometric RA and Dec (radians).
    """
    ppr = trxp(astrom.bpn, s2c(ri, di))
    pnat = _invert(ppr, lambda p: ab(p, astrom.v, astrom.em, astrom.bm1), 2)
    pco = _invert(pnat, lambda p: ldsun(p, astrom.eh, astrom.em), 5)
    return _to_radec(pco)


def aticqn(ri: ArrayLike, di: ArrayLike, astrom: Astrom, b: LdBody) -> tuple[Array, Array]:
    """Quick CIRS to ICRS astrometric place transformation, given the
    star-independent astrometry parameters plus a list of light-deflecting
    bodies.

    Args:
        ri: CIRS RA (radians).
        di: CIRS Dec (radians).
        astrom: Star-independent astrometry parameters.
        b: Light-deflecting bodies, stacked with :meth:`LdBody.stack`.

    Returns:
        Tuple of (rc, dc): ICRS astrometric RA and Dec (radians).
    """
    ppr = trxp(astrom.bpn, s2c(ri, di))
    pnat = _invert(ppr, lambda p: ab(p, astrom.v, astrom.em, astrom.bm1), 2)
    pco = _invert(pnat, lambda p: ldn(b, astrom.eb, p), 5)
    return _to_radec(pco)


# ---------------------------------------------------------------------------
# CIRS <-> observed
# ---------------------------------------------------------------------------


def atioq(
    ri: ArrayLike, di: ArrayLike, astrom: Astrom
) -> tuple[Array, Array, Array, Array, Array]:
    """Quick CIRS to observed place transformation.

    Args:
        ri: CIRS right ascension (radians).
        di: CIRS declination (radians).
        astrom: Parameters from :func:`apio` or :func:`apco`.

    Returns:
        Tuple of (aob, zob, hob, dob, rob): observed azimuth (N=0, E=90),
        zenith distance, hour angle, declination and CIO-based right
        ascension (radians).
    """
    # Minimum cos(alt) and sin(alt) for refraction purposes
    celmin = 1e-6
    selmin = 0.05

    # CIRS RA,Dec to Cartesian -HA,Dec
    x, y, z = s2c(jnp.asarray(ri) - astrom.eral, di)

    # Polar motion
    sx = jnp.sin(astrom.xpl)
    cx = jnp.cos(astrom.xpl)
    sy = jnp.sin(astrom.ypl)
    cy = jnp.cos(astrom.ypl)
    xhd = cx * x + sx * z
    yhd = sx * sy * x + cy * y - cx * sy * z
    zhd = -sx * cy * x + sy * y + cx * cy * z

    # Diurnal aberration
    f = 1.0 - astrom.diurab * yhd
    xhdt = f * xhd
    yhdt = f * (yhd + astrom.diurab)
    zhdt = f * zhd

    # Cartesian -HA,Dec to Cartesian Az,El (S=0,E=90)
    xaet = astrom.sphi * xhdt - astrom.cphi * zhdt
    yaet = yhdt
    zaet = astrom.cphi * xhdt + astrom.sphi * zhdt

    # Azimuth (N=0,E=90)
    azobs = jnp.where((xaet != 0.0) | (yaet != 0.0), jnp.arctan2(yaet, -xaet), 0.0)

    # Refraction: cosine and sine of altitude, with precautions
    r = jnp.maximum(jnp.sqrt(xaet * xaet + yaet * yaet), celmin)
    z = jnp.maximum(zaet, selmin)

    # A*tan(z)+B*tan^3(z) model, with Newton-Raphson correction
    tz = r / z
    w = astrom.refb * tz * tz
    dl = (astrom.refa + w) * tz / (1.0 + (astrom.refa + 3.0 * w) / (z * z))

    # Apply the change, giving observed vector
    cosdel = 1.0 - dl * dl / 2.0
    f = cosdel - dl * z / r
    xaeo = xaet * f
    yaeo = yaet * f
    zaeo = cosdel * zaet + dl * r

    zdobs = jnp.arctan2(jnp.sqrt(xaeo * xaeo + yaeo * yaeo), zaeo)

    # Az/El vector to HA,Dec vector (both right-handed)
    v = jnp.stack([
        astrom.sphi * xaeo + astrom.cphi * zaeo,
        yaeo,
        -astrom.cphi * xaeo + astrom.sphi * zaeo,
    ])
    hmobs, dcobs = c2s(v)

    return anp(azobs), zdobs, -hmobs, dcobs, anp(astrom.eral + hmobs)


def atoiq(type: str, ob1: ArrayLike, ob2: ArrayLike, astrom: Astrom) -> tuple[Array, Array]:
    """Quick observed place to CIRS, given the star-independent astrometry
    parameters.

    Args:
        type: Type of coordinates, only the first character is read
            (case-insensitive): ``"R"`` for RA,Dec, ``"H"`` for HA,Dec and
            anything else for Az,ZD.
        ob1: Observed Az, HA or RA (radians; Az is N=0,E=90).
        ob2: Observed ZD or Dec (radians).
        astrom: Parameters from :func:`apio` or :func:`apco`.

    Returns:
        Tuple of (ri, di): CIRS right ascension and declination (radians).

    Raises:
        ValueError: If *type* is empty.
    """
    # Minimum sin(alt) for refraction purposes
    selmin = 0.05

    if not type:
        raise ValueError("atoiq: coordinate type must be a non-empty string")
    c = type[0].upper()
    if c not in ("R", "H"):
        c = "A"

    sphi = astrom.sphi
    cphi = astrom.cphi

    if c == "A":
        # Az,ZD to Cartesian (S=0,E=90)
        ce = jnp.sin(ob2)
        xaeo = -jnp.cos(ob1) * ce
        yaeo = jnp.sin(ob1) * ce
        zaeo = jnp.cos(ob2)
    else:
        c1 = astrom.eral - ob1 if c == "R" else jnp.asarray(ob1)

        # To Cartesian -HA,Dec, then Az,El (S=0,E=90)
        xmhdo, ymhdo, zmhdo = s2c(-c1, ob2)
        xaeo = sphi * xmhdo - cphi * zmhdo
        yaeo = ymhdo
        zaeo = cphi * xmhdo + sphi * zmhdo

    # Azimuth (S=0,E=90), sine of observed ZD and observed ZD
    az = jnp.where((xaeo != 0.0) | (yaeo != 0.0), jnp.arctan2(yaeo, xaeo), 0.0)
    sz = jnp.sqrt(xaeo * xaeo + yaeo * yaeo)
    zdo = jnp.arctan2(sz, zaeo)

    # Fast algorithm using two constant model
    tz = sz / jnp.maximum(zaeo, selmin)
    dref = (astrom.refa + astrom.refb * tz * tz) * tz
    zdt = zdo + dref

    # To Cartesian Az,ZD, then -HA,Dec
    ce = jnp.sin(zdt)
    xaet = jnp.cos(az) * ce
    yaet = jnp.sin(az) * ce
    zaet = jnp.cos(zdt)
    xmhda = sphi * xaet + cphi * zaet
    ymhda = yaet
    zmhda = -cphi * xaet + sphi * zaet

    # Diurnal aberration
    f = 1.0 + astrom.diurab * ymhda
    xhd = f * xmhda
    yhd = f * (ymhda - astrom.diurab)
    zhd = f * zmhda

    # Polar motion
    sx = jnp.sin(astrom.xpl)
    cx = jnp.cos(astrom.xpl)
    sy = jnp.sin(astrom.ypl)
    cy = jnp.cos(astrom.ypl)
    v = jnp.stack([
        cx * xhd + sx * sy * yhd - sx * cy * zhd,
        cy * yhd + sy * zhd,
        sx * xhd - cx * sy * yhd + cx * cy * zhd,
    ])

    hma, di = c2s(v)
    return anp(astrom.eral + hma), di


# ---------------------------------------------------------------------------
# One-shot CIRS <-> observed from UTC
# ---------------------------------------------------------------------------


def atio13(
    ri: ArrayLike,
    di: ArrayLike,
    utc1: ArrayLike,
    utc2: ArrayLike,
    dut1: ArrayLike,
    elong: ArrayLike,
    phi: ArrayLike,
    hm: ArrayLike,
    xp: ArrayLike,
    yp: ArrayLike,
    phpa: ArrayLike,
    tc: ArrayLike,
    rh: ArrayLike,
    wl: ArrayLike,
) -> tuple[Array, Array, Array, Array, Array, Array]:
    """CIRS RA,Dec to observed place.

    Wraps :func:`apio13` and :func:`atioq`.

    Returns:
        Tuple of (aob, zob, hob, dob, rob, status). Status: 1 dubious year,
        0 OK, -1 unacceptable date.
    """
    astrom, j = apio13(utc1, utc2, dut1, elong, phi, hm, xp, yp, phpa, tc, rh, wl)
    aob, zob, hob, dob, rob = atioq(ri, di, astrom)
    return aob, zob, hob, dob, rob, j


def atoi13(
    type: str,
    ob1: ArrayLike,
    ob2: ArrayLike,
    utc1: ArrayLike,
    utc2: ArrayLike,
    dut1: ArrayLike,
    elong: ArrayLike,
    phi: ArrayLike,
    hm: ArrayLike,
    xp: ArrayLike,
    yp: ArrayLike,
    phpa: ArrayLike,
    tc: ArrayLike,
    rh: ArrayLike,
    wl: ArrayLike,
) -> tuple[Array, Array, Array]:
    """Observed place to CIRS.

    Wraps :func:`apio13` and :func:`atoiq`.

    Returns:
        Tuple of (ri, di, status). Status: 1 dubious year, 0 OK,
        -1 unacceptable date.
    """
    astrom, j = apio13(utc1, utc2, dut1, elong, phi, hm, xp, yp, phpa, tc, rh, wl)
    ri, di = atoiq(type, ob1, ob2, astrom)
    return ri, di, j
