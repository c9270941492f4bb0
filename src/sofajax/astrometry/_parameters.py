"""Star-independent astrometry parameters.

The ``apc*`` routines prepare an :class:`Astrom` block for transformations
between ICRS and GCRS/CIRS, ``apco`` adds the observer-dependent terms and
``apio`` prepares the CIRS to observed block.  The Earth ephemeris is
supplied by the caller as barycentric and heliocentric vectors.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.config import get_dtype
from sofajax.constants import AULT, CMPS, D2PI, DAU, DAYSEC, DJ00, DJY, WGS84
from sofajax.coordinates import gd2gc
from sofajax.earth_rotation import era00
from sofajax.precession_nutation import c2ixys, pom00, sp00
from sofajax.time_scales import taitt, utctai, utcut1
from sofajax.vector_matrix import Rx, Ry, Rz, anpm, pn, trxp, trxpv

from ._types import Astrom


def apcs(
    date1: ArrayLike, date2: ArrayLike, pv: ArrayLike, ebpv: ArrayLike, ehp: ArrayLike
) -> Astrom:
    """Prepare for ICRS <-> GCRS, space observer.

    Args:
        date1: TDB as a 2-part Julian Date (part 1).
        date2: TDB as a 2-part Julian Date (part 2).
        pv: Observer's geocentric pv-vector (m, m/s).
        ebpv: Earth barycentric pv-vector (au, au/day).
        ehp: Earth heliocentric position (au).

    Returns:
        Astrom block with ``pmt``, ``eb``, ``eh``, ``em``, ``v``, ``bm1``
        set and ``bpn`` the identity.
    """
    # au/d to m/s, light time for 1 au (days)
    audms = DAU / DAYSEC
    cr = AULT / DAYSEC

    pv = jnp.asarray(pv)
    ebpv = jnp.asarray(ebpv)

    # Time since reference epoch, years (for proper motion)
    pmt = ((jnp.asarray(date1) - DJ00) + date2) / DJY

    # Adjust Earth ephemeris to observer
    dp = pv[0] / DAU
    pb = ebpv[0] + dp
    vb = ebpv[1] + pv[1] / audms
    em, eh = pn(jnp.asarray(ehp) + dp)

    # Barycentric velocity in units of c
    v = vb * cr
    bm1 = jnp.sqrt(1.0 - jnp.sum(v * v))

    return Astrom.zeros()._replace(pmt=pmt, eb=pb, eh=eh, em=em, v=v, bm1=bm1)


def apcg(date1: ArrayLike, date2: ArrayLike, ebpv: ArrayLike, ehp: ArrayLike) -> Astrom:
    """Prepare for ICRS <-> GCRS, geocentric observer.

    Args:
        date1: TDB as a 2-part Julian Date (part 1).
        date2: TDB as a 2-part Julian Date (part 2).
        ebpv: Earth barycentric pv-vector (au, au/day).
        ehp: Earth heliocentric position (au).

    Returns:
        Astrom block.
    """
    return apcs(date1, date2, jnp.zeros((2, 3), dtype=get_dtype()), ebpv, ehp)


def apci(
    date1: ArrayLike,
    date2: ArrayLike,
    ebpv: ArrayLike,
    ehp: ArrayLike,
    x: ArrayLike,
    y: ArrayLike,
    s: ArrayLike,
) -> Astrom:
    """Prepare for ICRS <-> CIRS, terrestrial observer, given the CIP
    coordinates and CIO locator.

    Args:
        date1: TDB as a 2-part Julian Date (part 1).
        date2: TDB as a 2-part Julian Date (part 2).
        ebpv: Earth barycentric pv-vector (au, au/day).
        ehp: Earth heliocentric position (au).
        x: CIP X (components of unit vector).
        y: CIP Y.
        s: CIO locator s (radians).

    Returns:
        Astrom block with the CIO based ``bpn`` matrix.
    """
    astrom = apcg(date1, date2, ebpv, ehp)
    return astrom._replace(bpn=c2ixys(x, y, s))


def _local_rotation(sp, theta, elong, xp, yp) -> tuple[Array, Array, Array]:
    """Local Earth rotation angle and polar motion with respect to the
    local meridian."""
    r = Rz(elong) @ Rx(-yp) @ Ry(-xp) @ Rz(theta + sp)

    a = r[0, 0]
    b = r[0, 1]
    eral = jnp.where((a != 0.0) | (b != 0.0), jnp.arctan2(b, a), 0.0)
    xpl = jnp.arctan2(r[0, 2], jnp.sqrt(a * a + b * b))
    a = r[1, 2]
    b = r[2, 2]
    ypl = jnp.where((a != 0.0) | (b != 0.0), -jnp.arctan2(a, b), 0.0)
    return eral, xpl, ypl


def pvtob(
    elong: ArrayLike,
    phi: ArrayLike,
    hm: ArrayLike,
    xp: ArrayLike,
    yp: ArrayLike,
    sp: ArrayLike,
    theta: ArrayLike,
) -> Array:
    """Position and velocity of a terrestrial observing station.

    Args:
        elong: Longitude (radians, east +ve).
        phi: Latitude (geodetic, radians).
        hm: Height above reference ellipsoid (geodetic, m).
        xp: Pole x coordinate (radians).
        yp: Pole y coordinate (radians).
        sp: The TIO locator s' (radians).
        theta: Earth rotation angle (radians).

    Returns:
        Position/velocity pv-vector (m, m/s, CIRS).
    """
    # Earth rotation rate in radians per UT1 second
    om = 1.00273781191135448 * D2PI / DAYSEC

    # Geodetic to geocentric (WGS84), then polar motion and TIO position
    xyzm, _ = gd2gc(WGS84, elong, phi, hm)
    x, y, z = trxp(pom00(xp, yp, sp), xyzm)

    s = jnp.sin(theta)
    c = jnp.cos(theta)
    return jnp.stack([
        jnp.stack([c * x - s * y, s * x + c * y, z]),
        jnp.stack([om * (-s * x - c * y), om * (c * x - s * y), jnp.zeros_like(z)]),
    ])


def apco(
    date1: ArrayLike,
    date2: ArrayLike,
    ebpv: ArrayLike,
    ehp: ArrayLike,
    x: ArrayLike,
    y: ArrayLike,
    s: ArrayLike,
    theta: ArrayLike,
    elong: ArrayLike,
    phi: ArrayLike,
    hm: ArrayLike,
    xp: ArrayLike,
    yp: ArrayLike,
    sp: ArrayLike,
    refa: ArrayLike,
    refb: ArrayLike,
) -> Astrom:
    """Prepare for ICRS <-> observed, terrestrial observer, given the Earth
    ephemeris, CIP/CIO, Earth rotation angle and refraction constants.

    Args:
        date1: TDB as a 2-part Julian Date (part 1).
        date2: TDB as a 2-part Julian Date (part 2).
        ebpv: Earth barycentric pv-vector (au, au/day).
        ehp: Earth heliocentric position (au).
        x: CIP X.
        y: CIP Y.
        s: CIO locator s (radians).
        theta: Earth rotation angle (radians).
        elong: Longitude (radians, east +ve).
        phi: Latitude (geodetic, radians).
        hm: Height above ellipsoid (m, geodetic).
        xp: Polar motion x coordinate (radians).
        yp: Polar motion y coordinate (radians).
        sp: The TIO locator s' (radians).
        refa: Refraction constant A (radians).
        refb: Refraction constant B (radians).

    Returns:
        Astrom block.
    """
    eral, xpl, ypl = _local_rotation(sp, theta, elong, xp, yp)

    # CIO based BPN matrix
    r = c2ixys(x, y, s)

    # Observer's geocentric position and velocity (m, m/s), rotated into GCRS
    pv = trxpv(r, pvtob(elong, phi, hm, xp, yp, sp, theta))

    astrom = apcs(date1, date2, pv, ebpv, ehp)
    return astrom._replace(
        bpn=r,
        along=anpm(eral - theta),
        phi=jnp.asarray(phi, dtype=astrom.pmt.dtype),
        xpl=xpl,
        ypl=ypl,
        sphi=jnp.sin(phi),
        cphi=jnp.cos(phi),
        diurab=jnp.zeros_like(astrom.pmt),
        eral=eral,
        refa=jnp.asarray(refa, dtype=astrom.pmt.dtype),
        refb=jnp.asarray(refb, dtype=astrom.pmt.dtype),
    )


def apio(
    sp: ArrayLike,
    theta: ArrayLike,
    elong: ArrayLike,
    phi: ArrayLike,
    hm: ArrayLike,
    xp: ArrayLike,
    yp: ArrayLike,
    refa: ArrayLike,
    refb: ArrayLike,
) -> Astrom:
    """Prepare for CIRS <-> observed, terrestrial observer.

    Only the fields read by :func:`atioq` and :func:`atoiq` are set; the
    rest are left at their :meth:`Astrom.zeros` values.

    Args:
        sp: The TIO locator s' (radians).
        theta: Earth rotation angle (radians).
        elong: Longitude (radians, east +ve).
        phi: Geodetic latitude (radians).
        hm: Height above ellipsoid (m, geodetic).
        xp: Polar motion x coordinate (radians).
        yp: Polar motion y coordinate (radians).
        refa: Refraction constant A (radians).
        refb: Refraction constant B (radians).

    Returns:
        Astrom block.
    """
    astrom = Astrom.zeros()
    dtype = astrom.pmt.dtype
    eral, xpl, ypl = _local_rotation(sp, theta, elong, xp, yp)

    # Diurnal aberration from the observer's velocity
    pv = pvtob(elong, phi, hm, xp, yp, sp, theta)
    diurab = jnp.sqrt(pv[1, 0] * pv[1, 0] + pv[1, 1] * pv[1, 1]) / CMPS

    return astrom._replace(
        along=anpm(eral - theta),
        phi=jnp.asarray(phi, dtype=dtype),
        xpl=xpl,
        ypl=ypl,
        sphi=jnp.sin(phi),
        cphi=jnp.cos(phi),
        diurab=diurab,
        eral=eral,
        refa=jnp.asarray(refa, dtype=dtype),
        refb=jnp.asarray(refb, dtype=dtype),
    )


def refco(phpa: ArrayLike, tc: ArrayLike, rh: ArrayLike, wl: ArrayLike) -> tuple[Array, Array]:
    """Determine the constants A and B in the atmospheric refraction model
    dZ = A tan Z + B tan^3 Z.

    Z is the "observed" zenith distance and dZ is what to add to it to give
    the "topocentric" zenith distance.

    Args:
        phpa: Pressure at the observer (hPa = millibar).
        tc: Ambient temperature at the observer (deg C).
        rh: Relative humidity at the observer (range 0-1).
        wl: Wavelength (micrometers); above 100 is treated as radio.

    Returns:
        Tuple of (refa, refb): tan Z and tan^3 Z coefficients (radians).
    """
    wl = jnp.asarray(wl)

    # Decide whether optical/IR or radio case, restrict parameters
    optic = wl <= 100.0
    t = jnp.clip(tc, -150.0, 100.0)
    p = jnp.clip(phpa, 0.0, 10000.0)
    r = jnp.clip(rh, 0.0, 1.0)
    w = jnp.clip(wl, 0.1, 1e6)

    # Water vapour pressure at the observer
    ps = 10.0 ** ((0.7859 + 0.03477 * t) / (1.0 + 0.00412 * t)) * (1.0 + p * (4.5e-6 + 6e-10 * t * t))
    pw = jnp.where(p > 0.0, r * ps / (1.0 - (1.0 - r) * ps / jnp.where(p > 0.0, p, 1.0)), 0.0)

    # Refractive index minus 1 at the observer
    tk = t + 273.15
    wlsq = w * w
    gamma = jnp.where(
        optic,
        ((77.53484e-6 + (4.39108e-7 + 3.666e-9 / wlsq) / wlsq) * p - 11.2684e-6 * pw) / tk,
        (77.6890e-6 * p - (6.3938e-6 - 0.375463 / tk) * pw) / tk,
    )

    # Formula for beta from Stone, with empirical adjustments
    beta = 4.4474e-6 * tk
    beta = jnp.where(optic, beta, beta - 0.0074 * pw * beta)

    refa = gamma * (1.0 - beta)
    refb = -gamma * (beta - gamma / 2.0)
    return refa, refb


def apio13(
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
) -> tuple[Astrom, Array]:
    """Prepare for CIRS <-> observed, terrestrial observer, given UTC and
    the ambient conditions.

    The TIO locator uses the IAU 2000 model, the Earth rotation angle the
    IAU 2000 model and the refraction constants come from :func:`refco`.

    Args:
        utc1: UTC as a 2-part quasi Julian Date (part 1).
        utc2: UTC as a 2-part quasi Julian Date (part 2).
        dut1: UT1-UTC (seconds).
        elong: Longitude (radians, east +ve).
        phi: Geodetic latitude (radians).
        hm: Height above ellipsoid (m, geodetic).
        xp: Polar motion x coordinate (radians).
        yp: Polar motion y coordinate (radians).
        phpa: Pressure at the observer (hPa = mB).
        tc: Ambient temperature at the observer (deg C).
        rh: Relative humidity at the observer (range 0-1).
        wl: Wavelength (micrometers).

    Returns:
        Tuple of (astrom, status). Status: 1 dubious year, 0 OK,
        -1 unacceptable date.
    """
    tai1, tai2, j1 = utctai(utc1, utc2)
    tt1, tt2 = taitt(tai1, tai2)
    ut11, ut12, j2 = utcut1(utc1, utc2, dut1)

    sp = sp00(tt1, tt2)
    theta = era00(ut11, ut12)
    refa, refb = refco(phpa, tc, rh, wl)

    astrom = apio(sp, theta, elong, phi, hm, xp, yp, refa, refb)
    status = jnp.where((j1 < 0) | (j2 < 0), -1, j2).astype(jnp.int32)
    return astrom, status


def aper(theta: ArrayLike, astrom: Astrom) -> Astrom:
    """Update the Earth rotation angle in an astrometry parameter block.

    Args:
        theta: Earth rotation angle (radians).
        astrom: Block prepared by :func:`apco` or :func:`apio`.

    Returns:
        Copy of *astrom* with ``eral = theta + along``.
    """
    return astrom._replace(eral=theta + astrom.along)


def aper13(ut11: ArrayLike, ut12: ArrayLike, astrom: Astrom) -> Astrom:
    """As :func:`aper`, with the Earth rotation angle computed from UT1."""
    return aper(era00(ut11, ut12), astrom)
