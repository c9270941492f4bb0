"""Tests for star catalog conversions and space motion."""

import jax
import jax.numpy as jnp

from sofajax.catalogs import (
    fk5hip,
    fk5hz,
    fk45z,
    fk52h,
    fk54z,
    fk425,
    fk524,
    h2fk5,
    hfk5z,
    pmsafe,
    pvstar,
    starpm,
    starpv,
)
from sofajax.constants import DAS2R

# Reference star used by the space-motion tests
_STAR = (0.01686756, -1.093989828, -1.78323516e-5, 2.336024047e-6, 0.74723, -21.6)

_PV_STAR = jnp.array([
    [126668.5912743160601, 2136.792716839935195, -245251.2339876830091],
    [-0.4051854035740712739e-2, -0.6253919754866173866e-2, 0.1189353719774107189e-1],
])


class TestFk4Fk5:
    def test_fk425(self):
        r, d, dr, dd, p, v = fk425(
            0.07626899753879587532,
            -1.137405378399605780,
            0.1973749217849087460e-4,
            0.5659714913272723189e-5,
            0.134,
            8.7,
        )
        assert jnp.abs(r - 0.08757989933556446040) < 1e-14
        assert jnp.abs(d - -1.132279113042091895) < 1e-12
        assert jnp.abs(dr - 0.1953670614474396139e-4) < 1e-17
        assert jnp.abs(dd - 0.5637686678659640164e-5) < 1e-18
        assert jnp.abs(p - 0.1339919950582767871) < 1e-13
        assert jnp.abs(v - 8.736999669183529069) < 1e-11

    def test_fk524(self):
        r, d, dr, dd, p, v = fk524(
            0.8723503576487275595,
            -0.7517076365138887672,
            0.2019447755430472323e-4,
            0.3541563940505160433e-5,
            0.1559,
            86.87,
        )
        assert jnp.abs(r - 0.8636359659799603487) < 1e-13
        assert jnp.abs(d - -0.7550281733160843059) < 1e-13
        assert jnp.abs(dr - 0.2023628192747172486e-4) < 1e-17
        assert jnp.abs(dd - 0.3624459754935334718e-5) < 1e-18
        assert jnp.abs(p - 0.1560079963299390241) < 1e-13
        assert jnp.abs(v - 86.79606353469163751) < 1e-11

    def test_fk524_fk425_roundtrip(self):
        r0, d0, dr0, dd0, p0, v0 = 1.2, 0.4, 1e-6, -2e-6, 0.05, 12.0
        r, d, dr, dd, p, v = fk524(r0, d0, dr0, dd0, p0, v0)
        r, d, dr, dd, p, v = fk425(r, d, dr, dd, p, v)
        assert jnp.abs(r - r0) < 1e-10
        assert jnp.abs(d - d0) < 1e-10
        assert jnp.abs(dr - dr0) < 1e-12
        assert jnp.abs(dd - dd0) < 1e-12
        assert jnp.abs(p - p0) < 1e-8

    def test_fk45z(self):
        r, d = fk45z(0.01602284975382960982, -0.1164347929099906024, 1954.677617625256806)
        assert jnp.abs(r - 0.02719295911606862303) < 1e-15
        assert jnp.abs(d - -0.1115766001565926892) < 1e-13

    def test_fk54z(self):
        r, d, dr, dd = fk54z(0.02719026625066316119, -0.1115815170738754813, 1954.677308160316374)
        assert jnp.abs(r - 0.01602015588390065476) < 1e-14
        assert jnp.abs(d - -0.1164397101110765346) < 1e-13
        assert jnp.abs(dr - -0.1175712648471090704e-7) < 1e-20
        assert jnp.abs(dd - 0.2108109051316431056e-7) < 1e-20

    def test_fk45z_vmap(self):
        r = jnp.array([0.01602284975382960982, 0.01602284975382960982])
        d = jnp.array([-0.1164347929099906024, -0.1164347929099906024])
        r2, d2 = jax.vmap(fk45z, in_axes=(0, 0, None))(r, d, 1954.677617625256806)
        assert jnp.max(jnp.abs(r2 - 0.02719295911606862303)) < 1e-15
        assert jnp.max(jnp.abs(d2 - -0.1115766001565926892)) < 1e-13


class TestHipparcos:
    def test_fk5hip(self):
        r5h, s5h = fk5hip()
        assert jnp.abs(r5h[0, 0] - 0.9999999999999928638) < 1e-14
        assert jnp.abs(r5h[0, 1] - 0.1110223351022919694e-6) < 1e-17
        assert jnp.abs(r5h[0, 2] - 0.4411803962536558154e-7) < 1e-17
        assert jnp.abs(r5h[1, 0] - -0.1110223308458746430e-6) < 1e-17
        assert jnp.abs(r5h[2, 1] - 0.9647792009175314354e-7) < 1e-17
        assert jnp.abs(r5h[2, 2] - 0.9999999999999943728) < 1e-14
        expected = jnp.array([-0.30, 0.60, 0.70]) * 1e-3 * DAS2R
        assert jnp.max(jnp.abs(s5h - expected)) < 1e-17

    def test_fk52h(self):
        rh, dh, drh, ddh, pxh, rvh = fk52h(1.76779433, -0.2917517103, -1.91851572e-7, -5.8468475e-6, 0.379210, -7.6)
        assert jnp.abs(rh - 1.767794226299947632) < 1e-14
        assert jnp.abs(dh - -0.2917516070530391757) < 1e-14
        assert jnp.abs(drh - -0.1961874125605721270e-6) < 1e-19
        assert jnp.abs(ddh - -0.58459905176693911e-5) < 1e-19
        assert jnp.abs(pxh - 0.37921) < 1e-14
        assert jnp.abs(rvh - -7.6000000940000254) < 1e-11

    def test_h2fk5(self):
        r5, d5, dr5, dd5, px5, rv5 = h2fk5(
            1.767794352, -0.2917512594, -2.76413026e-6, -5.92994449e-6, 0.379210, -7.6
        )
        assert jnp.abs(r5 - 1.767794455700065506) < 1e-13
        assert jnp.abs(d5 - -0.2917513626469638890) < 1e-13
        assert jnp.abs(dr5 - -0.27597945024511204e-5) < 1e-18
        assert jnp.abs(dd5 - -0.59308014093262838e-5) < 1e-18
        assert jnp.abs(px5 - 0.37921) < 1e-13
        assert jnp.abs(rv5 - -7.6000001309071126) < 1e-11

    def test_fk52h_h2fk5_roundtrip(self):
        star = (1.76779433, -0.2917517103, -1.91851572e-7, -5.8468475e-6, 0.379210, -7.6)
        back = h2fk5(*fk52h(*star))
        for got, want in zip(back[:4], star[:4]):
            assert jnp.abs(got - want) < 1e-14

    def test_fk5hz(self):
        rh, dh = fk5hz(1.76779433, -0.2917517103, 2400000.5, 54479.0)
        assert jnp.abs(rh - 1.767794191464423978) < 1e-12
        assert jnp.abs(dh - -0.2917516001679884419) < 1e-12

    def test_hfk5z(self):
        r5, d5, dr5, dd5 = hfk5z(1.767794352, -0.2917512594, 2400000.5, 54479.0)
        assert jnp.abs(r5 - 1.767794490535581026) < 1e-13
        assert jnp.abs(d5 - -0.2917513695320114258) < 1e-14
        assert jnp.abs(dr5 - 0.4335890983539243029e-8) < 1e-22
        assert jnp.abs(dd5 - -0.8569648841237745902e-9) < 1e-23


class TestSpaceMotion:
    def test_starpv(self):
        pv, j = starpv(*_STAR)
        assert jnp.max(jnp.abs(pv[0] - _PV_STAR[0])) < 1e-7
        assert jnp.max(jnp.abs(pv[1] - _PV_STAR[1])) < 1e-10
        assert int(j) == 0

    def test_starpv_distance_overridden(self):
        _, j = starpv(0.01686756, -1.093989828, -1.78323516e-5, 2.336024047e-6, 0.0, -21.6)
        assert int(j) & 1

    def test_pvstar(self):
        ra, dec, pmr, pmd, px, rv, j = pvstar(_PV_STAR)
        assert jnp.abs(ra - 0.1686756e-1) < 1e-12
        assert jnp.abs(dec - -1.093989828) < 1e-12
        assert jnp.abs(pmr - -0.1783235160000472788e-4) < 1e-16
        assert jnp.abs(pmd - 0.2336024047000619347e-5) < 1e-16
        assert jnp.abs(px - 0.74723) < 1e-12
        assert jnp.abs(rv - -21.60000010107306010) < 1e-11
        assert int(j) == 0

    def test_pvstar_null_position(self):
        *_, j = pvstar(jnp.zeros((2, 3)))
        assert int(j) == -2

    def test_pvstar_superluminal(self):
        pv = jnp.array([[1.0, 0.0, 0.0], [1000.0, 0.0, 0.0]])
        *_, j = pvstar(pv)
        assert int(j) == -1

    def test_starpv_pvstar_roundtrip(self):
        pv, _ = starpv(*_STAR)
        out = pvstar(pv)
        assert jnp.abs(out[0] - _STAR[0]) < 1e-12
        assert jnp.abs(out[1] - _STAR[1]) < 1e-12
        assert jnp.abs(out[2] - _STAR[2]) < 1e-16
        assert jnp.abs(out[3] - _STAR[3]) < 1e-16
        assert jnp.abs(out[4] - _STAR[4]) < 1e-12
        assert jnp.abs(out[5] - _STAR[5]) < 1e-9
        assert int(out[6]) == 0

    def test_starpm(self):
        ra2, dec2, pmr2, pmd2, px2, rv2, j = starpm(
            *_STAR, 2400000.5, 50083.0, 2400000.5, 53736.0
        )
        assert jnp.abs(ra2 - 0.01668919069414256149) < 1e-13
        assert jnp.abs(dec2 - -1.093966454217127897) < 1e-13
        assert jnp.abs(pmr2 - -0.1783662682153176524e-4) < 1e-17
        assert jnp.abs(pmd2 - 0.2338092915983989595e-5) < 1e-17
        assert jnp.abs(px2 - 0.7473533835317719243) < 1e-13
        assert jnp.abs(rv2 - -21.59905170476417175) < 1e-11
        assert int(j) == 0

    def test_starpm_zero_interval(self):
        out = starpm(*_STAR, 2451545.0, 0.0, 2451545.0, 0.0)
        assert jnp.abs(out[0] - _STAR[0]) < 1e-12
        assert jnp.abs(out[1] - _STAR[1]) < 1e-12

    def test_pmsafe(self):
        ra2, dec2, pmr2, pmd2, px2, rv2, j = pmsafe(
            1.234, 0.789, 1e-5, -2e-5, 1e-2, 10.0, 2400000.5, 48348.5625, 2400000.5, 51544.5
        )
        assert jnp.abs(ra2 - 1.234087484501017061) < 1e-12
        assert jnp.abs(dec2 - 0.7888249982450468567) < 1e-12
        assert jnp.abs(pmr2 - 0.9996457663586073988e-5) < 1e-12
        assert jnp.abs(pmd2 - -0.2000040085106754565e-4) < 1e-16
        assert jnp.abs(px2 - 0.9999997295356830666e-2) < 1e-12
        assert jnp.abs(rv2 - 10.38468380293920069) < 1e-10
        assert int(j) == 0

    def test_pmsafe_raises_tiny_parallax(self):
        *_, px2, _, j = pmsafe(1.234, 0.789, 1e-5, -2e-5, 0.0, 10.0, 2451545.0, 0.0, 2451545.0, 3652.5)
        assert int(j) & 1
        assert px2 > 0.0

    def test_starpv_jit_and_vmap(self):
        ra = jnp.array([0.01686756, 1.2])
        dec = jnp.array([-1.093989828, 0.3])
        pv, j = jax.jit(jax.vmap(starpv, in_axes=(0, 0, None, None, None, None)))(
            ra, dec, -1.78323516e-5, 2.336024047e-6, 0.74723, -21.6
        )
        assert pv.shape == (2, 2, 3)
        assert jnp.max(jnp.abs(pv[0, 0] - _PV_STAR[0])) < 1e-7
        assert jnp.all(j == 0)
