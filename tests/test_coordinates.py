"""Tests for horizon, ecliptic, galactic and geodetic coordinates."""

import jax
import jax.numpy as jnp
import pytest

from sofajax.constants import GRS80, WGS72, WGS84
from sofajax.coordinates import (
    ae2hd,
    eceq06,
    ecm06,
    eform,
    eqec06,
    g2icrs,
    gc2gd,
    gc2gde,
    gd2gc,
    gd2gce,
    hd2ae,
    hd2pa,
    icrs2g,
    ltecm,
    lteceq,
    lteqec,
)

_XYZ = jnp.array([2e6, 3e6, 5.244e6])


class TestHorizon:
    def test_ae2hd(self):
        h, d = ae2hd(5.5, 1.1, 0.7)
        assert jnp.abs(h - 0.5933291115507309663) < 1e-14
        assert jnp.abs(d - 0.9613934761647817620) < 1e-14

    def test_hd2ae(self):
        a, e = hd2ae(1.1, 1.2, 0.3)
        assert jnp.abs(a - 5.916889243730066194) < 1e-13
        assert jnp.abs(e - 0.4472186304990486228) < 1e-14

    def test_hd2pa(self):
        assert jnp.abs(hd2pa(1.1, 1.2, 0.3) - 1.906227428001995580) < 1e-13

    def test_roundtrip(self):
        a, e = hd2ae(-0.4, 0.3, 0.9)
        h, d = ae2hd(a, e, 0.9)
        assert jnp.abs(h - -0.4) < 1e-14
        assert jnp.abs(d - 0.3) < 1e-14

    def test_hd2pa_pole_is_zero(self):
        """At the pole the parallactic angle is undefined and returns zero."""
        assert hd2pa(0.0, jnp.pi / 2.0, jnp.pi / 2.0) == 0.0

    def test_vmap(self):
        ha = jnp.array([1.1, -1.1])
        a, _ = jax.vmap(hd2ae, in_axes=(0, None, None))(ha, 1.2, 0.3)
        # Symmetric about the meridian
        assert jnp.abs(a[0] + a[1] - 2.0 * jnp.pi) < 1e-12


class TestEcliptic:
    def test_ecm06(self):
        rm = ecm06(2456165.5, 0.401182685)
        expected = jnp.array([
            [0.9999952427708701137, -0.2829062057663042347e-2, -0.1229163741100017629e-2],
            [0.3084546876908653562e-2, 0.9174891871550392514, 0.3977487611849338124],
            [0.2488512951527405928e-5, -0.3977506604161195467, 0.9174935488232863071],
        ])
        assert jnp.max(jnp.abs(rm - expected)) < 1e-14

    def test_eqec06(self):
        dl, db = eqec06(1234.5, 2440000.5, 1.234, 0.987)
        assert jnp.abs(dl - 1.342509918994654619) < 1e-14
        assert jnp.abs(db - 0.5926215259704608132) < 1e-14

    def test_eceq06(self):
        dr, dd = eceq06(2456165.5, 0.401182685, 5.1, -0.9)
        assert jnp.abs(dr - 5.533459733613627767) < 1e-14
        assert jnp.abs(dd - -1.246542932554480576) < 1e-14

    def test_eqec06_roundtrip(self):
        dl, db = eqec06(2456165.5, 0.401182685, 2.0, -0.3)
        dr, dd = eceq06(2456165.5, 0.401182685, dl, db)
        assert jnp.abs(dr - 2.0) < 1e-14
        assert jnp.abs(dd - -0.3) < 1e-14

    def test_ltecm(self):
        rm = ltecm(-3000.0)
        expected = jnp.array([
            [0.3564105644859788825, 0.8530575738617682284, 0.3811355207795060435],
            [-0.9343283469640709942, 0.3247830597681745976, 0.1467872751535940865],
            [0.1431636191201167793e-2, -0.4084222566960599342, 0.9127919865189030899],
        ])
        assert jnp.max(jnp.abs(rm - expected)) < 1e-14

    def test_lteqec(self):
        dl, db = lteqec(-1500.0, 1.234, 0.987)
        assert jnp.abs(dl - 0.5039483649047114859) < 1e-14
        assert jnp.abs(db - 0.5848534459726224882) < 1e-14

    def test_lteceq(self):
        dr, dd = lteceq(2500.0, 1.5, 0.6)
        assert jnp.abs(dr - 1.275156021861921167) < 1e-14
        assert jnp.abs(dd - 0.9966573543519204791) < 1e-14


class TestGalactic:
    def test_g2icrs(self):
        dr, dd = g2icrs(5.5850536063818546461558, -0.7853981633974483096157)
        assert jnp.abs(dr - 5.9338074302227188048671) < 1e-14
        assert jnp.abs(dd - -1.1784870613579944551541) < 1e-14

    def test_icrs2g(self):
        dl, db = icrs2g(5.9338074302227188048671, -1.1784870613579944551541)
        assert jnp.abs(dl - 5.5850536063818546461558) < 1e-14
        assert jnp.abs(db - -0.7853981633974483096157) < 1e-14

    def test_galactic_pole(self):
        """The north galactic pole is at RA 192.85948, Dec 27.12825 deg."""
        dr, dd = g2icrs(0.0, jnp.pi / 2.0)
        assert jnp.abs(jnp.degrees(dr) - 192.85948) < 1e-5
        assert jnp.abs(jnp.degrees(dd) - 27.12825) < 1e-5


class TestGeodetic:
    @pytest.mark.parametrize(
        "n, a, f",
        [
            (WGS84, 6378137.0, 0.3352810664747480720e-2),
            (GRS80, 6378137.0, 0.3352810681182318935e-2),
            (WGS72, 6378135.0, 0.3352779454167504862e-2),
        ],
    )
    def test_eform(self, n, a, f):
        ra, rf, j = eform(n)
        assert jnp.abs(ra - a) < 1e-10
        assert jnp.abs(rf - f) < 1e-18
        assert int(j) == 0

    @pytest.mark.parametrize("n", [0, 4])
    def test_eform_bad_identifier(self, n):
        a, f, j = eform(n)
        assert int(j) == -1
        assert a == 0.0
        assert f == 0.0

    @pytest.mark.parametrize(
        "n, phi, height",
        [
            (WGS84, 0.97160184819075459, 331.4172461426059892),
            (GRS80, 0.97160184820607853, 331.41731754844348),
            (WGS72, 0.9716018181101511937, 333.2770726130318123),
        ],
    )
    def test_gc2gd(self, n, phi, height):
        e, p, h, j = gc2gd(n, _XYZ)
        assert jnp.abs(e - 0.9827937232473290680) < 1e-14
        assert jnp.abs(p - phi) < 1e-14
        assert jnp.abs(h - height) < 1e-8
        assert int(j) == 0

    def test_gc2gd_bad_identifier(self):
        *_, j = gc2gd(0, _XYZ)
        assert int(j) == -1

    def test_gc2gde(self):
        e, p, h, j = gc2gde(6378136.0, 0.0033528, _XYZ)
        assert jnp.abs(e - 0.9827937232473290680) < 1e-14
        assert jnp.abs(p - 0.9716018377570411532) < 1e-14
        assert jnp.abs(h - 332.36862495764397) < 1e-8
        assert int(j) == 0

    def test_gc2gde_illegal_f(self):
        *_, j = gc2gde(6378136.0, 1.5, _XYZ)
        assert int(j) == -1

    def test_gd2gc(self):
        expected = {
            WGS84: (-5599000.5577049947, 233011.67223479203, -3040909.4706983363),
            GRS80: (-5599000.5577260984, 233011.6722356702949, -3040909.4706095476),
            WGS72: (-5598998.7626301490, 233011.5975297822211, -3040908.6861467111),
        }
        for n, xyz_ref in expected.items():
            xyz, j = gd2gc(n, 3.1, -0.5, 2500.0)
            assert jnp.max(jnp.abs(xyz - jnp.array(xyz_ref))) < 1e-7
            assert int(j) == 0

    def test_gd2gc_bad_identifier(self):
        _, j = gd2gc(0, 3.1, -0.5, 2500.0)
        assert int(j) == -1

    def test_gd2gce(self):
        xyz, j = gd2gce(6378136.0, 0.0033528, 3.1, -0.5, 2500.0)
        expected = jnp.array([-5598999.6665116328, 233011.6351463057189, -3040909.0517314132])
        assert jnp.max(jnp.abs(xyz - expected)) < 1e-7
        assert int(j) == 0

    def test_roundtrip(self):
        xyz, _ = gd2gc(WGS84, -0.527800806, -1.2345856, 2738.0)
        e, p, h, j = gc2gd(WGS84, xyz)
        assert jnp.abs(e - -0.527800806) < 1e-14
        assert jnp.abs(p - -1.2345856) < 1e-14
        assert jnp.abs(h - 2738.0) < 1e-6
        assert int(j) == 0

    def test_gc2gd_jit(self):
        e, p, h, j = jax.jit(gc2gd)(WGS84, _XYZ)
        assert jnp.abs(h - 331.4172461426059892) < 1e-8
