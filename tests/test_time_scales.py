"""Tests for time scale conversions against IAU SOFA reference values."""

import jax
import jax.numpy as jnp
import pytest

from sofajax.time_scales import (
    LEAP_SECOND_TABLE_YEAR,
    d2dtf,
    dat,
    dtf2d,
    taitt,
    taiut1,
    taiutc,
    tcbtdb,
    tcgtt,
    tdbtcb,
    tdbtt,
    tttai,
    tttcg,
    tttdb,
    ttut1,
    ut1tai,
    ut1tt,
    ut1utc,
    utctai,
    utcut1,
)

_TOL_PART1 = 1e-6
_TOL_PART2 = 1e-12


class TestDat:
    @pytest.mark.parametrize(
        "iy, im, id, expected",
        [(2003, 6, 1, 32.0), (2008, 1, 17, 33.0), (2017, 9, 1, 37.0), (1972, 1, 1, 10.0)],
    )
    def test_table(self, iy, im, id, expected):
        deltat, j = dat(iy, im, id, 0.0)
        assert jnp.abs(deltat - expected) < 1e-12
        assert int(j) == 0

    def test_pre_1972_drift(self):
        deltat, j = dat(1970, 1, 1, 0.0)
        assert jnp.abs(deltat - 8.000082) < 1e-6
        assert int(j) == 0

    def test_before_utc(self):
        deltat, j = dat(1950, 1, 1, 0.0)
        assert deltat == 0.0
        assert int(j) == 1

    def test_dubious_future_year(self):
        _, j = dat(LEAP_SECOND_TABLE_YEAR + 6, 1, 1, 0.0)
        assert int(j) == 1

    def test_bad_month(self):
        _, j = dat(2003, 13, 1, 0.0)
        assert int(j) == -2

    def test_bad_fraction(self):
        _, j = dat(2003, 6, 1, 1.5)
        assert int(j) == -4

    def test_vmap(self):
        deltat, j = jax.vmap(dat)(
            jnp.array([2003, 2008, 2017]), jnp.array([6, 1, 9]), jnp.array([1, 17, 1]), jnp.zeros(3)
        )
        assert jnp.max(jnp.abs(deltat - jnp.array([32.0, 33.0, 37.0]))) < 1e-12
        assert jnp.all(j == 0)


class TestFormatting:
    def test_d2dtf_leap_second(self):
        iy, im, id, ihmsf, j = d2dtf("UTC", 5, 2400000.5, 49533.99999)
        assert (int(iy), int(im), int(id)) == (1994, 6, 30)
        assert [int(v) for v in ihmsf] == [23, 59, 60, 13599]
        assert int(j) == 0

    def test_d2dtf_non_utc_rolls_over(self):
        iy, im, id, ihmsf, j = d2dtf("TT", 0, 2400000.5, 49533.9999999)
        assert (int(iy), int(im), int(id)) == (1994, 7, 1)
        assert [int(v) for v in ihmsf] == [0, 0, 0, 0]
        assert int(j) == 0

    def test_dtf2d_leap_second(self):
        u1, u2, j = dtf2d("UTC", 1994, 6, 30, 23, 59, 60.13599)
        assert jnp.abs(u1 + u2 - 2449534.49999) < 1e-6
        assert int(j) == 0

    def test_dtf2d_second_out_of_range(self):
        """A 61st second on a normal day is flagged but still encoded."""
        _, _, j = dtf2d("UTC", 1994, 6, 29, 23, 59, 60.5)
        assert int(j) == 2

    def test_dtf2d_bad_hour(self):
        _, _, j = dtf2d("TAI", 1994, 6, 30, 24, 0, 0.0)
        assert int(j) == -4

    def test_roundtrip(self):
        u1, u2, _ = dtf2d("UTC", 2010, 7, 24, 11, 18, 7.318)
        iy, im, id, ihmsf, j = d2dtf("UTC", 3, u1, u2)
        assert (int(iy), int(im), int(id)) == (2010, 7, 24)
        assert [int(v) for v in ihmsf] == [11, 18, 7, 318]
        assert int(j) == 0


class TestUniformScales:
    def test_taitt(self):
        t1, t2 = taitt(2453750.5, 0.892482639)
        assert jnp.abs(t1 - 2453750.5) < _TOL_PART1
        assert jnp.abs(t2 - 0.892855139) < _TOL_PART2

    def test_tttai(self):
        a1, a2 = tttai(2453750.5, 0.892482639)
        assert jnp.abs(a1 - 2453750.5) < _TOL_PART1
        assert jnp.abs(a2 - 0.892110139) < _TOL_PART2

    def test_taiut1(self):
        u1, u2 = taiut1(2453750.5, 0.892482639, -32.6659)
        assert jnp.abs(u1 - 2453750.5) < _TOL_PART1
        assert jnp.abs(u2 - 0.8921045614537037037) < _TOL_PART2

    def test_ut1tai(self):
        a1, a2 = ut1tai(2453750.5, 0.892104561, -32.6659)
        assert jnp.abs(a1 - 2453750.5) < _TOL_PART1
        assert jnp.abs(a2 - 0.8924826385462962963) < _TOL_PART2

    def test_ttut1(self):
        u1, u2 = ttut1(2453750.5, 0.892855139, 64.8499)
        assert jnp.abs(u1 - 2453750.5) < _TOL_PART1
        assert jnp.abs(u2 - 0.8921045614537037037) < _TOL_PART2

    def test_ut1tt(self):
        t1, t2 = ut1tt(2453750.5, 0.892104561, 64.8499)
        assert jnp.abs(t1 - 2453750.5) < _TOL_PART1
        assert jnp.abs(t2 - 0.8928551385462962963) < _TOL_PART2

    def test_tttcg(self):
        g1, g2 = tttcg(2453750.5, 0.892482639)
        assert jnp.abs(g1 - 2453750.5) < _TOL_PART1
        assert jnp.abs(g2 - 0.8924900312508587113) < _TOL_PART2

    def test_tcgtt(self):
        t1, t2 = tcgtt(2453750.5, 0.892862531)
        assert jnp.abs(t1 - 2453750.5) < _TOL_PART1
        assert jnp.abs(t2 - 0.8928551387488816828) < _TOL_PART2

    def test_tttdb(self):
        b1, b2 = tttdb(2453750.5, 0.892855139, -0.000201)
        assert jnp.abs(b1 - 2453750.5) < _TOL_PART1
        assert jnp.abs(b2 - 0.8928551366736111111) < _TOL_PART2

    def test_tdbtt(self):
        t1, t2 = tdbtt(2453750.5, 0.892855137, -0.000201)
        assert jnp.abs(t1 - 2453750.5) < _TOL_PART1
        assert jnp.abs(t2 - 0.8928551393263888889) < _TOL_PART2

    def test_tdbtcb(self):
        b1, b2 = tdbtcb(2453750.5, 0.892855137)
        assert jnp.abs(b1 - 2453750.5) < _TOL_PART1
        assert jnp.abs(b2 - 0.8930195997253656716) < _TOL_PART2

    def test_tcbtdb(self):
        b1, b2 = tcbtdb(2453750.5, 0.893019599)
        assert jnp.abs(b1 - 2453750.5) < _TOL_PART1
        assert jnp.abs(b2 - 0.8928551362746343397) < _TOL_PART2

    def test_split_preserved(self):
        """The larger input part is returned unchanged in the same slot."""
        t1, t2 = taitt(0.892482639, 2453750.5)
        assert t2 == 2453750.5
        assert jnp.abs(t1 - 0.892855139) < _TOL_PART2


class TestUtcScales:
    def test_utctai(self):
        a1, a2, j = utctai(2453750.5, 0.892100694)
        assert jnp.abs(a1 - 2453750.5) < _TOL_PART1
        assert jnp.abs(a2 - 0.8924826384444444444) < _TOL_PART2
        assert int(j) == 0

    def test_taiutc(self):
        u1, u2, j = taiutc(2453750.5, 0.892482639)
        assert jnp.abs(u1 - 2453750.5) < _TOL_PART1
        assert jnp.abs(u2 - 0.8921006945555555556) < _TOL_PART2
        assert int(j) == 0

    def test_utcut1(self):
        u1, u2, j = utcut1(2453750.5, 0.892100694, 0.3341)
        assert jnp.abs(u1 - 2453750.5) < _TOL_PART1
        assert jnp.abs(u2 - 0.8921045608981481481) < _TOL_PART2
        assert int(j) == 0

    def test_ut1utc(self):
        u1, u2, j = ut1utc(2453750.5, 0.892104561, 0.3341)
        assert jnp.abs(u1 - 2453750.5) < _TOL_PART1
        assert jnp.abs(u2 - 0.8921006941018518519) < _TOL_PART2
        assert int(j) == 0

    def test_utctai_taiutc_roundtrip(self):
        a1, a2, _ = utctai(2457754.5, -0.25)
        u1, u2, j = taiutc(a1, a2)
        assert jnp.abs((u1 - 2457754.5) + (u2 + 0.25)) < 1e-12
        assert int(j) == 0

    def test_utctai_unacceptable_date(self):
        *_, j = utctai(-1e7, 0.0)
        assert int(j) == -1

    def test_utctai_jit(self):
        a1, a2, j = jax.jit(utctai)(2453750.5, 0.892100694)
        assert jnp.abs(a2 - 0.8924826384444444444) < _TOL_PART2
        assert int(j) == 0
