"""Tests for calendar and epoch conversions."""

import jax
import jax.numpy as jnp

from sofajax.calendars import (
    cal2jd,
    epb,
    epb2jd,
    epj,
    epj2jd,
    is_leap_year,
    jd2cal,
    jdcalf,
)


class TestCal2jd:
    def test_reference_date(self):
        djm0, djm, j = cal2jd(2003, 6, 1)
        assert djm0 == 2400000.5
        assert djm == 52791.0
        assert int(j) == 0

    def test_bad_year(self):
        _, _, j = cal2jd(-4800, 1, 1)
        assert int(j) == -1

    def test_bad_month(self):
        _, _, j = cal2jd(2003, 13, 1)
        assert int(j) == -2

    def test_bad_day_still_computed(self):
        """A bad day is flagged but the date is still evaluated."""
        djm0, djm, j = cal2jd(2003, 2, 29)
        assert int(j) == -3
        assert djm == 52699.0

    def test_leap_day(self):
        _, djm, j = cal2jd(2004, 2, 29)
        assert int(j) == 0
        assert djm == 53064.0

    def test_vmap(self):
        iy = jnp.array([2003, 2000, 1858])
        im = jnp.array([6, 1, 11])
        id = jnp.array([1, 1, 17])
        _, djm, j = jax.vmap(cal2jd)(iy, im, id)
        assert jnp.array_equal(djm, jnp.array([52791.0, 51544.0, 0.0]))
        assert jnp.all(j == 0)


class TestIsLeapYear:
    def test_rules(self):
        years = jnp.array([1900, 2000, 2004, 2003])
        assert is_leap_year(years).tolist() == [False, True, True, False]


class TestJd2cal:
    def test_reference_date(self):
        iy, im, id, fd, j = jd2cal(2400000.5, 50123.9999)
        assert int(iy) == 1996
        assert int(im) == 2
        assert int(id) == 10
        assert jnp.abs(fd - 0.9999) < 1e-7
        assert int(j) == 0

    def test_split_independent(self):
        a = jd2cal(2450123.4999, 0.0)
        b = jd2cal(0.0, 2450123.4999)
        assert [int(v) for v in a[:3]] == [int(v) for v in b[:3]]
        assert jnp.abs(a[3] - b[3]) < 1e-9

    def test_unacceptable_date(self):
        iy, _, _, fd, j = jd2cal(-1e6, 0.0)
        assert int(j) == -1
        assert int(iy) == 0
        assert fd == 0.0

    def test_roundtrip(self):
        for iy, im, id in [(2003, 6, 1), (1600, 3, 1), (-4000, 12, 31)]:
            djm0, djm, _ = cal2jd(iy, im, id)
            y, m, d, fd, j = jd2cal(djm0, djm)
            assert (int(y), int(m), int(d)) == (iy, im, id)
            assert fd == 0.0
            assert int(j) == 0


class TestJdcalf:
    def test_reference_date(self):
        iy, im, id, ifrac, j = jdcalf(4, 2400000.5, 50123.9999)
        assert (int(iy), int(im), int(id), int(ifrac)) == (1996, 2, 10, 9999)
        assert int(j) == 0

    def test_rounds_into_next_day(self):
        iy, im, id, ifrac, j = jdcalf(2, 2400000.5, 50123.9999)
        assert (int(iy), int(im), int(id), int(ifrac)) == (1996, 2, 11, 0)
        assert int(j) == 0

    def test_bad_ndp_flagged(self):
        *_, j = jdcalf(12, 2400000.5, 50123.9999)
        assert int(j) == 1


class TestEpochs:
    def test_epb(self):
        assert jnp.abs(epb(2415019.8135, 30103.18648) - 1982.418424159278580) < 1e-12

    def test_epb2jd(self):
        djm0, djm = epb2jd(1957.3)
        assert djm0 == 2400000.5
        assert jnp.abs(djm - 35948.1915101513) < 1e-9

    def test_epj(self):
        assert jnp.abs(epj(2451545.0, -7392.5) - 1979.760438056125941) < 1e-12

    def test_epj2jd(self):
        djm0, djm = epj2jd(1996.8)
        assert djm0 == 2400000.5
        assert jnp.abs(djm - 50375.7) < 1e-9

    def test_epj_roundtrip(self):
        djm0, djm = epj2jd(2024.5)
        assert jnp.abs(epj(djm0, djm) - 2024.5) < 1e-12
