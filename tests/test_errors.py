"""Tests for status-code handling."""

import logging

import jax.numpy as jnp
import pytest

from sofajax.calendars import cal2jd
from sofajax.errors import SofaError, check_status, describe_status


class TestDescribeStatus:
    def test_ok(self):
        assert describe_status("cal2jd", 0) == "OK"

    def test_known_error(self):
        assert describe_status("cal2jd", -2) == "bad month"

    def test_unknown_code(self):
        assert describe_status("cal2jd", -9) == "unknown status -9"

    def test_unknown_routine(self):
        assert describe_status("nosuch", 3) == "unknown status 3"

    def test_bitflags_decomposed(self):
        """starpv-style statuses combine several warnings."""
        msg = describe_status("starpv", 5)
        assert "distance overridden" in msg
        assert "solution did not converge" in msg
        assert "excessive speed" not in msg

    def test_bitflag_negative_is_plain(self):
        assert describe_status("starpm", -1) == "system error"

    def test_shared_tables(self):
        assert describe_status("tf2d", 1) == describe_status("tf2a", 1)
        assert describe_status("tpxev", 2) == "antistar on tangent plane"


class TestCheckStatus:
    def test_ok_returns_zero(self):
        assert check_status(jnp.int32(0), "cal2jd") == 0

    def test_negative_raises(self):
        _, _, j = cal2jd(2003, 13, 1)
        with pytest.raises(SofaError, match="bad month") as excinfo:
            check_status(j, "cal2jd")
        assert excinfo.value.status == -2
        assert excinfo.value.routine == "cal2jd"

    def test_sofa_error_is_value_error(self):
        with pytest.raises(ValueError):
            check_status(-1, "jd2cal")

    def test_positive_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="sofajax.errors"):
            code = check_status(jnp.int32(1), "dat")
        assert code == 1
        assert "dubious year" in caplog.text

    def test_non_scalar_raises(self):
        with pytest.raises(ValueError, match="scalar"):
            check_status(jnp.zeros(3, dtype=jnp.int32), "dat")
