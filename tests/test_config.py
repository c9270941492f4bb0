"""Tests for the sofajax.config module."""

import jax
import jax.numpy as jnp
import pytest

from sofajax.calendars import cal2jd, jd2cal
from sofajax.config import get_dtype, set_dtype
from sofajax.fundamental_arguments import fal03
from sofajax.precession_nutation import obl06


@pytest.fixture(autouse=True)
def reset_dtype():
    """Restore the float64 default after each test."""
    set_dtype(jnp.float64)
    yield
    set_dtype(jnp.float64)


class TestGetSetDtype:
    def test_default_dtype(self):
        assert get_dtype() == jnp.float64

    def test_set_float32(self):
        set_dtype(jnp.float32)
        assert get_dtype() == jnp.float32

    def test_set_float16(self):
        set_dtype(jnp.float16)
        assert get_dtype() == jnp.float16

    def test_set_bfloat16(self):
        set_dtype(jnp.bfloat16)
        assert get_dtype() == jnp.bfloat16

    def test_roundtrip(self):
        for dtype in (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64):
            set_dtype(dtype)
            assert get_dtype() == dtype

    def test_invalid_dtype_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype(jnp.int32)

    def test_invalid_dtype_string_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype("float64")

    def test_x64_enabled_on_import(self):
        assert jax.config.jax_enable_x64 is True


class TestDtypeSwitchingOutputs:
    """Verify that table-driven outputs follow the configured dtype."""

    def test_fundamental_argument_float64(self):
        assert fal03(jnp.float64(0.8)).dtype == jnp.float64

    def test_obliquity_float64(self):
        assert obl06(2400000.5, 54388.0).dtype == jnp.float64

    def test_fundamental_argument_float32(self):
        set_dtype(jnp.float32)
        assert fal03(jnp.float32(0.8)).dtype == jnp.float32

    def test_cal2jd_float32(self):
        set_dtype(jnp.float32)
        djm0, djm, j = cal2jd(2003, 6, 1)
        assert djm0.dtype == jnp.float32
        assert djm.dtype == jnp.float32
        assert djm == 52791.0
        assert j == 0

    def test_cal2jd_float64(self):
        djm0, djm, _ = cal2jd(2003, 6, 1)
        assert djm0.dtype == jnp.float64
        assert djm.dtype == jnp.float64


class TestFloat64Precision:
    def test_two_part_date_fraction(self):
        """Two-part dates keep sub-nanosecond resolution in float64."""
        _, _, _, fd, _ = jd2cal(2451545.0, 1e-9)
        assert abs(float(fd) - (0.5 + 1e-9)) < 1e-15


class TestJITRetrace:
    def test_jit_retrace_on_dtype_change(self):
        """JIT retraces when input dtypes change."""

        @jax.jit
        def compute(t):
            return fal03(t)

        set_dtype(jnp.float32)
        assert compute(jnp.float32(0.8)).dtype == jnp.float32

        set_dtype(jnp.float64)
        assert compute(jnp.float64(0.8)).dtype == jnp.float64
