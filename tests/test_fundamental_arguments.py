"""Tests for the IERS 2003 fundamental arguments.

Reference values are from the IAU SOFA test suite, evaluated at
t = 0.8 Julian centuries after J2000.0.
"""

import jax
import jax.numpy as jnp
import pytest

from sofajax.fundamental_arguments import (
    fad03,
    fae03,
    faf03,
    faju03,
    fal03,
    falp03,
    fama03,
    fame03,
    fane03,
    faom03,
    fapa03,
    fasa03,
    faur03,
    fave03,
)

_T = 0.80
_TOL = 1e-12


@pytest.mark.parametrize(
    "func, expected",
    [
        (fal03, 5.132369751108684150),
        (falp03, 6.226797973505507345),
        (faf03, 0.2597711366745499518),
        (fad03, 1.946709205396925672),
        (faom03, -5.973618440951302183),
        (fame03, 5.417338184297289661),
        (fave03, 3.424900460533758000),
        (fae03, 1.744713738913081846),
        (fama03, 3.275506840277781492),
        (faju03, 5.275711665202481138),
        (fasa03, 5.371574539440827046),
        (faur03, 5.180636450180413523),
        (fane03, 2.079343830860413523),
        (fapa03, 0.1950884762240000000e-1),
    ],
)
def test_reference_value(func, expected):
    assert jnp.abs(func(_T) - expected) < _TOL


class TestVectorised:
    def test_vmap_matches_scalar(self):
        t = jnp.array([-0.5, 0.0, 0.8])
        batched = jax.vmap(fal03)(t)
        for i in range(3):
            assert jnp.abs(batched[i] - fal03(t[i])) < 1e-15

    def test_jit(self):
        assert jnp.abs(jax.jit(faom03)(_T) - -5.973618440951302183) < _TOL

    def test_grad_is_rate(self):
        """d(fapa03)/dt is the linear rate of the general precession."""
        assert jnp.abs(jax.grad(fapa03)(0.0) - 0.02438175) < 1e-8
