"""Tests for gnomonic (tangent plane) projections."""

import jax
import jax.numpy as jnp
import pytest

from sofajax.projection import tpors, tporv, tpsts, tpstv, tpxes, tpxev
from sofajax.vector_matrix import s2c


class TestProject:
    def test_tpxes(self):
        xi, eta, j = tpxes(1.3, 1.55, 2.3, 1.5)
        assert jnp.abs(xi - -0.01753200983236980595) < 1e-15
        assert jnp.abs(eta - 0.05962940005778712891) < 1e-15
        assert int(j) == 0

    def test_tpxev(self):
        xi, eta, j = tpxev(s2c(1.3, 1.55), s2c(2.3, 1.5))
        assert jnp.abs(xi - -0.01753200983236980595) < 1e-15
        assert jnp.abs(eta - 0.05962940005778712891) < 1e-15
        assert int(j) == 0

    def test_tpxes_star_behind_plane(self):
        _, _, j = tpxes(0.0, -1.0, 0.0, 1.0)
        assert int(j) != 0

    def test_tpxes_vmap(self):
        a = jnp.array([1.3, 2.3])
        b = jnp.array([1.55, 1.5])
        xi, eta, j = jax.vmap(tpxes, in_axes=(0, 0, None, None))(a, b, 2.3, 1.5)
        assert jnp.abs(xi[0] - -0.01753200983236980595) < 1e-15
        assert jnp.abs(xi[1]) < 1e-15
        assert jnp.abs(eta[1]) < 1e-15
        assert jnp.all(j == 0)


class TestDeproject:
    def test_tpsts(self):
        a, b = tpsts(-0.03, 0.07, 2.3, 1.5)
        assert jnp.abs(a - 0.7596127167359629775) < 1e-14
        assert jnp.abs(b - 1.540864645109263028) < 1e-13

    def test_tpstv(self):
        v = tpstv(-0.03, 0.07, s2c(2.3, 1.5))
        expected = jnp.array([0.02170030454907376677, 0.02060909590535367447, 0.9995520806583523804])
        assert jnp.max(jnp.abs(v - expected)) < 1e-15

    @pytest.mark.parametrize("xi, eta", [(0.01, -0.02), (-0.03, 0.07), (0.2, 0.1)])
    def test_tpsts_tpxes_roundtrip(self, xi, eta):
        a, b = tpsts(xi, eta, 2.3, 1.5)
        xi2, eta2, j = tpxes(a, b, 2.3, 1.5)
        assert jnp.abs(xi2 - xi) < 1e-14
        assert jnp.abs(eta2 - eta) < 1e-14
        assert int(j) == 0


class TestTangentPoint:
    def test_tpors(self):
        a01, b01, a02, b02, n = tpors(-0.03, 0.07, 1.3, 1.5)
        assert jnp.abs(a01 - 1.736621577783208748) < 1e-13
        assert jnp.abs(b01 - 1.436736561844090323) < 1e-13
        assert jnp.abs(a02 - 4.004971075806584490) < 1e-13
        assert jnp.abs(b02 - 1.565084088476417917) < 1e-13
        assert int(n) == 2

    def test_tporv(self):
        v01, v02, n = tporv(-0.03, 0.07, s2c(1.3, 1.5))
        expected1 = jnp.array([-0.02206252822366888610, 0.1318251060359645016, 0.9910274397144543895])
        expected2 = jnp.array([-0.003712211763801968173, -0.004341519956299836813, 0.9999836852110587012])
        assert jnp.max(jnp.abs(v01 - expected1)) < 1e-15
        assert jnp.max(jnp.abs(v02 - expected2)) < 1e-15
        assert int(n) == 2

    def test_tpors_consistent_with_tpxes(self):
        """Projecting the star about either solution gives back (xi, eta)."""
        a01, b01, a02, b02, _ = tpors(-0.03, 0.07, 1.3, 1.5)
        for a0, b0 in ((a01, b01), (a02, b02)):
            xi, eta, _ = tpxes(1.3, 1.5, a0, b0)
            assert jnp.abs(xi - -0.03) < 1e-12
            assert jnp.abs(eta - 0.07) < 1e-12

    def test_tpors_no_solution(self):
        # A near-polar star cannot sit this far off-axis
        *_, n = tpors(1.0, 1.0, 0.0, 1.55)
        assert int(n) == 0
