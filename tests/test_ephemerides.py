"""Tests for the approximate lunar ephemeris."""

import jax
import jax.numpy as jnp

from sofajax.ephemerides import moon98


class TestMoon98:
    def test_reference_values(self):
        pv = moon98(2400000.5, 43999.9)
        p = jnp.array([-0.2601295959971044180e-2, 0.6139750944302742096e-3, 0.2640794528229828909e-3])
        v = jnp.array([-0.1244321506649895021e-3, -0.5219076942678119398e-3, -0.1716132214378462047e-3])
        assert pv.shape == (2, 3)
        assert jnp.max(jnp.abs(pv[0] - p)) < 1e-11
        assert jnp.max(jnp.abs(pv[1] - v)) < 1e-11

    def test_distance_is_lunar(self):
        """Geocentric distance stays within perigee/apogee bounds."""
        t = jnp.linspace(0.0, 27.3, 20)
        pv = jax.vmap(moon98, in_axes=(None, 0))(2451545.0, t)
        r = jnp.sqrt(jnp.sum(pv[:, 0] ** 2, axis=-1))
        assert jnp.all(r > 0.00235)
        assert jnp.all(r < 0.00274)

    def test_jit(self):
        pv = jax.jit(moon98)(2400000.5, 43999.9)
        assert jnp.abs(pv[0, 0] - -0.2601295959971044180e-2) < 1e-11
