"""Tests for the vector/matrix toolkit against IAU SOFA reference values."""

import jax
import jax.numpy as jnp
import pytest

from sofajax.constants import D2PI, DPI
from sofajax.vector_matrix import (
    Rx,
    Rz,
    a2af,
    a2tf,
    af2a,
    anp,
    anpm,
    c2s,
    cp,
    cpv,
    cr,
    d2tf,
    d2tf_fields,
    ir,
    p2pv,
    p2s,
    pap,
    pas,
    pdp,
    pm,
    pmp,
    pn,
    ppp,
    ppsp,
    pv2p,
    pv2s,
    pvdpv,
    pvm,
    pvmpv,
    pvppv,
    pvu,
    pvup,
    pvxpv,
    pxp,
    rm2v,
    rv2m,
    rx,
    rxp,
    rxpv,
    rxr,
    ry,
    rz,
    s2c,
    s2p,
    s2pv,
    s2xpv,
    sepp,
    seps,
    sxp,
    sxpv,
    tf2a,
    tf2d,
    tr,
    trxp,
    trxpv,
    zp,
    zpv,
    zr,
)

_R = jnp.array([[2.0, 3.0, 2.0], [3.0, 2.0, 3.0], [3.0, 4.0, 5.0]])
_PV = jnp.array([[0.2, 1.5, 0.1], [1.5, 0.2, 0.1]])


class TestAngles:
    def test_anp(self):
        assert jnp.abs(anp(-0.1) - 6.183185307179586477) < 1e-12

    def test_anp_range(self):
        a = anp(jnp.linspace(-20.0, 20.0, 101))
        assert jnp.all((a >= 0.0) & (a < D2PI))

    def test_anpm(self):
        assert jnp.abs(anpm(-4.0) - 2.283185307179586477) < 1e-12

    def test_anpm_range(self):
        a = anpm(jnp.linspace(-20.0, 20.0, 101))
        assert jnp.all((a >= -DPI) & (a < DPI))

    def test_d2tf(self):
        assert d2tf(4, -0.987654321) == ("-", (23, 42, 13, 3333))

    def test_d2tf_fields_traceable(self):
        sign, fields = jax.jit(d2tf_fields, static_argnums=0)(4, -0.987654321)
        assert int(sign) == -1
        assert [int(v) for v in fields] == [23, 42, 13, 3333]

    def test_d2tf_negative_ndp(self):
        """Rounding to 10 minutes."""
        assert d2tf(-3, 0.25 + 4.0 / 1440.0) == ("+", (6, 0, 0, 0))

    def test_a2tf(self):
        assert a2tf(4, -3.01234) == ("-", (11, 30, 22, 6484))

    def test_a2af(self):
        assert a2af(4, 2.345) == ("+", (134, 21, 30, 9706))

    def test_af2a(self):
        a, j = af2a("-", 45, 13, 27.2)
        assert jnp.abs(a - -0.7893115794313644842) < 1e-12
        assert int(j) == 0

    def test_af2a_bad_arcminutes(self):
        _, j = af2a("+", 45, 60, 0.0)
        assert int(j) == 2

    def test_tf2a(self):
        a, j = tf2a("+", 4, 58, 20.2)
        assert jnp.abs(a - 1.301739278189537429) < 1e-12
        assert int(j) == 0

    def test_tf2d(self):
        d, j = tf2d(" ", 23, 55, 10.9)
        assert jnp.abs(d - 0.9966539351851851852) < 1e-12
        assert int(j) == 0

    def test_tf2d_bad_seconds(self):
        _, j = tf2d("+", 1, 1, 60.0)
        assert int(j) == 3


class TestRotations:
    def test_rx(self):
        r = rx(0.3456789, _R)
        expected = jnp.array([
            [2.0, 3.0, 2.0],
            [3.839043388235612460, 3.237033249594111899, 4.516714379005982719],
            [1.806030415924501684, 3.085711545336372503, 3.687721683977873065],
        ])
        assert jnp.max(jnp.abs(r - expected)) < 1e-12

    def test_ry(self):
        r = ry(0.3456789, _R)
        expected = jnp.array([
            [0.8651847818978159930, 1.467194920539316554, 0.1875137911274457342],
            [3.0, 2.0, 3.0],
            [3.500207892850427330, 4.779889022262298150, 5.381899160903798712],
        ])
        assert jnp.max(jnp.abs(r - expected)) < 1e-12

    def test_rz(self):
        r = rz(0.3456789, _R)
        expected = jnp.array([
            [2.898197754208926769, 3.500207892850427330, 2.898197754208926769],
            [2.144865911309686813, 0.865184781897815993, 2.144865911309686813],
            [3.0, 4.0, 5.0],
        ])
        assert jnp.max(jnp.abs(r - expected)) < 1e-12

    def test_elementary_matrix_sign(self):
        """Frame rotation: +x seen from a frame turned 90 deg about z is -y."""
        p = Rz(DPI / 2.0) @ jnp.array([1.0, 0.0, 0.0])
        assert jnp.max(jnp.abs(p - jnp.array([0.0, -1.0, 0.0]))) < 1e-15

    def test_rx_matches_elementary(self):
        assert jnp.max(jnp.abs(rx(0.7, ir()) - Rx(0.7))) < 1e-15

    def test_tr(self):
        assert jnp.array_equal(tr(_R), _R.T)

    def test_rxp(self):
        rp = rxp(_R, jnp.array([0.2, 1.5, 0.1]))
        assert jnp.max(jnp.abs(rp - jnp.array([5.1, 3.9, 7.1]))) < 1e-12

    def test_trxp(self):
        rp = trxp(_R, jnp.array([0.2, 1.5, 0.1]))
        assert jnp.max(jnp.abs(rp - jnp.array([5.2, 4.0, 5.4]))) < 1e-12

    def test_rxpv(self):
        rpv = rxpv(_R, _PV)
        expected = jnp.array([[5.1, 3.9, 7.1], [3.8, 5.2, 5.8]])
        assert jnp.max(jnp.abs(rpv - expected)) < 1e-12

    def test_trxpv(self):
        trpv = trxpv(_R, _PV)
        expected = jnp.array([[5.2, 4.0, 5.4], [3.9, 5.3, 4.1]])
        assert jnp.max(jnp.abs(trpv - expected)) < 1e-12

    def test_rm2v(self):
        r = jnp.array([[0.00, -0.80, -0.60], [0.80, -0.36, 0.48], [0.60, 0.48, -0.64]])
        w = rm2v(r)
        expected = jnp.array([0.0, 1.413716694115406957, -1.884955592153875943])
        assert jnp.max(jnp.abs(w - expected)) < 1e-12

    def test_rv2m(self):
        r = rv2m(jnp.array([0.0, 1.41371669, -1.88495559]))
        assert jnp.abs(r[0, 0] - -0.7071067782221119905) < 1e-14
        assert jnp.abs(r[0, 1] - -0.5656854276809129651) < 1e-14
        assert jnp.abs(r[1, 2] - -0.8194112531408833269) < 1e-14
        assert jnp.abs(r[2, 2] - 0.3854415612311154341) < 1e-14

    def test_rv2m_null_vector(self):
        assert jnp.max(jnp.abs(rv2m(jnp.zeros(3)) - jnp.eye(3))) < 1e-15

    def test_rv2m_rm2v_roundtrip(self):
        w = jnp.array([0.1, -0.4, 0.25])
        assert jnp.max(jnp.abs(rm2v(rv2m(w)) - w)) < 1e-14


class TestVectors:
    def test_pdp(self):
        assert pdp(jnp.array([2.0, 2.0, 3.0]), jnp.array([1.0, 3.0, 4.0])) == 20.0

    def test_pxp(self):
        axb = pxp(jnp.array([2.0, 2.0, 3.0]), jnp.array([1.0, 3.0, 4.0]))
        assert jnp.max(jnp.abs(axb - jnp.array([-1.0, -5.0, 4.0]))) < 1e-12

    def test_pm(self):
        assert jnp.abs(pm(jnp.array([0.3, 1.2, -2.5])) - 2.789265136196270604) < 1e-12

    def test_pn(self):
        r, u = pn(jnp.array([0.3, 1.2, -2.5]))
        assert jnp.abs(r - 2.789265136196270604) < 1e-12
        expected = jnp.array([0.1075552109073112058, 0.4302208436292448232, -0.8962934242275933816])
        assert jnp.max(jnp.abs(u - expected)) < 1e-12

    def test_pn_null_vector(self):
        r, u = pn(jnp.zeros(3))
        assert r == 0.0
        assert jnp.all(u == 0.0)

    def test_s2c(self):
        c = s2c(3.0123, -0.999)
        expected = jnp.array([-0.5366267667260523906, 0.0697711109765145365, -0.8409302618566214041])
        assert jnp.max(jnp.abs(c - expected)) < 1e-12

    def test_c2s(self):
        theta, phi = c2s(jnp.array([100.0, -50.0, 25.0]))
        assert jnp.abs(theta - -0.4636476090008061162) < 1e-14
        assert jnp.abs(phi - 0.2199879773954594463) < 1e-14

    def test_c2s_null_vector(self):
        theta, phi = c2s(jnp.zeros(3))
        assert theta == 0.0
        assert phi == 0.0

    def test_p2s(self):
        theta, phi, r = p2s(jnp.array([100.0, -50.0, 25.0]))
        assert jnp.abs(theta - -0.4636476090008061162) < 1e-12
        assert jnp.abs(phi - 0.2199879773954594463) < 1e-12
        assert jnp.abs(r - 114.5643923738960002) < 1e-9

    def test_s2p(self):
        p = s2p(-3.21, 0.123, 0.456)
        expected = jnp.array([-0.4514964673880165228, 0.0309339427734258688, 0.0559466810510877933])
        assert jnp.max(jnp.abs(p - expected)) < 1e-12

    def test_pv2s(self):
        pv = jnp.array([
            [-0.4514964673880165, 0.03093394277342585, 0.05594668105108779],
            [1.292270850663260e-5, 2.652814182060692e-6, 2.568431853930293e-6],
        ])
        theta, phi, r, td, pd, rd = pv2s(pv)
        assert jnp.abs(theta - 3.073185307179586515) < 1e-12
        assert jnp.abs(phi - 0.1229999999999999992) < 1e-12
        assert jnp.abs(r - 0.4559999999999999757) < 1e-12
        assert jnp.abs(td - -0.7800000000000000364e-5) < 1e-16
        assert jnp.abs(pd - 0.9010000000000001639e-5) < 1e-16
        assert jnp.abs(rd - -0.1229999999999999832e-4) < 1e-16

    def test_s2pv_pv2s_roundtrip(self):
        pv = s2pv(-3.21, 0.123, 0.456, -7.8e-6, 9.01e-6, -1.23e-5)
        theta, phi, r, td, pd, rd = pv2s(pv)
        assert jnp.abs(anp(theta) - anp(-3.21)) < 1e-12
        assert jnp.abs(phi - 0.123) < 1e-12
        assert jnp.abs(r - 0.456) < 1e-12
        assert jnp.abs(td - -7.8e-6) < 1e-16
        assert jnp.abs(pd - 9.01e-6) < 1e-16
        assert jnp.abs(rd - -1.23e-5) < 1e-16

    def test_pvu(self):
        pv = jnp.array([
            [126668.5912743160734, 2136.792716839935565, -245251.2339876830229],
            [-0.4051854035740713039e-2, -0.6253919754866175788e-2, 0.1189353719774107615e-1],
        ])
        upv = pvu(2920.0, pv)
        assert jnp.abs(upv[0, 0] - 126656.7598605317105) < 1e-6
        assert jnp.abs(upv[0, 1] - 2118.531271155726332) < 1e-8
        assert jnp.abs(upv[0, 2] - -245216.5048590656190) < 1e-6
        assert jnp.max(jnp.abs(upv[1] - pv[1])) < 1e-12

    def test_pvup(self):
        pv = jnp.array([[1.0, 2.0, 3.0], [0.5, -1.0, 0.0]])
        assert jnp.max(jnp.abs(pvup(2.0, pv) - jnp.array([2.0, 0.0, 3.0]))) < 1e-15


class TestInitialisationAndArithmetic:
    def test_zero_and_copy(self):
        assert jnp.all(zp() == 0.0) and zp().shape == (3,)
        assert jnp.all(zr() == 0.0) and zr().shape == (3, 3)
        assert jnp.all(zpv() == 0.0) and zpv().shape == (2, 3)
        assert jnp.all(cp(jnp.array([1.0, 2.0, 3.0])) == jnp.array([1.0, 2.0, 3.0]))
        assert jnp.all(cr(_R) == _R)
        assert jnp.all(cpv(_PV) == _PV)

    def test_p2pv_pv2p(self):
        p = jnp.array([0.25, 1.2, 3.0])
        pv = p2pv(p)
        assert jnp.all(pv[0] == p)
        assert jnp.all(pv[1] == 0.0)
        assert jnp.all(pv2p(pv) == p)

    def test_rxr(self):
        b = jnp.array([[1.0, 2.0, 2.0], [4.0, 1.0, 1.0], [3.0, 0.0, 1.0]])
        expected = jnp.array([[20.0, 7.0, 9.0], [20.0, 8.0, 11.0], [34.0, 10.0, 15.0]])
        assert jnp.max(jnp.abs(rxr(_R, b) - expected)) < 1e-12

    def test_vector_arithmetic(self):
        a = jnp.array([2.0, 2.0, 3.0])
        b = jnp.array([1.0, 3.0, 4.0])
        assert jnp.all(ppp(a, b) == jnp.array([3.0, 5.0, 7.0]))
        assert jnp.all(pmp(a, b) == jnp.array([1.0, -1.0, -1.0]))
        assert jnp.all(ppsp(a, 5.0, b) == jnp.array([7.0, 17.0, 23.0]))
        assert jnp.all(sxp(2.0, a) == jnp.array([4.0, 4.0, 6.0]))

    def test_pv_scaling(self):
        pv = jnp.array([[0.3, 1.2, -2.5], [0.5, 2.3, -0.4]])
        expected = jnp.array([[0.6, 2.4, -5.0], [1.5, 6.9, -1.2]])
        assert jnp.max(jnp.abs(s2xpv(2.0, 3.0, pv) - expected)) < 1e-12
        expected = jnp.array([[0.6, 2.4, -5.0], [1.0, 4.6, -0.8]])
        assert jnp.max(jnp.abs(sxpv(2.0, pv) - expected)) < 1e-12

    def test_pv_sum_and_difference(self):
        a = jnp.array([[2.0, 2.0, 3.0], [5.0, 6.0, 3.0]])
        b = jnp.array([[1.0, 3.0, 4.0], [3.0, 2.0, 1.0]])
        assert jnp.all(pvppv(a, b) == jnp.array([[3.0, 5.0, 7.0], [8.0, 8.0, 4.0]]))
        assert jnp.all(pvmpv(a, b) == jnp.array([[1.0, -1.0, -1.0], [2.0, 4.0, 2.0]]))

    def test_pvm(self):
        r, s = pvm(jnp.array([[0.3, 1.2, -2.5], [0.45, -0.25, 1.1]]))
        assert jnp.abs(r - 2.789265136196270604) < 1e-12
        assert jnp.abs(s - 1.214495780149111922) < 1e-12

    def test_pvdpv(self):
        a = jnp.array([[2.0, 2.0, 3.0], [6.0, 0.0, 4.0]])
        b = jnp.array([[1.0, 3.0, 4.0], [0.0, 2.0, 8.0]])
        assert jnp.all(pvdpv(a, b) == jnp.array([20.0, 50.0]))

    def test_pvxpv(self):
        a = jnp.array([[2.0, 2.0, 3.0], [6.0, 0.0, 4.0]])
        b = jnp.array([[1.0, 3.0, 4.0], [0.0, 2.0, 8.0]])
        expected = jnp.array([[-1.0, -5.0, 4.0], [-2.0, -36.0, 22.0]])
        assert jnp.max(jnp.abs(pvxpv(a, b) - expected)) < 1e-12


class TestSeparationAndPositionAngle:
    def test_sepp(self):
        s = sepp(jnp.array([1.0, 0.1, 0.2]), jnp.array([-3.0, 1e-3, 0.2]))
        assert jnp.abs(s - 2.860391919024660768) < 1e-12

    def test_seps(self):
        assert jnp.abs(seps(1.0, 0.1, 0.2, -3.0) - 2.346722016996998842) < 1e-14

    def test_pap(self):
        theta = pap(jnp.array([1.0, 0.1, 0.2]), jnp.array([-3.0, 1e-3, 0.2]))
        assert jnp.abs(theta - 0.3671514267841113674) < 1e-12

    def test_pas(self):
        assert jnp.abs(pas(1.0, 0.1, 0.2, -1.0) - -2.724544922932270424) < 1e-12

    def test_sepp_vmap(self):
        a = jnp.array([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
        b = jnp.array([[0.0, 1.0, 0.0], [0.0, 1.0, 0.0]])
        s = jax.vmap(sepp)(a, b)
        assert jnp.max(jnp.abs(s - jnp.array([DPI / 2.0, 0.0]))) < 1e-15


@pytest.mark.parametrize("angle", [0.0, 0.5, -1.2, 3.0])
def test_jit_matches_eager(angle):
    assert jnp.abs(jax.jit(anp)(angle) - anp(angle)) < 1e-15
