"""Types for the astrometry pipeline.

:class:`Astrom` is the star-independent astrometry parameter block, built
once per epoch by the ``apc*``/``apio*`` routines and read by the quick
transformations (``atciq``, ``atioq`` and friends).  :class:`LdBody` holds
the data for one light-deflecting body.

Both are :class:`~typing.NamedTuple` instances, which JAX treats as pytrees
automatically, so they can be passed through ``jax.jit`` and ``jax.vmap``.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from sofajax.config import get_dtype


class Astrom(NamedTuple):
    """Star-independent astrometry parameters.

    Vectors are with respect to BCRS axes.

    Attributes:
        pmt: PM time interval (SSB, Julian years).
        eb: SSB to observer (vector, au).
        eh: Sun to observer (unit vector).
        em: Distance from Sun to observer (au).
        v: Barycentric observer velocity (vector, units of c).
        bm1: sqrt(1-|v|^2), reciprocal of the Lorentz factor.
        bpn: Bias-precession-nutation matrix, shape ``(3, 3)``.
        along: Longitude + s' + dERA(DUT) (radians).
        phi: Geodetic latitude (radians).
        xpl: Polar motion xp with respect to local meridian (radians).
        ypl: Polar motion yp with respect to local meridian (radians).
        sphi: Sine of geodetic latitude.
        cphi: Cosine of geodetic latitude.
        diurab: Magnitude of diurnal aberration vector.
        eral: "Local" Earth rotation angle (radians).
        refa: Refraction constant A (radians).
        refb: Refraction constant B (radians).
    """

    pmt: Array
    eb: Array
    eh: Array
    em: Array
    v: Array
    bm1: Array
    bpn: Array
    along: Array
    phi: Array
    xpl: Array
    ypl: Array
    sphi: Array
    cphi: Array
    diurab: Array
    eral: Array
    refa: Array
    refb: Array

    @classmethod
    def zeros(cls) -> Astrom:
        """Parameter block with an identity ``bpn`` and all else zero."""
        dtype = get_dtype()
        z = jnp.zeros((), dtype=dtype)
        p = jnp.zeros(3, dtype=dtype)
        return cls(
            pmt=z, eb=p, eh=p, em=z, v=p, bm1=z, bpn=jnp.eye(3, dtype=dtype),
            along=z, phi=z, xpl=z, ypl=z, sphi=z, cphi=z, diurab=z, eral=z,
            refa=z, refb=z,
        )  # fmt: skip


class LdBody(NamedTuple):
    """A body that deflects light.

    A single body has scalar ``bm`` and ``dl`` and a ``(2, 3)`` ``pv``.
    :meth:`stack` combines several bodies into one ``LdBody`` whose fields
    carry a leading body axis, the form taken by :func:`ldn` and the
    ``*qn`` routines.

    Attributes:
        bm: Mass of the body (solar masses).
        dl: Deflection limiter (radians^2/2).
        pv: Barycentric pv-vector of the body (au, au/day).
    """

    bm: Array
    dl: Array
    pv: Array

    @classmethod
    def create(cls, bm: ArrayLike, dl: ArrayLike, pv: ArrayLike) -> LdBody:
        """Build one body, converting the fields to arrays."""
        dtype = get_dtype()
        return cls(
            bm=jnp.asarray(bm, dtype=dtype),
            dl=jnp.asarray(dl, dtype=dtype),
            pv=jnp.asarray(pv, dtype=dtype).reshape(2, 3),
        )

    @classmethod
    def stack(cls, bodies: Sequence[LdBody]) -> LdBody:
        """Stack single bodies along a new leading axis.

        Raises:
            ValueError: If *bodies* is empty.
        """
        if len(bodies) == 0:
            raise ValueError("LdBody.stack needs at least one body")
        bodies = [cls.create(*b) for b in bodies]
        return cls(
            bm=jnp.stack([b.bm for b in bodies]),
            dl=jnp.stack([b.dl for b in bodies]),
            pv=jnp.stack([b.pv for b in bodies]),
        )
