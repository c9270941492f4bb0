"""Vector and matrix toolkit.

This sub-module provides the small linear-algebra and angle helpers that
the rest of sofajax is built on:

- **Angles**: normalisation and sexagesimal conversion
- **Rotations**: elementary rotations, r-matrix products, rotation vectors
- **Vectors**: p-vector and pv-vector arithmetic, spherical/Cartesian
  conversion, separation and position angle
"""

from ._angles import (
    a2af,
    a2tf,
    af2a,
    anp,
    anpm,
    d2tf,
    d2tf_fields,
    tf2a,
    tf2d,
)
from ._rotations import (
    Rx,
    Ry,
    Rz,
    cr,
    ir,
    rm2v,
    rv2m,
    rx,
    rxp,
    rxpv,
    rxr,
    ry,
    rz,
    tr,
    trxp,
    trxpv,
    zr,
)
from ._vectors import (
    c2s,
    cp,
    cpv,
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
    s2c,
    s2p,
    s2pv,
    s2xpv,
    sepp,
    seps,
    sxp,
    sxpv,
    zp,
    zpv,
)

__all__ = [
    # Angles
    "anp",
    "anpm",
    "a2af",
    "a2tf",
    "d2tf",
    "d2tf_fields",
    "af2a",
    "tf2a",
    "tf2d",
    # Rotations
    "Rx",
    "Ry",
    "Rz",
    "ir",
    "zr",
    "cr",
    "rx",
    "ry",
    "rz",
    "rxr",
    "tr",
    "rxp",
    "trxp",
    "rxpv",
    "trxpv",
    "rv2m",
    "rm2v",
    # Vectors
    "zp",
    "cp",
    "zpv",
    "cpv",
    "p2pv",
    "pv2p",
    "pdp",
    "pxp",
    "pm",
    "pn",
    "ppp",
    "pmp",
    "ppsp",
    "sxp",
    "s2xpv",
    "sxpv",
    "pvppv",
    "pvmpv",
    "pvm",
    "pvdpv",
    "pvxpv",
    "pvu",
    "pvup",
    "s2c",
    "c2s",
    "s2p",
    "p2s",
    "s2pv",
    "pv2s",
    "sepp",
    "seps",
    "pap",
    "pas",
]
