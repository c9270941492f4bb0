"""Precession, nutation and frame bias.

This sub-module provides:

- **Nutation**: IAU 1980, IAU 2000A/B and IAU 2006/2000A series and the
  corresponding nutation matrices
- **Precession and bias**: IAU 1976, IAU 2000 and IAU 2006 models,
  Fukushima-Williams angles and the long-term (Vondrak) precession
- **Combined matrices**: equinox-based NPB matrices and CIO-based
  celestial-to-intermediate matrices, CIO/TIO locators and the equation
  of the origins
- **Celestial to terrestrial**: matrices including Earth rotation and
  polar motion
"""

from ._cio import eors, s00, s06, sp00
from ._matrices import (
    bpn2xy,
    c2i00a,
    c2i00b,
    c2i06a,
    c2ibpn,
    c2ixy,
    c2ixys,
    c2tcio,
    c2teqx,
    eo06a,
    num00a,
    num00b,
    num06a,
    numat,
    nutm80,
    pn00,
    pn00a,
    pn00b,
    pn06,
    pn06a,
    pnm00a,
    pnm00b,
    pnm06a,
    pnm80,
    pom00,
    s00a,
    s00b,
    s06a,
    xys00a,
    xys00b,
    xys06a,
)
from ._nutation import nut00a, nut00b, nut06a, nut80
from ._precession import (
    PrecessionAngles,
    bi00,
    bp00,
    bp06,
    fw2m,
    fw2xy,
    ltp,
    ltpb,
    ltpecl,
    ltpequ,
    obl06,
    obl80,
    p06e,
    pb06,
    pfw06,
    pmat00,
    pmat06,
    pmat76,
    pr00,
    prec76,
)
from ._terrestrial import c2t00a, c2t00b, c2t06a, c2tpe, c2txy

__all__ = [
    # Nutation
    "nut00a",
    "nut00b",
    "nut06a",
    "nut80",
    "numat",
    "nutm80",
    "num00a",
    "num00b",
    "num06a",
    # Precession and bias
    "PrecessionAngles",
    "bi00",
    "bp00",
    "bp06",
    "pr00",
    "pb06",
    "pfw06",
    "p06e",
    "obl06",
    "obl80",
    "pmat00",
    "pmat06",
    "pmat76",
    "prec76",
    "fw2m",
    "fw2xy",
    "ltp",
    "ltpb",
    "ltpecl",
    "ltpequ",
    # Combined matrices
    "pn00",
    "pn00a",
    "pn00b",
    "pn06",
    "pn06a",
    "pnm00a",
    "pnm00b",
    "pnm06a",
    "pnm80",
    # CIO based
    "bpn2xy",
    "c2ixy",
    "c2ixys",
    "c2ibpn",
    "c2i00a",
    "c2i00b",
    "c2i06a",
    "s00",
    "s00a",
    "s00b",
    "s06",
    "s06a",
    "xys00a",
    "xys00b",
    "xys06a",
    "eors",
    "eo06a",
    "sp00",
    "pom00",
    # Celestial to terrestrial
    "c2tcio",
    "c2teqx",
    "c2t00a",
    "c2t00b",
    "c2t06a",
    "c2tpe",
    "c2txy",
]
