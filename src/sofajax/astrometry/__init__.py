"""Astrometry: ICRS, GCRS, CIRS and observed places.

This sub-module provides:

- **Types**: :class:`Astrom` parameter block and :class:`LdBody`
- **Parameter blocks**: ``apcg``, ``apci``, ``apco``, ``apcs``, ``apio``,
  ``apio13``, ``aper``, ``aper13``
- **Building blocks**: aberration, light deflection, proper motion and
  parallax, observatory position, refraction constants
- **Quick transformations**: ICRS <-> CIRS and CIRS <-> observed using a
  prepared parameter block, and one-shot observed transforms from UTC
"""

from ._corrections import ab, ld, ldn, ldsun, pmpx
from ._parameters import apcg, apci, apco, apcs, aper, aper13, apio, apio13, pvtob, refco
from ._transforms import atccq, atciq, atciqn, atciqz, aticq, aticqn, atio13, atioq, atoi13, atoiq
from ._types import Astrom, LdBody

__all__ = [
    # Types
    "Astrom",
    "LdBody",
    # Parameter blocks
    "apcg",
    "apci",
    "apco",
    "apcs",
    "apio",
    "apio13",
    "aper",
    "aper13",
    # Building blocks
    "ab",
    "ld",
    "ldn",
    "ldsun",
    "pmpx",
    "pvtob",
    "refco",
    # Quick transformations
    "atccq",
    "atciq",
    "atciqn",
    "atciqz",
    "aticq",
    "aticqn",
    "atioq",
    "atoiq",
    "atio13",
    "atoi13",
]
