"""
sofajax is a JAX implementation of the IAU SOFA fundamental astronomy
routines: time scales and calendars, precession-nutation and Earth rotation,
reference frames, star catalogs and the astrometry pipeline.

Routines keep their SOFA names and are traceable by ``jax.jit`` and
``jax.vmap``.  Fallible routines return an integer status as the last
element of their result; see :func:`sofajax.errors.check_status`.
"""

from .config import (
    set_dtype,
    get_dtype,
)

from .errors import (
    SofaError,
    check_status,
    describe_status,
)

from .vector_matrix import (
    anp,
    anpm,
    a2af,
    a2tf,
    d2tf,
    d2tf_fields,
    af2a,
    tf2a,
    tf2d,
    Rx,
    Ry,
    Rz,
    ir,
    zr,
    cr,
    rx,
    ry,
    rz,
    rxr,
    tr,
    rxp,
    trxp,
    rxpv,
    trxpv,
    rv2m,
    rm2v,
    zp,
    cp,
    zpv,
    cpv,
    p2pv,
    pv2p,
    pdp,
    pxp,
    pm,
    pn,
    ppp,
    pmp,
    ppsp,
    sxp,
    s2xpv,
    sxpv,
    pvppv,
    pvmpv,
    pvm,
    pvdpv,
    pvxpv,
    pvu,
    pvup,
    s2c,
    c2s,
    s2p,
    p2s,
    s2pv,
    pv2s,
    sepp,
    seps,
    pap,
    pas,
)

from .calendars import (
    cal2jd,
    jd2cal,
    jdcalf,
    epb,
    epb2jd,
    epj,
    epj2jd,
)

from .time_scales import (
    LEAP_SECOND_TABLE_YEAR,
    dat,
    d2dtf,
    dtf2d,
    taitt,
    tttai,
    taiut1,
    ut1tai,
    ttut1,
    ut1tt,
    tttcg,
    tcgtt,
    tttdb,
    tdbtt,
    tdbtcb,
    tcbtdb,
    utctai,
    taiutc,
    utcut1,
    ut1utc,
)

from .fundamental_arguments import (
    fal03,
    falp03,
    faf03,
    fad03,
    faom03,
    fame03,
    fave03,
    fae03,
    fama03,
    faju03,
    fasa03,
    faur03,
    fane03,
    fapa03,
)

from .precession_nutation import (
    nut00a,
    nut00b,
    nut06a,
    nut80,
    numat,
    nutm80,
    num00a,
    num00b,
    num06a,
    PrecessionAngles,
    bi00,
    bp00,
    bp06,
    pr00,
    pb06,
    pfw06,
    p06e,
    obl06,
    obl80,
    pmat00,
    pmat06,
    pmat76,
    prec76,
    fw2m,
    fw2xy,
    ltp,
    ltpb,
    ltpecl,
    ltpequ,
    pn00,
    pn00a,
    pn00b,
    pn06,
    pn06a,
    pnm00a,
    pnm00b,
    pnm06a,
    pnm80,
    bpn2xy,
    c2ixy,
    c2ixys,
    c2ibpn,
    c2i00a,
    c2i00b,
    c2i06a,
    s00,
    s00a,
    s00b,
    s06,
    s06a,
    xys00a,
    xys00b,
    xys06a,
    eors,
    eo06a,
    sp00,
    pom00,
    c2tcio,
    c2teqx,
    c2t00a,
    c2t00b,
    c2t06a,
    c2tpe,
    c2txy,
)

from .earth_rotation import (
    era00,
    gmst00,
    gmst06,
    gmst82,
    eect00,
    ee00,
    ee00a,
    ee00b,
    ee06a,
    eqeq94,
    gst00a,
    gst00b,
    gst06,
    gst06a,
    gst94,
)

from .coordinates import (
    ae2hd,
    hd2ae,
    hd2pa,
    eform,
    gc2gd,
    gc2gde,
    gd2gc,
    gd2gce,
    g2icrs,
    icrs2g,
    ecm06,
    eqec06,
    eceq06,
    ltecm,
    lteqec,
    lteceq,
)

from .catalogs import (
    starpv,
    pvstar,
    starpm,
    pmsafe,
    fk425,
    fk45z,
    fk524,
    fk54z,
    fk5hip,
    fk52h,
    fk5hz,
    h2fk5,
    hfk5z,
)

from .astrometry import (
    Astrom,
    LdBody,
    apcg,
    apci,
    apco,
    apcs,
    apio,
    apio13,
    aper,
    aper13,
    ab,
    ld,
    ldn,
    ldsun,
    pmpx,
    pvtob,
    refco,
    atccq,
    atciq,
    atciqn,
    atciqz,
    aticq,
    aticqn,
    atioq,
    atoiq,
    atio13,
    atoi13,
)

from .ephemerides import (
    moon98,
)

from .projection import (
    tpxes,
    tpxev,
    tpsts,
    tpstv,
    tpors,
    tporv,
)

__all__ = [
    # Config
    "set_dtype",
    "get_dtype",
    # Errors
    "SofaError",
    "check_status",
    "describe_status",
    # Vector/matrix
    "anp",
    "anpm",
    "a2af",
    "a2tf",
    "d2tf",
    "d2tf_fields",
    "af2a",
    "tf2a",
    "tf2d",
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
    # Calendars
    "cal2jd",
    "jd2cal",
    "jdcalf",
    "epb",
    "epb2jd",
    "epj",
    "epj2jd",
    # Time scales
    "LEAP_SECOND_TABLE_YEAR",
    "dat",
    "d2dtf",
    "dtf2d",
    "taitt",
    "tttai",
    "taiut1",
    "ut1tai",
    "ttut1",
    "ut1tt",
    "tttcg",
    "tcgtt",
    "tttdb",
    "tdbtt",
    "tdbtcb",
    "tcbtdb",
    "utctai",
    "taiutc",
    "utcut1",
    "ut1utc",
    # Fundamental arguments
    "fal03",
    "falp03",
    "faf03",
    "fad03",
    "faom03",
    "fame03",
    "fave03",
    "fae03",
    "fama03",
    "faju03",
    "fasa03",
    "faur03",
    "fane03",
    "fapa03",
    # Precession, nutation and bias
    "nut00a",
    "nut00b",
    "nut06a",
    "nut80",
    "numat",
    "nutm80",
    "num00a",
    "num00b",
    "num06a",
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
    "pn00",
    "pn00a",
    "pn00b",
    "pn06",
    "pn06a",
    "pnm00a",
    "pnm00b",
    "pnm06a",
    "pnm80",
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
    "c2tcio",
    "c2teqx",
    "c2t00a",
    "c2t00b",
    "c2t06a",
    "c2tpe",
    "c2txy",
    # Earth rotation and sidereal time
    "era00",
    "gmst00",
    "gmst06",
    "gmst82",
    "eect00",
    "ee00",
    "ee00a",
    "ee00b",
    "ee06a",
    "eqeq94",
    "gst00a",
    "gst00b",
    "gst06",
    "gst06a",
    "gst94",
    # Coordinate frames
    "ae2hd",
    "hd2ae",
    "hd2pa",
    "eform",
    "gc2gd",
    "gc2gde",
    "gd2gc",
    "gd2gce",
    "g2icrs",
    "icrs2g",
    "ecm06",
    "eqec06",
    "eceq06",
    "ltecm",
    "lteqec",
    "lteceq",
    # Star catalogs
    "starpv",
    "pvstar",
    "starpm",
    "pmsafe",
    "fk425",
    "fk45z",
    "fk524",
    "fk54z",
    "fk5hip",
    "fk52h",
    "fk5hz",
    "h2fk5",
    "hfk5z",
    # Astrometry
    "Astrom",
    "LdBody",
    "apcg",
    "apci",
    "apco",
    "apcs",
    "apio",
    "apio13",
    "aper",
    "aper13",
    "ab",
    "ld",
    "ldn",
    "ldsun",
    "pmpx",
    "pvtob",
    "refco",
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
    # Ephemerides
    "moon98",
    # Gnomonic projection
    "tpxes",
    "tpxev",
    "tpsts",
    "tpstv",
    "tpors",
    "tporv",
]
