"""Status-code handling for the fallible SOFA routines.

The numerical routines in sofajax are JAX-traceable, so they never raise on
bad numeric input.  Instead, routines that can fail return an integer status
as the last element of their result tuple, using the SOFA conventions:

- ``0``: success.
- positive: the result is usable but something is dubious (for example a
  date outside the span of the leap-second table).
- negative: the inputs were unacceptable and the outputs are not meaningful.

:func:`check_status` turns a concrete (non-traced) status into Python
behaviour: errors raise :class:`SofaError`, warnings are logged.
"""

from __future__ import annotations

import logging

import numpy as np
from jax.typing import ArrayLike

logger = logging.getLogger(__name__)


_MESSAGES: dict[str, dict[int, str]] = {
    "cal2jd": {
        -1: "bad year (before -4799)",
        -2: "bad month",
        -3: "bad day",
    },
    "jd2cal": {-1: "unacceptable date"},
    "jdcalf": {
        -1: "date out of range",
        1: "ndp not in 0-9 (interpreted as 0)",
    },
    "dat": {
        1: "dubious year",
        -1: "bad year",
        -2: "bad month",
        -3: "bad day",
        -4: "bad fraction of day",
        -5: "internal error in leap-second table lookup",
    },
    "dtf2d": {
        3: "both time out of range and dubious year",
        2: "time is after end of day",
        1: "dubious year",
        -1: "bad year",
        -2: "bad month",
        -3: "bad day",
        -4: "bad hour",
        -5: "bad minute",
        -6: "bad second (<0)",
    },
    "d2dtf": {1: "dubious year", -1: "unacceptable date"},
    "utctai": {1: "dubious year", -1: "unacceptable date"},
    "taiutc": {1: "dubious year", -1: "unacceptable date"},
    "utcut1": {1: "dubious year", -1: "unacceptable date"},
    "ut1utc": {1: "dubious year", -1: "unacceptable date"},
    "af2a": {
        1: "degrees not in range 0-359",
        2: "arcminutes not in range 0-59",
        3: "arcseconds not in range 0-59.999...",
    },
    "tf2a": {
        1: "hours not in range 0-23",
        2: "minutes not in range 0-59",
        3: "seconds not in range 0-59.999...",
    },
    "eform": {-1: "illegal identifier"},
    "gc2gd": {-1: "illegal identifier", -2: "internal error"},
    "gc2gde": {-1: "illegal f", -2: "illegal a"},
    "gd2gc": {-1: "illegal identifier", -2: "illegal case"},
    "gd2gce": {-1: "illegal case"},
    "starpv": {
        1: "distance overridden",
        2: "excessive speed",
        4: "solution did not converge",
    },
    "pvstar": {-1: "superluminal speed", -2: "null position vector"},
    "starpm": {
        -1: "system error",
        1: "distance overridden",
        2: "excessive velocity",
        4: "solution did not converge",
    },
    "pmsafe": {
        -1: "system error",
        1: "distance overridden",
        2: "excessive velocity",
        4: "solution did not converge",
    },
    "apio13": {1: "dubious year", -1: "unacceptable date"},
    "atio13": {1: "dubious year", -1: "unacceptable date"},
    "atoi13": {1: "dubious year", -1: "unacceptable date"},
    "tpxes": {
        1: "star too far from axis",
        2: "antistar on tangent plane",
        3: "antistar too far from axis",
    },
}
_MESSAGES["tf2d"] = _MESSAGES["tf2a"]
_MESSAGES["tpxev"] = _MESSAGES["tpxes"]

# Routines whose positive statuses are bit flags rather than single codes.
_BITFLAG_ROUTINES = frozenset({"starpv", "starpm", "pmsafe"})


class SofaError(ValueError):
    """A SOFA routine reported unacceptable inputs.

    Attributes:
        routine: Name of the routine that produced the status.
        status: The (negative) SOFA status code.
    """

    def __init__(self, routine: str, status: int) -> None:
        self.routine = routine
        self.status = status
        super().__init__(f"{routine}: {describe_status(routine, status)} (status {status})")


def describe_status(routine: str, status: int) -> str:
    """Return a human readable description of a SOFA status code.

    Args:
        routine: SOFA routine name, e.g. ``"cal2jd"``.
        status: Integer status code.

    Returns:
        Description of the status. Bit-flag statuses (``starpv`` family) are
        decomposed into their individual conditions.
    """
    if status == 0:
        return "OK"
    messages = _MESSAGES.get(routine, {})
    if routine in _BITFLAG_ROUTINES and status > 0:
        parts = [messages[bit] for bit in (1, 2, 4) if status & bit]
        return "; ".join(parts) if parts else f"unknown status {status}"
    return messages.get(status, f"unknown status {status}")


def check_status(status: ArrayLike, routine: str) -> int:
    """Act on a concrete status returned by a SOFA routine.

    Negative statuses raise :class:`SofaError`.  Positive statuses are
    warnings: they are logged and returned so callers can inspect them.

    Must be called outside ``jax.jit``; the status has to be concrete.

    Args:
        status: Scalar status returned by a fallible routine.
        routine: Name of the routine, used for the message lookup.

    Returns:
        int: The status as a Python integer (``0`` or a warning code).

    Raises:
        SofaError: If *status* is negative.
        ValueError: If *status* is not a scalar.
    """
    arr = np.asarray(status)
    if arr.ndim != 0:
        raise ValueError(f"Expected a scalar status, got shape {arr.shape}")
    code = int(arr)
    if code < 0:
        raise SofaError(routine, code)
    if code > 0:
        logger.warning("%s: %s (status %d)", routine, describe_status(routine, code), code)
    return code
