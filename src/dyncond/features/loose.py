from __future__ import annotations

import re
from typing import Any

# Signed decimal, optional fraction/exponent, surrounding whitespace allowed
_NUMERIC = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


def is_empty(v: Any) -> bool:
    """
    Host-platform emptiness: None, "", "0", 0, 0.0, False and empty
    containers are all empty.
    """
    if v is None or v is False:
        return True
    if isinstance(v, str):
        return v == "" or v == "0"
    if isinstance(v, (int, float)):
        return v == 0
    if isinstance(v, (list, tuple, dict, set)):
        return len(v) == 0
    return False


def is_numeric(v: Any) -> bool:
    if isinstance(v, bool):
        return False
    if isinstance(v, (int, float)):
        try:
            return float(v) == float(v)  # NaN, ints past float range
        except OverflowError:
            return False
    if isinstance(v, str):
        return bool(_NUMERIC.match(v))
    return False


def to_text(v: Any) -> str:
    if v is None or v is False:
        return ""
    if v is True:
        return "1"
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)


def loose_equal(a: Any, b: Any) -> bool:
    if is_numeric(a) and is_numeric(b):
        return float(a) == float(b)
    return to_text(a) == to_text(b)


def loose_cmp(a: Any, b: Any) -> int:
    """
    Three-way comparison: numbers when both sides are numeric,
    text ordering otherwise.
    """
    if is_numeric(a) and is_numeric(b):
        x, y = float(a), float(b)
    else:
        x, y = to_text(a), to_text(b)
    if x < y:
        return -1
    if x > y:
        return 1
    return 0
