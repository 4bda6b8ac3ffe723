# ==============================
# Demo Package: arith
# ==============================
"""
Small arithmetic package served by the local backend.

Address: py:/remote_use/demo/arith/
"""

from __future__ import annotations

import math
from typing import Any, List

PRECISION = 6

META = {
    "add": {
        "v": 1.1,
        "summary": "Add two numbers",
        "args": {
            "a": {"schema": "float*", "req": True, "pos": 0},
            "b": {"schema": "float*", "req": True, "pos": 1},
        },
    },
    "sub": {
        "v": 1.1,
        "summary": "Subtract b from a",
        "args": {
            "a": {"schema": "float*", "req": True, "pos": 0},
            "b": {"schema": "float*", "req": True, "pos": 1},
        },
    },
    "pyth": {
        "v": 1.1,
        "summary": "Length of the hypotenuse",
        "args": {
            "a": {"schema": "float*", "req": True, "pos": 0},
            "b": {"schema": "float*", "req": True, "pos": 1},
        },
        "result_naked": False,
    },
    "PRECISION": {"v": 1.1, "summary": "Digits kept by pyth"},
}


def add(a: float, b: float) -> float:
    return a + b


def sub(a: float, b: float) -> float:
    return a - b


def pyth(a: float, b: float) -> List[Any]:
    if a < 0 or b < 0:
        return [400, "Sides must not be negative", None]
    return [200, "OK", round(math.hypot(a, b), PRECISION)]


def mean(*values: float) -> float:
    """Arithmetic mean of the given values."""
    if not values:
        raise ValueError("mean() needs at least one value")
    return sum(values) / len(values)
