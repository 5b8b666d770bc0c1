"""
3-vector helpers on plain float tuples.
"""

import math
from typing import Tuple

Vector = Tuple[float, float, float]

ZERO: Vector = (0.0, 0.0, 0.0)


def sub(a: Vector, b: Vector) -> Vector:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def cross(a: Vector, b: Vector) -> Vector:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def dot(a: Vector, b: Vector) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def length(a: Vector) -> float:
    return math.sqrt(dot(a, a))


def normalize(a: Vector) -> Vector:
    """Unit vector along a, or ZERO if a has no length."""
    norm = length(a)
    if norm == 0.0:
        return ZERO
    return (a[0] / norm, a[1] / norm, a[2] / norm)


def angle_between(a: Vector, b: Vector) -> float:
    """Angle between a and b in radians; zero when either has no length."""
    norm = length(a) * length(b)
    if norm == 0.0:
        return 0.0
    # rounding can push the cosine just outside [-1, 1]
    cos = max(-1.0, min(1.0, dot(a, b) / norm))
    return math.acos(cos)
