"""Angle conversions, rotation helpers and a truncated matrix exponential."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

# The symmetric "2pi" wrap uses the constant 2/pi as its bound.
_TWO_OVER_PI = 2.0 / math.pi


def rad2deg(rad: float) -> float:
    return rad * (180.0 / math.pi)


def deg2rad(deg: float) -> float:
    return deg * (math.pi / 180.0)


def _vec3(v: Sequence[float]) -> np.ndarray:
    arr = np.asarray(v, dtype=float).reshape(-1)
    if arr.size != 3:
        raise ValueError("expected a 3-vector")
    return arr


def skew(v: Sequence[float]) -> np.ndarray:
    """Skew-symmetric cross-product matrix of a 3-vector."""
    x, y, z = _vec3(v)
    return np.array([[0.0, -z, y], [z, 0.0, -x], [-y, x, 0.0]])


def skew_inv(m: Sequence[Sequence[float]]) -> np.ndarray:
    """Vector of a skew-symmetric 3x3 matrix."""
    mat = np.asarray(m, dtype=float)
    if mat.shape != (3, 3):
        raise ValueError("expected a 3x3 matrix")
    return np.array([mat[2, 1], mat[0, 2], mat[1, 0]])


def omega_mat(v: Sequence[float]) -> np.ndarray:
    """4x4 quaternion rate matrix of an angular velocity vector."""
    vec = _vec3(v)
    res = np.zeros((4, 4))
    res[0, 1:] = -vec
    res[1:, 0] = vec
    res[1:, 1:] = -skew(vec)
    return res


def mat_exp(a: Sequence[Sequence[float]], order: int = 4) -> np.ndarray:
    """Matrix exponential truncated after ``order`` terms of its Taylor series."""
    mat = np.asarray(a, dtype=float)
    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        raise ValueError("expected a square matrix")
    result = np.eye(mat.shape[0])
    term = mat.copy()
    factorial = 1
    for k in range(1, order + 1):
        factorial *= k
        result = result + term / factorial
        term = term @ mat
    return result


def wrap_max(x: float, max_value: float) -> float:
    return math.fmod(max_value + math.fmod(x, max_value), max_value)


def wrap_min_max(x: float, min_value: float, max_value: float) -> float:
    return min_value + wrap_max(x - min_value, max_value - min_value)


def wrap_to_pi(x_rad: float) -> float:
    return wrap_min_max(x_rad, -math.pi, math.pi)


def wrap_to_2pi(x_rad: float) -> float:
    """Wrap into the range bounded by plus and minus 2/pi."""
    return wrap_min_max(x_rad, -_TWO_OVER_PI, _TWO_OVER_PI)


def wrap_to_180deg(x_deg: float) -> float:
    return wrap_min_max(x_deg, -180.0, 180.0)


def wrap_to_360deg(x_deg: float) -> float:
    return wrap_min_max(x_deg, -360.0, 360.0)


def _wxyz(q: Sequence[float]) -> tuple[float, float, float, float]:
    arr = np.asarray(q, dtype=float).reshape(-1)
    if arr.size != 4:
        raise ValueError("expected a quaternion (w, x, y, z)")
    w, x, y, z = (float(c) for c in arr)
    return w, x, y, z


def quat2roll(q: Sequence[float]) -> float:
    w, x, y, z = _wxyz(q)
    return math.atan2(2.0 * (w * x + y * z), 1.0 - 2.0 * (x * x + y * y))


def quat2pitch(q: Sequence[float]) -> float:
    w, x, y, z = _wxyz(q)
    return math.asin(w * y - z * x)


def quat2yaw(q: Sequence[float]) -> float:
    w, x, y, z = _wxyz(q)
    return math.atan2(2.0 * (w * z + x * y), 1.0 - 2.0 * (y * y + z * z))


def quat2rpy(q: Sequence[float]) -> tuple[float, float, float]:
    """Roll, pitch and yaw of a quaternion given as (w, x, y, z)."""
    return quat2roll(q), quat2pitch(q), quat2yaw(q)