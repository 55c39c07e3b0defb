"""
Numerical precision constants and utilities.

This module is the scalar "capability" layer: every algorithm asks it
for the machine epsilon of the working dtype and uses its
epsilon-equality predicate instead of comparing floats directly.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any


# Machine epsilon for float64
EPSILON_64: float = float(np.finfo(np.float64).eps)  # ~2.22e-16

# Machine epsilon for float32
EPSILON_32: float = float(np.finfo(np.float32).eps)  # ~1.19e-7

# Dtypes a Matrix may hold
SUPPORTED_DTYPES: tuple[np.dtype, ...] = (
    np.dtype(np.float32),
    np.dtype(np.float64),
    np.dtype(np.complex64),
    np.dtype(np.complex128),
)


def machine_epsilon(dtype: np.dtype | type = np.float64) -> float:
    """
    Get machine epsilon for a given dtype.

    Complex dtypes report the epsilon of their real component type.

    Args:
        dtype: NumPy dtype or type

    Returns:
        Machine epsilon for the dtype
    """
    return float(np.finfo(dtype).eps)


def real_dtype(dtype: np.dtype | type) -> np.dtype:
    """Real counterpart of a dtype (complex128 -> float64, float32 -> float32)."""
    return np.finfo(dtype).dtype


def is_complex_dtype(dtype: np.dtype | type) -> bool:
    """True for complex64 / complex128."""
    return np.issubdtype(np.dtype(dtype), np.complexfloating)


def abs_diff_eq(
    a: complex | NDArray[Any],
    b: complex | NDArray[Any],
    epsilon: float,
) -> bool:
    """
    Epsilon-equality: |a - b| <= epsilon for every element.

    Args:
        a: First value(s)
        b: Second value(s)
        epsilon: Absolute tolerance

    Returns:
        True if all elements are within epsilon
    """
    return bool(np.all(np.abs(np.asarray(a) - np.asarray(b)) <= epsilon))


def relative_eq(
    a: complex | NDArray[Any],
    b: complex | NDArray[Any],
    epsilon: float,
    max_relative: float,
) -> bool:
    """
    Relative equality with an absolute floor.

    Elements are equal when |a - b| <= epsilon, or when
    |a - b| <= max_relative * max(|a|, |b|).
    """
    a_arr = np.asarray(a)
    b_arr = np.asarray(b)
    diff = np.abs(a_arr - b_arr)
    largest = np.maximum(np.abs(a_arr), np.abs(b_arr))
    return bool(np.all((diff <= epsilon) | (diff <= max_relative * largest)))


def triangular_tolerance(t: NDArray[Any]) -> float:
    """
    Default threshold below which a triangular diagonal entry counts as zero.

    Scaled to the problem: max(m, n) * eps(dtype) * max|T|. A matrix of
    all zeros yields 0.0, so every diagonal entry is then degenerate.
    """
    if t.size == 0:
        return 0.0
    scale = float(np.max(np.abs(t)))
    return max(t.shape) * machine_epsilon(t.dtype) * scale


def condition_estimate(diagonal: NDArray[Any]) -> float:
    """
    Cheap condition indicator from a triangular factor's diagonal.

    Returns max|d| / min|d|, or inf if any entry is zero. This is a lower
    bound on the true condition number, good enough to flag trouble.
    """
    magnitudes = np.abs(diagonal)
    if magnitudes.size == 0:
        return 1.0
    smallest = float(np.min(magnitudes))
    if smallest == 0.0:
        return float('inf')
    return float(np.max(magnitudes)) / smallest
