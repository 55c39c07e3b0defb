"""
Input validation utilities for pylinalg.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except integer/bool -> float64)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pylinalg.core.exceptions import ValidationError, DimensionError, NotSquareError
from pylinalg.core.compute.precision import SUPPORTED_DTYPES


def check_array(
    array: ArrayLike,
    name: str,
    dtype: np.dtype | type | None = None,
) -> NDArray[Any]:
    """
    Validate and convert input to a numeric numpy array.

    Accepts any array-like. Integer and boolean data is promoted to
    float64; float16 to float32; float and complex data keeps its
    precision unless dtype is given.

    Args:
        array: Input to validate
        name: Parameter name for error messages
        dtype: Target dtype; must be one of the supported dtypes

    Returns:
        numpy.ndarray with a supported dtype

    Raises:
        ValidationError: If input cannot be converted to a numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not (np.issubdtype(result.dtype, np.number) or result.dtype == np.bool_):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if dtype is not None:
        target = np.dtype(dtype)
        if target not in SUPPORTED_DTYPES:
            raise ValidationError(
                f"{name}: unsupported dtype {target}, expected one of "
                f"{[str(d) for d in SUPPORTED_DTYPES]}"
            )
        return result.astype(target, copy=False)

    if result.dtype == np.float16:
        return result.astype(np.float32)
    if not np.issubdtype(result.dtype, np.inexact):
        return result.astype(np.float64)
    if result.dtype not in SUPPORTED_DTYPES:
        # longdouble / clongdouble: no arbitrary precision here
        target = np.complex128 if np.iscomplexobj(result) else np.float64
        return result.astype(target)
    return result


def check_finite(array: NDArray[Any], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_2d(array: NDArray[Any], name: str) -> None:
    """
    Verify array is 2-dimensional.

    Raises:
        DimensionError: If array is not 2D
    """
    if array.ndim != 2:
        raise DimensionError(
            f"{name}: expected 2D array, got {array.ndim}D with shape {array.shape}"
        )


def check_square(shape: tuple[int, int], name: str) -> None:
    """
    Verify a shape is square.

    Raises:
        NotSquareError: If rows != cols
    """
    m, n = shape
    if m != n:
        raise NotSquareError(
            f"{name}: expected a square matrix, got shape ({m}, {n})",
            shape=(m, n),
        )


def check_not_empty(shape: tuple[int, int], name: str) -> None:
    """
    Verify a matrix has at least one row and one column.

    Raises:
        DimensionError: If either dimension is zero
    """
    m, n = shape
    if m == 0 or n == 0:
        raise DimensionError(f"{name}: empty matrix with shape ({m}, {n})")


def check_tall(shape: tuple[int, int], name: str) -> None:
    """
    Verify rows >= cols (QR, SVD and pseudo-inverse precondition).

    Raises:
        DimensionError: If the matrix has more columns than rows
    """
    m, n = shape
    if m < n:
        raise DimensionError(
            f"{name}: requires rows >= cols, got shape ({m}, {n})"
        )


def check_same_rows(
    shape_a: tuple[int, int],
    shape_b: tuple[int, int],
    names: tuple[str, str],
) -> None:
    """
    Verify two operands have the same number of rows (A x = b).

    Raises:
        DimensionError: If row counts differ
    """
    if shape_a[0] != shape_b[0]:
        raise DimensionError(
            f"Inconsistent rows: {names[0]} has {shape_a[0]}, "
            f"{names[1]} has {shape_b[0]}"
        )


def check_same_shape(
    shape_a: tuple[int, int],
    shape_b: tuple[int, int],
    operation: str,
) -> None:
    """
    Verify two operands have identical shapes (elementwise operations).

    Raises:
        DimensionError: If shapes differ
    """
    if shape_a != shape_b:
        raise DimensionError(
            f"{operation}: shapes {shape_a} and {shape_b} do not match"
        )


def check_positive_int(value: int, name: str) -> None:
    """
    Verify an iteration budget or count is a positive integer.

    Raises:
        ValidationError: If value is not an int >= 1
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
        raise ValidationError(f"{name}: expected a positive integer, got {value!r}")
