"""
Operand preparation shared by the backends.

Backends receive Matrix objects; these helpers turn them into validated
NumPy arrays and collect the conditioning diagnostics that end up in
Result.warnings.
"""

import warnings
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinalg.matrix import Matrix
from pylinalg.core.exceptions import ValidationError
from pylinalg.core.validation import (
    check_finite,
    check_not_empty,
    check_square,
    check_tall,
    check_same_rows,
    check_positive_int,
)
from pylinalg.core.compute.precision import real_dtype, condition_estimate, machine_epsilon
from pylinalg.core.compute.tolerances import ILL_CONDITION_THRESHOLD


def matrix_operand(a: Matrix, name: str = 'A') -> NDArray[Any]:
    """Non-empty, finite 2D array copy of a."""
    array = a.to_array()
    check_not_empty(array.shape, name)
    check_finite(array, name)
    return array


def square_operand(a: Matrix, name: str = 'A') -> NDArray[Any]:
    array = matrix_operand(a, name)
    check_square(array.shape, name)
    return array


def tall_operand(a: Matrix, name: str = 'A') -> NDArray[Any]:
    array = matrix_operand(a, name)
    check_tall(array.shape, name)
    return array


def rhs_operand(a: NDArray[Any], b: Matrix, name: str = 'b') -> NDArray[Any]:
    """Right-hand side with as many rows as a."""
    array = b.to_array()
    check_finite(array, name)
    check_same_rows(a.shape, array.shape, ('A', name))
    return array


def real_operand(array: NDArray[Any], name: str, operation: str) -> NDArray[Any]:
    """
    Real view of array for an algorithm defined on real matrices only.

    Complex input whose imaginary parts are all zero is converted with a
    RuntimeWarning; genuinely complex input is rejected.

    Raises:
        ValidationError: If array has a nonzero imaginary part
    """
    if not np.iscomplexobj(array):
        return array
    if np.any(array.imag != 0):
        raise ValidationError(
            f"{name}: native {operation} supports real matrices only; "
            f"use backend='lapack' for complex input"
        )
    warnings.warn(
        f"{name}: complex dtype {array.dtype} with zero imaginary part "
        f"converted to {real_dtype(array.dtype)} for {operation}",
        RuntimeWarning,
        stacklevel=3,
    )
    return array.real.astype(real_dtype(array.dtype))


def check_options(
    max_iterations: int | None = None,
    max_sweeps: int | None = None,
    tol: float | None = None,
) -> None:
    """Validate the optional iteration controls."""
    if max_iterations is not None:
        check_positive_int(max_iterations, 'max_iterations')
    if max_sweeps is not None:
        check_positive_int(max_sweeps, 'max_sweeps')
    if tol is not None and not (np.isscalar(tol) and np.isfinite(tol) and tol > 0):
        raise ValidationError(f"tol: expected a positive finite number, got {tol!r}")


def conditioning_warnings(diagonal: NDArray[Any], name: str) -> tuple[float, list[str]]:
    """
    Condition estimate from a triangular factor's diagonal plus warnings.

    Returns:
        (estimate, warnings) where warnings is empty unless the estimate
        exceeds ILL_CONDITION_THRESHOLD
    """
    estimate = condition_estimate(diagonal)
    messages = []
    if not np.isfinite(estimate):
        messages.append(f"{name} is singular: triangular factor has a zero pivot")
    elif estimate > ILL_CONDITION_THRESHOLD:
        messages.append(
            f"{name} is ill-conditioned (condition estimate {estimate:.2e}); "
            f"results may be inaccurate"
        )
    return estimate, messages


def residual_warnings(residuals: NDArray[Any], a: NDArray[Any]) -> list[str]:
    """Warn about eigenpairs whose residual ||A v - lambda v|| is large."""
    scale = max(float(np.linalg.norm(a)), 1.0)
    tol = np.sqrt(machine_epsilon(a.dtype)) * scale
    poor = np.flatnonzero(residuals > tol)
    if poor.size == 0:
        return []
    return [
        f"eigenvector residual above {tol:.2e} for eigenvalue indices "
        f"{poor.tolist()} (max {float(residuals.max()):.2e}); the eigenvalues "
        f"may be defective or clustered"
    ]
