"""
Forward and backward substitution for triangular systems.

Both solvers accept a single right-hand side (1D) or several stacked as
columns (2D). A diagonal entry whose magnitude does not exceed the
tolerance is reported as SingularMatrixError; the system is never
solved "around" a free variable.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.exceptions import SingularMatrixError, DimensionError
from pylinalg.core.compute.precision import triangular_tolerance


def _prepare(t: NDArray[Any], b: NDArray[Any], name: str) -> tuple[NDArray[Any], int]:
    m, n = t.shape
    k = min(m, n)
    if b.shape[0] < k:
        raise DimensionError(
            f"{name}: right-hand side has {b.shape[0]} rows, triangular factor needs {k}"
        )
    x = b[:k].astype(np.result_type(t.dtype, b.dtype), copy=True)
    return x, k


def _degenerate(t: NDArray[Any], k: int, tol: float, name: str) -> SingularMatrixError:
    return SingularMatrixError(
        f"{name}: diagonal entry {k} is {t[k, k]!r} (|value| <= {tol:.3e}); "
        f"the triangular system is singular",
        matrix_name=name,
        pivot_index=k,
    )


def substitute_forward(
    l: NDArray[Any],
    b: NDArray[Any],
    *,
    tol: float | None = None,
    unit_diagonal: bool = False,
    name: str = 'L',
) -> NDArray[Any]:
    """
    Solve L x = b for lower-triangular L.

    Only the leading min(m, n) rows/columns of L take part, matching the
    rectangular factors produced by QR.

    Args:
        l: Lower-triangular matrix (m x n)
        b: Right-hand side, shape (k,) or (k, r) with k >= min(m, n)
        tol: Degeneracy threshold for |L[k, k]|; defaults to
            max(m, n) * eps * max|L|
        unit_diagonal: Treat the diagonal as ones (LU's L factor)
        name: Matrix name used in error messages

    Returns:
        Solution with leading dimension min(m, n)

    Raises:
        SingularMatrixError: If a diagonal entry is within tol of zero
    """
    x, k_max = _prepare(l, b, name)
    if tol is None:
        tol = triangular_tolerance(l)

    for k in range(k_max):
        if k > 0:
            x[k] = x[k] - l[k, :k] @ x[:k]
        if unit_diagonal:
            continue
        pivot = l[k, k]
        if abs(pivot) <= tol:
            raise _degenerate(l, k, tol, name)
        x[k] = x[k] / pivot

    return x


def substitute_backward(
    u: NDArray[Any],
    b: NDArray[Any],
    *,
    tol: float | None = None,
    name: str = 'U',
) -> NDArray[Any]:
    """
    Solve U x = b for upper-triangular U.

    Args:
        u: Upper-triangular matrix (m x n); the leading min(m, n) block is used
        b: Right-hand side, shape (k,) or (k, r) with k >= min(m, n)
        tol: Degeneracy threshold for |U[k, k]|; defaults to
            max(m, n) * eps * max|U|
        name: Matrix name used in error messages

    Returns:
        Solution with leading dimension min(m, n)

    Raises:
        SingularMatrixError: If a diagonal entry is within tol of zero
    """
    x, k_max = _prepare(u, b, name)
    if tol is None:
        tol = triangular_tolerance(u)

    for k in range(k_max - 1, -1, -1):
        pivot = u[k, k]
        if abs(pivot) <= tol:
            raise _degenerate(u, k, tol, name)
        if k < k_max - 1:
            x[k] = x[k] - u[k, k + 1:k_max] @ x[k + 1:k_max]
        x[k] = x[k] / pivot

    return x
