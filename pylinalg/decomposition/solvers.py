"""
Solver dispatch for decompositions and linear systems.

This module provides the public functions and backend selection. Each
function accepts a Matrix or any 2D array-like, picks a backend and
returns the backend's Result envelope.
"""

from typing import Any, Literal

from numpy.typing import ArrayLike

from pylinalg.matrix import Matrix
from pylinalg.core.result import Result
from pylinalg.core.exceptions import ValidationError
from pylinalg.core.compute.tolerances import NATIVE_SIZE_LIMIT
from pylinalg.decomposition.solution import (
    LUDec,
    CholeskyDec,
    QRDec,
    HessenbergDec,
    EigenDec,
    SVDec,
    as_matrix,
)
from pylinalg.decomposition.backends.native import NativeBackend
from pylinalg.decomposition.backends.lapack import LapackBackend


# Type alias for backend selection
BackendChoice = Literal['auto', 'native', 'lapack']


def dec_lu(a: Matrix | ArrayLike, *, backend: BackendChoice = 'auto') -> Result[LUDec]:
    """
    LU decomposition with partial pivoting, P A = L U.

    Args:
        a: Square matrix
        backend: 'auto', 'native' or 'lapack'

    Returns:
        Result containing LUDec

    Raises:
        NotSquareError: If a is not square
    """
    a = as_matrix(a)
    return _get_backend(backend, a).dec_lu(a)


def dec_cholesky(a: Matrix | ArrayLike, *, backend: BackendChoice = 'auto') -> Result[CholeskyDec]:
    """
    Cholesky decomposition A = L L^H.

    Raises:
        NotSquareError: If a is not square
        NotPositiveDefiniteError: If a is not Hermitian positive definite
    """
    a = as_matrix(a)
    return _get_backend(backend, a).dec_cholesky(a)


def dec_qr(a: Matrix | ArrayLike, *, backend: BackendChoice = 'auto') -> Result[QRDec]:
    """
    Complete QR decomposition A = Q R of an m x n matrix, m >= n.

    Raises:
        DimensionError: If a has more columns than rows
    """
    a = as_matrix(a)
    return _get_backend(backend, a).dec_qr(a)


def dec_hessenberg(a: Matrix | ArrayLike, *, backend: BackendChoice = 'auto') -> Result[HessenbergDec]:
    """Hessenberg reduction A = Q H Q^H."""
    a = as_matrix(a)
    return _get_backend(backend, a).dec_hessenberg(a)


def dec_eigen(
    a: Matrix | ArrayLike,
    *,
    backend: BackendChoice = 'auto',
    max_iterations: int | None = None,
) -> Result[EigenDec]:
    """
    Eigenvalues and eigenvectors of a square matrix.

    Args:
        a: Square matrix (real for the native backend)
        backend: 'auto', 'native' or 'lapack'
        max_iterations: Francis step budget for the native backend,
            default 30 * n

    Returns:
        Result containing EigenDec. info['iterations'] reports the
        Francis steps taken; Result.warnings flags eigenpairs with a
        large residual.

    Raises:
        NotSquareError: If a is not square
        ValidationError: If a is complex and the native backend is used
        ConvergenceError: If the iteration budget is exhausted
    """
    a = as_matrix(a)
    return _get_backend(backend, a).dec_eigen(a, max_iterations=max_iterations)


def dec_sv(
    a: Matrix | ArrayLike,
    *,
    backend: BackendChoice = 'auto',
    tol: float | None = None,
    max_sweeps: int | None = None,
) -> Result[SVDec]:
    """
    Thin singular value decomposition A = U S V^H of an m x n matrix, m >= n.

    Args:
        a: Matrix with at least as many rows as columns
        backend: 'auto', 'native' or 'lapack'
        tol: Native convergence threshold relative to ||B||_F, default n * eps
        max_sweeps: Native sweep budget, default 500 * n^2

    Raises:
        DimensionError: If a has more columns than rows
        ConvergenceError: If the sweep budget is exhausted
    """
    a = as_matrix(a)
    return _get_backend(backend, a).dec_sv(a, tol=tol, max_sweeps=max_sweeps)


def solve(
    a: Matrix | ArrayLike,
    b: Matrix | ArrayLike,
    *,
    backend: BackendChoice = 'auto',
) -> Result[Matrix]:
    """
    Solve A x = b.

    Args:
        a: Square coefficient matrix
        b: Right-hand side; a 1D array is treated as a column vector,
            a matrix solves for every column at once
        backend: 'auto', 'native' or 'lapack'

    Returns:
        Result containing x with the shape of b (as a column for 1D b)

    Raises:
        NotSquareError: If a is not square
        DimensionError: If b has a different number of rows than a
        SingularMatrixError: If a is singular
    """
    a = as_matrix(a)
    b = as_matrix(b)
    return _get_backend(backend, a).solve(a, b)


def inv(a: Matrix | ArrayLike, *, backend: BackendChoice = 'auto') -> Result[Matrix]:
    """
    Matrix inverse.

    Raises:
        SingularMatrixError: If a is singular
    """
    a = as_matrix(a)
    return _get_backend(backend, a).inv(a)


def det(a: Matrix | ArrayLike, *, backend: BackendChoice = 'auto') -> Result[Any]:
    """Determinant (a scalar of the matrix dtype)."""
    a = as_matrix(a)
    return _get_backend(backend, a).det(a)


def pinv(a: Matrix | ArrayLike, *, backend: BackendChoice = 'auto') -> Result[Matrix]:
    """
    Moore-Penrose pseudo-inverse of a full-column-rank m x n matrix, m >= n.

    Raises:
        DimensionError: If a has more columns than rows
        SingularMatrixError: If a is rank deficient
    """
    a = as_matrix(a)
    return _get_backend(backend, a).pinv(a)


def substitute_forward(
    l: Matrix | ArrayLike,
    b: Matrix | ArrayLike,
    *,
    backend: BackendChoice = 'auto',
) -> Result[Matrix]:
    """
    Solve L x = b for lower-triangular L.

    Raises:
        SingularMatrixError: If a diagonal entry of L is (near) zero
    """
    l = as_matrix(l)
    b = as_matrix(b)
    return _get_backend(backend, l).substitute_forward(l, b)


def substitute_backward(
    u: Matrix | ArrayLike,
    b: Matrix | ArrayLike,
    *,
    backend: BackendChoice = 'auto',
) -> Result[Matrix]:
    """
    Solve U x = b for upper-triangular U.

    Raises:
        SingularMatrixError: If a diagonal entry of U is (near) zero
    """
    u = as_matrix(u)
    b = as_matrix(b)
    return _get_backend(backend, u).substitute_backward(u, b)


def _get_backend(choice: BackendChoice, a: Matrix):
    """
    Select and instantiate the appropriate backend.

    'auto' uses the native algorithms up to NATIVE_SIZE_LIMIT rows and
    columns and LAPACK for anything larger.

    Raises:
        ValidationError: If an unknown backend is specified
    """
    if choice == 'auto':
        if max(a.dim()) <= NATIVE_SIZE_LIMIT:
            return NativeBackend()
        return LapackBackend()

    elif choice == 'native':
        return NativeBackend()

    elif choice == 'lapack':
        return LapackBackend()

    else:
        raise ValidationError(
            f"Unknown backend: {choice!r}, expected 'auto', 'native' or 'lapack'"
        )
