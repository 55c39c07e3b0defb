"""
Cholesky decomposition A = L L^H for Hermitian positive-definite matrices.

The native kernel is the row-oriented Cholesky-Banachiewicz recurrence;
the LAPACK kernel delegates to potrf via SciPy. Both report failure as
NotPositiveDefiniteError rather than returning NaN entries.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.exceptions import NotPositiveDefiniteError
from pylinalg.core.compute.precision import machine_epsilon

# Asymmetry allowed relative to n * eps * max|A|
_HERMITIAN_SLACK = 1e3


@dataclass(frozen=True)
class CholeskyResult:
    """
    Result of Cholesky decomposition.

    Attributes:
        L: Lower-triangular factor with L L^H = A
    """
    L: NDArray[Any]


def check_hermitian(a: NDArray[Any], name: str = 'A') -> None:
    """
    Verify a is Hermitian (symmetric when real) up to rounding.

    Raises:
        NotPositiveDefiniteError: If a differs from a^H beyond tolerance
    """
    n = a.shape[0]
    scale = float(np.max(np.abs(a))) if a.size else 0.0
    tol = _HERMITIAN_SLACK * max(n, 1) * machine_epsilon(a.dtype) * scale
    asymmetry = float(np.max(np.abs(a - a.conj().T))) if a.size else 0.0
    if asymmetry > tol:
        raise NotPositiveDefiniteError(
            f"{name} is not Hermitian (max |A - A^H| = {asymmetry:.3e}, "
            f"tolerance {tol:.3e}); Cholesky requires a Hermitian "
            f"positive-definite matrix",
            matrix_name=name,
        )


def cholesky_native(a: NDArray[Any], name: str = 'A') -> CholeskyResult:
    """
    Cholesky factorization without pivoting.

    For i = 0..n-1 and j = 0..i:
        s = sum_{k<j} L[i, k] * conj(L[j, k])
        L[i, i] = sqrt(A[i, i] - s)            (i == j)
        L[i, j] = (A[i, j] - s) / L[j, j]      (i > j)

    Raises:
        NotPositiveDefiniteError: If a is not Hermitian or a radicand
            A[i, i] - s is not strictly positive
    """
    check_hermitian(a, name)

    n = a.shape[0]
    l = np.zeros_like(a)

    for i in range(n):
        for j in range(i + 1):
            s = l[i, :j] @ l[j, :j].conj()
            if i == j:
                radicand = (a[i, i] - s).real
                if not radicand > 0:
                    raise NotPositiveDefiniteError(
                        f"{name} is not positive definite: leading minor {i + 1} "
                        f"has non-positive pivot {radicand:.6g}",
                        matrix_name=name,
                        pivot_index=i,
                    )
                l[i, i] = np.sqrt(radicand)
            else:
                l[i, j] = (a[i, j] - s) / l[j, j]

    return CholeskyResult(L=l)


def cholesky_lapack(a: NDArray[Any], name: str = 'A') -> CholeskyResult:
    """
    Cholesky factorization using LAPACK potrf (via SciPy).

    Raises:
        NotPositiveDefiniteError: If a is not Hermitian or potrf fails
    """
    from scipy.linalg import cholesky, LinAlgError

    check_hermitian(a, name)
    try:
        l = cholesky(a, lower=True)
    except LinAlgError as e:
        raise NotPositiveDefiniteError(
            f"{name} is not positive definite: {e}",
            matrix_name=name,
        ) from e
    return CholeskyResult(L=l)
