"""
LU decomposition with partial pivoting.

Provides the native Gaussian elimination kernel and its LAPACK
counterpart (via SciPy), both returning P A = L U with P a permutation
matrix, L unit lower triangular and U upper triangular.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class LUResult:
    """
    Result of LU decomposition.

    Attributes:
        L: Unit lower-triangular factor (n x n)
        U: Upper-triangular factor (n x n)
        P: Permutation matrix with P A = L U
        n_swaps: Number of row exchanges performed
    """
    L: NDArray[Any]
    U: NDArray[Any]
    P: NDArray[Any]
    n_swaps: int


def lu_native(a: NDArray[Any]) -> LUResult:
    """
    Gaussian elimination with partial pivoting.

    For each column i the row with the largest |a[l, i]|, l >= i, is
    swapped into position i (in both the working matrix and P). Rows
    below are reduced by the multiplier a[j, i] / a[i, i], which is
    recorded in L. A column that is already zero on and below the
    diagonal is left as is (multipliers 0); the resulting U then has a
    zero diagonal entry that substitution reports as singular.

    Args:
        a: Square matrix (n x n); not modified

    Returns:
        LUResult with P A = L U
    """
    n = a.shape[0]
    work = a.astype(a.dtype, copy=True)
    perm = np.arange(n)
    n_swaps = 0

    for i in range(n):
        # pivoting
        i_max = i + int(np.argmax(np.abs(work[i:, i])))
        if i_max != i:
            work[[i, i_max], :] = work[[i_max, i], :]
            perm[[i, i_max]] = perm[[i_max, i]]
            n_swaps += 1

        pivot = work[i, i]
        if i + 1 >= n:
            continue
        if pivot == 0:
            work[i + 1:, i] = 0
            continue

        factors = work[i + 1:, i] / pivot
        work[i + 1:, i + 1:] -= np.outer(factors, work[i, i + 1:])
        work[i + 1:, i] = factors

    l = np.tril(work, -1) + np.eye(n, dtype=work.dtype)
    u = np.triu(work)
    p = np.eye(n, dtype=a.dtype)[perm]

    return LUResult(L=l, U=u, P=p, n_swaps=n_swaps)


def lu_lapack(a: NDArray[Any]) -> LUResult:
    """
    LU decomposition using LAPACK getrf (via SciPy).

    SciPy returns A = P_s L U; the permutation is transposed so the
    result satisfies the same P A = L U contract as lu_native.
    """
    from scipy.linalg import lu

    p_s, l, u = lu(a)
    p = p_s.T.astype(a.dtype)
    return LUResult(L=l, U=u, P=p, n_swaps=permutation_swaps(p))


def permutation_swaps(p: NDArray[Any]) -> int:
    """
    Minimal number of transpositions composing permutation matrix p.

    Computed from the cycle decomposition: n minus the number of cycles.
    """
    perm = np.argmax(np.abs(p), axis=1)
    n = perm.shape[0]
    seen = np.zeros(n, dtype=bool)
    cycles = 0
    for start in range(n):
        if seen[start]:
            continue
        cycles += 1
        j = start
        while not seen[j]:
            seen[j] = True
            j = perm[j]
    return n - cycles


def permutation_sign(p: NDArray[Any]) -> int:
    """Determinant of permutation matrix p: +1 or -1."""
    return -1 if permutation_swaps(p) % 2 else 1


def det_native(a: NDArray[Any]) -> Any:
    """
    Determinant via closed forms (n <= 2) or the LU factors.

    det(A) = sign(P) * prod(diag(U)) since det(P) det(A) = det(U) and
    det(P) = det(P)^-1 for a permutation.
    """
    n = a.shape[0]
    if n == 1:
        return a[0, 0]
    if n == 2:
        return a[0, 0] * a[1, 1] - a[0, 1] * a[1, 0]

    factors = lu_native(a)
    sign = -1 if factors.n_swaps % 2 else 1
    return sign * np.prod(np.diag(factors.U))
