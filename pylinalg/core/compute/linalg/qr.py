"""
QR decomposition implementations.

Provides a consistent QR interface for the native Givens-rotation
algorithm and for LAPACK (via SciPy). Both return the complete
factorization: Q is (m x m) unitary, R is (m x n) upper triangular.
Used directly by dec_qr and by the pseudo-inverse.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.compute.precision import machine_epsilon
from pylinalg.core.compute.linalg.rotations import apply_rows


@dataclass(frozen=True)
class QRResult:
    """
    Result of QR decomposition.

    Attributes:
        Q: Unitary matrix (m x m)
        R: Upper triangular matrix (m x n)
        rank: Numerical rank determined from R diagonal
    """
    Q: NDArray[Any]
    R: NDArray[Any]
    rank: int


def numerical_rank(r: NDArray[Any]) -> int:
    """
    Rank estimate from the diagonal of a triangular factor.

    Entries below max(m, n) * eps * max|diag(R)| count as zero.
    """
    diag_r = np.abs(np.diag(r))
    if diag_r.size == 0:
        return 0
    largest = float(np.max(diag_r))
    if largest == 0.0:
        return 0
    tol = max(r.shape) * machine_epsilon(r.dtype) * largest
    return int(np.sum(diag_r > tol))


def qr_native(a: NDArray[Any]) -> QRResult:
    """
    QR decomposition by Givens rotations.

    For each column j and each row i from the bottom up to j + 1, the
    entry R[i, j] is annihilated against R[j, j] by a rotation on rows
    (j, i), unless |R[i, j]| <= eps * max|A|, in which case the entry
    is set to zero without rotating. The rotation

        G = [[conj(a)/p, conj(b)/p], [-b/p, a/p]],  p = sqrt(|a|^2 + |b|^2)

    maps (a, b) = (R[j, j], R[i, j]) to (p, 0) and is unitary for real
    and complex data alike. The rotations accumulate into Q^H.

    Args:
        a: Matrix to decompose (m x n), m >= n; not modified

    Returns:
        QRResult with A = Q R
    """
    m, n = a.shape
    r = a.astype(a.dtype, copy=True)
    q_h = np.eye(m, dtype=a.dtype)
    skip_tol = machine_epsilon(a.dtype) * float(np.max(np.abs(a), initial=0.0))

    for j in range(n):
        for i in range(m - 1, j, -1):
            a_ij = r[i, j]
            if abs(a_ij) <= skip_tol:
                r[i, j] = 0
                continue
            a_jj = r[j, j]
            p = np.hypot(abs(a_jj), abs(a_ij))
            g = np.array(
                [[np.conj(a_jj) / p, np.conj(a_ij) / p],
                 [-a_ij / p, a_jj / p]],
                dtype=a.dtype,
            )
            apply_rows(r, j, i, g, slice(j, n))
            r[i, j] = 0
            apply_rows(q_h, j, i, g)

    q = q_h.conj().T
    return QRResult(Q=q, R=r, rank=numerical_rank(r))


def qr_lapack(a: NDArray[Any]) -> QRResult:
    """
    QR decomposition using LAPACK geqrf/orgqr (via SciPy).

    Args:
        a: Matrix to decompose (m x n)

    Returns:
        QRResult with complete Q (m x m) and R (m x n)
    """
    from scipy.linalg import qr

    q, r = qr(a, mode='full')
    return QRResult(Q=q, R=r, rank=numerical_rank(r))
