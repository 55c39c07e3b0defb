"""
Singular value decomposition of tall matrices (m >= n).

Native algorithm, real input only (Demmel, Applied Numerical Linear
Algebra, sec. 5.4):

1. Householder bidiagonalization A = U B V^T with B upper bidiagonal.
2. Zero-shift sweeps: a right rotation clearing B[k, k+1] followed by a
   left rotation clearing the fill-in B[k+1, k], for k = 0..n-2.
   Sweeps repeat until the off-diagonal part of B is negligible.
3. Post-processing: non-negative diagonal, off-diagonals cleared,
   singular values sorted in descending order.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.exceptions import ConvergenceError
from pylinalg.core.compute.precision import machine_epsilon
from pylinalg.core.compute.tolerances import SVD_SWEEPS_FACTOR
from pylinalg.core.compute.linalg.rotations import (
    householder,
    rot,
    apply_rows,
    apply_columns,
)


@dataclass(frozen=True)
class SVDResult:
    """
    Result of singular value decomposition.

    Attributes:
        U: Left singular vectors (m x n), orthonormal columns
        B: Diagonal matrix of singular values (n x n), descending
        V: Right singular vectors (n x n), orthogonal
        sweeps: Zero-shift sweeps performed (0 for LAPACK)
        off_diagonal: Frobenius norm of B's off-diagonal part before it
            was cleared
    """
    U: NDArray[np.floating]
    B: NDArray[np.floating]
    V: NDArray[np.floating]
    sweeps: int
    off_diagonal: float

    @property
    def singular_values(self) -> NDArray[np.floating]:
        return np.diag(self.B)


def bidiagonalize(a: NDArray[np.floating]) -> tuple[NDArray[Any], NDArray[Any], NDArray[Any]]:
    """
    Householder bidiagonalization of a tall matrix.

    Column reflector k zeroes B[k+1:, k] (accumulated into U); row
    reflector k zeroes B[k, k+2:] (accumulated into V).

    Returns:
        (U, B, V) with U (m x n), B (n x n) upper bidiagonal, V (n x n)
        and A = U B V^T
    """
    m, n = a.shape
    b = a.astype(a.dtype, copy=True)
    u = np.eye(m, dtype=a.dtype)
    v = np.eye(n, dtype=a.dtype)

    for k in range(n):
        if k < m - 1:
            p = householder(b[:, k], k).astype(a.dtype, copy=False)
            b = p @ b
            u = u @ p
            b[k + 1:, k] = 0
        if k < n - 2:
            p = householder(b[k, :], k + 1).astype(a.dtype, copy=False)
            b = b @ p
            v = v @ p
            b[k, k + 2:] = 0

    return u[:, :n], b[:n, :n], v


def msweep(b: NDArray[Any], v: NDArray[Any], u_acc: NDArray[Any]) -> None:
    """
    One zero-shift sweep over B, in place.

    Right rotations are applied to columns of B and V, left rotations to
    rows of B and of u_acc; afterwards U_new = U u_acc^T.
    """
    n = b.shape[0]
    for k in range(n - 1):
        c, s, _ = rot(b[k, k], b[k, k + 1])
        right = np.array([[c, -s], [s, c]])
        apply_columns(b, k, k + 1, right)
        apply_columns(v, k, k + 1, right)

        c, s, _ = rot(b[k, k], b[k + 1, k])
        left = np.array([[c, s], [-s, c]])
        apply_rows(b, k, k + 1, left)
        apply_rows(u_acc, k, k + 1, left)


def off_diagonal_norm(b: NDArray[Any]) -> float:
    """Frobenius norm of b with its diagonal removed."""
    off = b - np.diag(np.diag(b))
    return float(np.linalg.norm(off))


def _finalize(
    u: NDArray[Any],
    b: NDArray[Any],
    v: NDArray[Any],
) -> tuple[NDArray[Any], NDArray[Any], NDArray[Any]]:
    s = np.diag(b).copy()
    u = u.copy()
    negative = s < 0
    s[negative] = -s[negative]
    u[:, negative] = -u[:, negative]

    order = np.argsort(-s, kind='stable')
    return u[:, order], np.diag(s[order]), v[:, order]


def svd_native(
    a: NDArray[np.floating],
    tol: float | None = None,
    max_sweeps: int | None = None,
) -> SVDResult:
    """
    Thin SVD of a real m x n matrix with m >= n.

    Args:
        a: Real matrix (m x n), m >= n
        tol: Relative convergence threshold on the off-diagonal norm,
            default n * eps
        max_sweeps: Sweep budget, default 500 * n^2

    Returns:
        SVDResult with A = U B V^T

    Raises:
        ConvergenceError: If the off-diagonal norm is still above
            tol * ||B||_F after max_sweeps sweeps
    """
    n = a.shape[1]
    if tol is None:
        tol = max(n, 1) * machine_epsilon(a.dtype)
    if max_sweeps is None:
        max_sweeps = SVD_SWEEPS_FACTOR * n * n

    u, b, v = bidiagonalize(a)
    u_acc = np.eye(n, dtype=a.dtype)
    threshold = tol * float(np.linalg.norm(b))

    sweeps = 0
    off = off_diagonal_norm(b)
    while off > threshold:
        if sweeps >= max_sweeps:
            raise ConvergenceError(
                f"SVD sweeps did not converge in {max_sweeps} sweeps "
                f"(off-diagonal norm {off:.3e}, threshold {threshold:.3e})",
                iterations=sweeps,
                final_change=off,
                reason="max_sweeps",
                threshold=threshold,
            )
        msweep(b, v, u_acc)
        sweeps += 1
        off = off_diagonal_norm(b)

    u = u @ u_acc.T
    u, b, v = _finalize(u, b, v)
    return SVDResult(U=u, B=b, V=v, sweeps=sweeps, off_diagonal=off)


def svd_lapack(a: NDArray[np.floating]) -> SVDResult:
    """Thin SVD using LAPACK gesdd (via SciPy)."""
    from scipy.linalg import svd

    u, s, vh = svd(a, full_matrices=False)
    return SVDResult(U=u, B=np.diag(s), V=vh.conj().T, sweeps=0, off_diagonal=0.0)
