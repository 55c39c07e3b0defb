"""
Eigenvalues and eigenvectors of square matrices.

The native path (real input) reduces A to Hessenberg form, runs
Francis double-shift implicit QR steps until the matrix is
quasi-upper-triangular (1x1 and 2x2 diagonal blocks), reads the
eigenvalues off the blocks and recovers each eigenvector by inverse
iteration on the original matrix.

References:
    Golub, G. H. and Van Loan, C. F. (2013). Matrix Computations,
    4th ed., Algorithm 7.5.1 (Francis QR step).
    Wilkinson, J. H. (1965). The Algebraic Eigenvalue Problem (inverse
    iteration, exceptional shifts).
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.exceptions import ConvergenceError
from pylinalg.core.compute.precision import machine_epsilon
from pylinalg.core.compute.tolerances import (
    EIGEN_ITERATIONS_PER_VALUE,
    INVERSE_ITERATION_STEPS,
)
from pylinalg.core.compute.linalg.rotations import (
    householder,
    givens_cosine_sine_pair,
    apply_rows,
    apply_columns,
)
from pylinalg.core.compute.linalg.hessenberg import hessenberg_native
from pylinalg.core.compute.linalg.lu import lu_native
from pylinalg.core.compute.linalg.substitute import (
    substitute_forward,
    substitute_backward,
)


@dataclass(frozen=True)
class EigenResult:
    """
    Result of an eigen decomposition.

    Attributes:
        eigenvalues: Eigenvalues in Schur-form order (real dtype when all
            are real, complex otherwise)
        eigenvectors: Unit 2-norm eigenvectors as columns
        residuals: ||A v - lambda v|| per eigenpair
        iterations: Francis steps performed (0 for LAPACK)
    """
    eigenvalues: NDArray[Any]
    eigenvectors: NDArray[Any]
    residuals: NDArray[np.floating]
    iterations: int


def _negligible(t: NDArray[Any], l: int, eps: float) -> bool:
    return abs(t[l, l - 1]) <= eps * (abs(t[l - 1, l - 1]) + abs(t[l, l]))


def _francis_step(t: NDArray[Any], lo: int, hi: int, s: float, d: float) -> None:
    """
    One implicit double-shift QR step on the window t[lo:hi+1, lo:hi+1].

    s and d are the trace and determinant of the shift pair. The bulge
    introduced by the first reflector is chased down the subdiagonal by
    3x3 reflectors; a closing Givens rotation removes it at the bottom.
    """
    x = t[lo, lo] * t[lo, lo] + t[lo, lo + 1] * t[lo + 1, lo] - s * t[lo, lo] + d
    y = t[lo + 1, lo] * (t[lo, lo] + t[lo + 1, lo + 1] - s)
    z = t[lo + 1, lo] * t[lo + 2, lo + 1]

    for k in range(lo, hi - 1):
        p = householder(np.array([x, y, z]))
        r = max(lo, k - 1)
        t[k:k + 3, r:] = p @ t[k:k + 3, r:]
        last = min(k + 4, hi + 1)
        t[:last, k:k + 3] = t[:last, k:k + 3] @ p
        if k > lo:
            t[k + 1:k + 3, k - 1] = 0

        x = t[k + 1, k]
        y = t[k + 2, k]
        if k < hi - 2:
            z = t[k + 3, k]

    c, sn = givens_cosine_sine_pair(x, y)
    g = np.array([[c, sn], [-sn, c]])
    apply_rows(t, hi - 1, hi, g.T, slice(hi - 2, None))
    apply_columns(t, hi - 1, hi, g, slice(0, hi + 1))
    t[hi, hi - 2] = 0


def francis_schur(
    h: NDArray[np.floating],
    max_iterations: int | None = None,
) -> tuple[NDArray[np.floating], int]:
    """
    Drive a real Hessenberg matrix to quasi-upper-triangular form.

    The active window [lo, hi] is the trailing unreduced block. A
    subdiagonal entry t[l, l-1] is negligible when
    |t[l, l-1]| <= eps * (|t[l-1, l-1]| + |t[l, l]|), so an exact zero
    always splits the window; it is then zeroed.
    A deflated 1x1 block shrinks the window by one, a 2x2 block by two.
    After 10 and 20 steps on the same window an exceptional shift breaks
    cycles; the count restarts whenever either end of the window moves.

    Args:
        h: Real upper Hessenberg matrix (n x n); not modified
        max_iterations: Step budget, default 30 * n

    Returns:
        (T, iterations)

    Raises:
        ConvergenceError: If the budget is exhausted before all blocks
            have deflated
    """
    t = h.astype(h.dtype, copy=True)
    n = t.shape[0]
    eps = machine_epsilon(t.dtype)
    if max_iterations is None:
        max_iterations = EIGEN_ITERATIONS_PER_VALUE * max(n, 1)

    iterations = 0
    stagnant = 0
    active_lo = None
    hi = n - 1
    while hi >= 1:
        lo = hi
        while lo > 0:
            if _negligible(t, lo, eps):
                t[lo, lo - 1] = 0
                break
            lo -= 1

        if lo == hi:
            hi -= 1
            stagnant = 0
            continue
        if lo == hi - 1:
            hi -= 2
            stagnant = 0
            continue

        if lo != active_lo:
            active_lo = lo
            stagnant = 0

        if iterations >= max_iterations:
            raise ConvergenceError(
                f"Francis iteration did not converge in {max_iterations} steps "
                f"({hi + 1} eigenvalues still undeflated)",
                iterations=iterations,
                final_change=float(abs(t[hi, hi - 1])),
                reason="max_iterations",
                threshold=eps,
            )
        iterations += 1
        stagnant += 1

        if stagnant in (10, 20):
            sigma = abs(t[hi, hi - 1]) + abs(t[hi - 1, hi - 2])
            h_hi = t[hi, hi]
            s = 2.0 * h_hi + 1.5 * sigma
            d = sigma * sigma + 1.5 * sigma * h_hi + h_hi * h_hi
        else:
            s = t[hi - 1, hi - 1] + t[hi, hi]
            d = t[hi - 1, hi - 1] * t[hi, hi] - t[hi - 1, hi] * t[hi, hi - 1]

        _francis_step(t, lo, hi, s, d)

    return t, iterations


def block_eigenvalues(a: float, b: float, c: float, d: float) -> tuple[complex, complex]:
    """Eigenvalues of [[a, b], [c, d]] by the quadratic formula."""
    mid = 0.5 * (a + d)
    disc = 0.25 * (a - d) * (a - d) + b * c
    if disc >= 0:
        root = np.sqrt(disc)
        return complex(mid + root), complex(mid - root)
    root = np.sqrt(-disc)
    return complex(mid, root), complex(mid, -root)


def schur_eigenvalues(t: NDArray[np.floating]) -> NDArray[Any]:
    """Read eigenvalues off the 1x1 and 2x2 diagonal blocks of T."""
    n = t.shape[0]
    values = []
    i = 0
    while i < n:
        if i + 1 < n and t[i + 1, i] != 0:
            values.extend(block_eigenvalues(t[i, i], t[i, i + 1], t[i + 1, i], t[i + 1, i + 1]))
            i += 2
        else:
            values.append(complex(t[i, i]))
            i += 1

    out = np.array(values, dtype=np.result_type(t.dtype, np.complex64))
    if np.all(out.imag == 0):
        return out.real.astype(t.dtype)
    return out


def normalize_eigenvector(x: NDArray[Any]) -> NDArray[Any]:
    """Scale x to unit 2-norm with its largest component real and positive."""
    norm = np.linalg.norm(x)
    if norm == 0:
        return x
    x = x / norm
    idx = int(np.argmax(np.abs(x)))
    pivot = x[idx]
    return x * (np.conj(pivot) / abs(pivot))


def inverse_iteration(
    a: NDArray[Any],
    shift: Any,
    seed: int,
    steps: int = INVERSE_ITERATION_STEPS,
) -> NDArray[Any]:
    """
    Eigenvector for eigenvalue estimate `shift` by inverse iteration.

    Factors A - shift I once; pivots of U smaller than eps * ||A||_F are
    replaced by that floor so the nearly singular system stays solvable.
    """
    n = a.shape[0]
    dtype = np.result_type(a.dtype, np.asarray(shift).dtype)
    m = a.astype(dtype) - shift * np.eye(n, dtype=dtype)

    factors = lu_native(m)
    u = factors.U.copy()
    floor = machine_epsilon(dtype) * max(float(np.linalg.norm(a)), 1.0)
    diag = np.diag(u)
    small = np.abs(diag) < floor
    if np.any(small):
        u[np.diag_indices(n)] = np.where(small, floor, diag)

    rng = np.random.default_rng(seed)
    x = rng.standard_normal(n).astype(dtype)
    for _ in range(steps):
        y = substitute_forward(factors.L, factors.P @ x, unit_diagonal=True)
        x = substitute_backward(u, y, tol=0.0)
        x = x / np.linalg.norm(x)

    return normalize_eigenvector(x)


def eigenvectors_native(a: NDArray[Any], eigenvalues: NDArray[Any]) -> tuple[NDArray[Any], NDArray[np.floating]]:
    """Eigenvectors (as columns) and residual norms for each eigenvalue."""
    n = a.shape[0]
    dtype = np.result_type(a.dtype, eigenvalues.dtype)
    vectors = np.zeros((n, n), dtype=dtype)
    residuals = np.zeros(n)
    for j, lam in enumerate(eigenvalues):
        v = inverse_iteration(a, lam, seed=j)
        vectors[:, j] = v
        residuals[j] = np.linalg.norm(a @ v - lam * v)
    return vectors, residuals


def eigen_native(a: NDArray[np.floating], max_iterations: int | None = None) -> EigenResult:
    """
    Eigen decomposition of a real square matrix.

    Args:
        a: Real square matrix (n x n)
        max_iterations: Francis step budget, default 30 * n

    Raises:
        ConvergenceError: If the Francis iteration does not converge
    """
    n = a.shape[0]
    if n == 0:
        return EigenResult(
            eigenvalues=np.zeros(0, dtype=a.dtype),
            eigenvectors=np.zeros((0, 0), dtype=a.dtype),
            residuals=np.zeros(0),
            iterations=0,
        )

    h = hessenberg_native(a).H
    t, iterations = francis_schur(h, max_iterations)
    eigenvalues = schur_eigenvalues(t)
    vectors, residuals = eigenvectors_native(a, eigenvalues)

    return EigenResult(
        eigenvalues=eigenvalues,
        eigenvectors=vectors,
        residuals=residuals,
        iterations=iterations,
    )


def eigen_lapack(a: NDArray[np.floating]) -> EigenResult:
    """
    Eigen decomposition using LAPACK geev (via SciPy).

    Eigenvectors are rescaled with normalize_eigenvector so both paths
    return vectors in the same normal form.
    """
    from scipy.linalg import eig

    w, v = eig(a)
    if not np.iscomplexobj(a) and np.all(w.imag == 0):
        w = w.real.astype(a.dtype)
        v = v.real.astype(a.dtype)

    vectors = np.empty_like(v)
    residuals = np.zeros(w.shape[0])
    for j in range(w.shape[0]):
        vectors[:, j] = normalize_eigenvector(v[:, j])
        residuals[j] = np.linalg.norm(a @ vectors[:, j] - w[j] * vectors[:, j])

    return EigenResult(eigenvalues=w, eigenvectors=vectors, residuals=residuals, iterations=0)
