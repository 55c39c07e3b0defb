"""
Orthogonal transform primitives: Householder reflectors and Givens rotations.

These are the building blocks of the Hessenberg reduction, the Francis
iteration, the bidiagonal SVD and the QR factorization. All functions
work on plain NumPy arrays and are generic over real and complex dtypes
unless stated otherwise.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray


def _phase(value: complex) -> complex:
    """value / |value|, or 1 for zero (sign for reals)."""
    magnitude = abs(value)
    if magnitude == 0:
        return 1.0
    return value / magnitude


def householder(v: NDArray[Any], k: int = 0) -> NDArray[Any]:
    """
    Householder reflector that zeroes v[k+1:] and leaves v[:k] untouched.

    Returns the full (len(v) x len(v)) Hermitian unitary matrix
    H = I - 2 w w^H with w supported on [k:], such that
    (H v)[k] = alpha and (H v)[k+1:] = 0 where |alpha| = ||v[k:]||.
    alpha takes the sign (phase) opposite to v[k] to avoid cancellation.

    Args:
        v: Vector to reflect (1D array)
        k: Index of the entry that receives the norm, 0 <= k < len(v)

    Returns:
        Reflector matrix with the dtype of v. The identity is returned
        when v[k:] is already zero or len(v) == 1.

    Raises:
        IndexError: If k is out of bounds
    """
    v = np.asarray(v)
    size = v.shape[0]
    if not 0 <= k < size:
        raise IndexError(f"householder: index k={k} out of bounds for length {size}")

    dtype = np.result_type(v.dtype, np.float64) if v.dtype.kind in 'iub' else v.dtype
    identity = np.eye(size, dtype=dtype)
    if size == 1:
        return identity

    d = v[k:].astype(dtype)
    norm = float(np.linalg.norm(d))
    if norm == 0.0:
        return identity

    d_0 = d[0]
    alpha = -_phase(d_0) * norm

    w = np.zeros(size, dtype=dtype)
    # (1 - d_0/alpha) is real and in [1, 2] by the choice of alpha
    w_0 = np.sqrt(0.5 * (1.0 - (d_0 / alpha).real))
    p = -alpha * w_0
    w[k] = w_0
    w[k + 1:] = d[1:] / (2.0 * p)

    return identity - 2.0 * np.outer(w, w.conj())


def givens(m: int, i: int, j: int, c: float, s: float) -> NDArray[np.float64]:
    """
    Givens rotation matrix of size m acting on coordinates (i, j).

    G[i, i] = G[j, j] = c, G[i, j] = s, G[j, i] = -s, identity elsewhere.

    Raises:
        IndexError: If i or j is out of bounds
    """
    if i >= m or j >= m or i < 0 or j < 0:
        raise IndexError(f"givens: indices ({i}, {j}) out of bounds for size {m}")

    g = np.eye(m, dtype=np.result_type(type(c), type(s), np.float64))
    g[i, i] = c
    g[j, j] = c
    g[i, j] = s
    g[j, i] = -s
    return g


def givens_cosine_sine_pair(a: float, b: float) -> tuple[float, float]:
    """
    Cosine-sine pair (c, s) so that [c s; -s c]^T [a; b] = [r; 0].

    Golub & Van Loan, Algorithm 5.1.3. Real arguments only.
    """
    if b == 0:
        return 1.0, 0.0

    if abs(b) > abs(a):
        tau = -a / b
        s = 1.0 / np.sqrt(1.0 + tau * tau)
        c = s * tau
    else:
        tau = -b / a
        c = 1.0 / np.sqrt(1.0 + tau * tau)
        s = c * tau
    return float(c), float(s)


def rot(f: float, g: float) -> tuple[float, float, float]:
    """
    Plane rotation (c, s, r) with [c s; -s c] [f; g] = [r; 0].

    Used by the bidiagonal SVD sweep. Real arguments only; scaled so
    that no intermediate squares overflow.
    """
    if f == 0:
        return 0.0, 1.0, float(g)

    if abs(f) > abs(g):
        t = g / f
        t1 = np.sqrt(1.0 + t * t)
        return float(1.0 / t1), float(t / t1), float(f * t1)

    t = f / g
    t1 = np.sqrt(1.0 + t * t)
    return float(t / t1), float(1.0 / t1), float(g * t1)


def apply_rows(
    x: NDArray[Any],
    i: int,
    j: int,
    g: NDArray[Any],
    columns: slice = slice(None),
) -> None:
    """
    In place: rows (i, j) of x <- g @ rows (i, j), restricted to columns.

    g is a 2x2 rotation. Equivalent to left-multiplying x by the
    embedded rotation but touches only the two affected rows.
    """
    top = x[i, columns].copy()
    bottom = x[j, columns]
    x[i, columns] = g[0, 0] * top + g[0, 1] * bottom
    x[j, columns] = g[1, 0] * top + g[1, 1] * bottom


def apply_columns(
    x: NDArray[Any],
    i: int,
    j: int,
    g: NDArray[Any],
    rows: slice = slice(None),
) -> None:
    """In place: columns (i, j) of x <- columns (i, j) @ g, restricted to rows."""
    left = x[rows, i].copy()
    right = x[rows, j]
    x[rows, i] = left * g[0, 0] + right * g[1, 0]
    x[rows, j] = left * g[0, 1] + right * g[1, 1]
