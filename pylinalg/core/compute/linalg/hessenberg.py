"""
Reduction to upper Hessenberg form by Householder similarity transforms.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pylinalg.core.compute.linalg.rotations import householder


@dataclass(frozen=True)
class HessenbergResult:
    """
    Result of Hessenberg reduction.

    Attributes:
        Q: Unitary matrix (n x n)
        H: Upper Hessenberg matrix with A = Q H Q^H
    """
    Q: NDArray[Any]
    H: NDArray[Any]


def hessenberg_native(a: NDArray[Any]) -> HessenbergResult:
    """
    Householder reduction of a square matrix to Hessenberg form.

    For k = 0..n-3 a reflector P_k zeroes H[k+2:, k]; it is applied as
    H <- P_k H P_k and accumulated as Q <- Q P_k, so Q H Q^H = A.
    Matrices with n <= 2 are already Hessenberg (Q = I, H = A).
    """
    n = a.shape[0]
    h = a.astype(a.dtype, copy=True)
    q = np.eye(n, dtype=a.dtype)

    for k in range(n - 2):
        p = householder(h[:, k], k + 1).astype(a.dtype, copy=False)
        h = p @ h @ p
        q = q @ p
        h[k + 2:, k] = 0

    return HessenbergResult(Q=q, H=h)


def hessenberg_lapack(a: NDArray[Any]) -> HessenbergResult:
    """Hessenberg reduction using LAPACK gehrd/orghr (via SciPy)."""
    from scipy.linalg import hessenberg

    h, q = hessenberg(a, calc_q=True)
    return HessenbergResult(Q=q, H=h)
