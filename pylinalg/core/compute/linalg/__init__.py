"""
Array-level linear algebra kernels for pylinalg.

Every decomposition has two implementations with the same contract:
    - *_native functions implement the algorithms in this package,
      using NumPy only for storage and vectorised row/column updates
    - *_lapack functions delegate to SciPy's LAPACK wrappers

Kernels take and return plain NumPy arrays and wrap their outputs in
frozen result dataclasses. Matrix-level validation and Result envelopes
are the job of pylinalg.decomposition.backends.

Submodules:
    rotations: Householder reflectors and Givens rotations
    substitute: Forward and backward triangular substitution
    lu: LU with partial pivoting, permutation parity, determinant
    cholesky: Cholesky factorization
    qr: QR decomposition by Givens rotations
    hessenberg: Householder reduction to Hessenberg form
    eigen: Francis double-shift QR iteration and inverse iteration
    svd: Bidiagonalization and zero-shift sweeps
"""

from pylinalg.core.compute.linalg.rotations import (
    householder,
    givens,
    givens_cosine_sine_pair,
    rot,
)
from pylinalg.core.compute.linalg.substitute import (
    substitute_forward,
    substitute_backward,
)
from pylinalg.core.compute.linalg.lu import (
    LUResult,
    lu_native,
    lu_lapack,
    det_native,
    permutation_sign,
)
from pylinalg.core.compute.linalg.cholesky import (
    CholeskyResult,
    cholesky_native,
    cholesky_lapack,
)
from pylinalg.core.compute.linalg.qr import (
    QRResult,
    qr_native,
    qr_lapack,
)
from pylinalg.core.compute.linalg.hessenberg import (
    HessenbergResult,
    hessenberg_native,
    hessenberg_lapack,
)
from pylinalg.core.compute.linalg.eigen import (
    EigenResult,
    eigen_native,
    eigen_lapack,
)
from pylinalg.core.compute.linalg.svd import (
    SVDResult,
    svd_native,
    svd_lapack,
)

__all__ = [
    # Primitives
    "householder",
    "givens",
    "givens_cosine_sine_pair",
    "rot",
    "substitute_forward",
    "substitute_backward",
    # LU
    "LUResult",
    "lu_native",
    "lu_lapack",
    "det_native",
    "permutation_sign",
    # Cholesky
    "CholeskyResult",
    "cholesky_native",
    "cholesky_lapack",
    # QR
    "QRResult",
    "qr_native",
    "qr_lapack",
    # Hessenberg
    "HessenbergResult",
    "hessenberg_native",
    "hessenberg_lapack",
    # Eigen
    "EigenResult",
    "eigen_native",
    "eigen_lapack",
    # SVD
    "SVDResult",
    "svd_native",
    "svd_lapack",
]
