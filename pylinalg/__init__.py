"""
pylinalg: dense numerical linear algebra for Python.

A Matrix container with LU, Cholesky, QR and Hessenberg decompositions,
Francis double-shift eigenvalue iteration, bidiagonal SVD, and linear
solves built on them. Every operation runs on either the package's own
algorithms ('native') or LAPACK ('lapack').

Submodules:
    matrix: The dense Matrix container
    decomposition: Decompositions, solves and backend selection
    core: Exceptions, Result envelope, validation, numeric kernels
"""

__version__ = "0.1.0"

from pylinalg.matrix import Matrix
from pylinalg.core.result import Result
from pylinalg.core.exceptions import (
    PyLinalgError,
    ValidationError,
    DimensionError,
    NotSquareError,
    NumericalError,
    SingularMatrixError,
    NotPositiveDefiniteError,
    ConvergenceError,
)
from pylinalg import decomposition

__all__ = [
    "__version__",
    "Matrix",
    "Result",
    "decomposition",
    # Exceptions
    "PyLinalgError",
    "ValidationError",
    "DimensionError",
    "NotSquareError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "ConvergenceError",
]
