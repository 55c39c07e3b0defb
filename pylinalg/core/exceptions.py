"""
Exception hierarchy for pylinalg.

All exceptions inherit from PyLinalgError to allow catching any
library-specific error. Shape and precondition violations derive from
ValidationError and are raised immediately; numerical failures derive
from NumericalError (or ConvergenceError) so callers can catch them and
fall back to another strategy.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyLinalgError(Exception):
    """Base exception for all pylinalg errors."""
    pass


class ValidationError(PyLinalgError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks
    (non-numeric data, unsupported dtype, unknown backend).
    """
    pass


class DimensionError(ValidationError):
    """
    Operand shapes are incompatible.

    Raised when matrix shapes don't match for an operation, e.g. a
    product of (m x n) and (p x q) with n != p, or a buffer whose
    length differs from m * n.
    """
    pass


class NotSquareError(DimensionError):
    """
    A square-only operation received a non-square matrix.

    Attributes:
        shape: The offending (rows, cols) shape
    """

    def __init__(self, message: str, shape: tuple[int, int] | None = None):
        super().__init__(message)
        self.shape = shape


class NumericalError(PyLinalgError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a solve, inverse or pseudo-inverse meets a triangular
    factor with a (near) zero diagonal entry.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (typically min(m, n))
        pivot_index: Index of the first degenerate diagonal entry, if known
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None,
        pivot_index: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank
        self.pivot_index = pivot_index


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not (Hermitian) positive definite.

    Raised by the Cholesky factorization instead of producing NaN.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        min_eigenvalue: Minimum eigenvalue, if computed
        pivot_index: Row at which the factorization broke down, if known
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        min_eigenvalue: float | None = None,
        pivot_index: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.min_eigenvalue = min_eigenvalue
        self.pivot_index = pivot_index


class ConvergenceError(PyLinalgError):
    """
    Iterative algorithm failed to converge.

    Raised when the Francis QR iteration or the SVD sweep exhausts its
    iteration budget without meeting the deflation/convergence criterion.

    Attributes:
        iterations: Number of iterations (or sweeps) completed
        final_change: Final size of the quantity being driven to zero
        reason: Why convergence failed (e.g., 'max_iterations')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
