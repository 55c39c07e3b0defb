"""
Core protocols for pylinalg.

These define structural interfaces that backend implementations must
satisfy. We use Protocol (structural typing) rather than ABC (nominal
typing) so a third-party backend only has to provide the methods.

Design Principles:
    - One contract, several implementations: every backend accepts the
      same Matrix operands and returns identically shaped payloads
    - Stateless: configuration is passed per call, never stored
    - Every operation returns a Result envelope
"""

from __future__ import annotations

from typing import Protocol, Any, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from pylinalg.core.result import Result
    from pylinalg.matrix import Matrix
    from pylinalg.decomposition.solution import (
        LUDec,
        CholeskyDec,
        QRDec,
        HessenbergDec,
        EigenDec,
        SVDec,
    )


@runtime_checkable
class Backend(Protocol):
    """
    Protocol for computational backends.

    A backend implements every public decomposition and solve. The
    'native' backend runs this package's own algorithms; 'lapack'
    delegates to an optimized library. Results must agree to within the
    tolerance tier of the working dtype, not bit for bit.

    Every method raises:
        ValidationError / DimensionError / NotSquareError: On shape or
            dtype preconditions, before any computation
        SingularMatrixError, NotPositiveDefiniteError: On numerical
            breakdown of a direct method
        ConvergenceError: When an iterative method exhausts its budget
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Examples: 'native', 'lapack'
        """
        ...

    def dec_lu(self, a: Matrix) -> Result[LUDec]:
        """LU with partial pivoting: P A = L U."""
        ...

    def dec_cholesky(self, a: Matrix) -> Result[CholeskyDec]:
        """Cholesky factor L with L L^H = A."""
        ...

    def dec_qr(self, a: Matrix) -> Result[QRDec]:
        """Complete QR: Q (m x m) unitary, R (m x n) upper triangular."""
        ...

    def dec_hessenberg(self, a: Matrix) -> Result[HessenbergDec]:
        """Hessenberg reduction A = Q H Q^H."""
        ...

    def dec_eigen(self, a: Matrix, max_iterations: int | None = None) -> Result[EigenDec]:
        """Eigenvalues and unit eigenvectors of a square matrix."""
        ...

    def dec_sv(
        self,
        a: Matrix,
        tol: float | None = None,
        max_sweeps: int | None = None,
    ) -> Result[SVDec]:
        """Thin SVD A = U diag(s) V^H of a tall matrix."""
        ...

    def solve(self, a: Matrix, b: Matrix) -> Result[Matrix]:
        """Solve A x = b for square A."""
        ...

    def inv(self, a: Matrix) -> Result[Matrix]:
        """Inverse of a square matrix."""
        ...

    def det(self, a: Matrix) -> Result[Any]:
        """Determinant of a square matrix."""
        ...

    def pinv(self, a: Matrix) -> Result[Matrix]:
        """Moore-Penrose pseudo-inverse of a full-column-rank tall matrix."""
        ...

    def substitute_forward(self, l: Matrix, b: Matrix) -> Result[Matrix]:
        """Solve L x = b for lower-triangular L."""
        ...

    def substitute_backward(self, u: Matrix, b: Matrix) -> Result[Matrix]:
        """Solve U x = b for upper-triangular U."""
        ...
