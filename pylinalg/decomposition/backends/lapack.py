"""
LAPACK backend: the same operations delegated to SciPy.

Produces results with the shapes and conventions of the native backend
(P A = L U, complete QR, thin SVD with V rather than V^H, normalized
eigenvectors) so the two are interchangeable. LinAlgError from SciPy is
translated into the package's exception hierarchy.

Unlike the native backend, eigen and singular value decompositions
accept complex input here.
"""

from typing import Any

import numpy as np
from scipy import linalg as sla

from pylinalg.matrix import Matrix
from pylinalg.core.result import Result
from pylinalg.core.exceptions import SingularMatrixError, ConvergenceError, DimensionError
from pylinalg.core.compute.timing import Timer
from pylinalg.core.compute.precision import triangular_tolerance
from pylinalg.core.compute.linalg.lu import lu_lapack
from pylinalg.core.compute.linalg.cholesky import cholesky_lapack
from pylinalg.core.compute.linalg.qr import qr_lapack, numerical_rank
from pylinalg.core.compute.linalg.hessenberg import hessenberg_lapack
from pylinalg.core.compute.linalg.eigen import eigen_lapack
from pylinalg.core.compute.linalg.svd import svd_lapack
from pylinalg.decomposition.solution import (
    LUDec,
    CholeskyDec,
    QRDec,
    HessenbergDec,
    EigenDec,
    SVDec,
)
from pylinalg.decomposition._operands import (
    matrix_operand,
    square_operand,
    tall_operand,
    rhs_operand,
    check_options,
    conditioning_warnings,
    residual_warnings,
)


def _check_triangular(t: np.ndarray, name: str) -> None:
    """Raise SingularMatrixError on the first negligible diagonal entry."""
    k = min(t.shape)
    tol = triangular_tolerance(t)
    degenerate = np.flatnonzero(np.abs(np.diag(t)[:k]) <= tol)
    if degenerate.size:
        index = int(degenerate[0])
        raise SingularMatrixError(
            f"{name}: diagonal entry {index} is {t[index, index]!r} "
            f"(|value| <= {tol:.3e}); the triangular system is singular",
            matrix_name=name,
            pivot_index=index,
        )


class LapackBackend:
    """
    Backend delegating to LAPACK through scipy.linalg.

    Implements the Backend protocol. Selected automatically for matrices
    larger than NATIVE_SIZE_LIMIT.
    """

    @property
    def name(self) -> str:
        return 'lapack'

    def _result(self, params: Any, info: dict[str, Any], timer: Timer,
                warnings: list[str] | None = None) -> Result[Any]:
        timer.stop()
        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings or ()),
        )

    def dec_lu(self, a: Matrix) -> Result[LUDec]:
        timer = Timer()
        timer.start()

        arr = square_operand(a)
        with timer.section('getrf'):
            factors = lu_lapack(arr)

        estimate, warnings = conditioning_warnings(np.diag(factors.U), 'A')
        params = LUDec(
            l=Matrix.from_array(factors.L),
            u=Matrix.from_array(factors.U),
            p=Matrix.from_array(factors.P),
            n_swaps=factors.n_swaps,
        )
        info = {'method': 'getrf', 'n_swaps': factors.n_swaps, 'condition_estimate': estimate}
        return self._result(params, info, timer, warnings)

    def dec_cholesky(self, a: Matrix) -> Result[CholeskyDec]:
        timer = Timer()
        timer.start()

        arr = square_operand(a)
        with timer.section('potrf'):
            factors = cholesky_lapack(arr)

        params = CholeskyDec(l=Matrix.from_array(factors.L))
        return self._result(params, {'method': 'potrf'}, timer)

    def dec_qr(self, a: Matrix) -> Result[QRDec]:
        timer = Timer()
        timer.start()

        arr = tall_operand(a)
        with timer.section('geqrf'):
            factors = qr_lapack(arr)

        params = QRDec(q=Matrix.from_array(factors.Q), r=Matrix.from_array(factors.R))
        return self._result(params, {'method': 'householder', 'rank': factors.rank}, timer)

    def dec_hessenberg(self, a: Matrix) -> Result[HessenbergDec]:
        timer = Timer()
        timer.start()

        arr = square_operand(a)
        with timer.section('gehrd'):
            factors = hessenberg_lapack(arr)

        params = HessenbergDec(q=Matrix.from_array(factors.Q), h=Matrix.from_array(factors.H))
        return self._result(params, {'method': 'gehrd'}, timer)

    def dec_eigen(self, a: Matrix, max_iterations: int | None = None) -> Result[EigenDec]:
        """
        Eigen decomposition via geev.

        max_iterations is validated but LAPACK applies its own budget.

        Raises:
            ConvergenceError: If geev fails to converge
        """
        timer = Timer()
        timer.start()

        check_options(max_iterations=max_iterations)
        arr = square_operand(a)
        try:
            with timer.section('geev'):
                factors = eigen_lapack(arr)
        except sla.LinAlgError as e:
            raise ConvergenceError(
                f"LAPACK eigenvalue iteration failed: {e}",
                iterations=0,
                reason='lapack_geev',
            ) from e

        params = EigenDec(
            eigenvalues=Matrix.from_array(factors.eigenvalues),
            eigenvectors=Matrix.from_array(factors.eigenvectors),
        )
        info = {
            'method': 'geev',
            'converged': True,
            'n_complex': int(np.count_nonzero(np.iscomplex(factors.eigenvalues))),
            'max_residual': float(factors.residuals.max()),
        }
        return self._result(params, info, timer, residual_warnings(factors.residuals, arr))

    def dec_sv(
        self,
        a: Matrix,
        tol: float | None = None,
        max_sweeps: int | None = None,
    ) -> Result[SVDec]:
        """
        Thin SVD via gesdd.

        tol and max_sweeps are validated but LAPACK applies its own
        convergence criterion.

        Raises:
            ConvergenceError: If gesdd fails to converge
        """
        timer = Timer()
        timer.start()

        check_options(max_sweeps=max_sweeps, tol=tol)
        arr = tall_operand(a)
        try:
            with timer.section('gesdd'):
                factors = svd_lapack(arr)
        except sla.LinAlgError as e:
            raise ConvergenceError(
                f"LAPACK singular value decomposition failed: {e}",
                iterations=0,
                reason='lapack_gesdd',
            ) from e

        params = SVDec(
            u=Matrix.from_array(factors.U),
            s=Matrix.from_array(factors.B),
            v=Matrix.from_array(factors.V),
        )
        return self._result(params, {'method': 'gesdd', 'converged': True}, timer)

    def solve(self, a: Matrix, b: Matrix) -> Result[Matrix]:
        """
        Solve A x = b via getrf/getrs.

        Raises:
            SingularMatrixError: If U has a (near) zero diagonal entry
        """
        timer = Timer()
        timer.start()

        arr = square_operand(a)
        rhs = rhs_operand(arr, b)
        with timer.section('factorization'):
            lu, piv = sla.lu_factor(arr, check_finite=False)
        _check_triangular(np.triu(lu), 'U')
        with timer.section('substitution'):
            x = sla.lu_solve((lu, piv), rhs, check_finite=False)

        estimate, warnings = conditioning_warnings(np.diag(lu), 'A')
        info = {'method': 'getrs', 'condition_estimate': estimate}
        return self._result(Matrix.from_array(x), info, timer, warnings)

    def inv(self, a: Matrix) -> Result[Matrix]:
        """A^-1 by solving A X = I."""
        arr = square_operand(a)
        result = self.solve(a, Matrix.one(arr.shape[0], dtype=arr.dtype))
        return Result(
            params=result.params,
            info={**result.info, 'method': 'getrs_inverse'},
            timing=result.timing,
            backend_name=self.name,
            warnings=result.warnings,
        )

    def det(self, a: Matrix) -> Result[Any]:
        timer = Timer()
        timer.start()

        arr = square_operand(a)
        with timer.section('determinant'):
            value = sla.det(arr, check_finite=False)

        return self._result(value, {'method': 'getrf'}, timer)

    def pinv(self, a: Matrix) -> Result[Matrix]:
        """
        Moore-Penrose pseudo-inverse from the economic QR factorization.

        Raises:
            DimensionError: If A has more columns than rows
            SingularMatrixError: If A does not have full column rank
        """
        timer = Timer()
        timer.start()

        arr = tall_operand(a)
        n = arr.shape[1]
        with timer.section('qr'):
            _, r = sla.qr(arr, mode='economic', check_finite=False)
        rank = numerical_rank(r)
        if rank < n:
            raise SingularMatrixError(
                f"A: pseudo-inverse requires full column rank, got rank {rank} < {n}",
                matrix_name='A',
                rank=rank,
                expected_rank=n,
            )

        with timer.section('substitution'):
            y = sla.solve_triangular(r, arr.conj().T, trans='C', lower=False, check_finite=False)
            x = sla.solve_triangular(r, y, lower=False, check_finite=False)

        return self._result(Matrix.from_array(x), {'method': 'qr', 'rank': rank}, timer)

    def substitute_forward(self, l: Matrix, b: Matrix) -> Result[Matrix]:
        """
        Solve L x = b for lower-triangular L (trtrs).

        Raises:
            SingularMatrixError: If a diagonal entry of L is (near) zero
        """
        timer = Timer()
        timer.start()

        arr = matrix_operand(l, 'L')
        k = min(arr.shape)
        rhs = _leading_rows(b.to_array(), k, 'L')
        _check_triangular(arr, 'L')
        with timer.section('substitution'):
            x = sla.solve_triangular(arr[:k, :k], rhs, lower=True, check_finite=False)
        return self._result(Matrix.from_array(x), {'method': 'trtrs'}, timer)

    def substitute_backward(self, u: Matrix, b: Matrix) -> Result[Matrix]:
        """
        Solve U x = b for upper-triangular U (trtrs).

        Raises:
            SingularMatrixError: If a diagonal entry of U is (near) zero
        """
        timer = Timer()
        timer.start()

        arr = matrix_operand(u, 'U')
        k = min(arr.shape)
        rhs = _leading_rows(b.to_array(), k, 'U')
        _check_triangular(arr, 'U')
        with timer.section('substitution'):
            x = sla.solve_triangular(arr[:k, :k], rhs, lower=False, check_finite=False)
        return self._result(Matrix.from_array(x), {'method': 'trtrs'}, timer)


def _leading_rows(b: np.ndarray, k: int, name: str) -> np.ndarray:
    if b.shape[0] < k:
        raise DimensionError(
            f"{name}: right-hand side has {b.shape[0]} rows, triangular factor needs {k}"
        )
    return b[:k]
