"""
Native backend: the decompositions implemented in this package.

NumPy is used for storage and vectorised row/column updates only; every
factorization, iteration and substitution is carried out by the kernels
in pylinalg.core.compute.linalg.
"""

from typing import Any

import numpy as np

from pylinalg.matrix import Matrix
from pylinalg.core.result import Result
from pylinalg.core.exceptions import SingularMatrixError
from pylinalg.core.compute.timing import Timer
from pylinalg.core.compute.linalg.lu import lu_native, det_native
from pylinalg.core.compute.linalg.cholesky import cholesky_native
from pylinalg.core.compute.linalg.qr import qr_native
from pylinalg.core.compute.linalg.hessenberg import hessenberg_native
from pylinalg.core.compute.linalg.eigen import eigen_native
from pylinalg.core.compute.linalg.svd import svd_native
from pylinalg.core.compute.linalg.substitute import (
    substitute_forward,
    substitute_backward,
)
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
    real_operand,
    check_options,
    conditioning_warnings,
    residual_warnings,
)


class NativeBackend:
    """
    Backend running this package's own algorithms.

    Implements the Backend protocol. Exact results for the reference
    fixtures (LU, QR, Cholesky, Hessenberg) come from this backend.
    """

    @property
    def name(self) -> str:
        return 'native'

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
        """
        LU with partial pivoting.

        LU itself never fails; a singular matrix yields a U with a zero
        diagonal entry, reported as a warning here and as
        SingularMatrixError by any later solve.
        """
        timer = Timer()
        timer.start()

        arr = square_operand(a)
        with timer.section('factorization'):
            factors = lu_native(arr)

        estimate, warnings = conditioning_warnings(np.diag(factors.U), 'A')
        params = LUDec(
            l=Matrix.from_array(factors.L),
            u=Matrix.from_array(factors.U),
            p=Matrix.from_array(factors.P),
            n_swaps=factors.n_swaps,
        )
        info = {
            'method': 'gaussian_elimination_partial_pivoting',
            'n_swaps': factors.n_swaps,
            'condition_estimate': estimate,
        }
        return self._result(params, info, timer, warnings)

    def dec_cholesky(self, a: Matrix) -> Result[CholeskyDec]:
        """
        Cholesky-Banachiewicz factorization.

        Raises:
            NotPositiveDefiniteError: If A is not Hermitian positive definite
        """
        timer = Timer()
        timer.start()

        arr = square_operand(a)
        with timer.section('factorization'):
            factors = cholesky_native(arr)

        params = CholeskyDec(l=Matrix.from_array(factors.L))
        return self._result(params, {'method': 'cholesky_banachiewicz'}, timer)

    def dec_qr(self, a: Matrix) -> Result[QRDec]:
        timer = Timer()
        timer.start()

        arr = tall_operand(a)
        with timer.section('givens_rotations'):
            factors = qr_native(arr)

        params = QRDec(q=Matrix.from_array(factors.Q), r=Matrix.from_array(factors.R))
        info = {'method': 'givens', 'rank': factors.rank}
        return self._result(params, info, timer)

    def dec_hessenberg(self, a: Matrix) -> Result[HessenbergDec]:
        timer = Timer()
        timer.start()

        arr = square_operand(a)
        with timer.section('householder_reduction'):
            factors = hessenberg_native(arr)

        params = HessenbergDec(q=Matrix.from_array(factors.Q), h=Matrix.from_array(factors.H))
        return self._result(params, {'method': 'householder'}, timer)

    def dec_eigen(self, a: Matrix, max_iterations: int | None = None) -> Result[EigenDec]:
        """
        Francis double-shift QR iteration plus inverse iteration.

        Raises:
            ValidationError: If A has a nonzero imaginary part
            ConvergenceError: If the iteration budget is exhausted
        """
        timer = Timer()
        timer.start()

        check_options(max_iterations=max_iterations)
        arr = real_operand(square_operand(a), 'A', 'eigen decomposition')
        with timer.section('iteration'):
            factors = eigen_native(arr, max_iterations=max_iterations)

        params = EigenDec(
            eigenvalues=Matrix.from_array(factors.eigenvalues),
            eigenvectors=Matrix.from_array(factors.eigenvectors),
        )
        info = {
            'method': 'francis_double_shift',
            'iterations': factors.iterations,
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
        Bidiagonalization plus zero-shift sweeps.

        Raises:
            DimensionError: If A has more columns than rows
            ValidationError: If A has a nonzero imaginary part
            ConvergenceError: If max_sweeps is exhausted
        """
        timer = Timer()
        timer.start()

        check_options(max_sweeps=max_sweeps, tol=tol)
        arr = real_operand(tall_operand(a), 'A', 'singular value decomposition')
        with timer.section('sweeps'):
            factors = svd_native(arr, tol=tol, max_sweeps=max_sweeps)

        params = SVDec(
            u=Matrix.from_array(factors.U),
            s=Matrix.from_array(factors.B),
            v=Matrix.from_array(factors.V),
        )
        info = {
            'method': 'bidiagonal_zero_shift',
            'sweeps': factors.sweeps,
            'converged': True,
            'off_diagonal_norm': factors.off_diagonal,
        }
        return self._result(params, info, timer)

    def solve(self, a: Matrix, b: Matrix) -> Result[Matrix]:
        """
        Solve A x = b via P A = L U.

        Raises:
            SingularMatrixError: If U has a (near) zero diagonal entry
        """
        timer = Timer()
        timer.start()

        arr = square_operand(a)
        rhs = rhs_operand(arr, b)
        with timer.section('factorization'):
            factors = lu_native(arr)
        with timer.section('substitution'):
            y = substitute_forward(factors.L, factors.P @ rhs, unit_diagonal=True, name='L')
            x = substitute_backward(factors.U, y, name='U')

        estimate, warnings = conditioning_warnings(np.diag(factors.U), 'A')
        info = {'method': 'lu', 'n_swaps': factors.n_swaps, 'condition_estimate': estimate}
        return self._result(Matrix.from_array(x), info, timer, warnings)

    def inv(self, a: Matrix) -> Result[Matrix]:
        """A^-1 by solving A X = I."""
        arr = square_operand(a)
        result = self.solve(a, Matrix.one(arr.shape[0], dtype=arr.dtype))
        return Result(
            params=result.params,
            info={**result.info, 'method': 'lu_inverse'},
            timing=result.timing,
            backend_name=self.name,
            warnings=result.warnings,
        )

    def det(self, a: Matrix) -> Result[Any]:
        timer = Timer()
        timer.start()

        arr = square_operand(a)
        with timer.section('determinant'):
            value = det_native(arr)

        method = 'closed_form' if arr.shape[0] <= 2 else 'lu'
        return self._result(value, {'method': method}, timer)

    def pinv(self, a: Matrix) -> Result[Matrix]:
        """
        Moore-Penrose pseudo-inverse A+ = R1^-1 R1^-H A^H from A = Q R.

        Raises:
            DimensionError: If A has more columns than rows
            SingularMatrixError: If A does not have full column rank
        """
        timer = Timer()
        timer.start()

        arr = tall_operand(a)
        n = arr.shape[1]
        with timer.section('qr'):
            factors = qr_native(arr)
        if factors.rank < n:
            raise SingularMatrixError(
                f"A: pseudo-inverse requires full column rank, got rank "
                f"{factors.rank} < {n}",
                matrix_name='A',
                rank=factors.rank,
                expected_rank=n,
            )

        r1 = factors.R[:n, :n]
        with timer.section('substitution'):
            y = substitute_forward(r1.conj().T, arr.conj().T, name='R^H')
            x = substitute_backward(r1, y, name='R')

        info = {'method': 'qr', 'rank': factors.rank}
        return self._result(Matrix.from_array(x), info, timer)

    def substitute_forward(self, l: Matrix, b: Matrix) -> Result[Matrix]:
        """
        Solve L x = b for lower-triangular L.

        Raises:
            SingularMatrixError: If a diagonal entry of L is (near) zero
        """
        timer = Timer()
        timer.start()

        arr = matrix_operand(l, 'L')
        with timer.section('substitution'):
            x = substitute_forward(arr, b.to_array(), name='L')
        return self._result(Matrix.from_array(x), {'method': 'forward_substitution'}, timer)

    def substitute_backward(self, u: Matrix, b: Matrix) -> Result[Matrix]:
        """
        Solve U x = b for upper-triangular U.

        Raises:
            SingularMatrixError: If a diagonal entry of U is (near) zero
        """
        timer = Timer()
        timer.start()

        arr = matrix_operand(u, 'U')
        with timer.section('substitution'):
            x = substitute_backward(arr, b.to_array(), name='U')
        return self._result(Matrix.from_array(x), {'method': 'backward_substitution'}, timer)
