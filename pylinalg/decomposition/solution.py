"""
Decomposition payload types.

Each decomposition produces one immutable aggregate of Matrix
components. Backends wrap it in a Result envelope; the Matrix
convenience methods hand back the aggregate itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from pylinalg.matrix import Matrix
from pylinalg.core.validation import check_same_rows
from pylinalg.core.compute.linalg.substitute import (
    substitute_forward,
    substitute_backward,
)


def as_matrix(value: Matrix | ArrayLike) -> Matrix:
    """Matrix operand from a Matrix or array-like (1D becomes a column)."""
    if isinstance(value, Matrix):
        return value
    return Matrix.from_array(value)


@dataclass(frozen=True)
class LUDec:
    """
    LU decomposition P A = L U.

    Attributes:
        l: Unit lower-triangular factor
        u: Upper-triangular factor
        p: Permutation matrix
        n_swaps: Row exchanges performed during pivoting
    """
    l: Matrix
    u: Matrix
    p: Matrix
    n_swaps: int = 0

    def lup(self) -> tuple[Matrix, Matrix, Matrix]:
        return self.l, self.u, self.p

    def solve(self, rhs: Matrix | ArrayLike) -> Matrix:
        """
        Solve A x = rhs reusing the factors.

        Raises:
            SingularMatrixError: If U has a (near) zero diagonal entry
        """
        b = as_matrix(rhs)
        check_same_rows(self.u.dim(), b.dim(), ('A', 'rhs'))
        pb = self.p.to_array() @ b.to_array()
        y = substitute_forward(self.l.to_array(), pb, unit_diagonal=True, name='L')
        x = substitute_backward(self.u.to_array(), y, name='U')
        return Matrix.from_array(x)

    def inv(self) -> Matrix:
        """A^-1 by solving against the identity."""
        n = self.u.nrows
        return self.solve(Matrix.one(n, dtype=self.u.dtype))

    def det(self) -> Any:
        """sign(P) * prod(diag(U))."""
        sign = -1 if self.n_swaps % 2 else 1
        return sign * np.prod(np.diag(self.u.to_array()))


@dataclass(frozen=True)
class CholeskyDec:
    """Cholesky decomposition A = L L^H."""
    l: Matrix

    def solve(self, rhs: Matrix | ArrayLike) -> Matrix:
        """Solve A x = rhs via L y = rhs, L^H x = y."""
        b = as_matrix(rhs)
        check_same_rows(self.l.dim(), b.dim(), ('A', 'rhs'))
        l = self.l.to_array()
        y = substitute_forward(l, b.to_array(), name='L')
        x = substitute_backward(l.conj().T, y, name='L^H')
        return Matrix.from_array(x)


@dataclass(frozen=True)
class QRDec:
    """QR decomposition A = Q R with Q (m x m) unitary and R (m x n)."""
    q: Matrix
    r: Matrix

    def qr(self) -> tuple[Matrix, Matrix]:
        return self.q, self.r


@dataclass(frozen=True)
class HessenbergDec:
    """Hessenberg reduction A = Q H Q^H."""
    q: Matrix
    h: Matrix

    def qh(self) -> tuple[Matrix, Matrix]:
        return self.q, self.h


@dataclass(frozen=True)
class EigenDec:
    """
    Eigen decomposition.

    Attributes:
        eigenvalues: n x 1 vector; complex dtype when any eigenvalue is
            complex, real otherwise
        eigenvectors: n x n, column j is the unit eigenvector of
            eigenvalue j
    """
    eigenvalues: Matrix
    eigenvectors: Matrix

    def value(self) -> Matrix:
        return self.eigenvalues

    def vector(self) -> Matrix:
        return self.eigenvectors

    def pair(self) -> tuple[Matrix, Matrix]:
        return self.eigenvalues, self.eigenvectors


@dataclass(frozen=True)
class SVDec:
    """
    Thin singular value decomposition A = U S V^T.

    Attributes:
        u: m x n, orthonormal columns
        s: n x n diagonal, non-negative, descending
        v: n x n orthogonal
    """
    u: Matrix
    s: Matrix
    v: Matrix

    def usv(self) -> tuple[Matrix, Matrix, Matrix]:
        return self.u, self.s, self.v

    def singular_values(self) -> Matrix:
        """Diagonal of S as an n x 1 vector."""
        return Matrix.column(np.diag(self.s.to_array()))
