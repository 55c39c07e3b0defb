"""
Dense matrix container.

Matrix owns an m x n NumPy buffer stored column-major (Fortran order),
so element (i, j) sits at offset j * m + i of convert_to_vec(). It has
value semantics: arithmetic and decompositions never mutate their
operands; the only mutators are the explicitly in-place methods
(set, set_row, set_slice, swap_rows, mut_apply, +=, -=, *=, @=).

Vectors are matrices of shape (m, 1) or (1, n).
"""

from __future__ import annotations

import numbers
from typing import Any, Callable, Iterator, TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinalg.core.exceptions import ValidationError, DimensionError
from pylinalg.core.validation import (
    check_array,
    check_2d,
    check_square,
    check_same_shape,
)
from pylinalg.core.compute.precision import (
    machine_epsilon,
    abs_diff_eq as _abs_diff_eq,
    relative_eq as _relative_eq,
)
from pylinalg.core.compute.linalg import rotations

if TYPE_CHECKING:
    from pylinalg.decomposition.solution import (
        LUDec,
        CholeskyDec,
        QRDec,
        HessenbergDec,
        EigenDec,
    )


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (numbers.Number, np.generic)) and np.ndim(value) == 0


def _check_dimension(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 0:
        raise ValidationError(f"{name}: expected a non-negative integer, got {value!r}")
    return int(value)


class Matrix:
    """
    Dense m x n matrix over float32, float64, complex64 or complex128.

    Construction:
        Matrix(2, 2, [1.0, 3.0, 2.0, 4.0])        # column-major buffer
        Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]])  # row-major literal
        Matrix.from_array(ndarray)                  # 2D array, or 1D -> column
        Matrix.zero(m, n), Matrix.one(n), Matrix.ones(m, n)
        Matrix.new_random(m, n, rng=42)
    """

    __slots__ = ('_data',)

    def __init__(
        self,
        m: int,
        n: int,
        data: ArrayLike,
        dtype: np.dtype | type | None = None,
    ):
        m = _check_dimension(m, 'm')
        n = _check_dimension(n, 'n')
        buffer = check_array(data, 'data', dtype)
        if buffer.ndim != 1:
            raise DimensionError(
                f"data: expected a flat column-major buffer, got shape {buffer.shape}"
            )
        if buffer.shape[0] != m * n:
            raise DimensionError(
                f"data: buffer has {buffer.shape[0]} elements, a ({m}, {n}) matrix needs {m * n}"
            )
        self._data: NDArray[Any] = np.array(buffer.reshape((m, n), order='F'), order='F')

    # === Construction ===

    @classmethod
    def _wrap(cls, array: NDArray[Any]) -> Matrix:
        """Adopt a 2D array produced internally (no validation, no copy if F-ordered)."""
        matrix = cls.__new__(cls)
        matrix._data = np.asfortranarray(array)
        return matrix

    @classmethod
    def from_rows(
        cls,
        rows: ArrayLike,
        dtype: np.dtype | type | None = None,
    ) -> Matrix:
        """
        Build from a row-major nested sequence.

        A flat sequence is a single row.
        """
        array = check_array(rows, 'rows', dtype)
        if array.ndim == 1:
            array = array.reshape(1, -1)
        check_2d(array, 'rows')
        return cls._wrap(np.array(array, order='F'))

    @classmethod
    def from_array(
        cls,
        array: ArrayLike,
        dtype: np.dtype | type | None = None,
    ) -> Matrix:
        """Build from a 2D array (copied); a 1D array becomes a column vector."""
        if isinstance(array, Matrix):
            array = array._data
        result = check_array(array, 'array', dtype)
        if result.ndim == 1:
            result = result.reshape(-1, 1)
        check_2d(result, 'array')
        return cls._wrap(np.array(result, order='F'))

    @classmethod
    def column(cls, values: ArrayLike, dtype: np.dtype | type | None = None) -> Matrix:
        """Column vector (m x 1)."""
        array = check_array(values, 'values', dtype).ravel()
        return cls._wrap(np.array(array.reshape(-1, 1), order='F'))

    @classmethod
    def row(cls, values: ArrayLike, dtype: np.dtype | type | None = None) -> Matrix:
        """Row vector (1 x n)."""
        array = check_array(values, 'values', dtype).ravel()
        return cls._wrap(np.array(array.reshape(1, -1), order='F'))

    @classmethod
    def zero(cls, m: int, n: int, dtype: np.dtype | type = np.float64) -> Matrix:
        """Additive neutral element: the m x n zero matrix."""
        m = _check_dimension(m, 'm')
        n = _check_dimension(n, 'n')
        return cls._wrap(check_array(np.zeros((m, n), order='F'), 'zero', dtype))

    @classmethod
    def one(cls, size: int, dtype: np.dtype | type = np.float64) -> Matrix:
        """Multiplicative neutral element: the size x size identity."""
        size = _check_dimension(size, 'size')
        return cls._wrap(check_array(np.eye(size), 'one', dtype))

    @classmethod
    def ones(cls, m: int, n: int, dtype: np.dtype | type = np.float64) -> Matrix:
        """m x n matrix with every entry 1."""
        m = _check_dimension(m, 'm')
        n = _check_dimension(n, 'n')
        return cls._wrap(check_array(np.ones((m, n), order='F'), 'ones', dtype))

    @classmethod
    def new_random(
        cls,
        m: int,
        n: int,
        rng: np.random.Generator | int | None = None,
        dtype: np.dtype | type = np.float64,
    ) -> Matrix:
        """
        m x n matrix with entries drawn uniformly from [0, 1).

        Complex dtypes draw the real and imaginary parts independently.

        Args:
            m: Rows
            n: Columns
            rng: Generator, integer seed, or None for fresh entropy
            dtype: Element dtype
        """
        m = _check_dimension(m, 'm')
        n = _check_dimension(n, 'n')
        generator = np.random.default_rng(rng)
        values = generator.random((m, n))
        if np.issubdtype(np.dtype(dtype), np.complexfloating):
            values = values + 1j * generator.random((m, n))
        return cls._wrap(check_array(values, 'new_random', dtype))

    # Orthogonal-transform constructors

    @staticmethod
    def householder(v: Matrix | ArrayLike, k: int = 0) -> Matrix:
        """Householder reflector zeroing v[k+1:] (see rotations.householder)."""
        vector = v.to_array().ravel() if isinstance(v, Matrix) else check_array(v, 'v').ravel()
        return Matrix._wrap(rotations.householder(vector, k))

    @staticmethod
    def givens(m: int, i: int, j: int, c: float, s: float) -> Matrix:
        """m x m Givens rotation acting on coordinates (i, j)."""
        return Matrix._wrap(rotations.givens(m, i, j, c, s))

    @staticmethod
    def givens_cosine_sine_pair(a: float, b: float) -> tuple[float, float]:
        """(c, s) with [c s; -s c]^T [a; b] = [r; 0]."""
        return rotations.givens_cosine_sine_pair(a, b)

    # === Shape and element access ===

    def dim(self) -> tuple[int, int]:
        """(rows, cols)."""
        m, n = self._data.shape
        return m, n

    @property
    def nrows(self) -> int:
        return self._data.shape[0]

    @property
    def ncols(self) -> int:
        return self._data.shape[1]

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def is_square(self) -> bool:
        return self.nrows == self.ncols

    def is_vector(self) -> bool:
        return self.nrows == 1 or self.ncols == 1

    def _check_index(self, i: int, j: int) -> None:
        m, n = self.dim()
        if not (0 <= i < m and 0 <= j < n):
            raise IndexError(f"index ({i}, {j}) out of bounds for shape ({m}, {n})")

    def at(self, i: int, j: int) -> Any:
        """Element (i, j)."""
        self._check_index(i, j)
        return self._data[i, j]

    def set(self, i: int, j: int, value: Any) -> None:
        """Overwrite element (i, j) in place."""
        self._check_index(i, j)
        if np.iscomplexobj(value) and not np.iscomplexobj(self._data):
            self._data = self._data.astype(np.result_type(self._data.dtype, np.complex64))
        self._data[i, j] = value

    def __getitem__(self, index: tuple[int, int]) -> Any:
        i, j = self._unpack(index)
        return self.at(i, j)

    def __setitem__(self, index: tuple[int, int], value: Any) -> None:
        i, j = self._unpack(index)
        self.set(i, j, value)

    @staticmethod
    def _unpack(index: Any) -> tuple[int, int]:
        if not (isinstance(index, tuple) and len(index) == 2
                and all(isinstance(k, (int, np.integer)) for k in index)):
            raise TypeError(f"Matrix indices must be an (row, col) pair of ints, got {index!r}")
        return int(index[0]), int(index[1])

    def get_row(self, i: int) -> Matrix:
        """Row i as a 1 x n vector."""
        if not 0 <= i < self.nrows:
            raise IndexError(f"row {i} out of bounds for {self.nrows} rows")
        return Matrix._wrap(self._data[i:i + 1, :].copy(order='F'))

    def get_column(self, j: int) -> Matrix:
        """Column j as an m x 1 vector."""
        if not 0 <= j < self.ncols:
            raise IndexError(f"column {j} out of bounds for {self.ncols} columns")
        return Matrix._wrap(self._data[:, j:j + 1].copy(order='F'))

    def _vector_values(self, values: Matrix | ArrayLike, length: int, name: str) -> NDArray[Any]:
        array = values.to_array() if isinstance(values, Matrix) else check_array(values, name)
        array = array.ravel()
        if array.shape[0] != length:
            raise DimensionError(f"{name}: expected {length} values, got {array.shape[0]}")
        if np.iscomplexobj(array) and not np.iscomplexobj(self._data):
            self._data = self._data.astype(np.result_type(self._data.dtype, array.dtype), order='F')
        return array

    def set_row(self, i: int, values: Matrix | ArrayLike) -> None:
        """Replace row i in place."""
        if not 0 <= i < self.nrows:
            raise IndexError(f"row {i} out of bounds for {self.nrows} rows")
        self._data[i, :] = self._vector_values(values, self.ncols, 'row')

    def set_column(self, j: int, values: Matrix | ArrayLike) -> None:
        """Replace column j in place."""
        if not 0 <= j < self.ncols:
            raise IndexError(f"column {j} out of bounds for {self.ncols} columns")
        self._data[:, j] = self._vector_values(values, self.nrows, 'column')

    def get_slice(self, row_s: int, row_e: int, column_s: int, column_e: int) -> Matrix:
        """
        Sub-block rows row_s..row_e and columns column_s..column_e.

        End indices are inclusive.

        Raises:
            IndexError: If an index is out of bounds or an end precedes its start
        """
        m, n = self.dim()
        if not (0 <= row_s <= row_e < m and 0 <= column_s <= column_e < n):
            raise IndexError(
                f"slice rows {row_s}..{row_e}, columns {column_s}..{column_e} "
                f"out of bounds for shape ({m}, {n})"
            )
        block = self._data[row_s:row_e + 1, column_s:column_e + 1]
        return Matrix._wrap(block.copy(order='F'))

    def set_slice(self, block: Matrix, row: int, column: int) -> None:
        """
        Overwrite the sub-block whose top-left corner is (row, column), in place.

        Raises:
            IndexError: If the block does not fit
        """
        s_m, s_n = block.dim()
        m, n = self.dim()
        if row < 0 or column < 0 or row + s_m > m or column + s_n > n:
            raise IndexError(
                f"block of shape ({s_m}, {s_n}) at ({row}, {column}) "
                f"does not fit shape ({m}, {n})"
            )
        if np.iscomplexobj(block._data) and not np.iscomplexobj(self._data):
            self._data = self._data.astype(np.result_type(self._data.dtype, block.dtype), order='F')
        self._data[row:row + s_m, column:column + s_n] = block._data

    def swap_rows(self, i: int, j: int) -> None:
        """Exchange rows i and j in place."""
        m = self.nrows
        if not (0 <= i < m and 0 <= j < m):
            raise IndexError(f"rows ({i}, {j}) out of bounds for {m} rows")
        if i != j:
            self._data[[i, j], :] = self._data[[j, i], :]

    # === Elementwise maps ===

    def apply(self, f: Callable[[Any], Any]) -> Matrix:
        """New matrix with f applied to every element."""
        m, n = self.dim()
        values = [f(x) for x in self._data.ravel(order='F')]
        if not values:
            return self.clone()
        return Matrix(m, n, values)

    def mut_apply(self, f: Callable[[Any], Any]) -> None:
        """Apply f to every element in place."""
        self._data = self.apply(f)._data

    # === Conversion ===

    def transpose(self) -> Matrix:
        return Matrix._wrap(self._data.T.copy(order='F'))

    def conj_transpose(self) -> Matrix:
        """Hermitian transpose (plain transpose for real dtypes)."""
        return Matrix._wrap(self._data.conj().T.copy(order='F'))

    def trace(self) -> Any:
        """
        Sum of the diagonal.

        Raises:
            NotSquareError: If the matrix is not square
        """
        check_square(self.dim(), 'trace')
        return self._data.trace()

    def clone(self) -> Matrix:
        """Deep copy."""
        return Matrix._wrap(self._data.copy(order='F'))

    def to_array(self) -> NDArray[Any]:
        """Copy of the contents as a 2D NumPy array."""
        return self._data.copy(order='F')

    def to_list(self) -> list[list[Any]]:
        """Row-major nested list."""
        return self._data.tolist()

    def convert_to_vec(self) -> list[Any]:
        """Column-major flat buffer."""
        return self._data.ravel(order='F').tolist()

    def iter(self) -> Iterator[Any]:
        """Elements in column-major order."""
        return iter(self._data.ravel(order='F'))

    def row_iter(self) -> Iterator[Matrix]:
        """Rows as 1 x n vectors."""
        for i in range(self.nrows):
            yield self.get_row(i)

    def column_iter(self) -> Iterator[Matrix]:
        """Columns as m x 1 vectors."""
        for j in range(self.ncols):
            yield self.get_column(j)

    # === Arithmetic ===

    def _operand(self, other: Any, operation: str) -> Any:
        if isinstance(other, Matrix):
            check_same_shape(self.dim(), other.dim(), operation)
            return other._data
        if _is_scalar(other):
            return other
        return NotImplemented

    def __add__(self, other: Any) -> Matrix:
        value = self._operand(other, 'add')
        if value is NotImplemented:
            return NotImplemented
        return Matrix._wrap(self._data + value)

    def __radd__(self, other: Any) -> Matrix:
        return self.__add__(other)

    def __sub__(self, other: Any) -> Matrix:
        value = self._operand(other, 'sub')
        if value is NotImplemented:
            return NotImplemented
        return Matrix._wrap(self._data - value)

    def __rsub__(self, other: Any) -> Matrix:
        if not _is_scalar(other):
            return NotImplemented
        return Matrix._wrap(other - self._data)

    def __neg__(self) -> Matrix:
        return Matrix._wrap(-self._data)

    def __mul__(self, other: Any) -> Matrix:
        if not _is_scalar(other):
            return NotImplemented
        return Matrix._wrap(self._data * other)

    def __rmul__(self, other: Any) -> Matrix:
        return self.__mul__(other)

    def __truediv__(self, other: Any) -> Matrix:
        if not _is_scalar(other):
            return NotImplemented
        return Matrix._wrap(self._data / other)

    def __matmul__(self, other: Any) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.ncols != other.nrows:
            raise DimensionError(
                f"matmul: ({self.nrows}, {self.ncols}) @ ({other.nrows}, {other.ncols}): "
                f"inner dimensions differ"
            )
        return Matrix._wrap(self._data @ other._data)

    def __iadd__(self, other: Any) -> Matrix:
        result = self.__add__(other)
        if result is NotImplemented:
            return NotImplemented
        self._data = result._data
        return self

    def __isub__(self, other: Any) -> Matrix:
        result = self.__sub__(other)
        if result is NotImplemented:
            return NotImplemented
        self._data = result._data
        return self

    def __imul__(self, other: Any) -> Matrix:
        result = self.__mul__(other)
        if result is NotImplemented:
            return NotImplemented
        self._data = result._data
        return self

    def __imatmul__(self, other: Any) -> Matrix:
        result = self.__matmul__(other)
        if result is NotImplemented:
            return NotImplemented
        self._data = result._data
        return self

    # === Comparison ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.dim() == other.dim() and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # mutable

    def _epsilon(self, other: Matrix) -> float:
        return machine_epsilon(np.result_type(self.dtype, other.dtype))

    def abs_diff_eq(self, other: Matrix, epsilon: float | None = None) -> bool:
        """Same shape and every |a_ij - b_ij| <= epsilon (default: machine epsilon)."""
        if self.dim() != other.dim():
            return False
        if epsilon is None:
            epsilon = self._epsilon(other)
        return _abs_diff_eq(self._data, other._data, epsilon)

    def relative_eq(
        self,
        other: Matrix,
        epsilon: float | None = None,
        max_relative: float | None = None,
    ) -> bool:
        """Same shape and every element equal up to an absolute or relative tolerance."""
        if self.dim() != other.dim():
            return False
        default = self._epsilon(other)
        return _relative_eq(
            self._data,
            other._data,
            default if epsilon is None else epsilon,
            default if max_relative is None else max_relative,
        )

    def frobenius_norm(self) -> float:
        return float(np.linalg.norm(self._data))

    # === Formatting ===

    def __repr__(self) -> str:
        suffix = '' if self.dtype == np.float64 else f", dtype=np.{self.dtype}"
        return f"Matrix.from_rows({self._data.tolist()!r}{suffix})"

    def __str__(self) -> str:
        return '\n'.join(' '.join(str(x) for x in row) for row in self._data)

    # === Decompositions and solves (see pylinalg.decomposition) ===

    def dec_lu(self, backend: str = 'auto') -> LUDec:
        from pylinalg.decomposition.solvers import dec_lu
        return dec_lu(self, backend=backend).params

    def dec_cholesky(self, backend: str = 'auto') -> CholeskyDec:
        from pylinalg.decomposition.solvers import dec_cholesky
        return dec_cholesky(self, backend=backend).params

    def dec_qr(self, backend: str = 'auto') -> QRDec:
        from pylinalg.decomposition.solvers import dec_qr
        return dec_qr(self, backend=backend).params

    def dec_hessenberg(self, backend: str = 'auto') -> HessenbergDec:
        from pylinalg.decomposition.solvers import dec_hessenberg
        return dec_hessenberg(self, backend=backend).params

    def dec_eigen(self, backend: str = 'auto', max_iterations: int | None = None) -> EigenDec:
        from pylinalg.decomposition.solvers import dec_eigen
        return dec_eigen(self, backend=backend, max_iterations=max_iterations).params

    def dec_sv(
        self,
        backend: str = 'auto',
        tol: float | None = None,
        max_sweeps: int | None = None,
    ) -> tuple[Matrix, Matrix, Matrix]:
        """(U, B, V) with A = U B V^T and B diagonal, non-negative, descending."""
        from pylinalg.decomposition.solvers import dec_sv
        return dec_sv(self, backend=backend, tol=tol, max_sweeps=max_sweeps).params.usv()

    def solve(self, rhs: Matrix | ArrayLike, backend: str = 'auto') -> Matrix:
        from pylinalg.decomposition.solvers import solve
        return solve(self, rhs, backend=backend).params

    def inv(self, backend: str = 'auto') -> Matrix:
        from pylinalg.decomposition.solvers import inv
        return inv(self, backend=backend).params

    def det(self, backend: str = 'auto') -> Any:
        from pylinalg.decomposition.solvers import det
        return det(self, backend=backend).params

    def pinv(self, backend: str = 'auto') -> Matrix:
        from pylinalg.decomposition.solvers import pinv
        return pinv(self, backend=backend).params

    def substitute_forward(self, b: Matrix | ArrayLike, backend: str = 'auto') -> Matrix:
        """Solve self x = b with self lower triangular."""
        from pylinalg.decomposition.solvers import substitute_forward
        return substitute_forward(self, b, backend=backend).params

    def substitute_backward(self, b: Matrix | ArrayLike, backend: str = 'auto') -> Matrix:
        """Solve self x = b with self upper triangular."""
        from pylinalg.decomposition.solvers import substitute_backward
        return substitute_backward(self, b, backend=backend).params
