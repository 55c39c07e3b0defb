"""
Tests for the Matrix container.

Validates:
    - Construction from column-major buffers, rows and arrays
    - Element, row, column and slice access (inclusive slice ends)
    - Arithmetic, shape errors, value semantics
    - Comparison, formatting and conversion
"""

import numpy as np
import pytest

from pylinalg import Matrix
from pylinalg.core.exceptions import DimensionError, NotSquareError, ValidationError


@pytest.fixture
def a():
    return Matrix.from_rows([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])


# ═══════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════


class TestConstruction:

    def test_column_major_buffer(self):
        m = Matrix(2, 2, [1.0, 3.0, 2.0, 4.0])
        assert m.to_list() == [[1.0, 2.0], [3.0, 4.0]]

    def test_buffer_length_mismatch(self):
        with pytest.raises(DimensionError, match="needs 6"):
            Matrix(2, 3, [1.0, 2.0])

    def test_nested_buffer_rejected(self):
        with pytest.raises(DimensionError, match="flat"):
            Matrix(2, 2, [[1.0, 2.0], [3.0, 4.0]])

    def test_negative_dimension(self):
        with pytest.raises(ValidationError):
            Matrix(-1, 2, [])

    def test_from_rows(self, a):
        assert a.dim() == (2, 3)
        assert a[1, 0] == 4.0

    def test_from_rows_flat_is_single_row(self):
        assert Matrix.from_rows([1.0, 2.0]).dim() == (1, 2)

    def test_from_array_1d_is_column(self):
        assert Matrix.from_array(np.array([1.0, 2.0, 3.0])).dim() == (3, 1)

    def test_from_array_copies(self):
        source = np.eye(2)
        m = Matrix.from_array(source)
        source[0, 0] = 5.0
        assert m[0, 0] == 1.0

    def test_integer_input_becomes_float64(self):
        assert Matrix.from_rows([[1, 2], [3, 4]]).dtype == np.float64

    def test_explicit_dtype(self):
        assert Matrix.from_rows([[1, 2]], dtype=np.complex64).dtype == np.complex64

    def test_neutral_elements(self):
        np.testing.assert_array_equal(Matrix.zero(2, 3).to_array(), np.zeros((2, 3)))
        np.testing.assert_array_equal(Matrix.one(3).to_array(), np.eye(3))
        np.testing.assert_array_equal(Matrix.ones(2, 2).to_array(), np.ones((2, 2)))

    def test_vectors(self):
        assert Matrix.column([1.0, 2.0]).dim() == (2, 1)
        assert Matrix.row([1.0, 2.0]).dim() == (1, 2)
        assert Matrix.column([1.0, 2.0]).is_vector()

    def test_new_random_reproducible(self):
        first = Matrix.new_random(3, 2, rng=7)
        second = Matrix.new_random(3, 2, rng=7)
        assert first == second
        assert np.all((first.to_array() >= 0.0) & (first.to_array() < 1.0))

    def test_new_random_complex(self):
        m = Matrix.new_random(2, 2, rng=1, dtype=np.complex128)
        assert m.dtype == np.complex128
        assert np.any(m.to_array().imag != 0)


class TestTransformConstructors:

    def test_householder(self):
        h = Matrix.householder(Matrix.column([1.0, 1.0, 3.0]), 1)
        v = Matrix.column([1.0, 1.0, 3.0])
        hv = (h @ v).to_array().ravel()
        np.testing.assert_allclose(hv, [1.0, -np.sqrt(10.0), 0.0], atol=1e-12)

    def test_givens(self):
        g = Matrix.givens(3, 0, 2, 0.6, 0.8)
        assert g[0, 2] == 0.8 and g[2, 0] == -0.8

    def test_givens_cosine_sine_pair(self):
        c, s = Matrix.givens_cosine_sine_pair(3.0, 4.0)
        assert c * c + s * s == pytest.approx(1.0)


# ═══════════════════════════════════════════════════════════════════════
# Access
# ═══════════════════════════════════════════════════════════════════════


class TestAccess:

    def test_at_and_set(self, a):
        assert a.at(0, 2) == 3.0
        a.set(0, 2, -1.0)
        assert a[0, 2] == -1.0

    def test_setitem_complex_promotes(self, a):
        a[0, 0] = 1 + 2j
        assert np.iscomplexobj(a.to_array())
        assert a[0, 0] == 1 + 2j

    def test_out_of_bounds(self, a):
        with pytest.raises(IndexError):
            a.at(2, 0)
        with pytest.raises(IndexError):
            a[0, 3] = 1.0

    def test_bad_index_type(self, a):
        with pytest.raises(TypeError):
            a[0]

    def test_rows_and_columns(self, a):
        assert a.get_row(1).to_list() == [[4.0, 5.0, 6.0]]
        assert a.get_column(2).to_list() == [[3.0], [6.0]]

    def test_set_row_and_column(self, a):
        a.set_row(0, [7.0, 8.0, 9.0])
        a.set_column(0, Matrix.column([0.0, -1.0]))
        assert a.to_list() == [[0.0, 8.0, 9.0], [-1.0, 5.0, 6.0]]

    def test_set_row_wrong_length(self, a):
        with pytest.raises(DimensionError):
            a.set_row(0, [1.0, 2.0])

    def test_get_slice_inclusive(self, a):
        block = a.get_slice(0, 1, 1, 2)
        assert block.to_list() == [[2.0, 3.0], [5.0, 6.0]]

    def test_get_slice_single_element(self, a):
        assert a.get_slice(1, 1, 0, 0).to_list() == [[4.0]]

    def test_get_slice_out_of_bounds(self, a):
        with pytest.raises(IndexError):
            a.get_slice(0, 2, 0, 0)
        with pytest.raises(IndexError):
            a.get_slice(1, 0, 0, 0)

    def test_set_slice(self, a):
        a.set_slice(Matrix.from_rows([[0.0, 0.0]]), 1, 1)
        assert a.to_list() == [[1.0, 2.0, 3.0], [4.0, 0.0, 0.0]]

    def test_set_slice_does_not_fit(self, a):
        with pytest.raises(IndexError):
            a.set_slice(Matrix.ones(2, 2), 1, 0)

    def test_swap_rows(self, a):
        a.swap_rows(0, 1)
        assert a.get_row(0).to_list() == [[4.0, 5.0, 6.0]]


# ═══════════════════════════════════════════════════════════════════════
# Arithmetic
# ═══════════════════════════════════════════════════════════════════════


class TestArithmetic:

    def test_add_sub(self, a):
        assert (a + a).to_list() == [[2.0, 4.0, 6.0], [8.0, 10.0, 12.0]]
        assert (a - a) == Matrix.zero(2, 3)

    def test_scalar_ops(self, a):
        assert (2.0 * a) == (a + a)
        assert (a / 2.0)[1, 1] == 2.5
        assert (a + 1.0)[0, 0] == 2.0
        assert (10.0 - a)[0, 0] == 9.0
        assert (-a)[0, 1] == -2.0

    def test_shape_mismatch(self, a):
        with pytest.raises(DimensionError):
            a + a.transpose()

    def test_matmul(self, a):
        product = a @ a.transpose()
        assert product.to_list() == [[14.0, 32.0], [32.0, 77.0]]

    def test_matmul_inner_mismatch(self, a):
        with pytest.raises(DimensionError, match="inner dimensions"):
            a @ a

    def test_matmul_identity(self, rng):
        m = Matrix.from_array(rng.standard_normal((4, 4)))
        assert m @ Matrix.one(4) == m

    def test_value_semantics(self, a):
        original = a.clone()
        _ = a + a
        _ = a @ a.transpose()
        assert a == original

    def test_in_place(self, a):
        alias = a
        a += a
        a *= 0.5
        assert a is alias
        assert a == Matrix.from_rows([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])

    def test_matrix_times_matrix_unsupported(self, a):
        with pytest.raises(TypeError):
            a * a


# ═══════════════════════════════════════════════════════════════════════
# Unary operations and conversion
# ═══════════════════════════════════════════════════════════════════════


class TestConversion:

    def test_transpose(self, a):
        assert a.transpose().dim() == (3, 2)
        assert a.transpose().transpose() == a

    def test_conj_transpose(self):
        m = Matrix.from_rows([[1 + 1j, 2.0]])
        assert m.conj_transpose().to_list() == [[1 - 1j], [2.0 + 0j]]

    def test_trace(self):
        assert Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]]).trace() == 5.0

    def test_trace_not_square(self, a):
        with pytest.raises(NotSquareError):
            a.trace()

    def test_convert_to_vec_column_major(self, a):
        assert a.convert_to_vec() == [1.0, 4.0, 2.0, 5.0, 3.0, 6.0]

    def test_iterators(self, a):
        assert list(a.iter()) == [1.0, 4.0, 2.0, 5.0, 3.0, 6.0]
        assert [r.dim() for r in a.row_iter()] == [(1, 3), (1, 3)]
        assert len(list(a.column_iter())) == 3

    def test_apply(self, a):
        assert a.apply(lambda x: x * x)[1, 2] == 36.0
        a.mut_apply(lambda x: -x)
        assert a[0, 0] == -1.0

    def test_to_array_is_copy(self, a):
        arr = a.to_array()
        arr[0, 0] = 100.0
        assert a[0, 0] == 1.0


# ═══════════════════════════════════════════════════════════════════════
# Comparison and formatting
# ═══════════════════════════════════════════════════════════════════════


class TestComparison:

    def test_eq_requires_same_shape(self, a):
        assert a != a.transpose()

    def test_unhashable(self, a):
        with pytest.raises(TypeError):
            hash(a)

    def test_abs_diff_eq(self, a):
        close = a + 1e-12
        assert a.abs_diff_eq(close, 1e-10)
        assert not a.abs_diff_eq(close)
        assert not a.abs_diff_eq(a.transpose(), 1.0)

    def test_relative_eq(self):
        big = Matrix.from_rows([[1e10]])
        assert big.relative_eq(big + 1.0, epsilon=1e-12, max_relative=1e-9)
        assert not big.relative_eq(big + 1e3, epsilon=1e-12, max_relative=1e-9)

    def test_frobenius_norm(self):
        assert Matrix.from_rows([[3.0, 4.0]]).frobenius_norm() == pytest.approx(5.0)

    def test_repr_roundtrip_form(self):
        m = Matrix.from_rows([[1.0, 2.0]])
        assert repr(m) == "Matrix.from_rows([[1.0, 2.0]])"

    def test_repr_non_default_dtype(self):
        assert "dtype=np.float32" in repr(Matrix.from_rows([[1.0]], dtype=np.float32))

    def test_str(self):
        assert str(Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]])) == "1.0 2.0\n3.0 4.0"
