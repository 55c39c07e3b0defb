"""
Tests for linear solves: solve, inv, det, pinv and triangular substitution.
"""

import numpy as np
import pytest

from pylinalg import Matrix
from pylinalg.core.compute.tolerances import FP32
from pylinalg.core.exceptions import DimensionError, NotSquareError, SingularMatrixError
from pylinalg.decomposition import (
    det,
    inv,
    pinv,
    solve,
    substitute_backward,
    substitute_forward,
)


BACKENDS = ['native', 'lapack']

SINGULAR_2X2 = [[1.0, 2.0], [2.0, 4.0]]


# ═══════════════════════════════════════════════════════════════════════
# solve
# ═══════════════════════════════════════════════════════════════════════


class TestSolve:

    @pytest.mark.parametrize("backend", BACKENDS)
    def test_reference(self, backend):
        a = [[6.0, 2.0, -1.0], [-3.0, 5.0, 3.0], [-2.0, 1.0, 3.0]]
        x = solve(a, [48.0, 49.0, 24.0], backend=backend).params

        assert x.dim() == (3, 1)
        np.testing.assert_allclose(x.to_array().ravel(), [7.0, 8.0, 10.0], atol=1e-10)

    def test_two_by_two(self):
        a = Matrix(2, 2, [1.0, 2.0, -3.0, -7.0])
        x = a.solve([1.0, 3.0])
        np.testing.assert_allclose(x.to_array().ravel(), [-2.0, -1.0], atol=1e-10)

    @pytest.mark.parametrize("backend", BACKENDS)
    def test_multiple_rhs(self, random_square, rng, backend):
        b = rng.standard_normal((6, 3))
        x = solve(random_square, b, backend=backend).params.to_array()
        np.testing.assert_allclose(random_square @ x, b, atol=1e-10)

    @pytest.mark.parametrize("backend", BACKENDS)
    def test_complex(self, rng, backend):
        a = rng.standard_normal((4, 4)) + 1j * rng.standard_normal((4, 4)) + 4.0 * np.eye(4)
        b = rng.standard_normal(4) + 1j * rng.standard_normal(4)
        x = solve(a, b, backend=backend).params.to_array().ravel()
        np.testing.assert_allclose(a @ x, b, atol=1e-10)

    @pytest.mark.parametrize("backend", BACKENDS)
    def test_singular(self, backend):
        with pytest.raises(SingularMatrixError) as exc_info:
            solve(SINGULAR_2X2, [1.0, 1.0], backend=backend)
        assert exc_info.value.pivot_index == 1

    @pytest.mark.parametrize("backend", BACKENDS)
    def test_ill_conditioned_warns(self, backend):
        result = solve(np.diag([1.0, 1e-13]), [1.0, 1.0], backend=backend)
        assert result.has_warning('ill-conditioned')
        assert result.info['condition_estimate'] == pytest.approx(1e13)

    def test_well_conditioned_no_warning(self, random_square):
        assert solve(random_square, np.ones(6)).warnings == ()

    def test_not_square(self):
        with pytest.raises(NotSquareError):
            solve(np.ones((3, 2)), np.ones(3))

    def test_rhs_rows_mismatch(self):
        with pytest.raises(DimensionError, match="Inconsistent rows"):
            solve(np.eye(3), np.ones(2))


# ═══════════════════════════════════════════════════════════════════════
# inv
# ═══════════════════════════════════════════════════════════════════════


class TestInverse:

    @pytest.mark.parametrize("backend", BACKENDS)
    def test_reference(self, lu_matrix, backend):
        a_inv = inv(lu_matrix, backend=backend).params
        expected = [[-13.0, 7.0, 4.5], [-10.0, 5.0, 3.0], [-2.0, 1.0, 0.5]]
        np.testing.assert_allclose(a_inv.to_array(), expected, atol=1e-10)

    def test_reference_second(self):
        a = Matrix.from_rows([[1.0, 0.0, 2.0], [-1.0, 5.0, 0.0], [0.0, 3.0, -9.0]])
        expected = [
            [0.8823529411764706, -0.11764705882352942, 0.19607843137254904],
            [0.17647058823529413, 0.17647058823529413, 0.03921568627450981],
            [0.05882352941176471, 0.05882352941176471, -0.09803921568627452],
        ]
        np.testing.assert_allclose(a.inv().to_array(), expected, atol=1e-10)

    @pytest.mark.parametrize("backend", BACKENDS)
    def test_identity_product(self, random_square, backend):
        a_inv = inv(random_square, backend=backend).params.to_array()
        np.testing.assert_allclose(random_square @ a_inv, np.eye(6), atol=1e-10)

    @pytest.mark.parametrize("backend", BACKENDS)
    def test_singular(self, backend):
        with pytest.raises(SingularMatrixError):
            inv(SINGULAR_2X2, backend=backend)

    def test_not_square(self):
        with pytest.raises(NotSquareError):
            inv(np.ones((2, 3)))


# ═══════════════════════════════════════════════════════════════════════
# det
# ═══════════════════════════════════════════════════════════════════════


class TestDeterminant:

    @pytest.mark.parametrize("backend", BACKENDS)
    @pytest.mark.parametrize("a, expected", [
        ([[-2.0]], -2.0),
        ([[1.0, -2.0], [3.0, -7.0]], -1.0),
        ([[1.0, -2.0, 3.0], [2.0, -5.0, 12.0], [1.0, 2.0, -10.0]], -11.0),
        ([[4.0, 1.0, -2.0, 2.0], [1.0, 2.0, 0.0, -2.0], [0.0, 3.0, -2.0, 2.0], [2.0, 1.0, -2.0, -1.0]], 76.0),
    ])
    def test_reference(self, a, expected, backend):
        assert det(a, backend=backend).params == pytest.approx(expected, abs=1e-10)

    def test_float32(self):
        a = Matrix.from_rows([[1.0, -2.0, 3.0], [2.0, -5.0, 12.0], [1.0, 2.0, -10.0]], dtype=np.float32)
        assert a.det() == pytest.approx(-11.0, abs=FP32.atol)

    @pytest.mark.parametrize("backend", BACKENDS)
    def test_complex(self, backend):
        a = [[1 - 1j, -2 - 1j], [3 + 2j, -7 + 2j]]
        assert det(a, backend=backend).params == pytest.approx(-1 + 16j, abs=1e-10)

    def test_sign_follows_swaps(self, lu_matrix):
        assert Matrix.from_array(lu_matrix).det() == pytest.approx(-2.0)

    def test_singular_is_zero(self):
        assert det(SINGULAR_2X2).params == 0.0

    def test_method_reported(self, lu_matrix):
        assert det([[1.0, 2.0], [3.0, 4.0]], backend='native').info['method'] == 'closed_form'
        assert det(lu_matrix, backend='native').info['method'] == 'lu'

    @pytest.mark.parametrize("backend", BACKENDS)
    def test_matches_numpy(self, random_square, backend):
        assert det(random_square, backend=backend).params == pytest.approx(
            np.linalg.det(random_square), rel=1e-10
        )


# ═══════════════════════════════════════════════════════════════════════
# pinv
# ═══════════════════════════════════════════════════════════════════════


class TestPseudoInverse:

    @pytest.mark.parametrize("backend", BACKENDS)
    def test_tall(self, random_tall, backend):
        a_pinv = pinv(random_tall, backend=backend).params.to_array()

        assert a_pinv.shape == (4, 7)
        np.testing.assert_allclose(a_pinv @ random_tall, np.eye(4), atol=1e-10)
        np.testing.assert_allclose(a_pinv, np.linalg.pinv(random_tall), atol=1e-10)

    @pytest.mark.parametrize("backend", BACKENDS)
    def test_square_is_inverse(self, lu_matrix, backend):
        a_pinv = pinv(lu_matrix, backend=backend).params.to_array()
        np.testing.assert_allclose(a_pinv, np.linalg.inv(lu_matrix), atol=1e-9)

    @pytest.mark.parametrize("backend", BACKENDS)
    def test_complex(self, rng, backend):
        a = rng.standard_normal((5, 3)) + 1j * rng.standard_normal((5, 3))
        a_pinv = pinv(a, backend=backend).params.to_array()
        np.testing.assert_allclose(a_pinv, np.linalg.pinv(a), atol=1e-10)

    @pytest.mark.parametrize("backend", BACKENDS)
    def test_rank_deficient(self, backend):
        with pytest.raises(SingularMatrixError) as exc_info:
            pinv([[1.0, 2.0], [2.0, 4.0], [3.0, 6.0]], backend=backend)
        assert exc_info.value.rank == 1
        assert exc_info.value.expected_rank == 2

    def test_wide_rejected(self):
        with pytest.raises(DimensionError):
            pinv(np.ones((2, 3)))


# ═══════════════════════════════════════════════════════════════════════
# Substitution
# ═══════════════════════════════════════════════════════════════════════


class TestSubstitution:

    @pytest.mark.parametrize("backend", BACKENDS)
    def test_forward(self, backend):
        x = substitute_forward([[2.0, 0.0], [1.0, 3.0]], [2.0, 7.0], backend=backend).params
        np.testing.assert_allclose(x.to_array().ravel(), [1.0, 2.0], atol=1e-12)

    @pytest.mark.parametrize("backend", BACKENDS)
    def test_backward(self, backend):
        u = [[2.0, -5.0, 12.0], [0.0, 2.0, -10.0], [0.0, 0.0, -0.5]]
        x = substitute_backward(u, [9.0, -8.0, -0.5], backend=backend).params
        np.testing.assert_allclose(x.to_array().ravel(), [1.0, 1.0, 1.0], atol=1e-12)

    @pytest.mark.parametrize("backend", BACKENDS)
    def test_zero_diagonal(self, backend):
        with pytest.raises(SingularMatrixError) as exc_info:
            substitute_backward([[1.0, 2.0], [0.0, 0.0]], [1.0, 1.0], backend=backend)
        assert exc_info.value.pivot_index == 1

    def test_lu_round_trip(self):
        a = Matrix(2, 2, [1.0, 2.0, -3.0, -7.0])
        l, u, p = a.dec_lu().lup()
        y = l.substitute_forward(p @ Matrix.column([1.0, 3.0]))
        x = u.substitute_backward(y)
        np.testing.assert_allclose(x.to_array().ravel(), [-2.0, -1.0], atol=1e-10)
