"""
Tests for the Householder and Givens primitives.
"""

import numpy as np
import pytest

from pylinalg.core.compute.linalg.rotations import (
    apply_columns,
    apply_rows,
    givens,
    givens_cosine_sine_pair,
    householder,
    rot,
)


# ═══════════════════════════════════════════════════════════════════════
# Householder
# ═══════════════════════════════════════════════════════════════════════


class TestHouseholder:

    def test_zeroes_trailing_entries(self):
        v = np.array([3.0, 1.0, 5.0, 1.0])
        h = householder(v, 0)
        hv = h @ v
        np.testing.assert_allclose(hv[1:], 0.0, atol=1e-12)
        assert abs(hv[0]) == pytest.approx(np.linalg.norm(v))

    def test_sign_opposite_to_pivot(self):
        hv = householder(np.array([3.0, 4.0])) @ np.array([3.0, 4.0])
        assert hv[0] == pytest.approx(-5.0)

    def test_offset_leaves_leading_entries(self):
        v = np.array([1.0, 1.0, 3.0])
        h = householder(v, 1)
        hv = h @ v
        assert hv[0] == pytest.approx(1.0)
        assert hv[1] == pytest.approx(-np.sqrt(10.0))
        assert hv[2] == pytest.approx(0.0, abs=1e-12)

    def test_orthogonal_and_symmetric(self, rng):
        h = householder(rng.standard_normal(5), 1)
        np.testing.assert_allclose(h @ h.T, np.eye(5), atol=1e-12)
        np.testing.assert_allclose(h, h.T, atol=1e-15)

    def test_complex_unitary(self, rng):
        v = rng.standard_normal(4) + 1j * rng.standard_normal(4)
        h = householder(v)
        hv = h @ v
        np.testing.assert_allclose(h @ h.conj().T, np.eye(4), atol=1e-12)
        np.testing.assert_allclose(hv[1:], 0.0, atol=1e-12)

    def test_zero_tail_is_identity(self):
        np.testing.assert_array_equal(householder(np.array([2.0, 0.0, 0.0]), 1), np.eye(3))

    def test_length_one(self):
        np.testing.assert_array_equal(householder(np.array([7.0])), np.eye(1))

    def test_index_out_of_bounds(self):
        with pytest.raises(IndexError):
            householder(np.array([1.0, 2.0]), 2)


# ═══════════════════════════════════════════════════════════════════════
# Givens
# ═══════════════════════════════════════════════════════════════════════


class TestGivens:

    def test_matrix_layout(self):
        g = givens(4, 1, 3, 0.6, 0.8)
        assert g[1, 1] == 0.6 and g[3, 3] == 0.6
        assert g[1, 3] == 0.8 and g[3, 1] == -0.8
        assert g[0, 0] == 1.0 and g[2, 2] == 1.0

    def test_out_of_bounds(self):
        with pytest.raises(IndexError):
            givens(3, 0, 3, 1.0, 0.0)

    @pytest.mark.parametrize("a, b", [(3.0, 4.0), (4.0, -3.0), (-1.0, 7.0), (2.0, 0.0)])
    def test_cosine_sine_pair_annihilates(self, a, b):
        c, s = givens_cosine_sine_pair(a, b)
        g = np.array([[c, s], [-s, c]])
        r = g.T @ np.array([a, b])
        assert c * c + s * s == pytest.approx(1.0)
        assert r[1] == pytest.approx(0.0, abs=1e-12)

    @pytest.mark.parametrize("f, g", [(3.0, 4.0), (-5.0, 2.0), (0.0, 3.0)])
    def test_rot(self, f, g):
        c, s, r = rot(f, g)
        assert c * f + s * g == pytest.approx(r)
        assert -s * f + c * g == pytest.approx(0.0, abs=1e-12)
        assert abs(r) == pytest.approx(np.hypot(f, g))


class TestApply:

    def test_apply_rows_matches_full_product(self, rng):
        x = rng.standard_normal((4, 3))
        c, s = 0.6, 0.8
        expected = givens(4, 0, 2, c, s) @ x
        apply_rows(x, 0, 2, np.array([[c, s], [-s, c]]))
        np.testing.assert_allclose(x, expected, atol=1e-14)

    def test_apply_columns_matches_full_product(self, rng):
        x = rng.standard_normal((3, 4))
        c, s = 0.6, 0.8
        expected = x @ givens(4, 1, 3, c, s)
        apply_columns(x, 1, 3, np.array([[c, s], [-s, c]]))
        np.testing.assert_allclose(x, expected, atol=1e-14)

    def test_apply_rows_restricted_columns(self):
        x = np.arange(6.0).reshape(2, 3)
        apply_rows(x, 0, 1, np.array([[0.0, 1.0], [1.0, 0.0]]), slice(1, None))
        np.testing.assert_array_equal(x, [[0.0, 4.0, 5.0], [3.0, 1.0, 2.0]])
