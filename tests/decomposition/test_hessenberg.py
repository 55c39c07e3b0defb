"""
Tests for Hessenberg reduction A = Q H Q^H.
"""

import numpy as np
import pytest

from pylinalg import Matrix
from pylinalg.core.compute.tolerances import FP32
from pylinalg.core.exceptions import NotSquareError
from pylinalg.decomposition import dec_hessenberg


BACKENDS = ['native', 'lapack']

A = [[1.0, 5.0, 3.0], [1.0, 0.0, -7.0], [3.0, 8.0, 9.0]]
H_REF = [
    [1.0, -4.427188724235731, -3.7947331922020537],
    [-3.162277660168379, 8.4, 5.2],
    [0.0, -9.8, 0.6],
]
Q_REF = [
    [1.0, 0.0, 0.0],
    [0.0, -0.316227766016838, -0.9486832980505137],
    [0.0, -0.9486832980505137, 0.3162277660168381],
]


class TestReferenceFactors:

    def test_float64(self):
        q, h = Matrix.from_rows(A).dec_hessenberg(backend='native').qh()
        np.testing.assert_allclose(q.to_array(), Q_REF, atol=1e-10)
        np.testing.assert_allclose(h.to_array(), H_REF, atol=1e-10)
        np.testing.assert_allclose((q @ h @ q.transpose()).to_array(), A, atol=1e-10)

    def test_float32(self):
        q, h = Matrix.from_rows(A, dtype=np.float32).dec_hessenberg(backend='native').qh()
        assert h.dtype == np.float32
        np.testing.assert_allclose(h.to_array(), H_REF, atol=FP32.atol)

    def test_complex_with_zero_imaginary(self):
        q, h = Matrix.from_rows(A, dtype=np.complex128).dec_hessenberg(backend='native').qh()
        np.testing.assert_allclose(q.to_array(), Q_REF, atol=1e-10)
        np.testing.assert_allclose(h.to_array(), H_REF, atol=1e-10)

    def test_already_hessenberg(self):
        a = [[2.0, 0.0, 0.0], [0.0, -5.0, 3.0], [0.0, -6.0, 4.0]]
        q, h = Matrix.from_rows(a).dec_hessenberg(backend='native').qh()
        np.testing.assert_allclose(q.to_array(), np.eye(3), atol=1e-12)
        np.testing.assert_allclose(h.to_array(), a, atol=1e-12)


class TestStructure:

    @pytest.mark.parametrize("backend", BACKENDS)
    def test_random(self, random_square, backend):
        q, h = (m.to_array() for m in dec_hessenberg(random_square, backend=backend).params.qh())

        np.testing.assert_allclose(np.tril(h, -2), 0.0, atol=1e-12)
        np.testing.assert_allclose(q @ q.T, np.eye(6), atol=1e-10)
        np.testing.assert_allclose(q @ h @ q.T, random_square, atol=1e-10)

    @pytest.mark.parametrize("backend", BACKENDS)
    def test_complex(self, rng, backend):
        a = rng.standard_normal((4, 4)) + 1j * rng.standard_normal((4, 4))
        q, h = (m.to_array() for m in dec_hessenberg(a, backend=backend).params.qh())
        np.testing.assert_allclose(np.tril(h, -2), 0.0, atol=1e-12)
        np.testing.assert_allclose(q @ h @ q.conj().T, a, atol=1e-10)

    def test_small_matrices_unchanged(self):
        q, h = Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]]).dec_hessenberg(backend='native').qh()
        assert q == Matrix.one(2)
        assert h == Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]])

    def test_not_square(self):
        with pytest.raises(NotSquareError):
            dec_hessenberg(np.ones((3, 4)))
