"""
pytest configuration and shared fixtures.

Reference matrices and their expected factors come from the original
mathru test suite.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def lu_matrix():
    """3x3 matrix with two row exchanges under partial pivoting."""
    return np.array([
        [1.0, -2.0, 3.0],
        [2.0, -5.0, 12.0],
        [0.0, 2.0, -10.0],
    ])


@pytest.fixture
def spd_matrix():
    """Tridiagonal symmetric positive-definite matrix."""
    return np.array([
        [2.0, -1.0, 0.0],
        [-1.0, 2.0, -1.0],
        [0.0, -1.0, 2.0],
    ])


@pytest.fixture
def random_square(rng):
    """Well-conditioned random 6x6 matrix."""
    return rng.standard_normal((6, 6)) + 6.0 * np.eye(6)


@pytest.fixture
def random_spd(rng):
    """Random 5x5 symmetric positive-definite matrix."""
    x = rng.standard_normal((5, 5))
    a = x @ x.T + 5.0 * np.eye(5)
    return 0.5 * (a + a.T)


@pytest.fixture
def random_tall(rng):
    """Random 7x4 matrix with full column rank."""
    return rng.standard_normal((7, 4))
