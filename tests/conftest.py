"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from densematrix import Matrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def a():
    """[[1, 2], [3, 4]]"""
    return Matrix.from_rows([[1, 2], [3, 4]])


@pytest.fixture
def b():
    """[[5, 6], [7, 8]]"""
    return Matrix.from_rows([[5, 6], [7, 8]])


@pytest.fixture
def rect():
    """2x3 integer matrix with distinct elements."""
    return Matrix.from_rows([[1, 2, 3], [4, 5, 6]])


@pytest.fixture
def random_int_matrix(rng):
    """Factory for random integer matrices of a given shape."""
    def make(rows, cols):
        return Matrix.from_numpy(rng.integers(-9, 10, size=(rows, cols)))
    return make
