"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pyveclib.backends import set_default_backend


# Comparison tolerance per precision prefix
TOLERANCE = {'s': 1e-4, 'd': 1e-10, 'c': 1e-4, 'z': 1e-10}

DTYPES = {'s': np.float32, 'd': np.float64, 'c': np.complex64, 'z': np.complex128}


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture(autouse=True)
def _reset_default_backend(monkeypatch):
    """Every test starts from the built-in backend default."""
    monkeypatch.delenv('PYVECLIB_BACKEND', raising=False)
    set_default_backend(None)
    yield
    set_default_backend(None)


@pytest.fixture
def random_matrix(rng):
    """Factory for random rows x cols matrices in the dtype of a precision prefix."""
    def make(rows, cols, prefix):
        A = rng.standard_normal((rows, cols))
        if prefix in ('c', 'z'):
            A = A + 1j * rng.standard_normal((rows, cols))
        return A.astype(DTYPES[prefix])
    return make


@pytest.fixture
def spd_matrix(rng):
    """Well-conditioned 4 x 4 symmetric positive-definite matrix."""
    M = rng.standard_normal((4, 4))
    return M @ M.T + 4 * np.eye(4)


@pytest.fixture
def singular_matrix():
    """3 x 3 matrix whose second row is twice the first (exact zero pivot)."""
    return np.array([
        [1.0, 2.0, 0.0],
        [2.0, 4.0, 0.0],
        [0.0, 0.0, 1.0],
    ])


@pytest.fixture
def tolerance():
    """Comparison tolerance keyed by precision prefix."""
    return TOLERANCE
