"""
Tests for the in-place inverse driver.
"""

import numpy as np
import pytest
from scipy.linalg import lapack

from pyveclib.core.exceptions import (
    NumericalWarning,
    SingularMatrixError,
    ValidationError,
)
from pyveclib.core.result import Status
from pyveclib.decomposition import cinv, dinv, inv, sinv, zinv

ENTRY_POINTS = {'s': sinv, 'd': dinv, 'c': cinv, 'z': zinv}


class TestInverse:

    @pytest.mark.parametrize("prefix", ['s', 'd', 'c', 'z'])
    def test_inverse_times_a_is_identity(self, random_matrix, tolerance, prefix):
        n = 4
        A = random_matrix(n, n, prefix)
        A += 4 * np.eye(n, dtype=A.dtype)
        original = A.copy()
        result = ENTRY_POINTS[prefix](A, n)

        assert result.ok
        assert result.params.A is A
        np.testing.assert_allclose(A @ original, np.eye(n), atol=tolerance[prefix] * 100)

    def test_diagonal(self):
        A = np.array([[2.0, 0.0], [0.0, 4.0]])
        inv(A, 2)
        np.testing.assert_allclose(A, [[0.5, 0.0], [0.0, 0.25]])

    def test_flat_buffer(self):
        A = np.array([4.0, 7.0, 2.0, 6.0])
        dinv(A, 2)
        np.testing.assert_allclose(A, np.linalg.inv([[4.0, 7.0], [2.0, 6.0]]).ravel())

    def test_workspace_queried(self, rng):
        A = rng.standard_normal((3, 3)) + 3 * np.eye(3)
        result = dinv(A, 3)
        assert result.info['lwork'] >= 3
        assert {'lu', 'ipiv', 'inv_a', 'work'} <= set(result.info['scratch']['released'])


class TestInverseSingular:

    def test_status_reported_and_backend_output_kept(self, singular_matrix):
        A = singular_matrix.copy()
        lu, piv, _ = lapack.dgetrf(np.asfortranarray(singular_matrix))
        expected, _ = lapack.dgetri(lu, piv)

        with pytest.warns(NumericalWarning, match="A holds the backend output unchanged"):
            result = dinv(A, 3)

        assert result.status is Status.SINGULAR
        assert result.info['routine'] == 'dgetrf'
        assert result.info['getrf_info'] == 2
        np.testing.assert_array_equal(A, np.ascontiguousarray(expected))

    def test_raise_for_status(self, singular_matrix):
        A = singular_matrix.copy()
        with pytest.warns(NumericalWarning):
            result = dinv(A, 3)
        with pytest.raises(SingularMatrixError):
            result.raise_for_status()

    def test_injected_factorization_failure(self, failing_backend):
        A = np.eye(2)
        with pytest.warns(NumericalWarning, match="dgetrf"):
            result = dinv(A, 2, backend=failing_backend)
        assert result.status is Status.SINGULAR
        assert failing_backend.calls == ['getrf']


class TestInverseValidation:

    def test_list_rejected(self):
        with pytest.raises(ValidationError, match="numpy.ndarray"):
            dinv([[1.0, 0.0], [0.0, 1.0]], 2)

    def test_read_only_rejected(self):
        A = np.eye(2)
        A.flags.writeable = False
        with pytest.raises(ValidationError, match="read-only"):
            dinv(A, 2)

    def test_dtype_must_match(self):
        with pytest.raises(ValidationError, match="does not match"):
            sinv(np.eye(2), 2)

    def test_non_finite_rejected(self):
        A = np.array([[1.0, np.inf], [0.0, 1.0]])
        with pytest.raises(ValidationError, match="non-finite"):
            dinv(A, 2)
