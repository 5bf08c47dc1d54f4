"""
Tests for the full SVD driver.

Validates:
    - Reconstruction A = U S V^H in all four precisions, tall and wide
    - Orthogonality/unitarity of U and V
    - Output shapes, dtypes and ownership
    - Non-convergence: U, S, V are None, status and warning reported
    - Scratch ledger released on success and failure
"""

import numpy as np
import pytest

from pyveclib.core.exceptions import (
    BackendError,
    ConvergenceError,
    DimensionError,
    NumericalWarning,
    ValidationError,
)
from pyveclib.core.result import Ownership, Status
from pyveclib.decomposition import csvd, dsvd, ssvd, svd, zsvd

ENTRY_POINTS = {'s': ssvd, 'd': dsvd, 'c': csvd, 'z': zsvd}


# ═══════════════════════════════════════════════════════════════════════
# Correctness
# ═══════════════════════════════════════════════════════════════════════


class TestSVDReconstruction:

    @pytest.mark.parametrize("prefix", ['s', 'd', 'c', 'z'])
    @pytest.mark.parametrize("dim1, dim2", [(4, 3), (3, 5), (4, 4)])
    def test_reconstruction(self, random_matrix, tolerance, prefix, dim1, dim2):
        A = random_matrix(dim1, dim2, prefix)
        result = ENTRY_POINTS[prefix](A, dim1, dim2)
        U, S, V = result.params.U, result.params.S, result.params.V

        assert result.ok
        np.testing.assert_allclose(U @ S @ V.conj().T, A, atol=tolerance[prefix] * 10)

    @pytest.mark.parametrize("prefix", ['d', 'z'])
    def test_singular_vectors_orthonormal(self, random_matrix, prefix):
        A = random_matrix(5, 3, prefix)
        p = ENTRY_POINTS[prefix](A, 5, 3).params
        np.testing.assert_allclose(p.U.conj().T @ p.U, np.eye(5), atol=1e-12)
        np.testing.assert_allclose(p.V.conj().T @ p.V, np.eye(3), atol=1e-12)

    def test_shapes_and_dtypes(self, random_matrix):
        A = random_matrix(4, 6, 'c')
        p = csvd(A, 4, 6).params
        assert p.U.shape == (4, 4)
        assert p.S.shape == (4, 6)
        assert p.V.shape == (6, 6)
        assert p.U.dtype == np.complex64
        assert p.S.dtype == np.float32
        assert p.ownership is Ownership.OWNED

    def test_singular_values_descending_on_diagonal(self):
        p = dsvd([[3.0, 0.0], [0.0, 4.0]], 2, 2).params
        np.testing.assert_allclose(p.S, [[4.0, 0.0], [0.0, 3.0]])

    def test_flat_input_accepted(self, rng):
        A = rng.standard_normal((2, 3))
        p = svd(A.ravel(), 2, 3).params
        np.testing.assert_allclose(p.U @ p.S @ p.V.T, A, atol=1e-12)

    def test_input_not_modified(self, rng):
        A = rng.standard_normal((3, 3))
        original = A.copy()
        dsvd(A, 3, 3)
        np.testing.assert_array_equal(A, original)


class TestSVDResultMetadata:

    def test_info_and_timing(self, rng):
        result = dsvd(rng.standard_normal((3, 2)), 3, 2)
        assert result.info['routine'] == 'dgesvd'
        assert result.info['info'] == 0
        assert result.info['lwork'] >= 1
        assert result.backend_name == 'cpu_scipy'
        for section in ('total_seconds', 'layout_in', 'query', 'execute', 'layout_out'):
            assert section in result.timing

    def test_scratch_released_once(self, rng):
        scratch = dsvd(rng.standard_normal((3, 2)), 3, 2).info['scratch']
        assert sorted(scratch['allocated']) == sorted(scratch['released'])
        assert len(set(scratch['released'])) == len(scratch['released'])
        assert set(scratch['allocated']) == {'a', 'work', 'u', 's', 'vt'}


# ═══════════════════════════════════════════════════════════════════════
# Failure handling
# ═══════════════════════════════════════════════════════════════════════


class TestSVDFailure:

    def test_non_convergence_returns_none(self, rng, failing_backend):
        with pytest.warns(NumericalWarning, match="dgesvd: failed to converge"):
            result = dsvd(rng.standard_normal((3, 3)), 3, 3, backend=failing_backend)
        assert result.status is Status.NON_CONVERGENT
        assert result.params.U is None
        assert result.params.S is None
        assert result.params.V is None
        assert result.has_warning("set to None")

    def test_raise_for_status(self, rng, failing_backend):
        with pytest.warns(NumericalWarning):
            result = dsvd(rng.standard_normal((2, 2)), 2, 2, backend=failing_backend)
        with pytest.raises(ConvergenceError) as exc_info:
            result.raise_for_status()
        assert exc_info.value.routine == 'dgesvd'
        assert exc_info.value.info == 2

    def test_scratch_released_on_failure(self, rng, failing_backend):
        with pytest.warns(NumericalWarning):
            result = dsvd(rng.standard_normal((2, 2)), 2, 2, backend=failing_backend)
        scratch = result.info['scratch']
        assert sorted(scratch['allocated']) == sorted(scratch['released'])

    def test_illegal_argument_raises(self, rng, illegal_argument_backend):
        with pytest.raises(BackendError, match="argument 3"):
            dsvd(rng.standard_normal((2, 2)), 2, 2, backend=illegal_argument_backend)


class TestSVDValidation:

    def test_wrong_size(self):
        with pytest.raises(DimensionError):
            dsvd(np.ones(5), 2, 3)

    def test_non_finite(self):
        with pytest.raises(ValidationError, match="non-finite"):
            dsvd([[1.0, np.nan], [0.0, 1.0]], 2, 2)

    def test_complex_into_real_entry_point(self):
        with pytest.raises(ValidationError, match="complex"):
            ssvd([[1j, 0], [0, 1]], 2, 2)

    def test_zero_dimension(self):
        with pytest.raises(DimensionError):
            dsvd([], 0, 3)
