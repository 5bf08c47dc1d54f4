"""
Tests for the vector primitives.

Covers both execution paths: the scipy backend delegates copy, scal and
dot to BLAS, a backend without CAPABILITY_BLAS_VECTOR runs on numpy.
"""

import numpy as np
import pytest

from pyveclib.backends import ScipyLapackBackend
from pyveclib.core.exceptions import DimensionError, ValidationError
from pyveclib.vector import (
    Conj,
    cvvdot,
    cvsmul,
    dvsdiv,
    svsadd,
    svsdiv,
    svssub,
    svvcopy,
    svvdot,
    svvmul,
    vsdiv,
    vsmul,
    vvcopy,
    vvdot,
    vvmul,
    zvvdot,
)


class NumpyOnlyBackend(ScipyLapackBackend):
    """Backend that withholds its BLAS vector routines."""

    @property
    def name(self):
        return 'numpy_only'

    def supports(self, capability):
        return False


BACKENDS = [ScipyLapackBackend(), NumpyOnlyBackend()]


# ═══════════════════════════════════════════════════════════════════════
# Vector-vector
# ═══════════════════════════════════════════════════════════════════════


class TestVVCopy:

    @pytest.mark.parametrize("backend", BACKENDS, ids=lambda b: b.name)
    def test_copy(self, backend):
        c = np.zeros(3, dtype=np.float32)
        svvcopy([1.0, 2.0, 3.0], 3, c, backend=backend)
        np.testing.assert_array_equal(c, [1.0, 2.0, 3.0])

    def test_partial_length(self):
        c = np.zeros(4)
        vvcopy(np.arange(1.0, 5.0), 2, c)
        np.testing.assert_array_equal(c, [1.0, 2.0, 0.0, 0.0])

    def test_short_input_rejected(self):
        with pytest.raises(DimensionError):
            vvcopy([1.0], 2, np.zeros(2))


class TestVVMul:

    def test_into_output(self):
        c = np.empty(3, dtype=np.float32)
        a = np.array([1.0, 2.0, 3.0], dtype=np.float32)
        svvmul(a, [4.0, 5.0, 6.0], 3, c)
        np.testing.assert_array_equal(c, [4.0, 10.0, 18.0])
        np.testing.assert_array_equal(a, [1.0, 2.0, 3.0])

    def test_in_place(self):
        a = np.array([1.0, 2.0, 3.0])
        result = vvmul(a, [2.0, 2.0, 2.0], 3)
        np.testing.assert_array_equal(a, [2.0, 4.0, 6.0])
        assert np.shares_memory(result, a)

    def test_in_place_needs_writable_array(self):
        with pytest.raises(ValidationError):
            vvmul([1.0, 2.0], [1.0, 1.0], 2)


class TestVVDot:

    @pytest.mark.parametrize("backend", BACKENDS, ids=lambda b: b.name)
    def test_real(self, backend):
        value = svvdot([1.0, 2.0, 3.0], [4.0, 5.0, 6.0], 3, backend=backend)
        assert value == pytest.approx(32.0)
        assert np.asarray(value).dtype == np.float32

    @pytest.mark.parametrize("backend", BACKENDS, ids=lambda b: b.name)
    def test_complex_conj_modes(self, backend):
        a = [1 + 1j, 2 - 1j]
        b = [3 - 2j, 1 + 4j]
        plain = zvvdot(a, b, 2, backend=backend)
        conj = zvvdot(a, b, 2, conj=Conj.CONJ, backend=backend)
        assert plain == pytest.approx(np.dot(a, b))
        assert conj == pytest.approx(np.vdot(a, b))

    def test_single_complex(self):
        value = cvvdot([1j], [1j], 1, conj=Conj.CONJ)
        assert value == pytest.approx(1.0)

    def test_writes_output(self):
        c = np.zeros(1)
        vvdot([1.0, 1.0], [2.0, 3.0], 2, c)
        assert c[0] == 5.0

    def test_conj_ignored_for_real(self):
        assert vvdot([1.0, 2.0], [1.0, 2.0], 2, conj=Conj.CONJ) == pytest.approx(5.0)


# ═══════════════════════════════════════════════════════════════════════
# Vector-scalar
# ═══════════════════════════════════════════════════════════════════════


class TestVSMul:

    @pytest.mark.parametrize("backend", BACKENDS, ids=lambda b: b.name)
    def test_into_output_leaves_input(self, backend):
        a = np.array([1.0, -2.0])
        c = np.empty(2)
        vsmul(a, 3.0, 2, c, backend=backend)
        np.testing.assert_array_equal(c, [3.0, -6.0])
        np.testing.assert_array_equal(a, [1.0, -2.0])

    @pytest.mark.parametrize("backend", BACKENDS, ids=lambda b: b.name)
    def test_in_place(self, backend):
        a = np.array([1.0, 2.0, 3.0])
        vsmul(a, 0.5, 3, backend=backend)
        np.testing.assert_array_equal(a, [0.5, 1.0, 1.5])

    def test_complex_scalar(self):
        a = np.array([1 + 0j, 1j], dtype=np.complex64)
        cvsmul(a, 1j, 2)
        np.testing.assert_allclose(a, [1j, -1])

    def test_scalar_as_one_element_sequence(self):
        a = np.array([2.0, 4.0])
        vsmul(a, [0.5], 2)
        np.testing.assert_array_equal(a, [1.0, 2.0])

    def test_non_scalar_rejected(self):
        with pytest.raises(DimensionError, match="scalar"):
            vsmul(np.ones(2), [1.0, 2.0], 2)


class TestVSDiv:

    def test_divide(self):
        c = np.empty(2)
        dvsdiv([2.0, 4.0], 2.0, 2, c)
        np.testing.assert_array_equal(c, [1.0, 2.0])

    def test_division_by_zero_gives_zeros(self):
        c = np.full(3, 9.0, dtype=np.float32)
        with np.errstate(all='raise'):
            svsdiv([1.0, -1.0, 0.0], 0.0, 3, c)
        np.testing.assert_array_equal(c, [0.0, 0.0, 0.0])
        assert np.all(np.isfinite(c))

    def test_division_by_zero_in_place(self):
        a = np.array([1.0, 2.0])
        vsdiv(a, 0, 2)
        np.testing.assert_array_equal(a, [0.0, 0.0])

    def test_complex_zero(self):
        a = np.array([1 + 1j], dtype=np.complex128)
        vsdiv(a, 0j, 1, precision='z')
        assert a[0] == 0


class TestVSAddSub:

    def test_add(self):
        c = np.empty(2, dtype=np.float32)
        svsadd([1.0, 2.0], 1.5, 2, c)
        np.testing.assert_array_equal(c, [2.5, 3.5])

    def test_sub_in_place(self):
        a = np.array([1.0, 2.0], dtype=np.float32)
        svssub(a, 1.0, 2)
        np.testing.assert_array_equal(a, [0.0, 1.0])

    def test_only_length_elements_touched(self):
        a = np.array([1.0, 2.0, 3.0], dtype=np.float32)
        svssub(a, 1.0, 2)
        np.testing.assert_array_equal(a, [0.0, 1.0, 3.0])
