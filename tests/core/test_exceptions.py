"""
Tests for PyVeclib exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyVeclibError)
    - Diagnostic attributes (routine, info, matrix_name, pivot, minor)
    - Default attribute values (None for optional attributes)
    - NumericalWarning is a UserWarning
"""

import warnings

import pytest

from pyveclib.core.exceptions import (
    BackendError,
    ConvergenceError,
    DimensionError,
    NotPositiveDefiniteError,
    NumericalError,
    NumericalWarning,
    PyVeclibError,
    SingularMatrixError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyVeclibError."""

    def test_validation_error_is_pyveclib_error(self):
        with pytest.raises(PyVeclibError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong size")

    def test_singular_matrix_error_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise SingularMatrixError("singular")

    def test_not_positive_definite_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise NotPositiveDefiniteError("not PD")

    def test_convergence_error_is_not_numerical_error(self):
        """ConvergenceError inherits from PyVeclibError, not NumericalError."""
        err = ConvergenceError("did not converge", routine='dgesvd', info=2)
        assert isinstance(err, PyVeclibError)
        assert not isinstance(err, NumericalError)

    def test_backend_error_is_pyveclib_error(self):
        with pytest.raises(PyVeclibError):
            raise BackendError("argument 3 had an illegal value")


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestSingularMatrixError:
    """SingularMatrixError carries routine, info and the zero pivot."""

    def test_all_attributes(self):
        err = SingularMatrixError(
            "dgesv: matrix is singular",
            matrix_name="A",
            routine="dgesv",
            info=3,
        )
        assert str(err) == "dgesv: matrix is singular"
        assert err.matrix_name == "A"
        assert err.routine == "dgesv"
        assert err.info == 3
        assert err.pivot == 3

    def test_defaults_are_none(self):
        err = SingularMatrixError("singular")
        assert err.matrix_name is None
        assert err.routine is None
        assert err.info is None
        assert err.pivot is None

    def test_negative_info_is_not_a_pivot(self):
        err = SingularMatrixError("singular", info=-1)
        assert err.pivot is None


class TestNotPositiveDefiniteError:
    """NotPositiveDefiniteError reports the failing leading minor."""

    def test_minor_from_info(self):
        err = NotPositiveDefiniteError("not PD", routine="dposv", info=2)
        assert err.minor == 2
        assert err.routine == "dposv"

    def test_catchable_with_attributes(self):
        with pytest.raises(NotPositiveDefiniteError) as exc_info:
            raise NotPositiveDefiniteError("not PD", matrix_name="Sigma", info=1)
        assert exc_info.value.matrix_name == "Sigma"
        assert exc_info.value.minor == 1


class TestConvergenceAndBackendErrors:

    def test_convergence_attributes(self):
        err = ConvergenceError("dsyev: failed to converge", routine="dsyev", info=4)
        assert err.routine == "dsyev"
        assert err.info == 4

    def test_backend_defaults(self):
        err = BackendError("torch missing")
        assert err.routine is None
        assert err.info is None


# ═══════════════════════════════════════════════════════════════════════
# Warnings
# ═══════════════════════════════════════════════════════════════════════


class TestNumericalWarning:

    def test_is_user_warning(self):
        assert issubclass(NumericalWarning, UserWarning)

    def test_can_be_escalated(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error", NumericalWarning)
            with pytest.raises(NumericalWarning):
                warnings.warn("zero-filled", NumericalWarning)
