"""
Fixtures for the decomposition drivers: backends that report failures.

Both wrap the scipy backend so that outputs have realistic shapes, and
replace only the status the routine reports.
"""

import pytest

from pyveclib.backends import ScipyLapackBackend


class StatusOverrideBackend(ScipyLapackBackend):
    """Scipy backend whose execute calls report a fixed info value."""

    def __init__(self, info):
        self.forced_info = info
        self.calls = []

    @property
    def name(self):
        return f'forced_info_{self.forced_info}'

    def _record(self, routine):
        self.calls.append(routine)
        return self.forced_info

    def gesvd(self, prec, a, full_matrices, lwork):
        u, s, vt, _ = super().gesvd(prec, a, full_matrices, lwork)
        return u, s, vt, self._record('gesvd')

    def heev(self, prec, a, lwork):
        w, v, _ = super().heev(prec, a, lwork)
        return w, v, self._record('heev')

    def geev(self, prec, a, compute_vl, compute_vr, lwork):
        w, vl, vr, _ = super().geev(prec, a, compute_vl, compute_vr, lwork)
        return w, vl, vr, self._record('geev')

    def gesv(self, prec, a, b):
        x, piv, _ = super().gesv(prec, a, b)
        return x, piv, self._record('gesv')

    def posv(self, prec, a, b):
        x, _ = super().posv(prec, a, b)
        return x, self._record('posv')

    def getrf(self, prec, a):
        lu, piv, _ = super().getrf(prec, a)
        return lu, piv, self._record('getrf')


@pytest.fixture
def failing_backend():
    """Every execute call reports a numerical failure (info = 2)."""
    return StatusOverrideBackend(2)


@pytest.fixture
def illegal_argument_backend():
    """Every execute call reports an invalid argument (info = -3)."""
    return StatusOverrideBackend(-3)


@pytest.fixture
def cpu():
    return ScipyLapackBackend()
