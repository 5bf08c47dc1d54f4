"""
Per-call scratch ledger and driver state machine.

Every driver runs inside a Workspace:

    ALLOCATE_INPUT -> QUERY_WORKSPACE -> ALLOCATE_WORKSPACE -> EXECUTE -> FINALIZE

States only move forward (drivers whose backend routine needs no workspace
query skip the two middle states). FINALIZE is entered when the `with`
block exits, on success, on a reported backend failure, and on an
exception, and releases every registered buffer exactly once.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any
import logging

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)


class DriverState(IntEnum):
    """Lifecycle states of a decomposition/solver driver."""
    ALLOCATE_INPUT = 0
    QUERY_WORKSPACE = 1
    ALLOCATE_WORKSPACE = 2
    EXECUTE = 3
    FINALIZE = 4


class Workspace:
    """
    Scratch-buffer ledger for one driver invocation.

    Buffers are registered under a name when they are created (allocate),
    handed back by the backend (adopt), or sized for the backend's own
    workspace (reserve). Nothing is shared between calls, which is what
    makes the drivers reentrant.

    Attributes:
        routine: Backend routine this workspace serves (for logging)
        state: Current DriverState (None before the first transition)
        lwork: Workspace size reported by the query, if any
        allocated: Names in registration order
        released: Names in release order
    """

    def __init__(self, routine: str):
        self.routine = routine
        self.state: DriverState | None = None
        self.lwork: int | None = None
        self.allocated: list[str] = []
        self.released: list[str] = []
        self._buffers: dict[str, Any] = {}

    def __enter__(self) -> Workspace:
        self.advance(DriverState.ALLOCATE_INPUT)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.advance(DriverState.FINALIZE)
        self.release_all()

    def advance(self, state: DriverState) -> None:
        """
        Move to a later state.

        Raises:
            RuntimeError: If the transition goes backwards or repeats a state
        """
        if self.state is not None and state <= self.state:
            raise RuntimeError(
                f"{self.routine}: illegal transition {self.state.name} -> {state.name}"
            )
        logger.debug("%s: %s", self.routine, state.name)
        self.state = state

    def _register(self, name: str, value: Any) -> None:
        if self.state is None or self.state >= DriverState.FINALIZE:
            raise RuntimeError(f"{self.routine}: cannot register {name!r} in state {self.state}")
        if name in self._buffers or name in self.released:
            raise RuntimeError(f"{self.routine}: scratch buffer {name!r} registered twice")
        self._buffers[name] = value
        self.allocated.append(name)

    def allocate(
        self,
        name: str,
        shape: int | tuple[int, ...],
        dtype: Any,
        *,
        zero: bool = False,
    ) -> NDArray[Any]:
        """Allocate a column-major scratch array and register it."""
        make = np.zeros if zero else np.empty
        buf = make(shape, dtype=dtype, order='F')
        self._register(name, buf)
        return buf

    def adopt(self, name: str, buf: Any) -> Any:
        """Register a buffer produced elsewhere (backend output, converted copy)."""
        self._register(name, buf)
        return buf

    def reserve(self, name: str, lwork: int) -> int:
        """
        Record the workspace size handed to a backend that allocates its own
        WORK array from it.
        """
        self._register(name, lwork)
        self.lwork = lwork
        logger.debug("%s: reserved %s of %d elements", self.routine, name, lwork)
        return lwork

    def release_all(self) -> None:
        """Drop every registered buffer, in reverse registration order."""
        for name in reversed(list(self._buffers)):
            del self._buffers[name]
            self.released.append(name)
        logger.debug("%s: released %s", self.routine, ', '.join(self.released) or 'nothing')

    @property
    def live(self) -> tuple[str, ...]:
        """Names still held (empty after FINALIZE)."""
        return tuple(self._buffers)

    def summary(self) -> dict[str, Any]:
        """Ledger snapshot for Result.info['scratch']."""
        return {
            'allocated': tuple(self.allocated),
            'released': tuple(self.released),
            'lwork': self.lwork,
        }
