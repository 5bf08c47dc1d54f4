"""
Per-phase timing for the drivers.

Each driver times its lifecycle phases (layout_in, query, execute, scale,
layout_out) into one Timer whose result() becomes Result.timing. When the
backend runs on a GPU, every phase boundary waits for the device so the
numbers cover the kernels rather than their asynchronous launch.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Wall-clock timer for a driver call, split into named phases.

    Usage:
        timer = Timer(sync_cuda=backend.supports(CAPABILITY_GPU_NATIVE))
        timer.start()
        with timer.section('execute'):
            u, s, vt, info = backend.gesvd(prec, a, True, lwork)
        timer.stop()
        timer.result()
        # {'total_seconds': 0.002, 'execute': 0.0018}
    """

    def __init__(self, sync_cuda: bool = False):
        self._sync_cuda = sync_cuda
        self._phases: dict[str, float] = {}
        self._t0: float | None = None
        self._total: float | None = None

    @property
    def sync_cuda(self) -> bool:
        """True when phase boundaries wait for the CUDA device."""
        return self._sync_cuda

    def _now(self) -> float:
        if self._sync_cuda:
            import torch
            torch.cuda.synchronize()
        return time.perf_counter()

    def start(self) -> None:
        self._t0 = self._now()

    def stop(self) -> None:
        if self._t0 is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = self._now() - self._t0

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time one phase. A phase entered twice accumulates."""
        t0 = self._now()
        try:
            yield
        finally:
            self._phases[name] = self._phases.get(name, 0.0) + (self._now() - t0)

    def result(self) -> dict[str, float]:
        """
        'total_seconds' followed by each phase, in the order first entered.

        Raises:
            RuntimeError: If called before stop()
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._phases}
