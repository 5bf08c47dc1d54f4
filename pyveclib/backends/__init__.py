"""
Numerical backends and backend selection.

Available backends:
    ScipyLapackBackend: CPU reference implementation over scipy's LAPACK/BLAS
    TorchBackend: torch.linalg implementation (GPU when available)

Selection happens once per call, at the API boundary, never inside driver
logic. The 'auto' choice resolves to the configured default, which is taken
from set_default_backend() or the PYVECLIB_BACKEND environment variable and
falls back to 'cpu'.
"""

from __future__ import annotations

from typing import Literal, Union
import os

from pyveclib.backends.cpu import ScipyLapackBackend
from pyveclib.core.protocols import Backend

# Type alias for backend selection
BackendChoice = Union[Literal['auto', 'cpu', 'scipy', 'gpu', 'torch'], Backend]

ENV_BACKEND = 'PYVECLIB_BACKEND'

_NAMES = ('cpu', 'scipy', 'gpu', 'torch')

_default_backend: str | None = None


def set_default_backend(choice: str | None) -> None:
    """
    Configure what backend='auto' resolves to.

    Args:
        choice: 'cpu', 'scipy', 'gpu' or 'torch'; None restores the
            environment / built-in default

    Raises:
        ValueError: If unknown backend specified
    """
    global _default_backend
    if choice is not None and choice not in _NAMES:
        raise ValueError(f"Unknown backend: {choice!r}")
    _default_backend = choice


def default_backend_name() -> str:
    """Name 'auto' currently resolves to."""
    if _default_backend is not None:
        return _default_backend
    env = os.environ.get(ENV_BACKEND, '').strip().lower()
    if env:
        if env not in _NAMES:
            raise ValueError(f"{ENV_BACKEND}={env!r} is not a known backend")
        return env
    return 'cpu'


def get_backend(choice: BackendChoice = 'auto') -> Backend:
    """
    Select and instantiate the appropriate backend.

    Args:
        choice: Backend name, or a ready Backend instance (returned as is)

    Returns:
        Backend instance ready to run kernels

    Raises:
        ValueError: If unknown backend specified
        BackendError: If torch requested but not installed
        RuntimeError: If 'gpu' requested but no GPU available
    """
    if not isinstance(choice, str):
        return choice

    if choice == 'auto':
        choice = default_backend_name()

    if choice in ('cpu', 'scipy'):
        return ScipyLapackBackend()

    elif choice == 'torch':
        from pyveclib.backends.gpu import TorchBackend
        return TorchBackend()

    elif choice == 'gpu':
        from pyveclib.backends.gpu import TorchBackend
        from pyveclib.core.compute.device import select_device
        return TorchBackend(select_device('gpu'))

    else:
        raise ValueError(f"Unknown backend: {choice!r}")


__all__ = [
    "BackendChoice",
    "ScipyLapackBackend",
    "get_backend",
    "set_default_backend",
    "default_backend_name",
    "ENV_BACKEND",
]
