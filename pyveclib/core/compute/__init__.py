"""
Shared compute infrastructure for PyVeclib.

Submodules:
    precision: The four value domains (s, d, c, z) and their constants
    device: Hardware detection and device selection
    timing: Execution timing utilities
"""

from pyveclib.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)
from pyveclib.core.compute.precision import (
    COMPLEX_DOUBLE,
    COMPLEX_SINGLE,
    DOUBLE,
    PRECISIONS,
    SINGLE,
    Precision,
    resolve_precision,
)
from pyveclib.core.compute.timing import Timer

__all__ = [
    # Precision domains
    "Precision",
    "SINGLE",
    "DOUBLE",
    "COMPLEX_SINGLE",
    "COMPLEX_DOUBLE",
    "PRECISIONS",
    "resolve_precision",
    # Device detection
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    # Timing
    "Timer",
]
