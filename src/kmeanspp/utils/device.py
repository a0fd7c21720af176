"""
CPU capability helpers.

The clustering core runs on the CPU only. These helpers size the work it
hands out: the SIMD lane count used as the metric chunk width, and the
default number of pool workers.
"""

from typing import Optional
import torch


# Vector register width in bits for each capability torch reports
_REGISTER_BITS = {
    'AVX512': 512,
    'AVX2': 256,
    'VSX': 128,
    'ZVECTOR': 128,
    'SVE256': 256,
    'DEFAULT': 128,
}


def get_cpu_capability() -> str:
    """Return the vector instruction set torch dispatches to on this CPU.

    Returns:
        Capability name such as 'AVX2', 'AVX512' or 'DEFAULT'
    """
    backend = getattr(torch.backends, 'cpu', None)
    if backend is not None and hasattr(backend, 'get_cpu_capability'):
        return str(backend.get_cpu_capability()).upper()
    return 'DEFAULT'


def get_simd_lane_count(dtype: torch.dtype = torch.float64,
                        capability: Optional[str] = None) -> int:
    """Number of elements of ``dtype`` that fit in one vector register.

    Args:
        dtype: Element type
        capability: Override for the detected CPU capability

    Returns:
        Lane count, at least 1
    """
    if capability is None:
        capability = get_cpu_capability()
    bits = _REGISTER_BITS.get(capability.upper(), _REGISTER_BITS['DEFAULT'])
    element_bits = torch.finfo(dtype).bits if dtype.is_floating_point else torch.iinfo(dtype).bits
    return max(1, bits // element_bits)


def get_default_num_workers() -> int:
    """Worker count for the thread pool; follows torch's intra-op thread setting."""
    return max(1, torch.get_num_threads())
