import numpy as np

from clipwork.core.shared_types import FilterKind
from ..domain.models import FrameKernel
from ..data import opencv_kernels

_KERNELS = {
    FilterKind.NONE: opencv_kernels.identity,
    FilterKind.SEPIA: opencv_kernels.sepia,
    FilterKind.GRAYSCALE: opencv_kernels.grayscale,
    FilterKind.EDGE_DETECT: opencv_kernels.edge_detect,
    FilterKind.BLUR: opencv_kernels.blur,
}


def get_kernel(kind: FilterKind) -> FrameKernel:
    """Resolves the per-frame transform for a filter kind."""
    return _KERNELS[FilterKind.from_value(kind)]


def apply_filter(frame: np.ndarray, kind: FilterKind) -> np.ndarray:
    """Public Service API: run one filter over one frame. Pure, no state."""
    return get_kernel(kind)(frame)
