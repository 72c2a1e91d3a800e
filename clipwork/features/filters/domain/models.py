from typing import Callable

import numpy as np

from clipwork.core.shared_types import FilterKind

# A kernel maps one decoded frame (H, W, 3) BGR uint8 to one output frame
FrameKernel = Callable[[np.ndarray], np.ndarray]

# Classic sepia weights. Rows are output channels, columns input channels,
# both in OpenCV BGR order.
SEPIA_BGR = np.array([
    [0.131, 0.534, 0.272],  # B
    [0.168, 0.686, 0.349],  # G
    [0.189, 0.769, 0.393],  # R
], dtype=np.float32)

BLUR_KERNEL_SIZE = 15
BLUR_SIGMA = 0.0  # derive sigma from the kernel size

EDGE_THRESHOLD = 100.0


def output_channels(kind: FilterKind) -> int:
    """Number of channels a filter emits; the encoder must be configured to match."""
    return 1 if kind == FilterKind.GRAYSCALE else 3
