import cv2
import numpy as np

from ..domain.models import BLUR_KERNEL_SIZE, BLUR_SIGMA, EDGE_THRESHOLD, SEPIA_BGR


def identity(frame: np.ndarray) -> np.ndarray:
    return frame


def sepia(frame: np.ndarray) -> np.ndarray:
    # cv2.transform saturates back into uint8
    return cv2.transform(frame, SEPIA_BGR)


def grayscale(frame: np.ndarray) -> np.ndarray:
    """Luma conversion. Output is single-channel (H, W)."""
    return cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)


def edge_detect(frame: np.ndarray) -> np.ndarray:
    """
    Sobel gradient magnitude, thresholded to a binary edge map and
    expanded back to 3 channels so the encoder sees a normal color frame.
    """
    gray = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
    grad_x = cv2.Sobel(gray, cv2.CV_32F, 1, 0, ksize=3)
    grad_y = cv2.Sobel(gray, cv2.CV_32F, 0, 1, ksize=3)
    magnitude = cv2.magnitude(grad_x, grad_y)

    _, edges = cv2.threshold(magnitude, EDGE_THRESHOLD, 255, cv2.THRESH_BINARY)
    return cv2.cvtColor(edges.astype(np.uint8), cv2.COLOR_GRAY2BGR)


def blur(frame: np.ndarray) -> np.ndarray:
    """Separable Gaussian: one 1-D pass per axis."""
    kernel = cv2.getGaussianKernel(BLUR_KERNEL_SIZE, BLUR_SIGMA)
    return cv2.sepFilter2D(frame, -1, kernel, kernel)
