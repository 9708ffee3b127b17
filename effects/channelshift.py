"""
Glitchbloom — Color Split Effect
Adds tinted, horizontally offset copies of the frame on top of itself to
create chromatic-aberration fringing.
"""

import numpy as np
import cv2

# (tint RGB, horizontal direction) for the three additive copies
SPLIT_TINTS = (
    ((0, 220, 255), 1),     # cyan, shifted right
    ((80, 220, 100), 0),    # green, in place
    ((180, 100, 255), -1),  # violet, shifted left
)
SPREAD = 5.0  # Pixels of shift per unit of intensity


def shift_x(image: np.ndarray, dx: float) -> np.ndarray:
    """Translate an image horizontally by dx px, filling with zeros.

    Fractional shifts are resampled bilinearly, so a 1.5 px shift spreads
    each column over two neighbors. Nothing wraps around the edges.
    """
    dx = float(dx)
    if dx == 0:
        return image.copy()
    h, w = image.shape[:2]
    if abs(dx) >= w:
        return np.zeros_like(image)
    m = np.float32([[1, 0, dx], [0, 1, 0]])
    return cv2.warpAffine(np.ascontiguousarray(image), m, (w, h),
                          flags=cv2.INTER_LINEAR, borderMode=cv2.BORDER_CONSTANT,
                          borderValue=0)


def color_split(frame: np.ndarray, intensity: float = 1.0) -> np.ndarray:
    """Additively blend cyan, green and violet tinted copies of the frame.

    The cyan copy is shifted right and the violet copy left by
    intensity * 5 pixels (sub-pixel offsets allowed); the green copy stays
    in place. Shifted copies do not wrap around.

    Args:
        frame: (H, W, 3) uint8 RGB array.
        intensity: Split strength; scales the horizontal offset.

    Returns:
        Frame with colored fringes.
    """
    snapshot = frame.astype(np.float32)
    offset = max(0.0, float(intensity)) * SPREAD
    result = snapshot.copy()

    for tint, direction in SPLIT_TINTS:
        tint = np.array(tint, dtype=np.float32)
        result += shift_x(snapshot, direction * offset) * tint / 255.0

    return np.clip(result, 0, 255).astype(np.uint8)
