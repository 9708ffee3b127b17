"""
Glitchbloom — Pixel Offset Effect
Sparse horizontal tearing: random pixels take the color of a pixel a short
distance further along the scan order.
"""

import numpy as np

MAX_REACH = 50       # Source pixel is 0..49 positions ahead
HIT_SCALE = 0.1      # Per-pixel hit probability = intensity * HIT_SCALE


def pixel_offset(frame: np.ndarray, intensity: float = 1.0,
                 seed: int | None = None) -> np.ndarray:
    """Copy RGB from a pixel further along the row-major scan order.

    Each pixel is hit with probability intensity * 0.1. A hit pixel takes
    the color of the pixel k positions later (k uniform in [0, 50)); when
    that index runs past the end of the frame the pixel is left alone.
    Sources are read from the unmodified input.

    Args:
        frame: (H, W, 3) uint8 RGB array.
        intensity: Tearing intensity (0 = no-op, any positive value allowed).
        seed: Random seed. None = different tearing every call.

    Returns:
        Torn frame.
    """
    h, w, c = frame.shape
    n = h * w
    probability = max(0.0, float(intensity)) * HIT_SCALE
    if probability <= 0 or n == 0:
        return frame.copy()

    rng = np.random.RandomState(seed)
    flat = frame.reshape(n, c)

    hits = np.flatnonzero(rng.random_sample(n) < probability)
    sources = hits + rng.randint(0, MAX_REACH, size=hits.size)
    in_bounds = sources < n

    result = flat.copy()
    result[hits[in_bounds]] = flat[sources[in_bounds]]
    return result.reshape(h, w, c)
