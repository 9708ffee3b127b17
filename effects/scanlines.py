"""
Glitchbloom — Scan Lines Effect
Overlays thin, softly pulsing CRT-style scan lines.
"""

import numpy as np

SPACING = 4
ALPHA_RANGE = (15.0, 35.0)     # Per-line alpha (0-255) as sin(y, frame) sweeps -1..1
SHADE_RANGE = (180.0, 220.0)   # Red level as sin(frame) sweeps -1..1


def _remap(value, lo, hi):
    """Map -1..1 onto lo..hi."""
    return lo + (value + 1.0) * 0.5 * (hi - lo)


def scanline_color(frame_index: int) -> tuple:
    """Line color (c, c + 20, 255), with c drifting slowly over time."""
    c = _remap(np.sin(frame_index * 0.01), *SHADE_RANGE)
    return (c, c + 20.0, 255.0)


def scanlines(frame: np.ndarray, frame_index: int = 0, offset: float = 0.0,
              opacity: float = 1.0, spacing: int = SPACING) -> np.ndarray:
    """Overlay 1 px horizontal lines every `spacing` rows.

    Line alpha follows sin(0.01 y + 0.02 frame) between 15 and 35 (out of
    255), so brighter bands roll slowly down the screen.

    Args:
        frame: (H, W, 3) uint8 RGB array.
        frame_index: Animation frame counter.
        offset: Vertical shift of the whole line pattern in pixels.
        opacity: Multiplier on the line alpha (0 = no-op).
        spacing: Rows between lines.

    Returns:
        Frame with scan lines.
    """
    opacity = max(0.0, min(1.0, float(opacity)))
    if opacity <= 0:
        return frame.copy()

    h = frame.shape[0]
    spacing = max(1, int(spacing))
    ys = np.arange(0, h, spacing)
    rows = np.rint(ys + float(offset)).astype(np.int64)
    keep = (rows >= 0) & (rows < h)
    ys, rows = ys[keep], rows[keep]
    if rows.size == 0:
        return frame.copy()

    alpha = _remap(np.sin(ys * 0.01 + frame_index * 0.02), *ALPHA_RANGE) / 255.0 * opacity
    alpha = alpha.astype(np.float32)[:, np.newaxis, np.newaxis]
    color = np.array(scanline_color(frame_index), dtype=np.float32)

    result = frame.astype(np.float32)
    result[rows] = result[rows] * (1.0 - alpha) + color * alpha
    return np.clip(result, 0, 255).astype(np.uint8)
