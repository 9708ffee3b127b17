"""
Glitchbloom — Wave Distortion Effect
Tiled ripple warp: the frame is cut into small tiles and every tile is
pasted back at a sine-displaced position.
"""

import numpy as np
import cv2

TILE_SIZE = 8
PHASE_STEP = 0.005  # Phase advance per frame, driven by the pipeline


def tile_offsets(cols: int, rows: int, intensity: float, phase: float):
    """Per-column vertical and per-row horizontal displacement.

    Horizontal displacement depends only on the tile row j, vertical only
    on the tile column i:

        dx(j) = sin(0.1 j + a + p) * 6a + sin(0.05 j - p) * 3a
        dy(i) = cos(0.1 i + a - p) * 6a + cos(0.05 i + 2p) * 3a

    Returns:
        (dx, dy) float arrays of length rows and cols.
    """
    a = float(intensity)
    j = np.arange(rows, dtype=np.float64)
    i = np.arange(cols, dtype=np.float64)
    dx = np.sin(j * 0.1 + a + phase) * a * 6 + np.sin(j * 0.05 - phase) * a * 3
    dy = np.cos(i * 0.1 + a - phase) * a * 6 + np.cos(i * 0.05 + phase * 2) * a * 3
    return dx, dy


def _paste(out: np.ndarray, tile: np.ndarray, x: float, y: float):
    """Write tile into out with its top-left corner at fractional (x, y)."""
    h, w = out.shape[:2]
    th, tw = tile.shape[:2]
    x0, y0 = int(np.floor(x)), int(np.floor(y))
    fx, fy = x - x0, y - y0

    if fx == 0 and fy == 0:
        cx0, cy0 = max(x0, 0), max(y0, 0)
        cx1, cy1 = min(x0 + tw, w), min(y0 + th, h)
        if cx1 > cx0 and cy1 > cy0:
            out[cy0:cy1, cx0:cx1] = tile[cy0 - y0:cy1 - y0, cx0 - x0:cx1 - x0]
        return

    # Sub-pixel placement: bilinear resample into a window one pixel larger
    wx0, wy0 = max(x0, 0), max(y0, 0)
    wx1, wy1 = min(x0 + tw + 1, w), min(y0 + th + 1, h)
    if wx1 <= wx0 or wy1 <= wy0:
        return
    m = np.float32([[1, 0, x - wx0], [0, 1, y - wy0]])
    window = np.ascontiguousarray(out[wy0:wy1, wx0:wx1])
    window = cv2.warpAffine(np.ascontiguousarray(tile), m, (wx1 - wx0, wy1 - wy0), dst=window,
                            flags=cv2.INTER_LINEAR, borderMode=cv2.BORDER_TRANSPARENT)
    out[wy0:wy1, wx0:wx1] = window


def wave_tiles(frame: np.ndarray, intensity: float = 1.0, phase: float = 0.0,
               tile_size: int = TILE_SIZE) -> np.ndarray:
    """Rippling tile warp.

    The frame is cleared to black and every tile_size x tile_size tile
    (partial tiles at the right/bottom edges included) is copied from the
    original to its base position plus the tile_offsets() displacement.
    Tiles are visited column by column; later tiles overwrite earlier ones.
    The same intensity produces a slowly drifting pattern as phase grows.

    Args:
        frame: (H, W, 3) uint8 RGB array.
        intensity: Displacement strength (0 = identity).
        phase: Time-like phase accumulator, owned by the caller.
        tile_size: Tile edge in pixels.

    Returns:
        Warped frame.
    """
    h, w = frame.shape[:2]
    tile_size = max(1, int(tile_size))
    cols = -(-w // tile_size)
    rows = -(-h // tile_size)
    dx, dy = tile_offsets(cols, rows, intensity, phase)

    snapshot = frame.copy()
    result = np.zeros_like(frame)

    for i in range(cols):
        sx = i * tile_size
        for j in range(rows):
            sy = j * tile_size
            tile = snapshot[sy:sy + tile_size, sx:sx + tile_size]
            _paste(result, tile, sx + dx[j], sy + dy[i])

    return result
