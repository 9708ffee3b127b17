"""
Glitchbloom — Texture Effects
Gray grain, ring vignette, and the combined screen-space CRT overlay.
"""

import numpy as np
import cv2

from effects.scanlines import scanlines

GRAIN_MIX = 0.2        # Weight of the random gray in a grain hit
VIGNETTE_RINGS = 20
VIGNETTE_STEP = 10     # Each ring is this many px smaller in width and height
VIGNETTE_ALPHA = 80.0  # Alpha (0-255) of the innermost ring at strength 1


def grain(frame: np.ndarray, amount: float = 0.2, seed: int | None = None) -> np.ndarray:
    """Blend random gray into a random subset of pixels.

    Each pixel is hit with probability `amount`; a hit keeps 80% of its
    color and takes 20% of a uniform random gray level shared by its three
    channels.

    Args:
        frame: (H, W, 3) uint8 RGB array.
        amount: Hit probability per pixel (0 = no-op, >= 1 = every pixel).
        seed: Random seed. None = fresh grain every call.

    Returns:
        Grainy frame.
    """
    amount = max(0.0, float(amount))
    if amount <= 0:
        return frame.copy()

    h, w = frame.shape[:2]
    rng = np.random.RandomState(seed)
    hits = rng.random_sample((h, w)) < amount
    gray = rng.random_sample((h, w)).astype(np.float32) * 255.0

    result = frame.astype(np.float32)
    mixed = result * (1.0 - GRAIN_MIX) + gray[:, :, np.newaxis] * GRAIN_MIX
    result = np.where(hits[:, :, np.newaxis], mixed, result)
    return np.clip(result, 0, 255).astype(np.uint8)


def vignette(frame: np.ndarray, strength: float = 0.8, rings: int = VIGNETTE_RINGS,
             step: int = VIGNETTE_STEP) -> np.ndarray:
    """Darken the periphery with concentric translucent black ellipse outlines.

    Ring i (0-based) is an ellipse outline of size (W - step*i, H - step*i)
    centered on the frame, at alpha i / rings * 80 * strength. The outermost
    ring is fully transparent.

    Args:
        frame: (H, W, 3) uint8 RGB array.
        strength: Vignette strength (0 = no-op).
        rings: Number of rings.
        step: Size decrement between rings in pixels.

    Returns:
        Vignetted frame.
    """
    strength = max(0.0, float(strength))
    if strength <= 0:
        return frame.copy()

    h, w = frame.shape[:2]
    center = (w / 2.0, h / 2.0)
    shade = np.ones((h, w), dtype=np.float32)

    for i in range(rings):
        alpha = min(255.0, i / rings * VIGNETTE_ALPHA * strength) / 255.0
        axes = ((w - i * step) / 2.0, (h - i * step) / 2.0)
        if alpha <= 0 or axes[0] <= 0 or axes[1] <= 0:
            continue
        ring = np.zeros((h, w), dtype=np.uint8)
        cv2.ellipse(ring, (int(round(center[0] * 16)), int(round(center[1] * 16))),
                    (int(round(axes[0] * 16)), int(round(axes[1] * 16))),
                    0, 0, 360, 255, 1, cv2.LINE_AA, 4)
        shade *= 1.0 - ring.astype(np.float32) / 255.0 * alpha

    result = frame.astype(np.float32) * shade[:, :, np.newaxis]
    return np.clip(result, 0, 255).astype(np.uint8)


def crt_overlay(frame: np.ndarray, frame_index: int = 0, scanline_offset: float = 0.0,
                scanline_opacity: float = 1.0, noise_amount: float = 0.2,
                vignette_strength: float = 0.8, seed: int | None = None) -> np.ndarray:
    """Scan lines, then grain, then vignette, as one screen-space layer."""
    result = scanlines(frame, frame_index=frame_index, offset=scanline_offset,
                       opacity=scanline_opacity)
    result = grain(result, amount=noise_amount, seed=seed)
    return vignette(result, strength=vignette_strength)
