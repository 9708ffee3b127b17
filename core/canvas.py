"""
Glitchbloom — Canvas

Offscreen RGB render buffer the plant and the click/drag feedback are
painted onto. Wraps an (H, W, 3) uint8 array and adds the few drawing
primitives the sketch needs: anti-aliased lines and ellipses at RGBA color
with fractional coordinates, soft glow halos, snapshot, and clear.

Every primitive rasterizes a coverage mask only inside its own bounding box
and composites it source-over, so hundreds of small strokes per frame stay
cheap.
"""

import numpy as np
import cv2

# cv2 sub-pixel drawing: coordinates are passed as fixed point with 4 bits
_SHIFT = 4
_SCALE = 1 << _SHIFT


def _fixed(value: float) -> int:
    return int(round(value * _SCALE))


class Canvas:
    """Mutable RGB pixel surface.

    Args:
        width: Surface width in pixels.
        height: Surface height in pixels.
        background: RGB fill used on creation and by clear().
    """

    def __init__(self, width: int, height: int, background: tuple = (0, 0, 0)):
        self.width = int(width)
        self.height = int(height)
        self.background = tuple(int(c) for c in background)
        self.pixels = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        self.clear()

    @classmethod
    def from_frame(cls, frame: np.ndarray) -> "Canvas":
        """Wrap a copy of an existing (H, W, 3) uint8 frame."""
        h, w = frame.shape[:2]
        canvas = cls(w, h)
        canvas.load(frame)
        return canvas

    @property
    def shape(self) -> tuple:
        return self.pixels.shape

    def clear(self, color: tuple | None = None):
        """Fill the whole surface with one color (background by default)."""
        fill = self.background if color is None else color
        self.pixels[:, :] = np.array(fill, dtype=np.uint8)

    def snapshot(self) -> np.ndarray:
        """Return an independent copy of the current pixels."""
        return self.pixels.copy()

    def load(self, frame: np.ndarray):
        """Replace the pixels with a frame of the same size."""
        if frame.shape != self.pixels.shape:
            raise ValueError(
                f"Frame shape {frame.shape} does not match canvas {self.pixels.shape}"
            )
        self.pixels = np.ascontiguousarray(frame, dtype=np.uint8).copy()

    # --- Drawing primitives ---

    def line(self, p0, p1, color, alpha: float = 255, weight: float = 1.0,
             glow: float = 0.0, glow_alpha: float = 0.5, glow_color=None):
        """Stroke a line segment.

        Args:
            p0, p1: (x, y) endpoints, fractional coordinates allowed.
            color: RGB tuple (0-255).
            alpha: Stroke opacity (0-255).
            weight: Stroke width in pixels.
            glow: Blur radius of the halo drawn under the stroke (0 = none).
            glow_alpha: Halo opacity relative to the stroke alpha.
            glow_color: Halo RGB. None = same as color.
        """
        if alpha <= 0:
            return
        thickness = max(1, int(round(weight)))
        pad = thickness / 2.0 + 2 + (1.5 * glow if glow > 0 else 0)
        box = self._box(min(p0[0], p1[0]), min(p0[1], p1[1]),
                        max(p0[0], p1[0]), max(p0[1], p1[1]), pad)
        if box is None:
            return
        x0, y0, x1, y1 = box

        mask = np.zeros((y1 - y0, x1 - x0), dtype=np.uint8)
        a = (_fixed(p0[0] - x0), _fixed(p0[1] - y0))
        b = (_fixed(p1[0] - x0), _fixed(p1[1] - y0))
        cv2.line(mask, a, b, 255, thickness, cv2.LINE_AA, _SHIFT)
        self._stroke(mask, box, color, alpha, glow, glow_alpha, glow_color)

    def ellipse(self, center, size, color, alpha: float = 255, fill: bool = True,
                weight: float = 1.0, glow: float = 0.0, glow_alpha: float = 0.5,
                glow_color=None):
        """Draw an axis-aligned ellipse.

        Args:
            center: (x, y) center.
            size: (width, height) full diameters, not radii.
            color: RGB tuple (0-255).
            alpha: Opacity (0-255).
            fill: Filled disc when True, outline of `weight` px otherwise.
            glow: Blur radius of the halo drawn under the shape (0 = none).
            glow_alpha: Halo opacity relative to alpha.
            glow_color: Halo RGB. None = same as color.
        """
        rx, ry = size[0] / 2.0, size[1] / 2.0
        if alpha <= 0 or rx <= 0 or ry <= 0:
            return
        thickness = -1 if fill else max(1, int(round(weight)))
        pad = max(thickness, 1) / 2.0 + 2 + (1.5 * glow if glow > 0 else 0)
        cx, cy = center
        box = self._box(cx - rx, cy - ry, cx + rx, cy + ry, pad)
        if box is None:
            return
        x0, y0, x1, y1 = box

        mask = np.zeros((y1 - y0, x1 - x0), dtype=np.uint8)
        cv2.ellipse(mask, (_fixed(cx - x0), _fixed(cy - y0)),
                    (max(1, _fixed(rx)), max(1, _fixed(ry))),
                    0, 0, 360, 255, thickness, cv2.LINE_AA, _SHIFT)
        self._stroke(mask, box, color, alpha, glow, glow_alpha, glow_color)

    # --- Compositing ---

    def blend(self, weight: np.ndarray, color, box=None):
        """Source-over composite a solid color through a 0-1 weight map.

        Args:
            weight: (h, w) float coverage*opacity map.
            color: RGB tuple (0-255).
            box: (x0, y0, x1, y1) region the map covers. None = whole canvas.
        """
        if box is None:
            box = (0, 0, self.width, self.height)
        x0, y0, x1, y1 = box
        roi = self.pixels[y0:y1, x0:x1].astype(np.float32)
        w = np.clip(weight, 0.0, 1.0)[:, :, np.newaxis]
        tint = np.array(color, dtype=np.float32)
        roi = roi * (1.0 - w) + tint * w
        self.pixels[y0:y1, x0:x1] = np.clip(roi, 0, 255).astype(np.uint8)

    def _stroke(self, mask, box, color, alpha, glow, glow_alpha, glow_color=None):
        coverage = mask.astype(np.float32) / 255.0
        opacity = min(float(alpha), 255.0) / 255.0
        if glow > 0 and glow_alpha > 0:
            # Canvas-style shadowBlur: the halo sigma is half the blur radius
            halo = cv2.GaussianBlur(coverage, (0, 0), sigmaX=glow / 2.0)
            self.blend(halo * opacity * glow_alpha,
                       color if glow_color is None else glow_color, box)
        self.blend(coverage * opacity, color, box)

    def _box(self, left, top, right, bottom, pad):
        """Integer bounding box grown by pad and clipped to the canvas."""
        x0 = max(0, int(np.floor(left - pad)))
        y0 = max(0, int(np.floor(top - pad)))
        x1 = min(self.width, int(np.ceil(right + pad)) + 1)
        y1 = min(self.height, int(np.ceil(bottom + pad)) + 1)
        if x1 <= x0 or y1 <= y0:
            return None
        return x0, y0, x1, y1
