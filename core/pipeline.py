"""
Glitchbloom — Post-Processing Pipeline

Runs the glitch stages over a painted frame in a fixed order:

    pixel offset -> color split -> wave distortion -> CRT overlay

The three geometric stages work on the clean plant image; the overlay
(scan lines, grain, vignette) goes last so it stays aligned with the
screen no matter how the image underneath is warped.

The pipeline owns the state that must persist between frames: the wave
phase accumulator and the frame counter.
"""

import numpy as np

from core.params import GlitchParams, Intensities
from effects import apply_chain
from effects.distortion import PHASE_STEP, TILE_SIZE

# Registry names of the per-frame stages, in the order they run
STAGES = ("pixeloffset", "colorsplit", "wave", "crt")
# Overlay parts reached through the "crt" stage
OVERLAY_PARTS = ("scanlines", "grain", "vignette")


class Pipeline:
    """Stateful per-frame glitch chain.

    Args:
        tile_size: Wave distortion tile edge in pixels.
        rng: np.random.RandomState seeding the stochastic stages.
    """

    def __init__(self, tile_size: int = TILE_SIZE,
                 rng: np.random.RandomState | None = None):
        self.tile_size = tile_size
        self.rng = rng if rng is not None else np.random.RandomState()
        self.phase = 0.0
        self.frame_index = 0

    def _seed(self) -> int:
        return int(self.rng.randint(0, 2 ** 31 - 1))

    def build_chain(self, intensities: Intensities, params: GlitchParams) -> list[dict]:
        """Effect chain for the current frame.

        Geometric stages with intensity <= 0 are bypassed. The overlay is
        always present; each of its parts is a no-op at zero strength.
        """
        return [
            {"name": "pixeloffset", "bypassed": intensities.pixel_offset <= 0,
             "params": {"intensity": intensities.pixel_offset, "seed": self._seed()}},
            {"name": "colorsplit", "bypassed": intensities.color_split <= 0,
             "params": {"intensity": intensities.color_split}},
            {"name": "wave", "bypassed": intensities.wave_distortion <= 0,
             "params": {"intensity": intensities.wave_distortion, "phase": self.phase,
                        "tile_size": self.tile_size}},
            {"name": "crt",
             "params": {"scanline_offset": params.scanline_offset,
                        "scanline_opacity": params.scanlines,
                        "noise_amount": params.noise_amount,
                        "vignette_strength": params.vignette,
                        "seed": self._seed()}},
        ]

    def process(self, frame: np.ndarray, intensities: Intensities,
                params: GlitchParams) -> np.ndarray:
        """Run every stage over frame and advance the pipeline clock.

        Returns:
            The post-processed frame (the input is not modified).
        """
        self.phase += PHASE_STEP
        chain = self.build_chain(intensities, params)
        result = apply_chain(frame, chain, frame_index=self.frame_index)
        self.frame_index += 1
        return result
