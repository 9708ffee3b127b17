"""
Glitchbloom — Sketch Driver & Offline Render

Sketch wires the plant, painter, glitch parameters, environment,
interaction and pipeline together and produces one frame per
generate_frame() call:

  1. apply glitch decays that have come due
  2. background gradient + dust
  3. grow the plant one step and paint it
  4. paint queued click/drag feedback
  5. run the post-processing pipeline

render_sequence() drives a Sketch offline and writes a PNG sequence or an
animated GIF.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image

from core.canvas import Canvas
from core.environment import EnvironmentSystem
from core.interaction import InteractionSystem, CLICK_DECAY_SEC, DRAG_DECAY_SEC, SPLIT_DECAY_SEC
from core.painter import PlantStyle, draw_plant, paint_background
from core.params import GlitchParams
from core.pipeline import Pipeline
from core.plant import PlantSystem, DEFAULT_MAX_DEPTH, DEFAULT_GROWTH_RATE, UP
from core.safety import validate_canvas_size, validate_frame_count, preflight_output

logger = logging.getLogger(__name__)


@dataclass
class SketchConfig:
    width: int = 640
    height: int = 480
    max_depth: int = DEFAULT_MAX_DEPTH
    growth_rate: float = DEFAULT_GROWTH_RATE
    weather: str = "sunny"
    seed: int | None = None
    click_decay: float = CLICK_DECAY_SEC
    drag_decay: float = DRAG_DECAY_SEC
    split_decay: float = SPLIT_DECAY_SEC


class Sketch:
    """The whole animated piece.

    Args:
        config: SketchConfig. Validated eagerly.
        clock: Zero-argument callable returning seconds, used for decay
            deadlines when no explicit `now` is passed. Default time.monotonic.
        environment: Optional EnvironmentSystem (e.g. with a fixed clock).

    Raises:
        SafetyError: On invalid canvas size, depth or growth rate.
    """

    def __init__(self, config: SketchConfig | None = None, clock=None,
                 environment: EnvironmentSystem | None = None):
        self.config = config or SketchConfig()
        cfg = self.config
        validate_canvas_size(cfg.width, cfg.height)

        self.clock = clock or time.monotonic
        self.rng = np.random.RandomState(cfg.seed)
        self.canvas = Canvas(cfg.width, cfg.height)
        self.plant = PlantSystem(max_depth=cfg.max_depth, growth_rate=cfg.growth_rate,
                                 origin=(cfg.width / 2, cfg.height), root_angle=UP,
                                 rng=self.rng)
        self.style = PlantStyle()
        self.params = GlitchParams()
        self.environment = environment or EnvironmentSystem(weather=cfg.weather)
        self.interaction = InteractionSystem(self.params, rng=self.rng,
                                             click_decay=cfg.click_decay,
                                             drag_decay=cfg.drag_decay,
                                             split_decay=cfg.split_decay)
        self.pipeline = Pipeline(rng=self.rng)
        self.frame_count = 0

    # --- Events ---

    def click(self, x: float, y: float, now: float | None = None) -> dict:
        return self.interaction.handle_click(x, y, self._now(now))

    def drag(self, x: float, y: float, now: float | None = None):
        self.interaction.handle_drag(x, y, self._now(now))

    def _now(self, now):
        return self.clock() if now is None else now

    # --- Frame ---

    def paint(self) -> np.ndarray:
        """Background, one growth step, plant and feedback. No post-processing."""
        paint_background(self.canvas, self.rng)
        self.plant.advance()
        draw_plant(self.canvas, self.plant, self.style)
        self.interaction.draw_feedback(self.canvas)
        return self.canvas.snapshot()

    def generate_frame(self, now: float | None = None) -> np.ndarray:
        """Produce the next presented frame as an (H, W, 3) uint8 array."""
        self.params.tick(self._now(now))
        intensities = self.environment.update().combined(self.params)

        painted = self.paint()
        frame = self.pipeline.process(painted, intensities, self.params)
        self.canvas.load(frame)
        self.frame_count += 1
        return frame


def render_sequence(config: SketchConfig, frames: int, output_path: str,
                    fps: int = 30, progress_callback=None, sketch: Sketch | None = None) -> Path:
    """Render frames offline and write them out.

    The frame clock advances by 1/fps per frame, so scheduled decays behave
    as they would live.

    Args:
        config: Sketch configuration (ignored when sketch is given).
        frames: Number of frames to render.
        output_path: Directory (PNG sequence), *.gif (animation) or *.png
            (only the last frame).
        fps: Frame rate for the clock and the GIF timing.
        progress_callback: Optional fn(frame_index, total_frames).
        sketch: Pre-built Sketch to render from.

    Returns:
        Path written.
    """
    validate_frame_count(frames)
    target = preflight_output(output_path)
    path = target["path"]
    sketch = sketch or Sketch(config)

    if target["kind"] == "dir":
        path.mkdir(parents=True, exist_ok=True)
    else:
        path.parent.mkdir(parents=True, exist_ok=True)

    dt = 1.0 / max(1, fps)
    start_time = time.time()
    images = []
    frame = None

    for i in range(frames):
        frame = sketch.generate_frame(now=i * dt)
        if target["kind"] == "dir":
            Image.fromarray(frame).save(path / f"frame_{i:04d}.png")
        elif target["kind"] == "gif":
            images.append(Image.fromarray(frame))
        if progress_callback:
            progress_callback(i, frames)

    if target["kind"] == "gif":
        images[0].save(path, save_all=True, append_images=images[1:],
                       duration=int(round(1000 * dt)), loop=0)
    elif target["kind"] == "png":
        Image.fromarray(frame).save(path)

    logger.debug("Rendered %d frames in %.1fs -> %s", frames, time.time() - start_time, path)
    return path
