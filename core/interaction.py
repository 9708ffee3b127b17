"""
Glitchbloom — Interaction System

Turns clicks and drags into glitch bursts. Each event bumps the shared
GlitchParams right away, schedules the matching decay, and queues a bit of
visual feedback (glowing discs, sparks, a trail dot) that the sketch paints
on the next frame.
"""

import math
from dataclasses import dataclass

import numpy as np

from core.canvas import Canvas
from core.params import GlitchParams

CLICK_RADIUS = 50
CLICK_DECAY_SEC = 0.5
DRAG_DECAY_SEC = 0.5
SPLIT_DECAY_SEC = 0.3
SPLIT_CHANCE = 0.2

CLICK_GLOW = (200, 220, 255)
CLICK_HALO = (150, 200, 255)
SPARK_COLOR = (255, 255, 255)
TRAIL_COLOR = (180, 100, 255)


@dataclass
class Feedback:
    """A queued disc to paint on the next frame."""
    center: tuple
    size: tuple
    color: tuple
    alpha: float
    glow: float = 0.0
    glow_alpha: float = 0.5
    glow_color: tuple | None = None


class InteractionSystem:
    """Click / drag handler bound to one GlitchParams instance.

    Args:
        params: Shared glitch parameters to bump and schedule decays on.
        rng: np.random.RandomState for sparks and color split bursts.
        click_decay: Seconds before a click's bump is undone.
        drag_decay: Seconds before a drag's wave bump is undone.
        split_decay: Seconds before a color split burst resets.
    """

    def __init__(self, params: GlitchParams, rng: np.random.RandomState | None = None,
                 click_decay: float = CLICK_DECAY_SEC, drag_decay: float = DRAG_DECAY_SEC,
                 split_decay: float = SPLIT_DECAY_SEC):
        self.params = params
        self.rng = rng if rng is not None else np.random.RandomState()
        self.click_decay = click_decay
        self.drag_decay = drag_decay
        self.split_decay = split_decay
        self.mouse_pos = (0.0, 0.0)
        self.is_dragging = False
        self.feedback: list[Feedback] = []

    def handle_click(self, x: float, y: float, now: float) -> dict:
        """Glitch burst at (x, y).

        Returns:
            The affected area as {"x", "y", "radius"}.
        """
        p = self.params
        p.bump("pixel_offset", 1.5)
        p.bump("noise_amount", 0.3)
        p.schedule("noise_amount", at=now + self.click_decay, amount=0.3, floor=0.2)
        p.schedule("pixel_offset", at=now + self.click_decay, amount=1.0, floor=0.0)

        for i in range(3):
            size = 120 - i * 20
            self.feedback.append(Feedback(
                center=(x, y), size=(size, size), color=CLICK_GLOW,
                alpha=150 - i * 30, glow=30.0, glow_alpha=0.9, glow_color=CLICK_HALO,
            ))

        for _ in range(20):
            angle = self.rng.uniform(0, 2 * math.pi)
            distance = self.rng.uniform(30, 100)
            self.feedback.append(Feedback(
                center=(x + math.cos(angle) * distance, y + math.sin(angle) * distance),
                size=(self.rng.uniform(2, 8), self.rng.uniform(2, 8)),
                color=SPARK_COLOR, alpha=self.rng.uniform(100, 200),
            ))

        return {"x": x, "y": y, "radius": CLICK_RADIUS}

    def handle_drag(self, x: float, y: float, now: float):
        """Ripple and violet trail while the pointer is dragged."""
        self.mouse_pos = (x, y)
        self.is_dragging = True
        p = self.params
        p.bump("wave_distortion", 0.1)
        p.schedule("wave_distortion", at=now + self.drag_decay, amount=0.1, floor=0.0)

        self.feedback.append(Feedback(
            center=(x, y), size=(30, 30), color=TRAIL_COLOR, alpha=40,
            glow=15.0, glow_alpha=0.5,
        ))

        if self.rng.random_sample() < SPLIT_CHANCE:
            p.set("color_split", self.rng.uniform(0.5, 1.5))
            p.schedule("color_split", at=now + self.split_decay, amount=None, floor=0.0)

    def handle_release(self):
        self.is_dragging = False

    def draw_feedback(self, canvas: Canvas) -> int:
        """Paint and drain the queued feedback. Returns how many were drawn."""
        queued, self.feedback = self.feedback, []
        for fb in queued:
            canvas.ellipse(fb.center, fb.size, fb.color, alpha=fb.alpha, fill=True,
                           glow=fb.glow, glow_alpha=fb.glow_alpha, glow_color=fb.glow_color)
        return len(queued)
