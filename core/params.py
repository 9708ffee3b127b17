"""
Glitchbloom — Glitch Parameters

Shared glitch state read by the post-processing pipeline every frame and
written by the interaction and environment systems between frames.

Delayed decay is recorded on the struct itself: schedule() stores a
deadline and tick(now) applies every entry that has come due. The frame
loop calls tick() once per frame, so all mutation happens on one thread in
a predictable order.

Usage:
    params = GlitchParams()
    params.bump("pixel_offset", 1.5)
    params.schedule("pixel_offset", at=now + 0.5, amount=1.0, floor=0.0)
    ...
    params.tick(time.monotonic())
"""

import logging
from dataclasses import dataclass, field, fields

logger = logging.getLogger(__name__)

TUNABLE = ("pixel_offset", "color_split", "wave_distortion",
           "scanline_offset", "noise_amount", "vignette", "scanlines")


@dataclass
class ScheduledDecay:
    """One pending parameter change.

    amount=None resets the parameter to floor; otherwise it is lowered by
    amount but never below floor.
    """
    deadline: float
    name: str
    amount: float | None = None
    floor: float = 0.0

    def apply(self, params: "GlitchParams") -> float:
        current = getattr(params, self.name)
        if self.amount is None:
            value = self.floor
        else:
            value = max(self.floor, current - self.amount)
        setattr(params, self.name, value)
        return value


@dataclass
class GlitchParams:
    """Current glitch intensities.

    pixel_offset, color_split and wave_distortion are added on top of the
    environment's base intensities. The rest drive the CRT overlay directly.
    """
    pixel_offset: float = 0.0
    color_split: float = 0.0
    wave_distortion: float = 0.0
    scanline_offset: float = 0.0
    noise_amount: float = 0.2
    vignette: float = 0.8
    scanlines: float = 1.0
    pending: list = field(default_factory=list, repr=False)

    def _check(self, name: str):
        if name not in TUNABLE:
            raise ValueError(f"Unknown glitch parameter: {name}. "
                             f"Available: {', '.join(TUNABLE)}")

    def bump(self, name: str, amount: float) -> float:
        """Add amount to a parameter and return the new value."""
        self._check(name)
        value = getattr(self, name) + float(amount)
        setattr(self, name, value)
        return value

    def set(self, name: str, value: float):
        self._check(name)
        setattr(self, name, float(value))

    def schedule(self, name: str, at: float, amount: float | None = None,
                 floor: float = 0.0) -> ScheduledDecay:
        """Record a decay to apply once the clock passes `at`."""
        self._check(name)
        entry = ScheduledDecay(deadline=float(at), name=name, amount=amount, floor=floor)
        self.pending.append(entry)
        return entry

    def tick(self, now: float) -> int:
        """Apply every scheduled decay whose deadline is <= now, oldest first.

        Returns:
            Number of decays applied.
        """
        due = sorted((e for e in self.pending if e.deadline <= now),
                     key=lambda e: e.deadline)
        if not due:
            return 0
        self.pending = [e for e in self.pending if e.deadline > now]
        for entry in due:
            value = entry.apply(self)
            logger.debug("Decay %s -> %.3f", entry.name, value)
        return len(due)

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name != "pending"}


@dataclass
class Intensities:
    """Per-stage intensities for the three geometric pipeline stages."""
    pixel_offset: float = 0.0
    color_split: float = 0.0
    wave_distortion: float = 0.0

    def combined(self, params: GlitchParams) -> "Intensities":
        """These base intensities plus the interaction-driven parameters."""
        return Intensities(
            pixel_offset=self.pixel_offset + params.pixel_offset,
            color_split=self.color_split + params.color_split,
            wave_distortion=self.wave_distortion + params.wave_distortion,
        )
