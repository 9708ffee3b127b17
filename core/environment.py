"""
Glitchbloom — Environment System
Derives base glitch intensities from the local time of day and a simulated
weather state. Night and rain make the sketch glitchier.
"""

from datetime import datetime

from core.params import Intensities

WEATHER_STATES = ("sunny", "cloudy", "rainy")

# (pixel_offset, color_split) by time of day
DAY_INTENSITY = (0.5, 0.3)
NIGHT_INTENSITY = (1.5, 2.0)
# wave_distortion by weather
RAIN_WAVE = 2.0
DRY_WAVE = 0.5


def is_night(hour: int) -> bool:
    return hour < 6 or hour > 18


class EnvironmentSystem:
    """Time-of-day / weather intensity source.

    Args:
        weather: One of WEATHER_STATES.
        clock: Zero-argument callable returning a datetime. Defaults to
            datetime.now; tests pass a fixed clock.
    """

    def __init__(self, weather: str = "sunny", clock=None):
        self.weather = weather
        self.clock = clock or datetime.now
        self.time = self.clock()

    @property
    def weather(self) -> str:
        return self._weather

    @weather.setter
    def weather(self, value: str):
        if value not in WEATHER_STATES:
            raise ValueError(f"Unknown weather: {value}. Available: {', '.join(WEATHER_STATES)}")
        self._weather = value

    def update(self) -> Intensities:
        """Read the clock and return the base intensities for this frame."""
        self.time = self.clock()
        offset, split = NIGHT_INTENSITY if is_night(self.time.hour) else DAY_INTENSITY
        wave = RAIN_WAVE if self.weather == "rainy" else DRY_WAVE
        return Intensities(pixel_offset=offset, color_split=split, wave_distortion=wave)
