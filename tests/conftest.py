"""
Conftest: shared fixtures for all Glitchbloom test modules.

1. Project root on sys.path so `core` and `effects` import from a checkout
2. Synthetic test frames (gradient, not blank)
3. Fixed clock for the environment system
"""

import os
import sys
from datetime import datetime

import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def _make_test_frame(width=64, height=48):
    """Generate a synthetic test frame (gradient + bright center block)."""
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    frame[:, :, 0] = np.linspace(0, 255, width, dtype=np.uint8)  # R gradient
    frame[:, :, 1] = np.linspace(0, 255, height, dtype=np.uint8)[:, np.newaxis]  # G gradient
    frame[:, :, 2] = 128
    frame[height // 4:3 * height // 4, width // 4:3 * width // 4] = 200
    return frame


@pytest.fixture
def test_frame():
    return _make_test_frame()


@pytest.fixture
def make_frame():
    return _make_test_frame


@pytest.fixture
def noon_clock():
    return lambda: datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture
def midnight_clock():
    return lambda: datetime(2024, 6, 1, 23, 30, 0)
