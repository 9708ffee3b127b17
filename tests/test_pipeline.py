"""
Tests for the post-processing pipeline: stage order, bypass, persistent
phase and frame counter.
"""

import numpy as np
import pytest

from core.params import GlitchParams, Intensities
from core.pipeline import Pipeline, STAGES
from effects.distortion import PHASE_STEP


def quiet_params():
    return GlitchParams(noise_amount=0.0, vignette=0.0, scanlines=0.0)


class TestPipeline:
    def test_all_zero_reproduces_input(self, test_frame):
        pipe = Pipeline(rng=np.random.RandomState(0))
        result = pipe.process(test_frame, Intensities(), quiet_params())
        assert np.array_equal(result, test_frame)

    def test_input_not_modified(self, test_frame):
        before = test_frame.copy()
        pipe = Pipeline(rng=np.random.RandomState(0))
        pipe.process(test_frame, Intensities(1.0, 1.0, 1.0), GlitchParams())
        assert np.array_equal(test_frame, before)

    def test_phase_advances_every_frame(self, test_frame):
        pipe = Pipeline()
        phases = []
        for _ in range(5):
            pipe.process(test_frame, Intensities(), quiet_params())
            phases.append(pipe.phase)
        assert phases == pytest.approx([PHASE_STEP * (k + 1) for k in range(5)])
        assert pipe.frame_index == 5

    def test_chain_order(self):
        pipe = Pipeline(rng=np.random.RandomState(0))
        chain = pipe.build_chain(Intensities(1.0, 1.0, 1.0), GlitchParams())
        assert [e["name"] for e in chain] == ["pixeloffset", "colorsplit", "wave", "crt"]
        assert tuple(e["name"] for e in chain) == STAGES

    def test_negative_or_zero_stages_bypassed(self):
        pipe = Pipeline(rng=np.random.RandomState(0))
        chain = pipe.build_chain(Intensities(0.0, -1.0, 0.5), GlitchParams())
        bypassed = {e["name"]: e.get("bypassed", False) for e in chain}
        assert bypassed == {"pixeloffset": True, "colorsplit": True,
                            "wave": False, "crt": False}

    def test_overlay_uses_params(self):
        pipe = Pipeline(rng=np.random.RandomState(0))
        params = GlitchParams(noise_amount=0.7, vignette=0.3, scanline_offset=2.0)
        crt = pipe.build_chain(Intensities(), params)[-1]["params"]
        assert crt["noise_amount"] == 0.7
        assert crt["vignette_strength"] == 0.3
        assert crt["scanline_offset"] == 2.0

    def test_only_colorsplit_active(self):
        frame = np.zeros((10, 40, 3), dtype=np.uint8)
        frame[:, 20] = 255
        pipe = Pipeline(rng=np.random.RandomState(0))
        result = pipe.process(frame, Intensities(0.0, 1.0, 0.0), quiet_params())
        assert tuple(result[5, 25]) == (0, 220, 255)

    def test_wave_pattern_drifts_between_frames(self, test_frame):
        pipe = Pipeline(rng=np.random.RandomState(0))
        a = pipe.process(test_frame, Intensities(0.0, 0.0, 2.0), quiet_params())
        for _ in range(40):
            b = pipe.process(test_frame, Intensities(0.0, 0.0, 2.0), quiet_params())
        assert not np.array_equal(a, b)

    def test_seeded_pipelines_match(self, test_frame):
        a = Pipeline(rng=np.random.RandomState(9))
        b = Pipeline(rng=np.random.RandomState(9))
        inten = Intensities(1.5, 2.0, 0.5)
        for _ in range(3):
            fa = a.process(test_frame, inten, GlitchParams())
            fb = b.process(test_frame, inten, GlitchParams())
        assert np.array_equal(fa, fb)
