"""
Tests for core/safety.py preflight checks.
"""

import pytest

from core.safety import (
    SafetyError, MAX_TREE_DEPTH, MAX_CANVAS, MAX_FRAMES,
    validate_max_depth, validate_growth_rate, validate_canvas_size,
    validate_frame_count, validate_chain_depth, preflight_output,
)


class TestLimits:
    def test_max_depth_bounds(self):
        assert validate_max_depth(1) == 1
        assert validate_max_depth(MAX_TREE_DEPTH) == MAX_TREE_DEPTH
        with pytest.raises(SafetyError):
            validate_max_depth(MAX_TREE_DEPTH + 1)

    def test_max_depth_rejects_bool(self):
        with pytest.raises(SafetyError):
            validate_max_depth(True)

    def test_growth_rate_accepts_zero_and_large(self):
        assert validate_growth_rate(0) == 0.0
        assert validate_growth_rate(3) == 3.0

    def test_growth_rate_rejects_text(self):
        with pytest.raises(SafetyError):
            validate_growth_rate("fast")

    @pytest.mark.parametrize("w,h", [(15, 100), (100, MAX_CANVAS + 1), (64.0, 64)])
    def test_canvas_rejects(self, w, h):
        with pytest.raises(SafetyError):
            validate_canvas_size(w, h)

    def test_canvas_accepts(self):
        assert validate_canvas_size(640, 480) == (640, 480)

    def test_frame_count(self):
        assert validate_frame_count(1) == 1
        for bad in (0, -3, MAX_FRAMES + 1, 2.0):
            with pytest.raises(SafetyError):
                validate_frame_count(bad)

    def test_chain_depth(self):
        validate_chain_depth([{}] * 10)
        with pytest.raises(SafetyError):
            validate_chain_depth([{}] * 11)


class TestPreflightOutput:
    def test_gif(self, tmp_path):
        result = preflight_output(str(tmp_path / "a.GIF"))
        assert result["kind"] == "gif"

    def test_png(self, tmp_path):
        assert preflight_output(str(tmp_path / "a.png"))["kind"] == "png"

    def test_directory(self, tmp_path):
        result = preflight_output(str(tmp_path / "frames"))
        assert result["kind"] == "dir"
        assert result["path"].is_absolute()

    def test_existing_file_without_suffix(self, tmp_path):
        f = tmp_path / "frames"
        f.write_text("not a dir")
        with pytest.raises(SafetyError, match="not a directory"):
            preflight_output(str(f))

    def test_rejects_other_types(self, tmp_path):
        with pytest.raises(SafetyError, match="not allowed"):
            preflight_output(str(tmp_path / "a.mp4"))
