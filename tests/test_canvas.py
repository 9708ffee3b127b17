"""
Tests for the Canvas drawing surface and the plant painter.
"""

import numpy as np
import pytest

from core.canvas import Canvas
from core.painter import (
    PlantStyle, BackgroundStyle, depth_color, depth_width, draw_plant, paint_background,
)
from core.plant import PlantSystem


class TestCanvas:
    def test_initial_fill(self):
        canvas = Canvas(32, 16, background=(10, 20, 30))
        assert canvas.shape == (16, 32, 3)
        assert tuple(canvas.pixels[5, 5]) == (10, 20, 30)

    def test_clear_with_color(self):
        canvas = Canvas(8, 8)
        canvas.clear((1, 2, 3))
        assert np.all(canvas.pixels == np.array([1, 2, 3], dtype=np.uint8))

    def test_snapshot_is_independent(self):
        canvas = Canvas(8, 8)
        snap = canvas.snapshot()
        canvas.clear((255, 255, 255))
        assert snap.max() == 0

    def test_load_rejects_wrong_shape(self):
        canvas = Canvas(8, 8)
        with pytest.raises(ValueError):
            canvas.load(np.zeros((4, 4, 3), dtype=np.uint8))

    def test_from_frame_copies(self, test_frame):
        canvas = Canvas.from_frame(test_frame)
        canvas.clear()
        assert test_frame.max() > 0

    def test_line_draws_color(self):
        canvas = Canvas(40, 40)
        canvas.line((5, 20), (35, 20), (255, 0, 0), alpha=255, weight=3)
        assert canvas.pixels[20, 20, 0] > 200
        assert canvas.pixels[20, 20, 1] == 0
        assert canvas.pixels[5, 20].max() == 0

    def test_translucent_line(self):
        canvas = Canvas(40, 40)
        canvas.line((5, 20), (35, 20), (200, 200, 200), alpha=100, weight=3)
        assert 0 < canvas.pixels[20, 20, 0] < 100

    def test_zero_alpha_noop(self):
        canvas = Canvas(20, 20)
        canvas.line((0, 0), (19, 19), (255, 255, 255), alpha=0)
        canvas.ellipse((10, 10), (8, 8), (255, 255, 255), alpha=0)
        assert canvas.pixels.max() == 0

    def test_glow_spreads_beyond_stroke(self):
        plain = Canvas(60, 60)
        plain.line((10, 30), (50, 30), (255, 255, 255), weight=1)
        glowing = Canvas(60, 60)
        glowing.line((10, 30), (50, 30), (255, 255, 255), weight=1, glow=8.0)
        assert plain.pixels[36, 30].max() == 0
        assert glowing.pixels[36, 30].max() > 0

    def test_filled_ellipse(self):
        canvas = Canvas(30, 30)
        canvas.ellipse((15, 15), (10, 10), (0, 255, 0), alpha=255)
        assert canvas.pixels[15, 15, 1] == 255
        assert canvas.pixels[2, 2].max() == 0

    def test_offscreen_shapes_are_clipped(self):
        canvas = Canvas(20, 20)
        canvas.ellipse((-100, -100), (10, 10), (255, 255, 255))
        canvas.line((-50, 5), (-10, 5), (255, 255, 255))
        assert canvas.pixels.max() == 0
        canvas.ellipse((0, 0), (12, 12), (255, 255, 255))
        assert canvas.pixels[1, 1].max() > 0


class TestDepthStyle:
    def test_color_endpoints(self):
        style = PlantStyle()
        assert depth_color(0, 5, style) == pytest.approx(style.young_color)
        assert depth_color(5, 5, style) == pytest.approx(style.old_color)

    def test_width_decreases(self):
        style = PlantStyle()
        widths = [depth_width(d, 5, style) for d in range(6)]
        assert widths[0] == pytest.approx(5.0)
        assert widths[-1] == pytest.approx(1.5)
        assert all(a > b for a, b in zip(widths, widths[1:]))


class TestDrawPlant:
    def test_empty_plant_draws_nothing(self):
        canvas = Canvas(64, 64)
        plant = PlantSystem()
        assert draw_plant(canvas, plant) == 0
        assert canvas.pixels.max() == 0

    def test_ungrown_branch_not_drawn(self):
        canvas = Canvas(64, 64)
        plant = PlantSystem(origin=(32, 63))
        plant.spawn_root(32, 63)
        assert draw_plant(canvas, plant) == 0
        assert canvas.pixels.max() == 0

    def test_draws_only_grown_part(self):
        canvas = Canvas(64, 200)
        plant = PlantSystem(origin=(32, 199))
        plant.advance(0.5)
        assert draw_plant(canvas, plant) == 1
        # Root points up 100 px; half grown reaches y=149
        assert canvas.pixels[170, 32].max() > 0
        assert canvas.pixels[120, 32].max() == 0

    def test_buds_on_deep_branches(self):
        style = PlantStyle(stroke_alpha=0, glow_alpha=0, bud_alpha=255)
        plant = PlantSystem(max_depth=5, growth_rate=1.0, origin=(300, 599),
                            rng=np.random.RandomState(1))
        for _ in range(5):
            plant.advance()
        canvas = Canvas(600, 600)
        draw_plant(canvas, plant, style)
        deep = [b for b in plant.branches if b.depth >= 3]
        assert deep
        x, y = deep[0].current_end
        assert canvas.pixels[int(round(y)), int(round(x))].max() > 0

    def test_no_buds_on_shallow_branches(self):
        style = PlantStyle(stroke_alpha=0, glow_alpha=0, bud_alpha=255)
        plant = PlantSystem(max_depth=5, growth_rate=1.0, origin=(200, 399))
        plant.advance()
        canvas = Canvas(400, 400)
        draw_plant(canvas, plant, style)
        assert canvas.pixels.max() == 0


class TestBackground:
    def test_gradient_endpoints(self):
        canvas = Canvas(20, 50)
        paint_background(canvas, np.random.RandomState(0), BackgroundStyle(dust_count=0))
        assert tuple(canvas.pixels[0, 0]) == (10, 15, 30)
        assert tuple(canvas.pixels[-1, 0]) == (30, 10, 40)

    def test_rows_uniform_without_dust(self):
        canvas = Canvas(20, 50)
        paint_background(canvas, style=BackgroundStyle(dust_count=0))
        assert np.all(canvas.pixels == canvas.pixels[:, :1])

    def test_dust_is_faint(self):
        canvas = Canvas(64, 64)
        paint_background(canvas, np.random.RandomState(3))
        bare = Canvas(64, 64)
        paint_background(bare, style=BackgroundStyle(dust_count=0))
        diff = canvas.pixels.astype(int) - bare.pixels.astype(int)
        assert diff.min() >= 0
        assert diff.max() < 40
