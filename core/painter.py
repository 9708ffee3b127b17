"""
Glitchbloom — Plant Painter

Draws the plant's currently-grown segments onto a Canvas, plus the gradient
sky and dust motes that sit behind it. Pure draw pass: branch state is
only read, never written.
"""

from dataclasses import dataclass

import numpy as np

from core.canvas import Canvas
from core.plant import PlantSystem, lerp


@dataclass
class PlantStyle:
    """Colors and stroke settings for the plant. All values are tunable."""
    young_color: tuple = (180, 230, 220)  # depth 0, light cyan
    old_color: tuple = (100, 180, 255)    # depth == max_depth, deep teal
    base_width: float = 5.0
    tip_width: float = 1.5
    stroke_alpha: float = 180
    glow_radius: float = 8.0
    glow_alpha: float = 0.5

    bud_min_depth: int = 3                # Buds only on depth > 2
    bud_min_growth: float = 0.8
    bud_radius: float = 1.5
    bud_alpha: float = 120


@dataclass
class BackgroundStyle:
    top_color: tuple = (10, 15, 30)
    bottom_color: tuple = (30, 10, 40)
    dust_count: int = 100
    dust_color: tuple = (200, 220, 255)
    dust_size: tuple = (1.0, 2.0)
    dust_alpha: tuple = (5.0, 20.0)


def depth_color(depth: int, max_depth: int, style: PlantStyle) -> tuple:
    """Linear blend from the young color (depth 0) to the old color."""
    t = depth / max_depth
    return tuple(lerp(a, b, t) for a, b in zip(style.young_color, style.old_color))


def depth_width(depth: int, max_depth: int, style: PlantStyle) -> float:
    """Stroke width: wide at the trunk, thin at the tips."""
    return lerp(style.base_width, style.tip_width, depth / max_depth)


def draw_plant(canvas: Canvas, plant: PlantSystem, style: PlantStyle | None = None) -> int:
    """Paint every visible branch.

    Each branch is stroked from its start to its interpolated endpoint with
    depth-blended color and width over a glow halo. Deep, nearly complete
    branches also get a small bud at the tip.

    Returns:
        Number of branches drawn.
    """
    style = style or PlantStyle()
    drawn = 0
    for branch in plant.branches:
        growth = branch.growth
        if growth <= 0:
            continue

        tip = branch.current_end
        color = depth_color(branch.depth, plant.max_depth, style)
        width = depth_width(branch.depth, plant.max_depth, style)

        canvas.line(branch.start, tip, color, alpha=style.stroke_alpha, weight=width,
                    glow=style.glow_radius, glow_alpha=style.glow_alpha)

        if branch.depth >= style.bud_min_depth and growth > style.bud_min_growth:
            d = style.bud_radius * 2
            canvas.ellipse(tip, (d, d), color, alpha=style.bud_alpha, fill=True)
        drawn += 1
    return drawn


def paint_background(canvas: Canvas, rng: np.random.RandomState | None = None,
                     style: BackgroundStyle | None = None):
    """Vertical two-color gradient with faint dust specks on top."""
    style = style or BackgroundStyle()
    rng = rng if rng is not None else np.random.RandomState()
    h, w = canvas.height, canvas.width

    t = np.linspace(0.0, 1.0, h, dtype=np.float32)[:, np.newaxis]
    top = np.array(style.top_color, dtype=np.float32)
    bottom = np.array(style.bottom_color, dtype=np.float32)
    rows = top * (1.0 - t) + bottom * t
    canvas.pixels[:, :] = np.clip(rows, 0, 255).astype(np.uint8)[:, np.newaxis, :]

    for _ in range(style.dust_count):
        x = rng.uniform(0, w)
        y = rng.uniform(0, h)
        size = rng.uniform(*style.dust_size)
        alpha = rng.uniform(*style.dust_alpha)
        canvas.ellipse((x, y), (size, size), style.dust_color, alpha=alpha, fill=True)
