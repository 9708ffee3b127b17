"""
Glitchbloom — Effects Registry
Provides a uniform interface over the post-processing stages.
Every effect is a function: (frame: np.ndarray, **params) -> np.ndarray
"""

import inspect

import numpy as np

from effects.pixeloffset import pixel_offset
from effects.channelshift import color_split
from effects.distortion import wave_tiles
from effects.scanlines import scanlines
from effects.texture import grain, vignette, crt_overlay

# Master registry: name -> (function, default_params, description)
EFFECTS = {
    # === GLITCH ===
    "pixeloffset": {
        "fn": pixel_offset,
        "category": "glitch",
        "params": {"intensity": 1.0, "seed": None},
        "description": "Sparse horizontal tearing: pixels copy a neighbor up to 50 px ahead",
    },
    "colorsplit": {
        "fn": color_split,
        "category": "glitch",
        "params": {"intensity": 1.0},
        "description": "Additive cyan/green/violet copies offset sideways (chromatic fringing)",
    },

    # === DISTORTION ===
    "wave": {
        "fn": wave_tiles,
        "category": "distortion",
        "params": {"intensity": 1.0, "phase": 0.0, "tile_size": 8},
        "description": "Tiled ripple warp, pattern drifts as phase advances",
    },

    # === TEXTURE ===
    "scanlines": {
        "fn": scanlines,
        "category": "texture",
        "params": {"offset": 0.0, "opacity": 1.0, "spacing": 4},
        "description": "Pulsing 1 px CRT scan lines every 4 rows",
    },
    "grain": {
        "fn": grain,
        "category": "texture",
        "params": {"amount": 0.2, "seed": None},
        "description": "Blend random gray into a random subset of pixels",
    },
    "vignette": {
        "fn": vignette,
        "category": "texture",
        "params": {"strength": 0.8, "rings": 20, "step": 10},
        "description": "Concentric translucent black rings darkening the edges",
    },
    "crt": {
        "fn": crt_overlay,
        "category": "texture",
        "params": {
            "scanline_offset": 0.0, "scanline_opacity": 1.0,
            "noise_amount": 0.2, "vignette_strength": 0.8, "seed": None,
        },
        "description": "Scan lines + grain + vignette as one screen-space overlay",
    },
}

CATEGORIES = {
    "glitch": "Pixel-level corruption",
    "distortion": "Geometric warps",
    "texture": "Screen-space overlays",
}


def get_effect(name: str):
    """Get an effect by name. Returns (fn, default_params).

    Raises ValueError if effect doesn't exist.
    """
    if name not in EFFECTS:
        available = ", ".join(sorted(EFFECTS.keys()))
        raise ValueError(f"Unknown effect: {name}. Available: {available}")
    entry = EFFECTS[name]
    return entry["fn"], entry["params"].copy()


def list_effects(category: str = None) -> list[dict]:
    """List all available effects with descriptions.

    Args:
        category: Optional filter, only return effects in this category.
    """
    results = []
    for name, entry in EFFECTS.items():
        if category and entry.get("category") != category:
            continue
        results.append({
            "name": name,
            "description": entry["description"],
            "params": entry["params"],
            "category": entry.get("category", "other"),
        })
    return results


def list_categories() -> list[str]:
    """Return ordered list of category keys."""
    return list(CATEGORIES.keys())


def search_effects(query: str, max_query_len: int = 200) -> list[dict]:
    """Search effects by name or description substring."""
    if len(query) > max_query_len:
        raise ValueError(f"Search query too long (max {max_query_len} chars)")
    query_lower = query.lower()
    return [e for e in list_effects()
            if query_lower in e["name"] or query_lower in e["description"].lower()]


def apply_effect(frame, effect_name: str, frame_index: int = 0, **params):
    """Apply a named effect to a frame with given params.

    Special params:
        mix (0.0-1.0): Dry/wet blend. 1.0 = fully processed (default).
    """
    mix = float(params.pop("mix", 1.0))
    mix = max(0.0, min(1.0, mix))

    fn, defaults = get_effect(effect_name)
    if mix <= 0.0:
        return frame.copy()
    merged = {**defaults, **params}

    # Inject temporal context for effects that need it
    sig = inspect.signature(fn)
    if "frame_index" in sig.parameters:
        merged["frame_index"] = frame_index

    wet = fn(frame, **merged)

    if mix < 1.0:
        return _blend_mix(frame, wet, mix)
    return wet


def _blend_mix(original, wet, mix):
    """Linear dry/wet mix between original and wet frames. Returns uint8 RGB."""
    result = original.astype(np.float32) * (1.0 - mix) + wet.astype(np.float32) * mix
    return np.clip(result, 0, 255).astype(np.uint8)


def apply_chain(frame, effects_list: list[dict], frame_index: int = 0):
    """Apply a chain of effects sequentially.

    effects_list: [{"name": "wave", "params": {"intensity": 0.5}}, ...]
    An entry with "bypassed": True is skipped.
    """
    from core.safety import validate_chain_depth
    validate_chain_depth(effects_list)

    for effect in effects_list:
        if effect.get("bypassed", False):
            continue
        params = dict(effect.get("params", {}))
        frame = apply_effect(frame, effect["name"], frame_index=frame_index, **params)

    return frame
