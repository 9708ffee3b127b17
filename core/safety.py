"""
Glitchbloom — Safety & Resource Guards
Centralized preflight checks run before a sketch is built or rendered.
Prevents runaway tree sizes, oversized canvases, and bad output targets.
"""

import math
from pathlib import Path

# --- Configurable Limits ---
MAX_TREE_DEPTH = 12        # 2**12 - 1 branches, growth is exponential in depth
MIN_CANVAS = 16            # Smallest width/height in pixels
MAX_CANVAS = 4096          # Largest width/height in pixels
MAX_FRAMES = 10_000        # Longest render from the CLI
MAX_CHAIN_DEPTH = 10       # Maximum effects in a chain
ALLOWED_EXTENSIONS = {".png", ".gif"}


class SafetyError(Exception):
    """Raised when a preflight check fails."""
    pass


def validate_max_depth(max_depth) -> int:
    """Check the tree depth bound.

    Raises:
        SafetyError: If max_depth is not an integer in [1, MAX_TREE_DEPTH].
    """
    if isinstance(max_depth, bool) or not isinstance(max_depth, int):
        raise SafetyError(f"max_depth must be an integer, got {max_depth!r}")
    if max_depth < 1:
        raise SafetyError(f"max_depth must be >= 1, got {max_depth}")
    if max_depth > MAX_TREE_DEPTH:
        raise SafetyError(
            f"max_depth {max_depth} exceeds {MAX_TREE_DEPTH}. "
            f"A tree that deep holds up to {2 ** max_depth - 1} branches."
        )
    return max_depth


def validate_growth_rate(growth_rate) -> float:
    """Check a per-tick growth increment.

    Raises:
        SafetyError: If growth_rate is negative, NaN or infinite.
    """
    try:
        rate = float(growth_rate)
    except (TypeError, ValueError):
        raise SafetyError(f"growth_rate must be a number, got {growth_rate!r}")
    if not math.isfinite(rate):
        raise SafetyError(f"NaN/Inf not allowed for growth_rate: {growth_rate}")
    if rate < 0:
        raise SafetyError(f"growth_rate must be >= 0, got {rate}")
    return rate


def validate_canvas_size(width, height) -> tuple[int, int]:
    """Check canvas dimensions.

    Raises:
        SafetyError: If either side falls outside [MIN_CANVAS, MAX_CANVAS].
    """
    for label, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise SafetyError(f"Canvas {label} must be an integer, got {value!r}")
        if value < MIN_CANVAS or value > MAX_CANVAS:
            raise SafetyError(
                f"Canvas {label} {value} outside allowed range "
                f"{MIN_CANVAS}-{MAX_CANVAS} px."
            )
    return width, height


def validate_frame_count(frames) -> int:
    """Check the number of frames requested for a render.

    Raises:
        SafetyError: If frames is not in [1, MAX_FRAMES].
    """
    if isinstance(frames, bool) or not isinstance(frames, int) or frames < 1:
        raise SafetyError(f"Frame count must be a positive integer, got {frames!r}")
    if frames > MAX_FRAMES:
        raise SafetyError(
            f"{frames} frames exceeds the {MAX_FRAMES} frame limit. "
            f"Render in several passes."
        )
    return frames


def validate_chain_depth(effects_list: list) -> None:
    """Check that effect chain isn't too deep.

    Raises:
        SafetyError: If chain exceeds MAX_CHAIN_DEPTH.
    """
    if len(effects_list) > MAX_CHAIN_DEPTH:
        raise SafetyError(
            f"Effect chain has {len(effects_list)} effects, max is {MAX_CHAIN_DEPTH}. "
            f"Split into multiple passes."
        )


def preflight_output(output_path: str) -> dict:
    """Run safety checks on a render target before any frame is produced.

    A path with an allowed suffix is a single-file target (GIF, or a PNG for
    still frames). A path without a suffix is a directory for a PNG sequence.

    Returns:
        dict with the resolved path and the output kind ("gif", "png" or "dir").

    Raises:
        SafetyError: If the suffix is not supported or the path is a file
            where a directory is expected.
    """
    path = Path(output_path)
    ext = path.suffix.lower()

    if ext:
        if ext not in ALLOWED_EXTENSIONS:
            raise SafetyError(
                f"Output type '{ext}' not allowed. "
                f"Supported: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
            )
        kind = ext.lstrip(".")
    else:
        if path.exists() and not path.is_dir():
            raise SafetyError(f"Output path exists and is not a directory: {path}")
        kind = "dir"

    return {
        "path": path.resolve(),
        "kind": kind,
    }
