#!/usr/bin/env python3
"""
Glitchbloom — Generative Plant Glitch Renderer
CLI entry point. Also importable as a library.

Usage:
    python glitchbloom.py render out/ --frames 300
    python glitchbloom.py render bloom.gif --frames 240 --weather rainy --seed 7
    python glitchbloom.py still final.png --frames 400 --max-depth 6
    python glitchbloom.py list-effects
    python glitchbloom.py info wave
"""

import sys
import os
import logging
import argparse

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from core.environment import WEATHER_STATES
from core.pipeline import STAGES, OVERLAY_PARTS
from core.render import SketchConfig, render_sequence
from core.safety import SafetyError
from effects import list_effects, search_effects, list_categories, EFFECTS, CATEGORIES

__version__ = "0.1.0"


def _config_from_args(args) -> SketchConfig:
    return SketchConfig(
        width=args.width,
        height=args.height,
        max_depth=args.max_depth,
        growth_rate=args.growth_rate,
        weather=args.weather,
        seed=args.seed,
    )


def _progress(i, total):
    if (i + 1) % 50 == 0 or i + 1 == total:
        print(f"  Frame {i + 1}/{total}")


def cmd_render(args):
    """Render an animation to a PNG sequence directory or a GIF."""
    config = _config_from_args(args)
    print(f"  Rendering: {config.width}x{config.height} @ {args.fps}fps, {args.frames} frames "
          f"(depth {config.max_depth}, {config.weather})")
    path = render_sequence(config, args.frames, args.output, fps=args.fps,
                           progress_callback=_progress)
    print(f"  Saved: {path}")


def cmd_still(args):
    """Run the sketch for N frames and save only the last one."""
    if not args.output.lower().endswith(".png"):
        print("Still output must be a .png file.", file=sys.stderr)
        sys.exit(1)
    config = _config_from_args(args)
    path = render_sequence(config, args.frames, args.output, fps=args.fps)
    print(f"  Saved still after {args.frames} frames: {path}")


def cmd_list_effects(args):
    """List all post-processing stages, grouped by category."""
    category_filter = getattr(args, "category", None)
    compact = getattr(args, "compact", False)

    total = 0
    for cat_key, cat_label in CATEGORIES.items():
        if category_filter and cat_key != category_filter:
            continue
        effects = list_effects(category=cat_key)
        if not effects:
            continue
        total += len(effects)
        print(f"\n  {cat_label} ({len(effects)})")
        print(f"  {'—' * 50}")
        for e in effects:
            print(f"    {e['name']:12s} — {e['description']}")
            if not compact:
                params_str = ", ".join(f"{k}={v}" for k, v in e["params"].items())
                print(f"    {'':12s}   Params: {params_str}")

    print(f"\n  Total: {total} effects")
    print(f"  Use 'glitchbloom info <effect>' for details.\n")


def _pipeline_role(name: str) -> str:
    """Where an effect sits in the per-frame chain."""
    if name in STAGES:
        return f"stage {STAGES.index(name) + 1} of {len(STAGES)}"
    if name in OVERLAY_PARTS:
        return "part of the 'crt' overlay stage"
    return "not used by the frame pipeline"


def cmd_info(args):
    """Show an effect's pipeline role, function and default parameters."""
    name = args.effect_name
    if name not in EFFECTS:
        matches = [e["name"] for e in search_effects(name)]
        if matches:
            print(f"Unknown effect: {name}. Did you mean: {', '.join(matches)}?")
        else:
            print(f"Unknown effect: {name}. Use 'glitchbloom list-effects' to see all.")
        return

    entry = EFFECTS[name]
    fn = entry["fn"]
    cat = entry.get("category", "other")
    print(f"\n  {name} ({CATEGORIES.get(cat, cat)})")
    print(f"  {entry['description']}")
    print(f"  Function: {fn.__module__}.{fn.__name__}")
    print(f"  Pipeline: {_pipeline_role(name)}")
    print(f"\n  Defaults:")
    for k, v in entry["params"].items():
        print(f"    {k:20s} = {v}")
    if "seed" in entry["params"]:
        print(f"\n  Inside a render, 'seed' is derived per frame from the sketch's --seed.")
    print()


def _add_sketch_args(p):
    p.add_argument("output", help="Directory (PNG sequence), .gif, or .png")
    p.add_argument("--frames", type=int, default=300, help="Number of frames to render")
    p.add_argument("--fps", type=int, default=30, help="Frame rate (clock + GIF timing)")
    p.add_argument("--width", type=int, default=640)
    p.add_argument("--height", type=int, default=480)
    p.add_argument("--max-depth", type=int, default=5, help="Branching depth (1-12)")
    p.add_argument("--growth-rate", type=float, default=0.02, help="Growth per frame (0-1)")
    p.add_argument("--weather", choices=WEATHER_STATES, default="sunny")
    p.add_argument("--seed", type=int, default=None, help="Random seed for a repeatable run")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="glitchbloom",
        description="Glitchbloom — generative plant with real-time glitch post-processing",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    # render
    p = sub.add_parser("render", help="Render an animation (PNG sequence or GIF)")
    _add_sketch_args(p)

    # still
    p = sub.add_parser("still", help="Render N frames and keep the last as a PNG")
    _add_sketch_args(p)

    # list-effects
    p = sub.add_parser("list-effects", help="List all post-processing effects")
    p.add_argument("--category", choices=list_categories(), help="Filter by category")
    p.add_argument("--compact", action="store_true", help="Compact view (names only)")

    # info
    p = sub.add_parser("info", help="Show detailed info about an effect")
    p.add_argument("effect_name", help="Effect name")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "render": cmd_render,
        "still": cmd_still,
        "list-effects": cmd_list_effects,
        "info": cmd_info,
    }

    if args.command in commands:
        try:
            commands[args.command](args)
        except SafetyError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except Exception:
            logging.exception(f"{args.command} failed")
            sys.exit(1)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
