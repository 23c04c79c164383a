#!/usr/bin/env python3
"""Render a scene to a PNG file.

Renders the built-in demo scene, or a scene described by a JSON file in the
format produced by ``Scene.to_dict()``.

Usage:
    python -m examples.render_scene [options]

Options:
    --width WIDTH       Image width in pixels (default: 1600)
    --height HEIGHT     Image height in pixels (default: 900)
    --fov FOV           Field of view in degrees (default: 70)
    --scene PATH        JSON scene description (overrides size and fov)
    --output OUTPUT     Output file path (default: render.png)
    --gamma GAMMA       Gamma encoding for the PNG (default: 1.0)
    --preview           Show the result in a Matplotlib window
    --cpu               Force the CPU backend
    --quiet             Suppress progress output

Example:
    python -m examples.render_scene --width 800 --height 450 --output demo.png
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a scene with the Whitted ray tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=1600,
        help="Image width in pixels (default: 1600)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=900,
        help="Image height in pixels (default: 900)",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=70.0,
        help="Field of view in degrees (default: 70)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene description (overrides --width/--height/--fov)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="render.png",
        help="Output file path (default: render.png)",
    )
    parser.add_argument(
        "--gamma",
        type=float,
        default=1.0,
        help="Gamma encoding for the PNG (default: 1.0)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the result in a Matplotlib window",
    )
    parser.add_argument(
        "--cpu",
        action="store_true",
        help="Force the CPU backend",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_scene(
    width: int = 1600,
    height: int = 900,
    fov: float = 70.0,
    scene_path: str | None = None,
    output_path: str = "render.png",
    gamma: float = 1.0,
    preview: bool = False,
    quiet: bool = False,
) -> Path:
    """Render a scene and save it to file.

    Args:
        width: Image width in pixels (ignored when scene_path is given).
        height: Image height in pixels (ignored when scene_path is given).
        fov: Field of view in degrees (ignored when scene_path is given).
        scene_path: Optional JSON scene description.
        output_path: Output file path (PNG).
        gamma: Gamma encoding applied when saving.
        preview: If True, show the image after rendering.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.whitted.core.renderer import render
    from src.whitted.preview.display import show_preview
    from src.whitted.preview.export import ImageSink
    from src.whitted.scene.demo import create_demo_scene
    from src.whitted.scene.manager import Scene

    if scene_path is not None:
        if not quiet:
            print(f"Loading scene from {scene_path}...")
        with open(scene_path, encoding="utf-8") as f:
            scene = Scene.from_dict(json.load(f))
    else:
        if not quiet:
            print(f"Creating demo scene ({width}x{height}, fov {fov})...")
        scene = create_demo_scene(width=width, height=height, fov=fov)

    if not quiet:
        print(
            f"Rendering {scene.width}x{scene.height} "
            f"({len(scene.elements)} elements, {len(scene.lights)} lights)..."
        )

    start_time = time.perf_counter()

    sink = ImageSink(scene.width, scene.height)
    render(scene, sink)

    render_ms = (time.perf_counter() - start_time) * 1000.0

    output_file = Path(output_path)
    sink.save_png(str(output_file), gamma=gamma)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Render time: {render_ms:.1f}ms")

    if preview:
        show_preview(sink.pixels, gamma=gamma)

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Use GPU if available, fall back to CPU
    if args.cpu:
        ti.init(arch=ti.cpu)
        if not args.quiet:
            print("Using CPU backend")
    else:
        try:
            ti.init(arch=ti.gpu)
            if not args.quiet:
                print("Using GPU backend")
        except Exception:
            ti.init(arch=ti.cpu)
            if not args.quiet:
                print("Using CPU backend")

    try:
        render_scene(
            width=args.width,
            height=args.height,
            fov=args.fov,
            scene_path=args.scene,
            output_path=args.output,
            gamma=args.gamma,
            preview=args.preview,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
