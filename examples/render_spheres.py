#!/usr/bin/env python3
"""Render one of the built-in sphere scenes.

This script demonstrates end-to-end rendering: it builds a scene, renders it
with the selected backend and saves the raster as PPM or PNG.

Usage:
    python -m examples.render_spheres [options]

Options:
    --scene {single,demo}        Scene to render (default: demo)
    --width WIDTH                Image width in pixels (default: 320)
    --height HEIGHT              Image height in pixels (default: 240)
    --backend {python,taichi}    Render backend (default: taichi)
    --output OUTPUT              Output file path, .ppm or .png (default: spheres.png)
    --tone-map {none,reinhard,exposure}
                                 Tone mapping for PNG output (default: none)
    --gamma GAMMA                Gamma for PNG output (default: 2.2)
    --quiet                      Suppress progress output

Example:
    python -m examples.render_spheres --scene single --backend python --output sphere.ppm
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a built-in sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        choices=("single", "demo"),
        default="demo",
        help="Scene to render (default: demo)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=320,
        help="Image width in pixels (default: 320)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=240,
        help="Image height in pixels (default: 240)",
    )
    parser.add_argument(
        "--backend",
        choices=("python", "taichi"),
        default="taichi",
        help="Render backend (default: taichi)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.png",
        help="Output file path, .ppm or .png (default: spheres.png)",
    )
    parser.add_argument(
        "--tone-map",
        choices=("none", "reinhard", "exposure"),
        default="none",
        help="Tone mapping for PNG output (default: none)",
    )
    parser.add_argument(
        "--gamma",
        type=float,
        default=2.2,
        help="Gamma for PNG output (default: 2.2)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_spheres(
    scene_name: str = "demo",
    width: int = 320,
    height: int = 240,
    backend: str = "taichi",
    output_path: str = "spheres.png",
    tone_map: str = "none",
    gamma: float = 2.2,
    quiet: bool = False,
) -> Path:
    """Render a built-in scene and save it to a file.

    Args:
        scene_name: "single" or "demo".
        width: Image width in pixels.
        height: Image height in pixels.
        backend: "python" or "taichi".
        output_path: Output file path (.ppm or .png).
        tone_map: Tone mapping for PNG output.
        gamma: Gamma for PNG output.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from raycore.config import RenderConfig
    from raycore.core.renderer import Renderer
    from raycore.scene.demo import (
        DemoSceneParams,
        create_demo_scene,
        create_single_sphere_scene,
    )

    config = RenderConfig(
        width=width,
        height=height,
        backend=backend,
        tone_map=tone_map,
        gamma=gamma,
    )

    if not quiet:
        print(f"Creating {scene_name} scene ({width}x{height})...")

    if scene_name == "single":
        scene, camera = create_single_sphere_scene()
    else:
        scene, camera = create_demo_scene(DemoSceneParams(aspect_ratio=config.aspect_ratio))

    renderer = Renderer(scene, camera, config)

    if not quiet:
        print(f"Rendering with the {backend} backend...")

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            progress_pct = (current / target) * 100 if target > 0 else 0
            print(f"\r  Progress: {current}/{target} rows ({progress_pct:.1f}%)", end="", flush=True)

    renderer.render(callback=progress_callback)

    if not quiet:
        print()  # Newline after progress

    output_file = Path(output_path)
    renderer.save_image(str(output_file))

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    if args.backend == "taichi":
        # Use GPU if available, fall back to CPU
        try:
            ti.init(arch=ti.gpu)
            if not args.quiet:
                print("Using GPU backend")
        except Exception:
            ti.init(arch=ti.cpu)
            if not args.quiet:
                print("Using CPU backend")

    try:
        render_spheres(
            scene_name=args.scene,
            width=args.width,
            height=args.height,
            backend=args.backend,
            output_path=args.output,
            tone_map=args.tone_map,
            gamma=args.gamma,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
