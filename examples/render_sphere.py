#!/usr/bin/env python3
"""Render a single Phong-shaded sphere.

This script demonstrates end-to-end rendering: it builds a world with one
sphere and a point light, casts a ray through every pixel of a wall in front
of the camera, shades the hits, and saves the result.

Usage:
    python -m examples.render_sphere [options]

Options:
    --width WIDTH       Image width in pixels (default: 100)
    --height HEIGHT     Image height in pixels (default: 100)
    --output OUTPUT     Output file path, .ppm or .png (default: sphere.ppm)
    --backend BACKEND   "taichi" for the parallel kernel, "cpu" for the
                        reference tracer (default: taichi)
    --compare           Render with both backends and show them side by side
    --quiet             Suppress progress output

Example:
    python -m examples.render_sphere --width 200 --height 200 --output sphere.png
    python -m examples.render_sphere --compare
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
        description="Render a Phong-shaded sphere.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=100,
        help="Image width in pixels (default: 100)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=100,
        help="Image height in pixels (default: 100)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="sphere.ppm",
        help="Output file path, .ppm or .png (default: sphere.ppm)",
    )
    parser.add_argument(
        "--backend",
        choices=("taichi", "cpu"),
        default="taichi",
        help="Rendering backend (default: taichi)",
    )
    parser.add_argument(
        "--compare",
        action="store_true",
        help="Render with both backends and show the difference",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def build_world():
    """Build the demo world: one purple sphere lit from the upper left."""
    from src.phongtrace.core.color import Color
    from src.phongtrace.core.tuples import Point
    from src.phongtrace.geometry.sphere import Sphere
    from src.phongtrace.materials.phong import Material, PointLight
    from src.phongtrace.scene.world import World

    sphere = Sphere(material=Material(color=Color(1.0, 0.2, 1.0)))
    light = PointLight(Point(-10.0, 10.0, -10.0), Color(1.0, 1.0, 1.0))
    return World(objects=[sphere], light=light)


def render_sphere(
    width: int = 100,
    height: int = 100,
    output_path: str = "sphere.ppm",
    backend: str = "taichi",
    quiet: bool = False,
) -> Path:
    """Render the demo world and save to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        output_path: Output file path (.ppm or .png).
        backend: "taichi" or "cpu".
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.phongtrace.camera.pinhole import PinholeCamera, setup_camera
    from src.phongtrace.core.integrator import (
        get_image_numpy,
        render_image,
        render_reference,
        setup_render_target,
    )
    from src.phongtrace.preview.canvas import Canvas
    from src.phongtrace.preview.export import save_image
    from src.phongtrace.scene.manager import SceneManager

    if not quiet:
        print(f"Creating sphere scene ({width}x{height})...")

    world = build_world()
    camera = PinholeCamera()

    start_time = time.time()

    if backend == "taichi":
        scene = SceneManager()
        scene.load_world(world)
        setup_camera(camera)
        setup_render_target(width, height)

        if not quiet:
            print(f"Rendering {scene.get_sphere_count()} sphere(s) with the Taichi kernel...")
        render_image()
        canvas = Canvas.from_numpy(get_image_numpy())
    else:
        if not quiet:
            print("Rendering with the reference tracer...")
        canvas = Canvas(width, height)
        render_reference(world, camera, canvas)

    output_file = Path(output_path)
    save_image(canvas, output_file)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def compare_backends(width: int = 100, height: int = 100, quiet: bool = False) -> float:
    """Render the demo world with both backends and display the difference.

    Returns:
        RMSE between the Taichi image and the reference image.
    """
    from src.phongtrace.camera.pinhole import PinholeCamera, setup_camera
    from src.phongtrace.core.integrator import (
        get_image_numpy,
        render_image,
        render_reference,
        setup_render_target,
    )
    from src.phongtrace.preview.canvas import Canvas
    from src.phongtrace.preview.display import show_comparison
    from src.phongtrace.scene.manager import SceneManager

    world = build_world()
    camera = PinholeCamera()

    scene = SceneManager()
    scene.load_world(world)
    setup_camera(camera)
    setup_render_target(width, height)
    render_image()
    kernel_image = get_image_numpy()

    reference = Canvas(width, height)
    render_reference(world, camera, reference)

    rmse = show_comparison(
        kernel_image,
        reference.to_numpy(),
        labels=("Taichi kernel", "Reference tracer"),
    )
    if not quiet:
        print(f"RMSE between backends: {rmse:.6f}")
    return rmse


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Initialize Taichi
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
        if args.compare:
            compare_backends(width=args.width, height=args.height, quiet=args.quiet)
            return 0
        render_sphere(
            width=args.width,
            height=args.height,
            output_path=args.output,
            backend=args.backend,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
