"""Per-pixel rendering: cast, intersect, select the hit, compute the normal, shade.

Two implementations of the same pipeline live here:

    - render_reference(): the Python tracer. Loops over pixels, calls
      World.color_at() and writes each color to a pixel sink.
    - render_image(): a Taichi kernel running the pipeline for every pixel
      in parallel over the frozen scene uploaded by scene.manager. Each
      pixel is independent and writes only its own buffer slot.

Colors are stored unclamped in both cases; clamping happens at export.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.phongtrace.camera.pinhole import PinholeCamera, setup_camera
    >>> from src.phongtrace.core.integrator import (
    ...     get_image_numpy, render_image, setup_render_target
    ... )
    >>> from src.phongtrace.scene.manager import SceneManager
    >>> from src.phongtrace.scene.world import default_world
    >>>
    >>> SceneManager().load_world(default_world())
    >>> setup_camera(PinholeCamera())
    >>> setup_render_target(100, 100)
    >>> render_image()
    >>> image = get_image_numpy()
"""

from typing import TYPE_CHECKING, Protocol

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.phongtrace.camera.pinhole import get_ray
from src.phongtrace.core.color import Color
from src.phongtrace.core.ray import ray_at
from src.phongtrace.geometry.sphere import sphere_normal
from src.phongtrace.materials.phong import phong_lighting
from src.phongtrace.scene.manager import (
    intersect_scene,
    light_enabled,
    light_intensity,
    light_position,
    sphere_ambient,
    sphere_colors,
    sphere_diffuse,
    sphere_inverses,
    sphere_normal_matrices,
    sphere_shininess,
    sphere_specular,
)

if TYPE_CHECKING:
    from src.phongtrace.camera.pinhole import PinholeCamera
    from src.phongtrace.scene.world import World

# Type alias for 3D vectors
vec3 = tm.vec3


class PixelSink(Protocol):
    """Anything that accepts a color per pixel, such as preview.canvas.Canvas."""

    width: int
    height: int

    def write_color(self, x: int, y: int, color: Color) -> None: ...


# =============================================================================
# Reference (Python) Rendering
# =============================================================================


def render_reference(world: "World", camera: "PinholeCamera", sink: PixelSink) -> None:
    """Render a world pixel by pixel on the Python side.

    Args:
        world: The scene to render.
        camera: Camera generating one ray per pixel.
        sink: Receives write_color(x, y, color) for every pixel.

    Raises:
        NotInvertibleError: If a sphere's transform is singular.
    """
    width, height = sink.width, sink.height
    for y in range(height):
        for x in range(width):
            ray = camera.ray_for_pixel(x, y, width, height)
            sink.write_color(x, y, world.color_at(ray))


# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Color buffer indexed [x, y] with y = 0 at the top (preallocated to max size)
_color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target buffers.

    Sets the active image dimensions and clears the buffer.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions are not positive or exceed the maximum.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the color buffer to black."""
    _color_buffer.fill(0.0)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions as (width, height)."""
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Kernel-side Pipeline
# =============================================================================


@ti.func
def shade_pixel(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Run cast -> intersect -> hit -> normal -> shade for one pixel.

    Returns:
        The unclamped pixel color, or black on a miss.
    """
    ray = get_ray(pixel_i, pixel_j, width, height)
    index, t = intersect_scene(ray.origin, ray.direction)

    color = vec3(0.0)
    if index >= 0 and light_enabled[None] == 1:
        point = ray_at(ray, t)
        normalv = sphere_normal(point, sphere_inverses[index], sphere_normal_matrices[index])
        eyev = -ray.direction
        color = phong_lighting(
            sphere_colors[index],
            sphere_ambient[index],
            sphere_diffuse[index],
            sphere_specular[index],
            sphere_shininess[index],
            light_position[None],
            light_intensity[None],
            point,
            eyev,
            normalv,
        )

    return color


@ti.kernel
def _render_all(width: ti.i32, height: ti.i32):
    """Shade every pixel into the color buffer (outer loop is parallel)."""
    for i, j in ti.ndrange(width, height):
        _color_buffer[i, j] = shade_pixel(i, j, width, height)


@ti.kernel
def _render_single_pixel(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Shade one pixel. Used for testing and debugging."""
    return shade_pixel(pixel_i, pixel_j, width, height)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_image() -> None:
    """Render every pixel of the render target in parallel.

    The scene (scene.manager) and camera (camera.pinhole) fields must be set
    up first; they are only read during the kernel.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    _render_all(width, height)


def render_pixel(pixel_i: int, pixel_j: int) -> Color:
    """Render a single pixel.

    This is a Python-callable function for testing. For production rendering,
    use render_image() which processes all pixels in parallel.

    Args:
        pixel_i: Pixel x-coordinate (0 = left).
        pixel_j: Pixel y-coordinate (0 = top).

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    color = _render_single_pixel(pixel_i, pixel_j, width, height)

    return Color(float(color[0]), float(color[1]), float(color[2]))


def get_image_numpy() -> npt.NDArray[np.float32]:
    """Get the rendered image as an unclamped (height, width, 3) array.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()

    # Extract active region and transpose (width, height, 3) -> (height, width, 3)
    full_image = _color_buffer.to_numpy()
    image = np.transpose(full_image[:width, :height, :], (1, 0, 2))

    return np.ascontiguousarray(image, dtype=np.float32)
