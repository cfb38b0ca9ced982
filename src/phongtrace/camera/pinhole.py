"""Pinhole camera that casts rays through a wall of pixels.

The camera sits at an eye point and looks down the +z axis at a square
"wall" of side wall_size centered on the z axis at z = wall_z. The image is
mapped onto the wall, and each pixel's ray runs from the eye through the
corresponding wall point:

    pixel_size = wall_size / max(width, height)
    world_x = -half_width + pixel_size * x
    world_y =  half_height - pixel_size * y

Pixel (0, 0) is the top-left corner of the image; y grows downward.

Rays are available both on the Python side (ray_for_pixel) and inside
Taichi kernels (get_ray after setup_camera).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.phongtrace.camera.pinhole import PinholeCamera, setup_camera
    >>>
    >>> camera = PinholeCamera(origin=(0.0, 0.0, -5.0), wall_z=10.0, wall_size=7.0)
    >>> setup_camera(camera)
    >>> ray = camera.ray_for_pixel(50, 50, 100, 100)
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from src.phongtrace.core.ray import Ray, TiRay, make_ray, vec3
from src.phongtrace.core.tuples import Point

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for the wall-projection pinhole camera.

    Attributes:
        origin: Eye position in world space (x, y, z).
        wall_z: z coordinate of the wall the image is projected onto.
        wall_size: Side length of the wall covered by the longer image axis.
    """

    origin: tuple[float, float, float] = (0.0, 0.0, -5.0)
    wall_z: float = 10.0
    wall_size: float = 7.0

    def __post_init__(self) -> None:
        if self.wall_size <= 0.0:
            raise ValueError(f"wall_size = {self.wall_size} must be positive.")
        if self.wall_z <= self.origin[2]:
            raise ValueError(
                f"wall_z = {self.wall_z} must be in front of the eye (z = {self.origin[2]})."
            )

    def pixel_size(self, width: int, height: int) -> float:
        """World-space size of one pixel on the wall."""
        return self.wall_size / max(width, height)

    def wall_point(self, x: int, y: int, width: int, height: int) -> Point:
        """The world-space point on the wall for pixel (x, y)."""
        size = self.pixel_size(width, height)
        half_width = size * width / 2.0
        half_height = size * height / 2.0
        return Point(-half_width + size * x, half_height - size * y, self.wall_z)

    def ray_for_pixel(self, x: int, y: int, width: int, height: int) -> Ray:
        """Build the normalized ray from the eye through pixel (x, y)."""
        eye = Point(*self.origin)
        direction = (self.wall_point(x, y, width, height) - eye).normalize()
        return Ray(eye, direction)


# =============================================================================
# Taichi Fields for Camera State (GPU-accessible)
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_wall_z = ti.field(dtype=ti.f32, shape=())
_wall_size = ti.field(dtype=ti.f32, shape=())


def setup_camera(camera: PinholeCamera) -> None:
    """Copy the camera configuration into Taichi fields.

    Must be called from Python (not from within a Taichi kernel) before
    rendering.
    """
    _camera_origin[None] = list(camera.origin)
    _wall_z[None] = camera.wall_z
    _wall_size[None] = camera.wall_size


# =============================================================================
# Ray Generation (Taichi-compatible, GPU-callable)
# =============================================================================


@ti.func
def get_ray(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> TiRay:
    """Generate the ray through pixel (pixel_i, pixel_j).

    Args:
        pixel_i: Pixel x-coordinate (0 = left).
        pixel_j: Pixel y-coordinate (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A TiRay from the eye with a normalized direction.
    """
    size = _wall_size[None] / ti.cast(ti.max(width, height), ti.f32)
    half_width = size * ti.cast(width, ti.f32) / 2.0
    half_height = size * ti.cast(height, ti.f32) / 2.0

    target = vec3(
        -half_width + size * ti.cast(pixel_i, ti.f32),
        half_height - size * ti.cast(pixel_j, ti.f32),
        _wall_z[None],
    )
    origin = _camera_origin[None]
    return make_ray(origin, tm.normalize(target - origin))


def get_camera_info() -> dict[str, float | tuple[float, float, float]]:
    """Get current camera state for debugging."""
    origin_vec = _camera_origin[None]
    return {
        "origin": (float(origin_vec[0]), float(origin_vec[1]), float(origin_vec[2])),
        "wall_z": float(_wall_z[None]),
        "wall_size": float(_wall_size[None]),
    }
