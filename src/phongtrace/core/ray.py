"""Ray data structures for the reference tracer and the Taichi kernels.

The Ray class is an immutable origin/direction pair used by the Python-side
tracer. Transforming a ray applies a matrix to both members and returns a new
Ray; the original is never mutated.

TiRay and the @ti.func helpers below are the kernel-side counterparts used
by the parallel renderer in core.integrator.

Example:
    >>> from src.phongtrace.core.ray import Ray
    >>> from src.phongtrace.core.tuples import Point, Vector
    >>> r = Ray(Point(2.0, 3.0, 4.0), Vector(1.0, 0.0, 0.0))
    >>> r.position(2.5)
    Point(x=4.5, y=3.0, z=4.0)
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from src.phongtrace.core.matrix import Matrix
from src.phongtrace.core.tuples import Point, Tuple, Vector

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of travel. Not required to be unit length;
            intersection t values are measured in multiples of it.
    """

    origin: Point
    direction: Vector

    def position(self, t: float) -> Tuple:
        """Compute the point origin + direction * t."""
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix) -> "Ray":
        """Apply a 4x4 matrix to origin and direction, returning a new Ray."""
        return Ray(matrix.apply(self.origin), matrix.apply(self.direction))


# =============================================================================
# Kernel-side Ray
# =============================================================================


@ti.dataclass
class TiRay:
    """A ray inside Taichi kernels.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3).
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: TiRay, t: ti.f32) -> vec3:
    """Compute the point ray.origin + t * ray.direction."""
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> TiRay:
    """Create a kernel ray from origin and direction."""
    return TiRay(origin=origin, direction=direction)


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Reflect an incident vector about a normal: v - n * 2 * dot(v, n)."""
    return incident - 2.0 * tm.dot(incident, normal) * normal
