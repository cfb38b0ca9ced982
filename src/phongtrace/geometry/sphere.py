"""Unit sphere primitive with transform-based intersection and normals.

Every sphere is the unit sphere (radius 1, centered at the object-space
origin). Size, position and orientation come from its transform. To
intersect, the world-space ray is mapped into object space with the inverse
transform, where the quadratic for the unit sphere is solved:

    a = dot(d, d)
    b = 2 * dot(d, o - origin)
    c = dot(o - origin, o - origin) - 1
    t = (-b -/+ sqrt(b^2 - 4ac)) / 2a

Normals are computed in object space and mapped back to world space with
the inverse-transpose of the transform. Using the transform itself gives
wrong normals whenever the scaling is non-uniform.

The kernel-side helpers at the bottom perform the same computation on the
inverse matrices uploaded by scene.manager.

Example:
    >>> from src.phongtrace.core.ray import Ray
    >>> from src.phongtrace.core.transformations import scaling
    >>> from src.phongtrace.core.tuples import Point, Vector
    >>> from src.phongtrace.geometry.sphere import Sphere
    >>> s = Sphere(scaling(2, 2, 2))
    >>> [i.t for i in s.intersect(Ray(Point(0, 0, -5), Vector(0, 0, 1)))]
    [3.0, 7.0]
"""

import math

import taichi as ti
import taichi.math as tm

from src.phongtrace.core.matrix import Matrix
from src.phongtrace.core.ray import Ray
from src.phongtrace.core.tuples import Point, Tuple, Vector
from src.phongtrace.materials.phong import Material
from src.phongtrace.scene.intersection import Intersection, Intersections

# Type aliases for Taichi vectors and matrices
vec3 = tm.vec3
vec4 = tm.vec4
mat4 = tm.mat4

_ORIGIN = Point(0.0, 0.0, 0.0)


class Sphere:
    """A unit sphere with a transform and a material.

    The transform is set during scene construction, before any tracing.
    set_transform() is the only mutator; intersect() and normal_at() never
    change the sphere.

    Attributes:
        transform: Object-to-world transform (4x4, default identity).
        material: Phong material (default Material()).
    """

    def __init__(self, transform: Matrix | None = None, material: Material | None = None) -> None:
        self._transform = transform if transform is not None else Matrix.identity()
        self._inverse: Matrix | None = None
        self.material = material if material is not None else Material()

    @property
    def transform(self) -> Matrix:
        return self._transform

    def set_transform(self, transform: Matrix) -> None:
        """Replace the transform and drop the cached inverse."""
        self._transform = transform
        self._inverse = None

    @property
    def inverse_transform(self) -> Matrix:
        """The inverse of the transform, computed on first use.

        Raises:
            NotInvertibleError: If the transform is singular. A scene must
                never contain such a sphere.
        """
        if self._inverse is None:
            self._inverse = self._transform.inverse()
        return self._inverse

    @property
    def normal_transform(self) -> Matrix:
        """The inverse-transpose used to map normals to world space."""
        return self.inverse_transform.transpose()

    def approx_eq(self, other: "Sphere") -> bool:
        return self._transform.approx_eq(other._transform) and self.material.approx_eq(
            other.material
        )

    def __repr__(self) -> str:
        return f"Sphere(transform={self._transform!r}, material={self.material!r})"

    def intersect(self, ray: Ray) -> Intersections:
        """Intersect a world-space ray with this sphere.

        Args:
            ray: The ray in world space.

        Returns:
            Two intersections sorted by t (equal for a tangent ray), or an
            empty collection when the ray misses.

        Raises:
            NotInvertibleError: If the transform is singular.
        """
        local = ray.transform(self.inverse_transform)
        sphere_to_ray = local.origin - _ORIGIN

        a = local.direction.dot(local.direction)
        b = 2.0 * local.direction.dot(sphere_to_ray)
        c = sphere_to_ray.dot(sphere_to_ray) - 1.0

        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0:
            return Intersections()

        root = math.sqrt(discriminant)
        t1 = (-b - root) / (2.0 * a)
        t2 = (-b + root) / (2.0 * a)
        return Intersections(Intersection(t1, self), Intersection(t2, self))

    def normal_at(self, world_point: Tuple) -> Vector:
        """Compute the unit surface normal at a world-space point.

        Raises:
            NotInvertibleError: If the transform is singular.
        """
        object_point = self.inverse_transform.apply(world_point)
        object_normal = object_point - _ORIGIN
        world_normal = self.normal_transform.apply(object_normal)
        # The inverse-transpose of a translation leaks into w; drop it
        return Vector(world_normal.x, world_normal.y, world_normal.z).normalize()


# =============================================================================
# Kernel-side Sphere Functions
# =============================================================================


@ti.func
def hit_unit_sphere(origin: vec3, direction: vec3, inverse: mat4):
    """Intersect a world-space ray with a transformed unit sphere.

    Args:
        origin: Ray origin in world space.
        direction: Ray direction in world space.
        inverse: Inverse of the sphere's transform.

    Returns:
        A tuple (hit, t1, t2) where hit is 1 if the discriminant is
        non-negative and t1 <= t2 are the two roots.
    """
    o = inverse @ vec4(origin.x, origin.y, origin.z, 1.0)
    d = inverse @ vec4(direction.x, direction.y, direction.z, 0.0)
    local_origin = vec3(o.x, o.y, o.z)
    local_direction = vec3(d.x, d.y, d.z)

    a = tm.dot(local_direction, local_direction)
    b = 2.0 * tm.dot(local_direction, local_origin)
    c = tm.dot(local_origin, local_origin) - 1.0
    discriminant = b * b - 4.0 * a * c

    hit = 0
    t1 = 0.0
    t2 = 0.0
    if discriminant >= 0.0:
        root = ti.sqrt(discriminant)
        hit = 1
        t1 = (-b - root) / (2.0 * a)
        t2 = (-b + root) / (2.0 * a)

    return hit, t1, t2


@ti.func
def sphere_normal(world_point: vec3, inverse: mat4, normal_matrix: mat4) -> vec3:
    """Unit world-space normal of a transformed unit sphere.

    Args:
        world_point: Point on the sphere surface in world space.
        inverse: Inverse of the sphere's transform.
        normal_matrix: Inverse-transpose of the sphere's transform.
    """
    p = inverse @ vec4(world_point.x, world_point.y, world_point.z, 1.0)
    # Object normal is p - origin; w = 0 drops the translation part
    n = normal_matrix @ vec4(p.x, p.y, p.z, 0.0)
    return tm.normalize(vec3(n.x, n.y, n.z))
