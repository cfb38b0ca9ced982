"""World: a collection of spheres lit by a single point light.

The world is the scene-level collaborator of the tracer. Given a ray it
merges every object's intersections into one ascending collection, whose
hit() is the lowest non-negative t regardless of which sphere it belongs to.

There is no shadowing and no recursion: a hit is shaded with the Phong model
using the world's light only.

Example:
    >>> from src.phongtrace.core.ray import Ray
    >>> from src.phongtrace.core.tuples import Point, Vector
    >>> from src.phongtrace.scene.world import default_world
    >>> w = default_world()
    >>> [i.t for i in w.intersect_world(Ray(Point(0, 0, -5), Vector(0, 0, 1)))]
    [4.0, 4.5, 5.5, 6.0]
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.phongtrace.core.color import BLACK, WHITE, Color
from src.phongtrace.core.ray import Ray
from src.phongtrace.core.transformations import scaling
from src.phongtrace.core.tuples import Point
from src.phongtrace.geometry.sphere import Sphere
from src.phongtrace.materials.phong import Material, PointLight, lighting
from src.phongtrace.scene.intersection import Computations, Intersections, prepare_computations


@dataclass
class World:
    """Spheres plus an optional point light.

    Attributes:
        objects: The spheres in the scene.
        light: The single point light, or None for an unlit world.
    """

    objects: list[Sphere] = field(default_factory=list)
    light: PointLight | None = None

    def add(self, sphere: Sphere) -> Sphere:
        """Add a sphere and return it for further configuration."""
        self.objects.append(sphere)
        return sphere

    def contains(self, target: Sphere) -> bool:
        """Check whether an equivalent sphere (same transform and material) exists."""
        return any(obj.approx_eq(target) for obj in self.objects)

    def intersect_world(self, ray: Ray) -> Intersections:
        """Intersect a ray with every object, merged ascending by t."""
        result = Intersections()
        for obj in self.objects:
            result = result.merge(obj.intersect(ray))
        return result

    def shade_hit(self, comps: Computations) -> Color:
        """Shade precomputed hit state with the world's light."""
        if self.light is None:
            return BLACK
        return lighting(comps.object.material, self.light, comps.point, comps.eyev, comps.normalv)

    def color_at(self, ray: Ray) -> Color:
        """Trace one ray: intersect, select the hit, compute the normal and shade.

        Returns:
            The shaded color, or black when the ray hits nothing.
        """
        hit = self.intersect_world(ray).hit()
        if hit is None:
            return BLACK
        return self.shade_hit(prepare_computations(hit, ray))


def default_world() -> World:
    """Build the two-sphere test world.

    A light at (-10, 10, -10), an outer unit sphere with a green-yellow
    material, and an inner sphere scaled by 0.5.
    """
    light = PointLight(Point(-10.0, 10.0, -10.0), WHITE)
    outer = Sphere(
        material=Material(color=Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2),
    )
    inner = Sphere(scaling(0.5, 0.5, 0.5))
    return World(objects=[outer, inner], light=light)
