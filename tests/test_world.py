"""Unit tests for the World: aggregation, shading and per-ray color.

Tests cover:
- The default two-sphere world
- Merged, sorted intersections across objects
- shade_hit from outside and from inside a sphere
- color_at for misses, hits and hits on the inner sphere
- The reference renderer writing into a canvas
"""

import dataclasses
import math

from src.phongtrace.core.color import BLACK, Color
from src.phongtrace.core.matrix import Matrix
from src.phongtrace.core.ray import Ray
from src.phongtrace.core.transformations import scaling
from src.phongtrace.core.tuples import Point, Vector
from src.phongtrace.geometry.sphere import Sphere
from src.phongtrace.materials.phong import Material, PointLight
from src.phongtrace.scene.intersection import Intersection, prepare_computations
from src.phongtrace.scene.world import World


class TestWorldConstruction:
    """Tests for world setup."""

    def test_empty_world(self):
        w = World()
        assert w.objects == []
        assert w.light is None

    def test_default_world(self, default_world):
        light = PointLight(Point(-10, 10, -10), Color(1, 1, 1))
        s1 = Sphere(material=Material(color=Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2))
        s2 = Sphere(scaling(0.5, 0.5, 0.5))
        assert default_world.light == light
        assert default_world.contains(s1)
        assert default_world.contains(s2)

    def test_default_world_lists_outer_sphere_first(self, default_world):
        outer, inner = default_world.objects
        assert outer.transform == Matrix.identity()
        assert inner.transform == scaling(0.5, 0.5, 0.5)

    def test_object_order_does_not_change_color(self, default_world):
        reversed_world = World(objects=default_world.objects[::-1], light=default_world.light)
        for ray in (
            Ray(Point(0, 0, -5), Vector(0, 0, 1)),
            Ray(Point(0, 0, 0.75), Vector(0, 0, -1)),
            Ray(Point(0.3, -0.2, -5), Vector(0, 0.05, 1)),
        ):
            assert reversed_world.color_at(ray) == default_world.color_at(ray)

    def test_add_returns_sphere(self):
        w = World()
        s = w.add(Sphere())
        assert w.objects == [s]


class TestWorldIntersection:
    """Tests for intersect_world."""

    def test_intersect_default_world(self, default_world):
        r = Ray(Point(0, 0, -5), Vector(0, 0, 1))
        xs = default_world.intersect_world(r)
        assert len(xs) == 4
        assert [i.t for i in xs] == [4.0, 4.5, 5.5, 6.0]

    def test_empty_world_has_no_intersections(self):
        r = Ray(Point(0, 0, -5), Vector(0, 0, 1))
        assert len(World().intersect_world(r)) == 0


class TestShading:
    """Tests for shade_hit and color_at."""

    def test_shade_intersection(self, default_world):
        r = Ray(Point(0, 0, -5), Vector(0, 0, 1))
        shape = default_world.objects[0]
        comps = prepare_computations(Intersection(4, shape), r)
        assert default_world.shade_hit(comps) == Color(0.38066, 0.47583, 0.2855)

    def test_shade_intersection_from_inside(self, default_world):
        default_world.light = PointLight(Point(0, 0.25, 0), Color(1, 1, 1))
        r = Ray(Point(0, 0, 0), Vector(0, 0, 1))
        shape = default_world.objects[1]
        comps = prepare_computations(Intersection(0.5, shape), r)
        # The outward normal faces away from the light: ambient only
        assert default_world.shade_hit(comps) == Color(0.1, 0.1, 0.1)

    def test_shade_without_light_is_black(self, default_world):
        default_world.light = None
        r = Ray(Point(0, 0, -5), Vector(0, 0, 1))
        comps = prepare_computations(Intersection(4, default_world.objects[0]), r)
        assert default_world.shade_hit(comps) == BLACK

    def test_color_when_ray_misses(self, default_world):
        r = Ray(Point(0, 0, -5), Vector(0, 1, 0))
        assert default_world.color_at(r) == Color(0, 0, 0)

    def test_color_when_ray_hits(self, default_world):
        r = Ray(Point(0, 0, -5), Vector(0, 0, 1))
        assert default_world.color_at(r) == Color(0.38066, 0.47583, 0.2855)

    def test_color_with_hit_on_inner_sphere(self, default_world):
        outer, inner = default_world.objects
        outer.material = dataclasses.replace(outer.material, ambient=1.0)
        inner.material = dataclasses.replace(inner.material, ambient=1.0)
        r = Ray(Point(0, 0, 0.75), Vector(0, 0, -1))
        assert default_world.color_at(r) == inner.material.color


class TestReferenceRender:
    """Tests for render_reference with a canvas sink."""

    def test_center_pixel_hits_sphere(self):
        from src.phongtrace.camera.pinhole import PinholeCamera
        from src.phongtrace.core.integrator import render_reference
        from src.phongtrace.preview.canvas import Canvas

        world = World(
            objects=[Sphere(material=Material(color=Color(1, 0.2, 1)))],
            light=PointLight(Point(-10, 10, -10), Color(1, 1, 1)),
        )
        canvas = Canvas(21, 21)
        render_reference(world, PinholeCamera(), canvas)

        center = canvas.pixel_at(10, 10)
        corner = canvas.pixel_at(0, 0)
        assert center.red > 0.1
        assert corner == BLACK

    def test_every_pixel_matches_color_at(self, default_world):
        from src.phongtrace.camera.pinhole import PinholeCamera
        from src.phongtrace.core.integrator import render_reference
        from src.phongtrace.preview.canvas import Canvas

        camera = PinholeCamera()
        canvas = Canvas(6, 4)
        render_reference(default_world, camera, canvas)

        for y in range(4):
            for x in range(6):
                expected = default_world.color_at(camera.ray_for_pixel(x, y, 6, 4))
                assert canvas.pixel_at(x, y) == expected

    def test_upper_left_light_brightens_upper_left(self):
        from src.phongtrace.camera.pinhole import PinholeCamera
        from src.phongtrace.core.integrator import render_reference
        from src.phongtrace.preview.canvas import Canvas

        world = World(
            objects=[Sphere()],
            light=PointLight(Point(-10, 10, -10), Color(1, 1, 1)),
        )
        canvas = Canvas(41, 41)
        render_reference(world, PinholeCamera(), canvas)

        # Sample symmetric points on the sphere's silhouette interior
        offset = int(round(math.sqrt(2) * 4))
        upper_left = canvas.pixel_at(20 - offset, 20 - offset)
        lower_right = canvas.pixel_at(20 + offset, 20 + offset)
        assert upper_left.red > lower_right.red
