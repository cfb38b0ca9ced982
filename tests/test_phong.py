"""Unit tests for the Phong material, point light and lighting model.

Tests cover:
- Material defaults and validation
- Lighting with the eye between light and surface, offset eye and light,
  eye in the reflection path and light behind the surface
- Kernel-side phong_lighting against the Python results
"""

import math

import pytest
import taichi as ti

from src.phongtrace.core.color import WHITE, Color
from src.phongtrace.core.tuples import Point, Vector, approx_equal
from src.phongtrace.materials.phong import Material, PointLight, lighting

HALF_ROOT2 = math.sqrt(2) / 2


@pytest.fixture
def material():
    return Material()


@pytest.fixture
def position():
    return Point(0, 0, 0)


class TestMaterial:
    """Tests for material construction."""

    def test_defaults(self, material):
        assert material.color == Color(1, 1, 1)
        assert material.ambient == 0.1
        assert material.diffuse == 0.9
        assert material.specular == 0.9
        assert material.shininess == 200.0

    def test_default_color_is_shared_white(self):
        assert Material().color is WHITE
        assert Material(ambient=0.5).color is WHITE

    def test_negative_coefficient_rejected(self):
        with pytest.raises(ValueError):
            Material(ambient=-0.1)
        with pytest.raises(ValueError):
            Material(diffuse=-1.0)
        with pytest.raises(ValueError):
            Material(specular=-0.5)

    def test_nonpositive_shininess_rejected(self):
        with pytest.raises(ValueError):
            Material(shininess=0.0)

    def test_equality(self):
        assert Material(ambient=0.2) == Material(ambient=0.2)
        assert Material(ambient=0.2) != Material(ambient=0.3)


class TestPointLight:
    """Tests for the point light."""

    def test_fields(self):
        light = PointLight(Point(0, 0, 0), Color(1, 1, 1))
        assert light.position == Point(0, 0, 0)
        assert light.intensity == Color(1, 1, 1)


class TestLighting:
    """Tests for the lighting function."""

    def test_eye_between_light_and_surface(self, material, position):
        eyev = Vector(0, 0, -1)
        normalv = Vector(0, 0, -1)
        light = PointLight(Point(0, 0, -10), Color(1, 1, 1))
        assert lighting(material, light, position, eyev, normalv) == Color(1.9, 1.9, 1.9)

    def test_eye_offset_45_degrees(self, material, position):
        eyev = Vector(0, HALF_ROOT2, -HALF_ROOT2)
        normalv = Vector(0, 0, -1)
        light = PointLight(Point(0, 0, -10), Color(1, 1, 1))
        assert lighting(material, light, position, eyev, normalv) == Color(1.0, 1.0, 1.0)

    def test_light_offset_45_degrees(self, material, position):
        eyev = Vector(0, 0, -1)
        normalv = Vector(0, 0, -1)
        light = PointLight(Point(0, 10, -10), Color(1, 1, 1))
        result = lighting(material, light, position, eyev, normalv)
        assert result == Color(0.7364, 0.7364, 0.7364)

    def test_eye_in_reflection_path(self, material, position):
        eyev = Vector(0, -HALF_ROOT2, -HALF_ROOT2)
        normalv = Vector(0, 0, -1)
        light = PointLight(Point(0, 10, -10), Color(1, 1, 1))
        result = lighting(material, light, position, eyev, normalv)
        assert result == Color(1.6364, 1.6364, 1.6364)

    def test_light_behind_surface(self, material, position):
        eyev = Vector(0, 0, -1)
        normalv = Vector(0, 0, -1)
        light = PointLight(Point(0, 0, 10), Color(1, 1, 1))
        assert lighting(material, light, position, eyev, normalv) == Color(0.1, 0.1, 0.1)

    def test_result_is_not_clamped(self, material, position):
        light = PointLight(Point(0, 0, -10), Color(1, 1, 1))
        result = lighting(material, light, position, Vector(0, 0, -1), Vector(0, 0, -1))
        assert result.red > 1.0

    def test_colored_light_and_surface(self, position):
        m = Material(color=Color(1.0, 0.5, 0.0), specular=0.0)
        light = PointLight(Point(0, 0, -10), Color(0.5, 1.0, 1.0))
        result = lighting(m, light, position, Vector(0, 0, -1), Vector(0, 0, -1))
        # ambient + diffuse on the effective color (0.5, 0.5, 0.0)
        assert result == Color(0.5, 0.5, 0.0)


class TestKernelLighting:
    """Tests for the Taichi-side phong_lighting."""

    @pytest.mark.parametrize(
        ("light_pos", "eyev", "expected"),
        [
            ((0.0, 0.0, -10.0), (0.0, 0.0, -1.0), 1.9),
            ((0.0, 0.0, -10.0), (0.0, HALF_ROOT2, -HALF_ROOT2), 1.0),
            ((0.0, 10.0, -10.0), (0.0, 0.0, -1.0), 0.7364),
            ((0.0, 10.0, -10.0), (0.0, -HALF_ROOT2, -HALF_ROOT2), 1.6364),
            ((0.0, 0.0, 10.0), (0.0, 0.0, -1.0), 0.1),
        ],
    )
    def test_matches_python(self, light_pos, eyev, expected):
        from src.phongtrace.materials.phong import phong_lighting, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())
        lx, ly, lz = light_pos
        ex, ey, ez = eyev

        @ti.kernel
        def test_kernel():
            result[None] = phong_lighting(
                vec3(1.0, 1.0, 1.0),
                0.1,
                0.9,
                0.9,
                200.0,
                vec3(lx, ly, lz),
                vec3(1.0, 1.0, 1.0),
                vec3(0.0, 0.0, 0.0),
                vec3(ex, ey, ez),
                vec3(0.0, 0.0, -1.0),
            )

        test_kernel()
        r = result[None]
        for channel in range(3):
            assert approx_equal(float(r[channel]), expected, 1e-3)
