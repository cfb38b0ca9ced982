"""Unit tests for transformation factories and composition order."""

import math

import pytest

from src.phongtrace.core.matrix import Matrix
from src.phongtrace.core.transformations import (
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
)
from src.phongtrace.core.tuples import Point, Vector

HALF_ROOT2 = math.sqrt(2) / 2


class TestTranslation:
    """Tests for translation."""

    def test_moves_point(self):
        assert translation(5, -3, 2) @ Point(-3, 4, 5) == Point(2, 1, 7)

    def test_inverse_moves_back(self):
        assert translation(5, -3, 2).inverse() @ Point(-3, 4, 5) == Point(-8, 7, 3)

    def test_does_not_affect_vectors(self):
        v = Vector(-3, 4, 5)
        assert translation(5, -3, 2) @ v == v


class TestScaling:
    """Tests for scaling."""

    def test_scales_point(self):
        assert scaling(2, 3, 4) @ Point(-4, 6, 8) == Point(-8, 18, 32)

    def test_scales_vector(self):
        assert scaling(2, 3, 4) @ Vector(-4, 6, 8) == Vector(-8, 18, 32)

    def test_inverse_shrinks(self):
        assert scaling(2, 3, 4).inverse() @ Vector(-4, 6, 8) == Vector(-2, 2, 2)

    def test_negative_scale_reflects(self):
        assert scaling(-1, 1, 1) @ Point(2, 3, 4) == Point(-2, 3, 4)


class TestRotation:
    """Tests for the three axis rotations."""

    def test_rotation_x(self):
        p = Point(0, 1, 0)
        assert rotation_x(math.pi / 4) @ p == Point(0, HALF_ROOT2, HALF_ROOT2)
        assert rotation_x(math.pi / 2) @ p == Point(0, 0, 1)

    def test_rotation_x_inverse_goes_opposite_way(self):
        p = Point(0, 1, 0)
        assert rotation_x(math.pi / 4).inverse() @ p == Point(0, HALF_ROOT2, -HALF_ROOT2)

    def test_rotation_y(self):
        p = Point(0, 0, 1)
        assert rotation_y(math.pi / 4) @ p == Point(HALF_ROOT2, 0, HALF_ROOT2)
        assert rotation_y(math.pi / 2) @ p == Point(1, 0, 0)

    def test_rotation_z(self):
        p = Point(0, 1, 0)
        assert rotation_z(math.pi / 4) @ p == Point(-HALF_ROOT2, HALF_ROOT2, 0)
        assert rotation_z(math.pi / 2) @ p == Point(-1, 0, 0)


class TestShearing:
    """Tests for shearing."""

    @pytest.mark.parametrize(
        ("params", "expected"),
        [
            ((1, 0, 0, 0, 0, 0), Point(5, 3, 4)),
            ((0, 1, 0, 0, 0, 0), Point(6, 3, 4)),
            ((0, 0, 1, 0, 0, 0), Point(2, 5, 4)),
            ((0, 0, 0, 1, 0, 0), Point(2, 7, 4)),
            ((0, 0, 0, 0, 1, 0), Point(2, 3, 6)),
            ((0, 0, 0, 0, 0, 1), Point(2, 3, 7)),
        ],
    )
    def test_shearing(self, params, expected):
        assert shearing(*params) @ Point(2, 3, 4) == expected


class TestComposition:
    """Tests for chaining transformations."""

    def test_individual_in_sequence(self):
        p = Point(1, 0, 1)
        a = rotation_x(math.pi / 2)
        b = scaling(5, 5, 5)
        c = translation(10, 5, 7)

        p2 = a @ p
        assert p2 == Point(1, -1, 0)
        p3 = b @ p2
        assert p3 == Point(5, -5, 0)
        p4 = c @ p3
        assert p4 == Point(15, 0, 7)

    def test_chained_applies_in_reverse_order(self):
        p = Point(1, 0, 1)
        t = translation(10, 5, 7) @ scaling(5, 5, 5) @ rotation_x(math.pi / 2)
        assert t @ p == Point(15, 0, 7)

    def test_order_matters(self):
        p = Point(1, 0, 1)
        wrong = rotation_x(math.pi / 2) @ scaling(5, 5, 5) @ translation(10, 5, 7)
        assert wrong @ p != Point(15, 0, 7)

    def test_fluent_builders_apply_in_call_order(self):
        p = Point(1, 0, 1)
        t = Matrix.identity().rotate_x(math.pi / 2).scale(5, 5, 5).translate(10, 5, 7)
        assert t @ p == Point(15, 0, 7)
        assert t == translation(10, 5, 7) @ scaling(5, 5, 5) @ rotation_x(math.pi / 2)

    def test_fluent_shear_and_rotate(self):
        expected = rotation_z(0.3) @ rotation_y(0.2) @ shearing(1, 0, 0, 0, 0, 1)
        t = Matrix.identity().shear(1, 0, 0, 0, 0, 1).rotate_y(0.2).rotate_z(0.3)
        assert t == expected
