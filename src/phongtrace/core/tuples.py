"""Homogeneous-coordinate tuples: points and vectors.

A tuple carries four components (x, y, z, w). The w component distinguishes
positions (w = 1) from directions (w = 0), which makes translation affect
points but not vectors when a 4x4 matrix is applied.

Arithmetic keeps track of that distinction: the type of a result is derived
from its w component, so subtracting two points yields a Vector, adding a
vector to a point yields a Point, and so on.

Example:
    >>> from src.phongtrace.core.tuples import Point, Vector
    >>> p = Point(3.0, 2.0, 1.0)
    >>> v = Vector(5.0, 6.0, 7.0)
    >>> p - v
    Point(x=-2.0, y=-4.0, z=-6.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Absolute tolerance for all floating-point equality and zero tests
EPSILON = 1e-5


def approx_equal(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """Compare two floats within an absolute tolerance."""
    return abs(a - b) < epsilon


def make_tuple(x: float, y: float, z: float, w: float) -> Tuple:
    """Build the most specific tuple type for the given components.

    Returns a Point when w is 1, a Vector when w is 0 (both within
    EPSILON), and a plain Tuple otherwise.
    """
    if approx_equal(w, 1.0):
        return Point(x, y, z)
    if approx_equal(w, 0.0):
        return Vector(x, y, z)
    return Tuple(x, y, z, w)


@dataclass(frozen=True, eq=False)
class Tuple:
    """A 4-component homogeneous coordinate.

    Attributes:
        x: First component.
        y: Second component.
        z: Third component.
        w: Homogeneous component (1 for points, 0 for vectors).
    """

    x: float
    y: float
    z: float
    w: float

    @classmethod
    def zero(cls) -> Tuple:
        return Tuple(0.0, 0.0, 0.0, 0.0)

    def at(self, index: int) -> float:
        """Get a component by index (0 = x, ..., 3 = w)."""
        return self.as_tuple()[index]

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.z, self.w)

    def is_point(self) -> bool:
        return approx_equal(self.w, 1.0)

    def is_vector(self) -> bool:
        return approx_equal(self.w, 0.0)

    def approx_eq(self, other: Tuple) -> bool:
        """Component-wise comparison within EPSILON."""
        return all(approx_equal(a, b) for a, b in zip(self.as_tuple(), other.as_tuple()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return self.approx_eq(other)

    def __add__(self, other: Tuple) -> Tuple:
        return make_tuple(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __sub__(self, other: Tuple) -> Tuple:
        return make_tuple(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def __neg__(self) -> Tuple:
        return make_tuple(-self.x, -self.y, -self.z, -self.w)

    def __mul__(self, scalar: float) -> Tuple:
        return make_tuple(self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar)

    def __rmul__(self, scalar: float) -> Tuple:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> Tuple:
        return make_tuple(self.x / scalar, self.y / scalar, self.z / scalar, self.w / scalar)

    def dot(self, other: Tuple) -> float:
        """Dot product over all four components."""
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def cross(self, other: Tuple) -> Vector:
        """Cross product of the xyz parts. The result is always a Vector."""
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self) -> Tuple:
        """Scale to unit magnitude.

        Raises:
            ZeroDivisionError: If the magnitude is below EPSILON. Callers must
                never normalize a degenerate direction.
        """
        length = self.magnitude()
        if length < EPSILON:
            raise ZeroDivisionError("Cannot normalize a zero-magnitude tuple")
        return self / length


class Point(Tuple):
    """A position in space (w = 1)."""

    def __init__(self, x: float, y: float, z: float) -> None:
        super().__init__(float(x), float(y), float(z), 1.0)

    @classmethod
    def zero(cls) -> Point:
        return Point(0.0, 0.0, 0.0)

    def __repr__(self) -> str:
        return f"Point(x={self.x}, y={self.y}, z={self.z})"


class Vector(Tuple):
    """A direction or displacement (w = 0)."""

    def __init__(self, x: float, y: float, z: float) -> None:
        super().__init__(float(x), float(y), float(z), 0.0)

    @classmethod
    def zero(cls) -> Vector:
        return Vector(0.0, 0.0, 0.0)

    def reflect(self, normal: Vector) -> Vector:
        """Reflect this vector about a normal: v - n * 2 * dot(v, n)."""
        return self - normal * (2.0 * self.dot(normal))

    def __repr__(self) -> str:
        return f"Vector(x={self.x}, y={self.y}, z={self.z})"
