"""Affine transformation factories.

Each factory returns a 4x4 Matrix representing a single operation relative
to the identity. Transformations compose by matrix multiplication, and the
semantic order is right to left: for T = C @ B @ A, applying T to a point
applies A first, then B, then C.

Example:
    >>> import math
    >>> from src.phongtrace.core.transformations import rotation_x, scaling, translation
    >>> from src.phongtrace.core.tuples import Point
    >>> t = translation(10, 5, 7) @ scaling(5, 5, 5) @ rotation_x(math.pi / 2)
    >>> (t @ Point(1, 0, 1)).approx_eq(Point(15, 0, 7))
    True
"""

import math

from src.phongtrace.core.matrix import Matrix


def translation(x: float, y: float, z: float) -> Matrix:
    """Move points by (x, y, z). Vectors are unaffected (w = 0)."""
    return Matrix(
        [
            [1.0, 0.0, 0.0, x],
            [0.0, 1.0, 0.0, y],
            [0.0, 0.0, 1.0, z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def scaling(x: float, y: float, z: float) -> Matrix:
    """Scale each axis independently. Negative factors reflect."""
    return Matrix(
        [
            [x, 0.0, 0.0, 0.0],
            [0.0, y, 0.0, 0.0],
            [0.0, 0.0, z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_x(radians: float) -> Matrix:
    """Right-handed rotation around the x axis."""
    c = math.cos(radians)
    s = math.sin(radians)
    return Matrix(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_y(radians: float) -> Matrix:
    """Right-handed rotation around the y axis."""
    c = math.cos(radians)
    s = math.sin(radians)
    return Matrix(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_z(radians: float) -> Matrix:
    """Right-handed rotation around the z axis."""
    c = math.cos(radians)
    s = math.sin(radians)
    return Matrix(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def shearing(x_y: float, x_z: float, y_x: float, y_z: float, z_x: float, z_y: float) -> Matrix:
    """Shear: each component moves in proportion to the other two.

    Args:
        x_y: x in proportion to y.
        x_z: x in proportion to z.
        y_x: y in proportion to x.
        y_z: y in proportion to z.
        z_x: z in proportion to x.
        z_y: z in proportion to y.
    """
    return Matrix(
        [
            [1.0, x_y, x_z, 0.0],
            [y_x, 1.0, y_z, 0.0],
            [z_x, z_y, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
