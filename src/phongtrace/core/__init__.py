"""Core math and rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    tuples: Homogeneous points and vectors with epsilon comparison
    color: RGB color arithmetic (unclamped)
    matrix: 2x2/3x3/4x4 matrices with determinant and inverse
    transformations: Translation, scaling, rotation and shearing matrices
    ray: Ray data structure, both Python-side and Taichi-side
    integrator: Per-pixel pipeline (reference tracer and parallel kernel)

Composition order matters: transforms apply right to left, so
T @ S @ R applies R first. The fluent Matrix builders (rotate_x, scale,
translate, ...) apply in call order instead.
"""

from .color import BLACK, WHITE, Color
from .matrix import SUPPORTED_SIZES, Matrix, NotInvertibleError
from .ray import Ray, TiRay, make_ray, ray_at, reflect, vec3
from .transformations import (
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
)
from .tuples import EPSILON, Point, Tuple, Vector, approx_equal, make_tuple

# Note: integrator is NOT imported here. It allocates Taichi fields at import
# time, so it must only be imported after ti.init(). Import it directly:
#   from src.phongtrace.core.integrator import render_image

__all__ = [
    # Tuples
    "EPSILON",
    "Tuple",
    "Point",
    "Vector",
    "approx_equal",
    "make_tuple",
    # Color
    "Color",
    "BLACK",
    "WHITE",
    # Matrix
    "Matrix",
    "NotInvertibleError",
    "SUPPORTED_SIZES",
    # Transformations
    "translation",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shearing",
    # Ray
    "Ray",
    "TiRay",
    "make_ray",
    "ray_at",
    "reflect",
    "vec3",
]
