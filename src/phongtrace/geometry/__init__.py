"""Geometry module for shape primitives.

Components:
    sphere: Unit sphere at the origin, placed in the world by a transform

Intersection works in object space: the world ray is transformed by the
sphere's inverse transform and tested against the unit sphere. Normals are
carried back to world space with the transpose of that inverse.
"""

from .sphere import Sphere, hit_unit_sphere, sphere_normal

__all__ = [
    "Sphere",
    "hit_unit_sphere",
    "sphere_normal",
]
