"""Scene module for intersection records and scene management.

Components:
    intersection: Intersection records, sorted collections and hit selection
    world: Python-side scene of spheres and one point light
    manager: Uploads a World into Taichi fields for the parallel renderer
"""

from .intersection import (
    MAX_INTERSECTIONS,
    Computations,
    Intersection,
    IntersectionCapacityError,
    Intersections,
    prepare_computations,
)

# Note: world and manager are NOT imported here. world depends on
# geometry.sphere, which itself imports this package, and manager allocates
# Taichi fields at import time. Import them directly:
#   from src.phongtrace.scene.world import World, default_world
#   from src.phongtrace.scene.manager import SceneManager

__all__ = [
    "MAX_INTERSECTIONS",
    "Intersection",
    "Intersections",
    "IntersectionCapacityError",
    "Computations",
    "prepare_computations",
]
