"""Scene manager: freezes a World into Taichi fields for parallel tracing.

Scene construction and tracing are separate phases. Spheres and the light
are added (or loaded from a World) on the Python side; freeze() then ends
the write phase, after which the field data is read-only until clear().
The render kernel only ever reads these fields, so per-pixel work needs no
synchronization.

Per sphere the manager stores the inverse transform and its transpose (the
normal matrix), both computed once on the Python side with the matrix
engine, plus the Phong material parameters.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.phongtrace.scene.manager import SceneManager
    >>> from src.phongtrace.scene.world import default_world
    >>> scene = SceneManager()
    >>> scene.load_world(default_world())
    >>> scene.frozen
    True
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from src.phongtrace.geometry.sphere import Sphere, hit_unit_sphere
from src.phongtrace.materials.phong import Material, PointLight
from src.phongtrace.scene.world import World

# Type alias for 3D vectors
vec3 = tm.vec3

# Maximum number of spheres supported in the scene
MAX_SPHERES = 256

# Upper bound for ray parameters when searching for the closest hit
T_MAX = 1e10

# Sphere storage: Structure of Arrays layout for GPU efficiency
sphere_inverses = ti.Matrix.field(4, 4, dtype=ti.f32, shape=MAX_SPHERES)
sphere_normal_matrices = ti.Matrix.field(4, 4, dtype=ti.f32, shape=MAX_SPHERES)
sphere_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_ambient = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_diffuse = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_specular = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_shininess = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Single point light
light_enabled = ti.field(dtype=ti.i32, shape=())
light_position = ti.Vector.field(3, dtype=ti.f32, shape=())
light_intensity = ti.Vector.field(3, dtype=ti.f32, shape=())


def clear_scene() -> None:
    """Clear all spheres and disable the light.

    The field data is not zeroed but will be overwritten when new spheres
    are added.
    """
    num_spheres[None] = 0
    light_enabled[None] = 0


def _upload_sphere(sphere: Sphere) -> int:
    """Write a sphere's inverse transforms and material to the fields.

    Does not check the freeze; SceneManager.add_sphere is the public entry.

    Args:
        sphere: The sphere to upload.

    Returns:
        The index of the added sphere.

    Raises:
        RuntimeError: If the maximum number of spheres is exceeded.
        NotInvertibleError: If the sphere's transform is singular.
    """
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")

    inverse = sphere.inverse_transform
    sphere_inverses[idx] = inverse.to_list()
    sphere_normal_matrices[idx] = inverse.transpose().to_list()
    _write_material(idx, sphere.material)
    num_spheres[None] = idx + 1
    return idx


def _write_material(idx: int, material: Material) -> None:
    sphere_colors[idx] = list(material.color.to_tuple())
    sphere_ambient[idx] = material.ambient
    sphere_diffuse[idx] = material.diffuse
    sphere_specular[idx] = material.specular
    sphere_shininess[idx] = material.shininess


def _upload_light(light: PointLight | None) -> None:
    """Write the point light, or disable lighting when None. Unguarded."""
    if light is None:
        light_enabled[None] = 0
        return
    light_enabled[None] = 1
    light_position[None] = [light.position.x, light.position.y, light.position.z]
    light_intensity[None] = list(light.intensity.to_tuple())


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


def is_light_enabled() -> bool:
    return bool(light_enabled[None])


@ti.func
def intersect_scene(origin: vec3, direction: vec3):
    """Find the closest non-negative hit among all spheres.

    Matches Intersections.hit() on the Python side: per sphere the smaller
    non-negative root is a candidate, and the lowest candidate wins
    regardless of which sphere it belongs to.

    Args:
        origin: Ray origin in world space.
        direction: Ray direction in world space.

    Returns:
        A tuple (index, t). index is -1 when nothing is hit.
    """
    closest_t = T_MAX
    hit_index = -1

    for k in range(num_spheres[None]):
        hit, t1, t2 = hit_unit_sphere(origin, direction, sphere_inverses[k])
        if hit == 1:
            t = t1
            if t < 0.0:
                t = t2
            if t >= 0.0 and t < closest_t:
                closest_t = t
                hit_index = k

    return hit_index, closest_t


# =============================================================================
# Scene Manager
# =============================================================================


@dataclass
class SphereInfo:
    """Information about a sphere uploaded to the scene.

    Attributes:
        sphere_index: The index in the sphere storage arrays.
        sphere: The source sphere (non-owning reference).
    """

    sphere_index: int
    sphere: Sphere


class SceneManager:
    """Builds the GPU-side scene and guards the write/trace phase split.

    Attributes:
        spheres: SphereInfo for every uploaded sphere, by index.
        light: The uploaded light, or None.
    """

    def __init__(self) -> None:
        """Initialize an empty, writable scene."""
        self.spheres: list[SphereInfo] = []
        self.light: PointLight | None = None
        self._frozen = False
        clear_scene()

    @property
    def frozen(self) -> bool:
        """Whether the write phase has ended."""
        return self._frozen

    def _check_writable(self) -> None:
        if self._frozen:
            raise RuntimeError("Scene is frozen for tracing. Call clear() before modifying it.")

    def clear(self) -> None:
        """Remove everything and reopen the write phase."""
        clear_scene()
        self.spheres.clear()
        self.light = None
        self._frozen = False

    def add_sphere(self, sphere: Sphere) -> int:
        """Add a sphere to the scene.

        Raises:
            RuntimeError: If the scene is frozen or full.
            NotInvertibleError: If the sphere's transform is singular.
        """
        self._check_writable()
        idx = _upload_sphere(sphere)
        self.spheres.append(SphereInfo(sphere_index=idx, sphere=sphere))
        return idx

    def set_light(self, light: PointLight | None) -> None:
        """Set (or remove) the single point light.

        Raises:
            RuntimeError: If the scene is frozen.
        """
        self._check_writable()
        _upload_light(light)
        self.light = light

    def freeze(self) -> None:
        """End the write phase. Further modification requires clear()."""
        self._frozen = True

    def load_world(self, world: World) -> None:
        """Replace the scene with a World's spheres and light, then freeze.

        Raises:
            RuntimeError: If the world has more than MAX_SPHERES spheres.
            NotInvertibleError: If any sphere's transform is singular.
        """
        self.clear()
        for sphere in world.objects:
            self.add_sphere(sphere)
        self.set_light(world.light)
        self.freeze()

    def get_sphere_count(self) -> int:
        return len(self.spheres)
