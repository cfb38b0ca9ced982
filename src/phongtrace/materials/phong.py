"""Phong material, point light and the local reflection model.

The Phong model sums three terms for a single point light:
    ambient  = effective_color * ambient
    diffuse  = effective_color * diffuse * dot(light, normal)
    specular = intensity * specular * dot(reflect, eye) ^ shininess

with effective_color = material.color (Hadamard) light.intensity.

Two early exits are part of the model, not optimizations:
    - light behind the surface (dot(light, normal) < 0): ambient only
    - reflection pointing away from the eye (dot(reflect, eye) <= 0):
      ambient + diffuse

Results are not clamped; quantization happens when an image is serialized.

Example:
    >>> from src.phongtrace.core.color import Color
    >>> from src.phongtrace.core.tuples import Point, Vector
    >>> from src.phongtrace.materials.phong import Material, PointLight, lighting
    >>> light = PointLight(Point(0, 0, -10), Color(1, 1, 1))
    >>> eye = normal = Vector(0, 0, -1)
    >>> lighting(Material(), light, Point(0, 0, 0), eye, normal).approx_eq(Color(1.9, 1.9, 1.9))
    True
"""

import math
from dataclasses import dataclass, field

import taichi as ti
import taichi.math as tm

from src.phongtrace.core.color import WHITE, Color
from src.phongtrace.core.ray import reflect
from src.phongtrace.core.tuples import Point, Vector, approx_equal

# Type alias for 3D vectors
vec3 = tm.vec3


@dataclass(frozen=True, eq=False)
class Material:
    """Surface parameters for Phong shading.

    Attributes:
        color: Surface color. Components are not restricted to [0, 1].
        ambient: Ambient reflection coefficient.
        diffuse: Diffuse reflection coefficient.
        specular: Specular reflection coefficient.
        shininess: Specular exponent; larger values give a tighter highlight.

    Raises:
        ValueError: If a coefficient is negative or shininess is not positive.
    """

    color: Color = field(default_factory=lambda: WHITE)
    ambient: float = 0.1
    diffuse: float = 0.9
    specular: float = 0.9
    shininess: float = 200.0

    def __post_init__(self) -> None:
        for name in ("ambient", "diffuse", "specular"):
            value = getattr(self, name)
            if value < 0.0:
                raise ValueError(f"Material {name} = {value} is negative.")
        if self.shininess <= 0.0:
            raise ValueError(f"Material shininess = {self.shininess} must be positive.")

    def approx_eq(self, other: "Material") -> bool:
        return (
            self.color.approx_eq(other.color)
            and approx_equal(self.ambient, other.ambient)
            and approx_equal(self.diffuse, other.diffuse)
            and approx_equal(self.specular, other.specular)
            and approx_equal(self.shininess, other.shininess)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Material):
            return NotImplemented
        return self.approx_eq(other)


@dataclass(frozen=True)
class PointLight:
    """A point light source with no size.

    Attributes:
        position: Location of the light in world space.
        intensity: Color and brightness of the light.
    """

    position: Point
    intensity: Color


def lighting(
    material: Material,
    light: PointLight,
    point: Point,
    eyev: Vector,
    normalv: Vector,
) -> Color:
    """Shade a surface point with the Phong reflection model.

    Args:
        material: Material of the surface.
        light: The single point light.
        point: The world-space point being shaded.
        eyev: Unit vector from the point toward the eye.
        normalv: Unit surface normal at the point.

    Returns:
        The unclamped color seen at the point.
    """
    effective_color = material.color.hadamard(light.intensity)
    lightv = (light.position - point).normalize()
    ambient = effective_color * material.ambient

    # Light on the other side of the surface: no diffuse, no specular
    light_dot_normal = lightv.dot(normalv)
    if light_dot_normal < 0.0:
        return ambient

    diffuse = effective_color * material.diffuse * light_dot_normal

    # Reflection pointing away from the eye: no specular
    reflectv = (-lightv).reflect(normalv)
    reflect_dot_eye = reflectv.dot(eyev)
    if reflect_dot_eye <= 0.0:
        return ambient + diffuse

    factor = math.pow(reflect_dot_eye, material.shininess)
    specular = light.intensity * material.specular * factor
    return ambient + diffuse + specular


# =============================================================================
# Kernel-side Lighting
# =============================================================================


@ti.func
def phong_lighting(
    color: vec3,
    ambient: ti.f32,
    diffuse: ti.f32,
    specular: ti.f32,
    shininess: ti.f32,
    light_position: vec3,
    light_intensity: vec3,
    point: vec3,
    eyev: vec3,
    normalv: vec3,
) -> vec3:
    """Taichi version of lighting() for use inside kernels.

    Material parameters are passed unpacked so the function can read them
    straight from the scene's field storage.

    Returns:
        The unclamped RGB color.
    """
    effective_color = color * light_intensity
    lightv = tm.normalize(light_position - point)
    result = effective_color * ambient

    # Taichi functions need a single return, so the early exits nest
    light_dot_normal = tm.dot(lightv, normalv)
    if light_dot_normal >= 0.0:
        result += effective_color * diffuse * light_dot_normal
        reflectv = reflect(-lightv, normalv)
        reflect_dot_eye = tm.dot(reflectv, eyev)
        if reflect_dot_eye > 0.0:
            result += light_intensity * specular * tm.pow(reflect_dot_eye, shininess)

    return result
