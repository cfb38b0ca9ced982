"""Materials module for local illumination.

Components:
    phong: Phong material, point light and the ambient/diffuse/specular model

The lighting result is not clamped; values above 1.0 are kept until export.
"""

from .phong import Material, PointLight, lighting, phong_lighting

__all__ = [
    "Material",
    "PointLight",
    "lighting",
    "phong_lighting",
]
