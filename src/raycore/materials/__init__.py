"""Materials module for surface reflectance models.

This module provides the Material interface and its implementations:

Components:
    material: MaterialProperties, the Material base class, UniformMaterial
        and the spatially varying CheckerMaterial

Material contract:
    get_properties(point) -> MaterialProperties(diffuse, specular, shininess)

The shader evaluates a Phong-style local model from these properties:
    diffuse  = max(0, N.L) * kd * I
    specular = max(0, R.V)^shininess * ks * I   (only when shininess > 0)
"""

from .material import (
    CheckerMaterial,
    Material,
    MaterialProperties,
    MaterialType,
    UniformMaterial,
    checker_parity,
)

__all__ = [
    "Material",
    "MaterialProperties",
    "MaterialType",
    "UniformMaterial",
    "CheckerMaterial",
    "checker_parity",
]
