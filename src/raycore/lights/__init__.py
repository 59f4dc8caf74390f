"""Lights module for direct illumination sources.

Components:
    point: The Light base class and PointLight

Light contract:
    direction_to(point) -> unnormalized Vector toward the light
    intensity_at(point) -> Color
"""

from .point import Light, PointLight

__all__ = [
    "Light",
    "PointLight",
]
