"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vector: Point, Vector and Color value types
    ray: Ray data structure and reflection helpers
    raster: Write-once pixel grid handed to the output encoder
    shader: Nearest-hit search and local (Phong) illumination
    renderer: Pixel loop and backend selection
    integrator: Taichi kernel backend for the same shading model

The Python shader is the reference implementation; the Taichi integrator
evaluates the identical formula in a parallel kernel.
"""

from .ray import Ray, reflect, vec3
from .raster import Raster
from .vector import (
    BLACK,
    WHITE,
    Color,
    Point,
    Vector,
    as_color,
    as_point,
    as_vector,
    cross,
    dot,
    length,
    length_squared,
    normalize,
)

# Note: shader, renderer and integrator are NOT imported here to avoid
# circular imports with the geometry, lights and scene packages.
# Import directly from raycore.core.shader / raycore.core.renderer /
# raycore.core.integrator when needed.

__all__ = [
    "Ray",
    "reflect",
    "vec3",
    "Raster",
    "Point",
    "Vector",
    "Color",
    "BLACK",
    "WHITE",
    "as_point",
    "as_vector",
    "as_color",
    "dot",
    "cross",
    "length",
    "length_squared",
    "normalize",
]
