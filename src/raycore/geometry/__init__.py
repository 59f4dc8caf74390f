"""Geometry module for shape primitives.

This module provides geometric primitives and intersection algorithms:

Components:
    primitive: The Primitive base class and the NO_HIT sentinel
    sphere: Sphere primitive with ray-sphere intersection

Ray-object intersection follows the pattern:
    t = primitive.intersect(origin, direction)
    normal = primitive.surface_normal_at(origin + t * direction)

Spheres also expose a Taichi function (hit_sphere) for kernel-side
intersection testing.
"""

from .primitive import NO_HIT, Primitive
from .sphere import Sphere, hit_sphere

__all__ = [
    "NO_HIT",
    "Primitive",
    "Sphere",
    "hit_sphere",
]
