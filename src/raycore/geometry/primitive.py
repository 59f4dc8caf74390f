"""Primitive interface shared by all renderable shapes.

A primitive answers three questions about a ray or a surface point:

    intersect(origin, direction) -> t (or NO_HIT)
    surface_normal_at(point) -> unit Vector
    material_at(point) -> MaterialProperties

Every primitive owns exactly one Material. Ownership may be shared between
primitives; the material is never None.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from raycore.core.vector import Point, Vector
from raycore.errors import InvalidPrimitiveError
from raycore.materials.material import Material, MaterialProperties

# Sentinel returned by intersect() when the ray misses the surface
NO_HIT = -1.0


class Primitive(ABC):
    """Base class for renderable surface shapes."""

    def __init__(self, material: Material) -> None:
        """Attach the primitive's material.

        Raises:
            InvalidPrimitiveError: If material is None or not a Material.
        """
        if material is None:
            raise InvalidPrimitiveError(f"{type(self).__name__} requires a material")
        if not isinstance(material, Material):
            raise InvalidPrimitiveError(
                f"{type(self).__name__} material must be a Material, got {type(material).__name__}"
            )
        self._material = material

    @property
    def material(self) -> Material:
        """The material owned by this primitive."""
        return self._material

    @abstractmethod
    def intersect(self, origin: Point, direction: Vector) -> float:
        """Return the nearer parametric hit distance, or NO_HIT.

        The returned value may be negative when the surface lies behind the
        origin; callers decide how to treat it.
        """

    @abstractmethod
    def surface_normal_at(self, point: Point) -> Vector:
        """Return the outward unit normal at a point on the surface."""

    def material_at(self, point: Point) -> MaterialProperties:
        """Return the material properties at a point on the surface."""
        return self._material.get_properties(point)
