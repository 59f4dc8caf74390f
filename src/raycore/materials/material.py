"""Surface material models.

A material maps a point on a primitive's surface to the local reflectance
description used by the shader:

    get_properties(point) -> MaterialProperties

MaterialProperties bundles:
    diffuse: Lambertian reflectance color (kd)
    specular: Phong specular color (ks)
    shininess: Phong exponent; 0 disables the specular lobe

Two variants are provided:
    UniformMaterial: position-independent, returns the same properties
        everywhere
    CheckerMaterial: spatially varying, alternates two property sets on a
        3D checker lattice

Every material must be total over the surface of the primitive that owns it:
get_properties never fails for a finite point.

Example:
    >>> from raycore.core.vector import Color, Point
    >>> from raycore.materials.material import MaterialProperties, UniformMaterial
    >>> red = UniformMaterial(MaterialProperties(
    ...     diffuse=Color(0.8, 0.1, 0.1), specular=Color(0.5, 0.5, 0.5), shininess=32.0
    ... ))
    >>> red.get_properties(Point(0.0, 1.0, 0.0)).shininess
    32.0
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum

from raycore.core.vector import BLACK, Color, Point, as_color
from raycore.errors import InvalidMaterialError


class MaterialType(IntEnum):
    """Enumeration of material types understood by the Taichi backend.

    The Python shader accepts any Material subclass; only these types can be
    compiled into kernel fields.
    """

    UNIFORM = 0
    CHECKER = 1


@dataclass(frozen=True)
class MaterialProperties:
    """Local reflectance sampled at a surface point.

    Attributes:
        diffuse: Diffuse reflectance color.
        specular: Specular reflectance color.
        shininess: Phong exponent (non-negative). A value of 0 disables
            the specular term.
    """

    diffuse: Color
    specular: Color = BLACK
    shininess: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "diffuse", as_color(self.diffuse))
        object.__setattr__(self, "specular", as_color(self.specular))
        if not math.isfinite(self.shininess) or self.shininess < 0.0:
            raise InvalidMaterialError(
                f"Shininess must be a finite non-negative number, got {self.shininess}"
            )


class Material(ABC):
    """Base class for surface materials."""

    @abstractmethod
    def get_properties(self, point: Point) -> MaterialProperties:
        """Return the reflectance properties at a surface point."""


class UniformMaterial(Material):
    """A material with the same properties at every point."""

    material_type = MaterialType.UNIFORM

    def __init__(self, properties: MaterialProperties) -> None:
        if not isinstance(properties, MaterialProperties):
            raise InvalidMaterialError(
                f"UniformMaterial needs MaterialProperties, got {type(properties).__name__}"
            )
        self._properties = properties

    @property
    def properties(self) -> MaterialProperties:
        """The fixed properties returned for every point."""
        return self._properties

    def get_properties(self, point: Point) -> MaterialProperties:
        return self._properties

    def __repr__(self) -> str:
        return f"UniformMaterial({self._properties!r})"


class CheckerMaterial(Material):
    """A 3D checkerboard alternating between two property sets.

    The lattice cell containing a point is found by flooring each coordinate
    divided by the cell size. Cells whose index sum is even use ``even``,
    odd cells use ``odd``.
    """

    material_type = MaterialType.CHECKER

    def __init__(
        self,
        even: MaterialProperties,
        odd: MaterialProperties,
        scale: float = 1.0,
    ) -> None:
        """Create a checker material.

        Args:
            even: Properties for cells with an even index sum.
            odd: Properties for cells with an odd index sum.
            scale: Edge length of a checker cell in world units (positive).

        Raises:
            InvalidMaterialError: If scale is not a positive finite number or
                a property set is missing.
        """
        for name, props in (("even", even), ("odd", odd)):
            if not isinstance(props, MaterialProperties):
                raise InvalidMaterialError(
                    f"CheckerMaterial {name} needs MaterialProperties, got {type(props).__name__}"
                )
        if not math.isfinite(scale) or scale <= 0.0:
            raise InvalidMaterialError(f"Checker scale must be positive, got {scale}")
        self._even = even
        self._odd = odd
        self._scale = float(scale)

    @property
    def even(self) -> MaterialProperties:
        return self._even

    @property
    def odd(self) -> MaterialProperties:
        return self._odd

    @property
    def scale(self) -> float:
        return self._scale

    def get_properties(self, point: Point) -> MaterialProperties:
        return self._odd if checker_parity(point, self._scale) else self._even

    def __repr__(self) -> str:
        return f"CheckerMaterial(even={self._even!r}, odd={self._odd!r}, scale={self._scale})"


def checker_parity(point: Point, scale: float) -> int:
    """Return 0 for even checker cells and 1 for odd ones.

    Computed as s - 2 * floor(s / 2) on the float cell-index sum, the same
    expression the Taichi kernel uses.
    """
    s = (
        math.floor(point.x / scale)
        + math.floor(point.y / scale)
        + math.floor(point.z / scale)
    )
    return int(s - 2 * math.floor(s / 2))
