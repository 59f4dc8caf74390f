"""Point, vector and color value types for Python-side geometry.

This module provides the immutable value types used for all geometric
reasoning outside of Taichi kernels. Points and vectors are kept distinct:

- Point: a location in world space
- Vector: a direction or displacement
- Color: an RGB light quantity (not clamped)

The affine rules are enforced by the operators:
    Point - Point -> Vector
    Point + Vector -> Point
    Point - Vector -> Point

Normalizing a zero-length vector raises DegenerateNormalizationError. The
check is exact (length == 0.0); any nonzero length normalizes.

Example:
    >>> from raycore.core.vector import Point, Vector, normalize
    >>> eye = Point(0.0, 0.0, 5.0)
    >>> target = Point(0.0, 0.0, 0.0)
    >>> forward = normalize(target - eye)
    >>> forward
    Vector(x=0.0, y=0.0, z=-1.0)
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

from raycore.errors import DegenerateNormalizationError


@dataclass(frozen=True)
class Vector:
    """A direction or displacement in 3D space.

    Attributes:
        x: X component.
        y: Y component.
        z: Z component.
    """

    x: float
    y: float
    z: float

    def __add__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Vector:
        if isinstance(scalar, (Vector, Point, Color)):
            return NotImplemented
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector:
        if isinstance(scalar, (Vector, Point, Color)):
            return NotImplemented
        return Vector(self.x / scalar, self.y / scalar, self.z / scalar)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: Vector) -> float:
        """Return the dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        """Return the right-handed cross product self x other."""
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        """Return the squared Euclidean length."""
        return self.dot(self)

    def length(self) -> float:
        """Return the Euclidean length."""
        return math.sqrt(self.length_squared())

    def normalize(self) -> Vector:
        """Return a unit vector in the same direction.

        Raises:
            DegenerateNormalizationError: If the vector has zero length.
        """
        norm = self.length()
        if norm == 0.0:
            raise DegenerateNormalizationError(f"Cannot normalize zero-length vector {self!r}")
        return self / norm

    def to_tuple(self) -> tuple[float, float, float]:
        """Return the components as a plain tuple."""
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class Point:
    """A location in world space.

    Attributes:
        x: X coordinate.
        y: Y coordinate.
        z: Z coordinate.
    """

    x: float
    y: float
    z: float

    def __add__(self, other: Vector) -> Point:
        if not isinstance(other, Vector):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Point | Vector) -> Vector | Point:
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Vector):
            return Point(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def to_vector(self) -> Vector:
        """Return the displacement from the world origin to this point."""
        return Vector(self.x, self.y, self.z)

    def distance_to(self, other: Point) -> float:
        """Return the Euclidean distance to another point."""
        return (other - self).length()

    def to_tuple(self) -> tuple[float, float, float]:
        """Return the coordinates as a plain tuple."""
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class Color:
    """An RGB light quantity.

    Channels are conventionally in [0, 1] but are never clamped here; the
    output encoder is responsible for clamping.

    Attributes:
        r: Red channel.
        g: Green channel.
        b: Blue channel.
    """

    r: float
    g: float
    b: float

    def __add__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __mul__(self, other: Color | float) -> Color:
        # Color * Color is the component-wise (filter) product.
        if isinstance(other, Color):
            return Color(self.r * other.r, self.g * other.g, self.b * other.b)
        if isinstance(other, (Vector, Point)):
            return NotImplemented
        return Color(self.r * other, self.g * other, self.b * other)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Color:
        if isinstance(scalar, (Vector, Point, Color)):
            return NotImplemented
        return Color(self.r / scalar, self.g / scalar, self.b / scalar)

    def __iter__(self) -> Iterator[float]:
        yield self.r
        yield self.g
        yield self.b

    def to_tuple(self) -> tuple[float, float, float]:
        """Return the channels as a plain tuple."""
        return (self.r, self.g, self.b)


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)


# =============================================================================
# Functional helpers
# =============================================================================


def dot(a: Vector, b: Vector) -> float:
    """Compute the dot product a . b."""
    return a.dot(b)


def cross(a: Vector, b: Vector) -> Vector:
    """Compute the right-handed cross product a x b."""
    return a.cross(b)


def length(v: Vector) -> float:
    """Compute the Euclidean length of a vector."""
    return v.length()


def length_squared(v: Vector) -> float:
    """Compute the squared length of a vector."""
    return v.length_squared()


def normalize(v: Vector) -> Vector:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.

    Raises:
        DegenerateNormalizationError: If v has zero length.
    """
    return v.normalize()


def as_point(value: Point | tuple[float, float, float]) -> Point:
    """Coerce a point or a 3-tuple to a Point."""
    if isinstance(value, Point):
        return value
    x, y, z = value
    return Point(float(x), float(y), float(z))


def as_vector(value: Vector | tuple[float, float, float]) -> Vector:
    """Coerce a vector or a 3-tuple to a Vector."""
    if isinstance(value, Vector):
        return value
    x, y, z = value
    return Vector(float(x), float(y), float(z))


def as_color(value: Color | tuple[float, float, float]) -> Color:
    """Coerce a color or a 3-tuple to a Color."""
    if isinstance(value, Color):
        return value
    r, g, b = value
    return Color(float(r), float(g), float(b))
