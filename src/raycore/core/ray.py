"""Ray data structure and reflection helpers.

This module provides the Ray value type used by the camera and shader, plus
the Taichi-side equivalents used inside kernels. The Python Ray is built from
the immutable Point/Vector types; inside kernels rays are carried as a pair of
``vec3`` values.

Example:
    >>> from raycore.core.ray import Ray
    >>> from raycore.core.vector import Point, Vector
    >>> ray = Ray(origin=Point(0.0, 0.0, 0.0), direction=Vector(0.0, 0.0, -1.0))
    >>> ray.at(5.0)  # Point 5 units along the ray
    Point(x=0.0, y=0.0, z=-5.0)
"""

from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from raycore.core.vector import Point, Vector

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Camera rays are always
            unit length; other callers may pass any nonzero direction, in
            which case parametric distances are in units of that direction.
    """

    origin: Point
    direction: Vector

    def at(self, t: float) -> Point:
        """Compute the point origin + t * direction."""
        return self.origin + self.direction * t

    def normalized(self) -> "Ray":
        """Return the same ray with a unit-length direction.

        Raises:
            DegenerateNormalizationError: If the direction has zero length.
        """
        return Ray(self.origin, self.direction.normalize())


def reflect(incident: Vector, normal: Vector) -> Vector:
    """Reflect an incident vector about a normal.

    The normal should be unit length for correct results.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal.

    Returns:
        The reflected direction vector.
    """
    return incident - normal * (2.0 * incident.dot(normal))


# =============================================================================
# Taichi equivalents (kernel-side)
# =============================================================================


@ti.func
def point_at(origin: vec3, direction: vec3, t: ti.f32) -> vec3:
    """Compute origin + t * direction inside a kernel."""
    return origin + t * direction


@ti.func
def reflect_ti(incident: vec3, normal: vec3) -> vec3:
    """Reflect an incident vector about a unit normal inside a kernel."""
    return incident - 2.0 * tm.dot(incident, normal) * normal
