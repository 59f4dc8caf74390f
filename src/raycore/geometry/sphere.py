"""Sphere primitive with ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |origin + t * direction - center|^2 = radius^2

Expanding and rearranging gives the quadratic equation:
    a*t^2 + b*t + c = 0

where:
    a = dot(direction, direction)
    b = 2 * dot(oc, direction)
    c = dot(oc, oc) - radius^2
    oc = origin - center

With discriminant delta = b^2 - 4ac:
    delta < 0   -> no hit (NO_HIT)
    delta >= 0  -> nearer root (-b - sqrt(delta)) / (2a)

A tangent ray (delta == 0) counts as a hit. The nearer root is returned even
when negative (surface behind the origin, or origin inside the sphere); the
scene query discards negative distances.

The same routine is provided as a Taichi function (hit_sphere) for use inside
kernels.

Example:
    >>> from raycore.core.vector import Color, Point, Vector
    >>> from raycore.geometry.sphere import Sphere
    >>> from raycore.materials import MaterialProperties, UniformMaterial
    >>> material = UniformMaterial(MaterialProperties(diffuse=Color(1.0, 1.0, 1.0)))
    >>> sphere = Sphere(Point(0.0, 0.0, 0.0), 1.0, material)
    >>> sphere.intersect(Point(0.0, 0.0, 5.0), Vector(0.0, 0.0, -1.0))
    4.0
"""

import math
from numbers import Real

import taichi as ti
import taichi.math as tm

from raycore.core.vector import Point, Vector, as_point
from raycore.errors import InvalidPrimitiveError
from raycore.geometry.primitive import NO_HIT, Primitive
from raycore.materials.material import Material

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


class Sphere(Primitive):
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (finite, positive).
    """

    def __init__(self, center: Point, radius: float, material: Material) -> None:
        """Create a sphere.

        Args:
            center: The center point (Point or 3-tuple).
            radius: The sphere radius.
            material: The material owned by the sphere.

        Raises:
            InvalidPrimitiveError: If the radius is not positive and finite,
                or the material is missing.
        """
        super().__init__(material)
        if isinstance(radius, bool) or not isinstance(radius, Real):
            raise InvalidPrimitiveError(f"Sphere radius must be a number, got {radius!r}")
        if not math.isfinite(radius) or radius <= 0.0:
            raise InvalidPrimitiveError(f"Sphere radius must be positive, got {radius}")
        self._center = as_point(center)
        self._radius = float(radius)

    @property
    def center(self) -> Point:
        return self._center

    @property
    def radius(self) -> float:
        return self._radius

    def intersect(self, origin: Point, direction: Vector) -> float:
        """Test for ray-sphere intersection.

        Args:
            origin: The starting point of the ray.
            direction: The ray direction. Need not be normalized, but the
                returned distance is then in units of this direction.

        Returns:
            The nearer root of the quadratic (possibly negative), or NO_HIT
            if the discriminant is negative or the direction is zero.
        """
        oc = origin - self._center
        a = direction.dot(direction)
        if a == 0.0:
            return NO_HIT
        b = 2.0 * oc.dot(direction)
        c = oc.dot(oc) - self._radius * self._radius
        delta = b * b - 4.0 * a * c
        if delta < 0.0:
            return NO_HIT
        return (-b - math.sqrt(delta)) / (2.0 * a)

    def surface_normal_at(self, point: Point) -> Vector:
        """Return (point - center) / radius.

        The result is unit length when the point lies on the sphere; this
        precondition is not checked.
        """
        return (point - self._center) / self._radius

    def __repr__(self) -> str:
        return f"Sphere(center={self._center!r}, radius={self._radius}, material={self.material!r})"


# =============================================================================
# Taichi intersection (kernel-side)
# =============================================================================


@ti.func
def hit_sphere(
    ray_origin: vec3,
    ray_direction: vec3,
    center: vec3,
    radius: ti.f32,
) -> ti.f32:
    """Kernel-side ray-sphere intersection with the same contract as Sphere.intersect.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray.
        center: The sphere center.
        radius: The sphere radius.

    Returns:
        The nearer root, or NO_HIT (-1.0) when the discriminant is negative.
    """
    oc = ray_origin - center
    a = tm.dot(ray_direction, ray_direction)
    b = 2.0 * tm.dot(oc, ray_direction)
    c = tm.dot(oc, oc) - radius * radius
    delta = b * b - 4.0 * a * c

    t = NO_HIT
    if delta >= 0.0 and a > 0.0:
        t = (-b - ti.sqrt(delta)) / (2.0 * a)
    return t
