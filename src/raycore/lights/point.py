"""Light sources.

A light answers two questions about a point being shaded:

    direction_to(point) -> Vector from the point toward the light
    intensity_at(point) -> Color arriving at the point

direction_to returns the UNNORMALIZED vector toward the light, not the
direction the light travels. Callers normalize when they need a unit
direction (the shader does).

PointLight has no distance falloff by default: intensity_at returns the same
color everywhere. Passing falloff=True divides the intensity by the squared
distance to the light.

Example:
    >>> from raycore.core.vector import Color, Point
    >>> from raycore.lights.point import PointLight
    >>> light = PointLight(Point(0.0, 5.0, 5.0), Color(1.0, 1.0, 1.0))
    >>> light.direction_to(Point(0.0, 0.0, 1.0))
    Vector(x=0.0, y=5.0, z=4.0)
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from raycore.core.vector import Color, Point, Vector, as_color, as_point


class Light(ABC):
    """Base class for light sources."""

    @abstractmethod
    def direction_to(self, point: Point) -> Vector:
        """Return the unnormalized vector from point toward the light."""

    @abstractmethod
    def intensity_at(self, point: Point) -> Color:
        """Return the light intensity arriving at point."""


class PointLight(Light):
    """An isotropic light at a single position.

    Attributes:
        position: Light position in world space.
        intensity: Emitted color.
        falloff: Whether intensity decays with the squared distance.
    """

    def __init__(self, position: Point, intensity: Color, falloff: bool = False) -> None:
        self._position = as_point(position)
        self._intensity = as_color(intensity)
        self._falloff = bool(falloff)

    @property
    def position(self) -> Point:
        return self._position

    @property
    def intensity(self) -> Color:
        return self._intensity

    @property
    def falloff(self) -> bool:
        return self._falloff

    def direction_to(self, point: Point) -> Vector:
        return self._position - point

    def intensity_at(self, point: Point) -> Color:
        if not self._falloff:
            return self._intensity
        distance = point.distance_to(self._position)
        if distance == 0.0:
            # Point on the light itself; the shader rejects this case when
            # it normalizes direction_to.
            return self._intensity
        return self._intensity / (distance * distance)

    def __repr__(self) -> str:
        return (
            f"PointLight(position={self._position!r}, intensity={self._intensity!r}, "
            f"falloff={self._falloff})"
        )
