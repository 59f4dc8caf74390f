"""Scene container and ray-scene intersection.

A Scene is a read-only collection of primitives and lights. Its intersect
method tests a ray against every primitive and returns the closest hit.

Distance policy:
    - Only distances t >= 0 count as hits. A negative nearer root (surface
      behind the origin, or origin inside a sphere) is a miss for that
      primitive.
    - Among hits, the smallest t wins. Equal distances resolve to the
      primitive that comes first in scene order (strict < comparison).

Example:
    >>> from raycore.scene.scene import Scene
    >>> scene = Scene(primitives=[sphere], lights=[light])
    >>> hit = scene.intersect(origin, direction)
    >>> if hit is not None:
    ...     print(hit.t, hit.primitive)
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from raycore.core.vector import Point, Vector
from raycore.errors import InvalidPrimitiveError
from raycore.geometry.primitive import Primitive
from raycore.lights.point import Light


@dataclass(frozen=True)
class HitRecord:
    """Record of a ray-scene intersection.

    Attributes:
        t: The parameter value along the ray where intersection occurred.
        point: The 3D point where the ray met the surface.
        primitive: The primitive that was hit.
        index: Position of the primitive in scene order.
    """

    t: float
    point: Point
    primitive: Primitive
    index: int


class Scene:
    """Immutable collection of primitives and lights.

    Attributes:
        primitives: Primitives in scene order.
        lights: Light sources.
    """

    def __init__(self, primitives: Iterable[Primitive] = (), lights: Iterable[Light] = ()) -> None:
        """Create a scene.

        Raises:
            InvalidPrimitiveError: If an element of primitives is not a Primitive.
            TypeError: If an element of lights is not a Light.
        """
        self._primitives = tuple(primitives)
        self._lights = tuple(lights)
        for i, primitive in enumerate(self._primitives):
            if not isinstance(primitive, Primitive):
                raise InvalidPrimitiveError(
                    f"Scene primitive {i} is not a Primitive: {type(primitive).__name__}"
                )
        for i, light in enumerate(self._lights):
            if not isinstance(light, Light):
                raise TypeError(f"Scene light {i} is not a Light: {type(light).__name__}")

    @property
    def primitives(self) -> tuple[Primitive, ...]:
        return self._primitives

    @property
    def lights(self) -> tuple[Light, ...]:
        return self._lights

    def intersect(self, origin: Point, direction: Vector) -> HitRecord | None:
        """Test a ray against all primitives and return the closest hit.

        Args:
            origin: The starting point of the ray.
            direction: The ray direction. Distances are reported in units of
                this vector; pass a unit vector for world-space distances.

        Returns:
            A HitRecord for the closest non-negative hit, or None on a miss.
        """
        closest_t = math.inf
        closest_index = -1
        for i, primitive in enumerate(self._primitives):
            t = primitive.intersect(origin, direction)
            if 0.0 <= t < closest_t:
                closest_t = t
                closest_index = i

        if closest_index < 0:
            return None
        return HitRecord(
            t=closest_t,
            point=origin + direction * closest_t,
            primitive=self._primitives[closest_index],
            index=closest_index,
        )

    def __len__(self) -> int:
        return len(self._primitives)

    def __repr__(self) -> str:
        return f"Scene(primitives={len(self._primitives)}, lights={len(self._lights)})"
