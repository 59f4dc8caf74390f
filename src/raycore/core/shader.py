"""Local illumination shader.

This module implements the reference (pure Python) shading path: find the
nearest primitive along a ray and evaluate a Phong-style local model from the
hit primitive's material and every light in the scene.

For each light, with N the surface normal, L the unit direction toward the
light, V the unit direction back toward the ray origin and I the light
intensity at the hit point:

    diffuse  = max(0, N.L) * kd * I
    specular = max(0, R.V)^shininess * ks * I,  R = reflect(-L, N)

The specular term is added only when shininess > 0 and N.L > 0. All light
contributions are summed; the result is not clamped.

Simplifications:
    - No shadow testing. A point occluded from a light by another primitive
      still receives that light's full contribution.
    - No secondary rays (reflection, refraction).

A ray that hits nothing returns the background color. A light placed exactly
on a hit point has no direction and raises DegenerateNormalizationError.

Example:
    >>> from raycore.core.shader import Shader
    >>> from raycore.scene.demo import create_single_sphere_scene
    >>> scene, camera = create_single_sphere_scene()
    >>> shader = Shader(scene)
    >>> color = shader.trace(camera.generate_ray(0.0, 0.0))
"""

from __future__ import annotations

from raycore.core.ray import Ray, reflect
from raycore.core.vector import BLACK, Color, Point, Vector, as_color
from raycore.materials.material import MaterialProperties
from raycore.scene.scene import HitRecord, Scene


class Shader:
    """Evaluates the color seen along a ray.

    Attributes:
        scene: The scene to shade.
        background: Color returned for rays that hit nothing.
    """

    def __init__(self, scene: Scene, background: Color = BLACK) -> None:
        self._scene = scene
        self._background = as_color(background)

    @property
    def scene(self) -> Scene:
        return self._scene

    @property
    def background(self) -> Color:
        return self._background

    def find_nearest(self, ray: Ray) -> HitRecord | None:
        """Return the nearest hit along a ray, or None.

        The ray direction is normalized first, so HitRecord.t is a world
        distance and scaling the direction does not move the hit point.

        Raises:
            DegenerateNormalizationError: If the ray direction is zero.
        """
        unit = ray.normalized()
        return self._scene.intersect(unit.origin, unit.direction)

    def trace(self, ray: Ray) -> Color:
        """Compute the color seen along a ray.

        Args:
            ray: The ray to trace. Its direction need not be unit length.

        Returns:
            The shaded color of the nearest hit, or the background color.
        """
        unit = ray.normalized()
        hit = self._scene.intersect(unit.origin, unit.direction)
        if hit is None:
            return self._background

        normal = hit.primitive.surface_normal_at(hit.point)
        properties = hit.primitive.material_at(hit.point)
        return self.shade(hit.point, normal, -unit.direction, properties)

    def shade(
        self,
        point: Point,
        normal: Vector,
        view: Vector,
        properties: MaterialProperties,
    ) -> Color:
        """Sum the direct contribution of every light at a surface point.

        Args:
            point: The surface point.
            normal: Unit surface normal at the point.
            view: Unit vector from the point back toward the viewer.
            properties: Material properties at the point.

        Returns:
            The accumulated color.
        """
        color = BLACK
        for light in self._scene.lights:
            to_light = light.direction_to(point).normalize()
            n_dot_l = normal.dot(to_light)
            if n_dot_l <= 0.0:
                continue

            intensity = light.intensity_at(point)
            color = color + properties.diffuse * intensity * n_dot_l

            if properties.shininess > 0.0:
                reflected = reflect(-to_light, normal)
                r_dot_v = max(0.0, reflected.dot(view))
                if r_dot_v > 0.0:
                    color = color + properties.specular * intensity * (r_dot_v**properties.shininess)
        return color
