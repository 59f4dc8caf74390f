"""Taichi integrator for parallel per-pixel shading.

This module evaluates the same shading model as raycore.core.shader inside a
Taichi kernel. The scene is compiled once into Structure-of-Arrays fields,
then every pixel is shaded by one iteration of a parallel loop. Pixels never
share mutable state: each iteration reads the read-only scene fields and
writes exactly one image element.

Supported scene content:
    - Sphere primitives
    - UniformMaterial and CheckerMaterial
    - PointLight (with or without falloff)

Anything else raises UnsupportedSceneError at construction; use the Python
backend for custom primitive, material or light classes.

Kernel math runs in float32, so results match the Python shader to about
1e-5 except on silhouette and checker edges where a pixel center sits within
rounding distance of a boundary.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raycore.core.integrator import TaichiIntegrator
    >>> from raycore.scene.demo import create_single_sphere_scene
    >>>
    >>> scene, camera = create_single_sphere_scene()
    >>> integrator = TaichiIntegrator(scene, camera, 256, 256)
    >>> raster = integrator.render()
"""

import logging

import numpy as np
import taichi as ti
import taichi.math as tm

from raycore.camera.pinhole import Camera
from raycore.core.raster import Raster, check_dimensions
from raycore.core.ray import point_at, reflect_ti, vec3
from raycore.core.vector import BLACK, Color, as_color
from raycore.errors import DegenerateNormalizationError, UnsupportedSceneError
from raycore.geometry.sphere import Sphere, hit_sphere
from raycore.lights.point import PointLight
from raycore.materials.material import (
    CheckerMaterial,
    MaterialProperties,
    MaterialType,
    UniformMaterial,
)
from raycore.scene.scene import Scene

logger = logging.getLogger(__name__)

# =============================================================================
# Rendering Constants
# =============================================================================

# Initial closest-hit distance (larger than any reachable t)
T_MAX = 1e30

# Material type code as a plain int for kernel-side comparison
CHECKER_MATERIAL = int(MaterialType.CHECKER)


@ti.func
def checker_parity_ti(p: vec3, scale: ti.f32) -> ti.f32:
    """Kernel-side checker parity: 0.0 for even cells, 1.0 for odd cells."""
    s = ti.floor(p.x / scale) + ti.floor(p.y / scale) + ti.floor(p.z / scale)
    return s - 2.0 * ti.floor(s * 0.5)


@ti.data_oriented
class TaichiIntegrator:
    """Renders a scene with a Taichi kernel.

    Each instance owns its own fields, so several integrators (different
    scenes or resolutions) can coexist. Taichi must be initialized with
    ti.init() before construction.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        num_spheres: Number of compiled spheres.
        num_lights: Number of compiled lights.
    """

    def __init__(
        self,
        scene: Scene,
        camera: Camera,
        width: int,
        height: int,
        background: Color = BLACK,
    ) -> None:
        """Compile the scene and allocate the image buffer.

        Args:
            scene: The scene to render.
            camera: The camera generating primary rays.
            width: Image width in pixels.
            height: Image height in pixels.
            background: Color for pixels whose ray hits nothing.

        Raises:
            RasterError: If the dimensions are not positive integers.
            UnsupportedSceneError: If the scene holds anything other than
                spheres with uniform/checker materials and point lights.
        """
        self._width, self._height = check_dimensions(width, height)

        spheres = _collect_spheres(scene)
        lights = _collect_lights(scene)
        self._sphere_count = len(spheres)
        self._light_count = len(lights)

        # Fields need at least one element; the counters gate every loop
        n_spheres = max(self._sphere_count, 1)
        n_lights = max(self._light_count, 1)

        # Sphere storage: Structure of Arrays layout
        self._num_spheres = ti.field(dtype=ti.i32, shape=())
        self._sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=n_spheres)
        self._sphere_radii = ti.field(dtype=ti.f32, shape=n_spheres)
        self._material_types = ti.field(dtype=ti.i32, shape=n_spheres)
        self._checker_scales = ti.field(dtype=ti.f32, shape=n_spheres)
        # Slot 0 holds uniform / even-cell properties, slot 1 odd-cell properties
        self._diffuse = ti.Vector.field(3, dtype=ti.f32, shape=(n_spheres, 2))
        self._specular = ti.Vector.field(3, dtype=ti.f32, shape=(n_spheres, 2))
        self._shininess = ti.field(dtype=ti.f32, shape=(n_spheres, 2))

        # Light storage
        self._num_lights = ti.field(dtype=ti.i32, shape=())
        self._light_positions = ti.Vector.field(3, dtype=ti.f32, shape=n_lights)
        self._light_intensities = ti.Vector.field(3, dtype=ti.f32, shape=n_lights)
        self._light_falloff = ti.field(dtype=ti.i32, shape=n_lights)

        # Camera state
        self._eye = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._forward = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._right = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._up = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._near = ti.field(dtype=ti.f32, shape=())
        self._tan_half_h = ti.field(dtype=ti.f32, shape=())
        self._tan_half_v = ti.field(dtype=ti.f32, shape=())

        self._background = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._image = ti.Vector.field(3, dtype=ti.f32, shape=(self._height, self._width))
        # Set by the kernel when a light sits exactly on a shaded point
        self._degenerate_light = ti.field(dtype=ti.i32, shape=())

        self._upload_spheres(spheres, n_spheres)
        self._upload_lights(lights, n_lights)
        self._upload_camera(camera)
        self._background[None] = list(as_color(background).to_tuple())

        logger.debug(
            "Compiled scene for Taichi: %d spheres, %d lights, %dx%d",
            self._sphere_count,
            self._light_count,
            self._width,
            self._height,
        )

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def num_spheres(self) -> int:
        return self._sphere_count

    @property
    def num_lights(self) -> int:
        return self._light_count

    # =========================================================================
    # Scene upload (Python-side)
    # =========================================================================

    def _upload_spheres(self, spheres: list[Sphere], n: int) -> None:
        centers = np.zeros((n, 3), dtype=np.float32)
        radii = np.ones(n, dtype=np.float32)
        types = np.zeros(n, dtype=np.int32)
        scales = np.ones(n, dtype=np.float32)
        diffuse = np.zeros((n, 2, 3), dtype=np.float32)
        specular = np.zeros((n, 2, 3), dtype=np.float32)
        shininess = np.zeros((n, 2), dtype=np.float32)

        for i, sphere in enumerate(spheres):
            centers[i] = sphere.center.to_tuple()
            radii[i] = sphere.radius
            material = sphere.material
            types[i] = int(material.material_type)
            if material.material_type == MaterialType.CHECKER:
                scales[i] = material.scale
                slots = (material.even, material.odd)
            else:
                slots = (material.properties, material.properties)
            for slot, props in enumerate(slots):
                diffuse[i, slot], specular[i, slot], shininess[i, slot] = _properties_row(props)

        self._num_spheres[None] = len(spheres)
        self._sphere_centers.from_numpy(centers)
        self._sphere_radii.from_numpy(radii)
        self._material_types.from_numpy(types)
        self._checker_scales.from_numpy(scales)
        self._diffuse.from_numpy(diffuse)
        self._specular.from_numpy(specular)
        self._shininess.from_numpy(shininess)

    def _upload_lights(self, lights: list[PointLight], n: int) -> None:
        positions = np.zeros((n, 3), dtype=np.float32)
        intensities = np.zeros((n, 3), dtype=np.float32)
        falloff = np.zeros(n, dtype=np.int32)
        for i, light in enumerate(lights):
            positions[i] = light.position.to_tuple()
            intensities[i] = light.intensity.to_tuple()
            falloff[i] = 1 if light.falloff else 0

        self._num_lights[None] = len(lights)
        self._light_positions.from_numpy(positions)
        self._light_intensities.from_numpy(intensities)
        self._light_falloff.from_numpy(falloff)

    def _upload_camera(self, camera: Camera) -> None:
        self._eye[None] = list(camera.eye.to_tuple())
        self._forward[None] = list(camera.forward.to_tuple())
        self._right[None] = list(camera.right.to_tuple())
        self._up[None] = list(camera.up.to_tuple())
        self._near[None] = camera.near
        self._tan_half_h[None] = camera.tan_half_horizontal
        self._tan_half_v[None] = camera.tan_half_vertical

    # =========================================================================
    # Kernel-side shading
    # =========================================================================

    @ti.func
    def _shade(self, point, normal, view, index, slot):
        """Sum diffuse and specular contributions of all lights."""
        kd = self._diffuse[index, slot]
        ks = self._specular[index, slot]
        shininess = self._shininess[index, slot]

        color = vec3(0.0, 0.0, 0.0)
        for j in range(self._num_lights[None]):
            to_light_raw = self._light_positions[j] - point
            distance_squared = tm.dot(to_light_raw, to_light_raw)
            if distance_squared == 0.0:
                self._degenerate_light[None] = 1
            else:
                to_light = to_light_raw / ti.sqrt(distance_squared)
                n_dot_l = tm.dot(normal, to_light)
                if n_dot_l > 0.0:
                    intensity = self._light_intensities[j]
                    if self._light_falloff[j] == 1:
                        intensity = intensity / distance_squared
                    color += kd * intensity * n_dot_l
                    if shininess > 0.0:
                        reflected = reflect_ti(-to_light, normal)
                        r_dot_v = tm.dot(reflected, view)
                        if r_dot_v > 0.0:
                            color += ks * intensity * (r_dot_v**shininess)
        return color

    @ti.func
    def _trace(self, origin, direction):
        """Find the nearest sphere along a unit ray and shade it."""
        closest_t = T_MAX
        closest_index = -1
        for i in range(self._num_spheres[None]):
            t = hit_sphere(origin, direction, self._sphere_centers[i], self._sphere_radii[i])
            # Strict < keeps the first sphere on equal distances
            if t >= 0.0 and t < closest_t:
                closest_t = t
                closest_index = i

        color = self._background[None]
        if closest_index >= 0:
            point = point_at(origin, direction, closest_t)
            normal = (point - self._sphere_centers[closest_index]) / self._sphere_radii[
                closest_index
            ]
            slot = 0
            if self._material_types[closest_index] == CHECKER_MATERIAL:
                slot = ti.cast(
                    checker_parity_ti(point, self._checker_scales[closest_index]), ti.i32
                )
            color = self._shade(point, normal, -direction, closest_index, slot)
        return color

    @ti.kernel
    def _render_kernel(self, width: ti.i32, height: ti.i32):
        for row, col in ti.ndrange(height, width):
            u = 2.0 * (ti.cast(col, ti.f32) + 0.5) / ti.cast(width, ti.f32) - 1.0
            v = 1.0 - 2.0 * (ti.cast(row, ti.f32) + 0.5) / ti.cast(height, ti.f32)
            direction = tm.normalize(
                self._forward[None] * self._near[None]
                + self._right[None] * (u * self._tan_half_h[None])
                + self._up[None] * (v * self._tan_half_v[None])
            )
            self._image[row, col] = self._trace(self._eye[None], direction)

    # =========================================================================
    # Public API
    # =========================================================================

    def render(self) -> Raster:
        """Render the full image in one kernel launch.

        Returns:
            A completed raster (row 0 at the top).

        Raises:
            DegenerateNormalizationError: If a light coincides with a visible
                surface point, so the direction toward it is undefined.
        """
        self._degenerate_light[None] = 0
        self._render_kernel(self._width, self._height)
        if self._degenerate_light[None]:
            raise DegenerateNormalizationError(
                "A light lies exactly on a shaded surface point; direction to light is undefined"
            )
        return Raster.from_numpy(self._image.to_numpy().astype(np.float64))

    def get_image_numpy(self) -> np.ndarray:
        """Get the raw float32 image buffer of shape (height, width, 3)."""
        return self._image.to_numpy()


def _properties_row(props: MaterialProperties) -> tuple[tuple[float, ...], tuple[float, ...], float]:
    return props.diffuse.to_tuple(), props.specular.to_tuple(), props.shininess


def _collect_spheres(scene: Scene) -> list[Sphere]:
    spheres = []
    for i, primitive in enumerate(scene.primitives):
        if type(primitive) is not Sphere:
            raise UnsupportedSceneError(
                f"Taichi backend supports only Sphere primitives; primitive {i} is "
                f"{type(primitive).__name__}"
            )
        if type(primitive.material) not in (UniformMaterial, CheckerMaterial):
            raise UnsupportedSceneError(
                f"Taichi backend supports only UniformMaterial and CheckerMaterial; "
                f"primitive {i} uses {type(primitive.material).__name__}"
            )
        spheres.append(primitive)
    return spheres


def _collect_lights(scene: Scene) -> list[PointLight]:
    lights = []
    for i, light in enumerate(scene.lights):
        if type(light) is not PointLight:
            raise UnsupportedSceneError(
                f"Taichi backend supports only PointLight; light {i} is {type(light).__name__}"
            )
        lights.append(light)
    return lights
