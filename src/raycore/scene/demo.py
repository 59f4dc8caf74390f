"""Ready-made test scenes.

This module provides factory functions for small scenes used by the example
scripts and the integration tests. Each factory returns a (Scene, Camera)
pair; the raster size is chosen by the caller.

Scenes:
    create_single_sphere_scene: a unit sphere at the origin lit by one point
        light, viewed from +Z. The reference end-to-end scene.
    create_demo_scene: three spheres (two uniform, one checkered) on a large
        checkered "floor" sphere, lit by a key and a fill light.

Example:
    >>> from raycore.scene.demo import create_single_sphere_scene
    >>> from raycore.core.renderer import render
    >>> scene, camera = create_single_sphere_scene()
    >>> raster = render(scene, camera, 64, 64)
"""

from dataclasses import dataclass

from raycore.camera.pinhole import Camera
from raycore.core.vector import Color, Point, Vector
from raycore.geometry.sphere import Sphere
from raycore.lights.point import PointLight
from raycore.materials.material import CheckerMaterial, MaterialProperties, UniformMaterial
from raycore.scene.scene import Scene

# =============================================================================
# Demo Scene Parameters
# =============================================================================


@dataclass
class DemoSceneParams:
    """Parameters for configuring the demo scene.

    Attributes:
        key_light_intensity: Brightness of the key light (gray level).
        fill_light_intensity: Brightness of the fill light (gray level).
        red_shininess: Phong exponent of the red sphere.
        checker_scale: Cell size of the checkered materials.
        aspect_ratio: Width / height of the intended raster.
    """

    key_light_intensity: float = 0.9
    fill_light_intensity: float = 0.3
    red_shininess: float = 32.0
    checker_scale: float = 0.5
    aspect_ratio: float = 1.0


# =============================================================================
# Single Sphere Constants
# =============================================================================

SINGLE_SPHERE_DIFFUSE = (0.8, 0.3, 0.3)
SINGLE_SPHERE_SPECULAR = (0.5, 0.5, 0.5)
SINGLE_SPHERE_SHININESS = 32.0
SINGLE_LIGHT_POSITION = (0.0, 5.0, 5.0)
SINGLE_LIGHT_INTENSITY = (1.0, 1.0, 1.0)
SINGLE_CAMERA_EYE = (0.0, 0.0, 5.0)


def create_single_sphere_scene(
    fov: float = 60.0,
    near: float = 1.0,
) -> tuple[Scene, Camera]:
    """Create the reference single-sphere scene.

    A sphere of radius 1 centered at the origin, one point light at (0, 5, 5)
    with intensity (1, 1, 1), and a camera at (0, 0, 5) looking at the origin
    with world-up (0, 1, 0).

    Args:
        fov: Horizontal and vertical field of view in degrees.
        near: Image-plane distance.

    Returns:
        A tuple of (Scene, Camera).
    """
    material = UniformMaterial(
        MaterialProperties(
            diffuse=Color(*SINGLE_SPHERE_DIFFUSE),
            specular=Color(*SINGLE_SPHERE_SPECULAR),
            shininess=SINGLE_SPHERE_SHININESS,
        )
    )
    sphere = Sphere(Point(0.0, 0.0, 0.0), 1.0, material)
    light = PointLight(Point(*SINGLE_LIGHT_POSITION), Color(*SINGLE_LIGHT_INTENSITY))
    camera = Camera(
        eye=Point(*SINGLE_CAMERA_EYE),
        target=Point(0.0, 0.0, 0.0),
        world_up=Vector(0.0, 1.0, 0.0),
        near=near,
        fov_horizontal=fov,
        fov_vertical=fov,
    )
    return Scene(primitives=[sphere], lights=[light]), camera


def create_demo_scene(params: DemoSceneParams | None = None) -> tuple[Scene, Camera]:
    """Create a small multi-sphere scene.

    The scene contains:
    - A huge sphere acting as a checkered floor below y = -1
    - A red glossy sphere in the center
    - A blue matte sphere on the left
    - A checkered sphere on the right
    - A white key light above-right and a dim fill light on the left

    Args:
        params: Optional DemoSceneParams. If None, uses DemoSceneParams().

    Returns:
        A tuple of (Scene, Camera).
    """
    if params is None:
        params = DemoSceneParams()

    floor = Sphere(
        Point(0.0, -1001.0, 0.0),
        1000.0,
        CheckerMaterial(
            even=MaterialProperties(diffuse=Color(0.9, 0.9, 0.9)),
            odd=MaterialProperties(diffuse=Color(0.2, 0.2, 0.2)),
            scale=params.checker_scale * 2.0,
        ),
    )
    red = Sphere(
        Point(0.0, 0.0, 0.0),
        1.0,
        UniformMaterial(
            MaterialProperties(
                diffuse=Color(0.8, 0.2, 0.2),
                specular=Color(0.6, 0.6, 0.6),
                shininess=params.red_shininess,
            )
        ),
    )
    blue = Sphere(
        Point(-2.2, -0.3, -1.0),
        0.7,
        UniformMaterial(MaterialProperties(diffuse=Color(0.2, 0.3, 0.85))),
    )
    checkered = Sphere(
        Point(2.0, -0.4, -0.5),
        0.6,
        CheckerMaterial(
            even=MaterialProperties(
                diffuse=Color(0.95, 0.85, 0.2),
                specular=Color(0.3, 0.3, 0.3),
                shininess=16.0,
            ),
            odd=MaterialProperties(diffuse=Color(0.1, 0.5, 0.15)),
            scale=params.checker_scale * 0.5,
        ),
    )

    key = PointLight(Point(4.0, 6.0, 5.0), Color(1.0, 1.0, 1.0) * params.key_light_intensity)
    fill = PointLight(Point(-6.0, 2.0, 3.0), Color(0.8, 0.85, 1.0) * params.fill_light_intensity)

    camera = Camera.from_vertical_fov(
        eye=Point(0.0, 1.0, 6.0),
        target=Point(0.0, -0.2, 0.0),
        world_up=Vector(0.0, 1.0, 0.0),
        vfov=45.0,
        aspect_ratio=params.aspect_ratio,
    )

    scene = Scene(primitives=[floor, red, blue, checkered], lights=[key, fill])
    return scene, camera
