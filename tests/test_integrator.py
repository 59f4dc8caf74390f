"""Tests for the Taichi integrator backend.

Tests cover:
- Agreement with the reference Python shader
- Tie-breaking and empty scenes
- Scene validation (unsupported primitives, materials, lights)
- Renderer integration with backend="taichi"

Kernel math runs in float32, so comparisons allow a small fraction of
pixels to differ on silhouettes and checker edges.
"""

import numpy as np
import pytest


def mismatch_fraction(a, b, tol=1e-3):
    """Fraction of pixels whose largest channel difference exceeds tol."""
    diff = np.abs(np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)).max(axis=2)
    return float((diff > tol).mean())


@pytest.fixture
def compact_scene():
    """Three spheres (one checkered) and two lights, one with falloff."""
    from raycore.camera.pinhole import Camera
    from raycore.core.vector import Color, Point, Vector
    from raycore.geometry.sphere import Sphere
    from raycore.lights.point import PointLight
    from raycore.materials.material import CheckerMaterial, MaterialProperties, UniformMaterial
    from raycore.scene.scene import Scene

    glossy = UniformMaterial(
        MaterialProperties(
            diffuse=Color(0.7, 0.2, 0.2), specular=Color(0.5, 0.5, 0.5), shininess=24.0
        )
    )
    matte = UniformMaterial(MaterialProperties(diffuse=Color(0.2, 0.3, 0.8)))
    checker = CheckerMaterial(
        even=MaterialProperties(diffuse=Color(0.9, 0.9, 0.2)),
        odd=MaterialProperties(diffuse=Color(0.1, 0.4, 0.1), specular=Color(0.2, 0.2, 0.2), shininess=8.0),
        scale=0.37,
    )
    scene = Scene(
        primitives=[
            Sphere(Point(0.0, 0.0, 0.0), 1.0, glossy),
            Sphere(Point(-1.8, 0.3, -1.0), 0.8, matte),
            Sphere(Point(1.7, -0.2, -0.5), 0.7, checker),
        ],
        lights=[
            PointLight(Point(3.0, 4.0, 5.0), Color(1.0, 1.0, 1.0)),
            PointLight(Point(-4.0, 1.0, 3.0), Color(12.0, 12.0, 12.0), falloff=True),
        ],
    )
    camera = Camera(
        Point(0.0, 0.5, 6.0),
        Point(0.0, 0.0, 0.0),
        Vector(0.0, 1.0, 0.0),
        fov_horizontal=50.0,
        fov_vertical=40.0,
    )
    return scene, camera


class TestIntegratorAgreement:
    """Tests comparing the Taichi kernel with the Python shader."""

    def test_single_sphere_matches_python(self):
        from raycore.core.integrator import TaichiIntegrator
        from raycore.core.renderer import render
        from raycore.scene.demo import create_single_sphere_scene

        scene, camera = create_single_sphere_scene()
        expected = render(scene, camera, 33, 33).to_numpy()
        actual = TaichiIntegrator(scene, camera, 33, 33).render().to_numpy()

        assert actual.shape == (33, 33, 3)
        assert mismatch_fraction(actual, expected) < 0.02
        np.testing.assert_allclose(actual[16, 16], expected[16, 16], atol=1e-4)

    def test_compact_scene_matches_python(self, compact_scene):
        from raycore.core.integrator import TaichiIntegrator
        from raycore.core.renderer import render
        from raycore.core.vector import Color

        scene, camera = compact_scene
        background = Color(0.05, 0.05, 0.1)
        expected = render(scene, camera, 40, 30, background=background).to_numpy()
        actual = TaichiIntegrator(scene, camera, 40, 30, background=background).render().to_numpy()

        assert mismatch_fraction(actual, expected) < 0.02

    def test_tie_goes_to_first_sphere(self, make_uniform, axis_camera):
        """Test that coincident spheres resolve to scene order in the kernel too."""
        from raycore.core.integrator import TaichiIntegrator
        from raycore.core.vector import Color, Point
        from raycore.geometry.sphere import Sphere
        from raycore.lights.point import PointLight
        from raycore.scene.scene import Scene

        red = Sphere(Point(0.0, 0.0, 0.0), 1.0, make_uniform(diffuse=(1.0, 0.0, 0.0)))
        green = Sphere(Point(0.0, 0.0, 0.0), 1.0, make_uniform(diffuse=(0.0, 1.0, 0.0)))
        light = PointLight(Point(0.0, 0.0, 10.0), Color(1.0, 1.0, 1.0))

        image = TaichiIntegrator(Scene([red, green], [light]), axis_camera, 5, 5).get_image_numpy()
        # Not rendered yet: buffer is zero
        assert np.all(image == 0.0)

        raster = TaichiIntegrator(Scene([red, green], [light]), axis_camera, 5, 5).render()
        center = raster.get_pixel(2, 2)
        assert center.r == pytest.approx(1.0, abs=1e-5)
        assert center.g == pytest.approx(0.0, abs=1e-6)

    def test_empty_scene_is_background(self, axis_camera):
        from raycore.core.integrator import TaichiIntegrator
        from raycore.core.vector import Color
        from raycore.scene.scene import Scene

        integrator = TaichiIntegrator(Scene(), axis_camera, 6, 4, background=Color(0.25, 0.5, 0.75))
        assert integrator.num_spheres == 0
        assert integrator.num_lights == 0
        image = integrator.render().to_numpy()
        np.testing.assert_allclose(image, np.broadcast_to([0.25, 0.5, 0.75], (4, 6, 3)))

    def test_demo_scene_renders(self):
        from raycore.core.integrator import TaichiIntegrator
        from raycore.scene.demo import DemoSceneParams, create_demo_scene

        scene, camera = create_demo_scene(DemoSceneParams(aspect_ratio=1.5))
        integrator = TaichiIntegrator(scene, camera, 24, 16)
        assert integrator.num_spheres == 4
        assert integrator.num_lights == 2
        image = integrator.render().to_numpy()
        assert np.all(np.isfinite(image))
        # Top-left looks above the horizon
        np.testing.assert_array_equal(image[0, 0], [0.0, 0.0, 0.0])


class TestIntegratorValidation:
    """Tests for scene compilation errors."""

    def test_custom_primitive_unsupported(self, make_uniform, axis_camera):
        from raycore.core.integrator import TaichiIntegrator
        from raycore.errors import UnsupportedSceneError
        from raycore.geometry.primitive import NO_HIT, Primitive
        from raycore.scene.scene import Scene

        class Nothing(Primitive):
            def intersect(self, origin, direction):
                return NO_HIT

            def surface_normal_at(self, point):
                raise AssertionError("never hit")

        with pytest.raises(UnsupportedSceneError):
            TaichiIntegrator(Scene([Nothing(make_uniform())]), axis_camera, 4, 4)

    def test_sphere_subclass_unsupported(self, make_uniform, axis_camera):
        """Test that subclasses are rejected since they may override intersect."""
        from raycore.core.integrator import TaichiIntegrator
        from raycore.core.vector import Point
        from raycore.errors import UnsupportedSceneError
        from raycore.geometry.sphere import Sphere
        from raycore.scene.scene import Scene

        class HollowSphere(Sphere):
            pass

        sphere = HollowSphere(Point(0.0, 0.0, 0.0), 1.0, make_uniform())
        with pytest.raises(UnsupportedSceneError):
            TaichiIntegrator(Scene([sphere]), axis_camera, 4, 4)

    def test_custom_material_unsupported(self, axis_camera):
        from raycore.core.integrator import TaichiIntegrator
        from raycore.core.vector import Color, Point
        from raycore.errors import UnsupportedSceneError
        from raycore.geometry.sphere import Sphere
        from raycore.materials.material import Material, MaterialProperties
        from raycore.scene.scene import Scene

        class Gray(Material):
            def get_properties(self, point):
                return MaterialProperties(diffuse=Color(0.5, 0.5, 0.5))

        sphere = Sphere(Point(0.0, 0.0, 0.0), 1.0, Gray())
        with pytest.raises(UnsupportedSceneError):
            TaichiIntegrator(Scene([sphere]), axis_camera, 4, 4)

    def test_custom_light_unsupported(self, axis_camera):
        from raycore.core.integrator import TaichiIntegrator
        from raycore.core.vector import Color, Vector
        from raycore.errors import UnsupportedSceneError
        from raycore.lights.point import Light
        from raycore.scene.scene import Scene

        class Sun(Light):
            def direction_to(self, point):
                return Vector(0.0, 1.0, 0.0)

            def intensity_at(self, point):
                return Color(1.0, 1.0, 1.0)

        with pytest.raises(UnsupportedSceneError):
            TaichiIntegrator(Scene(lights=[Sun()]), axis_camera, 4, 4)

    @pytest.mark.parametrize("width,height", [(0, 4), (4, -1), (2.5, 4), (4, 3.0)])
    def test_invalid_dimensions(self, axis_camera, width, height):
        """Test that sizes are checked the same way Raster checks them."""
        from raycore.core.integrator import TaichiIntegrator
        from raycore.errors import RasterError
        from raycore.scene.scene import Scene

        with pytest.raises(RasterError):
            TaichiIntegrator(Scene(), axis_camera, width, height)

    def test_light_on_visible_surface_raises(self, make_uniform, axis_camera):
        """Test that a light sitting on a shaded point fails like the Python shader."""
        from raycore.core.integrator import TaichiIntegrator
        from raycore.core.renderer import render
        from raycore.core.vector import Color, Point
        from raycore.errors import DegenerateNormalizationError
        from raycore.geometry.sphere import Sphere
        from raycore.lights.point import PointLight
        from raycore.scene.scene import Scene

        scene = Scene(
            primitives=[Sphere(Point(0.0, 0.0, 0.0), 1.0, make_uniform())],
            lights=[PointLight(Point(0.0, 0.0, 1.0), Color(1.0, 1.0, 1.0))],
        )
        with pytest.raises(DegenerateNormalizationError):
            render(scene, axis_camera, 3, 3)

        integrator = TaichiIntegrator(scene, axis_camera, 3, 3)
        with pytest.raises(DegenerateNormalizationError):
            integrator.render()

    def test_repeated_render_is_stable(self, make_uniform, axis_camera):
        """Test that rendering twice gives the same lit image."""
        from raycore.core.integrator import TaichiIntegrator
        from raycore.core.vector import Color, Point
        from raycore.geometry.sphere import Sphere
        from raycore.lights.point import PointLight
        from raycore.scene.scene import Scene

        scene = Scene(
            primitives=[Sphere(Point(0.0, 0.0, 0.0), 1.0, make_uniform())],
            lights=[PointLight(Point(0.0, 0.0, 5.0), Color(1.0, 1.0, 1.0))],
        )
        integrator = TaichiIntegrator(scene, axis_camera, 3, 3)
        first = integrator.render()
        second = integrator.render()
        assert first.get_pixel(1, 1).r == pytest.approx(0.8, abs=1e-5)
        np.testing.assert_array_equal(first.to_numpy(), second.to_numpy())

    def test_material_codes_uploaded(self, compact_scene):
        """Test that each sphere carries its material_type code."""
        from raycore.core.integrator import TaichiIntegrator
        from raycore.materials.material import MaterialType

        scene, camera = compact_scene
        integrator = TaichiIntegrator(scene, camera, 4, 4)
        codes = integrator._material_types.to_numpy().tolist()
        assert codes == [MaterialType.UNIFORM, MaterialType.UNIFORM, MaterialType.CHECKER]


class TestTaichiRenderer:
    """Tests for Renderer with backend="taichi"."""

    def test_renderer_taichi_backend(self, compact_scene):
        from raycore.config import RenderConfig
        from raycore.core.renderer import Renderer

        scene, camera = compact_scene
        python = Renderer(scene, camera, RenderConfig(width=20, height=15)).render()
        calls = []
        renderer = Renderer(scene, camera, RenderConfig(width=20, height=15, backend="taichi"))
        taichi = renderer.render(callback=lambda done, total: calls.append((done, total)))

        assert calls == [(15, 15)]
        assert taichi.is_complete
        assert mismatch_fraction(taichi.to_numpy(), python.to_numpy()) < 0.02

    def test_unsupported_scene_fails_at_construction(self, axis_camera):
        from raycore.config import RenderConfig
        from raycore.core.renderer import Renderer
        from raycore.core.vector import Color, Vector
        from raycore.errors import UnsupportedSceneError
        from raycore.lights.point import Light
        from raycore.scene.scene import Scene

        class Sun(Light):
            def direction_to(self, point):
                return Vector(0.0, 1.0, 0.0)

            def intensity_at(self, point):
                return Color(1.0, 1.0, 1.0)

        with pytest.raises(UnsupportedSceneError):
            Renderer(Scene(lights=[Sun()]), axis_camera, RenderConfig(backend="taichi"))
