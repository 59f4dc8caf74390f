"""Tests for the render loop, the Renderer class and RenderConfig.

Tests cover:
- One pixel per raster cell, each written once
- End-to-end single-sphere image values
- Progress callback reporting
- RenderConfig validation
- Renderer output (NumPy, PPM, PNG)
"""

import math

import numpy as np
import pytest


class TestRenderFunction:
    """Tests for the reference render() loop."""

    def test_raster_is_complete(self):
        """Test that every pixel is written exactly once."""
        from raycore.core.renderer import render
        from raycore.scene.demo import create_single_sphere_scene

        scene, camera = create_single_sphere_scene()
        raster = render(scene, camera, 7, 5)
        assert raster.width == 7
        assert raster.height == 5
        assert raster.is_complete
        assert raster.pixels_written == 35

    def test_single_sphere_center_pixel(self):
        """Test the center pixel of the reference scene against the closed form."""
        from raycore.core.renderer import render
        from raycore.scene.demo import create_single_sphere_scene

        scene, camera = create_single_sphere_scene()
        raster = render(scene, camera, 33, 33)

        # Hit point (0, 0, 1), normal (0, 0, 1), light direction (0, 5, 4) / sqrt(41).
        # The specular term 0.5 * (4 / sqrt(41))^32 is below 1e-6.
        cos = 4.0 / math.sqrt(41.0)
        center = raster.get_pixel(16, 16)
        assert center.r == pytest.approx(0.8 * cos, abs=1e-4)
        assert center.g == pytest.approx(0.3 * cos, abs=1e-4)
        assert center.b == pytest.approx(0.3 * cos, abs=1e-4)

    def test_single_sphere_corner_is_background(self):
        """Test that a corner pixel misses the sphere."""
        from raycore.core.renderer import render
        from raycore.core.vector import Color
        from raycore.scene.demo import create_single_sphere_scene

        scene, camera = create_single_sphere_scene()
        background = Color(0.1, 0.2, 0.3)
        raster = render(scene, camera, 33, 33, background=background)
        for col, row in ((0, 0), (32, 0), (0, 32), (32, 32)):
            assert raster.get_pixel(col, row) == background

    def test_top_row_is_brighter(self):
        """Test that the light above the sphere lights the upper half (row 0 on top)."""
        from raycore.core.renderer import render
        from raycore.scene.demo import create_single_sphere_scene

        scene, camera = create_single_sphere_scene()
        raster = render(scene, camera, 33, 33)
        upper = raster.get_pixel(16, 12)
        lower = raster.get_pixel(16, 20)
        assert upper.r > lower.r

    def test_progress_callback(self):
        """Test that the callback sees every row in order."""
        from raycore.core.renderer import render
        from raycore.scene.demo import create_single_sphere_scene

        scene, camera = create_single_sphere_scene()
        calls = []
        render(scene, camera, 4, 3, callback=lambda done, total: calls.append((done, total)))
        assert calls == [(1, 3), (2, 3), (3, 3)]

    def test_invalid_size(self):
        from raycore.core.renderer import render
        from raycore.errors import RasterError
        from raycore.scene.demo import create_single_sphere_scene

        scene, camera = create_single_sphere_scene()
        with pytest.raises(RasterError):
            render(scene, camera, 0, 10)

    def test_shading_error_aborts_render(self, make_uniform, axis_camera):
        """Test that a shading failure propagates out of the loop."""
        from raycore.core.renderer import render
        from raycore.core.vector import Color, Point
        from raycore.errors import DegenerateNormalizationError
        from raycore.geometry.sphere import Sphere
        from raycore.lights.point import PointLight
        from raycore.scene.scene import Scene

        # The center pixel of a 1x1 image hits (0, 0, 1), exactly where the light is
        scene = Scene(
            primitives=[Sphere(Point(0.0, 0.0, 0.0), 1.0, make_uniform())],
            lights=[PointLight(Point(0.0, 0.0, 1.0), Color(1.0, 1.0, 1.0))],
        )
        with pytest.raises(DegenerateNormalizationError):
            render(scene, axis_camera, 1, 1)


class TestRenderConfig:
    """Tests for RenderConfig validation."""

    def test_defaults(self):
        from raycore.config import RenderConfig
        from raycore.core.vector import BLACK

        config = RenderConfig()
        assert config.width == 256
        assert config.height == 256
        assert config.backend == "python"
        assert config.background == BLACK
        assert config.gamma == 1.0

    def test_aspect_ratio(self):
        from raycore.config import RenderConfig

        assert RenderConfig(width=320, height=240).aspect_ratio == pytest.approx(4.0 / 3.0)

    def test_background_tuple_coerced(self):
        from raycore.config import RenderConfig
        from raycore.core.vector import Color

        assert RenderConfig(background=(0.5, 0.5, 1.0)).background == Color(0.5, 0.5, 1.0)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"width": 0},
            {"height": -5},
            {"backend": "cuda"},
            {"tone_map": "filmic"},
            {"gamma": 0.0},
            {"exposure": -1.0},
        ],
    )
    def test_invalid_values(self, kwargs):
        from raycore.config import RenderConfig

        with pytest.raises(ValueError):
            RenderConfig(**kwargs)


class TestRenderer:
    """Tests for the Renderer wrapper (python backend)."""

    @pytest.fixture
    def renderer(self):
        from raycore.config import RenderConfig
        from raycore.core.renderer import Renderer
        from raycore.scene.demo import create_single_sphere_scene

        scene, camera = create_single_sphere_scene()
        return Renderer(scene, camera, RenderConfig(width=9, height=7))

    def test_dimensions(self, renderer):
        assert renderer.width == 9
        assert renderer.height == 7
        assert renderer.raster is None

    def test_render_matches_function(self, renderer):
        """Test that the wrapper produces the same raster as render()."""
        from raycore.core.renderer import render
        from raycore.scene.demo import create_single_sphere_scene

        scene, camera = create_single_sphere_scene()
        expected = render(scene, camera, 9, 7).to_numpy()
        raster = renderer.render()
        assert renderer.raster is raster
        np.testing.assert_array_equal(renderer.get_image_numpy(), expected)

    def test_image_before_render_raises(self, renderer):
        with pytest.raises(RuntimeError):
            renderer.get_image_numpy()
        with pytest.raises(RuntimeError):
            renderer.save_image("never.png")

    def test_save_ppm(self, renderer, tmp_path):
        """Test that a .ppm path is written as ASCII P3."""
        renderer.render()
        path = tmp_path / "out.ppm"
        renderer.save_image(str(path))
        lines = path.read_text().splitlines()
        assert lines[:3] == ["P3", "9 7", "255"]
        assert len(lines) == 3 + 9 * 7

    def test_save_png(self, renderer, tmp_path):
        """Test that other extensions go through Pillow."""
        from PIL import Image

        renderer.render()
        path = tmp_path / "out.png"
        renderer.save_image(str(path))
        with Image.open(path) as image:
            assert image.size == (9, 7)
            assert image.mode == "RGB"
