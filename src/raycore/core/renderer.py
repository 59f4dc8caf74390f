"""Render loop and backend selection.

This module drives the camera and shader over every pixel of a raster. Two
backends evaluate the same shading model:

    "python": the reference Shader, one pixel at a time (render())
    "taichi": TaichiIntegrator, one parallel kernel launch per image

The Renderer class wraps either backend behind one interface configured by a
RenderConfig, and provides NumPy and file output for the finished raster.

Example:
    >>> from raycore.config import RenderConfig
    >>> from raycore.core.renderer import Renderer
    >>> from raycore.scene.demo import create_single_sphere_scene
    >>>
    >>> scene, camera = create_single_sphere_scene()
    >>> renderer = Renderer(scene, camera, RenderConfig(width=128, height=128))
    >>> raster = renderer.render()
    >>> renderer.save_image("sphere.png")
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import numpy as np
import numpy.typing as npt

from raycore.camera.pinhole import Camera
from raycore.config import RenderConfig
from raycore.core.raster import Raster
from raycore.core.shader import Shader
from raycore.core.vector import BLACK, Color
from raycore.scene.scene import Scene

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


def render(
    scene: Scene,
    camera: Camera,
    width: int,
    height: int,
    background: Color = BLACK,
    callback: ProgressCallback | None = None,
) -> Raster:
    """Render a scene with the reference Python shader.

    Pixels are visited row by row from the top; each is written exactly once.

    Args:
        scene: The scene to render.
        camera: The camera generating primary rays.
        width: Image width in pixels.
        height: Image height in pixels.
        background: Color for pixels whose ray hits nothing.
        callback: Optional callback called after each row with
            (rows_done, total_rows).

    Returns:
        The completed raster.

    Raises:
        RasterError: If the dimensions are invalid.
        RenderError: If shading fails (the render is aborted).
    """
    raster = Raster(width, height)
    shader = Shader(scene, background=background)

    logger.debug("Rendering %dx%d with %r (python backend)", width, height, scene)
    for row in range(height):
        for col in range(width):
            ray = camera.ray_for_pixel(col, row, width, height)
            raster.set_pixel(col, row, shader.trace(ray))
        if callback is not None:
            callback(row + 1, height)
    return raster


class Renderer:
    """Renders a scene to a raster with the configured backend.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        config: The render configuration.
    """

    def __init__(self, scene: Scene, camera: Camera, config: RenderConfig | None = None) -> None:
        """Initialize the renderer.

        For the Taichi backend the scene is compiled into kernel fields here,
        so unsupported scenes fail before rendering starts. Taichi must
        already be initialized (ti.init) by the caller.

        Args:
            scene: The scene to render.
            camera: The camera generating primary rays.
            config: Render configuration. Defaults to RenderConfig().

        Raises:
            UnsupportedSceneError: If the Taichi backend cannot compile the scene.
        """
        self._scene = scene
        self._camera = camera
        self._config = config if config is not None else RenderConfig()
        self._raster: Raster | None = None
        self._integrator = None

        if self._config.backend == "taichi":
            # Deferred so the Python backend never touches Taichi runtime state
            from raycore.core.integrator import TaichiIntegrator

            self._integrator = TaichiIntegrator(
                scene,
                camera,
                self._config.width,
                self._config.height,
                background=self._config.background,
            )

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._config.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._config.height

    @property
    def config(self) -> RenderConfig:
        return self._config

    @property
    def raster(self) -> Raster | None:
        """The last rendered raster, or None before the first render."""
        return self._raster

    def render(self, callback: ProgressCallback | None = None) -> Raster:
        """Render the full image.

        Args:
            callback: Optional progress callback receiving (rows_done, total_rows).
                The Taichi backend renders in one launch and reports once.

        Returns:
            The completed raster.
        """
        start_time = time.perf_counter()
        if self._integrator is not None:
            raster = self._integrator.render()
            if callback is not None:
                callback(self.height, self.height)
        else:
            raster = render(
                self._scene,
                self._camera,
                self.width,
                self.height,
                background=self._config.background,
                callback=callback,
            )
        self._raster = raster
        logger.info(
            "Rendered %dx%d (%s backend) in %.3fs",
            self.width,
            self.height,
            self._config.backend,
            time.perf_counter() - start_time,
        )
        return raster

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Get the rendered image as an unclamped (H, W, 3) float32 array.

        Raises:
            RuntimeError: If nothing has been rendered yet.
        """
        return self._require_raster().to_numpy(np.float32)

    def save_image(self, filepath: str) -> None:
        """Save the rendered image.

        Files ending in .ppm are written as ASCII PPM; anything else goes
        through Pillow with the configured tone mapping and gamma.

        Args:
            filepath: Output path.

        Raises:
            RuntimeError: If nothing has been rendered yet.
        """
        from raycore.preview.export import save_png, save_ppm

        raster = self._require_raster()
        if filepath.lower().endswith(".ppm"):
            save_ppm(raster, filepath)
        else:
            save_png(
                raster,
                filepath,
                tone_map=self._config.tone_map,
                gamma=self._config.gamma,
                exposure=self._config.exposure,
            )

    def _require_raster(self) -> Raster:
        if self._raster is None:
            raise RuntimeError("Nothing rendered yet. Call render() first.")
        return self._raster

    def __repr__(self) -> str:
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"backend={self._config.backend!r})"
        )
