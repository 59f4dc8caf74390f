"""Image export utilities for rendered rasters.

This module is the output encoder: it turns a finished raster of unbounded
float colors into an image file. Clamping and quantization happen here, never
in the renderer.

Supported formats:
    - PPM (ASCII P3, no third-party dependency)
    - PNG (8-bit via Pillow, with tone mapping and gamma)

Example:
    >>> from raycore.preview.export import save_png, save_ppm
    >>> from raycore.core.renderer import render
    >>>
    >>> raster = render(scene, camera, 256, 256)
    >>> save_ppm(raster, "output.ppm")
    >>> save_png(raster, "output.png", tone_map="reinhard", gamma=2.2)
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from raycore.core.raster import Raster
from raycore.preview.display import ToneMapMethod, as_image_array, process_image_for_display

logger = logging.getLogger(__name__)

# Multiplier mapping [0, 1] onto 0..255 with truncation
PPM_SCALE = 255.99


def quantize_ppm(image: Raster | npt.NDArray[np.float32]) -> npt.NDArray[np.int32]:
    """Quantize an image to 0..255 integers the way save_ppm does.

    Each channel is clamped to [0, 1] and multiplied by 255.99, then truncated.

    Args:
        image: Raster or linear image array of shape (H, W, 3).

    Returns:
        Integer array of shape (H, W, 3).
    """
    array = np.clip(as_image_array(image).astype(np.float64), 0.0, 1.0)
    return (array * PPM_SCALE).astype(np.int32)


def save_ppm(image: Raster | npt.NDArray[np.float32], filepath: str | Path) -> None:
    """Save an image as an ASCII (P3) PPM file.

    The file holds the header ``P3``, ``<width> <height>`` and ``255``,
    followed by one ``r g b`` line per pixel in row-major order, top row first.

    Args:
        image: Raster or linear image array of shape (H, W, 3).
        filepath: Output file path.
    """
    samples = quantize_ppm(image)
    height, width = samples.shape[:2]

    lines = [f"P3\n{width} {height}\n255\n"]
    lines.extend(f"{r} {g} {b}\n" for r, g, b in samples.reshape(-1, 3))

    path = Path(filepath)
    with path.open("w", encoding="ascii") as file:
        file.writelines(lines)
    logger.info("Image saved to %s", path)


def save_png(
    image: Raster | npt.NDArray[np.float32],
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> None:
    """Encode an image as an 8-bit RGB PNG through Pillow.

    The image runs through the display pipeline (tone map, gamma, clamp)
    before quantization.

    Args:
        image: Raster or linear image array of shape (H, W, 3).
        filepath: Destination path.
        tone_map: One of "none", "reinhard" or "exposure".
        gamma: Display gamma (default 1.0, linear).
        exposure: Only used by the "exposure" tone map.
    """
    PILImage.fromarray(
        image_to_uint8(image, tone_map=tone_map, gamma=gamma, exposure=exposure)
    ).save(str(filepath))
    logger.info("Image saved to %s", filepath)


def image_to_uint8(
    image: Raster | npt.NDArray[np.float32],
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Quantize an image for 8-bit output.

    Display values in [0, 1] are scaled by 255 and truncated.

    Returns:
        Array of shape (H, W, 3) with dtype uint8.
    """
    display = process_image_for_display(image, tone_map=tone_map, gamma=gamma, exposure=exposure)
    return (display * 255).astype(np.uint8)


def compute_rmse(
    image_a: Raster | npt.NDArray[np.floating],
    image_b: Raster | npt.NDArray[np.floating],
) -> float:
    """Root mean squared difference over every channel of two images.

    Used to compare backends; 0.0 means identical output.

    Raises:
        ValueError: If the two images differ in shape.
    """
    a = as_image_array(image_a).astype(np.float64)
    b = as_image_array(image_b).astype(np.float64)
    if a.shape != b.shape:
        raise ValueError(f"Image shapes must match: {a.shape} vs {b.shape}")
    return float(np.sqrt(np.mean(np.square(a - b))))
