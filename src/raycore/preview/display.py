"""Display-side processing and Matplotlib preview windows.

Shaded colors are unbounded: several lights add up, and a bright highlight
easily exceeds 1. Before such a raster can be shown or stored in 8 bits it
passes through the display pipeline defined here:

    raster -> tone map -> gamma -> clamp to [0, 1]

Tone maps:
    "none":     values pass through and are clipped by the final clamp
    "reinhard": c / (1 + c), compresses highlights smoothly
    "exposure": 1 - exp(-c * exposure), film-like response

The preview windows (show_preview, show_comparison) import Matplotlib on
first use, so the rest of the package never pulls in a GUI backend.

Example:
    >>> from raycore.preview.display import show_comparison
    >>> from raycore.core.renderer import Renderer
    >>> rmse = show_comparison(python_raster, taichi_raster, labels=("python", "taichi"))
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Literal

import numpy as np
import numpy.typing as npt

from raycore.core.raster import Raster

ToneMapMethod = Literal["none", "reinhard", "exposure"]

ImageLike = Raster | npt.NDArray[np.floating]


def as_image_array(image: ImageLike) -> npt.NDArray[np.float32]:
    """Return an (H, W, 3) float32 array for a raster or an array.

    Raises:
        ValueError: If the array does not have shape (H, W, 3).
    """
    if isinstance(image, Raster):
        return image.to_numpy(np.float32)
    array = np.asarray(image, dtype=np.float32)
    if array.ndim != 3 or array.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {array.shape}")
    return array


def tone_map_reinhard(image: npt.NDArray[np.float32]) -> npt.NDArray[np.float32]:
    """Compress each channel with c / (1 + c).

    Negative channels are treated as 0. The result lies in [0, 1).
    """
    positive = np.clip(image, 0.0, None)
    return (positive / (positive + 1.0)).astype(np.float32)


def tone_map_exposure(
    image: npt.NDArray[np.float32],
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Map each channel with 1 - exp(-c * exposure).

    Args:
        image: Linear image of shape (H, W, 3).
        exposure: Scale applied before the curve; larger is brighter.

    Returns:
        Image in [0, 1).
    """
    positive = np.clip(image, 0.0, None)
    return (-np.expm1(-exposure * positive)).astype(np.float32)


def apply_gamma(
    image: npt.NDArray[np.float32],
    gamma: float = 2.2,
) -> npt.NDArray[np.float32]:
    """Raise each channel to 1 / gamma.

    A gamma of 1.0 returns the input untouched. Otherwise the image is
    clamped to [0, 1] first, since fractional powers of negative values are
    undefined.
    """
    if gamma == 1.0:
        return image
    return (np.clip(image, 0.0, 1.0) ** (1.0 / gamma)).astype(np.float32)


def _no_tone_map(image: npt.NDArray[np.float32], exposure: float) -> npt.NDArray[np.float32]:
    return image


def _reinhard(image: npt.NDArray[np.float32], exposure: float) -> npt.NDArray[np.float32]:
    return tone_map_reinhard(image)


_TONE_MAPS: dict[str, Callable[[npt.NDArray[np.float32], float], npt.NDArray[np.float32]]] = {
    "none": _no_tone_map,
    "reinhard": _reinhard,
    "exposure": tone_map_exposure,
}


def process_image_for_display(
    image: ImageLike,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Run the display pipeline on a raster or image array.

    Args:
        image: Raster or linear image array of shape (H, W, 3).
        tone_map: One of "none", "reinhard" or "exposure".
        gamma: Display gamma (default 1.0, linear; 2.2 approximates sRGB).
        exposure: Only used by the "exposure" tone map.

    Returns:
        A new float32 array in [0, 1]; the input is never modified.

    Raises:
        ValueError: If tone_map is not a known method.
    """
    try:
        mapper = _TONE_MAPS[tone_map]
    except KeyError:
        raise ValueError(f"Unknown tone mapping method: {tone_map}") from None

    linear = as_image_array(image).copy()
    corrected = apply_gamma(mapper(linear, exposure), gamma)
    return np.clip(corrected, 0.0, 1.0).astype(np.float32)


def show_preview(
    image: ImageLike,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Open a Matplotlib window showing a rendered image.

    Args:
        image: The raster (or image array) to show.
        tone_map: Tone map applied before display.
        gamma: Display gamma (default 1.0, linear).
        exposure: Only used by the "exposure" tone map.
        title: Window title. Defaults to the resolution and tone map.
        figsize: Figure size in inches.
        block: Block until the window is closed.
    """
    import matplotlib.pyplot as plt

    pixels = process_image_for_display(image, tone_map=tone_map, gamma=gamma, exposure=exposure)
    height, width = pixels.shape[:2]
    if title is None:
        title = f"{width}x{height}"
        if tone_map != "none":
            title = f"{title}, {tone_map} tone map"

    fig, ax = plt.subplots(figsize=figsize)
    ax.imshow(pixels, interpolation="nearest")
    ax.set_axis_off()
    ax.set_title(title)
    fig.tight_layout()
    plt.show(block=block)


def show_comparison(
    image_a: ImageLike,
    image_b: ImageLike,
    *,
    labels: tuple[str, str] = ("python", "taichi"),
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    diff_scale: float = 10.0,
    figsize: tuple[float, float] = (16, 6),
    block: bool = True,
) -> float:
    """Show two renders of the same scene and their amplified difference.

    Typically used to check the Taichi backend against the Python shader.

    Args:
        image_a: First raster or image array.
        image_b: Second raster or image array, same shape as image_a.
        labels: Panel titles for the two images.
        tone_map: Tone map applied to both images.
        gamma: Display gamma applied to both images.
        diff_scale: Multiplier for the difference panel.
        figsize: Figure size in inches.
        block: Block until the window is closed.

    Returns:
        RMSE between the two images after display processing.

    Raises:
        ValueError: If the images differ in shape.
    """
    import matplotlib.pyplot as plt

    shown_a = process_image_for_display(image_a, tone_map=tone_map, gamma=gamma)
    shown_b = process_image_for_display(image_b, tone_map=tone_map, gamma=gamma)
    if shown_a.shape != shown_b.shape:
        raise ValueError(f"Image shapes must match: {shown_a.shape} vs {shown_b.shape}")

    delta = np.abs(shown_a.astype(np.float64) - shown_b.astype(np.float64))
    rmse = float(np.sqrt(np.mean(np.square(delta))))

    diff_title = f"|{labels[0]} - {labels[1]}| x{diff_scale:g}, RMSE {rmse:.6f}"
    panels = (
        (shown_a, labels[0]),
        (shown_b, labels[1]),
        (np.clip(delta * diff_scale, 0.0, 1.0), diff_title),
    )
    fig, axes = plt.subplots(1, len(panels), figsize=figsize)
    for ax, (pixels, panel_title) in zip(axes, panels):
        ax.imshow(pixels, interpolation="nearest")
        ax.set_title(panel_title)
        ax.set_axis_off()
    fig.tight_layout()
    plt.show(block=block)
    return rmse
