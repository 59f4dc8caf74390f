"""Preview module for output and visualization.

This module handles rendering output and preview:

Components:
    display: Matplotlib-based preview display and tone mapping
    export: PPM/PNG image export (the output encoder)

The renderer hands over an unclamped float raster; everything that bounds
values to [0, 1] (tone mapping, gamma, clamping, quantization) lives here.

Example:
    >>> from raycore.preview import show_preview, save_png
    >>> show_preview(raster, tone_map="reinhard")
    >>> save_png(raster, "output.png", gamma=2.2)
"""

from raycore.preview.display import (
    ToneMapMethod,
    apply_gamma,
    as_image_array,
    process_image_for_display,
    show_comparison,
    show_preview,
    tone_map_exposure,
    tone_map_reinhard,
)
from raycore.preview.export import (
    compute_rmse,
    image_to_uint8,
    quantize_ppm,
    save_png,
    save_ppm,
)

__all__ = [
    # Display functions
    "show_preview",
    "show_comparison",
    # Tone mapping
    "tone_map_reinhard",
    "tone_map_exposure",
    "apply_gamma",
    "process_image_for_display",
    "as_image_array",
    "ToneMapMethod",
    # Export functions
    "save_ppm",
    "save_png",
    "image_to_uint8",
    "quantize_ppm",
    "compute_rmse",
]
