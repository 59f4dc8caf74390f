"""Render configuration.

RenderConfig collects the knobs of a render that are not part of the scene:
raster size, background color, backend and output processing. It is built
directly in code or from command-line flags by the example scripts.

Example:
    >>> from raycore.config import RenderConfig
    >>> config = RenderConfig(width=320, height=240, backend="taichi")
    >>> config.aspect_ratio
    1.3333333333333333
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from raycore.core.vector import BLACK, Color, as_color

# Type alias for backend options
Backend = Literal["python", "taichi"]

BACKENDS: tuple[str, ...] = ("python", "taichi")
TONE_MAPS: tuple[str, ...] = ("none", "reinhard", "exposure")


@dataclass
class RenderConfig:
    """Configuration for a single render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        background: Color of pixels whose ray hits nothing.
        backend: "python" (reference shader) or "taichi" (kernel).
        tone_map: Tone mapping applied on PNG export.
        gamma: Gamma applied on PNG export.
        exposure: Exposure for the "exposure" tone map.
    """

    width: int = 256
    height: int = 256
    background: Color = field(default_factory=lambda: BLACK)
    backend: Backend = "python"
    tone_map: Literal["none", "reinhard", "exposure"] = "none"
    gamma: float = 1.0
    exposure: float = 1.0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.backend not in BACKENDS:
            raise ValueError(f"Unknown backend: {self.backend!r} (expected one of {BACKENDS})")
        if self.tone_map not in TONE_MAPS:
            raise ValueError(f"Unknown tone mapping method: {self.tone_map}")
        if self.gamma <= 0.0:
            raise ValueError(f"Gamma must be positive, got {self.gamma}")
        if self.exposure <= 0.0:
            raise ValueError(f"Exposure must be positive, got {self.exposure}")
        self.background = as_color(self.background)

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height
