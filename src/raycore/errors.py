"""Exception types raised by the renderer.

Every error here is a construction-time or fail-fast error: the render aborts
and the exception propagates to the caller. A ray that misses every primitive
is not an error and never raises.

All exceptions derive from both RenderError and ValueError.
"""


class RenderError(Exception):
    """Base class for all renderer errors."""


class DegenerateNormalizationError(RenderError, ValueError):
    """Raised when a zero-length vector is normalized."""


class InvalidCameraError(RenderError, ValueError):
    """Raised for invalid camera parameters (near distance, field of view)."""


class InvalidCameraBasisError(InvalidCameraError):
    """Raised when eye, target and world-up do not define an orthonormal basis.

    This happens when the eye sits on the target, or when the view direction
    is parallel to the world-up hint.
    """


class InvalidPrimitiveError(RenderError, ValueError):
    """Raised when a primitive is built with invalid geometry or no material."""


class InvalidMaterialError(RenderError, ValueError):
    """Raised when material properties are out of range."""


class UnsupportedSceneError(RenderError, ValueError):
    """Raised when a scene cannot be compiled for the Taichi backend."""


class RasterError(RenderError, ValueError):
    """Raised for invalid raster dimensions, indices or repeated writes."""
