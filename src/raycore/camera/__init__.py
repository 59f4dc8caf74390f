"""Camera module for view and ray generation.

This module provides the camera model for generating primary rays:

Components:
    pinhole: Pinhole (perspective) camera with a look-at basis

Camera responsibilities:
    - Derive an orthonormal (forward, right, up) basis from eye, target and
      a world-up hint, failing fast on degenerate configurations
    - Map pixel centers to image-plane coordinates (row 0 at the top)
    - Transform (u, v) image coordinates to world-space rays

Ray generation uses image-plane coordinates:
    u in [-1, 1]: left to right across image
    v in [-1, 1]: bottom to top across image
"""

from .pinhole import (
    PARALLEL_EPSILON,
    Camera,
    build_camera_basis,
    pixel_to_image_plane,
)

__all__ = [
    "Camera",
    "build_camera_basis",
    "pixel_to_image_plane",
    "PARALLEL_EPSILON",
]
