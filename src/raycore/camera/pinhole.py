"""Pinhole camera model for perspective projection ray generation.

The camera builds a right-handed orthonormal basis from the view parameters:

    forward = normalize(target - eye)
    right   = normalize(cross(forward, world_up))
    up      = normalize(cross(right, forward))

``up`` is re-derived rather than taken from the hint, so the basis stays
orthogonal even when the hint is not perpendicular to ``forward``. A hint
parallel to ``forward`` (or an eye sitting on the target) has no valid basis
and raises InvalidCameraBasisError at construction.

Primary rays pass through normalized image-plane coordinates (u, v) in
[-1, 1] x [-1, 1]:

    direction = normalize(forward * near
                          + right * u * tan(fov_horizontal / 2)
                          + up * v * tan(fov_vertical / 2))

Pixels map to (u, v) through their centers, with row 0 at the TOP:

    u = 2 * (col + 0.5) / width - 1      (left -> right)
    v = 1 - 2 * (row + 0.5) / height     (top -> bottom)

Field-of-view angles are given in degrees. The aspect ratio is carried by
the two angles; use Camera.from_vertical_fov to derive the horizontal angle
from an aspect ratio.

Example:
    >>> from raycore.camera.pinhole import Camera
    >>> from raycore.core.vector import Point, Vector
    >>> camera = Camera(
    ...     eye=Point(0.0, 0.0, 5.0),
    ...     target=Point(0.0, 0.0, 0.0),
    ...     world_up=Vector(0.0, 1.0, 0.0),
    ...     near=1.0,
    ...     fov_horizontal=60.0,
    ...     fov_vertical=60.0,
    ... )
    >>> camera.generate_ray(0.0, 0.0).direction  # Through the image center
    Vector(x=0.0, y=0.0, z=-1.0)
"""

from __future__ import annotations

import math

from raycore.core.ray import Ray
from raycore.core.vector import Point, Vector, as_point, as_vector
from raycore.errors import (
    DegenerateNormalizationError,
    InvalidCameraBasisError,
    InvalidCameraError,
)

# Cross products shorter than this are treated as parallel vectors
PARALLEL_EPSILON = 1e-12


class Camera:
    """A pinhole (perspective) camera.

    The basis is computed once at construction and never changes.

    Attributes:
        eye: Camera position in world space.
        world_up: The up hint used to derive the basis.
        near: Distance from the eye to the image plane.
        fov_horizontal: Horizontal field of view in degrees.
        fov_vertical: Vertical field of view in degrees.
        forward: Unit view direction.
        right: Unit vector pointing right in the image plane.
        up: Unit vector pointing up in the image plane.
    """

    def __init__(
        self,
        eye: Point,
        target: Point,
        world_up: Vector,
        near: float = 1.0,
        fov_horizontal: float = 60.0,
        fov_vertical: float = 60.0,
    ) -> None:
        """Create a camera and derive its orthonormal basis.

        Args:
            eye: Camera position (Point or 3-tuple).
            target: Point the camera looks at (Point or 3-tuple).
            world_up: Up hint (Vector or 3-tuple), must not be parallel to
                the view direction.
            near: Image-plane distance (positive).
            fov_horizontal: Horizontal field of view in degrees, in (0, 180).
            fov_vertical: Vertical field of view in degrees, in (0, 180).

        Raises:
            InvalidCameraError: If near or a field of view is out of range.
            InvalidCameraBasisError: If no orthonormal basis can be derived.
        """
        if not math.isfinite(near) or near <= 0.0:
            raise InvalidCameraError(f"Near-plane distance must be positive, got {near}")
        for name, fov in (("fov_horizontal", fov_horizontal), ("fov_vertical", fov_vertical)):
            if not math.isfinite(fov) or not 0.0 < fov < 180.0:
                raise InvalidCameraError(f"{name} must be in (0, 180) degrees, got {fov}")

        self._eye = as_point(eye)
        self._world_up = as_vector(world_up)
        self._near = float(near)
        self._fov_horizontal = float(fov_horizontal)
        self._fov_vertical = float(fov_vertical)

        self._forward, self._right, self._up = build_camera_basis(
            self._eye, as_point(target), self._world_up
        )

        # Half extents of the image plane per unit of u and v
        self._tan_half_h = math.tan(math.radians(self._fov_horizontal) / 2.0)
        self._tan_half_v = math.tan(math.radians(self._fov_vertical) / 2.0)

    @classmethod
    def from_vertical_fov(
        cls,
        eye: Point,
        target: Point,
        world_up: Vector,
        vfov: float,
        aspect_ratio: float,
        near: float = 1.0,
    ) -> Camera:
        """Create a camera from a vertical field of view and aspect ratio.

        The horizontal field of view is 2 * atan(aspect_ratio * tan(vfov / 2)),
        so square pixels stay square on a width x height raster with
        aspect_ratio = width / height.

        Raises:
            InvalidCameraError: If aspect_ratio is not positive.
        """
        if not math.isfinite(aspect_ratio) or aspect_ratio <= 0.0:
            raise InvalidCameraError(f"Aspect ratio must be positive, got {aspect_ratio}")
        half_v = math.radians(vfov) / 2.0
        hfov = math.degrees(2.0 * math.atan(aspect_ratio * math.tan(half_v)))
        return cls(eye, target, world_up, near=near, fov_horizontal=hfov, fov_vertical=vfov)

    @property
    def eye(self) -> Point:
        return self._eye

    @property
    def world_up(self) -> Vector:
        return self._world_up

    @property
    def near(self) -> float:
        return self._near

    @property
    def fov_horizontal(self) -> float:
        return self._fov_horizontal

    @property
    def fov_vertical(self) -> float:
        return self._fov_vertical

    @property
    def forward(self) -> Vector:
        return self._forward

    @property
    def right(self) -> Vector:
        return self._right

    @property
    def up(self) -> Vector:
        return self._up

    @property
    def tan_half_horizontal(self) -> float:
        """tan(fov_horizontal / 2)."""
        return self._tan_half_h

    @property
    def tan_half_vertical(self) -> float:
        """tan(fov_vertical / 2)."""
        return self._tan_half_v

    def generate_ray(self, u: float, v: float) -> Ray:
        """Generate a primary ray through image-plane coordinates (u, v).

        Args:
            u: Horizontal coordinate, -1 = left edge, +1 = right edge.
            v: Vertical coordinate, -1 = bottom edge, +1 = top edge.

        Returns:
            A Ray from the eye with a unit-length direction.
        """
        direction = (
            self._forward * self._near
            + self._right * (u * self._tan_half_h)
            + self._up * (v * self._tan_half_v)
        )
        return Ray(self._eye, direction.normalize())

    def ray_for_pixel(self, col: int, row: int, width: int, height: int) -> Ray:
        """Generate the primary ray through the center of a pixel.

        Args:
            col: Pixel column (0 = left).
            row: Pixel row (0 = top).
            width: Image width in pixels.
            height: Image height in pixels.

        Returns:
            A Ray from the eye through the pixel center.
        """
        u, v = pixel_to_image_plane(col, row, width, height)
        return self.generate_ray(u, v)

    def basis_info(self) -> dict[str, tuple[float, float, float]]:
        """Get the camera state for debugging.

        Returns:
            Dictionary with eye, forward, right and up as plain tuples.
        """
        return {
            "eye": self._eye.to_tuple(),
            "forward": self._forward.to_tuple(),
            "right": self._right.to_tuple(),
            "up": self._up.to_tuple(),
        }

    def __repr__(self) -> str:
        return (
            f"Camera(eye={self._eye!r}, forward={self._forward!r}, near={self._near}, "
            f"fov=({self._fov_horizontal}, {self._fov_vertical}))"
        )


def build_camera_basis(eye: Point, target: Point, world_up: Vector) -> tuple[Vector, Vector, Vector]:
    """Derive the (forward, right, up) orthonormal basis.

    Args:
        eye: Camera position.
        target: Look-at point.
        world_up: Up hint.

    Returns:
        Tuple of unit vectors (forward, right, up).

    Raises:
        InvalidCameraBasisError: If eye == target, the hint is zero, or the
            hint is parallel to the view direction.
    """
    try:
        forward = (target - eye).normalize()
    except DegenerateNormalizationError as exc:
        raise InvalidCameraBasisError(f"Camera eye {eye!r} coincides with target") from exc

    side = forward.cross(world_up)
    if side.length() < PARALLEL_EPSILON:
        raise InvalidCameraBasisError(
            f"World-up hint {world_up!r} is zero or parallel to view direction {forward!r}"
        )
    right = side.normalize()
    up = right.cross(forward).normalize()
    return forward, right, up


def pixel_to_image_plane(col: int, row: int, width: int, height: int) -> tuple[float, float]:
    """Map a pixel to the (u, v) coordinates of its center.

    Row 0 is the top of the image, so v decreases as row increases.

    Args:
        col: Pixel column (0 = left).
        row: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        Tuple (u, v) in (-1, 1) x (-1, 1).
    """
    u = 2.0 * (col + 0.5) / width - 1.0
    v = 1.0 - 2.0 * (row + 0.5) / height
    return u, v
