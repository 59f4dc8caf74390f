"""Pytest configuration for raycore tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session, and small scene
building blocks used across the shading tests.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def make_uniform():
    """Factory for uniform materials from plain tuples."""
    from raycore.core.vector import Color
    from raycore.materials.material import MaterialProperties, UniformMaterial

    def _make(diffuse=(0.8, 0.8, 0.8), specular=(0.0, 0.0, 0.0), shininess=0.0):
        return UniformMaterial(
            MaterialProperties(
                diffuse=Color(*diffuse),
                specular=Color(*specular),
                shininess=shininess,
            )
        )

    return _make


@pytest.fixture
def axis_camera():
    """Camera at (0, 0, 5) looking at the origin with a 60 degree field of view."""
    from raycore.camera.pinhole import Camera
    from raycore.core.vector import Point, Vector

    return Camera(
        eye=Point(0.0, 0.0, 5.0),
        target=Point(0.0, 0.0, 0.0),
        world_up=Vector(0.0, 1.0, 0.0),
        near=1.0,
        fov_horizontal=60.0,
        fov_vertical=60.0,
    )
