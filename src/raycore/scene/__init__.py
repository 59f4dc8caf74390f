"""Scene module for scene containers and ready-made scenes.

Components:
    scene: Scene container holding primitives and lights, with the
        nearest-hit ray query and HitRecord
    demo: Factory functions for small test scenes

Scenes are immutable once built: the shader and both render backends only
read them.
"""

from .demo import DemoSceneParams, create_demo_scene, create_single_sphere_scene
from .scene import HitRecord, Scene

__all__ = [
    "Scene",
    "HitRecord",
    "DemoSceneParams",
    "create_demo_scene",
    "create_single_sphere_scene",
]
