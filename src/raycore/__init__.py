"""Ray-traced rendering core with a Python reference path and a Taichi backend.

This package renders scenes of primitives, materials and lights with a
pinhole camera and Phong-style local illumination:
- Immutable point, vector and color algebra
- Sphere primitives with uniform and checkered materials
- Point lights with optional distance falloff
- Nearest-hit shading in pure Python or in a parallel Taichi kernel
- PPM/PNG output and Matplotlib preview

Subpackages:
    core: Vector algebra, rays, raster, shader, renderer and Taichi integrator
    geometry: Primitive interface and the sphere
    materials: Material interface and implementations
    lights: Light interface and the point light
    camera: Pinhole camera with ray generation
    scene: Scene container and ready-made scenes
    preview: Output encoding and preview utilities
"""

__version__ = "0.1.0"
