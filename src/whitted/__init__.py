"""Taichi-based Whitted-style ray tracer.

This package renders scenes of spheres and planes lit by directional and
spherical lights, casting one primary ray per pixel and evaluating diffuse
lighting, hard shadows and recursive mirror reflection.

Subpackages:
    core: Ray and color utilities, the shading integrator and render entry point
    geometry: Sphere and plane primitives with intersection routines
    lights: Directional and spherical light models
    scene: Scene model, device-side element/light tables and scene queries
    camera: Pinhole camera with primary ray generation
    preview: Image sinks, PNG export and preview display
"""

__version__ = "0.1.0"
