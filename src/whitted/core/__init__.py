"""Core rendering module.

Components:
    ray: Ray data structure and vector utilities
    color: RGBA color arithmetic with saturating accumulation
    integrator: Recursive Whitted shading, render target and render kernels
    renderer: Render entry point feeding a pixel sink

All compute-intensive operations use Taichi kernels, so the pixel loop runs
in parallel on the selected backend.
"""

from .color import (
    BLACK,
    accumulate_color,
    clamp_color,
    color_to_rgba8,
    multiply_color,
    scale_color,
    vec4,
)
from .ray import (
    Ray,
    dot,
    length,
    make_ray,
    normalize,
    ray_at,
    reflect,
    vec3,
)

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from src.whitted.core.integrator or src.whitted.core.renderer.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "vec4",
    "length",
    "normalize",
    "dot",
    "reflect",
    "BLACK",
    "clamp_color",
    "accumulate_color",
    "scale_color",
    "multiply_color",
    "color_to_rgba8",
]
