"""Whitted-style shading integrator.

This module implements the recursive color evaluation for a ray:

    cast_ray(ray, depth):
        depth > MAX_DEPTH        -> black
        no hit                   -> black
        hit                      -> for each light, in scene order:
            diffuse > 0:  shadow-tested Lambertian term, clamped add
            specular > 0: specular * cast_ray(reflection, depth + 1), clamped add

Taichi functions are inlined and cannot call themselves, so the recursion is
unrolled. The reflection ray at a hit depends only on the incoming ray and
the surface normal, never on the light being shaded, so every light at a
given hit adds the same recursive result. The chain of mirror bounces is
therefore a straight line: ``cast_ray`` first walks it to find how many
levels produce a hit, then shades the levels from the deepest back to the
primary hit, handing each level's color to the level above as its reflected
color. Accumulation order and clamping are the same as in the recursive form.

Secondary rays start at ``hit_point + normal * SHADOW_BIAS`` to avoid
re-hitting the surface they leave.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.core.integrator import render_image, setup_render_target
    >>> from src.whitted.camera.pinhole import setup_camera
    >>> from src.whitted.scene.demo import create_demo_scene
    >>> from src.whitted.scene.manager import load_scene
    >>>
    >>> scene = create_demo_scene(width=320, height=180)
    >>> load_scene(scene)
    >>> setup_camera(scene.camera)
    >>> setup_render_target(scene.width, scene.height)
    >>> render_image()
"""

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.whitted.camera.pinhole import create_prime_ray
from src.whitted.core.color import (
    BLACK,
    accumulate_color,
    multiply_color,
    scale_color,
)
from src.whitted.core.ray import reflect
from src.whitted.scene.intersection import (
    element_color,
    element_diffuse_weight,
    element_specular_weight,
    element_surface_normal,
    trace_scene,
)
from src.whitted.scene.lights import (
    light_color,
    light_direction_from,
    light_distance,
    light_intensity,
    num_lights,
)

# Type aliases
vec3 = tm.vec3
vec4 = tm.vec4

# =============================================================================
# Rendering Constants
# =============================================================================

# Deepest recursion level that is still shaded
MAX_DEPTH = 6

# Offset along the normal for shadow and reflection ray origins
SHADOW_BIAS = 1e-4


# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# RGBA color per pixel, indexed [x, y] with y = 0 at the top row
_color_buffer = ti.Vector.field(4, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target buffer.

    Sets the active image dimensions and clears the buffer.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions are not positive or exceed the maximum.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the color buffer to black."""
    _color_buffer.fill(0.0)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions as (width, height)."""
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


def get_image() -> "ti.MatrixField":
    """Get the full preallocated color buffer.

    Use get_image_dimensions() to determine the active region.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()
    return _color_buffer


def get_image_numpy() -> npt.NDArray[np.float32]:
    """Get the rendered image as a NumPy array.

    Returns:
        Array of shape (height, width, 4), row 0 at the top, values in [0, 1].

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    full_image = _color_buffer.to_numpy()

    # (width, height, 4) -> (height, width, 4)
    image = np.transpose(full_image[:width, :height, :], (1, 0, 2))
    return np.ascontiguousarray(image, dtype=np.float32)


# =============================================================================
# Shading Core
# =============================================================================


@ti.func
def _reflection_chain_length(origin: vec3, direction: vec3, depth: ti.i32) -> ti.i32:
    """Count the levels of the mirror-bounce chain that hit something.

    Starting at ``depth``, follow reflection rays while surfaces are
    specular and the depth ceiling allows.
    """
    ray_origin = origin
    ray_direction = direction
    levels = 0
    active = 1

    for _ in range(depth, MAX_DEPTH + 1):
        if active == 1:
            rec = trace_scene(ray_origin, ray_direction)
            if rec.hit == 0:
                active = 0
            else:
                levels += 1
                if element_specular_weight(rec.element) > 0.0:
                    hit_point = ray_origin + ray_direction * rec.distance
                    normal = element_surface_normal(rec.element, hit_point)
                    ray_origin = hit_point + normal * SHADOW_BIAS
                    ray_direction = reflect(ray_direction, normal)
                else:
                    active = 0

    return levels


@ti.func
def _follow_reflections(origin: vec3, direction: vec3, bounces: ti.i32):
    """Return the ray reached after ``bounces`` mirror reflections.

    Every step must hit a surface; callers stay within the chain length.
    """
    ray_origin = origin
    ray_direction = direction

    for _ in range(bounces):
        rec = trace_scene(ray_origin, ray_direction)
        hit_point = ray_origin + ray_direction * rec.distance
        normal = element_surface_normal(rec.element, hit_point)
        ray_origin = hit_point + normal * SHADOW_BIAS
        ray_direction = reflect(ray_direction, normal)

    return ray_origin, ray_direction


@ti.func
def shade_hit(origin: vec3, direction: vec3, reflected: vec4) -> vec4:
    """Shade the nearest hit of a ray.

    Args:
        origin: Ray origin.
        direction: Unit ray direction. The ray must hit the scene.
        reflected: Color seen along this hit's reflection ray.

    Returns:
        The accumulated, clamped color of the hit.
    """
    rec = trace_scene(origin, direction)
    hit_point = origin + direction * rec.distance
    normal = element_surface_normal(rec.element, hit_point)
    biased_origin = hit_point + normal * SHADOW_BIAS

    surface_color = element_color(rec.element)
    diffuse = element_diffuse_weight(rec.element)
    specular = element_specular_weight(rec.element)

    color = BLACK
    for i in range(num_lights[None]):
        if diffuse > 0.0:
            to_light = light_direction_from(i, hit_point)
            shadow = trace_scene(biased_origin, to_light)

            # Occluders beyond the light do not cast a shadow
            in_light = shadow.hit == 0 or shadow.distance > light_distance(i, hit_point)
            contribution = 0.0
            if in_light:
                contribution = light_intensity(i, hit_point)

            light_power = tm.max(tm.dot(normal, to_light), 0.0) * contribution
            lit = scale_color(
                multiply_color(surface_color, light_color(i)),
                light_power * (diffuse / tm.pi),
            )
            color = accumulate_color(color, lit)

        if specular > 0.0:
            color = accumulate_color(color, scale_color(reflected, specular))

    return color


@ti.func
def cast_ray(origin: vec3, direction: vec3, depth: ti.i32) -> vec4:
    """Evaluate the color seen along a ray at recursion level ``depth``.

    Args:
        origin: Ray origin.
        direction: Unit ray direction.
        depth: Recursion level of this ray; primary rays use 0.

    Returns:
        Clamped RGBA color. Black on a miss or when depth > MAX_DEPTH.
    """
    levels = _reflection_chain_length(origin, direction, depth)

    color = BLACK
    for k in range(levels):
        level_origin, level_direction = _follow_reflections(origin, direction, levels - 1 - k)
        color = shade_hit(level_origin, level_direction, color)

    return color


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_kernel(width: ti.i32, height: ti.i32):
    for x, y in ti.ndrange(width, height):
        ray = create_prime_ray(x, y)
        _color_buffer[x, y] = cast_ray(ray.origin, ray.direction, 0)


_query_color = ti.Vector.field(4, dtype=ti.f32, shape=())


@ti.kernel
def _render_single_pixel(x: ti.i32, y: ti.i32):
    # Single-iteration outer loop keeps the scene scans serial
    for _ in range(1):
        ray = create_prime_ray(x, y)
        _query_color[None] = cast_ray(ray.origin, ray.direction, 0)


@ti.kernel
def _cast_ray_kernel(origin: vec3, direction: vec3, depth: ti.i32):
    for _ in range(1):
        _query_color[None] = cast_ray(origin, direction, depth)


def _read_query_color() -> tuple[float, float, float, float]:
    color = _query_color[None]
    return (float(color[0]), float(color[1]), float(color[2]), float(color[3]))


# =============================================================================
# Public Rendering API
# =============================================================================


def render_image() -> None:
    """Render every pixel of the render target.

    The loaded scene and camera must match the render target size.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    _render_kernel(width, height)


def render_pixel(x: int, y: int) -> tuple[float, float, float, float]:
    """Render a single pixel and return its RGBA color.

    Intended for tests and debugging; the render target is not written.

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
    """
    _render_single_pixel(x, y)
    return _read_query_color()


def cast_ray_from(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    depth: int = 0,
) -> tuple[float, float, float, float]:
    """Evaluate ``cast_ray`` for an arbitrary ray from Python.

    Args:
        origin: Ray origin as (x, y, z).
        direction: Unit ray direction as (x, y, z).
        depth: Recursion level to start at.

    Returns:
        The RGBA color.
    """
    _cast_ray_kernel(vec3(*origin), vec3(*direction), depth)
    return _read_query_color()
