"""Scene light storage and light dispatch.

Lights are kept in a single ordered table, like the element table, because
the order in which lights are accumulated matters once every addition is
clamped. ``light_vectors`` stores the travel direction of a directional light
or the position of a spherical light; ``light_kinds`` selects which.
"""

from enum import IntEnum

import taichi as ti
import taichi.math as tm

from src.whitted.lights.directional import (
    DirectionalLight,
    directional_direction_from,
    directional_distance,
    directional_intensity,
)
from src.whitted.lights.spherical import (
    SphericalLight,
    spherical_direction_from,
    spherical_distance,
    spherical_intensity,
)

vec3 = tm.vec3
vec4 = tm.vec4


class LightKind(IntEnum):
    """The closed set of light variants."""

    DIRECTIONAL = 0
    SPHERICAL = 1


MAX_LIGHTS = 64

light_kinds = ti.field(dtype=ti.i32, shape=MAX_LIGHTS)
light_vectors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_colors = ti.Vector.field(4, dtype=ti.f32, shape=MAX_LIGHTS)
light_intensities = ti.field(dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())


def clear_lights() -> None:
    """Remove all lights from the scene."""
    num_lights[None] = 0


def _add_light(kind: LightKind, vector: vec3, color: vec4, intensity: float) -> int:
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_kinds[idx] = int(kind)
    light_vectors[idx] = vector
    light_colors[idx] = color
    light_intensities[idx] = intensity
    num_lights[None] = idx + 1
    return idx


def add_directional_light(direction: vec3, color: vec4, intensity: float) -> int:
    """Append a directional light.

    Args:
        direction: Unit vector the light travels along.
        color: Light color (RGBA).
        intensity: Constant irradiance scale.

    Returns:
        The index of the added light.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    return _add_light(LightKind.DIRECTIONAL, direction, color, intensity)


def add_spherical_light(position: vec3, color: vec4, intensity: float) -> int:
    """Append a spherical (point) light.

    Args:
        position: Light position in world space.
        color: Light color (RGBA).
        intensity: Radiant intensity (falls off as 1 / (4 pi d^2)).

    Returns:
        The index of the added light.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    return _add_light(LightKind.SPHERICAL, position, color, intensity)


def get_light_count() -> int:
    """Get the number of lights in the scene."""
    return int(num_lights[None])


@ti.func
def _directional(index: ti.i32) -> DirectionalLight:
    return DirectionalLight(
        direction=light_vectors[index],
        color=light_colors[index],
        intensity=light_intensities[index],
    )


@ti.func
def _spherical(index: ti.i32) -> SphericalLight:
    return SphericalLight(
        position=light_vectors[index],
        color=light_colors[index],
        intensity=light_intensities[index],
    )


@ti.func
def light_direction_from(index: ti.i32, hit_point: vec3) -> vec3:
    """Unit direction from ``hit_point`` toward light ``index``."""
    direction = vec3(0.0, 0.0, 0.0)
    if light_kinds[index] == int(LightKind.DIRECTIONAL):
        direction = directional_direction_from(_directional(index), hit_point)
    else:
        direction = spherical_direction_from(_spherical(index), hit_point)
    return direction


@ti.func
def light_distance(index: ti.i32, hit_point: vec3) -> ti.f32:
    """Distance from ``hit_point`` to light ``index`` (inf for directional)."""
    distance = 0.0
    if light_kinds[index] == int(LightKind.DIRECTIONAL):
        distance = directional_distance(_directional(index), hit_point)
    else:
        distance = spherical_distance(_spherical(index), hit_point)
    return distance


@ti.func
def light_intensity(index: ti.i32, hit_point: vec3) -> ti.f32:
    """Intensity of light ``index`` arriving at ``hit_point``."""
    intensity = 0.0
    if light_kinds[index] == int(LightKind.DIRECTIONAL):
        intensity = directional_intensity(_directional(index), hit_point)
    else:
        intensity = spherical_intensity(_spherical(index), hit_point)
    return intensity


@ti.func
def light_color(index: ti.i32) -> vec4:
    return light_colors[index]
