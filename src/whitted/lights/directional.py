"""Directional (infinitely distant) light.

A directional light illuminates the whole scene from one direction with
constant intensity, like sunlight. ``direction`` is the direction the light
travels, so the direction from a surface toward the light is its negation.
The light is infinitely far away: any occluder along a shadow ray blocks it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.lights.directional import DirectionalLight
    >>> sun = DirectionalLight(
    ...     direction=ti.math.vec3(0.0, -1.0, 0.0),
    ...     color=ti.math.vec4(1.0, 1.0, 1.0, 1.0),
    ...     intensity=1.0,
    ... )
"""

import taichi as ti
import taichi.math as tm

vec3 = tm.vec3
vec4 = tm.vec4


@ti.dataclass
class DirectionalLight:
    """A light infinitely far away, shining along ``direction``.

    Attributes:
        direction: Unit vector the light travels along (vec3).
        color: Light color (vec4, RGBA).
        intensity: Irradiance scale, constant over the scene.
    """

    direction: vec3
    color: vec4
    intensity: ti.f32


@ti.func
def directional_direction_from(light: DirectionalLight, hit_point: vec3) -> vec3:
    """Unit direction from ``hit_point`` toward the light."""
    return -light.direction


@ti.func
def directional_distance(light: DirectionalLight, hit_point: vec3) -> ti.f32:
    """Distance to the light, which is always infinite."""
    return tm.inf


@ti.func
def directional_intensity(light: DirectionalLight, hit_point: vec3) -> ti.f32:
    """Intensity at ``hit_point``; directional lights do not fall off."""
    return light.intensity
