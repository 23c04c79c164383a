"""Spherical (point) light with inverse-square falloff.

A spherical light emits uniformly in all directions from ``position``. Its
stored intensity is a radiant intensity; the irradiance arriving at a point
``d`` units away is that intensity spread over a sphere of radius ``d``:

    E = intensity / (4 * pi * d^2)

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.lights.spherical import SphericalLight
    >>> bulb = SphericalLight(
    ...     position=ti.math.vec3(2.0, 7.0, -5.0),
    ...     color=ti.math.vec4(1.0, 1.0, 1.0, 1.0),
    ...     intensity=500.0,
    ... )
"""

import taichi as ti
import taichi.math as tm

vec3 = tm.vec3
vec4 = tm.vec4


@ti.dataclass
class SphericalLight:
    """A point light at ``position``.

    Attributes:
        position: Light position in world space (vec3).
        color: Light color (vec4, RGBA).
        intensity: Radiant intensity, not pre-divided by 4*pi.
    """

    position: vec3
    color: vec4
    intensity: ti.f32


@ti.func
def spherical_direction_from(light: SphericalLight, hit_point: vec3) -> vec3:
    """Unit direction from ``hit_point`` toward the light position."""
    return tm.normalize(light.position - hit_point)


@ti.func
def spherical_distance(light: SphericalLight, hit_point: vec3) -> ti.f32:
    """Euclidean distance from ``hit_point`` to the light."""
    return tm.length(light.position - hit_point)


@ti.func
def spherical_intensity(light: SphericalLight, hit_point: vec3) -> ti.f32:
    """Irradiance at ``hit_point`` using inverse-square falloff."""
    offset = light.position - hit_point
    r2 = tm.dot(offset, offset)
    return light.intensity / (4.0 * tm.pi * r2)
