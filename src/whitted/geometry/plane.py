"""Infinite plane primitive.

A plane is defined by a point on it (``origin``) and a unit ``normal``.
Planes are single-sided:

- A ray is only accepted when ``normal . dir`` exceeds ``PLANE_EPSILON``,
  i.e. the ray travels along the stored normal. This rejects near-parallel
  rays (no division blow-up) together with rays approaching from the other
  side.
- The shading normal is always the stored normal negated, so it faces the
  rays the plane accepts.

A floor seen from above is therefore stored with normal (0, -1, 0) and
shades with normal (0, 1, 0).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.geometry.plane import Plane, intersect_plane
    >>> floor = Plane(
    ...     origin=ti.math.vec3(0.0, -0.5, 0.0),
    ...     normal=ti.math.vec3(0.0, -1.0, 0.0),
    ... )
    >>> # Use intersect_plane within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Minimum normal . direction for a ray to be accepted
PLANE_EPSILON = 1e-6


@ti.dataclass
class Plane:
    """An infinite plane through ``origin`` with unit ``normal``.

    Attributes:
        origin: Any point on the plane (vec3).
        normal: The stored unit normal (vec3). Rays are accepted when they
            travel along it; shading uses its negation.
    """

    origin: vec3
    normal: vec3


@ti.func
def intersect_plane(ray_origin: vec3, ray_direction: vec3, plane: Plane):
    """Intersect a ray with a single-sided plane.

    The hit distance is ((plane.origin - ray_origin) . normal) / denom with
    denom = normal . ray_direction.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.
        plane: The plane to test against.

    Returns:
        A tuple (hit, distance). ``hit`` is 1 only when denom > PLANE_EPSILON
        and the distance is non-negative.
    """
    hit = 0
    distance = 0.0

    denom = tm.dot(plane.normal, ray_direction)
    if denom > PLANE_EPSILON:
        v = plane.origin - ray_origin
        t = tm.dot(v, plane.normal) / denom
        if t >= 0.0:
            hit = 1
            distance = t

    return hit, distance


@ti.func
def plane_normal(plane: Plane, hit_point: vec3) -> vec3:
    """Shading normal of the plane, independent of the hit point."""
    return -plane.normal


@ti.func
def make_plane(origin: vec3, normal: vec3) -> Plane:
    """Create a plane from a point and a unit normal."""
    return Plane(origin=origin, normal=normal)
