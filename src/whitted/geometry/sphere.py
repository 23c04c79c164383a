"""Sphere primitive with analytic ray-sphere intersection.

The intersection projects the center-to-origin vector onto the ray direction
and works with the squared distance from the sphere center to the ray line:

    l   = center - origin
    adj = l . dir
    d2  = l . l - adj^2

If d2 exceeds radius^2 the ray passes outside the sphere's cross-section.
Otherwise the two roots are adj -/+ sqrt(radius^2 - d2). A ray starting
inside the sphere has a negative near root and a positive far root; the far
root is returned in that case, so a ray leaving the center always hits at
exactly the radius.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.geometry.sphere import Sphere, intersect_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -4), radius=1.0)
    >>> # Use intersect_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.func
def intersect_sphere(ray_origin: vec3, ray_direction: vec3, sphere: Sphere):
    """Intersect a ray with a sphere.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.
        sphere: The sphere to test against.

    Returns:
        A tuple (hit, distance). ``hit`` is 1 when the sphere lies (at least
        partly) in front of the origin; ``distance`` is then the nearest
        non-negative root. Both are zero on a miss.
    """
    l = sphere.center - ray_origin
    adj = tm.dot(l, ray_direction)
    d2 = tm.dot(l, l) - adj * adj
    radius2 = sphere.radius * sphere.radius

    hit = 0
    distance = 0.0

    if d2 <= radius2:
        thc = ti.sqrt(radius2 - d2)
        t0 = adj - thc
        t1 = adj + thc

        # Both roots behind the origin: sphere is entirely behind the ray
        if t0 >= 0.0 or t1 >= 0.0:
            hit = 1
            distance = ti.select(t0 >= 0.0, t0, t1)

    return hit, distance


@ti.func
def sphere_normal(sphere: Sphere, hit_point: vec3) -> vec3:
    """Outward unit normal at a point on the sphere surface."""
    return tm.normalize(hit_point - sphere.center)


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius."""
    return Sphere(center=center, radius=radius)
