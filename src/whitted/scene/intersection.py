"""Scene-level element storage and nearest-hit queries.

Elements (spheres and planes) are stored in one Structure-of-Arrays table so
that the scene keeps a single ordered element sequence. ``element_kinds``
selects the variant for each slot; ``element_points`` holds the sphere center
or plane origin and ``element_normals`` the plane normal.

``trace_scene`` scans every element linearly and keeps the nearest hit. The
same query serves primary, reflection and shadow rays. A hit refers to the
element by its index in the table rather than copying it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.scene.intersection import (
    ...     add_sphere, add_plane, clear_scene, trace_ray, vec3, vec4
    ... )
    >>> clear_scene()
    >>> add_sphere(vec3(0, 0, -4), 1.0, vec4(1, 1, 1, 1), diffuse=1.0, specular=0.0)
    >>> trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
    Intersection(distance=3.0, element=0)
"""

import math
from dataclasses import dataclass
from enum import IntEnum

import taichi as ti
import taichi.math as tm

from src.whitted.geometry.plane import Plane, intersect_plane, plane_normal
from src.whitted.geometry.sphere import Sphere, intersect_sphere, sphere_normal

# Type aliases using Taichi's math module
vec3 = tm.vec3
vec4 = tm.vec4


class ElementKind(IntEnum):
    """The closed set of geometric element variants."""

    SPHERE = 0
    PLANE = 1


@ti.dataclass
class SceneHit:
    """Record of a ray-scene query.

    Attributes:
        hit: 1 if any element was hit, 0 otherwise.
        distance: Distance along the ray to the nearest hit. Only valid if
            hit == 1.
        element: Index of the hit element. -1 on a miss.
    """

    hit: ti.i32
    distance: ti.f32
    element: ti.i32


@dataclass(frozen=True)
class Intersection:
    """Python-side result of a scene query.

    Attributes:
        distance: Finite, non-negative distance to the hit.
        element: Index of the hit element in the scene's element sequence.

    Raises:
        ValueError: If distance is not finite.
    """

    distance: float
    element: int

    def __post_init__(self) -> None:
        if not math.isfinite(self.distance):
            raise ValueError(f"Intersection must have finite distance, got {self.distance}")


# Maximum number of elements supported in the scene
MAX_ELEMENTS = 1024

element_kinds = ti.field(dtype=ti.i32, shape=MAX_ELEMENTS)
element_points = ti.Vector.field(3, dtype=ti.f32, shape=MAX_ELEMENTS)
element_normals = ti.Vector.field(3, dtype=ti.f32, shape=MAX_ELEMENTS)
element_radii = ti.field(dtype=ti.f32, shape=MAX_ELEMENTS)
element_colors = ti.Vector.field(4, dtype=ti.f32, shape=MAX_ELEMENTS)
element_diffuse = ti.field(dtype=ti.f32, shape=MAX_ELEMENTS)
element_specular = ti.field(dtype=ti.f32, shape=MAX_ELEMENTS)
num_elements = ti.field(dtype=ti.i32, shape=())

# Result slots for Python-side queries
_query_hit = ti.field(dtype=ti.i32, shape=())
_query_distance = ti.field(dtype=ti.f32, shape=())
_query_element = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Remove all elements.

    Only the count is reset; stale slot data is overwritten by later adds.
    """
    num_elements[None] = 0


def _next_element_slot() -> int:
    idx = num_elements[None]
    if idx >= MAX_ELEMENTS:
        raise RuntimeError(f"Maximum number of elements ({MAX_ELEMENTS}) exceeded")
    return idx


def add_sphere(
    center: vec3,
    radius: float,
    color: vec4,
    diffuse: float,
    specular: float,
) -> int:
    """Append a sphere to the element table.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere (should be positive).
        color: The surface color (RGBA).
        diffuse: Diffuse weight (0 disables diffuse shading).
        specular: Specular weight (0 disables reflection).

    Returns:
        The index of the added element.

    Raises:
        RuntimeError: If the maximum number of elements is exceeded.
    """
    idx = _next_element_slot()
    element_kinds[idx] = int(ElementKind.SPHERE)
    element_points[idx] = center
    element_normals[idx] = vec3(0.0, 0.0, 0.0)
    element_radii[idx] = radius
    element_colors[idx] = color
    element_diffuse[idx] = diffuse
    element_specular[idx] = specular
    num_elements[None] = idx + 1
    return idx


def add_plane(
    origin: vec3,
    normal: vec3,
    color: vec4,
    diffuse: float,
    specular: float,
) -> int:
    """Append a plane to the element table.

    Args:
        origin: Any point on the plane.
        normal: The unit normal of the plane (see geometry.plane for the
            single-sided convention).
        color: The surface color (RGBA).
        diffuse: Diffuse weight (0 disables diffuse shading).
        specular: Specular weight (0 disables reflection).

    Returns:
        The index of the added element.

    Raises:
        RuntimeError: If the maximum number of elements is exceeded.
    """
    idx = _next_element_slot()
    element_kinds[idx] = int(ElementKind.PLANE)
    element_points[idx] = origin
    element_normals[idx] = normal
    element_radii[idx] = 0.0
    element_colors[idx] = color
    element_diffuse[idx] = diffuse
    element_specular[idx] = specular
    num_elements[None] = idx + 1
    return idx


def get_element_count() -> int:
    """Get the number of elements in the scene."""
    return int(num_elements[None])


# =============================================================================
# Element Dispatch
# =============================================================================


@ti.func
def _element_sphere(index: ti.i32) -> Sphere:
    return Sphere(center=element_points[index], radius=element_radii[index])


@ti.func
def _element_plane(index: ti.i32) -> Plane:
    return Plane(origin=element_points[index], normal=element_normals[index])


@ti.func
def intersect_element(index: ti.i32, ray_origin: vec3, ray_direction: vec3):
    """Intersect a ray with the element stored at ``index``.

    Returns:
        A tuple (hit, distance) as produced by the variant's intersect function.
    """
    hit = 0
    distance = 0.0

    kind = element_kinds[index]
    if kind == int(ElementKind.SPHERE):
        hit, distance = intersect_sphere(ray_origin, ray_direction, _element_sphere(index))
    elif kind == int(ElementKind.PLANE):
        hit, distance = intersect_plane(ray_origin, ray_direction, _element_plane(index))

    return hit, distance


@ti.func
def element_surface_normal(index: ti.i32, hit_point: vec3) -> vec3:
    """Shading normal of element ``index`` at ``hit_point``."""
    normal = vec3(0.0, 0.0, 0.0)

    kind = element_kinds[index]
    if kind == int(ElementKind.SPHERE):
        normal = sphere_normal(_element_sphere(index), hit_point)
    elif kind == int(ElementKind.PLANE):
        normal = plane_normal(_element_plane(index), hit_point)

    return normal


@ti.func
def element_color(index: ti.i32) -> vec4:
    return element_colors[index]


@ti.func
def element_diffuse_weight(index: ti.i32) -> ti.f32:
    return element_diffuse[index]


@ti.func
def element_specular_weight(index: ti.i32) -> ti.f32:
    return element_specular[index]


# =============================================================================
# Scene Queries
# =============================================================================


@ti.func
def make_scene_hit(distance: ti.f32, element: ti.i32) -> SceneHit:
    """Build a hit record. The distance must be finite (checked in debug mode)."""
    assert not (tm.isinf(distance) or tm.isnan(distance)), "Intersection must have finite distance"
    return SceneHit(hit=1, distance=distance, element=element)


@ti.func
def _make_miss_record() -> SceneHit:
    return SceneHit(hit=0, distance=0.0, element=-1)


@ti.func
def trace_scene(ray_origin: vec3, ray_direction: vec3) -> SceneHit:
    """Find the nearest element hit by a ray.

    Every element is tested; the smallest distance wins and the first element
    encountered wins a tie.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.

    Returns:
        A SceneHit for the nearest intersection, or a miss record.
    """
    closest = tm.inf
    result = _make_miss_record()

    for i in range(num_elements[None]):
        hit, distance = intersect_element(i, ray_origin, ray_direction)
        if hit == 1 and distance < closest:
            closest = distance
            result = make_scene_hit(distance, i)

    return result


@ti.kernel
def _trace_kernel(ray_origin: vec3, ray_direction: vec3):
    # Single-iteration outer loop keeps the element scan serial
    for _ in range(1):
        rec = trace_scene(ray_origin, ray_direction)
        _query_hit[None] = rec.hit
        _query_distance[None] = rec.distance
        _query_element[None] = rec.element


def trace_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
) -> Intersection | None:
    """Query the scene from Python.

    Args:
        origin: Ray origin as (x, y, z).
        direction: Unit ray direction as (x, y, z).

    Returns:
        The nearest Intersection, or None if nothing is hit.
    """
    _trace_kernel(vec3(*origin), vec3(*direction))
    if _query_hit[None] == 0:
        return None
    return Intersection(distance=float(_query_distance[None]), element=int(_query_element[None]))
