"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with analytic ray-sphere intersection
    plane: Single-sided infinite plane

Intersection routines are Taichi functions returning ``(hit, distance)``;
normals are queried separately at the hit point.
"""

from .plane import PLANE_EPSILON, Plane, intersect_plane, make_plane, plane_normal
from .sphere import Sphere, intersect_sphere, make_sphere, sphere_normal

__all__ = [
    "Sphere",
    "intersect_sphere",
    "sphere_normal",
    "make_sphere",
    "Plane",
    "intersect_plane",
    "plane_normal",
    "make_plane",
    "PLANE_EPSILON",
]
