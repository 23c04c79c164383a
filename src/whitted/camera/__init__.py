"""Camera module for primary ray generation.

Components:
    pinhole: Fixed pinhole camera at the origin looking down -z

Pixel coordinates run x left to right and y top to bottom; each primary
ray passes through the pixel center.
"""

from .pinhole import (
    PinholeCamera,
    create_prime_ray,
    get_camera_info,
    get_prime_ray_direction,
    setup_camera,
)

__all__ = [
    "PinholeCamera",
    "setup_camera",
    "create_prime_ray",
    "get_prime_ray_direction",
    "get_camera_info",
]
