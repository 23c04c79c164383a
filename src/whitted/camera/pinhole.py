"""Pinhole camera model for primary ray generation.

The camera sits at the origin looking down -z with +y up. For pixel (x, y)
in a width x height frame (row 0 at the top) the primary ray direction is:

    sensor_x = ((x + 0.5) / width) * 2 - 1
    sensor_y = 1 - ((y + 0.5) / height) * 2
    fov_adj  = tan(radians(fov) / 2)
    dir      = normalize(sensor_x * aspect * fov_adj, sensor_y * fov_adj, -1)

with aspect = width / height. The aspect correction assumes a landscape
frame, so setup rejects width <= height.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.camera.pinhole import PinholeCamera, setup_camera
    >>> setup_camera(PinholeCamera(width=1600, height=900, fov=70.0))
    >>> # Use create_prime_ray(x, y) within a Taichi kernel
"""

import math
from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from src.whitted.core.ray import Ray, make_ray, vec3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class PinholeCamera:
    """Configuration for the fixed pinhole camera.

    Attributes:
        width: Image width in pixels. Must exceed height.
        height: Image height in pixels.
        fov: Field of view in degrees.
    """

    width: int
    height: int
    fov: float

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    @property
    def fov_adjustment(self) -> float:
        """Sensor scale, tan(fov / 2)."""
        return math.tan(math.radians(self.fov) / 2.0)


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_width = ti.field(dtype=ti.i32, shape=())
_camera_height = ti.field(dtype=ti.i32, shape=())
_aspect_ratio = ti.field(dtype=ti.f32, shape=())
_fov_adjustment = ti.field(dtype=ti.f32, shape=())


def setup_camera(camera: PinholeCamera) -> None:
    """Initialize camera state from configuration.

    Args:
        camera: Camera configuration with resolution and field of view.

    Raises:
        ValueError: If width <= height, since the aspect-ratio mapping
            assumes a landscape frame.
    """
    if camera.width <= camera.height:
        raise ValueError(
            f"Camera requires width > height, got {camera.width}x{camera.height}"
        )

    _camera_width[None] = camera.width
    _camera_height[None] = camera.height
    _aspect_ratio[None] = camera.aspect_ratio
    _fov_adjustment[None] = camera.fov_adjustment


# =============================================================================
# Ray Generation
# =============================================================================


@ti.func
def create_prime_ray(x: ti.i32, y: ti.i32) -> Ray:
    """Generate the primary ray through the center of pixel (x, y).

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).

    Returns:
        A Ray from the origin with unit direction through the pixel center.
    """
    width = ti.cast(_camera_width[None], ti.f32)
    height = ti.cast(_camera_height[None], ti.f32)
    fov_adj = _fov_adjustment[None]

    sensor_x = ((ti.cast(x, ti.f32) + 0.5) / width) * 2.0 - 1.0
    # Image rows grow downward, camera +y points up
    sensor_y = 1.0 - ((ti.cast(y, ti.f32) + 0.5) / height) * 2.0

    sensor_x *= _aspect_ratio[None] * fov_adj
    sensor_y *= fov_adj

    direction = tm.normalize(vec3(sensor_x, sensor_y, -1.0))
    return make_ray(vec3(0.0, 0.0, 0.0), direction)


_prime_direction = ti.Vector.field(3, dtype=ti.f32, shape=())


@ti.kernel
def _prime_ray_kernel(x: ti.i32, y: ti.i32):
    ray = create_prime_ray(x, y)
    _prime_direction[None] = ray.direction


def get_prime_ray_direction(x: int, y: int) -> tuple[float, float, float]:
    """Primary ray direction for pixel (x, y), evaluated from Python.

    Useful for checking camera setup; the origin is always (0, 0, 0).
    """
    _prime_ray_kernel(x, y)
    d = _prime_direction[None]
    return (float(d[0]), float(d[1]), float(d[2]))


def get_camera_info() -> dict[str, int | float]:
    """Get current camera state for debugging."""
    return {
        "width": int(_camera_width[None]),
        "height": int(_camera_height[None]),
        "aspect_ratio": float(_aspect_ratio[None]),
        "fov_adjustment": float(_fov_adjustment[None]),
    }
