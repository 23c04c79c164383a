"""Light models.

Components:
    directional: Infinitely distant light with constant intensity
    spherical: Point light with inverse-square falloff

Each model answers three questions about a surface point: the direction
toward the light, the distance to it and the intensity arriving there.
"""

from .directional import (
    DirectionalLight,
    directional_direction_from,
    directional_distance,
    directional_intensity,
)
from .spherical import (
    SphericalLight,
    spherical_direction_from,
    spherical_distance,
    spherical_intensity,
)

__all__ = [
    "DirectionalLight",
    "directional_direction_from",
    "directional_distance",
    "directional_intensity",
    "SphericalLight",
    "spherical_direction_from",
    "spherical_distance",
    "spherical_intensity",
]
