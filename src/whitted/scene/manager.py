"""Scene description model and upload to the device tables.

This module holds the Python-side scene model: one frozen dataclass per
element and light variant, a ``Scene`` value gathering them with the image
resolution and field of view, and a ``SceneManager`` builder that validates
input as it is added.

A Scene is a plain value. ``load_scene`` copies it into the Taichi element
and light tables before rendering; the tables are then only read until the
next load.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.scene.manager import SceneManager, load_scene
    >>> builder = SceneManager(width=320, height=240, fov=90.0)
    >>> builder.add_sphere((0, 0, -4), 1.0, color=(1, 1, 1), diffuse=1.0)
    0
    >>> builder.add_directional_light((0, -1, 0), color=(1, 1, 1), intensity=1.0)
    0
    >>> scene = builder.build()
    >>> load_scene(scene)
"""

import math
from dataclasses import dataclass, field
from typing import Any

import taichi.math as tm

from src.whitted.camera.pinhole import PinholeCamera
from src.whitted.scene.intersection import (
    MAX_ELEMENTS,
    add_plane,
    add_sphere,
    clear_scene,
)
from src.whitted.scene.lights import (
    MAX_LIGHTS,
    add_directional_light,
    add_spherical_light,
    clear_lights,
)

# Type aliases using Taichi's math module
vec3 = tm.vec3
vec4 = tm.vec4

Point = tuple[float, float, float]
Color = tuple[float, float, float, float]

WHITE: Color = (1.0, 1.0, 1.0, 1.0)


@dataclass(frozen=True)
class SphereInfo:
    """A sphere element.

    Attributes:
        center: The center of the sphere.
        radius: The radius of the sphere.
        color: Surface color (RGBA).
        diffuse: Diffuse weight; 0 disables diffuse shading.
        specular: Specular weight; 0 disables reflection.
    """

    center: Point
    radius: float
    color: Color = WHITE
    diffuse: float = 1.0
    specular: float = 0.0


@dataclass(frozen=True)
class PlaneInfo:
    """A single-sided plane element.

    Attributes:
        origin: Any point on the plane.
        normal: Unit normal; the plane is hit by rays travelling along it
            and shades with its negation.
        color: Surface color (RGBA).
        diffuse: Diffuse weight; 0 disables diffuse shading.
        specular: Specular weight; 0 disables reflection.
    """

    origin: Point
    normal: Point
    color: Color = WHITE
    diffuse: float = 1.0
    specular: float = 0.0


@dataclass(frozen=True)
class DirectionalLightInfo:
    """A directional light travelling along ``direction`` (unit)."""

    direction: Point
    color: Color = WHITE
    intensity: float = 1.0


@dataclass(frozen=True)
class SphericalLightInfo:
    """A point light at ``position`` with radiant ``intensity``."""

    position: Point
    color: Color = WHITE
    intensity: float = 1.0


ElementInfo = SphereInfo | PlaneInfo
LightInfo = DirectionalLightInfo | SphericalLightInfo


@dataclass(frozen=True)
class Scene:
    """A complete, immutable scene description.

    Attributes:
        width: Image width in pixels. Rendering requires width > height.
        height: Image height in pixels.
        fov: Field of view in degrees.
        elements: Ordered geometric elements.
        lights: Ordered lights. Order affects results because every light's
            contribution is clamped as it is accumulated.
    """

    width: int
    height: int
    fov: float
    elements: tuple[ElementInfo, ...] = field(default_factory=tuple)
    lights: tuple[LightInfo, ...] = field(default_factory=tuple)

    @property
    def camera(self) -> PinholeCamera:
        """The camera configuration implied by resolution and field of view."""
        return PinholeCamera(width=self.width, height=self.height, fov=self.fov)

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        elements: list[dict[str, Any]] = []
        for element in self.elements:
            if isinstance(element, SphereInfo):
                elements.append(
                    {
                        "type": "sphere",
                        "center": list(element.center),
                        "radius": element.radius,
                        "color": list(element.color),
                        "diffuse": element.diffuse,
                        "specular": element.specular,
                    }
                )
            else:
                elements.append(
                    {
                        "type": "plane",
                        "origin": list(element.origin),
                        "normal": list(element.normal),
                        "color": list(element.color),
                        "diffuse": element.diffuse,
                        "specular": element.specular,
                    }
                )

        lights: list[dict[str, Any]] = []
        for light in self.lights:
            if isinstance(light, DirectionalLightInfo):
                lights.append(
                    {
                        "type": "directional",
                        "direction": list(light.direction),
                        "color": list(light.color),
                        "intensity": light.intensity,
                    }
                )
            else:
                lights.append(
                    {
                        "type": "spherical",
                        "position": list(light.position),
                        "color": list(light.color),
                        "intensity": light.intensity,
                    }
                )

        return {
            "width": self.width,
            "height": self.height,
            "fov": self.fov,
            "elements": elements,
            "lights": lights,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Scene":
        """Build a scene from a dictionary produced by ``to_dict``.

        Entries are validated through ``SceneManager``.

        Raises:
            ValueError: If an entry has an unknown type or invalid values.
            KeyError: If a required key is missing.
        """
        builder = SceneManager(
            width=int(data["width"]),
            height=int(data["height"]),
            fov=float(data["fov"]),
        )

        for entry in data.get("elements", []):
            element_type = entry.get("type", "").lower()
            color = tuple(entry.get("color", WHITE))
            diffuse = entry.get("diffuse", 1.0)
            specular = entry.get("specular", 0.0)
            if element_type == "sphere":
                builder.add_sphere(
                    tuple(entry["center"]), entry["radius"], color, diffuse, specular
                )
            elif element_type == "plane":
                builder.add_plane(
                    tuple(entry["origin"]), tuple(entry["normal"]), color, diffuse, specular
                )
            else:
                raise ValueError(f"Unknown element type: {element_type}")

        for entry in data.get("lights", []):
            light_type = entry.get("type", "").lower()
            color = tuple(entry.get("color", WHITE))
            intensity = entry.get("intensity", 1.0)
            if light_type == "directional":
                builder.add_directional_light(tuple(entry["direction"]), color, intensity)
            elif light_type == "spherical":
                builder.add_spherical_light(tuple(entry["position"]), color, intensity)
            else:
                raise ValueError(f"Unknown light type: {light_type}")

        return builder.build()


# =============================================================================
# Validation Helpers
# =============================================================================


def _as_color(color: tuple[float, ...]) -> Color:
    """Expand an RGB or RGBA tuple to RGBA (alpha defaults to 1)."""
    if len(color) == 3:
        color = (color[0], color[1], color[2], 1.0)
    if len(color) != 4:
        raise ValueError(f"Color must have 3 or 4 components, got {len(color)}")
    if any(c < 0.0 for c in color):
        raise ValueError(f"Color components must be non-negative, got {color}")
    return (float(color[0]), float(color[1]), float(color[2]), float(color[3]))


def _as_point(point: tuple[float, ...]) -> Point:
    if len(point) != 3:
        raise ValueError(f"Expected 3 components, got {len(point)}")
    return (float(point[0]), float(point[1]), float(point[2]))


def _as_unit(vector: tuple[float, ...], name: str) -> Point:
    x, y, z = _as_point(vector)
    norm = math.sqrt(x * x + y * y + z * z)
    if norm < 1e-12:
        raise ValueError(f"{name} must be non-zero")
    return (x / norm, y / norm, z / norm)


def _check_weights(diffuse: float, specular: float) -> None:
    if diffuse < 0.0:
        raise ValueError(f"Diffuse weight must be non-negative, got {diffuse}")
    if specular < 0.0:
        raise ValueError(f"Specular weight must be non-negative, got {specular}")


class SceneManager:
    """Validating builder for ``Scene`` values.

    Directions and normals are normalized on the way in, and RGB colors get
    an alpha of 1. Element and light indices are returned in insertion
    order, matching their position in the built scene.

    Example:
        >>> builder = SceneManager(width=160, height=90, fov=70.0)
        >>> builder.add_plane((0, -0.5, 0), (0, -1, 0), color=(0.1, 0.3, 0.1))
        0
        >>> builder.add_spherical_light((2, 7, -5), intensity=500.0)
        0
        >>> scene = builder.build()
    """

    def __init__(self, width: int, height: int, fov: float) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        if not 0.0 < fov < 180.0:
            raise ValueError(f"Field of view must be in (0, 180) degrees, got {fov}")
        self.width = width
        self.height = height
        self.fov = fov
        self.elements: list[ElementInfo] = []
        self.lights: list[LightInfo] = []

    def clear(self) -> None:
        """Remove all elements and lights."""
        self.elements.clear()
        self.lights.clear()

    def _append_element(self, element: ElementInfo) -> int:
        if len(self.elements) >= MAX_ELEMENTS:
            raise RuntimeError(f"Maximum number of elements ({MAX_ELEMENTS}) exceeded")
        self.elements.append(element)
        return len(self.elements) - 1

    def _append_light(self, light: LightInfo) -> int:
        if len(self.lights) >= MAX_LIGHTS:
            raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
        self.lights.append(light)
        return len(self.lights) - 1

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        color: tuple[float, ...] = WHITE,
        diffuse: float = 1.0,
        specular: float = 0.0,
    ) -> int:
        """Add a sphere.

        Raises:
            ValueError: If radius is not positive, a weight is negative or
                the color is malformed.
        """
        if radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        _check_weights(diffuse, specular)
        return self._append_element(
            SphereInfo(
                center=_as_point(center),
                radius=float(radius),
                color=_as_color(color),
                diffuse=float(diffuse),
                specular=float(specular),
            )
        )

    def add_plane(
        self,
        origin: tuple[float, float, float],
        normal: tuple[float, float, float],
        color: tuple[float, ...] = WHITE,
        diffuse: float = 1.0,
        specular: float = 0.0,
    ) -> int:
        """Add a plane; ``normal`` is normalized.

        Raises:
            ValueError: If the normal is zero, a weight is negative or the
                color is malformed.
        """
        _check_weights(diffuse, specular)
        return self._append_element(
            PlaneInfo(
                origin=_as_point(origin),
                normal=_as_unit(normal, "Plane normal"),
                color=_as_color(color),
                diffuse=float(diffuse),
                specular=float(specular),
            )
        )

    def add_directional_light(
        self,
        direction: tuple[float, float, float],
        color: tuple[float, ...] = WHITE,
        intensity: float = 1.0,
    ) -> int:
        """Add a directional light; ``direction`` is normalized.

        Raises:
            ValueError: If the direction is zero or intensity is negative.
        """
        if intensity < 0.0:
            raise ValueError(f"Light intensity must be non-negative, got {intensity}")
        return self._append_light(
            DirectionalLightInfo(
                direction=_as_unit(direction, "Light direction"),
                color=_as_color(color),
                intensity=float(intensity),
            )
        )

    def add_spherical_light(
        self,
        position: tuple[float, float, float],
        color: tuple[float, ...] = WHITE,
        intensity: float = 1.0,
    ) -> int:
        """Add a spherical (point) light.

        Raises:
            ValueError: If intensity is negative.
        """
        if intensity < 0.0:
            raise ValueError(f"Light intensity must be non-negative, got {intensity}")
        return self._append_light(
            SphericalLightInfo(
                position=_as_point(position),
                color=_as_color(color),
                intensity=float(intensity),
            )
        )

    def build(self) -> Scene:
        """Freeze the current contents into a Scene."""
        return Scene(
            width=self.width,
            height=self.height,
            fov=self.fov,
            elements=tuple(self.elements),
            lights=tuple(self.lights),
        )


def load_scene(scene: Scene) -> None:
    """Copy a scene's elements and lights into the device tables.

    Any previously loaded scene is replaced. Element and light order is
    preserved.

    Raises:
        RuntimeError: If the scene exceeds the table capacities.
    """
    clear_scene()
    clear_lights()

    for element in scene.elements:
        if isinstance(element, SphereInfo):
            add_sphere(
                vec3(*element.center),
                element.radius,
                vec4(*element.color),
                element.diffuse,
                element.specular,
            )
        elif isinstance(element, PlaneInfo):
            add_plane(
                vec3(*element.origin),
                vec3(*element.normal),
                vec4(*element.color),
                element.diffuse,
                element.specular,
            )
        else:
            raise ValueError(f"Unknown element: {element!r}")

    for light in scene.lights:
        if isinstance(light, DirectionalLightInfo):
            add_directional_light(vec3(*light.direction), vec4(*light.color), light.intensity)
        elif isinstance(light, SphericalLightInfo):
            add_spherical_light(vec3(*light.position), vec4(*light.color), light.intensity)
        else:
            raise ValueError(f"Unknown light: {light!r}")
