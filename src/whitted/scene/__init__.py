"""Scene module: scene model, device tables and ray-scene queries.

Components:
    manager: Scene description dataclasses, validating builder, upload
    intersection: Element table, element dispatch and nearest-hit query
    lights: Light table and light dispatch
    demo: Ready-made demo scene

Scene data is organized for efficient parallel access:
    - Structure-of-Arrays layout for element and light data
    - Variant selection by a kind tag per slot
    - Hits refer to elements by index
"""

from .demo import DemoSceneParams, create_demo_scene
from .intersection import (
    MAX_ELEMENTS,
    ElementKind,
    Intersection,
    SceneHit,
    add_plane,
    add_sphere,
    clear_scene,
    get_element_count,
    trace_ray,
    trace_scene,
)
from .lights import (
    MAX_LIGHTS,
    LightKind,
    add_directional_light,
    add_spherical_light,
    clear_lights,
    get_light_count,
)
from .manager import (
    DirectionalLightInfo,
    PlaneInfo,
    Scene,
    SceneManager,
    SphereInfo,
    SphericalLightInfo,
    load_scene,
)

__all__ = [
    # Intersection module
    "SceneHit",
    "Intersection",
    "ElementKind",
    "add_sphere",
    "add_plane",
    "clear_scene",
    "get_element_count",
    "trace_scene",
    "trace_ray",
    "MAX_ELEMENTS",
    # Lights module
    "LightKind",
    "add_directional_light",
    "add_spherical_light",
    "clear_lights",
    "get_light_count",
    "MAX_LIGHTS",
    # Manager module
    "Scene",
    "SceneManager",
    "SphereInfo",
    "PlaneInfo",
    "DirectionalLightInfo",
    "SphericalLightInfo",
    "load_scene",
    # Demo module
    "create_demo_scene",
    "DemoSceneParams",
]
