"""Demo scene configuration.

A small scene exercising every feature of the tracer:

- A mirror sphere in front of the camera
- Two diffuse spheres (red and blue) behind and beside it
- A green floor plane and a pale blue back plane far down the -z axis
- Two spherical lights above the scene

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.scene.demo import create_demo_scene
    >>> scene = create_demo_scene()
    >>> scene.width, scene.height
    (1600, 900)
"""

from dataclasses import dataclass

from src.whitted.scene.manager import Scene, SceneManager

# =============================================================================
# Demo Scene Constants
# =============================================================================

DEMO_WIDTH = 1600
DEMO_HEIGHT = 900
DEMO_FOV = 70.0


@dataclass
class DemoSceneParams:
    """Adjustable parameters of the demo scene.

    Attributes:
        light_intensity: Radiant intensity of each spherical light.
        light_color: Color of both lights (RGBA).
        mirror_specular: Specular weight of the mirror sphere.
        back_wall_diffuse: Diffuse weight of the back plane. It is far from
            the lights, so it needs a large weight to show up.
    """

    light_intensity: float = 500.0
    light_color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)
    mirror_specular: float = 1.0
    back_wall_diffuse: float = 10.0


def create_demo_scene(
    width: int = DEMO_WIDTH,
    height: int = DEMO_HEIGHT,
    fov: float = DEMO_FOV,
    params: DemoSceneParams | None = None,
) -> Scene:
    """Create the demo scene.

    Args:
        width: Image width in pixels (must exceed height to render).
        height: Image height in pixels.
        fov: Field of view in degrees.
        params: Optional DemoSceneParams; defaults to DemoSceneParams().

    Returns:
        The built Scene.
    """
    if params is None:
        params = DemoSceneParams()

    builder = SceneManager(width=width, height=height, fov=fov)

    # Mirror sphere
    builder.add_sphere(
        (0.0, 0.5, -4.0),
        1.0,
        color=(1.0, 1.0, 1.0, 1.0),
        diffuse=0.0,
        specular=params.mirror_specular,
    )
    # Red diffuse sphere, back left
    builder.add_sphere((-3.0, 2.0, -6.0), 1.5, color=(1.0, 0.4, 0.4, 1.0), diffuse=1.0)
    # Blue diffuse sphere, upper right
    builder.add_sphere((1.2, 2.0, -4.0), 0.7, color=(0.4, 0.4, 1.0, 1.0), diffuse=1.0)

    # Floor, seen from above
    builder.add_plane((0.0, -0.5, 0.0), (0.0, -1.0, 0.0), color=(0.1, 0.3, 0.1, 1.0))
    # Back wall, seen from the camera
    builder.add_plane(
        (0.0, 0.0, -20.0),
        (0.0, 0.0, -1.0),
        color=(0.8, 0.8, 1.0, 1.0),
        diffuse=params.back_wall_diffuse,
    )

    builder.add_spherical_light(
        (2.0, 7.0, -5.0), color=params.light_color, intensity=params.light_intensity
    )
    builder.add_spherical_light(
        (2.0, 7.0, 0.0), color=params.light_color, intensity=params.light_intensity
    )

    return builder.build()
