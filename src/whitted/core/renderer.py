"""Render entry point: scene in, one color per pixel out.

``render`` loads a scene into the device tables, configures the camera and
render target, traces every pixel in one parallel kernel launch and then
hands each pixel's color to a sink exactly once, iterating columns
``x in [0, width)`` and, within each column, rows ``y in [0, height)``.

The sink decides how colors are stored or encoded; the engine always hands
over float RGBA values in [0, 1].

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.core.renderer import render
    >>> from src.whitted.preview.export import ImageSink
    >>> from src.whitted.scene.demo import create_demo_scene
    >>>
    >>> scene = create_demo_scene(width=320, height=180)
    >>> sink = ImageSink(scene.width, scene.height)
    >>> render(scene, sink)
    >>> sink.save_png("render.png")
"""

from typing import Protocol

from src.whitted.camera.pinhole import setup_camera
from src.whitted.core.integrator import get_image_numpy, render_image, setup_render_target
from src.whitted.scene.manager import Scene, load_scene

Color = tuple[float, float, float, float]


class PixelSink(Protocol):
    """Anything that accepts one color per pixel."""

    def put_pixel(self, x: int, y: int, color: Color) -> None: ...


def render(scene: Scene, sink: PixelSink) -> None:
    """Render ``scene`` and write every pixel to ``sink``.

    Args:
        scene: The scene to render. Requires width > height.
        sink: Receives put_pixel(x, y, (r, g, b, a)) once per pixel.

    Raises:
        ValueError: If the scene's resolution is not landscape or exceeds
            the render target capacity.
        RuntimeError: If the scene exceeds element or light capacity.
    """
    setup_camera(scene.camera)
    setup_render_target(scene.width, scene.height)
    load_scene(scene)

    render_image()
    image = get_image_numpy()

    for x in range(scene.width):
        for y in range(scene.height):
            r, g, b, a = image[y, x]
            sink.put_pixel(x, y, (float(r), float(g), float(b), float(a)))
