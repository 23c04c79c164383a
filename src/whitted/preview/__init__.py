"""Preview module for output and visualization.

Components:
    export: Pixel sink, 8-bit conversion and PNG export
    display: Gamma correction and Matplotlib preview window

Example:
    >>> from src.whitted.preview import ImageSink, show_preview
    >>> sink = ImageSink(320, 180)
    >>> render(scene, sink)
    >>> show_preview(sink.pixels)
    >>> sink.save_png("output.png", gamma=2.2)
"""

from src.whitted.preview.display import (
    apply_gamma,
    process_image_for_display,
    show_preview,
)
from src.whitted.preview.export import (
    ImageSink,
    image_to_uint8,
    save_png_from_array,
)

__all__ = [
    "ImageSink",
    "image_to_uint8",
    "save_png_from_array",
    "apply_gamma",
    "process_image_for_display",
    "show_preview",
]
