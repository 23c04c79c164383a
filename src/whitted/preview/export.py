"""Image sinks and export utilities for rendered images.

This module provides the pixel sink used by ``render`` together with
functions for converting float images to 8-bit and saving them as PNG.

Float colors become bytes by scaling with 255 and truncating, after clamping
to [0, 1]. PNG output is 8-bit RGB; the alpha channel is dropped.

Example:
    >>> from src.whitted.core.renderer import render
    >>> from src.whitted.preview.export import ImageSink
    >>>
    >>> sink = ImageSink(320, 180)
    >>> render(scene, sink)
    >>> sink.save_png("output.png")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.whitted.preview.display import apply_gamma


class ImageSink:
    """In-memory float RGBA image that accepts pixels one at a time.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: Array of shape (height, width, 4), row 0 at the top.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels: npt.NDArray[np.float32] = np.zeros((height, width, 4), dtype=np.float32)

    def put_pixel(self, x: int, y: int, color: tuple[float, float, float, float]) -> None:
        """Store the color of pixel (x, y).

        Raises:
            IndexError: If (x, y) is outside the image.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} image")
        self.pixels[y, x] = color

    def to_uint8(self, *, gamma: float = 1.0) -> npt.NDArray[np.uint8]:
        """Convert the stored image to 8-bit RGBA."""
        return image_to_uint8(self.pixels, gamma=gamma)

    def save_png(self, filepath: str, *, gamma: float = 1.0) -> None:
        """Save the stored image as an 8-bit RGB PNG."""
        save_png_from_array(self.pixels, filepath, gamma=gamma)


def image_to_uint8(
    image: npt.NDArray[np.float32],
    *,
    gamma: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a float image in [0, 1] to uint8.

    Args:
        image: Float image array of shape (H, W, C).
        gamma: Gamma encoding applied before quantization (1.0 keeps the
            values linear).

    Returns:
        Array of the same shape with dtype uint8.
    """
    processed = np.clip(apply_gamma(image, gamma), 0.0, 1.0)
    return (processed * 255).astype(np.uint8)


def save_png_from_array(
    image: npt.NDArray[np.float32],
    filepath: str,
    *,
    gamma: float = 1.0,
) -> None:
    """Save a float RGB or RGBA array as an 8-bit RGB PNG.

    Args:
        image: Float image array of shape (H, W, 3) or (H, W, 4).
        filepath: Output file path (should end in .png).
        gamma: Gamma encoding applied before quantization.
    """
    image_uint8 = image_to_uint8(image[..., :3], gamma=gamma)
    pil_image = PILImage.fromarray(np.ascontiguousarray(image_uint8))
    pil_image.save(filepath)
