"""Matplotlib-based preview display for rendered images.

This module provides gamma correction and a simple preview window for
images produced by the renderer.

Example:
    >>> from src.whitted.preview.display import show_preview
    >>> show_preview(sink.pixels, gamma=2.2)
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt


def apply_gamma(
    image: npt.NDArray[np.float32],
    gamma: float = 2.2,
) -> npt.NDArray[np.float32]:
    """Apply gamma correction for display.

    Args:
        image: Linear image array in [0, 1] range.
        gamma: Gamma value (2.2 for sRGB, 1.0 for no change).

    Returns:
        Gamma corrected image.

    Raises:
        ValueError: If gamma is not positive.
    """
    if gamma <= 0.0:
        raise ValueError(f"Gamma must be positive, got {gamma}")
    if gamma == 1.0:
        return image

    # Clamp to [0, 1] before gamma to avoid NaN from negative values
    image = np.clip(image, 0.0, 1.0)

    # Apply gamma encoding: out = in^(1/gamma)
    result = np.power(image, 1.0 / gamma)

    return result.astype(np.float32)


def process_image_for_display(
    image: npt.NDArray[np.float32],
    gamma: float = 2.2,
) -> npt.NDArray[np.float32]:
    """Prepare an RGBA or RGB render for display.

    Drops the alpha channel, applies gamma and clamps to [0, 1].

    Args:
        image: Linear image array of shape (H, W, 3) or (H, W, 4).
        gamma: Gamma correction value.

    Returns:
        RGB image of shape (H, W, 3) in [0, 1].
    """
    result = apply_gamma(image[..., :3].copy(), gamma)
    return np.clip(result, 0.0, 1.0).astype(np.float32)


def show_preview(
    image: npt.NDArray[np.float32],
    *,
    gamma: float = 2.2,
    title: str | None = None,
    figsize: tuple[float, float] = (12, 6.75),
    block: bool = True,
) -> None:
    """Display a rendered image as a Matplotlib figure.

    Args:
        image: Linear image array of shape (H, W, 3) or (H, W, 4).
        gamma: Gamma correction value (default 2.2 for sRGB).
        title: Custom title (default shows the resolution).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(image, gamma=gamma)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")

    if title is None:
        height, width = display_image.shape[:2]
        title = f"Render Preview - {width}x{height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
