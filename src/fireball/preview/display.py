"""Matplotlib-based preview display for rendered frames.

Example:
    >>> from fireball.core.renderer import render_frame
    >>> from fireball.preview.display import show_preview
    >>>
    >>> show_preview(render_frame())
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt


def apply_gamma(
    image: npt.NDArray[np.float32],
    gamma: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Apply gamma correction for display.

    Args:
        image: Linear image array of shape (H, W, 3) in [0, 1] range.
        gamma: Gamma value (default 1.0, no change).

    Returns:
        Gamma corrected image.
    """
    if gamma == 1.0:
        return image

    # Clamp to [0, 1] before gamma to avoid NaN from negative values
    image = np.clip(image, 0.0, 1.0)
    result = np.power(image, 1.0 / gamma)

    return result.astype(np.float32)


def process_image_for_display(
    image: npt.NDArray[np.float32],
    gamma: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Clamp a linear frame to [0, 1] and optionally gamma encode it.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma correction value (default 1.0, matching the PPM output).

    Returns:
        Image ready for display, in [0, 1] range.
    """
    result = apply_gamma(image.copy(), gamma)
    result = np.clip(result, 0.0, 1.0)

    return result.astype(np.float32)


def show_preview(
    image: npt.NDArray[np.float32],
    *,
    gamma: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display a rendered frame as a Matplotlib figure.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma correction value (default 1.0).
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(image, gamma=gamma)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")

    if title is None:
        height, width = image.shape[:2]
        title = f"Fireball - {width}x{height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
