"""Preview module for output and visualization.

Components:
    export: PPM/PNG export with atomic writes
    display: Matplotlib-based static preview

Example:
    >>> from fireball.core.renderer import render_frame
    >>> from fireball.preview import save_image, show_preview
    >>>
    >>> image = render_frame()
    >>> save_image(image, "out.ppm")
    >>> show_preview(image)
"""

from fireball.preview.display import (
    apply_gamma,
    process_image_for_display,
    show_preview,
)
from fireball.preview.export import (
    encode_channels,
    save_image,
    save_png,
    save_ppm,
)

__all__ = [
    # Display functions
    "show_preview",
    "apply_gamma",
    "process_image_for_display",
    # Export functions
    "encode_channels",
    "save_ppm",
    "save_png",
    "save_image",
]
