"""Image export utilities for rendered frames.

This module encodes linear float framebuffers to 8-bit RGB and writes them
to disk.

Supported formats:
    - PPM (binary P6 pixel map via Pillow): ``P6\\n<w> <h>\\n255\\n`` followed
      by width * height * 3 bytes in row-major order, top row first
    - PNG (8-bit RGB via Pillow)

Writes are atomic: the encoded image goes to a temporary file beside the
destination and is moved into place only once fully written. A failed write
leaves no file at the destination path.

Example:
    >>> from fireball.core.renderer import render_frame
    >>> from fireball.preview.export import save_image
    >>>
    >>> image = render_frame()
    >>> save_image(image, "out.ppm")
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

logger = logging.getLogger(__name__)


def encode_channels(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert linear float colors to 8-bit channels.

    Each channel becomes clamp(round(value * 255), 0, 255). Values above
    1.0 saturate at 255 and negative values at 0.

    Args:
        image: Image array of shape (H, W, 3).

    Returns:
        Array of shape (H, W, 3) with dtype uint8.

    Raises:
        ValueError: If the array is not an (H, W, 3) image.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")

    scaled = np.rint(image.astype(np.float64) * 255.0)
    return np.clip(scaled, 0, 255).astype(np.uint8)


def _write_atomic(pil_image: PILImage.Image, filepath: Path, image_format: str) -> None:
    """Encode to a sibling temporary file, then move it over filepath."""
    directory = filepath.parent
    fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{filepath.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as fp:
            pil_image.save(fp, format=image_format)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, filepath)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def save_ppm(image: npt.NDArray[np.floating], filepath: str | os.PathLike[str]) -> Path:
    """Save an image as a binary P6 pixel map.

    Args:
        image: Linear image array of shape (H, W, 3).
        filepath: Output file path.

    Returns:
        The path written.

    Raises:
        OSError: If the file cannot be written.
    """
    path = Path(filepath)
    pil_image = PILImage.fromarray(encode_channels(image))
    _write_atomic(pil_image, path, "PPM")
    logger.info("Saved %dx%d PPM to %s", pil_image.width, pil_image.height, path)
    return path


def save_png(image: npt.NDArray[np.floating], filepath: str | os.PathLike[str]) -> Path:
    """Save an image as an 8-bit RGB PNG.

    Uses the same channel encoding as save_ppm; no gamma or tone mapping is
    applied.

    Args:
        image: Linear image array of shape (H, W, 3).
        filepath: Output file path.

    Returns:
        The path written.

    Raises:
        OSError: If the file cannot be written.
    """
    path = Path(filepath)
    pil_image = PILImage.fromarray(encode_channels(image))
    _write_atomic(pil_image, path, "PNG")
    logger.info("Saved %dx%d PNG to %s", pil_image.width, pil_image.height, path)
    return path


def save_image(image: npt.NDArray[np.floating], filepath: str | os.PathLike[str]) -> Path:
    """Save an image, choosing the format from the file suffix.

    ``.png`` files are written as PNG; every other suffix is written as PPM.

    Args:
        image: Linear image array of shape (H, W, 3).
        filepath: Output file path.

    Returns:
        The path written.

    Raises:
        OSError: If the file cannot be written.
    """
    if Path(filepath).suffix.lower() == ".png":
        return save_png(image, filepath)
    return save_ppm(image, filepath)
