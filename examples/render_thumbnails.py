#!/usr/bin/env python3
"""Render the fireball at several resolutions.

This script renders the fixed fireball scene at a few sizes through the
library API and writes each frame as both PPM and PNG. The frames are framed
identically because the field of view is tied to the image height.

Usage:
    python examples/render_thumbnails.py [--output-dir DIR]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import taichi as ti

logger = logging.getLogger("render_thumbnails")

SIZES = ((160, 120), (320, 240), (640, 480))


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Render fireball thumbnails.")
    parser.add_argument(
        "--output-dir",
        type=str,
        default="thumbnails",
        help="Directory for the rendered frames (default: thumbnails)",
    )
    return parser.parse_args()


def render_thumbnails(output_dir: Path) -> list[Path]:
    """Render every size in SIZES into output_dir.

    Returns:
        Paths of the files written.
    """
    from fireball.config import RenderSettings
    from fireball.core.renderer import render_frame
    from fireball.preview.export import save_png, save_ppm

    output_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for width, height in SIZES:
        image = render_frame(RenderSettings(width=width, height=height))
        stem = output_dir / f"fireball_{width}x{height}"
        written.append(save_ppm(image, stem.with_suffix(".ppm")))
        written.append(save_png(image, stem.with_suffix(".png")))
    return written


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    ti.init(arch=ti.cpu)

    try:
        written = render_thumbnails(Path(args.output_dir))
    except OSError as e:
        logger.error("Error: %s", e)
        return 1

    logger.info("Wrote %d files to %s", len(written), Path(args.output_dir).absolute())

    return 0


if __name__ == "__main__":
    sys.exit(main())
