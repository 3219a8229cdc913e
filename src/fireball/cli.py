"""Command-line entry point for the fireball renderer.

Usage:
    python -m fireball [options]

Options:
    --width WIDTH       Image width in pixels (default: 640)
    --height HEIGHT     Image height in pixels (default: 480)
    --output OUTPUT     Output file path, .ppm or .png (default: out.ppm)
    --arch {cpu,gpu}    Taichi backend (default: cpu)
    --show              Display the frame in a Matplotlib window
    --quiet             Only log warnings and errors
    --verbose           Log debug output

Example:
    python -m fireball --width 320 --height 240 --output fireball.ppm
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

import taichi as ti

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="fireball",
        description="Render a noise-displaced fireball to a binary pixel map.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=640,
        help="Image width in pixels (default: 640)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=480,
        help="Image height in pixels (default: 480)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="out.ppm",
        help="Output file path, .ppm or .png (default: out.ppm)",
    )
    parser.add_argument(
        "--arch",
        choices=("cpu", "gpu"),
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Display the frame in a Matplotlib window",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors",
    )
    verbosity.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output",
    )
    return parser.parse_args(argv)


def configure_logging(quiet: bool = False, verbose: bool = False) -> None:
    """Configure root logging for command-line use."""
    level = logging.INFO
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def init_taichi(arch: str) -> None:
    """Initialize Taichi on the requested backend.

    A GPU request falls back to the CPU backend when no GPU is available.
    """
    if arch == "gpu":
        try:
            ti.init(arch=ti.gpu)
            logger.info("Using GPU backend")
            return
        except RuntimeError as e:
            logger.warning("GPU backend unavailable (%s), falling back to CPU", e)
    ti.init(arch=ti.cpu)
    logger.info("Using CPU backend")


def run(args: argparse.Namespace) -> int:
    """Render the frame and write it to args.output.

    Taichi must already be initialized.

    Returns:
        Process exit status: 0 on success, 1 on invalid settings or a failed
        write.
    """
    # Lazy imports so Taichi is initialized before kernels are defined
    from fireball.config import RenderSettings
    from fireball.core.renderer import FireballRenderer
    from fireball.preview.export import save_image

    try:
        renderer = FireballRenderer(RenderSettings(width=args.width, height=args.height))
    except ValueError as e:
        logger.error("Invalid settings: %s", e)
        return 1

    image = renderer.render()

    try:
        output_file = save_image(image, args.output)
    except OSError as e:
        logger.error("Failed to write %s: %s", args.output, e)
        return 1

    logger.info("Saved to: %s", output_file.absolute())

    if args.show:
        from fireball.preview.display import show_preview

        show_preview(image)

    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    configure_logging(quiet=args.quiet, verbose=args.verbose)
    init_taichi(args.arch)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
