"""Tests for the command-line entry point.

run() is exercised directly; main() is not called because it initializes
Taichi, which the session fixture has already done.
"""

import logging

import numpy as np
import pytest
from PIL import Image as PILImage


class TestParseArgs:
    """Test argument parsing."""

    def test_defaults(self):
        """Test the defaults describe the reference frame."""
        from fireball.cli import parse_args

        args = parse_args([])
        assert (args.width, args.height) == (640, 480)
        assert args.output == "out.ppm"
        assert args.arch == "cpu"
        assert not args.show
        assert not args.quiet
        assert not args.verbose

    def test_overrides(self):
        """Test size, output and backend options."""
        from fireball.cli import parse_args

        args = parse_args(["--width", "64", "--height", "48", "--output", "x.png", "--arch", "gpu"])
        assert (args.width, args.height) == (64, 48)
        assert args.output == "x.png"
        assert args.arch == "gpu"

    def test_quiet_and_verbose_are_exclusive(self):
        """Test --quiet and --verbose cannot be combined."""
        from fireball.cli import parse_args

        with pytest.raises(SystemExit):
            parse_args(["--quiet", "--verbose"])

    def test_unknown_arch_rejected(self):
        """Test only cpu and gpu backends are accepted."""
        from fireball.cli import parse_args

        with pytest.raises(SystemExit):
            parse_args(["--arch", "tpu"])


class TestRun:
    """Test the render-and-save step."""

    def test_writes_ppm(self, tmp_path):
        """Test a successful run writes the frame and returns 0."""
        from fireball.cli import parse_args, run

        output = tmp_path / "frame.ppm"
        args = parse_args(["--width", "32", "--height", "24", "--output", str(output)])

        assert run(args) == 0
        data = output.read_bytes()
        header = b"P6\n32 24\n255\n"
        assert data.startswith(header)
        assert len(data) == len(header) + 32 * 24 * 3

    def test_writes_png(self, tmp_path):
        """Test a .png output path produces a PNG file."""
        from fireball.cli import parse_args, run

        output = tmp_path / "frame.png"
        args = parse_args(["--width", "16", "--height", "12", "--output", str(output)])

        assert run(args) == 0
        with PILImage.open(output) as loaded:
            assert loaded.format == "PNG"
            assert loaded.size == (16, 12)

    def test_unwritable_output_fails(self, tmp_path, caplog):
        """Test a write failure logs a diagnostic and returns 1."""
        from fireball.cli import parse_args, run

        output = tmp_path / "missing" / "frame.ppm"
        args = parse_args(["--width", "8", "--height", "6", "--output", str(output)])

        with caplog.at_level(logging.ERROR, logger="fireball.cli"):
            assert run(args) == 1
        assert "Failed to write" in caplog.text
        assert not output.exists()

    def test_invalid_size_fails(self, tmp_path, caplog):
        """Test invalid dimensions return 1 without writing."""
        from fireball.cli import parse_args, run

        output = tmp_path / "frame.ppm"
        args = parse_args(["--width", "0", "--output", str(output)])

        with caplog.at_level(logging.ERROR, logger="fireball.cli"):
            assert run(args) == 1
        assert "Invalid settings" in caplog.text
        assert not output.exists()

    def test_show_opens_preview(self, tmp_path, monkeypatch):
        """Test --show hands the rendered frame to show_preview."""
        import fireball.preview.display as display
        from fireball.cli import parse_args, run

        shown = []
        monkeypatch.setattr(display, "show_preview", lambda image: shown.append(image))

        args = parse_args(
            ["--width", "8", "--height", "6", "--output", str(tmp_path / "f.ppm"), "--show"]
        )
        assert run(args) == 0
        assert len(shown) == 1
        assert shown[0].shape == (6, 8, 3)
        assert shown[0].dtype == np.float32


class TestConfigureLogging:
    """Test logging level selection."""

    @pytest.mark.parametrize(
        "quiet, verbose, level",
        [(False, False, logging.INFO), (True, False, logging.WARNING), (False, True, logging.DEBUG)],
    )
    def test_levels(self, monkeypatch, quiet, verbose, level):
        """Test the verbosity flags map to root logger levels."""
        from fireball import cli

        calls = []
        monkeypatch.setattr(cli.logging, "basicConfig", lambda **kw: calls.append(kw))

        cli.configure_logging(quiet=quiet, verbose=verbose)
        assert calls[0]["level"] == level
