"""Tests for the preview module.

This module tests the preview/export and preview/display functionality:
- 8-bit channel encoding (rounding and clamping)
- Binary PPM layout
- PNG export
- Atomic writes and failure behavior
- Display preprocessing

Note: Tests avoid opening windows; show_preview runs with plt.show patched out.
"""

import numpy as np
import pytest
from PIL import Image as PILImage


class TestEncodeChannels:
    """Test float to 8-bit conversion."""

    def test_rounds_to_nearest(self):
        """Test channels are rounded, not truncated."""
        from fireball.preview.export import encode_channels

        image = np.array([[[0.2, 0.7, 0.8], [0.999, 0.001, 0.5]]], dtype=np.float32)
        result = encode_channels(image)

        # float32 0.7 sits just below 0.7, so 178.5 rounds down
        # 0.5 * 255 = 127.5 rounds to even
        assert result[0, 0].tolist() == [51, 178, 204]
        assert result[0, 1].tolist() == [255, 0, 128]

    def test_clamps_out_of_range(self):
        """Test HDR and negative values saturate."""
        from fireball.preview.export import encode_channels

        image = np.array([[[1.7, -0.3, 1.0001]]], dtype=np.float32)
        result = encode_channels(image)
        assert result[0, 0].tolist() == [255, 0, 255]
        assert result.dtype == np.uint8

    def test_rejects_non_rgb(self):
        """Test arrays that are not (H, W, 3) raise ValueError."""
        from fireball.preview.export import encode_channels

        with pytest.raises(ValueError, match="Expected an"):
            encode_channels(np.zeros((4, 4), dtype=np.float32))
        with pytest.raises(ValueError, match="Expected an"):
            encode_channels(np.zeros((4, 4, 4), dtype=np.float32))


class TestSavePpm:
    """Test binary pixel map export."""

    def test_header_and_length(self, tmp_path):
        """Test the file is the P6 header followed by w*h*3 bytes."""
        from fireball.preview.export import save_ppm

        image = np.random.default_rng(0).random((48, 64, 3)).astype(np.float32)
        path = save_ppm(image, tmp_path / "frame.ppm")

        data = path.read_bytes()
        header = b"P6\n64 48\n255\n"
        assert data.startswith(header)
        assert len(data) == len(header) + 64 * 48 * 3

    def test_reference_header_is_fifteen_bytes(self, tmp_path):
        """Test the 640x480 header has the expected size."""
        from fireball.preview.export import save_ppm

        image = np.zeros((480, 640, 3), dtype=np.float32)
        data = save_ppm(image, tmp_path / "out.ppm").read_bytes()
        assert data[:15] == b"P6\n640 480\n255\n"
        assert len(data) == 15 + 640 * 480 * 3

    def test_pixel_order_is_row_major_top_first(self, tmp_path):
        """Test bytes follow rows top to bottom, pixels left to right."""
        from fireball.preview.export import save_ppm

        image = np.zeros((2, 3, 3), dtype=np.float32)
        image[0, 0] = (1.0, 0.0, 0.0)
        image[0, 2] = (0.0, 1.0, 0.0)
        image[1, 0] = (0.0, 0.0, 1.0)
        data = save_ppm(image, tmp_path / "order.ppm").read_bytes()

        pixels = np.frombuffer(data[len(b"P6\n3 2\n255\n"):], dtype=np.uint8).reshape(2, 3, 3)
        assert pixels[0, 0].tolist() == [255, 0, 0]
        assert pixels[0, 2].tolist() == [0, 255, 0]
        assert pixels[1, 0].tolist() == [0, 0, 255]
        assert pixels[1, 2].tolist() == [0, 0, 0]

    def test_round_trips_through_pillow(self, tmp_path):
        """Test Pillow reads back the encoded pixels."""
        from fireball.preview.export import encode_channels, save_ppm

        image = np.random.default_rng(1).random((5, 7, 3)).astype(np.float32)
        path = save_ppm(image, tmp_path / "frame.ppm")

        with PILImage.open(path) as loaded:
            assert loaded.format == "PPM"
            assert loaded.size == (7, 5)
            assert np.array_equal(np.asarray(loaded), encode_channels(image))


class TestSavePng:
    """Test PNG export."""

    def test_png_matches_ppm_pixels(self, tmp_path):
        """Test PNG and PPM outputs hold identical 8-bit pixels."""
        from fireball.preview.export import save_png, save_ppm

        image = np.random.default_rng(2).random((6, 4, 3)).astype(np.float32)
        png = save_png(image, tmp_path / "frame.png")
        ppm = save_ppm(image, tmp_path / "frame.ppm")

        with PILImage.open(png) as a, PILImage.open(ppm) as b:
            assert a.format == "PNG"
            assert np.array_equal(np.asarray(a), np.asarray(b))

    @pytest.mark.parametrize(
        "name, expected_format",
        [("a.png", "PNG"), ("b.PNG", "PNG"), ("c.ppm", "PPM"), ("d.out", "PPM")],
    )
    def test_save_image_dispatches_on_suffix(self, tmp_path, name, expected_format):
        """Test save_image picks the encoder from the file suffix."""
        from fireball.preview.export import save_image

        image = np.zeros((2, 2, 3), dtype=np.float32)
        path = save_image(image, tmp_path / name)

        with PILImage.open(path) as loaded:
            assert loaded.format == expected_format


class TestAtomicWrite:
    """Test failure behavior of the writers."""

    def test_missing_directory_raises(self, tmp_path):
        """Test writing into a nonexistent directory raises OSError."""
        from fireball.preview.export import save_ppm

        target = tmp_path / "missing" / "out.ppm"
        with pytest.raises(OSError):
            save_ppm(np.zeros((2, 2, 3), dtype=np.float32), target)
        assert not target.exists()

    def test_no_temporary_files_left(self, tmp_path):
        """Test only the destination file remains after a successful write."""
        from fireball.preview.export import save_ppm

        save_ppm(np.zeros((2, 2, 3), dtype=np.float32), tmp_path / "out.ppm")
        assert [p.name for p in tmp_path.iterdir()] == ["out.ppm"]

    def test_failed_encode_leaves_no_file(self, tmp_path, monkeypatch):
        """Test an error during encoding removes the partial file."""
        from fireball.preview.export import save_ppm

        def failing_save(self, fp, format=None, **params):
            fp.write(b"P6\n2 2\n255\n")
            raise OSError("disk full")

        monkeypatch.setattr(PILImage.Image, "save", failing_save)

        with pytest.raises(OSError, match="disk full"):
            save_ppm(np.zeros((2, 2, 3), dtype=np.float32), tmp_path / "out.ppm")
        assert list(tmp_path.iterdir()) == []

    def test_failed_write_keeps_previous_file(self, tmp_path, monkeypatch):
        """Test a failed overwrite leaves the earlier image intact."""
        from fireball.preview.export import save_ppm

        target = tmp_path / "out.ppm"
        save_ppm(np.ones((2, 2, 3), dtype=np.float32), target)
        original = target.read_bytes()

        def failing_save(self, fp, format=None, **params):
            raise OSError("disk full")

        monkeypatch.setattr(PILImage.Image, "save", failing_save)

        with pytest.raises(OSError):
            save_ppm(np.zeros((2, 2, 3), dtype=np.float32), target)
        assert target.read_bytes() == original


class TestDisplay:
    """Test display preprocessing."""

    def test_process_clamps_to_unit_range(self):
        """Test HDR and negative values are clamped for display."""
        from fireball.preview.display import process_image_for_display

        image = np.array([[[1.7, -0.2, 0.5]]], dtype=np.float32)
        result = process_image_for_display(image)
        assert np.allclose(result, [[[1.0, 0.0, 0.5]]])

    def test_process_does_not_modify_input(self):
        """Test the source image is left untouched."""
        from fireball.preview.display import process_image_for_display

        image = np.array([[[1.7, -0.2, 0.5]]], dtype=np.float32)
        process_image_for_display(image, gamma=2.2)
        assert np.allclose(image, [[[1.7, -0.2, 0.5]]])

    def test_gamma_1_no_change(self):
        """Test that gamma=1.0 produces no change."""
        from fireball.preview.display import apply_gamma

        image = np.random.default_rng(3).random((4, 4, 3)).astype(np.float32)
        assert np.allclose(apply_gamma(image, gamma=1.0), image)

    def test_gamma_brightens_midtones(self):
        """Test that gamma correction brightens midtones."""
        from fireball.preview.display import apply_gamma

        image = np.full((2, 2, 3), 0.5, dtype=np.float32)
        assert np.all(apply_gamma(image, gamma=2.2) > 0.5)

    def test_show_preview_draws_image(self, monkeypatch):
        """Test show_preview builds a titled figure without opening a window."""
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        from fireball.preview.display import show_preview

        shown = []
        monkeypatch.setattr(plt, "show", lambda block=True: shown.append(block))

        show_preview(np.zeros((48, 64, 3), dtype=np.float32), block=False)

        assert shown == [False]
        ax = plt.gcf().axes[0]
        assert ax.get_title() == "Fireball - 64x48"
        plt.close("all")
