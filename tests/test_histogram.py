"""Tests for histogram computation module."""

import logging

import numpy as np
import pytest

from tonegrade.histogram import CHANNELS, Histogram, analyze, as_pixel_rows


@pytest.fixture
def random_image():
    """Random 32x24 RGBA8 image."""
    rng = np.random.default_rng(42)
    return rng.integers(0, 256, size=(24, 32, 4), dtype=np.uint8)


class TestHistogram:
    """Test Histogram dataclass."""

    def test_empty(self):
        hist = Histogram.empty()
        assert hist.n_bins == 256
        assert hist.is_empty
        assert hist.counts.shape == (4, 256)
        assert hist.counts.sum() == 0
        assert hist.mean("red") == 0.0

    def test_read_only(self, random_image):
        hist = analyze(random_image, 32, 24)
        with pytest.raises(ValueError):
            hist.red[0] = 5

    def test_channel_aliases(self, random_image):
        hist = analyze(random_image, 32, 24)
        assert hist.channel("r") is hist.red
        assert hist.channel("Luma") is hist.luminance
        for name in CHANNELS:
            assert hist.channel(name) is getattr(hist, name)

    def test_unknown_channel(self):
        with pytest.raises(ValueError, match="Unknown channel"):
            Histogram.empty().channel("alpha")

    def test_to_dict(self, random_image):
        rows = analyze(random_image, 32, 24).to_dict()
        assert len(rows) == 256
        assert rows[0]["level"] == 0
        assert set(rows[0]) == {"level", "red", "green", "blue", "luminance"}


class TestAnalyze:
    """Test analyze()."""

    def test_sums_equal_pixel_count(self, random_image):
        hist = analyze(random_image, 32, 24)
        assert hist.n_pixels == 32 * 24
        for name in CHANNELS:
            assert hist.channel(name).sum() == 32 * 24

    def test_uniform_gray(self):
        """A uniform image puts every pixel in one bin per channel."""
        pixels = np.full((3, 4, 4), 128, dtype=np.uint8)
        hist = analyze(pixels, 4, 3)
        for name in CHANNELS:
            counts = hist.channel(name)
            assert counts[128] == 12
            assert counts.sum() == 12

    def test_pure_red_luminance(self):
        """Luminance uses BT.709 weights."""
        pixels = np.zeros((1, 1, 4), dtype=np.uint8)
        pixels[..., 0] = 255
        hist = analyze(pixels, 1, 1)
        assert hist.luminance[54] == 1  # round(0.2126 * 255)
        assert hist.red[255] == 1
        assert hist.green[0] == 1

    def test_matches_numpy_bincount(self, random_image):
        hist = analyze(random_image, 32, 24)
        for c, name in enumerate(("red", "green", "blue")):
            expected = np.bincount(random_image[..., c].ravel(), minlength=256)
            np.testing.assert_array_equal(hist.channel(name), expected)

    def test_alpha_ignored(self, random_image):
        opaque = random_image.copy()
        opaque[..., 3] = 255
        np.testing.assert_array_equal(
            analyze(random_image, 32, 24).counts, analyze(opaque, 32, 24).counts
        )

    def test_buffer_layouts_agree(self, random_image):
        """Flat, [N, 4] and [H, W, 4] buffers give the same histogram."""
        a = analyze(random_image, 32, 24)
        b = analyze(random_image.reshape(-1, 4), 32, 24)
        c = analyze(random_image.ravel(), 32, 24)
        np.testing.assert_array_equal(a.counts, b.counts)
        np.testing.assert_array_equal(a.counts, c.counts)

    def test_shape_mismatch_returns_empty(self, random_image, caplog):
        with caplog.at_level(logging.WARNING):
            hist = analyze(random_image, 10, 10)
        assert hist.is_empty
        assert "does not match" in caplog.text

    def test_empty_buffer(self):
        assert analyze(np.zeros(0, dtype=np.uint8), 0, 0).is_empty
        assert analyze(None, 4, 4).is_empty

    def test_as_pixel_rows_rejects_three_channels(self):
        assert as_pixel_rows(np.zeros((4, 3), dtype=np.uint8), 2, 2) is None


class TestStatistics:
    """Test mean, black/white point and percentile."""

    def test_mean(self):
        pixels = np.zeros((2, 1, 4), dtype=np.uint8)
        pixels[1, 0, 0] = 255
        hist = analyze(pixels, 1, 2)
        assert hist.mean("red") == 127.5
        assert hist.mean("green") == 0.0

    def test_black_white_point_uniform(self):
        pixels = np.full((10, 10, 4), 90, dtype=np.uint8)
        hist = analyze(pixels, 10, 10)
        assert hist.black_point() == 90
        assert hist.white_point() == 90

    def test_clip_fraction_ignores_outliers(self):
        """Fewer than 0.5% of pixels at the extremes do not move the points."""
        pixels = np.full((1, 1000, 4), 128, dtype=np.uint8)
        pixels[0, :4, :3] = 0
        pixels[0, -4:, :3] = 255
        hist = analyze(pixels, 1000, 1)
        assert hist.black_point() == 128
        assert hist.white_point() == 128

    def test_black_white_point_span(self):
        levels = np.repeat(np.arange(256, dtype=np.uint8), 4)
        pixels = np.stack([levels, levels, levels, np.full_like(levels, 255)], axis=-1)
        hist = analyze(pixels, 1024, 1)
        assert hist.black_point() <= 2
        assert hist.white_point() >= 253

    def test_empty_points(self):
        hist = Histogram.empty()
        assert hist.black_point() == 255
        assert hist.white_point() == 0

    def test_percentile(self):
        levels = np.repeat(np.arange(256, dtype=np.uint8), 4)
        pixels = np.stack([levels, levels, levels, np.full_like(levels, 255)], axis=-1)
        hist = analyze(pixels, 1024, 1)
        assert hist.percentile(50, "red") == pytest.approx(127, abs=1)
        assert Histogram.empty().percentile(50) == 0
