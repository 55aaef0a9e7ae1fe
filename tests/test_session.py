"""Tests for the grading session commit loop."""

import numpy as np
import pytest

from tonegrade import GradingSession, SessionSnapshot
from tonegrade.config import WARM, ParameterSet


@pytest.fixture
def dark_image():
    """Dark, slightly blue 40x30 image."""
    rng = np.random.default_rng(11)
    pixels = rng.integers(10, 70, size=(30, 40, 4), dtype=np.uint8)
    pixels[..., 2] = np.clip(pixels[..., 2].astype(int) + 20, 0, 255).astype(np.uint8)
    pixels[..., 3] = 255
    return pixels


@pytest.fixture
def session(dark_image):
    return GradingSession(dark_image, 40, 30)


class TestCommit:
    """Test commit/update."""

    def test_snapshot_contents(self, session):
        snap = session.commit()
        assert isinstance(snap, SessionSnapshot)
        assert snap.parameters == ParameterSet()
        assert snap.image.shape == (30, 40, 4)
        assert len(snap.curve) == 256
        assert snap.histogram.n_pixels == 1200
        assert snap.original_histogram.n_pixels == 1200

    def test_update_changes_image_and_curve(self):
        pixels = np.full((4, 4, 4), 64, dtype=np.uint8)
        session = GradingSession(pixels, 4, 4)
        snap = session.update(exposure=1.0)
        assert session.parameters.exposure == 1.0
        assert np.all(snap.image[..., :3] == 128)
        assert snap.curve[64].y == 128
        assert snap.histogram.red[128] == 16

    def test_update_clamps(self, session):
        snap = session.update(exposure=42.0)
        assert snap.parameters.exposure == 5.0

    def test_update_unknown_field(self, session):
        with pytest.raises(ValueError):
            session.update(gamma=1.2)

    def test_last_write_wins(self, session):
        session.update(contrast=70.0)
        snap = session.update(contrast=30.0)
        assert snap.parameters.contrast == 30.0

    def test_original_is_untouched(self, session, dark_image):
        before = session.original_histogram
        session.update(exposure=2.0, saturation=50.0)
        np.testing.assert_array_equal(session.original, dark_image)
        assert session.snapshot.original_histogram is before

    def test_apply_preset(self, session):
        snap = session.apply_preset("warm")
        assert snap.parameters == WARM.clamp()

    def test_reset(self, session):
        session.update(exposure=1.5)
        snap = session.reset()
        assert snap.parameters == ParameterSet()
        assert session.last_auto_adjust is None


class TestAutoAdjust:
    """Test auto_adjust()."""

    def test_brightens_dark_image(self, session):
        snap = session.auto_adjust()
        assert snap.parameters.exposure > 0.0
        assert snap.histogram.mean("luminance") > snap.original_histogram.mean("luminance")
        assert session.last_auto_adjust is not None

    def test_blue_cast_raises_temperature(self, session):
        snap = session.auto_adjust()
        assert snap.parameters.temperature > 5500.0

    def test_does_not_compound(self, session):
        """Repeated auto adjust reads the original and converges immediately."""
        first = session.auto_adjust().parameters
        second = session.auto_adjust().parameters
        assert first == second

    def test_keeps_unpatched_fields(self, session):
        session.update(vibrance=25.0)
        snap = session.auto_adjust()
        assert snap.parameters.vibrance == 25.0


class TestNoImage:
    """Sessions without a valid image still produce curves."""

    def test_no_image(self):
        session = GradingSession()
        snap = session.snapshot
        assert snap.image.size == 0
        assert snap.histogram.is_empty
        assert len(snap.curve) == 256

    def test_invalid_image(self, dark_image):
        session = GradingSession(dark_image, 5, 5)
        snap = session.update(exposure=1.0)
        assert snap.image.size == 0
        assert snap.original_histogram.is_empty
        assert snap.curve[100].y == 200

    def test_auto_adjust_without_image(self):
        snap = GradingSession().auto_adjust()
        assert snap.parameters == ParameterSet()

    def test_load_image_later(self, dark_image):
        session = GradingSession(params=ParameterSet(exposure=1.0))
        snap = session.load_image(dark_image, 40, 30)
        assert snap.image.shape == (30, 40, 4)
        assert snap.parameters.exposure == 1.0
