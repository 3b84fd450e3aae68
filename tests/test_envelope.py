import math

import numpy as np
import pytest

from cuemix.audio.envelope import block_rms, channel_rms, lin2db, measure


def test_full_scale_constant_is_zero_dbfs() -> None:
    block = np.ones((256, 2), dtype=np.float32)
    assert measure(block) == pytest.approx(0.0)


def test_rms_of_rms_across_channels() -> None:
    block = np.zeros((128, 2), dtype=np.float32)
    block[:, 0] = 1.0

    assert list(channel_rms(block)) == pytest.approx([1.0, 0.0])
    assert block_rms(block) == pytest.approx(math.sqrt(0.5))
    assert measure(block) == pytest.approx(-3.0103, abs=1e-3)


def test_full_scale_sine_is_about_minus_three_db() -> None:
    t = np.arange(8000) / 8000.0
    block = np.sin(2 * np.pi * 100.0 * t).astype(np.float32)[:, None]
    assert measure(block) == pytest.approx(-3.01, abs=0.01)


def test_silence_is_negative_infinity_without_raising() -> None:
    level = measure(np.zeros((256, 2), dtype=np.float32))
    assert level == float("-inf")
    assert level < -1000.0


def test_lin2db_zero() -> None:
    assert lin2db(0.0) == float("-inf")


def test_empty_block_is_rejected() -> None:
    with pytest.raises(ValueError):
        measure(np.zeros((0, 2), dtype=np.float32))
