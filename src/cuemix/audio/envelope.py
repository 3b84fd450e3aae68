"""Block loudness measurement (RMS expressed in dBFS)."""

from __future__ import annotations

import numpy as np


def channel_rms(block: np.ndarray) -> np.ndarray:
    """Per-channel RMS of a ``(frames, channels)`` block."""

    data = np.asarray(block, dtype=np.float64)
    if data.ndim == 1:
        data = data[:, None]
    if data.ndim != 2 or data.shape[0] == 0 or data.shape[1] == 0:
        raise ValueError("Block must contain at least one sample per channel")
    return np.sqrt(np.mean(np.square(data), axis=0))


def block_rms(block: np.ndarray) -> float:
    """RMS across channels, computed as the RMS of the per-channel RMS values."""

    per_channel = channel_rms(block)
    return float(np.sqrt(np.mean(np.square(per_channel))))


def lin2db(value: float) -> float:
    """Convert a linear amplitude to dBFS; silence gives ``-inf``."""

    with np.errstate(divide="ignore"):
        return float(20.0 * np.log10(value))


def measure(block: np.ndarray) -> float:
    return lin2db(block_rms(block))
