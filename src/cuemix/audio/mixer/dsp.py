"""DSP helpers for the software audio mixer."""

from __future__ import annotations

import numpy as np


def match_channels(data: np.ndarray, channels: int) -> np.ndarray:
    if data.shape[1] == channels:
        return data
    if data.shape[1] > channels:
        return data[:, :channels]
    pad_count = channels - data.shape[1]
    pad = np.repeat(data[:, -1:], pad_count, axis=1)
    return np.concatenate([data, pad], axis=1)


def apply_gain_ramp(data: np.ndarray, frames_out: int, start_gain: float, end_gain: float) -> np.ndarray:
    """Scale the first ``frames_out`` frames, ramping linearly between gains.

    Gain changes arrive once per scheduler tick; ramping across the block keeps
    fades free of zipper noise.
    """

    if frames_out == 0:
        return data
    result = data.copy()
    if start_gain == end_gain:
        result[:frames_out] *= start_gain
        return result
    ramp = np.linspace(start_gain, end_gain, frames_out, endpoint=False, dtype=result.dtype)
    result[:frames_out] *= ramp[:, None]
    return result
