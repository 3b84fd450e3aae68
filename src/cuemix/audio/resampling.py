"""Linear resampling used when a track's rate differs from the output rate."""

from __future__ import annotations

import numpy as np


def _resample_to_length(block: np.ndarray, target_frames: int) -> np.ndarray:
    if target_frames <= 0:
        return block[:0]
    src_frames = block.shape[0]
    if src_frames == 0 or src_frames == target_frames:
        return block
    if src_frames == 1:
        return np.repeat(block, target_frames, axis=0).astype(block.dtype, copy=False)
    src_idx = np.arange(src_frames, dtype=np.float64)
    target_idx = np.linspace(0.0, src_frames - 1, target_frames, dtype=np.float64)
    resampled = np.empty((target_frames, block.shape[1]), dtype=np.float32)
    for channel in range(block.shape[1]):
        resampled[:, channel] = np.interp(target_idx, src_idx, block[:, channel])
    return resampled.astype(block.dtype, copy=False)


def resample(samples: np.ndarray, src_rate: int, dst_rate: int) -> np.ndarray:
    """Resample ``(frames, channels)`` samples so durations are preserved."""

    if src_rate == dst_rate:
        return samples
    target_frames = max(1, int(round(samples.shape[0] * float(dst_rate) / float(src_rate))))
    return _resample_to_length(samples, target_frames)
