"""Source rendering for the software audio mixer."""

from __future__ import annotations

import numpy as np

from cuemix.audio.mixer.dsp import apply_gain_ramp
from cuemix.audio.mixer.source_manager import MixerSourceManager
from cuemix.audio.mixer.types import MixerSource


def render_source(
    source: MixerSource,
    manager: MixerSourceManager,
    *,
    block_size: int,
    channels: int,
):
    """Return ``(block, frames_out, finished)`` for one output block.

    The read cursor is taken and committed through ``manager``. A seek that
    lands while the block is being rendered wins: the block is dropped and
    the source keeps the new position.
    """

    output = np.zeros((block_size, channels), dtype=np.float32)
    cursor = manager.cursor(source.source_id)
    if cursor is None:
        return output, 0, False

    start, generation, applied_gain, target_gain = cursor
    chunk = source.samples[start : start + block_size]
    frames_out = len(chunk)
    if frames_out:
        output[:frames_out] = chunk
    output = apply_gain_ramp(output, frames_out, applied_gain, target_gain)

    end = start + frames_out
    if not manager.advance(source.source_id, generation, end, target_gain):
        return np.zeros((block_size, channels), dtype=np.float32), 0, False
    return output, frames_out, end >= source.frames
