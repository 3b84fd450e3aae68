"""Decoded sample buffers and block iteration."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Union

import numpy as np
import soundfile as sf

from cuemix.core.errors import DecodeFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SampleBuffer:
    """Read-only ``(frames, channels)`` float32 samples with their rate."""

    samples: np.ndarray
    samplerate: int

    def __post_init__(self) -> None:
        samples = np.asarray(self.samples, dtype=np.float32)
        if samples.ndim == 1:
            samples = samples[:, None]
        if samples.ndim != 2 or samples.shape[1] == 0:
            raise ValueError("samples must be a (frames, channels) array")
        if self.samplerate <= 0:
            raise ValueError("samplerate must be positive")
        samples.setflags(write=False)
        object.__setattr__(self, "samples", samples)

    @property
    def frames(self) -> int:
        return int(self.samples.shape[0])

    @property
    def channels(self) -> int:
        return int(self.samples.shape[1])

    @property
    def duration_seconds(self) -> float:
        return self.frames / float(self.samplerate)

    def channel(self, index: int) -> np.ndarray:
        return self.samples[:, index]

    def reversed(self) -> "SampleBuffer":
        """Time-reversed view of the same samples; nothing is copied."""

        return SampleBuffer(self.samples[::-1], self.samplerate)


def decode(raw: bytes) -> SampleBuffer:
    try:
        samples, samplerate = sf.read(io.BytesIO(raw), dtype="float32", always_2d=True)
    except RuntimeError as exc:
        raise DecodeFailure(f"Unable to decode audio data: {exc}") from exc
    if samples.size == 0:
        raise DecodeFailure("Audio data contains no samples")
    logger.debug("Decoded %d frames x %d channels at %d Hz", samples.shape[0], samples.shape[1], samplerate)
    return SampleBuffer(samples, int(samplerate))


def load_file(path: Union[str, Path]) -> SampleBuffer:
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise DecodeFailure(f"Unable to read {path}: {exc}") from exc
    try:
        return decode(raw)
    except DecodeFailure as exc:
        raise DecodeFailure(f"{path}: {exc}") from exc


def iter_blocks(buffer: SampleBuffer, block_size: int, *, reverse: bool = False) -> Iterator[np.ndarray]:
    """Yield sequential, non-overlapping blocks, last one possibly shorter."""

    if block_size <= 0:
        raise ValueError("block_size must be positive")
    samples = buffer.samples[::-1] if reverse else buffer.samples
    for offset in range(0, samples.shape[0], block_size):
        yield samples[offset : offset + block_size]
