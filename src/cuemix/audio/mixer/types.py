"""Shared types/helpers for the software audio mixer."""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Event
from typing import Optional

import numpy as np


class NullOutputStream:
    """Output stream that discards audio, used for dry runs and tests."""

    def __init__(self, samplerate: float, channels: int, writes: Optional[list] = None):
        self.samplerate = samplerate
        self.channels = channels
        self._writes = writes

    def write(self, data) -> None:
        if self._writes is not None:
            self._writes.append(np.array(data, copy=True))

    def __enter__(self) -> "NullOutputStream":  # pragma: no cover - trivial
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:  # pragma: no cover - trivial
        return False


@dataclass
class MixerSource:
    source_id: str
    samples: np.ndarray
    samplerate: int
    gain: float = 1.0
    applied_gain: float = 1.0
    playing: bool = False
    position_frames: int = 0
    seek_generation: int = 0
    finished_event: Event = field(default_factory=Event)

    @property
    def frames(self) -> int:
        return int(self.samples.shape[0])

    @property
    def position_seconds(self) -> float:
        return self.position_frames / float(self.samplerate or 1)
