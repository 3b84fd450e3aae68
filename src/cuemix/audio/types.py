"""Audio output type definitions.

Kept separate from the mixer so that core modules can depend on the player
protocol without importing numpy or sounddevice.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass
class AudioDevice:
    id: str
    name: str
    raw_index: Optional[int] = None
    is_default: bool = False


class TrackPlayer(Protocol):
    @property
    def current_time(self) -> float: ...

    def play(self, from_seconds: float = 0.0) -> None: ...

    def pause(self) -> None: ...

    def is_playing(self) -> bool: ...

    def set_gain(self, value: float) -> None: ...
