"""Mock track player used by tests and dry runs."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class MockPlayer:
    """Player that only keeps time; no audio is produced.

    Position follows ``clock`` while playing and stops at ``duration``. Tests
    pass a manual clock or set :attr:`position` directly.
    """

    def __init__(
        self,
        duration: float,
        *,
        name: str = "mock",
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.duration = float(duration)
        self.name = name
        self._clock = clock or time.monotonic
        self._base_position = 0.0
        self._started_at: Optional[float] = None
        self.gain: float = 1.0
        self.gain_history: list[float] = []
        self.play_calls: list[float] = []
        self.pause_calls = 0

    @property
    def current_time(self) -> float:
        if self._started_at is None:
            return self._base_position
        elapsed = self._clock() - self._started_at
        return min(self.duration, self._base_position + max(0.0, elapsed))

    @property
    def position(self) -> float:
        return self.current_time

    @position.setter
    def position(self, seconds: float) -> None:
        self._base_position = min(self.duration, max(0.0, float(seconds)))
        if self._started_at is not None:
            self._started_at = self._clock()

    def play(self, from_seconds: float = 0.0) -> None:
        logger.info("[MOCK] Play %s from %.3fs", self.name, from_seconds)
        self.play_calls.append(float(from_seconds))
        self._base_position = min(self.duration, max(0.0, float(from_seconds)))
        self._started_at = self._clock()

    def pause(self) -> None:
        self.pause_calls += 1
        if self._started_at is not None:
            logger.info("[MOCK] Pause %s at %.3fs", self.name, self.current_time)
            self._base_position = self.current_time
            self._started_at = None

    def is_playing(self) -> bool:
        return self._started_at is not None and self.current_time < self.duration

    def set_gain(self, value: float) -> None:
        self.gain = float(value)
        self.gain_history.append(self.gain)
