"""Thread-safe management of mixer sources."""

from __future__ import annotations

from threading import Lock
from typing import Dict, Optional, Tuple

from cuemix.audio.mixer.types import MixerSource


class MixerSourceManager:
    def __init__(self) -> None:
        self._sources: Dict[str, MixerSource] = {}
        self._lock = Lock()

    def snapshot(self) -> list[MixerSource]:
        with self._lock:
            return list(self._sources.values())

    def replace(self, source: MixerSource) -> Optional[MixerSource]:
        with self._lock:
            old = self._sources.pop(source.source_id, None)
            self._sources[source.source_id] = source
            return old

    def get(self, source_id: str) -> Optional[MixerSource]:
        with self._lock:
            return self._sources.get(source_id)

    def pop(self, source_id: str) -> Optional[MixerSource]:
        with self._lock:
            return self._sources.pop(source_id, None)

    def clear(self) -> list[MixerSource]:
        with self._lock:
            sources = list(self._sources.values())
            self._sources.clear()
            return sources

    def any_playing(self) -> bool:
        with self._lock:
            return any(source.playing for source in self._sources.values())

    def set_gain(self, source_id: str, gain: float) -> None:
        with self._lock:
            source = self._sources.get(source_id)
            if source:
                source.gain = min(1.0, max(0.0, float(gain)))

    def play(self, source_id: str, start_seconds: float) -> bool:
        with self._lock:
            source = self._sources.get(source_id)
            if not source:
                return False
            frame = int(round(max(0.0, start_seconds) * source.samplerate))
            source.position_frames = min(frame, source.frames)
            source.seek_generation += 1
            source.applied_gain = source.gain
            source.playing = source.position_frames < source.frames
            source.finished_event.clear()
            return source.playing

    def pause(self, source_id: str) -> None:
        with self._lock:
            source = self._sources.get(source_id)
            if source:
                source.playing = False

    def mark_finished(self, source_id: str) -> Optional[MixerSource]:
        with self._lock:
            source = self._sources.get(source_id)
            # a seek after the last block was rendered keeps the source playing
            if not source or source.position_frames < source.frames:
                return None
            source.playing = False
            return source

    def cursor(self, source_id: str) -> Optional[Tuple[int, int, float, float]]:
        """Return ``(position, generation, applied_gain, gain)`` of a playing source."""

        with self._lock:
            source = self._sources.get(source_id)
            if not source or not source.playing:
                return None
            return source.position_frames, source.seek_generation, source.applied_gain, float(source.gain)

    def advance(self, source_id: str, generation: int, position_frames: int, applied_gain: float) -> bool:
        """Commit a rendered block unless the source was seeked meanwhile."""

        with self._lock:
            source = self._sources.get(source_id)
            if not source or source.seek_generation != generation:
                return False
            source.position_frames = position_frames
            source.applied_gain = applied_gain
            return True
