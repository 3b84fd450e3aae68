"""Ordered playlist of tracks; insertion order is playback order."""

from __future__ import annotations

import logging
from threading import Lock
from typing import Iterable, Iterator, List, Optional

from cuemix.core.playlist_ops import move_items, swap_items
from cuemix.core.track import Track

logger = logging.getLogger(__name__)


class Playlist:
    """Thread-safe track list.

    The scheduler only ever iterates over :meth:`snapshot`, so tracks can be
    added, removed or reordered from another thread between two ticks.
    """

    def __init__(self, tracks: Optional[Iterable[Track]] = None) -> None:
        self._tracks: List[Track] = list(tracks or [])
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tracks)

    def __iter__(self) -> Iterator[Track]:
        return iter(self.snapshot())

    def __getitem__(self, index: int) -> Track:
        with self._lock:
            return self._tracks[index]

    def snapshot(self) -> List[Track]:
        with self._lock:
            return list(self._tracks)

    def append(self, track: Track) -> None:
        with self._lock:
            self._tracks.append(track)
        logger.debug("Playlist: appended %s", track.name or track.id)

    def remove_at(self, index: int) -> Optional[Track]:
        """Remove and silence the track at ``index``; out-of-range is a no-op."""

        with self._lock:
            if index < 0 or index >= len(self._tracks):
                return None
            track = self._tracks.pop(index)
        track.pause()
        track.rearm()
        logger.debug("Playlist: removed %s", track.name or track.id)
        return track

    def swap(self, first: int, second: int) -> bool:
        with self._lock:
            return swap_items(self._tracks, first, second)

    def move(self, selected_indices: List[int], delta: int) -> List[int]:
        with self._lock:
            return move_items(self._tracks, selected_indices, delta)

    def index_of(self, track_id: str) -> int:
        with self._lock:
            for index, track in enumerate(self._tracks):
                if track.id == track_id:
                    return index
        return -1
