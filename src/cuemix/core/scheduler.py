"""Real-time playlist scheduler driving crossfades between tracks.

Each tick walks the playlist once, in order, handing every track the
position and cue points of its predecessor. Track ``i`` must be ticked before
track ``i + 1``; the pass is never parallelised.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from cuemix.core.cue_points import CueName, CuePoints
from cuemix.core.playlist import Playlist

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL = 1.0 / 60.0


class PlaylistScheduler:
    def __init__(
        self,
        playlist: Playlist,
        *,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
        on_tick: Optional[Callable[[Playlist], None]] = None,
    ) -> None:
        if tick_interval <= 0:
            raise ValueError("tick_interval must be positive")
        self.playlist = playlist
        self.tick_interval = float(tick_interval)
        self._on_tick = on_tick
        self._token: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None
        self._finished = threading.Event()

    @property
    def playing(self) -> bool:
        return self._token is not None and not self._token.is_set()

    def tick(self) -> bool:
        """Run one scheduling pass; return True while any track is playing."""

        previous_position: Optional[float] = None
        previous_cue: Optional[CuePoints] = None
        active = False
        for track in self.playlist.snapshot():
            previous_position, previous_cue = track.tick(previous_position, previous_cue)
            active = active or track.player.is_playing()
        if self._on_tick is not None:
            self._on_tick(self.playlist)
        return active

    def start(self) -> bool:
        """Play the playlist from the first track's ``begin`` cue."""

        self.stop()
        tracks = self.playlist.snapshot()
        if not tracks:
            logger.info("Scheduler: nothing to play")
            return False
        for track in tracks:
            track.pause()
            track.rearm()
        tracks[0].seek_and_play(CueName.BEGIN)
        self._launch()
        return True

    def resume(self) -> bool:
        """Continue after :meth:`stop` without re-arming any track.

        Only the tracks that were audible when playback stopped are resumed, so
        an interrupted crossfade carries on where it was.
        """

        if self.playing:
            return True
        resumed = [track for track in self.playlist.snapshot() if track.resume()]
        if not resumed:
            return self.start()
        self._launch()
        return True

    def stop(self) -> None:
        token = self._token
        thread = self._thread
        if token is not None:
            token.set()
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=max(1.0, self.tick_interval * 4))
        self._thread = None
        for track in self.playlist.snapshot():
            track.pause()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the tick loop ends on its own or is stopped."""

        return self._finished.wait(timeout)

    def _launch(self) -> None:
        token = threading.Event()
        finished = threading.Event()
        self._token = token
        self._finished = finished
        self._thread = threading.Thread(
            target=self._run,
            args=(token, finished),
            name="cuemix-scheduler",
            daemon=True,
        )
        self._thread.start()
        logger.debug("Scheduler: tick loop started (interval %.4fs)", self.tick_interval)

    def _run(self, token: threading.Event, finished: threading.Event) -> None:
        try:
            while not token.is_set():
                if not self.tick():
                    logger.info("Scheduler: playlist finished")
                    break
                token.wait(self.tick_interval)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Scheduler: tick failed, stopping playback")
        finally:
            token.set()
            finished.set()
