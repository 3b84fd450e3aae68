"""Playlist track: one decoded buffer, its cue points and playback state."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Optional, Tuple, Union

from cuemix.core.cue_points import CueName, CuePoints, format_time
from cuemix.core.fade_curve import FadeCurve
from cuemix.core.trigger import TriggerState, advance

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from cuemix.audio.buffer import SampleBuffer
    from cuemix.audio.types import TrackPlayer

logger = logging.getLogger(__name__)


class Track:
    def __init__(
        self,
        buffer: "SampleBuffer",
        cue: CuePoints,
        player: "TrackPlayer",
        *,
        name: str = "",
        track_id: Optional[str] = None,
    ) -> None:
        self.id = track_id or uuid.uuid4().hex
        self.name = name
        self.buffer = buffer
        self.cue = cue.validate(buffer.duration_seconds)
        self.fade_curve = FadeCurve(cue)
        self.player = player
        self.state = TriggerState.ARMED
        self._resume_on_start = False

    @property
    def position(self) -> float:
        return float(self.player.current_time)

    @property
    def triggered(self) -> bool:
        return self.state is TriggerState.FIRED

    @property
    def fade_in_duration(self) -> float:
        return self.fade_curve.fade_in_duration

    @property
    def position_display(self) -> str:
        return f"{format_time(self.position)} / {format_time(self.buffer.duration_seconds)}"

    def seek_and_play(self, position: Union[float, str, CueName] = 0.0) -> None:
        """Play from an absolute time or from one of the cue names."""

        seconds = self.cue.resolve(position)
        logger.debug("Track %s: play from %.3fs (%s)", self.name or self.id, seconds, position)
        self.player.set_gain(self.fade_curve(seconds))
        self.player.play(seconds)

    def pause(self) -> None:
        self._resume_on_start = self.player.is_playing()
        self.player.pause()

    def resume(self) -> bool:
        """Continue playback if the track was playing when it was paused."""

        if not self._resume_on_start:
            return False
        self._resume_on_start = False
        self.player.play(self.position)
        return True

    def rearm(self) -> None:
        self.state = TriggerState.ARMED
        self._resume_on_start = False

    def tick(
        self,
        previous_position: Optional[float],
        previous_cue: Optional[CuePoints],
    ) -> Tuple[float, CuePoints]:
        """Advance the crossfade state and apply this frame's gain.

        Returns this track's position and cue points for the next track in the
        playlist.
        """

        if previous_position is not None and previous_cue is not None:
            time_to_previous_next = previous_cue.next - previous_position
            self.state, fire = advance(self.state, time_to_previous_next, self.fade_in_duration)
            if fire:
                logger.info(
                    "Crossfade: starting %s (%.3fs before previous next cue)",
                    self.name or self.id,
                    time_to_previous_next,
                )
                self.seek_and_play(CueName.BEGIN)
        position = self.position
        self.player.set_gain(self.fade_curve(position))
        return position, self.cue
