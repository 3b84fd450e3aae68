"""Track player backed by a `DeviceMixer` source."""

from __future__ import annotations

import uuid
from typing import Optional

from cuemix.audio.buffer import SampleBuffer
from cuemix.audio.mixer.device_mixer import DeviceMixer


class MixerPlayer:
    def __init__(self, mixer: DeviceMixer, buffer: SampleBuffer, *, source_id: Optional[str] = None) -> None:
        self.mixer = mixer
        self.source_id = source_id or uuid.uuid4().hex
        self.duration = buffer.duration_seconds
        mixer.add_source(self.source_id, buffer)

    @property
    def current_time(self) -> float:
        return self.mixer.position_seconds(self.source_id)

    def play(self, from_seconds: float = 0.0) -> None:
        self.mixer.play_source(self.source_id, from_seconds)

    def pause(self) -> None:
        self.mixer.pause_source(self.source_id)

    def is_playing(self) -> bool:
        return self.mixer.is_playing(self.source_id)

    def set_gain(self, value: float) -> None:
        self.mixer.set_gain(self.source_id, value)
