import numpy as np
import pytest

from cuemix.audio.buffer import SampleBuffer
from cuemix.audio.mock_backend import MockPlayer
from cuemix.core.cue_points import CueName, CuePoints
from cuemix.core.errors import InvalidCueOrdering
from cuemix.core.track import Track
from cuemix.core.trigger import TriggerState


def _make_track(duration: float, cue: CuePoints, name: str = "track") -> Track:
    buffer = SampleBuffer(np.zeros((int(duration * 100), 2), dtype=np.float32), 100)
    return Track(buffer, cue, MockPlayer(duration, name=name, clock=lambda: 0.0), name=name)


def test_seek_and_play_resolves_cue_names() -> None:
    track = _make_track(12.0, CuePoints(begin=1.0, start=2.0, next=9.0, end=10.0))

    track.seek_and_play("next")
    track.seek_and_play(CueName.BEGIN)
    track.seek_and_play(4.25)

    assert track.player.play_calls == [9.0, 1.0, 4.25]
    assert track.position == 4.25


def test_seek_and_play_sets_gain_before_playing() -> None:
    track = _make_track(12.0, CuePoints(begin=1.0, start=2.0, next=9.0, end=10.0))

    track.seek_and_play("begin")

    assert track.player.gain_history == [0.0]


def test_constructor_rejects_cue_past_buffer_end() -> None:
    with pytest.raises(InvalidCueOrdering):
        _make_track(5.0, CuePoints(begin=0.0, start=1.0, next=4.0, end=6.0))


def test_first_track_tick_only_applies_gain() -> None:
    track = _make_track(12.0, CuePoints(begin=0.0, start=2.0, next=9.0, end=10.0))
    track.player.position = 1.0

    position, cue = track.tick(None, None)

    assert position == 1.0
    assert cue is track.cue
    assert track.player.gain == pytest.approx(0.5)
    assert track.state is TriggerState.ARMED
    assert track.player.play_calls == []


def test_tick_fires_and_reports_own_position() -> None:
    previous = CuePoints(begin=0.0, start=0.0, next=10.0, end=11.0)
    track = _make_track(12.0, CuePoints(begin=0.5, start=2.5, next=9.0, end=10.0))

    track.tick(7.0, previous)
    assert not track.triggered

    position, _cue = track.tick(8.0, previous)
    assert track.triggered
    assert track.player.play_calls == [0.5]
    assert position == 0.5


def test_pause_and_resume_only_restarts_playing_tracks() -> None:
    playing = _make_track(12.0, CuePoints(begin=0.0, start=0.0, next=9.0, end=10.0), "playing")
    idle = _make_track(12.0, CuePoints(begin=0.0, start=0.0, next=9.0, end=10.0), "idle")
    playing.seek_and_play(3.0)

    playing.pause()
    idle.pause()

    assert playing.resume() is True
    assert playing.player.play_calls == [3.0, 3.0]
    assert idle.resume() is False
    assert idle.player.play_calls == []


def test_position_display() -> None:
    track = _make_track(75.0, CuePoints(begin=0.0, start=0.0, next=70.0, end=75.0))
    track.player.position = 61.0
    assert track.position_display == "1:01.00 / 1:15.00"
