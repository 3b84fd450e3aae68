import numpy as np

from cuemix.audio.buffer import SampleBuffer
from cuemix.audio.mock_backend import MockPlayer
from cuemix.core.cue_points import CuePoints
from cuemix.core.playlist import Playlist
from cuemix.core.track import Track


def _make_track(name: str) -> Track:
    buffer = SampleBuffer(np.zeros((1000, 1), dtype=np.float32), 100)
    cue = CuePoints(begin=0.0, start=1.0, next=8.0, end=9.0)
    return Track(buffer, cue, MockPlayer(10.0, name=name), name=name, track_id=name)


def _names(playlist: Playlist) -> list[str]:
    return [track.name for track in playlist]


def test_append_keeps_insertion_order() -> None:
    playlist = Playlist()
    for name in ("A", "B", "C"):
        playlist.append(_make_track(name))

    assert _names(playlist) == ["A", "B", "C"]
    assert len(playlist) == 3
    assert playlist[1].name == "B"
    assert playlist.index_of("C") == 2
    assert playlist.index_of("missing") == -1


def test_remove_at_ignores_out_of_range() -> None:
    playlist = Playlist([_make_track("A"), _make_track("B")])

    assert playlist.remove_at(5) is None
    assert playlist.remove_at(-1) is None
    removed = playlist.remove_at(0)

    assert removed is not None and removed.name == "A"
    assert _names(playlist) == ["B"]


def test_swap_and_move() -> None:
    playlist = Playlist([_make_track(name) for name in "ABCD"])

    assert playlist.swap(0, 3) is True
    assert _names(playlist) == ["D", "B", "C", "A"]
    assert playlist.swap(0, 9) is False

    assert playlist.move([2], -2) == [0]
    assert _names(playlist) == ["C", "D", "B", "A"]


def test_snapshot_is_isolated_from_later_mutation() -> None:
    playlist = Playlist([_make_track("A"), _make_track("B")])

    snapshot = playlist.snapshot()
    playlist.remove_at(0)
    playlist.append(_make_track("C"))

    assert [track.name for track in snapshot] == ["A", "B"]
    assert _names(playlist) == ["B", "C"]


def test_remove_at_silences_playing_track() -> None:
    playlist = Playlist([_make_track("A"), _make_track("B")])
    playlist[0].seek_and_play("begin")

    removed = playlist.remove_at(0)

    assert not removed.player.is_playing()
    assert removed.resume() is False
