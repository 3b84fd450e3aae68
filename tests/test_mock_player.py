from cuemix.audio.mock_backend import MockPlayer


class _Clock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_mock_player_follows_clock_and_stops_at_duration() -> None:
    clock = _Clock()
    player = MockPlayer(5.0, clock=clock)

    player.play(1.0)
    clock.now += 2.5
    assert player.current_time == 3.5
    assert player.is_playing()

    clock.now += 10.0
    assert player.current_time == 5.0
    assert not player.is_playing()


def test_mock_player_pause_freezes_position() -> None:
    clock = _Clock()
    player = MockPlayer(5.0, clock=clock)

    player.play(0.0)
    clock.now += 1.0
    player.pause()
    clock.now += 3.0

    assert player.current_time == 1.0
    assert not player.is_playing()
    assert player.pause_calls == 1


def test_mock_player_records_gain() -> None:
    player = MockPlayer(1.0)
    player.set_gain(0.25)
    player.set_gain(1.0)
    assert player.gain == 1.0
    assert player.gain_history == [0.25, 1.0]
