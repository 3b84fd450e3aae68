import pytest

from cuemix.core.cue_points import CuePoints
from cuemix.core.fade_curve import FadeCurve


def test_linear_ramps_and_clamping() -> None:
    curve = FadeCurve(CuePoints(begin=0.0, start=1.0, next=4.0, end=5.0))

    assert curve(0.0) == 0.0
    assert curve(1.0) == 1.0
    assert curve(2.5) == 1.0
    assert curve(4.5) == pytest.approx(0.5)
    assert curve(5.0) == 0.0
    assert curve(-1.0) == 0.0
    assert curve(6.0) == 0.0


def test_midpoint_of_fade_in() -> None:
    curve = FadeCurve(CuePoints(begin=2.0, start=4.0, next=8.0, end=10.0))
    assert curve.fade_in(3.0) == pytest.approx(0.5)
    assert curve.fade_out(3.0) == 1.0
    assert curve(9.5) == pytest.approx(0.25)


def test_step_fade_in_when_start_equals_begin() -> None:
    curve = FadeCurve(CuePoints(begin=2.0, start=2.0, next=8.0, end=9.0))

    assert curve(2.0 - 0.001) == 0.0
    assert curve(2.0) == 1.0


def test_step_fade_out_when_next_equals_end() -> None:
    curve = FadeCurve(CuePoints(begin=0.0, start=1.0, next=4.0, end=4.0))

    assert curve(4.0) == 1.0
    assert curve(4.0 + 0.001) == 0.0


def test_durations_exposed_for_look_ahead() -> None:
    curve = FadeCurve(CuePoints(begin=1.0, start=3.0, next=7.0, end=7.5))
    assert curve.fade_in_duration == pytest.approx(2.0)
    assert curve.fade_out_duration == pytest.approx(0.5)
