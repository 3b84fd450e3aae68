"""Gain curves derived from cue points."""

from __future__ import annotations

from typing import Callable

from cuemix.core.cue_points import CuePoints


def clamp(value: float, low: float, high: float) -> float:
    return low if value < low else high if value > high else value


def _ramp(x0: float, y0: float, x1: float, y1: float) -> Callable[[float], float]:
    slope = (y1 - y0) / (x1 - x0)
    offset = y0 - slope * x0
    return lambda time: clamp(slope * time + offset, 0.0, 1.0)


class FadeCurve:
    """Maps a playback position to a gain in ``[0, 1]``.

    The curve is the product of a fade-in (``begin`` -> ``start``) and a
    fade-out (``next`` -> ``end``). Coinciding ramp endpoints switch the gain
    instantly instead of ramping.
    """

    def __init__(self, cue: CuePoints) -> None:
        self.cue = cue
        if cue.start == cue.begin:
            self._fade_in = lambda time: 0.0 if time < cue.begin else 1.0
        else:
            self._fade_in = _ramp(cue.begin, 0.0, cue.start, 1.0)
        if cue.next == cue.end:
            self._fade_out = lambda time: 0.0 if time > cue.end else 1.0
        else:
            self._fade_out = _ramp(cue.next, 1.0, cue.end, 0.0)

    @property
    def fade_in_duration(self) -> float:
        return self.cue.fade_in_duration

    @property
    def fade_out_duration(self) -> float:
        return self.cue.fade_out_duration

    def fade_in(self, time: float) -> float:
        return self._fade_in(time)

    def fade_out(self, time: float) -> float:
        return self._fade_out(time)

    def __call__(self, time: float) -> float:
        return self._fade_in(time) * self._fade_out(time)
