"""Cue point model shared by detection, fades and the scheduler."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, Optional, Union

from cuemix.core.errors import InvalidCueOrdering

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from cuemix.core.config.detection import DetectionSettings


# Tolerance for float noise when comparing markers against the duration.
_EPSILON = 1e-9


class CueName(Enum):
    BEGIN = "begin"
    START = "start"
    NEXT = "next"
    END = "end"


@dataclass(frozen=True)
class CuePoints:
    """Four markers (seconds from the start of the track).

    ``begin``..``start`` is the fade-in ramp, ``next``..``end`` the fade-out
    ramp. ``next`` is also the point the following track is lined up against.
    """

    begin: float
    start: float
    next: float
    end: float

    @property
    def fade_in_duration(self) -> float:
        return self.start - self.begin

    @property
    def fade_out_duration(self) -> float:
        return self.end - self.next

    def resolve(self, position: Union[float, str, CueName]) -> float:
        """Return an absolute time for a cue name or pass a time through."""

        if isinstance(position, CueName):
            return float(getattr(self, position.value))
        if isinstance(position, str):
            try:
                name = CueName(position)
            except ValueError as exc:
                raise ValueError(f"Unknown cue point: {position!r}") from exc
            return float(getattr(self, name.value))
        return float(position)

    def validate(self, duration: Optional[float] = None) -> "CuePoints":
        markers = dict(begin=self.begin, start=self.start, next=self.next, end=self.end)
        if self.begin < 0:
            raise InvalidCueOrdering("begin lies before the start of the track", **markers)
        if self.begin > self.start:
            raise InvalidCueOrdering("begin lies after start", **markers)
        if self.next > self.end:
            raise InvalidCueOrdering("next lies after end", **markers)
        if duration is not None and self.end > duration + _EPSILON:
            raise InvalidCueOrdering(f"end lies past the track duration {duration:.3f}", **markers)
        return self

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def finalize_cue_points(
    start: float,
    raw_next: float,
    duration: float,
    settings: "DetectionSettings",
) -> CuePoints:
    """Turn detector output into validated cue points.

    ``raw_next`` comes from the reversed scan and is measured from the end of
    the track; it is converted here together with the fade offsets.
    """

    begin = max(0.0, start - settings.begin_fade)
    raw_end = max(0.0, raw_next - settings.end_fade)
    cue = CuePoints(
        begin=begin,
        start=start,
        next=duration - raw_next,
        end=duration - raw_end,
    )
    return cue.validate(duration)


def format_time(seconds: float) -> str:
    minutes, remainder = divmod(max(0.0, float(seconds)), 60.0)
    return f"{int(minutes)}:{remainder:05.2f}"
