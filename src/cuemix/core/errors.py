"""Exceptions raised by cue detection and playlist playback."""

from __future__ import annotations


class CueMixError(Exception):
    """Base class for all cuemix errors."""


class DecodeFailure(CueMixError):
    """Raised when audio data is malformed or in an unsupported format."""


class DetectionStalled(CueMixError):
    """Raised when a scan reaches the end of the buffer without a hit."""

    def __init__(self, direction: str, scanned_seconds: float) -> None:
        self.direction = direction
        self.scanned_seconds = scanned_seconds
        super().__init__(
            f"No {direction} cue found after scanning {scanned_seconds:.2f}s; "
            "the track never reached the configured levels"
        )


class InvalidCueOrdering(CueMixError):
    """Raised when cue markers violate ``begin <= start`` or ``next <= end``."""

    def __init__(self, message: str, *, begin: float, start: float, next: float, end: float) -> None:
        self.begin = begin
        self.start = start
        self.next = next
        self.end = end
        super().__init__(
            f"{message} (begin={begin:.3f}, start={start:.3f}, next={next:.3f}, end={end:.3f})"
        )
