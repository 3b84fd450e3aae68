"""Cue detection settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

MIN_BLOCK_SIZE = 256
MAX_BLOCK_SIZE = 16384


@dataclass(frozen=True)
class LevelSettings:
    """Thresholds for one scan direction, in dBFS and seconds."""

    peak_level: float = -15.0
    quiet_level: float = -30.0
    quiet_duration: float = 0.5

    def __post_init__(self) -> None:
        if not self.peak_level > self.quiet_level:
            raise ValueError(
                f"peak_level ({self.peak_level}) must be above quiet_level ({self.quiet_level})"
            )
        if self.quiet_duration < 0:
            raise ValueError("quiet_duration must not be negative")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "LevelSettings":
        defaults = cls.__dataclass_fields__
        return cls(**{name: float(values.get(name, defaults[name].default)) for name in defaults})


@dataclass(frozen=True)
class DetectionSettings:
    start: LevelSettings = field(default_factory=LevelSettings)
    next: LevelSettings = field(default_factory=LevelSettings)
    begin_fade: float = 0.0
    end_fade: float = 0.5
    block_size: int = 256

    def __post_init__(self) -> None:
        if self.begin_fade < 0 or self.end_fade < 0:
            raise ValueError("Fade offsets must not be negative")
        size = self.block_size
        if size < MIN_BLOCK_SIZE or size > MAX_BLOCK_SIZE or size & (size - 1):
            raise ValueError(
                f"block_size must be a power of two between {MIN_BLOCK_SIZE} and {MAX_BLOCK_SIZE}, got {size}"
            )

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "DetectionSettings":
        return cls(
            start=LevelSettings.from_mapping(values.get("start") or {}),
            next=LevelSettings.from_mapping(values.get("next") or {}),
            begin_fade=float(values.get("begin_fade", 0.0)),
            end_fade=float(values.get("end_fade", 0.5)),
            block_size=int(values.get("block_size", 256)),
        )

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "start": vars(self.start).copy(),
            "next": vars(self.next).copy(),
            "begin_fade": self.begin_fade,
            "end_fade": self.end_fade,
            "block_size": self.block_size,
        }
