"""Application configuration management module."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import DEFAULT_CONFIG
from .detection import DetectionSettings
from .merge import _deep_merge
from cuemix.core.env import resolve_config_path

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_CONFIG_PATH = Path("config/settings.yaml")


@dataclass
class SettingsManager:
    """YAML configuration with default values.

    An explicit ``config_path`` is used as given; otherwise the environment
    overrides are applied to ``DEFAULT_CONFIG_PATH``.
    """

    config_path: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.config_path is None:
            self.config_path = resolve_config_path(DEFAULT_CONFIG_PATH)
        else:
            self.config_path = Path(self.config_path)
        self._data: Dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        if self.config_path.exists():
            with self.config_path.open("r", encoding="utf-8") as file:
                user_config = yaml.safe_load(file) or {}
            if not isinstance(user_config, dict):
                logger.warning("Ignoring malformed settings file %s", self.config_path)
                user_config = {}
            self._data = _deep_merge(DEFAULT_CONFIG, user_config)
        else:
            self._data = copy.deepcopy(DEFAULT_CONFIG)

    def save(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with self.config_path.open("w", encoding="utf-8") as file:
            yaml.safe_dump(self._data, file, allow_unicode=False, sort_keys=True)

    def get_detection_settings(self) -> DetectionSettings:
        """Build detection settings; invalid values raise ``ValueError``."""

        detection = self._data.get("detection", {})
        if not isinstance(detection, dict):
            detection = DEFAULT_CONFIG["detection"]
        return DetectionSettings.from_mapping(detection)

    def set_detection_settings(self, settings: DetectionSettings) -> None:
        self._data["detection"] = settings.to_mapping()

    def get_tick_interval(self) -> float:
        playback = self._data.get("playback", {})
        value = playback.get("tick_interval_seconds", DEFAULT_CONFIG["playback"]["tick_interval_seconds"])
        try:
            value = float(value)
        except (TypeError, ValueError):
            return DEFAULT_CONFIG["playback"]["tick_interval_seconds"]
        return value if value > 0 else DEFAULT_CONFIG["playback"]["tick_interval_seconds"]

    def set_tick_interval(self, seconds: float) -> None:
        playback = self._data.setdefault("playback", {})
        playback["tick_interval_seconds"] = float(seconds)

    def get_output_block_size(self) -> int:
        playback = self._data.get("playback", {})
        value = playback.get("output_block_size", DEFAULT_CONFIG["playback"]["output_block_size"])
        try:
            return max(32, int(value))
        except (TypeError, ValueError):
            return DEFAULT_CONFIG["playback"]["output_block_size"]

    def get_output_device(self) -> Optional[str]:
        playback = self._data.get("playback", {})
        value = playback.get("device")
        return str(value) if value not in (None, "") else None

    def set_output_device(self, device: Optional[str]) -> None:
        playback = self._data.setdefault("playback", {})
        playback["device"] = device

    def get_diagnostics_log_level(self) -> str:
        diagnostics = self._data.get("diagnostics", {})
        level = str(diagnostics.get("log_level", DEFAULT_CONFIG["diagnostics"]["log_level"])).upper()
        return level if level in _LOG_LEVELS else DEFAULT_CONFIG["diagnostics"]["log_level"]
