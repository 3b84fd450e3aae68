"""Default configuration values."""

from __future__ import annotations

from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    "detection": {
        "start": {
            "peak_level": -15.0,
            "quiet_level": -30.0,
            "quiet_duration": 0.5,
        },
        "next": {
            "peak_level": -15.0,
            "quiet_level": -30.0,
            "quiet_duration": 0.5,
        },
        "begin_fade": 0.0,
        "end_fade": 0.5,
        "block_size": 256,
    },
    "playback": {
        "tick_interval_seconds": 1.0 / 60.0,
        "output_block_size": 1024,
        "device": None,
    },
    "diagnostics": {
        "log_level": "WARNING",
    },
}
