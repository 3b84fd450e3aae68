"""Software audio mixer façade.

Public surface:
- `DeviceMixer`
- `MixerPlayer`
- `NullOutputStream`
"""

from __future__ import annotations

from cuemix.audio.mixer.device_mixer import DeviceMixer
from cuemix.audio.mixer.player import MixerPlayer
from cuemix.audio.mixer.types import NullOutputStream

__all__ = [
    "DeviceMixer",
    "MixerPlayer",
    "NullOutputStream",
]
