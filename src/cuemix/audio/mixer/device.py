"""Output device helpers for the software audio mixer.

``sounddevice`` is imported on first use so that headless code paths (tests,
dry runs with a custom stream factory) never need PortAudio.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from cuemix.audio.types import AudioDevice

logger = logging.getLogger(__name__)


def _sounddevice():
    import sounddevice as sd  # pylint: disable=import-outside-toplevel

    return sd


def list_output_devices() -> List[AudioDevice]:
    sd = _sounddevice()
    try:
        default_output = sd.default.device[1]
    except (TypeError, IndexError):
        default_output = None
    devices: List[AudioDevice] = []
    for index, info in enumerate(sd.query_devices()):
        if int(info.get("max_output_channels") or 0) <= 0:
            continue
        devices.append(
            AudioDevice(
                id=f"sd:{index}",
                name=str(info.get("name") or index),
                raw_index=index,
                is_default=index == default_output,
            )
        )
    return devices


def find_output_device(name: Optional[str]) -> Optional[AudioDevice]:
    """Pick a device by (partial, case-insensitive) name, or the default one."""

    devices = list_output_devices()
    if name:
        wanted = name.lower()
        for device in devices:
            if wanted in device.name.lower() or wanted == device.id:
                return device
        logger.warning("Output device %r not found, using default", name)
    return next((device for device in devices if device.is_default), devices[0] if devices else None)


def detect_device_format(
    device: Optional[AudioDevice],
    *,
    default_samplerate: int = 48000,
    default_channels: int = 2,
) -> tuple[int, int]:
    samplerate = default_samplerate
    channels = default_channels
    if device is None or device.raw_index is None:
        return samplerate, channels
    try:
        info = _sounddevice().query_devices(device.raw_index)
        samplerate = int(info.get("default_samplerate") or samplerate)
        channels = int(info.get("max_output_channels") or channels)
    except Exception as exc:  # pylint: disable=broad-except
        logger.debug("Unable to query device %s: %s", device.name, exc)
    channels = max(1, min(channels, default_channels))
    return samplerate, channels


def default_stream_factory(
    *,
    device: Optional[AudioDevice],
    block_size: int,
    samplerate: float,
    channels: int,
):
    kwargs = {
        "device": device.raw_index if device is not None else None,
        "samplerate": samplerate,
        "channels": channels,
        "dtype": "float32",
        "blocksize": block_size,
    }
    return _sounddevice().OutputStream(**kwargs)
