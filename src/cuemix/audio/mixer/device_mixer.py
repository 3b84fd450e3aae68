"""Software mixer that combines decoded tracks into a single device stream."""

from __future__ import annotations

import logging
from threading import Event, Thread
from typing import Callable, Optional

import numpy as np

from cuemix.audio.buffer import SampleBuffer
from cuemix.audio.mixer.device import default_stream_factory, detect_device_format
from cuemix.audio.mixer.dsp import match_channels
from cuemix.audio.mixer.render import render_source
from cuemix.audio.mixer.source_manager import MixerSourceManager
from cuemix.audio.mixer.thread import run_mixer_loop
from cuemix.audio.mixer.types import MixerSource
from cuemix.audio.resampling import resample
from cuemix.audio.types import AudioDevice

logger = logging.getLogger(__name__)


class DeviceMixer:
    """Mixes in-memory sources into one OutputStream on a worker thread."""

    def __init__(
        self,
        device: Optional[AudioDevice] = None,
        *,
        block_size: int = 1024,
        samplerate: Optional[int] = None,
        channels: Optional[int] = None,
        stream_factory: Optional[Callable[[float, int], object]] = None,
    ) -> None:
        self.device = device
        self._block_size = block_size
        self._source_manager = MixerSourceManager()
        self._active_event = Event()
        self._stop_event = Event()
        self._thread: Thread | None = None
        if samplerate is None or channels is None:
            detected_rate, detected_channels = detect_device_format(device)
            samplerate = samplerate or detected_rate
            channels = channels or detected_channels
        self._samplerate = int(samplerate)
        self._channels = int(channels)
        if stream_factory is None:
            stream_factory = lambda rate, count: default_stream_factory(  # noqa: E731
                device=self.device,
                block_size=self._block_size,
                samplerate=rate,
                channels=count,
            )
        self._stream_factory = stream_factory

    @property
    def samplerate(self) -> int:
        return self._samplerate

    @property
    def channels(self) -> int:
        return self._channels

    def _ensure_thread(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = Thread(target=self._run, name="cuemix-mixer", daemon=True)
        self._thread.start()

    def close(self) -> None:
        self._stop_event.set()
        self._active_event.set()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=1.5)
        self._thread = None
        for source in self._source_manager.clear():
            source.finished_event.set()

    def add_source(self, source_id: str, buffer: SampleBuffer) -> MixerSource:
        """Register a decoded buffer, converted to the output format, paused at 0."""

        samples = match_channels(buffer.samples, self._channels)
        samples = resample(samples, buffer.samplerate, self._samplerate)
        source = MixerSource(
            source_id=source_id,
            samples=np.ascontiguousarray(samples, dtype=np.float32),
            samplerate=self._samplerate,
        )
        old = self._source_manager.replace(source)
        if old:
            old.finished_event.set()
        logger.debug("Mixer: added source %s (%d frames)", source_id, source.frames)
        return source

    def play_source(self, source_id: str, start_seconds: float = 0.0) -> None:
        if self._source_manager.play(source_id, start_seconds):
            self._active_event.set()
            self._ensure_thread()

    def pause_source(self, source_id: str) -> None:
        self._source_manager.pause(source_id)

    def set_gain(self, source_id: str, gain: float) -> None:
        self._source_manager.set_gain(source_id, gain)

    def position_seconds(self, source_id: str) -> float:
        source = self._source_manager.get(source_id)
        return source.position_seconds if source else 0.0

    def is_playing(self, source_id: str) -> bool:
        source = self._source_manager.get(source_id)
        return bool(source and source.playing)

    def _run(self) -> None:
        run_mixer_loop(
            stream_factory=self._stream_factory,
            samplerate=float(self._samplerate),
            channels=self._channels,
            stop_event=self._stop_event,
            active_event=self._active_event,
            mix_once=self._mix_once,
            finalize_source=self._finalize_source,
            logger=logger,
        )

    def _mix_once(self):
        sources = [source for source in self._source_manager.snapshot() if source.playing]
        if not sources:
            return None, []

        block = np.zeros((self._block_size, self._channels), dtype=np.float32)
        finished_ids: list[str] = []
        for source in sources:
            data, frames_out, finished = render_source(
                source,
                self._source_manager,
                block_size=self._block_size,
                channels=self._channels,
            )
            if frames_out:
                block[:frames_out] += data[:frames_out]
            if finished:
                finished_ids.append(source.source_id)
        np.clip(block, -1.0, 1.0, out=block)
        return block, finished_ids

    def _finalize_source(self, source_id: str) -> None:
        source = self._source_manager.mark_finished(source_id)
        if source:
            logger.debug("Mixer: source %s reached its end", source_id)
            source.finished_event.set()
        if not self._source_manager.any_playing():
            self._active_event.clear()
