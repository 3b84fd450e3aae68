"""Cue point detection over a block loudness envelope.

A scan walks the track block by block and stops at the first block that is
either loud enough on its own (peak level) or has stayed above the quiet level
for long enough. The forward scan finds ``start``; the same scan over the
time-reversed buffer finds ``next`` measured from the end of the track.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Iterable, Optional

import numpy as np

from cuemix.audio.buffer import SampleBuffer, iter_blocks
from cuemix.audio.envelope import measure
from cuemix.core.config.detection import DetectionSettings, LevelSettings
from cuemix.core.cue_points import CuePoints, finalize_cue_points
from cuemix.core.errors import DetectionStalled

logger = logging.getLogger(__name__)


class CueDetector:
    """Incremental peak / sustained-level state machine.

    Block ``i`` is reported at time ``(i + 1) * block_size / samplerate``, the
    end of the block, so the first block is reported one block after zero. A
    trailing partial block is reported at the end of the frames it holds, so
    a hit never lands past the end of the track.
    """

    def __init__(self, levels: LevelSettings, block_size: int, samplerate: int) -> None:
        if block_size <= 0 or samplerate <= 0:
            raise ValueError("block_size and samplerate must be positive")
        self.levels = levels
        self.block_size = block_size
        self.samplerate = samplerate
        self.reset()

    def reset(self) -> None:
        self.index = 0
        self.frames = 0
        self.window_start: Optional[float] = None
        self.found: Optional[float] = None

    def block_time(self, index: int) -> float:
        return (index * self.block_size) / float(self.samplerate)

    @property
    def scanned_seconds(self) -> float:
        return self.frames / float(self.samplerate)

    def feed(self, block: np.ndarray) -> Optional[float]:
        """Classify one block; return the cue time once it is found."""

        if self.found is not None:
            return self.found
        self.index += 1
        self.frames += len(block)
        now = min(self.block_time(self.index), self.scanned_seconds)
        level = measure(block)
        if level >= self.levels.peak_level:
            self.found = now
        elif level >= self.levels.quiet_level:
            if self.window_start is None:
                self.window_start = now
            elif now - self.window_start >= self.levels.quiet_duration:
                self.found = now
        else:
            # -inf (digital silence) always lands here
            self.window_start = None
        return self.found


def detect(
    blocks: Iterable[np.ndarray],
    block_size: int,
    samplerate: int,
    levels: LevelSettings,
    *,
    direction: str = "start",
) -> float:
    """Scan ``blocks`` until a cue is found; raise ``DetectionStalled`` otherwise."""

    detector = CueDetector(levels, block_size, samplerate)
    for block in blocks:
        found = detector.feed(block)
        if found is not None:
            logger.debug("Detected %s cue at %.3fs (block %d)", direction, found, detector.index)
            return found
    logger.debug("No %s cue within %.3fs", direction, detector.scanned_seconds)
    raise DetectionStalled(direction, detector.scanned_seconds)


def _scan(buffer: SampleBuffer, settings: DetectionSettings, *, reverse: bool) -> float:
    direction = "next" if reverse else "start"
    levels = settings.next if reverse else settings.start
    blocks = iter_blocks(buffer, settings.block_size, reverse=reverse)
    return detect(blocks, settings.block_size, buffer.samplerate, levels, direction=direction)


def compute_cue(
    buffer: SampleBuffer,
    settings: DetectionSettings,
    *,
    executor: Optional[Executor] = None,
) -> CuePoints:
    """Run the forward and reversed scans and finalize the four markers."""

    own_executor = executor is None
    pool = executor if executor is not None else ThreadPoolExecutor(max_workers=2, thread_name_prefix="cuemix-detect")
    try:
        start_future = pool.submit(_scan, buffer, settings, reverse=False)
        next_future = pool.submit(_scan, buffer, settings, reverse=True)
        start = start_future.result()
        raw_next = next_future.result()
    finally:
        if own_executor:
            pool.shutdown(wait=True, cancel_futures=True)
    cue = finalize_cue_points(start, raw_next, buffer.duration_seconds, settings)
    logger.info(
        "Cue points: begin=%.3f start=%.3f next=%.3f end=%.3f",
        cue.begin,
        cue.start,
        cue.next,
        cue.end,
    )
    return cue


def submit_compute_cue(
    executor: Executor,
    buffer: SampleBuffer,
    settings: DetectionSettings,
) -> "Future[CuePoints]":
    """Schedule :func:`compute_cue`; errors are delivered once through the future."""

    return executor.submit(compute_cue, buffer, settings)
