"""Mixer thread loop helper.

This module keeps the mixing thread orchestration separate from the core
`DeviceMixer` class, making it easier to test and reason about.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, Tuple


class _StreamFactory(Protocol):
    def __call__(self, samplerate: float, channels: int): ...


def run_mixer_loop(
    *,
    stream_factory: _StreamFactory,
    samplerate: float,
    channels: int,
    stop_event,
    active_event,
    mix_once: Callable[[], Tuple[object, list[str]]],
    finalize_source: Callable[[str], None],
    logger: Optional[logging.Logger] = None,
) -> None:
    """Run the mixer loop until `stop_event` is set."""

    if logger is None:
        logger = logging.getLogger(__name__)

    try:
        with stream_factory(float(samplerate), int(channels)) as stream:
            while not stop_event.is_set():
                if not active_event.wait(timeout=0.05):
                    continue
                block, finished_ids = mix_once()
                if block is None:
                    active_event.clear()
                    continue
                try:
                    stream.write(block)
                except Exception as exc:  # pylint: disable=broad-except
                    logger.error("Mixer stream write failed: %s", exc)
                    break
                for source_id in finished_ids:
                    finalize_source(source_id)
    except Exception as exc:  # pylint: disable=broad-except
        logger.error("DeviceMixer thread failed: %s", exc)
    finally:
        active_event.clear()
