from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from cuemix.audio.buffer import SampleBuffer, iter_blocks
from cuemix.audio.detector import CueDetector, compute_cue, detect, submit_compute_cue
from cuemix.core.config import DetectionSettings, LevelSettings
from cuemix.core.errors import DetectionStalled

SR = 8000
BLOCK = 256
BLOCK_SECONDS = BLOCK / SR
LEVELS = LevelSettings(peak_level=-15.0, quiet_level=-30.0, quiet_duration=0.5)


def _constant(level_db: float, seconds: float, channels: int = 2) -> np.ndarray:
    amplitude = 10 ** (level_db / 20.0)
    return np.full((int(round(SR * seconds)), channels), amplitude, dtype=np.float32)


def _silence(seconds: float, channels: int = 2) -> np.ndarray:
    return np.zeros((int(round(SR * seconds)), channels), dtype=np.float32)


def _tone(level_db: float, seconds: float, channels: int = 2) -> np.ndarray:
    amplitude = np.sqrt(2.0) * 10 ** (level_db / 20.0)
    t = np.arange(int(round(SR * seconds))) / SR
    wave = (amplitude * np.sin(2 * np.pi * 440.0 * t)).astype(np.float32)
    return np.repeat(wave[:, None], channels, axis=1)


def _detect(samples: np.ndarray, levels: LevelSettings = LEVELS) -> float:
    buffer = SampleBuffer(samples, SR)
    return detect(iter_blocks(buffer, BLOCK), BLOCK, SR, levels)


def test_peak_level_fires_on_first_block() -> None:
    assert _detect(_constant(-10.0, 1.0)) == pytest.approx(BLOCK_SECONDS)


def test_sub_threshold_input_never_fires() -> None:
    with pytest.raises(DetectionStalled) as excinfo:
        _detect(_constant(-40.0, 2.0))
    assert excinfo.value.direction == "start"
    assert excinfo.value.scanned_seconds >= 2.0


def test_level_between_thresholds_shorter_than_window_never_fires() -> None:
    with pytest.raises(DetectionStalled):
        _detect(_constant(-20.0, 0.4))


def test_sustained_level_fires_after_quiet_duration() -> None:
    samples = np.concatenate([_silence(8 * BLOCK_SECONDS), _constant(-20.0, 1.0), _silence(1.0)])

    found = _detect(samples)

    window_start = 9 * BLOCK_SECONDS
    assert found >= window_start + LEVELS.quiet_duration
    assert found == pytest.approx(25 * BLOCK_SECONDS)


def test_false_start_resets_sustained_window() -> None:
    detector = CueDetector(LEVELS, BLOCK, SR)
    quiet = _constant(-20.0, BLOCK_SECONDS)
    silent = _silence(BLOCK_SECONDS)

    assert detector.feed(quiet) is None
    assert detector.window_start == pytest.approx(BLOCK_SECONDS)
    assert detector.feed(silent) is None
    assert detector.window_start is None
    assert detector.feed(quiet) is None
    assert detector.window_start == pytest.approx(3 * BLOCK_SECONDS)


def test_hit_in_trailing_partial_block_is_clamped_to_track_end() -> None:
    samples = np.concatenate([_silence(2 * BLOCK_SECONDS), _constant(-5.0, 100 / SR)])
    buffer = SampleBuffer(samples, SR)

    found = detect(iter_blocks(buffer, BLOCK), BLOCK, SR, LEVELS)

    assert found == pytest.approx(buffer.duration_seconds)
    assert found < 3 * BLOCK_SECONDS


def test_detector_stops_consuming_after_hit() -> None:
    consumed: list[int] = []
    loud = _constant(-5.0, BLOCK_SECONDS)

    def blocks():
        for index in range(10):
            consumed.append(index)
            yield loud

    detect(blocks(), BLOCK, SR, LEVELS)
    assert consumed == [0]


def _scenario() -> SampleBuffer:
    samples = np.concatenate([_silence(10.0), _tone(-10.0, 2.0), _silence(8.0)])
    return SampleBuffer(samples, SR)


def test_end_to_end_start_lands_near_tone_onset() -> None:
    buffer = _scenario()
    start = detect(iter_blocks(buffer, BLOCK), BLOCK, SR, LEVELS)
    assert abs(start - 10.0) <= BLOCK_SECONDS


def test_reversed_scan_converts_to_next_from_track_start() -> None:
    buffer = _scenario()
    settings = DetectionSettings(start=LEVELS, next=LEVELS, block_size=BLOCK)

    cue = compute_cue(buffer, settings)

    assert abs(cue.start - 10.0) <= BLOCK_SECONDS
    assert cue.begin == pytest.approx(cue.start)
    # the tone ends on a block boundary, so the end-of-block time puts next one block early
    assert abs(cue.next - 12.0) <= BLOCK_SECONDS + 1e-9
    assert cue.next <= cue.end <= buffer.duration_seconds
    assert cue.end == pytest.approx(cue.next + settings.end_fade)


def test_compute_cue_reports_stall_for_silent_track() -> None:
    buffer = SampleBuffer(_silence(1.0), SR)
    with pytest.raises(DetectionStalled):
        compute_cue(buffer, DetectionSettings())


def test_submit_compute_cue_delivers_result_through_future() -> None:
    buffer = _scenario()
    with ThreadPoolExecutor(max_workers=1) as executor:
        future = submit_compute_cue(executor, buffer, DetectionSettings(block_size=BLOCK))
        cue = future.result(timeout=30)
        failed = submit_compute_cue(executor, SampleBuffer(_silence(0.5), SR), DetectionSettings())
        assert isinstance(failed.exception(timeout=30), DetectionStalled)
    assert cue.begin <= cue.start <= cue.next <= cue.end
