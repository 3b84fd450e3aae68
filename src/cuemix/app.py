"""Entry point for the cuemix command line application."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import tempfile
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from cuemix.audio.buffer import SampleBuffer, load_file
from cuemix.audio.detector import submit_compute_cue
from cuemix.audio.mock_backend import MockPlayer
from cuemix.core.config import DetectionSettings, SettingsManager
from cuemix.core.cue_points import CuePoints, format_time
from cuemix.core.env import resolve_log_dir
from cuemix.core.errors import CueMixError
from cuemix.core.playlist import Playlist
from cuemix.core.scheduler import PlaylistScheduler
from cuemix.core.track import Track

logger = logging.getLogger(__name__)


def _configure_logging(level_override: Optional[str] = None) -> Optional[Path]:
    env_level = os.environ.get("LOGLEVEL")
    level_name = (env_level or level_override or "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)

    primary_dir = resolve_log_dir()
    fallback_dir = Path(tempfile.gettempdir()) / "cuemix_logs"
    logs_dir = primary_dir
    log_path: Path | None = None

    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        logs_dir = fallback_dir
        try:
            logs_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            logging.basicConfig(level=level)
            return None

    try:
        timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        log_path = logs_dir / f"cuemix-{timestamp}.log"
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        file_handler.setFormatter(formatter)
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logging.basicConfig(level=level, handlers=[file_handler, stream_handler])
    except OSError:
        log_path = None
        logging.basicConfig(level=level)
    if log_path:
        logger.info("Writing log to %s", log_path)
        if logs_dir is fallback_dir:
            logger.warning("Using fallback log directory %s", logs_dir)
    return log_path


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cuemix", description="Find cue points and crossfade tracks.")
    parser.add_argument("--config", type=Path, default=None, help="settings YAML file")
    parser.add_argument("--log-level", default=None, help="override diagnostics.log_level")
    commands = parser.add_subparsers(dest="command", required=True)

    analyze = commands.add_parser("analyze", help="print cue points for audio files")
    analyze.add_argument("files", nargs="+", type=Path)

    play = commands.add_parser("play", help="play files back to back with automatic crossfades")
    play.add_argument("files", nargs="+", type=Path)
    play.add_argument("--device", default=None, help="output device name (overrides settings)")
    play.add_argument("--dry-run", action="store_true", help="schedule without producing audio")
    return parser


def compute_cues(
    paths: Sequence[Path],
    settings: DetectionSettings,
) -> List[Tuple[Path, Optional[SampleBuffer], Optional[CuePoints], Optional[CueMixError]]]:
    """Decode and analyse every file; failures are returned per file."""

    results = []
    with ThreadPoolExecutor(max_workers=max(1, min(4, len(paths))), thread_name_prefix="cuemix-cue") as executor:
        pending = []
        for path in paths:
            try:
                buffer = load_file(path)
            except CueMixError as exc:
                pending.append((path, None, None, exc))
                continue
            pending.append((path, buffer, submit_compute_cue(executor, buffer, settings), None))
        for path, buffer, future, error in pending:
            if future is None:
                results.append((path, buffer, None, error))
                continue
            try:
                results.append((path, buffer, future.result(), None))
            except CueMixError as exc:
                results.append((path, buffer, None, exc))
    return results


def _analyze(paths: Sequence[Path], settings: SettingsManager) -> int:
    status = 0
    for path, buffer, cue, error in compute_cues(paths, settings.get_detection_settings()):
        if error is not None or cue is None or buffer is None:
            logger.error("%s: %s", path, error)
            print(f"{path}: error: {error}")
            status = 1
            continue
        markers = "  ".join(f"{name}={format_time(value)}" for name, value in cue.as_dict().items())
        print(f"{path} [{format_time(buffer.duration_seconds)}]  {markers}")
    return status


def _play(paths: Sequence[Path], settings: SettingsManager, *, device_name: Optional[str], dry_run: bool) -> int:
    mixer = None
    if not dry_run:
        from cuemix.audio.mixer import DeviceMixer, MixerPlayer  # pylint: disable=import-outside-toplevel
        from cuemix.audio.mixer.device import find_output_device  # pylint: disable=import-outside-toplevel

        device = find_output_device(device_name or settings.get_output_device())
        mixer = DeviceMixer(device, block_size=settings.get_output_block_size())

    playlist = Playlist()
    for path, buffer, cue, error in compute_cues(paths, settings.get_detection_settings()):
        if error is not None or cue is None or buffer is None:
            logger.error("Skipping %s: %s", path, error)
            continue
        if mixer is not None:
            player = MixerPlayer(mixer, buffer)
        else:
            player = MockPlayer(buffer.duration_seconds, name=path.name)
        playlist.append(Track(buffer, cue, player, name=path.name))

    if not len(playlist):
        logger.error("No playable tracks")
        return 1

    scheduler = PlaylistScheduler(playlist, tick_interval=settings.get_tick_interval())
    try:
        scheduler.start()
        while not scheduler.wait(timeout=1.0):
            now_playing = [f"{track.name} {track.position_display}" for track in playlist if track.player.is_playing()]
            logger.info("Playing: %s", "; ".join(now_playing) or "-")
    except KeyboardInterrupt:
        logger.info("Interrupted, stopping playlist")
    finally:
        scheduler.stop()
        if mixer is not None:
            mixer.close()
    return 0


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = SettingsManager(config_path=args.config)
    _configure_logging(args.log_level or settings.get_diagnostics_log_level())
    try:
        if args.command == "analyze":
            return _analyze(args.files, settings)
        return _play(args.files, settings, device_name=args.device, dry_run=args.dry_run)
    except ValueError as exc:
        logger.error("Invalid settings: %s", exc)
        return 2


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
