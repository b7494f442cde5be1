"""FFmpeg-backed collaborators: silence analysis and segment splitting.

Process I/O is isolated here so the core and the CLI flow stay mockable.
"""
from __future__ import annotations

import logging
import os
import shlex
import subprocess
from typing import List, Optional

from pydub import AudioSegment
from pydub.exceptions import CouldntDecodeError, CouldntEncodeError
from pydub.utils import mediainfo, which

from silence_splitter.core.models import DetectionParameters
from silence_splitter.core.session import AnalyzerOutput
from silence_splitter.errors import ToolError

logger = logging.getLogger(__name__)

# File extensions whose FFmpeg muxer has a different name
EXPORT_FORMATS = {'m4a': 'ipod', 'aac': 'adts'}


def run_tool(cmd: List[str], timeout: Optional[float] = None) -> subprocess.CompletedProcess:
    """Run an external command and return the completed process.

    Raises ``ToolError`` if it cannot be started, times out or exits non-zero.
    """
    showcmd = shlex.join(cmd)
    logger.debug("CMD: %s", showcmd)
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, errors='replace', timeout=timeout)
    except FileNotFoundError as e:
        raise ToolError(f"{cmd[0]} not found; make sure FFmpeg is installed and on PATH") from e
    except subprocess.TimeoutExpired as e:
        raise ToolError(f"command timed out after {timeout}s: {showcmd}") from e
    except OSError as e:
        raise ToolError(f"cannot run {cmd[0]}: {e}") from e
    if proc.returncode != 0:
        stderr_text = (proc.stderr or '').strip()
        raise ToolError(f"command failed (exit {proc.returncode}): {showcmd}\n{stderr_text}")
    return proc


def probe_duration(path: str) -> float:
    """Return the media duration in seconds, as reported by ffprobe."""
    try:
        info = mediainfo(path)
    except OSError as e:
        raise ToolError(f"cannot probe {path}: {e}") from e
    raw = info.get('duration')
    try:
        duration = float(raw)
    except (TypeError, ValueError):
        raise ToolError(f"could not read duration of {path} (got {raw!r})")
    if duration <= 0:
        raise ToolError(f"media has no duration: {path}")
    return duration


class FfmpegSilenceAnalyzer:
    """Run FFmpeg's ``silencedetect`` filter and return its report."""

    def __init__(self, ffmpeg: Optional[str] = None, timeout: Optional[float] = None):
        self.ffmpeg = ffmpeg or which("ffmpeg") or "ffmpeg"
        self.timeout = timeout

    def build_command(self, path: str, params: DetectionParameters) -> List[str]:
        detect = f"silencedetect=n={params.noise_threshold_db:g}dB:d={params.min_silence_duration:g}"
        return [
            self.ffmpeg, '-hide_banner', '-nostats',
            '-i', path,
            '-af', detect,
            '-f', 'null', '-',
        ]

    def detect(self, path: str, params: DetectionParameters) -> AnalyzerOutput:
        if not os.path.isfile(path):
            raise ToolError(f"file not found: {path}")
        proc = run_tool(self.build_command(path, params), timeout=self.timeout)
        # silencedetect reports on stderr
        raw_text = proc.stderr or ''
        logger.debug("silencedetect produced %d chars of output", len(raw_text))
        return AnalyzerOutput(raw_text=raw_text, total_duration=probe_duration(path))


class FfmpegSegmentSplitter:
    """Cut one segment with a stream copy (no re-encoding)."""

    def __init__(self, ffmpeg: Optional[str] = None, timeout: Optional[float] = None):
        self.ffmpeg = ffmpeg or which("ffmpeg") or "ffmpeg"
        self.timeout = timeout

    def build_command(self, path: str, start: float, end: Optional[float], destination: str) -> List[str]:
        cmd = [self.ffmpeg, '-hide_banner', '-loglevel', 'error', '-y', '-i', path, '-ss', f"{start:.6f}"]
        if end is not None:
            cmd += ['-t', f"{end - start:.6f}"]
        cmd += ['-c', 'copy', destination]
        return cmd

    def extract(self, path: str, start: float, end: Optional[float], destination: str) -> None:
        run_tool(self.build_command(path, start, end, destination), timeout=self.timeout)


class PydubSegmentSplitter:
    """Cut segments by decoding with pydub and re-exporting each slice.

    Slower and lossy, but works for containers where a stream copy cannot
    seek cleanly. The decoded source is kept between calls.
    """

    def __init__(self):
        self._loaded_path: Optional[str] = None
        self._audio: Optional[AudioSegment] = None

    def _load(self, path: str) -> AudioSegment:
        if self._loaded_path != path:
            try:
                self._audio = AudioSegment.from_file(path)
            except (CouldntDecodeError, OSError) as e:
                raise ToolError(f"cannot decode {path}: {e}") from e
            self._loaded_path = path
        return self._audio

    def extract(self, path: str, start: float, end: Optional[float], destination: str) -> None:
        audio = self._load(path)
        start_ms = int(round(float(start) * 1000))
        segment = audio[start_ms:] if end is None else audio[start_ms:int(round(float(end) * 1000))]
        ext = os.path.splitext(destination)[1].lstrip('.').lower() or 'mp3'
        try:
            out = segment.export(destination, format=EXPORT_FORMATS.get(ext, ext))
            out.close()
        except (CouldntEncodeError, OSError) as e:
            raise ToolError(f"cannot export {destination}: {e}") from e
