"""Parse FFmpeg ``silencedetect`` diagnostics into silence intervals.

The detector writes lines such as::

    [silencedetect @ 0x55d0c8] silence_start: 10.0213
    [silencedetect @ 0x55d0c8] silence_end: 12.0429 | silence_duration: 2.02163

interleaved with unrelated log output. Only the labelled numbers matter.
"""
from __future__ import annotations

import logging
import math
import re
from typing import List, Optional

from silence_splitter.errors import ParseError
from .models import SilenceInterval

logger = logging.getLogger(__name__)

_START_RE = re.compile(r"silence_start:\s*(?P<start>\S+)")
_END_RE = re.compile(
    r"silence_end:\s*(?P<end>[^\s|]+)(?:\s*\|\s*silence_duration:\s*(?P<duration>\S+))?"
)


def _to_seconds(token: str, label: str, lineno: int) -> float:
    try:
        value = float(token)
    except ValueError:
        raise ParseError(f"line {lineno}: {label} is not a number: {token!r}")
    if not math.isfinite(value):
        raise ParseError(f"line {lineno}: {label} is not finite: {token!r}")
    return value


def _make_interval(start: float, end: float, lineno: int) -> SilenceInterval:
    if end <= start:
        raise ParseError(
            f"line {lineno}: silence ends at {end} but starts at {start}"
        )
    return SilenceInterval(start=start, end=end)


def parse_silence_log(raw_text: str, total_duration: Optional[float] = None) -> List[SilenceInterval]:
    """Extract ``(start, end)`` silence intervals from detector output.

    Each ``silence_start`` is paired with the next ``silence_end``; when two
    starts arrive before an end, the later one is used. A start
    still open when the text runs out is closed at ``total_duration``; it is
    dropped when no total duration is known or when it begins at or after it.

    Unrelated lines are skipped. Raises ``ParseError`` when a labelled number
    cannot be converted, when a reported interval has zero or negative length,
    or when starts go backwards in time.
    """
    intervals: List[SilenceInterval] = []
    pending_start: Optional[float] = None
    pending_line = 0
    last_start: Optional[float] = None

    for lineno, line in enumerate((raw_text or "").splitlines(), 1):
        start_match = _START_RE.search(line)
        if start_match:
            start = max(0.0, _to_seconds(start_match.group("start"), "silence_start", lineno))
            if last_start is not None and start < last_start:
                raise ParseError(
                    f"line {lineno}: silence_start {start} is before previous start {last_start}"
                )
            if pending_start is not None:
                logger.debug("Line %d: repeated silence_start, dropping %.3f for %.3f",
                             lineno, pending_start, start)
            pending_start = start
            pending_line = lineno
            last_start = start
            continue

        end_match = _END_RE.search(line)
        if not end_match:
            continue
        end = _to_seconds(end_match.group("end"), "silence_end", lineno)
        if end_match.group("duration") is not None:
            _to_seconds(end_match.group("duration"), "silence_duration", lineno)
        if pending_start is None:
            logger.warning("Line %d: silence_end %.3f without a matching silence_start", lineno, end)
            continue
        intervals.append(_make_interval(pending_start, end, lineno))
        pending_start = None

    if pending_start is not None:
        if total_duration is None:
            logger.warning(
                "Line %d: silence_start %.3f never ends and total duration is unknown; dropped",
                pending_line, pending_start,
            )
        elif pending_start >= total_duration:
            logger.debug("Trailing silence_start %.3f is at end of media; dropped", pending_start)
        else:
            intervals.append(SilenceInterval(start=pending_start, end=float(total_duration)))

    logger.debug("Parsed %d silence interval(s)", len(intervals))
    return intervals
