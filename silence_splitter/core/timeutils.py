"""Pure time utility helpers used across the CLI and services."""
from __future__ import annotations

import math


def parse_seconds(value: str) -> float:
    """Convert ``"2.5"``, ``"1:30"`` or ``"00:01:30.250"`` to seconds.

    Clock components must not be negative. Raises ``ValueError`` for
    anything else.
    """
    text = str(value).strip().replace(',', '.')
    if not text:
        raise ValueError('Empty time value')
    parts = text.split(':')
    if len(parts) > 3:
        raise ValueError(f'Invalid time value: {value!r}')
    seconds = 0.0
    for part in parts:
        number = float(part)
        if not math.isfinite(number) or (len(parts) > 1 and number < 0):
            raise ValueError(f'Invalid time value: {value!r}')
        seconds = seconds * 60 + number
    return seconds


def format_seconds(seconds: float) -> str:
    """Format a duration in seconds as ``HH:MM:SS.mmm``.

    Keeps the sign for negative values, rounds milliseconds to 3 digits.
    """
    sign = '-' if seconds < 0 else ''
    total_ms = int(round(abs(seconds) * 1000))
    hours, rest = divmod(total_ms, 3600 * 1000)
    minutes, rest = divmod(rest, 60 * 1000)
    secs, millis = divmod(rest, 1000)
    return f"{sign}{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"
