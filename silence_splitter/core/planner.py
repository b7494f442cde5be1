"""Turn silence intervals into cut points and segments."""
from __future__ import annotations

from typing import Iterable, List, Sequence

from .models import Segment, SilenceInterval


def plan_boundaries(intervals: Iterable[SilenceInterval], total_duration: float,
                    min_gap: float = 0.0) -> List[float]:
    """Return the ordered segment boundaries for ``intervals``.

    Every interval contributes its midpoint. The list always starts at
    ``0.0`` and ends at ``total_duration``; with no intervals it is just
    those two points (one segment).

    A midpoint that would not move strictly forward from the previous
    boundary (overlapping or repeated detector output) is dropped, as is one
    that would reach the end of the media. ``min_gap`` widens both checks so
    that no segment shorter than ``min_gap`` seconds is produced.
    """
    total = float(total_duration)
    if total <= 0:
        raise ValueError(f"total duration must be positive, got {total_duration}")
    if min_gap < 0:
        raise ValueError("min_gap cannot be negative")

    boundaries = [0.0]
    for interval in intervals:
        mid = interval.midpoint
        if mid <= boundaries[-1] + min_gap:
            continue
        if mid >= total - min_gap:
            continue
        boundaries.append(mid)
    boundaries.append(total)
    return boundaries


def segments_from_boundaries(boundaries: Sequence[float], open_ended: bool = True) -> List[Segment]:
    """Pair consecutive boundaries into 1-based segments.

    With ``open_ended`` the last segment has ``end=None`` so the splitter
    copies through to the real end of the file rather than the probed
    duration.
    """
    if len(boundaries) < 2:
        raise ValueError("at least two boundaries are needed to form a segment")
    segments = []
    last = len(boundaries) - 1
    for i in range(1, len(boundaries)):
        end = None if (open_ended and i == last) else boundaries[i]
        segments.append(Segment(index=i, start=boundaries[i - 1], end=end))
    return segments
