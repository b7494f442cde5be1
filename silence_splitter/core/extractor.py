"""Sequential extraction of committed segments.

Segments are cut one after another in index order. A failure on one segment
is recorded and the batch carries on; only an unusable destination stops
the run.
"""
from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from silence_splitter.errors import FatalExtractionError, ToolError
from .models import Segment

logger = logging.getLogger(__name__)


class SegmentStatus(enum.Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class ProgressEvent:
    """Emitted after each segment has been attempted."""

    index: int
    total: int
    status: SegmentStatus
    destination: str
    reason: Optional[str] = None


@dataclass
class ExtractionReport:
    succeeded: List[int] = field(default_factory=list)
    failed: List[Tuple[int, str]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed


def _prepare_destination(directory: str) -> None:
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as e:
        raise FatalExtractionError(f"cannot create output directory {directory}: {e}") from e
    if not os.path.isdir(directory):
        raise FatalExtractionError(f"output path is not a directory: {directory}")
    if not os.access(directory, os.W_OK):
        raise FatalExtractionError(f"output directory is not writable: {directory}")


class SegmentExtractor:
    """Drive a splitter over a list of segments.

    ``splitter`` is any object with
    ``extract(path, start, end, destination)`` that raises ``ToolError`` on
    failure. ``on_progress`` receives a ``ProgressEvent`` per segment.
    """

    def __init__(self, splitter, source_path: str,
                 on_progress: Optional[Callable[[ProgressEvent], None]] = None):
        self._splitter = splitter
        self.source_path = source_path
        self._on_progress = on_progress

    def run(self, segments: Sequence[Segment], namer) -> ExtractionReport:
        """Extract ``segments`` to the paths given by ``namer(index)``.

        Raises ``FatalExtractionError`` if the destination directory cannot
        be used; per-segment ``ToolError`` ends up in ``report.failed``.
        """
        previous = 0
        for segment in segments:
            if segment.index <= previous:
                raise ValueError(
                    f"segments must be in increasing index order, got {segment.index} after {previous}"
                )
            previous = segment.index

        report = ExtractionReport()
        if not segments:
            return report

        directory = getattr(namer, 'directory', None) or os.path.dirname(namer(segments[0].index)) or '.'
        _prepare_destination(directory)

        total = len(segments)
        for segment in segments:
            destination = namer(segment.index)
            logger.debug(
                "Extracting segment %d/%d [%.3f, %s) -> %s",
                segment.index, total, segment.start,
                'EOF' if segment.end is None else f"{segment.end:.3f}", destination,
            )
            try:
                self._splitter.extract(self.source_path, segment.start, segment.end, destination)
            except ToolError as e:
                logger.error("Segment %d failed: %s", segment.index, e)
                report.failed.append((segment.index, str(e)))
                self._notify(ProgressEvent(segment.index, total, SegmentStatus.FAILED, destination, str(e)))
                continue
            report.succeeded.append(segment.index)
            self._notify(ProgressEvent(segment.index, total, SegmentStatus.SUCCEEDED, destination))

        logger.info(
            "Extraction finished: %d succeeded, %d failed",
            len(report.succeeded), len(report.failed),
        )
        return report

    def _notify(self, event: ProgressEvent) -> None:
        if self._on_progress is not None:
            self._on_progress(event)
