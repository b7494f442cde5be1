"""Analysis session: re-run detection with new settings, then commit.

States::

    UNINITIALIZED --analyze--> ANALYZED --analyze--> ANALYZED
                                  |
                                commit
                                  v
                              COMMITTED --analyze--> ANALYZED

Segments for extraction are only reachable through the ``CommittedAnalysis``
returned by ``commit()``.
"""
from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from silence_splitter.errors import SessionStateError, ToolFailureError
from .models import AnalysisResult, DetectionParameters, Segment
from .planner import plan_boundaries, segments_from_boundaries
from .silence_log import parse_silence_log

logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    ANALYZED = "analyzed"
    COMMITTED = "committed"


@dataclass(frozen=True)
class AnalyzerOutput:
    """What a silence analyzer returns: its raw report and the media length."""

    raw_text: str
    total_duration: float


@dataclass(frozen=True)
class CommittedAnalysis:
    """An analysis result the caller has explicitly accepted for splitting."""

    media_path: str
    result: AnalysisResult

    @property
    def segment_count(self) -> int:
        return self.result.segment_count

    def segments(self, open_ended: bool = True) -> List[Segment]:
        return segments_from_boundaries(self.result.boundaries, open_ended=open_ended)


class AnalysisSession:
    """Holds the detection results for one media file.

    ``analyzer`` is any object with ``detect(path, params) -> AnalyzerOutput``.
    """

    def __init__(self, analyzer, media_path: str, min_gap: float = 0.0):
        self._analyzer = analyzer
        self.media_path = media_path
        self.min_gap = min_gap
        self._state = SessionState.UNINITIALIZED
        self._history: List[AnalysisResult] = []
        self._committed: Optional[CommittedAnalysis] = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def history(self) -> Tuple[AnalysisResult, ...]:
        return tuple(self._history)

    def current(self) -> Optional[AnalysisResult]:
        """Most recent result, or ``None`` before the first successful run."""
        return self._history[-1] if self._history else None

    def previous(self) -> Optional[AnalysisResult]:
        """Result superseded by the most recent run, if any."""
        return self._history[-2] if len(self._history) > 1 else None

    def committed(self) -> Optional[CommittedAnalysis]:
        return self._committed if self._state is SessionState.COMMITTED else None

    def analyze(self, params: DetectionParameters) -> AnalysisResult:
        """Run detection with ``params`` and plan new boundaries.

        On any failure the session keeps its previous state and results.
        ``ToolFailureError`` covers the analyzer itself; ``ParseError`` from
        its report propagates unchanged.
        """
        logger.info(
            "Analyzing %s (min silence %.3fs, noise %.1fdB)",
            self.media_path, params.min_silence_duration, params.noise_threshold_db,
        )
        try:
            output = self._analyzer.detect(self.media_path, params)
        except Exception as e:
            logger.error("Silence analysis failed for %s: %s", self.media_path, e)
            raise ToolFailureError(str(e)) from e

        total = output.total_duration
        if total is None or not math.isfinite(total) or total <= 0:
            raise ToolFailureError(
                f"analyzer reported an unusable duration for {self.media_path}: {total!r}"
            )

        intervals = parse_silence_log(output.raw_text, total_duration=total)
        boundaries = plan_boundaries(intervals, total, min_gap=self.min_gap)
        result = AnalysisResult(
            parameters=params,
            intervals=tuple(intervals),
            boundaries=tuple(boundaries),
            total_duration=float(total),
        )

        self._history.append(result)
        self._committed = None
        self._state = SessionState.ANALYZED
        logger.info(
            "Found %d silence interval(s), %d segment(s)",
            len(result.intervals), result.segment_count,
        )
        return result

    def commit(self) -> CommittedAnalysis:
        """Freeze the current result for extraction."""
        if self._state is not SessionState.ANALYZED:
            raise SessionStateError(f"cannot commit from state {self._state.value}")
        self._committed = CommittedAnalysis(media_path=self.media_path, result=self._history[-1])
        self._state = SessionState.COMMITTED
        return self._committed
