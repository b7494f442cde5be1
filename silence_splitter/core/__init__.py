"""
Core segmentation engine for the silence splitter.

This package hosts the pure logic (parsing detector output, planning cut
points, the analysis session and the extraction driver). External tools are
reached only through injected collaborators, so everything here can be
tested with canned text.
"""

__all__ = [
    "SilenceInterval",
    "DetectionParameters",
    "AnalysisResult",
    "Segment",
    "parse_silence_log",
    "plan_boundaries",
    "segments_from_boundaries",
    "AnalysisSession",
    "AnalyzerOutput",
    "CommittedAnalysis",
    "SessionState",
    "SegmentExtractor",
    "ExtractionReport",
    "ProgressEvent",
    "SegmentStatus",
    "OutputNamer",
    "next_free_index",
    "format_seconds",
    "parse_seconds",
]

from .models import SilenceInterval, DetectionParameters, AnalysisResult, Segment
from .silence_log import parse_silence_log
from .planner import plan_boundaries, segments_from_boundaries
from .session import AnalysisSession, AnalyzerOutput, CommittedAnalysis, SessionState
from .extractor import SegmentExtractor, ExtractionReport, ProgressEvent, SegmentStatus
from .naming import OutputNamer, next_free_index
from .timeutils import format_seconds, parse_seconds
