"""Value objects shared by the segmentation core.

All of them are frozen dataclasses: a new analysis run produces new
instances and never edits the ones handed out before.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class SilenceInterval:
    """A silent region reported by the detector, in seconds."""

    start: float
    end: float

    def __post_init__(self):
        if self.start < 0:
            raise ValueError(f"silence start must be >= 0, got {self.start}")
        if not self.end > self.start:
            raise ValueError(
                f"silence end must be after start, got {self.start}..{self.end}"
            )

    @property
    def duration(self) -> float:
        return self.end - self.start

    @property
    def midpoint(self) -> float:
        return self.start + (self.end - self.start) / 2


@dataclass(frozen=True)
class DetectionParameters:
    """Settings handed to the silence detector for one analysis run.

    ``min_silence_duration`` is in seconds and must be positive;
    ``noise_threshold_db`` is a level in dBFS and must not be above 0.
    """

    min_silence_duration: float
    noise_threshold_db: float

    def __post_init__(self):
        if not math.isfinite(self.min_silence_duration) or self.min_silence_duration <= 0:
            raise ValueError("minimum silence duration must be a positive number")
        if not math.isfinite(self.noise_threshold_db) or self.noise_threshold_db > 0:
            raise ValueError("noise threshold must be a number <= 0 dB")


@dataclass(frozen=True)
class Segment:
    """One slice of the media between two consecutive boundaries.

    ``index`` is 1-based. ``end`` is ``None`` when the segment runs to the
    end of the file.
    """

    index: int
    start: float
    end: Optional[float]

    @property
    def duration(self) -> Optional[float]:
        if self.end is None:
            return None
        return self.end - self.start


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one analysis run."""

    parameters: DetectionParameters
    intervals: Tuple[SilenceInterval, ...]
    boundaries: Tuple[float, ...]
    total_duration: float

    @property
    def segment_count(self) -> int:
        return len(self.boundaries) - 1

    @property
    def split_points(self) -> Tuple[float, ...]:
        """Boundaries without the implicit 0 and end-of-media endpoints."""
        return self.boundaries[1:-1]
