"""Custom exceptions for the silence splitter.

The core never prints: every failure reaches the caller as one of these
types so the CLI can decide how to render it.
"""


class SplitterError(Exception):
    """Base exception for the silence splitter."""


class ParseError(SplitterError):
    """Raised when silence detector output is malformed."""


class AnalysisError(SplitterError):
    """Raised when an analysis run cannot produce a result."""


class ToolFailureError(AnalysisError):
    """Raised when the analyzer process failed or returned nothing usable."""


class ExtractionError(SplitterError):
    """Raised when segment extraction cannot proceed."""


class FatalExtractionError(ExtractionError):
    """Raised when the destination is unusable; aborts the whole run."""


class ToolError(SplitterError):
    """Raised when a single external tool invocation fails."""


class SessionStateError(SplitterError):
    """Raised when an operation is not allowed in the session's current state."""


class ConfigError(SplitterError):
    """Raised when the configuration file cannot be loaded."""
