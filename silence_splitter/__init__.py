"""Split audio files at detected silences."""

__version__ = "0.1.0"
