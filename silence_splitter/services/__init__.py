"""Service layer modules (external processes and file-system I/O).

Currently includes the FFmpeg analyzer/splitters and media file helpers.
"""

__all__ = [
    "ffmpeg",
    "media_files",
]
