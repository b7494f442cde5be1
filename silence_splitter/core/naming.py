"""Output file naming for extracted segments.

Files are named ``<prefix>_<NNN>.<ext>``, for example ``lecture_001.mp3``.
"""
from __future__ import annotations

import os
import re


class OutputNamer:
    """Map a 1-based segment index to a destination path.

    ``start_index`` is the number written for segment 1, so a run can carry
    on after files left by an earlier one.
    """

    def __init__(self, directory: str, prefix: str, extension: str, start_index: int = 1):
        if start_index < 1:
            raise ValueError("start_index must be >= 1")
        self.directory = directory
        self.prefix = prefix
        self.extension = extension.lstrip('.')
        self.start_index = start_index

    @classmethod
    def for_source(cls, source_path: str, directory: str, continue_numbering: bool = True) -> "OutputNamer":
        """Build a namer using the source file's stem and extension."""
        stem, ext = os.path.splitext(os.path.basename(source_path))
        prefix = stem or "audio_part"
        start = next_free_index(directory, prefix, ext) if continue_numbering else 1
        return cls(directory, prefix, ext, start_index=start)

    def filename(self, index: int) -> str:
        number = self.start_index + index - 1
        name = f"{self.prefix}_{number:03d}"
        return f"{name}.{self.extension}" if self.extension else name

    def __call__(self, index: int) -> str:
        return os.path.join(self.directory, self.filename(index))


def next_free_index(directory: str, prefix: str, extension: str) -> int:
    """Return one past the highest ``<prefix>_NNN.<ext>`` number in ``directory``.

    Returns 1 when the directory is missing or holds no matching file.
    """
    ext = extension.lstrip('.')
    suffix = r"\." + re.escape(ext) if ext else ""
    pattern = re.compile(rf"^{re.escape(prefix)}_(?P<index>\d{{3,}}){suffix}$")

    if not os.path.isdir(directory):
        return 1
    highest = 0
    for name in os.listdir(directory):
        match = pattern.match(name)
        if match and os.path.isfile(os.path.join(directory, name)):
            highest = max(highest, int(match.group('index')))
    return highest + 1
