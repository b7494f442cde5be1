"""File-system helpers: locating input audio and preparing output folders."""
from __future__ import annotations

import logging
import os
from typing import Iterable, List

logger = logging.getLogger(__name__)

DEFAULT_AUDIO_EXTENSIONS = ('mp3', 'wav', 'flac', 'aac', 'm4a', 'ogg')


def find_audio_files(folder: str, extensions: Iterable[str] = DEFAULT_AUDIO_EXTENSIONS) -> List[str]:
    """Return audio files directly inside ``folder``, sorted by file name.

    Extensions are compared case-insensitively; subfolders are not scanned.
    """
    wanted = {e.lower().lstrip('.') for e in extensions}
    found = []
    for name in os.listdir(folder):
        path = os.path.join(folder, name)
        ext = os.path.splitext(name)[1].lstrip('.').lower()
        if ext in wanted and os.path.isfile(path):
            found.append(path)
    found.sort(key=os.path.basename)
    logger.debug("Found %d audio file(s) in %s", len(found), folder)
    return found


def create_output_dir(path: str) -> str:
    """Create ``path`` (and parents). Raises ``OSError`` on failure."""
    os.makedirs(path, exist_ok=True)
    logger.info("Created output directory %s", path)
    return path
