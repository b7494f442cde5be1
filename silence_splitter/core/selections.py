"""Pure parsers for interactive answers.

Each function takes the raw text typed by the user and either returns a
normalized value or raises ``ValueError`` with a message fit for display.
"""
from __future__ import annotations

import math

from .timeutils import parse_seconds


def parse_process_type(value: str) -> str:
    """Single file or folder: returns ``'s'`` or ``'f'``."""
    v = (value or '').strip().lower()
    if v in ('s', 'single', 'file'):
        return 's'
    if v in ('f', 'folder', 'dir'):
        return 'f'
    raise ValueError("Please enter 's' or 'f'.")


def parse_yes_no(value: str) -> bool:
    v = (value or '').strip().lower()
    if v in ('y', 'yes'):
        return True
    if v in ('n', 'no'):
        return False
    raise ValueError("Please enter 'y' or 'n'.")


def parse_review_choice(value: str) -> str:
    """Re-analyze or proceed: returns ``'r'`` or ``'p'``."""
    v = (value or '').strip().lower()
    if v in ('r', 're-analyze', 'reanalyze'):
        return 'r'
    if v in ('p', 'proceed'):
        return 'p'
    raise ValueError("Please enter 'r' or 'p'.")


def parse_min_silence(value) -> float:
    """Minimum silence length, in seconds or ``[HH:]MM:SS`` form; must be > 0."""
    try:
        seconds = parse_seconds(value)
    except ValueError:
        raise ValueError('Invalid length. Please enter a positive number of seconds.')
    if seconds <= 0:
        raise ValueError('Invalid length. Please enter a positive number of seconds.')
    return seconds


def parse_noise_threshold(value) -> float:
    """Noise threshold in dB; a trailing ``dB`` is accepted. Must be <= 0."""
    text = str(value).strip()
    if text.lower().endswith('db'):
        text = text[:-2].strip()
    try:
        db = float(text)
    except ValueError:
        raise ValueError('Invalid noise threshold. Please enter a number (e.g., -40.0).')
    if not math.isfinite(db) or db > 0:
        raise ValueError('Invalid noise threshold. It must be 0 dB or below (e.g., -40.0).')
    return db
