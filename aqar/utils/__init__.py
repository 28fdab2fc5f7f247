"""Utility modules for the Aqar listing engine."""

from .config import Settings, get_settings
from .text import (
    normalize_digits,
    normalize_whitespace,
    snippet,
    bound_input,
    contains_arabic,
    fold_arabic,
)

__all__ = [
    "Settings",
    "get_settings",
    # Text helpers
    "normalize_digits",
    "normalize_whitespace",
    "snippet",
    "bound_input",
    "contains_arabic",
    "fold_arabic",
]
