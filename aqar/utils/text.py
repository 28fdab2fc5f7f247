"""
Text Helpers

Small string utilities shared by extraction and quality detection:
- Arabic-Indic to Western digit conversion
- Whitespace normalisation
- Bounded evidence snippets
"""

import logging
import re
from typing import Optional

from .config import get_settings

logger = logging.getLogger(__name__)


# =============================================================================
# ARABIC-WESTERN NUMERAL CONVERSION
# =============================================================================

ARABIC_DIGITS = "٠١٢٣٤٥٦٧٨٩"
PERSIAN_DIGITS = "۰۱۲۳۴۵۶۷۸۹"
WESTERN_DIGITS = "0123456789"

_DIGIT_TABLE = str.maketrans(ARABIC_DIGITS + PERSIAN_DIGITS, WESTERN_DIGITS * 2)

ARABIC_LETTER_RANGE = "ء-ي"
_ARABIC_LETTER = re.compile(f"[{ARABIC_LETTER_RANGE}]")
_WHITESPACE = re.compile(r"\s+")


def normalize_digits(text: str) -> str:
    """Convert Arabic-Indic numerals (٠١٢...) to Western (012...)."""
    return text.translate(_DIGIT_TABLE)


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and strip the ends."""
    return _WHITESPACE.sub(" ", text).strip()


def contains_arabic(text: str) -> bool:
    """True if the text holds at least one Arabic letter."""
    return bool(_ARABIC_LETTER.search(text))


def snippet(text: str, max_length: Optional[int] = None) -> str:
    """
    Bound a piece of evidence for reporting.

    Args:
        text: Matched text
        max_length: Maximum length (default: EVIDENCE_MAX_LENGTH setting)

    Returns:
        Single-line text, truncated with "..." when longer than max_length
    """
    if max_length is None:
        max_length = get_settings().EVIDENCE_MAX_LENGTH
    flat = text.replace("\n", " ")
    if len(flat) > max_length:
        return flat[:max_length] + "..."
    return flat


def bound_input(text: str) -> str:
    """Truncate oversized input so regex scanning stays bounded."""
    limit = get_settings().MAX_INPUT_LENGTH
    if len(text) > limit:
        logger.warning(f"Input of {len(text)} chars truncated to {limit} for scanning")
        return text[:limit]
    return text


# =============================================================================
# ARABIC ORTHOGRAPHIC FOLDING
# =============================================================================

# Alef variants, taa marbuta and alef maqsura are written interchangeably in chat text
_FOLD_TABLE = str.maketrans({
    "أ": "ا",
    "إ": "ا",
    "آ": "ا",
    "ة": "ه",
    "ى": "ي",
    "ـ": None,  # tatweel
})


def fold_arabic(text: str) -> str:
    """Fold Arabic spelling variants and lower-case Latin letters for matching."""
    return text.translate(_FOLD_TABLE).lower()
