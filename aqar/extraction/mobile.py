"""
Egyptian Mobile Number Utilities

Validation, normalisation, formatting, carrier lookup, extraction and masking
of Egyptian mobile numbers.

Canonical form is the 11-digit local number: 01 + carrier digit + 8 digits,
e.g. 01012345678. Accepted inputs:
- Local: 01012345678, 010 1234 5678, 010-1234-5678
- Country coded: +201012345678, 201012345678, +20 10 1234 5678, 0020...
- Arabic-Indic digits: ٠١٠١٢٣٤٥٦٧٨

Every function is best effort: invalid input gives None, False or the input
unchanged, never an exception.
"""

import logging
import re
from typing import List, Optional

from ..patterns import (
    CARRIER_DIGITS,
    MOBILE_MASKABLE_PATTERN,
    MOBILE_SPLIT_DIGITS_PATTERN,
    MOBILE_VARIANT_PATTERNS,
)
from ..utils.config import get_settings
from ..utils.text import normalize_digits
from .models import MobileDisplay

logger = logging.getLogger(__name__)

CANONICAL_MOBILE = re.compile(r"^01[0125]\d{8}$")
MASKED_DIGIT_COUNT = 9
_NON_DIGITS = re.compile(r"\D")


def normalize_mobile(number: Optional[str]) -> Optional[str]:
    """
    Reduce any accepted representation to the canonical local form.

    Args:
        number: Raw mobile text

    Returns:
        11-digit number starting with 01, or None when the input cannot be one
    """
    if not number:
        return None

    digits = _NON_DIGITS.sub("", normalize_digits(str(number)))

    if digits.startswith("0020"):
        digits = digits[4:]
    elif digits.startswith("20") and len(digits) == 12:
        digits = digits[2:]

    if len(digits) == 10 and digits.startswith("1"):
        digits = "0" + digits

    if CANONICAL_MOBILE.match(digits):
        return digits
    return None


def validate_mobile(number: Optional[str]) -> bool:
    """True if the number normalises to a valid Egyptian mobile."""
    return normalize_mobile(number) is not None


is_egyptian_mobile = validate_mobile


def format_mobile(number: Optional[str]) -> str:
    """
    Format for display as +20 10 1234 5678.

    Invalid input is returned unchanged ("" for None).
    """
    canonical = normalize_mobile(number)
    if canonical is None:
        return number or ""
    return f"+20 {canonical[1:3]} {canonical[3:7]} {canonical[7:]}"


def get_carrier(number: Optional[str], lang: str = "en") -> Optional[str]:
    """
    Look up the network operator from the carrier digit.

    Args:
        number: Mobile number in any accepted form
        lang: "en" (Vodafone, Etisalat, Orange, WE) or "ar"

    Returns:
        Carrier name, or None for invalid numbers
    """
    canonical = normalize_mobile(number)
    if canonical is None:
        return None
    names = CARRIER_DIGITS[canonical[2]]
    return names.get(lang, names["en"])


def _reconstruct_split_digits(text: str) -> Optional[str]:
    """Recover numbers whose digit groups were reversed by right-to-left rendering."""
    for match in MOBILE_SPLIT_DIGITS_PATTERN.finditer(text):
        subscriber, carrier, country = match.group(1), match.group(2), match.group(3)
        candidate = normalize_mobile(f"+{country}{carrier}{subscriber}")
        if candidate:
            logger.debug(f"Reconstructed split mobile {match.group(0)!r} -> {candidate}")
            return candidate
    return None


def extract_mobile(text: Optional[str]) -> Optional[str]:
    """
    Find the first Egyptian mobile number in free text.

    Format variants are tried in order (compact, country coded with
    separators, local with separators), then split-digit reconstruction.

    Returns:
        Canonical number, or None if the text holds no valid mobile
    """
    if not text:
        return None

    normalized = normalize_digits(text)

    for pattern in MOBILE_VARIANT_PATTERNS.values():
        for match in pattern.finditer(normalized):
            candidate = normalize_mobile(match.group(0))
            if candidate:
                return candidate

    return _reconstruct_split_digits(normalized)


def find_mobiles(text: Optional[str]) -> List[str]:
    """All valid mobiles in order of appearance, canonical form, duplicates kept."""
    if not text:
        return []
    found = []
    for match in MOBILE_MASKABLE_PATTERN.finditer(normalize_digits(text)):
        candidate = normalize_mobile(match.group(0))
        if candidate:
            found.append(candidate)
    return found


def mask_mobiles(text: Optional[str], is_authenticated: bool = False) -> str:
    """
    Replace every mobile number in free text according to the viewer.

    Authenticated viewers see each number formatted (+20 10 1234 5678).
    Anonymous viewers see only the first MASK_PREFIX_LENGTH characters of the
    number followed by mask characters. Numeric runs that are not valid
    mobiles are left as they are.

    Args:
        text: Text possibly containing mobile numbers
        is_authenticated: Whether the viewer is logged in

    Returns:
        Text with numbers formatted or masked
    """
    if not text:
        return text or ""

    settings = get_settings()
    mask = settings.MASK_CHAR * MASKED_DIGIT_COUNT
    prefix_length = settings.MASK_PREFIX_LENGTH
    normalized = normalize_digits(text)

    pieces = []
    last = 0
    for match in MOBILE_MASKABLE_PATTERN.finditer(normalized):
        if not validate_mobile(match.group(0)):
            continue
        pieces.append(text[last:match.start()])
        if is_authenticated:
            pieces.append(format_mobile(match.group(0)))
        else:
            pieces.append(text[match.start():match.start() + prefix_length] + mask)
        last = match.end()
    pieces.append(text[last:])

    return "".join(pieces)


def handle_mobile_number(number: Optional[str], is_authenticated: bool = False) -> MobileDisplay:
    """
    Build everything a contact field needs to render one number.

    Args:
        number: Raw mobile number
        is_authenticated: Whether the viewer is logged in

    Returns:
        MobileDisplay with formatted, masked and displayed values
    """
    if not number:
        return MobileDisplay(original=number or "")

    formatted = format_mobile(number)
    masked = mask_mobiles(number, is_authenticated=False)

    return MobileDisplay(
        original=number,
        is_valid=validate_mobile(number),
        formatted=formatted,
        masked=masked,
        displayed=formatted if is_authenticated else masked,
    )
