"""
Field Extractor

Turns one raw listing text (a chat message, an imported description) into an
ExtractedFields record:

1. Purpose - rent, sale or wanted keywords, else unknown
2. Area - first gazetteer locality found, longest names first
3. Price - first numeric token with at least four digits
4. Broker mobile - first valid Egyptian mobile
5. Broker name - first title + name
6. Property type - keyword containment in fixed priority order
7. Keywords - area, price and property keywords found, in discovery order

Arabic keywords match by containment after folding spelling variants
(أ/إ/آ -> ا, ة -> ه, ى -> ي). Latin keywords match case-insensitively on
word boundaries so that "house" never fires inside "warehouse".

Absence of a match is a normal outcome (None / unknown / other), never an
exception.
"""

import logging
import re
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import Iterable, List, Optional

from ..patterns import (
    AREA_GAZETTEER,
    AREA_KEYWORDS,
    BROKER_NAME_PATTERNS,
    MOBILE_MASKABLE_PATTERN,
    PRICE_KEYWORDS,
    PRICE_RANGE_BOUNDS,
    PRICE_TOKEN_PATTERN,
    PROPERTY_TYPE_KEYWORDS,
    PURPOSE_KEYWORDS,
    get_property_type_keywords,
)
from ..utils.text import fold_arabic, normalize_digits, normalize_whitespace
from .mobile import extract_mobile, validate_mobile
from .models import ExtractedFields, PriceRange, PropertyType, Purpose

logger = logging.getLogger(__name__)

_LATIN = re.compile(r"[A-Za-z]")


# =============================================================================
# KEYWORD MATCHING
# =============================================================================


@lru_cache(maxsize=None)
def _keyword_matcher(keyword: str):
    """Compile a matcher for one keyword against folded text."""
    folded = fold_arabic(keyword)
    if _LATIN.search(keyword):
        pattern = re.compile(r"\b" + r"\s+".join(map(re.escape, folded.split())) + r"\b")
        return lambda text: pattern.search(text) is not None
    return lambda text: folded in text


def _contains(folded_text: str, keyword: str) -> bool:
    return _keyword_matcher(keyword)(folded_text)


def _prepare(text: Optional[str]) -> str:
    """Digits normalised, whitespace collapsed, spelling folded."""
    if not text:
        return ""
    return fold_arabic(normalize_whitespace(normalize_digits(text)))


def _matched(folded_text: str, keywords: Iterable[str]) -> List[str]:
    return [keyword for keyword in keywords if _contains(folded_text, keyword)]


# =============================================================================
# FIELD CLASSIFIERS
# =============================================================================


def classify_purpose(text: Optional[str]) -> Purpose:
    """
    Three-way purpose classification with an explicit unknown bucket.

    Rent keywords are checked first, then sale, then wanted.
    """
    folded = _prepare(text)
    if not folded:
        return Purpose.UNKNOWN

    for purpose, vocabulary in PURPOSE_KEYWORDS.items():
        if _matched(folded, vocabulary["ar"] + vocabulary["en"]):
            return Purpose(purpose)
    return Purpose.UNKNOWN


def classify_purpose_legacy(text: Optional[str]) -> Purpose:
    """
    Binary rent/sale classifier kept for comparison with old imports.

    Treats anything that is not rent as sale. Use classify_purpose instead.
    """
    if classify_purpose(text) == Purpose.RENT:
        return Purpose.RENT
    return Purpose.SALE


def extract_area(text: Optional[str]) -> Optional[str]:
    """First gazetteer locality contained in the text, longest names first."""
    folded = _prepare(text)
    if not folded:
        return None

    for locality in AREA_GAZETTEER:
        if _contains(folded, locality):
            return locality
    return None


def _blank_mobiles(text: str) -> str:
    """Replace valid mobile numbers with spaces; offsets are unchanged."""
    return MOBILE_MASKABLE_PATTERN.sub(
        lambda match: " " * len(match.group(0)) if validate_mobile(match.group(0)) else match.group(0),
        text,
    )


def extract_price(text: Optional[str]) -> Optional[Decimal]:
    """
    First numeric token of four or more digits, grouping separators removed.

    Mobile numbers, compact or spaced, are skipped.
    """
    if not text:
        return None

    for match in PRICE_TOKEN_PATTERN.finditer(_blank_mobiles(normalize_digits(text))):
        integer_part = re.sub(r"[,.]", "", match.group(1))
        if validate_mobile(integer_part):
            continue
        decimals = match.group(2)
        raw = f"{integer_part}.{decimals}" if decimals else integer_part
        try:
            return Decimal(raw)
        except InvalidOperation:
            logger.debug(f"Skipping unparsable price token {match.group(0)!r}")
    return None


def classify_price_range(price: Optional[Decimal]) -> PriceRange:
    """Band a price the way the analytics view does."""
    if price is None:
        return PriceRange.UNKNOWN
    if price < PRICE_RANGE_BOUNDS["low"]:
        return PriceRange.LOW
    if price < PRICE_RANGE_BOUNDS["medium"]:
        return PriceRange.MEDIUM
    return PriceRange.HIGH


def extract_broker_name(text: Optional[str]) -> Optional[str]:
    """First title + name match, Arabic titles before English ones."""
    if not text:
        return None

    for pattern in BROKER_NAME_PATTERNS:
        match = pattern.search(text)
        if match:
            return normalize_whitespace(match.group(0))
    return None


def classify_property_type(text: Optional[str]) -> PropertyType:
    """First property type (apartment, villa, land, office, warehouse) with a keyword hit."""
    folded = _prepare(text)
    if not folded:
        return PropertyType.OTHER

    for property_type in PROPERTY_TYPE_KEYWORDS:
        if _matched(folded, get_property_type_keywords(property_type)):
            return PropertyType(property_type)
    return PropertyType.OTHER


def extract_keywords(text: Optional[str]) -> List[str]:
    """Area, price and property keywords found, de-duplicated, discovery order kept."""
    folded = _prepare(text)
    if not folded:
        return []

    found: List[str] = []
    area = extract_area(text)
    if area:
        found.append(area)
    found.extend(_matched(folded, AREA_KEYWORDS))
    found.extend(_matched(folded, PRICE_KEYWORDS))
    for property_type in PROPERTY_TYPE_KEYWORDS:
        found.extend(_matched(folded, get_property_type_keywords(property_type)))

    return list(dict.fromkeys(found))


# =============================================================================
# EXTRACTION
# =============================================================================


def extract(text: Optional[str]) -> ExtractedFields:
    """
    Extract structured listing fields from raw text.

    Args:
        text: Chat message or free-text description (None and "" allowed)

    Returns:
        Immutable ExtractedFields; missing fields are None / unknown / other
    """
    if not text or not text.strip():
        return ExtractedFields()

    price = extract_price(text)
    fields = ExtractedFields(
        purpose=classify_purpose(text),
        area=extract_area(text),
        price=price,
        price_range=classify_price_range(price),
        broker_name=extract_broker_name(text),
        broker_mobile=extract_mobile(text),
        property_type=classify_property_type(text),
        keywords=tuple(extract_keywords(text)),
    )

    logger.debug(
        f"Extracted purpose={fields.purpose.value} area={fields.area} "
        f"price={fields.price} type={fields.property_type.value}"
    )
    return fields
