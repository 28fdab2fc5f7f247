"""
Listing Extraction

Turns raw bilingual real-estate text into structured fields.

Components:
- extract: Field extractor (purpose, area, price, broker, property type, keywords)
- Mobile utilities: Egyptian mobile validation, formatting, masking
- Chat export parser: WhatsApp export -> ChatMessage records
"""

from .models import (
    ChatMessage,
    ExtractedFields,
    MobileDisplay,
    PriceRange,
    PropertyType,
    Purpose,
)
from .extractor import (
    classify_price_range,
    classify_property_type,
    classify_purpose,
    classify_purpose_legacy,
    extract,
    extract_area,
    extract_broker_name,
    extract_keywords,
    extract_price,
)
from .mobile import (
    extract_mobile,
    find_mobiles,
    format_mobile,
    get_carrier,
    handle_mobile_number,
    is_egyptian_mobile,
    mask_mobiles,
    normalize_mobile,
    validate_mobile,
)
from .whatsapp import parse_chat_export, parse_message

__all__ = [
    # Models
    "ChatMessage",
    "ExtractedFields",
    "MobileDisplay",
    "PriceRange",
    "PropertyType",
    "Purpose",
    # Field extraction
    "extract",
    "classify_purpose",
    "classify_purpose_legacy",
    "extract_area",
    "extract_price",
    "classify_price_range",
    "extract_broker_name",
    "classify_property_type",
    "extract_keywords",
    # Mobile numbers
    "extract_mobile",
    "find_mobiles",
    "format_mobile",
    "get_carrier",
    "handle_mobile_number",
    "is_egyptian_mobile",
    "mask_mobiles",
    "normalize_mobile",
    "validate_mobile",
    # Chat exports
    "parse_chat_export",
    "parse_message",
]
