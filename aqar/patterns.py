"""
Pattern Library

Single source of truth for every keyword table and regular expression used by
field extraction and defect detection:

1. Property type keywords (Arabic + English)
2. Area gazetteer of Egyptian localities
3. Purpose, area and price keyword lists
4. Egyptian mobile number patterns
5. Defect signatures, each tagged with the DefectKind it produces

Everything here is static data. Patterns are compiled once at import time.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Pattern, Union

PATTERN_LIBRARY_VERSION = "2.1.0"

ARABIC_LETTER = "[ء-ي]"
LATIN_LETTER = "[A-Za-z]"


# =============================================================================
# DEFECT KINDS
# =============================================================================


class DefectKind(str, Enum):
    """Closed set of data-quality defect tags."""
    DUPLICATE_FIELD = "duplicate-field"
    EMPTY_VALUE = "empty-value"
    DUPLICATE_FIELD_VALUE = "duplicate-field-value"
    REPEATED_HTML_BLOCK = "repeated-html-block"
    EMPTY_FIELD = "empty-field"
    INLINE_REPETITION = "inline-repetition"
    MALFORMED_HTML = "malformed-html"
    INCOMPLETE_MOBILE = "incomplete-mobile"
    MIXED_LANGUAGE = "mixed-language"
    INVALID_PRICE_FORMAT = "invalid-price-format"
    INCONSISTENT_UNITS = "inconsistent-units"
    PLACEHOLDER_CONTENT = "placeholder-content"
    FLOATING_HEADER = "floating-header"
    DUPLICATE_MOBILE_BLOCK = "duplicate-mobile-block"
    ARABIC_FIELD_DUPLICATION = "arabic-field-duplication"
    REPEATED_PARAGRAPH = "repeated-paragraph"
    SCROLL_BUTTON_ISSUE = "scroll-button-issue"
    INACTIVE_SCROLL_BUTTON = "inactive-scroll-button"
    SCROLL_BUTTON_WITHOUT_BEHAVIOR = "scroll-button-without-behavior"
    MISSING_SCROLL_TO_TOP = "missing-scroll-to-top"
    POSITION_STYLING_ISSUE = "position-styling-issue"


# =============================================================================
# PROPERTY TYPES
# =============================================================================

# Dict order is the classification priority
PROPERTY_TYPE_KEYWORDS: Dict[str, Dict[str, List[str]]] = {
    "apartment": {
        "ar": ["شقة", "شقق", "دور", "أدوار", "طابق", "غرفة", "غرف", "صالة", "حمام", "مطبخ"],
        "en": ["apartment", "apartments", "flat", "flats", "studio", "penthouse"],
    },
    "villa": {
        "ar": ["فيلا", "فيلات", "قصر", "قصور", "بيت", "بيوت", "منزل", "منازل", "دوبلكس"],
        "en": ["villa", "villas", "palace", "house", "townhouse", "twin house", "duplex", "chalet"],
    },
    "land": {
        "ar": ["أرض", "أراضي", "قطعة", "قطع", "مساحة", "متر", "فدان", "قيراط"],
        "en": ["land", "plot", "plots", "acre", "acres", "feddan"],
    },
    "office": {
        "ar": ["مكتب", "مكاتب", "إداري", "تجاري", "محل", "محلات", "متجر"],
        "en": ["office", "offices", "shop", "store", "commercial", "clinic", "retail"],
    },
    "warehouse": {
        "ar": ["مخزن", "مخازن", "مستودع", "مستودعات", "ورشة", "ورش"],
        "en": ["warehouse", "warehouses", "storage", "workshop", "factory"],
    },
}


# =============================================================================
# AREAS
# =============================================================================

_AREA_GAZETTEER = [
    # Greater Cairo
    "القاهرة الجديدة", "التجمع الخامس", "التجمع", "مدينة نصر", "مصر الجديدة",
    "المعادي", "الزمالك", "وسط البلد", "الرحاب", "الشروق", "العبور", "شبرا",
    "حدائق الأهرام", "العاشر من رمضان", "القاهرة",
    # Giza and the west
    "مدينة الشيخ زايد", "الشيخ زايد", "مدينة 6 أكتوبر", "6 أكتوبر", "أكتوبر",
    "الهرم", "فيصل", "الدقي", "المهندسين", "إمبابة", "الجيزة",
    # Alexandria and the coast
    "الإسكندرية", "سيدي جابر", "المنتزه", "العجمي", "العلمين", "الساحل الشمالي",
    "الغردقة", "شرم الشيخ",
    # Transliterated forms
    "New Cairo", "Fifth Settlement", "Tagamoa", "Nasr City", "Heliopolis",
    "Maadi", "Zamalek", "Downtown", "Rehab", "Sheikh Zayed", "Zayed",
    "6th October", "6 October", "October", "Dokki", "Mohandessin", "Giza",
    "Alexandria", "North Coast", "Hurghada",
]

# Constituent words must never win over the full locality name
AREA_GAZETTEER: List[str] = sorted(_AREA_GAZETTEER, key=len, reverse=True)

AREA_KEYWORDS: List[str] = [
    "الحي", "منطقة", "شارع", "طريق", "ميدان", "كوبري", "جسر", "حدائق", "مدينة",
    "قرية", "كمبوند", "العاشر", "الخامس", "السادس", "التجمع", "المعادي",
    "مصر الجديدة", "الزمالك", "وسط البلد", "مدينة نصر", "الهرم", "فيصل",
    "إمبابة", "شبرا",
]


# =============================================================================
# PURPOSE AND PRICE VOCABULARY
# =============================================================================

# Checked in this order; the first category with a hit wins
PURPOSE_KEYWORDS: Dict[str, Dict[str, List[str]]] = {
    "rent": {
        "ar": ["للإيجار", "إيجار"],
        "en": ["for rent", "to rent", "for lease"],
    },
    "sale": {
        "ar": ["للبيع", "متاح"],
        "en": ["for sale", "to sell", "offered"],
    },
    "wanted": {
        "ar": ["مطلوب", "أريد", "أحتاج"],
        "en": ["required", "wanted", "want", "need", "looking for"],
    },
}

PRICE_KEYWORDS: List[str] = [
    "جنيه", "ألف", "مليون", "سعر", "ثمن", "تكلفة", "مقدم", "قسط", "أقساط",
    "نقدي", "كاش", "تمويل", "بنك", "عربون",
]

# Upper bounds (exclusive) for the low and medium bands
PRICE_RANGE_BOUNDS = {
    "low": 1_000_000,
    "medium": 5_000_000,
}

# First run of >=4 digits: grouped (2,500,000 / 2.500.000) or plain, optional decimals
PRICE_TOKEN_PATTERN = re.compile(
    r"(?<![\d.,])(\d{1,3}(?:[,.]\d{3})+|\d{4,})(?:\.(\d{1,2}))?(?!\d|,\d)"
)

# Title + name: المهندس أحمد / Mr. Ahmed Hassan / Eng. Sara
BROKER_NAME_PATTERNS: List[Pattern] = [
    re.compile(rf"(?<!{ARABIC_LETTER})(?:ال)?(?:مهندس|دكتور|[أا]ستاذ)ة?\s+{ARABIC_LETTER}+"),
    re.compile(r"\b(?:Mr|Mrs|Ms|Eng|Dr)\.?\s+[A-Z][a-z]+(?:\s+[A-Z][a-z]+)?"),
]


# =============================================================================
# MOBILE NUMBERS
# =============================================================================

# Canonical Egyptian mobile: optional +, optional 2, 01, carrier digit, 8 digits
MOBILE_PATTERN = re.compile(r"(?<![\d+])\+?2?01[0125]\d{8}(?!\d)")

# Tried in order by mobile extraction
MOBILE_VARIANT_PATTERNS: Dict[str, Pattern] = {
    "compact": MOBILE_PATTERN,
    "country_coded": re.compile(r"(?<![\d+])(?:\+|00)?20[\s-]*1[0125](?:[\s-]*\d){8}(?!\d)"),
    "local_spaced": re.compile(r"(?<![\d+])01[0125](?:[\s-]*\d){8}(?!\d)"),
}

# Bidi-garbled "+20 10 26433244" rendered as "26433244 10 20+"
MOBILE_SPLIT_DIGITS_PATTERN = re.compile(r"(?<!\d)(\d{8})\s*(\d{2})\s*(\d{2})\s*\+?")

# Every mobile-shaped run that masking has to consider
MOBILE_MASKABLE_PATTERN = re.compile(
    r"(?<![\d+])(?:(?:\+|00)?20[\s-]*1[0125]|\+?2?01[0125])(?:[\s-]*\d){8}(?!\d)"
)

CARRIER_DIGITS: Dict[str, Dict[str, str]] = {
    "0": {"en": "Vodafone", "ar": "فودافون"},
    "1": {"en": "Etisalat", "ar": "اتصالات"},
    "2": {"en": "Orange", "ar": "أورانج"},
    "5": {"en": "WE", "ar": "وي"},
}


# =============================================================================
# DEFECT SIGNATURES
# =============================================================================


@dataclass(frozen=True)
class PatternSpec:
    """A named defect signature."""
    name: str
    kind: DefectKind
    regex: Pattern
    description: str


_I = re.IGNORECASE
_IS = re.IGNORECASE | re.DOTALL

_DEFECT_PATTERNS: List[PatternSpec] = [
    PatternSpec(
        name="field_value_pair",
        kind=DefectKind.DUPLICATE_FIELD_VALUE,
        regex=re.compile(
            rf"(?<![\w-])([A-Za-z_][\w-]*|{ARABIC_LETTER}+)[ \t]*:[ \t]*"
            r"([^,;\n<>{}\"]*[^,;\n<>{}\"\s])"
        ),
        description="label: value pair; the same pair twice is a duplicated value",
    ),
    PatternSpec(
        name="repeated_blocks",
        kind=DefectKind.REPEATED_HTML_BLOCK,
        regex=re.compile(r"(<(div|section|label)\b[^>]*>.*?</\2\s*>)(?:\s*\1)+", _IS),
        description="Same div/section/label block repeated back to back",
    ),
    PatternSpec(
        name="empty_element",
        kind=DefectKind.EMPTY_FIELD,
        regex=re.compile(
            r"<(p|span|div|li|td|th|h[1-6]|strong|em|b|label)\b[^>]*>"
            r"\s*(null|undefined|empty|none|n/a)?\s*</\1\s*>",
            _I,
        ),
        description="Element with blank or null-like content",
    ),
    PatternSpec(
        name="inline_repetition",
        kind=DefectKind.INLINE_REPETITION,
        regex=re.compile(r"\b(\w{3,})\b(?:\s+\1\b)+", _I),
        description="Same word repeated back to back",
    ),
    PatternSpec(
        name="html_tag",
        kind=DefectKind.MALFORMED_HTML,
        regex=re.compile(r"<(/?)([a-zA-Z][a-zA-Z0-9-]*)\b[^<>]*?(/?)>"),
        description="Opening, closing or self-closing tag token",
    ),
    PatternSpec(
        name="incomplete_mobile",
        kind=DefectKind.INCOMPLETE_MOBILE,
        regex=re.compile(
            r"(?<![\w.,+#])(?:\+20[\s-]*1[0125]?|01[0125])(?:[\s-]*\d){0,7}(?![\s-]*\d)(?!\w)"
        ),
        description="Mobile prefix followed by fewer than eight subscriber digits",
    ),
    PatternSpec(
        name="mixed_script_token",
        kind=DefectKind.MIXED_LANGUAGE,
        regex=re.compile(
            rf"[^\s<>]*(?:{LATIN_LETTER}{ARABIC_LETTER}|{ARABIC_LETTER}{LATIN_LETTER})[^\s<>]*"
        ),
        description="Single token mixing Latin and Arabic letters",
    ),
    PatternSpec(
        name="broken_arabic",
        kind=DefectKind.MIXED_LANGUAGE,
        regex=re.compile(rf"({ARABIC_LETTER})\s+{LATIN_LETTER}\s+(?={ARABIC_LETTER})"),
        description="Arabic phrase interrupted by a lone Latin letter",
    ),
    PatternSpec(
        name="invalid_price",
        kind=DefectKind.INVALID_PRICE_FORMAT,
        regex=re.compile(
            r"\b(?:price|السعر|سعر)\s*:\s*"
            r"(?![\d٠-٩$£€]|(?:EGP|USD|L\.?E)\b|ج\.?م|جنيه|دولار)[^\s<,;]+",
            _I,
        ),
        description="Price label followed by non-numeric, non-currency content",
    ),
    PatternSpec(
        name="inconsistent_units",
        kind=DefectKind.INCONSISTENT_UNITS,
        regex=re.compile(
            r"(?:sqm|m²|square\s+met(?:er|re)s?|متر\s+مربع)[^\n]*?(?:sq\.?\s*ft|sqft|ft²|square\s+f(?:ee|oo)t|قدم\s+مربع)"
            r"|(?:sq\.?\s*ft|sqft|ft²|square\s+f(?:ee|oo)t|قدم\s+مربع)[^\n]*?(?:sqm|m²|square\s+met(?:er|re)s?|متر\s+مربع)",
            _I,
        ),
        description="Metric and imperial area units on the same line",
    ),
    PatternSpec(
        name="placeholder",
        kind=DefectKind.PLACEHOLDER_CONTENT,
        regex=re.compile(r"<(\w+)\b[^>]*>\s*(TODO|PLACEHOLDER|XXX|TBD|lorem ipsum)\s*</\1\s*>", _I),
        description="Sentinel text left inside an element",
    ),
    PatternSpec(
        name="header_element",
        kind=DefectKind.FLOATING_HEADER,
        regex=re.compile(
            r"<(div|header|nav)\b([^>]*\bclass\s*=\s*[\"'][^\"']*"
            r"\b(?:top-header|toolbar|page-header|site-header|navbar)\b[^\"']*[\"'][^>]*)>",
            _I,
        ),
        description="Header or toolbar container",
    ),
    PatternSpec(
        name="arabic_phrase_repeat",
        kind=DefectKind.ARABIC_FIELD_DUPLICATION,
        regex=re.compile(
            rf"(?<!{ARABIC_LETTER})((?:{ARABIC_LETTER}+\s+){{1,11}}{ARABIC_LETTER}+)\s+\1(?!{ARABIC_LETTER})"
        ),
        description="Multi-word Arabic phrase repeated back to back",
    ),
    PatternSpec(
        name="repeated_paragraph",
        kind=DefectKind.REPEATED_PARAGRAPH,
        regex=re.compile(r"(<p\b[^>]*>.*?</p\s*>)(?:\s*\1)+", _IS),
        description="Same paragraph repeated back to back",
    ),
    PatternSpec(
        name="scroll_button",
        kind=DefectKind.SCROLL_BUTTON_ISSUE,
        regex=re.compile(
            r"<(button|div|a)\b([^>]*\bclass\s*=\s*[\"'][^\"']*"
            r"(?:scroll[\w-]*top|back[\w-]*top|to-top|up-arrow|floating-button)[^\"']*[\"'][^>]*)>"
            r"(.*?)</\1\s*>",
            _IS,
        ),
        description="Scroll-to-top control",
    ),
    PatternSpec(
        name="css_rule_body",
        kind=DefectKind.POSITION_STYLING_ISSUE,
        regex=re.compile(r"\{([^{}]*)\}"),
        description="CSS declaration block",
    ),
    PatternSpec(
        name="style_attribute",
        kind=DefectKind.POSITION_STYLING_ISSUE,
        regex=re.compile(r"\bstyle\s*=\s*([\"'])(.*?)\1", _IS),
        description="Inline style attribute",
    ),
]

DEFECT_PATTERNS: Dict[str, PatternSpec] = {spec.name: spec for spec in _DEFECT_PATTERNS}

# Smaller helper signatures used alongside the registered ones
BODY_TAG_PATTERN = re.compile(r"<body\b", re.IGNORECASE)
POSITION_DECLARATION_PATTERN = re.compile(r"position\s*:\s*(absolute|relative|fixed|sticky)", re.IGNORECASE)
EDGE_ANCHOR_PATTERN = re.compile(r"\b(?:top|bottom)\s*:\s*0(?![\d.])", re.IGNORECASE)
Z_INDEX_PATTERN = re.compile(r"z-index\s*:", re.IGNORECASE)
SCROLL_BEHAVIOR_PATTERN = re.compile(r"addEventListener|scrollTo\s*\(", re.IGNORECASE)
CODE_BLOCK_PATTERN = re.compile(
    r"<(script|style)\b[^>]*>.*?</\1\s*>|\bstyle\s*=\s*([\"']).*?\2", re.IGNORECASE | re.DOTALL
)

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "source", "track", "wbr",
})
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})

# Markers stripped from field names before duplicate comparison
DUPLICATE_FIELD_MARKERS = frozenset({"duplicate", "dup", "copy", "again"})

STICKY_HEADER_MARKER = 'data-fix="sticky-header"'
STICKY_HEADER_STYLE = (
    f"<style {STICKY_HEADER_MARKER}>"
    ".top-header, .toolbar, .page-header, .site-header, .navbar "
    "{ position: sticky; top: 0; z-index: 50; }"
    "</style>"
)


# =============================================================================
# ACCESSORS
# =============================================================================


def get_property_type_keywords(property_type: Union[str, Enum]) -> List[str]:
    """
    Get the keyword list for a property type.

    Args:
        property_type: PropertyType member or its value ("apartment", ...)

    Returns:
        Arabic keywords followed by English keywords; empty for "other"
    """
    key = getattr(property_type, "value", property_type)
    entry = PROPERTY_TYPE_KEYWORDS.get(key)
    if not entry:
        return []
    return entry["ar"] + entry["en"]


def get_area_gazetteer() -> List[str]:
    """Get recognised localities, longest name first."""
    return list(AREA_GAZETTEER)


def get_mobile_pattern() -> Pattern:
    """Get the canonical Egyptian mobile regex."""
    return MOBILE_PATTERN


def get_defect_pattern(name: str) -> PatternSpec:
    """Look up a registered defect signature by name."""
    return DEFECT_PATTERNS[name]


def iter_defect_patterns(kind: Optional[DefectKind] = None) -> Iterator[PatternSpec]:
    """Iterate registered defect signatures, optionally for one kind."""
    for spec in _DEFECT_PATTERNS:
        if kind is None or spec.kind == kind:
            yield spec
