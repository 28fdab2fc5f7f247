"""
Defect Detectors

One pure function per data-quality defect. Each takes a string (text, HTML or
CSS) or a key/value mapping and returns a list of DefectFinding; an empty list
is the clean result.

Detectors are grouped into registries by input shape:
- TEXT_DETECTORS: plain free text
- MARKUP_DETECTORS: HTML fragments (text checks + structure + layout)
- RECORD_DETECTORS: key/value records (field checks + text checks on values)
"""

import logging
import re
from collections import Counter
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..extraction.mobile import find_mobiles
from ..patterns import (
    BODY_TAG_PATTERN,
    CODE_BLOCK_PATTERN,
    DUPLICATE_FIELD_MARKERS,
    EDGE_ANCHOR_PATTERN,
    POSITION_DECLARATION_PATTERN,
    SCROLL_BEHAVIOR_PATTERN,
    STICKY_HEADER_MARKER,
    Z_INDEX_PATTERN,
    get_defect_pattern,
)
from ..utils.text import bound_input, normalize_digits, snippet
from .inputs import Markup, QualityInput, Record
from .markup import MarkupScanner
from .models import DefectFinding, DefectKind

logger = logging.getLogger(__name__)

EMPTY_MARKERS = frozenset({"null", "undefined"})

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_NAME_SEPARATORS = re.compile(r"[\s_\-]+")
_TRAILING_DIGITS = re.compile(r"\d+$")
_FIXED_POSITION = re.compile(r"position\s*:\s*fixed|class\s*=\s*[\"'][^\"']*\bfixed\b", re.IGNORECASE)
_PINNED_POSITION = re.compile(
    r"position\s*:\s*(?:sticky|fixed)|class\s*=\s*[\"'][^\"']*\b(?:sticky|fixed)\b", re.IGNORECASE
)
_ONCLICK = re.compile(r"\bonclick\s*=", re.IGNORECASE)


def _finding(kind: DefectKind, evidence: str, suggestion: str) -> DefectFinding:
    return DefectFinding(kind=kind, evidence=snippet(evidence), suggestion=suggestion)


def _scan(pattern_name: str, text: Optional[str], suggestion: str) -> List[DefectFinding]:
    """One finding per match of a registered defect signature."""
    if not text:
        return []
    spec = get_defect_pattern(pattern_name)
    return [_finding(spec.kind, match.group(0), suggestion) for match in spec.regex.finditer(text)]


# =============================================================================
# RECORD CHECKS
# =============================================================================


def normalize_field_name(name: Any) -> str:
    """
    Reduce a field name to its comparison key.

    "title", "Title", "title_duplicate", "titleCopy" and "title-2" all give
    "title". Single-letter stems keep their digits ("h1" stays "h1").
    """
    raw = str(name)
    parts = [part for part in _NAME_SEPARATORS.split(_CAMEL_BOUNDARY.sub(r"\1 \2", raw).lower()) if part]
    parts = [part for part in parts if part not in DUPLICATE_FIELD_MARKERS and not part.isdigit()]
    if parts:
        stem = _TRAILING_DIGITS.sub("", parts[-1])
        if len(stem) > 1:
            parts[-1] = stem
    return "_".join(parts) or raw.lower()


def detect_duplicate_fields(record: Optional[Mapping[str, Any]]) -> List[DefectFinding]:
    """Fields whose normalised names collide, one finding per collision group."""
    if not isinstance(record, Mapping):
        return []

    groups: Dict[str, List[str]] = {}
    for key in record:
        groups.setdefault(normalize_field_name(key), []).append(str(key))

    return [
        _finding(
            DefectKind.DUPLICATE_FIELD,
            ", ".join(keys),
            f"Keep one of the duplicate fields: {', '.join(keys)}",
        )
        for keys in groups.values()
        if len(keys) > 1
    ]


def is_empty_value(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        stripped = value.strip()
        return not stripped or stripped.lower() in EMPTY_MARKERS
    return False


def detect_empty_values(record: Optional[Mapping[str, Any]]) -> List[DefectFinding]:
    """Fields holding None, blank text, "null" or "undefined"."""
    if not isinstance(record, Mapping):
        return []
    return [
        _finding(DefectKind.EMPTY_VALUE, str(key), f"Fill empty field: {key}")
        for key, value in record.items()
        if is_empty_value(value)
    ]


# =============================================================================
# TEXT CHECKS
# =============================================================================


def _code_spans(text: str) -> List[range]:
    return [range(match.start(), match.end()) for match in CODE_BLOCK_PATTERN.finditer(text)]


def iter_field_value_pairs(text: str):
    """Yield (match, key) for label: value pairs outside script, style and style attributes."""
    spans = _code_spans(text)
    for match in get_defect_pattern("field_value_pair").regex.finditer(text):
        if any(match.start() in span for span in spans):
            continue
        yield match, (match.group(1).lower(), match.group(2).strip())


def detect_duplicate_field_values(text: Optional[str]) -> List[DefectFinding]:
    """The same label: value pair appearing more than once."""
    if not text:
        return []

    counts: Counter = Counter()
    first_seen: Dict[tuple, str] = {}
    for match, key in iter_field_value_pairs(text):
        counts[key] += 1
        first_seen.setdefault(key, match.group(0))

    return [
        _finding(DefectKind.DUPLICATE_FIELD_VALUE, first_seen[key], "Remove duplicate field values")
        for key, count in counts.items()
        if count > 1
    ]


def detect_inline_repetition(text: Optional[str]) -> List[DefectFinding]:
    return _scan("inline_repetition", text, "Remove the repeated word")


def detect_incomplete_mobile_numbers(text: Optional[str]) -> List[DefectFinding]:
    """Mobile prefixes followed by too few digits, e.g. "+20 12 345"."""
    if not text:
        return []
    regex = get_defect_pattern("incomplete_mobile").regex
    return [
        _finding(
            DefectKind.INCOMPLETE_MOBILE,
            text[match.start():match.end()],
            "Complete the mobile number or remove if invalid",
        )
        for match in regex.finditer(normalize_digits(text))
    ]


def detect_mixed_language_issues(text: Optional[str]) -> List[DefectFinding]:
    """Tokens mixing Latin and Arabic letters, and Arabic broken by a lone Latin letter."""
    return (
        _scan("mixed_script_token", text, "Separate Arabic and Latin text into distinct words")
        + _scan("broken_arabic", text, "Remove the stray Latin letter from the Arabic text")
    )


def detect_invalid_price_formats(text: Optional[str]) -> List[DefectFinding]:
    return _scan("invalid_price", text, "Use numeric values with proper currency indicators")


def detect_inconsistent_units(text: Optional[str]) -> List[DefectFinding]:
    return _scan("inconsistent_units", text, "Use consistent unit format throughout the content")


def detect_duplicate_mobile_blocks(text: Optional[str]) -> List[DefectFinding]:
    """The same mobile number written more than once, in any accepted format."""
    counts = Counter(find_mobiles(text))
    return [
        _finding(DefectKind.DUPLICATE_MOBILE_BLOCK, number, "Remove duplicate mobile number entries")
        for number, count in counts.items()
        if count > 1
    ]


def detect_arabic_field_duplication(text: Optional[str]) -> List[DefectFinding]:
    return _scan("arabic_phrase_repeat", text, "Remove duplicate Arabic text content")


# =============================================================================
# MARKUP CHECKS
# =============================================================================


def detect_repeated_blocks(html: Optional[str]) -> List[DefectFinding]:
    return _scan("repeated_blocks", html, "Collapse the repeated block to a single occurrence")


def detect_empty_fields(html: Optional[str]) -> List[DefectFinding]:
    return _scan("empty_element", html, "Remove or fill the empty element")


def detect_malformed_html(html: Optional[str]) -> List[DefectFinding]:
    """Unclosed tags and closing tags with no matching opener."""
    if not html:
        return []

    findings = []
    for issue in MarkupScanner().scan(html):
        if issue.problem == "unclosed":
            suggestion = f"Close <{issue.tag}> with </{issue.tag}>"
        else:
            suggestion = f"Remove stray </{issue.tag}>"
        findings.append(_finding(DefectKind.MALFORMED_HTML, issue.token, suggestion))
    return findings


def detect_placeholder_content(html: Optional[str]) -> List[DefectFinding]:
    return _scan("placeholder", html, "Replace placeholder content with actual data")


def unpinned_headers(html: Optional[str]) -> List[re.Match]:
    """Header/toolbar tags that are neither sticky nor fixed."""
    if not html or STICKY_HEADER_MARKER in html:
        return []
    regex = get_defect_pattern("header_element").regex
    return [match for match in regex.finditer(html) if not _PINNED_POSITION.search(match.group(2))]


def detect_floating_headers(html: Optional[str]) -> List[DefectFinding]:
    return [
        _finding(
            DefectKind.FLOATING_HEADER,
            match.group(0),
            "Consider adding position: sticky; top: 0; z-index: 50;",
        )
        for match in unpinned_headers(html)
    ]


def detect_same_paragraph_twice(html: Optional[str]) -> List[DefectFinding]:
    return _scan("repeated_paragraph", html, "Remove duplicate paragraph content")


def _scroll_buttons(html: Optional[str]) -> List[re.Match]:
    if not html:
        return []
    return list(get_defect_pattern("scroll_button").regex.finditer(html))


def detect_floating_scroll_buttons(html: Optional[str]) -> List[DefectFinding]:
    """Scroll-to-top controls without fixed positioning."""
    return [
        _finding(
            DefectKind.SCROLL_BUTTON_ISSUE,
            match.group(0),
            "Ensure proper fixed positioning: bottom: 1rem; right: 1rem; z-index: 40;",
        )
        for match in _scroll_buttons(html)
        if not _FIXED_POSITION.search(match.group(2))
    ]


def detect_inactive_scroll_buttons(html: Optional[str]) -> List[DefectFinding]:
    """Scroll-to-top controls with no content or icon."""
    return [
        _finding(
            DefectKind.INACTIVE_SCROLL_BUTTON,
            match.group(0),
            "Add content/icon to scroll button and ensure click functionality",
        )
        for match in _scroll_buttons(html)
        if not match.group(3).strip()
    ]


def detect_scroll_buttons_without_behavior(html: Optional[str]) -> List[DefectFinding]:
    """Scroll-to-top controls with no onclick and no script wiring in the document."""
    buttons = _scroll_buttons(html)
    if not buttons or SCROLL_BEHAVIOR_PATTERN.search(html):
        return []
    return [
        _finding(
            DefectKind.SCROLL_BUTTON_WITHOUT_BEHAVIOR,
            match.group(0),
            "Add onclick handler or addEventListener for scroll-to-top behavior",
        )
        for match in buttons
        if not _ONCLICK.search(match.group(2))
    ]


def detect_missing_scroll_to_top(html: Optional[str]) -> List[DefectFinding]:
    """Full pages (with a <body>) that offer no scroll-to-top control."""
    if not html:
        return []
    body = BODY_TAG_PATTERN.search(html)
    if not body or _scroll_buttons(html):
        return []
    return [
        _finding(
            DefectKind.MISSING_SCROLL_TO_TOP,
            html[body.start():body.start() + 40],
            "Add scroll-to-top button for better user experience on long pages",
        )
    ]


def detect_position_styling_issues(css: Optional[str]) -> List[DefectFinding]:
    """
    Positioning problems in CSS blocks and style attributes.

    - absolute/relative pinned to top: 0 or bottom: 0 should be fixed
    - fixed/absolute/sticky without z-index
    """
    if not css:
        return []

    blocks = [match.group(1) for match in get_defect_pattern("css_rule_body").regex.finditer(css)]
    blocks += [match.group(2) for match in get_defect_pattern("style_attribute").regex.finditer(css)]
    if not blocks:
        blocks = [css]

    findings = []
    for block in blocks:
        position = POSITION_DECLARATION_PATTERN.search(block)
        if not position:
            continue
        value = position.group(1).lower()

        if value in ("absolute", "relative") and EDGE_ANCHOR_PATTERN.search(block):
            findings.append(_finding(
                DefectKind.POSITION_STYLING_ISSUE,
                block.strip(),
                "Consider using position: fixed for elements at viewport edges",
            ))
        if value in ("fixed", "absolute", "sticky") and not Z_INDEX_PATTERN.search(block):
            findings.append(_finding(
                DefectKind.POSITION_STYLING_ISSUE,
                block.strip(),
                "Add z-index to ensure proper layering (e.g., z-index: 40;)",
            ))

    return findings


# =============================================================================
# REGISTRIES
# =============================================================================


@dataclass(frozen=True)
class Detector:
    """A registered check."""
    kind: DefectKind
    detect: Callable[[Any], List[DefectFinding]]
    on_fields: bool = False  # Receives the record mapping instead of its text rendering


TEXT_DETECTORS: List[Detector] = [
    Detector(DefectKind.DUPLICATE_FIELD_VALUE, detect_duplicate_field_values),
    Detector(DefectKind.INLINE_REPETITION, detect_inline_repetition),
    Detector(DefectKind.INCOMPLETE_MOBILE, detect_incomplete_mobile_numbers),
    Detector(DefectKind.MIXED_LANGUAGE, detect_mixed_language_issues),
    Detector(DefectKind.INVALID_PRICE_FORMAT, detect_invalid_price_formats),
    Detector(DefectKind.INCONSISTENT_UNITS, detect_inconsistent_units),
    Detector(DefectKind.DUPLICATE_MOBILE_BLOCK, detect_duplicate_mobile_blocks),
    Detector(DefectKind.ARABIC_FIELD_DUPLICATION, detect_arabic_field_duplication),
]

MARKUP_DETECTORS: List[Detector] = [
    Detector(DefectKind.REPEATED_HTML_BLOCK, detect_repeated_blocks),
    Detector(DefectKind.EMPTY_FIELD, detect_empty_fields),
    *TEXT_DETECTORS,
    Detector(DefectKind.MALFORMED_HTML, detect_malformed_html),
    Detector(DefectKind.PLACEHOLDER_CONTENT, detect_placeholder_content),
    Detector(DefectKind.FLOATING_HEADER, detect_floating_headers),
    Detector(DefectKind.REPEATED_PARAGRAPH, detect_same_paragraph_twice),
    Detector(DefectKind.SCROLL_BUTTON_ISSUE, detect_floating_scroll_buttons),
    Detector(DefectKind.INACTIVE_SCROLL_BUTTON, detect_inactive_scroll_buttons),
    Detector(DefectKind.SCROLL_BUTTON_WITHOUT_BEHAVIOR, detect_scroll_buttons_without_behavior),
    Detector(DefectKind.POSITION_STYLING_ISSUE, detect_position_styling_issues),
    Detector(DefectKind.MISSING_SCROLL_TO_TOP, detect_missing_scroll_to_top),
]

RECORD_DETECTORS: List[Detector] = [
    Detector(DefectKind.DUPLICATE_FIELD, detect_duplicate_fields, on_fields=True),
    Detector(DefectKind.EMPTY_VALUE, detect_empty_values, on_fields=True),
    *[detector for detector in TEXT_DETECTORS if detector.kind != DefectKind.INLINE_REPETITION],
]


def run_detectors(data: QualityInput) -> List[DefectFinding]:
    """Run every detector registered for the input's shape; scanned text is length-bounded."""
    findings = []
    if isinstance(data, Record):
        rendered = bound_input(data.as_text())
        for detector in RECORD_DETECTORS:
            findings.extend(detector.detect(data.fields if detector.on_fields else rendered))
        return findings

    registry = MARKUP_DETECTORS if isinstance(data, Markup) else TEXT_DETECTORS
    content = bound_input(data.content)
    for detector in registry:
        findings.extend(detector.detect(content))

    logger.debug(f"{type(data).__name__} scan: {len(findings)} findings")
    return findings
