"""
Auto-Cleaner

Repairs detected defects and reports the before/after quality score.

Every repair step runs unconditionally and is a no-op when its defect is
absent. Text and markup go through the repair steps in this order:

1. Collapse repeated div/section/label blocks
2. Collapse repeated paragraphs
3. Remove later copies of repeated label: value pairs
4. Collapse repeated Arabic phrases
5. Remove later copies of the same mobile number
6. Collapse repeated words
7. Remove incomplete mobile numbers
8. Splice mixed-language text
9. Remove placeholder elements
10. Close unclosed tags, drop stray closing tags
11. Inject sticky-header CSS for floating headers
12. Remove empty elements

Records first lose duplicate fields (first occurrence kept), then each string
value goes through the same repair steps.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Tuple

from ..extraction.mobile import normalize_mobile
from ..patterns import (
    ARABIC_LETTER,
    LATIN_LETTER,
    MOBILE_MASKABLE_PATTERN,
    STICKY_HEADER_STYLE,
    get_defect_pattern,
)
from ..utils.config import get_settings
from ..utils.text import normalize_digits
from .detectors import iter_field_value_pairs, normalize_field_name, unpinned_headers
from .inputs import Record, coerce_input
from .markup import MarkupScanner
from .models import CleaningResult
from .scorer import QualityScorer

logger = logging.getLogger(__name__)

MAX_COLLAPSE_PASSES = 10

_HEAD_CLOSE = re.compile(r"</head\s*>", re.IGNORECASE)
_TRAILING_SEPARATOR = re.compile(r"[ \t]*[,;][ \t]*")
_LEADING_SEPARATOR = re.compile(r"[ \t]*[,;][ \t]*$")
_SCRIPT_BOUNDARY = [
    re.compile(f"({LATIN_LETTER})({ARABIC_LETTER})"),
    re.compile(f"({ARABIC_LETTER})({LATIN_LETTER})"),
]


# =============================================================================
# REPAIR STEPS
# =============================================================================


def _sub_until_stable(pattern: re.Pattern, replacement: str, text: str) -> str:
    """Apply a substitution until the text stops changing."""
    for _ in range(MAX_COLLAPSE_PASSES):
        updated = pattern.sub(replacement, text)
        if updated == text:
            break
        text = updated
    return text


def _remove_spans(text: str, spans: List[Tuple[int, int]]) -> str:
    if not spans:
        return text
    pieces = []
    last = 0
    for start, end in spans:
        pieces.append(text[last:start])
        last = end
    pieces.append(text[last:])
    return "".join(pieces)


def collapse_repeated_blocks(text: str) -> str:
    return _sub_until_stable(get_defect_pattern("repeated_blocks").regex, r"\1", text)


def collapse_repeated_paragraphs(text: str) -> str:
    return _sub_until_stable(get_defect_pattern("repeated_paragraph").regex, r"\1", text)


def _with_separator(text: str, start: int, end: int, floor: int) -> Tuple[int, int]:
    """Widen a removed pair to one adjoining "," or ";" separator, leading first."""
    leading = _LEADING_SEPARATOR.search(text, floor, start)
    if leading:
        return leading.start(), end
    trailing = _TRAILING_SEPARATOR.match(text, end)
    if trailing:
        return start, trailing.end()
    return start, end


def remove_duplicate_field_values(text: str) -> str:
    """Keep the first label: value pair, drop later identical ones with their separator."""
    seen = set()
    spans = []
    for match, key in iter_field_value_pairs(text):
        if key in seen:
            floor = spans[-1][1] if spans else 0
            spans.append(_with_separator(text, match.start(), match.end(), floor))
        else:
            seen.add(key)
    return _remove_spans(text, spans)


def collapse_arabic_duplication(text: str) -> str:
    return _sub_until_stable(get_defect_pattern("arabic_phrase_repeat").regex, r"\1", text)


def remove_duplicate_mobiles(text: str) -> str:
    """Keep the first occurrence of each mobile number."""
    seen = set()
    spans = []
    for match in MOBILE_MASKABLE_PATTERN.finditer(normalize_digits(text)):
        canonical = normalize_mobile(match.group(0))
        if not canonical:
            continue
        if canonical in seen:
            spans.append((match.start(), match.end()))
        else:
            seen.add(canonical)
    return _remove_spans(text, spans)


def collapse_inline_repetition(text: str) -> str:
    return get_defect_pattern("inline_repetition").regex.sub(r"\1", text)


def remove_incomplete_mobiles(text: str) -> str:
    regex = get_defect_pattern("incomplete_mobile").regex
    spans = [(match.start(), match.end()) for match in regex.finditer(normalize_digits(text))]
    return _remove_spans(text, spans)


def splice_mixed_language(text: str) -> str:
    """Split mixed-script tokens, then drop lone Latin letters inside Arabic."""
    for boundary in _SCRIPT_BOUNDARY:
        text = boundary.sub(r"\1 \2", text)
    return get_defect_pattern("broken_arabic").regex.sub(r"\1 ", text)


def remove_placeholders(text: str) -> str:
    return get_defect_pattern("placeholder").regex.sub("", text)


def balance_tags(text: str) -> str:
    return MarkupScanner().balance(text)


def inject_sticky_header(text: str) -> str:
    """Add the sticky-header rule once when a header or toolbar floats."""
    if not unpinned_headers(text):
        return text
    head_close = _HEAD_CLOSE.search(text)
    if head_close:
        return text[:head_close.start()] + STICKY_HEADER_STYLE + text[head_close.start():]
    return STICKY_HEADER_STYLE + text


def remove_empty_elements(text: str) -> str:
    return _sub_until_stable(get_defect_pattern("empty_element").regex, "", text)


@dataclass(frozen=True)
class RepairStep:
    action: str  # Action log line
    repair: Callable[[str], str]


REPAIR_STEPS: List[RepairStep] = [
    RepairStep("Removed repeated HTML blocks", collapse_repeated_blocks),
    RepairStep("Removed repeated paragraph content", collapse_repeated_paragraphs),
    RepairStep("Cleaned duplicate field values", remove_duplicate_field_values),
    RepairStep("Removed Arabic field duplication", collapse_arabic_duplication),
    RepairStep("Removed duplicate mobile number blocks", remove_duplicate_mobiles),
    RepairStep("Fixed inline text repetitions", collapse_inline_repetition),
    RepairStep("Removed incomplete mobile numbers", remove_incomplete_mobiles),
    RepairStep("Fixed mixed language issues", splice_mixed_language),
    RepairStep("Removed placeholder content", remove_placeholders),
    RepairStep("Fixed malformed HTML tags", balance_tags),
    RepairStep("Fixed floating header positioning", inject_sticky_header),
    RepairStep("Removed empty HTML elements", remove_empty_elements),
]

DUPLICATE_FIELDS_ACTION = "Removed duplicate fields"


def remove_duplicate_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Keep the first field of every normalised-name group."""
    cleaned: Dict[str, Any] = {}
    seen = set()
    for key, value in fields.items():
        normalized = normalize_field_name(key)
        if normalized not in seen:
            cleaned[key] = value
            seen.add(normalized)
    return cleaned


# =============================================================================
# AUTO-CLEANER
# =============================================================================


class AutoCleaner:
    """
    Applies every repair step and measures the score change.

    Usage:
        cleaner = AutoCleaner()
        result = cleaner.clean("<p>Price: ABC123</p><p>Price: ABC123</p>")
        print(result.original_score, result.final_score)  # 65 88
    """

    def __init__(self, scorer: QualityScorer = None, log_unchanged_steps: bool = None):
        self.scorer = scorer or QualityScorer()
        if log_unchanged_steps is None:
            log_unchanged_steps = get_settings().LOG_UNCHANGED_CLEAN_STEPS
        self.log_unchanged_steps = log_unchanged_steps

    def _record_action(self, actions: List[str], action: str, changed: bool) -> None:
        if changed or self.log_unchanged_steps:
            actions.append(action)

    def _clean_text(self, text: str, actions: List[str]) -> str:
        for step in REPAIR_STEPS:
            repaired = step.repair(text)
            self._record_action(actions, step.action, repaired != text)
            text = repaired
        return text

    def _clean_record(self, fields: Mapping[str, Any], actions: List[str]) -> Dict[str, Any]:
        cleaned = remove_duplicate_fields(fields)
        self._record_action(actions, DUPLICATE_FIELDS_ACTION, len(cleaned) != len(fields))

        for step in REPAIR_STEPS:
            changed = False
            for key, value in cleaned.items():
                if isinstance(value, str):
                    repaired = step.repair(value)
                    if repaired != value:
                        cleaned[key] = repaired
                        changed = True
            self._record_action(actions, step.action, changed)

        return cleaned

    def clean(self, data: Any) -> CleaningResult:
        """
        Repair one input.

        Args:
            data: Text, Markup or Record, or a raw str (treated as markup) or mapping

        Returns:
            CleaningResult with scores, action log and cleaned content

        Raises:
            InvalidInputError: data is neither text nor a key/value mapping
        """
        shape = coerce_input(data)
        original_content = shape.fields if isinstance(shape, Record) else shape.content
        original_score = self.scorer.analyze(shape).score

        actions: List[str] = []
        try:
            if isinstance(shape, Record):
                cleaned_content = self._clean_record(shape.fields, actions)
                cleaned_shape = Record(cleaned_content)
            else:
                cleaned_content = self._clean_text(shape.content, actions)
                cleaned_shape = type(shape)(cleaned_content)
            final_score = self.scorer.analyze(cleaned_shape).score
        except Exception as e:
            logger.error(f"Auto-clean failed, returning input unchanged: {e}", exc_info=True)
            return CleaningResult(
                original_score=original_score,
                final_score=original_score,
                actions_performed=[],
                cleaned_content=original_content,
            )

        result = CleaningResult(
            original_score=original_score,
            final_score=final_score,
            actions_performed=actions,
            cleaned_content=cleaned_content,
        )
        logger.info(
            f"Auto-clean: {original_score} -> {final_score} "
            f"({result.improvement:+d}), {len(actions)} actions"
        )
        return result


def auto_clean(data: Any) -> CleaningResult:
    """Repair one input with default settings."""
    return AutoCleaner().clean(data)
