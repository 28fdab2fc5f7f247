"""
Data Quality

Detects, scores and repairs data-quality defects in listing text, HTML
fragments and key/value records.

Components:
- Detectors: one check per defect kind, grouped by input shape
- QualityScorer: per-kind penalty model, 0-100 score with status tier
- AutoCleaner: ordered repair steps with before/after scores
- MarkupScanner: regex tag tokenizer behind the malformed-HTML check
- validate_property_data: listing completeness check
"""

from .models import CleaningResult, DefectFinding, DefectKind, QualityReport, QualityStatus
from .inputs import AqarError, InvalidInputError, Markup, Record, Text, coerce_input
from .markup import MarkupScanner, TagIssue
from .detectors import (
    MARKUP_DETECTORS,
    RECORD_DETECTORS,
    TEXT_DETECTORS,
    Detector,
    detect_arabic_field_duplication,
    detect_duplicate_field_values,
    detect_duplicate_fields,
    detect_duplicate_mobile_blocks,
    detect_empty_fields,
    detect_empty_values,
    detect_floating_headers,
    detect_floating_scroll_buttons,
    detect_inactive_scroll_buttons,
    detect_incomplete_mobile_numbers,
    detect_inconsistent_units,
    detect_inline_repetition,
    detect_invalid_price_formats,
    detect_malformed_html,
    detect_missing_scroll_to_top,
    detect_mixed_language_issues,
    detect_placeholder_content,
    detect_position_styling_issues,
    detect_repeated_blocks,
    detect_same_paragraph_twice,
    detect_scroll_buttons_without_behavior,
    normalize_field_name,
    run_detectors,
)
from .scorer import PENALTIES, SUGGESTIONS, QualityScorer, analyze, quick_analyze
from .cleaner import REPAIR_STEPS, AutoCleaner, auto_clean
from .validators import PropertyValidation, validate_property_data

__all__ = [
    # Models
    "CleaningResult",
    "DefectFinding",
    "DefectKind",
    "QualityReport",
    "QualityStatus",
    # Input shapes
    "AqarError",
    "InvalidInputError",
    "Markup",
    "Record",
    "Text",
    "coerce_input",
    # Markup scanning
    "MarkupScanner",
    "TagIssue",
    # Detectors
    "Detector",
    "TEXT_DETECTORS",
    "MARKUP_DETECTORS",
    "RECORD_DETECTORS",
    "run_detectors",
    "normalize_field_name",
    "detect_arabic_field_duplication",
    "detect_duplicate_field_values",
    "detect_duplicate_fields",
    "detect_duplicate_mobile_blocks",
    "detect_empty_fields",
    "detect_empty_values",
    "detect_floating_headers",
    "detect_floating_scroll_buttons",
    "detect_inactive_scroll_buttons",
    "detect_incomplete_mobile_numbers",
    "detect_inconsistent_units",
    "detect_inline_repetition",
    "detect_invalid_price_formats",
    "detect_malformed_html",
    "detect_missing_scroll_to_top",
    "detect_mixed_language_issues",
    "detect_placeholder_content",
    "detect_position_styling_issues",
    "detect_repeated_blocks",
    "detect_same_paragraph_twice",
    "detect_scroll_buttons_without_behavior",
    # Scoring
    "PENALTIES",
    "SUGGESTIONS",
    "QualityScorer",
    "analyze",
    "quick_analyze",
    # Cleaning
    "REPAIR_STEPS",
    "AutoCleaner",
    "auto_clean",
    # Validation
    "PropertyValidation",
    "validate_property_data",
]
