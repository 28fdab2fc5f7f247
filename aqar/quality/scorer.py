"""
Quality Scorer

Turns defect findings into a 0-100 quality score with a status tier and one
remediation suggestion per defect kind.

Scoring:
- Start at 100
- Subtract a fixed penalty once per distinct kind present (not per occurrence)
- Clamp to [0, 100]
- Excellent >= 90, Good >= 75, Fair >= 60, Poor below
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from .detectors import run_detectors
from .inputs import coerce_input
from .models import DefectFinding, DefectKind, QualityReport, QualityStatus

logger = logging.getLogger(__name__)


# =============================================================================
# PENALTY TABLE
# =============================================================================

PENALTIES: Dict[DefectKind, int] = {
    DefectKind.DUPLICATE_FIELD: 20,
    DefectKind.EMPTY_VALUE: 10,
    DefectKind.REPEATED_HTML_BLOCK: 15,
    DefectKind.EMPTY_FIELD: 10,
    DefectKind.INLINE_REPETITION: 5,
    DefectKind.DUPLICATE_FIELD_VALUE: 15,
    DefectKind.MALFORMED_HTML: 20,
    DefectKind.INCOMPLETE_MOBILE: 10,
    DefectKind.MIXED_LANGUAGE: 8,
    DefectKind.INVALID_PRICE_FORMAT: 12,
    DefectKind.INCONSISTENT_UNITS: 5,
    DefectKind.PLACEHOLDER_CONTENT: 15,
    DefectKind.FLOATING_HEADER: 8,
    DefectKind.DUPLICATE_MOBILE_BLOCK: 12,
    DefectKind.ARABIC_FIELD_DUPLICATION: 10,
    DefectKind.REPEATED_PARAGRAPH: 8,
    DefectKind.SCROLL_BUTTON_ISSUE: 5,
    DefectKind.INACTIVE_SCROLL_BUTTON: 10,
    DefectKind.SCROLL_BUTTON_WITHOUT_BEHAVIOR: 12,
    DefectKind.POSITION_STYLING_ISSUE: 8,
    DefectKind.MISSING_SCROLL_TO_TOP: 6,
}

# Report-level remediation, one line per kind present
SUGGESTIONS: Dict[DefectKind, str] = {
    DefectKind.DUPLICATE_FIELD: "Remove duplicate fields",
    DefectKind.EMPTY_VALUE: "Fill empty fields",
    DefectKind.REPEATED_HTML_BLOCK: "Remove repeated HTML blocks",
    DefectKind.EMPTY_FIELD: "Remove or fill empty HTML elements",
    DefectKind.INLINE_REPETITION: "Fix repeated words in text",
    DefectKind.DUPLICATE_FIELD_VALUE: "Remove duplicate field values",
    DefectKind.MALFORMED_HTML: "Fix malformed HTML tags",
    DefectKind.INCOMPLETE_MOBILE: "Complete or remove invalid mobile numbers",
    DefectKind.MIXED_LANGUAGE: "Fix mixed language text issues",
    DefectKind.INVALID_PRICE_FORMAT: "Use proper numeric price formats",
    DefectKind.INCONSISTENT_UNITS: "Use consistent unit formats",
    DefectKind.PLACEHOLDER_CONTENT: "Replace placeholder content with actual data",
    DefectKind.FLOATING_HEADER: "Fix header positioning for better UX",
    DefectKind.DUPLICATE_MOBILE_BLOCK: "Remove duplicate mobile number blocks",
    DefectKind.ARABIC_FIELD_DUPLICATION: "Remove Arabic text field duplication",
    DefectKind.REPEATED_PARAGRAPH: "Remove repeated paragraph content",
    DefectKind.SCROLL_BUTTON_ISSUE: "Optimize floating scroll button styling and positioning",
    DefectKind.INACTIVE_SCROLL_BUTTON: "Add content and functionality to empty scroll buttons",
    DefectKind.SCROLL_BUTTON_WITHOUT_BEHAVIOR: "Add JavaScript functionality to scroll-to-top buttons",
    DefectKind.POSITION_STYLING_ISSUE: "Fix position styling issues (use fixed positioning, add z-index)",
    DefectKind.MISSING_SCROLL_TO_TOP: "Add scroll-to-top button for better user experience",
}


class QualityScorer:
    """
    Scores text, markup and records for data quality.

    Usage:
        scorer = QualityScorer()
        report = scorer.analyze({"title": "Villa", "title_duplicate": "Villa"})
        print(report.score, report.status.value)  # 80 Good

    Penalties can be overridden per instance:
        strict = QualityScorer(penalties={DefectKind.MIXED_LANGUAGE: 20})
    """

    def __init__(self, penalties: Optional[Dict[DefectKind, int]] = None):
        self.penalties = dict(PENALTIES)
        if penalties:
            self.penalties.update(penalties)

    def detect(self, data: Any) -> List[DefectFinding]:
        """
        Run every detector that applies to the input's shape.

        Raises:
            InvalidInputError: data is neither text nor a key/value mapping
        """
        return run_detectors(coerce_input(data))

    def score(self, findings: List[DefectFinding]) -> int:
        """100 minus one penalty per distinct kind, clamped to [0, 100]."""
        kinds = {finding.kind for finding in findings}
        total = sum(self.penalties.get(kind, 0) for kind in kinds)
        return max(0, min(100, 100 - total))

    def get_suggestions(self, findings: List[DefectFinding]) -> List[str]:
        """One suggestion per kind present, in first-seen order."""
        kinds = dict.fromkeys(finding.kind for finding in findings)
        return [SUGGESTIONS[kind] for kind in kinds]

    def analyze(self, data: Any) -> QualityReport:
        """
        Analyze one input.

        Args:
            data: Text, Markup or Record, or a raw str (treated as markup) or mapping

        Returns:
            QualityReport with findings, score, status and suggestions

        Raises:
            InvalidInputError: data is neither text nor a key/value mapping
        """
        findings = self.detect(data)
        score = self.score(findings)
        report = QualityReport(
            findings=findings,
            score=score,
            status=QualityStatus.from_score(score),
            suggestions=self.get_suggestions(findings),
        )

        if findings:
            logger.info(
                f"Quality analysis: score {score} ({report.status.value}), "
                f"{len(findings)} findings across {len(report.kinds)} kinds"
            )
        return report


_default_scorer = QualityScorer()


def analyze(data: Any) -> QualityReport:
    """Analyze one input with the default penalty table."""
    return _default_scorer.analyze(data)


def quick_analyze(data: Any) -> Tuple[int, str, List[str]]:
    """
    Quick utility function for quality analysis.

    Args:
        data: Text, markup or record to analyze

    Returns:
        Tuple of (score, status, suggestions)
    """
    report = _default_scorer.analyze(data)
    return report.score, report.status.value, report.suggestions
