"""
Quality Data Models

Findings, reports and cleaning results produced by data-quality analysis.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Union

from ..patterns import DefectKind

__all__ = [
    "DefectKind",
    "DefectFinding",
    "QualityStatus",
    "QualityReport",
    "CleaningResult",
]


class QualityStatus(str, Enum):
    """Status tier derived from the quality score."""
    EXCELLENT = "Excellent"  # >= 90
    GOOD = "Good"            # >= 75
    FAIR = "Fair"            # >= 60
    POOR = "Poor"            # < 60

    @classmethod
    def from_score(cls, score: int) -> "QualityStatus":
        if score >= 90:
            return cls.EXCELLENT
        if score >= 75:
            return cls.GOOD
        if score >= 60:
            return cls.FAIR
        return cls.POOR


@dataclass(frozen=True)
class DefectFinding:
    """One detected data-quality issue."""
    kind: DefectKind
    evidence: str  # Bounded snippet of the offending content
    suggestion: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "kind": self.kind.value,
            "evidence": self.evidence,
            "suggestion": self.suggestion,
        }


@dataclass
class QualityReport:
    """Aggregate of findings for one input."""
    findings: List[DefectFinding]
    score: int
    status: QualityStatus
    suggestions: List[str] = field(default_factory=list)

    @property
    def kinds(self) -> List[DefectKind]:
        """Distinct kinds present, in first-seen order."""
        return list(dict.fromkeys(finding.kind for finding in self.findings))

    def findings_by_kind(self) -> Dict[DefectKind, List[DefectFinding]]:
        """Group findings by kind for reporting."""
        grouped: Dict[DefectKind, List[DefectFinding]] = {}
        for finding in self.findings:
            grouped.setdefault(finding.kind, []).append(finding)
        return grouped

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for the QA dashboard."""
        return {
            "score": self.score,
            "status": self.status.value,
            "total_findings": len(self.findings),
            "by_kind": {
                kind.value: len(findings)
                for kind, findings in self.findings_by_kind().items()
            },
            "findings": [finding.to_dict() for finding in self.findings],
            "suggestions": self.suggestions,
        }


@dataclass
class CleaningResult:
    """Before/after outcome of one auto-clean pass."""
    original_score: int
    final_score: int
    actions_performed: List[str]
    cleaned_content: Union[str, Dict[str, Any]]

    @property
    def improvement(self) -> int:
        """Final minus original score; zero or negative when cleaning did not help."""
        return self.final_score - self.original_score

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original_score": self.original_score,
            "final_score": self.final_score,
            "improvement": self.improvement,
            "actions_performed": self.actions_performed,
            "cleaned_content": self.cleaned_content,
        }
