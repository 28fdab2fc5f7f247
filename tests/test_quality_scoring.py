"""
Test Suite for Quality Scoring

Tests the per-kind penalty model:
- Score starts at 100, one penalty per distinct defect kind
- Clamped to [0, 100]
- Status tiers: Excellent >= 90, Good >= 75, Fair >= 60, Poor below
- Input shape dispatch and invalid-shape errors
"""

import pytest

from aqar.quality import (
    PENALTIES,
    DefectFinding,
    DefectKind,
    InvalidInputError,
    Markup,
    QualityScorer,
    QualityStatus,
    Record,
    Text,
    analyze,
    quick_analyze,
)


class TestScenarios:
    """End-to-end quality analysis."""

    def test_duplicate_field_record(self, duplicate_field_record):
        report = analyze(duplicate_field_record)

        assert [f.kind for f in report.findings] == [DefectKind.DUPLICATE_FIELD]
        assert report.score == 80
        assert report.status == QualityStatus.GOOD

    def test_repeated_price_paragraph(self, repeated_price_html):
        report = analyze(repeated_price_html)

        assert set(report.kinds) == {
            DefectKind.DUPLICATE_FIELD_VALUE,
            DefectKind.REPEATED_PARAGRAPH,
            DefectKind.INVALID_PRICE_FORMAT,
        }
        assert report.score == 100 - 15 - 8 - 12
        assert report.status == QualityStatus.FAIR

    def test_incomplete_mobile_text(self):
        report = analyze(Text("+20 12 345"))

        assert report.kinds == [DefectKind.INCOMPLETE_MOBILE]
        assert report.score == 90
        assert report.status == QualityStatus.EXCELLENT

    def test_clean_page(self, clean_page):
        report = analyze(clean_page)

        assert report.findings == []
        assert report.score == 100
        assert report.suggestions == []

    def test_empty_string_is_clean(self):
        assert analyze("").score == 100


class TestPenaltyModel:
    """Test per-kind scoring."""

    @pytest.fixture
    def scorer(self):
        return QualityScorer()

    def test_penalty_table_covers_every_kind(self):
        assert set(PENALTIES) == set(DefectKind)

    def test_extra_occurrence_does_not_change_score(self):
        once = analyze(Text("Beautiful beautiful villa"))
        twice = analyze(Text("Beautiful beautiful villa villa"))

        assert len(twice.findings) > len(once.findings)
        assert once.score == twice.score

    def test_score_never_increases_with_more_kinds(self, scorer):
        findings = []
        previous = scorer.score(findings)
        for kind in DefectKind:
            findings.append(DefectFinding(kind, "x", "fix"))
            current = scorer.score(findings)
            assert current <= previous
            previous = current

    def test_score_clamped_at_zero(self, scorer):
        findings = [DefectFinding(kind, "x", "fix") for kind in DefectKind]

        assert scorer.score(findings) == 0

    def test_penalty_override(self, duplicate_field_record):
        scorer = QualityScorer(penalties={DefectKind.DUPLICATE_FIELD: 50})

        assert scorer.analyze(duplicate_field_record).score == 50
        assert analyze(duplicate_field_record).score == 80

    def test_one_suggestion_per_kind(self):
        report = analyze(Text("Price: ABC, Price: ABC, price: XYZ"))

        assert len(report.suggestions) == len(set(report.suggestions)) == len(report.kinds)

    @pytest.mark.parametrize("score,status", [
        (100, QualityStatus.EXCELLENT),
        (90, QualityStatus.EXCELLENT),
        (89, QualityStatus.GOOD),
        (75, QualityStatus.GOOD),
        (74, QualityStatus.FAIR),
        (60, QualityStatus.FAIR),
        (59, QualityStatus.POOR),
        (0, QualityStatus.POOR),
    ])
    def test_status_tiers(self, score, status):
        assert QualityStatus.from_score(score) == status


class TestInputShapes:
    """Test dispatch on input shape."""

    def test_raw_string_is_markup(self):
        """Raw strings get markup checks such as malformed HTML."""
        assert DefectKind.MALFORMED_HTML in analyze("<div><p>x</div>").kinds

    def test_text_skips_markup_checks(self):
        assert analyze(Text("<div><p>x</div>")).kinds == []

    def test_explicit_markup(self):
        assert analyze(Markup("<p>a</p><p>a</p>")).kinds == [DefectKind.REPEATED_PARAGRAPH]

    def test_record_values_are_scanned(self):
        report = analyze(Record({"title": "Villa", "mobile": "0101234"}))

        assert report.kinds == [DefectKind.INCOMPLETE_MOBILE]

    def test_empty_record_values(self):
        report = analyze({"title": "Villa", "price": None})

        assert report.kinds == [DefectKind.EMPTY_VALUE]
        assert report.score == 90

    @pytest.mark.parametrize("value", [None, 42, 3.5, ["a", "b"], object()])
    def test_invalid_shape_raises(self, value):
        with pytest.raises(InvalidInputError):
            analyze(value)

    def test_invalid_shape_is_type_error(self):
        with pytest.raises(TypeError):
            analyze(None)


class TestReportOutput:
    """Test report serialisation helpers."""

    def test_findings_by_kind(self, repeated_price_html):
        grouped = analyze(repeated_price_html).findings_by_kind()

        assert len(grouped[DefectKind.INVALID_PRICE_FORMAT]) == 2
        assert len(grouped[DefectKind.REPEATED_PARAGRAPH]) == 1

    def test_to_dict(self, repeated_price_html):
        data = analyze(repeated_price_html).to_dict()

        assert data["score"] == 65
        assert data["status"] == "Fair"
        assert data["by_kind"]["invalid-price-format"] == 2
        assert all(set(f) == {"kind", "evidence", "suggestion"} for f in data["findings"])

    def test_quick_analyze(self, duplicate_field_record):
        score, status, suggestions = quick_analyze(duplicate_field_record)

        assert score == 80
        assert status == "Good"
        assert suggestions == ["Remove duplicate fields"]

    def test_oversized_input_is_truncated(self, monkeypatch, reset_settings, caplog):
        monkeypatch.setenv("MAX_INPUT_LENGTH", "50")

        report = analyze(Text("x " * 100 + "Price: ABC"))

        assert report.score == 100
        assert "truncated" in caplog.text

    def test_oversized_record_is_truncated(self, monkeypatch, reset_settings, caplog):
        monkeypatch.setenv("MAX_INPUT_LENGTH", "50")
        record = {"title": "Villa", "notes": "x " * 100 + "Price: ABC"}

        report = analyze(record)

        assert report.score == 100
        assert "truncated" in caplog.text

    def test_record_within_bound_is_fully_scanned(self):
        record = {"title": "Villa", "notes": "x " * 100 + "Price: ABC"}

        assert DefectKind.INVALID_PRICE_FORMAT in analyze(record).kinds
