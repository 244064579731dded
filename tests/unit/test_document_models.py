from datetime import datetime, timezone

from legalsift.analysis.models import AssessmentOutcome, FlaggedClause, RiskAssessment
from legalsift.documents.models import (
    DocumentAnalysis,
    DocumentPage,
    DocumentRecord,
    SharedAccess,
    UploadedFile,
)

_ANALYZED_AT = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _make_assessment(**overrides: object) -> RiskAssessment:
    fields: dict[str, object] = {
        "risk_score": 40,
        "summary": "Loan document",
        "key_terms": ["interest"],
        "flagged_clauses": [
            FlaggedClause(
                clause_text="Interest compounds daily",
                risk_level="critical",
                explanation="Very high effective rate",
                suggestion="Ask for monthly compounding",
            )
        ],
        "recommendations": ["Compare offers"],
        "plain_language_explanation": "The loan gets expensive quickly.",
        "confidence": 75,
    }
    fields.update(overrides)
    return RiskAssessment(**fields)  # type: ignore[arg-type]


def _make_record(**overrides: object) -> DocumentRecord:
    fields: dict[str, object] = {
        "id": "7d9f1f6e-7f3c-4d5e-9a53-2f1c6f1b9a10",
        "owner_id": "user-1",
        "document_type": "loan_document",
        "file_name": "loan.pdf",
        "file_format": "pdf",
        "file_size": 1024,
        "storage_url": "file:///files/user-1/a.pdf",
        "storage_id": "user-1/a.pdf",
    }
    fields.update(overrides)
    return DocumentRecord(**fields)  # type: ignore[arg-type]


class TestUploadedFile:
    def test_size_is_content_length(self) -> None:
        assert UploadedFile(content=b"12345", filename="a.txt").size == 5


class TestSharedAccess:
    def test_payload_round_trip(self) -> None:
        access = SharedAccess(user_id="lawyer-9", permission="comment", shared_at=_ANALYZED_AT)
        payload = access.to_payload()
        assert payload == {
            "user_id": "lawyer-9",
            "permission": "comment",
            "shared_at": "2026-03-01T12:00:00+00:00",
        }
        assert SharedAccess.from_payload(payload) == access


class TestDocumentAnalysis:
    def test_to_dict_merges_assessment_fields(self) -> None:
        analysis = DocumentAnalysis(
            assessment=_make_assessment(), analyzed_at=_ANALYZED_AT, language="hi"
        )
        result = analysis.to_dict()
        assert result["isAnalyzed"] is True
        assert result["analyzedAt"] == "2026-03-01T12:00:00+00:00"
        assert result["language"] == "hi"
        assert result["riskScore"] == 40
        assert result["flaggedClauses"][0]["riskLevel"] == "critical"
        assert "outcome" not in result

    def test_payload_keeps_outcome(self) -> None:
        assessment = _make_assessment(outcome=AssessmentOutcome.SCHEMA_MISMATCH)
        analysis = DocumentAnalysis(assessment=assessment, analyzed_at=_ANALYZED_AT)
        assert analysis.to_payload()["outcome"] == "schema_mismatch"

    def test_payload_round_trip(self) -> None:
        analysis = DocumentAnalysis(
            assessment=_make_assessment(outcome=AssessmentOutcome.PARSE_ERROR),
            analyzed_at=_ANALYZED_AT,
            language="kn",
        )
        assert DocumentAnalysis.from_payload(analysis.to_payload()) == analysis

    def test_payload_without_outcome_reads_as_parsed(self) -> None:
        payload = DocumentAnalysis(
            assessment=_make_assessment(), analyzed_at=_ANALYZED_AT
        ).to_dict()
        restored = DocumentAnalysis.from_payload(payload)
        assert restored.assessment.outcome is AssessmentOutcome.PARSED


class TestDocumentRecord:
    def test_unanalyzed_record(self) -> None:
        record = _make_record()
        assert not record.is_analyzed
        assert record.to_dict()["aiAnalysis"] == {"isAnalyzed": False}

    def test_analyzed_record(self) -> None:
        record = _make_record(
            analysis=DocumentAnalysis(assessment=_make_assessment(), analyzed_at=_ANALYZED_AT)
        )
        assert record.is_analyzed
        assert record.to_dict()["aiAnalysis"]["isAnalyzed"] is True

    def test_to_dict_uses_camel_case_keys(self) -> None:
        result = _make_record(case_id="case-3", tags=["bank"]).to_dict()
        assert result["ownerId"] == "user-1"
        assert result["caseId"] == "case-3"
        assert result["fileType"] == "pdf"
        assert result["fileUrl"] == "file:///files/user-1/a.pdf"
        assert result["tags"] == ["bank"]
        assert result["isActive"] is True
        assert result["createdAt"] is None


class TestDocumentPage:
    def test_pages_rounds_up(self) -> None:
        assert DocumentPage(documents=[], page=1, limit=10, total=21).pages == 3

    def test_pages_for_empty_result(self) -> None:
        assert DocumentPage(documents=[], page=1, limit=10, total=0).pages == 0

    def test_pages_exact_multiple(self) -> None:
        assert DocumentPage(documents=[], page=2, limit=5, total=10).pages == 2
