from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from legalsift.analysis.models import AssessmentOutcome, FlaggedClause, RiskAssessment

DOCUMENT_TYPES = frozenset(
    {
        "contract",
        "agreement",
        "lease",
        "loan_document",
        "employment_contract",
        "property_document",
        "legal_notice",
        "court_document",
        "other",
    }
)

SHARE_PERMISSIONS = frozenset({"read", "comment", "edit"})


@dataclass(frozen=True)
class UploadedFile:
    """Raw upload handed over by the web layer. Consumed once."""

    content: bytes
    filename: str
    mime_type: str = ""

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class UploadMetadata:
    """Caller-supplied facts about an upload that has already been stored."""

    owner_id: str
    document_type: str
    storage_url: str
    storage_id: str
    case_id: str | None = None
    declared_format: str | None = None
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class SharedAccess:
    user_id: str
    permission: str
    shared_at: datetime

    def to_payload(self) -> dict[str, str]:
        return {
            "user_id": self.user_id,
            "permission": self.permission,
            "shared_at": self.shared_at.isoformat(),
        }

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "SharedAccess":
        return cls(
            user_id=str(data["user_id"]),
            permission=data["permission"],
            shared_at=datetime.fromisoformat(data["shared_at"]),
        )


@dataclass(frozen=True)
class DocumentAnalysis:
    """A completed assessment attached to a document.

    Only ever built from a full RiskAssessment, so a document either has a
    complete analysis or none at all.
    """

    assessment: RiskAssessment
    analyzed_at: datetime
    language: str = "en"

    @property
    def is_analyzed(self) -> bool:
        return True

    def to_dict(self) -> dict[str, object]:
        return {
            "isAnalyzed": self.is_analyzed,
            "analyzedAt": self.analyzed_at.isoformat(),
            "language": self.language,
            **self.assessment.to_dict(),
        }

    def to_payload(self) -> dict[str, object]:
        """Persistence shape: the public shape plus the parse outcome."""
        return {**self.to_dict(), "outcome": self.assessment.outcome.value}

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "DocumentAnalysis":
        assessment = RiskAssessment(
            risk_score=data["riskScore"],
            summary=data["summary"],
            key_terms=list(data["keyTerms"]),
            flagged_clauses=[
                FlaggedClause(
                    clause_text=c["clause"],
                    risk_level=c["riskLevel"],
                    explanation=c["explanation"],
                    suggestion=c["suggestion"],
                )
                for c in data["flaggedClauses"]
            ],
            recommendations=list(data["recommendations"]),
            plain_language_explanation=data["plainLanguageExplanation"],
            confidence=data["confidence"],
            outcome=AssessmentOutcome(data.get("outcome", AssessmentOutcome.PARSED.value)),
        )
        return cls(
            assessment=assessment,
            analyzed_at=datetime.fromisoformat(data["analyzedAt"]),
            language=data.get("language", "en"),
        )


@dataclass
class DocumentRecord:
    """Durable document entity."""

    id: str
    owner_id: str
    document_type: str
    file_name: str
    file_format: str
    file_size: int
    storage_url: str
    storage_id: str
    case_id: str | None = None
    extracted_text: str = ""
    analysis: DocumentAnalysis | None = None
    is_active: bool = True
    shared_with: list[SharedAccess] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_analyzed(self) -> bool:
        return self.analysis is not None

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "ownerId": self.owner_id,
            "caseId": self.case_id,
            "documentType": self.document_type,
            "fileName": self.file_name,
            "fileType": self.file_format,
            "fileSize": self.file_size,
            "fileUrl": self.storage_url,
            "storageId": self.storage_id,
            "extractedText": self.extracted_text,
            "aiAnalysis": self.analysis.to_dict() if self.analysis else {"isAnalyzed": False},
            "isActive": self.is_active,
            "sharedWith": [s.to_payload() for s in self.shared_with],
            "tags": list(self.tags),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class DocumentPage:
    """One page of an owner's active documents, newest first."""

    documents: list[DocumentRecord]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return -(-self.total // self.limit) if self.limit else 0
