from dataclasses import dataclass, field
from enum import Enum

RISK_LEVELS = ("low", "medium", "high", "critical")


class AssessmentOutcome(str, Enum):
    """How the model reply was turned into a RiskAssessment."""

    PARSED = "parsed"
    PARSE_ERROR = "parse_error"
    SCHEMA_MISMATCH = "schema_mismatch"


@dataclass(frozen=True)
class FlaggedClause:
    """A clause the model considers risky."""

    clause_text: str
    risk_level: str
    explanation: str
    suggestion: str

    def to_dict(self) -> dict[str, str]:
        return {
            "clause": self.clause_text,
            "riskLevel": self.risk_level,
            "explanation": self.explanation,
            "suggestion": self.suggestion,
        }


@dataclass(frozen=True)
class RiskAssessment:
    """Structured legal risk analysis of one document.

    ``confidence`` expresses trust in the parsed reply, not in the legal
    accuracy of the analysis. ``outcome`` is a diagnostic that is not part of
    the serialized payload.
    """

    risk_score: int
    summary: str
    key_terms: list[str] = field(default_factory=list)
    flagged_clauses: list[FlaggedClause] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    plain_language_explanation: str = ""
    confidence: int = 0
    outcome: AssessmentOutcome = AssessmentOutcome.PARSED

    @property
    def is_fallback(self) -> bool:
        return self.outcome is not AssessmentOutcome.PARSED

    def to_dict(self) -> dict[str, object]:
        """Render the camelCase shape the model is asked to produce."""
        return {
            "riskScore": self.risk_score,
            "summary": self.summary,
            "keyTerms": list(self.key_terms),
            "flaggedClauses": [c.to_dict() for c in self.flagged_clauses],
            "recommendations": list(self.recommendations),
            "plainLanguageExplanation": self.plain_language_explanation,
            "confidence": self.confidence,
        }


def fallback_assessment(outcome: AssessmentOutcome) -> RiskAssessment:
    """Fixed low-confidence result used when the model reply is unusable."""
    return RiskAssessment(
        risk_score=50,
        summary="Document analysis completed with limited results",
        key_terms=[],
        flagged_clauses=[],
        recommendations=["Please review the document manually"],
        plain_language_explanation="Analysis completed but results may be incomplete",
        confidence=30,
        outcome=outcome,
    )
