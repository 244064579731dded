"""Checks a parsed model reply against the risk assessment contract."""

from typing import Any

from legalsift.analysis.models import RISK_LEVELS, FlaggedClause, RiskAssessment
from legalsift.exceptions import MalformedModelOutputError

_REQUIRED_FIELDS = (
    "riskScore",
    "summary",
    "keyTerms",
    "flaggedClauses",
    "recommendations",
    "plainLanguageExplanation",
    "confidence",
)


def validate_and_build(data: dict[str, Any]) -> RiskAssessment:
    """Validate a parsed reply and build a RiskAssessment from it.

    Values are carried over as they are; nothing is clamped or rewritten.
    Keys outside the contract are ignored.

    Raises:
        MalformedModelOutputError: on any contract violation.
    """
    missing = [name for name in _REQUIRED_FIELDS if name not in data]
    if missing:
        raise MalformedModelOutputError(f"Missing required fields: {missing}")
    return RiskAssessment(
        risk_score=_score(data["riskScore"], "riskScore"),
        summary=_string(data["summary"], "summary"),
        key_terms=_string_list(data["keyTerms"], "keyTerms"),
        flagged_clauses=_flagged_clauses(data["flaggedClauses"]),
        recommendations=_string_list(data["recommendations"], "recommendations"),
        plain_language_explanation=_string(
            data["plainLanguageExplanation"], "plainLanguageExplanation"
        ),
        confidence=_score(data["confidence"], "confidence"),
    )


def _score(raw: Any, name: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise MalformedModelOutputError(f"'{name}' must be an integer")
    if isinstance(raw, float):
        if not raw.is_integer():
            raise MalformedModelOutputError(f"'{name}' must be an integer, got {raw}")
        raw = int(raw)
    if not 0 <= raw <= 100:
        raise MalformedModelOutputError(f"'{name}' must be between 0 and 100, got {raw}")
    return raw


def _string(raw: Any, name: str) -> str:
    if not isinstance(raw, str):
        raise MalformedModelOutputError(f"'{name}' must be a string")
    return raw


def _string_list(raw: Any, name: str) -> list[str]:
    if not isinstance(raw, list):
        raise MalformedModelOutputError(f"'{name}' must be a list")
    for i, item in enumerate(raw):
        if not isinstance(item, str):
            raise MalformedModelOutputError(f"'{name}[{i}]' must be a string")
    return list(raw)


def _flagged_clauses(raw: Any) -> list[FlaggedClause]:
    if not isinstance(raw, list):
        raise MalformedModelOutputError("'flaggedClauses' must be a list")
    return [_flagged_clause(item, i) for i, item in enumerate(raw)]


def _flagged_clause(raw: Any, index: int) -> FlaggedClause:
    if not isinstance(raw, dict):
        raise MalformedModelOutputError(f"Flagged clause at index {index} must be an object")
    risk_level = raw.get("riskLevel")
    if risk_level not in RISK_LEVELS:
        raise MalformedModelOutputError(
            f"Flagged clause at index {index}: 'riskLevel' must be one of "
            f"{list(RISK_LEVELS)}, got {risk_level!r}"
        )
    return FlaggedClause(
        clause_text=_string(raw.get("clause"), f"flaggedClauses[{index}].clause"),
        risk_level=risk_level,
        explanation=_string(raw.get("explanation"), f"flaggedClauses[{index}].explanation"),
        suggestion=_string(raw.get("suggestion"), f"flaggedClauses[{index}].suggestion"),
    )
