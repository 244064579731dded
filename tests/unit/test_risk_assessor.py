import json
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from legalsift.analysis.assessor import RiskAssessor
from legalsift.analysis.models import AssessmentOutcome
from legalsift.completion.config import CompletionConfig
from legalsift.completion.exceptions import CompletionNetworkError
from legalsift.exceptions import EmptyTextError

_VALID_REPLY: dict[str, Any] = {
    "riskScore": 65,
    "summary": "Lease agreement",
    "keyTerms": ["termination"],
    "flaggedClauses": [
        {
            "clause": "This lease may be terminated with 30 days notice",
            "riskLevel": "medium",
            "explanation": "Short notice period",
            "suggestion": "Ask for 60 days",
        }
    ],
    "recommendations": ["Negotiate the notice period"],
    "plainLanguageExplanation": "The landlord can end the lease quickly.",
    "confidence": 80,
}

_FALLBACK_FIELDS = {
    "riskScore": 50,
    "summary": "Document analysis completed with limited results",
    "keyTerms": [],
    "flaggedClauses": [],
    "recommendations": ["Please review the document manually"],
    "plainLanguageExplanation": "Analysis completed but results may be incomplete",
    "confidence": 30,
}


def _make_assessor(reply: str, **kwargs: Any) -> tuple[RiskAssessor, MagicMock]:
    client = MagicMock()
    client.create_chat_completion.return_value = reply
    assessor = RiskAssessor(
        client=client,
        config=CompletionConfig(model="gpt-4", temperature=0.3, max_tokens=2000),
        **kwargs,
    )
    return assessor, client


class TestAssess:
    def test_returns_parsed_assessment(self) -> None:
        assessor, _ = _make_assessor(json.dumps(_VALID_REPLY))
        result = assessor.assess("This lease may be terminated with 30 days notice", "lease")
        assert result.outcome is AssessmentOutcome.PARSED
        assert result.to_dict() == _VALID_REPLY

    def test_calls_client_once_with_analysis_parameters(self) -> None:
        assessor, client = _make_assessor(json.dumps(_VALID_REPLY))
        assessor.assess("Some contract text", "contract")

        client.create_chat_completion.assert_called_once()
        kwargs = client.create_chat_completion.call_args.kwargs
        assert kwargs["model"] == "gpt-4"
        assert kwargs["temperature"] == 0.3
        assert kwargs["max_tokens"] == 2000
        assert kwargs["json_schema"]["type"] == "object"
        assert "Indian contract law" in kwargs["system_prompt"]

    def test_prompt_contains_type_text_and_language(self) -> None:
        assessor, client = _make_assessor(json.dumps(_VALID_REPLY))
        assessor.assess("Rent is due on the 5th.", "lease", "ta")

        prompt = client.create_chat_completion.call_args.kwargs["user_prompt"]
        assert "Analyze the following lease document" in prompt
        assert "Rent is due on the 5th." in prompt
        assert "explanation of the document in Tamil" in prompt

    def test_unknown_language_falls_back_to_english(self) -> None:
        assessor, client = _make_assessor(json.dumps(_VALID_REPLY))
        assessor.assess("Rent is due.", "lease", "xx")

        prompt = client.create_chat_completion.call_args.kwargs["user_prompt"]
        assert "explanation of the document in English" in prompt

    def test_strips_markdown_fences(self) -> None:
        reply = "```json\n" + json.dumps(_VALID_REPLY) + "\n```"
        assessor, _ = _make_assessor(reply)
        result = assessor.assess("text", "contract")
        assert result.outcome is AssessmentOutcome.PARSED
        assert result.risk_score == 65

    @pytest.mark.parametrize(
        "reply",
        [
            "```json " + json.dumps(_VALID_REPLY) + "```",
            "```" + json.dumps(_VALID_REPLY) + "```",
        ],
    )
    def test_strips_single_line_fences(self, reply: str) -> None:
        assessor, _ = _make_assessor(reply)
        result = assessor.assess("text", "contract")
        assert result.outcome is AssessmentOutcome.PARSED
        assert result.to_dict() == _VALID_REPLY

    def test_custom_prompt_template(self, tmp_path: Path) -> None:
        template = tmp_path / "prompt.txt"
        template.write_text("{document_type}|{document_text}|{language_name}")
        assessor, client = _make_assessor(
            json.dumps(_VALID_REPLY), prompt_template_path=template
        )
        assessor.assess("body", "agreement", "hi")

        assert client.create_chat_completion.call_args.kwargs["user_prompt"] == (
            "agreement|body|Hindi"
        )


class TestEmptyText:
    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_raises_without_calling_client(self, text: str) -> None:
        assessor, client = _make_assessor(json.dumps(_VALID_REPLY))
        with pytest.raises(EmptyTextError):
            assessor.assess(text, "contract")
        client.create_chat_completion.assert_not_called()


class TestFallback:
    @pytest.mark.parametrize(
        "reply",
        ["I cannot analyze this document.", "", "{not json", '["a", "list"]', "```\n```"],
    )
    def test_unparseable_reply_returns_fallback(self, reply: str) -> None:
        assessor, _ = _make_assessor(reply)
        result = assessor.assess("Some text", "contract")

        assert result.outcome is AssessmentOutcome.PARSE_ERROR
        assert result.is_fallback
        assert result.to_dict() == _FALLBACK_FIELDS

    def test_contract_violation_returns_fallback(self) -> None:
        reply = json.dumps({**_VALID_REPLY, "riskScore": 250})
        assessor, _ = _make_assessor(reply)
        result = assessor.assess("Some text", "contract")

        assert result.outcome is AssessmentOutcome.SCHEMA_MISMATCH
        assert result.to_dict() == _FALLBACK_FIELDS

    def test_missing_field_returns_fallback(self) -> None:
        reply = json.dumps({k: v for k, v in _VALID_REPLY.items() if k != "confidence"})
        assessor, _ = _make_assessor(reply)
        assert assessor.assess("Some text", "contract").outcome is (
            AssessmentOutcome.SCHEMA_MISMATCH
        )

    def test_fallback_is_logged_as_warning(self) -> None:
        assessor, _ = _make_assessor("not json at all")
        with patch("legalsift.analysis.assessor.Log") as mock_log:
            assessor.assess("Some text", "contract")

        mock_log.warning.assert_called_once()
        message = mock_log.warning.call_args.args[0]
        assert "parse_error" in message
        assert "gpt-4" in message

    def test_parsed_reply_is_not_logged_as_warning(self) -> None:
        assessor, _ = _make_assessor(json.dumps(_VALID_REPLY))
        with patch("legalsift.analysis.assessor.Log") as mock_log:
            assessor.assess("Some text", "contract")
        mock_log.warning.assert_not_called()


class TestUpstreamFailure:
    def test_client_error_propagates(self) -> None:
        assessor, client = _make_assessor("")
        client.create_chat_completion.side_effect = CompletionNetworkError("timeout")

        with pytest.raises(CompletionNetworkError):
            assessor.assess("Some text", "contract")
