"""AI-powered legal risk assessment of extracted document text."""

import json
import re
from pathlib import Path

from legalsift.analysis.models import AssessmentOutcome, RiskAssessment, fallback_assessment
from legalsift.analysis.prompt_loader import load_json_schema, load_prompt_template
from legalsift.analysis.validator import validate_and_build
from legalsift.completion.client_base import BaseCompletionClient
from legalsift.completion.config import CompletionConfig
from legalsift.exceptions import EmptyTextError, MalformedModelOutputError
from legalsift.languages import language_name
from legalsift.logging.logger import Log

_DEFAULT_SYSTEM_PROMPT_PATH = Path(__file__).parent / "prompts" / "risk_assessment_system.txt"
# opening fence with an optional language tag, e.g. "```json"
_FENCE_OPEN = re.compile(r"^```[A-Za-z0-9_-]*")


class RiskAssessor:
    """Asks the completion service for a structured risk assessment.

    A reply that is not valid JSON, or JSON that breaks the contract, never
    surfaces as an error: the caller gets the fixed fallback assessment and a
    warning is logged with the outcome. Upstream failures propagate.
    """

    def __init__(
        self,
        *,
        client: BaseCompletionClient,
        config: CompletionConfig,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str | None = None,
    ) -> None:
        self._client = client
        self._config = config
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._json_schema = load_json_schema(json_schema_path)
        self._json_schema_dict = json.loads(self._json_schema)
        if system_prompt is None:
            system_prompt = _DEFAULT_SYSTEM_PROMPT_PATH.read_text(encoding="utf-8").strip()
        self._system_prompt = system_prompt

    def assess(self, text: str, document_type: str, language: str = "en") -> RiskAssessment:
        if not text.strip():
            raise EmptyTextError("Document text not available for analysis")

        prompt = self._build_prompt(text, document_type, language)
        Log.debug(f"Risk assessment prompt:\n{prompt}")

        raw_response = self._client.create_chat_completion(
            model=self._config.model,
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            json_schema=self._json_schema_dict,
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        try:
            parsed = self._parse_json(raw_response)
        except MalformedModelOutputError as exc:
            return self._fallback(AssessmentOutcome.PARSE_ERROR, exc)
        try:
            result = validate_and_build(parsed)
        except MalformedModelOutputError as exc:
            return self._fallback(AssessmentOutcome.SCHEMA_MISMATCH, exc)

        Log.info(
            f"Risk assessment complete: score {result.risk_score}, "
            f"{len(result.flagged_clauses)} flagged clauses"
        )
        return result

    def _build_prompt(self, text: str, document_type: str, language: str) -> str:
        return self._prompt_template.format(
            document_type=document_type,
            document_text=text,
            language_name=language_name(language),
            json_schema=self._json_schema,
        )

    def _fallback(
        self, outcome: AssessmentOutcome, exc: MalformedModelOutputError
    ) -> RiskAssessment:
        Log.warning(
            f"Risk assessment fell back to default result ({outcome.value}) "
            f"for model {self._config.model}: {exc}"
        )
        return fallback_assessment(outcome)

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = _FENCE_OPEN.sub("", raw.strip(), count=1)
        if cleaned.endswith("```"):
            cleaned = cleaned[:-3]
        cleaned = cleaned.strip()

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise MalformedModelOutputError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise MalformedModelOutputError("JSON response must be an object")
        return parsed
