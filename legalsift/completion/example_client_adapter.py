"""Offline completion client.

Returns canned replies without any network call. Handy for local runs of the
CLI and as a template for wiring a new provider into CompletionClientFactory.
"""

import json
from typing import ClassVar

from legalsift.completion.client_base import BaseCompletionClient


class ExampleClientAdapter(BaseCompletionClient):
    """Answers JSON requests with a fixed assessment and text requests with a fixed sentence."""

    DEFAULT_ASSESSMENT: ClassVar[dict[str, object]] = {
        "riskScore": 0,
        "summary": "Example analysis",
        "keyTerms": [],
        "flaggedClauses": [],
        "recommendations": [],
        "plainLanguageExplanation": "This is an example analysis produced offline.",
        "confidence": 100,
    }
    DEFAULT_TEXT: ClassVar[str] = "Example response produced offline."

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object] | None = None,
    ) -> str:
        _ = model, temperature, max_tokens, system_prompt, user_prompt
        if json_schema is not None:
            return json.dumps(self.DEFAULT_ASSESSMENT)
        return self.DEFAULT_TEXT
