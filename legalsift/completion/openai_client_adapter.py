import httpx
import openai

from legalsift.completion.client_base import BaseCompletionClient
from legalsift.completion.exceptions import CompletionError, CompletionNetworkError


class OpenAIClientAdapter(BaseCompletionClient):
    """Completion client for the OpenAI chat API and compatible providers.

    A JSON schema is sent as a strict ``response_format`` only when
    ``structured_output`` is on; models such as gpt-4 reject it, and the
    prompt already describes the expected JSON.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        structured_output: bool = False,
    ) -> None:
        self._structured_output = structured_output
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

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
        request: dict[str, object] = {
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }
        if json_schema is not None and self._structured_output:
            request["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": "risk_assessment",
                    "strict": True,
                    "schema": json_schema,
                },
            }
        try:
            response = self._client.chat.completions.create(**request)  # type: ignore[call-overload]
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise CompletionNetworkError(f"Completion provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise CompletionNetworkError(f"Completion provider API error: {exc}") from exc

        if not response.choices:
            raise CompletionError("Completion provider returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise CompletionError("Completion provider returned an empty response")
        return content
