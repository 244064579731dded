from abc import ABC, abstractmethod


class BaseCompletionClient(ABC):
    """Contract for provider-specific chat completion clients."""

    @abstractmethod
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
        """Send one chat request and return the reply as plain text.

        Args:
            model: Provider model name.
            temperature: Sampling temperature.
            max_tokens: Upper bound on generated tokens.
            system_prompt: System message content.
            user_prompt: User message content.
            json_schema: Optional JSON schema the reply should follow. Adapters
                that support structured output enforce it; others ignore it.

        Raises:
            UpstreamFailureError: if the provider call fails.
        """
