from pathlib import Path

from legalsift.completion.client_base import BaseCompletionClient
from legalsift.completion.config import CompletionConfig
from legalsift.exceptions import EmptyTextError
from legalsift.languages import language_name
from legalsift.logging.logger import Log

_PROMPT_DIR = Path(__file__).parent / "prompts"


def _load(name: str) -> str:
    return (_PROMPT_DIR / name).read_text(encoding="utf-8").strip()


class TranslationClient:
    """Free-text completions over document text: translation and summaries.

    Replies are returned verbatim and nothing is cached, so identical calls
    hit the completion service again.
    """

    def __init__(
        self,
        *,
        client: BaseCompletionClient,
        translation_config: CompletionConfig,
        summary_config: CompletionConfig,
        voice_summary_config: CompletionConfig,
    ) -> None:
        self._client = client
        self._translation_config = translation_config
        self._summary_config = summary_config
        self._voice_summary_config = voice_summary_config
        self._translate_system = _load("translate_system.txt")
        self._summary_system = _load("summary_system.txt")
        self._summary_prompt = _load("summary_prompt.txt")
        self._voice_system = _load("voice_summary_system.txt")
        self._voice_prompt = _load("voice_summary_prompt.txt")

    def translate(self, text: str, target_language: str) -> str:
        self._require_text(text, "translation")
        system_prompt = self._translate_system.format(
            language_name=language_name(target_language)
        )
        Log.debug(f"Translating {len(text)} chars to {target_language}")
        return self._complete(self._translation_config, system_prompt, text)

    def summarize(self, text: str, language: str = "en") -> str:
        self._require_text(text, "summary")
        prompt = self._summary_prompt.format(
            language_name=language_name(language),
            document_text=text,
        )
        return self._complete(self._summary_config, self._summary_system, prompt)

    def voice_summary(self, text: str, language: str = "en") -> str:
        """Short conversational summary meant to be read aloud."""
        self._require_text(text, "voice summary")
        prompt = self._voice_prompt.format(
            language_name=language_name(language),
            document_text=text,
        )
        return self._complete(self._voice_summary_config, self._voice_system, prompt)

    def _complete(self, config: CompletionConfig, system_prompt: str, user_prompt: str) -> str:
        return self._client.create_chat_completion(
            model=config.model,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            system_prompt=system_prompt,
            user_prompt=user_prompt,
        )

    @staticmethod
    def _require_text(text: str, purpose: str) -> None:
        if not text.strip():
            raise EmptyTextError(f"Document text not available for {purpose}")
