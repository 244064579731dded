from abc import ABC, abstractmethod


class BaseFormatExtractor(ABC):
    """Contract for per-format text extraction adapters."""

    @abstractmethod
    def extract(self, content: bytes) -> str:
        """Extract plain text from raw file bytes.

        Args:
            content: Raw file content.

        Returns:
            Extracted text, whitespace-trimmed.

        Raises:
            ExtractionError: if the file cannot be parsed.
        """
