from typing import ClassVar


class LegalSiftError(Exception):
    """Base class for every error surfaced by the document pipeline."""

    kind: ClassVar[str] = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "message": self.message}


class UnsupportedFormatError(LegalSiftError):
    """Raised when a file format is not one the extractor understands."""

    kind = "unsupported_format"


class EmptyTextError(LegalSiftError):
    """Raised when an AI operation is requested for a document without text."""

    kind = "empty_text"


class DocumentNotFoundError(LegalSiftError):
    """Raised when a document id is unknown or the document was soft-deleted."""

    kind = "not_found"


class NotAnalyzedError(LegalSiftError):
    """Raised when a stored analysis is requested before one was computed."""

    kind = "not_analyzed"


class InvalidInputError(LegalSiftError):
    """Raised when a request carries a value outside its allowed set."""

    kind = "invalid_input"


class InvalidUploadError(InvalidInputError):
    """Raised when upload metadata or the file itself is rejected."""

    kind = "invalid_upload"


class UpstreamFailureError(LegalSiftError):
    """Raised when the completion service call itself fails."""

    kind = "upstream_failure"


class MalformedModelOutputError(LegalSiftError):
    """Raised when a model reply is not the JSON shape we asked for.

    Never surfaced on the risk assessment path: the assessor turns it into
    the fallback result.
    """

    kind = "malformed_model_output"
