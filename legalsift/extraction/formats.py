"""Supported upload formats and their resolution from MIME type / filename."""

from pathlib import PurePath

from legalsift.exceptions import UnsupportedFormatError

PDF = "pdf"
DOCX = "docx"
DOC = "doc"
TXT = "txt"

SUPPORTED_FORMATS = frozenset({PDF, DOCX, DOC, TXT})

_MIME_FORMATS = {
    "application/pdf": PDF,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": DOCX,
    "application/msword": DOC,
    "text/plain": TXT,
}


def normalize_format(declared_format: str) -> str:
    """Return the canonical lowercase format or raise UnsupportedFormatError."""
    fmt = declared_format.strip().lower().lstrip(".")
    if fmt not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(
            f"Unsupported file format '{declared_format}'. "
            f"Choose from: {sorted(SUPPORTED_FORMATS)}"
        )
    return fmt


def resolve_format(mime_type: str | None, filename: str | None) -> str:
    """Work out the file format from the MIME type, then the file extension.

    Raises:
        UnsupportedFormatError: if neither points at a supported format.
    """
    if mime_type:
        base_type = mime_type.split(";", 1)[0].strip().lower()
        fmt = _MIME_FORMATS.get(base_type)
        if fmt is not None:
            return fmt
    suffix = PurePath(filename or "").suffix
    if suffix:
        return normalize_format(suffix)
    raise UnsupportedFormatError(
        f"Cannot determine file format from mime type {mime_type!r} "
        f"and filename {filename!r}"
    )
