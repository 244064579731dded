from legalsift.extraction.base import BaseFormatExtractor
from legalsift.extraction.docx_adapter import DocxAdapter
from legalsift.extraction.exceptions import ExtractionError
from legalsift.extraction.formats import DOC, DOCX, PDF, TXT, normalize_format
from legalsift.extraction.pdfplumber_adapter import PdfPlumberAdapter
from legalsift.extraction.plain_text_adapter import PlainTextAdapter
from legalsift.logging.logger import Log


class TextExtractor:
    """Turns uploaded file bytes into plain text, dispatching on declared format.

    Parsing failures degrade to an empty string so that an upload is never
    aborted because its text could not be read. An unknown format is a caller
    error and raises UnsupportedFormatError.
    """

    def __init__(
        self,
        pdf_extractor: BaseFormatExtractor | None = None,
        docx_extractor: BaseFormatExtractor | None = None,
    ) -> None:
        plain = PlainTextAdapter()
        self._adapters: dict[str, BaseFormatExtractor] = {
            PDF: pdf_extractor or PdfPlumberAdapter(),
            DOCX: docx_extractor or DocxAdapter(),
            DOC: plain,
            TXT: plain,
        }

    def extract(self, content: bytes, declared_format: str) -> str:
        fmt = normalize_format(declared_format)
        if fmt == DOC:
            Log.debug("Legacy .doc file decoded as UTF-8; text may contain binary noise")
        try:
            text = self._adapters[fmt].extract(content)
        except ExtractionError as exc:
            Log.warning(f"Text extraction failed for {fmt} file: {exc}")
            return ""
        return text.strip()
