import io

import pdfplumber

from legalsift.extraction.base import BaseFormatExtractor
from legalsift.extraction.exceptions import ExtractionError


class PdfPlumberAdapter(BaseFormatExtractor):
    """Extracts PDF text page by page with pdfplumber."""

    def extract(self, content: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(content)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise ExtractionError(f"pdfplumber could not read PDF: {exc}") from exc
        return "\n".join(pages).strip()
