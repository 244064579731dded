import pymupdf

from legalsift.extraction.base import BaseFormatExtractor
from legalsift.extraction.exceptions import ExtractionError


class PyMuPdfAdapter(BaseFormatExtractor):
    """Extracts PDF text page by page with PyMuPDF."""

    def extract(self, content: bytes) -> str:
        try:
            with pymupdf.open(stream=content, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
        except Exception as exc:
            raise ExtractionError(f"pymupdf could not read PDF: {exc}") from exc
        return "\n".join(pages).strip()
