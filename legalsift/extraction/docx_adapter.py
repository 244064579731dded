import io

from docx import Document
from docx.opc.exceptions import PackageNotFoundError

from legalsift.extraction.base import BaseFormatExtractor
from legalsift.extraction.exceptions import ExtractionError


class DocxAdapter(BaseFormatExtractor):
    """Extracts DOCX body paragraphs, then table cells, in document order."""

    def extract(self, content: bytes) -> str:
        try:
            document = Document(io.BytesIO(content))
        except PackageNotFoundError as exc:
            raise ExtractionError(
                "Invalid DOCX file: not a valid Office Open XML package"
            ) from exc
        except Exception as exc:
            raise ExtractionError(f"Failed to read DOCX file: {exc}") from exc

        blocks = [p.text for p in document.paragraphs if p.text.strip()]
        for table in document.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    blocks.append("\t".join(cells))
        return "\n".join(blocks).strip()
