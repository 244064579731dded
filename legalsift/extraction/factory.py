from legalsift.config.settings import Settings
from legalsift.extraction.base import BaseFormatExtractor
from legalsift.extraction.pdfplumber_adapter import PdfPlumberAdapter
from legalsift.extraction.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Creates the PDF adapter selected by settings."""

    ADAPTERS: dict[str, type[BaseFormatExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseFormatExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
