from legalsift.extraction.formats import SUPPORTED_FORMATS, resolve_format
from legalsift.extraction.text_extractor import TextExtractor

__all__ = ["SUPPORTED_FORMATS", "TextExtractor", "resolve_format"]
