class ExtractionError(Exception):
    """Raised by a format adapter when the file cannot be parsed."""
