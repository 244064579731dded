from legalsift.extraction.base import BaseFormatExtractor


class PlainTextAdapter(BaseFormatExtractor):
    """Decodes bytes as UTF-8, substituting U+FFFD for invalid sequences.

    Also used for legacy binary ``.doc`` files, which yields readable text
    only for the ASCII runs embedded in the file.
    """

    def extract(self, content: bytes) -> str:
        return content.decode("utf-8", errors="replace").strip()
