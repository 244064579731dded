SUPPORTED_LANGUAGES: dict[str, str] = {
    "en": "English",
    "hi": "Hindi",
    "bn": "Bengali",
    "te": "Telugu",
    "ta": "Tamil",
    "gu": "Gujarati",
    "kn": "Kannada",
    "ml": "Malayalam",
    "pa": "Punjabi",
    "or": "Odia",
}


def language_name(code: str) -> str:
    """Human-readable name for a language code; unknown codes map to English."""
    return SUPPORTED_LANGUAGES.get(code.strip().lower(), "English")
