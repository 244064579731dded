from pathlib import Path

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the risk assessment prompt template.

    Args:
        path: Template file. Defaults to the bundled risk_assessment_prompt.txt.

    Raises:
        OSError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "risk_assessment_prompt.txt"
    return path.read_text(encoding="utf-8")


def load_json_schema(path: Path | None = None) -> str:
    """Load the JSON schema describing the expected model reply.

    Args:
        path: Schema file. Defaults to the bundled risk_assessment_schema.json.

    Raises:
        OSError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "risk_assessment_schema.json"
    return path.read_text(encoding="utf-8")
