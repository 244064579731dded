from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "legalsift"
    db_username: str = "legalsift"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 5

    document_store: str = "postgres"
    files_root: Path = Path("/app/files")
    max_upload_bytes: int = 10 * 1024 * 1024

    pdf_engine: str = "pdfplumber"

    completion_provider: str = "openai"
    completion_api_key: str = ""
    completion_model_name: str = "gpt-4"
    completion_base_url: str = ""
    completion_timeout_seconds: int = 30
    completion_structured_output: bool = False

    analysis_temperature: float = 0.3
    analysis_max_tokens: int = 2000
    translation_temperature: float = 0.3
    translation_max_tokens: int = 1000
    summary_temperature: float = 0.3
    summary_max_tokens: int = 500
    voice_summary_temperature: float = 0.5
    voice_summary_max_tokens: int = 300

    default_language: str = "en"
