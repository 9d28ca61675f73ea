from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "paperwork"
    db_username: str = "paperwork"
    db_password: str = "secret"
    db_pool_max_size: int = 10

    files_root: str = "/app/uploads"

    pdf_engine: str = "pdfplumber"

    ocr_min_words: int = 20
    ocr_max_pages: int = 3
    ocr_render_scale: float = 2.0

    ai_provider: str = "openai"
    ai_openai_api_key: str = ""
    ai_openai_base_url: str = ""
    ai_timeout_seconds: int = 30
    ai_ocr_model: str = "gpt-4o-mini"
    ai_extraction_model: str = "gpt-4.1-mini"
    ai_categorization_model: str = "gpt-4.1-mini"

    extraction_max_chars: int = 10000
    categorization_snippet_chars: int = 500
    pending_sweep_limit: int = 10
    full_processing_label_policy: str = "extractor_verbatim"
