from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pdfco"
    pdfco_api_key: str = ""
    pdfco_base_url: str = "https://api.pdf.co/v1"
    pdfco_timeout_seconds: int = 60

    answer_provider: str = "perplexity"
    perplexity_api_key: str = ""
    perplexity_base_url: str = "https://api.perplexity.ai"
    perplexity_model_name: str = "sonar-pro"
    perplexity_timeout_seconds: int = 60
