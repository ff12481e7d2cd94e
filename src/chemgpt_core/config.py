# src/chemgpt_core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    ChemGPT configuration management.
    Loads variables from .env file or environment variables.
    """
    # --- AI & Models ---
    CHEMGPT_DEFAULT_MODEL: str = "gpt-3.5-turbo"
    CHEMGPT_USE_MOCK_AI: bool = False
    CHEMGPT_MOCK_DELAY_SECONDS: float = 0.8
    CHEMGPT_REQUEST_TIMEOUT: float = 60.0

    # --- Provider credentials (supplied externally) ---
    OPENAI_API_KEY: str = ""
    ANTHROPIC_API_KEY: str = ""
    GOOGLE_API_KEY: str = ""

    # --- Observability ---
    CHEMGPT_LOG_LEVEL: str = "INFO"
    CHEMGPT_ACCESS_LOG_LEVEL: str = "WARNING"
    CHEMGPT_HTTPX_LOG_LEVEL: str = "WARNING"

    # --- HTTP surface ---
    CHEMGPT_FRONTEND_ORIGINS: str = "http://localhost:4002,http://127.0.0.1:4002"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        env_file_encoding="utf-8",
    )

    def api_key_for(self, provider: str) -> str | None:
        keys = {
            "openai": self.OPENAI_API_KEY,
            "anthropic": self.ANTHROPIC_API_KEY,
            "google": self.GOOGLE_API_KEY,
        }
        value = (keys.get(provider) or "").strip()
        return value or None


def get_settings() -> Settings:
    """Read a fresh settings snapshot; mock/live and credentials resolve per call."""
    return Settings()
