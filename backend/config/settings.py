from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # API Settings
    API_V1_STR: str = "/api"
    PROJECT_NAME: str = "Photo Editor Pro"
    VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Server Settings
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # Gemini (the credential itself is read per request, see services.gemini_service)
    GEMINI_MODEL: str = "gemini-2.5-flash-image-preview"
    GEMINI_API_BASE: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_TIMEOUT_SECONDS: float = 120.0

    # History
    HISTORY_BACKEND: str = "memory"  # "memory" or "supabase"
    HISTORY_TABLE: str = "edit_history"
    HISTORY_TOKEN_SECRET: Optional[str] = None
    HISTORY_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Client
    EDIT_API_BASE_URL: str = "http://127.0.0.1:8000"
    EDIT_CLIENT_TIMEOUT_SECONDS: float = 180.0
    LOCAL_HISTORY_PATH: str = "~/.photo-editor/history.json"
    LOCAL_HISTORY_LIMIT: int = 50

    # CORS Settings
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173"
    ]


def get_settings() -> Settings:
    """Build a fresh settings object from the current environment."""
    return Settings()


# Global settings instance
settings = get_settings()
