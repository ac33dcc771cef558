"""Global configuration for Chronicles: narrative chat backend + Gradio client."""
from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Centralised settings read from .env file automatically."""

    # ── Paths ──────────────────────────────────────────────
    PROJECT_ROOT: Path = Path(__file__).parent

    # ── Completion API (OpenAI-compatible) ────────────────
    MISTRAL_API_KEY: str = Field(default="", description="Bearer key for the completion endpoint")
    LLM_BASE_URL: str = Field(default="https://api.mistral.ai/v1", description="OpenAI-compatible API base URL")
    LLM_MODEL: str = "mistral-small-latest"
    LLM_MAX_TOKENS: int = 800
    LLM_TEMPERATURE: float = 0.8
    LLM_TOP_P: float = 0.9
    LLM_TIMEOUT: float = 30.0
    LLM_MAX_ATTEMPTS: int = 1
    GENERATE_MAX_TOKENS: int = 500

    # ── Story Config ──────────────────────────────────────
    HISTORY_WINDOW: int = 10
    DEFAULT_MODE: str = "adventure"

    # ── HTTP server ───────────────────────────────────────
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = [
        "https://chronicles-frontend.vercel.app",
        "http://localhost:5173",
    ]
    CORS_ORIGIN_REGEX: str = r"https://.*\.vercel\.app"

    # ── Gradio client ─────────────────────────────────────
    BACKEND_URL: str = "http://localhost:3000"
    GRADIO_PORT: int = 7860

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


# Singleton settings instance used by every module
settings = Settings()
