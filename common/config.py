# common/config.py

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the project root directory (assuming this file is in project_root/common/)
# This allows .env to be loaded from the project root.
PROJECT_ROOT = Path(__file__).parent.parent.resolve()

class Settings(BaseSettings):
    """
    Defines and loads all application settings from environment variables
    and/or a .env file.
    """
    # --- API Keys ---
    # Required for both the plan update and the conversational reply calls.
    OPENAI_API_KEY: str = "YOUR_OPENAI_API_KEY"

    # --- AI Model Configuration ---
    OPENAI_MODEL_NAME: str = "gpt-3.5-turbo"
    OPENAI_TEMPERATURE: float = 0.7
    OPENAI_MAX_TOKENS: int = 1000

    # Request timeout in seconds. None keeps the client library's default.
    OPENAI_TIMEOUT: Optional[float] = None

    # --- System & Server Configuration ---
    # Logging level for the application (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    LOG_LEVEL: str = "INFO"

    # Host and port for the FastAPI gateway.
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # Origins allowed to call the API from a browser (the chat UI).
    CORS_ORIGINS: List[str] = ["*"]

    # Pydantic Settings configuration
    model_config = SettingsConfigDict(
        env_file=PROJECT_ROOT / ".env",
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore' # Ignore extra fields from .env file
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Returns a cached instance of the application settings.

    The lru_cache decorator ensures that the Settings object is created only
    once, the first time this function is called. This allows test fixtures
    or other setup code to modify environment variables before the settings
    are loaded.
    """
    return Settings()


# For convenience, a global settings object is provided.
# Code that must honour test-specific configuration should call
# get_settings() at use time instead.
settings = get_settings()
