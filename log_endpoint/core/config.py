import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

current_dir = os.path.dirname(os.path.abspath(__file__))
package_root = os.path.abspath(os.path.join(current_dir, ".."))
project_root = os.path.abspath(os.path.join(package_root, ".."))
dotenv_path = os.path.join(project_root, ".env")

if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path=dotenv_path, override=False)

DEFAULT_HELP_GUIDE_PATH = os.path.join(package_root, "docs", "API_GUIDE.md")


class Settings(BaseSettings):
    """
    Application settings.

    Values come from the process environment, optionally pre-populated
    from a `.env` file in the project root.
    """

    HOST: str = "0.0.0.0"

    PORT: int = 8080

    # Shared secret expected in the x-api-key header. When unset every
    # authenticated request is rejected.
    API_KEY: Optional[str] = None

    PROJECT_NAME: str = "Log Endpoint"

    PROJECT_VERSION: str = "1.0.0"

    GOOGLE_CLOUD_PROJECT: Optional[str] = None

    HELP_GUIDE_PATH: str = DEFAULT_HELP_GUIDE_PATH

    CORS_ORIGINS: List[str] = ["*"]

    LOG_LEVEL: str = "INFO"

    DEBUG: bool = False

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", case_sensitive=False
    )


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    return Settings()
