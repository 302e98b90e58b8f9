from __future__ import annotations

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.constants import DEFAULT_CLONE_PATH

# Load .env once, early; real environment variables win over the file
load_dotenv()


class Settings(BaseSettings):
    """Application config (env or .env). CLI flags override these."""

    model_config = SettingsConfigDict(env_prefix="", env_file=None, extra="ignore")

    github_organization: str | None = None
    github_token: str | None = None
    clone_path: str = Field(default=DEFAULT_CLONE_PATH)
    compress: bool = False
    jobs: int | None = Field(default=None, ge=1)


def get_settings() -> Settings:
    return Settings()
