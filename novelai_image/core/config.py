from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://image.novelai.net"
DEFAULT_TIMEOUT_MS = 60_000


class Settings(BaseSettings):
    """
    Client configuration read from NOVELAI_* environment variables.
    Explicit constructor arguments on NovelAIClient take precedence.
    """

    TOKEN: str = ""  # Persistent API token (pst-...)
    BASE_URL: str = DEFAULT_BASE_URL
    TIMEOUT_MS: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)

    # "zipfile" = stdlib reader, "stream" = stream-unzip reader
    ARCHIVE_BACKEND: Literal["zipfile", "stream"] = "zipfile"

    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = False

    model_config = SettingsConfigDict(env_prefix="NOVELAI_")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
