"""
Application settings loaded from environment variables.
It keeps log level and the wire names of the pagination query parameters in one place.
Every key has a default, so the library works without a `.env` file.
"""

from __future__ import annotations

import os
import re
from functools import lru_cache
from typing import Final

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

_PARAM_NAME_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_\-]*$")

DEFAULTS: Final[dict[str, str]] = {
    "LOG_LEVEL": "INFO",
    "PAGINATION_PAGE_PARAM": "page",
    "PAGINATION_SIZE_PARAM": "size",
    "PAGINATION_SORT_PARAM": "sort",
}


class Settings(BaseModel):
    """Typed runtime configuration."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    LOG_LEVEL: str
    PAGINATION_PAGE_PARAM: str
    PAGINATION_SIZE_PARAM: str
    PAGINATION_SORT_PARAM: str

    @field_validator("PAGINATION_PAGE_PARAM", "PAGINATION_SIZE_PARAM", "PAGINATION_SORT_PARAM")
    @classmethod
    def validate_param_name(cls, value: str) -> str:
        if not _PARAM_NAME_RE.match(value):
            raise ValueError(f"Unsupported query parameter name: {value!r}")
        return value


def load_settings(*, load_env: bool = True) -> Settings:
    """Load and validate settings from `.env` and the process environment."""

    if load_env:
        load_dotenv()

    values = {key: os.getenv(key) or default for key, default in DEFAULTS.items()}
    try:
        return Settings.model_validate(values)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached accessor for application settings."""

    return load_settings()
