"""Application settings via pydantic-settings."""

import os

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CACHE_PATH = "~/Library/Application Support/Granola/cache-v3.json"


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GRANOLA_")

    cache_path: str = Field(
        default=DEFAULT_CACHE_PATH,
        description=(
            "Path to Granola's local cache JSON file. "
            "Defaults to the standard macOS location."
        ),
    )
    parse_panels: bool = Field(
        default=True,
        description="Fall back to documentPanels when a meeting has no inline notes.",
    )
    timezone: str | None = Field(
        default=None,
        description="IANA timezone for displayed dates. Detected when unset.",
    )
    log_level: str = Field(default="warning", description="Logging level")

    @model_validator(mode="after")
    def _expand_paths(self) -> "Config":
        object.__setattr__(self, "cache_path", os.path.expanduser(self.cache_path))
        return self
