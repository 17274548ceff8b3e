"""Configuration for the injector using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["InjectorSettings", "get_settings"]


class InjectorSettings(BaseSettings):
    """Settings read from ``LAZYWIRE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LAZYWIRE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    graph_name: str = Field(default="dependencies", description="Name of the exported digraph")
    graph_path: str = Field(default="dependencies.dot", description="Default file for save_graph")
    log_level: str = "info"
    log_format: Literal["console", "json"] = "console"


@lru_cache
def get_settings() -> InjectorSettings:
    """Get cached settings instance."""
    return InjectorSettings()
