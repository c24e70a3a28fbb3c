"""Centralized configuration using Pydantic Settings.

Every tunable of a run lives here: where the raw records come from,
how the root company is chosen, and how the tree is rendered.

Configuration can be overridden via environment variables:
- CTREE_SOURCE_KIND=file
- CTREE_SOURCE_BASE_URL=https://example.org/api
- CTREE_TREE_ROOT_POLICY=last_wins
- CTREE_OUTPUT_INCLUDE_TRAVELS=true
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://5f27781bf5d27e001612e057.mockapi.io/webprovise"


class SourceConfig(BaseSettings):
    """Raw record source configuration.

    Environment variables prefixed with CTREE_SOURCE_.
    """

    model_config = SettingsConfigDict(env_prefix="CTREE_SOURCE_")

    kind: Literal["http", "file"] = "http"
    base_url: str = DEFAULT_BASE_URL
    companies_resource: str = "companies"
    travels_resource: str = "travels"
    timeout_seconds: float = 10.0
    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )


class TreeConfig(BaseSettings):
    """Hierarchy construction configuration.

    Environment variables prefixed with CTREE_TREE_.
    """

    model_config = SettingsConfigDict(env_prefix="CTREE_TREE_")

    root_policy: Literal["strict", "last_wins"] = "strict"


class OutputConfig(BaseSettings):
    """Serialized output configuration.

    Environment variables prefixed with CTREE_OUTPUT_.
    """

    model_config = SettingsConfigDict(env_prefix="CTREE_OUTPUT_")

    indent: int = 4
    include_travels: bool = False


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with CTREE_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="CTREE_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.source.base_url)
        print(config.tree.root_policy)

    Environment variables prefixed with CTREE_.
    """

    model_config = SettingsConfigDict(env_prefix="CTREE_")

    source: SourceConfig = Field(default_factory=SourceConfig)
    tree: TreeConfig = Field(default_factory=TreeConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the cached application configuration.

    Configuration is loaded once. To reload it (e.g., in tests),
    call reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()
