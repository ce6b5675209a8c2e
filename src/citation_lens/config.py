"""Configuration loader for Citation Lens."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class AnalysisConfig(BaseModel):
    """Parameters of the network metrics and community detection.

    Authority and betweenness are approximations; these caps bound their cost
    and are the only built-in resource guards.
    """

    authority_iterations: int = Field(default=10, ge=0)
    damping: float = Field(default=0.85, ge=0.0, le=1.0)
    max_shortest_paths: int = Field(default=3, ge=1)  # Paths enumerated per node pair
    max_path_length: int = Field(default=5, ge=1)  # In edges
    similarity_threshold: float = 0.3
    min_community_size: int = Field(default=3, ge=1)


class SeminalConfig(BaseModel):
    """Thresholds for seminal paper selection."""

    min_citations: int = 50
    min_age: int = 2  # Years since publication
    top_n: int = Field(default=50, ge=1)


class Config(BaseModel):
    """Main configuration model."""

    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    seminal: SeminalConfig = Field(default_factory=SeminalConfig)

    # Network building
    default_max_nodes: int = Field(default=10000, gt=0)

    # Dataset file used by the CLI store (JSON or YAML)
    data_path: str | None = None

    # Output settings
    output_dir: str = "./output"


_config: Config | None = None


def find_config_file() -> Path | None:
    """Find configuration file by searching multiple locations.

    Search order (first found wins):
    1. CITATION_LENS_CONFIG environment variable
    2. Current working directory: ./config.yaml
    3. User home directory: ~/.citation-lens/config.yaml

    Returns:
        Path to config file if found, None otherwise.
    """
    env_path = os.environ.get("CITATION_LENS_CONFIG")
    if env_path:
        path = Path(env_path).expanduser()
        if path.exists():
            return path
        logger.warning(f"CITATION_LENS_CONFIG path does not exist: {env_path}")

    cwd_config = Path("config.yaml")
    if cwd_config.exists():
        return cwd_config.resolve()

    home_config = Path.home() / ".citation-lens" / "config.yaml"
    if home_config.exists():
        return home_config

    return None


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, searches for config.yaml
                    in multiple locations (see find_config_file).

    Returns:
        Config object with loaded settings.
    """
    global _config

    config_path = Path(config_path).expanduser() if config_path is not None else find_config_file()

    if config_path is not None and config_path.exists():
        logger.debug(f"Loading configuration from: {config_path}")
        with open(config_path) as f:
            data: dict[str, Any] = yaml.safe_load(f) or {}
        _config = Config(**data)
    else:
        logger.debug("No configuration file found, using defaults")
        _config = Config()

    return _config


def get_config() -> Config:
    """Get the current configuration, loading if necessary."""
    global _config
    if _config is None:
        return load_config()
    return _config


def reset_config() -> None:
    """Reset the cached configuration."""
    global _config
    _config = None
