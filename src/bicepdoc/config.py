"""⚙️ Generator Configuration - Pydantic models for bicepdoc settings.

Settings come from three places (later wins):
1. Defaults defined here
2. ``bicepdoc.yaml`` (or the file named by ``BICEPDOC_CONFIG``)
3. Command line flags

Example bicepdoc.yaml:
    source_dirs: [src/Models]
    output_dir: docs
    patterns: ["*.py", "*.resource.yaml"]
    force: false
    max_workers: 4

    check:
      strict: false
      required: [heading, example]
      output: console
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from .discovery import DEFAULT_PATTERNS

CONFIG_FILENAME = "bicepdoc.yaml"


class CheckConfig(BaseModel):
    """Settings for the ``check`` command."""

    strict: bool = Field(default=False, description="Treat warnings as errors")
    required: list[Literal["heading", "example", "front_matter", "custom"]] = Field(
        default_factory=list,
        description="Annotation kinds every resource must declare",
    )
    output: Literal["console", "json"] = Field(default="console")


class DocGenConfig(BaseModel):
    """Complete generator configuration."""

    source_dirs: list[Path] = Field(
        default_factory=lambda: [Path(".")],
        description="Directories scanned for resource models",
    )
    patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PATTERNS),
        description="File globs scanned in each source directory",
    )
    output_dir: Path = Field(default=Path("docs"), description="Markdown output directory")
    force: bool = Field(default=False, description="Overwrite existing files")
    max_workers: int = Field(
        default=4,
        ge=1,
        le=64,
        description="Maximum resources processed concurrently",
    )
    ignore_file: Path | None = Field(
        default=None, description="Explicit ignore file (default: .bicepdocignore)"
    )
    check: CheckConfig = Field(default_factory=CheckConfig)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "DocGenConfig":
        """Load configuration from a YAML file."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data.get("bicepdoc", data))

    @classmethod
    def from_dict(cls, data: dict) -> "DocGenConfig":
        return cls(**data)


class Settings(BaseSettings):
    """Environment-based settings (``BICEPDOC_*``)."""

    config: Path | None = Field(default=None)
    max_workers: int | None = Field(default=None, ge=1, le=64)
    verbose: bool = Field(default=False)

    class Config:
        env_prefix = "BICEPDOC_"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings from environment."""
    return Settings()


def load_config(path: Path | str | None = None) -> DocGenConfig:
    """Load the generator configuration.

    Args:
        path: Explicit config file (must exist). Falls back to
            ``BICEPDOC_CONFIG``, then ``./bicepdoc.yaml`` if present.

    Returns:
        DocGenConfig with environment overrides applied
    """
    settings = get_settings()

    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    elif settings.config is not None:
        config_path = settings.config
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        config_path = Path.cwd() / CONFIG_FILENAME

    config = DocGenConfig.from_yaml(config_path) if config_path.exists() else DocGenConfig()

    if settings.max_workers is not None:
        config.max_workers = settings.max_workers

    return config
