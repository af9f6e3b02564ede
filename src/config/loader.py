from __future__ import annotations

import tomllib
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

if TYPE_CHECKING:
    from pathlib import Path

CONFIG_FILENAME = "dircycle.toml"

DEFAULT_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs")
DEFAULT_SKIP_DIRS = ("node_modules",)


class DircycleConfig(BaseModel):
    """Configuration for module discovery and analysis."""

    model_config = ConfigDict(extra="forbid")

    extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTENSIONS),
        description="Source file extensions to analyze, in resolution order",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all source files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files and directories to exclude",
    )
    skip_dirs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SKIP_DIRS),
        description="Directory names never descended into (dot-directories always skipped)",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )

    @field_validator("extensions")
    @classmethod
    def validate_extensions(cls, v: list[str]) -> list[str]:
        """Require extensions of the form ``.ext``."""
        if not v:
            msg = "extensions must list at least one file extension"
            raise ValueError(msg)
        for ext in v:
            if not ext.startswith(".") or len(ext) < 2 or "/" in ext:
                msg = f"Invalid extension {ext!r}: expected a value like '.ts'"
                raise ValueError(msg)
        return v

    def with_excludes(self, patterns: list[str]) -> DircycleConfig:
        """Return a copy with extra exclude patterns appended."""
        if not patterns:
            return self
        return self.model_copy(update={"exclude": [*self.exclude, *patterns]})


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def load_config(root: Path) -> DircycleConfig:
    """Load configuration from dircycle.toml if it exists."""
    config_path = root / CONFIG_FILENAME

    if not config_path.is_file():
        return DircycleConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return DircycleConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e
