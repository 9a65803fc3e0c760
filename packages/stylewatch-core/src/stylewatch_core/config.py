"""Pydantic configuration models for stylewatch.

This module provides:
- OutputStyle: libsass output formats
- StyleConfig: source/output paths and compile options, loadable from
  a stylewatch.yaml file
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, get_args

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from stylewatch_core.errors import ConfigError

# Default config file name looked up by the CLI
CONFIG_FILENAME = "stylewatch.yaml"

DEFAULT_SOURCE_PATH = Path("src/_includes/scss/main.scss")
DEFAULT_OUTPUT_PATH = Path("src/css/main.css")

OutputStyle = Literal["nested", "expanded", "compact", "compressed"]

OUTPUT_STYLES: tuple[str, ...] = get_args(OutputStyle)


class StyleConfig(BaseModel):
    """Stylesheet build configuration.

    Attributes:
        source_path: Root SCSS file to compile.
        output_path: CSS file to write.
        output_style: libsass output style (default "nested").
        include_paths: Extra directories searched by @import.
        precision: Decimal places kept for numbers.
        source_comments: Emit line-number comments in the output.

    Example:
        >>> config = StyleConfig(
        ...     source_path=Path("src/_includes/scss/main.scss"),
        ...     output_path=Path("dist/css/main.css"),
        ...     output_style="compressed",
        ... )
        >>> config.watch_dir
        PosixPath('src/_includes/scss')
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_path: Path = Field(
        default=DEFAULT_SOURCE_PATH,
        description="Root stylesheet source file",
    )
    output_path: Path = Field(
        default=DEFAULT_OUTPUT_PATH,
        description="Compiled stylesheet output file",
    )
    output_style: OutputStyle = Field(
        default="nested",
        description="libsass output style",
    )
    include_paths: tuple[Path, ...] = Field(
        default=(),
        description="Additional @import search directories",
    )
    precision: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Decimal places for numbers in the output",
    )
    source_comments: bool = Field(
        default=False,
        description="Emit source line comments",
    )

    @field_validator("source_path", "output_path")
    @classmethod
    def path_must_name_a_file(cls, v: Path) -> Path:
        """Reject empty paths."""
        if str(v) in ("", "."):
            msg = f"Path must name a file, got: '{v}'"
            raise ValueError(msg)
        return v

    @property
    def watch_dir(self) -> Path:
        """Directory watched for changes (the source file's parent)."""
        return self.source_path.parent

    @property
    def output_dir(self) -> Path:
        """Directory that receives the compiled stylesheet."""
        return self.output_path.parent

    def resolve_paths(self, base_dir: Path) -> StyleConfig:
        """Return a copy with relative paths anchored at base_dir.

        Args:
            base_dir: Directory relative paths are resolved against.

        Returns:
            New StyleConfig with absolute-or-anchored paths.
        """
        def anchor(path: Path) -> Path:
            return path if path.is_absolute() else base_dir / path

        return self.model_copy(
            update={
                "source_path": anchor(self.source_path),
                "output_path": anchor(self.output_path),
                "include_paths": tuple(anchor(p) for p in self.include_paths),
            }
        )

    def with_overrides(self, **overrides: Any) -> StyleConfig:
        """Return a copy with non-None overrides applied and re-validated.

        Args:
            **overrides: Field values, None values are ignored.

        Returns:
            New validated StyleConfig.
        """
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return StyleConfig.model_validate(data)

    @classmethod
    def from_yaml(cls, path: Path | str) -> StyleConfig:
        """Load configuration from a YAML file.

        Relative paths inside the file are resolved against the file's
        directory.

        Args:
            path: Path to stylewatch.yaml.

        Returns:
            Validated StyleConfig.

        Raises:
            ConfigError: If the file is missing, unreadable, not valid YAML,
                not a mapping, or fails validation.
        """
        config_path = Path(path)
        if not config_path.exists():
            msg = f"Configuration file not found: {config_path}"
            raise ConfigError(msg)

        try:
            raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except OSError as e:
            msg = f"Failed to read configuration file: {config_path} - {e}"
            raise ConfigError(msg) from e
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in {config_path}: {e}"
            raise ConfigError(msg) from e

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            msg = f"Configuration must be a mapping, got {type(raw).__name__}: {config_path}"
            raise ConfigError(msg)

        try:
            config = cls.model_validate(raw)
        except ValidationError as e:
            lines = [f"Invalid configuration in {config_path}:"]
            for err in e.errors():
                loc = ".".join(str(x) for x in err["loc"])
                lines.append(f"  - {loc}: {err['msg']}")
            raise ConfigError("\n".join(lines)) from e

        return config.resolve_paths(config_path.parent)

    def to_yaml(self) -> str:
        """Serialize the configuration to YAML text."""
        return yaml.safe_dump(self.model_dump(mode="json"), sort_keys=False)
