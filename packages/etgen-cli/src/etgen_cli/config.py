"""Generator configuration.

Settings come from, lowest to highest precedence: field defaults,
``ETGEN_*`` environment variables, an optional ``etgen.yaml`` file, and
command-line options.

Example etgen.yaml:

    schema_version: "0.12.0"
    output_dir: build/element-templates
    scan_packages:
      - myapp.tasks
    fetch_timeout: 5
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from etgen_core.validation import DEFAULT_TIMEOUT_SECONDS, LATEST_VERSION

CONFIG_FILENAME = "etgen.yaml"
DEFAULT_OUTPUT_DIR = "./element-templates"


class GeneratorConfig(BaseSettings):
    """Configuration for a generation run.

    Can be loaded from environment variables with the ETGEN_ prefix;
    ``ETGEN_SCAN_PACKAGES`` is a comma-separated list.

    Example:
        >>> config = GeneratorConfig(scan_packages=["myapp.tasks"])
        >>> config.output_dir
        PosixPath('element-templates')
        >>> config = GeneratorConfig.from_yaml("etgen.yaml", output_dir="out")
    """

    model_config = SettingsConfigDict(
        env_prefix="ETGEN_",
        extra="forbid",
        frozen=True,
    )

    schema_version: str | None = Field(
        default=None,
        description="Element-templates schema version; None or 'latest' for the latest release",
    )
    output_dir: Path = Field(
        default=Path(DEFAULT_OUTPUT_DIR),
        description="Directory receiving <Group>Templates.json files",
    )
    scan_packages: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Packages or modules searched for decorated classes",
    )
    fetch_timeout: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="Schema download timeout in seconds",
    )

    @field_validator("scan_packages", mode="before")
    @classmethod
    def split_scan_packages(cls, v: Any) -> Any:
        """Accept a comma-separated string as well as a list."""
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, (list, tuple)):
            return [str(name).strip() for name in v if str(name).strip()]
        return v

    @field_validator("scan_packages")
    @classmethod
    def reject_wildcard(cls, v: list[str]) -> list[str]:
        """Python has no classpath to scan, so every package must be named."""
        if "*" in v:
            raise ValueError("'*' is not supported; name the packages to scan")
        return list(dict.fromkeys(v))

    @field_validator("schema_version")
    @classmethod
    def normalize_latest(cls, v: str | None) -> str | None:
        """Map empty strings and 'latest' to None."""
        if v is None or not v.strip() or v.strip() == LATEST_VERSION:
            return None
        return v.strip()

    @classmethod
    def from_yaml(cls, path: str | Path, **overrides: Any) -> GeneratorConfig:
        """Load configuration from a YAML file.

        Values in the file override environment variables; ``overrides``
        whose value is not None override the file.

        Args:
            path: Path to etgen.yaml.
            **overrides: Field values from command-line options.

        Returns:
            Validated GeneratorConfig.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            yaml.YAMLError: If YAML syntax is invalid.
            pydantic.ValidationError: If a value is invalid.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a mapping, got {type(data).__name__}")

        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**data)


def load_config(path: str | Path | None = None, **overrides: Any) -> GeneratorConfig:
    """Build the run configuration.

    Without an explicit path, ``./etgen.yaml`` is used when it exists.

    Args:
        path: Optional configuration file.
        **overrides: Field values from command-line options; None means unset.

    Returns:
        Validated GeneratorConfig.
    """
    if path is None and Path(CONFIG_FILENAME).is_file():
        path = CONFIG_FILENAME

    if path is not None:
        return GeneratorConfig.from_yaml(path, **overrides)

    return GeneratorConfig(**{k: v for k, v in overrides.items() if v is not None})
