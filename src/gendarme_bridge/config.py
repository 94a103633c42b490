# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders for the Gendarme bridge."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import InvalidConfigurationError
from .severity import SeverityPolicy

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "gendarme-bridge"
DEFAULT_EXECUTABLE: Final[str] = "gendarme"


class ConfigError(InvalidConfigurationError):
    """Raised when configuration input is invalid."""


class TriState(str, Enum):
    """Flag that distinguishes an explicit choice from the default."""

    UNSET = "unset"
    ENABLED = "enabled"
    DISABLED = "disabled"

    @classmethod
    def from_optional(cls, value: bool | None) -> TriState:
        """Return the tri-state equivalent of an optional boolean."""

        if value is None:
            return cls.UNSET
        return cls.ENABLED if value else cls.DISABLED

    @property
    def enabled(self) -> bool:
        return self is TriState.ENABLED

    @property
    def is_set(self) -> bool:
        return self is not TriState.UNSET


class BridgeConfig(BaseModel):
    """Settings driving one Gendarme run and the post-processing pipeline."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    gendarme_path: Path = Path(DEFAULT_EXECUTABLE)
    assemblies: list[Path] = Field(default_factory=list)
    config_file: Path | None = None
    ruleset: str | None = None
    ignore_file: Path | None = None
    severity: str | None = None
    confidence: str | None = None
    limit: int | None = Field(default=None, ge=0)
    output_path: Path | None = None
    condense: bool = True
    accumulate: bool = False
    treat_defects_as_error: bool = False
    quiet: TriState = TriState.UNSET
    verbose: TriState = TriState.UNSET
    integrate_with_host_diagnostics: bool = False
    sarif_path: Path | None = None
    emoji: bool = False

    @field_validator("quiet", "verbose", mode="before")
    @classmethod
    def _coerce_tristate(cls, value: object) -> object:
        if value is None or isinstance(value, bool):
            return TriState.from_optional(value)
        return value

    @model_validator(mode="after")
    def _check_consistency(self) -> BridgeConfig:
        if self.quiet.enabled and self.verbose.enabled:
            raise ValueError("quiet and verbose output are mutually exclusive")
        if self.accumulate and self.output_path is None:
            raise ValueError("accumulate requires an output path for the cumulative report")
        return self

    @property
    def severity_policy(self) -> SeverityPolicy:
        return SeverityPolicy(treat_as_error=self.treat_defects_as_error)

    def with_overrides(self, overrides: Mapping[str, Any]) -> BridgeConfig:
        """Return a copy with ``overrides`` applied, skipping ``None`` values.

        Raises:
            ConfigError: If the combined settings fail validation.
        """

        return build_config(apply_overrides(self.model_dump(), overrides), source="command line")


_EXCLUSIVE_FLAGS: Final[tuple[tuple[str, str], ...]] = (("quiet", "verbose"), ("verbose", "quiet"))


def apply_overrides(data: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Layer command line ``overrides`` on top of raw settings ``data``.

    ``None`` overrides leave the underlying value alone. Enabling ``quiet`` or
    ``verbose`` clears the opposite flag inherited from ``data`` unless it is
    overridden as well.
    """

    merged = _normalise_keys(data)
    explicit = {key: value for key, value in _normalise_keys(overrides).items() if value is not None}
    for enabled, opposite in _EXCLUSIVE_FLAGS:
        if _is_enabled(explicit.get(enabled)) and opposite not in explicit:
            merged.pop(opposite, None)
    merged.update(explicit)
    return merged


def _is_enabled(value: object) -> bool:
    return value is True or value is TriState.ENABLED


def _normalise_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    return {str(key).replace("-", "_"): value for key, value in data.items()}


def build_config(data: Mapping[str, Any], *, source: str) -> BridgeConfig:
    """Validate ``data`` into a :class:`BridgeConfig`.

    Raises:
        ConfigError: If ``data`` does not describe a valid configuration.
    """

    try:
        return BridgeConfig.model_validate(_normalise_keys(data))
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration from {source}: {exc}") from exc


def read_config_section(root: Path) -> dict[str, Any]:
    """Return the raw ``[tool.gendarme-bridge]`` table of ``root/pyproject.toml``.

    Keys use underscores and relative paths are resolved against ``root``.
    Nothing is validated here, so the table can be combined with command line
    overrides first. A missing file or section yields an empty mapping.

    Raises:
        ConfigError: If the file is not valid TOML or the section is not a table.
    """

    path = root / PYPROJECT_FILENAME
    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            document = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read {path}: {exc}") from exc

    tool_section = document.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"[{PYPROJECT_TOOL_KEY}.{PYPROJECT_SECTION_KEY}] in {path} must be a table")
    return _resolve_paths(_normalise_keys(section), root)


def load_config(root: Path, overrides: Mapping[str, Any] | None = None) -> BridgeConfig:
    """Load settings from ``root/pyproject.toml`` and apply ``overrides``.

    The file layer and the overrides are validated together, so cross-field
    rules see the combined result.

    Raises:
        ConfigError: If the file cannot be read or the combined settings are invalid.
    """

    data = read_config_section(root)
    source = str(root / PYPROJECT_FILENAME)
    if overrides:
        data = apply_overrides(data, overrides)
        source = f"{source} and the command line"
    return build_config(data, source=source)


_PATH_FIELDS: Final[tuple[str, ...]] = ("config_file", "ignore_file", "output_path", "sarif_path")


def _anchor(value: Any, root: Path) -> Any:
    if not isinstance(value, (str, Path)):
        return value
    path = Path(value)
    return path if path.is_absolute() else root / path


def _resolve_paths(data: dict[str, Any], root: Path) -> dict[str, Any]:
    for name in _PATH_FIELDS:
        if data.get(name) is not None:
            data[name] = _anchor(data[name], root)
    assemblies = data.get("assemblies")
    if isinstance(assemblies, list):
        data["assemblies"] = [_anchor(entry, root) for entry in assemblies]
    executable = data.get("gendarme_path")
    if isinstance(executable, (str, Path)) and len(Path(executable).parts) > 1:
        data["gendarme_path"] = _anchor(executable, root)
    return data


__all__ = [
    "DEFAULT_EXECUTABLE",
    "BridgeConfig",
    "ConfigError",
    "TriState",
    "apply_overrides",
    "build_config",
    "load_config",
    "read_config_section",
]
