# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build and validate the Gendarme command line."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Final

from ..config import BridgeConfig
from ..errors import InvalidConfigurationError, ToolNotFoundError

ASSEMBLY_SUFFIXES: Final[frozenset[str]] = frozenset({".dll", ".exe"})


def resolve_executable(path: Path) -> Path:
    """Return an existing executable path for ``path``.

    Bare names such as ``gendarme`` are looked up on ``PATH``.

    Raises:
        ToolNotFoundError: If no matching executable exists.
    """

    if path.is_file():
        return path
    if len(path.parts) == 1:
        resolved = shutil.which(str(path))
        if resolved is not None:
            return Path(resolved)
    raise ToolNotFoundError(path)


def verify_config(config: BridgeConfig) -> Path:
    """Validate ``config`` before invoking Gendarme.

    Returns:
        Path: Resolved Gendarme executable.

    Raises:
        ToolNotFoundError: If the executable cannot be found.
        InvalidConfigurationError: If no assembly was supplied or an
            auxiliary file does not exist.
    """

    executable = resolve_executable(config.gendarme_path)
    if config.ignore_file is not None and not config.ignore_file.is_file():
        raise InvalidConfigurationError(f"Couldn't find the Gendarme ignore file at {config.ignore_file}")
    if config.config_file is not None and not config.config_file.is_file():
        raise InvalidConfigurationError(f"Couldn't find the Gendarme config file at {config.config_file}")
    if not any(assembly.suffix.lower() in ASSEMBLY_SUFFIXES for assembly in config.assemblies):
        listed = ", ".join(str(assembly) for assembly in config.assemblies) or "<none>"
        raise InvalidConfigurationError(f"No .dll or .exe files found to run Gendarme against in {listed}")
    return executable


def build_arguments(config: BridgeConfig, output_file: Path) -> list[str]:
    """Return the Gendarme argument list writing its XML report to ``output_file``."""

    args: list[str] = []
    if config.config_file is not None:
        args.extend(["--config", str(config.config_file)])
    if config.ruleset is not None:
        args.extend(["--set", config.ruleset])
    if config.severity is not None:
        args.extend(["--severity", config.severity])
    if config.confidence is not None:
        args.extend(["--confidence", config.confidence])
    if config.ignore_file is not None:
        args.extend(["--ignore", str(config.ignore_file)])
    if config.limit is not None:
        args.extend(["--limit", str(config.limit)])
    if config.quiet.enabled:
        args.append("--quiet")
    elif config.verbose.enabled:
        args.append("--verbose")
    args.extend(["--xml", str(output_file)])
    args.extend(str(assembly) for assembly in config.assemblies)
    return args


__all__ = ["ASSEMBLY_SUFFIXES", "build_arguments", "resolve_executable", "verify_config"]
