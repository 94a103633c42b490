# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised by the Gendarme bridge."""

from __future__ import annotations

from pathlib import Path


class GendarmeBridgeError(RuntimeError):
    """Base class for failures that abort a bridge run."""


class ToolNotFoundError(GendarmeBridgeError):
    """Raised when the configured Gendarme executable cannot be located."""

    def __init__(self, executable: str | Path) -> None:
        super().__init__(f"Couldn't find the Gendarme executable at {executable}")
        self.executable = str(executable)


class InvalidConfigurationError(GendarmeBridgeError):
    """Raised when required inputs are missing or reference absent files."""


class ToolExecutionError(GendarmeBridgeError):
    """Raised when Gendarme exits non-zero and writes to its error stream."""

    def __init__(self, exit_code: int, stderr: str) -> None:
        super().__init__(
            f"Gendarme exited with status {exit_code}: {stderr.strip() or '<no stderr>'}",
        )
        self.exit_code = exit_code
        self.stderr = stderr


class MalformedReportError(GendarmeBridgeError):
    """Raised when a report document cannot be loaded into the report model."""

    def __init__(self, path: str | Path | None, reason: str) -> None:
        location = str(path) if path is not None else "<memory>"
        super().__init__(f"Malformed Gendarme report {location}: {reason}")
        self.path = None if path is None else Path(path)
        self.reason = reason


__all__ = [
    "GendarmeBridgeError",
    "InvalidConfigurationError",
    "MalformedReportError",
    "ToolExecutionError",
    "ToolNotFoundError",
]
