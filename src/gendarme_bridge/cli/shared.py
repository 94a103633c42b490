# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (options, errors, config assembly)."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any, TypeVar

import typer

from ..config import BridgeConfig, load_config
from ..errors import GendarmeBridgeError
from ..logging import BridgeLogger
from ..runner import RunResult, logger_for


RootOption = Annotated[Path, typer.Option("--root", "-r", help="Project root holding pyproject.toml.")]
OutputOption = Annotated[Path | None, typer.Option("--output", "-o", help="Path of the persisted report.")]
CondenseOption = Annotated[
    bool | None,
    typer.Option("--condense/--no-condense", help="Fold defects that differ only in description."),
]
AccumulateOption = Annotated[
    bool | None,
    typer.Option("--accumulate/--no-accumulate", help="Merge results into the cumulative report at --output."),
]
TreatAsErrorOption = Annotated[
    bool | None,
    typer.Option(
        "--treat-defects-as-error/--treat-defects-as-warning",
        help="Report defects as errors and fail when any are found.",
    ),
]
QuietOption = Annotated[bool | None, typer.Option("--quiet/--no-quiet", help="Output minimal information.")]
VerboseOption = Annotated[bool | None, typer.Option("--verbose/--no-verbose", help="Output verbose information.")]
HostDiagnosticsOption = Annotated[
    bool | None,
    typer.Option("--host-diagnostics/--summary", help="Print one build-host diagnostic per defect."),
]
SarifOption = Annotated[Path | None, typer.Option("--sarif", help="Also write diagnostics as SARIF.")]
EmojiOption = Annotated[
    bool | None,
    typer.Option("--emoji/--no-emoji", help="Prefix console messages with emoji."),
]


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class PipelineOptions:
    """Post-processing options shared by every command."""

    root: Path
    output: Path | None
    condense: bool | None
    accumulate: bool | None
    treat_defects_as_error: bool | None
    quiet: bool | None
    verbose: bool | None
    host_diagnostics: bool | None
    sarif: Path | None
    emoji: bool | None = None

    def overrides(self) -> dict[str, Any]:
        return {
            "output_path": self.output,
            "condense": self.condense,
            "accumulate": self.accumulate,
            "treat_defects_as_error": self.treat_defects_as_error,
            "quiet": self.quiet,
            "verbose": self.verbose,
            "integrate_with_host_diagnostics": self.host_diagnostics,
            "sarif_path": self.sarif,
            "emoji": self.emoji,
        }


def resolve_config(root: Path, overrides: Mapping[str, Any]) -> BridgeConfig:
    """Load ``root`` settings and apply command line ``overrides``.

    Raises:
        CLIError: If the configuration is invalid.
    """

    try:
        return load_config(root.resolve(), overrides)
    except GendarmeBridgeError as exc:
        raise CLIError(str(exc)) from exc


_ResultT = TypeVar("_ResultT", bound=RunResult)


def execute(config: BridgeConfig, action: Callable[[BridgeLogger], _ResultT]) -> None:
    """Run ``action`` and translate its outcome into a process exit status."""

    logger = logger_for(config)
    try:
        result = action(logger)
    except GendarmeBridgeError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=1) from exc
    raise typer.Exit(code=0 if result.success else 1)


def exit_on_cli_error(exc: CLIError) -> typer.Exit:
    """Report ``exc`` and return the matching :class:`typer.Exit`."""

    BridgeLogger().fail(str(exc))
    return typer.Exit(code=exc.exit_code)


__all__ = [
    "AccumulateOption",
    "CLIError",
    "CondenseOption",
    "EmojiOption",
    "HostDiagnosticsOption",
    "OutputOption",
    "PipelineOptions",
    "QuietOption",
    "RootOption",
    "SarifOption",
    "TreatAsErrorOption",
    "VerboseOption",
    "execute",
    "exit_on_cli_error",
    "resolve_config",
]
