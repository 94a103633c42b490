# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command post-processing existing Gendarme reports."""

from __future__ import annotations

from pathlib import Path

import typer

from ..runner import process_reports
from .shared import (
    AccumulateOption,
    CLIError,
    CondenseOption,
    EmojiOption,
    HostDiagnosticsOption,
    OutputOption,
    PipelineOptions,
    QuietOption,
    RootOption,
    SarifOption,
    TreatAsErrorOption,
    VerboseOption,
    execute,
    exit_on_cli_error,
    resolve_config,
)


def process_command(
    reports: list[Path] = typer.Argument(..., metavar="REPORT...", help="Gendarme XML reports."),
    root: RootOption = Path(),
    output: OutputOption = None,
    condense: CondenseOption = None,
    accumulate: AccumulateOption = None,
    treat_defects_as_error: TreatAsErrorOption = None,
    quiet: QuietOption = None,
    verbose: VerboseOption = None,
    host_diagnostics: HostDiagnosticsOption = None,
    sarif: SarifOption = None,
    emoji: EmojiOption = None,
) -> None:
    """Merge, condense and report existing REPORT files without running Gendarme."""

    options = PipelineOptions(
        root=root,
        output=output,
        condense=condense,
        accumulate=accumulate,
        treat_defects_as_error=treat_defects_as_error,
        quiet=quiet,
        verbose=verbose,
        host_diagnostics=host_diagnostics,
        sarif=sarif,
        emoji=emoji,
    )
    try:
        config = resolve_config(root, options.overrides())
    except CLIError as exc:
        raise exit_on_cli_error(exc) from exc
    execute(config, lambda logger: process_reports(reports, config, logger=logger))


__all__ = ["process_command"]
