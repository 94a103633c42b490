# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command running Gendarme and post-processing its report."""

from __future__ import annotations

from pathlib import Path

import typer

from ..runner import run_gendarme
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


def run_command(
    assemblies: list[Path] = typer.Argument(None, metavar="ASSEMBLY...", help="Assemblies to inspect."),
    gendarme: Path | None = typer.Option(None, "--gendarme", help="Path to the Gendarme executable."),
    gendarme_config: Path | None = typer.Option(None, "--gendarme-config", help="Maps to --config."),
    ruleset: str | None = typer.Option(None, "--ruleset", help="Maps to --set."),
    ignore: Path | None = typer.Option(None, "--ignore", help="Maps to --ignore."),
    severity: str | None = typer.Option(None, "--severity", help="Maps to --severity."),
    confidence: str | None = typer.Option(None, "--confidence", help="Maps to --confidence."),
    limit: int | None = typer.Option(None, "--limit", min=0, help="Maps to --limit."),
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
    """Run Gendarme against ASSEMBLY files and surface its defects."""

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
    overrides = options.overrides()
    overrides.update(
        {
            "assemblies": assemblies or None,
            "gendarme_path": gendarme,
            "config_file": gendarme_config,
            "ruleset": ruleset,
            "ignore_file": ignore,
            "severity": severity,
            "confidence": confidence,
            "limit": limit,
        },
    )
    try:
        config = resolve_config(root, overrides)
    except CLIError as exc:
        raise exit_on_cli_error(exc) from exc
    execute(config, lambda logger: run_gendarme(config, logger=logger))


__all__ = ["run_command"]
