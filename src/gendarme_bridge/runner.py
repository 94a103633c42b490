# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Orchestrate Gendarme runs and the report post-processing pipeline."""

from __future__ import annotations

import os
import shlex
import tempfile
import time
from collections.abc import Sequence
from functools import reduce
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .config import BridgeConfig
from .diagnostics import Diagnostic, emit_diagnostics
from .errors import InvalidConfigurationError, ToolExecutionError
from .logging import BridgeLogger
from .report import condense, merge_report_files, merge_reports, parse_report, write_report
from .report.models import Report
from .reporting import format_diagnostic, render_defect_summary, write_sarif_report
from .tool import ProcessRunner, ToolInvocation, build_arguments, run_tool, verify_config


class RunResult(BaseModel):
    """Aggregate result handed back to the host."""

    model_config = ConfigDict(frozen=True)

    success: bool
    report: Report
    diagnostics: tuple[Diagnostic, ...] = Field(default_factory=tuple)
    invocation: ToolInvocation | None = None
    output_path: Path | None = None

    @property
    def defect_count(self) -> int:
        return len(self.diagnostics)


def logger_for(config: BridgeConfig) -> BridgeLogger:
    """Return a logger reflecting the output preferences of ``config``."""

    return BridgeLogger(
        use_emoji=config.emoji,
        quiet=config.quiet.enabled,
        verbose=config.verbose.enabled,
        host_integration=config.integrate_with_host_diagnostics,
    )


def _accumulate(incoming_path: Path, cumulative_path: Path, config: BridgeConfig) -> Report:
    """Merge ``incoming_path`` into the cumulative report and persist it."""

    first_run = not cumulative_path.exists()
    merged = merge_report_files(cumulative_path, incoming_path)
    if config.condense:
        merged = condense(merged)
    elif first_run:
        # the verbatim copy is already in place
        return merged
    write_report(merged, cumulative_path)
    return merged


def finalize_report(report_path: Path, config: BridgeConfig) -> Report:
    """Run the post-processing stages over one freshly produced report.

    With ``accumulate`` the report is merged into ``config.output_path``;
    otherwise it is condensed (when enabled) and written to
    ``config.output_path`` if one is configured.

    Raises:
        MalformedReportError: If a report cannot be parsed.
    """

    if config.accumulate and config.output_path is not None:
        return _accumulate(report_path, config.output_path, config)
    report = parse_report(report_path)
    if config.condense:
        report = condense(report)
    if config.output_path is not None:
        write_report(report, config.output_path)
    return report


def publish(report: Report, config: BridgeConfig, logger: BridgeLogger) -> list[Diagnostic]:
    """Emit diagnostics for ``report`` through the configured channel."""

    diagnostics = emit_diagnostics(report, config.severity_policy)
    if config.sarif_path is not None:
        write_sarif_report(diagnostics, config.sarif_path)
        logger.debug(f"sarif={config.sarif_path}")
    if not diagnostics:
        logger.ok("No Gendarme violations found")
        return diagnostics
    if config.integrate_with_host_diagnostics:
        for diagnostic in diagnostics:
            logger.echo(format_diagnostic(diagnostic))
    elif config.treat_defects_as_error:
        logger.fail(render_defect_summary(report))
    else:
        logger.warn(render_defect_summary(report))
    return diagnostics


def _result(
    report: Report,
    diagnostics: Sequence[Diagnostic],
    config: BridgeConfig,
    invocation: ToolInvocation | None = None,
) -> RunResult:
    return RunResult(
        success=not (config.treat_defects_as_error and diagnostics),
        report=report,
        diagnostics=tuple(diagnostics),
        invocation=invocation,
        output_path=config.output_path,
    )


def _discard(path: Path, logger: BridgeLogger) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.debug(f"cleanup=failed path={path} error={exc}")


def _temporary_report() -> Path:
    handle, name = tempfile.mkstemp(prefix="gendarme-", suffix=".xml")
    os.close(handle)
    return Path(name)


def run_gendarme(
    config: BridgeConfig,
    *,
    runner: ProcessRunner = run_tool,
    logger: BridgeLogger | None = None,
) -> RunResult:
    """Invoke Gendarme and post-process its report.

    Args:
        config: Run configuration.
        runner: Process collaborator used to execute Gendarme.
        logger: Optional logger; one derived from ``config`` by default.

    Returns:
        RunResult: Final report, emitted diagnostics and overall success.

    Raises:
        ToolNotFoundError: If the Gendarme executable is missing.
        InvalidConfigurationError: If inputs are missing.
        ToolExecutionError: If Gendarme fails with output on stderr.
        MalformedReportError: If a report cannot be parsed.
    """

    log = logger or logger_for(config)
    executable = verify_config(config)

    if config.accumulate or config.output_path is None:
        tool_output, use_temp = _temporary_report(), True
    else:
        tool_output, use_temp = config.output_path, False
    log.info(f"output file: {tool_output}")
    try:
        args = build_arguments(config, tool_output)
        log.info(f"command line arguments to Gendarme: {shlex.join(args)}")
        started = time.perf_counter()
        try:
            invocation = runner(executable, args)
        except OSError as exc:
            raise ToolExecutionError(-1, f"unable to start {executable}: {exc}") from exc
        elapsed_ms = (time.perf_counter() - started) * 1000
        invocation = invocation.model_copy(update={"duration_ms": elapsed_ms})
        log.info(f"finished running Gendarme in {elapsed_ms:.0f}ms")
        if invocation.errored:
            raise ToolExecutionError(invocation.exit_code, invocation.stderr)
        if invocation.stdout.strip():
            log.info(invocation.stdout.rstrip())

        report = finalize_report(tool_output, config)
        diagnostics = publish(report, config, log)
        return _result(report, diagnostics, config, invocation)
    finally:
        if use_temp:
            _discard(tool_output, log)


def process_reports(
    report_paths: Sequence[Path],
    config: BridgeConfig,
    *,
    logger: BridgeLogger | None = None,
) -> RunResult:
    """Post-process existing reports without invoking Gendarme.

    Reports are merged left to right. With ``accumulate`` each one is folded
    into the cumulative ``config.output_path`` in turn.

    Raises:
        InvalidConfigurationError: If no report is given or one is missing.
        MalformedReportError: If a report cannot be parsed.
    """

    log = logger or logger_for(config)
    if not report_paths:
        raise InvalidConfigurationError("No Gendarme reports specified")
    missing = [path for path in report_paths if not path.is_file()]
    if missing:
        raise InvalidConfigurationError(
            "Couldn't find the Gendarme report(s): " + ", ".join(str(path) for path in missing),
        )

    if config.accumulate and config.output_path is not None:
        for path in report_paths:
            log.debug(f"merge={path} into={config.output_path}")
            report = _accumulate(path, config.output_path, config)
    else:
        first, *rest = (parse_report(path) for path in report_paths)
        report = reduce(merge_reports, rest, first)
        if config.condense:
            report = condense(report)
        if config.output_path is not None:
            write_report(report, config.output_path)

    diagnostics = publish(report, config, log)
    return _result(report, diagnostics, config)


__all__ = ["RunResult", "finalize_report", "logger_for", "process_reports", "publish", "run_gendarme"]
