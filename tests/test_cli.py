# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the gendarme-bridge command line interface."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from gendarme_bridge.cli.app import app
from gendarme_bridge.report import parse_report


def test_process_prints_host_diagnostics(report_file, tmp_path: Path) -> None:
    report = report_file("r.xml", {"R1": {"T1": [("src/a.cs(10)", "x"), ("src/a.cs(10)", "y")]}})
    runner = CliRunner()

    result = runner.invoke(app, ["process", str(report), "--root", str(tmp_path), "--host-diagnostics"])

    assert result.exit_code == 0, result.output
    assert "src/a.cs(10,0): [analysis] warning Gendarme.Rules.Performance.R1: " in result.stdout
    assert "    x" in result.stdout
    assert "    y" in result.stdout


def test_process_fails_when_defects_are_errors(report_file, tmp_path: Path) -> None:
    report = report_file("r.xml", {"R1": {"T1": [("src/a.cs(10)", "x")]}})
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["process", str(report), "--root", str(tmp_path), "--treat-defects-as-error", "--host-diagnostics"],
    )

    assert result.exit_code == 1
    assert "[analysis] error" in result.stdout


def test_process_summary_mode(report_file, tmp_path: Path) -> None:
    report = report_file("r.xml", {"R1": {"T1": [("src/a.cs(10)", "x")]}})
    runner = CliRunner()

    result = runner.invoke(app, ["process", str(report), "--root", str(tmp_path)])

    assert result.exit_code == 0
    assert "Found 1 Gendarme violations" in result.stdout


def test_process_writes_output(report_file, tmp_path: Path) -> None:
    report = report_file("r.xml", {"R1": {"T1": [("a.cs(1)", "x"), ("a.cs(1)", "y")]}})
    output = tmp_path / "out.xml"
    runner = CliRunner()

    result = runner.invoke(app, ["process", str(report), "--root", str(tmp_path), "--output", str(output)])

    assert result.exit_code == 0
    assert parse_report(output).rules[0].targets[0].defects[0].description == "x\ny"


def test_process_reports_malformed_input(tmp_path: Path) -> None:
    bad = tmp_path / "bad.xml"
    bad.write_text("<gendarme-output/>", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(app, ["process", str(bad), "--root", str(tmp_path)])

    assert result.exit_code == 1
    assert "bad.xml" in result.stdout


def test_conflicting_flags_are_rejected(report_file, tmp_path: Path) -> None:
    report = report_file("r.xml", {"R1": {}})
    runner = CliRunner()

    result = runner.invoke(app, ["process", str(report), "--root", str(tmp_path), "--quiet", "--verbose"])

    assert result.exit_code == 1
    assert "mutually exclusive" in result.stdout


def test_run_reports_missing_tool(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["run", "App.dll", "--root", str(tmp_path), "--gendarme", str(tmp_path / "missing" / "gendarme.exe")],
    )

    assert result.exit_code == 1
    assert "Couldn't find the Gendarme executable" in result.stdout


def test_process_combines_pyproject_accumulate_with_output_flag(report_file, tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.gendarme-bridge]\naccumulate = true\n", encoding="utf-8")
    report = report_file("r.xml", {"R1": {"T1": [("a.cs(1)", "x")]}})
    output = tmp_path / "cumulative.xml"
    runner = CliRunner()

    result = runner.invoke(app, ["process", str(report), "--root", str(tmp_path), "--output", str(output)])

    assert result.exit_code == 0, result.output
    assert parse_report(output).rules[0].targets[0].defects[0].description == "x"


def test_process_verbose_flag_overrides_pyproject_quiet(report_file, tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.gendarme-bridge]\nquiet = true\n", encoding="utf-8")
    report = report_file("r.xml", {"R1": {"T1": [("a.cs(1)", "x")]}})
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["process", str(report), "--root", str(tmp_path), "--verbose", "--sarif", str(tmp_path / "out.sarif")],
    )

    assert result.exit_code == 0, result.output
    assert "[debug] sarif=" in result.stdout
