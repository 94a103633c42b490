# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for mapping defects onto build diagnostics."""

from conftest import build_report

from gendarme_bridge.diagnostics import DIAGNOSTIC_CATEGORY, emit_diagnostics
from gendarme_bridge.report import condense, group_defects
from gendarme_bridge.severity import Severity, SeverityPolicy

REPORT = build_report(
    {
        "AvoidUnusedParametersRule": {
            "System.Void App::Run()": [
                ("src/App.cs(≈12)", "first"),
                ("src/App.cs(≈12)", "second"),
                ("symbols unavailable", "third"),
            ],
        },
        "AvoidBoxingRule": {"System.Void App::Box()": [("src/Box.cs(4,9)", "")]},
    },
)


def test_diagnostic_with_location() -> None:
    diag = emit_diagnostics(REPORT, SeverityPolicy())[0]

    assert diag.severity is Severity.WARNING
    assert diag.category == DIAGNOSTIC_CATEGORY == "[analysis]"
    assert diag.code == "Gendarme.Rules.Performance.AvoidUnusedParametersRule"
    assert (diag.file, diag.line, diag.column) == ("src/App.cs", 12, 0)
    assert diag.approximate is True
    assert diag.message == (
        "Gendarme.Rules.Performance.AvoidUnusedParametersRule: AvoidUnusedParametersRule problem\nfirst"
    )


def test_diagnostic_without_location_names_target() -> None:
    diag = emit_diagnostics(REPORT, SeverityPolicy())[2]

    assert (diag.file, diag.line, diag.column) == ("", 0, 0)
    assert diag.message == (
        "Gendarme.Rules.Performance.AvoidUnusedParametersRule: System.Void App::Run(): "
        "AvoidUnusedParametersRule problem\nthird"
    )


def test_empty_description_has_no_trailing_line() -> None:
    diag = emit_diagnostics(REPORT, SeverityPolicy())[3]

    assert diag.message == "Gendarme.Rules.Performance.AvoidBoxingRule: AvoidBoxingRule problem"
    assert (diag.line, diag.column) == (4, 9)


def test_emission_count_matches_raw_defects_and_groups() -> None:
    condensed = condense(REPORT)

    assert len(emit_diagnostics(REPORT, SeverityPolicy())) == REPORT.defect_count() == 4
    assert len(emit_diagnostics(condensed, SeverityPolicy())) == len(group_defects(REPORT)) == 3


def test_condensed_message_carries_aggregated_description() -> None:
    diag = emit_diagnostics(condense(REPORT), SeverityPolicy())[0]

    assert diag.message.endswith("problem\nfirst\nsecond")


def test_error_policy_is_uniform() -> None:
    diagnostics = emit_diagnostics(REPORT, SeverityPolicy(treat_as_error=True))

    assert {diag.severity for diag in diagnostics} == {Severity.ERROR}


def test_emission_follows_document_order() -> None:
    codes = [diag.code.rsplit(".", 1)[-1] for diag in emit_diagnostics(REPORT, SeverityPolicy())]

    assert codes == ["AvoidUnusedParametersRule"] * 3 + ["AvoidBoxingRule"]
