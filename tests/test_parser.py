# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for loading and persisting Gendarme reports."""

from pathlib import Path

import pytest

from gendarme_bridge.errors import MalformedReportError
from gendarme_bridge.report import parse_report, parse_report_text, serialize_report, write_report

SAMPLE = """<?xml version="1.0" encoding="utf-8"?>
<gendarme-output date="2025-03-01 10:00:00Z">
  <files>
    <file Name="c:\\build\\App.dll">App, Version=1.0.0.0</file>
  </files>
  <rules>
    <rule Name="AvoidUnusedParametersRule" Type="Method">http://www.mono-project.com/Gendarme.Rules.Performance#AvoidUnusedParametersRule</rule>
  </rules>
  <results>
    <rule Name="AvoidUnusedParametersRule" Uri="http://www.mono-project.com/Gendarme.Rules.Performance#AvoidUnusedParametersRule">
      <problem>The method contains unused parameters.</problem>
      <solution>Remove the parameter.</solution>
      <target Name="System.Void App.Worker::Run(System.Int32)" Assembly="App, Version=1.0.0.0">
        <defect Severity="Medium" Confidence="Normal" Location="Parameter 'count'" Source="c:\\src\\Worker.cs(≈14)">Parameter 'count' is never used.</defect>
      </target>
    </rule>
  </results>
</gendarme-output>
"""


def test_parse_sample_report(tmp_path: Path) -> None:
    path = tmp_path / "report.xml"
    path.write_text(SAMPLE, encoding="utf-8")

    report = parse_report(path)

    assert report.root_tag == "gendarme-output"
    assert report.attributes["date"] == "2025-03-01 10:00:00Z"
    assert [entry.key for entry in report.files] == ["c:/build/App.dll"]
    assert report.rule_index[0].type == "Method"
    rule = report.rules[0]
    assert rule.identifier == "Gendarme.Rules.Performance.AvoidUnusedParametersRule"
    assert rule.problem == "The method contains unused parameters."
    target = rule.targets[0]
    assert target.assembly == "App, Version=1.0.0.0"
    defect = target.defects[0]
    assert defect.source == "c:\\src\\Worker.cs(≈14)"
    assert defect.description == "Parameter 'count' is never used."
    assert defect.location == "Parameter 'count'"


def test_parse_does_not_touch_source(tmp_path: Path) -> None:
    path = tmp_path / "report.xml"
    path.write_text(SAMPLE, encoding="utf-8")
    parse_report(path)
    assert path.read_text(encoding="utf-8") == SAMPLE


def test_serialized_report_parses_back(tmp_path: Path) -> None:
    report = parse_report_text(SAMPLE)
    out = tmp_path / "nested" / "out.xml"
    write_report(report, out)
    assert parse_report(out) == report
    assert serialize_report(report).startswith('<?xml version="1.0" encoding="utf-8"?>')


@pytest.mark.parametrize(
    ("document", "reason"),
    [
        ("<gendarme-output><results>", "invalid XML"),
        ("<gendarme-output><files/></gendarme-output>", "missing <results>"),
        ("<gendarme-output><results><rule/></results></gendarme-output>", "'Name'"),
        (
            '<gendarme-output><results><rule Name="R"><target/></rule></results></gendarme-output>',
            "<target>",
        ),
        (
            '<gendarme-output><results><rule Name="R"><target Name="T"><defect>d</defect>'
            "</target></rule></results></gendarme-output>",
            "'Source'",
        ),
    ],
)
def test_malformed_documents(tmp_path: Path, document: str, reason: str) -> None:
    path = tmp_path / "bad.xml"
    path.write_text(document, encoding="utf-8")

    with pytest.raises(MalformedReportError, match=reason) as excinfo:
        parse_report(path)

    assert excinfo.value.path == path
    assert str(path) in str(excinfo.value)


def test_missing_report_is_malformed(tmp_path: Path) -> None:
    with pytest.raises(MalformedReportError):
        parse_report(tmp_path / "absent.xml")


def test_rule_without_uri_uses_name() -> None:
    report = parse_report_text('<gendarme-output><results><rule Name="Plain"/></results></gendarme-output>')
    assert report.rules[0].identifier == "Plain"
    assert report.rules[0].problem == ""
