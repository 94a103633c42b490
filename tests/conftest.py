# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from xml.sax.saxutils import escape, quoteattr

import pytest

from gendarme_bridge.report.models import Defect, Report, ReportFile, Rule, RuleReference, Target

RULE_URI = "http://www.mono-project.com/Gendarme.Rules.Performance#{name}"

# rule name -> target name -> [(source, description)]
RuleLayout = Mapping[str, Mapping[str, Sequence[tuple[str, str]]]]


def build_report(rules: RuleLayout, *, files: Sequence[str] = ("bin/App.dll",)) -> Report:
    """Return a report holding ``rules`` with a problem text derived from each name."""

    return Report(
        attributes={"date": "2025-01-01T00:00:00"},
        files=tuple(ReportFile(name=name, text=Path(name).stem) for name in files),
        rule_index=tuple(RuleReference(name=name, type="Method", uri=RULE_URI.format(name=name)) for name in rules),
        rules=tuple(
            Rule(
                name=name,
                uri=RULE_URI.format(name=name),
                problem=f"{name} problem",
                solution=f"{name} solution",
                targets=tuple(
                    Target(
                        name=target,
                        defects=tuple(Defect(source=source, description=text) for source, text in defects),
                    )
                    for target, defects in targets.items()
                ),
            )
            for name, targets in rules.items()
        ),
    )


def render_report_xml(rules: RuleLayout, *, files: Sequence[str] = ("bin/App.dll",)) -> str:
    """Return a Gendarme XML document for ``rules``."""

    parts = ['<?xml version="1.0" encoding="utf-8"?>', '<gendarme-output date="2025-01-01T00:00:00">', "<files>"]
    parts.extend(f"<file Name={quoteattr(name)}>{escape(Path(name).stem)}</file>" for name in files)
    parts.append("</files><rules>")
    parts.extend(
        f'<rule Name={quoteattr(name)} Type="Method">{escape(RULE_URI.format(name=name))}</rule>' for name in rules
    )
    parts.append("</rules><results>")
    for name, targets in rules.items():
        parts.append(f"<rule Name={quoteattr(name)} Uri={quoteattr(RULE_URI.format(name=name))}>")
        parts.append(f"<problem>{escape(name)} problem</problem><solution>{escape(name)} solution</solution>")
        for target, defects in targets.items():
            parts.append(f'<target Name={quoteattr(target)} Assembly="App, Version=1.0.0.0">')
            parts.extend(
                f'<defect Severity="Medium" Confidence="High" Location={quoteattr(target)} '
                f"Source={quoteattr(source)}>{escape(text)}</defect>"
                for source, text in defects
            )
            parts.append("</target>")
        parts.append("</rule>")
    parts.append("</results></gendarme-output>")
    return "\n".join(parts)


@pytest.fixture
def report_file(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing Gendarme XML reports under ``tmp_path``."""

    def _write(name: str, rules: RuleLayout, *, files: Sequence[str] = ("bin/App.dll",)) -> Path:
        path = tmp_path / name
        path.write_text(render_report_xml(rules, files=files), encoding="utf-8")
        return path

    return _write
