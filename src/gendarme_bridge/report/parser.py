# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Load Gendarme XML reports into the immutable report model."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Final

from ..errors import MalformedReportError
from .models import Defect, Report, ReportFile, Rule, RuleReference, Target

RESULTS_TAG: Final[str] = "results"
FILES_TAG: Final[str] = "files"
RULES_TAG: Final[str] = "rules"


def parse_report(path: Path) -> Report:
    """Parse the report stored at ``path``.

    Args:
        path: Location of a Gendarme ``--xml`` report.

    Returns:
        Report: Parsed report model.

    Raises:
        MalformedReportError: If the file is unreadable, is not well-formed
            XML, or lacks the required structure.
    """

    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedReportError(path, f"unable to read report ({exc})") from exc
    return parse_report_text(text, source=path)


def parse_report_text(text: str, *, source: Path | None = None) -> Report:
    """Parse report XML held in memory.

    Args:
        text: Serialized report document.
        source: Optional path used when describing failures.

    Returns:
        Report: Parsed report model.

    Raises:
        MalformedReportError: If ``text`` cannot be converted into a report.
    """

    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise MalformedReportError(source, f"invalid XML ({exc})") from exc

    results = root.find(RESULTS_TAG)
    if results is None:
        raise MalformedReportError(source, f"missing <{RESULTS_TAG}> section")

    return Report(
        root_tag=root.tag,
        attributes=dict(root.attrib),
        files=tuple(_parse_files(root.find(FILES_TAG))),
        rule_index=tuple(_parse_rule_index(root.find(RULES_TAG), source)),
        rules=tuple(_parse_rule(element, source) for element in results.findall("rule")),
    )


def _required(element: ET.Element, attribute: str, source: Path | None) -> str:
    value = element.get(attribute)
    if value is None:
        raise MalformedReportError(
            source,
            f"<{element.tag}> element is missing the required '{attribute}' attribute",
        )
    return value


def _child_text(element: ET.Element, tag: str) -> str:
    child = element.find(tag)
    if child is None or child.text is None:
        return ""
    return child.text.strip()


def _parse_files(section: ET.Element | None) -> list[ReportFile]:
    if section is None:
        return []
    files: list[ReportFile] = []
    for element in section.findall("file"):
        name = element.get("Name")
        if name is None:
            # unnamed entries carry no merge key
            continue
        files.append(ReportFile(name=name, text=(element.text or "").strip()))
    return files


def _parse_rule_index(section: ET.Element | None, source: Path | None) -> list[RuleReference]:
    if section is None:
        return []
    return [
        RuleReference(
            name=_required(element, "Name", source),
            type=element.get("Type"),
            uri=(element.text or "").strip(),
        )
        for element in section.findall("rule")
    ]


def _parse_rule(element: ET.Element, source: Path | None) -> Rule:
    return Rule(
        name=_required(element, "Name", source),
        uri=element.get("Uri", ""),
        problem=_child_text(element, "problem"),
        solution=_child_text(element, "solution"),
        targets=tuple(_parse_target(child, source) for child in element.findall("target")),
    )


def _parse_target(element: ET.Element, source: Path | None) -> Target:
    return Target(
        name=_required(element, "Name", source),
        assembly=element.get("Assembly"),
        defects=tuple(_parse_defect(child, source) for child in element.findall("defect")),
    )


def _parse_defect(element: ET.Element, source: Path | None) -> Defect:
    return Defect(
        source=_required(element, "Source", source),
        description=(element.text or "").strip(),
        severity=element.get("Severity"),
        confidence=element.get("Confidence"),
        location=element.get("Location"),
    )


__all__ = ["parse_report", "parse_report_text"]
