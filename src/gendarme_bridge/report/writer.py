# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Serialize report models back into the Gendarme XML layout."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from .models import Defect, Report, Rule, Target
from .parser import FILES_TAG, RESULTS_TAG, RULES_TAG


def build_report_element(report: Report) -> ET.Element:
    """Return an element tree mirroring ``report``."""

    root = ET.Element(report.root_tag, dict(report.attributes))

    files = ET.SubElement(root, FILES_TAG)
    for entry in report.files:
        element = ET.SubElement(files, "file", {"Name": entry.name})
        element.text = entry.text or None

    index = ET.SubElement(root, RULES_TAG)
    for reference in report.rule_index:
        attributes = {"Name": reference.name}
        if reference.type is not None:
            attributes["Type"] = reference.type
        element = ET.SubElement(index, "rule", attributes)
        element.text = reference.uri or None

    results = ET.SubElement(root, RESULTS_TAG)
    for rule in report.rules:
        results.append(_rule_element(rule))
    return root


def _rule_element(rule: Rule) -> ET.Element:
    attributes = {"Name": rule.name}
    if rule.uri:
        attributes["Uri"] = rule.uri
    element = ET.Element("rule", attributes)
    ET.SubElement(element, "problem").text = rule.problem
    ET.SubElement(element, "solution").text = rule.solution
    for target in rule.targets:
        element.append(_target_element(target))
    return element


def _target_element(target: Target) -> ET.Element:
    attributes = {"Name": target.name}
    if target.assembly is not None:
        attributes["Assembly"] = target.assembly
    element = ET.Element("target", attributes)
    for defect in target.defects:
        element.append(_defect_element(defect))
    return element


def _defect_element(defect: Defect) -> ET.Element:
    attributes: dict[str, str] = {}
    if defect.severity is not None:
        attributes["Severity"] = defect.severity
    if defect.confidence is not None:
        attributes["Confidence"] = defect.confidence
    if defect.location is not None:
        attributes["Location"] = defect.location
    attributes["Source"] = defect.source
    element = ET.Element("defect", attributes)
    element.text = defect.description or None
    return element


def serialize_report(report: Report) -> str:
    """Return ``report`` as an indented XML document string."""

    root = build_report_element(report)
    ET.indent(root)
    body = ET.tostring(root, encoding="unicode")
    return f'<?xml version="1.0" encoding="utf-8"?>\n{body}\n'


def write_report(report: Report, path: Path) -> None:
    """Persist ``report`` to ``path``, replacing any existing content."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_report(report), encoding="utf-8")


__all__ = ["build_report_element", "serialize_report", "write_report"]
