# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Gendarme report model and post-processing stages."""

from __future__ import annotations

from .condense import DefectKey, aggregate_descriptions, condense, group_defects
from .location import extract_location
from .merge import merge_report_files, merge_reports
from .models import (
    Defect,
    DefectGroup,
    Report,
    ReportFile,
    Rule,
    RuleReference,
    SourceLocation,
    Target,
    normalize_report_path,
)
from .parser import parse_report, parse_report_text
from .writer import serialize_report, write_report

__all__ = [
    "Defect",
    "DefectGroup",
    "DefectKey",
    "Report",
    "ReportFile",
    "Rule",
    "RuleReference",
    "SourceLocation",
    "Target",
    "aggregate_descriptions",
    "condense",
    "extract_location",
    "group_defects",
    "merge_report_files",
    "merge_reports",
    "normalize_report_path",
    "parse_report",
    "parse_report_text",
    "serialize_report",
    "write_report",
]
