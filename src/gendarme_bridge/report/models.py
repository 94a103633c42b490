# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Immutable in-memory representation of a Gendarme violation report.

Each processing stage (parse, condense, merge) consumes one :class:`Report`
and returns a new one. Containers are tuples owned by their parent node: a
report owns its files and rules, a rule owns its targets and a target owns its
defects.
"""

from __future__ import annotations

import posixpath
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_ROOT_TAG: Final[str] = "gendarme-output"


def normalize_report_path(value: str) -> str:
    """Return the comparison key for a path recorded in a report.

    Args:
        value: Path string exactly as written by Gendarme.

    Returns:
        str: Forward-slash path with redundant separators and ``.``/``..``
        segments collapsed. Blank input yields an empty string.
    """

    cleaned = value.strip().replace("\\", "/")
    if not cleaned:
        return ""
    return posixpath.normpath(cleaned)


class _ReportNode(BaseModel):
    """Base class for frozen report nodes."""

    model_config = ConfigDict(frozen=True)


class ReportFile(_ReportNode):
    """An inspected assembly listed in the ``files`` index."""

    name: str
    text: str = ""

    @property
    def key(self) -> str:
        """Return the normalised path used for merge and dedup lookups."""

        return normalize_report_path(self.name)


class RuleReference(_ReportNode):
    """A rule listed in the ``rules`` index of a report."""

    name: str
    type: str | None = None
    uri: str = ""

    @property
    def key(self) -> str:
        return self.name


class Defect(_ReportNode):
    """A single reported violation instance."""

    source: str
    description: str = ""
    severity: str | None = None
    confidence: str | None = None
    location: str | None = None


class Target(_ReportNode):
    """The code element a rule was evaluated against."""

    name: str
    assembly: str | None = None
    defects: tuple[Defect, ...] = Field(default_factory=tuple)


class Rule(_ReportNode):
    """A named check together with the targets it flagged."""

    name: str
    uri: str = ""
    problem: str = ""
    solution: str = ""
    targets: tuple[Target, ...] = Field(default_factory=tuple)

    @property
    def key(self) -> str:
        """Return the identity used when merging and condensing rules."""

        return self.name

    @property
    def identifier(self) -> str:
        """Return the rule class name derived from the documentation URI.

        ``http://example.org/Gendarme.Rules.Design#AvoidX`` becomes
        ``Gendarme.Rules.Design.AvoidX``. Rules without a URI fall back to
        their ``Name`` attribute.
        """

        uri = self.uri.strip()
        if not uri:
            return self.name
        tail = uri[uri.rfind("/") + 1 :].replace("#", ".")
        return tail or self.name

    def defect_count(self) -> int:
        return sum(len(target.defects) for target in self.targets)


class Report(_ReportNode):
    """Root of a parsed Gendarme report."""

    root_tag: str = DEFAULT_ROOT_TAG
    attributes: dict[str, str] = Field(default_factory=dict)
    files: tuple[ReportFile, ...] = Field(default_factory=tuple)
    rule_index: tuple[RuleReference, ...] = Field(default_factory=tuple)
    rules: tuple[Rule, ...] = Field(default_factory=tuple)

    def defect_count(self) -> int:
        """Return the total number of defects across every rule and target."""

        return sum(rule.defect_count() for rule in self.rules)


class SourceLocation(_ReportNode):
    """Structured form of a defect ``Source`` attribute."""

    file: str
    line: int = 0
    column: int = 0
    approximate: bool = False

    def normalized(self) -> SourceLocation:
        """Return a copy whose file path uses the report path normalisation."""

        return self.model_copy(update={"file": normalize_report_path(self.file)})


class DefectGroup(_ReportNode):
    """Defects sharing rule, problem, target and location, folded into one."""

    rule: str
    problem: str
    target: str
    location: SourceLocation | None
    defect: Defect
    descriptions: tuple[str, ...] = Field(default_factory=tuple)
    size: int = 1

    @property
    def description(self) -> str:
        """Return the aggregated description text."""

        return "\n".join(self.descriptions)


__all__ = [
    "DEFAULT_ROOT_TAG",
    "Defect",
    "DefectGroup",
    "Report",
    "ReportFile",
    "Rule",
    "RuleReference",
    "SourceLocation",
    "Target",
    "normalize_report_path",
]
