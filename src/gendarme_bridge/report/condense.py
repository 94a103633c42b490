# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Fold defects that differ only in their description text."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import NamedTuple

from .location import extract_location
from .models import Defect, DefectGroup, Report, ReportFile, Rule, RuleReference, SourceLocation, Target


class DefectKey(NamedTuple):
    """Composite identity shared by defects that condense into one group.

    ``location`` holds the normalised :class:`SourceLocation` when the source
    string parses, otherwise the stripped raw source text.
    """

    rule: str
    problem: str
    target: str
    location: SourceLocation | str


def location_key(defect: Defect) -> SourceLocation | str:
    """Return the location component of a defect's grouping key."""

    location = extract_location(defect.source)
    if location is None:
        return defect.source.strip()
    return location.normalized()


def aggregate_descriptions(descriptions: Iterable[str]) -> tuple[str, ...]:
    """Return the description lines of a group.

    A single description keeps its own line order. Several descriptions are
    split into lines, de-duplicated and sorted, so folding an already
    aggregated description with one of its parts yields the same result.
    """

    texts = list(descriptions)
    if len(texts) == 1:
        return tuple(line.rstrip() for line in texts[0].splitlines() if line.strip())
    lines = {
        line.rstrip()
        for text in texts
        for line in text.splitlines()
        if line.strip()
    }
    return tuple(sorted(lines))


@dataclass(slots=True)
class _GroupBucket:
    key: DefectKey
    representative: Defect
    descriptions: list[str] = field(default_factory=list)
    size: int = 0

    def add(self, defect: Defect) -> None:
        self.descriptions.append(defect.description)
        self.size += 1

    def to_group(self) -> DefectGroup:
        location = self.key.location if isinstance(self.key.location, SourceLocation) else None
        aggregated = aggregate_descriptions(self.descriptions)
        return DefectGroup(
            rule=self.key.rule,
            problem=self.key.problem,
            target=self.key.target,
            location=location,
            defect=self.representative.model_copy(update={"description": "\n".join(aggregated)}),
            descriptions=aggregated,
            size=self.size,
        )


@dataclass(slots=True)
class _TargetBucket:
    target: Target
    groups: dict[DefectKey, _GroupBucket] = field(default_factory=dict)


@dataclass(slots=True)
class _RuleBucket:
    rule: Rule
    targets: dict[str, _TargetBucket] = field(default_factory=dict)


def _fold(report: Report) -> dict[str, _RuleBucket]:
    """Bucket every defect of ``report`` by rule, target and defect key.

    Rules and targets sharing an identity are folded into their first
    occurrence, whose descriptive text is kept.
    """

    rules: dict[str, _RuleBucket] = {}
    for rule in report.rules:
        rule_bucket = rules.setdefault(rule.key, _RuleBucket(rule=rule))
        problem = rule_bucket.rule.problem
        for target in rule.targets:
            target_bucket = rule_bucket.targets.setdefault(target.name, _TargetBucket(target=target))
            for defect in target.defects:
                key = DefectKey(rule.key, problem, target.name, location_key(defect))
                group = target_bucket.groups.get(key)
                if group is None:
                    group = _GroupBucket(key=key, representative=defect)
                    target_bucket.groups[key] = group
                group.add(defect)
    return rules


def group_defects(report: Report) -> list[DefectGroup]:
    """Return the defect groups of ``report`` in document order."""

    return [
        group.to_group()
        for rule_bucket in _fold(report).values()
        for target_bucket in rule_bucket.targets.values()
        for group in target_bucket.groups.values()
    ]


def _unique_files(files: Iterable[ReportFile]) -> tuple[ReportFile, ...]:
    seen: dict[str, ReportFile] = {}
    for entry in files:
        seen.setdefault(entry.key, entry)
    return tuple(seen.values())


def _unique_references(references: Iterable[RuleReference]) -> tuple[RuleReference, ...]:
    seen: dict[str, RuleReference] = {}
    for reference in references:
        seen.setdefault(reference.key, reference)
    return tuple(seen.values())


def condense(report: Report) -> Report:
    """Return a copy of ``report`` with duplicate defects folded together.

    Defects are grouped by (rule, problem, target, source location). Each
    group is replaced by its first defect carrying the aggregated
    description: a lone defect keeps its own line order, while a group of
    several merges their lines sorted and de-duplicated. Rule and target order follow their first appearance in the
    input. Running the function on its own output returns an equal report.

    Args:
        report: Report to condense. It is not modified.

    Returns:
        Report: Condensed report.
    """

    rules: list[Rule] = []
    for rule_bucket in _fold(report).values():
        targets = tuple(
            target_bucket.target.model_copy(
                update={"defects": tuple(group.to_group().defect for group in target_bucket.groups.values())},
            )
            for target_bucket in rule_bucket.targets.values()
        )
        rules.append(rule_bucket.rule.model_copy(update={"targets": targets}))

    return report.model_copy(
        update={
            "files": _unique_files(report.files),
            "rule_index": _unique_references(report.rule_index),
            "rules": tuple(rules),
        },
    )


__all__ = [
    "DefectKey",
    "aggregate_descriptions",
    "condense",
    "group_defects",
    "location_key",
]
