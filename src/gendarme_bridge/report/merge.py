# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Combine reports produced by separate Gendarme invocations."""

from __future__ import annotations

import shutil
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import TypeVar

from .models import Report, Rule
from .parser import parse_report

_EntryT = TypeVar("_EntryT")


def _union(
    base: Iterable[_EntryT],
    incoming: Iterable[_EntryT],
    key: Callable[[_EntryT], str],
) -> tuple[_EntryT, ...]:
    """Return ``base`` followed by the ``incoming`` entries whose key is new."""

    merged = list(base)
    known = {key(entry) for entry in merged}
    for entry in incoming:
        entry_key = key(entry)
        if entry_key in known:
            continue
        known.add(entry_key)
        merged.append(entry)
    return tuple(merged)


def _merge_rules(base: Sequence[Rule], incoming: Sequence[Rule]) -> tuple[Rule, ...]:
    merged = list(base)
    positions = {rule.key: index for index, rule in reversed(list(enumerate(merged)))}
    for rule in incoming:
        index = positions.get(rule.key)
        if index is None:
            positions[rule.key] = len(merged)
            merged.append(rule)
            continue
        # base problem/solution text wins; targets are appended as-is
        existing = merged[index]
        merged[index] = existing.model_copy(update={"targets": existing.targets + rule.targets})
    return tuple(merged)


def merge_reports(base: Report | None, incoming: Report) -> Report:
    """Merge ``incoming`` into the cumulative ``base`` report.

    Files and rule index entries are unioned by key with the base entry
    winning. Rules only present in ``incoming`` are appended wholesale; when a
    rule exists in both, the incoming targets are appended to the base rule
    without de-duplication, which is left to :func:`condense`. No defect of
    either input is ever dropped.

    Args:
        base: Previously accumulated report, or ``None`` on the first run.
        incoming: Freshly produced report.

    Returns:
        Report: The updated cumulative report. ``incoming`` itself when there
        is no base yet.
    """

    if base is None:
        return incoming
    return base.model_copy(
        update={
            "attributes": dict(base.attributes),
            "files": _union(base.files, incoming.files, lambda entry: entry.key),
            "rule_index": _union(base.rule_index, incoming.rule_index, lambda entry: entry.key),
            "rules": _merge_rules(base.rules, incoming.rules),
        },
    )


def merge_report_files(base_path: Path, incoming_path: Path) -> Report:
    """Fold the report at ``incoming_path`` into the cumulative ``base_path``.

    When ``base_path`` does not exist yet the incoming document is copied
    there verbatim. The merged result is returned, not written; callers decide
    whether to condense before persisting it.

    Raises:
        MalformedReportError: If either document cannot be parsed.
    """

    incoming = parse_report(incoming_path)
    if not base_path.exists():
        base_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(incoming_path, base_path)
        return incoming
    return merge_reports(parse_report(base_path), incoming)


__all__ = ["merge_report_files", "merge_reports"]
