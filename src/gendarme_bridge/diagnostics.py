# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Map report defects onto build-system diagnostics."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Final

from pydantic import BaseModel, ConfigDict

from .report.location import extract_location
from .report.models import Defect, Report, Rule, Target
from .severity import Severity, SeverityPolicy

DIAGNOSTIC_CATEGORY: Final[str] = "[analysis]"


class Diagnostic(BaseModel):
    """Normalized diagnostic handed to the host build system."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    category: str = DIAGNOSTIC_CATEGORY
    code: str
    file: str = ""
    line: int = 0
    column: int = 0
    message: str
    approximate: bool = False

    @property
    def has_location(self) -> bool:
        return bool(self.file)


def iter_defects(report: Report) -> Iterator[tuple[Rule, Target, Defect]]:
    """Yield every defect together with its owning rule and target."""

    for rule in report.rules:
        for target in rule.targets:
            for defect in target.defects:
                yield rule, target, defect


def format_message(rule: Rule, target: Target, defect: Defect, *, with_location: bool) -> str:
    """Return the diagnostic text for ``defect``.

    Diagnostics tied to a file read ``<rule>: <problem>``; those without a
    file name the target as well. The description follows on its own line.
    """

    if with_location:
        head = f"{rule.identifier}: {rule.problem}"
    else:
        head = f"{rule.identifier}: {target.name}: {rule.problem}"
    if not defect.description:
        return head
    return f"{head}\n{defect.description}"


def build_diagnostic(rule: Rule, target: Target, defect: Defect, policy: SeverityPolicy) -> Diagnostic:
    location = extract_location(defect.source)
    if location is None:
        return Diagnostic(
            severity=policy.severity,
            code=rule.identifier,
            message=format_message(rule, target, defect, with_location=False),
        )
    return Diagnostic(
        severity=policy.severity,
        code=rule.identifier,
        file=location.file,
        line=location.line,
        column=location.column,
        message=format_message(rule, target, defect, with_location=True),
        approximate=location.approximate,
    )


def emit_diagnostics(report: Report, policy: SeverityPolicy) -> list[Diagnostic]:
    """Return one diagnostic per defect of ``report`` in document order.

    Args:
        report: Report to walk, condensed or not.
        policy: Severity policy applied uniformly to every diagnostic.

    Returns:
        list[Diagnostic]: Diagnostics ordered by rule, target, then defect.
    """

    return [build_diagnostic(rule, target, defect, policy) for rule, target, defect in iter_defects(report)]


__all__ = [
    "DIAGNOSTIC_CATEGORY",
    "Diagnostic",
    "build_diagnostic",
    "emit_diagnostics",
    "format_message",
    "iter_defects",
]
