# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Plain-text defect summary used when host integration is disabled."""

from __future__ import annotations

from ..report.models import Report


def render_defect_summary(report: Report) -> str:
    """Return a human-readable summary of every rule and its defects.

    Each rule contributes its identifier, problem, solution and the list of
    defect locations. Defects without a ``Location`` attribute fall back to
    their ``Source`` text.
    """

    lines = [f"Found {report.defect_count()} Gendarme violations", ""]
    for rule in report.rules:
        lines.append(f"Rule: {rule.identifier}")
        lines.append(f"Problem: {rule.problem}")
        lines.append(f"Solution: {rule.solution}")
        lines.append("Error locations:")
        for target in rule.targets:
            for defect in target.defects:
                lines.append(f"  * {defect.location or defect.source}")
    return "\n".join(lines)


__all__ = ["render_defect_summary"]
