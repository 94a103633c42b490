# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels surfaced to the host build system."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class SeverityPolicy:
    """Uniform severity choice applied to every diagnostic of a run."""

    treat_as_error: bool = False

    @property
    def severity(self) -> Severity:
        """Return the severity assigned to every emitted diagnostic."""

        return Severity.ERROR if self.treat_as_error else Severity.WARNING


_SEVERITY_TO_SARIF_LEVEL: Final[dict[Severity, str]] = {
    Severity.ERROR: "error",
    Severity.WARNING: "warning",
}


def severity_to_sarif(severity: Severity) -> str:
    """Map :class:`Severity` to a SARIF reporting level."""

    return _SEVERITY_TO_SARIF_LEVEL.get(severity, "warning")


__all__ = ["Severity", "SeverityPolicy", "severity_to_sarif"]
