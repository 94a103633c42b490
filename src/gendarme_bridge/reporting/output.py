# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Emit diagnostics in formats understood by build hosts."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Final

from ..diagnostics import Diagnostic
from ..severity import severity_to_sarif

SARIF_VERSION: Final[str] = "2.1.0"
SARIF_SCHEMA: Final[str] = "https://schemastore.azurewebsites.net/schemas/json/sarif-2.1.0.json"
TOOL_NAME: Final[str] = "gendarme"
DEFAULT_ORIGIN: Final[str] = "gendarme-bridge"
_CONTINUATION_INDENT: Final[str] = "    "


def format_diagnostic(diagnostic: Diagnostic, *, origin: str = DEFAULT_ORIGIN) -> str:
    """Render ``diagnostic`` using the MSBuild canonical message format.

    ``path(line,column): [analysis] warning CODE: text`` when a file is known,
    ``origin : [analysis] warning CODE: text`` otherwise. Additional message
    lines are indented beneath the header.
    """

    if diagnostic.has_location:
        head = f"{diagnostic.file}({diagnostic.line},{diagnostic.column})"
    else:
        head = f"{origin} "
    first, *rest = diagnostic.message.splitlines() or [""]
    header = f"{head}: {diagnostic.category} {diagnostic.severity.value} {diagnostic.code}: {first}"
    if not rest:
        return header
    return "\n".join([header, *(f"{_CONTINUATION_INDENT}{line}" for line in rest)])


def write_sarif_report(
    diagnostics: Sequence[Diagnostic],
    path: Path,
    *,
    tool_version: str | None = None,
) -> None:
    """Write ``diagnostics`` as a single-run SARIF document."""

    rules: dict[str, dict[str, object]] = {}
    results: list[dict[str, object]] = []
    for diag in diagnostics:
        if diag.code not in rules:
            rules[diag.code] = {
                "id": diag.code,
                "name": diag.code,
                "shortDescription": {"text": diag.message.splitlines()[0][:120] if diag.message else diag.code},
            }
        entry: dict[str, object] = {
            "ruleId": diag.code,
            "level": severity_to_sarif(diag.severity),
            "message": {"text": diag.message},
        }
        if diag.file:
            physical_location: dict[str, object] = {"artifactLocation": {"uri": diag.file}}
            region: dict[str, int] = {}
            if diag.line:
                region["startLine"] = diag.line
            if diag.column:
                region["startColumn"] = diag.column
            if region:
                physical_location["region"] = region
            entry["locations"] = [{"physicalLocation": physical_location}]
        results.append(entry)

    document = {
        "version": SARIF_VERSION,
        "$schema": SARIF_SCHEMA,
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": TOOL_NAME,
                        "version": tool_version or "unknown",
                        "rules": list(rules.values()),
                    },
                },
                "results": results,
            },
        ],
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=2), encoding="utf-8")


__all__ = ["format_diagnostic", "write_sarif_report"]
