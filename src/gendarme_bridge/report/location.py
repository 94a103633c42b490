# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Best-effort parsing of defect ``Source`` strings."""

from __future__ import annotations

import re
from typing import Final

from .models import SourceLocation

APPROXIMATION_MARKERS: Final[frozenset[str]] = frozenset({"≈", "~"})
UNAVAILABLE_TOKEN: Final[str] = "unavailable"

_SOURCE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<file>.*?)\s*\((?P<marker>[≈~])?\s*(?P<line>[^,()]*?)\s*(?:,\s*(?P<column>[^,()]*?)\s*)?\)\s*$",
)


def _coerce_number(fragment: str | None) -> int:
    """Return ``fragment`` as a non-negative integer, ``0`` when unusable."""

    if fragment is None:
        return 0
    text = fragment.strip()
    if not text or text.lower() == UNAVAILABLE_TOKEN:
        return 0
    try:
        value = int(text)
    except ValueError:
        return 0
    return max(value, 0)


def extract_location(source: str | None) -> SourceLocation | None:
    """Parse a Gendarme ``Source`` attribute into a structured location.

    Gendarme writes sources as ``path(line)``, ``path(≈line)`` when the line
    was estimated from the nearest sequence point, or ``path(unavailable)``
    when debug symbols carry no line. An optional ``,column`` suffix is
    accepted inside the parentheses.

    Args:
        source: Raw ``Source`` text; ``None`` is treated as missing.

    Returns:
        SourceLocation | None: Structured location, or ``None`` when the text
        has no parenthesised suffix or no file portion. Unparsable or
        unavailable numbers degrade to ``0``.
    """

    if not source:
        return None
    match = _SOURCE_PATTERN.match(source.strip())
    if match is None:
        return None
    file_part = match.group("file").strip()
    if not file_part:
        return None
    return SourceLocation(
        file=file_part,
        line=_coerce_number(match.group("line")),
        column=_coerce_number(match.group("column")),
        approximate=match.group("marker") in APPROXIMATION_MARKERS,
    )


__all__ = ["APPROXIMATION_MARKERS", "UNAVAILABLE_TOKEN", "extract_location"]
