# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for defect source location parsing."""

import pytest

from gendarme_bridge.report import SourceLocation, extract_location


def test_exact_line() -> None:
    assert extract_location("src/Foo.cs(42)") == SourceLocation(file="src/Foo.cs", line=42)


def test_approximate_line() -> None:
    location = extract_location("src/Foo.cs(≈10)")
    assert location is not None
    assert location.line == 10
    assert location.approximate is True


def test_unavailable_line_degrades_to_zero() -> None:
    location = extract_location("src/Foo.cs(unavailable)")
    assert location == SourceLocation(file="src/Foo.cs", line=0, column=0)


def test_line_and_column() -> None:
    location = extract_location(r"c:\work\Foo.cs(12,7)")
    assert location == SourceLocation(file=r"c:\work\Foo.cs", line=12, column=7)


def test_parentheses_inside_path() -> None:
    location = extract_location(r"C:\Program Files (x86)\src\Foo.cs(≈3)")
    assert location is not None
    assert location.file == r"C:\Program Files (x86)\src\Foo.cs"
    assert location.line == 3


@pytest.mark.parametrize("source", ["src/Foo.cs(abc)", "src/Foo.cs(12,x)"])
def test_garbage_numbers_degrade(source: str) -> None:
    location = extract_location(source)
    assert location is not None
    assert location.file == "src/Foo.cs"
    assert location.column == 0


@pytest.mark.parametrize(
    "source",
    ["", "src/Foo.cs", "debugging symbols unavailable, IL offset 0x0012", "(42)"],
)
def test_no_location(source: str) -> None:
    assert extract_location(source) is None


def test_normalized_path_collapses_separators() -> None:
    location = extract_location(r"src\.\sub\..\Foo.cs(1)")
    assert location is not None
    assert location.normalized().file == "src/Foo.cs"
