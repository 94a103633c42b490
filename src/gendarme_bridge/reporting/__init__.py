# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Rendering helpers for processed Gendarme reports."""

from __future__ import annotations

from .output import format_diagnostic, write_sarif_report
from .summary import render_defect_summary

__all__ = ["format_diagnostic", "render_defect_summary", "write_sarif_report"]
