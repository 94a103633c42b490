# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Gendarme command construction and process execution."""

from __future__ import annotations

from .command import build_arguments, resolve_executable, verify_config
from .process import ProcessRunner, ToolInvocation, run_tool

__all__ = [
    "ProcessRunner",
    "ToolInvocation",
    "build_arguments",
    "resolve_executable",
    "run_tool",
    "verify_config",
]
