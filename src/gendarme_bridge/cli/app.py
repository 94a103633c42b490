# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands."""

from __future__ import annotations

import typer

from .process import process_command
from .run import run_command

app = typer.Typer(
    name="gendarme-bridge",
    help="Run Gendarme and surface its defects as build diagnostics.",
    add_completion=False,
    no_args_is_help=True,
)
app.command("run")(run_command)
app.command("process")(process_command)

__all__ = ["app"]
