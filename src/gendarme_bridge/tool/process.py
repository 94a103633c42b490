# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrapper around ``subprocess`` execution of the analysis tool."""

from __future__ import annotations

# Bandit: subprocess usage is intentional; arguments are passed as a list and
# ``shell=True`` is never used.
import subprocess  # nosec B404
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict


class ToolInvocation(BaseModel):
    """Captured result of one blocking tool execution."""

    model_config = ConfigDict(frozen=True)

    exit_code: int
    stdout: str = ""
    stderr: str = ""
    duration_ms: float = 0.0

    @property
    def errored(self) -> bool:
        """Return ``True`` when the tool failed and explained why on stderr."""

        return self.exit_code != 0 and bool(self.stderr.strip())


class ProcessRunner(Protocol):
    """Callable that runs an executable and captures its output."""

    def __call__(self, executable: Path, args: Sequence[str]) -> ToolInvocation:
        """Run ``executable`` with ``args`` and block until it exits."""


def run_tool(executable: Path, args: Sequence[str]) -> ToolInvocation:
    """Execute ``executable`` with ``args`` and capture stdout and stderr.

    The call blocks until the process exits; no timeout is applied.

    Raises:
        OSError: If the executable cannot be started.
    """

    # Bandit: the executable path is resolved and verified before this call.
    completed = subprocess.run(  # nosec B603
        [str(executable), *args],
        check=False,
        capture_output=True,
        text=True,
        errors="replace",
        stdin=subprocess.DEVNULL,
    )
    return ToolInvocation(
        exit_code=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )


__all__ = ["ProcessRunner", "ToolInvocation", "run_tool"]
