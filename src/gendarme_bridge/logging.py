# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from functools import lru_cache

import typer
from rich.console import Console
from rich.text import Text


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=8)
def get_console(*, color: bool, emoji: bool) -> Console:
    """Return a cached Rich console configured for the given preferences."""

    tty = detect_tty()
    return Console(
        color_system="auto" if color and tty else None,
        no_color=not (color and tty),
        emoji=emoji,
        soft_wrap=True,
        highlight=False,
    )


def emoji(symbol: str, enable: bool) -> str:
    """Return *symbol* when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def _print_line(msg: str, *, style: str | None, use_emoji: bool, use_color: bool | None = None) -> None:
    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console(color=color_enabled, emoji=use_emoji)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an informational message."""

    _print_line(f"{emoji('ℹ️ ', use_emoji)}{msg}", style="cyan", use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a success message."""

    _print_line(f"{emoji('✅ ', use_emoji)}{msg}", style="green", use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a warning message."""

    _print_line(f"{emoji('⚠️ ', use_emoji)}{msg}", style="yellow", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an error message."""

    _print_line(f"{emoji('❌ ', use_emoji)}{msg}", style="red", use_emoji=use_emoji, use_color=use_color)


@dataclass(slots=True)
class BridgeLogger:
    """Logger honouring the quiet, verbose and host-integration preferences.

    Attributes:
        use_emoji: Whether messages may carry emoji prefixes.
        quiet: Suppress informational messages.
        verbose: Emit debug messages.
        host_integration: Diagnostics are consumed by an IDE or build host,
            so informational chatter is suppressed like ``quiet``.
    """

    use_emoji: bool = False
    quiet: bool = False
    verbose: bool = False
    host_integration: bool = False
    _key_value_re: re.Pattern[str] = re.compile(r"([\w-]+)=(\".*?\"|\S+)")

    @property
    def chatty(self) -> bool:
        return not (self.quiet or self.host_integration)

    def info(self, message: str) -> None:
        if self.chatty:
            info(message, use_emoji=self.use_emoji)

    def ok(self, message: str) -> None:
        if self.chatty:
            ok(message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        warn(message, use_emoji=self.use_emoji)

    def fail(self, message: str) -> None:
        fail(message, use_emoji=self.use_emoji)

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout unconditionally."""

        typer.echo(message)

    def debug(self, message: str) -> None:
        """Emit a debug message with ``key=value`` pairs highlighted."""

        if not self.verbose:
            return
        text = Text("[debug] ", style="bold cyan")
        cursor = 0
        for match in self._key_value_re.finditer(message):
            start, end = match.span()
            if start > cursor:
                text.append(message[cursor:start], style="dim")
            text.append(match.group(1), style="bold magenta")
            text.append("=", style="dim")
            text.append(match.group(2), style="bold green")
            cursor = end
        if cursor < len(message):
            text.append(message[cursor:], style="dim")
        get_console(color=detect_tty(), emoji=self.use_emoji).print(text)


__all__ = ["BridgeLogger", "detect_tty", "emoji", "fail", "get_console", "info", "ok", "warn"]
