# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Levelled console messages and section headers for gallery runs."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar, Final, Literal

from rich.rule import Rule
from rich.text import Text

from .console import detect_tty, get_console

Level = Literal["info", "ok", "warn", "fail"]


@dataclass(frozen=True, slots=True)
class _LevelStyle:
    symbol: str
    style: str
    stderr: bool = False


_LEVELS: Final[dict[Level, _LevelStyle]] = {
    "info": _LevelStyle("ℹ️ ", "cyan"),
    "ok": _LevelStyle("✅ ", "green"),
    "warn": _LevelStyle("⚠️ ", "yellow"),
    "fail": _LevelStyle("❌ ", "red", stderr=True),
}


def emoji(symbol: str, enable: bool) -> str:
    """Return *symbol* when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def emit(level: Level, msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Print ``msg`` with the prefix and style registered for ``level``.

    Failures go to standard error; every other level goes to standard output.

    Args:
        level: Message severity.
        msg: Message text.
        use_emoji: Prefix the message with the level's emoji.
        use_color: Explicit colour flag; ``None`` enables colour on a terminal.
    """

    spec = _LEVELS[level]
    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console(color=color_enabled, emoji=use_emoji, stderr=spec.stderr)
    text = Text(f"{emoji(spec.symbol, use_emoji)}{msg}")
    if color_enabled:
        text.stylize(spec.style)
    console.print(text)


def section(title: str, *, use_color: bool) -> None:
    """Print a header separating the stages of a run."""

    console = get_console(color=use_color, emoji=True)
    if use_color and detect_tty():
        console.print()
        console.print(Rule(title))
    else:
        console.print(f"\n--- {title} ---")


@dataclass(slots=True)
class GalleryLogger:
    """Display settings for one run, threaded through every pipeline stage."""

    use_emoji: bool = True
    use_color: bool | None = None
    debug_enabled: bool = False

    _KEY_VALUE_RE: ClassVar[re.Pattern[str]] = re.compile(r"([\w-]+)=(\".*?\"|\S+)")

    def info(self, message: str) -> None:
        emit("info", message, use_emoji=self.use_emoji, use_color=self.use_color)

    def ok(self, message: str) -> None:
        emit("ok", message, use_emoji=self.use_emoji, use_color=self.use_color)

    def warn(self, message: str) -> None:
        emit("warn", message, use_emoji=self.use_emoji, use_color=self.use_color)

    def fail(self, message: str) -> None:
        emit("fail", message, use_emoji=self.use_emoji, use_color=self.use_color)

    def section(self, title: str) -> None:
        section(title, use_color=detect_tty() if self.use_color is None else self.use_color)

    def debug(self, message: str) -> None:
        """Print ``message`` when debug output is enabled.

        ``key=value`` pairs are highlighted so per-model diagnostics such as
        ``copied model=<id> source=<path>`` stay scannable.
        """

        if not self.debug_enabled:
            return
        color_enabled = detect_tty() if self.use_color is None else self.use_color
        text = Text("[debug] ", style="bold cyan")
        cursor = 0
        for match in self._KEY_VALUE_RE.finditer(message):
            start, end = match.span()
            if start > cursor:
                text.append(message[cursor:start], style="dim")
            text.append(match.group(1), style="bold magenta")
            text.append("=", style="dim")
            text.append(match.group(2), style="bold green")
            cursor = end
        if cursor < len(message):
            text.append(message[cursor:], style="dim")
        get_console(color=color_enabled, emoji=self.use_emoji).print(text)


__all__ = ["GalleryLogger", "Level", "emit", "emoji", "section"]
