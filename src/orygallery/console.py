# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich consoles shared by the logging and progress helpers."""

from __future__ import annotations

import sys
from functools import lru_cache
from typing import Literal, TextIO

from rich.console import Console

ColorSystem = Literal["auto", "standard", "256", "truecolor", "windows"]


def detect_tty(stream: TextIO | None = None) -> bool:
    """Return whether ``stream`` (stdout by default) is attached to a terminal."""

    target = sys.stdout if stream is None else stream
    try:
        return target.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=16)
def _build_console(color: bool, emoji: bool, tty: bool, stderr: bool) -> Console:
    styled = color and tty
    color_system: ColorSystem | None = "auto" if styled else None
    return Console(
        stderr=stderr,
        color_system=color_system,
        force_terminal=tty,
        no_color=not styled,
        emoji=emoji,
        soft_wrap=True,
        highlight=False,
    )


def get_console(*, color: bool, emoji: bool, stderr: bool = False) -> Console:
    """Return a console for the requested presentation flags.

    Consoles are cached per flag combination and per terminal state of the
    target stream. The stream itself is looked up on every write, so output
    follows later redirection of ``sys.stdout``/``sys.stderr``.

    Args:
        color: ``True`` when ANSI styling may be emitted.
        emoji: ``True`` when emoji shortcodes should render.
        stderr: ``True`` to write to standard error instead of standard output.

    Returns:
        Console: Shared console instance.
    """

    tty = detect_tty(sys.stderr if stderr else sys.stdout)
    return _build_console(color, emoji, tty, stderr)


__all__ = ["detect_tty", "get_console"]
