# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Progress rendering helpers for crawl and build passes."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from .console import detect_tty, get_console

Advance = Callable[[], None]


def _noop() -> None:
    return None


@dataclass(slots=True)
class IntervalReporter:
    """Invoke ``callback`` at most once per ``interval`` seconds of wall time."""

    interval: float
    callback: Callable[[], None]
    clock: Callable[[], float] = time.monotonic
    _last: float = field(init=False, default=0.0)

    def __post_init__(self) -> None:
        self._last = self.clock()

    def tick(self) -> None:
        now = self.clock()
        if now - self._last >= self.interval:
            self.callback()
            self._last = now


@contextmanager
def pass_progress(description: str, total: int, *, enabled: bool) -> Iterator[Advance]:
    """Yield a callable advancing a transient progress bar for one pass.

    The bar is only rendered when ``enabled`` and stdout is a terminal;
    otherwise the yielded callable does nothing.

    Args:
        description: Label shown beside the bar.
        total: Number of items processed by the pass.
        enabled: Caller preference for progress output.

    Yields:
        Advance: Callable advancing the bar by one item.
    """

    if not enabled or total <= 0 or not detect_tty():
        yield _noop
        return
    console = get_console(color=True, emoji=True)
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(bar_width=30),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )
    with progress:
        task_id = progress.add_task(description, total=total)

        def advance() -> None:
            progress.advance(task_id)

        yield advance


__all__ = ["Advance", "IntervalReporter", "pass_progress"]
