# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run-level counters aggregated across per-item processing."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class RunCounters:
    """Aggregate per-item outcomes so failures never abort a run."""

    successes: int = 0
    errors: int = 0
    parse_errors: int = 0
    ignored: int = 0

    def record_success(self) -> None:
        self.successes += 1

    def record_error(self) -> None:
        self.errors += 1

    def record_parse_error(self) -> None:
        self.parse_errors += 1
        self.errors += 1

    def record_ignored(self) -> None:
        self.ignored += 1


__all__ = ["RunCounters"]
