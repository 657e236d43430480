# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem helpers shared across the pipeline."""

from __future__ import annotations

from .paths import (
    display_relative_path,
    is_same_or_descendant,
    path_depth,
    relative_parts,
    relative_posix,
)

__all__ = [
    "display_relative_path",
    "is_same_or_descendant",
    "path_depth",
    "relative_parts",
    "relative_posix",
]
