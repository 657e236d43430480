# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Incremental build cache helpers."""

from __future__ import annotations

from .build_cache import (
    HASHED_FIELDS,
    BuildCacheStore,
    ChangeSet,
    categorize,
    model_hash,
    needs_processing,
)

__all__ = [
    "BuildCacheStore",
    "ChangeSet",
    "HASHED_FIELDS",
    "categorize",
    "model_hash",
    "needs_processing",
]
