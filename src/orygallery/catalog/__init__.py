# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Catalog document persistence."""

from __future__ import annotations

from .store import CatalogStore

__all__ = ["CatalogStore"]
