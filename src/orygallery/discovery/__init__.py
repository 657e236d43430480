# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config discovery and classification."""

from __future__ import annotations

from .classify import (
    ClassifiedConfig,
    ConfigKind,
    classify,
    is_model_config,
    is_release_config,
    read_config,
)
from .crawler import ConfigCrawler, CrawlResult, CrawlStats

__all__ = [
    "ClassifiedConfig",
    "ConfigCrawler",
    "ConfigKind",
    "CrawlResult",
    "CrawlStats",
    "classify",
    "is_model_config",
    "is_release_config",
    "read_config",
]
