# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Naming rules for published images."""

from __future__ import annotations

from pathlib import PurePath

from ..constants import PUBLISHED_IMAGE_PREFIX, URL_PREFIXES


def is_remote_url(value: str) -> bool:
    """Return whether ``value`` is an absolute HTTP(S) URL."""

    return value.startswith(URL_PREFIXES)


def is_published(value: str | None, publish_prefix: str) -> bool:
    """Return whether ``value`` already points at a publishable location."""

    if not value:
        return False
    return value.startswith(publish_prefix) or is_remote_url(value)


def published_filename(model_id: str, source: PurePath) -> str:
    """Return the deterministic publish filename for ``source``."""

    return f"{PUBLISHED_IMAGE_PREFIX}{model_id}-{source.name}"


def published_url(publish_prefix: str, filename: str) -> str:
    return f"{publish_prefix}{filename}"


__all__ = ["is_published", "is_remote_url", "published_filename", "published_url"]
