# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Image publishing helpers."""

from __future__ import annotations

from .materializer import ImageMaterializer, MaterializeSummary
from .naming import is_published, is_remote_url, published_filename, published_url

__all__ = [
    "ImageMaterializer",
    "MaterializeSummary",
    "is_published",
    "is_remote_url",
    "published_filename",
    "published_url",
]
