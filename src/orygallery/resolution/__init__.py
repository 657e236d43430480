# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Release inheritance, model building, and image resolution."""

from __future__ import annotations

from .builder import ModelBuilder, derive_name, slugify, stable_id
from .images import ImageResolver
from .releases import ReleaseIndex, ReleaseRecord, build_release_index, load_configs, release_record

__all__ = [
    "ImageResolver",
    "ModelBuilder",
    "ReleaseIndex",
    "ReleaseRecord",
    "build_release_index",
    "derive_name",
    "load_configs",
    "release_record",
    "slugify",
    "stable_id",
]
