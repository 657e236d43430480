# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants for crawling, image resolution, and publishing."""

from __future__ import annotations

import base64
from typing import Final

CONFIG_FILENAME: Final[str] = "config.orynt3d"
CATALOG_FILENAME: Final[str] = "orynt3d-data.json"
BUILD_CACHE_FILENAME: Final[str] = ".build-cache.json"
PROJECT_CONFIG_FILENAME: Final[str] = "orygallery.toml"

RELEASE_KEYS: Final[frozenset[str]] = frozenset({"release", "subscription"})

IMAGE_EXTENSIONS: Final[tuple[str, ...]] = (".png", ".jpg", ".jpeg", ".webp", ".gif")
PNG_EXTENSION: Final[str] = ".png"
PREFERRED_PNG_PREFIX: Final[str] = "fn"
PREFERRED_PNG_MARKER: Final[str] = "preview"
IMAGE_SUBDIRECTORIES: Final[tuple[str, ...]] = ("images", "thumbnails", "preview", "previews")

IMAGES_DIR_NAME: Final[str] = "images"
PUBLISH_PREFIX: Final[str] = "/images/"
PLACEHOLDER_NAME: Final[str] = "placeholder-model.png"
URL_PREFIXES: Final[tuple[str, ...]] = ("http://", "https://")
PUBLISHED_IMAGE_PREFIX: Final[str] = "model-"

STABLE_ID_HASH_LENGTH: Final[int] = 8
DEFAULT_PROGRESS_INTERVAL: Final[float] = 1.0

ENV_SOURCE_ROOT: Final[str] = "ORYNT3D_DIR"
ENV_OUTPUT_DIR: Final[str] = "ORYGALLERY_OUTPUT_DIR"
ENV_CACHE_FILE: Final[str] = "ORYGALLERY_CACHE_FILE"

# 1x1 PNG written when no placeholder source is configured.
PLACEHOLDER_PNG_BYTES: Final[bytes] = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)
