# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest
from helpers.gallery import WriteConfig

from orygallery.config import GalleryConfig
from orygallery.logging import GalleryLogger


@pytest.fixture
def write_config() -> WriteConfig:
    """Return a helper writing ``config.orynt3d`` into a directory."""

    def _write(directory: Path, payload: Mapping[str, Any] | str) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        target = directory / "config.orynt3d"
        text = payload if isinstance(payload, str) else json.dumps(payload)
        target.write_text(text, encoding="utf-8")
        return target

    return _write


@pytest.fixture
def quiet_logger() -> GalleryLogger:
    return GalleryLogger(use_emoji=False, use_color=False)


@pytest.fixture
def gallery_config(tmp_path: Path) -> GalleryConfig:
    """Return a configuration rooted in ``tmp_path`` with a ``library`` source tree."""

    source = tmp_path / "library"
    source.mkdir()
    return GalleryConfig(
        source_root=source,
        output_dir=tmp_path / "public",
        cache_path=tmp_path / ".build-cache.json",
        emoji=False,
        color=False,
    )
