# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for layered configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from orygallery.config import GalleryConfig, load_config
from orygallery.errors import ConfigError


def test_defaults_are_anchored_to_project_root(tmp_path: Path) -> None:
    config = load_config(tmp_path, env={})

    assert config.source_root is None
    assert config.output_dir == tmp_path.resolve() / "public"
    assert config.cache_path == tmp_path.resolve() / ".build-cache.json"
    assert config.catalog_path == tmp_path.resolve() / "public" / "orynt3d-data.json"
    assert config.publish_dir == tmp_path.resolve() / "public" / "images"
    assert config.placeholder_url == "/images/placeholder-model.png"


def test_pyproject_section_is_read(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[tool.orygallery]\nsource_root = "library"\npublish_prefix = "/media"\n',
        encoding="utf-8",
    )

    config = load_config(tmp_path, env={})

    assert config.source_root == tmp_path.resolve() / "library"
    assert config.publish_prefix == "/media/"


def test_dedicated_file_wins_over_pyproject(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool.orygallery]\noutput_dir = "from-pyproject"\n', encoding="utf-8")
    (tmp_path / "orygallery.toml").write_text('output_dir = "from-file"\n', encoding="utf-8")

    assert load_config(tmp_path, env={}).output_dir == tmp_path.resolve() / "from-file"


def test_environment_then_overrides_take_precedence(tmp_path: Path) -> None:
    (tmp_path / "orygallery.toml").write_text('source_root = "file-lib"\noutput_dir = "file-out"\n', encoding="utf-8")
    env = {"ORYNT3D_DIR": "/srv/models", "ORYGALLERY_OUTPUT_DIR": "env-out"}

    config = load_config(tmp_path, env=env, overrides={"output_dir": Path("/tmp/cli-out"), "cache_path": None})

    assert config.source_root == Path("/srv/models")
    assert config.output_dir == Path("/tmp/cli-out")
    assert config.cache_path == tmp_path.resolve() / ".build-cache.json"


@pytest.mark.parametrize(
    "content",
    [
        'publish_prefix = "images/"\n',
        "progress_interval = -1\n",
        'unknown_key = "x"\n',
        "not toml [",
    ],
)
def test_invalid_configuration_raises(tmp_path: Path, content: str) -> None:
    (tmp_path / "orygallery.toml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path, env={})


def test_publish_prefix_gets_trailing_slash() -> None:
    assert GalleryConfig(publish_prefix="/static/img").placeholder_url == "/static/img/placeholder-model.png"
