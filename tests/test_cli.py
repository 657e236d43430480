# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI tests for the gallery commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from helpers.gallery import PNG_BYTES, WriteConfig, model_payload, release_payload
from typer.testing import CliRunner

from orygallery.cli import app


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("ORYNT3D_DIR", "ORYGALLERY_OUTPUT_DIR", "ORYGALLERY_CACHE_FILE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def library(tmp_path: Path, write_config: WriteConfig) -> Path:
    root = tmp_path / "library"
    write_config(root / "Collection1", release_payload("Winter2024"))
    write_config(root / "Collection1" / "Goblin", model_payload("Goblin", cover="cover.png"))
    (root / "Collection1" / "Goblin" / "cover.png").write_bytes(PNG_BYTES)
    return root


def test_build_command_writes_catalog_and_images(tmp_path: Path, library: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["build", "--root", str(tmp_path), "--source", str(library), "--no-emoji"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads((tmp_path / "public" / "orynt3d-data.json").read_text(encoding="utf-8"))
    model = payload["models"][0]
    assert model["release"] == "Winter2024"
    assert model["image"].startswith("/images/model-goblin-")
    assert (tmp_path / "public" / "images" / model["image"].removeprefix("/images/")).is_file()
    assert (tmp_path / ".build-cache.json").is_file()


def test_extract_reads_source_from_environment(
    tmp_path: Path,
    library: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("ORYNT3D_DIR", str(library))
    runner = CliRunner()

    result = runner.invoke(app, ["extract", "--root", str(tmp_path), "--output-dir", str(tmp_path / "site")])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "site" / "orynt3d-data.json").is_file()
    assert not (tmp_path / "site" / "images").exists()


def test_missing_source_exits_with_error(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["extract", "--root", str(tmp_path), "--source", str(tmp_path / "nope")])

    assert result.exit_code == 1
    assert not (tmp_path / "public" / "orynt3d-data.json").exists()


def test_extract_without_source_fails(tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["extract", "--root", str(tmp_path)])

    assert result.exit_code == 1


def test_build_without_source_uses_existing_catalog(tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["build", "--root", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 0, result.output
    payload = json.loads((tmp_path / "public" / "orynt3d-data.json").read_text(encoding="utf-8"))
    assert payload["isDefaultData"] is True
    assert (tmp_path / "public" / "images" / "placeholder-model.png").is_file()
