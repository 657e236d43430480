# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for catalog persistence."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from orygallery.catalog import CatalogStore
from orygallery.errors import GalleryError
from orygallery.logging import GalleryLogger
from orygallery.models import Catalog, ModelEntry, ScanStats


def test_save_writes_camel_case_and_omits_absent_fields(tmp_path: Path, quiet_logger: GalleryLogger) -> None:
    store = CatalogStore(tmp_path / "public" / "orynt3d-data.json", logger=quiet_logger)
    catalog = Catalog(
        models=[ModelEntry(id="goblin-1", name="Goblin", relative_source_path="Goblin/config.orynt3d")],
        last_updated="2024-01-01T00:00:00.000Z",
        scan_stats=ScanStats(directories_scanned=3),
    )

    store.save(catalog)
    payload = json.loads(store.path.read_text(encoding="utf-8"))

    assert payload["totalCount"] == 1
    assert payload["lastUpdated"] == "2024-01-01T00:00:00.000Z"
    assert payload["scanStats"]["directoriesScanned"] == 3
    assert "isDefaultData" not in payload
    model = payload["models"][0]
    assert model["relativeSourcePath"] == "Goblin/config.orynt3d"
    assert model["notes"] == ""
    assert model["tags"] == []
    for absent in ("release", "subscription", "image", "directoryCollection", "dateAdded"):
        assert absent not in model
    assert not list(store.path.parent.glob("*.tmp"))


def test_load_round_trips_saved_catalog(tmp_path: Path, quiet_logger: GalleryLogger) -> None:
    store = CatalogStore(tmp_path / "orynt3d-data.json", logger=quiet_logger)
    store.save(Catalog(models=[ModelEntry(id="a", name="A", release="R1", image="/images/model-a-x.png")]))

    loaded = store.load()

    assert loaded is not None
    assert loaded.index_by_id()["a"].release == "R1"
    assert loaded.index_by_id()["a"].image == "/images/model-a-x.png"


def test_load_returns_none_for_missing_or_corrupt(tmp_path: Path, quiet_logger: GalleryLogger) -> None:
    store = CatalogStore(tmp_path / "orynt3d-data.json", logger=quiet_logger)

    assert store.load() is None

    store.path.write_text("[oops", encoding="utf-8")

    assert store.load() is None


def test_ensure_writes_default_catalog(tmp_path: Path, quiet_logger: GalleryLogger) -> None:
    store = CatalogStore(tmp_path / "public" / "orynt3d-data.json", logger=quiet_logger)

    catalog = store.ensure()
    payload = json.loads(store.path.read_text(encoding="utf-8"))

    assert catalog.models == []
    assert payload["isDefaultData"] is True
    assert payload["totalCount"] == 0


def test_ensure_refuses_to_replace_unreadable_catalog(tmp_path: Path, quiet_logger: GalleryLogger) -> None:
    store = CatalogStore(tmp_path / "orynt3d-data.json", logger=quiet_logger)
    store.path.write_text("{broken", encoding="utf-8")

    with pytest.raises(GalleryError):
        store.ensure()

    assert store.path.read_text(encoding="utf-8") == "{broken"
