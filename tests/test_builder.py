# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for model entry construction and inheritance merging."""

from __future__ import annotations

from pathlib import Path

import pytest
from helpers.gallery import model_payload

from orygallery.logging import GalleryLogger
from orygallery.models import AttributeEntry, ConfigDocument, ModelEntry
from orygallery.resolution import ImageResolver, ModelBuilder, ReleaseRecord, derive_name, slugify, stable_id

FIXED_NOW = "2024-01-01T00:00:00.000Z"


def _document(path: Path, payload: dict) -> ConfigDocument:
    return ConfigDocument.model_validate({**payload, "path": path})


def _release(directory: Path, *attributes: tuple[str, str], tags: tuple[str, ...] = ()) -> ReleaseRecord:
    return ReleaseRecord(
        config_path=directory / "config.orynt3d",
        governed_directory=directory,
        attributes=tuple(AttributeEntry(key=key, value=value) for key, value in attributes),
        tags=tags,
    )


@pytest.fixture
def builder_factory(tmp_path: Path, quiet_logger: GalleryLogger):
    def _factory(prior: dict[str, ModelEntry] | None = None) -> ModelBuilder:
        return ModelBuilder(
            tmp_path,
            image_resolver=ImageResolver(logger=quiet_logger),
            publish_prefix="/images/",
            placeholder_url="/images/placeholder-model.png",
            prior=prior,
            clock=lambda: FIXED_NOW,
        )

    return _factory


def test_slugify_replaces_every_non_alphanumeric() -> None:
    assert slugify("Goblin King (v2)") == "goblin-king--v2-"


def test_stable_id_is_deterministic_and_path_sensitive() -> None:
    first = stable_id("Goblin", "A/Goblin/config.orynt3d")

    assert first == stable_id("Goblin", "A/Goblin/config.orynt3d")
    assert first.startswith("goblin-")
    assert len(first.rsplit("-", 1)[1]) == 8
    assert first != stable_id("Goblin", "B/Goblin/config.orynt3d")


def test_derive_name_uses_last_segment(tmp_path: Path) -> None:
    assert derive_name(tmp_path / "A" / "Orc Warrior", tmp_path) == "Orc Warrior"
    assert derive_name(tmp_path, tmp_path) == tmp_path.name


def test_build_inherits_release_attributes_and_tags(tmp_path: Path, builder_factory) -> None:
    model_dir = tmp_path / "A" / "B" / "model"
    document = _document(model_dir / "config.orynt3d", model_payload("Goblin", tags=["orc"]))
    release = _release(tmp_path / "A", ("release", "R1"), ("artist", "Sam"), tags=("orc", "fantasy"))

    entry = builder_factory().build(document, [release])

    assert entry.release == "R1"
    assert entry.subscription is None
    assert AttributeEntry(key="release", value="R1") in entry.attributes
    assert AttributeEntry(key="artist", value="Sam") in entry.attributes
    assert entry.tags == ["orc", "fantasy"]
    assert entry.directory_collection == "A"
    assert entry.relative_source_path == "A/B/model/config.orynt3d"
    assert entry.source_path == str(model_dir / "config.orynt3d")
    assert entry.date_added == FIXED_NOW


def test_own_attribute_is_not_overwritten_by_release(tmp_path: Path, builder_factory) -> None:
    document = _document(
        tmp_path / "A" / "m" / "config.orynt3d",
        model_payload("M", attributes=[{"key": "release", "value": "Own"}]),
    )

    entry = builder_factory().build(document, [_release(tmp_path / "A", ("release", "R1"))])

    assert [attr for attr in entry.attributes if attr.key == "release"] == [AttributeEntry(key="release", value="Own")]


def test_deepest_release_wins(tmp_path: Path, builder_factory) -> None:
    document = _document(tmp_path / "A" / "B" / "m" / "config.orynt3d", model_payload("M"))
    inner = _release(tmp_path / "A" / "B", ("release", "Inner"), ("subscription", "Gold"))
    outer = _release(tmp_path / "A", ("release", "Outer"))

    entry = builder_factory().build(document, [inner, outer])

    assert entry.release == "Inner"
    assert entry.subscription == "Gold"
    assert [attr.value for attr in entry.attributes if attr.key == "release"] == ["Inner"]


def test_name_falls_back_to_directory(tmp_path: Path, builder_factory) -> None:
    document = _document(tmp_path / "Dragons" / "Red Dragon" / "config.orynt3d", model_payload(None, cover="x.png"))

    entry = builder_factory().build(document, [])

    assert entry.name == "Red Dragon"
    assert entry.id.startswith("red-dragon-")


def test_root_level_model_has_no_directory_collection(tmp_path: Path, builder_factory) -> None:
    entry = builder_factory().build(_document(tmp_path / "config.orynt3d", model_payload("Root")), [])

    assert entry.directory_collection is None
    assert "directoryCollection" not in entry.to_payload()


def test_image_resolved_from_filesystem(tmp_path: Path, builder_factory) -> None:
    model_dir = tmp_path / "A" / "Goblin"
    model_dir.mkdir(parents=True)
    (model_dir / "cover.jpg").write_bytes(b"x")

    entry = builder_factory().build(_document(model_dir / "config.orynt3d", model_payload("Goblin", cover="cover.jpg")), [])

    assert entry.image == str(model_dir / "cover.jpg")


def test_prior_published_image_and_date_are_carried_forward(tmp_path: Path, builder_factory) -> None:
    model_dir = tmp_path / "A" / "Goblin"
    model_dir.mkdir(parents=True)
    (model_dir / "cover.png").write_bytes(b"x")
    document = _document(model_dir / "config.orynt3d", model_payload("Goblin"))
    model_id = stable_id("Goblin", "A/Goblin/config.orynt3d")
    prior = ModelEntry(id=model_id, name="Goblin", image="/images/model-x.png", date_added="2020-05-05T00:00:00.000Z")

    entry = builder_factory({model_id: prior}).build(document, [])

    assert entry.image == "/images/model-x.png"
    assert entry.date_added == "2020-05-05T00:00:00.000Z"


def test_placeholder_is_not_carried_forward(tmp_path: Path, builder_factory) -> None:
    model_dir = tmp_path / "Goblin"
    model_dir.mkdir()
    (model_dir / "new.png").write_bytes(b"x")
    document = _document(model_dir / "config.orynt3d", model_payload("Goblin"))
    model_id = stable_id("Goblin", "Goblin/config.orynt3d")
    prior = ModelEntry(id=model_id, name="Goblin", image="/images/placeholder-model.png")

    entry = builder_factory({model_id: prior}).build(document, [])

    assert entry.image == str(model_dir / "new.png")


def test_promoted_release_keeps_declared_value(tmp_path: Path, builder_factory) -> None:
    document = _document(tmp_path / "A" / "m" / "config.orynt3d", model_payload("M"))
    release = ReleaseRecord(
        config_path=tmp_path / "A" / "config.orynt3d",
        governed_directory=tmp_path / "A",
        attributes=(AttributeEntry(key="release", value=2024),),
        tags=(),
    )

    entry = builder_factory().build(document, [release])

    assert entry.release == 2024
    assert entry.to_payload()["release"] == 2024
    assert AttributeEntry(key="release", value=2024) in entry.attributes
