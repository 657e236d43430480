# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for config parsing and classification."""

from __future__ import annotations

from pathlib import Path

import pytest
from helpers.gallery import model_payload, release_payload

from orygallery.discovery import ConfigKind, classify, read_config
from orygallery.errors import ConfigParseError
from orygallery.models import ConfigDocument


def _document(payload: dict) -> ConfigDocument:
    return ConfigDocument.model_validate({**payload, "path": Path("/lib/config.orynt3d")})


def test_release_attribute_classifies_as_release() -> None:
    assert classify(_document(release_payload("Winter2024"))) is ConfigKind.RELEASE


def test_subscription_attribute_classifies_as_release() -> None:
    assert classify(_document(release_payload(subscription="Patreon"))) is ConfigKind.RELEASE


def test_release_takes_precedence_over_model_name() -> None:
    payload = release_payload("R1")
    payload["modelmeta"]["name"] = "Goblin"

    assert classify(_document(payload)) is ConfigKind.RELEASE


def test_named_model_classifies_as_model() -> None:
    assert classify(_document(model_payload("Goblin"))) is ConfigKind.MODEL


def test_cover_only_model_classifies_as_model() -> None:
    assert classify(_document(model_payload(None, cover="cover.png"))) is ConfigKind.MODEL


def test_empty_cover_and_null_name_is_ignored() -> None:
    assert classify(_document(model_payload(None, cover=""))) is ConfigKind.IGNORED


def test_scan_attributes_without_release_keys_are_not_release() -> None:
    payload = {"scancfg": {"attributes": {"include": [{"key": "artist", "value": "X"}]}}, "modelmeta": {"name": None}}

    assert classify(_document(payload)) is ConfigKind.IGNORED


def test_camel_case_sections_are_accepted() -> None:
    document = _document({"scanMeta": {"attributes": {"include": [{"key": "release", "value": "R"}]}}})

    assert classify(document) is ConfigKind.RELEASE


def test_null_lists_are_normalised(tmp_path: Path) -> None:
    target = tmp_path / "config.orynt3d"
    target.write_text('{"modelmeta": {"name": "Orc", "notes": null, "tags": null, "attributes": null}}', encoding="utf-8")

    document = read_config(target)

    assert document.model_meta is not None
    assert document.model_meta.tags == []
    assert document.model_meta.notes == ""
    assert document.path == target


def test_structured_attribute_values_are_accepted(tmp_path: Path) -> None:
    target = tmp_path / "config.orynt3d"
    target.write_text(
        '{"modelmeta": {"name": "M", "attributes": [{"key": "dims", "value": [1, 2, {"z": null}]}]}}',
        encoding="utf-8",
    )

    document = read_config(target)

    assert document.model_meta is not None
    assert document.model_meta.attributes[0].value == [1, 2, {"z": None}]


def test_read_config_rejects_invalid_json(tmp_path: Path) -> None:
    target = tmp_path / "config.orynt3d"
    target.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigParseError):
        read_config(target)


def test_read_config_rejects_non_object(tmp_path: Path) -> None:
    target = tmp_path / "config.orynt3d"
    target.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ConfigParseError):
        read_config(target)
