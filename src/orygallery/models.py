# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data models for config documents, catalog entries, and the build cache."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Final

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    JsonValue,
    SerializationInfo,
    field_validator,
    model_serializer,
)
from pydantic.alias_generators import to_camel


def utc_timestamp() -> str:
    """Return the current UTC time as an ISO-8601 string with millisecond precision."""

    now = datetime.now(timezone.utc)
    return f"{now.strftime('%Y-%m-%dT%H:%M:%S')}.{now.microsecond // 1000:03d}Z"


def _empty_list_when_null(value: Any) -> Any:
    return [] if value is None else value


class AttributeEntry(BaseModel):
    """Key/value attribute attached to models and release configs."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    key: str
    value: JsonValue = None


class AttributeInclude(BaseModel):
    """``scancfg.attributes`` block listing inheritable attributes."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    include: list[AttributeEntry] = Field(default_factory=list)

    @field_validator("include", mode="before")
    @classmethod
    def _coerce_include(cls, value: Any) -> Any:
        return _empty_list_when_null(value)


class TagInclude(BaseModel):
    """``scancfg.tags`` block listing inheritable tags."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    include: list[str] = Field(default_factory=list)

    @field_validator("include", mode="before")
    @classmethod
    def _coerce_include(cls, value: Any) -> Any:
        return _empty_list_when_null(value)


class ScanMeta(BaseModel):
    """Scan-level section of a config document carrying inheritable data."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    attributes: AttributeInclude | None = None
    tags: TagInclude | None = None

    @property
    def included_attributes(self) -> list[AttributeEntry]:
        return list(self.attributes.include) if self.attributes is not None else []

    @property
    def included_tags(self) -> list[str]:
        return list(self.tags.include) if self.tags is not None else []


class ModelMeta(BaseModel):
    """Model-level section of a config document."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str | None = None
    notes: str = ""
    tags: list[str] = Field(default_factory=list)
    collections: list[str] = Field(default_factory=list)
    attributes: list[AttributeEntry] = Field(default_factory=list)
    cover: str | None = None

    @field_validator("tags", "collections", "attributes", mode="before")
    @classmethod
    def _coerce_lists(cls, value: Any) -> Any:
        return _empty_list_when_null(value)

    @field_validator("notes", mode="before")
    @classmethod
    def _coerce_notes(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("cover", mode="before")
    @classmethod
    def _coerce_cover(cls, value: Any) -> Any:
        return value if isinstance(value, str) else None


class ConfigDocument(BaseModel):
    """Parsed ``config.orynt3d`` document identified by its file path.

    On disk the sections are spelled ``scancfg`` and ``modelmeta``; the
    camel-case ``scanMeta``/``modelMeta`` spellings are accepted as well.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", protected_namespaces=())

    path: Path
    scan_meta: ScanMeta | None = Field(
        default=None,
        validation_alias=AliasChoices("scancfg", "scanMeta", "scan_meta"),
    )
    model_meta: ModelMeta | None = Field(
        default=None,
        validation_alias=AliasChoices("modelmeta", "modelMeta", "model_meta"),
    )

    @property
    def directory(self) -> Path:
        """Return the directory containing the config file."""

        return self.path.parent


_ABSENT_WHEN_NONE: Final[frozenset[str]] = frozenset(
    {
        "release",
        "subscription",
        "directory_collection",
        "directoryCollection",
        "image",
        "source_path",
        "sourcePath",
        "relative_source_path",
        "relativeSourcePath",
        "date_added",
        "dateAdded",
        "scan_stats",
        "scanStats",
        "is_default_data",
        "isDefaultData",
        "last_build",
        "lastBuild",
        "image_path",
        "imagePath",
    }
)


class _CamelModel(BaseModel):
    """Base model serialising to camel-case keys with optional fields omitted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    @model_serializer(mode="wrap")
    def _omit_absent(self, handler: Callable[[Any], dict[str, Any]], info: SerializationInfo) -> dict[str, Any]:
        payload = handler(self)
        return {key: value for key, value in payload.items() if value is not None or key not in _ABSENT_WHEN_NONE}

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-compatible, camel-cased representation."""

        return self.model_dump(mode="json", by_alias=True)


class ModelEntry(_CamelModel):
    """Resolved catalog record for a single model."""

    id: str
    name: str
    notes: str = ""
    tags: list[str] = Field(default_factory=list)
    collections: list[str] = Field(default_factory=list)
    attributes: list[AttributeEntry] = Field(default_factory=list)
    release: JsonValue = None
    subscription: JsonValue = None
    directory_collection: str | None = None
    source_path: str | None = None
    relative_source_path: str | None = None
    image: str | None = None
    date_added: str | None = None

    @field_validator("tags", "collections", "attributes", mode="before")
    @classmethod
    def _coerce_lists(cls, value: Any) -> Any:
        return _empty_list_when_null(value)


class ScanStats(_CamelModel):
    """Counters describing the crawl and resolution passes."""

    directories_scanned: int = 0
    total_files_found: int = 0
    config_files_found: int = 0
    release_configs_found: int = 0
    unreadable_directories: int = 0
    parse_errors: int = 0
    ignored_configs: int = 0
    scan_duration_seconds: float = 0.0


class Catalog(_CamelModel):
    """Consolidated catalog document consumed by the browsing UI."""

    models: list[ModelEntry] = Field(default_factory=list)
    last_updated: str = Field(default_factory=utc_timestamp)
    total_count: int = 0
    scan_stats: ScanStats | None = None
    is_default_data: bool | None = None

    def index_by_id(self) -> dict[str, ModelEntry]:
        """Return the models keyed by identity."""

        return {model.id: model for model in self.models}


class CacheRecord(_CamelModel):
    """Per-model build cache entry."""

    hash: str
    last_processed: str
    image_path: str | None = None


class BuildCache(_CamelModel):
    """Persisted sidecar mapping model identity to a content digest."""

    models: dict[str, CacheRecord] = Field(default_factory=dict)
    last_build: str | None = None


__all__ = [
    "AttributeEntry",
    "AttributeInclude",
    "BuildCache",
    "CacheRecord",
    "Catalog",
    "ConfigDocument",
    "ModelEntry",
    "ModelMeta",
    "ScanMeta",
    "ScanStats",
    "TagInclude",
    "utc_timestamp",
]
