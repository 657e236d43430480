# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Incremental build cache keyed by model identity."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Callable, Collection, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from pydantic import ValidationError

from ..logging import GalleryLogger
from ..models import BuildCache, CacheRecord, ModelEntry, utc_timestamp
from ..publish.naming import is_published

# ``image`` and ``dateAdded`` are excluded: the pipeline itself rewrites them.
HASHED_FIELDS: Final[tuple[str, ...]] = (
    "name",
    "notes",
    "tags",
    "collections",
    "attributes",
    "sourcePath",
    "release",
    "subscription",
)


def model_hash(entry: ModelEntry) -> str:
    """Return a digest over the mergeable fields of ``entry``."""

    payload = entry.to_payload()
    subset = {key: payload.get(key) for key in HASHED_FIELDS}
    encoded = json.dumps(subset, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


@dataclass(slots=True)
class ChangeSet:
    """Models split by whether image materialisation must run for them."""

    changed: list[ModelEntry] = field(default_factory=list)
    unchanged: list[ModelEntry] = field(default_factory=list)


def needs_processing(
    entry: ModelEntry,
    record: CacheRecord | None,
    digest: str,
    *,
    publish_prefix: str,
    placeholder_url: str,
) -> bool:
    """Return whether ``entry`` must be (re)processed by the materializer.

    Args:
        entry: Catalog entry under consideration.
        record: Cached record for the entry's identity, if any.
        digest: Current :func:`model_hash` of ``entry``.
        publish_prefix: URL prefix of published images.
        placeholder_url: Shared placeholder; placeholder models are always retried.

    Returns:
        bool: ``True`` when the entry is new, modified, unpublished, or a placeholder.
    """

    if record is None or record.hash != digest:
        return True
    if not is_published(entry.image, publish_prefix):
        return True
    return entry.image == placeholder_url


def categorize(
    models: Sequence[ModelEntry],
    cache: BuildCache,
    *,
    publish_prefix: str,
    placeholder_url: str,
    clock: Callable[[], str] = utc_timestamp,
) -> ChangeSet:
    """Split ``models`` into changed and unchanged sets, refreshing ``cache``.

    Changed models receive a fresh cache record carrying the new digest; the
    previously published image path is kept until the materializer replaces it.
    """

    changes = ChangeSet()
    for entry in models:
        digest = model_hash(entry)
        record = cache.models.get(entry.id)
        if not needs_processing(
            entry,
            record,
            digest,
            publish_prefix=publish_prefix,
            placeholder_url=placeholder_url,
        ):
            changes.unchanged.append(entry)
            continue
        changes.changed.append(entry)
        cache.models[entry.id] = CacheRecord(
            hash=digest,
            last_processed=clock(),
            image_path=record.image_path if record is not None else None,
        )
    return changes


class BuildCacheStore:
    """Read and write the build cache sidecar file."""

    def __init__(self, path: Path, *, logger: GalleryLogger | None = None) -> None:
        self.path = path
        self._logger = logger or GalleryLogger()

    def load(self) -> BuildCache:
        """Return the persisted cache, or an empty cache when missing or unreadable.

        Returns:
            BuildCache: Cache contents; a damaged file only costs a full rebuild.
        """

        if not self.path.is_file():
            return BuildCache()
        try:
            cache = BuildCache.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as exc:
            self._logger.warn(f"Error loading build cache {self.path}: {exc}. Starting with empty cache.")
            return BuildCache()
        self._logger.info(f"Loaded build cache with {len(cache.models)} cached models")
        return cache

    def save(
        self,
        cache: BuildCache,
        *,
        active_ids: Collection[str] | None = None,
        clock: Callable[[], str] = utc_timestamp,
    ) -> None:
        """Persist ``cache``, dropping records for identities not in ``active_ids``.

        Write failures are reported but never abort the run.
        """

        if active_ids is not None:
            keep = set(active_ids)
            cache.models = {model_id: record for model_id, record in cache.models.items() if model_id in keep}
        cache.last_build = clock()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(cache.to_payload(), indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        except OSError as exc:
            self._logger.warn(f"Error saving build cache {self.path}: {exc}")
            return
        self._logger.ok(f"Saved build cache with {len(cache.models)} models")


__all__ = [
    "BuildCacheStore",
    "ChangeSet",
    "HASHED_FIELDS",
    "categorize",
    "model_hash",
    "needs_processing",
]
