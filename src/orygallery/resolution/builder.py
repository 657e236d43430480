# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Turn model configs plus inherited releases into catalog entries."""

from __future__ import annotations

import hashlib
import re
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Final

from pydantic import JsonValue

from ..constants import RELEASE_KEYS, STABLE_ID_HASH_LENGTH
from ..filesystem.paths import relative_parts, relative_posix
from ..models import AttributeEntry, ConfigDocument, ModelEntry, utc_timestamp
from ..publish.naming import is_published
from .images import ImageResolver
from .releases import ReleaseRecord

_SLUG_RE: Final[re.Pattern[str]] = re.compile(r"[^a-z0-9]")


def slugify(name: str) -> str:
    """Return ``name`` lower-cased with every non-alphanumeric character replaced by ``-``."""

    return _SLUG_RE.sub("-", name.lower())


def stable_id(name: str, relative_path: str) -> str:
    """Return a deterministic identity for a model.

    The identity is the slug of ``name`` followed by a short digest of
    ``name`` and ``relative_path`` so it stays greppable while remaining
    distinct for models sharing a name.

    Args:
        name: Resolved model name.
        relative_path: Config path relative to the scan root, POSIX separators.

    Returns:
        str: Identity of the form ``<slug>-<hex digest>``.
    """

    digest = hashlib.md5(f"{name}-{relative_path}".encode("utf-8"), usedforsecurity=False).hexdigest()
    return f"{slugify(name)}-{digest[:STABLE_ID_HASH_LENGTH]}"


def derive_name(model_dir: Path, root: Path) -> str:
    """Return the last non-blank directory segment below ``root``.

    Falls back to the name of ``model_dir`` itself for configs at the root.
    """

    segments = [segment for segment in relative_parts(model_dir, root) if segment.strip()]
    if segments:
        return segments[-1]
    return model_dir.name


class ModelBuilder:
    """Build :class:`ModelEntry` records for model configs under ``root``."""

    def __init__(
        self,
        root: Path,
        *,
        image_resolver: ImageResolver,
        publish_prefix: str,
        placeholder_url: str,
        prior: Mapping[str, ModelEntry] | None = None,
        clock: Callable[[], str] = utc_timestamp,
    ) -> None:
        """Create a builder.

        Args:
            root: Scan root that relative paths are computed against.
            image_resolver: Resolver used when no published image is carried forward.
            publish_prefix: URL prefix identifying already-published images.
            placeholder_url: Shared placeholder; never carried forward.
            prior: Entries from the previous catalog keyed by identity.
            clock: Source of ``dateAdded`` timestamps for new models.
        """

        self.root = root
        self._resolver = image_resolver
        self._publish_prefix = publish_prefix
        self._placeholder_url = placeholder_url
        self._prior = dict(prior or {})
        self._clock = clock

    def build(self, document: ConfigDocument, releases: Sequence[ReleaseRecord]) -> ModelEntry:
        """Return the catalog entry for a model config.

        Args:
            document: Model-classified config document.
            releases: Applicable releases in merge order; earlier records win
                when two releases supply the same attribute key.

        Returns:
            ModelEntry: Resolved entry with inherited attributes and tags.
        """

        meta = document.model_meta
        if meta is None:
            raise ValueError(f"{document.path} has no model metadata")
        model_dir = document.directory
        relative_path = relative_posix(document.path, self.root)
        directory_segments = relative_parts(model_dir, self.root)
        name = meta.name or derive_name(model_dir, self.root)
        model_id = stable_id(name, relative_path)

        attributes = list(meta.attributes)
        tags = list(meta.tags)
        promoted = self._merge_releases(releases, attributes, tags)

        prior = self._prior.get(model_id)
        entry = ModelEntry(
            id=model_id,
            name=name,
            notes=meta.notes,
            tags=tags,
            collections=list(meta.collections),
            attributes=attributes,
            release=promoted.get("release"),
            subscription=promoted.get("subscription"),
            directory_collection=directory_segments[0] if directory_segments else None,
            source_path=str(document.path),
            relative_source_path=relative_path,
            date_added=prior.date_added if prior is not None and prior.date_added else self._clock(),
        )
        entry.image = self._carried_image(prior) or self._resolve_image(model_dir, meta.cover)
        return entry

    @staticmethod
    def _merge_releases(
        releases: Sequence[ReleaseRecord],
        attributes: list[AttributeEntry],
        tags: list[str],
    ) -> dict[str, JsonValue]:
        """Union release attributes and tags into the model's own lists in place.

        Returns:
            dict[str, JsonValue]: ``release``/``subscription`` values to promote,
            kept exactly as the release declares them.
        """

        keys = {attribute.key for attribute in attributes}
        promoted: dict[str, JsonValue] = {}
        for release in releases:
            for attribute in release.attributes:
                if attribute.key in RELEASE_KEYS and attribute.key not in promoted and attribute.value is not None:
                    promoted[attribute.key] = attribute.value
                if attribute.key not in keys:
                    attributes.append(attribute)
                    keys.add(attribute.key)
            for tag in release.tags:
                if tag not in tags:
                    tags.append(tag)
        return promoted

    def _carried_image(self, prior: ModelEntry | None) -> str | None:
        if prior is None or prior.image == self._placeholder_url:
            return None
        return prior.image if is_published(prior.image, self._publish_prefix) else None

    def _resolve_image(self, model_dir: Path, cover: str | None) -> str | None:
        found = self._resolver.resolve(model_dir, cover)
        return str(found) if found is not None else None


__all__ = ["ModelBuilder", "derive_name", "slugify", "stable_id"]
