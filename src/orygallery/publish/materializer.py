# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Copy resolved source images into the publish directory."""

from __future__ import annotations

import shutil
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ..constants import PLACEHOLDER_PNG_BYTES
from ..discovery.classify import read_config
from ..errors import ConfigParseError, OutputDirectoryError
from ..logging import GalleryLogger
from ..models import BuildCache, ModelEntry
from ..progress import Advance
from ..resolution.images import ImageResolver
from .naming import is_published, is_remote_url, published_filename, published_url


@dataclass(slots=True)
class MaterializeSummary:
    """Outcome counters for one materialisation pass."""

    copied: int = 0
    placeholders: int = 0
    errors: int = 0
    updated: int = 0
    skipped: int = 0
    duration_seconds: float = 0.0


class ImageMaterializer:
    """Publish preview images for changed models, falling back to a placeholder."""

    def __init__(
        self,
        publish_dir: Path,
        *,
        publish_prefix: str,
        placeholder_name: str,
        resolver: ImageResolver,
        placeholder_source: Path | None = None,
        logger: GalleryLogger | None = None,
    ) -> None:
        """Create a materializer.

        Args:
            publish_dir: Flat directory receiving copied images.
            publish_prefix: URL prefix under which ``publish_dir`` is served.
            placeholder_name: Filename of the shared placeholder image.
            resolver: Fallback search used when a recorded source image is gone.
            placeholder_source: Optional image copied in as the placeholder.
            logger: Destination for per-model messages.
        """

        self.publish_dir = publish_dir
        self.publish_prefix = publish_prefix
        self.placeholder_name = placeholder_name
        self.placeholder_source = placeholder_source
        self._resolver = resolver
        self._logger = logger or GalleryLogger()

    @property
    def placeholder_url(self) -> str:
        return published_url(self.publish_prefix, self.placeholder_name)

    def prepare(self) -> None:
        """Create the publish directory and the shared placeholder image.

        Raises:
            OutputDirectoryError: If the publish directory cannot be created.
        """

        try:
            self.publish_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputDirectoryError(self.publish_dir, exc.strerror or str(exc)) from exc
        target = self.publish_dir / self.placeholder_name
        if target.exists():
            return
        try:
            if self.placeholder_source is not None and self.placeholder_source.is_file():
                shutil.copyfile(self.placeholder_source, target)
            else:
                target.write_bytes(PLACEHOLDER_PNG_BYTES)
        except OSError as exc:
            self._logger.warn(f"Could not create placeholder image: {exc}")
            return
        self._logger.info("Created placeholder image for models without images")

    def materialize(
        self,
        changed: Sequence[ModelEntry],
        cache: BuildCache,
        *,
        advance: Advance | None = None,
    ) -> MaterializeSummary:
        """Publish images for ``changed`` models, updating entries and ``cache`` in place.

        Args:
            changed: Catalog entries selected for processing.
            cache: Build cache whose records receive the published path.
            advance: Optional progress callback invoked once per model.

        Returns:
            MaterializeSummary: Counters describing the pass.
        """

        summary = MaterializeSummary()
        started = time.monotonic()
        for entry in changed:
            previous = entry.image
            entry.image = self._publish(entry, summary)
            if entry.image != previous:
                summary.updated += 1
            record = cache.models.get(entry.id)
            if record is not None:
                record.image_path = entry.image
            if advance is not None:
                advance()
        summary.duration_seconds = round(time.monotonic() - started, 2)
        return summary

    def _publish(self, entry: ModelEntry, summary: MaterializeSummary) -> str:
        image = entry.image
        if image and image != self.placeholder_url and is_published(image, self.publish_prefix):
            summary.skipped += 1
            return image

        source = self._locate_source(entry)
        if source is None:
            summary.placeholders += 1
            return self.placeholder_url
        filename = published_filename(entry.id, source)
        try:
            shutil.copy2(source, self.publish_dir / filename)
        except OSError as exc:
            self._logger.warn(f"Error copying image for model \"{entry.name}\": {exc}")
            summary.errors += 1
            summary.placeholders += 1
            return self.placeholder_url
        summary.copied += 1
        self._logger.debug(f"copied model={entry.id} source={source}")
        return published_url(self.publish_prefix, filename)

    def _locate_source(self, entry: ModelEntry) -> Path | None:
        """Return the source image for ``entry``, re-resolving when it has vanished.

        Re-resolution searches the model directory with the cover named in
        the model's own config, so every priority level still applies.
        """

        image = entry.image
        if image and image != self.placeholder_url and not is_remote_url(image):
            candidate = Path(image)
            if candidate.is_file():
                return candidate
            self._logger.warn(f"Image file not found for model \"{entry.name}\": {image}")
        if not entry.source_path:
            return None
        config_path = Path(entry.source_path)
        return self._resolver.resolve(config_path.parent, _configured_cover(config_path))


def _configured_cover(config_path: Path) -> str | None:
    """Return the cover named by the model config at ``config_path``, if still readable."""

    try:
        meta = read_config(config_path).model_meta
    except ConfigParseError:
        return None
    return meta.cover if meta is not None else None


__all__ = ["ImageMaterializer", "MaterializeSummary"]
