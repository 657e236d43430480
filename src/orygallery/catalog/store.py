# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Persistence for the consolidated catalog document."""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import ValidationError

from ..errors import GalleryError, OutputDirectoryError
from ..logging import GalleryLogger
from ..models import Catalog


class CatalogStore:
    """Read and replace the catalog JSON document."""

    def __init__(self, path: Path, *, logger: GalleryLogger | None = None) -> None:
        self.path = path
        self._logger = logger or GalleryLogger()

    def load(self) -> Catalog | None:
        """Return the catalog on disk, or ``None`` when missing or unreadable."""

        if not self.path.is_file():
            return None
        try:
            catalog = Catalog.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as exc:
            self._logger.warn(f"Error loading existing data file {self.path}: {exc}")
            return None
        self._logger.info(f"Loaded {len(catalog.models)} existing models from {self.path}")
        return catalog

    def save(self, catalog: Catalog) -> None:
        """Replace the catalog on disk with ``catalog``.

        The document is written to a sibling temporary file first so a failed
        write never leaves a truncated catalog behind.

        Raises:
            OutputDirectoryError: If the output directory or file cannot be written.
        """

        catalog.total_count = len(catalog.models)
        text = json.dumps(catalog.to_payload(), indent=2, ensure_ascii=False) + "\n"
        staging = self.path.with_name(f".{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            staging.write_text(text, encoding="utf-8")
            os.replace(staging, self.path)
        except OSError as exc:
            raise OutputDirectoryError(self.path, exc.strerror or str(exc)) from exc
        self._logger.ok(f"Data saved to {self.path}")

    def ensure(self) -> Catalog:
        """Return the stored catalog, writing an empty default document when absent.

        Raises:
            GalleryError: If a catalog file exists but cannot be parsed.
        """

        if self.path.exists():
            catalog = self.load()
            if catalog is None:
                raise GalleryError(f"Catalog {self.path} exists but cannot be read")
            return catalog
        self._logger.warn(f"Data file not found at {self.path}; creating an empty catalog")
        catalog = Catalog(models=[], total_count=0, is_default_data=True)
        self.save(catalog)
        return catalog


__all__ = ["CatalogStore"]
