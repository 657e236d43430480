# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Prioritised search for a representative preview image."""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from pathlib import Path

from ..constants import (
    IMAGE_EXTENSIONS,
    IMAGE_SUBDIRECTORIES,
    PNG_EXTENSION,
    PREFERRED_PNG_MARKER,
    PREFERRED_PNG_PREFIX,
)
from ..logging import GalleryLogger


class ImageResolver:
    """Locate a preview image for a model directory.

    Candidates are checked in this order, stopping at the first hit:

    1. a PNG whose name starts with ``fn`` or contains ``preview``;
    2. any PNG;
    3. the configured cover, verbatim and then with each image extension
       appended when it has none;
    4. any file with an image extension;
    5. any image inside an ``images``/``thumbnails``/``preview``/``previews``
       child directory.

    Directory listings are sorted by name so the result is deterministic.
    """

    def __init__(
        self,
        *,
        extensions: Sequence[str] = IMAGE_EXTENSIONS,
        subdirectories: Sequence[str] = IMAGE_SUBDIRECTORIES,
        logger: GalleryLogger | None = None,
    ) -> None:
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.subdirectories = tuple(subdirectories)
        self._logger = logger or GalleryLogger()

    def resolve(self, model_dir: Path, cover: str | None = None) -> Path | None:
        """Return the best preview image in ``model_dir`` or ``None``.

        Args:
            model_dir: Directory holding the model files.
            cover: Optional cover filename taken from the model config.

        Returns:
            Path | None: Selected image path, or ``None`` when nothing qualifies.
        """

        try:
            files = self._list_files(model_dir)
        except OSError as exc:
            self._logger.warn(f"Error searching for images in directory {model_dir}: {exc}")
            return None

        strategies: tuple[Callable[[], Path | None], ...] = (
            lambda: self._first(files, self._is_preferred_png),
            lambda: self._first(files, self._is_png),
            lambda: self._find_cover(model_dir, cover),
            lambda: self._first(files, self._is_image),
            lambda: self._find_in_subdirectories(model_dir),
        )
        for level, strategy in enumerate(strategies, start=1):
            found = strategy()
            if found is not None:
                self._logger.debug(f"image level={level} path={found}")
                return found
        self._logger.debug(f"image level=none dir={model_dir}")
        return None

    @staticmethod
    def _list_files(directory: Path) -> list[Path]:
        with os.scandir(directory) as entries:
            names = sorted(entry.name for entry in entries if entry.is_file())
        return [directory / name for name in names]

    @staticmethod
    def _first(files: Sequence[Path], predicate: Callable[[Path], bool]) -> Path | None:
        return next((path for path in files if predicate(path)), None)

    @staticmethod
    def _is_png(path: Path) -> bool:
        return path.suffix.lower() == PNG_EXTENSION

    def _is_preferred_png(self, path: Path) -> bool:
        name = path.name.lower()
        return self._is_png(path) and (name.startswith(PREFERRED_PNG_PREFIX) or PREFERRED_PNG_MARKER in name)

    def _is_image(self, path: Path) -> bool:
        return path.suffix.lower() in self.extensions

    def _find_cover(self, model_dir: Path, cover: str | None) -> Path | None:
        if not cover:
            return None
        direct = model_dir / cover
        if direct.is_file():
            return direct
        if Path(cover).suffix:
            return None
        for ext in self.extensions:
            candidate = model_dir / f"{cover}{ext}"
            if candidate.is_file():
                return candidate
        return None

    def _find_in_subdirectories(self, model_dir: Path) -> Path | None:
        for name in self.subdirectories:
            subdirectory = model_dir / name
            if not subdirectory.is_dir():
                continue
            try:
                files = self._list_files(subdirectory)
            except OSError as exc:
                self._logger.warn(f"Error reading image subdirectory {subdirectory}: {exc}")
                continue
            found = self._first(files, self._is_image)
            if found is not None:
                return found
        return None


__all__ = ["ImageResolver"]
