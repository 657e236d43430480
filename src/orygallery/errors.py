# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the catalog pipeline."""

from __future__ import annotations

from pathlib import Path


class GalleryError(RuntimeError):
    """Base class for errors raised by the gallery pipeline."""


class SourceRootMissingError(GalleryError):
    """Raised when the configured source root does not exist."""

    def __init__(self, root: Path) -> None:
        """Record the missing ``root`` for reporting.

        Args:
            root: Source directory that could not be located.
        """

        super().__init__(f"Source directory '{root}' does not exist")
        self.root = root


class OutputDirectoryError(GalleryError):
    """Raised when an output location cannot be created or written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot write output '{path}': {reason}")
        self.path = path


class ConfigParseError(GalleryError):
    """Raised when a single config document cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path


class ConfigError(GalleryError):
    """Raised when gallery configuration input is invalid."""


__all__ = [
    "ConfigError",
    "ConfigParseError",
    "GalleryError",
    "OutputDirectoryError",
    "SourceRootMissingError",
]
