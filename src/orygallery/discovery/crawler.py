# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem crawler locating per-directory config files."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass, field
from pathlib import Path

from ..constants import CONFIG_FILENAME, DEFAULT_PROGRESS_INTERVAL
from ..errors import SourceRootMissingError
from ..logging import GalleryLogger
from ..progress import IntervalReporter


@dataclass(slots=True)
class CrawlStats:
    """Counters gathered while walking the source tree."""

    directories_scanned: int = 0
    total_files_found: int = 0
    unreadable_directories: int = 0
    duration_seconds: float = 0.0


@dataclass(frozen=True, slots=True)
class CrawlResult:
    """Config files discovered under a root together with scan counters."""

    root: Path
    config_files: tuple[Path, ...]
    stats: CrawlStats = field(default_factory=CrawlStats)


class ConfigCrawler:
    """Walk a directory tree collecting every config file at any depth.

    Directories and files are visited in lexicographic order so repeated
    crawls of an unchanged tree report files in the same order.
    """

    def __init__(
        self,
        *,
        config_filename: str = CONFIG_FILENAME,
        follow_symlinks: bool = False,
        progress_interval: float = DEFAULT_PROGRESS_INTERVAL,
        logger: GalleryLogger | None = None,
    ) -> None:
        """Create a crawler.

        Args:
            config_filename: Exact filename identifying config documents.
            follow_symlinks: When ``True`` descend into symlinked directories.
            progress_interval: Seconds between crawl progress messages.
            logger: Destination for progress and per-directory warnings.
        """

        self.config_filename = config_filename
        self.follow_symlinks = follow_symlinks
        self.progress_interval = progress_interval
        self._logger = logger or GalleryLogger()

    def crawl(self, root: Path) -> CrawlResult:
        """Return all config files under ``root``.

        Unreadable subdirectories are reported and skipped; their siblings
        are still crawled.

        Args:
            root: Directory to walk.

        Returns:
            CrawlResult: Discovered config paths and scan counters.

        Raises:
            SourceRootMissingError: If ``root`` is not an existing directory.
        """

        if not root.is_dir():
            raise SourceRootMissingError(root)
        base = root.resolve()
        stats = CrawlStats()
        found: list[Path] = []
        started = time.monotonic()
        reporter = IntervalReporter(
            interval=self.progress_interval,
            callback=lambda: self._report_progress(stats, started),
        )

        def on_error(error: OSError) -> None:
            stats.directories_scanned += 1
            stats.unreadable_directories += 1
            self._logger.warn(f"Error reading directory {error.filename}: {error.strerror or error}")

        for dirpath, dirnames, filenames in os.walk(base, onerror=on_error, followlinks=self.follow_symlinks):
            stats.directories_scanned += 1
            dirnames.sort()
            current = Path(dirpath)
            for filename in sorted(filenames):
                stats.total_files_found += 1
                if filename != self.config_filename:
                    continue
                candidate = current / filename
                if candidate.is_file():
                    found.append(candidate)
            reporter.tick()

        stats.duration_seconds = round(time.monotonic() - started, 2)
        return CrawlResult(root=base, config_files=tuple(found), stats=stats)

    def _report_progress(self, stats: CrawlStats, started: float) -> None:
        elapsed = max(time.monotonic() - started, 1e-6)
        rate = stats.directories_scanned / elapsed
        self._logger.info(
            f"Scanning directories: {stats.directories_scanned} dirs, "
            f"{stats.total_files_found} files ({rate:.1f} dirs/sec) [{elapsed:.1f}s elapsed]"
        )


__all__ = ["ConfigCrawler", "CrawlResult", "CrawlStats"]
