# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Two-pass release resolution: load every config, then index the releases."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path

from ..discovery.classify import ClassifiedConfig, ConfigKind, classify, read_config
from ..errors import ConfigParseError
from ..filesystem.paths import is_same_or_descendant, path_depth
from ..logging import GalleryLogger
from ..metrics import RunCounters
from ..models import AttributeEntry
from ..progress import Advance


@dataclass(frozen=True, slots=True)
class ReleaseRecord:
    """Inheritable attributes and tags declared by a release config."""

    config_path: Path
    governed_directory: Path
    attributes: tuple[AttributeEntry, ...]
    tags: tuple[str, ...]

    @property
    def depth(self) -> int:
        return path_depth(self.governed_directory)

    def governs(self, directory: Path) -> bool:
        """Return whether ``directory`` is the governed directory or nested under it."""

        return is_same_or_descendant(directory, self.governed_directory)


class ReleaseIndex:
    """Release records keyed by config path, queried per model directory."""

    def __init__(self, records: Iterable[ReleaseRecord] = ()) -> None:
        self._records: dict[Path, ReleaseRecord] = {}
        for record in records:
            self._records[record.config_path] = record

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ReleaseRecord]:
        return iter(self._records.values())

    def __contains__(self, config_path: object) -> bool:
        return config_path in self._records

    def applicable(self, model_directory: Path) -> list[ReleaseRecord]:
        """Return the releases governing ``model_directory``, deepest first.

        Releases whose governed directories sit at the same depth are
        ordered by config path.

        Args:
            model_directory: Directory containing the model config.

        Returns:
            list[ReleaseRecord]: Every release whose governed directory is
            ``model_directory`` or one of its ancestors.
        """

        matches = [record for record in self._records.values() if record.governs(model_directory)]
        return sorted(matches, key=lambda record: (-record.depth, str(record.config_path)))


def release_record(config: ClassifiedConfig) -> ReleaseRecord:
    """Return the :class:`ReleaseRecord` described by a release-classified config."""

    scan_meta = config.document.scan_meta
    attributes = tuple(scan_meta.included_attributes) if scan_meta is not None else ()
    tags = tuple(scan_meta.included_tags) if scan_meta is not None else ()
    return ReleaseRecord(
        config_path=config.path,
        governed_directory=config.document.directory,
        attributes=attributes,
        tags=tags,
    )


def load_configs(
    paths: Sequence[Path],
    *,
    counters: RunCounters,
    logger: GalleryLogger,
    advance: Advance | None = None,
) -> list[ClassifiedConfig]:
    """Parse and classify every discovered config file.

    Unparseable files are reported, counted, and excluded; ignored documents
    are counted and excluded. The result preserves discovery order.

    Args:
        paths: Config file paths in discovery order.
        counters: Run counters updated with parse errors and ignored documents.
        logger: Destination for per-file warnings.
        advance: Optional progress callback invoked once per file.

    Returns:
        list[ClassifiedConfig]: Release and model configs in discovery order.
    """

    classified: list[ClassifiedConfig] = []
    for path in paths:
        try:
            document = read_config(path)
        except ConfigParseError as exc:
            counters.record_parse_error()
            logger.warn(f"Error analyzing {exc}")
            continue
        finally:
            if advance is not None:
                advance()
        kind = classify(document)
        if kind is ConfigKind.IGNORED:
            counters.record_ignored()
            logger.debug(f"ignored path={path}")
            continue
        classified.append(ClassifiedConfig(document=document, kind=kind))
    return classified


def build_release_index(configs: Iterable[ClassifiedConfig]) -> ReleaseIndex:
    """Return a :class:`ReleaseIndex` holding every release-classified config."""

    return ReleaseIndex(release_record(config) for config in configs if config.kind is ConfigKind.RELEASE)


__all__ = [
    "ReleaseIndex",
    "ReleaseRecord",
    "build_release_index",
    "load_configs",
    "release_record",
]
