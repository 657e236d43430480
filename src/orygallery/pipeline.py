# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Catalog build pipeline: extract models, then materialise their images."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from .cache.build_cache import BuildCacheStore, ChangeSet, categorize
from .catalog.store import CatalogStore
from .config import GalleryConfig
from .discovery.classify import ConfigKind
from .discovery.crawler import ConfigCrawler, CrawlResult
from .errors import ConfigError
from .filesystem.paths import display_relative_path
from .logging import GalleryLogger
from .metrics import RunCounters
from .models import Catalog, ModelEntry, ScanStats, utc_timestamp
from .progress import pass_progress
from .publish.materializer import ImageMaterializer, MaterializeSummary
from .resolution.builder import ModelBuilder
from .resolution.images import ImageResolver
from .resolution.releases import build_release_index, load_configs


@dataclass(slots=True)
class ExtractResult:
    """Catalog produced by an extraction run together with its counters."""

    catalog: Catalog
    crawl: CrawlResult
    counters: RunCounters = field(default_factory=RunCounters)
    release_count: int = 0


@dataclass(slots=True)
class MaterializeResult:
    """Catalog after image materialisation plus the change set and summary."""

    catalog: Catalog
    changes: ChangeSet
    summary: MaterializeSummary


def extract_catalog(
    config: GalleryConfig,
    *,
    logger: GalleryLogger | None = None,
    clock: Callable[[], str] = utc_timestamp,
) -> ExtractResult:
    """Crawl the source tree, resolve every model, and write the catalog.

    Releases are collected from every config before any model inherits from
    them. The catalog is written only after all models are resolved.

    Args:
        config: Gallery configuration; ``source_root`` must be set.
        logger: Destination for user-facing output.
        clock: Timestamp source for ``lastUpdated`` and new ``dateAdded`` values.

    Returns:
        ExtractResult: The written catalog and run counters.

    Raises:
        ConfigError: If no source root is configured.
        SourceRootMissingError: If the source root does not exist.
        OutputDirectoryError: If the catalog cannot be written.
    """

    log = logger or GalleryLogger(use_emoji=config.emoji)
    if config.source_root is None:
        raise ConfigError("No source directory configured; set ORYNT3D_DIR or pass --source")
    started = time.monotonic()
    log.info(f"Starting recursive search for model data in: {config.source_root}")

    store = CatalogStore(config.catalog_path, logger=log)
    prior = store.load()
    prior_index = prior.index_by_id() if prior is not None else {}

    crawler = ConfigCrawler(
        config_filename=config.config_filename,
        progress_interval=config.progress_interval,
        logger=log,
    )
    crawl = crawler.crawl(config.source_root)
    log.info(
        f"Directory scan complete in {crawl.stats.duration_seconds:.2f} seconds: "
        f"{crawl.stats.directories_scanned} directories, {len(crawl.config_files)} config files"
    )

    counters = RunCounters()
    with pass_progress("Analyzing config files", len(crawl.config_files), enabled=config.color) as advance:
        configs = load_configs(crawl.config_files, counters=counters, logger=log, advance=advance)
    releases = build_release_index(configs)
    log.info(f"Found {len(releases)} release-level configs")

    builder = ModelBuilder(
        crawl.root,
        image_resolver=ImageResolver(logger=log),
        publish_prefix=config.publish_prefix,
        placeholder_url=config.placeholder_url,
        prior=prior_index,
        clock=clock,
    )
    model_configs = [item for item in configs if item.kind is ConfigKind.MODEL]
    models: list[ModelEntry] = []
    seen: dict[str, str] = {}
    with pass_progress("Processing model configs", len(model_configs), enabled=config.color) as advance:
        for item in model_configs:
            try:
                entry = builder.build(item.document, releases.applicable(item.document.directory))
            except (OSError, ValueError) as exc:
                counters.record_error()
                log.warn(f"Error processing {display_relative_path(item.path, crawl.root)}: {exc}")
                continue
            finally:
                advance()
            if entry.id in seen:
                counters.record_error()
                log.warn(
                    f"Duplicate model id {entry.id} for {display_relative_path(item.path, crawl.root)}; "
                    f"already used by {seen[entry.id]}"
                )
                continue
            seen[entry.id] = display_relative_path(item.path, crawl.root)
            models.append(entry)
            counters.record_success()

    log.ok(f"Successfully processed {counters.successes} model files ({counters.errors} errors)")
    catalog = Catalog(
        models=models,
        last_updated=clock(),
        total_count=len(models),
        scan_stats=ScanStats(
            directories_scanned=crawl.stats.directories_scanned,
            total_files_found=crawl.stats.total_files_found,
            config_files_found=len(crawl.config_files),
            release_configs_found=len(releases),
            unreadable_directories=crawl.stats.unreadable_directories,
            parse_errors=counters.parse_errors,
            ignored_configs=counters.ignored,
            scan_duration_seconds=crawl.stats.duration_seconds,
        ),
    )
    store.save(catalog)
    log.ok(
        f"Extraction completed in {time.monotonic() - started:.2f} seconds: "
        f"{len(models)} models across {crawl.stats.directories_scanned} directories"
    )
    return ExtractResult(catalog=catalog, crawl=crawl, counters=counters, release_count=len(releases))


def materialize_images(
    config: GalleryConfig,
    *,
    catalog: Catalog | None = None,
    logger: GalleryLogger | None = None,
    clock: Callable[[], str] = utc_timestamp,
) -> MaterializeResult:
    """Publish images for new or modified models and rewrite catalog and cache.

    Args:
        config: Gallery configuration.
        catalog: Catalog to process; read from disk (or created empty) when omitted.
        logger: Destination for user-facing output.
        clock: Timestamp source for cache records.

    Returns:
        MaterializeResult: Updated catalog, change set, and pass summary.

    Raises:
        OutputDirectoryError: If the publish directory or catalog cannot be written.
    """

    log = logger or GalleryLogger(use_emoji=config.emoji)
    store = CatalogStore(config.catalog_path, logger=log)
    current = catalog if catalog is not None else store.ensure()
    log.info(f"Found data file with {len(current.models)} models")

    cache_store = BuildCacheStore(config.cache_path, logger=log)
    cache = cache_store.load()
    changes = categorize(
        current.models,
        cache,
        publish_prefix=config.publish_prefix,
        placeholder_url=config.placeholder_url,
        clock=clock,
    )
    log.info(f"Found {len(changes.changed)} new/modified models and {len(changes.unchanged)} unchanged models")

    materializer = ImageMaterializer(
        config.publish_dir,
        publish_prefix=config.publish_prefix,
        placeholder_name=config.placeholder_name,
        placeholder_source=config.placeholder_source,
        resolver=ImageResolver(logger=log),
        logger=log,
    )
    materializer.prepare()
    with pass_progress("Processing images", len(changes.changed), enabled=config.color) as advance:
        summary = materializer.materialize(changes.changed, cache, advance=advance)
    summary.skipped += len(changes.unchanged)

    if changes.changed:
        store.save(current)
    else:
        log.info("No new models to process!")
    cache_store.save(cache, active_ids=[entry.id for entry in current.models], clock=clock)
    log.ok(
        f"Processed {len(changes.changed)} models: copied {summary.copied} images, "
        f"used {summary.placeholders} placeholders, skipped {summary.skipped} unchanged, "
        f"had {summary.errors} errors "
        f"in {summary.duration_seconds:.2f} seconds"
    )
    return MaterializeResult(catalog=current, changes=changes, summary=summary)


__all__ = [
    "ExtractResult",
    "MaterializeResult",
    "extract_catalog",
    "materialize_images",
]
