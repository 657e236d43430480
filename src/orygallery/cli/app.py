# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the gallery commands."""

from __future__ import annotations

from pathlib import Path

import typer

from ..errors import GalleryError
from ..logging import GalleryLogger
from ..pipeline import extract_catalog, materialize_images
from .shared import (
    CacheFileOption,
    CLIError,
    DebugOption,
    EmojiOption,
    GalleryCLIOptions,
    OutputDirOption,
    RootOption,
    SourceOption,
    build_cli_logger,
    load_cli_config,
)

app = typer.Typer(
    name="orygallery",
    help="Build a static catalog for an orynt3d model library.",
    no_args_is_help=True,
    add_completion=False,
)


def _fail(logger: GalleryLogger, exc: Exception, *, exit_code: int = 1) -> typer.Exit:
    logger.fail(str(exc))
    return typer.Exit(code=exit_code)


@app.command("extract")
def extract_command(
    root: RootOption = Path(),
    source: SourceOption = None,
    output_dir: OutputDirOption = None,
    cache_file: CacheFileOption = None,
    emoji: EmojiOption = True,
    debug: DebugOption = False,
) -> None:
    """Crawl the source tree and write the catalog."""

    options = GalleryCLIOptions(root, source, output_dir, cache_file, emoji, debug)
    logger = build_cli_logger(options)
    try:
        config = load_cli_config(options)
        extract_catalog(config, logger=logger)
    except CLIError as exc:
        raise _fail(logger, exc, exit_code=exc.exit_code) from exc
    except GalleryError as exc:
        raise _fail(logger, exc) from exc


@app.command("materialize")
def materialize_command(
    root: RootOption = Path(),
    output_dir: OutputDirOption = None,
    cache_file: CacheFileOption = None,
    emoji: EmojiOption = True,
    debug: DebugOption = False,
) -> None:
    """Publish preview images for new or modified catalog entries."""

    options = GalleryCLIOptions(root, None, output_dir, cache_file, emoji, debug)
    logger = build_cli_logger(options)
    try:
        config = load_cli_config(options)
        materialize_images(config, logger=logger)
    except CLIError as exc:
        raise _fail(logger, exc, exit_code=exc.exit_code) from exc
    except GalleryError as exc:
        raise _fail(logger, exc) from exc


@app.command("build")
def build_command(
    root: RootOption = Path(),
    source: SourceOption = None,
    output_dir: OutputDirOption = None,
    cache_file: CacheFileOption = None,
    emoji: EmojiOption = True,
    debug: DebugOption = False,
) -> None:
    """Extract the catalog (when a source is configured) and publish its images."""

    options = GalleryCLIOptions(root, source, output_dir, cache_file, emoji, debug)
    logger = build_cli_logger(options)
    try:
        config = load_cli_config(options)
        catalog = None
        logger.section("Extracting model data")
        if config.source_root is not None:
            catalog = extract_catalog(config, logger=logger).catalog
        else:
            logger.info(f"Skipping model data extraction (no source configured); using {config.catalog_path}")
        logger.section("Processing images")
        materialize_images(config, catalog=catalog, logger=logger)
    except CLIError as exc:
        raise _fail(logger, exc, exit_code=exc.exit_code) from exc
    except GalleryError as exc:
        raise _fail(logger, exc) from exc
    logger.ok(f"Build complete; catalog at {config.catalog_path}")


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["app", "main"]
