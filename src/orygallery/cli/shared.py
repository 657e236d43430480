# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (options, logging, errors)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

from ..config import GalleryConfig, load_config
from ..errors import GalleryError
from ..logging import GalleryLogger


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


RootOption = Annotated[
    Path,
    typer.Option("--root", "-r", help="Project root holding orygallery.toml.", file_okay=False),
]
SourceOption = Annotated[
    Path | None,
    typer.Option("--source", "-s", help="Source tree to crawl (overrides ORYNT3D_DIR)."),
]
OutputDirOption = Annotated[
    Path | None,
    typer.Option("--output-dir", "-o", help="Directory receiving the catalog and images."),
]
CacheFileOption = Annotated[
    Path | None,
    typer.Option("--cache-file", help="Location of the incremental build cache."),
]
EmojiOption = Annotated[bool, typer.Option("--emoji/--no-emoji", help="Toggle emoji in output.")]
DebugOption = Annotated[bool, typer.Option("--debug", help="Emit debug diagnostics.")]


@dataclass(slots=True)
class GalleryCLIOptions:
    """Options common to every gallery command."""

    root: Path
    source: Path | None = None
    output_dir: Path | None = None
    cache_file: Path | None = None
    emoji: bool = True
    debug: bool = False


def build_cli_logger(options: GalleryCLIOptions) -> GalleryLogger:
    """Return a :class:`GalleryLogger` honouring the CLI display flags."""

    return GalleryLogger(use_emoji=options.emoji, debug_enabled=options.debug)


def load_cli_config(options: GalleryCLIOptions) -> GalleryConfig:
    """Return configuration for ``options`` with CLI flags taking precedence.

    Raises:
        CLIError: If the configuration layers are invalid.
    """

    try:
        return load_config(
            options.root,
            overrides={
                "source_root": options.source,
                "output_dir": options.output_dir,
                "cache_path": options.cache_file,
                "emoji": options.emoji,
            },
        )
    except GalleryError as exc:
        raise CLIError(str(exc)) from exc


__all__ = [
    "CLIError",
    "CacheFileOption",
    "DebugOption",
    "EmojiOption",
    "GalleryCLIOptions",
    "OutputDirOption",
    "RootOption",
    "SourceOption",
    "build_cli_logger",
    "load_cli_config",
]
