# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model and layered loader for gallery builds."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import (
    BUILD_CACHE_FILENAME,
    CATALOG_FILENAME,
    CONFIG_FILENAME,
    DEFAULT_PROGRESS_INTERVAL,
    ENV_CACHE_FILE,
    ENV_OUTPUT_DIR,
    ENV_SOURCE_ROOT,
    IMAGES_DIR_NAME,
    PLACEHOLDER_NAME,
    PROJECT_CONFIG_FILENAME,
    PUBLISH_PREFIX,
)
from .errors import ConfigError

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "orygallery"
_PATH_FIELDS: Final[tuple[str, ...]] = ("source_root", "output_dir", "cache_path", "placeholder_source")


class GalleryConfig(BaseModel):
    """Primary configuration container used by the build pipeline."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    source_root: Path | None = None
    output_dir: Path = Path("public")
    catalog_name: str = CATALOG_FILENAME
    cache_path: Path = Path(BUILD_CACHE_FILENAME)
    images_dir_name: str = IMAGES_DIR_NAME
    publish_prefix: str = PUBLISH_PREFIX
    placeholder_name: str = PLACEHOLDER_NAME
    placeholder_source: Path | None = None
    config_filename: str = CONFIG_FILENAME
    progress_interval: float = Field(default=DEFAULT_PROGRESS_INTERVAL, ge=0)
    emoji: bool = True
    color: bool = True

    @field_validator("publish_prefix")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("publish_prefix must be an absolute URL path")
        return value if value.endswith("/") else f"{value}/"

    @property
    def catalog_path(self) -> Path:
        """Return the location of the catalog JSON document."""

        return self.output_dir / self.catalog_name

    @property
    def publish_dir(self) -> Path:
        """Return the directory receiving materialised images."""

        return self.output_dir / self.images_dir_name

    @property
    def placeholder_url(self) -> str:
        """Return the publish-relative URL of the shared placeholder image."""

        return f"{self.publish_prefix}{self.placeholder_name}"


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read configuration from {path}: {exc}") from exc


def _file_fragment(project_root: Path) -> dict[str, Any]:
    """Return settings from ``orygallery.toml`` or ``[tool.orygallery]``.

    The dedicated file wins when both are present.
    """

    dedicated = project_root / PROJECT_CONFIG_FILENAME
    if dedicated.is_file():
        return _read_toml(dedicated)
    pyproject = project_root / PYPROJECT_FILENAME
    if pyproject.is_file():
        section = _read_toml(pyproject).get(PYPROJECT_TOOL_KEY, {}).get(PYPROJECT_SECTION_KEY, {})
        if not isinstance(section, Mapping):
            raise ConfigError(f"[{PYPROJECT_TOOL_KEY}.{PYPROJECT_SECTION_KEY}] in {pyproject} must be a table")
        return dict(section)
    return {}


def _env_fragment(env: Mapping[str, str]) -> dict[str, Any]:
    fragment: dict[str, Any] = {}
    if value := env.get(ENV_SOURCE_ROOT):
        fragment["source_root"] = value
    if value := env.get(ENV_OUTPUT_DIR):
        fragment["output_dir"] = value
    if value := env.get(ENV_CACHE_FILE):
        fragment["cache_path"] = value
    return fragment


def _anchor_paths(payload: dict[str, Any], project_root: Path) -> dict[str, Any]:
    anchored = dict(payload)
    for key in _PATH_FIELDS:
        value = anchored.get(key)
        if value is None:
            continue
        path = Path(value).expanduser()
        anchored[key] = path if path.is_absolute() else project_root / path
    return anchored


def load_config(
    project_root: Path,
    *,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> GalleryConfig:
    """Return configuration layered from defaults, files, environment, and overrides.

    Args:
        project_root: Directory holding ``orygallery.toml``/``pyproject.toml``;
            relative paths are anchored here.
        env: Environment mapping, defaults to :data:`os.environ`.
        overrides: Explicit values (typically CLI flags); ``None`` entries are ignored.

    Returns:
        GalleryConfig: Validated configuration with absolute paths.

    Raises:
        ConfigError: If any layer contains invalid settings.
    """

    root = project_root.expanduser().resolve()
    payload: dict[str, Any] = {}
    payload.update(_file_fragment(root))
    payload.update(_env_fragment(os.environ if env is None else env))
    if overrides:
        payload.update({key: value for key, value in overrides.items() if value is not None})
    payload = _anchor_paths(payload, root)
    payload.setdefault("output_dir", root / "public")
    payload.setdefault("cache_path", root / BUILD_CACHE_FILENAME)
    try:
        return GalleryConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


__all__ = ["GalleryConfig", "load_config"]
