# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsing and classification of config documents."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import ValidationError

from ..constants import RELEASE_KEYS
from ..errors import ConfigParseError
from ..models import ConfigDocument


class ConfigKind(str, Enum):
    """Enumerate the roles a config document may play."""

    RELEASE = "release"
    MODEL = "model"
    IGNORED = "ignored"


@dataclass(frozen=True, slots=True)
class ClassifiedConfig:
    """Config document tagged with its classification."""

    document: ConfigDocument
    kind: ConfigKind

    @property
    def path(self) -> Path:
        return self.document.path


def is_release_config(document: ConfigDocument) -> bool:
    """Return whether ``document`` declares a ``release`` or ``subscription`` attribute."""

    if document.scan_meta is None:
        return False
    return any(entry.key in RELEASE_KEYS for entry in document.scan_meta.included_attributes)


def is_model_config(document: ConfigDocument) -> bool:
    """Return whether ``document`` names a model or points at a cover image."""

    meta = document.model_meta
    if meta is None:
        return False
    return meta.name is not None or bool(meta.cover)


def classify(document: ConfigDocument) -> ConfigKind:
    """Classify ``document``; the release test takes precedence over the model test."""

    if is_release_config(document):
        return ConfigKind.RELEASE
    if is_model_config(document):
        return ConfigKind.MODEL
    return ConfigKind.IGNORED


def read_config(path: Path) -> ConfigDocument:
    """Parse the config document stored at ``path``.

    Args:
        path: Location of the config file.

    Returns:
        ConfigDocument: Parsed document.

    Raises:
        ConfigParseError: If the file cannot be read or is not a valid document.
    """

    try:
        payload = json.loads(path.read_text(encoding="utf-8-sig"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigParseError(path, str(exc)) from exc
    if not isinstance(payload, dict):
        raise ConfigParseError(path, "document must be a JSON object")
    try:
        return ConfigDocument.model_validate({**payload, "path": path})
    except ValidationError as exc:
        raise ConfigParseError(path, f"invalid document ({exc.error_count()} errors)") from exc


__all__ = [
    "ClassifiedConfig",
    "ConfigKind",
    "classify",
    "is_model_config",
    "is_release_config",
    "read_config",
]
