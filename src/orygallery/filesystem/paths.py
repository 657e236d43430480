# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for reasoning about filesystem paths."""

from __future__ import annotations

import os
from os import PathLike
from pathlib import Path, PurePath

_Pathish = str | PathLike[str] | Path


def _segments(path: _Pathish) -> tuple[str, ...]:
    """Return the normalised segments of ``path``.

    Segments are compared case-insensitively on platforms whose filesystem
    is case-insensitive, mirroring :func:`os.path.normcase`.
    """

    normalised = os.path.normcase(os.path.normpath(os.fspath(path)))
    return PurePath(normalised).parts


def is_same_or_descendant(candidate: _Pathish, ancestor: _Pathish) -> bool:
    """Return whether ``candidate`` equals ``ancestor`` or is nested beneath it.

    The comparison is performed on whole path segments so that ``/foo-bar``
    is never treated as living under ``/foo``.

    Args:
        candidate: Directory whose containment is being tested.
        ancestor: Directory that may contain ``candidate``.

    Returns:
        bool: ``True`` when every segment of ``ancestor`` prefixes ``candidate``.
    """

    ancestor_parts = _segments(ancestor)
    candidate_parts = _segments(candidate)
    if len(ancestor_parts) > len(candidate_parts):
        return False
    return candidate_parts[: len(ancestor_parts)] == ancestor_parts


def path_depth(path: _Pathish) -> int:
    """Return the number of segments in ``path``."""

    return len(_segments(path))


def relative_parts(path: _Pathish, root: _Pathish) -> tuple[str, ...]:
    """Return the non-empty segments of ``path`` relative to ``root``.

    Args:
        path: Path located at or below ``root``.
        root: Base directory.

    Returns:
        tuple[str, ...]: Segments below ``root``; empty when ``path`` is ``root``.

    Raises:
        ValueError: If ``path`` is not located under ``root``.
    """

    relative = Path(os.path.normpath(os.fspath(path))).relative_to(os.path.normpath(os.fspath(root)))
    return tuple(part for part in relative.parts if part not in {"", "."})


def relative_posix(path: _Pathish, root: _Pathish) -> str:
    """Return ``path`` relative to ``root`` using forward slashes."""

    return "/".join(relative_parts(path, root))


def display_relative_path(path: _Pathish, root: _Pathish) -> str:
    """Return a display-friendly representation of ``path`` relative to ``root``.

    Falls back to the absolute POSIX form when ``path`` lies outside ``root``.
    """

    try:
        relative = relative_posix(path, root)
    except ValueError:
        return Path(path).as_posix()
    return relative or "."


__all__ = [
    "display_relative_path",
    "is_same_or_descendant",
    "path_depth",
    "relative_parts",
    "relative_posix",
]
