# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Static catalog builder for orynt3d model galleries."""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.3.0"
