"""
DesignClone — structural component detector for visual design trees.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import importlib.metadata

try:
    __version__ = importlib.metadata.version("designclone")
except importlib.metadata.PackageNotFoundError:
    __version__ = "dev"
