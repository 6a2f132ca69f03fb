"""
DesignClone — structural component detector for visual design trees.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import hashlib


def sha1(s: str) -> str:
    return hashlib.sha1(s.encode("utf-8")).hexdigest()
