"""
DesignClone — structural component detector for visual design trees.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterable
from pathlib import Path

from .errors import DocumentReadError, ValidationError
from .figma import convert_figma_file, is_figma_file
from .nodes import VisualNode, node_from_dict, validate_tree

DEFAULT_EXCLUDES = (
    ".git",
    ".venv",
    "venv",
    "node_modules",
    "__pycache__",
    "site-packages",
    "dist",
    "build",
    ".cache",
)

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB


def iter_design_files(
    root: str,
    excludes: tuple[str, ...] = DEFAULT_EXCLUDES,
    *,
    max_files: int = 10_000,
) -> Iterable[str]:
    try:
        rootp = Path(root).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise ValidationError(f"Invalid root path '{root}': {e}") from e

    if rootp.is_file():
        if rootp.suffix.lower() != ".json":
            raise ValidationError(f"Design document must be a .json file: {root}")
        yield str(rootp)
        return

    file_count = 0
    for p in sorted(rootp.rglob("*.json")):
        # Verify path is actually under root (prevent symlink attacks)
        try:
            p.resolve().relative_to(rootp)
        except ValueError:
            continue

        rel_parts = set(p.relative_to(rootp).parts)
        if any(ex in rel_parts for ex in excludes):
            continue

        file_count += 1
        if file_count > max_files:
            raise ValidationError(
                f"File count exceeds limit of {max_files}. "
                "Use more specific root or increase limit."
            )
        yield str(p)


def parse_document(payload: object) -> VisualNode:
    """Build a validated tree from a node-format or Figma file payload."""
    if is_figma_file(payload):
        root = convert_figma_file(payload)  # type: ignore[arg-type]
    else:
        root = node_from_dict(payload)  # type: ignore[arg-type]
    validate_tree(root)
    return root


def load_document(filepath: str) -> VisualNode:
    try:
        st_size = os.path.getsize(filepath)
    except OSError as e:
        raise DocumentReadError(f"Cannot stat file: {e}") from e
    if st_size > MAX_FILE_SIZE:
        raise DocumentReadError(
            f"File too large: {st_size} bytes (max {MAX_FILE_SIZE})"
        )

    try:
        raw = Path(filepath).read_text("utf-8")
    except UnicodeDecodeError as e:
        raise DocumentReadError(f"Encoding error: {e}") from e
    except OSError as e:
        raise DocumentReadError(f"Cannot read file: {e}") from e

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DocumentReadError(f"Invalid JSON: {e}") from e
    except RecursionError as e:
        raise DocumentReadError("Invalid JSON: nesting too deep to decode") from e

    return parse_document(payload)
