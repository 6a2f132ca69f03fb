from __future__ import annotations

import json
from pathlib import Path

import pytest

from designclone.nodes import VisualNode, node_to_dict
from tests._tree_fixtures import DocumentWriter, card_row


@pytest.fixture
def write_document(tmp_path: Path) -> DocumentWriter:
    def _write(
        name: str = "design.json",
        root: VisualNode | None = None,
        payload: object | None = None,
    ) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if payload is None:
            payload = node_to_dict(root if root is not None else card_row())
        path.write_text(json.dumps(payload), "utf-8")
        return path

    return _write
