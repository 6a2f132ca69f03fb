from __future__ import annotations

import json
from pathlib import Path

from designclone._cli_meta import _build_report_meta
from designclone.contracts import REPORT_SCHEMA_VERSION
from designclone.detector import find_components
from designclone.report import (
    DocumentReport,
    build_component_summaries,
    to_json_report,
    to_text,
    to_text_report,
)
from designclone.signature import SignatureConfig
from tests._tree_fixtures import button, card_row, div, image


def _doc(filepath: str = "/designs/a.json") -> DocumentReport:
    root = card_row()
    return DocumentReport(filepath=filepath, root=root, result=find_components(root))


def _meta() -> dict[str, object]:
    return dict(
        _build_report_meta(
            designclone_version="1.0.0",
            scan_root=Path("/designs"),
            cfg=SignatureConfig(),
            min_occurrences=2,
            documents_skipped=0,
        )
    )


def test_summaries_use_first_occurrence_name() -> None:
    root = card_row()
    summaries = build_component_summaries(root, find_components(root))
    assert len(summaries) == 1
    assert summaries[0].name == "Card"
    assert summaries[0].instances == 2
    assert summaries[0].node_ids == ("card-a", "card-b")


def test_summaries_fall_back_and_sort_by_name() -> None:
    root = div(
        "root",
        div("z1", image("z1-i"), name="Zeta"),
        div("z2", image("z2-i")),
        div("a1", button("a1-b"), button("a1-c"), name="Alpha"),
        div("a2", button("a2-b"), button("a2-c")),
        div("n1", image("n1-i"), button("n1-b")),
        div("n2", image("n2-i"), button("n2-b")),
    )
    summaries = build_component_summaries(root, find_components(root))
    assert [(s.component_id, s.name) for s in summaries] == [
        ("C2", "Alpha"),
        ("C3", "Component C3"),
        ("C1", "Zeta"),
    ]


def test_document_report_counts() -> None:
    doc = _doc()
    assert doc.node_count == 7
    assert doc.component_node_count == 2


def test_to_json_report_shape() -> None:
    payload = json.loads(
        to_json_report([_doc("/designs/b.json"), _doc("/designs/a.json")], _meta())
    )
    assert payload["meta"]["report_schema_version"] == REPORT_SCHEMA_VERSION
    assert payload["meta"]["signature_attributes"] == ["type", "display"]
    assert payload["document_count"] == 2
    assert payload["component_count"] == 2
    assert [d["filepath"] for d in payload["documents"]] == [
        "/designs/a.json",
        "/designs/b.json",
    ]
    doc = payload["documents"][0]
    assert doc["root_id"] == "root"
    assert doc["components"][0]["component_id"] == "C1"
    assert doc["components"][0]["node_ids"] == ["card-a", "card-b"]
    assert doc["node_to_component"] == {"card-a": "C1", "card-b": "C1"}


def test_to_json_report_empty() -> None:
    payload = json.loads(to_json_report([], _meta()))
    assert payload["document_count"] == 0
    assert payload["documents"] == []


def test_to_text_lists_node_ids() -> None:
    root = card_row()
    text = to_text(build_component_summaries(root, find_components(root)))
    assert "=== C1 Card (instances=2) ===" in text
    assert "- card-a" in text
    assert "- card-b" in text


def test_to_text_report_sections() -> None:
    lonely_root = div("solo", button("b"))
    lonely = DocumentReport(
        filepath="/designs/z.json", root=lonely_root, result=find_components(lonely_root)
    )
    text = to_text_report(meta=_meta(), documents=[lonely, _doc()])

    assert text.startswith("REPORT METADATA\n")
    assert "Signature attributes: type, display" in text
    assert "Documents skipped: 0" in text
    assert "DOCUMENT /designs/a.json (nodes=7) (components=1)" in text
    assert "DOCUMENT /designs/z.json (nodes=2) (components=0)\n(none)" in text
    assert text.index("/designs/a.json") < text.index("/designs/z.json")
