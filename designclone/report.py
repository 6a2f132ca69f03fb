"""
DesignClone — structural component detector for visual design trees.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import cached_property

from .contracts import COMPONENT_ID_PREFIX
from .detector import DetectionResult
from .nodes import VisualNode, iter_nodes


@dataclass(frozen=True, slots=True)
class ComponentSummary:
    component_id: str
    name: str
    instances: int
    node_ids: tuple[str, ...]
    signature: str


@dataclass(frozen=True)
class DocumentReport:
    filepath: str
    root: VisualNode
    result: DetectionResult

    @cached_property
    def node_count(self) -> int:
        return sum(1 for _ in iter_nodes(self.root))

    @property
    def component_node_count(self) -> int:
        return len(self.result.node_to_component)


def _component_number(component_id: str) -> int:
    digits = component_id.removeprefix(COMPONENT_ID_PREFIX)
    return int(digits) if digits.isdigit() else 0


def build_component_summaries(
    root: VisualNode, result: DetectionResult
) -> list[ComponentSummary]:
    """
    Summaries for a components panel, named after each group's first
    occurrence and sorted by name.
    """
    by_id = {node.id: node for node in iter_nodes(root)}
    summaries: list[ComponentSummary] = []
    for group in result.groups:
        first = by_id.get(group.node_ids[0]) if group.node_ids else None
        name = first.name if first is not None and first.name else ""
        summaries.append(
            ComponentSummary(
                component_id=group.component_id,
                name=name or f"Component {group.component_id}",
                instances=group.instances,
                node_ids=group.node_ids,
                signature=group.signature,
            )
        )
    return sorted(
        summaries, key=lambda s: (s.name, _component_number(s.component_id))
    )


def _document_payload(doc: DocumentReport) -> dict[str, object]:
    return {
        "filepath": doc.filepath,
        "root_id": doc.root.id,
        "node_count": doc.node_count,
        "component_count": len(doc.result.groups),
        "components": [
            {
                "component_id": group.component_id,
                "signature": group.signature,
                "instances": group.instances,
                "node_ids": list(group.node_ids),
            }
            for group in doc.result.groups
        ],
        "node_to_component": dict(sorted(doc.result.node_to_component.items())),
    }


def to_json_report(
    documents: Sequence[DocumentReport], meta: Mapping[str, object]
) -> str:
    ordered = sorted(documents, key=lambda d: d.filepath)
    return json.dumps(
        {
            "meta": dict(meta),
            "document_count": len(ordered),
            "component_count": sum(len(d.result.groups) for d in ordered),
            "documents": [_document_payload(d) for d in ordered],
        },
        ensure_ascii=False,
        indent=2,
    )


def to_text(summaries: Sequence[ComponentSummary]) -> str:
    lines: list[str] = []
    for s in summaries:
        lines.append(
            f"\n=== {s.component_id} {s.name} (instances={s.instances}) ==="
        )
        lines.extend(f"- {node_id}" for node_id in s.node_ids)
    return "\n".join(lines).strip() + "\n"


def _format_meta_text_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "(none)"
    if isinstance(value, list):
        value = ", ".join(str(v) for v in value)
    text = str(value).strip()
    return text if text else "(none)"


def to_text_report(
    *,
    meta: Mapping[str, object],
    documents: Sequence[DocumentReport],
) -> str:
    lines = [
        "REPORT METADATA",
        "Report schema version: "
        f"{_format_meta_text_value(meta.get('report_schema_version'))}",
        "DesignClone version: "
        f"{_format_meta_text_value(meta.get('designclone_version'))}",
        f"Python version: {_format_meta_text_value(meta.get('python_version'))}",
        "Signature version: "
        f"{_format_meta_text_value(meta.get('signature_version'))}",
        "Signature attributes: "
        f"{_format_meta_text_value(meta.get('signature_attributes'))}",
        f"Min occurrences: {_format_meta_text_value(meta.get('min_occurrences'))}",
        f"Scan root: {_format_meta_text_value(meta.get('scan_root'))}",
        "Documents skipped: "
        f"{_format_meta_text_value(meta.get('documents_skipped'))}",
    ]

    for doc in sorted(documents, key=lambda d: d.filepath):
        lines.append("")
        lines.append(
            f"DOCUMENT {doc.filepath} "
            f"(nodes={doc.node_count}) (components={len(doc.result.groups)})"
        )
        block = to_text(build_component_summaries(doc.root, doc.result)).rstrip()
        lines.append(block if block else "(none)")

    return "\n".join(lines).rstrip() + "\n"
