"""
DesignClone — structural component detector for visual design trees.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass, field

from .fingerprint import sha1
from .nodes import VisualNode, fold_tree


@dataclass(frozen=True, slots=True)
class SignatureConfig:
    """
    Node attributes that discriminate structural shapes.

    ``type`` and ``display`` always participate. Size and border are off by
    default so that restyled and repositioned copies still match.
    """

    include_size: bool = False
    include_border: bool = False

    def describe(self) -> list[str]:
        attrs = ["type", "display"]
        if self.include_size:
            attrs.extend(["width", "height"])
        if self.include_border:
            attrs.append("border")
        return attrs


@dataclass(slots=True)
class SignatureIndex:
    root_signature: str
    # node id -> signature, for every node including leaves
    signatures: dict[str, str] = field(default_factory=dict)
    # signature -> nodes with children, in first post-order encounter order
    buckets: dict[str, list[VisualNode]] = field(default_factory=dict)


def _node_attrs(node: VisualNode, cfg: SignatureConfig) -> dict[str, object]:
    attrs: dict[str, object] = {"type": node.type.value, "display": node.display}
    if cfg.include_size:
        attrs["width"] = node.width
        attrs["height"] = node.height
    if cfg.include_border:
        attrs["border"] = node.border
    return attrs


def node_signature(
    node: VisualNode,
    child_signatures: Sequence[str],
    cfg: SignatureConfig,
) -> str:
    """
    Compose the signature of ``node`` from its own attributes and the
    signatures of its direct children.

    Child signatures are sorted, so child order never affects the result.
    The canonical payload is hashed to keep signatures fixed-length
    regardless of subtree depth.
    """
    payload = json.dumps(
        {"node": _node_attrs(node, cfg), "children": sorted(child_signatures)},
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return sha1(payload)


def build_signatures(
    root: VisualNode, cfg: SignatureConfig | None = None
) -> SignatureIndex:
    """
    Compute signatures for the whole tree in one post-order pass.

    Nodes with at least one child are appended to the bucket of their
    signature; leaves only contribute to their parent's signature.
    """
    cfg = cfg or SignatureConfig()
    signatures: dict[str, str] = {}
    buckets: dict[str, list[VisualNode]] = {}

    def _visit(node: VisualNode, child_signatures: list[str]) -> str:
        signature = node_signature(node, child_signatures, cfg)
        signatures[node.id] = signature
        if child_signatures:
            buckets.setdefault(signature, []).append(node)
        return signature

    root_signature = fold_tree(root, lambda n: (n, n.children), _visit)
    return SignatureIndex(
        root_signature=root_signature,
        signatures=signatures,
        buckets=buckets,
    )
