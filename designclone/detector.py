"""
DesignClone — structural component detector for visual design trees.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .contracts import COMPONENT_ID_PREFIX, MIN_COMPONENT_OCCURRENCES
from .errors import ValidationError
from .nodes import VisualNode
from .signature import SignatureConfig, build_signatures


@dataclass(frozen=True, slots=True)
class ComponentGroup:
    component_id: str
    signature: str
    node_ids: tuple[str, ...]

    @property
    def instances(self) -> int:
        return len(self.node_ids)


@dataclass(frozen=True, slots=True)
class DetectionResult:
    groups: tuple[ComponentGroup, ...] = ()
    node_to_component: dict[str, str] = field(default_factory=dict)

    def component_of(self, node_id: str) -> str | None:
        return self.node_to_component.get(node_id)

    def as_component_map(self) -> dict[str, list[str]]:
        return {g.component_id: list(g.node_ids) for g in self.groups}


def find_components(
    root: VisualNode,
    cfg: SignatureConfig | None = None,
    *,
    min_occurrences: int = MIN_COMPONENT_OCCURRENCES,
) -> DetectionResult:
    """
    Detect structural components in the tree rooted at ``root``.

    A component is a signature shared by at least ``min_occurrences`` nodes
    that have children. Component ids are assigned as C1, C2, ... in the
    order the signatures were first met in post-order. Groups are returned
    sorted by component id as a string, so C10 comes before C2.

    Every call starts from fresh local state. The tree must be finite and
    acyclic; cycles are not detected.
    """
    if min_occurrences < MIN_COMPONENT_OCCURRENCES:
        raise ValidationError(
            f"min_occurrences must be >= {MIN_COMPONENT_OCCURRENCES}, "
            f"got {min_occurrences}"
        )
    if not root.children:
        return DetectionResult()

    index = build_signatures(root, cfg)

    groups: list[ComponentGroup] = []
    node_to_component: dict[str, str] = {}
    counter = 1
    for signature, nodes in index.buckets.items():
        if len(nodes) < min_occurrences:
            continue
        component_id = f"{COMPONENT_ID_PREFIX}{counter}"
        counter += 1
        groups.append(
            ComponentGroup(
                component_id=component_id,
                signature=signature,
                node_ids=tuple(n.id for n in nodes),
            )
        )
        for n in nodes:
            node_to_component[n.id] = component_id

    groups.sort(key=lambda g: g.component_id)
    return DetectionResult(groups=tuple(groups), node_to_component=node_to_component)


def find_similar_components(root: VisualNode) -> dict[str, list[str]]:
    return find_components(root).as_component_map()
