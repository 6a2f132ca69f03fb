"""
DesignClone — structural component detector for visual design trees.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import dataclasses
import random
import string
from collections.abc import Callable

from .nodes import NodeType, VisualNode, fold_tree, iter_nodes, update_node

MAX_LEVELS = 10
LAYOUT_PADDING = 10
MAX_REUSE_PARENT_CHILDREN = 5

DIV_COLORS = ("white", "#FAFDF6", "#D8E2DC", "#F5EFED")
BUTTON_COLORS = ("#5D4E6D", "#2D2A32", "#23395B", "#0E1428")
IMAGE_COLORS = ("white",)
INPUT_COLORS = ("white", "#EDF2F4")
DEFAULT_BORDER = "1px solid #f3f4f6"

_BACKGROUNDS = {
    NodeType.CONTAINER: DIV_COLORS,
    NodeType.BUTTON: BUTTON_COLORS,
    NodeType.IMAGE: IMAGE_COLORS,
    NodeType.TEXT_INPUT: INPUT_COLORS,
}
_ID_ALPHABET = string.ascii_lowercase + string.digits


class _IdFactory:
    __slots__ = ("rng", "used")

    def __init__(self, rng: random.Random) -> None:
        self.rng = rng
        self.used: set[str] = set()

    def new(self, prefix: str) -> str:
        while True:
            suffix = "".join(self.rng.choices(_ID_ALPHABET, k=7))
            node_id = f"{prefix}-{suffix}"
            if node_id not in self.used:
                self.used.add(node_id)
                return node_id


def _size(rng: random.Random, lo: float, hi: float) -> int:
    lo_i, hi_i = int(lo), int(hi)
    if hi_i <= lo_i:
        return lo_i
    return rng.randint(lo_i, hi_i)


def _coord(rng: random.Random, upper: float) -> int:
    if upper <= 0:
        return 0
    return int(rng.random() * upper)


def _random_type(rng: random.Random) -> NodeType:
    return rng.choice(tuple(NodeType))


def _generate_node(
    rng: random.Random,
    ids: _IdFactory,
    parent_x: float,
    parent_y: float,
    parent_width: float,
    parent_height: float,
    level: int,
    max_levels: int,
) -> VisualNode:
    node_type = _random_type(rng)
    width = _size(rng, 100, min(parent_width, 300))
    height = _size(rng, 30, min(parent_height, 100))
    x = parent_x + _coord(rng, parent_width - width)
    y = parent_y + _coord(rng, parent_height - height)

    color: str | None = None
    text: str | None = None
    if node_type is NodeType.CONTAINER:
        color = rng.choice(DIV_COLORS)
    elif node_type is NodeType.BUTTON:
        color = "#ffffff"
    elif node_type is NodeType.TEXT_INPUT:
        color = "#000000"
    if node_type in (NodeType.BUTTON, NodeType.TEXT_INPUT):
        text = f"{node_type.value} {''.join(rng.choices(_ID_ALPHABET, k=3))}"

    children: list[VisualNode] = []
    # Inputs never contain other nodes.
    if (
        level < max_levels
        and rng.random() > 0.3
        and node_type is not NodeType.TEXT_INPUT
    ):
        current_x = LAYOUT_PADDING
        current_y = LAYOUT_PADDING
        row_height = 0
        for _ in range(_size(rng, 1, 3)):
            max_child_width = min(width - current_x - LAYOUT_PADDING, 300)
            max_child_height = min(height - current_y - LAYOUT_PADDING, 150)
            if max_child_width < 50 or max_child_height < 30:
                break

            child_width = _size(rng, 50, max_child_width)
            child_height = _size(rng, 30, max_child_height)

            if current_x + child_width + LAYOUT_PADDING > width:
                current_x = LAYOUT_PADDING
                current_y += row_height + LAYOUT_PADDING
                row_height = 0
                if current_y + child_height + LAYOUT_PADDING > height:
                    break

            children.append(
                _generate_node(
                    rng,
                    ids,
                    x + current_x,
                    y + current_y,
                    child_width,
                    child_height,
                    level + 1,
                    max_levels,
                )
            )
            current_x += child_width + LAYOUT_PADDING
            row_height = max(row_height, child_height)

    return VisualNode(
        id=ids.new(node_type.value.lower()),
        type=node_type,
        children=tuple(children),
        name=f"{node_type.value} {_size(rng, 1, 10)}",
        x=x,
        y=y,
        width=width,
        height=height,
        text=text,
        background=rng.choice(_BACKGROUNDS[node_type]),
        color=color,
        border=DEFAULT_BORDER,
    )


def clone_subtree(
    node: VisualNode,
    delta_x: float,
    delta_y: float,
    new_id: Callable[[], str],
) -> VisualNode:
    """
    Deep-copy ``node`` with shifted coordinates and fresh ids from ``new_id()``.

    Ids are drawn in pre-order, so the copy's root gets the first one.
    """

    def _expand(
        current: VisualNode,
    ) -> tuple[tuple[VisualNode, str], tuple[VisualNode, ...]]:
        return (current, new_id()), current.children

    def _copy(state: tuple[VisualNode, str], children: list[VisualNode]) -> VisualNode:
        current, fresh_id = state
        return dataclasses.replace(
            current,
            id=fresh_id,
            x=current.x + delta_x,
            y=current.y + delta_y,
            children=tuple(children),
        )

    return fold_tree(node, _expand, _copy)


def generate_mock_tree(
    seed: int | None = None, *, max_levels: int = MAX_LEVELS
) -> VisualNode:
    """
    Generate a random design tree, then copy one random subtree that has
    children into up to three Container parents large enough to hold it.
    """
    rng = random.Random(seed)
    ids = _IdFactory(rng)

    root_width = _size(rng, 600, 1000)
    root_height = _size(rng, 400, 800)
    root = VisualNode(
        id=ids.new("root"),
        type=NodeType.CONTAINER,
        name="Root",
        width=root_width,
        height=root_height,
        background="white",
        children=tuple(
            _generate_node(rng, ids, 0, 0, root_width, root_height, 1, max_levels)
            for _ in range(_size(rng, 1, 3))
        ),
    )

    candidates = [n for n in iter_nodes(root) if n.children and n.id != root.id]
    if not candidates:
        return root

    component = rng.choice(candidates)
    prefix = f"reused-{component.type.value.lower()}"
    for _ in range(_size(rng, 1, 3)):
        parents = [
            n
            for n in iter_nodes(root)
            if n.type is NodeType.CONTAINER
            and len(n.children) < MAX_REUSE_PARENT_CHILDREN
            and n.width > component.width
            and n.height > component.height
        ]
        if not parents:
            continue
        parent = rng.choice(parents)
        offset_x = _coord(rng, parent.width - component.width)
        offset_y = _coord(rng, parent.height - component.height)
        clone = clone_subtree(
            component,
            parent.x + offset_x - component.x,
            parent.y + offset_y - component.y,
            lambda: ids.new(prefix),
        )
        root = update_node(root, parent.id, children=(*parent.children, clone))

    return root
