"""
DesignClone — structural component detector for visual design trees.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from .errors import NodeFormatError

T = TypeVar("T")
S = TypeVar("S")
R = TypeVar("R")


class NodeType(str, Enum):
    CONTAINER = "Div"
    TEXT_INPUT = "Input"
    IMAGE = "Image"
    BUTTON = "Button"


@dataclass(frozen=True, slots=True)
class VisualNode:
    id: str
    type: NodeType
    display: str | None = None
    children: tuple[VisualNode, ...] = ()
    # Cosmetic attributes. Never part of the default structural signature.
    name: str = ""
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    text: str | None = None
    background: str | None = None
    color: str | None = None
    border: str | None = None
    border_radius: str | None = None

    @property
    def is_leaf(self) -> bool:
        return not self.children


def fold_tree(
    root: T,
    expand: Callable[[T], tuple[S, Sequence[T]]],
    combine: Callable[[S, list[R]], R],
) -> R:
    """
    Fold a tree bottom-up with an explicit stack instead of recursion.

    ``expand`` is called once per item in pre-order and returns the state to
    keep for that item together with its child items. ``combine`` is called
    in post-order with that state and the folded children, in child order.
    Depth is bounded only by memory.
    """
    results: list[R] = []
    stack: list[tuple[bool, Any]] = [(False, root)]
    while stack:
        expanded, entry = stack.pop()
        if not expanded:
            state, children = expand(entry)
            stack.append((True, (state, len(children))))
            stack.extend((False, child) for child in reversed(children))
            continue
        state, count = entry
        start = len(results) - count
        folded = results[start:]
        del results[start:]
        results.append(combine(state, folded))
    return results[-1]


def _own_children(node: VisualNode) -> tuple[VisualNode, tuple[VisualNode, ...]]:
    return node, node.children


# document key -> dataclass field, for optional string attributes
_OPTIONAL_STR_FIELDS: tuple[tuple[str, str], ...] = (
    ("display", "display"),
    ("text", "text"),
    ("background", "background"),
    ("color", "color"),
    ("border", "border"),
    ("borderRadius", "border_radius"),
)
_GEOMETRY_FIELDS = ("x", "y", "width", "height")


def _coerce_type(raw: object, path: str) -> NodeType:
    if isinstance(raw, NodeType):
        return raw
    try:
        return NodeType(raw)
    except ValueError as e:
        allowed = ", ".join(t.value for t in NodeType)
        raise NodeFormatError(
            f"unknown node type {raw!r} (expected one of: {allowed})", path=path
        ) from e


def _coerce_number(raw: object, key: str, path: str) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise NodeFormatError(f"'{key}' must be a number", path=path)
    return raw


def _coerce_optional_str(raw: object, key: str, path: str) -> str | None:
    if raw is None:
        return None
    # Figma exports numeric corner radii.
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return str(raw)
    if not isinstance(raw, str):
        raise NodeFormatError(f"'{key}' must be a string", path=path)
    return raw


def _expand_document_node(
    item: tuple[object, str],
) -> tuple[dict[str, Any], list[tuple[object, str]]]:
    data, path = item
    if not isinstance(data, Mapping):
        raise NodeFormatError("node must be an object", path=path)

    node_id = data.get("id")
    if not isinstance(node_id, str) or not node_id:
        raise NodeFormatError("'id' must be a non-empty string", path=path)

    fields: dict[str, Any] = {
        "id": node_id,
        "type": _coerce_type(data.get("type"), path),
    }

    raw_children = data.get("children", [])
    if raw_children is None:
        raw_children = []
    if not isinstance(raw_children, list):
        raise NodeFormatError("'children' must be a list", path=path)

    for key in _GEOMETRY_FIELDS:
        if key in data:
            fields[key] = _coerce_number(data[key], key, path)
    for key, field_name in _OPTIONAL_STR_FIELDS:
        if key in data:
            fields[field_name] = _coerce_optional_str(data[key], key, path)

    name = data.get("name", "")
    if not isinstance(name, str):
        raise NodeFormatError("'name' must be a string", path=path)
    fields["name"] = name

    return fields, [
        (child, f"{path}.children[{i}]") for i, child in enumerate(raw_children)
    ]


def _node_with_children(
    fields: dict[str, Any], children: list[VisualNode]
) -> VisualNode:
    return VisualNode(children=tuple(children), **fields)


def node_from_dict(data: Mapping[str, Any], *, path: str = "$") -> VisualNode:
    """
    Build a VisualNode tree from the JSON document format.

    Unknown keys are ignored. A missing ``children`` key means a leaf.
    A node is fully validated before any of its children.
    """
    return fold_tree((data, path), _expand_document_node, _node_with_children)


def _node_dict(node: VisualNode, children: list[dict[str, Any]]) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": node.id,
        "name": node.name,
        "type": node.type.value,
        "x": node.x,
        "y": node.y,
        "width": node.width,
        "height": node.height,
    }
    for key, field_name in _OPTIONAL_STR_FIELDS:
        value = getattr(node, field_name)
        if value is not None:
            out[key] = value
    out["children"] = children
    return out


def node_to_dict(node: VisualNode) -> dict[str, Any]:
    return fold_tree(node, _own_children, _node_dict)


def iter_nodes(root: VisualNode) -> Iterator[VisualNode]:
    """Yield every node of the tree in pre-order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def find_node_by_id(root: VisualNode, node_id: str) -> VisualNode | None:
    for node in iter_nodes(root):
        if node.id == node_id:
            return node
    return None


def update_node(root: VisualNode, node_id: str, **changes: Any) -> VisualNode:
    """
    Return a copy of the tree with ``changes`` applied to the node ``node_id``.

    Unchanged subtrees are shared with the original tree. If no node matches,
    the original root is returned.
    """

    def _rebuild(node: VisualNode, children: list[VisualNode]) -> VisualNode:
        if node.id == node_id:
            return dataclasses.replace(
                node, **{"children": tuple(children), **changes}
            )
        if all(new is old for new, old in zip(children, node.children)):
            return node
        return dataclasses.replace(node, children=tuple(children))

    return fold_tree(root, _own_children, _rebuild)


def validate_tree(root: VisualNode) -> None:
    seen: set[str] = set()
    for node in iter_nodes(root):
        if node.id in seen:
            raise NodeFormatError(f"duplicate node id {node.id!r}")
        seen.add(node.id)
