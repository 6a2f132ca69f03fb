"""
DesignClone — structural component detector for visual design trees.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Final

from .errors import NodeFormatError, ValidationError
from .nodes import NodeType, VisualNode, _node_with_children, fold_tree

FIGMA_TYPE_MAP: Final[dict[str, NodeType]] = {
    "FRAME": NodeType.CONTAINER,
    "GROUP": NodeType.CONTAINER,
    "RECTANGLE": NodeType.CONTAINER,
    "TEXT": NodeType.CONTAINER,
    "INSTANCE": NodeType.BUTTON,
    "COMPONENT": NodeType.BUTTON,
    "VECTOR": NodeType.IMAGE,
    "ELLIPSE": NodeType.CONTAINER,
    "LINE": NodeType.CONTAINER,
    "POLYGON": NodeType.CONTAINER,
    "STAR": NodeType.CONTAINER,
    "BOOLEAN_OPERATION": NodeType.CONTAINER,
}

DEFAULT_BOX_SIZE = 100

_FILE_ID_RE = re.compile(r"/(?:file|design)/([a-zA-Z0-9]+)")


def map_figma_type(figma_type: str) -> NodeType:
    return FIGMA_TYPE_MAP.get(figma_type, NodeType.CONTAINER)


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Convert Figma's 0..1 color channels to ``#rrggbb``."""

    def _hex(c: float) -> str:
        return f"{max(0, min(255, round(c * 255))):02x}"

    return f"#{_hex(r)}{_hex(g)}{_hex(b)}"


def _first_solid_color(paints: object) -> str | None:
    if not isinstance(paints, list) or not paints:
        return None
    paint = paints[0]
    if not isinstance(paint, Mapping) or paint.get("type") != "SOLID":
        return None
    color = paint.get("color")
    if not isinstance(color, Mapping):
        return None
    return rgb_to_hex(
        float(color.get("r", 0)), float(color.get("g", 0)), float(color.get("b", 0))
    )


def _border(node: Mapping[str, Any]) -> str | None:
    weight = node.get("strokeWeight")
    if not weight:
        return None
    stroke_color = _first_solid_color(node.get("strokes"))
    if stroke_color is None:
        return None
    return f"{weight}px solid {stroke_color}"


def _border_radius(node: Mapping[str, Any]) -> str | None:
    radius = node.get("cornerRadius")
    if radius is not None:
        return str(radius)
    radii = node.get("rectangleCornerRadii")
    if isinstance(radii, list) and radii:
        return " ".join(f"{r}px" for r in radii)
    return None


def _expand_figma_node(
    item: tuple[object, float, float, str],
) -> tuple[dict[str, Any], list[tuple[object, float, float, str]]]:
    node, parent_x, parent_y, path = item
    if not isinstance(node, Mapping):
        raise NodeFormatError("Figma node must be an object", path=path)
    node_id = node.get("id")
    if not isinstance(node_id, str) or not node_id:
        raise NodeFormatError("Figma node has no 'id'", path=path)

    box = node.get("absoluteBoundingBox")
    if not isinstance(box, Mapping):
        box = {
            "x": parent_x,
            "y": parent_y,
            "width": DEFAULT_BOX_SIZE,
            "height": DEFAULT_BOX_SIZE,
        }
    abs_x = box.get("x", parent_x)
    abs_y = box.get("y", parent_y)

    raw_children = node.get("children") or []
    if not isinstance(raw_children, list):
        raise NodeFormatError("Figma 'children' must be a list", path=path)

    characters = node.get("characters")
    fields: dict[str, Any] = {
        "id": node_id,
        "type": map_figma_type(str(node.get("type", ""))),
        "name": str(node.get("name", "")),
        "x": abs_x - parent_x,
        "y": abs_y - parent_y,
        "width": box.get("width", DEFAULT_BOX_SIZE),
        "height": box.get("height", DEFAULT_BOX_SIZE),
        "text": characters if isinstance(characters, str) else None,
        "background": _first_solid_color(node.get("fills")),
        "border": _border(node),
        "border_radius": _border_radius(node),
    }
    return fields, [
        (child, abs_x, abs_y, f"{path}.children[{i}]")
        for i, child in enumerate(raw_children)
    ]


def convert_figma_node(
    node: Mapping[str, Any],
    parent_x: float = 0,
    parent_y: float = 0,
    *,
    path: str = "$",
) -> VisualNode:
    """
    Convert a node of a Figma file payload into a VisualNode.

    Positions are made relative to the parent's absolute bounding box.
    Nodes without a bounding box get a default box at the parent origin.
    """
    return fold_tree(
        (node, parent_x, parent_y, path), _expand_figma_node, _node_with_children
    )


def is_figma_file(payload: object) -> bool:
    return isinstance(payload, Mapping) and isinstance(payload.get("document"), Mapping)


def convert_figma_file(payload: Mapping[str, Any]) -> VisualNode:
    if not is_figma_file(payload):
        raise NodeFormatError("Figma file payload has no 'document' object")
    return convert_figma_node(payload["document"], path="$.document")


def extract_file_id_from_url(figma_url: str) -> str:
    match = _FILE_ID_RE.search(figma_url)
    if not match:
        raise ValidationError(f"Invalid Figma URL: {figma_url}")
    return match.group(1)
