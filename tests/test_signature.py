from __future__ import annotations

import dataclasses

from designclone.nodes import NodeType, VisualNode
from designclone.signature import SignatureConfig, build_signatures, node_signature
from tests._tree_fixtures import button, card_row, div, image


def test_leaf_has_signature_but_no_bucket() -> None:
    index = build_signatures(button("only"))
    assert index.signatures == {"only": index.root_signature}
    assert index.buckets == {}


def test_signature_is_fixed_length_hex() -> None:
    index = build_signatures(card_row())
    for sig in index.signatures.values():
        assert len(sig) == 40
        int(sig, 16)


def test_same_shapes_collide_anywhere_in_tree() -> None:
    root = div(
        "root",
        div("deep", div("x", button("x1"))),
        div("y", button("y1")),
    )
    index = build_signatures(root)
    assert index.signatures["x"] == index.signatures["y"]
    assert index.signatures["deep"] != index.signatures["y"]


def test_child_order_is_canonicalized() -> None:
    a = div("a", button("a1"), image("a2"), div("a3", button("a4")))
    b = div("b", div("b3", button("b4")), image("b2"), button("b1"))
    assert build_signatures(a).root_signature == build_signatures(b).root_signature


def test_child_multiplicity_matters() -> None:
    one = div("one", button("b1"))
    two = div("two", button("b1"), button("b2"))
    assert build_signatures(one).root_signature != build_signatures(two).root_signature


def test_type_and_display_discriminate() -> None:
    cfg = SignatureConfig()
    plain = VisualNode(id="n", type=NodeType.CONTAINER)
    assert node_signature(plain, [], cfg) != node_signature(
        dataclasses.replace(plain, type=NodeType.IMAGE), [], cfg
    )
    assert node_signature(plain, [], cfg) != node_signature(
        dataclasses.replace(plain, display="flex"), [], cfg
    )


def test_node_signature_ignores_input_order() -> None:
    node = div("n")
    cfg = SignatureConfig()
    assert node_signature(node, ["b", "a"], cfg) == node_signature(node, ["a", "b"], cfg)


def test_cosmetic_attributes_ignored_by_default() -> None:
    cfg = SignatureConfig()
    plain = div("n")
    styled = dataclasses.replace(
        plain,
        id="other",
        name="Hero",
        x=5,
        y=6,
        width=70,
        height=80,
        text="hello",
        background="#fff",
        color="#000",
        border="1px solid red",
        border_radius="4px",
    )
    assert node_signature(plain, [], cfg) == node_signature(styled, [], cfg)


def test_signature_config_describe() -> None:
    assert SignatureConfig().describe() == ["type", "display"]
    assert SignatureConfig(include_size=True, include_border=True).describe() == [
        "type",
        "display",
        "width",
        "height",
        "border",
    ]


def test_buckets_follow_post_order_creation() -> None:
    root = div(
        "root",
        div("outer", div("inner", button("b"))),
    )
    index = build_signatures(root)
    first_nodes = [nodes[0].id for nodes in index.buckets.values()]
    assert first_nodes == ["inner", "outer", "root"]


def test_deep_tree_does_not_hit_recursion_limit() -> None:
    node = button("leaf")
    for i in range(5000):
        node = div(f"d{i}", node)
    index = build_signatures(node)
    assert len(index.signatures) == 5001
    assert len(index.buckets) == 5000
