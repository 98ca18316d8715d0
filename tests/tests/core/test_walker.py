#!/usr/bin/env python3
import pytest

from crdsample.core.errors import SchemaWalkError
from crdsample.core.schema.schema_node import SchemaNode
from crdsample.core.walker import (
    Shape,
    TraversalContext,
    classify,
    walk_properties,
    walk_schema,
)


def _root() -> SchemaNode:
    """
    Root schema that hits every shape:
      - leaves declared out of lexicographic order
      - nested object with its own required list
      - array of objects with the item schema's required list
      - map with and without descent
    """
    return SchemaNode.model_validate({
        "type": "object",
        "required": ["spec"],
        "properties": {
            "status": {"type": "object", "properties": {"phase": {"type": "string"}}},
            "spec": {
                "type": "object",
                "required": ["replicas"],
                "properties": {
                    "replicas": {"type": "integer"},
                    "containers": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["name"],
                            "properties": {"name": {"type": "string"}, "image": {"type": "string"}},
                        },
                    },
                    "labels": {"type": "object", "additionalProperties": {"type": "string"}},
                    "selectors": {
                        "type": "object",
                        "properties": {"default": {"type": "string"}},
                        "additionalProperties": {
                            "type": "object",
                            "required": ["key"],
                            "properties": {"key": {"type": "string"}, "op": {"type": "string"}},
                        },
                    },
                },
            },
            "apiVersion": {"type": "string"},
            "kind": {"type": "string"},
        },
    })


def _by_name(fields):
    return {f.name: f for f in fields}


# --- Ordering --- #

def test_fields_are_sorted_lexicographically():
    fields = walk_schema(_root())
    assert [f.name for f in fields] == ["apiVersion", "kind", "spec", "status"]
    spec = _by_name(fields)["spec"]
    assert [c.name for c in spec.children] == ["containers", "labels", "replicas", "selectors"]


def test_uppercase_sorts_before_lowercase():
    fields = walk_properties({"b": {}, "B": {}, "a": {}})
    assert [f.name for f in fields] == ["B", "a", "b"]


# --- Shapes --- #

@pytest.mark.parametrize("payload,expected", [
    ({"type": "string"}, Shape.LEAF),
    ({"type": "object"}, Shape.LEAF),
    ({"type": "object", "properties": {"a": {}}}, Shape.OBJECT),
    ({"type": "array", "items": {"type": "string"}}, Shape.LEAF),
    ({"type": "array", "items": {"type": "object", "properties": {"a": {}}}}, Shape.ARRAY_OF_OBJECTS),
    ({"type": "object", "additionalProperties": True}, Shape.MAP),
    ({"type": "object", "properties": {"a": {}}, "additionalProperties": {"type": "string"}}, Shape.MAP),
])
def test_classify(payload, expected):
    assert classify(SchemaNode.model_validate(payload)) is expected


def test_leaves_do_not_recurse():
    fields = walk_properties({"a": {"type": "string"}, "b": {"type": "integer"}})
    assert all(f.shape is Shape.LEAF and not f.has_children for f in fields)


def test_map_without_own_properties_does_not_descend():
    labels = _by_name(_by_name(walk_schema(_root()))["spec"].children)["labels"]
    assert labels.shape is Shape.MAP
    assert labels.children == ()


def test_map_with_properties_descends_into_additional_properties_schema():
    selectors = _by_name(_by_name(walk_schema(_root()))["spec"].children)["selectors"]
    assert [c.name for c in selectors.children] == ["key", "op"]
    assert [c.required for c in selectors.children] == [True, False]


# --- Required scoping --- #

def test_required_is_scoped_to_the_immediate_parent():
    fields = _by_name(walk_schema(_root()))
    assert fields["spec"].required is True
    assert fields["status"].required is False

    spec_children = _by_name(fields["spec"].children)
    assert spec_children["replicas"].required is True
    assert spec_children["containers"].required is False

    item_children = _by_name(spec_children["containers"].children)
    assert item_children["name"].required is True
    assert item_children["image"].required is False


def test_required_names_are_not_inherited():
    fields = walk_properties(
        {"outer": {"type": "object", "properties": {"outer": {"type": "string"}}}},
        required=["outer"],
    )
    assert fields[0].required is True
    assert fields[0].children[0].required is False


# --- Depth, paths and context --- #

def test_depth_and_paths():
    spec = _by_name(walk_schema(_root()))["spec"]
    containers = _by_name(spec.children)["containers"]
    name = _by_name(containers.children)["name"]
    assert (spec.depth, containers.depth, name.depth) == (0, 1, 2)
    assert name.path == "spec.containers[].name"


def test_context_descend_copies():
    ctx = TraversalContext(group="g", kind="K", version="v1")
    child = ctx.descend("spec", in_array=True)
    assert (ctx.depth, ctx.in_array) == (0, False)
    assert (child.depth, child.in_array, child.path) == (1, True, "spec[]")
    assert child.group == "g" and child.kind == "K" and child.version == "v1"


# --- Input is never mutated --- #

def test_walk_leaves_input_untouched():
    root = _root()
    before = root.model_dump(by_alias=True)
    walk_schema(root)
    walk_schema(root)
    assert root.model_dump(by_alias=True) == before


# --- Errors --- #

def test_non_mapping_node_raises_with_path():
    with pytest.raises(SchemaWalkError, match="expected a schema mapping") as exc:
        walk_properties({"spec": "not-a-schema"})
    assert exc.value.path == "spec"


def test_bad_nested_raw_node_names_the_nested_location():
    with pytest.raises(SchemaWalkError, match=r"properties\.bad") as exc:
        walk_properties({"spec": {"type": "object", "properties": {"bad": "not-a-schema"}}})
    assert exc.value.path == "spec"


def test_invalid_raw_schema_reports_validation_error():
    with pytest.raises(SchemaWalkError, match="minItems"):
        walk_properties({"tags": {"type": "array", "minItems": "many"}})
