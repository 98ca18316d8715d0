#!/usr/bin/env python3
import pytest
from pydantic import ValidationError

from crdsample.core.schema.schema_node import SchemaNode
from crdsample.core.schema.schema_type import SchemaType


def test_camel_case_keys_are_accepted():
    node = SchemaNode.model_validate({
        "type": "array",
        "minItems": 2,
        "items": {"type": "string"},
        "x-kubernetes-int-or-string": True,
        "x-kubernetes-preserve-unknown-fields": True,
        "x-kubernetes-list-type": "atomic",  # unsupported keys are ignored
    })
    assert node.schema_type is SchemaType.ARRAY
    assert node.min_items == 2
    assert node.items.type == "string"
    assert node.int_or_string is True
    assert node.preserve_unknown_fields is True


def test_nested_properties_become_nodes():
    node = SchemaNode.model_validate({
        "type": "object",
        "required": ["name"],
        "properties": {"name": {"type": "string"}, "meta": {"type": "object", "properties": {}}},
    })
    assert isinstance(node.properties["name"], SchemaNode)
    assert node.required == ["name"]
    assert node.properties["meta"].properties == {}


@pytest.mark.parametrize("payload,present", [
    ({"type": "string"}, False),
    ({"type": "string", "default": None}, True),
    ({"type": "boolean", "default": False}, True),
    ({"type": "integer", "default": 0}, True),
])
def test_has_default_tracks_presence_not_truthiness(payload, present):
    assert SchemaNode.model_validate(payload).has_default is present


def test_has_example():
    assert SchemaNode.model_validate({"example": 0}).has_example is True
    assert SchemaNode.model_validate({}).has_example is False


@pytest.mark.parametrize("ap,has,schema_props", [
    (None, False, None),
    (True, True, None),
    (False, True, None),
    ({"type": "string"}, True, set()),
    ({"type": "object", "properties": {"a": {"type": "string"}}}, True, {"a"}),
])
def test_additional_properties_forms(ap, has, schema_props):
    payload = {"type": "object"}
    if ap is not None:
        payload["additionalProperties"] = ap
    node = SchemaNode.model_validate(payload)
    assert node.has_additional_properties is has
    if schema_props is None:
        assert node.additional_properties_schema is None
    else:
        assert set(node.additional_properties_schema.properties) == schema_props


def test_items_given_as_list_uses_first_schema():
    node = SchemaNode.model_validate({"type": "array", "items": [{"type": "integer"}, {"type": "string"}]})
    assert node.items.type == "integer"


def test_item_properties_empty_without_items():
    assert SchemaNode.model_validate({"type": "array"}).item_properties == {}


def test_null_collections_are_normalized():
    node = SchemaNode.model_validate({"description": None, "properties": None, "required": None})
    assert node.description == ""
    assert node.properties == {}
    assert node.required == []


def test_nodes_are_frozen():
    node = SchemaNode.model_validate({"type": "string"})
    with pytest.raises(ValidationError):
        node.type = "integer"
