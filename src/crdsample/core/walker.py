#!/usr/bin/env python3
"""
Purpose:
    Walks a CRD property mapping depth-first and resolves it into an ordered
    tree of `SchemaField` entries. Both the sample emitter and the property
    tree builder render this one tree, so their traversal rules (key order,
    array/map unwrapping, required flags) cannot drift apart.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from crdsample.core.errors import SchemaWalkError
from crdsample.core.formatting import format_pydantic_errors_simple
from crdsample.core.schema.schema_node import SchemaNode
from crdsample.core.schema.schema_type import SchemaType

logger = logging.getLogger(__name__)


class Shape(str, Enum):
    """How a field is rendered."""

    LEAF = "leaf"
    OBJECT = "object"
    ARRAY_OF_OBJECTS = "array_of_objects"
    MAP = "map"


# --- Traversal state --- #

@dataclass(frozen=True)
class TraversalContext:
    """
    Per-walk state, copied (never mutated) on the way down.

    `group`, `kind` and `version` feed the `apiVersion`/`kind` substitution;
    `in_array` marks a scope whose first field opens a sequence item.
    """
    group: str = ""
    kind: str = ""
    version: str = ""
    depth: int = 0
    in_array: bool = False
    path: str = ""

    def descend(self, name: str, *, in_array: bool = False) -> TraversalContext:
        child_path = f"{self.path}.{name}" if self.path else name
        if in_array:
            child_path += "[]"
        return replace(self, depth=self.depth + 1, in_array=in_array, path=child_path)

    def path_of(self, name: str) -> str:
        return f"{self.path}.{name}" if self.path else name


# --- Resolved fields --- #

@dataclass(frozen=True)
class SchemaField:
    """One resolved field: its schema node, shape, requiredness and children."""
    name: str
    node: SchemaNode
    shape: Shape
    required: bool
    depth: int
    path: str
    children: Tuple[SchemaField, ...] = field(default_factory=tuple)

    @property
    def has_children(self) -> bool:
        return bool(self.children)


# --- Public API --- #

def classify(node: SchemaNode) -> Shape:
    """Return the rendering shape of `node`."""
    if node.has_additional_properties:
        return Shape.MAP
    if node.properties:
        return Shape.OBJECT
    if node.schema_type is SchemaType.ARRAY and node.item_properties:
        return Shape.ARRAY_OF_OBJECTS
    return Shape.LEAF


def child_scope(node: SchemaNode, shape: Shape) -> Optional[Tuple[Mapping[str, SchemaNode], List[str]]]:
    """
    The (properties, required) scope a field descends into, or None for no descent.

    Maps only descend when the node declares properties of its own and its
    additionalProperties schema has properties; otherwise they render as `{}`.
    """
    if shape is Shape.OBJECT:
        return node.properties, node.required
    if shape is Shape.ARRAY_OF_OBJECTS:
        return node.items.properties, node.items.required
    if shape is Shape.MAP:
        ap = node.additional_properties_schema
        if node.properties and ap is not None and ap.properties:
            return ap.properties, ap.required
    return None


def walk_properties(
    properties: Mapping[str, Any],
    required: Iterable[str] = (),
    ctx: Optional[TraversalContext] = None,
) -> List[SchemaField]:
    """
    Resolve `properties` (name -> SchemaNode, or raw schema dict) in
    lexicographic key order.

    `required` is the required list of this scope only; nested scopes use
    their own lists. The input mapping and its nodes are left untouched.

    Raises:
        SchemaWalkError: when a node cannot be interpreted as a schema
    """
    ctx = ctx or TraversalContext()
    required_names = frozenset(required)
    fields: List[SchemaField] = []

    for name in sorted(properties):
        node = _as_node(properties[name], ctx.path_of(name))
        shape = classify(node)
        children: Tuple[SchemaField, ...] = ()

        scope = child_scope(node, shape)
        if scope is not None:
            child_props, child_required = scope
            logger.debug("descending into %s (%s)", ctx.path_of(name), shape.value)
            children = tuple(walk_properties(
                child_props,
                child_required,
                ctx.descend(name, in_array=shape is Shape.ARRAY_OF_OBJECTS),
            ))

        fields.append(SchemaField(
            name=name,
            node=node,
            shape=shape,
            required=name in required_names,
            depth=ctx.depth,
            path=ctx.path_of(name),
            children=children,
        ))

    return fields


def walk_schema(root: SchemaNode, ctx: Optional[TraversalContext] = None) -> List[SchemaField]:
    """Walk the top-level properties of a version's root schema."""
    return walk_properties(root.properties, root.required, ctx)


# --- Internals --- #

def _as_node(value: Any, path: str) -> SchemaNode:
    if isinstance(value, SchemaNode):
        return value
    if not isinstance(value, Mapping):
        raise SchemaWalkError(path, f"expected a schema mapping, got {type(value).__name__}")
    try:
        return SchemaNode.model_validate(dict(value))
    except ValidationError as e:
        raise SchemaWalkError(path, "; ".join(format_pydantic_errors_simple(e))) from e
