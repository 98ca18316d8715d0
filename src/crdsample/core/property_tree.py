#!/usr/bin/env python3
"""
Purpose:
    Builds the display tree of a CRD schema: one PropertyDescriptor per field
    carrying its type, constraints and requiredness, nested the same way the
    sample document is.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from crdsample.core.schema.schema_node import SchemaNode
from crdsample.core.values import raw_value
from crdsample.core.walker import SchemaField, walk_properties


# --- Model --- #

class PropertyDescriptor(BaseModel):
    """One node of the property tree, as shown in a collapsible listing."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Field name.")
    description: str = Field(default="")
    type: str = Field(default="", description="Declared type, verbatim.")
    nullable: bool = Field(default=False)
    pattern: Optional[str] = Field(default=None)
    format: Optional[str] = Field(default=None)
    default: Optional[str] = Field(default=None, description="Default in compact JSON form.")
    required: bool = Field(default=False)
    properties: List[PropertyDescriptor] = Field(default_factory=list)

    @property
    def has_children(self) -> bool:
        return bool(self.properties)

    @classmethod
    def from_field(cls, f: SchemaField) -> PropertyDescriptor:
        node = f.node
        return cls(
            name=f.name,
            description=node.description,
            type=node.type or "",
            nullable=node.nullable,
            pattern=node.pattern,
            format=node.format,
            default=raw_value(node.default) if node.has_default else None,
            required=f.required,
            properties=[cls.from_field(c) for c in f.children],
        )


# --- Public API --- #

def describe_fields(fields: Iterable[SchemaField]) -> List[PropertyDescriptor]:
    """Convert already-walked fields; no sentinel substitution and no required-only pruning."""
    return [PropertyDescriptor.from_field(f) for f in fields]


def build_property_tree(properties: Mapping[str, Any], required: Iterable[str] = ()) -> List[PropertyDescriptor]:
    """
    Walk `properties` and return the ordered descriptor list.

    Raises:
        SchemaWalkError: propagated from the walk
    """
    return describe_fields(walk_properties(properties, required))


def build_schema_tree(root: SchemaNode) -> List[PropertyDescriptor]:
    """Descriptor list for the top-level properties of a version's root schema."""
    return build_property_tree(root.properties, root.required)


PropertyDescriptor.model_rebuild()
