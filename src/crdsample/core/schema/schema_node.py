#!/usr/bin/env python3
"""
Purpose:
    Implements the SchemaNode model: one field declaration inside a CRD's
    `openAPIV3Schema`, with nested properties, array items and
    additionalProperties resolved into further SchemaNode instances.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from crdsample.core.schema.schema_type import SchemaType


# --- Model --- #

class SchemaNode(BaseModel):
    """
    One OpenAPI v3 schema node as used by Kubernetes CRDs.

    Keys are accepted in their camelCase form (`minItems`,
    `additionalProperties`, `x-kubernetes-int-or-string`, ...). Keys outside
    the supported subset are ignored. Instances are frozen: nothing in
    crdsample modifies a schema it was handed.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    type: Optional[str] = Field(default=None, description="Declared OpenAPI type.")
    description: str = Field(default="", description="Human-readable description.")
    format: Optional[str] = Field(default=None, description="Format hint (date-time, int64, ...).")
    pattern: Optional[str] = Field(default=None, description="Regular expression constraint.")
    default: Any = Field(default=None, description="Default value.")
    example: Any = Field(default=None, description="Example value.")
    enum: Optional[List[Any]] = Field(default=None, description="Allowed values.")
    minimum: Optional[float] = Field(default=None, description="Inclusive numeric minimum.")
    min_items: Optional[int] = Field(default=None, alias="minItems")
    nullable: bool = Field(default=False)
    properties: Dict[str, SchemaNode] = Field(default_factory=dict)
    items: Optional[SchemaNode] = Field(default=None, description="Array element schema.")
    additional_properties: Union[bool, SchemaNode, None] = Field(default=None, alias="additionalProperties")
    required: List[str] = Field(default_factory=list)
    int_or_string: bool = Field(default=False, alias="x-kubernetes-int-or-string")
    preserve_unknown_fields: bool = Field(default=False, alias="x-kubernetes-preserve-unknown-fields")

    # --- Validators --- #

    @field_validator("items", mode="before")
    @classmethod
    def _first_of_item_list(cls, v: Any) -> Any:
        """`items` may be authored as a list of schemas; the first one describes elements."""
        if isinstance(v, list):
            return v[0] if v else None
        return v

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("properties", mode="before")
    @classmethod
    def _none_properties(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("required", mode="before")
    @classmethod
    def _none_required(cls, v: Any) -> Any:
        return [] if v is None else v

    # --- Convenience --- #

    @property
    def schema_type(self) -> SchemaType:
        """The declared type parsed into `SchemaType` (UNKNOWN if missing/unrecognized)."""
        return SchemaType.parse(self.type)

    @property
    def has_default(self) -> bool:
        """True when `default` was given, including an explicit null/false/0."""
        return "default" in self.model_fields_set

    @property
    def has_example(self) -> bool:
        """True when `example` was given, including an explicit null/false/0."""
        return "example" in self.model_fields_set

    @property
    def has_additional_properties(self) -> bool:
        return self.additional_properties is not None

    @property
    def additional_properties_schema(self) -> Optional[SchemaNode]:
        """The schema form of `additionalProperties`; None when absent or a plain bool."""
        ap = self.additional_properties
        return ap if isinstance(ap, SchemaNode) else None

    @property
    def item_properties(self) -> Dict[str, SchemaNode]:
        """Properties of the array element schema, or an empty mapping."""
        return self.items.properties if self.items is not None else {}


SchemaNode.model_rebuild()
