#!/usr/bin/env python3
"""
Purpose:
    Defines the SchemaType enumeration for the OpenAPI v3 subset used by
    Kubernetes CRDs, with a lenient parser that falls back to UNKNOWN.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class SchemaType(str, Enum):
    """
    Declared `type` of a CRD schema node.

    - string  : textual scalar
    - integer : whole number scalar
    - number  : numeric scalar (int or float)
    - boolean : true/false scalar
    - object  : mapping with named properties or additionalProperties
    - array   : homogeneous list described by `items`
    - unknown : missing or unrecognized type (returned by `parse`)
    """

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    UNKNOWN = "unknown"

    # --- Parsing --- #

    @classmethod
    def parse(cls, value: Any) -> SchemaType:
        """
        Coerce arbitrary input to a `SchemaType`.

        - `SchemaType` instance → returned as-is
        - `None`, empty or unknown strings → `SchemaType.UNKNOWN`
        - strings are trimmed and lowercased before lookup

        Examples
        --------
        >>> SchemaType.parse(" Integer ")
        <SchemaType.INTEGER: 'integer'>
        >>> SchemaType.parse(None)
        <SchemaType.UNKNOWN: 'unknown'>
        """
        if isinstance(value, SchemaType):
            return value
        if value is None:
            return cls.UNKNOWN
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.UNKNOWN
