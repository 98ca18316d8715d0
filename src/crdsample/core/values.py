#!/usr/bin/env python3
"""
Purpose:
    Picks the sample value written for a leaf field of a CRD schema.

Precedence (first match wins):
    1. default
    2. example
    3. a random string matching `pattern` (unless disabled or the pattern is unusable)
    4. the first `enum` value
    5. a placeholder chosen by the declared type
"""

from __future__ import annotations

import json
import logging
import random
import re
import string
from typing import Any, Callable, Dict, Optional

import rstr

from crdsample.core.constants import EMPTY_OBJECT
from crdsample.core.schema.schema_node import SchemaNode
from crdsample.core.schema.schema_type import SchemaType

logger = logging.getLogger(__name__)

# Placeholder element type for arrays whose `items` declares no type
UNTYPED_ITEM: str = "any"

# Samples stay on one line: `.`, `\s` and `\W` draw from visible characters and spaces
_VISIBLE_ALPHABETS: Dict[str, str] = {
    "printable": string.ascii_letters + string.digits + string.punctuation + " ",
    "whitespace": " ",
    "nonword": string.punctuation.replace("_", "") + " ",
}


# --- Public API --- #

def synthesize_value(
    node: SchemaNode,
    *,
    skip_random: bool = False,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Return the literal text written after `key:` for a leaf `node`.

    Unknown types never fail: the declared type string itself is returned.
    """
    if node.has_default:
        return raw_value(node.default)

    if node.has_example:
        return raw_value(node.example)

    if node.pattern and not skip_random:
        sample = sample_pattern(node.pattern, rng=rng)
        if sample is not None:
            return f"{sample} # {node.pattern}"

    if node.enum:
        return raw_value(node.enum[0])

    return _TYPE_PLACEHOLDERS[node.schema_type](node)


def raw_value(value: Any) -> str:
    """Compact JSON form of a default/example/enum value, as it appears in the raw schema."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def sample_pattern(pattern: str, *, rng: Optional[random.Random] = None) -> Optional[str]:
    """
    Generate a string matching `pattern`, or None if the pattern does not
    compile or cannot be expanded.
    """
    try:
        re.compile(pattern)
    except re.error as e:
        logger.debug("pattern %r does not compile (%s); falling through", pattern, e)
        return None

    generator = rstr.Rstr(rng, **_VISIBLE_ALPHABETS)
    try:
        sample = generator.xeger(pattern)
    except (re.error, LookupError, ValueError, TypeError) as e:
        logger.debug("pattern %r cannot be expanded (%s); falling through", pattern, e)
        return None

    # negated literals can still pick control characters
    if not sample.isprintable():
        logger.debug("pattern %r produced a non-printable sample; falling through", pattern)
        return None
    return sample


# --- Type placeholders --- #

def _string(node: SchemaNode) -> str:
    return "string"


def _integer(node: SchemaNode) -> str:
    if node.minimum is not None:
        return str(int(node.minimum))
    return "1"


def _boolean(node: SchemaNode) -> str:
    return "true"


def _object(node: SchemaNode) -> str:
    return EMPTY_OBJECT


def _array(node: SchemaNode) -> str:
    item_type = (node.items.type if node.items is not None else None) or UNTYPED_ITEM
    count = max(0, node.min_items or 0)
    items = ",".join([item_type] * count)
    return f"[{items}] # minItems {count} of type {item_type}"


def _raw_type(node: SchemaNode) -> str:
    return node.type or ""


_TYPE_PLACEHOLDERS: Dict[SchemaType, Callable[[SchemaNode], str]] = {
    SchemaType.STRING: _string,
    SchemaType.INTEGER: _integer,
    SchemaType.NUMBER: _raw_type,
    SchemaType.BOOLEAN: _boolean,
    SchemaType.OBJECT: _object,
    SchemaType.ARRAY: _array,
    SchemaType.UNKNOWN: _raw_type,
}
