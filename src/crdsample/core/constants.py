#!/usr/bin/env python3
"""
Core constants used across crdsample.

- Layout: indentation width and the literal markers written into samples.
- Sentinels: field names whose sample value comes from the CRD itself.
- File handling: supported extensions and default text encoding.
"""

from typing import Final

# --- Sample layout --- #

# Spaces per nesting level in the emitted YAML
INDENT_WIDTH: Final[int] = 2

# Written for objects that have (or keep) no fields
EMPTY_OBJECT: Final[str] = "{}"

# Written between the samples of two successive CRD versions
DOCUMENT_SEPARATOR: Final[str] = "\n---\n"

# --- Sentinel field names --- #

API_VERSION_FIELD: Final[str] = "apiVersion"
KIND_FIELD: Final[str] = "kind"

# --- Kubernetes --- #

CRD_KIND: Final[str] = "CustomResourceDefinition"

# --- File handling --- #

SUPPORTED_CRD_EXT: Final[frozenset[str]] = frozenset({".yaml", ".yml", ".json"})

DEFAULT_TEXT_ENCODING: Final[str] = "utf-8"
