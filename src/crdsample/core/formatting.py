#!/usr/bin/env python3
"""
Formatting helpers for crdsample.

- One line per error for Pydantic v2 `ValidationError`, with dotted/indexed paths
  such as `spec.versions[0].name: Field required`.
"""
from __future__ import annotations

from typing import Any, Iterable, List


# --- Public API --- #

def format_pydantic_errors_simple(exc: Exception) -> List[str]:
    """
    Return stable one-line messages from a Pydantic v2 ValidationError.

    Falls back to the first line of str(exc) for any other exception.
    """
    errors = None
    if callable(getattr(exc, "errors", None)):
        try:
            errors = exc.errors()  # type: ignore[attr-defined]
        except Exception:
            errors = None

    if not errors:
        return [str(exc).splitlines()[0]]
    return [f"{_format_error_loc(err.get('loc', ()))}: {err.get('msg', 'Validation error')}" for err in errors]


# --- Internals --- #

def _format_error_loc(loc: Iterable[Any]) -> str:
    """
    Convert a Pydantic error `loc` tuple into a dotted path with index suffixes.

    Examples:
        ('spec', 'versions', 0, 'name') -> "spec.versions[0].name"
        (0, 'name')                     -> "[0].name"
        ()                              -> "<root>"
    """
    parts: List[str] = []
    for seg in loc:
        if isinstance(seg, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{seg}]"
            else:
                parts.append(f"[{seg}]")
        else:
            parts.append(str(seg))
    return ".".join(parts) if parts else "<root>"
