#!/usr/bin/env python3
"""
Purpose:
    Exception hierarchy raised by crdsample. Everything the library raises on
    purpose derives from `CRDSampleError` so callers can catch one type.
"""
from __future__ import annotations

from typing import Sequence


class CRDSampleError(Exception):
    """Base class for crdsample failures."""


class CRDLoadError(CRDSampleError):
    """A CRD document could not be read or did not match the expected shape."""


class SchemaWalkError(CRDSampleError):
    """Walking a nested property mapping failed."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class SampleWriteError(CRDSampleError):
    """
    Emitting a sample failed while writing to, or closing, the sink.

    `errors` keeps every underlying exception in the order they happened; a
    write failure followed by a close failure yields both.
    """

    def __init__(self, message: str, errors: Sequence[BaseException] = ()):
        self.errors = list(errors)
        details = [message] + [f"  {type(e).__name__}: {e}" for e in self.errors]
        super().__init__("\n".join(details))
