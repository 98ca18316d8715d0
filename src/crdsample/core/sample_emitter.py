#!/usr/bin/env python3
"""
Purpose:
    Streams a sample YAML document for each version of a CRD, writing one
    line at a time to a caller-supplied sink.

Layout rules:
    - two spaces per nesting level, keys in lexicographic order
    - `apiVersion` is always `<group>/<version>`; top-level `kind` is the CRD kind
    - arrays of objects open a sequence item (`- key: ...`) for the first key
    - with comments enabled, descriptions precede their key as `# ...` lines
    - in minimal mode only required fields are kept below the top level and a
      scope left empty is written as `{}`
"""

from __future__ import annotations

import io
import logging
import random
from typing import Iterable, List, Optional, Protocol

from crdsample.core.config import GenerationOptions
from crdsample.core.constants import (
    API_VERSION_FIELD,
    DOCUMENT_SEPARATOR,
    EMPTY_OBJECT,
    INDENT_WIDTH,
    KIND_FIELD,
)
from crdsample.core.errors import SampleWriteError
from crdsample.core.schema.crd import CustomResourceDefinition
from crdsample.core.schema.schema_node import SchemaNode
from crdsample.core.values import synthesize_value
from crdsample.core.walker import SchemaField, Shape, TraversalContext, walk_schema

logger = logging.getLogger(__name__)

_WRITE_ERRORS = (OSError, ValueError)


class Sink(Protocol):
    def write(self, text: str) -> object: ...

    def close(self) -> object: ...


# --- Emitter --- #

class SampleEmitter:
    """
    Writes sample documents for one CRD (fixed group and kind).

    An emitter holds no per-walk state and may be reused for several
    versions; each call builds its own TraversalContext.
    """

    def __init__(
        self,
        group: str,
        kind: str,
        options: Optional[GenerationOptions] = None,
        *,
        rng: Optional[random.Random] = None,
    ):
        self.group = group
        self.kind = kind
        self.options = options or GenerationOptions()
        self._rng = rng

    def context(self, version: str) -> TraversalContext:
        return TraversalContext(group=self.group, kind=self.kind, version=version)

    def emit_schema(self, version: str, root: SchemaNode, sink: Sink) -> None:
        """Walk `root` and write its sample to `sink`."""
        ctx = self.context(version)
        self.emit(walk_schema(root, ctx), ctx, sink)

    def emit(self, fields: Iterable[SchemaField], ctx: TraversalContext, sink: Sink) -> None:
        """Write already-walked `fields` to `sink`; a failing write raises SampleWriteError."""
        for line in self.lines(fields, ctx):
            _write(sink, line)

    def render(self, fields: Iterable[SchemaField], ctx: TraversalContext) -> str:
        buffer = io.StringIO()
        self.emit(fields, ctx, buffer)
        return buffer.getvalue()

    def lines(self, fields: Iterable[SchemaField], ctx: TraversalContext) -> Iterable[str]:
        """Yield the sample text of `fields` piece by piece, each ending in a newline."""
        for index, f in enumerate(fields):
            opens_item = ctx.in_array and index == 0
            yield from self._comment_lines(f, ctx, opens_item)
            yield from self._field_lines(f, ctx, self._key_prefix(ctx, opens_item))

    # --- Internals --- #

    def _field_lines(self, f: SchemaField, ctx: TraversalContext, prefix: str) -> Iterable[str]:
        key = f"{prefix}{f.name}:"

        if f.name == API_VERSION_FIELD:
            yield f"{key} {ctx.group}/{ctx.version}\n"
            return
        if f.name == KIND_FIELD and ctx.depth == 0:
            yield f"{key} {ctx.kind}\n"
            return

        if f.shape is Shape.LEAF:
            value = synthesize_value(f.node, skip_random=self.options.skip_random, rng=self._rng)
            yield f"{key} {value}\n"
            return

        children = self._kept_children(f)
        if f.shape is Shape.ARRAY_OF_OBJECTS:
            if not children:
                yield f"{key}\n{_pad(ctx.depth)}- {EMPTY_OBJECT}\n"
                return
            yield f"{key}\n"
            yield from self.lines(children, ctx.descend(f.name, in_array=True))
            return

        # OBJECT and MAP
        if not children:
            yield f"{key} {EMPTY_OBJECT}\n"
            return
        yield f"{key}\n"
        yield from self.lines(children, ctx.descend(f.name))

    def _kept_children(self, f: SchemaField) -> List[SchemaField]:
        if self.options.minimal:
            return [c for c in f.children if c.required]
        return list(f.children)

    def _comment_lines(self, f: SchemaField, ctx: TraversalContext, opens_item: bool) -> Iterable[str]:
        if not self.options.comments or not f.node.description:
            return
        pad = _pad(ctx.depth - 1) if opens_item else _pad(ctx.depth)
        for line in f.node.description.split("\n"):
            yield f"{pad}# {line}\n"

    @staticmethod
    def _key_prefix(ctx: TraversalContext, opens_item: bool) -> str:
        if opens_item:
            return _pad(ctx.depth - 1) + "- "
        return _pad(ctx.depth)


def _pad(depth: int) -> str:
    return " " * (INDENT_WIDTH * max(0, depth))


def _write(sink: Sink, text: str) -> None:
    try:
        sink.write(text)
    except _WRITE_ERRORS as e:
        raise SampleWriteError("failed to write to sink", [e]) from e


# --- Public API --- #

def generate(
    crd: CustomResourceDefinition,
    sink: Sink,
    options: Optional[GenerationOptions] = None,
    *,
    rng: Optional[random.Random] = None,
) -> None:
    """
    Write the sample of every version of `crd` to `sink`, then close it.

    Versions are separated by a `---` document line (none after the last).
    The sink is closed whether or not emission succeeded.

    Raises:
        SampleWriteError: a write or close failed; `errors` holds every cause
        SchemaWalkError: a schema could not be walked; this and any other
            non-sink error is re-raised unchanged unless closing also failed
    """
    emitter = SampleEmitter(crd.group, crd.resource_kind, options, rng=rng)
    failure: Optional[BaseException] = None
    wrapped: Optional[SampleWriteError] = None

    try:
        for i, version in enumerate(crd.versions):
            logger.debug("emitting %s/%s %s", crd.group, version.name, crd.resource_kind)
            emitter.emit_schema(version.name, crd.schema_for(version), sink)
            if i < len(crd.versions) - 1:
                _write(sink, DOCUMENT_SEPARATOR)
    except SampleWriteError as e:
        failure = e.errors[0]
        wrapped = SampleWriteError(f"failed to write sample for {crd.resource_kind}", e.errors)
    except Exception as e:
        failure = e

    close_error = _close(sink)
    if close_error is not None:
        causes = [failure, close_error] if failure is not None else [close_error]
        raise SampleWriteError(f"failed to close sink for {crd.resource_kind}", causes) from (failure or close_error)
    if wrapped is not None:
        raise wrapped from failure
    if failure is not None:
        raise failure


def _close(sink: Sink) -> Optional[BaseException]:
    try:
        sink.close()
    except _WRITE_ERRORS as e:
        return e
    return None
