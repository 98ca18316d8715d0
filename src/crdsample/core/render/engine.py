#!/usr/bin/env python3
"""
Purpose:
    Renders VersionRecords to a standalone HTML page with Jinja2: the sample
    YAML per version and the property tree as nested collapsible panels.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from crdsample.core.constants import DEFAULT_TEXT_ENCODING
from crdsample.core.versions import VersionRecord

TEMPLATES_DIR = Path(__file__).parent / "templates"

DEFAULT_TEMPLATE = "crd.html.j2"


def _build_env(
    templates_roots: Iterable[Path],
    extra_filters: Optional[Dict[str, Any]] = None
) -> Environment:
    loader = FileSystemLoader([str(Path(p).resolve()) for p in templates_roots])
    env = Environment(
        loader=loader,
        autoescape=select_autoescape(enabled_extensions=("html", "xml", "j2")),
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )
    if extra_filters:
        env.filters.update(extra_filters)
    return env


class RenderEngine:
    """
    Stateless engine object holding a Jinja Environment.
    Prefer render_html() for a one-shot convenience wrapper.
    """

    def __init__(self, templates_roots: Optional[Iterable[Path]] = None, filters: Optional[Dict[str, Any]] = None):
        self.env = _build_env(templates_roots or [TEMPLATES_DIR], filters)

    def render(self, records: Sequence[VersionRecord], *, template: str = DEFAULT_TEMPLATE, title: str = "") -> str:
        kinds = sorted({r.kind for r in records})
        return self.env.get_template(template).render(
            records=list(records),
            title=title or ", ".join(kinds) or "CRD",
        )


def render_html(records: Sequence[VersionRecord], *, title: str = "") -> str:
    """Render `records` with the bundled template."""
    return RenderEngine().render(records, title=title)


def write_html(records: Sequence[VersionRecord], output_path: Path, *, title: str = "") -> Path:
    """Render `records` and write them to `output_path`, creating parent directories."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_html(records, title=title), encoding=DEFAULT_TEXT_ENCODING)
    return output_path

