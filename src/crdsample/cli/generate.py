#!/usr/bin/env python3

import logging
import sys
from pathlib import Path
from typing import List

from crdsample.core.app_context import AppContext
from crdsample.core.config import GenerationOptions
from crdsample.core.constants import DEFAULT_TEXT_ENCODING, DOCUMENT_SEPARATOR
from crdsample.core.errors import CRDSampleError
from crdsample.core.render.engine import write_html, render_html
from crdsample.core.sample_emitter import generate as generate_sample
from crdsample.core.schema.crd import CustomResourceDefinition, load_crds, parse_crds
from crdsample.core.versions import build_version_records

logger = logging.getLogger(__name__)

FORMATS = ("yaml", "html")


class _StdoutSink:
    """Writes to stdout; closing only flushes."""

    def write(self, text: str) -> int:
        return sys.stdout.write(text)

    def close(self) -> None:
        sys.stdout.flush()


def output_name(crd: CustomResourceDefinition, fmt: str) -> str:
    """`<Kind>_<group>.<fmt>`, the default output file name for one CRD."""
    return f"{crd.resource_kind}_{crd.group}.{fmt}"


def generate(args, ctx: AppContext) -> int:
    """
    Generate a sample YAML document (or an HTML page) for every CRD in the input.
    """
    fmt = args.format or ctx.config.get("output_format", "yaml")
    if fmt not in FORMATS:
        print(f"Unsupported output format {fmt!r}; expected one of {', '.join(FORMATS)}")
        return 1

    options = ctx.options.override(
        comments=args.comments,
        minimal=args.minimal,
        skip_random=args.no_random,
    )

    try:
        crds = _read_crds(args.crd)
    except (CRDSampleError, OSError, ValueError) as e:
        print(f"Could not load CRD from {args.crd!r}:\n  {e}")
        return 1

    if not crds:
        print(f"No CustomResourceDefinition found in {args.crd!r}")
        return 1

    try:
        for i, crd in enumerate(crds):
            if args.stdout and fmt == "yaml" and i > 0:
                sys.stdout.write(DOCUMENT_SEPARATOR)
            if fmt == "html":
                _write_html(crd, options, args)
            else:
                _write_yaml(crd, options, args)
    except (CRDSampleError, OSError, ValueError) as e:
        print(f"Error generating sample:\n  {e}")
        return 1
    return 0


def register(subparser):
    parser = subparser.add_parser(
        "generate",
        help="Generate a sample YAML document from a CRD."
    )
    parser.add_argument("crd", help="Path to a CRD file (.yaml, .yml, .json), or '-' for stdin.")
    parser.add_argument("-o", "--output", dest="output_dir", default=".",
                        help="Directory to write generated files into (default: current directory).")
    parser.add_argument("-s", "--stdout", action="store_true", help="Write to stdout instead of files.")
    parser.add_argument("-f", "--format", choices=FORMATS, default=None,
                        help="Output format (default: config 'output_format', else yaml).")
    parser.add_argument("-l", "--comments", action="store_true", default=None,
                        help="Add field descriptions as comments.")
    parser.add_argument("-m", "--minimal", action="store_true", default=None,
                        help="Only include required fields below the top level.")
    parser.add_argument("-r", "--no-random", dest="no_random", action="store_true", default=None,
                        help="Do not generate values from regex patterns.")
    parser.set_defaults(func=generate)


# --- Internals --- #

def _read_crds(source: str) -> List[CustomResourceDefinition]:
    if source == "-":
        return parse_crds(sys.stdin.read(), source="<stdin>")
    return load_crds(Path(source))


def _write_yaml(crd: CustomResourceDefinition, options: GenerationOptions, args) -> None:
    if args.stdout:
        generate_sample(crd, _StdoutSink(), options)
        return

    output_path = (Path(args.output_dir) / output_name(crd, "yaml")).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    generate_sample(crd, open(output_path, "w", encoding=DEFAULT_TEXT_ENCODING), options)
    logger.info("wrote %s", output_path)
    print(f"Sample generated at {output_path}")


def _write_html(crd: CustomResourceDefinition, options: GenerationOptions, args) -> None:
    records = build_version_records(crd, options)
    if args.stdout:
        sys.stdout.write(render_html(records))
        return

    output_path = (Path(args.output_dir) / output_name(crd, "html")).resolve()
    write_html(records, output_path)
    logger.info("wrote %s", output_path)
    print(f"Page generated at {output_path}")
