#!/usr/bin/env python3

import argparse
import sys
from typing import List, Optional

from crdsample.core.app_context import build_context
from crdsample.core.logs import configure_logging
from crdsample.cli import config, generate


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="crdsample", description="Sample YAML and property trees from Kubernetes CRDs")
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands (they accept ctx)
    generate.register(subparsers)
    config.register(subparsers)

    args = parser.parse_args(argv)
    if hasattr(args, "func"):
        try:
            ctx = build_context()
        except ValueError as e:
            print(f"Invalid configuration: {e}", file=sys.stderr)
            return 1
        configure_logging(ctx.config)
        return args.func(args, ctx)
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
