#!/usr/bin/env python3
"""
Purpose:
    Wires together the crdsample application context: the merged
    configuration and the generation options derived from it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from crdsample.core.config import GenerationOptions, load_config


# --- Data model --- #

@dataclass(frozen=True)
class AppContext:
    """Immutable container for configuration and generation options."""
    config: Dict[str, Any]
    options: GenerationOptions


# --- Factory --- #

def build_context(*, config: Optional[Dict[str, Any]] = None) -> AppContext:
    """
    Build an `AppContext`.

    Args:
        config:
            Pre-merged configuration. If omitted, `load_config()` is used.
    """
    cfg = config if config is not None else load_config()
    return AppContext(config=cfg, options=GenerationOptions.from_config(cfg))
