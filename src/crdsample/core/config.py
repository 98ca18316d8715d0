#!/usr/bin/env python3
"""
crdsample configuration loader.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Final, Optional

from crdsample.core.utils import is_truthy, load_json_file, merge_dicts

# --- Defaults & locations --- #

DEFAULT_CONFIG: Final[Dict[str, Any]] = {
    "comments": False,
    "minimal": False,
    "skip_random": False,
    "output_format": "yaml",
    "logging": {"level": "INFO"},
}

GLOBAL_CONFIG_PATH: Final[Path] = Path.home() / ".config" / "crdsample" / "config.json"

PROJECT_CONFIG_NAME: Final[str] = "crdsample.json"

# Boolean options that may be switched on/off from the environment
_BOOL_ENV: Final[Dict[str, str]] = {
    "CRDSAMPLE_COMMENTS": "comments",
    "CRDSAMPLE_MINIMAL": "minimal",
    "CRDSAMPLE_SKIP_RANDOM": "skip_random",
}


# --- Generation options --- #

@dataclass(frozen=True)
class GenerationOptions:
    """
    Switches consumed by the sample emitter.

    - comments    : write field descriptions as comment lines above each key
    - minimal     : keep only required fields below the top level
    - skip_random : never synthesize values from `pattern`
    """
    comments: bool = False
    minimal: bool = False
    skip_random: bool = False

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> GenerationOptions:
        return cls(
            comments=bool(config.get("comments", False)),
            minimal=bool(config.get("minimal", False)),
            skip_random=bool(config.get("skip_random", False)),
        )

    def override(
        self,
        *,
        comments: Optional[bool] = None,
        minimal: Optional[bool] = None,
        skip_random: Optional[bool] = None,
    ) -> GenerationOptions:
        """Return a copy with every non-None argument applied."""
        changes = {
            k: v for k, v in
            (("comments", comments), ("minimal", minimal), ("skip_random", skip_random))
            if v is not None
        }
        return replace(self, **changes)


# --- Public API --- #

def load_config() -> Dict[str, Any]:
    """
    Load crdsample configuration with layered precedence.

    Order:
        1. Built-in defaults
        2. Global config (~/.config/crdsample/config.json)
        3. Project config (./crdsample.json)
        4. Environment overrides:
           - CRDSAMPLE_COMMENTS / CRDSAMPLE_MINIMAL / CRDSAMPLE_SKIP_RANDOM
           - CRDSAMPLE_LOG_LEVEL

    Returns:
        A merged configuration dictionary.
    """
    # 1) start with defaults
    config = copy.deepcopy(DEFAULT_CONFIG)

    # 2) global config
    config = merge_dicts(config, load_json_file(GLOBAL_CONFIG_PATH))

    # 3) project config
    project_path = Path.cwd() / PROJECT_CONFIG_NAME
    config = merge_dicts(config, load_json_file(project_path))

    # 4) environment overrides
    for env_name, key in _BOOL_ENV.items():
        raw = os.getenv(env_name)
        if raw is not None and raw.strip():
            config[key] = is_truthy(raw)

    log_level_env = os.getenv("CRDSAMPLE_LOG_LEVEL")
    if log_level_env:
        config.setdefault("logging", {})["level"] = log_level_env

    return config
