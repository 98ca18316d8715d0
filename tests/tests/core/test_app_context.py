#!/usr/bin/env python3
from pathlib import Path

import pytest

import crdsample.core.app_context as ac
import crdsample.core.config as cfg
from crdsample.core.config import GenerationOptions


def test_build_context_with_explicit_config():
    ctx = ac.build_context(config={"comments": True, "minimal": True, "logging": {"level": "DEBUG"}})
    assert ctx.options == GenerationOptions(comments=True, minimal=True, skip_random=False)
    assert ctx.config["logging"]["level"] == "DEBUG"


def test_build_context_loads_config_when_omitted(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(cfg, "GLOBAL_CONFIG_PATH", tmp_path / "missing.json", raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CRDSAMPLE_SKIP_RANDOM", "1")
    for name in ("CRDSAMPLE_COMMENTS", "CRDSAMPLE_MINIMAL", "CRDSAMPLE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    ctx = ac.build_context()

    assert ctx.options == GenerationOptions(skip_random=True)
    assert ctx.config["output_format"] == "yaml"


def test_context_is_frozen():
    ctx = ac.build_context(config={})
    with pytest.raises(AttributeError):
        ctx.config = {}  # type: ignore[misc]
