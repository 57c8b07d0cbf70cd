"""Tests for ``hackpack.main.load_config``."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from hackpack.exceptions import ConfigError
from hackpack.main import Settings, load_config
from hackpack.models import Language, StylingMode


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    settings = load_config(tmp_path / "missing.json")
    assert settings == Settings()
    assert settings.package_manager == "npm"
    assert settings.default_language is Language.TS
    assert settings.default_styling is StylingMode.TAILWIND


def test_directory_and_env_var(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "hackpack.json").write_text(json.dumps({"package_manager": "pnpm", "default_styling": "plain"}))
    assert load_config(tmp_path).package_manager == "pnpm"

    monkeypatch.setenv("HACKPACK_CONFIG", str(tmp_path / "hackpack.json"))
    assert load_config().default_styling is StylingMode.PLAIN


def test_invalid_json(tmp_path: Path) -> None:
    cfg = tmp_path / "hackpack.json"
    cfg.write_text("{oops")
    with pytest.raises(ConfigError):
        load_config(cfg)


def test_invalid_field(tmp_path: Path) -> None:
    cfg = tmp_path / "hackpack.json"
    cfg.write_text(json.dumps({"package_manager": "bun"}))
    with pytest.raises(ConfigError, match = "Invalid settings"):
        load_config(cfg)
