"""
Configuration and logging helpers for the hackpack CLI.

Settings are read from a small JSON file (``~/.hackpack.json`` unless
``$HACKPACK_CONFIG`` points elsewhere).  A missing file simply means
"use the defaults".
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ValidationError

from .exceptions import ConfigError
from .models import Language, StylingMode

log = logging.getLogger(__name__)

CONFIG_ENV_VAR = "HACKPACK_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.hackpack.json")


# ---------------------------------------------------------------------------
# Configuration helpers
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    """User-level defaults for the scaffolder."""

    package_manager: Literal["npm", "pnpm", "yarn"] = "npm"
    run_dev_server: bool = False
    default_language: Language = Language.TS
    default_styling: StylingMode = StylingMode.TAILWIND


def _config_path(config_path: str | Path | None) -> Path:
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
    cfg_file = Path(config_path).expanduser()
    if cfg_file.is_dir():
        cfg_file = cfg_file / "hackpack.json"
    return cfg_file


def load_config(config_path: str | Path | None = None, ) -> Settings:
    """Load JSON settings, tolerant to a missing file.

    Parameters
    ----------
    config_path:
        Path to the JSON configuration file.  If the path points to a
        directory, the function will look for ``hackpack.json`` inside.
        Defaults to ``$HACKPACK_CONFIG`` or ``~/.hackpack.json``.

    Returns
    -------
    Settings
        Parsed and validated settings.
    """
    cfg_file = _config_path(config_path)
    if not cfg_file.exists():
        log.debug("No config file at %s, using defaults", cfg_file)
        return Settings()

    try:
        with cfg_file.open("r", encoding = "utf-8") as f:
            data = json.load(f)
        return Settings.model_validate(data)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Could not read config file {cfg_file}: {exc}") from exc
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings in {cfg_file}: {exc}") from exc


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def _setup_logging(debug: bool) -> None:
    """
    Setup logging for hackpack.

    The logging level is set to `DEBUG` if the `debug` parameter is
    `True`, otherwise it is set to `WARNING` so that the wizard output
    is not interleaved with log lines.
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
            level = level, format = "[%(asctime)s] %(levelname)s %(name)s: %(message)s", datefmt = "%H:%M:%S", )


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point used by ``python -m hackpack``.

    Parameters
    ----------
    argv:
        Optional argument vector.  If ``None`` the CLI reads
        :data:`sys.argv`.
    """
    from .cli import app

    app(args = list(argv) if argv is not None else None, prog_name = "hackpack")
