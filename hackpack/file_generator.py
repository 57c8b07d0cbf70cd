"""Low‑level file‑system helpers used by the scaffolding steps.

The goal of this module is to provide **pure, synchronous** helpers that
write text files and patch the handful of generated config files the
scaffolder touches.  The patchers take and return text; writing is
left to :func:`write_file`, which raises a ``FileCreationError``
(defined in :mod:`hackpack.exceptions`) on failure.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from .exceptions import FileCreationError

__all__ = ["write_file", "inject_vite_plugin", "find_vite_config", "with_tailwind_import", "TAILWIND_IMPORT", ]

log = logging.getLogger(__name__)

TAILWIND_IMPORT = '@import "tailwindcss";'
_VITE_IMPORT = "import tailwindcss from '@tailwindcss/vite'\n"
_PLUGINS_RE = re.compile(r"plugins:\s*\[\s*([\s\S]*?)\s*\]")


def write_file(
        target: Path | str, content: str, *, mode: str = "w", encoding: str = "utf-8", ) -> Path:
    """Write *content* to *target* atomically.

    The function creates any missing parent directories, writes the
    content to a temporary file first, and then atomically moves the
    temporary file to ``target``.  This prevents partial writes if the
    process is interrupted.

    Parameters
    ----------
    target:
        Destination file path.
    content:
        Text to write.
    mode:
        File mode – defaults to ``"w"``.
    encoding:
        Text encoding – defaults to ``"utf-8"``.
    Returns
    -------
    Path
        The absolute path of the written file.
    """

    target = Path(target).expanduser().resolve()
    try:
        target.parent.mkdir(parents = True, exist_ok = True)
        tmp = target.with_name(target.name + ".tmp")
        with tmp.open(mode, encoding = encoding) as fp:
            fp.write(content)
        tmp.replace(target)
        return target
    except OSError as exc:
        raise FileCreationError(f"Failed to write file {target!s}: {exc}") from exc


def inject_vite_plugin(config_text: str) -> str:
    """Return *config_text* with the Tailwind Vite plugin imported and registered.

    Already patched configs come back unchanged.
    """
    text = config_text
    if "@tailwindcss/vite" not in text:
        text = _VITE_IMPORT + text

    def _add_plugin(match: re.Match) -> str:
        plugins = match.group(1).strip().rstrip(",")
        if "tailwindcss()" in plugins:
            return match.group(0)
        entries = f"{plugins},\n    tailwindcss()" if plugins else "tailwindcss()"
        return f"plugins: [\n    {entries},\n  ]"

    return _PLUGINS_RE.sub(_add_plugin, text, count = 1)


def find_vite_config(project_root: Path | str) -> Path:
    """Return the project's ``vite.config`` file, whichever extension it uses."""
    root = Path(project_root)
    for name in ("vite.config.ts", "vite.config.js", "vite.config.mjs"):
        config_path = root / name
        if config_path.is_file():
            return config_path
    raise FileCreationError(f"No vite config found in {root!s}")


def with_tailwind_import(css_text: str | None) -> str:
    """Return stylesheet text that starts with the Tailwind import.

    ``None`` stands for a missing stylesheet.  Text that already imports
    Tailwind comes back unchanged.
    """
    if css_text is None:
        return f"{TAILWIND_IMPORT}\n"
    if '@import "tailwindcss' in css_text:
        log.debug("Tailwind import already present")
        return css_text
    return f"{TAILWIND_IMPORT}\n{css_text}"
