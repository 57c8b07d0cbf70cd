"""Build the final :class:`ResolvedConfig` and its display summary."""

from __future__ import annotations

from typing import Any

from .catalog import CATALOG, display_name
from .exceptions import HardConflictError
from .models import Database, Framework, Language, ResolvedConfig, StylingMode
from .resolver import needs_tailwind

__all__ = ["emit_config", "summarize", "render_summary"]


def emit_config(fields: dict[str, Any]) -> ResolvedConfig:
    """Assemble a :class:`ResolvedConfig` from a session's accumulated *fields*.

    ``fields`` must hold ``framework``, ``language``, ``styling_mode`` and
    ``ui_library``; ``project_name`` and ``database`` are optional.
    """
    framework = Framework(fields["framework"])
    styling = StylingMode(fields["styling_mode"])
    if styling is StylingMode.PLAIN and needs_tailwind(framework, fields["ui_library"]):
        raise HardConflictError(fields["ui_library"], styling.value)
    return ResolvedConfig(
            project_name = fields.get("project_name") or CATALOG[framework].default_project_name,
            framework = framework, language = Language(fields["language"]),
            use_tailwind = styling is StylingMode.TAILWIND,
            ui_library = fields["ui_library"], database = Database(fields.get("database") or Database.NONE), )


def summarize(config: ResolvedConfig) -> list[tuple[str, str]]:
    """Return ordered ``(label, value)`` pairs describing *config*."""
    return [("Project name", config.project_name), ("Framework", display_name(config.framework.value)),
            ("Language", display_name(config.language.value)),
            ("Styling", display_name(config.styling_mode.value)),
            ("UI library", display_name(config.ui_library, config.framework)),
            ("Database", display_name(config.database.value)), ]


def render_summary(config: ResolvedConfig) -> str:
    width = max(len(label) for label, _ in summarize(config))
    lines = ["Project configuration:"]
    lines.extend(f"- {label.ljust(width)} : {value}" for label, value in summarize(config))
    return "\n".join(lines)
