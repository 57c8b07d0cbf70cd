"""Request and configuration models.

A :class:`ProjectRequest` is what the CLI collects from flags, saved
state or prompts; it may be partially populated.  A
:class:`ResolvedConfig` is what the configuration session emits once
every field is known and consistent.  It is frozen and is the only
thing the scaffolding collaborators ever receive.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

__all__ = ["Framework", "Language", "StylingMode", "Database", "ProjectRequest", "ResolvedConfig",
        "TAILWIND_ONLY", "NO_LIBRARY", "PROJECT_NAME_PATTERN", ]

TAILWIND_ONLY = "tailwind-only"
NO_LIBRARY = "none"
PROJECT_NAME_PATTERN = r"^[A-Za-z0-9_-]+$"


class Framework(str, Enum):
    ASTRO = "astro"
    VUE = "vue"


class Language(str, Enum):
    JS = "js"
    TS = "ts"


class StylingMode(str, Enum):
    TAILWIND = "tailwind"
    PLAIN = "plain"


class Database(str, Enum):
    MONGODB = "mongodb"
    POSTGRESQL = "postgresql"
    NONE = "none"


class ProjectRequest(BaseModel):
    """A partially specified project request.

    ``ui_library`` is kept as a raw string: it may be an alias
    (``twonly``), an explicit ``"none"`` or a value the catalog does not
    know about.  ``interactive`` tells the session whether an operator
    can be asked follow-up questions.
    """

    framework: Framework
    project_name: str | None = Field(
            default = None, pattern = PROJECT_NAME_PATTERN,
            description = "Directory and package name of the new project.", )
    language: Language | None = None
    styling_mode: StylingMode | None = None
    ui_library: str | None = None
    database: Database | None = None
    interactive: bool = True

    model_config = ConfigDict(validate_assignment = True)

    @property
    def is_complete(self) -> bool:
        """``True`` when language, styling and UI library were all supplied up front."""
        return None not in (self.language, self.styling_mode, self.ui_library)


class ResolvedConfig(BaseModel):
    """Fully resolved, internally consistent project configuration."""

    project_name: str
    framework: Framework
    language: Language
    use_tailwind: bool
    ui_library: str
    database: Database = Database.NONE

    model_config = ConfigDict(frozen = True)

    @model_validator(mode = "after")
    def _check_styling_pair(self) -> "ResolvedConfig":
        from .catalog import requires_tailwind

        if requires_tailwind(self.framework, self.ui_library) and not self.use_tailwind:
            raise ValueError(f"{self.ui_library} requires use_tailwind=True")
        if self.ui_library == TAILWIND_ONLY and not self.use_tailwind:
            raise ValueError("tailwind-only requires use_tailwind=True")
        if self.ui_library == NO_LIBRARY and self.use_tailwind:
            raise ValueError("ui_library 'none' requires use_tailwind=False")
        return self

    @property
    def styling_mode(self) -> StylingMode:
        return StylingMode.TAILWIND if self.use_tailwind else StylingMode.PLAIN

    @property
    def is_typescript(self) -> bool:
        return self.language is Language.TS
