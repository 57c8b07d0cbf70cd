"""Top‑level package for *hackpack*."""

from __future__ import annotations

from .catalog import CATALOG, canonicalize, libraries_for, requires_tailwind
from .controller import ConfigurationSession, Question, SessionState, resolve_request

# First import non-dependent modules
from .exceptions import HackpackError, MissingInputError, SessionError, UnknownLibraryError
from .main import Settings, load_config
from .models import Database, Framework, Language, ProjectRequest, ResolvedConfig, StylingMode
from .resolver import resolve_library
from .scaffold import plan_scaffold, scaffold_project

# Explicitly expose the public API members
__all__ = ["CATALOG", "canonicalize", "libraries_for", "requires_tailwind", "ConfigurationSession", "Question",
        "SessionState", "resolve_request", "resolve_library", "plan_scaffold", "scaffold_project", "Settings",
        "load_config", "Framework", "Language", "StylingMode", "Database", "ProjectRequest", "ResolvedConfig",
        "HackpackError", "MissingInputError", "SessionError", "UnknownLibraryError", ]
