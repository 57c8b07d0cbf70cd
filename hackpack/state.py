"""Saved project selections.

``hackpack select ...`` and ``hackpack name ...`` store choices in a JSON
state file so a project can be set up later with ``hackpack run``.  The
file holds a list of projects and the name of the active one.

Location, in order of preference:

1. ``$HACKPACK_STATE_DIR/.hackpack-state.json``
2. ``./.hackpack-state.json`` if it exists
3. ``~/.hackpack-state.json``
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .exceptions import FileCreationError, StateError
from .file_generator import write_file
from .models import Database, Framework, Language, ProjectRequest, StylingMode

__all__ = ["STATE_FILE_NAME", "SavedProject", "StateFile", "StateStore", "state_file_path"]

log = logging.getLogger(__name__)

STATE_FILE_NAME = ".hackpack-state.json"
STATE_DIR_ENV_VAR = "HACKPACK_STATE_DIR"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SavedProject(BaseModel):
    project_name: str | None = None
    framework: Framework | None = None
    language: Language | None = None
    styling: StylingMode | None = None
    ui_library: str | None = None
    database: Database | None = None
    step: str | None = None
    created_at: str = Field(default_factory = _now)
    updated_at: str = Field(default_factory = _now)

    def to_request(self, *, interactive: bool = False) -> ProjectRequest:
        """Build a :class:`ProjectRequest` from the saved selections."""
        if self.framework is None:
            raise StateError("No framework selected. Run 'hackpack select fw <astro|vue>' first.")
        return ProjectRequest(
                framework = self.framework, project_name = self.project_name, language = self.language,
                styling_mode = self.styling, ui_library = self.ui_library, database = self.database,
                interactive = interactive, )


class StateFile(BaseModel):
    projects: list[SavedProject] = Field(default_factory = list)
    active: str | None = None


def state_file_path() -> Path:
    """Resolve the state file location (see module docstring)."""
    env_dir = os.environ.get(STATE_DIR_ENV_VAR)
    if env_dir:
        return Path(env_dir).expanduser().resolve() / STATE_FILE_NAME
    cwd_path = Path.cwd() / STATE_FILE_NAME
    if cwd_path.exists():
        return cwd_path
    return Path.home() / STATE_FILE_NAME


class StateStore:
    """Read and update the saved project state."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path is not None else state_file_path()

    def load(self) -> StateFile:
        """Return the stored state; a missing or corrupt file counts as empty."""
        if not self.path.exists():
            return StateFile()
        try:
            raw = json.loads(self.path.read_text(encoding = "utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            log.warning("Ignoring unreadable state file %s: %s", self.path, exc)
            return StateFile()
        # Older files stored a single project object at the top level.
        if isinstance(raw, dict) and "projects" not in raw:
            raw = {"projects": [raw], "active": raw.get("project_name")}
        try:
            return StateFile.model_validate(raw)
        except ValidationError as exc:
            log.warning("Ignoring invalid state file %s: %s", self.path, exc)
            return StateFile()

    def save(self, state: StateFile) -> None:
        try:
            write_file(self.path, state.model_dump_json(indent = 2))
        except FileCreationError as exc:
            raise StateError(f"Could not save state to {self.path}: {exc}") from exc

    def list_projects(self) -> list[SavedProject]:
        return list(self.load().projects)

    def active(self) -> SavedProject:
        """The active project, or an empty one when nothing is saved yet."""
        state = self.load()
        for project in state.projects:
            if project.project_name == state.active:
                return project
        return state.projects[0] if state.projects else SavedProject()

    def upsert(self, project: SavedProject, *, activate: bool = True) -> SavedProject:
        """Insert *project*, or replace the saved project with the same name."""
        state = self.load()
        updated = project.model_copy(update = {"updated_at": _now()})
        names = [p.project_name for p in state.projects]
        if updated.project_name in names:
            state.projects[names.index(updated.project_name)] = updated
        else:
            state.projects.append(updated)
        if activate:
            state.active = updated.project_name
        self.save(state)
        return updated

    def update_active(self, **changes: object) -> SavedProject:
        """Apply *changes* to the active project and save it.

        Changing ``project_name`` renames the active entry in place rather
        than creating a second project.
        """
        state = self.load()
        names = [p.project_name for p in state.projects]
        if state.active in names:
            index = names.index(state.active)
        elif state.projects:
            index = 0
        else:
            state.projects.append(SavedProject())
            index = 0
        current = state.projects[index]
        updated = SavedProject.model_validate({**current.model_dump(), **changes, "updated_at": _now()})
        others = [i for i, name in enumerate(names) if name == updated.project_name and i != index]
        state.projects[index] = updated
        for i in reversed(others):
            del state.projects[i]
        state.active = updated.project_name
        self.save(state)
        return updated

    def activate(self, project_name: str) -> SavedProject:
        """Make the saved project called *project_name* the active one."""
        state = self.load()
        for project in state.projects:
            if project.project_name == project_name:
                state.active = project_name
                self.save(state)
                return project
        raise StateError(f"No saved project named '{project_name}'")

    def remove(self, project_name: str) -> None:
        state = self.load()
        if project_name not in [p.project_name for p in state.projects]:
            raise StateError(f"No saved project named '{project_name}'")
        state.projects = [p for p in state.projects if p.project_name != project_name]
        if state.active == project_name:
            state.active = state.projects[0].project_name if state.projects else None
        self.save(state)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
