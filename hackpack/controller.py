"""Interactive fallback controller.

:class:`ConfigurationSession` turns a :class:`ProjectRequest` into a
:class:`ResolvedConfig` by walking an explicit state machine::

    NEEDS_LANGUAGE -> NEEDS_STYLING -> NEEDS_LIBRARY -> NEEDS_DATABASE
        -> NEEDS_CONFIRMATION -> RESOLVED | CANCELLED

with ``CONFLICT_DETECTED`` entered from ``NEEDS_LIBRARY`` when the
library needs Tailwind but styling is plain.  A state whose field was
supplied is passed straight through; a state whose field is missing
*suspends* and exposes a :class:`Question`.  The caller answers it with
:meth:`ConfigurationSession.answer` and calls
:meth:`ConfigurationSession.advance` again.  Nothing here touches the
terminal, so the machine can be fed canned answers in tests.

Non-interactive requests never suspend: missing libraries and databases
fall back to their bare outcome and a conflict is settled by enabling
Tailwind.  They go from ``NEEDS_DATABASE`` straight to ``RESOLVED``
without entering ``NEEDS_CONFIRMATION``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Literal

from pydantic import BaseModel, ConfigDict

from .catalog import DATABASE_CHOICES, LANGUAGE_CHOICES, STYLING_CHOICES, LibraryChoice, canonicalize, \
    display_name, libraries_for, plain_compatible
from .emitter import emit_config, render_summary
from .exceptions import MissingInputError, SessionError, UnknownLibraryError
from .models import Database, Language, ProjectRequest, ResolvedConfig, StylingMode
from .resolver import Resolution, enable_tailwind, needs_tailwind, resolve_library

__all__ = ["SessionState", "Question", "ConfigurationSession", "Prompter", "resolve_request"]

log = logging.getLogger(__name__)


class SessionState(str, Enum):
    NEEDS_LANGUAGE = "needs_language"
    NEEDS_STYLING = "needs_styling"
    NEEDS_LIBRARY = "needs_library"
    CONFLICT_DETECTED = "conflict_detected"
    NEEDS_DATABASE = "needs_database"
    NEEDS_CONFIRMATION = "needs_confirmation"
    RESOLVED = "resolved"
    CANCELLED = "cancelled"


TERMINAL_STATES = frozenset({SessionState.RESOLVED, SessionState.CANCELLED})


class Question(BaseModel):
    """A pending question for the operator.

    ``choice`` questions must be answered with one of ``choices``'
    values; ``confirm`` questions with a boolean.
    """

    state: SessionState
    field: str
    message: str
    choices: tuple[LibraryChoice, ...] = ()
    kind: Literal["choice", "confirm"] = "choice"
    default: Any = None

    model_config = ConfigDict(frozen = True)


Prompter = Callable[[Question], Any]


class ConfigurationSession:
    """One configuration-resolution session for a single request."""

    def __init__(self, request: ProjectRequest):
        self.framework = request.framework
        self.interactive = request.interactive
        self.state = SessionState.NEEDS_LANGUAGE
        self.history: list[SessionState] = [self.state]
        self._fields: dict[str, Any] = {"framework": request.framework, "project_name": request.project_name,
                "language": request.language, "styling_mode": request.styling_mode,
                "ui_library": request.ui_library, "database": request.database, }
        self._pending: Question | None = None
        self._plain_only = False
        self._conflict_library: str | None = None
        self._candidate: ResolvedConfig | None = None
        self._config: ResolvedConfig | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def pending(self) -> Question | None:
        return self._pending

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    def advance(self) -> Question | None:
        """Run transitions until the session suspends or terminates.

        Returns the pending :class:`Question`, or ``None`` once the
        session reached ``RESOLVED`` or ``CANCELLED``.
        """
        while self._pending is None and not self.finished:
            handler = getattr(self, f"_on_{self.state.value}")
            handler()
        return self._pending

    def answer(self, value: Any) -> None:
        """Resume a suspended session with the operator's *value*."""
        if self._pending is None:
            raise SessionError(f"No question is pending in state {self.state.value}")
        question, self._pending = self._pending, None
        log.debug("answer %s=%r", question.field, value)
        getattr(self, f"_answer_{question.field}")(value)

    def result(self) -> ResolvedConfig | None:
        """The emitted configuration, or ``None`` when the session was cancelled."""
        if not self.finished:
            raise SessionError(f"Session has not finished (state: {self.state.value})")
        return self._config

    def run(self, prompter: Prompter | None = None) -> ResolvedConfig | None:
        """Drive the session to a terminal state, asking *prompter* each question."""
        question = self.advance()
        while question is not None:
            if prompter is None:
                raise SessionError(f"Question '{question.field}' needs an operator but none is attached")
            self.answer(prompter(question))
            question = self.advance()
        return self.result()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _goto(self, state: SessionState) -> None:
        log.debug("%s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def _ask(self, field: str, message: str, choices: tuple[LibraryChoice, ...] = (), **kwargs: Any) -> None:
        self._pending = Question(state = self.state, field = field, message = message, choices = choices, **kwargs)

    def _on_needs_language(self) -> None:
        if self._fields["language"] is not None:
            self._goto(SessionState.NEEDS_STYLING)
        elif not self.interactive:
            raise MissingInputError("A language (js or ts) is required for a non-interactive setup")
        else:
            self._ask("language", "Which language would you like to use?", LANGUAGE_CHOICES)

    def _on_needs_styling(self) -> None:
        if self._fields["styling_mode"] is not None:
            self._goto(SessionState.NEEDS_LIBRARY)
        elif self.interactive:
            self._ask("styling_mode", "Which styling approach would you like?", STYLING_CHOICES)
        elif needs_tailwind(self.framework, canonicalize(self.framework, self._fields["ui_library"])):
            log.info("No styling given; %s implies Tailwind CSS", self._fields["ui_library"])
            self._fields["styling_mode"] = StylingMode.TAILWIND
            self._goto(SessionState.NEEDS_LIBRARY)
        else:
            raise MissingInputError("A styling mode (tailwind or plain) is required for a non-interactive setup")

    def _on_needs_library(self) -> None:
        styling = self._fields["styling_mode"]
        raw = self._fields["ui_library"]
        if raw is None and self.interactive:
            choices = plain_compatible(self.framework) if self._plain_only else libraries_for(self.framework,
                    styling)
            message = ("Choose a UI library compatible with plain CSS:" if self._plain_only else
                       "Which UI library would you like?")
            self._ask("ui_library", message, choices)
            return

        resolution = resolve_library(self.framework, styling, raw)
        if resolution.status is Resolution.HARD_CONFLICT:
            self._conflict_library = resolution.ui_library
            self._goto(SessionState.CONFLICT_DETECTED)
        elif resolution.status is Resolution.UNKNOWN_LIBRARY:
            if not self.interactive:
                raise UnknownLibraryError(self.framework.value, resolution.ui_library)
            log.warning("Support for %s is not implemented yet; asking again", resolution.ui_library)
            self._fields["ui_library"] = None
        else:
            self._fields["styling_mode"] = resolution.styling_mode
            self._fields["ui_library"] = resolution.ui_library
            self._plain_only = False
            self._goto(SessionState.NEEDS_DATABASE)

    def _on_conflict_detected(self) -> None:
        library = self._conflict_library
        if self.interactive:
            name = display_name(library, self.framework)
            self._ask("enable_tailwind",
                    f"{name} requires Tailwind CSS. Enable Tailwind CSS to use this UI library?",
                    kind = "confirm", default = True)
            return
        settled = enable_tailwind(resolve_library(self.framework, self._fields["styling_mode"], library))
        log.warning("%s requires Tailwind CSS; enabling it", library)
        self._fields["styling_mode"] = settled.styling_mode
        self._goto(SessionState.NEEDS_LIBRARY)

    def _on_needs_database(self) -> None:
        if self._fields["database"] is not None:
            self._leave_database()
        elif self.interactive:
            self._ask("database", "Which database would you like to use?", DATABASE_CHOICES)
        else:
            self._fields["database"] = Database.NONE
            self._leave_database()

    def _leave_database(self) -> None:
        # Non-interactive sessions never enter NEEDS_CONFIRMATION.
        if self.interactive:
            self._goto(SessionState.NEEDS_CONFIRMATION)
        else:
            self._config = emit_config(self._fields)
            self._goto(SessionState.RESOLVED)

    def _on_needs_confirmation(self) -> None:
        candidate = emit_config(self._fields)
        self._candidate = candidate
        self._ask("confirm", f"{render_summary(candidate)}\n\nReady to create your "
                             f"{display_name(self.framework.value)} project with these settings?", kind = "confirm",
                default = True)

    # ------------------------------------------------------------------
    # Answers
    # ------------------------------------------------------------------

    def _answer_language(self, value: Any) -> None:
        self._fields["language"] = Language(value)
        self._goto(SessionState.NEEDS_STYLING)

    def _answer_styling_mode(self, value: Any) -> None:
        self._fields["styling_mode"] = StylingMode(value)
        self._goto(SessionState.NEEDS_LIBRARY)

    def _answer_ui_library(self, value: Any) -> None:
        self._fields["ui_library"] = value

    def _answer_enable_tailwind(self, value: Any) -> None:
        if value:
            log.info("Enabling Tailwind CSS to support %s", self._conflict_library)
            self._fields["styling_mode"] = StylingMode.TAILWIND
        else:
            log.info("Discarding %s; restricting choices to plain CSS libraries", self._conflict_library)
            self._fields["ui_library"] = None
            self._plain_only = True
        self._conflict_library = None
        self._goto(SessionState.NEEDS_LIBRARY)

    def _answer_database(self, value: Any) -> None:
        self._fields["database"] = Database(value)
        self._leave_database()

    def _answer_confirm(self, value: Any) -> None:
        if value:
            self._config = self._candidate
            self._goto(SessionState.RESOLVED)
        else:
            self._candidate = None
            self._goto(SessionState.CANCELLED)


def resolve_request(request: ProjectRequest, prompter: Prompter | None = None) -> ResolvedConfig | None:
    """Resolve *request* in one call; ``None`` means the operator cancelled."""
    return ConfigurationSession(request).run(prompter)
