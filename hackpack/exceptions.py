"""Custom exception hierarchy for the hackpack package.

All public functions raise :class:`HackpackError` (or a subclass) so
that callers can catch a single exception type.  This also allows the
CLI to catch all exceptions and print a user-friendly message.

A cancelled session is *not* an error: it is reported as a ``None``
result by :class:`hackpack.controller.ConfigurationSession`.
"""


class HackpackError(RuntimeError):
    """Base exception for all hackpack related errors."""


class UnknownLibraryError(HackpackError):
    """Raised when a UI library is neither in the catalog nor an alias of an entry."""

    def __init__(self, framework: str, value: str):
        super().__init__(
                f"UI library '{value}' is not implemented yet for {framework}"
                )
        self.framework = framework
        self.value = value


class HardConflictError(HackpackError):
    """Raised when a UI library cannot work under the requested styling mode."""

    def __init__(self, library: str, styling_mode: str):
        super().__init__(f"{library} requires Tailwind CSS but styling is '{styling_mode}'")
        self.library = library
        self.styling_mode = styling_mode


class MissingInputError(HackpackError):
    """Raised when a non-interactive request lacks a field nobody can be asked for."""


class SessionError(HackpackError):
    """Raised when a configuration session is driven out of order."""


class ConfigError(HackpackError):
    """Raised when the settings file cannot be parsed or validated."""


class StateError(HackpackError):
    """Raised when the saved project state cannot be written or has no such project."""


class FileCreationError(HackpackError):
    """Raised when a file cannot be created or written to."""


class ScaffoldError(HackpackError):
    """Raised when an external scaffolding command fails."""
