"""Styling / UI library constraint resolution.

Given a styling mode and a (possibly aliased or absent) UI library,
:func:`resolve_library` returns one canonical pair and says whether it
can be used as-is.  A hard conflict is *reported*, never repaired here:
the configuration session decides, with or without an operator, how to
get out of it.

The result depends only on the final ``(styling_mode, ui_library)``
pair, so it does not matter which of the two fields was filled first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum

from .catalog import canonicalize, is_known, requires_tailwind
from .models import NO_LIBRARY, TAILWIND_ONLY, Framework, StylingMode

__all__ = ["Resolution", "LibraryResolution", "resolve_library", "enable_tailwind", "needs_tailwind"]

log = logging.getLogger(__name__)


class Resolution(str, Enum):
    ACCEPTED = "accepted"
    HARD_CONFLICT = "hard_conflict"
    UNKNOWN_LIBRARY = "unknown_library"


@dataclass(frozen = True)
class LibraryResolution:
    styling_mode: StylingMode
    ui_library: str
    status: Resolution

    @property
    def accepted(self) -> bool:
        return self.status is Resolution.ACCEPTED


def needs_tailwind(framework: Framework | str, value: str | None) -> bool:
    """``True`` when *value* cannot be used without Tailwind CSS."""
    return value == TAILWIND_ONLY or requires_tailwind(framework, value)


def resolve_library(
        framework: Framework | str, styling_mode: StylingMode | str, ui_library: str | None, ) -> LibraryResolution:
    """Reconcile *ui_library* with *styling_mode*.

    Parameters
    ----------
    framework:
        Selects the catalog (aliases, Tailwind-required set).
    styling_mode:
        ``tailwind`` or ``plain``; must already be known.
    ui_library:
        Raw library value.  ``None`` means "no library chosen".

    Returns
    -------
    LibraryResolution
        The canonical pair and its status.  For ``HARD_CONFLICT`` the
        pair is returned exactly as requested.
    """
    framework = Framework(framework)
    styling_mode = StylingMode(styling_mode)
    value = canonicalize(framework, ui_library)

    # A bare library slot collapses onto the styling mode: Tailwind without
    # a component library is its own outcome, distinct from no styling at all.
    if value is None or value == NO_LIBRARY:
        value = TAILWIND_ONLY if styling_mode is StylingMode.TAILWIND else NO_LIBRARY
        return LibraryResolution(styling_mode, value, Resolution.ACCEPTED)

    if needs_tailwind(framework, value) and styling_mode is not StylingMode.TAILWIND:
        log.debug("%s requires tailwind, styling is %s", value, styling_mode.value)
        return LibraryResolution(styling_mode, value, Resolution.HARD_CONFLICT)

    if not is_known(framework, value):
        log.debug("%s is not in the %s catalog", value, framework.value)
        return LibraryResolution(styling_mode, value, Resolution.UNKNOWN_LIBRARY)

    return LibraryResolution(styling_mode, value, Resolution.ACCEPTED)


def enable_tailwind(resolution: LibraryResolution) -> LibraryResolution:
    """Settle a hard conflict by switching the styling mode to Tailwind."""
    return replace(resolution, styling_mode = StylingMode.TAILWIND, status = Resolution.ACCEPTED)
