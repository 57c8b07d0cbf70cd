"""Static choice catalog.

Every choice the wizard can offer lives here, per framework: the UI
libraries that go with Tailwind, those that work with plain CSS, the
alias spellings accepted from flags and saved state, and which
libraries cannot work without Tailwind.  Nothing in this module has
side effects, so the tables may be shared freely.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict

from .models import NO_LIBRARY, TAILWIND_ONLY, Database, Framework, Language, StylingMode

__all__ = ["LibraryChoice", "CatalogEntry", "CATALOG", "FRAMEWORK_CHOICES", "LANGUAGE_CHOICES", "STYLING_CHOICES",
        "DATABASE_CHOICES", "libraries_for", "plain_compatible", "canonicalize", "requires_tailwind", "is_known",
        "display_name", ]


class LibraryChoice(BaseModel):
    """One selectable option: what the operator sees and the canonical value."""

    label: str
    value: str

    model_config = ConfigDict(frozen = True)


class CatalogEntry(BaseModel):
    tailwind_libraries: tuple[LibraryChoice, ...]
    plain_libraries: tuple[LibraryChoice, ...]
    alias_map: dict[str, str]
    tailwind_required: frozenset[str]
    default_project_name: str

    model_config = ConfigDict(frozen = True)


_SHARED_ALIASES = {"twonly": TAILWIND_ONLY, "tw-only": TAILWIND_ONLY, "tailwindonly": TAILWIND_ONLY,
        "tailwind": TAILWIND_ONLY, "plaincss": NO_LIBRARY, "plain-css": NO_LIBRARY, "plain": NO_LIBRARY, }

_TAILWIND_ONLY_CHOICE = LibraryChoice(label = "Tailwind CSS only (no component library)", value = TAILWIND_ONLY)
_NONE_CHOICE = LibraryChoice(label = "None (plain CSS)", value = NO_LIBRARY)

CATALOG: Mapping[Framework, CatalogEntry] = MappingProxyType({Framework.ASTRO: CatalogEntry(
        tailwind_libraries = (LibraryChoice(label = "shadcn/ui (Radix + Tailwind)", value = "shadcn"),
                LibraryChoice(label = "daisyUI (Tailwind plugin)", value = "daisyui"), _TAILWIND_ONLY_CHOICE,),
        plain_libraries = (_NONE_CHOICE,),
        alias_map = {**_SHARED_ALIASES, "shadcn-ui": "shadcn", "shadcnui": "shadcn",
                "daisy-ui": "daisyui", }, tailwind_required = frozenset({"shadcn", "daisyui"}),
        default_project_name = "my-astro-app", ), Framework.VUE: CatalogEntry(
        tailwind_libraries = (LibraryChoice(label = "DaisyUI", value = "daisyui"),
                LibraryChoice(label = "Inspira UI", value = "inspiraui"),
                LibraryChoice(label = "shadcn-vue", value = "shadcn-vue"), _TAILWIND_ONLY_CHOICE,),
        plain_libraries = (LibraryChoice(label = "Vuetify", value = "vuetify"),
                LibraryChoice(label = "PrimeVue", value = "primevue"), _NONE_CHOICE,),
        alias_map = {**_SHARED_ALIASES, "daisy-ui": "daisyui", "inspira-ui": "inspiraui",
                "shadcn": "shadcn-vue", "shadcnvue": "shadcn-vue", "prime-vue": "primevue", },
        tailwind_required = frozenset({"daisyui", "inspiraui", "shadcn-vue"}),
        default_project_name = "my-vue-app", ), })

FRAMEWORK_CHOICES = (LibraryChoice(label = "Astro", value = Framework.ASTRO.value),
        LibraryChoice(label = "Vue.js", value = Framework.VUE.value),)

LANGUAGE_CHOICES = (LibraryChoice(label = "TypeScript", value = Language.TS.value),
        LibraryChoice(label = "JavaScript", value = Language.JS.value),)

STYLING_CHOICES = (LibraryChoice(label = "Tailwind CSS", value = StylingMode.TAILWIND.value),
        LibraryChoice(label = "Plain CSS (no Tailwind)", value = StylingMode.PLAIN.value),)

DATABASE_CHOICES = (LibraryChoice(label = "PostgreSQL", value = Database.POSTGRESQL.value),
        LibraryChoice(label = "MongoDB", value = Database.MONGODB.value),
        LibraryChoice(label = "None", value = Database.NONE.value),)

_DISPLAY_NAMES = {"astro": "Astro", "vue": "Vue.js", "ts": "TypeScript", "js": "JavaScript",
        "tailwind": "Tailwind CSS", "plain": "Plain CSS", "mongodb": "MongoDB", "postgresql": "PostgreSQL",
        NO_LIBRARY: "None", TAILWIND_ONLY: "Tailwind CSS only", }


def libraries_for(framework: Framework | str, styling_mode: StylingMode | str) -> tuple[LibraryChoice, ...]:
    """Return the ordered UI library choices offered under *styling_mode*."""
    entry = CATALOG[Framework(framework)]
    if StylingMode(styling_mode) is StylingMode.TAILWIND:
        return entry.tailwind_libraries
    return entry.plain_libraries


def plain_compatible(framework: Framework | str) -> tuple[LibraryChoice, ...]:
    return CATALOG[Framework(framework)].plain_libraries


def canonicalize(framework: Framework | str, raw: str | None) -> str | None:
    """Normalize *raw* through the framework's alias table.

    Values that are neither aliases nor canonical pass through unchanged;
    deciding whether they are acceptable is the resolver's job.
    """
    if raw is None:
        return None
    value = raw.strip()
    key = value.lower()
    aliases = CATALOG[Framework(framework)].alias_map
    if key in aliases:
        return aliases[key]
    if is_known(framework, key):
        return key
    return value


def requires_tailwind(framework: Framework | str, value: str | None) -> bool:
    return value in CATALOG[Framework(framework)].tailwind_required


def is_known(framework: Framework | str, value: str | None) -> bool:
    entry = CATALOG[Framework(framework)]
    return any(choice.value == value for choice in entry.tailwind_libraries + entry.plain_libraries)


def display_name(value: str, framework: Framework | str | None = None) -> str:
    """Human-readable name for a canonical value.

    With a *framework*, UI libraries are shown with their catalog label.
    Unknown values are shown as-is.
    """
    if value in _DISPLAY_NAMES:
        return _DISPLAY_NAMES[value]
    if framework is not None:
        entry = CATALOG[Framework(framework)]
        for choice in entry.tailwind_libraries + entry.plain_libraries:
            if choice.value == value:
                return choice.label
    return value
