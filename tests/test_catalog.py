"""Tests for the static choice catalog in ``hackpack.catalog``."""

from __future__ import annotations

import pytest

from hackpack.catalog import CATALOG, canonicalize, display_name, is_known, libraries_for, plain_compatible, \
    requires_tailwind
from hackpack.models import NO_LIBRARY, TAILWIND_ONLY, Framework, StylingMode


# ---------------------------------------------------------------------------
# Partition property
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("framework", list(Framework))
@pytest.mark.parametrize("styling", list(StylingMode))
def test_libraries_are_canonical(framework: Framework, styling: StylingMode) -> None:
    for choice in libraries_for(framework, styling):
        assert canonicalize(framework, choice.value) == choice.value


@pytest.mark.parametrize("framework", list(Framework))
def test_tailwind_and_plain_lists_are_disjoint(framework: Framework) -> None:
    tailwind = {c.value for c in libraries_for(framework, StylingMode.TAILWIND)}
    plain = {c.value for c in libraries_for(framework, StylingMode.PLAIN)}
    assert tailwind.isdisjoint(plain)
    assert TAILWIND_ONLY in tailwind
    assert NO_LIBRARY in plain


@pytest.mark.parametrize("framework", list(Framework))
def test_plain_libraries_never_need_tailwind(framework: Framework) -> None:
    for choice in plain_compatible(framework):
        assert not requires_tailwind(framework, choice.value)
    for value in CATALOG[framework].tailwind_required:
        assert value in {c.value for c in libraries_for(framework, StylingMode.TAILWIND)}


def test_vue_plain_libraries() -> None:
    assert [c.value for c in plain_compatible(Framework.VUE)] == ["vuetify", "primevue", "none"]
    assert [c.value for c in plain_compatible("astro")] == ["none"]


# ---------------------------------------------------------------------------
# Aliases
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("framework", list(Framework))
@pytest.mark.parametrize("alias", ["twonly", "TW-Only", " tailwindonly ", "tailwind"])
def test_tailwind_only_aliases(framework: Framework, alias: str) -> None:
    assert canonicalize(framework, alias) == TAILWIND_ONLY


@pytest.mark.parametrize("framework", list(Framework))
def test_aliases_point_at_known_values(framework: Framework) -> None:
    for target in CATALOG[framework].alias_map.values():
        assert is_known(framework, target)


def test_framework_specific_aliases() -> None:
    assert canonicalize(Framework.VUE, "shadcn") == "shadcn-vue"
    assert canonicalize(Framework.ASTRO, "shadcn-ui") == "shadcn"
    assert canonicalize(Framework.VUE, "DaisyUI") == "daisyui"
    assert canonicalize(Framework.VUE, "plain-css") == NO_LIBRARY


def test_unknown_values_pass_through() -> None:
    assert canonicalize(Framework.VUE, " Bootstrap ") == "Bootstrap"
    assert canonicalize(Framework.VUE, None) is None
    assert not is_known(Framework.VUE, "Bootstrap")


def test_display_name() -> None:
    assert display_name("vue") == "Vue.js"
    assert display_name(TAILWIND_ONLY) == "Tailwind CSS only"
    assert display_name("vuetify") == "vuetify"


def test_display_name_uses_catalog_labels() -> None:
    assert display_name("vuetify", Framework.VUE) == "Vuetify"
    assert display_name("daisyui", "astro") == "daisyUI (Tailwind plugin)"
    assert display_name("shadcn-vue", "vue") == "shadcn-vue"
    assert display_name(TAILWIND_ONLY, "vue") == "Tailwind CSS only"
    assert display_name("bootstrap", "vue") == "bootstrap"
