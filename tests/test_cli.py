"""CLI tests driven through :class:`typer.testing.CliRunner`.

The real scaffolder is replaced with a recording fake, so no Node.js
tooling is needed.  State and settings files live in ``tmp_path``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from hackpack import cli
from hackpack.cli import app as cli_app
from hackpack.state import STATE_FILE_NAME


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("HACKPACK_STATE_DIR", str(tmp_path))
    monkeypatch.setenv("HACKPACK_CONFIG", str(tmp_path / "settings.json"))
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def scaffolded(monkeypatch: pytest.MonkeyPatch) -> list:
    calls: list = []

    def _fake(config: Any, target: Path, settings: Any = None) -> Path:
        calls.append(config)
        return Path(target) / config.project_name

    monkeypatch.setattr(cli, "scaffold_project", _fake)
    return calls


def _state(workspace: Path) -> dict:
    return json.loads((workspace / STATE_FILE_NAME).read_text())


# ---------------------------------------------------------------------------
# new
# ---------------------------------------------------------------------------


def test_new_dry_run_settles_conflict(runner: CliRunner, workspace: Path, scaffolded: list) -> None:
    result = runner.invoke(cli_app, ["new", "demo", "-f", "vue", "-l", "ts", "-s", "plain", "-u", "daisyui",
            "--dry-run"])
    assert result.exit_code == 0, result.output
    assert "Styling      : Tailwind CSS" in result.output
    assert "Planned steps:" in result.output
    assert "tailwindcss@latest" in result.output
    assert scaffolded == []
    assert not (workspace / STATE_FILE_NAME).exists()


def test_new_non_interactive_saves_state(runner: CliRunner, workspace: Path, scaffolded: list) -> None:
    result = runner.invoke(cli_app, ["new", "site", "-f", "astro", "-l", "ts", "-s", "plain", "-u", "shadcn",
            "--yes"])
    assert result.exit_code == 0, result.output
    assert "Project site created successfully" in result.output
    assert scaffolded[0].use_tailwind is True
    assert scaffolded[0].ui_library == "shadcn"

    state = _state(workspace)
    assert state["active"] == "site"
    assert state["projects"][0]["styling"] == "tailwind"
    assert state["projects"][0]["step"] == "complete"


def test_new_interactive(runner: CliRunner, workspace: Path, scaffolded: list) -> None:
    result = runner.invoke(cli_app, ["new", "-f", "vue"], input = "shop\nts\nplain\n2\nnone\ny\n")
    assert result.exit_code == 0, result.output
    assert "Which UI library would you like?" in result.output
    config = scaffolded[0]
    assert (config.project_name, config.use_tailwind, config.ui_library) == ("shop", False, "primevue")


def test_new_cancelled(runner: CliRunner, workspace: Path, scaffolded: list) -> None:
    result = runner.invoke(cli_app, ["new", "demo", "-f", "vue"], input = "ts\ntailwind\ndaisyui\nnone\nn\n")
    assert result.exit_code == 0, result.output
    assert "Project setup cancelled." in result.output
    assert scaffolded == []
    assert not (workspace / STATE_FILE_NAME).exists()


def test_new_unknown_library_fails_without_prompting(runner: CliRunner, workspace: Path, scaffolded: list) -> None:
    result = runner.invoke(cli_app, ["new", "demo", "-f", "vue", "-l", "ts", "-s", "tailwind", "-u", "bootstrap"])
    assert result.exit_code == 1
    assert "not implemented yet" in result.output
    assert scaffolded == []


def test_new_yes_requires_framework(runner: CliRunner, workspace: Path) -> None:
    result = runner.invoke(cli_app, ["new", "demo", "--yes"])
    assert result.exit_code == 1
    assert "--framework is required" in result.output


# ---------------------------------------------------------------------------
# libraries
# ---------------------------------------------------------------------------


def test_libraries(runner: CliRunner) -> None:
    result = runner.invoke(cli_app, ["libraries", "vue", "--styling", "plain"])
    assert result.exit_code == 0
    assert "vuetify" in result.output
    assert "primevue" in result.output
    assert "daisyui" not in result.output

    result = runner.invoke(cli_app, ["libraries", "astro"])
    assert "shadcn" in result.output
    assert "(requires Tailwind)" in result.output


# ---------------------------------------------------------------------------
# Saved state workflow
# ---------------------------------------------------------------------------


def test_select_name_and_run(runner: CliRunner, workspace: Path, scaffolded: list) -> None:
    assert runner.invoke(cli_app, ["select", "fw", "astro"]).exit_code == 0
    assert runner.invoke(cli_app, ["name", "blog"]).exit_code == 0
    assert runner.invoke(cli_app, ["select", "ui", "twonly"]).exit_code == 0
    assert _state(workspace)["projects"][0]["ui_library"] == "tailwind-only"

    result = runner.invoke(cli_app, ["run", "--dry-run"])
    assert result.exit_code == 0, result.output
    assert "No language selected, defaulting to TypeScript" in result.output
    assert "astro@latest" in result.output

    result = runner.invoke(cli_app, ["run"])
    assert result.exit_code == 0, result.output
    assert scaffolded[0].project_name == "blog"
    assert scaffolded[0].ui_library == "tailwind-only"
    assert _state(workspace)["projects"][0]["step"] == "complete"


def test_run_without_name(runner: CliRunner, workspace: Path) -> None:
    runner.invoke(cli_app, ["select", "fw", "vue"])
    result = runner.invoke(cli_app, ["run"])
    assert result.exit_code == 1
    assert "No project name saved" in result.output


def test_select_rejects_bad_input(runner: CliRunner, workspace: Path) -> None:
    assert runner.invoke(cli_app, ["select", "colour", "red"]).exit_code == 1
    assert runner.invoke(cli_app, ["select", "fw", "svelte"]).exit_code == 1
    assert runner.invoke(cli_app, ["name", "bad name"]).exit_code == 1


def test_state_and_reset(runner: CliRunner, workspace: Path) -> None:
    assert "No saved projects." in runner.invoke(cli_app, ["state"]).output

    runner.invoke(cli_app, ["select", "fw", "vue"])
    runner.invoke(cli_app, ["name", "shop"])
    result = runner.invoke(cli_app, ["state"])
    assert '"project_name": "shop"' in result.output
    assert "<-- active" in result.output

    assert runner.invoke(cli_app, ["remove", "shop"]).exit_code == 0
    assert "No saved projects." in runner.invoke(cli_app, ["state"]).output

    runner.invoke(cli_app, ["name", "again"])
    assert runner.invoke(cli_app, ["reset"]).exit_code == 0
    assert not (workspace / STATE_FILE_NAME).exists()


def test_new_yes_fills_defaults_from_settings(runner: CliRunner, workspace: Path, scaffolded: list) -> None:
    result = runner.invoke(cli_app, ["new", "demo", "-f", "vue", "--yes", "--dry-run"])
    assert result.exit_code == 0, result.output
    assert "No language selected, defaulting to TypeScript" in result.output
    assert "No styling selected, defaulting to Tailwind CSS" in result.output
    assert "UI library   : Tailwind CSS only" in result.output

    (workspace / "settings.json").write_text(json.dumps({"default_language": "js", "default_styling": "plain"}))
    result = runner.invoke(cli_app, ["new", "demo", "-f", "vue", "-u", "vuetify", "--yes"])
    assert result.exit_code == 0, result.output
    config = scaffolded[0]
    assert (config.language.value, config.use_tailwind, config.ui_library) == ("js", False, "vuetify")


def test_use_switches_the_active_project(runner: CliRunner, workspace: Path, scaffolded: list) -> None:
    runner.invoke(cli_app, ["new", "one", "-f", "vue", "-l", "ts", "-s", "plain", "-u", "none", "--yes"])
    runner.invoke(cli_app, ["new", "two", "-f", "astro", "-l", "ts", "-s", "tailwind", "-u", "daisyui", "--yes"])
    assert _state(workspace)["active"] == "two"

    result = runner.invoke(cli_app, ["use", "one"])
    assert result.exit_code == 0, result.output
    assert _state(workspace)["active"] == "one"

    runner.invoke(cli_app, ["select", "db", "mongodb"])
    projects = {p["project_name"]: p for p in _state(workspace)["projects"]}
    assert projects["one"]["database"] == "mongodb"
    assert projects["two"]["database"] == "none"

    result = runner.invoke(cli_app, ["use", "ghost"])
    assert result.exit_code == 1
    assert "No saved project named 'ghost'" in result.output


def test_remove_unknown_project(runner: CliRunner, workspace: Path) -> None:
    result = runner.invoke(cli_app, ["remove", "ghost"])
    assert result.exit_code == 1
    assert "No saved project named 'ghost'" in result.output


def test_resume_asks_for_missing_choices(runner: CliRunner, workspace: Path, scaffolded: list) -> None:
    runner.invoke(cli_app, ["select", "fw", "vue"])
    runner.invoke(cli_app, ["name", "shop"])
    runner.invoke(cli_app, ["select", "styling", "plain"])

    result = runner.invoke(cli_app, ["resume"], input = "js\nvuetify\nnone\ny\n")
    assert result.exit_code == 0, result.output
    assert "Which styling approach" not in result.output
    config = scaffolded[0]
    assert (config.project_name, config.language.value, config.ui_library) == ("shop", "js", "vuetify")

    saved = _state(workspace)["projects"][0]
    assert (saved["ui_library"], saved["database"], saved["step"]) == ("vuetify", "none", "complete")


def test_resume_without_saved_state(runner: CliRunner, workspace: Path, scaffolded: list) -> None:
    result = runner.invoke(cli_app, ["resume"], input = "astro\nblog\nts\ntailwind\n1\nnone\nn\n")
    assert result.exit_code == 0, result.output
    assert "Project setup cancelled." in result.output
    assert scaffolded == []
