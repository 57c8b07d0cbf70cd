"""Command‑line interface for the **hackpack** package.

* ``new`` – resolve a configuration (asking only for what is missing) and
  scaffold the project.
* ``libraries`` – list the UI libraries offered for a framework.
* ``select`` / ``name`` – store choices in the saved state.
* ``run`` – set up the active saved project without prompting.
* ``resume`` – re-enter the wizard from the saved selections.
* ``state`` / ``use`` / ``remove`` / ``reset`` – inspect, switch and clean
  the saved projects.

Implementation details
----------------------
* Uses **Typer** for argument parsing and prompting.
* Configuration resolution is delegated to
  :class:`hackpack.controller.ConfigurationSession`; this module only
  supplies the terminal prompter and renders the outcome.
* Scaffolding is delegated to :func:`hackpack.scaffold.scaffold_project`.
* :class:`hackpack.exceptions.HackpackError` is reported as a one line
  message and exit code 1.  A cancelled session exits with code 0.
"""

import json
import logging
import re
from pathlib import Path
from typing import List, Optional

import typer

from hackpack.catalog import CATALOG, FRAMEWORK_CHOICES, canonicalize, display_name, libraries_for, requires_tailwind
from hackpack.controller import ConfigurationSession
from hackpack.emitter import render_summary
from hackpack.exceptions import HackpackError
from hackpack.main import Settings, _setup_logging, load_config
from hackpack.models import PROJECT_NAME_PATTERN, Database, Framework, Language, ProjectRequest, ResolvedConfig, \
    StylingMode
from hackpack.prompts import TyperPrompter
from hackpack.scaffold import ScaffoldStep, plan_scaffold, scaffold_project
from hackpack.state import SavedProject, StateStore

log = logging.getLogger(__name__)

app = typer.Typer(name = "hackpack", help = "Modern project scaffolding CLI for Astro and Vue.",
        no_args_is_help = True)

_SELECT_FIELDS = {"fw": "framework", "framework": "framework", "lang": "language", "language": "language",
        "styling": "styling", "ui": "ui_library", "db": "database", "database": "database", }


@app.callback()
def _main_callback(
        debug: bool = typer.Option(False, "--debug", help = "Enable DEBUG logs."), ) -> None:
    _setup_logging(debug)


def _fail(exc: Exception) -> None:
    typer.echo(f"❌ {exc}", err = True)
    raise typer.Exit(code = 1)


def _describe(step: ScaffoldStep) -> List[str]:
    lines = [f"• {step.description}"]
    if step.command:
        where = "" if step.in_project else " (in parent directory)"
        lines.append(f"    $ {' '.join(step.command)}{where}")
    for relative, _ in step.files:
        lines.append(f"    write {relative}")
    if step.patch is not None:
        lines.append(f"    patch {step.target or 'vite.config'}")
    return lines


def _build(config: ResolvedConfig, settings: Settings, target: Path, dry_run: bool) -> None:
    typer.echo(f"\n{render_summary(config)}\n")
    if dry_run:
        typer.echo("Planned steps:")
        for step in plan_scaffold(config, settings):
            typer.echo("\n".join(_describe(step)))
        return

    project = scaffold_project(config, target, settings = settings)
    typer.echo(f"\n✨ Project {config.project_name} created successfully!")
    typer.echo("\nTo get started:")
    typer.echo(f"  cd {project.name}")
    typer.echo(f"  {settings.package_manager} run dev")


def _remember(store: StateStore, config: ResolvedConfig, step: str) -> None:
    store.upsert(SavedProject(**_saved_fields(config), step = step))


def _saved_fields(config: ResolvedConfig) -> dict:
    return dict(project_name = config.project_name, framework = config.framework, language = config.language,
            styling = config.styling_mode, ui_library = config.ui_library, database = config.database, )


def _fill_defaults(request: ProjectRequest, settings: Settings) -> None:
    """Take a missing language or styling mode from *settings*."""
    if request.language is None:
        typer.echo(f"No language selected, defaulting to {display_name(settings.default_language.value)}")
        request.language = settings.default_language
    if request.styling_mode is None:
        typer.echo(f"No styling selected, defaulting to {display_name(settings.default_styling.value)}")
        request.styling_mode = settings.default_styling


def _resolve(request: ProjectRequest, prompter: TyperPrompter) -> ResolvedConfig:
    config = ConfigurationSession(request).run(prompter if request.interactive else None)
    if config is None:
        typer.echo("Project setup cancelled.")
        raise typer.Exit(code = 0)
    return config


@app.command(help = "Create a new project, asking only for the choices not given as options.")
def new(
        project_name: Optional[str] = typer.Argument(None, help = "Project (and directory) name."),
        framework: Optional[Framework] = typer.Option(None, "--framework", "-f", help = "Framework to scaffold."),
        language: Optional[Language] = typer.Option(None, "--lang", "-l", help = "js or ts."),
        styling: Optional[StylingMode] = typer.Option(None, "--styling", "-s", help = "tailwind or plain."),
        ui_library: Optional[str] = typer.Option(None, "--ui", "-u", help = "UI library, e.g. daisyui or none."),
        database: Optional[Database] = typer.Option(None, "--db", help = "Database driver to add."),
        yes: bool = typer.Option(
                False, "--yes", "-y", help = "Never prompt: fill gaps with defaults and skip confirmation.", ),
        dry_run: bool = typer.Option(False, "--dry-run", help = "Print the planned steps without running them."),
        target: Path = typer.Option(Path("."), "--dir", help = "Directory to create the project in."), ) -> None:
    """Resolve a project configuration and scaffold it.

    The session is interactive unless ``--yes`` is given or language,
    styling and UI library were all supplied; a non-interactive session
    never asks anything and skips the confirmation step.  With ``--yes``
    a missing language or styling mode comes from the settings file.
    """
    prompter = TyperPrompter()
    try:
        settings = load_config()
        if framework is None:
            if yes:
                raise HackpackError("--framework is required with --yes")
            framework = Framework(prompter.choose("Which framework would you like to use?", FRAMEWORK_CHOICES))

        request = ProjectRequest(
                framework = framework, project_name = project_name, language = language, styling_mode = styling,
                ui_library = ui_library, database = database, )
        request.interactive = not yes and not request.is_complete
        if yes:
            _fill_defaults(request, settings)
        if request.project_name is None and request.interactive:
            request.project_name = prompter.project_name(CATALOG[framework].default_project_name)

        config = _resolve(request, prompter)
        _build(config, settings, target, dry_run)
        if not dry_run:
            _remember(StateStore(), config, "complete")
    except (HackpackError, FileExistsError, ValueError) as exc:
        _fail(exc)


@app.command(help = "List the UI libraries available for a framework.")
def libraries(
        framework: Framework = typer.Argument(..., help = "astro or vue."),
        styling: Optional[StylingMode] = typer.Option(None, "--styling", "-s", help = "Only this styling mode."),
        ) -> None:
    modes = [styling] if styling else list(StylingMode)
    for mode in modes:
        typer.echo(f"{display_name(mode.value)}:")
        for choice in libraries_for(framework, mode):
            marker = " (requires Tailwind)" if requires_tailwind(framework, choice.value) else ""
            typer.echo(f"  {choice.value:<14} {choice.label}{marker}")


@app.command(help = "Store a choice for the active project: fw, lang, styling, ui or db.")
def select(
        kind: str = typer.Argument(..., help = "fw | lang | styling | ui | db"),
        value: str = typer.Argument(..., help = "The value to store."), ) -> None:
    field = _SELECT_FIELDS.get(kind.lower())
    if field is None:
        _fail(HackpackError(f"Unknown selection '{kind}'. Use one of: fw, lang, styling, ui, db"))
    store = StateStore()
    try:
        if field == "ui_library":
            framework = store.active().framework
            value = canonicalize(framework, value) if framework else value
        project = store.update_active(**{field: value})
    except (HackpackError, ValueError) as exc:
        _fail(exc)
    typer.echo(f"Saved {kind} = {value} for {project.project_name or 'the active project'}")


@app.command(help = "Set the active project's name.")
def name(project_name: str = typer.Argument(..., help = "Letters, numbers, hyphens and underscores.")) -> None:
    if not re.match(PROJECT_NAME_PATTERN, project_name):
        _fail(HackpackError("Project name can only contain letters, numbers, hyphens, and underscores"))
    try:
        StateStore().update_active(project_name = project_name)
    except HackpackError as exc:
        _fail(exc)
    typer.echo(f"Project name set to {project_name}")


@app.command(help = "Set up the active saved project without prompting.")
def run(
        dry_run: bool = typer.Option(False, "--dry-run", help = "Print the planned steps without running them."),
        target: Path = typer.Option(Path("."), "--dir", help = "Directory to create the project in."), ) -> None:
    store = StateStore()
    try:
        settings = load_config()
        saved = store.active()
        if saved.project_name is None:
            raise HackpackError("No project name saved. Run 'hackpack name <project-name>' first.")
        request = saved.to_request(interactive = False)
        _fill_defaults(request, settings)

        config = ConfigurationSession(request).run()
        _build(config, settings, target, dry_run)
        if not dry_run:
            store.update_active(step = "complete")
    except (HackpackError, FileExistsError, ValueError) as exc:
        _fail(exc)


@app.command(help = "Resume the wizard for the active saved project.")
def resume(
        dry_run: bool = typer.Option(False, "--dry-run", help = "Print the planned steps without running them."),
        target: Path = typer.Option(Path("."), "--dir", help = "Directory to create the project in."), ) -> None:
    """Ask for whatever the saved selections still lack, then confirm and scaffold."""
    store = StateStore()
    prompter = TyperPrompter()
    try:
        settings = load_config()
        saved = store.active()
        if saved.framework is None:
            framework = Framework(prompter.choose("Which framework would you like to use?", FRAMEWORK_CHOICES))
            saved = saved.model_copy(update = {"framework": framework})
        request = saved.to_request(interactive = True)
        if request.project_name is None:
            request.project_name = prompter.project_name(CATALOG[request.framework].default_project_name)

        config = _resolve(request, prompter)
        _build(config, settings, target, dry_run)
        if not dry_run:
            store.update_active(**_saved_fields(config), step = "complete")
    except (HackpackError, FileExistsError, ValueError) as exc:
        _fail(exc)


@app.command(help = "Print the saved projects.")
def state() -> None:
    store = StateStore()
    saved = store.load()
    if not saved.projects:
        typer.echo("No saved projects.")
        return
    typer.echo(f"Saved projects ({store.path}):")
    for project in saved.projects:
        marker = "  <-- active" if project.project_name == saved.active else ""
        typer.echo(json.dumps(project.model_dump(mode = "json"), indent = 2) + marker)


@app.command(help = "Make a saved project the active one.")
def use(project_name: str = typer.Argument(..., help = "Name of the saved project.")) -> None:
    try:
        StateStore().activate(project_name)
    except HackpackError as exc:
        _fail(exc)
    typer.echo(f"Active project: {project_name}")


@app.command(help = "Forget a saved project.")
def remove(project_name: str = typer.Argument(..., help = "Name of the saved project.")) -> None:
    try:
        StateStore().remove(project_name)
    except HackpackError as exc:
        _fail(exc)
    typer.echo(f"Removed {project_name}")


@app.command(help = "Clear the saved state and start fresh.")
def reset() -> None:
    StateStore().clear()
    typer.echo("State cleared.")


def main() -> None:  # pragma: no cover – thin wrapper
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
