"""
Project scaffold pipeline.

Turns a :class:`ResolvedConfig` into an ordered list of
:class:`ScaffoldStep` objects (external generator commands, package
installs, file writes and config patches) and executes them one after
another.  Package installers are not safe to run concurrently against
the same directory, so the pipeline is strictly sequential.

The two collaborators are plain callables so tests can swap them for
recording fakes:

* ``runner(argv, cwd)`` – run one external command.
* ``writer(path, content)`` – write one text file.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Sequence

from .exceptions import FileCreationError, ScaffoldError
from .file_generator import find_vite_config, inject_vite_plugin, with_tailwind_import, write_file
from .main import Settings
from .models import NO_LIBRARY, Database, Framework, ResolvedConfig
from .templates import cn_helper, env_example, global_stylesheet, vuetify_plugin, welcome_page

__all__ = ["Patch", "ScaffoldStep", "plan_scaffold", "run_command", "scaffold_project", "CommandRunner",
        "FileWriter", ]

log = logging.getLogger(__name__)

CommandRunner = Callable[[Sequence[str], Path], None]
FileWriter = Callable[[Path, str], object]


class Patch(str, Enum):
    VITE_TAILWIND = "vite_tailwind"
    TAILWIND_IMPORT = "tailwind_import"


@dataclass(frozen = True)
class ScaffoldStep:
    """One step of the pipeline.

    Exactly one of ``command``, ``files`` or ``patch`` is set.  Paths in
    ``files`` and ``target`` are relative to the project directory.
    ``in_project`` is ``False`` only for the generator command that
    creates the project directory itself.
    """

    description: str
    command: tuple[str, ...] = ()
    files: tuple[tuple[str, str], ...] = ()
    patch: Patch | None = None
    target: str = ""
    in_project: bool = True


# ---------------------------------------------------------------------------
# Package manager command builders
# ---------------------------------------------------------------------------


def _install(settings: Settings, *packages: str, dev: bool = False) -> tuple[str, ...]:
    pm = settings.package_manager
    verb = "install" if pm == "npm" or not packages else "add"
    flags = ("-D",) if dev else ()
    return (pm, verb, *flags, *packages)


def _exec(settings: Settings, *args: str) -> tuple[str, ...]:
    if settings.package_manager == "npm":
        return ("npx", *args)
    return (settings.package_manager, "dlx", *args)


def _create(settings: Settings, package: str, name: str, *flags: str) -> tuple[str, ...]:
    pm = settings.package_manager
    if pm == "npm":
        return (pm, "create", package, name, "--", *flags)
    return (pm, "create", package, name, *flags)


def _ext(config: ResolvedConfig) -> str:
    return "ts" if config.is_typescript else "js"


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------


def _astro_steps(config: ResolvedConfig, settings: Settings) -> list[ScaffoldStep]:
    typescript = "strict" if config.is_typescript else "disable"
    steps = [ScaffoldStep(f"Create Astro project {config.project_name}",
            command = _create(settings, "astro@latest", config.project_name, "--template", "basics", "--install",
                    "--git", "--typescript", typescript), in_project = False, )]
    if config.use_tailwind:
        steps.append(ScaffoldStep("Add Tailwind CSS", command = _exec(settings, "astro", "add", "tailwind", "--yes")))

    plugins: tuple[str, ...] = ()
    if config.ui_library == "shadcn":
        steps += [ScaffoldStep("Add React integration", command = _exec(settings, "astro", "add", "react", "--yes")),
                ScaffoldStep("Initialise shadcn/ui", command = _exec(settings, "shadcn@latest", "init", "--defaults")),
                ScaffoldStep("Add shadcn/ui button", command = _exec(settings, "shadcn@latest", "add", "button")), ]
    elif config.ui_library == "daisyui":
        steps.append(ScaffoldStep("Install daisyUI", command = _install(settings, "daisyui@latest")))
        plugins = ("daisyui",)

    steps.append(ScaffoldStep("Write starter files",
            files = (("src/styles/global.css", global_stylesheet(config, plugins = plugins)),
                    ("src/pages/index.astro", welcome_page(config)),), ))
    return steps


def _vue_steps(config: ResolvedConfig, settings: Settings) -> list[ScaffoldStep]:
    flags = ["--default"]
    if config.is_typescript:
        flags.append("--ts")
    steps = [ScaffoldStep(f"Create Vue project {config.project_name}",
            command = _create(settings, "vue@latest", config.project_name, *flags), in_project = False, ),
            ScaffoldStep("Install dependencies", command = _install(settings)), ]
    if config.use_tailwind:
        steps += [ScaffoldStep("Install Tailwind CSS",
                command = _install(settings, "tailwindcss@latest", "@tailwindcss/vite@latest")),
                ScaffoldStep("Register the Tailwind Vite plugin", patch = Patch.VITE_TAILWIND),
                ScaffoldStep("Import Tailwind in main.css", patch = Patch.TAILWIND_IMPORT,
                        target = "src/assets/main.css"), ]

    library = config.ui_library
    if library == "daisyui":
        steps += [ScaffoldStep("Install DaisyUI", command = _install(settings, "daisyui@latest")),
                ScaffoldStep("Enable the DaisyUI plugin",
                        files = (("src/assets/main.css", global_stylesheet(config, plugins = ("daisyui",))),), ), ]
    elif library == "inspiraui":
        steps += [ScaffoldStep("Install Inspira UI helpers",
                command = _install(settings, "clsx", "tailwind-merge", "class-variance-authority", "tw-animate-css",
                        dev = True)),
                ScaffoldStep("Install Inspira UI runtime", command = _install(settings, "@vueuse/core", "motion-v")),
                ScaffoldStep("Write the cn() helper", files = ((f"src/lib/utils.{_ext(config)}", cn_helper(config)),)), ]
    elif library == "shadcn-vue":
        steps += [ScaffoldStep("Initialise shadcn-vue", command = _exec(settings, "shadcn-vue@latest", "init")),
                ScaffoldStep("Add shadcn-vue button", command = _exec(settings, "shadcn-vue@latest", "add", "button")), ]
    elif library == "vuetify":
        steps += [ScaffoldStep("Install Vuetify", command = _install(settings, "vuetify")),
                ScaffoldStep("Write the Vuetify plugin",
                        files = ((f"src/plugins/vuetify.{_ext(config)}", vuetify_plugin()),)), ]
    elif library == "primevue":
        steps.append(ScaffoldStep("Install PrimeVue", command = _install(settings, "primevue", "@primeuix/themes")))
    elif library == NO_LIBRARY:
        steps.append(ScaffoldStep("Write plain stylesheet",
                files = (("src/assets/main.css", global_stylesheet(config)),)))

    steps.append(ScaffoldStep("Write welcome page", files = (("src/App.vue", welcome_page(config)),)))
    return steps


def _database_steps(config: ResolvedConfig, settings: Settings) -> list[ScaffoldStep]:
    if config.database is Database.NONE:
        return []
    driver = "mongoose" if config.database is Database.MONGODB else "pg"
    return [ScaffoldStep(f"Install {driver}", command = _install(settings, driver)),
            ScaffoldStep("Write .env.example", files = ((".env.example", env_example(config)),)), ]


def plan_scaffold(config: ResolvedConfig, settings: Settings | None = None) -> list[ScaffoldStep]:
    """Return the ordered steps that build *config*'s project.  No I/O."""
    settings = settings or Settings()
    if config.framework is Framework.ASTRO:
        steps = _astro_steps(config, settings)
    else:
        steps = _vue_steps(config, settings)
    steps += _database_steps(config, settings)
    if settings.run_dev_server:
        pm = settings.package_manager
        steps.append(ScaffoldStep("Start the dev server", command = (pm, "run", "dev")))
    return steps


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------


def run_command(argv: Sequence[str], cwd: Path) -> None:
    """Run *argv* in *cwd*, streaming output to the terminal."""
    log.info("Running %s (cwd=%s)", " ".join(argv), cwd)
    try:
        subprocess.run(list(argv), cwd = cwd, check = True)
    except FileNotFoundError as exc:
        raise ScaffoldError(f"'{argv[0]}' was not found. Is Node.js installed and on your PATH?") from exc
    except subprocess.CalledProcessError as exc:
        raise ScaffoldError(f"'{' '.join(argv)}' failed with exit code {exc.returncode}") from exc


def _apply_patch(step: ScaffoldStep, project: Path, writer: FileWriter) -> None:
    if step.patch is Patch.VITE_TAILWIND:
        config_path = find_vite_config(project)
        writer(config_path, inject_vite_plugin(config_path.read_text(encoding = "utf-8")))
    elif step.patch is Patch.TAILWIND_IMPORT:
        css_path = project / step.target
        current = css_path.read_text(encoding = "utf-8") if css_path.is_file() else None
        writer(css_path, with_tailwind_import(current))


def _ensure_empty(project: Path) -> None:
    if project.is_file():
        raise FileCreationError(f"{project} exists and is not a directory")
    if project.is_dir() and any(project.iterdir()):
        raise FileExistsError(
                f"Directory '{project.name}' already exists and is not empty. "
                "Choose a different name or remove the existing directory.")


def scaffold_project(
        config: ResolvedConfig, root: str | Path = ".", *, runner: CommandRunner | None = None,
        writer: FileWriter | None = None, settings: Settings | None = None, ) -> Path:
    """
    Build the project described by *config* under *root*.

    Parameters
    ----------
    config:
        A fully resolved configuration.  Cancelled sessions never get here.
    root:
        Directory the project directory is created in.
    runner, writer:
        Collaborators for external commands and file writes.  Default to
        :func:`run_command` and :func:`hackpack.file_generator.write_file`.
    settings:
        Package manager and dev-server preferences.

    Returns
    -------
    Path
        The project directory.
    """
    runner = runner or run_command
    writer = writer or write_file
    root_path = Path(root).expanduser().resolve()
    project = root_path / config.project_name
    _ensure_empty(project)

    steps = plan_scaffold(config, settings)
    for index, step in enumerate(steps, start = 1):
        log.info("[%d/%d] %s", index, len(steps), step.description)
        cwd = project if step.in_project else root_path
        if step.command:
            runner(step.command, cwd)
        for relative, content in step.files:
            writer(project / relative, content)
        if step.patch is not None:
            _apply_patch(step, project, writer)
    return project
