"""Thin CLI wrapper for dep_ensure.

This module provides the buildpack executables using Typer.
All business logic is delegated to core modules.
"""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from dep_ensure import __version__
from dep_ensure.config import get_settings, print_settings_json

app = typer.Typer(
    name="dep-ensure-buildpack",
    help="dep ensure buildpack - detect and build phases for Go dep projects",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

# CNB exit code for a detect phase that does not pass
DETECT_FAIL_EXIT_CODE = 100


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"dep-ensure-buildpack version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """dep ensure buildpack - detect and build phases for Go dep projects."""
    _configure_logging(get_settings().log_level)


def _configure_logging(level: str) -> None:
    """Send dep_ensure diagnostics to stderr; build output stays on stdout."""
    package_logger = logging.getLogger("dep_ensure")
    package_logger.setLevel(level)
    if not package_logger.handlers:
        package_logger.addHandler(
            RichHandler(console=err_console, show_path=False)
        )


def _resolve_working_dir(working_dir: Path | None) -> Path:
    if working_dir is not None:
        return working_dir
    settings_dir = get_settings().working_dir
    return settings_dir if settings_dir is not None else Path.cwd()


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    settings = get_settings()
    if json_output:
        console.print(print_settings_json(settings))
    else:
        working_dir_display = (
            str(settings.working_dir) if settings.working_dir else "(current directory)"
        )
        timeout_display = (
            str(settings.build_timeout) if settings.build_timeout else "(none)"
        )
        console.print("[bold]Effective Configuration:[/bold]")
        console.print()
        console.print(f"  dep executable:      {settings.dep_path}")
        console.print(f"  Working directory:   {working_dir_display}")
        console.print(f"  Build timeout:       {timeout_display}")
        console.print(f"  Log level:           {settings.log_level}")


@app.command()
def detect(
    platform_dir: Annotated[
        Path | None, typer.Argument(help="Platform directory (unused)")
    ] = None,
    plan_path: Annotated[
        Path | None, typer.Argument(help="Where to write the build plan")
    ] = None,
    working_dir: Annotated[
        Path | None,
        typer.Option("--working-dir", "-w", help="Application directory"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print the build plan as JSON"),
    ] = False,
) -> None:
    """Pass when the application is managed by dep."""
    from dep_ensure.detect import detect as run_detect
    from dep_ensure.detect import write_plan

    result = run_detect(_resolve_working_dir(working_dir))
    if not result.passed:
        err_console.print(
            result.reason, style="yellow", markup=False, soft_wrap=True
        )
        raise typer.Exit(code=DETECT_FAIL_EXIT_CODE)

    if plan_path is not None:
        write_plan(result.plan, plan_path)

    if json_output:
        console.print(json.dumps(result.plan, indent=2))


@app.command()
def build(
    layers_dir: Annotated[Path, typer.Argument(help="Buildpack layers directory")],
    platform_dir: Annotated[
        Path | None, typer.Argument(help="Platform directory")
    ] = None,
    plan_path: Annotated[
        Path | None, typer.Argument(help="Buildpack plan (unused)")
    ] = None,
    working_dir: Annotated[
        Path | None,
        typer.Option("--working-dir", "-w", help="Application directory"),
    ] = None,
    buildpack_dir: Annotated[
        Path | None,
        typer.Option(
            "--buildpack-dir",
            help="Buildpack root containing buildpack.toml",
            envvar="CNB_BUILDPACK_DIR",
        ),
    ] = None,
    stack: Annotated[
        str,
        typer.Option("--stack", help="Stack identifier", envvar="CNB_STACK_ID"),
    ] = "",
) -> None:
    """Provision the dep cache layer and run dep ensure."""
    from dep_ensure.build import DEP_CACHE_LAYER_NAME, Clock, make_build
    from dep_ensure.layers import LayerAcquisitionError
    from dep_ensure.lifecycle import BuildpackConfigError, run_build
    from dep_ensure.logs import Emitter
    from dep_ensure.process import BuildProcessError, DepEnsureProcess

    settings = get_settings()
    emitter = Emitter()
    process = DepEnsureProcess(
        dep_path=settings.dep_path,
        depcachedir=layers_dir.absolute() / DEP_CACHE_LAYER_NAME,
        timeout=settings.build_timeout,
        emitter=emitter,
    )
    build_func = make_build(process, emitter, Clock())

    cnb_path = buildpack_dir if buildpack_dir is not None else Path.cwd()

    try:
        run_build(
            build_func,
            working_dir=_resolve_working_dir(working_dir),
            cnb_path=cnb_path,
            layers_path=layers_dir,
            platform_path=platform_dir,
            stack=stack,
        )
    except (BuildpackConfigError, LayerAcquisitionError, BuildProcessError) as e:
        err_console.print(str(e), style="red", markup=False, soft_wrap=True)
        raise typer.Exit(code=1) from None


__all__ = ["app"]
