"""CLI entry point using Typer."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from create_k8s_app.context import AppContext

import typer
from rich.console import Console
from rich.logging import RichHandler

from create_k8s_app import __version__
from create_k8s_app.bootstrap import Bootstrapper
from create_k8s_app.context import create_context
from create_k8s_app.preflight import NodeVersionError, check_node_version
from create_k8s_app.types import BootstrapArgs

PROG_NAME = "create-k8s-app"

SCRIPTS_VERSION_HELP = """\
Only [green]<project-directory>[/green] is required.

A custom [cyan]--scripts-version[/cyan] can be one of:

- a specific npm version: [green]0.8.2[/green]

- a specific npm tag: [green]@next[/green]

- a custom fork published on npm: [green]my-k8s-scripts[/green]

- a local path relative to the current working directory: [green]file:../my-k8s-scripts[/green]

- a .tgz archive: [green]https://mysite.com/my-k8s-scripts-0.8.2.tgz[/green]

- a .tar.gz archive: [green]https://mysite.com/my-k8s-scripts-0.8.2.tar.gz[/green]

- a git URL: [green]git+https://github.com/mycompany/my-k8s-scripts.git#v1.2.3[/green]

It is not needed unless you specifically want to use a fork.
"""

app = typer.Typer(
    name=PROG_NAME,
    help="Create a new Kubernetes app.",
    rich_markup_mode="rich",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"{PROG_NAME} v{__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def _show_usage() -> None:
    """Explain the missing project directory on stderr."""
    err_console.print("Please specify the project directory:")
    err_console.print(f"  [cyan]{PROG_NAME}[/cyan] [green]<project-directory>[/green]")
    err_console.print()
    err_console.print("For example:")
    err_console.print(f"  [cyan]{PROG_NAME}[/cyan] [green]my-k8s-app[/green]")
    err_console.print()
    err_console.print(f"Run [cyan]{PROG_NAME} --help[/cyan] to see all options.")


@app.command(epilog=SCRIPTS_VERSION_HELP)
def create(
    project_directory: Annotated[
        str | None,
        typer.Argument(metavar="<project-directory>", help="Directory to create the app in"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Print additional logs")] = False,
    scripts_version: Annotated[
        str | None,
        typer.Option(
            "--scripts-version",
            metavar="<alternative-package>",
            help="Use a non-standard version of k8s-scripts",
        ),
    ] = None,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    _context=None,
) -> None:
    """Create a new Kubernetes app in <project-directory>."""
    if not project_directory:
        _show_usage()
        raise typer.Exit(1)

    _configure_logging(verbose)
    ctx: AppContext = _context or create_context()

    try:
        check_node_version(ctx.settings.node_executable, ctx.settings.minimum_node_major)
    except NodeVersionError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    args = BootstrapArgs(
        project_directory=project_directory,
        original_cwd=Path.cwd(),
        verbose=verbose,
        scripts_version=scripts_version,
    )
    exit_code = asyncio.run(Bootstrapper(ctx).run(args))
    if exit_code:
        raise typer.Exit(exit_code)


def main() -> None:
    app(prog_name=PROG_NAME)


if __name__ == "__main__":
    main()
