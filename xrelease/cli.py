"""Command-line interface for xrelease.

Provides commands for:
- init: Write a starter .xrelease.yml (and package.json when missing)
- create: Run the release pipeline
"""

from enum import Enum
from pathlib import Path

import typer
from rich.console import Console

from xrelease import __version__
from xrelease.config.defaults import (
    DEFAULT_CONFIG_FILENAME,
    get_project_name,
    write_default_config,
)
from xrelease.ecosystems.nodejs import NodeJSEcosystem
from xrelease.exceptions import ReleaseError
from xrelease.workflow import create_release

app = typer.Typer(
    name="xrelease",
    help="Configuration-driven release automation",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


class Language(str, Enum):
    node = "node"
    go = "go"


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"xrelease version {__version__}")
        raise typer.Exit()


def print_error(error: ReleaseError, verbose: bool = False) -> None:
    console.print(f"[red]Error:[/red] {error.message}")
    if verbose and error.details:
        console.print(f"[dim]{error.details}[/dim]")


def resolve_bump(
    major: bool, minor: bool, patch: bool, bump: str | None
) -> str | None:
    """Collapse the bump flags into one kind.

    Raises:
        typer.BadParameter: If more than one bump is requested
    """
    requested = [
        kind
        for kind, flag in (("major", major), ("minor", minor), ("patch", patch))
        if flag
    ]
    if bump:
        if bump not in ("major", "minor", "patch"):
            raise typer.BadParameter(
                f"Invalid bump '{bump}'. Use major, minor or patch", param_hint="--bump"
            )
        requested.append(bump)
    if len(set(requested)) > 1:
        raise typer.BadParameter(
            f"Conflicting bump options: {', '.join(requested)}",
            param_hint="--major/--minor/--patch/--bump",
        )
    return requested[0] if requested else None


@app.callback()
def main(
    version: bool = typer.Option(  # noqa: B008
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Configuration-driven release automation.

    Checks the branch, runs checks, bumps package.json, updates version
    strings, writes the changelog, then tags, pushes and publishes.
    """


@app.command()
def init(
    language: Language = typer.Option(  # noqa: B008
        Language.node,
        "--language",
        "-l",
        help="Project language (node or go)",
    ),
    yes: bool = typer.Option(  # noqa: B008
        False,
        "--yes",
        "-y",
        help="Overwrite an existing configuration",
    ),
    output: Path = typer.Option(  # noqa: B008
        Path(DEFAULT_CONFIG_FILENAME),
        "--output",
        "-o",
        help="Output path for configuration file",
    ),
) -> None:
    """Generate a release configuration file.

    Examples:
        xrelease init
        xrelease init --language go
        xrelease init -y -o .xrelease.yml
    """
    if output.exists() and not yes:
        console.print(f"[red]Configuration already exists:[/red] {output}")
        console.print("Use --yes to overwrite")
        raise typer.Exit(code=1)

    project_root = Path.cwd()
    try:
        write_default_config(output, language.value)
        console.print(f"[green]Configuration written to:[/green] {output}")

        ecosystem = NodeJSEcosystem(project_root)
        name = get_project_name(project_root, language.value)
        if ecosystem.create_manifest(name):
            console.print(f"[green]Created package.json[/green] for {name}")
    except ReleaseError as e:
        print_error(e)
        raise typer.Exit(code=1) from None
    except OSError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from None


@app.command()
def create(
    major: bool = typer.Option(False, "--major", help="Bump the major version"),  # noqa: B008
    minor: bool = typer.Option(False, "--minor", help="Bump the minor version"),  # noqa: B008
    patch: bool = typer.Option(False, "--patch", help="Bump the patch version"),  # noqa: B008
    bump: str | None = typer.Option(  # noqa: B008
        None,
        "--bump",
        "-b",
        help="Bump kind: major, minor or patch",
    ),
    branch: str | None = typer.Option(  # noqa: B008
        None,
        "--branch",
        help="Branch to allow instead of the configured ones",
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Path to configuration file",
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False,
        "--verbose",
        "-v",
        help="Show command output and details",
    ),
) -> None:
    """Create a new release.

    Without a bump option the configured release.defaultBump is used.

    Examples:
        xrelease create              # default bump (patch)
        xrelease create --minor      # 1.0.0 -> 1.1.0
        xrelease create --bump major # 1.0.0 -> 2.0.0
    """
    kind = resolve_bump(major, minor, patch, bump)

    outcome = create_release(
        project_root=Path.cwd(),
        config_path=config,
        bump=kind,
        branch=branch,
        verbose=verbose,
        output=console,
    )

    if not outcome.success:
        if outcome.error is not None:
            print_error(outcome.error, verbose)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
