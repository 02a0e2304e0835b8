"""
Command line entry point: ``feed-commands install <package>``.
"""
from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from feed_commands.core import dependencies

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group()
@click.option(
    "--home",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Command directory (defaults to $FEED_COMMANDS_HOME or ~/.feed-commands).",
)
@click.option("--verbose", "-v", is_flag=True, help="Show progress details.")
def cli(home: Optional[Path], verbose: bool) -> None:
    """Install command line extensions from a package feed."""
    configure_logging(verbose)
    if home is not None:
        dependencies.set_home_dir(home)


@cli.command()
@click.argument("package")
@click.option("--force", is_flag=True, help="Reinstall even if the version is already installed.")
@click.option("--pre", "include_prerelease", is_flag=True, help="Consider pre-release versions.")
def install(package: str, force: bool, include_prerelease: bool) -> None:
    """Install PACKAGE and write a launcher for its command."""
    installer = dependencies.build_installer()
    result = asyncio.run(installer.install(package, force=force, include_prerelease=include_prerelease))

    if result.success:
        click.echo(result.message)
        if result.launcher_path is not None:
            click.echo(f"Launcher: {result.launcher_path}")
        return

    click.secho(result.message, fg="red", err=True)
    sys.exit(1)


@cli.command(name="list")
def list_installed() -> None:
    """List installed packages and versions."""
    installed = dependencies.get_command_directory().list_installed()
    if not installed:
        click.echo("No commands installed.")
        return
    for name, version in installed:
        click.echo(f"{name} {version}")


if __name__ == "__main__":
    cli()
