"""
Registry management commands.

Commands for adding, removing and listing the repositories gitall
tracks, and for resetting or checking the registry itself.
"""

import json

import click
from rich.markup import escape

from ..cli_utils import console, handle_errors, pass_config
from ..config import GitallConfig
from ..registry import RegistryStore


@click.command("add")
@click.argument("path", type=click.Path(file_okay=False))
@pass_config
@handle_errors
def add_cmd(config: GitallConfig, path):
    """Add a git repository to the registry.

    PATH: Repository directory (must contain a .git directory)

    Examples:

    \b
        gitall add ~/src/project
        gitall add .
    """
    added = RegistryStore(config).add(path)
    console.print(f"[green]✓[/green] Repo added: [cyan]{escape(added)}[/cyan]")


@click.command("delete")
@click.argument("path", type=click.Path(file_okay=False))
@pass_config
@handle_errors
def delete_cmd(config: GitallConfig, path):
    """Remove a repository from the registry.

    PATH: Repository directory as it was added (resolved to an absolute path)

    Removing a path that is not tracked is not an error.

    Examples:

    \b
        gitall delete ~/src/old-project
    """
    removed = RegistryStore(config).delete(path)
    if removed:
        console.print("[green]✓[/green] Repo deleted")
    else:
        console.print("[yellow]Repo was not tracked[/yellow]")


@click.command("reinit")
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@pass_config
@handle_errors
def reinit_cmd(config: GitallConfig, yes):
    """Reset the registry, its digest and the operation log.

    All tracked repositories are forgotten; the repositories
    themselves are not touched.
    """
    if not yes:
        click.confirm(
            f"Forget every repository in {config.registry_path}?",
            abort=True,
        )
    RegistryStore(config).reinit()
    console.print("[green]✓[/green] Database reset")


@click.command("list")
@click.option("--json", "json_output", is_flag=True, help="Output as JSONL")
@pass_config
@handle_errors
def list_cmd(config: GitallConfig, json_output):
    """List tracked repositories in the order they were added.

    Examples:

    \b
        gitall list
        gitall list --json
    """
    repos = RegistryStore(config).load()
    for i, path in enumerate(repos):
        if json_output:
            click.echo(json.dumps({"index": i, "path": path}))
        else:
            click.echo(path)


@click.command("verify")
@pass_config
@handle_errors
def verify_cmd(config: GitallConfig):
    """Check the registry against its stored digest.

    Exits non-zero if the registry was modified outside gitall.
    """
    store = RegistryStore(config)
    store.guard.verify(config.digest_path, config.registry_path)
    console.print(
        f"[green]✓[/green] Registry digest OK ({len(store.load())} repositories)"
    )
