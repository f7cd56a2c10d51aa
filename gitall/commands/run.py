"""
Batch git command.

Runs one git command in every tracked repository.
"""

import click

from ..cli_utils import err_console, handle_errors, parse_exclude, pass_config
from ..config import GitallConfig
from ..services.command_runner import CommandRunner


@click.command(
    "run",
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
)
@click.option(
    "--exclude", "-x", multiple=True, metavar="PATHS",
    help="Comma-separated repository paths to skip (repeatable)",
)
@click.argument("git_args", nargs=-1, required=True, type=click.UNPROCESSED)
@pass_config
@handle_errors
def run_cmd(config: GitallConfig, exclude, git_args):
    """Run a git command in every tracked repository.

    GIT_ARGS: The git subcommand and its arguments (without "git")

    The registry is checked against its digest first; if it was modified
    outside gitall nothing is run. Repositories are processed one at a
    time in the order they were added. A repository whose command fails
    is reported and the rest still run.

    Examples:

    \b
        gitall run status -s
        gitall run --exclude ~/src/vendored pull --ff-only
        gitall run -- log --oneline -1
    """
    runner = CommandRunner(config)

    for progress in runner.run(git_args, exclude=parse_exclude(exclude)):
        click.echo(progress)

    result = runner.last_result
    summary = f"{result.successful} succeeded, {result.failed} failed, {result.skipped} skipped"
    if result.success:
        err_console.print(f"[bold green]✓[/bold green] Done: {summary}")
    else:
        err_console.print(f"[bold yellow]![/bold yellow] Done: {summary}")
