#!/usr/bin/env python3

import logging

import click

from gitall.cli_utils import handle_errors
from gitall.config import GitallConfig, load_config
from gitall.exit_codes import ConfigError

# Commands
from gitall.commands.repos import add_cmd, delete_cmd, reinit_cmd, list_cmd, verify_cmd
from gitall.commands.ops import ops_cmd
from gitall.commands.run import run_cmd
from gitall.commands.config import config_cmd


def _apply_log_level(config, verbose):
    level = "DEBUG" if verbose else str(config.get("logging", {}).get("level", "WARNING")).upper()
    try:
        logging.getLogger("gitall").setLevel(level)
    except ValueError as e:
        raise ConfigError(f"Invalid logging.level: {e}") from e


@click.group()
@click.version_option(package_name="gitall")
@click.option("--db", "database", type=click.Path(dir_okay=False),
              help="Use an alternate registry file (default: ~/.gitall.db)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
@handle_errors
def cli(ctx, database, verbose):
    """gitall - Run git commands across a registry of repositories.

    Keeps a list of repositories in a registry file guarded by a
    SHA-256 digest, and runs any git command in each of them in turn.
    """
    config = load_config()
    _apply_log_level(config, verbose)
    ctx.obj = GitallConfig.from_dict(config, database=database)


cli.add_command(add_cmd)
cli.add_command(delete_cmd)
cli.add_command(reinit_cmd)
cli.add_command(list_cmd)
cli.add_command(verify_cmd)
cli.add_command(ops_cmd)
cli.add_command(run_cmd)
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
