"""
Operation history command.
"""

import json

import click

from ..cli_utils import handle_errors, pass_config
from ..config import GitallConfig
from ..oplog import OperationLog


@click.command("ops")
@click.option("--json", "json_output", is_flag=True, help="Output as JSONL")
@pass_config
@handle_errors
def ops_cmd(config: GitallConfig, json_output):
    """Show the last 50 successful operations, newest first.

    Examples:

    \b
        gitall ops
        gitall ops --json
    """
    for i, entry in enumerate(OperationLog(config.log_path).list()):
        if json_output:
            click.echo(json.dumps({"index": i, "entry": entry}))
        else:
            click.echo(entry)
