import click
from gitall.config import load_config
from gitall.cli_utils import handle_errors, pass_config
import json


@click.group("config")
def config_cmd():
    """Configuration management commands."""
    pass


@config_cmd.command("show")
@click.option("--pretty", is_flag=True, help="Display as formatted JSON instead of single-line JSONL")
@click.option("--path", is_flag=True, help="Show the config file path being used")
@click.option("--files", is_flag=True, help="Show the registry, digest and log file locations")
@pass_config
@handle_errors
def show_config(resolved, pretty, path, files):
    """Show the current configuration with all merges applied.

    By default, outputs single-line JSON (JSONL format).
    Use --pretty for human-readable formatted output.
    Use --path to see which config file is being used.
    Use --files to see where the registry, digest and log live.
    """
    from gitall.config import get_config_path

    if path:
        config_path = get_config_path()
        print(json.dumps({"config_path": str(config_path)}))
        return

    if files:
        print(json.dumps({
            "registry": str(resolved.registry_path),
            "digest": str(resolved.digest_path),
            "log": str(resolved.log_path),
        }))
        return

    config = load_config()

    if pretty:
        # Pretty print for human readability
        print(json.dumps(config, indent=2, ensure_ascii=False))
    else:
        # Default: single-line JSON (JSONL)
        print(json.dumps(config, ensure_ascii=False))
