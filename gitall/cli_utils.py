"""
Common CLI utilities and decorators for consistent command behavior.
"""

import sys
import click
from functools import wraps
from typing import FrozenSet, Iterable

from rich.console import Console
from rich.markup import escape

from .config import GitallConfig
from .exit_codes import INTERRUPTED, CommandError, get_exit_code_for_exception
from .registry import resolve_path

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

# Hands the GitallConfig built by the top-level group to a command.
pass_config = click.make_pass_decorator(GitallConfig)


def report_error(message: str) -> None:
    """Print a one-line diagnostic to stderr."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def handle_errors(func):
    """
    Decorator that provides consistent error handling:
    - CommandError subclasses exit with their own exit code
    - Any other exception exits with the code mapped for its type
    - Ctrl+C exits with 130

    Every failure prints exactly one line to stderr.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            report_error("Interrupted by user")
            sys.exit(INTERRUPTED)
        except click.ClickException:
            # Click exceptions already have their exit code
            raise
        except CommandError as e:
            report_error(str(e))
            sys.exit(e.exit_code)
        except Exception as e:
            report_error(f"{type(e).__name__}: {e}")
            sys.exit(get_exit_code_for_exception(e))

    return wrapper


def parse_exclude(values: Iterable[str]) -> FrozenSet[str]:
    """
    Turn --exclude values into a set of absolute paths.

    Each value may itself be a comma-separated list; empty items are ignored.
    """
    paths = set()
    for value in values:
        for item in value.split(','):
            item = item.strip()
            if item:
                paths.add(resolve_path(item))
    return frozenset(paths)
