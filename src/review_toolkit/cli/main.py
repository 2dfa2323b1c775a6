"""
review-toolkit CLI — `review-toolkit` command.

Commands:
  review-toolkit start <project> <files...>   Start or resume a review session
  review-toolkit next <key>                   Next file to review
  review-toolkit submit <key> <file>          Record a file review
  review-toolkit complete <key>               Close a fully reviewed session
  review-toolkit report <key>                 Markdown report
  review-toolkit show <key>                   File table
  review-toolkit read <root> <file>           Token-bounded file chunk

<key> is a session id or a project key.
"""

import logging
from pathlib import Path
from typing import Optional

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install review-toolkit[cli]")

from review_toolkit import __version__
from review_toolkit.client import ReviewToolkit
from review_toolkit.config import load_config
from review_toolkit.models.results import ToolResult

console = Console()
err_console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _get_toolkit() -> ReviewToolkit:
    ctx = click.get_current_context()
    obj = ctx.find_root().obj or {}
    config = load_config()
    sessions_dir = obj.get("sessions_dir") or config.sessions_dir
    token_limit = obj.get("token_limit") or config.token_limit
    return ReviewToolkit(sessions_dir, token_limit=token_limit)


def _emit(result: ToolResult, json_output: bool, text: Optional[str] = None) -> None:
    """Print a request result; domain errors exit with status 1."""
    if json_output:
        click.echo(result.model_dump_json(indent=2))
    elif not result.ok:
        err_console.print(f"[red]{result.status}: {result.message}[/red]")
    else:
        console.print(text if text is not None else result.message)
    if not result.ok:
        raise SystemExit(1)


@click.group()
@click.version_option(__version__)
@click.option("--sessions-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Directory holding session records")
@click.option("--token-limit", type=click.IntRange(min=1), default=None,
              help="Default token limit for new sessions")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr")
@click.pass_context
def main(ctx, sessions_dir: Optional[Path], token_limit: Optional[int], verbose: bool):
    """Review a project file by file within a token budget."""
    _setup_logging(verbose)
    ctx.obj = {"sessions_dir": sessions_dir, "token_limit": token_limit}


# Register subcommands from separate modules
from review_toolkit.cli.files import read_cmd
from review_toolkit.cli.review import complete_cmd, next_cmd, report_cmd, show_cmd, start_cmd, submit_cmd

main.add_command(start_cmd)
main.add_command(next_cmd)
main.add_command(submit_cmd)
main.add_command(complete_cmd)
main.add_command(report_cmd)
main.add_command(show_cmd)
main.add_command(read_cmd)


if __name__ == "__main__":
    main()
