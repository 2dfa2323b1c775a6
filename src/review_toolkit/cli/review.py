"""CLI: review-toolkit start|next|submit|complete|report|show"""

from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from review_toolkit.models.session import Session
from review_toolkit.models.results import ReviewStatus

console = Console()


def _get_toolkit():
    from review_toolkit.cli.main import _get_toolkit
    return _get_toolkit()


def _emit(result, json_output, text=None):
    from review_toolkit.cli.main import _emit
    _emit(result, json_output, text)


@click.command("start")
@click.argument("project")
@click.argument("files", nargs=-1)
@click.option("--token-limit", type=click.IntRange(min=1), default=None, help="Token budget per window")
@click.option("--force-new", is_flag=True, help="Create a new session even if one is active")
@click.option("--json-output", "--json", is_flag=True)
def start_cmd(project: str, files: tuple[str, ...], token_limit: Optional[int], force_new: bool, json_output: bool):
    """Start a review session for PROJECT, or resume the active one."""
    result = _get_toolkit().start_review(project, list(files), token_limit=token_limit, force_new=force_new)
    color = "green" if result.status == ReviewStatus.CREATED else "cyan"
    _emit(result, json_output, f"[{color}]{result.message}[/{color}]")


@click.command("next")
@click.argument("key")
@click.option("--json-output", "--json", is_flag=True)
def next_cmd(key: str, json_output: bool):
    """Show the next file to review."""
    result = _get_toolkit().next_file(key)
    if result.status == ReviewStatus.SUCCESS:
        text = f"[bold]{result.data['file']['path']}[/bold] [dim]({result.data['pending_count']} pending)[/dim]"
    elif result.status in (ReviewStatus.WINDOW_EXCEEDED_PENDING, ReviewStatus.WINDOW_EXCEEDED_ALL_REVIEWED):
        text = f"[yellow]{result.message}[/yellow]"
    else:
        text = f"[green]{result.message}[/green]"
    _emit(result, json_output, text)


@click.command("submit")
@click.argument("key")
@click.argument("file_path")
@click.option("-r", "--review", "agent_review", default="", help="Agent review text")
@click.option("-f", "--feedback", default="", help="User feedback")
@click.option("--json-output", "--json", is_flag=True)
def submit_cmd(key: str, file_path: str, agent_review: str, feedback: str, json_output: bool):
    """Record the review of FILE_PATH."""
    result = _get_toolkit().submit_review(key, file_path, agent_review, feedback)
    text = None
    if result.ok:
        data = result.data
        color = "yellow" if data["exceeds_limit"] else "green"
        text = (
            f"[{color}]{result.message}[/{color}] "
            f"[dim](window {data['current_window_token_count']}/{data['token_limit']}, "
            f"total {data['total_token_count']})[/dim]"
        )
    _emit(result, json_output, text)


@click.command("complete")
@click.argument("key")
@click.option("--json-output", "--json", is_flag=True)
def complete_cmd(key: str, json_output: bool):
    """Mark a fully reviewed session as completed."""
    result = _get_toolkit().complete_review(key)
    _emit(result, json_output, f"[green]{result.message}[/green]")


@click.command("report")
@click.argument("key")
@click.option("--json-output", "--json", is_flag=True)
def report_cmd(key: str, json_output: bool):
    """Print the Markdown review report."""
    result = _get_toolkit().get_report(key)
    if result.ok and not json_output:
        click.echo(result.message)
        return
    _emit(result, json_output)


@click.command("show")
@click.argument("key")
@click.option("--json-output", "--json", is_flag=True)
def show_cmd(key: str, json_output: bool):
    """Show the files of a session and their review state."""
    result = _get_toolkit().get_session(key)
    if json_output or not result.ok:
        _emit(result, json_output)
        return

    session = Session.model_validate(result.data["session"])

    state = "completed" if session.completed else "active"
    table = Table(title=f"{session.id} ({state})")
    table.add_column("#", justify="right")
    table.add_column("File", style="bold")
    table.add_column("Reviewed")
    table.add_column("Tokens", justify="right")
    for i, entry in enumerate(session.files, 1):
        table.add_row(
            str(i),
            entry.path,
            "[green]yes[/green]" if entry.reviewed else "[dim]no[/dim]",
            "" if entry.token_count is None else str(entry.token_count),
        )
    console.print(table)
    console.print(
        f"Window tokens: {session.current_window_token_count}/{session.token_limit}  "
        f"Total tokens: {session.total_token_count}"
    )
