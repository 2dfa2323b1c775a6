"""CLI: review-toolkit read"""

import click
from rich.console import Console

console = Console()


def _get_toolkit():
    from review_toolkit.cli.main import _get_toolkit
    return _get_toolkit()


def _emit(result, json_output, text=None):
    from review_toolkit.cli.main import _emit
    _emit(result, json_output, text)


@click.command("read")
@click.argument("root", type=click.Path(file_okay=False))
@click.argument("file_path")
@click.option("-t", "--tokens", "token_budget", default=5000, type=click.IntRange(min=1),
              help="Token budget for this chunk")
@click.option("-s", "--start-line", default=0, type=click.IntRange(min=0))
@click.option("--json-output", "--json", is_flag=True)
def read_cmd(root: str, file_path: str, token_budget: int, start_line: int, json_output: bool):
    """Print a token-bounded chunk of FILE_PATH starting at --start-line."""
    result = _get_toolkit().get_file_content(root, file_path, token_budget, start_line)
    if result.ok and not json_output:
        click.echo(result.message)
        console.print(f"[dim]End line: {result.data['end_line']}  Is ended: {result.data['is_ended']}[/dim]",
                      highlight=False)
        return
    _emit(result, json_output)
