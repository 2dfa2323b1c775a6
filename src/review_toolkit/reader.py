"""
Chunked file reader. Hands a file to an agent in token-bounded pieces.

The whole file is loaded; chunking is purely logical. Each chunk is
line-aligned and returns the line to continue from.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from review_toolkit.errors import ContentReadError, InvalidRequestError
from review_toolkit.models.results import ContentChunk
from review_toolkit.tokens import estimate_line_tokens

logger = logging.getLogger(__name__)

LineCounter = Callable[[str], list[int]]


def _end_line(line_tokens: list[int], start_line: int, token_budget: int) -> int:
    # Always take at least one line, then keep going while under budget.
    end_line = start_line
    used = 0
    while end_line < len(line_tokens) and (end_line == start_line or used < token_budget):
        used += line_tokens[end_line]
        end_line += 1
    return end_line


def read_text(root: Union[str, Path], file_path: str) -> str:
    path = Path(root) / file_path
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ContentReadError(str(path), str(e)) from e


def read_chunk(
    root: Union[str, Path],
    file_path: str,
    token_budget: int,
    start_line: int = 0,
    *,
    line_counter: Optional[LineCounter] = None,
) -> ContentChunk:
    """Read lines from ``start_line`` until ``token_budget`` is reached.

    The budget is checked before each line is added, so the chunk may overshoot
    by at most one line; a single line larger than the budget is returned whole.
    ``end_line`` is exclusive and is the ``start_line`` for the next call.
    """
    if start_line < 0:
        raise InvalidRequestError("start_line must be >= 0", {"start_line": start_line})

    text = read_text(root, file_path)
    lines = text.split("\n")
    line_tokens = (line_counter or estimate_line_tokens)(text)
    end_line = _end_line(line_tokens, min(start_line, len(lines)), token_budget)
    logger.debug("chunk %s [%d:%d) of %d lines", file_path, start_line, end_line, len(lines))

    return ContentChunk(
        content="\n".join(lines[start_line:end_line]),
        end_line=end_line,
        is_ended=end_line == len(lines),
    )
