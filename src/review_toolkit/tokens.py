"""
Token estimation.

Counts are persisted in session records and compared across calls, so the
encoding is pinned. Changing ``TOKENIZER_ENCODING`` invalidates the budget
semantics of every stored session.
"""

from functools import lru_cache

import tiktoken

# Encoding used by gpt-4o.
TOKENIZER_ENCODING = "o200k_base"


@lru_cache(maxsize=None)
def get_encoding() -> tiktoken.Encoding:
    return tiktoken.get_encoding(TOKENIZER_ENCODING)


def estimate_line_tokens(text: str) -> list[int]:
    """Token count per ``\\n``-separated line. ``""`` is one empty line: ``[0]``."""
    encoding = get_encoding()
    # Special-token text in reviewed files is counted as plain text, never rejected.
    return [len(encoding.encode(line, disallowed_special=())) for line in text.split("\n")]


def estimate_tokens(text: str) -> int:
    return sum(estimate_line_tokens(text))
