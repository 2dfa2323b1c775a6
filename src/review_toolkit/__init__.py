"""
review-toolkit — token-budgeted, file-by-file code review sessions for AI agents.

Tracks which files of a project an agent has reviewed, what it said about
them, and how many tokens the current context window has consumed.
"""

from review_toolkit.client import ReviewToolkit
from review_toolkit.engine import DEFAULT_TOKEN_LIMIT, ReviewEngine
from review_toolkit.errors import (
    ContentReadError,
    FileNotInSessionError,
    InvalidRequestError,
    NoFilesError,
    PendingFilesError,
    ReviewToolkitError,
    SessionNotFoundError,
)
from review_toolkit.models import FileEntry, ReviewStatus, Session, ToolResult
from review_toolkit.reader import read_chunk
from review_toolkit.store import SessionStore
from review_toolkit.tokens import estimate_line_tokens, estimate_tokens

__version__ = "0.1.0"
__all__ = [
    "ReviewToolkit",
    "ReviewEngine",
    "SessionStore",
    "DEFAULT_TOKEN_LIMIT",
    "FileEntry",
    "Session",
    "ReviewStatus",
    "ToolResult",
    "read_chunk",
    "estimate_tokens",
    "estimate_line_tokens",
    "ReviewToolkitError",
    "SessionNotFoundError",
    "FileNotInSessionError",
    "NoFilesError",
    "PendingFilesError",
    "ContentReadError",
    "InvalidRequestError",
]
