from review_toolkit.models.session import FileEntry, Session
from review_toolkit.models.results import (
    ContentChunk,
    NextFileResult,
    ReviewStatus,
    StartResult,
    SubmitResult,
    ToolResult,
)

__all__ = [
    "FileEntry",
    "Session",
    "ContentChunk",
    "NextFileResult",
    "ReviewStatus",
    "StartResult",
    "SubmitResult",
    "ToolResult",
]
