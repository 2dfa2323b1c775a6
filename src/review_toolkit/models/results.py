"""
Status tags and result envelopes returned by the engine and request layer.
"""

from typing import Any, Optional

from pydantic import BaseModel

from review_toolkit.models.session import FileEntry, Session


class ReviewStatus:
    CREATED = "created"
    RESUMED = "resumed"
    SUCCESS = "success"
    COMPLETED = "completed"
    WINDOW_EXCEEDED_PENDING = "window_exceeded_pending"
    WINDOW_EXCEEDED_ALL_REVIEWED = "window_exceeded_all_reviewed"

    @staticmethod
    def error(code: str) -> str:
        return f"error:{code}"


WINDOW_EXCEEDED = {ReviewStatus.WINDOW_EXCEEDED_PENDING, ReviewStatus.WINDOW_EXCEEDED_ALL_REVIEWED}


class StartResult(BaseModel):
    """start_or_resume outcome: ``created`` or ``resumed``."""
    status: str
    session: Session


class NextFileResult(BaseModel):
    """next_file outcome. ``file`` is set only when status is ``success``."""
    status: str
    session: Session
    file: Optional[FileEntry] = None

    @property
    def window_exceeded(self) -> bool:
        return self.status in WINDOW_EXCEEDED


class SubmitResult(BaseModel):
    status: str = ReviewStatus.SUCCESS
    session: Session
    exceeds_limit: bool = False


class ContentChunk(BaseModel):
    """A line-aligned slice of a file plus the cursor for the next call."""
    content: str
    end_line: int
    is_ended: bool


class ToolResult(BaseModel):
    status: str
    message: str = ""
    data: dict[str, Any] = {}

    @property
    def ok(self) -> bool:
        return not self.status.startswith("error:")
