"""
Review toolkit error types.

Every error carries a stable ``code``; the request layer reports it as
``error:<code>``.
"""

from typing import Any, Optional


class ReviewToolkitError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class SessionNotFoundError(ReviewToolkitError):
    def __init__(self, key: str):
        super().__init__("session_not_found", f"No session found for {key!r}", {"key": key})


class FileNotInSessionError(ReviewToolkitError):
    def __init__(self, session_id: str, file_path: str):
        super().__init__(
            "file_not_in_session",
            f"File {file_path!r} is not part of session {session_id}",
            {"session_id": session_id, "file_path": file_path},
        )


class NoFilesError(ReviewToolkitError):
    def __init__(self, message: str = "A new review session needs at least one file"):
        super().__init__("no_files", message)


class PendingFilesError(ReviewToolkitError):
    def __init__(self, session_id: str, pending_count: int):
        super().__init__(
            "pending_files",
            f"Session {session_id} still has {pending_count} unreviewed file(s)",
            {"session_id": session_id, "pending_count": pending_count},
        )
        self.pending_count = pending_count


class ContentReadError(ReviewToolkitError):
    def __init__(self, path: str, reason: str):
        super().__init__("content_read_failure", f"Cannot read {path}: {reason}", {"path": path})


class InvalidRequestError(ReviewToolkitError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("invalid_request", message, details)
