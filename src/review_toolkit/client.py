"""
Transport-independent request surface over the review engine.

Each request returns a :class:`ToolResult` whose ``status`` is one of the
:class:`ReviewStatus` tags or ``error:<code>``. Domain errors never escape a
request; anything else (disk full, bugs) does.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Optional, Union

from pydantic import ConfigDict, ValidationError, validate_call

from review_toolkit.engine import DEFAULT_TOKEN_LIMIT, ReviewEngine
from review_toolkit.errors import ReviewToolkitError
from review_toolkit.models.results import ReviewStatus, ToolResult
from review_toolkit.models.session import Session
from review_toolkit.reader import read_chunk
from review_toolkit.store import SessionStore

logger = logging.getLogger(__name__)

# Requests arrive from untyped transports; no coercion of "10" to 10 or "a.py" to a list.
_validated = validate_call(config=ConfigDict(strict=True))


def _session_data(session: Session) -> dict[str, Any]:
    return {"session": session.model_dump(mode="json")}


class ReviewToolkit:
    def __init__(
        self,
        sessions_dir: Union[str, Path],
        token_limit: int = DEFAULT_TOKEN_LIMIT,
        engine: Optional[ReviewEngine] = None,
    ):
        self.engine = engine or ReviewEngine(SessionStore(sessions_dir), default_token_limit=token_limit)
        self.store = self.engine.store
        self._requests: dict[str, Callable[..., ToolResult]] = {
            "start_review": self.start_review,
            "next_file": self.next_file,
            "submit_review": self.submit_review,
            "complete_review": self.complete_review,
            "get_report": self.get_report,
            "get_file_content": self.get_file_content,
            "get_session": self.get_session,
        }

    @property
    def request_names(self) -> list[str]:
        return list(self._requests)

    def call(self, name: str, **arguments: Any) -> ToolResult:
        """Dispatch a named request."""
        handler = self._requests.get(name)
        if handler is None:
            return ToolResult(status=ReviewStatus.error("unknown_request"), message=f"Unknown request: {name}")
        try:
            return handler(**arguments)
        except ValidationError as e:
            return ToolResult(
                status=ReviewStatus.error("invalid_request"),
                message=f"Invalid arguments for {name}: {e.error_count()} error(s)",
                data={"errors": e.errors(include_url=False, include_context=False, include_input=False)},
            )

    @staticmethod
    def _guard(fn: Callable[[], ToolResult]) -> ToolResult:
        try:
            return fn()
        except ReviewToolkitError as e:
            logger.debug("Request failed with %s: %s", e.code, e)
            return ToolResult(status=ReviewStatus.error(e.code), message=str(e), data=e.details or {})

    @_validated
    def start_review(
        self,
        project_key: str,
        files: Optional[list[str]] = None,
        token_limit: Optional[int] = None,
        force_new: bool = False,
    ) -> ToolResult:
        def run() -> ToolResult:
            result = self.engine.start_or_resume(project_key, files, token_limit, force_new)
            session = result.session
            if result.status == ReviewStatus.RESUMED:
                message = (
                    f"Resumed session {session.id}: {len(session.reviewed_files)}/{len(session.files)} "
                    f"files reviewed, window token count reset to 0"
                )
            else:
                message = f"Created session {session.id} with {len(session.files)} files"
            return ToolResult(status=result.status, message=message, data=_session_data(session))
        return self._guard(run)

    @_validated
    def next_file(self, key: str) -> ToolResult:
        def run() -> ToolResult:
            result = self.engine.next_file(key)
            session = result.session
            data: dict[str, Any] = {
                "session_id": session.id,
                "pending_count": len(session.pending_files),
                "current_window_token_count": session.current_window_token_count,
                "token_limit": session.token_limit,
            }
            if result.file is not None:
                data["file"] = result.file.model_dump(mode="json")
                message = f"Next file: {result.file.path}"
            elif result.status == ReviewStatus.WINDOW_EXCEEDED_PENDING:
                message = "Token limit exceeded for this window. Resume the session in a new context to continue."
            elif result.status == ReviewStatus.WINDOW_EXCEEDED_ALL_REVIEWED:
                message = "All files reviewed, but the token limit for this window was exceeded."
            else:
                message = "All files have been reviewed."
            return ToolResult(status=result.status, message=message, data=data)
        return self._guard(run)

    @_validated
    def submit_review(self, key: str, file_path: str, agent_review: str, feedback: str = "") -> ToolResult:
        def run() -> ToolResult:
            result = self.engine.submit_review(key, file_path, agent_review, feedback)
            session = result.session
            entry = session.find_file(file_path)
            data = {
                "session_id": session.id,
                "file_token_count": entry.token_count if entry else 0,
                "total_token_count": session.total_token_count,
                "current_window_token_count": session.current_window_token_count,
                "token_limit": session.token_limit,
                "exceeds_limit": result.exceeds_limit,
                "pending_count": len(session.pending_files),
            }
            message = f"Recorded review for {file_path}"
            if result.exceeds_limit:
                message += "; token limit exceeded, resume in a new context before the next file"
            return ToolResult(status=result.status, message=message, data=data)
        return self._guard(run)

    @_validated
    def complete_review(self, key: str) -> ToolResult:
        def run() -> ToolResult:
            session = self.engine.complete(key)
            return ToolResult(
                status=ReviewStatus.COMPLETED,
                message=f"Session {session.id} completed",
                data=_session_data(session),
            )
        return self._guard(run)

    @_validated
    def get_report(self, key: str) -> ToolResult:
        def run() -> ToolResult:
            report = self.engine.report(key)
            return ToolResult(status=ReviewStatus.SUCCESS, message=report, data={"report": report})
        return self._guard(run)

    @_validated
    def get_file_content(self, root: str, file_path: str, token_budget: int, start_line: int = 0) -> ToolResult:
        def run() -> ToolResult:
            chunk = read_chunk(root, file_path, token_budget, start_line)
            return ToolResult(status=ReviewStatus.SUCCESS, message=chunk.content, data=chunk.model_dump())
        return self._guard(run)

    @_validated
    def get_session(self, key: str) -> ToolResult:
        def run() -> ToolResult:
            session = self.engine.resolve(key)
            return ToolResult(status=ReviewStatus.SUCCESS, message=session.id, data=_session_data(session))
        return self._guard(run)
