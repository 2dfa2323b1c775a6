"""
Review session engine.

Drives a file-by-file review under a per-window token budget:

- ``start_or_resume`` hands out a session for a project, creating one or
  resetting the window counter of the active one.
- ``next_file`` returns the first unreviewed file, unless the window is
  already over budget, in which case the caller must resume first.
- ``submit_review`` records the outcome for one file and charges its token
  cost to both the lifetime total and the current window.
- ``complete`` closes a fully reviewed session. Completion is terminal.

Every operation takes either a session id or a project key and resolves it
through :meth:`ReviewEngine.resolve` before doing anything else.

Calls are expected one at a time from a single caller. Each operation is a
read-modify-write against the store without locking.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence

from review_toolkit.errors import (
    ContentReadError,
    FileNotInSessionError,
    InvalidRequestError,
    NoFilesError,
    PendingFilesError,
    SessionNotFoundError,
)
from review_toolkit.models.results import NextFileResult, ReviewStatus, StartResult, SubmitResult
from review_toolkit.models.session import FileEntry, Session
from review_toolkit.reader import read_text
from review_toolkit.report import format_report
from review_toolkit.store import SessionStore
from review_toolkit.tokens import TOKENIZER_ENCODING, estimate_tokens

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_LIMIT = 10000


class ReviewEngine:
    def __init__(
        self,
        store: SessionStore,
        default_token_limit: int = DEFAULT_TOKEN_LIMIT,
        count_tokens: Optional[Callable[[str], int]] = None,
    ):
        if default_token_limit <= 0:
            raise InvalidRequestError("token limit must be > 0", {"token_limit": default_token_limit})
        self.store = store
        self.default_token_limit = default_token_limit
        self._count_tokens = count_tokens or estimate_tokens

    def resolve(self, key: str) -> Session:
        """Look ``key`` up as a session id, then as a project key."""
        session = self.store.get(key)
        if session is not None:
            return session
        session_id = self.store.lookup_active_session_id(key)
        if session_id is not None:
            session = self.store.get(session_id)
            if session is not None:
                return session
        raise SessionNotFoundError(key)

    def _active_session(self, project_key: str) -> Optional[Session]:
        # Project index only: a session id passed as project_key resumes nothing.
        session_id = self.store.lookup_active_session_id(project_key)
        if session_id is None:
            return None
        session = self.store.get(session_id)
        if session is None or session.completed:
            return None
        return session

    def start_or_resume(
        self,
        project_key: str,
        files: Optional[Sequence[str]] = None,
        token_limit: Optional[int] = None,
        force_new: bool = False,
    ) -> StartResult:
        if not force_new:
            session = self._active_session(project_key)
            if session is not None:
                return StartResult(status=ReviewStatus.RESUMED, session=self._resume(session))

        # Duplicate paths: first occurrence wins, order preserved.
        paths = list(dict.fromkeys(files or []))
        if not paths:
            raise NoFilesError()
        limit = self.default_token_limit if token_limit is None else token_limit
        if limit <= 0:
            raise InvalidRequestError("token limit must be > 0", {"token_limit": limit})

        session = self.store.create(project_key, paths, limit)
        logger.info("Created session %s for %s with %d file(s)", session.id, project_key, len(paths))
        return StartResult(status=ReviewStatus.CREATED, session=session)

    def _resume(self, session: Session) -> Session:
        if session.tokenizer != TOKENIZER_ENCODING:
            logger.warning(
                "Session %s was costed with %s, now counting with %s",
                session.id, session.tokenizer, TOKENIZER_ENCODING,
            )
        # Only the window resets; lifetime totals and per-file progress stay.
        session.current_window_token_count = 0
        self.store.save(session)
        logger.info("Resumed session %s (%d pending)", session.id, len(session.pending_files))
        return session

    def next_file(self, key: str) -> NextFileResult:
        session = self.resolve(key)
        pending = session.pending_files

        # Budget before traversal: an over-budget window hands out nothing.
        if session.exceeds_limit:
            status = (
                ReviewStatus.WINDOW_EXCEEDED_PENDING if pending
                else ReviewStatus.WINDOW_EXCEEDED_ALL_REVIEWED
            )
            return NextFileResult(status=status, session=session)

        if not pending:
            return NextFileResult(status=ReviewStatus.COMPLETED, session=session)
        return NextFileResult(status=ReviewStatus.SUCCESS, session=session, file=pending[0])

    def _content_tokens(self, session: Session, entry: FileEntry) -> int:
        try:
            content = read_text(Path(session.project_key), entry.path)
        except ContentReadError as e:
            logger.warning("Charging 0 content tokens for %s: %s", entry.path, e)
            return 0
        return self._count_tokens(content)

    def submit_review(
        self,
        key: str,
        file_path: str,
        agent_review: str,
        feedback: str = "",
    ) -> SubmitResult:
        session = self.resolve(key)
        entry = session.find_file(file_path)
        if entry is None:
            raise FileNotInSessionError(session.id, file_path)

        entry.reviewed = True
        entry.feedback = feedback
        if agent_review:
            entry.agent_review = agent_review

        cost = (
            self._content_tokens(session, entry)
            + self._count_tokens(feedback)
            + (self._count_tokens(agent_review) if agent_review else 0)
        )
        entry.token_count = cost
        session.total_token_count = sum(f.token_count or 0 for f in session.files)
        session.current_window_token_count += cost

        self.store.save(session)
        logger.debug(
            "Reviewed %s in %s: %d tokens, window %d/%d",
            file_path, session.id, cost, session.current_window_token_count, session.token_limit,
        )
        return SubmitResult(session=session, exceeds_limit=session.exceeds_limit)

    def complete(self, key: str) -> Session:
        session = self.resolve(key)
        if session.completed:
            return session
        pending = len(session.pending_files)
        if pending:
            raise PendingFilesError(session.id, pending)
        session.completed = True
        self.store.save(session)
        logger.info("Completed session %s", session.id)
        return session

    def report(self, key: str) -> str:
        return format_report(self.resolve(key))
