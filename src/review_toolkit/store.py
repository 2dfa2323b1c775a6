"""
Session store: one JSON file per session plus a project index.

Layout under the storage root::

    <root>/<session id>.json
    <root>/project-index.json      {project key: session id}

Reads never raise: a missing, unreadable or malformed record is reported as
not found. There is no locking; callers are assumed to be a single sequential
writer, and a second writer between ``get`` and ``save`` can lose an update.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from review_toolkit.models.session import FileEntry, Session

logger = logging.getLogger(__name__)

INDEX_FILE = "project-index.json"
_SESSION_ID_RE = re.compile(r"^session_[A-Za-z0-9_]+$")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_session_id() -> str:
    return f"session_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"


class SessionStore:
    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).expanduser()

    @property
    def index_path(self) -> Path:
        return self.root / INDEX_FILE

    def _session_path(self, session_id: str) -> Optional[Path]:
        if not _SESSION_ID_RE.match(session_id):
            return None
        return self.root / f"{session_id}.json"

    def _write_json(self, target: Path, payload: str) -> None:
        """Write to a temp file beside ``target`` and rename it into place."""
        self.root.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(suffix=".tmp", prefix=".write_", dir=self.root)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(temp_path, target)
        except OSError:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise
        logger.debug("wrote %s", target)

    # -- project index -------------------------------------------------------

    def _read_index(self) -> dict[str, str]:
        try:
            index = json.loads(self.index_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable project index %s: %s", self.index_path, e)
            return {}
        if not isinstance(index, dict):
            logger.warning("Ignoring malformed project index %s", self.index_path)
            return {}
        return index

    def _set_index(self, project_key: str, session_id: str) -> None:
        index = self._read_index()
        index[project_key] = session_id
        self._write_json(self.index_path, json.dumps(index, indent=2))

    def lookup_active_session_id(self, project_key: str) -> Optional[str]:
        """Session id the index holds for ``project_key``. Completion is not checked."""
        session_id = self._read_index().get(project_key)
        return session_id if isinstance(session_id, str) else None

    # -- sessions ------------------------------------------------------------

    def create(self, project_key: str, files: list[str], token_limit: int) -> Session:
        now = _now()
        session = Session(
            id=new_session_id(),
            project_key=project_key,
            files=[FileEntry(path=path) for path in files],
            created_at=now,
            updated_at=now,
            token_limit=token_limit,
        )
        self.save(session)
        self._set_index(project_key, session.id)
        return session

    def get(self, session_id: str) -> Optional[Session]:
        path = self._session_path(session_id)
        if path is None:
            return None
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read session %s: %s", session_id, e)
            return None
        try:
            return Session.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Ignoring corrupt session record %s: %s", path, e)
            return None

    def save(self, session: Session) -> None:
        """Overwrite the record for ``session.id``. Last writer wins."""
        path = self._session_path(session.id)
        if path is None:
            raise ValueError(f"Invalid session id: {session.id!r}")
        session.updated_at = _now()
        self._write_json(path, session.model_dump_json(by_alias=True, indent=2))
