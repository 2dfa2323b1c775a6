"""
Review session records.

Persisted as JSON with camelCase keys. ``projectFolder`` and
``currentSessionTokenCount`` keep the key names of earlier session files.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from review_toolkit.tokens import TOKENIZER_ENCODING

_RECORD_CONFIG = {"populate_by_name": True, "alias_generator": to_camel}


class FileEntry(BaseModel):
    path: str
    reviewed: bool = False
    feedback: str = ""
    agent_review: Optional[str] = None
    token_count: Optional[int] = Field(default=None, ge=0)

    model_config = _RECORD_CONFIG


class Session(BaseModel):
    id: str
    project_key: str = Field(alias="projectFolder")
    files: list[FileEntry] = []
    created_at: str = ""
    updated_at: str = ""
    total_token_count: int = Field(default=0, ge=0)
    current_window_token_count: int = Field(default=0, ge=0, alias="currentSessionTokenCount")
    token_limit: int = Field(gt=0)
    completed: bool = False
    tokenizer: str = TOKENIZER_ENCODING

    model_config = _RECORD_CONFIG

    @property
    def pending_files(self) -> list[FileEntry]:
        return [f for f in self.files if not f.reviewed]

    @property
    def reviewed_files(self) -> list[FileEntry]:
        return [f for f in self.files if f.reviewed]

    @property
    def exceeds_limit(self) -> bool:
        """True once the current window has used more than ``token_limit``."""
        return self.current_window_token_count > self.token_limit

    def find_file(self, path: str) -> Optional[FileEntry]:
        for entry in self.files:
            if entry.path == path:
                return entry
        return None
