"""Shared fixtures. Token costs use a word counter so tests never load tiktoken."""

from pathlib import Path

import pytest

from review_toolkit.engine import ReviewEngine
from review_toolkit.store import SessionStore


def count_words(text: str) -> int:
    return len(text.split())


def ten_per_line(text: str) -> list[int]:
    return [10 for _ in text.split("\n")]


@pytest.fixture
def project(tmp_path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def write_words(project):
    """Write a file of ``n`` words under the project root; returns its relative path."""

    def _write(name: str, n: int) -> str:
        path = project / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(" ".join(["w"] * n), encoding="utf-8")
        return name

    return _write


@pytest.fixture
def store(tmp_path) -> SessionStore:
    return SessionStore(tmp_path / "sessions")


@pytest.fixture
def engine(store) -> ReviewEngine:
    return ReviewEngine(store, default_token_limit=100, count_tokens=count_words)
