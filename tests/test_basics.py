"""Basic unit tests for the review-toolkit package."""

from review_toolkit import (
    ContentReadError,
    FileNotInSessionError,
    InvalidRequestError,
    NoFilesError,
    PendingFilesError,
    ReviewEngine,
    ReviewStatus,
    ReviewToolkit,
    ReviewToolkitError,
    SessionNotFoundError,
    SessionStore,
    __version__,
)


def test_version():
    assert __version__ == "0.1.0"


def test_public_exports():
    assert ReviewToolkit is not None
    assert ReviewEngine is not None
    assert SessionStore is not None


def test_error_hierarchy():
    for cls in (
        SessionNotFoundError, FileNotInSessionError, NoFilesError,
        PendingFilesError, ContentReadError, InvalidRequestError,
    ):
        assert issubclass(cls, ReviewToolkitError)


def test_error_attributes():
    err = ReviewToolkitError(code="test_code", message="something broke")
    assert err.code == "test_code"
    assert str(err) == "something broke"
    assert err.details is None

    pending = PendingFilesError("session_1_abc", 3)
    assert pending.code == "pending_files"
    assert pending.pending_count == 3
    assert pending.details == {"session_id": "session_1_abc", "pending_count": 3}

    missing = SessionNotFoundError("/repo")
    assert missing.code == "session_not_found"
    assert missing.details == {"key": "/repo"}


def test_status_constants():
    assert ReviewStatus.CREATED == "created"
    assert ReviewStatus.RESUMED == "resumed"
    assert ReviewStatus.WINDOW_EXCEEDED_PENDING == "window_exceeded_pending"
    assert ReviewStatus.WINDOW_EXCEEDED_ALL_REVIEWED == "window_exceeded_all_reviewed"
    assert ReviewStatus.error("no_files") == "error:no_files"
