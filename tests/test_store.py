"""Session store: persistence layout, index, corruption handling."""

import json

from review_toolkit.models.session import Session
from review_toolkit.store import INDEX_FILE, SessionStore


class TestCreateAndGet:
    def test_create_persists_session_and_index(self, store):
        session = store.create("/repo", ["a.py", "b.py"], 500)

        assert session.id.startswith("session_")
        assert len(session.files) == 2
        assert all(not f.reviewed and f.feedback == "" for f in session.files)
        assert session.created_at and session.updated_at

        loaded = store.get(session.id)
        assert loaded == session
        assert store.lookup_active_session_id("/repo") == session.id

    def test_create_keeps_input_order_and_duplicates(self, store):
        session = store.create("/repo", ["b.py", "a.py", "b.py"], 500)
        assert [f.path for f in session.files] == ["b.py", "a.py", "b.py"]

    def test_ids_are_unique(self, store):
        ids = {store.create("/repo", ["a.py"], 10).id for _ in range(20)}
        assert len(ids) == 20

    def test_index_points_at_latest_session(self, store):
        first = store.create("/repo", ["a.py"], 10)
        second = store.create("/repo", ["a.py"], 10)
        other = store.create("/other", ["x.py"], 10)

        assert store.lookup_active_session_id("/repo") == second.id
        assert store.lookup_active_session_id("/other") == other.id
        assert store.get(first.id) is not None

    def test_lookup_does_not_check_completion(self, store):
        session = store.create("/repo", ["a.py"], 10)
        session.completed = True
        store.save(session)
        assert store.lookup_active_session_id("/repo") == session.id


class TestSave:
    def test_save_overwrites_and_refreshes_updated_at(self, store):
        session = store.create("/repo", ["a.py"], 10)
        session.updated_at = ""
        session.files[0].reviewed = True
        store.save(session)

        assert session.updated_at != ""
        assert store.get(session.id).files[0].reviewed is True

    def test_no_temp_files_left_behind(self, store):
        store.create("/repo", ["a.py"], 10)
        names = sorted(p.name for p in store.root.iterdir())
        assert len(names) == 2
        assert INDEX_FILE in names

    def test_record_uses_camel_case_keys(self, store):
        session = store.create("/repo", ["a.py"], 10)
        session.files[0].agent_review = "fine"
        session.files[0].token_count = 4
        store.save(session)

        raw = json.loads((store.root / f"{session.id}.json").read_text())
        assert raw["projectFolder"] == "/repo"
        assert raw["currentSessionTokenCount"] == 0
        assert raw["totalTokenCount"] == 0
        assert raw["tokenLimit"] == 10
        assert raw["files"][0]["agentReview"] == "fine"
        assert raw["files"][0]["tokenCount"] == 4


class TestDegradedReads:
    def test_missing_session(self, store):
        assert store.get("session_1_deadbeef") is None
        assert store.lookup_active_session_id("/repo") is None

    def test_non_id_keys_never_touch_the_filesystem(self, store, tmp_path):
        (tmp_path / "outside.json").write_text("{}")
        assert store.get("/repo") is None
        assert store.get("../outside") is None
        assert store.get("") is None

    def test_corrupt_session_record(self, store):
        session = store.create("/repo", ["a.py"], 10)
        (store.root / f"{session.id}.json").write_text("{not json")
        assert store.get(session.id) is None

    def test_undecodable_session_record(self, store):
        session = store.create("/repo", ["a.py"], 10)
        (store.root / f"{session.id}.json").write_bytes(b"\xff\xfe\x81")
        assert store.get(session.id) is None

    def test_schema_invalid_session_record(self, store):
        session = store.create("/repo", ["a.py"], 10)
        (store.root / f"{session.id}.json").write_text(json.dumps({"id": session.id}))
        assert store.get(session.id) is None

    def test_corrupt_index(self, store):
        store.create("/repo", ["a.py"], 10)
        (store.root / INDEX_FILE).write_text("[1, 2")
        assert store.lookup_active_session_id("/repo") is None

        # A new session rebuilds the index.
        session = store.create("/repo", ["a.py"], 10)
        assert store.lookup_active_session_id("/repo") == session.id

    def test_reads_records_from_earlier_versions(self, tmp_path):
        root = tmp_path / "legacy"
        root.mkdir()
        record = {
            "id": "session_1700000000000_ab12c",
            "projectFolder": "/repo",
            "files": [
                {"path": "a.ts", "reviewed": True, "feedback": "", "agentReview": "ok", "tokenCount": 12},
                {"path": "b.ts", "reviewed": False, "feedback": ""},
            ],
            "createdAt": "2025-01-01T00:00:00.000Z",
            "updatedAt": "2025-01-01T00:00:00.000Z",
            "totalTokenCount": 12,
            "currentSessionTokenCount": 12,
            "tokenLimit": 10000,
            "completed": False,
        }
        (root / f"{record['id']}.json").write_text(json.dumps(record))
        (root / INDEX_FILE).write_text(json.dumps({"/repo": record["id"]}))

        store = SessionStore(root)
        session = store.get(store.lookup_active_session_id("/repo"))
        assert isinstance(session, Session)
        assert session.project_key == "/repo"
        assert session.current_window_token_count == 12
        assert session.files[0].agent_review == "ok"
        assert session.files[1].token_count is None
