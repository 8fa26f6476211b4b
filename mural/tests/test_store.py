"""
Tests for mural/store.py and the repositories on top of it.
"""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from mural.models.post import Post
from mural.repos.comment_repo import CommentRepo
from mural.repos.post_repo import PostRepo
from mural.services.mutations import MutationService
from mural.store import JsonStore, init_store


class TestInit:
    def test_creates_empty_arrays(self, data_dir):
        assert json.loads((data_dir / "posts.json").read_text()) == []
        assert json.loads((data_dir / "comments.json").read_text()) == []

    def test_existing_files_untouched(self, data_dir):
        (data_dir / "posts.json").write_text('[{"id": "keep"}]')
        init_store()
        assert json.loads((data_dir / "posts.json").read_text()) == [{"id": "keep"}]

    def test_creates_missing_directory(self, tmp_path):
        store = JsonStore(tmp_path / "nested" / "dir" / "things.json")
        store.ensure()
        assert store.read() == []


class TestRead:
    def test_missing_file_is_empty(self, tmp_path):
        assert JsonStore(tmp_path / "absent.json").read() == []

    def test_invalid_json_is_empty_and_logged(self, tmp_path, caplog):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        assert JsonStore(path).read() == []
        assert "treating as empty" in caplog.text

    def test_non_array_is_empty(self, tmp_path):
        path = tmp_path / "object.json"
        path.write_text('{"id": "1"}')
        assert JsonStore(path).read() == []

    def test_non_object_entries_dropped(self, tmp_path):
        path = tmp_path / "mixed.json"
        path.write_text('[{"id": "1"}, 2, "x"]')
        assert JsonStore(path).read() == [{"id": "1"}]


class TestWrite:
    def test_round_trip(self, tmp_path):
        records = [
            {
                "id": "1",
                "title": "Olá",
                "content": "<p>çà</p>",
                "tags": ["a", "b"],
                "createdAt": "2024-01-01T12:30:00.123Z",
                "likes": 3,
                "dislikes": 0,
            }
        ]
        store = JsonStore(tmp_path / "posts.json")
        store.write(records)
        assert store.read() == records

    def test_pretty_printed_two_spaces(self, tmp_path):
        store = JsonStore(tmp_path / "posts.json")
        store.write([{"id": "1"}])
        assert (tmp_path / "posts.json").read_text() == '[\n  {\n    "id": "1"\n  }\n]'

    def test_write_errors_propagate(self, tmp_path):
        store = JsonStore(tmp_path / "missing-dir" / "posts.json")
        with pytest.raises(OSError):
            store.write([])

    def test_write_leaves_no_temp_files(self, tmp_path):
        store = JsonStore(tmp_path / "posts.json")
        store.write([{"id": "1"}])
        store.write([{"id": "2"}])
        assert [p.name for p in tmp_path.iterdir()] == ["posts.json"]

    def test_failed_replace_keeps_previous_content(self, tmp_path):
        store = JsonStore(tmp_path / "posts.json")
        store.write([{"id": "old"}])
        with patch("mural.store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                store.write([{"id": "new"}])
        assert store.read() == [{"id": "old"}]
        assert [p.name for p in tmp_path.iterdir()] == ["posts.json"]


class TestPostRepo:
    def test_round_trip_through_models(self, data_dir):
        post = Post(
            id="1",
            title="t",
            content="c",
            tags=["x", "y"],
            created_at="2024-02-03T04:05:06.789Z",
            likes=2,
            dislikes=1,
        )
        repo = PostRepo()
        repo.save_all([post])
        assert repo.list_all() == [post]

    def test_unknown_keys_preserved(self, data_dir):
        record = {"id": "1", "title": "t", "content": "c", "tags": [], "createdAt": "2024-01-01", "pinned": True}
        (data_dir / "posts.json").write_text(json.dumps([record]))
        repo = PostRepo()
        repo.save_all(repo.list_all())
        stored = json.loads((data_dir / "posts.json").read_text())
        assert stored[0]["pinned"] is True

    def test_malformed_records_skipped(self, data_dir, caplog):
        records = [
            {"id": "ok", "title": "t", "content": "c", "createdAt": "2024-01-01"},
            {"title": "no id"},
        ]
        (data_dir / "posts.json").write_text(json.dumps(records))
        assert [p.id for p in PostRepo().list_all()] == ["ok"]
        assert "skipping malformed record" in caplog.text

    def test_malformed_records_survive_unrelated_write(self, data_dir):
        bad_title = {"id": "bad-title", "title": 42, "content": "c", "createdAt": "2024-01-01"}
        bad_likes = {"id": "bad-likes", "title": "t", "content": "c", "createdAt": "2024-01-01", "likes": -5}
        good = {"id": "ok", "title": "t", "content": "c", "createdAt": "2024-01-01"}
        (data_dir / "posts.json").write_text(json.dumps([bad_title, good, bad_likes]))

        MutationService().like_post("ok")

        stored = json.loads((data_dir / "posts.json").read_text())
        assert [r["id"] for r in stored] == ["ok", "bad-title", "bad-likes"]
        assert stored[0]["likes"] == 1
        assert stored[1] == bad_title
        assert stored[2] == bad_likes


class TestCommentRepo:
    def test_malformed_records_survive_unrelated_write(self, data_dir, caplog):
        broken = {"id": "broken", "postId": "p1", "createdAt": "2024-01-01"}
        (data_dir / "comments.json").write_text(json.dumps([broken]))

        MutationService().create_comment("p1", "hello")

        stored = json.loads((data_dir / "comments.json").read_text())
        assert broken in stored
        assert len(stored) == 2
        assert [c.text for c in CommentRepo().list_all()] == ["<p>hello</p>"]
        assert "keeping 1 unparsed records" in caplog.text
