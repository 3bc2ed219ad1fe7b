"""
Unit tests for SettingRepository

Runs against a temporary SQLite database
"""
import pytest

from taskboard.core.repositories.setting_repo import SettingRepository


@pytest.fixture
def repo(session_factory):
    db = session_factory()
    yield SettingRepository(db)
    db.close()


class TestSettingRepository:

    def test_get_missing_returns_none(self, repo):
        assert repo.get("nope") is None

    def test_put_and_get(self, repo):
        repo.put_many({"a": "1", "b": "2"})
        repo.commit()
        assert repo.get("a") == "1"
        assert repo.get_many(["a", "b", "c"]) == {"a": "1", "b": "2"}

    def test_put_overwrites(self, repo):
        repo.put_many({"a": "1"})
        repo.commit()
        repo.put_many({"a": "2"})
        repo.commit()
        assert repo.get("a") == "2"

    def test_delete_many_ignores_missing(self, repo):
        repo.put_many({"a": "1"})
        repo.commit()
        assert repo.delete_many(["a", "missing"]) == 1
        repo.commit()
        assert repo.get("a") is None
        assert repo.delete_many(["a"]) == 0

    def test_empty_key_lists(self, repo):
        assert repo.get_many([]) == {}
        assert repo.delete_many([]) == 0

    def test_rollback_discards_uncommitted(self, repo):
        repo.put_many({"a": "1"})
        repo.rollback()
        assert repo.get("a") is None
