"""
Unit tests for CredentialStore

- save/load round trip
- partial entries treated as absent (and wiped)
- clear is idempotent
- unavailable storage reads as absent
"""
import itertools
import pytest
from unittest.mock import Mock
from sqlalchemy.exc import OperationalError

from taskboard.core.credential_store import (
    CredentialStore,
    CREDENTIAL_KEYS,
    MARKER_KEY,
    MARKER_VALUE,
    PASSWORD_KEY,
    USERNAME_KEY,
)
from taskboard.core.repositories.setting_repo import SettingRepository


def write_raw(session_factory, values):
    db = session_factory()
    repo = SettingRepository(db)
    repo.put_many(values)
    repo.commit()
    db.close()


def read_raw(session_factory):
    db = session_factory()
    values = SettingRepository(db).get_many(CREDENTIAL_KEYS)
    db.close()
    return values


class TestSaveLoad:

    def test_round_trip(self, credential_store):
        credential_store.save("alice", "secret1")
        creds = credential_store.load()
        assert creds.username == "alice"
        assert creds.password == "secret1"
        assert creds.session_marker is True

    def test_save_writes_all_three_entries(self, credential_store, session_factory):
        credential_store.save("alice", "secret1")
        assert read_raw(session_factory) == {
            USERNAME_KEY: "alice",
            PASSWORD_KEY: "secret1",
            MARKER_KEY: MARKER_VALUE
        }

    def test_save_is_idempotent(self, credential_store, session_factory):
        credential_store.save("alice", "secret1")
        credential_store.save("alice", "secret1")
        assert read_raw(session_factory)[USERNAME_KEY] == "alice"
        assert credential_store.load().username == "alice"

    def test_save_replaces_previous_user(self, credential_store):
        credential_store.save("alice", "secret1")
        credential_store.save("bob", "hunter22")
        creds = credential_store.load()
        assert (creds.username, creds.password) == ("bob", "hunter22")

    def test_load_empty_store(self, credential_store):
        assert credential_store.load() is None


ALL_ENTRIES = {USERNAME_KEY: "alice", PASSWORD_KEY: "secret1", MARKER_KEY: MARKER_VALUE}
PARTIAL_SUBSETS = [
    dict(combo)
    for size in (1, 2)
    for combo in itertools.combinations(ALL_ENTRIES.items(), size)
]


class TestPartialCredentials:

    @pytest.mark.parametrize("entries", PARTIAL_SUBSETS, ids=lambda e: "+".join(sorted(e)))
    def test_partial_is_absent_and_cleared(self, credential_store, session_factory, entries):
        write_raw(session_factory, entries)

        assert credential_store.load() is None
        assert read_raw(session_factory) == {}

    def test_empty_value_counts_as_missing(self, credential_store, session_factory):
        write_raw(session_factory, {**ALL_ENTRIES, PASSWORD_KEY: ""})
        assert credential_store.load() is None


class TestClear:

    def test_clear_removes_everything(self, credential_store, session_factory):
        credential_store.save("alice", "secret1")
        credential_store.clear()
        assert credential_store.load() is None
        assert read_raw(session_factory) == {}

    def test_clear_twice_is_noop(self, credential_store):
        credential_store.save("alice", "secret1")
        credential_store.clear()
        credential_store.clear()
        assert credential_store.load() is None

    def test_clear_on_empty_store(self, credential_store):
        credential_store.clear()


class TestUnavailableStorage:

    def test_load_treats_storage_error_as_absent(self):
        broken_session = Mock()
        broken_session.query.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))
        store = CredentialStore(lambda: broken_session)

        assert store.load() is None
        broken_session.rollback.assert_called_once()
        broken_session.close.assert_called_once()
