"""
Pytest configuration and shared fixtures
"""
import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from taskboard.database import build_engine, build_session_factory, init_db
from taskboard.core.credential_store import CredentialStore
from taskboard.core.gateway import HttpGateway
from taskboard.core.services.session_service import SessionService
from tests.fakes import FakeBackend


@pytest.fixture(scope="function")
def test_engine(tmp_path):
    """Tạo test database engine (fresh SQLite file per test)"""
    engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_engine):
    return build_session_factory(test_engine)


@pytest.fixture
def credential_store(session_factory) -> CredentialStore:
    return CredentialStore(session_factory)


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def gateway(credential_store, fake_backend) -> HttpGateway:
    """Gateway wired to the fake backend instead of curl_cffi"""
    return HttpGateway(
        credential_store=credential_store,
        base_url=fake_backend.base_url,
        timeout=5,
        session_factory=fake_backend.session_factory
    )


@pytest.fixture
def session_service(gateway, credential_store) -> SessionService:
    return SessionService(gateway=gateway, credential_store=credential_store)
