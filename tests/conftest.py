import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(scope="session", autouse=True)
def setup_test_db_url():
    test_db = Path("./test.db")
    if test_db.exists():
        test_db.unlink()
    os.environ["DATABASE_URL"] = "sqlite:///./test.db"
    os.environ["ENV"] = "test"
    os.environ["API_AUTH_ENABLED"] = "false"
    os.environ["OBSERVABILITY_ENABLED"] = "false"
    os.environ["LEGACY_STATUS_ALIASES"] = ""

    from app.core.config import get_settings
    from app.db.session import reset_session_for_tests
    from app.state_machine.content_status import get_status_engine

    get_settings.cache_clear()
    get_status_engine.cache_clear()
    reset_session_for_tests()

    yield

    reset_session_for_tests()
    if test_db.exists():
        test_db.unlink()


@pytest.fixture
def client(setup_test_db_url):
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session(client):
    from app.db.session import get_session_maker

    session = get_session_maker()()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def engine():
    from app.state_machine.content_status import build_status_engine

    return build_status_engine()
