import os
import pytest
import sys
import tempfile
import uuid
import json
from typing import Generator
from sqlmodel import Session, create_engine

# 1. Path setup: put the backend directory on sys.path
CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.dirname(CURRENT_DIR)
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import infra.database.connection as db_connection
from infra.database.schema import init_raw_db
from utils.seeding import seed_initial_data
from config import settings

GENERATED_LYRICS = "1. Dreams in the night, shining so bright\n   Chasing every star till the morning light"

@pytest.fixture(name="session", scope="function")
def session_fixture(mocker) -> Generator[Session, None, None]:
    """
    Build a fully isolated database (its own DuckDB file) for every test.
    """
    unique_id = str(uuid.uuid4())
    test_db_path = os.path.join(tempfile.gettempdir(), f"rapmania_test_{unique_id}.duckdb")

    os.environ["DB_PATH"] = test_db_path

    connect_args = {'config': {'worker_threads': 4, 'access_mode': 'READ_WRITE'}}
    engine = create_engine(
        f"duckdb:///{test_db_path}",
        connect_args=connect_args
    )

    # Swap the application-wide engine for the test engine
    db_connection.engine = engine
    db_connection.DB_PATH = test_db_path
    db_connection.DATABASE_URL = f"duckdb:///{test_db_path}"

    # 1. Tables and sequences
    init_raw_db(engine)

    # 2. Keep the app lifespan from touching the real database
    mocker.patch("infra.database.connection.init_db")
    mocker.patch("infra.database.connection.close_db")

    # 3. Default genres
    with Session(engine) as s:
        seed_initial_data(s)

    with Session(engine) as session:
        yield session

    engine.dispose()
    if os.path.exists(test_db_path):
        try:
            os.remove(test_db_path)
        except OSError:
            pass

@pytest.fixture(name="client")
def client_fixture(session: Session) -> Generator:
    """TestClient with the DB session dependency overridden"""
    from fastapi.testclient import TestClient
    from main import app
    from infra.database.connection import get_session

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()

@pytest.fixture(name="other_client")
def other_client_fixture(client) -> Generator:
    """A second browser: same app and database, separate cookie jar."""
    from fastapi.testclient import TestClient
    from main import app

    with TestClient(app) as other:
        yield other

@pytest.fixture(autouse=True)
def test_settings(monkeypatch):
    monkeypatch.setattr(settings, "LLM_PROVIDER", "google")
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "test-key")
    monkeypatch.setattr(settings, "LLM_MODEL", "gemini-1.5-pro")
    monkeypatch.setattr(settings, "LLM_FALLBACK_MODEL", "gemini-pro")
    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)
    return settings

@pytest.fixture(autouse=True)
def mock_external_deps(mocker):
    """
    Mock every outbound provider call globally.
    Returns the patched urlopen so tests can inspect or reconfigure it.
    """
    mock_response = mocker.MagicMock()
    mock_response.read.return_value = json.dumps({
        "candidates": [{"content": {"parts": [{"text": GENERATED_LYRICS}]}}]
    }).encode("utf-8")
    mock_response.__enter__.return_value = mock_response
    mock_urlopen = mocker.patch("urllib.request.urlopen", return_value=mock_response)

    mocker.patch("ollama.Client")

    return mock_urlopen

@pytest.fixture
def signup():
    """Sign up (and thereby sign in) a user on the given client."""
    def _signup(client, username: str, email: str = None, password: str = "secret123"):
        response = client.post("/api/auth/signup", json={
            "username": username,
            "email": email or f"{username}@example.com",
            "password": password,
        })
        assert response.status_code == 201, response.text
        return response.json()
    return _signup

@pytest.fixture
def create_rap(session: Session):
    """Insert a rap directly through the store."""
    from models import Genre, RapEntry
    from sqlmodel import select

    def _create_rap(user_id: int, topic: str = "dreams", content: str = "Some lyric content", is_public: bool = True, genre_name: str = "Hip-Hop"):
        genre = session.exec(select(Genre).where(Genre.name == genre_name)).first()
        rap = RapEntry(
            user_id=user_id,
            genre_id=genre.id,
            topic=topic,
            stanza_count=8,
            explicit=False,
            content=content,
            is_public=is_public,
        )
        session.add(rap)
        session.commit()
        session.refresh(rap)
        return rap
    return _create_rap
