import pytest
from fastapi.testclient import TestClient
from app.main import app
from app.api.dependencies import get_user_store
from app.storage.csv_store import CsvStore


@pytest.fixture
def store(tmp_path):
    """A store on a fresh path; the file does not exist yet"""
    return CsvStore(tmp_path / "users.csv")


@pytest.fixture
def client(store):
    # Not used as a context manager, so the lifespan initializer does not run
    app.dependency_overrides[get_user_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def ada():
    return {
        "id": "1",
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "role": "student",
        "year": "2",
        "dateCreated": "2024-01-15T10:30:00",
        "isActive": True,
    }
