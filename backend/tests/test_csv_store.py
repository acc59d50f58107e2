import pytest
from fastapi.testclient import TestClient
import app.main as main_module
from app.storage.csv_store import CsvStore

HEADER_LINE = '"User ID","Full Name","Email","Role","Department","Year","Date Created","Is Active","Last Login"\n'


def test_initialize_creates_header(store):
    assert not store.exists()
    assert store.initialize() is True
    assert store.read_text() == HEADER_LINE


def test_initialize_creates_parent_dirs(tmp_path):
    store = CsvStore(tmp_path / "data" / "nested" / "users.csv")
    store.initialize()
    assert store.read_text() == HEADER_LINE


def test_initialize_twice_keeps_records(store):
    store.initialize()
    store.append_row(["1", "Ada", "ada@example.com", "admin", "N/A", "N/A", "x", "No", "N/A"])
    before = store.read_text()

    assert store.initialize() is False
    assert store.initialize() is False
    assert store.read_text() == before


def test_append_row(store):
    store.initialize()
    store.append_row(["1", "Ada", "ada@example.com"])
    store.append_row(["2", "Bob", "bob@example.com"])
    lines = store.read_text().splitlines()
    assert lines[1:] == ['"1","Ada","ada@example.com"', '"2","Bob","bob@example.com"']


def test_startup_initializes_store(tmp_path, monkeypatch):
    store = CsvStore(tmp_path / "users.csv")
    monkeypatch.setattr(main_module, "csv_store", store)

    with TestClient(main_module.app) as client:
        assert client.get("/health").json() == {"status": "healthy"}

    assert store.read_text() == HEADER_LINE


def test_startup_fails_when_store_cannot_be_created(tmp_path, monkeypatch):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    store = CsvStore(blocker / "users.csv")
    monkeypatch.setattr(main_module, "csv_store", store)

    with pytest.raises(Exception):
        with TestClient(main_module.app):
            pass

    assert not store.exists()
