from unittest.mock import MagicMock

from fastapi.testclient import TestClient

import backend.main
from backend.main import create_app


def test_tables_created_on_startup_not_on_construction(monkeypatch):
    init_db = MagicMock()
    monkeypatch.setattr(backend.main, "init_db", init_db)

    application = create_app()
    init_db.assert_not_called()

    with TestClient(application):
        init_db.assert_called_once_with()


def test_table_creation_can_be_skipped(monkeypatch):
    init_db = MagicMock()
    monkeypatch.setattr(backend.main, "init_db", init_db)

    with TestClient(create_app(create_tables=False)):
        pass

    init_db.assert_not_called()
