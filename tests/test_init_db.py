# tests/test_init_db.py
from __future__ import annotations

from sqlalchemy.exc import OperationalError

from study_sns.scripts import init_db


def test_creates_tables(monkeypatch) -> None:
    calls: list[str] = []
    monkeypatch.setattr(init_db, "create_tables", lambda: calls.append("create"))
    monkeypatch.setattr(init_db, "drop_tables", lambda: calls.append("drop"))

    assert init_db.main([]) == 0
    assert calls == ["create"]


def test_drop_tables_first(monkeypatch) -> None:
    calls: list[str] = []
    monkeypatch.setattr(init_db, "create_tables", lambda: calls.append("create"))
    monkeypatch.setattr(init_db, "drop_tables", lambda: calls.append("drop"))

    assert init_db.main(["--drop-tables"]) == 0
    assert calls == ["drop", "create"]


def test_database_error_returns_failure(monkeypatch) -> None:
    def _fail() -> None:
        raise OperationalError("CREATE TABLE users", {}, Exception("disk I/O error"))

    monkeypatch.setattr(init_db, "create_tables", _fail)

    assert init_db.main([]) == 1
