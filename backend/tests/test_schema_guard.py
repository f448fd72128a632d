from __future__ import annotations

import logging

import pytest
from sqlalchemy import create_engine, text

from projectboard import main
from projectboard.core.config import settings
from projectboard.main import _build_schema_error_message, validate_dev_schema


def test_validate_dev_schema_logs_and_returns_blocked_result_in_dev_mode(tmp_path, caplog, monkeypatch):
    db_path = tmp_path / "legacy.db"
    engine = create_engine(f"sqlite:///{db_path}", connect_args={"check_same_thread": False})

    with engine.begin() as connection:
        connection.execute(text("CREATE TABLE alembic_version (version_num VARCHAR(64) NOT NULL)"))
        connection.execute(text("INSERT INTO alembic_version (version_num) VALUES ('0001_create_core_tables')"))
        connection.execute(
            text(
                "CREATE TABLE projects ("
                "id INTEGER PRIMARY KEY, "
                "project_number VARCHAR(64) NOT NULL, "
                "name VARCHAR(255) NOT NULL"
                ")"
            )
        )

    monkeypatch.setattr(settings, "dev_mode", True)
    monkeypatch.setattr(main, "_schema_error_already_logged", False)
    with caplog.at_level(logging.ERROR, logger="projectboard.request"):
        result = validate_dev_schema(engine)

    assert not result.is_valid
    assert result.missing_revisions == ["0002_add_phase_visibility_and_task_links"]
    assert "ship_date" in result.missing_by_table["projects"]
    assert "show_qc_phase" in result.missing_by_table["projects"]
    assert "tasks" not in result.missing_by_table
    message = _build_schema_error_message(result)
    assert "================= DATABASE SCHEMA ERROR =================" in message
    assert "Database URL:" in message
    assert "Missing Alembic revision(s): 0002_add_phase_visibility_and_task_links" in message
    assert "- projects: delivery_date" in message
    assert "Fix from the backend directory:" in message
    assert "alembic upgrade head" in message
    assert "Application is running in BLOCKED MODE until migrations are applied." in message
    assert any("DATABASE SCHEMA ERROR" in record.message for record in caplog.records)


def test_validate_dev_schema_accepts_database_at_head(tmp_path):
    db_path = tmp_path / "current.db"
    engine = create_engine(f"sqlite:///{db_path}", connect_args={"check_same_thread": False})

    with engine.begin() as connection:
        connection.execute(text("CREATE TABLE alembic_version (version_num VARCHAR(64) NOT NULL)"))
        connection.execute(
            text("INSERT INTO alembic_version (version_num) VALUES ('0002_add_phase_visibility_and_task_links')")
        )

    result = validate_dev_schema(engine)

    assert result.is_valid
    assert result.missing_revisions == []


def test_validate_dev_schema_raises_outside_dev_mode(tmp_path, monkeypatch):
    db_path = tmp_path / "legacy_non_dev.db"
    engine = create_engine(f"sqlite:///{db_path}", connect_args={"check_same_thread": False})

    with engine.begin() as connection:
        connection.execute(text("CREATE TABLE projects (id INTEGER PRIMARY KEY, name VARCHAR(255) NOT NULL)"))

    monkeypatch.setattr(settings, "dev_mode", False)
    with pytest.raises(RuntimeError, match="BLOCKED MODE"):
        validate_dev_schema(engine)
