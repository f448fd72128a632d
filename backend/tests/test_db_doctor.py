from __future__ import annotations

from sqlalchemy import create_engine, text

import db_doctor


def test_db_doctor_reports_missing_columns_and_revision(tmp_path, monkeypatch, capsys):
    engine = create_engine(f"sqlite:///{tmp_path / 'doctor.db'}")
    with engine.begin() as connection:
        connection.execute(text("CREATE TABLE projects (id INTEGER PRIMARY KEY, ship_date VARCHAR(32))"))
        connection.execute(text("CREATE TABLE alembic_version (version_num VARCHAR(64) NOT NULL)"))
        connection.execute(text("INSERT INTO alembic_version (version_num) VALUES ('0001_create_core_tables')"))
    monkeypatch.setattr(db_doctor, "get_engine", lambda: engine)

    db_doctor.main()

    output = capsys.readouterr().out
    assert "projects.columns=['id', 'ship_date']" in output
    assert "projects.missing=['delivery_date'," in output
    assert "tasks.columns=<missing table>" in output
    assert "alembic_version=['0001_create_core_tables']" in output
