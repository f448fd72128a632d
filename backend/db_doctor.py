from __future__ import annotations

from sqlalchemy import inspect, text

from projectboard.core.config import settings
from projectboard.db.session import get_engine
from projectboard.main import REQUIRED_COLUMNS_BY_TABLE


def _get_columns(inspector, table_name: str) -> list[str]:
    if not inspector.has_table(table_name):
        return []
    return [column["name"] for column in inspector.get_columns(table_name)]


def main() -> None:
    engine = get_engine()
    print(f"database_uri={settings.sqlalchemy_database_uri}")

    inspector = inspect(engine)
    for table_name, required_columns in sorted(REQUIRED_COLUMNS_BY_TABLE.items()):
        columns = _get_columns(inspector, table_name)
        if not columns:
            print(f"{table_name}.columns=<missing table>")
            continue
        missing = sorted(required_columns - set(columns))
        print(f"{table_name}.columns={columns}")
        print(f"{table_name}.missing={missing if missing else '<none>'}")

    if inspector.has_table("alembic_version"):
        with engine.connect() as connection:
            rows = connection.execute(text("SELECT version_num FROM alembic_version")).fetchall()
        revisions = [str(row[0]) for row in rows]
        print(f"alembic_version={revisions if revisions else '<empty>'}")
    else:
        print("alembic_version=<missing table>")


if __name__ == "__main__":
    main()
