from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy import inspect, text

from projectboard.api import billing_milestones, manufacturing, projects, tasks
from projectboard.core.config import settings
from projectboard.db.session import engine

REQUIRED_COLUMNS_BY_TABLE = {
    "projects": {
        "ship_date",
        "delivery_date",
        "show_fab_phase",
        "show_paint_phase",
        "show_production_phase",
        "show_it_phase",
        "show_ntc_phase",
        "show_qc_phase",
    },
    "tasks": {"milestone_id", "completed_date"},
}


logger = logging.getLogger("projectboard.request")
_schema_error_already_logged = False


@dataclass(frozen=True)
class SchemaValidationResult:
    is_valid: bool
    database_url: str
    missing_revisions: list[str]
    missing_by_table: dict[str, list[str]]


@dataclass(frozen=True)
class BlockedModeState:
    is_blocked: bool
    database_url: str
    missing_revisions: list[str]
    missing_by_table: dict[str, list[str]]


ALLOWED_WHEN_BLOCKED = {"/blocked", "/health", "/docs", "/openapi.json"}


def configure_app_logging() -> None:
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logger.setLevel(log_level)
    logging.getLogger("projectboard.services").setLevel(log_level)

    if not any(isinstance(handler, logging.StreamHandler) and handler.stream is sys.stdout for handler in logger.handlers):
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        )
        logger.addHandler(stream_handler)

    logger.propagate = True


def _get_alembic_revisions(engine) -> list[str]:
    inspector = inspect(engine)
    if not inspector.has_table("alembic_version"):
        return []
    with engine.connect() as connection:
        rows = connection.execute(text("SELECT version_num FROM alembic_version")).fetchall()
    return [str(row[0]) for row in rows]


def _get_expected_alembic_revisions() -> list[str]:
    versions_dir = Path(__file__).resolve().parents[1] / "alembic" / "versions"
    return sorted({migration_file.stem for migration_file in versions_dir.glob("*.py")})


def _build_schema_error_message(result: SchemaValidationResult) -> str:
    missing_revisions_text = ", ".join(result.missing_revisions) if result.missing_revisions else "<none>"
    if result.missing_by_table:
        missing_columns_lines = [
            f"- {table_name}: {', '.join(columns)}"
            for table_name, columns in sorted(result.missing_by_table.items())
        ]
        missing_columns_text = "\n".join(missing_columns_lines)
    else:
        missing_columns_text = "<none>"

    return (
        "================= DATABASE SCHEMA ERROR =================\n"
        f"Database URL: {result.database_url}\n"
        f"Missing Alembic revision(s): {missing_revisions_text}\n"
        "Missing columns by table:\n"
        f"{missing_columns_text}\n"
        "Fix from the backend directory:\n"
        "alembic upgrade head\n"
        "Application is running in BLOCKED MODE until migrations are applied.\n"
        "========================================================="
    )


def _build_blocked_mode_html(state: BlockedModeState) -> str:
    missing_revisions = ", ".join(state.missing_revisions) if state.missing_revisions else "<none>"
    missing_columns = "".join(
        f"<li><strong>{table}</strong>: {', '.join(columns)}</li>"
        for table, columns in sorted(state.missing_by_table.items())
    )
    if not missing_columns:
        missing_columns = "<li>&lt;none&gt;</li>"

    return f"""<!doctype html>
<html lang=\"en\">
<head>
  <meta charset=\"utf-8\">
  <title>Projectboard Blocked Mode</title>
</head>
<body>
  <h1>Application is running in BLOCKED MODE</h1>
  <p>Database schema is out of date.</p>
  <h2>Details</h2>
  <ul>
    <li><strong>Database URL:</strong> {state.database_url}</li>
    <li><strong>Missing Alembic revision(s):</strong> {missing_revisions}</li>
  </ul>
  <h3>Missing columns per table</h3>
  <ul>
    {missing_columns}
  </ul>
  <h2>Fix from the backend directory</h2>
  <pre>alembic upgrade head</pre>
  <p><strong>Restart the backend after applying migrations.</strong></p>
</body>
</html>"""


def _log_schema_error_once(message: str) -> None:
    global _schema_error_already_logged
    if _schema_error_already_logged:
        return
    logger.error(message)
    _schema_error_already_logged = True


def validate_dev_schema(engine) -> SchemaValidationResult:
    inspector = inspect(engine)
    missing_by_table: dict[str, list[str]] = {}
    expected_revisions = _get_expected_alembic_revisions()
    detected_revisions = _get_alembic_revisions(engine)
    # alembic_version holds only the head, so every revision up to it counts as applied.
    if detected_revisions:
        head = max(detected_revisions)
        missing_revisions = [revision for revision in expected_revisions if revision > head]
    else:
        missing_revisions = expected_revisions

    for table_name, required_columns in REQUIRED_COLUMNS_BY_TABLE.items():
        if not inspector.has_table(table_name):
            continue
        existing_columns = {column["name"] for column in inspector.get_columns(table_name)}
        missing = sorted(required_columns - existing_columns)
        if missing:
            missing_by_table[table_name] = missing

    result = SchemaValidationResult(
        is_valid=not (missing_revisions or missing_by_table),
        database_url=str(engine.url),
        missing_revisions=missing_revisions,
        missing_by_table=missing_by_table,
    )
    if result.is_valid:
        return result

    error_message = _build_schema_error_message(result)
    if settings.dev_mode:
        _log_schema_error_once(error_message)
        return result

    raise RuntimeError(error_message)


def create_app() -> FastAPI:
    configure_app_logging()
    docs_url = "/docs" if settings.dev_mode else None
    openapi_url = "/openapi.json" if settings.dev_mode else None
    redoc_url = "/redoc" if settings.dev_mode else None
    app = FastAPI(
        title="Projectboard Backend",
        version="0.1.0",
        docs_url=docs_url,
        openapi_url=openapi_url,
        redoc_url=redoc_url,
    )

    app.state.blocked_mode = BlockedModeState(
        is_blocked=False,
        database_url=settings.sqlalchemy_database_uri,
        missing_revisions=[],
        missing_by_table={},
    )

    @app.middleware("http")
    async def schema_block_middleware(request: Request, call_next):
        blocked_state: BlockedModeState = app.state.blocked_mode
        if not blocked_state.is_blocked:
            return await call_next(request)
        if request.url.path in ALLOWED_WHEN_BLOCKED:
            return await call_next(request)
        return RedirectResponse(url="/blocked", status_code=307)

    app.include_router(projects.router)
    app.include_router(tasks.router)
    app.include_router(billing_milestones.router)
    app.include_router(manufacturing.bays_router)
    app.include_router(manufacturing.schedules_router)

    @app.get("/health")
    def healthcheck() -> dict[str, str]:
        blocked_state: BlockedModeState = app.state.blocked_mode
        if blocked_state.is_blocked:
            return {
                "status": "blocked",
                "reason": "pending migrations",
                "action_required": "alembic upgrade head",
            }
        return {"status": "ok"}

    @app.get("/blocked", response_class=HTMLResponse, include_in_schema=False)
    def blocked_page() -> HTMLResponse:
        blocked_state: BlockedModeState = app.state.blocked_mode
        return HTMLResponse(content=_build_blocked_mode_html(blocked_state), status_code=200)

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        started_at = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started_at) * 1000
            logger.info(
                "%s %s -> %s (%.2f ms)",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
            )
            return response
        except Exception:
            elapsed_ms = (time.perf_counter() - started_at) * 1000
            logger.exception(
                "%s %s -> 500 (%.2f ms)",
                request.method,
                request.url.path,
                elapsed_ms,
            )
            raise

    return app


app = create_app()


@app.on_event("startup")
def on_startup() -> None:
    schema_status = validate_dev_schema(engine)
    app.state.blocked_mode = BlockedModeState(
        is_blocked=settings.dev_mode and not schema_status.is_valid,
        database_url=schema_status.database_url,
        missing_revisions=schema_status.missing_revisions,
        missing_by_table=schema_status.missing_by_table,
    )
