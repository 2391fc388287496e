import os
from collections.abc import Callable, Generator
from importlib import resources
from typing import Any

import psycopg
import pytest
from psycopg.types.json import Jsonb

from docfiler.config.settings import Settings
from docfiler.database.connection import close_pool, get_connection, init_pool
from tests.conftest import make_metadata


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docfiler_test")
    return Settings(schedule_enabled=False)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        schema = resources.files("docfiler.database").joinpath("schema.sql").read_text()
        with get_connection() as conn:
            conn.execute(schema)
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


def _truncate() -> None:
    with get_connection() as conn:
        conn.execute("TRUNCATE document_upload_logs, documents RESTART IDENTITY")
        conn.commit()


@pytest.fixture(autouse=True)
def clean_tables(integration_pool: None) -> Generator[None, None, None]:
    _truncate()
    yield
    _truncate()


@pytest.fixture
def seed_document(db_conn: psycopg.Connection[Any]) -> Callable[..., int]:
    """Insert a documents row and return its id."""

    def _seed(
        file_name: str = "w2.pdf",
        metadata: Any = "default",
        status: str = "pending",
        enabled: bool = True,
        locked_minutes_ago: int | None = None,
    ) -> int:
        if metadata == "default":
            metadata = make_metadata()
        with db_conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO documents
                (file_name, file_url, metadata, upload_status, enabled, locked_at)
                VALUES (
                    %s, %s, %s, %s, %s,
                    CASE WHEN %s::int IS NULL THEN NULL
                         ELSE NOW() - make_interval(mins => %s::int) END
                )
                RETURNING id
                """,
                (
                    file_name,
                    f"https://uploads.s3.us-east-1.amazonaws.com/{file_name}",
                    None if metadata is None else Jsonb(metadata),
                    status,
                    enabled,
                    locked_minutes_ago,
                    locked_minutes_ago,
                ),
            )
            row = cur.fetchone()
            assert row is not None
        db_conn.commit()
        return int(row[0])

    return _seed
