import os
import uuid
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from legalsift.config.settings import Settings
from legalsift.database.connection import (
    apply_schema,
    build_conninfo,
    close_pool,
    get_connection,
    init_pool,
)
from legalsift.database.repositories.postgres_repository import PostgresDocumentRepository
from legalsift.documents.models import DocumentRecord


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "legalsift_test")
    return Settings()


def _check_reachable(settings: Settings) -> None:
    with psycopg.connect(build_conninfo(settings), connect_timeout=3):
        pass


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        _check_reachable(test_settings)
    except psycopg.Error as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to point at one.")
    init_pool(test_settings)
    try:
        apply_schema()
        yield
    finally:
        close_pool()


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[str], None, None]:
    created: list[str] = []
    yield created
    if not created:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM documents WHERE id = ANY(%s::uuid[])", (created,))
        conn.commit()


@pytest.fixture
def repo(integration_pool: None) -> PostgresDocumentRepository:
    return PostgresDocumentRepository()


@pytest.fixture
def make_record(
    integration_cleanup: list[str],
) -> Any:
    owner_id = f"owner-{uuid.uuid4()}"

    def _make(**overrides: Any) -> DocumentRecord:
        document_id = str(uuid.uuid4())
        fields: dict[str, Any] = {
            "id": document_id,
            "owner_id": owner_id,
            "document_type": "contract",
            "file_name": "contract.txt",
            "file_format": "txt",
            "file_size": 48,
            "storage_url": f"file:///files/{owner_id}/{document_id}.txt",
            "storage_id": f"{owner_id}/{document_id}.txt",
            "extracted_text": "This lease may be terminated with 30 days notice",
        }
        fields.update(overrides)
        integration_cleanup.append(fields["id"])
        return DocumentRecord(**fields)

    return _make
