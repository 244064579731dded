import uuid
from typing import Any

from psycopg import sql
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from legalsift.database.connection import get_connection
from legalsift.database.repositories.base import BaseDocumentRepository
from legalsift.documents.models import DocumentAnalysis, DocumentRecord, SharedAccess
from legalsift.exceptions import DocumentNotFoundError

_COLUMNS = """
    id, owner_id, case_id, document_type, file_name, file_format, file_size,
    storage_url, storage_id, extracted_text, ai_analysis, is_active,
    shared_with, tags, created_at, updated_at
"""


class PostgresDocumentRepository(BaseDocumentRepository):
    """Database operations for the documents table."""

    def create(self, record: DocumentRecord) -> DocumentRecord:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO documents
                    (id, owner_id, case_id, document_type, file_name, file_format,
                     file_size, storage_url, storage_id, extracted_text, shared_with, tags)
                    VALUES (%s::uuid, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (
                        record.id,
                        record.owner_id,
                        record.case_id,
                        record.document_type,
                        record.file_name,
                        record.file_format,
                        record.file_size,
                        record.storage_url,
                        record.storage_id,
                        record.extracted_text,
                        Jsonb([s.to_payload() for s in record.shared_with]),
                        list(record.tags),
                    ),
                )
                row = cur.fetchone()
            conn.commit()
        if row is None:
            raise RuntimeError(f"INSERT of document {record.id} returned no row")
        return _row_to_record(row)

    def find_active(self, document_id: str) -> DocumentRecord:
        """Fetch an active document by id.

        Raises:
            DocumentNotFoundError: if the id is unknown, malformed or inactive.
        """
        _require_uuid(document_id)
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM documents
                    WHERE id = %s::uuid AND is_active
                    """,
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return _row_to_record(row)

    def list_active_by_owner(
        self,
        owner_id: str,
        *,
        document_type: str | None = None,
        case_id: str | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[DocumentRecord]:
        where, params = _owner_filter(owner_id, document_type, case_id)
        query = sql.SQL(
            "SELECT " + _COLUMNS + " FROM documents WHERE {where} "
            "ORDER BY created_at DESC LIMIT %s OFFSET %s"
        ).format(where=where)
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, (*params, limit, offset))
                rows = cur.fetchall()
        return [_row_to_record(row) for row in rows]

    def count_active_by_owner(
        self,
        owner_id: str,
        *,
        document_type: str | None = None,
        case_id: str | None = None,
    ) -> int:
        where, params = _owner_filter(owner_id, document_type, case_id)
        query = sql.SQL("SELECT count(*) FROM documents WHERE {where}").format(where=where)
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                row = cur.fetchone()
        return int(row[0]) if row else 0

    def update_analysis(self, document_id: str, analysis: DocumentAnalysis) -> None:
        """Overwrite the analysis columns of an active document.

        Raises:
            DocumentNotFoundError: if no active document with this id exists.
        """
        self._update(
            document_id,
            """
            UPDATE documents
            SET ai_analysis = %s, is_analyzed = true, analyzed_at = %s, updated_at = NOW()
            WHERE id = %s::uuid AND is_active
            """,
            (Jsonb(analysis.to_payload()), analysis.analyzed_at, document_id),
        )

    def update_shared_with(self, document_id: str, shared_with: list[SharedAccess]) -> None:
        self._update(
            document_id,
            """
            UPDATE documents
            SET shared_with = %s, updated_at = NOW()
            WHERE id = %s::uuid AND is_active
            """,
            (Jsonb([s.to_payload() for s in shared_with]), document_id),
        )

    def deactivate(self, document_id: str) -> None:
        self._update(
            document_id,
            """
            UPDATE documents
            SET is_active = false, updated_at = NOW()
            WHERE id = %s::uuid AND is_active
            """,
            (document_id,),
        )

    def deactivate_by_case(self, case_id: str) -> int:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET is_active = false, updated_at = NOW()
                    WHERE case_id = %s AND is_active
                    """,
                    (case_id,),
                )
                count = cur.rowcount
            conn.commit()
        return count

    def _update(self, document_id: str, query: str, params: tuple[Any, ...]) -> None:
        _require_uuid(document_id)
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()


def _require_uuid(document_id: str) -> None:
    try:
        uuid.UUID(str(document_id))
    except ValueError as exc:
        raise DocumentNotFoundError(f"Document {document_id} not found") from exc


def _owner_filter(
    owner_id: str,
    document_type: str | None,
    case_id: str | None,
) -> tuple[sql.Composable, list[Any]]:
    clauses = [sql.SQL("owner_id = %s"), sql.SQL("is_active")]
    params: list[Any] = [owner_id]
    if document_type is not None:
        clauses.append(sql.SQL("document_type = %s"))
        params.append(document_type)
    if case_id is not None:
        clauses.append(sql.SQL("case_id = %s"))
        params.append(case_id)
    return sql.SQL(" AND ").join(clauses), params


def _row_to_record(row: dict[str, Any]) -> DocumentRecord:
    analysis = row["ai_analysis"]
    return DocumentRecord(
        id=str(row["id"]),
        owner_id=row["owner_id"],
        case_id=row["case_id"],
        document_type=row["document_type"],
        file_name=row["file_name"],
        file_format=row["file_format"],
        file_size=row["file_size"],
        storage_url=row["storage_url"],
        storage_id=row["storage_id"],
        extracted_text=row["extracted_text"],
        analysis=DocumentAnalysis.from_payload(analysis) if analysis else None,
        is_active=row["is_active"],
        shared_with=[SharedAccess.from_payload(s) for s in row["shared_with"] or []],
        tags=list(row["tags"] or []),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
