import copy
from datetime import datetime, timezone

from legalsift.database.repositories.base import BaseDocumentRepository
from legalsift.documents.models import DocumentAnalysis, DocumentRecord, SharedAccess
from legalsift.exceptions import DocumentNotFoundError


class InMemoryDocumentRepository(BaseDocumentRepository):
    """Process-local document store for development runs and tests.

    Records are copied on the way in and out so callers never share state
    with the store.
    """

    def __init__(self) -> None:
        self._records: dict[str, DocumentRecord] = {}

    def create(self, record: DocumentRecord) -> DocumentRecord:
        now = datetime.now(timezone.utc)
        stored = copy.deepcopy(record)
        stored.created_at = now
        stored.updated_at = now
        self._records[stored.id] = stored
        return copy.deepcopy(stored)

    def find_active(self, document_id: str) -> DocumentRecord:
        return copy.deepcopy(self._get_active(document_id))

    def list_active_by_owner(
        self,
        owner_id: str,
        *,
        document_type: str | None = None,
        case_id: str | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[DocumentRecord]:
        # insertion order is creation order
        newest_first = list(reversed(self._filter(owner_id, document_type, case_id)))
        return [copy.deepcopy(r) for r in newest_first[offset:offset + limit]]

    def count_active_by_owner(
        self,
        owner_id: str,
        *,
        document_type: str | None = None,
        case_id: str | None = None,
    ) -> int:
        return len(self._filter(owner_id, document_type, case_id))

    def update_analysis(self, document_id: str, analysis: DocumentAnalysis) -> None:
        record = self._get_active(document_id)
        record.analysis = copy.deepcopy(analysis)
        record.updated_at = datetime.now(timezone.utc)

    def update_shared_with(self, document_id: str, shared_with: list[SharedAccess]) -> None:
        record = self._get_active(document_id)
        record.shared_with = list(shared_with)
        record.updated_at = datetime.now(timezone.utc)

    def deactivate(self, document_id: str) -> None:
        record = self._get_active(document_id)
        record.is_active = False
        record.updated_at = datetime.now(timezone.utc)

    def deactivate_by_case(self, case_id: str) -> int:
        records = [r for r in self._records.values() if r.is_active and r.case_id == case_id]
        now = datetime.now(timezone.utc)
        for record in records:
            record.is_active = False
            record.updated_at = now
        return len(records)

    def _get_active(self, document_id: str) -> DocumentRecord:
        record = self._records.get(document_id)
        if record is None or not record.is_active:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return record

    def _filter(
        self,
        owner_id: str,
        document_type: str | None,
        case_id: str | None,
    ) -> list[DocumentRecord]:
        return [
            r
            for r in self._records.values()
            if r.is_active
            and r.owner_id == owner_id
            and (document_type is None or r.document_type == document_type)
            and (case_id is None or r.case_id == case_id)
        ]
