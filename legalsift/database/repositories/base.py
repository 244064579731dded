from abc import ABC, abstractmethod

from legalsift.documents.models import DocumentAnalysis, DocumentRecord, SharedAccess


class BaseDocumentRepository(ABC):
    """Persistence contract for document records.

    Every read sees active records only. Methods addressing a single document
    raise DocumentNotFoundError when it is missing or inactive.
    """

    @abstractmethod
    def create(self, record: DocumentRecord) -> DocumentRecord:
        """Insert a new record and return it with timestamps filled in."""

    @abstractmethod
    def find_active(self, document_id: str) -> DocumentRecord:
        """Fetch an active record by id."""

    @abstractmethod
    def list_active_by_owner(
        self,
        owner_id: str,
        *,
        document_type: str | None = None,
        case_id: str | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[DocumentRecord]:
        """Active records of one owner, newest first."""

    @abstractmethod
    def count_active_by_owner(
        self,
        owner_id: str,
        *,
        document_type: str | None = None,
        case_id: str | None = None,
    ) -> int:
        """Number of records list_active_by_owner would page through."""

    @abstractmethod
    def update_analysis(self, document_id: str, analysis: DocumentAnalysis) -> None:
        """Replace the stored analysis."""

    @abstractmethod
    def update_shared_with(self, document_id: str, shared_with: list[SharedAccess]) -> None:
        """Replace the sharing list."""

    @abstractmethod
    def deactivate(self, document_id: str) -> None:
        """Soft-delete one record."""

    @abstractmethod
    def deactivate_by_case(self, case_id: str) -> int:
        """Soft-delete every active record linked to a case; return the count."""
