import uuid
from dataclasses import replace
from datetime import datetime, timezone

from legalsift.analysis.assessor import RiskAssessor
from legalsift.analysis.models import RiskAssessment
from legalsift.database.repositories.base import BaseDocumentRepository
from legalsift.documents.models import (
    DOCUMENT_TYPES,
    SHARE_PERMISSIONS,
    DocumentAnalysis,
    DocumentPage,
    DocumentRecord,
    SharedAccess,
    UploadedFile,
    UploadMetadata,
)
from legalsift.exceptions import (
    EmptyTextError,
    InvalidInputError,
    InvalidUploadError,
    NotAnalyzedError,
)
from legalsift.extraction.formats import normalize_format, resolve_format
from legalsift.extraction.text_extractor import TextExtractor
from legalsift.logging.logger import Log
from legalsift.translation.client import TranslationClient

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class DocumentRecordManager:
    """Owns the lifecycle of a document: stored -> analyzed -> inactive.

    Extraction problems never block an upload; the record is stored with
    empty text instead. AI operations fail only the call that triggered them
    and leave the stored record as it was. Nothing here locks: two concurrent
    analyses of one document both write, and the later write wins.
    """

    def __init__(
        self,
        *,
        repository: BaseDocumentRepository,
        extractor: TextExtractor,
        assessor: RiskAssessor,
        translator: TranslationClient,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
    ) -> None:
        self._repository = repository
        self._extractor = extractor
        self._assessor = assessor
        self._translator = translator
        self._max_upload_bytes = max_upload_bytes

    def create_from_upload(self, file: UploadedFile, metadata: UploadMetadata) -> DocumentRecord:
        """Extract text from an already-stored upload and persist a new record.

        Raises:
            InvalidUploadError: if the file is too large or the document type unknown.
            UnsupportedFormatError: if the file format cannot be handled.
        """
        if file.size > self._max_upload_bytes:
            raise InvalidUploadError(
                f"File size {file.size} bytes exceeds limit {self._max_upload_bytes}"
            )
        if metadata.document_type not in DOCUMENT_TYPES:
            raise InvalidUploadError(
                f"Unknown document type '{metadata.document_type}'. "
                f"Choose from: {sorted(DOCUMENT_TYPES)}"
            )
        if metadata.declared_format:
            file_format = normalize_format(metadata.declared_format)
        else:
            file_format = resolve_format(file.mime_type, file.filename)

        extracted_text = self._extract(file, file_format)

        record = self._repository.create(
            DocumentRecord(
                id=str(uuid.uuid4()),
                owner_id=metadata.owner_id,
                case_id=metadata.case_id,
                document_type=metadata.document_type,
                file_name=file.filename,
                file_format=file_format,
                file_size=file.size,
                storage_url=metadata.storage_url,
                storage_id=metadata.storage_id,
                extracted_text=extracted_text,
                tags=list(metadata.tags),
            )
        )
        Log.info(
            f"Created document {record.id} for owner {record.owner_id}: "
            f"{len(extracted_text)} chars extracted from {file_format}"
        )
        return record

    def get(self, document_id: str) -> DocumentRecord:
        return self._repository.find_active(document_id)

    def list_for_owner(
        self,
        owner_id: str,
        *,
        document_type: str | None = None,
        case_id: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> DocumentPage:
        page = max(page, 1)
        limit = max(limit, 1)
        documents = self._repository.list_active_by_owner(
            owner_id,
            document_type=document_type,
            case_id=case_id,
            limit=limit,
            offset=(page - 1) * limit,
        )
        total = self._repository.count_active_by_owner(
            owner_id, document_type=document_type, case_id=case_id
        )
        return DocumentPage(documents=documents, page=page, limit=limit, total=total)

    def analyze(self, document_id: str, language: str = "en") -> RiskAssessment:
        """Run a fresh risk assessment and store it over any previous one.

        Raises:
            DocumentNotFoundError: if the document is missing or inactive.
            EmptyTextError: if the document has no extracted text.
            UpstreamFailureError: if the completion service call fails.
        """
        record = self._repository.find_active(document_id)
        if not record.extracted_text:
            raise EmptyTextError("Document text not available for analysis")

        assessment = self._assessor.assess(record.extracted_text, record.document_type, language)
        analysis = DocumentAnalysis(
            assessment=assessment,
            analyzed_at=datetime.now(timezone.utc),
            language=language,
        )
        self._repository.update_analysis(document_id, analysis)
        Log.info(
            f"Analyzed document {document_id}: risk score {assessment.risk_score}, "
            f"outcome {assessment.outcome.value}"
        )
        return assessment

    def get_analysis(self, document_id: str) -> DocumentAnalysis:
        record = self._repository.find_active(document_id)
        if record.analysis is None:
            raise NotAnalyzedError(f"Document {document_id} has not been analyzed yet")
        return record.analysis

    def translate(self, document_id: str, target_language: str) -> str:
        record = self._with_text(document_id, "translation")
        return self._translator.translate(record.extracted_text, target_language)

    def summarize(self, document_id: str, language: str = "en") -> str:
        record = self._with_text(document_id, "summary")
        return self._translator.summarize(record.extracted_text, language)

    def voice_summary(self, document_id: str, language: str = "en") -> str:
        record = self._with_text(document_id, "voice summary")
        return self._translator.voice_summary(record.extracted_text, language)

    def share(self, document_id: str, user_id: str, permission: str = "read") -> DocumentRecord:
        """Grant or update one user's access entry. Enforcement happens elsewhere."""
        if permission not in SHARE_PERMISSIONS:
            raise InvalidInputError(
                f"Unknown permission '{permission}'. Choose from: {sorted(SHARE_PERMISSIONS)}"
            )
        record = self._repository.find_active(document_id)
        shared_with = [
            replace(s, permission=permission) if s.user_id == user_id else s
            for s in record.shared_with
        ]
        if not any(s.user_id == user_id for s in record.shared_with):
            shared_with.append(
                SharedAccess(
                    user_id=user_id,
                    permission=permission,
                    shared_at=datetime.now(timezone.utc),
                )
            )
        self._repository.update_shared_with(document_id, shared_with)
        record.shared_with = shared_with
        return record

    def soft_delete(self, document_id: str) -> None:
        """Mark a document inactive. Stored bytes and issued URLs are left alone."""
        self._repository.deactivate(document_id)
        Log.info(f"Soft-deleted document {document_id}")

    def soft_delete_for_case(self, case_id: str) -> int:
        count = self._repository.deactivate_by_case(case_id)
        Log.info(f"Soft-deleted {count} documents of case {case_id}")
        return count

    def _extract(self, file: UploadedFile, file_format: str) -> str:
        try:
            return self._extractor.extract(file.content, file_format)
        except Exception as exc:
            Log.warning(f"Text extraction crashed for {file.filename}, storing empty text: {exc}")
            return ""

    def _with_text(self, document_id: str, purpose: str) -> DocumentRecord:
        record = self._repository.find_active(document_id)
        if not record.extracted_text:
            raise EmptyTextError(f"Document text not available for {purpose}")
        return record
