"""LegalSift document pipeline command line.

Usage:
    python -m legalsift.main init-db
    python -m legalsift.main upload PATH --owner ID --type TYPE [--case ID] [--format FMT] [--tag T ...]
    python -m legalsift.main show ID
    python -m legalsift.main list --owner ID [--type TYPE] [--case ID] [--page N] [--limit N]
    python -m legalsift.main analyze ID [--language CODE]
    python -m legalsift.main analysis ID
    python -m legalsift.main translate ID --to CODE
    python -m legalsift.main summarize ID [--language CODE] [--voice]
    python -m legalsift.main share ID --user ID [--permission read|comment|edit]
    python -m legalsift.main delete ID
    python -m legalsift.main delete-case CASE_ID

Output is JSON on stdout. Pipeline errors are printed as {"kind", "message"}
JSON on stderr with exit code 1.
"""

import argparse
import json
import mimetypes
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from legalsift.analysis.assessor import RiskAssessor
from legalsift.completion.config import CompletionConfig
from legalsift.completion.factory import CompletionClientFactory
from legalsift.config.settings import Settings
from legalsift.database.connection import apply_schema, close_pool, init_pool
from legalsift.database.repositories.base import BaseDocumentRepository
from legalsift.database.repositories.factory import DocumentRepositoryFactory
from legalsift.documents.manager import DocumentRecordManager
from legalsift.documents.models import UploadedFile, UploadMetadata
from legalsift.exceptions import InvalidInputError, LegalSiftError
from legalsift.extraction.factory import PdfExtractorFactory
from legalsift.extraction.text_extractor import TextExtractor
from legalsift.logging.logger import Log
from legalsift.storage.base import BaseStorage
from legalsift.storage.local import LocalFileStorage
from legalsift.translation.client import TranslationClient


def build_document_manager(
    settings: Settings,
    repository: BaseDocumentRepository | None = None,
) -> DocumentRecordManager:
    """Build a DocumentRecordManager with all collaborators taken from settings."""
    client = CompletionClientFactory.create(settings)
    model = settings.completion_model_name
    assessor = RiskAssessor(
        client=client,
        config=CompletionConfig(
            model=model,
            temperature=settings.analysis_temperature,
            max_tokens=settings.analysis_max_tokens,
        ),
    )
    translator = TranslationClient(
        client=client,
        translation_config=CompletionConfig(
            model=model,
            temperature=settings.translation_temperature,
            max_tokens=settings.translation_max_tokens,
        ),
        summary_config=CompletionConfig(
            model=model,
            temperature=settings.summary_temperature,
            max_tokens=settings.summary_max_tokens,
        ),
        voice_summary_config=CompletionConfig(
            model=model,
            temperature=settings.voice_summary_temperature,
            max_tokens=settings.voice_summary_max_tokens,
        ),
    )
    return DocumentRecordManager(
        repository=repository or DocumentRepositoryFactory.create(settings),
        extractor=TextExtractor(pdf_extractor=PdfExtractorFactory.create(settings)),
        assessor=assessor,
        translator=translator,
        max_upload_bytes=settings.max_upload_bytes,
    )


def upload_file(
    manager: DocumentRecordManager,
    storage: BaseStorage,
    path: Path,
    metadata: UploadMetadata,
) -> dict[str, object]:
    """Store a file from disk, then register it as a document."""
    content = path.read_bytes()
    mime_type, _ = mimetypes.guess_type(path.name)
    stored = storage.put(content, path.name, metadata.owner_id)
    metadata = replace(metadata, storage_url=stored.url, storage_id=stored.id)
    try:
        record = manager.create_from_upload(
            UploadedFile(content=content, filename=path.name, mime_type=mime_type or ""),
            metadata,
        )
    except Exception:
        storage.delete(stored.id)
        raise
    return record.to_dict()


def _build_parser(default_language: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="legalsift", description="LegalSift document pipeline")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create the documents table")

    upload = sub.add_parser("upload", help="Store and register a document")
    upload.add_argument("path", type=Path)
    upload.add_argument("--owner", required=True)
    upload.add_argument("--type", dest="document_type", required=True)
    upload.add_argument("--case", dest="case_id")
    upload.add_argument("--format", dest="declared_format")
    upload.add_argument("--tag", dest="tags", action="append", default=[])

    show = sub.add_parser("show", help="Print one document")
    show.add_argument("document_id")

    listing = sub.add_parser("list", help="List an owner's documents")
    listing.add_argument("--owner", required=True)
    listing.add_argument("--type", dest="document_type")
    listing.add_argument("--case", dest="case_id")
    listing.add_argument("--page", type=int, default=1)
    listing.add_argument("--limit", type=int, default=10)

    analyze = sub.add_parser("analyze", help="Run a risk assessment")
    analyze.add_argument("document_id")
    analyze.add_argument("--language", default=default_language)

    analysis = sub.add_parser("analysis", help="Print the stored risk assessment")
    analysis.add_argument("document_id")

    translate = sub.add_parser("translate", help="Translate the document text")
    translate.add_argument("document_id")
    translate.add_argument("--to", dest="target_language", required=True)

    summarize = sub.add_parser("summarize", help="Summarize the document text")
    summarize.add_argument("document_id")
    summarize.add_argument("--language", default=default_language)
    summarize.add_argument("--voice", action="store_true", help="Short spoken-style summary")

    share = sub.add_parser("share", help="Record that a document is shared with a user")
    share.add_argument("document_id")
    share.add_argument("--user", dest="user_id", required=True)
    share.add_argument("--permission", default="read")

    delete = sub.add_parser("delete", help="Soft-delete a document")
    delete.add_argument("document_id")

    delete_case = sub.add_parser("delete-case", help="Soft-delete every document of a case")
    delete_case.add_argument("case_id")

    return parser


def _dispatch(
    args: argparse.Namespace,
    manager: DocumentRecordManager,
    storage: BaseStorage,
) -> object:
    command = args.command
    if command == "upload":
        metadata = UploadMetadata(
            owner_id=args.owner,
            document_type=args.document_type,
            storage_url="",
            storage_id="",
            case_id=args.case_id,
            declared_format=args.declared_format,
            tags=tuple(args.tags),
        )
        return upload_file(manager, storage, args.path, metadata)
    if command == "show":
        return manager.get(args.document_id).to_dict()
    if command == "list":
        page = manager.list_for_owner(
            args.owner,
            document_type=args.document_type,
            case_id=args.case_id,
            page=args.page,
            limit=args.limit,
        )
        return {
            "documents": [d.to_dict() for d in page.documents],
            "pagination": {"current": page.page, "pages": page.pages, "total": page.total},
        }
    if command == "analyze":
        return manager.analyze(args.document_id, args.language).to_dict()
    if command == "analysis":
        return manager.get_analysis(args.document_id).to_dict()
    if command == "translate":
        return {
            "translatedText": manager.translate(args.document_id, args.target_language),
            "targetLanguage": args.target_language,
        }
    if command == "summarize":
        if args.voice:
            return {"summary": manager.voice_summary(args.document_id, args.language)}
        return {"summary": manager.summarize(args.document_id, args.language)}
    if command == "share":
        return manager.share(args.document_id, args.user_id, args.permission).to_dict()
    if command == "delete":
        manager.soft_delete(args.document_id)
        return {"deleted": args.document_id}
    if command == "delete-case":
        return {"deleted": manager.soft_delete_for_case(args.case_id)}
    raise ValueError(f"Unknown command '{command}'")


def main(argv: Sequence[str] | None = None, settings: Settings | None = None) -> int:
    """Entry point: parse args -> initialize pool -> build manager -> run one command."""
    settings = settings or Settings()
    Log.configure(settings.log_level, stream=sys.stderr)
    args = _build_parser(settings.default_language).parse_args(argv)

    uses_postgres = settings.document_store.lower() == "postgres"
    if uses_postgres:
        init_pool(settings)
    try:
        if args.command == "init-db":
            if not uses_postgres:
                error = InvalidInputError("init-db requires document_store=postgres")
                print(json.dumps(error.to_dict()), file=sys.stderr)
                return 1
            apply_schema()
            print(json.dumps({"schema": "applied"}))
            return 0
        manager = build_document_manager(settings)
        storage = LocalFileStorage(settings.files_root)
        try:
            result = _dispatch(args, manager, storage)
        except LegalSiftError as exc:
            Log.error(f"{args.command} failed: {exc}")
            print(json.dumps(exc.to_dict()), file=sys.stderr)
            return 1
        print(json.dumps(result, indent=2, ensure_ascii=False))
        return 0
    finally:
        if uses_postgres:
            close_pool()


if __name__ == "__main__":
    sys.exit(main())
