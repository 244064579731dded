from legalsift.config.settings import Settings
from legalsift.database.repositories.base import BaseDocumentRepository
from legalsift.database.repositories.memory_repository import InMemoryDocumentRepository
from legalsift.database.repositories.postgres_repository import PostgresDocumentRepository


class DocumentRepositoryFactory:
    """Creates the document store selected by settings."""

    REPOSITORIES: dict[str, type[BaseDocumentRepository]] = {
        "postgres": PostgresDocumentRepository,
        "memory": InMemoryDocumentRepository,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseDocumentRepository:
        store = settings.document_store.lower()
        repository_cls = cls.REPOSITORIES.get(store)
        if repository_cls is None:
            raise ValueError(
                f"Unknown document store '{store}'. Choose from: {list(cls.REPOSITORIES)}"
            )
        return repository_cls()
