from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class StoredObject:
    """Reference to bytes held by a storage backend."""

    id: str
    url: str


class BaseStorage(ABC):
    """Contract for the blob store that keeps uploaded files."""

    @abstractmethod
    def put(self, content: bytes, filename: str, owner_id: str) -> StoredObject:
        """Persist bytes and return a retrievable reference."""

    @abstractmethod
    def delete(self, storage_id: str) -> None:
        """Remove stored bytes. Deleting a missing object is not an error."""
