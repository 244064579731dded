import uuid
from pathlib import Path, PurePath

from legalsift.storage.base import BaseStorage, StoredObject


def document_file_path(files_root: Path, owner_id: str, name: str) -> Path:
    """Build path to a stored file: {files_root}/{owner_id}/{name}"""
    return files_root / owner_id / name


class LocalFileStorage(BaseStorage):
    """Keeps uploads on the local filesystem under a single root directory."""

    def __init__(self, files_root: Path) -> None:
        self._files_root = files_root

    def put(self, content: bytes, filename: str, owner_id: str) -> StoredObject:
        name = f"{uuid.uuid4()}{PurePath(filename).suffix.lower()}"
        path = document_file_path(self._files_root, owner_id, name)
        self._check_inside_root(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        storage_id = f"{owner_id}/{name}"
        return StoredObject(id=storage_id, url=path.resolve().as_uri())

    def delete(self, storage_id: str) -> None:
        self._resolve_path(storage_id).unlink(missing_ok=True)

    def _resolve_path(self, storage_id: str) -> Path:
        path = self._files_root / storage_id
        self._check_inside_root(path)
        return path

    def _check_inside_root(self, path: Path) -> None:
        root = self._files_root.resolve()
        if not path.resolve().is_relative_to(root):
            raise ValueError(f"Path {path} escapes storage root {root}")
