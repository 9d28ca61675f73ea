from pathlib import Path

from paperwork.processor.exceptions import StorageKeyNotFoundError


class FileLoader:
    """Resolves a storage key below the uploads root and reads its bytes."""

    FILES_ROOT = Path("/app/uploads")

    def __init__(self, files_root: Path | None = None) -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT

    def read(self, storage_key: str) -> bytes:
        """Read stored file bytes.

        Raises:
            StorageKeyNotFoundError: if the key is empty, escapes the uploads
                root, or no file exists at the resolved path.
        """
        path = self._resolve_path(storage_key)
        if not path.is_file():
            raise StorageKeyNotFoundError(f"Stored file not found: {storage_key}")
        return path.read_bytes()

    def _resolve_path(self, storage_key: str) -> Path:
        if not storage_key:
            raise StorageKeyNotFoundError("Storage key is empty")
        root = self._files_root.resolve()
        path = (root / storage_key).resolve()
        if not path.is_relative_to(root):
            raise StorageKeyNotFoundError(f"Storage key outside uploads root: {storage_key}")
        return path
