"""Blob storage for photo bytes and rendered reports, rooted at ``data_dir``."""
import logging
import os

from autoinspect.config import settings
from autoinspect.utils.exceptions import StorageError

logger = logging.getLogger(__name__)


class LocalStorage:
    def __init__(self, root: str):
        self.root = os.path.abspath(root)

    def _resolve(self, path: str) -> str:
        full = os.path.abspath(os.path.join(self.root, path))
        if os.path.commonpath([full, self.root]) != self.root:
            raise StorageError(f"Path escapes storage root: {path}")
        return full

    def write(self, path: str, data: bytes) -> None:
        full = self._resolve(path)
        try:
            os.makedirs(os.path.dirname(full), exist_ok=True)
            with open(full, "wb") as f:
                f.write(data)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e
        logger.debug("Stored %d bytes at %s", len(data), path)

    def read(self, path: str) -> bytes:
        full = self._resolve(path)
        if not os.path.exists(full):
            raise StorageError(f"File not found: {path}")
        with open(full, "rb") as f:
            return f.read()


def get_storage() -> LocalStorage:
    return LocalStorage(settings.data_dir)
