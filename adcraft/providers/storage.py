"""
Filesystem storage backend.
"""

import os
from typing import List

from adcraft.core.constants import DEFAULT_CONTENT_TYPE, DEFAULT_STORAGE_PATH
from adcraft.core.error_handler import ProviderError
from adcraft.core.logging_config import get_logger
from adcraft.providers.base import StorageBackend

# Initialize logger
logger = get_logger(__name__)


class LocalStorage(StorageBackend):
    """
    Stores objects as files under a root directory.

    Object paths are relative to ``root``; ``download`` and ``exists`` also
    accept absolute file paths so existing assets can live anywhere on disk.

    Args:
        root: Root directory, created on first upload
    """

    name = "local-storage"

    def __init__(self, root: str = DEFAULT_STORAGE_PATH):
        self.root = root
        logger.info(f"Local storage initialized at {os.path.abspath(root)}")

    def _full_path(self, path: str, operation: str) -> str:
        if os.path.isabs(path):
            return path

        full_path = os.path.normpath(os.path.join(self.root, path))
        root = os.path.abspath(self.root)
        if os.path.commonpath([root, os.path.abspath(full_path)]) != root:
            raise ProviderError(
                f"Path escapes storage root: {path}",
                provider=self.name,
                operation=operation,
                retryable=False
            )
        return full_path

    def upload(self, data: bytes, path: str, content_type: str = DEFAULT_CONTENT_TYPE) -> str:
        full_path = self._full_path(path, "upload")

        try:
            os.makedirs(os.path.dirname(full_path) or ".", exist_ok=True)
            with open(full_path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise ProviderError(f"Failed to write {path}: {e}", provider=self.name, operation="upload") from e

        logger.info(f"Saved {len(data)} bytes ({content_type}) to {full_path}")
        return path

    def download(self, path: str) -> bytes:
        full_path = self._full_path(path, "download")

        if not os.path.isfile(full_path):
            raise ProviderError(
                f"File not found: {path}",
                provider=self.name,
                operation="download",
                retryable=False
            )

        try:
            with open(full_path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise ProviderError(f"Failed to read {path}: {e}", provider=self.name, operation="download") from e

        logger.info(f"Read {len(data)} bytes from {full_path}")
        return data

    def exists(self, path: str) -> bool:
        return os.path.isfile(self._full_path(path, "exists"))

    def list(self, prefix: str = "") -> List[str]:
        base = self._full_path(prefix, "list") if prefix else self.root
        if not os.path.isdir(base):
            return []

        paths = []
        for dirpath, _, filenames in os.walk(base):
            for filename in filenames:
                full_path = os.path.join(dirpath, filename)
                paths.append(os.path.relpath(full_path, self.root).replace(os.sep, "/"))

        return sorted(paths)
