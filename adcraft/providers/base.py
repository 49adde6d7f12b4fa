"""
Base interfaces for cloud capability providers.

A provider couples an AI half (image and text generation) with a storage
half (upload, download, listing). Pipelines only ever talk to these
interfaces, so backends can be swapped through configuration.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from adcraft.core.constants import (
    BASE_IMAGE_HEIGHT,
    BASE_IMAGE_WIDTH,
    DEFAULT_CONTENT_TYPE,
)


class StorageBackend(ABC):
    """
    Base interface for asset storage.
    """

    @abstractmethod
    def upload(self, data: bytes, path: str, content_type: str = DEFAULT_CONTENT_TYPE) -> str:
        """
        Store ``data`` under ``path``.

        Returns:
            str: Location of the stored object

        Raises:
            ProviderError: If the object cannot be written
        """
        pass

    @abstractmethod
    def download(self, path: str) -> bytes:
        """
        Raises:
            ProviderError: If the object does not exist or cannot be read
        """
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def list(self, prefix: str = "") -> List[str]:
        """List stored object paths under ``prefix``, recursively."""
        pass


class CloudProvider(ABC):
    """
    Base interface for a cloud capability provider.

    Storage operations are delegated to the ``StorageBackend`` the provider
    is built with.

    Args:
        storage: Backend used for upload, download, exists and list
    """

    #: Provider name used in logs and errors
    name = "base"

    def __init__(self, storage: StorageBackend):
        self.storage = storage

    @abstractmethod
    def generate_image(
        self,
        prompt: str,
        negative_prompt: Optional[str] = None,
        width: int = BASE_IMAGE_WIDTH,
        height: int = BASE_IMAGE_HEIGHT,
        text: Optional[str] = None
    ) -> bytes:
        """
        Generate an image from a text prompt.

        Args:
            prompt: Text prompt describing the image
            negative_prompt: Things the image should avoid
            width: Requested width in pixels
            height: Requested height in pixels
            text: Optional text the backend may render into the image

        Returns:
            bytes: Encoded image

        Raises:
            ProviderError: If generation fails; never returns empty bytes
        """
        pass

    @abstractmethod
    def generate_text(self, prompt: str) -> str:
        pass

    def analyze_image(self, image_data: bytes, prompt: str) -> str:
        """
        Describe an image in response to a prompt.

        Not every backend can analyze images.

        Raises:
            NotImplementedError: If the backend has no vision capability
        """
        raise NotImplementedError(f"{self.name} provider does not support image analysis")

    def upload(self, data: bytes, path: str, content_type: str = DEFAULT_CONTENT_TYPE) -> str:
        return self.storage.upload(data, path, content_type)

    def download(self, path: str) -> bytes:
        return self.storage.download(path)

    def exists(self, path: str) -> bool:
        return self.storage.exists(path)

    def list(self, prefix: str = "") -> List[str]:
        return self.storage.list(prefix)
