from __future__ import annotations

from abc import ABC, abstractmethod


class ImageStorage(ABC):
    """Port for the object store holding listing photos."""

    @abstractmethod
    def store(self, owner_id: str, filename: str, content_type: str, data: bytes) -> str:
        """
        Store an image under the owner's prefix.

        Returns:
            Publicly resolvable URL of the stored image

        Raises:
            ImageStorageError: If the object store fails
        """
        ...
