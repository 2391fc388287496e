from abc import ABC, abstractmethod

from docfiler.storage.models import PresignedUpload, StoredObject


class BaseObjectStore(ABC):
    """Contract for object store adapters."""

    @abstractmethod
    def get(self, reference: str) -> StoredObject:
        """Fetch an object and its metadata.

        Raises:
            RetrievalError: if the object does not exist or the store is unreachable.
        """

    @abstractmethod
    def put(self, path: str, data: bytes, content_type: str) -> str:
        """Store an object and return its reference URL."""

    @abstractmethod
    def presign(self, path: str, content_type: str) -> PresignedUpload:
        """Return a presigned upload URL for the given key."""
