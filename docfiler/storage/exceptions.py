class ObjectStoreError(Exception):
    """Base exception for all object store errors."""


class RetrievalError(ObjectStoreError):
    """Raised when an object cannot be fetched (missing or store unreachable)."""


class InvalidReferenceError(RetrievalError):
    """Raised when a reference does not encode a bucket and key."""
