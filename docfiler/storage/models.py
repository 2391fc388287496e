from dataclasses import dataclass


@dataclass(frozen=True)
class StoredObject:
    """A binary object fetched from the object store."""

    file_name: str
    data: bytes
    content_type: str | None = None
    content_length: int | None = None


@dataclass(frozen=True)
class PresignedUpload:
    """A time-limited URL a client can PUT an object to."""

    url: str
    key: str
