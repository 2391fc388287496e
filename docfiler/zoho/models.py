from dataclasses import dataclass


@dataclass(frozen=True)
class RemoteFolder:
    """A folder in the WorkDrive namespace."""

    id: str
    name: str


@dataclass(frozen=True)
class UploadResult:
    """Resource attributes WorkDrive assigns to an uploaded file."""

    parent_id: str
    resource_id: str
    permalink: str | None = None
