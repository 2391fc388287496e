from dataclasses import dataclass
from datetime import datetime
from typing import Any

DOCUMENT_PENDING = "pending"
DOCUMENT_PROCESSING = "processing"
DOCUMENT_COMPLETED = "completed"
DOCUMENT_FAILED = "failed"

LOG_PENDING = "pending"
LOG_COMPLETED = "completed"
LOG_FAILED = "failed"


@dataclass
class DocumentRecord:
    """Represents a row from the documents table."""

    id: int
    file_name: str
    file_url: str
    upload_status: str
    enabled: bool = True
    metadata: dict[str, Any] | None = None
    locked_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class UploadLogRecord:
    """Represents a row from the document_upload_logs table."""

    id: int
    document_id: int
    filename: str
    status: str
    user_id: str | None = None
    account_id: str | None = None
    suggested_path: str | None = None
    category: str | None = None
    confidence: float | None = None
    reasoning: str | None = None
    error_message: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
