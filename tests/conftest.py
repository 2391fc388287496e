from typing import Any

import pytest

from docfiler.database.models import DocumentRecord
from docfiler.storage.models import StoredObject


def make_metadata(**overrides: Any) -> dict[str, Any]:
    metadata: dict[str, Any] = {
        "user": {"id": 7, "given_name": "Dana"},
        "account_id": 4455001,
        "file": {"originalname": "w2.pdf", "mimetype": "application/pdf"},
    }
    metadata.update(overrides)
    return metadata


def make_document(
    document_id: int = 1,
    metadata: dict[str, Any] | None = None,
    file_name: str = "w2.pdf",
) -> DocumentRecord:
    return DocumentRecord(
        id=document_id,
        file_name=file_name,
        file_url=f"https://uploads.s3.us-east-1.amazonaws.com/fortress%20documents/{file_name}",
        upload_status="processing",
        metadata=make_metadata() if metadata is None else metadata,
    )


@pytest.fixture()
def document() -> DocumentRecord:
    return make_document()


@pytest.fixture()
def stored_object() -> StoredObject:
    return StoredObject(
        file_name="fortress documents/w2.pdf",
        data=b"%PDF-1.7 fake",
        content_type="application/pdf",
        content_length=13,
    )
