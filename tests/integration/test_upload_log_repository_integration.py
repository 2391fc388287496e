from collections.abc import Callable

import pytest

from docfiler.classification.models import ClassificationResult
from docfiler.database.repositories.upload_log_repository import (
    ABANDONED_ATTEMPT_MESSAGE,
    UploadLogRepository,
)


@pytest.mark.integration
class TestUploadLogRepository:
    def test_create_then_complete(self, seed_document: Callable[..., int]) -> None:
        document_id = seed_document()
        repo = UploadLogRepository()

        log_id = repo.create(
            document_id=document_id,
            filename="w2.pdf",
            user_id="7",
            account_id="4455001",
            classification=ClassificationResult(
                suggested_path="2024/02 - Source Documents/W-2s",
                category="tax_document",
                confidence=0.92,
            ),
        )
        repo.mark_completed(log_id)

        [log] = repo.find_by_document_id(document_id)
        assert log.status == "completed"
        assert log.suggested_path == "2024/02 - Source Documents/W-2s"
        assert log.confidence == pytest.approx(0.92)
        assert log.error_message is None

    def test_insert_failure_adds_row(self, seed_document: Callable[..., int]) -> None:
        document_id = seed_document()
        repo = UploadLogRepository()

        repo.insert_failure(document_id=document_id, filename="w2.pdf", error_message="boom")

        [log] = repo.find_by_document_id(document_id)
        assert log.status == "failed"
        assert log.error_message == "boom"
        assert log.suggested_path is None

    def test_abandon_pending_only_closes_pending(self, seed_document: Callable[..., int]) -> None:
        document_id = seed_document()
        repo = UploadLogRepository()
        pending_id = repo.create(
            document_id=document_id,
            filename="w2.pdf",
            user_id=None,
            account_id=None,
            classification=ClassificationResult.empty(),
        )
        repo.insert_failure(document_id=document_id, filename="w2.pdf", error_message="old")

        closed = repo.abandon_pending([document_id])

        assert closed == 1
        logs = {log.id: log for log in repo.find_by_document_id(document_id)}
        assert logs[pending_id].status == "failed"
        assert logs[pending_id].error_message == ABANDONED_ATTEMPT_MESSAGE
