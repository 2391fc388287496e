from collections.abc import Callable

import pytest

from docfiler.database.exceptions import PersistenceError
from docfiler.database.repositories.document_repository import DocumentRepository


@pytest.mark.integration
class TestClaimPending:
    def test_claims_pending_in_creation_order(self, seed_document: Callable[..., int]) -> None:
        first = seed_document("a.pdf")
        second = seed_document("b.pdf")
        repo = DocumentRepository()

        claimed = repo.claim_pending(10)

        assert [doc.id for doc in claimed] == [first, second]
        assert all(doc.upload_status == "processing" for doc in claimed)
        assert all(doc.locked_at is not None for doc in claimed)

    def test_claimed_document_not_claimed_again(self, seed_document: Callable[..., int]) -> None:
        seed_document()
        repo = DocumentRepository()

        assert len(repo.claim_pending(10)) == 1
        assert repo.claim_pending(10) == []

    def test_skips_disabled_and_null_metadata(self, seed_document: Callable[..., int]) -> None:
        seed_document("off.pdf", enabled=False)
        seed_document("bare.pdf", metadata=None)
        wanted = seed_document("ok.pdf")

        claimed = DocumentRepository().claim_pending(10)

        assert [doc.id for doc in claimed] == [wanted]

    def test_respects_limit_and_exclusions(
        self, seed_document: Callable[..., int]
    ) -> None:
        first = seed_document("a.pdf")
        second = seed_document("b.pdf")
        seed_document("c.pdf")
        repo = DocumentRepository()

        claimed = repo.claim_pending(1, exclude_ids=[first])

        assert [doc.id for doc in claimed] == [second]


@pytest.mark.integration
class TestTransitions:
    def test_mark_completed_writes_metadata(self, seed_document: Callable[..., int]) -> None:
        document_id = seed_document()
        repo = DocumentRepository()
        repo.claim_pending(10)

        repo.mark_completed(document_id, {"zoho_data": {"file_id": "r1"}})

        document = repo.find_by_id(document_id)
        assert document is not None
        assert document.upload_status == "completed"
        assert document.metadata == {"zoho_data": {"file_id": "r1"}}
        assert document.locked_at is None

    def test_release_makes_document_claimable(self, seed_document: Callable[..., int]) -> None:
        document_id = seed_document()
        repo = DocumentRepository()
        repo.claim_pending(10)

        repo.release(document_id)

        assert [doc.id for doc in repo.claim_pending(10)] == [document_id]

    def test_reclaim_stale_only_touches_old_claims(
        self, seed_document: Callable[..., int]
    ) -> None:
        stale = seed_document("old.pdf", status="processing", locked_minutes_ago=120)
        seed_document("fresh.pdf", status="processing", locked_minutes_ago=5)
        repo = DocumentRepository()

        reclaimed = repo.reclaim_stale(60)

        assert reclaimed == [stale]
        document = repo.find_by_id(stale)
        assert document is not None
        assert document.upload_status == "pending"


@pytest.mark.integration
class TestOverlappingRuns:
    def test_reclaimed_document_cannot_be_settled_by_first_run(
        self, seed_document: Callable[..., int]
    ) -> None:
        document_id = seed_document(status="processing", locked_minutes_ago=120)
        repo = DocumentRepository()
        first_run = repo.find_by_id(document_id)
        assert first_run is not None

        assert repo.reclaim_stale(60) == [document_id]
        [second_run] = repo.claim_pending(10)

        assert repo.refresh_claim(first_run) is False
        with pytest.raises(PersistenceError, match="no longer claimed"):
            repo.mark_completed(document_id, {}, claimed_at=first_run.locked_at)

        repo.mark_completed(
            document_id, {"zoho_data": {"file_id": "r2"}}, claimed_at=second_run.locked_at
        )
        document = repo.find_by_id(document_id)
        assert document is not None
        assert document.upload_status == "completed"
        assert document.metadata == {"zoho_data": {"file_id": "r2"}}

    def test_refresh_keeps_active_document_out_of_reclaim(
        self, seed_document: Callable[..., int]
    ) -> None:
        document_id = seed_document(status="processing", locked_minutes_ago=120)
        repo = DocumentRepository()
        claimed = repo.find_by_id(document_id)
        assert claimed is not None

        assert repo.refresh_claim(claimed) is True

        assert repo.reclaim_stale(60) == []
        repo.mark_failed(claimed.id, claimed_at=claimed.locked_at)

    def test_settled_document_rejects_second_terminal_update(
        self, seed_document: Callable[..., int]
    ) -> None:
        document_id = seed_document()
        repo = DocumentRepository()
        [claimed] = repo.claim_pending(10)
        repo.mark_failed(document_id, claimed_at=claimed.locked_at)

        with pytest.raises(PersistenceError):
            repo.mark_completed(document_id, {}, claimed_at=claimed.locked_at)
