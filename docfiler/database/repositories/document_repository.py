from collections.abc import Collection
from datetime import datetime
from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from docfiler.database.connection import get_connection
from docfiler.database.exceptions import PersistenceError
from docfiler.database.models import DocumentRecord

_DOCUMENT_COLUMNS = """
    id, file_name, file_url, upload_status, enabled, metadata,
    locked_at, created_at, updated_at
"""


def _claim_guard(document_id: int, claimed_at: datetime | None) -> tuple[str, tuple[Any, ...]]:
    """WHERE clause matching a document still held by the run that claimed it.

    claimed_at is the locked_at value returned by the claim; without it only
    the processing status is checked.
    """
    if claimed_at is None:
        return "id = %s AND upload_status = 'processing'", (document_id,)
    return (
        "id = %s AND upload_status = 'processing' AND locked_at = %s",
        (document_id, claimed_at),
    )


class DocumentRepository:
    """Database operations for the documents table."""

    def claim_pending(
        self,
        limit: int,
        exclude_ids: Collection[int] = (),
    ) -> list[DocumentRecord]:
        """Claim a batch of pending documents using SELECT FOR UPDATE SKIP LOCKED.

        Claimed rows move to 'processing' in the same transaction, so an
        overlapping run never picks up the same document. Rows without an
        object metadata bag are never claimed.
        """
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"""
                        UPDATE documents
                        SET upload_status = 'processing',
                            locked_at = NOW(),
                            updated_at = NOW()
                        WHERE id IN (
                            SELECT id
                            FROM documents
                            WHERE upload_status = 'pending'
                              AND enabled = TRUE
                              AND jsonb_typeof(metadata) = 'object'
                              AND NOT (id = ANY(%s::bigint[]))
                            ORDER BY created_at, id
                            LIMIT %s
                            FOR UPDATE SKIP LOCKED
                        )
                        RETURNING {_DOCUMENT_COLUMNS}
                        """,
                        (list(exclude_ids), limit),
                    )
                    rows = cur.fetchall()
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to claim pending documents: {exc}") from exc

        rows.sort(key=lambda row: (row["created_at"], row["id"]))
        return [self._to_record(row) for row in rows]

    def refresh_claim(self, document: DocumentRecord) -> bool:
        """Restamp locked_at on a document this run still holds.

        Called right before a document is processed so that a slow batch does
        not look stale to another run. Updates document.locked_at in place.

        Returns:
            False if the claim was lost (reclaimed or settled elsewhere).
        """
        where, params = _claim_guard(document.id, document.locked_at)
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        f"""
                        UPDATE documents
                        SET locked_at = NOW(), updated_at = NOW()
                        WHERE {where}
                        RETURNING locked_at
                        """,
                        params,
                    )
                    row = cur.fetchone()
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(
                f"Failed to refresh claim on document {document.id}: {exc}"
            ) from exc

        if row is None:
            return False
        document.locked_at = row[0]
        return True

    def release(self, document_id: int, *, claimed_at: datetime | None = None) -> None:
        """Return a claimed document to pending without a terminal status."""
        self._execute_claimed(
            "upload_status = 'pending', locked_at = NULL, updated_at = NOW()",
            (),
            document_id,
            claimed_at,
        )

    def mark_completed(
        self,
        document_id: int,
        metadata: dict[str, Any],
        *,
        claimed_at: datetime | None = None,
    ) -> None:
        """Mark a document completed and store its updated metadata bag."""
        self._execute_claimed(
            """
            upload_status = 'completed', metadata = %s,
            locked_at = NULL, updated_at = NOW()
            """,
            (Jsonb(metadata),),
            document_id,
            claimed_at,
        )

    def mark_failed(self, document_id: int, *, claimed_at: datetime | None = None) -> None:
        """Mark a document as failed."""
        self._execute_claimed(
            "upload_status = 'failed', locked_at = NULL, updated_at = NOW()",
            (),
            document_id,
            claimed_at,
        )

    def reclaim_stale(self, timeout_minutes: int) -> list[int]:
        """Return documents stuck in 'processing' past the timeout to pending.

        Returns:
            IDs of the documents that were reclaimed.
        """
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        UPDATE documents
                        SET upload_status = 'pending', locked_at = NULL, updated_at = NOW()
                        WHERE upload_status = 'processing'
                          AND locked_at < NOW() - make_interval(mins => %s)
                        RETURNING id
                        """,
                        (timeout_minutes,),
                    )
                    rows = cur.fetchall()
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to reclaim stale documents: {exc}") from exc
        return [row[0] for row in rows]

    def find_by_id(self, document_id: int) -> DocumentRecord | None:
        """Find a document by ID. Useful for tests."""
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"SELECT {_DOCUMENT_COLUMNS} FROM documents WHERE id = %s",
                        (document_id,),
                    )
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to load document {document_id}: {exc}") from exc

        if row is None:
            return None
        return self._to_record(row)

    @staticmethod
    def _execute_claimed(
        assignments: str,
        params: tuple[Any, ...],
        document_id: int,
        claimed_at: datetime | None,
    ) -> None:
        """Apply a status change only while the caller still holds the claim.

        Raises:
            PersistenceError: if the document is missing, no longer processing,
                or was claimed again by another run.
        """
        where, guard_params = _claim_guard(document_id, claimed_at)
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        f"UPDATE documents SET {assignments} WHERE {where}",
                        params + guard_params,
                    )
                    if cur.rowcount == 0:
                        raise PersistenceError(
                            f"Document {document_id} not found or no longer claimed"
                        )
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to update document {document_id}: {exc}") from exc

    @staticmethod
    def _to_record(row: dict[str, Any]) -> DocumentRecord:
        return DocumentRecord(
            id=row["id"],
            file_name=row["file_name"],
            file_url=row["file_url"],
            upload_status=row["upload_status"],
            enabled=row["enabled"],
            metadata=row["metadata"],
            locked_at=row["locked_at"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
