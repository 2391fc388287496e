from collections.abc import Collection
from typing import Any

import psycopg
from psycopg.rows import dict_row

from docfiler.classification.models import ClassificationResult
from docfiler.database.connection import get_connection
from docfiler.database.exceptions import PersistenceError
from docfiler.database.models import UploadLogRecord

ABANDONED_ATTEMPT_MESSAGE = "Processing attempt abandoned"


class UploadLogRepository:
    """Database operations for the document_upload_logs table."""

    def create(
        self,
        *,
        document_id: int,
        filename: str,
        user_id: str | None,
        account_id: str | None,
        classification: ClassificationResult,
    ) -> int:
        """Insert a pending log row holding the classification output.

        Returns:
            The new log row ID.
        """
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO document_upload_logs
                        (document_id, filename, user_id, account_id, suggested_path,
                         category, confidence, reasoning, status)
                        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, 'pending')
                        RETURNING id
                        """,
                        (
                            document_id,
                            filename,
                            user_id,
                            account_id,
                            classification.suggested_path,
                            classification.category,
                            classification.confidence,
                            classification.reasoning,
                        ),
                    )
                    row = cur.fetchone()
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(
                f"Failed to create upload log for document {document_id}: {exc}"
            ) from exc

        if row is None:
            raise PersistenceError(f"Upload log insert for document {document_id} returned no id")
        return int(row[0])

    def mark_completed(self, log_id: int) -> None:
        """Mark an upload log row as completed."""
        self._update_status(log_id, "completed", None)

    def mark_failed(
        self,
        log_id: int,
        error_message: str,
        *,
        reasoning: str | None = None,
    ) -> None:
        """Mark an upload log row as failed with a reason.

        When reasoning is given it replaces the model's explanation.
        """
        self._update_status(log_id, "failed", error_message, reasoning)

    def insert_failure(
        self,
        *,
        document_id: int,
        filename: str,
        error_message: str,
    ) -> int:
        """Insert a new failed log row for an attempt that raised."""
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO document_upload_logs
                        (document_id, filename, status, error_message)
                        VALUES (%s, %s, 'failed', %s)
                        RETURNING id
                        """,
                        (document_id, filename, error_message),
                    )
                    row = cur.fetchone()
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(
                f"Failed to record failure for document {document_id}: {exc}"
            ) from exc

        if row is None:
            raise PersistenceError(f"Failure insert for document {document_id} returned no id")
        return int(row[0])

    def abandon_pending(self, document_ids: Collection[int]) -> int:
        """Fail pending log rows left behind by interrupted attempts.

        Returns:
            Number of log rows closed.
        """
        if not document_ids:
            return 0
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        UPDATE document_upload_logs
                        SET status = 'failed', error_message = %s, updated_at = NOW()
                        WHERE status = 'pending'
                          AND document_id = ANY(%s::bigint[])
                        """,
                        (ABANDONED_ATTEMPT_MESSAGE, list(document_ids)),
                    )
                    closed = cur.rowcount
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to close abandoned upload logs: {exc}") from exc
        return closed

    def find_by_document_id(self, document_id: int) -> list[UploadLogRecord]:
        """List all log rows for a document, oldest first. Useful for tests."""
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        """
                        SELECT id, document_id, filename, status, user_id, account_id,
                               suggested_path, category, confidence, reasoning,
                               error_message, created_at, updated_at
                        FROM document_upload_logs
                        WHERE document_id = %s
                        ORDER BY id
                        """,
                        (document_id,),
                    )
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise PersistenceError(
                f"Failed to load upload logs for document {document_id}: {exc}"
            ) from exc
        return [self._to_record(row) for row in rows]

    @staticmethod
    def _update_status(
        log_id: int,
        status: str,
        error_message: str | None,
        reasoning: str | None = None,
    ) -> None:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        UPDATE document_upload_logs
                        SET status = %s, error_message = %s,
                            reasoning = COALESCE(%s, reasoning), updated_at = NOW()
                        WHERE id = %s
                        """,
                        (status, error_message, reasoning, log_id),
                    )
                    if cur.rowcount == 0:
                        raise PersistenceError(f"Upload log {log_id} not found")
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to update upload log {log_id}: {exc}") from exc

    @staticmethod
    def _to_record(row: dict[str, Any]) -> UploadLogRecord:
        return UploadLogRecord(
            id=row["id"],
            document_id=row["document_id"],
            filename=row["filename"],
            status=row["status"],
            user_id=row["user_id"],
            account_id=row["account_id"],
            suggested_path=row["suggested_path"],
            category=row["category"],
            confidence=row["confidence"],
            reasoning=row["reasoning"],
            error_message=row["error_message"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
