import time
from collections import Counter
from datetime import UTC, datetime

from docfiler.config.settings import Settings
from docfiler.database.repositories.document_repository import DocumentRepository
from docfiler.database.repositories.upload_log_repository import UploadLogRepository
from docfiler.logging.logger import Log
from docfiler.worker.job_runner import JobRunner


class Worker:
    """Scheduled loop: reclaim stale claims -> claim batches -> run each document."""

    def __init__(
        self,
        doc_repo: DocumentRepository,
        log_repo: UploadLogRepository,
        job_runner: JobRunner,
        settings: Settings,
    ) -> None:
        self._doc_repo = doc_repo
        self._log_repo = log_repo
        self._job_runner = job_runner
        self._settings = settings

    def run(self, max_runs: int | None = None) -> None:
        """Run once at start, then every run_interval_seconds until interrupted.

        With scheduling disabled, stop after the first run. If max_runs is set,
        stop after that many runs (for testing).
        """
        Log.info("Worker started")
        runs = 0
        try:
            while True:
                self._run_safely()
                runs += 1
                if not self._settings.schedule_enabled:
                    break
                if max_runs is not None and runs >= max_runs:
                    break
                Log.debug(f"Next run in {self._settings.run_interval_seconds}s")
                time.sleep(self._settings.run_interval_seconds)
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")

    def run_once(self) -> Counter[str]:
        """Process every pending document once, in creation order.

        Returns:
            Count of documents per outcome.
        """
        self._reclaim_stale()
        attempted: set[int] = set()
        outcomes: Counter[str] = Counter()
        while True:
            batch = self._doc_repo.claim_pending(
                self._settings.claim_batch_size,
                exclude_ids=attempted,
            )
            if not batch:
                break
            for document in batch:
                attempted.add(document.id)
                outcomes[self._job_runner.run(document)] += 1

        Log.info(f"Run finished: {len(attempted)} documents {dict(outcomes)}")
        return outcomes

    def _reclaim_stale(self) -> None:
        stale_ids = self._doc_repo.reclaim_stale(self._settings.stale_claim_timeout_minutes)
        if not stale_ids:
            return
        closed = self._log_repo.abandon_pending(stale_ids)
        Log.warning(
            f"Reclaimed {len(stale_ids)} stale documents, closed {closed} abandoned upload logs"
        )

    def _run_safely(self) -> None:
        Log.info(f"Scheduled run starting at {datetime.now(UTC).isoformat()}")
        try:
            self.run_once()
        except Exception as exc:
            Log.exception(f"Run aborted: {exc}")
