from docfiler.database.models import DocumentRecord
from docfiler.database.repositories.document_repository import DocumentRepository
from docfiler.logging.logger import Log
from docfiler.processor.pipeline import OUTCOME_FAILED, OUTCOME_RELEASED, OUTCOME_SKIPPED
from docfiler.processor.processor import Processor


class JobRunner:
    """Run one document, containing every error at the document boundary."""

    def __init__(self, processor: Processor, doc_repo: DocumentRepository) -> None:
        self._processor = processor
        self._doc_repo = doc_repo

    def run(self, document: DocumentRecord) -> str:
        """Process a claimed document and return its outcome.

        The claim is restamped first; a document another run has taken over
        is skipped. Never raises: a failing document must not abort the batch.
        """
        try:
            still_claimed = self._doc_repo.refresh_claim(document)
        except Exception as exc:
            Log.exception(f"Could not refresh claim on document {document.id}: {exc}")
            return OUTCOME_FAILED
        if not still_claimed:
            Log.warning(f"Document {document.id} was reclaimed by another run, skipping")
            return OUTCOME_SKIPPED

        if document.metadata is None:
            Log.debug(f"Document {document.id} has no metadata, skipping")
            self._release(document)
            return OUTCOME_RELEASED

        try:
            context = self._processor.process(document)
        except Exception as exc:
            Log.exception(f"Document {document.id} '{document.file_name}' failed: {exc}")
            return OUTCOME_FAILED
        return context.outcome

    def _release(self, document: DocumentRecord) -> None:
        try:
            self._doc_repo.release(document.id, claimed_at=document.locked_at)
        except Exception as exc:
            Log.error(f"Could not release document {document.id}: {exc}")
