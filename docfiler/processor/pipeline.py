from abc import ABC, abstractmethod
from dataclasses import dataclass

from docfiler.classification.models import ClassificationResult
from docfiler.database.models import DocumentRecord
from docfiler.filing.metadata import DocumentMetadata
from docfiler.storage.models import StoredObject
from docfiler.zoho.models import UploadResult

OUTCOME_COMPLETED = "completed"
OUTCOME_FAILED = "failed"
OUTCOME_RELEASED = "released"
OUTCOME_SKIPPED = "skipped"


@dataclass(slots=True)
class PipelineContext:
    document: DocumentRecord
    metadata: DocumentMetadata | None = None
    stored_object: StoredObject | None = None
    classification: ClassificationResult | None = None
    upload_log_id: int | None = None
    root_folder_id: str | None = None
    folder_id: str | None = None
    upload_result: UploadResult | None = None
    failure_reason: str | None = None
    release_reason: str | None = None
    error_message: str = ""

    @property
    def is_settled(self) -> bool:
        """True once a step has decided the attempt cannot go further."""
        return self.failure_reason is not None or self.release_reason is not None

    @property
    def outcome(self) -> str:
        if self.error_message or self.failure_reason is not None:
            return OUTCOME_FAILED
        if self.release_reason is not None:
            return OUTCOME_RELEASED
        return OUTCOME_COMPLETED


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
