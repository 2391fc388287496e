from docfiler.classification.factory import ClassifierFactory
from docfiler.config.settings import Settings
from docfiler.database.models import DocumentRecord
from docfiler.database.repositories.document_repository import DocumentRepository
from docfiler.database.repositories.upload_log_repository import UploadLogRepository
from docfiler.filing.file_filer import FileFiler
from docfiler.filing.folder_resolver import FolderResolver
from docfiler.logging.logger import Log
from docfiler.processor.pipeline import PipelineContext, PipelineStep
from docfiler.processor.steps import (
    ClassifyStep,
    FetchObjectStep,
    FinalizeStep,
    MarkFailedStep,
    ParseMetadataStep,
    RecordAttemptStep,
    ResolveFolderStep,
    ResolveRootFolderStep,
    UploadStep,
)
from docfiler.storage.s3_store import S3ObjectStore
from docfiler.zoho.factory import ZohoClients


class Processor:
    """Drives one document through the filing pipeline.

    Pipeline: parse metadata -> fetch -> classify -> record attempt ->
    resolve root -> resolve folders -> upload -> finalize.
    A step that settles the attempt (failure or release) skips the remaining
    work steps; finalize always runs. Any exception runs the failed step and
    is re-raised.
    """

    def __init__(
        self,
        *,
        steps: list[PipelineStep],
        finalize_step: PipelineStep,
        failed_step: PipelineStep,
    ) -> None:
        self._steps = steps
        self._finalize_step = finalize_step
        self._failed_step = failed_step

    def process(self, document: DocumentRecord) -> PipelineContext:
        Log.info(f"Processing document {document.id} '{document.file_name}'")
        context = PipelineContext(document=document)
        try:
            for step in self._steps:
                if context.is_settled:
                    break
                context = step.run(context)
            return self._finalize_step.run(context)
        except Exception as exc:
            context.error_message = str(exc) or exc.__class__.__name__
            self._failed_step.run(context)
            raise


def build_processor(settings: Settings, zoho: ZohoClients) -> Processor:
    """Build a Processor with all required adapters."""
    doc_repo = DocumentRepository()
    log_repo = UploadLogRepository()
    object_store = S3ObjectStore.from_settings(settings)
    classifier = ClassifierFactory.create(settings)
    resolver = FolderResolver(
        zoho.workdrive,
        match_threshold=settings.folder_match_threshold,
        auto_create_enabled=settings.auto_create_folders,
    )
    filer = FileFiler(
        zoho.workdrive,
        override_name_collision=settings.upload_override_name_collision,
    )
    steps: list[PipelineStep] = [
        ParseMetadataStep(),
        FetchObjectStep(object_store),
        ClassifyStep(classifier),
        RecordAttemptStep(log_repo),
        ResolveRootFolderStep(zoho.crm),
        ResolveFolderStep(resolver),
        UploadStep(filer),
    ]
    return Processor(
        steps=steps,
        finalize_step=FinalizeStep(doc_repo, log_repo),
        failed_step=MarkFailedStep(doc_repo, log_repo),
    )
