from datetime import date

from docfiler.classification.base import BaseClassifier
from docfiler.classification.models import ClassificationContext
from docfiler.database.repositories.document_repository import DocumentRepository
from docfiler.database.repositories.upload_log_repository import UploadLogRepository
from docfiler.filing.file_filer import FileFiler
from docfiler.filing.folder_resolver import (
    NO_MATCHING_FOLDER,
    FolderResolver,
    ResolutionFailure,
    Resolved,
)
from docfiler.filing.metadata import DocumentMetadata, StorageLinkage
from docfiler.logging.logger import Log
from docfiler.processor.pipeline import PipelineContext, PipelineStep
from docfiler.storage.base import BaseObjectStore
from docfiler.zoho.crm import ZohoCrmClient

NO_ROOT_FOLDER = "No storage root folder for account"
NO_RESOURCE_ID = "Upload returned no resource id"


class ParseMetadataStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.metadata = DocumentMetadata.from_json(context.document.metadata)
        return context


class FetchObjectStep(PipelineStep):
    def __init__(self, object_store: BaseObjectStore) -> None:
        self._object_store = object_store

    def run(self, context: PipelineContext) -> PipelineContext:
        context.stored_object = self._object_store.get(context.document.file_url)
        Log.info(
            f"Fetched {len(context.stored_object.data)} bytes for document {context.document.id}"
        )
        return context


class ClassifyStep(PipelineStep):
    def __init__(self, classifier: BaseClassifier) -> None:
        self._classifier = classifier

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.metadata is None or context.stored_object is None:
            raise ValueError("PipelineContext.stored_object must be set before classify")
        context.classification = self._classifier.classify(
            context.stored_object,
            context.document.file_name,
            ClassificationContext(
                user_name=context.metadata.context.user_name,
                upload_date=date.today(),
            ),
        )
        return context


class RecordAttemptStep(PipelineStep):
    """Persist the attempt's upload log right after classification, even if empty."""

    def __init__(self, log_repo: UploadLogRepository) -> None:
        self._log_repo = log_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.metadata is None or context.classification is None:
            raise ValueError("PipelineContext.classification must be set before recording")
        context.upload_log_id = self._log_repo.create(
            document_id=context.document.id,
            filename=context.document.file_name,
            user_id=context.metadata.context.user_id,
            account_id=context.metadata.context.account_id,
            classification=context.classification,
        )
        return context


class ResolveRootFolderStep(PipelineStep):
    def __init__(self, crm: ZohoCrmClient) -> None:
        self._crm = crm

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.metadata is None:
            raise ValueError("PipelineContext.metadata must be set before root lookup")
        account_id = context.metadata.context.account_id
        if account_id is not None:
            context.root_folder_id = self._crm.get_root_folder_id(account_id)
        return context


class ResolveFolderStep(PipelineStep):
    def __init__(self, resolver: FolderResolver) -> None:
        self._resolver = resolver

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.classification is None:
            raise ValueError("PipelineContext.classification must be set before resolving")
        segments = context.classification.segments
        if not segments:
            context.failure_reason = NO_MATCHING_FOLDER
            return context
        if context.root_folder_id is None:
            context.release_reason = NO_ROOT_FOLDER
            return context

        resolution = self._resolver.resolve(
            context.root_folder_id,
            segments,
            create_missing=context.classification.auto_create,
        )
        match resolution:
            case Resolved(folder_id=folder_id):
                context.folder_id = folder_id
            case ResolutionFailure(segment=segment, reason=reason):
                Log.info(
                    f"Document {context.document.id} skipped: folder '{segment}' not found"
                )
                context.failure_reason = reason
        return context


class UploadStep(PipelineStep):
    def __init__(self, filer: FileFiler) -> None:
        self._filer = filer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.folder_id is None or context.stored_object is None:
            raise ValueError("PipelineContext.folder_id must be set before upload")
        result = self._filer.upload(
            context.folder_id,
            context.stored_object.data,
            context.document.file_name,
        )
        if result is None:
            context.failure_reason = NO_RESOURCE_ID
        else:
            context.upload_result = result
        return context


class FinalizeStep(PipelineStep):
    """Write the attempt's terminal state to the upload log and the document."""

    def __init__(
        self,
        doc_repo: DocumentRepository,
        log_repo: UploadLogRepository,
    ) -> None:
        self._doc_repo = doc_repo
        self._log_repo = log_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        document = context.document
        if context.upload_log_id is None:
            raise ValueError("PipelineContext.upload_log_id must be set before finalize")

        if context.failure_reason is not None:
            # Unfiled documents carry the reason in reasoning as well.
            reasoning = (
                context.failure_reason if context.failure_reason == NO_MATCHING_FOLDER else None
            )
            self._log_repo.mark_failed(
                context.upload_log_id, context.failure_reason, reasoning=reasoning
            )
            self._doc_repo.mark_failed(document.id, claimed_at=document.locked_at)
            Log.error(f"Document {document.id} failed: {context.failure_reason}")
            return context

        if context.release_reason is not None:
            self._log_repo.mark_failed(context.upload_log_id, context.release_reason)
            self._doc_repo.release(document.id, claimed_at=document.locked_at)
            Log.warning(f"Document {document.id} released: {context.release_reason}")
            return context

        if context.metadata is None or context.upload_result is None:
            raise ValueError("PipelineContext.upload_result must be set before finalize")
        linkage = StorageLinkage(
            parent_id=context.upload_result.parent_id,
            file_id=context.upload_result.resource_id,
            permalink=context.upload_result.permalink,
        )
        context.metadata = context.metadata.with_linkage(linkage)
        self._log_repo.mark_completed(context.upload_log_id)
        self._doc_repo.mark_completed(
            document.id, context.metadata.to_json(), claimed_at=document.locked_at
        )
        Log.info(f"Document {document.id} '{document.file_name}' uploaded successfully")
        return context


class MarkFailedStep(PipelineStep):
    """Record an attempt that raised: a new failed log row and a failed document.

    A log row already created for this attempt is closed with the same error
    so no attempt is left pending.
    """

    def __init__(
        self,
        doc_repo: DocumentRepository,
        log_repo: UploadLogRepository,
    ) -> None:
        self._doc_repo = doc_repo
        self._log_repo = log_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        document = context.document
        if context.upload_log_id is not None:
            self._log_repo.mark_failed(context.upload_log_id, context.error_message)
        self._log_repo.insert_failure(
            document_id=document.id,
            filename=document.file_name,
            error_message=context.error_message,
        )
        self._doc_repo.mark_failed(document.id, claimed_at=document.locked_at)
        Log.error(f"Document {document.id} marked as failed: {context.error_message}")
        return context
