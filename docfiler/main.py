from docfiler.config.settings import Settings
from docfiler.database.connection import close_pool, init_pool
from docfiler.database.repositories.document_repository import DocumentRepository
from docfiler.database.repositories.upload_log_repository import UploadLogRepository
from docfiler.logging.logger import Log
from docfiler.processor.processor import build_processor
from docfiler.worker.job_runner import JobRunner
from docfiler.worker.worker import Worker
from docfiler.zoho.factory import build_zoho_clients


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> start worker loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)
    zoho = build_zoho_clients(settings)

    try:
        doc_repo = DocumentRepository()
        processor = build_processor(settings, zoho)
        job_runner = JobRunner(processor, doc_repo)
        worker = Worker(doc_repo, UploadLogRepository(), job_runner, settings)
        worker.run()
    finally:
        zoho.http.close()
        close_pool()


if __name__ == "__main__":
    main()
