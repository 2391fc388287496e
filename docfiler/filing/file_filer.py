from docfiler.logging.logger import Log
from docfiler.zoho.models import UploadResult
from docfiler.zoho.workdrive import ZohoWorkDriveClient


class FileFiler:
    """Uploads document bytes into a resolved WorkDrive folder."""

    def __init__(
        self,
        workdrive: ZohoWorkDriveClient,
        *,
        override_name_collision: bool = True,
    ) -> None:
        self._workdrive = workdrive
        self._override_name_collision = override_name_collision

    def upload(
        self,
        folder_id: str,
        data: bytes,
        filename: str,
        override_name_collision: bool | None = None,
    ) -> UploadResult | None:
        """Upload a file; None means the provider returned no resource id.

        Raises:
            UploadError: on any non-success response.
        """
        override = (
            self._override_name_collision
            if override_name_collision is None
            else override_name_collision
        )
        result = self._workdrive.upload(folder_id, data, filename, override)
        if result is not None:
            Log.info(f"Uploaded '{filename}' to folder {folder_id} as {result.resource_id}")
        return result
