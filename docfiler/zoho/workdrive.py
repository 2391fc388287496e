import json
from typing import Any

from docfiler.logging.logger import Log
from docfiler.zoho.client import ZohoHttpClient
from docfiler.zoho.exceptions import UploadError, ZohoApiError
from docfiler.zoho.models import RemoteFolder, UploadResult

_JSON_API = "application/vnd.api+json"


class ZohoWorkDriveClient:
    """Folder listing, folder creation, and file upload against Zoho WorkDrive."""

    def __init__(
        self,
        *,
        client: ZohoHttpClient,
        base_url: str,
        upload_timeout_seconds: float,
        page_size: int = 50,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._upload_timeout_seconds = upload_timeout_seconds
        self._page_size = page_size

    def list_folders(self, parent_id: str) -> list[RemoteFolder]:
        """List the immediate child folders of a folder, following pagination."""
        folders: list[RemoteFolder] = []
        offset = 0
        while True:
            response = self._client.request(
                "GET",
                f"{self._base_url}/files/{parent_id}/files",
                params={
                    "filter[type]": "folder",
                    "page[limit]": self._page_size,
                    "page[offset]": offset,
                },
                headers={"Accept": _JSON_API},
            )
            page = response.json().get("data") or []
            folders.extend(
                folder for folder in map(self._to_folder, page) if folder is not None
            )
            if len(page) < self._page_size:
                break
            offset += self._page_size

        Log.debug(f"Folder {parent_id} has {len(folders)} child folders")
        return folders

    def create_folder(self, parent_id: str, name: str) -> RemoteFolder:
        """Create a folder under a parent and return it."""
        body = {
            "data": {
                "attributes": {"name": name, "parent_id": parent_id},
                "type": "files",
            }
        }
        response = self._client.request(
            "POST",
            f"{self._base_url}/files",
            content=json.dumps(body),
            headers={"Content-Type": _JSON_API, "Accept": _JSON_API},
        )
        folder = self._to_folder(response.json().get("data") or {})
        if folder is None:
            raise ZohoApiError(f"Folder creation under {parent_id} returned no id")
        Log.info(f"Created folder '{name}' ({folder.id}) under {parent_id}")
        return folder

    def upload(
        self,
        folder_id: str,
        data: bytes,
        filename: str,
        override_name_collision: bool = True,
    ) -> UploadResult | None:
        """Upload a file into a folder.

        Returns:
            The provider-assigned resource attributes, or None if the response
            carried none.

        Raises:
            UploadError: on any non-success response.
        """
        try:
            response = self._client.request(
                "POST",
                f"{self._base_url}/upload",
                data={
                    "filename": filename,
                    "parent_id": folder_id,
                    "override-name-exist": "true" if override_name_collision else "false",
                },
                files={"content": (filename, data)},
                timeout=self._upload_timeout_seconds,
            )
        except ZohoApiError as exc:
            raise UploadError(
                f"Upload of '{filename}' to folder {folder_id} failed: {exc}",
                status_code=exc.status_code,
            ) from exc

        return self._to_upload_result(response.json())

    @staticmethod
    def _to_folder(item: dict[str, Any]) -> RemoteFolder | None:
        folder_id = item.get("id")
        if not folder_id:
            return None
        attributes = item.get("attributes") or {}
        return RemoteFolder(id=str(folder_id), name=str(attributes.get("name", "")))

    @staticmethod
    def _to_upload_result(payload: dict[str, Any]) -> UploadResult | None:
        items = payload.get("data") or []
        if not items:
            return None
        attributes = items[0].get("attributes") or {}
        resource_id = attributes.get("resource_id")
        if not resource_id:
            return None
        return UploadResult(
            parent_id=str(attributes.get("parent_id", "")),
            resource_id=str(resource_id),
            permalink=attributes.get("Permalink"),
        )
