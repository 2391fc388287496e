from typing import Any

from docfiler.logging.logger import Log
from docfiler.zoho.client import ZohoHttpClient


def folder_id_from_link(link: Any) -> str | None:
    """Extract the WorkDrive folder ID from a CRM folder link field.

    The field holds either a bare ID or a WorkDrive URL whose last path
    component is the folder ID.
    """
    if not isinstance(link, str):
        return None
    return link.rstrip("/").split("/")[-1] or None


class ZohoCrmClient:
    """Looks up per-account data in Zoho CRM."""

    def __init__(
        self,
        *,
        client: ZohoHttpClient,
        base_url: str,
        root_folder_field: str,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._root_folder_field = root_folder_field

    def get_root_folder_id(self, account_id: str) -> str | None:
        """Return the WorkDrive root folder ID linked to an account, or None."""
        response = self._client.request("GET", f"{self._base_url}/Accounts/{account_id}")
        if response.status_code == 204 or not response.content:
            Log.warning(f"CRM account {account_id} not found")
            return None

        records = response.json().get("data") or []
        if not records:
            return None
        folder_id = folder_id_from_link(records[0].get(self._root_folder_field))
        Log.debug(f"CRM account {account_id} root folder: {folder_id}")
        return folder_id
