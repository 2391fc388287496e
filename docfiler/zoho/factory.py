from dataclasses import dataclass

import httpx

from docfiler.config.settings import Settings
from docfiler.zoho.auth import ZohoTokenManager
from docfiler.zoho.client import ZohoHttpClient
from docfiler.zoho.crm import ZohoCrmClient
from docfiler.zoho.workdrive import ZohoWorkDriveClient


@dataclass(frozen=True)
class ZohoClients:
    http: ZohoHttpClient
    crm: ZohoCrmClient
    workdrive: ZohoWorkDriveClient


def build_zoho_clients(
    settings: Settings,
    transport: httpx.BaseTransport | None = None,
) -> ZohoClients:
    """Build CRM and WorkDrive clients sharing one token manager and connection pool."""
    http = httpx.Client(timeout=settings.zoho_timeout_seconds, transport=transport)
    tokens = ZohoTokenManager(
        http=http,
        auth_url=settings.zoho_auth_url,
        client_id=settings.zoho_client_id,
        client_secret=settings.zoho_client_secret,
        refresh_token=settings.zoho_refresh_token,
        access_token=settings.zoho_access_token,
    )
    client = ZohoHttpClient(http=http, token_manager=tokens)
    return ZohoClients(
        http=client,
        crm=ZohoCrmClient(
            client=client,
            base_url=settings.zoho_crm_base_url,
            root_folder_field=settings.zoho_root_folder_field,
        ),
        workdrive=ZohoWorkDriveClient(
            client=client,
            base_url=settings.zoho_workdrive_base_url,
            upload_timeout_seconds=settings.zoho_upload_timeout_seconds,
        ),
    )
