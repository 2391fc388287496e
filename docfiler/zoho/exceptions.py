class ZohoError(Exception):
    """Base exception for Zoho API errors."""


class ZohoAuthError(ZohoError):
    """Raised when the OAuth access token cannot be refreshed."""


class ZohoApiError(ZohoError):
    """Raised when a Zoho API call fails or returns a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UploadError(ZohoApiError):
    """Raised when WorkDrive rejects a file upload."""
