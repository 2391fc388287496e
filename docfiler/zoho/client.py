from typing import Any

import httpx

from docfiler.logging.logger import Log
from docfiler.zoho.auth import ZohoTokenManager
from docfiler.zoho.exceptions import ZohoApiError

_ERROR_BODY_LIMIT = 500


class ZohoHttpClient:
    """Authenticated Zoho API transport with a single retry after token refresh."""

    def __init__(self, *, http: httpx.Client, token_manager: ZohoTokenManager) -> None:
        self._http = http
        self._tokens = token_manager

    def request(
        self,
        method: str,
        url: str,
        *,
        timeout: float | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a request; on HTTP 401 refresh the token and retry exactly once.

        Raises:
            ZohoApiError: on transport failure or any other non-success status.
            ZohoAuthError: if the token refresh itself fails.
        """
        response = self._send(method, url, timeout, kwargs)
        if response.status_code == 401:
            Log.info("Zoho access token expired, refreshing")
            self._tokens.refresh()
            response = self._send(method, url, timeout, kwargs)

        if response.is_error:
            raise ZohoApiError(
                f"{method} {url} failed with HTTP {response.status_code}: "
                f"{response.text[:_ERROR_BODY_LIMIT]}",
                status_code=response.status_code,
            )
        return response

    def close(self) -> None:
        self._http.close()

    def _send(
        self,
        method: str,
        url: str,
        timeout: float | None,
        kwargs: dict[str, Any],
    ) -> httpx.Response:
        request_kwargs: dict[str, Any] = dict(kwargs)
        request_kwargs["headers"] = {
            **(kwargs.get("headers") or {}),
            "Authorization": f"Zoho-oauthtoken {self._tokens.access_token}",
        }
        if timeout is not None:
            request_kwargs["timeout"] = timeout
        try:
            return self._http.request(method, url, **request_kwargs)
        except httpx.HTTPError as exc:
            raise ZohoApiError(f"{method} {url} failed: {exc}") from exc
