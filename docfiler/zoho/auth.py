import httpx

from docfiler.logging.logger import Log
from docfiler.zoho.exceptions import ZohoAuthError


class ZohoTokenManager:
    """Holds the current Zoho OAuth access token and refreshes it on demand."""

    def __init__(
        self,
        *,
        http: httpx.Client,
        auth_url: str,
        client_id: str,
        client_secret: str,
        refresh_token: str,
        access_token: str = "",
    ) -> None:
        self._http = http
        self._auth_url = auth_url
        self._client_id = client_id
        self._client_secret = client_secret
        self._refresh_token = refresh_token
        self._access_token = access_token

    @property
    def access_token(self) -> str:
        return self._access_token

    def refresh(self) -> str:
        """Exchange the refresh token for a new access token.

        Raises:
            ZohoAuthError: if the accounts endpoint rejects the request.
        """
        try:
            response = self._http.post(
                self._auth_url,
                params={
                    "refresh_token": self._refresh_token,
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                    "grant_type": "refresh_token",
                },
            )
        except httpx.HTTPError as exc:
            raise ZohoAuthError(f"Failed to refresh access token: {exc}") from exc

        if response.is_error:
            raise ZohoAuthError(
                f"Failed to refresh access token: HTTP {response.status_code}"
            )
        token = response.json().get("access_token")
        if not token:
            raise ZohoAuthError("Token refresh response carried no access_token")

        self._access_token = token
        Log.info("Zoho access token refreshed")
        return token
