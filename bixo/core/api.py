"""
Authenticated HTTP client for the Bixo API.

Every call:
  1. Reads the access token fresh from the session (cookie store first).
  2. Sends ``Authorization: Bearer <token>`` when a token exists, nothing otherwise.
  3. On 401 with a refresh token available: one POST /auth/refresh, and on
     success exactly one retry of the original request with the new token.
     A second 401 is returned as-is.
  4. Normalizes the body into ``ApiResponse`` (see envelope.py).

Expected failures never raise: transport errors, HTTP errors and bad bodies
all come back as ``ApiResponse(success=False, error=...)``.
"""
import logging
from typing import Any, Mapping, Optional

import requests

from bixo.core.config import get_settings
from bixo.core.envelope import ApiResponse, normalize_response
from bixo.core.session import TokenSession

logger = logging.getLogger(__name__)

REFRESH_PATH = "/auth/refresh"
JSON_HEADERS = {"Content-Type": "application/json"}


class ApiClient:
    """
    Args:
        base_url: API root, e.g. ``http://localhost:5000/api``. Defaults to API_URL.
        session:  token session; defaults to the cookie file from TOKEN_STORE_PATH.
        http:     a ``requests.Session`` (or anything with the same ``request``).
        timeout:  seconds per HTTP call; defaults to REQUEST_TIMEOUT.
    """

    _DEFAULT = object()

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[TokenSession] = None,
        *,
        http: Optional[requests.Session] = None,
        timeout: Any = _DEFAULT,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.API_URL).rstrip("/")
        self.session = session or TokenSession.from_settings(settings)
        self._http = http or requests.Session()
        self._timeout = settings.REQUEST_TIMEOUT if timeout is ApiClient._DEFAULT else timeout

    # ── Tokens ────────────────────────────────────────────────────────────────

    def set_tokens(self, access_token: str, refresh_token: str, expires_at: Any) -> None:
        self.session.set_tokens(access_token, refresh_token, expires_at)

    def clear_tokens(self) -> None:
        self.session.clear_tokens()

    # ── Verbs ─────────────────────────────────────────────────────────────────

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> ApiResponse:
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        return self.request("GET", path, params=params or None)

    def post(self, path: str, body: Any = None) -> ApiResponse:
        return self.request("POST", path, body=body)

    def put(self, path: str, body: Any = None) -> ApiResponse:
        return self.request("PUT", path, body=body)

    def delete(self, path: str) -> ApiResponse:
        return self.request("DELETE", path)

    def upload_file(
        self,
        path: str,
        files: Mapping[str, Any],
        data: Optional[Mapping[str, Any]] = None,
    ) -> ApiResponse:
        """
        POST a multipart body.

        ``files`` follows requests' format, e.g. ``{"file": (name, content, mime)}``.
        Pass the content as bytes: a refresh-and-retry sends the body twice.
        """
        return self._execute("POST", path, json_content=False, files=files, data=data)

    def request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> ApiResponse:
        kwargs: dict[str, Any] = {}
        if body is not None:
            kwargs["json"] = body
        if params:
            kwargs["params"] = params
        return self._execute(method, path, json_content=True, **kwargs)

    def close(self) -> None:
        self._http.close()

    # ── Internal ──────────────────────────────────────────────────────────────

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _send(self, method: str, path: str, headers: dict[str, str], **kwargs) -> requests.Response:
        return self._http.request(
            method, self._url(path), headers=headers, timeout=self._timeout, **kwargs
        )

    def _execute(self, method: str, path: str, *, json_content: bool, **kwargs) -> ApiResponse:
        token = self.session.access_token
        headers = dict(JSON_HEADERS) if json_content else {}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        logger.debug("%s %s (auth header set: %s)", method, path, bool(token))

        try:
            response = self._send(method, path, headers, **kwargs)

            if response.status_code == 401 and self.session.refresh_token:
                new_token = self._refresh_access_token()
                if new_token:
                    headers["Authorization"] = f"Bearer {new_token}"
                    response = self._send(method, path, headers, **kwargs)

            return normalize_response(response.status_code, response.text)
        except requests.RequestException as e:
            logger.error(f"API request error: {method} {path}: {e}")
            return ApiResponse.fail(str(e) or "Network error")

    def _refresh_access_token(self) -> Optional[str]:
        """Rotate the token pair. Returns the new access token, or None."""
        refresh_token = self.session.refresh_token
        if not refresh_token:
            return None

        try:
            response = self._send(
                "POST", REFRESH_PATH, dict(JSON_HEADERS), json={"refreshToken": refresh_token}
            )
        except requests.RequestException as e:
            logger.warning(f"Token refresh failed: {e}")
            return None

        if not response.ok:
            logger.info("Token refresh rejected with status %d", response.status_code)
            return None

        try:
            result = response.json()
            data = result["data"] if result.get("success") is True else None
            if not data:
                logger.info("Token refresh returned no token pair")
                return None
            access_token, new_refresh = data["accessToken"], data["refreshToken"]
            if not (isinstance(access_token, str) and isinstance(new_refresh, str)):
                raise TypeError("token pair must be strings")
            self.session.set_tokens(access_token, new_refresh, data.get("expiresAt"))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Token refresh returned a malformed payload: {e}")
            return None

        logger.info("Access token refreshed")
        return access_token
