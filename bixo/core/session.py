"""
Session tokens: the access/refresh pair behind every authenticated call.

The cookie store is the single source of truth. The in-memory copy is a
read-through cache refreshed on every access: if the cookie disappeared
(logout in another session, expiry) the cached token is dropped as well.
"""
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Optional

from bixo.core.config import Settings, get_settings
from bixo.core.cookies import CookieStore

logger = logging.getLogger(__name__)

ACCESS_TOKEN_COOKIE = "accessToken"
REFRESH_TOKEN_COOKIE = "refreshToken"


def parse_expires_at(value: Any) -> Optional[datetime]:
    """
    Parse the server's ``expiresAt`` into an aware UTC datetime.

    Returns None when the value is missing or not an ISO-8601 timestamp
    (numbers, nulls and garbage included).
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class TokenSession:
    """
    Owns the token pair for one client.

    Args:
        store:             durable cookie storage.
        fallback_lifetime: access-token lifetime when ``expiresAt`` is unparseable.
        refresh_lifetime:  refresh-token lifetime.
    """

    def __init__(
        self,
        store: CookieStore,
        *,
        fallback_lifetime: timedelta = timedelta(hours=24),
        refresh_lifetime: timedelta = timedelta(days=7),
        cookie_path: str = "/",
        same_site: str = "Lax",
    ) -> None:
        self._store = store
        self._fallback_lifetime = fallback_lifetime
        self._refresh_lifetime = refresh_lifetime
        self._cookie_path = cookie_path
        self._same_site = same_site
        self._access_token: Optional[str] = None
        self._refresh_token: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "TokenSession":
        settings = settings or get_settings()
        return cls(
            CookieStore(Path(settings.TOKEN_STORE_PATH) if settings.TOKEN_STORE_PATH else None),
            fallback_lifetime=timedelta(hours=settings.ACCESS_TOKEN_FALLBACK_HOURS),
            refresh_lifetime=timedelta(days=settings.REFRESH_TOKEN_DAYS),
            cookie_path=settings.COOKIE_PATH,
            same_site=settings.COOKIE_SAME_SITE,
        )

    @property
    def store(self) -> CookieStore:
        return self._store

    @property
    def access_token(self) -> Optional[str]:
        """Current access token, read fresh from the cookie store."""
        token = self._store.get(ACCESS_TOKEN_COOKIE, self._cookie_path)
        if token:
            self._access_token = token
        elif self._access_token:
            logger.debug("Access-token cookie gone, dropping in-memory token")
            self._access_token = None
        return self._access_token

    @property
    def refresh_token(self) -> Optional[str]:
        token = self._store.get(REFRESH_TOKEN_COOKIE, self._cookie_path)
        self._refresh_token = token or None
        return self._refresh_token

    def set_tokens(
        self,
        access_token: str,
        refresh_token: str,
        expires_at: Any,
    ) -> None:
        logger.debug(
            "set_tokens: access token length=%d, expiresAt=%s",
            len(access_token or ""), expires_at,
        )
        expires = parse_expires_at(expires_at)
        if expires is None:
            logger.warning("Invalid expiresAt %r, using %s fallback", expires_at, self._fallback_lifetime)
            expires = datetime.now(timezone.utc) + self._fallback_lifetime

        self._access_token = access_token
        self._refresh_token = refresh_token
        self._store.set(
            ACCESS_TOKEN_COOKIE, access_token,
            expires=expires, path=self._cookie_path, same_site=self._same_site,
        )
        self._store.set(
            REFRESH_TOKEN_COOKIE, refresh_token,
            expires=self._refresh_lifetime, path=self._cookie_path, same_site=self._same_site,
        )

    def clear_tokens(self) -> None:
        self._access_token = None
        self._refresh_token = None
        self._store.remove(ACCESS_TOKEN_COOKIE, self._cookie_path)
        self._store.remove(REFRESH_TOKEN_COOKIE, self._cookie_path)
