"""
Durable cookie store for session tokens.

Cookies are kept with the attributes a browser would honour:
  • expires    absolute UTC timestamp; expired cookies read as absent
  • path       scope of the cookie (site-wide "/" for session tokens)
  • same_site  "Lax" / "Strict" / "None"

Storage: a JSON file on disk, no external dependency required. The file is
re-read on every lookup, so a token rotated by another process (another
Streamlit session, a script) is picked up immediately. Last writer wins.
Writes go to a temp file that replaces the store in one step, so readers
never see a half-written file.
Without a path the store lives in memory only.
Thread-safety: one module-level threading.Lock shared by every store.
"""
import json
import logging
import os
import tempfile
import threading
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

_LOCK = threading.Lock()


@dataclass
class Cookie:
    name: str
    value: str
    expires: datetime
    path: str = "/"
    same_site: str = "Lax"

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return self.expires <= now

    def to_json(self) -> dict:
        doc = asdict(self)
        doc["expires"] = self.expires.isoformat()
        return doc

    @classmethod
    def from_json(cls, doc: dict) -> "Cookie":
        expires = datetime.fromisoformat(doc["expires"])
        if expires.tzinfo is None:
            expires = expires.replace(tzinfo=timezone.utc)
        return cls(
            name=doc["name"],
            value=doc["value"],
            expires=expires,
            path=doc.get("path", "/"),
            same_site=doc.get("same_site", "Lax"),
        )


class CookieStore:
    """
    Named cookies with expiration, persisted to a JSON file.

    Args:
        store_path: JSON file used for persistence, or None for memory only.
    """

    def __init__(self, store_path: Optional[Path] = None) -> None:
        self._path = Path(store_path) if store_path is not None else None
        self._cookies: dict[tuple[str, str], Cookie] = {}
        with _LOCK:
            self._load()

    @property
    def path(self) -> Optional[Path]:
        return self._path

    # ── Public API ────────────────────────────────────────────────────────────

    def get(self, name: str, path: str = "/") -> Optional[str]:
        """Return the cookie value, or None if absent or expired."""
        cookie = self.get_cookie(name, path)
        return cookie.value if cookie else None

    def get_cookie(self, name: str, path: str = "/") -> Optional[Cookie]:
        with _LOCK:
            self._load()
            cookie = self._cookies.get((name, path))
            if cookie is None:
                return None
            if cookie.is_expired():
                logger.debug("Cookie '%s' expired at %s", name, cookie.expires.isoformat())
                del self._cookies[(name, path)]
                self._save()
                return None
            return cookie

    def set(
        self,
        name: str,
        value: str,
        *,
        expires: Union[datetime, timedelta],
        path: str = "/",
        same_site: str = "Lax",
    ) -> Cookie:
        """
        Store a cookie (persists immediately).

        ``expires`` is either an absolute datetime (naive values are taken as
        UTC) or a lifetime relative to now.
        """
        if isinstance(expires, timedelta):
            expires = datetime.now(timezone.utc) + expires
        elif expires.tzinfo is None:
            expires = expires.replace(tzinfo=timezone.utc)

        cookie = Cookie(name=name, value=value, expires=expires, path=path, same_site=same_site)
        with _LOCK:
            self._load()
            self._cookies[(name, path)] = cookie
            self._save()
        return cookie

    def remove(self, name: str, path: str = "/") -> None:
        with _LOCK:
            self._load()
            if self._cookies.pop((name, path), None) is not None:
                self._save()

    def names(self) -> list[str]:
        """Names of the cookies that are currently live."""
        with _LOCK:
            self._load()
            return sorted({name for (name, _), c in self._cookies.items() if not c.is_expired()})

    # ── Internal ──────────────────────────────────────────────────────────────

    def _load(self) -> None:
        if self._path is None:
            return
        if not self._path.exists():
            self._cookies = {}
            return
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            cookies = [Cookie.from_json(doc) for doc in raw.get("cookies", [])]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning("CookieStore: could not load %s, starting empty. %s", self._path, exc)
            self._cookies = {}
            return
        self._cookies = {(c.name, c.path): c for c in cookies}

    def _save(self) -> None:
        if self._path is None:
            return
        payload = json.dumps({"cookies": [c.to_json() for c in self._cookies.values()]}, indent=2)
        tmp_name = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            logger.error("CookieStore: failed to persist to %s: %s", self._path, exc)
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
