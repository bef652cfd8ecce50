from datetime import datetime, timedelta, timezone

import pytest

from bixo.core.cookies import CookieStore
from bixo.core.session import (
    ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE, TokenSession, parse_expires_at,
)


def _close_to(actual, expected, tolerance=timedelta(minutes=1)):
    return abs(actual - expected) < tolerance


@pytest.mark.parametrize("value, expected", [
    ("2030-05-01T12:00:00Z", datetime(2030, 5, 1, 12, tzinfo=timezone.utc)),
    ("2030-05-01T14:00:00+02:00", datetime(2030, 5, 1, 12, tzinfo=timezone.utc)),
    ("2030-05-01T12:00:00", datetime(2030, 5, 1, 12, tzinfo=timezone.utc)),
    ("not a date", None),
    ("", None),
    (None, None),
])
def test_parse_expires_at(value, expected):
    assert parse_expires_at(value) == expected


def test_set_tokens_uses_server_expiry(session):
    session.set_tokens("access-1", "refresh-1", "2030-05-01T12:00:00Z")

    cookie = session.store.get_cookie(ACCESS_TOKEN_COOKIE)
    assert cookie.value == "access-1"
    assert cookie.expires == datetime(2030, 5, 1, 12, tzinfo=timezone.utc)
    assert cookie.path == "/"
    assert cookie.same_site == "Lax"


def test_unparseable_expiry_falls_back_to_24h(session):
    session.set_tokens("access-1", "refresh-1", "garbage")

    cookie = session.store.get_cookie(ACCESS_TOKEN_COOKIE)
    assert cookie.value == "access-1"
    assert _close_to(cookie.expires, datetime.now(timezone.utc) + timedelta(hours=24))
    assert session.access_token == "access-1"


def test_refresh_cookie_lives_seven_days(session):
    session.set_tokens("access-1", "refresh-1", "2030-05-01T12:00:00Z")

    cookie = session.store.get_cookie(REFRESH_TOKEN_COOKIE)
    assert cookie.value == "refresh-1"
    assert _close_to(cookie.expires, datetime.now(timezone.utc) + timedelta(days=7))
    assert cookie.same_site == "Lax"


def test_clear_tokens(session):
    session.set_tokens("access-1", "refresh-1", "2030-05-01T12:00:00Z")
    session.clear_tokens()

    assert session.access_token is None
    assert session.refresh_token is None
    assert session.store.names() == []


def test_cookie_removed_behind_our_back_drops_cached_token(session):
    session.set_tokens("access-1", "refresh-1", "2030-05-01T12:00:00Z")
    assert session.access_token == "access-1"

    session.store.remove(ACCESS_TOKEN_COOKIE)

    assert session.access_token is None


def test_tokens_survive_a_restart(tmp_path):
    path = tmp_path / "session.json"
    TokenSession(CookieStore(path)).set_tokens("access-1", "refresh-1", "2030-05-01T12:00:00Z")

    restarted = TokenSession(CookieStore(path))

    assert restarted.access_token == "access-1"
    assert restarted.refresh_token == "refresh-1"


def test_from_settings_memory_only():
    from bixo.core.config import Settings

    settings = Settings(TOKEN_STORE_PATH="", ACCESS_TOKEN_FALLBACK_HOURS=1)
    session = TokenSession.from_settings(settings)
    session.set_tokens("access-1", "refresh-1", None)

    assert session.store.path is None
    cookie = session.store.get_cookie(ACCESS_TOKEN_COOKIE)
    assert _close_to(cookie.expires, datetime.now(timezone.utc) + timedelta(hours=1))
