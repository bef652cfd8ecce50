import json

import pytest
import requests

from bixo.core.api import ApiClient
from bixo.core.cookies import CookieStore
from bixo.core.session import TokenSession

BASE_URL = "http://api.test/api"


def make_response(status=200, body=None, text=None):
    """A real requests.Response with the given status and body."""
    r = requests.Response()
    r.status_code = status
    if text is None:
        text = "" if body is None else json.dumps(body)
    r._content = text.encode("utf-8")
    r.encoding = "utf-8"
    return r


def auth_payload(access="access-1", refresh="refresh-1", expires_at="2099-01-01T00:00:00Z", user_type=0):
    return {
        "success": True,
        "data": {
            "userId": "u-1",
            "email": "ada@example.com",
            "userType": user_type,
            "accessToken": access,
            "refreshToken": refresh,
            "expiresAt": expires_at,
        },
    }


def user_payload(user_type=0):
    return {
        "success": True,
        "data": {"id": "u-1", "email": "ada@example.com", "userType": user_type, "isActive": True},
    }


class FakeHttp:
    """Stand-in for requests.Session: answers from a script, records every call."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    def request(self, method, url, headers=None, timeout=None, **kwargs):
        self.calls.append(
            {"method": method, "url": url, "headers": dict(headers or {}), "timeout": timeout, **kwargs}
        )
        if not self.replies:
            raise AssertionError(f"unexpected request: {method} {url}")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def close(self):
        pass

    def paths(self):
        return [c["url"][len(BASE_URL):] for c in self.calls]


@pytest.fixture
def session():
    return TokenSession(CookieStore())


@pytest.fixture
def make_client(session):
    def _make(*replies):
        http = FakeHttp(*replies)
        return ApiClient(BASE_URL, session, http=http, timeout=5), http
    return _make
