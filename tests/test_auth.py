from datetime import datetime, timedelta, timezone

import pytest

from bixo.core.auth import AuthService, home_path
from bixo.models.schemas import UserType

from tests.conftest import auth_payload, make_response, user_payload


def test_login_stores_tokens_and_loads_user(session, make_client):
    client, http = make_client(
        make_response(200, auth_payload()),
        make_response(200, user_payload()),
    )
    auth = AuthService(client)

    result = auth.login("ada@example.com", "secret")

    assert result.success is True
    assert result.redirect == "/candidate/dashboard"
    assert http.calls[0]["json"] == {"email": "ada@example.com", "password": "secret"}
    assert http.paths() == ["/auth/login", "/auth/me"]
    assert http.calls[1]["headers"]["Authorization"] == "Bearer access-1"
    assert session.access_token == "access-1"
    assert session.refresh_token == "refresh-1"
    assert auth.is_authenticated
    assert auth.user.email == "ada@example.com"


@pytest.mark.parametrize("expires_at", [None, 1893456000, "soon"])
def test_login_with_unusable_expiry_falls_back_to_24h(session, make_client, expires_at):
    client, http = make_client(
        make_response(200, auth_payload(expires_at=expires_at)),
        make_response(200, user_payload()),
    )

    result = AuthService(client).login("ada@example.com", "secret")

    assert result.success is True
    assert http.paths() == ["/auth/login", "/auth/me"]
    assert session.access_token == "access-1"
    expires = session.store.get_cookie("accessToken").expires
    expected = datetime.now(timezone.utc) + timedelta(hours=24)
    assert abs(expires - expected) < timedelta(minutes=1)


def test_login_redirects_by_user_type(make_client):
    client, _ = make_client(
        make_response(200, auth_payload(user_type=2)),
        make_response(200, user_payload(user_type=2)),
    )
    assert AuthService(client).login("root@example.com", "pw").redirect == "/admin/dashboard"


def test_login_failure_surfaces_server_message(session, make_client):
    client, http = make_client(make_response(401, {"success": False, "message": "Invalid credentials"}))
    auth = AuthService(client)

    result = auth.login("ada@example.com", "wrong")

    assert result.success is False
    assert result.error == "Invalid credentials"
    assert len(http.calls) == 1
    assert session.access_token is None
    assert not auth.is_authenticated


def test_login_failure_default_message(make_client):
    client, _ = make_client(make_response(400, {"success": False}))
    assert AuthService(client).login("a", "b").error == "Login failed"


def test_register_candidate(make_client):
    client, http = make_client(
        make_response(200, auth_payload()),
        make_response(200, user_payload()),
    )

    result = AuthService(client).register_candidate("ada@example.com", "pw", "Ada", "Lovelace")

    assert result.success is True
    assert result.redirect == "/candidate/onboard"
    assert http.calls[0]["json"] == {
        "email": "ada@example.com", "password": "pw", "firstName": "Ada", "lastName": "Lovelace",
    }


def test_register_company(make_client):
    client, http = make_client(
        make_response(200, auth_payload(user_type=1)),
        make_response(200, user_payload(user_type=1)),
    )

    result = AuthService(client).register_company("hr@acme.io", "pw", "Acme", "Fintech")

    assert result.redirect == "/company/dashboard"
    assert http.paths()[0] == "/auth/register/company"
    assert http.calls[0]["json"]["companyName"] == "Acme"


def test_register_failure(make_client):
    client, _ = make_client(make_response(409, {"success": False, "error": "Email already registered"}))
    result = AuthService(client).register_company("hr@acme.io", "pw", "Acme", "Fintech")
    assert result.success is False
    assert result.error == "Email already registered"


def test_logout_clears_session(session, make_client):
    client, http = make_client(
        make_response(200, auth_payload()),
        make_response(200, user_payload()),
        make_response(401, {"success": False, "error": "Unauthorized"}),
    )
    auth = AuthService(client)
    auth.login("ada@example.com", "secret")

    result = auth.logout()

    assert result.redirect == "/login"
    assert auth.user is None
    assert auth.check_auth() is None
    assert "Authorization" not in http.calls[-1]["headers"]


def test_check_auth_failure(make_client):
    client, _ = make_client(make_response(401, {"success": False, "error": "Unauthorized"}))
    assert AuthService(client).check_auth() is None


def test_home_path():
    assert home_path(UserType.CANDIDATE) == "/candidate/dashboard"
    assert home_path(UserType.COMPANY) == "/company/dashboard"
    assert home_path(UserType.ADMIN) == "/admin/dashboard"
