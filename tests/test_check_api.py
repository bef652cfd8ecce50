import importlib.util
from pathlib import Path

import pytest

from bixo.core.api import ApiClient

from tests.conftest import BASE_URL, FakeHttp, auth_payload, make_response, user_payload

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "check_api.py"


@pytest.fixture
def check_api(monkeypatch, session):
    spec = importlib.util.spec_from_file_location("check_api", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    http = FakeHttp()
    monkeypatch.setattr(module, "ApiClient", lambda: ApiClient(BASE_URL, session, http=http))
    module.http = http
    return module


def test_sign_in_and_show_user(check_api, capsys):
    check_api.http.replies += [
        make_response(200, auth_payload(user_type=1)),
        make_response(200, user_payload(user_type=1)),
        make_response(200, user_payload(user_type=1)),
    ]

    code = check_api.main(["--email", "ada@example.com", "--password", "secret"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Home page: /company/dashboard" in out
    assert "Type:      company" in out


def test_not_signed_in(check_api, capsys):
    check_api.http.replies.append(make_response(401, {"success": False, "error": "Unauthorized"}))
    assert check_api.main([]) == 1
    assert "Not signed in" in capsys.readouterr().out


def test_login_failure(check_api, capsys):
    check_api.http.replies.append(make_response(401, {"success": False, "message": "Invalid credentials"}))
    assert check_api.main(["--email", "ada@example.com", "--password", "nope"]) == 1
    assert "[ERROR] Invalid credentials" in capsys.readouterr().out


def test_logout(check_api, session):
    session.set_tokens("access-1", "refresh-1", "2099-01-01T00:00:00Z")
    assert check_api.main(["--logout"]) == 0
    assert session.access_token is None
