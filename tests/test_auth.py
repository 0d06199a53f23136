from unittest.mock import patch

import pytest

from time_tracking_calendar.api import auth
from time_tracking_calendar.api.auth import AuthError, get_current_user, get_optional_user


@pytest.fixture(autouse=True)
def no_bypass(monkeypatch):
    monkeypatch.delenv("TTC_DEV_AUTH_BYPASS", raising=False)
    monkeypatch.delenv("TTC_FIREBASE_PROJECT_ID", raising=False)
    auth._audiences.cache_clear()
    yield
    auth._audiences.cache_clear()


def test_missing_bearer_token():
    with pytest.raises(AuthError) as exc_info:
        get_current_user(None, None, None, None)
    assert exc_info.value.status_code == 401


def test_profile_from_verified_token():
    idinfo = {"email": "ada@example.com", "name": "Ada", "picture": "https://img/a.png"}
    with patch.object(auth, "_verify", return_value=idinfo) as verify:
        user = get_current_user("Bearer abc.def", None, None, None)

    verify.assert_called_once_with("abc.def")
    assert user.to_api_dict() == {
        "signedIn": True,
        "email": "ada@example.com",
        "displayName": "Ada",
        "photoURL": "https://img/a.png",
    }


def test_token_without_email_is_rejected():
    with patch.object(auth, "_verify", return_value={"sub": "123"}):
        with pytest.raises(AuthError):
            get_current_user("Bearer abc", None, None, None)


def test_tries_each_audience(monkeypatch):
    monkeypatch.setenv("GOOGLE_OAUTH_AUDIENCE", "web-client, ios-client")
    calls = []

    def fake_verify(token, request, audience):
        calls.append(audience)
        if audience != "ios-client":
            raise ValueError("wrong audience")
        return {"email": "ada@example.com"}

    with patch.object(auth.id_token, "verify_oauth2_token", side_effect=fake_verify):
        assert auth._verify("tok")["email"] == "ada@example.com"
    assert calls == ["web-client", "ios-client"]


def test_no_audience_configured(monkeypatch):
    monkeypatch.delenv("GOOGLE_OAUTH_AUDIENCE", raising=False)
    monkeypatch.delenv("GOOGLE_OAUTH_CLIENT_ID", raising=False)
    with pytest.raises(AuthError):
        auth._verify("tok")


def test_firebase_project_takes_precedence(monkeypatch):
    monkeypatch.setenv("TTC_FIREBASE_PROJECT_ID", "ttc-dev")
    with patch.object(auth.id_token, "verify_firebase_token", return_value={"email": "a@b.c"}) as verify:
        assert auth._verify("tok") == {"email": "a@b.c"}
    assert verify.call_args.kwargs["audience"] == "ttc-dev"


def test_dev_bypass_uses_headers(monkeypatch):
    monkeypatch.setenv("TTC_DEV_AUTH_BYPASS", "1")
    user = get_current_user(None, "dev@example.com", "Dev", None)
    assert user.email == "dev@example.com"
    assert user.display_name == "Dev"
    with pytest.raises(AuthError):
        get_current_user(None, None, None, None)


def test_optional_user_is_none_when_signed_out():
    assert get_optional_user(None, None, None, None) is None
