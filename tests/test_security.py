import pytest
from jose import jwt

from shared.config import settings
from shared.security import api_key, attachment_links, jwt_handler
from shared.security.admin import ApiKeyAdminAuthenticator, JWTAdminAuthenticator


def test_configured_api_key_is_accepted():
    assert api_key.verify_api_key("test-admin-key") is True
    assert api_key.verify_api_key("wrong") is False
    assert api_key.verify_api_key("") is False


def test_unset_api_key_refuses_every_key(monkeypatch):
    monkeypatch.setattr(api_key, "ADMIN_API_KEY", "")

    for candidate in ("insecure-default-change-me", "", "anything"):
        assert api_key.verify_api_key(candidate) is False
    assert ApiKeyAdminAuthenticator().authenticate(None, "insecure-default-change-me") is None


def test_admin_token_round_trip():
    token = jwt_handler.create_admin_token("ops")

    assert JWTAdminAuthenticator().authenticate(token, None) == "ops"


def test_token_without_admin_role_is_refused():
    token = jwt_handler.create_access_token({"sub": "42"})

    assert JWTAdminAuthenticator().authenticate(token, None) is None


def test_unset_jwt_secret_refuses_every_token(monkeypatch):
    forged = jwt.encode({"sub": "mallory", "role": "admin"}, "insecure-jwt-secret-change-me", algorithm="HS256")
    monkeypatch.setattr(jwt_handler, "SECRET_KEY", "")

    assert jwt_handler.verify_access_token(forged) is None
    assert JWTAdminAuthenticator().authenticate(forged, None) is None


def test_unset_jwt_secret_issues_no_tokens(monkeypatch):
    monkeypatch.setattr(jwt_handler, "SECRET_KEY", "")

    with pytest.raises(RuntimeError):
        jwt_handler.create_admin_token("ops")


def test_attachment_link_resolves_to_its_key():
    link = attachment_links.sign_attachment_key("orders/attachments/NB-1/screenshot")

    assert attachment_links.verify_attachment_link(link) == "orders/attachments/NB-1/screenshot"


def test_admin_token_is_not_an_attachment_link():
    assert attachment_links.verify_attachment_link(jwt_handler.create_admin_token("ops")) is None


def test_attachment_link_signing_key_takes_precedence(monkeypatch):
    link = attachment_links.sign_attachment_key("orders/attachments/NB-1/screenshot")
    monkeypatch.setattr(settings, "ATTACHMENT_SIGNING_KEY", "rotated")

    assert attachment_links.verify_attachment_link(link) is None


def test_attachment_links_fail_closed_without_any_key(monkeypatch):
    link = attachment_links.sign_attachment_key("orders/attachments/NB-1/screenshot")
    monkeypatch.setattr(settings, "ATTACHMENT_SIGNING_KEY", "")
    monkeypatch.setattr(jwt_handler, "SECRET_KEY", "")

    assert attachment_links.verify_attachment_link(link) is None
    with pytest.raises(RuntimeError):
        attachment_links.sign_attachment_key("orders/attachments/NB-1/screenshot")
