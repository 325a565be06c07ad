import pytest
from itsdangerous import BadSignature, SignatureExpired

from travelapp.config import settings
from travelapp.security import hash_password, verify_password, create_token, decode_token
from tests.conftest import auth_header


def test_password_hashing():
    hashed = hash_password("hunter22")
    assert hashed != "hunter22"
    assert verify_password("hunter22", hashed)
    assert not verify_password("hunter23", hashed)

def test_token_carries_user_id_and_username():
    token = create_token("abc123", "alice")
    assert decode_token(token) == {"userId": "abc123", "username": "alice"}

def test_token_expiry():
    token = create_token("abc123", "alice")
    with pytest.raises(SignatureExpired):
        decode_token(token, max_age=-1)

def test_tampered_token():
    token = create_token("abc123", "alice")
    with pytest.raises(BadSignature):
        decode_token(token[:-2] + "xx")

def test_missing_token_rejected(client):
    res = client.get("/api/auth/me")
    assert res.status_code == 401
    assert res.json()["detail"] == "No token provided. Access denied."

def test_malformed_header_rejected(client):
    res = client.get("/api/auth/me", headers={"Authorization": "Token abc"})
    assert res.status_code == 401

def test_invalid_token_rejected(client):
    res = client.get("/api/auth/me", headers=auth_header("not-a-token"))
    assert res.status_code == 401
    assert res.json()["detail"] == "Invalid token. Access denied."

def test_expired_token_rejected(client, make_user, monkeypatch):
    _, token = make_user()
    monkeypatch.setattr(settings, "TOKEN_MAX_AGE_SECONDS", -1)
    res = client.get("/api/auth/me", headers=auth_header(token))
    assert res.status_code == 401
    assert res.json()["detail"] == "Token has expired. Please login again."
