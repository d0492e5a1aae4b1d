"""
Tests for password hashing and session tokens.
"""
import base64
import json
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from clinic_auth.auth.exceptions import InvalidTokenException, TokenExpiredException
from clinic_auth.auth.models import UserRole
from clinic_auth.config import InsecureConfigurationError, settings
from clinic_auth.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    pwd_context,
    verify_password,
)


def _b64(data: dict) -> str:
    raw = json.dumps(data, separators=(",", ":")).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


# Password hashing

def test_hash_verifies_original_password():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed) is True


@pytest.mark.parametrize("other", ["secret124", "Secret123", "secret123 ", ""])
def test_hash_rejects_other_passwords(other):
    assert verify_password(other, hash_password("secret123")) is False


def test_passwords_differing_past_72_bytes_do_not_match():
    stored = hash_password("a" * 72 + "X")
    assert verify_password("a" * 72 + "X", stored) is True
    assert verify_password("a" * 72 + "Y", stored) is False
    assert verify_password("a" * 72, stored) is False


def test_plain_bcrypt_hashes_still_verify():
    legacy = pwd_context.handler("bcrypt").using(rounds=4).hash("secret123")
    assert verify_password("secret123", legacy) is True
    assert verify_password("secret124", legacy) is False


def test_each_hash_uses_a_fresh_salt():
    first = hash_password("secret123")
    second = hash_password("secret123")
    assert first != second
    assert len(first) == len(second)


@pytest.mark.parametrize("malformed", ["not-a-hash", "$2b$04$short", "", None])
def test_malformed_hash_returns_false(malformed):
    assert verify_password("secret123", malformed) is False


# Session tokens

def test_token_round_trip():
    token = create_access_token(7, UserRole.NURSE)
    payload = decode_access_token(token)
    assert payload.user_id == 7
    assert payload.role == UserRole.NURSE
    assert payload.expires_at - payload.issued_at == timedelta(hours=24)


def test_token_accepts_role_strings():
    assert decode_access_token(create_access_token(3, "patient")).role == UserRole.PATIENT


def test_token_valid_just_before_expiry():
    issued_at = datetime.now(timezone.utc) - timedelta(hours=23, minutes=59)
    assert decode_access_token(create_access_token(1, UserRole.DOCTOR, issued_at=issued_at)).user_id == 1


def test_expired_token_is_reported_as_expired():
    issued_at = datetime.now(timezone.utc) - timedelta(hours=25)
    token = create_access_token(1, UserRole.DOCTOR, issued_at=issued_at)
    with pytest.raises(TokenExpiredException):
        decode_access_token(token)


def test_tampered_payload_is_invalid():
    header, _, signature = create_access_token(1, UserRole.PATIENT).split(".")
    forged_payload = _b64({
        "id": 1,
        "role": "doctor",
        "iat": int(datetime.now(timezone.utc).timestamp()),
        "exp": int((datetime.now(timezone.utc) + timedelta(hours=1)).timestamp()),
    })
    with pytest.raises(InvalidTokenException):
        decode_access_token(f"{header}.{forged_payload}.{signature}")


def test_token_signed_with_another_secret_is_invalid():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"id": 1, "role": "nurse", "iat": now, "exp": now + timedelta(hours=1)},
        "some-other-secret",
        algorithm="HS256",
    )
    with pytest.raises(InvalidTokenException):
        decode_access_token(token)


@pytest.mark.parametrize("garbage", ["", "abc", "a.b.c", "Bearer xyz"])
def test_malformed_token_is_invalid(garbage):
    with pytest.raises(InvalidTokenException):
        decode_access_token(garbage)


@pytest.mark.parametrize("claims", [
    {"role": "nurse"},
    {"id": 1},
    {"id": "1", "role": "nurse"},
    {"id": 1, "role": "admin"},
])
def test_token_with_wrong_claims_is_invalid(claims):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {**claims, "iat": now, "exp": now + timedelta(hours=1)},
        settings.get_signing_secret(),
        algorithm=settings.algorithm,
    )
    with pytest.raises(InvalidTokenException):
        decode_access_token(token)


def test_tokens_cannot_be_issued_without_secret_in_production(monkeypatch):
    monkeypatch.setattr(settings, "secret_key", None)
    monkeypatch.setattr(settings, "environment", "production")
    with pytest.raises(InsecureConfigurationError):
        create_access_token(1, UserRole.NURSE)
