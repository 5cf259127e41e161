import base64
import json
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from core.config import Settings
from core.security import (
    ExpiredToken,
    InvalidAlgorithm,
    InvalidSignature,
    MalformedToken,
    PasswordHasher,
    SigningError,
    TokenService,
)


def _claims(settings, **overrides):
    now = datetime.now(timezone.utc)
    claims = {
        "jti": "1",
        "sub": "ADMIN",
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + timedelta(hours=1),
    }
    claims.update(overrides)
    return claims


def _b64(data: dict) -> str:
    raw = json.dumps(data, default=str).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


# -- PasswordHasher ---------------------------------------------------------


def test_hash_is_not_plaintext_and_verifies(hasher):
    stored = hasher.hash("Test*999")
    assert stored != "Test*999"
    assert stored.startswith("$pbkdf2-sha256$")
    assert hasher.verify("Test*999", stored)
    assert not hasher.verify("Test*998", stored)


def test_hash_is_salted(hasher):
    assert hasher.hash("Test*999") != hasher.hash("Test*999")


def test_verify_rejects_unreadable_hash(hasher):
    with pytest.raises(ValueError):
        hasher.verify("Test*999", "not-a-hash")


def test_hash_keeps_configured_rounds():
    stored = PasswordHasher(rounds=1234).hash("Test*999")
    assert "$1234$" in stored


# -- TokenService -----------------------------------------------------------


def test_issue_and_verify(tokens, settings):
    claims = tokens.verify(tokens.issue("ADMIN", 42))
    assert claims.subject == "ADMIN"
    assert claims.token_id == "42"
    assert claims.issuer == settings.jwt_issuer
    assert claims.audience == settings.jwt_audience
    assert claims.expires_at - claims.issued_at == 3 * 60 * 60


def test_token_header_is_hs256(tokens):
    assert jwt.get_unverified_header(tokens.issue("READER", 1))["alg"] == "HS256"


def test_expired_token(settings, tokens):
    issued_long_ago = TokenService(
        settings,
        now=lambda: datetime.now(timezone.utc) - timedelta(hours=3, minutes=1),
    )
    token = issued_long_ago.issue("ADMIN", 1)
    with pytest.raises(ExpiredToken):
        tokens.verify(token)


def test_token_still_valid_just_before_expiry(settings, tokens):
    issued_earlier = TokenService(
        settings,
        now=lambda: datetime.now(timezone.utc) - timedelta(hours=2, minutes=59),
    )
    assert tokens.verify(issued_earlier.issue("ADMIN", 1)).subject == "ADMIN"


def test_other_hmac_algorithm_is_rejected(settings, tokens):
    token = jwt.encode(_claims(settings), settings.secret_key, algorithm="HS512")
    with pytest.raises(InvalidAlgorithm):
        tokens.verify(token)


def test_unsigned_token_is_rejected(settings, tokens):
    claims = _claims(settings)
    claims["iat"] = int(claims["iat"].timestamp())
    claims["exp"] = int(claims["exp"].timestamp())
    token = f"{_b64({'alg': 'none', 'typ': 'JWT'})}.{_b64(claims)}."
    with pytest.raises(InvalidAlgorithm):
        tokens.verify(token)


def test_foreign_secret_is_rejected(settings, tokens):
    token = jwt.encode(_claims(settings), "some-other-secret-of-a-decent-length", algorithm="HS256")
    with pytest.raises(InvalidSignature):
        tokens.verify(token)


def test_tampered_payload_is_rejected(settings, tokens):
    header, _, signature = tokens.issue("READER", 7).split(".")
    forged = _claims(settings, sub="ADMIN", jti="7")
    forged["iat"] = int(forged["iat"].timestamp())
    forged["exp"] = int(forged["exp"].timestamp())
    with pytest.raises(InvalidSignature):
        tokens.verify(f"{header}.{_b64(forged)}.{signature}")


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "a.b"])
def test_malformed_token(tokens, token):
    with pytest.raises(MalformedToken):
        tokens.verify(token)


def test_missing_required_claim(settings, tokens):
    claims = _claims(settings)
    del claims["jti"]
    with pytest.raises(MalformedToken):
        tokens.verify(jwt.encode(claims, settings.secret_key, algorithm="HS256"))


def test_wrong_audience(settings, tokens):
    token = jwt.encode(_claims(settings, aud="someone-else"), settings.secret_key, algorithm="HS256")
    with pytest.raises(MalformedToken):
        tokens.verify(token)


def test_issue_without_secret():
    service = TokenService(Settings(database_url="sqlite://", secret_key=""))
    with pytest.raises(SigningError):
        service.issue("ADMIN", 1)
