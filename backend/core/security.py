# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Central security module.  All cryptographic primitives live here.  No other
module should touch raw crypto directly.

Responsibilities
----------------
1. Password hashing / verification          (passlib pbkdf2_sha256)
2. JWT issuance / verification              (PyJWT / HS256)

The request-level guard that uses these lives in ``users/gate.py`` because
it needs the user store.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Union

import jwt as _jwt        # PyJWT
from passlib.hash import pbkdf2_sha256 as _pbkdf2  # pure Python, no binary deps
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.config import Settings
from core.logger import logger

# ---------------------------------------------------------------------------
# 1.  pbkdf2_sha256 – password hashing
# ---------------------------------------------------------------------------
# passlib embeds the salt and the round count inside the hash string, so the
# users table needs a single column.  Verification is constant-time.
# ---------------------------------------------------------------------------


class PasswordHasher:
    """One-way password hashing with a configurable PBKDF2 work factor."""

    def __init__(self, rounds: int = 600_000):
        self._scheme = _pbkdf2.using(rounds=rounds)

    def hash(self, plain: str) -> str:
        """Return the full passlib hash string, e.g. ``$pbkdf2-sha256$...``."""
        return self._scheme.hash(plain)

    def verify(self, plain: str, stored_hash: str) -> bool:
        """
        Constant-time verification of *plain* against *stored_hash*.

        Raises ``ValueError`` if *stored_hash* is not a pbkdf2_sha256 hash.
        """
        return self._scheme.verify(plain, stored_hash)


# ---------------------------------------------------------------------------
# 2.  JWT – access tokens
# ---------------------------------------------------------------------------

ALGORITHM = "HS256"
TOKEN_LIFETIME = timedelta(hours=3)


class TokenError(Exception):
    """Base class for every token failure."""


class SigningError(TokenError):
    pass


class InvalidAlgorithm(TokenError):
    pass


class InvalidSignature(TokenError):
    pass


class ExpiredToken(TokenError):
    pass


class MalformedToken(TokenError):
    pass


class TokenClaims(BaseModel):
    """Registered claims carried by an access token.

    ``subject`` holds the user's *role*, not a user identifier; the user id
    travels in ``token_id`` (the ``jti`` claim).
    """

    model_config = ConfigDict(frozen=True)

    token_id: str = Field(alias="jti")
    subject: str = Field(alias="sub")
    issuer: str = Field(alias="iss")
    audience: Union[str, list[str]] = Field(alias="aud")
    issued_at: int = Field(alias="iat")
    expires_at: int = Field(alias="exp")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """
    Issue and verify HS256 access tokens.

    *now* is the clock used for ``iat``/``exp`` on issuance; verification
    always uses PyJWT's wall clock.
    """

    def __init__(self, settings: Settings, now: Callable[[], datetime] = _utcnow):
        self._secret = settings.secret_key
        self._issuer = settings.jwt_issuer
        self._audience = settings.jwt_audience
        self._now = now

    def issue(self, role: str, user_id: int) -> str:
        """
        Sign a token for *role* / *user_id*, valid for three hours.

        Raises ``SigningError`` when the secret is missing or PyJWT refuses
        to sign.
        """
        if not self._secret:
            raise SigningError("jwt secret is not configured")

        issued_at = self._now()
        claims = {
            "jti": str(user_id),
            "sub": role,
            "iss": self._issuer,
            "aud": self._audience,
            "iat": issued_at,
            "exp": issued_at + TOKEN_LIFETIME,
        }
        try:
            return _jwt.encode(claims, self._secret, algorithm=ALGORITHM)
        except (_jwt.PyJWTError, TypeError, ValueError) as exc:
            logger.debug("[TokenService.issue] err signing jwt: %s", exc)
            raise SigningError(str(exc)) from exc

    def verify(self, token: str) -> TokenClaims:
        """
        Parse and verify *token*.

        The header algorithm is checked before any signature work so a token
        signed with ``none`` or any algorithm other than HS256 is refused
        outright, even if it is otherwise well-formed.
        """
        try:
            header = _jwt.get_unverified_header(token)
        except _jwt.PyJWTError as exc:
            raise MalformedToken(str(exc)) from exc

        if header.get("alg") != ALGORITHM:
            raise InvalidAlgorithm(f"unexpected signing algorithm: {header.get('alg')!r}")

        try:
            payload = _jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": ["exp", "iat", "sub", "jti"]},
            )
        except _jwt.ExpiredSignatureError as exc:
            raise ExpiredToken(str(exc)) from exc
        except _jwt.InvalidSignatureError as exc:
            raise InvalidSignature(str(exc)) from exc
        except _jwt.InvalidAlgorithmError as exc:
            raise InvalidAlgorithm(str(exc)) from exc
        except _jwt.PyJWTError as exc:
            raise MalformedToken(str(exc)) from exc

        try:
            return TokenClaims.model_validate(payload)
        except ValidationError as exc:
            raise MalformedToken("token claims are not registered claims") from exc
