# backoffice/core/security.py
"""
Security module for authentication.
Handles password hashing and JWT issuance/verification.

The token service is built once at startup from an explicit TokenSettings
object and attached to the application state; nothing here reads the
environment at call time.
"""
import datetime as dt
from dataclasses import dataclass

import jwt  # PyJWT
from passlib.context import CryptContext

from backoffice.config import Settings

# Password hashing context
# Argon2 is memory-hard and the digest embeds its salt and parameters,
# so no separate salt column is needed.
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
)


def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Args:
        plain: Plain text password to hash

    Returns:
        Self-describing digest string ("$argon2id$v=19$m=...,t=...,p=...$salt$hash")
    """
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify a plain text password against a stored digest.

    Returns False instead of raising when the digest is malformed or
    not recognised, so callers can treat every failure the same way.
    """
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        return False


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------
class ConfigurationError(RuntimeError):
    """Raised when required security configuration is missing at startup."""


class InvalidTokenError(Exception):
    """Base class for every token verification failure."""


class TokenExpiredError(InvalidTokenError):
    pass


class TokenSignatureError(InvalidTokenError):
    pass


class TokenMalformedError(InvalidTokenError):
    pass


@dataclass(frozen=True)
class Principal:
    """Identity asserted by a verified token."""

    id: str
    role: str


@dataclass(frozen=True)
class TokenSettings:
    secret: str
    algorithm: str = "HS256"
    ttl: dt.timedelta = dt.timedelta(hours=24)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenSettings":
        return cls(
            secret=settings.jwt_secret or "",
            algorithm=settings.jwt_algorithm,
            ttl=dt.timedelta(hours=settings.access_token_expire_hours),
        )


class TokenService:
    """
    Issues and verifies signed access tokens.

    Token payload:
        - sub: principal id
        - role: role at issuance time
        - iat / exp: issued-at and expiry (iat + ttl)
    """

    def __init__(self, settings: TokenSettings):
        if not settings.secret or not settings.secret.strip():
            raise ConfigurationError("JWT_SECRET must be set and non-empty")
        self._secret = settings.secret
        self._algorithm = settings.algorithm
        self.ttl = settings.ttl

    def issue(self, principal_id: str, role: str, now: dt.datetime | None = None) -> str:
        issued_at = now or dt.datetime.now(dt.timezone.utc)
        payload = {
            "sub": str(principal_id),
            "role": role,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Principal:
        """
        Decode and validate a token.

        Raises:
            TokenExpiredError: expiry has elapsed
            TokenSignatureError: signed with a different secret or tampered
            TokenMalformedError: not a JWT, or required claims are missing
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["sub", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError("token expired") from exc
        except jwt.InvalidSignatureError as exc:
            raise TokenSignatureError("signature mismatch") from exc
        except jwt.PyJWTError as exc:
            raise TokenMalformedError(str(exc)) from exc

        role = payload.get("role")
        if not isinstance(role, str) or not role:
            raise TokenMalformedError("role claim missing")
        return Principal(id=payload["sub"], role=role)
