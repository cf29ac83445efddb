"""
UGC Agency Backend — Passwords and Bearer Tokens
==================================================

What:  bcrypt password hashing (passlib) and HS256 token issuance and
       verification (PyJWT).
Why:   The session model is stateless: a signed token carries
       {user id, email, role} and expires after JWT_EXPIRES_DAYS.
How:   `TokenIssuer.verify` never raises. Expired, tampered or malformed
       tokens come back as None and the auth dependency answers 401.

Claims:
    sub    user id
    email  user email at issue time
    role   global role at issue time (informational; gates re-read the DB)
    iat    issued-at (unix seconds)
    exp    expiry (unix seconds)
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from ugc_backend.config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """False for a wrong password, a missing hash, or a hash passlib cannot parse."""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        logger.warning("Unrecognized password hash format")
        return False


@dataclass(frozen=True)
class TokenPayload:
    user_id: str
    email: str
    role: str
    issued_at: datetime
    expires_at: datetime


class TokenIssuer:
    """
    Issues and verifies signed bearer tokens.

    Args:
        secret:        HMAC key (defaults to JWT_SECRET)
        algorithm:     JWS algorithm (defaults to JWT_ALGORITHM, HS256)
        expires_in:    token lifetime (defaults to JWT_EXPIRES_DAYS)
    """

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        expires_in: Optional[timedelta] = None,
    ):
        self.secret = secret or settings.jwt_secret
        self.algorithm = algorithm or settings.jwt_algorithm
        self.expires_in = expires_in or timedelta(days=settings.jwt_expires_days)

    def issue(self, user_id: str, email: str, role: str, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "sub": user_id,
            "email": email,
            "role": str(getattr(role, "value", role)),
            "iat": int(now.timestamp()),
            "exp": int((now + self.expires_in).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Optional[TokenPayload]:
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired token")
            return None
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected invalid token: %s", e)
            return None

        if not isinstance(claims.get("email"), str):
            return None

        return TokenPayload(
            user_id=str(claims["sub"]),
            email=claims["email"],
            role=str(claims.get("role") or ""),
            issued_at=datetime.fromtimestamp(claims["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
        )


# Singleton instance used by the auth service and the auth dependency
token_issuer = TokenIssuer()
