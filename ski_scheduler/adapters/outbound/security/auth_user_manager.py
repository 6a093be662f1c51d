# ski_scheduler/adapters/outbound/security/auth_user_manager.py

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError
from jose.exceptions import ExpiredSignatureError
from passlib.context import CryptContext

from ski_scheduler.adapters.configuration.config import settings
from ski_scheduler.domain.models.user_domain_model import Credentials
from ski_scheduler.domain.exceptions import (
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedTokenError,
)

SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM
DEFAULT_EXPIRES_MIN = settings.ACCESS_TOKEN_EXPIRE_MINUTES

IDENTITY_CLAIMS = ("userId", "username", "admin")


class UserAuthManager:
    """
    Password hashing and JWT session tokens for users.

    Verification here only checks signature and expiry. Revocation is
    tracked by the token blacklist and must be checked by the caller.
    """

    crypt_context = CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=settings.BCRYPT_ROUNDS,
    )

    @classmethod
    async def hash_password(cls, password: str) -> str:
        """Return the hash of a plain text password."""
        return cls.crypt_context.hash(password)

    @classmethod
    async def verify_password(cls, plain_password: str, hashed_password: str) -> bool:
        """Verify if the plain text password matches the stored hash."""
        return cls.crypt_context.verify(plain_password, hashed_password)

    @classmethod
    async def create_access_token(
            cls,
            user_id: str,
            username: str,
            admin: bool,
            expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create a signed session token for an authenticated user.

        - user_id, username, admin: identity embedded in the token.
        - expires_delta: lifetime, one hour by default.

        Every token gets a fresh ``jti`` so two tokens issued in the same
        second for the same user never share a signature.
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=DEFAULT_EXPIRES_MIN)

        issued_at = datetime.now(timezone.utc)
        expire = issued_at + expires_delta

        payload = {
            "userId": str(user_id),
            "username": username,
            "admin": bool(admin),
            "iat": int(issued_at.timestamp()),
            "exp": int(expire.timestamp()),
            "jti": str(uuid.uuid4()),
        }
        return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)

    @classmethod
    async def verify_access_token(cls, token: str) -> Credentials:
        """
        Verify signature and expiry, returning the embedded identity.

        Raises:
            ExpiredTokenError: The expiry timestamp has passed
            InvalidSignatureError: The signature (or a claim) does not verify
            MalformedTokenError: The token cannot be decoded at all
        """
        try:
            payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        except ExpiredSignatureError:
            raise ExpiredTokenError()
        except JWTError:
            # Decodable but unverifiable means a bad signature
            cls._unverified_claims(token)
            raise InvalidSignatureError()

        if any(claim not in payload for claim in IDENTITY_CLAIMS):
            raise MalformedTokenError("Invalid token: missing identity claims")

        return Credentials(
            user_id=str(payload["userId"]),
            username=payload["username"],
            admin=bool(payload["admin"]),
        )

    @classmethod
    def read_expiry(cls, token: str) -> float:
        """
        Return the ``exp`` claim (epoch seconds) without checking the signature.

        Raises:
            MalformedTokenError: The token cannot be decoded or has no expiry
        """
        claims = cls._unverified_claims(token)
        exp = claims.get("exp")
        if not isinstance(exp, (int, float)):
            raise MalformedTokenError("Invalid token: cannot decode expiration")
        return float(exp)

    @staticmethod
    def _unverified_claims(token: str) -> dict:
        if not token or not isinstance(token, str):
            raise MalformedTokenError()
        try:
            claims = jwt.get_unverified_claims(token)
        except JWTError:
            raise MalformedTokenError()
        if not isinstance(claims, dict):
            raise MalformedTokenError()
        return claims
