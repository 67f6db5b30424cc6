"""
Credential Service

Password hashing (bcrypt via passlib) and signed admin session tokens
(JWT via python-jose). The signing key comes from Settings and is bound
once when the service is constructed.

Usage:
    credentials = CredentialService.from_settings(get_settings())

    token = credentials.issue_token("admin")
    username = credentials.verify_token(token)
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from tableorder.core.config import Settings
from tableorder.core.exceptions import InvalidToken, TokenExpired

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """One-way salted bcrypt hash of a plaintext password."""
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: Optional[str]) -> bool:
    """
    Check a plaintext password against a stored hash.

    Fails closed: a missing, unrecognised or malformed hash is
    reported as a mismatch rather than an error.
    """
    if not password or not hashed_password:
        return False
    try:
        return pwd_context.verify(password, hashed_password)
    except (ValueError, TypeError):
        logger.warning("Stored password hash could not be parsed")
        return False


class CredentialService:
    """
    Issues and verifies admin session tokens.

    Attributes:
        secret_key: Symmetric signing key
        algorithm: JWS algorithm name (e.g. "HS256")
        expire_delta: Token lifetime, counted from issuance
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_delta: timedelta = timedelta(hours=24),
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_delta = expire_delta

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialService":
        return cls(
            secret_key=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expire_delta=timedelta(hours=settings.token_expire_hours),
        )

    def issue_token(self, username: str, now: Optional[datetime] = None) -> str:
        """
        Create a signed token for an admin.

        Args:
            username: Subject identity embedded in the token
            now: Issuance instant (defaults to the current UTC time)

        Returns:
            Encoded JWT string carrying "sub" and an absolute "exp"
        """
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": username,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.expire_delta).timestamp()),
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: Optional[str]) -> str:
        """
        Validate a token and return its subject username.

        Raises:
            TokenExpired: The embedded expiry has passed
            InvalidToken: Token absent, malformed, badly signed or
                missing its subject
        """
        if not token:
            raise InvalidToken()

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise TokenExpired()
        except JWTError:
            raise InvalidToken()

        username = payload.get("sub")
        if not isinstance(username, str) or not username:
            raise InvalidToken()
        return username
