"""Security — bcrypt password hashing and JWT issuance/verification.

Invariants:
    - Passwords are hashed with bcrypt at the configured cost (default 10)
    - Hashing and checking run in a worker thread (bcrypt is CPU-bound)
    - Tokens carry {id, usuario} and, when configured, an exp claim
    - Any decode failure (bad signature, malformed, expired, missing claims) → AuthInvalidError

Design Decisions:
    - bcrypt and PyJWT called directly: the same primitives the clients already expect
    - Settings passed at construction (no ambient process config)
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from librario.config import Settings
from librario.core.errors import AuthInvalidError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenIdentity:
    """Decoded token payload attached to authenticated requests."""
    id: int
    usuario: str


class PasswordHasher:
    """bcrypt hashing with a fixed cost factor."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    async def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = await asyncio.to_thread(
            bcrypt.hashpw, password.encode("utf-8"), salt,
        )
        return hashed.decode("utf-8")

    async def verify(self, password: str, password_hash: str) -> bool:
        try:
            return await asyncio.to_thread(
                bcrypt.checkpw,
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except ValueError:
            # Stored value is not a bcrypt hash
            logger.warning("Stored password hash is malformed")
            return False


class TokenCodec:
    """Signs and verifies bearer tokens with a shared secret."""

    def __init__(
        self, secret: str, algorithm: str = "HS256", expire_minutes: int = 0,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        return cls(
            settings.jwt_secret,
            settings.jwt_algorithm,
            settings.jwt_expire_minutes,
        )

    def issue(self, user_id: int, username: str) -> str:
        payload: dict = {"id": user_id, "usuario": username}
        if self.expire_minutes > 0:
            payload["exp"] = datetime.now(timezone.utc) + timedelta(
                minutes=self.expire_minutes,
            )
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> TokenIdentity:
        try:
            payload = jwt.decode(
                token, self.secret, algorithms=[self.algorithm],
            )
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected token: {e}")
            raise AuthInvalidError()
        user_id = payload.get("id")
        username = payload.get("usuario")
        if not isinstance(user_id, int) or not isinstance(username, str):
            raise AuthInvalidError()
        return TokenIdentity(id=user_id, usuario=username)
