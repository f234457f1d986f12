"""User Store — registration and lookup of user accounts.

Invariants:
    - One statement per call, in its own pooled session
    - Passwords hashed before insert, never stored or logged in plain text
    - Duplicate username → UsernameTakenError (409); find_user miss → None

Design Decisions:
    - Profile image drawn at random from /img/pfp/profile-1..N.png (assets shipped by the frontend)
"""

import logging
import random

from sqlalchemy import select

from librario.config import Settings
from librario.core.errors import DatabaseConflictError, UsernameTakenError
from librario.infrastructure.database import DatabaseSessionManager
from librario.infrastructure.security import PasswordHasher
from librario.models.user import User

logger = logging.getLogger(__name__)


def random_profile_image(count: int) -> str:
    return f"/img/pfp/profile-{random.randint(1, count)}.png"


class UserStore:
    """Data access for the users table."""

    def __init__(self, db: DatabaseSessionManager, settings: Settings):
        self.db = db
        self.hasher = PasswordHasher(settings.bcrypt_rounds)
        self.profile_image_count = settings.profile_image_count

    async def create_user(self, username: str, password: str) -> User:
        """Hash the password and insert the user. Returns the stored row."""
        password_hash = await self.hasher.hash(password)
        user = User(
            username=username,
            password_hash=password_hash,
            profile_image=random_profile_image(self.profile_image_count),
        )
        try:
            async with self.db.session("create_user") as session:
                session.add(user)
                await session.commit()
        except DatabaseConflictError:
            raise UsernameTakenError(username)
        logger.info(
            f"User {username} registered", extra={"user_id": user.id},
        )
        return user

    async def find_user(self, username: str) -> User | None:
        async with self.db.session("find_user") as session:
            result = await session.execute(
                select(User).where(User.username == username),
            )
            return result.scalar_one_or_none()

    async def check_password(self, user: User, password: str) -> bool:
        return await self.hasher.verify(password, user.password_hash)
