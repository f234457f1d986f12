"""User ORM — registered accounts that write reviews.

Invariants:
    - id is an integer primary key generated by the database
    - username is unique (DB constraint, surfaced as UsernameTakenError)
    - password_hash is a bcrypt hash, never the plain password

Design Decisions:
    - profile_image stores a frontend asset path, assigned at registration
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from librario.db.base import Base


class User(Base):
    """User account — created on registration, never updated here."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True,
    )
    password_hash: Mapped[str] = mapped_column(String(200), nullable=False)
    profile_image: Mapped[str | None] = mapped_column(
        String(300), nullable=True,
    )
