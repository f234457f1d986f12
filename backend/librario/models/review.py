"""Review ORM — a user's rating and text for one book.

Invariants:
    - Always belongs to a User (user_id FK) and a Book (book_id FK)
    - rating in [1, 5] (CHECK constraint)
    - created_at set by the database clock (DEFAULT now()) at insert time

Design Decisions:
    - No ORM relationships: listings join explicitly and select only the columns they return
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from librario.db.base import Base


class Review(Base):
    """Review entity — created by an authenticated user."""
    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating_range"),
    )
    # created_at comes back with the INSERT
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True,
    )
    book_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("books.id"), nullable=False, index=True,
    )
    text: Mapped[str | None] = mapped_column(Text, nullable=True)
