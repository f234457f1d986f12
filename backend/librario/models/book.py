"""Book ORM — catalog entries that reviews point at.

Invariants:
    - id is an integer primary key generated by the database (listing order = id desc)
    - page_count > 0 (CHECK constraint backs the route-level validation)
    - publication_date is a DATE, serialized as YYYY-MM-DD

Design Decisions:
    - cover_url holds the public URL of the uploaded cover, not the file itself
"""

from datetime import date

from sqlalchemy import CheckConstraint, Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from librario.db.base import Base


class Book(Base):
    """Catalog entry — created via /libro/nuevo, read individually or listed."""
    __tablename__ = "books"
    __table_args__ = (
        CheckConstraint("page_count > 0", name="ck_books_page_count_positive"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    author: Mapped[str] = mapped_column(String(200), nullable=False)
    cover_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    genre: Mapped[str] = mapped_column(String(100), nullable=False)
    publication_date: Mapped[date] = mapped_column(Date, nullable=False)
    page_count: Mapped[int] = mapped_column(Integer, nullable=False)
    synopsis: Mapped[str] = mapped_column(Text, nullable=False)
