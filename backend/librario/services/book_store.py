"""Book Store — catalog inserts, listings and text search.

Invariants:
    - One statement per call, in its own pooled session
    - list_books() and search_books() ordered by id descending (newest first)
    - search_books() matches title, author or genre, case-insensitive, LIKE wildcards literal
"""

import logging
from datetime import date

from sqlalchemy import or_, select

from librario.infrastructure.database import DatabaseSessionManager
from librario.models.book import Book

logger = logging.getLogger(__name__)


class BookStore:
    """Data access for the books table."""

    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    async def create_book(
        self,
        title: str,
        author: str,
        cover_url: str | None,
        genre: str,
        publication_date: date,
        page_count: int,
        synopsis: str,
    ) -> int:
        book = Book(
            title=title,
            author=author,
            cover_url=cover_url,
            genre=genre,
            publication_date=publication_date,
            page_count=page_count,
            synopsis=synopsis,
        )
        async with self.db.session("create_book") as session:
            session.add(book)
            await session.commit()
        logger.info(f"Book '{title}' created", extra={"book_id": book.id})
        return book.id

    async def list_books(self) -> list[Book]:
        async with self.db.session("list_books") as session:
            result = await session.execute(
                select(Book).order_by(Book.id.desc()),
            )
            return list(result.scalars().all())

    async def find_book(self, book_id: int) -> Book | None:
        async with self.db.session("find_book") as session:
            result = await session.execute(
                select(Book).where(Book.id == book_id),
            )
            return result.scalar_one_or_none()

    async def search_books(self, text: str) -> list[Book]:
        """Case-insensitive substring search over title, author and genre."""
        async with self.db.session("search_books") as session:
            result = await session.execute(
                select(Book)
                .where(or_(
                    Book.title.icontains(text, autoescape=True),
                    Book.author.icontains(text, autoescape=True),
                    Book.genre.icontains(text, autoescape=True),
                ))
                .order_by(Book.id.desc()),
            )
            return list(result.scalars().all())
