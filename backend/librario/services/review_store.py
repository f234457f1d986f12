"""Review Store — review inserts and per-book / per-user listings.

Invariants:
    - One statement per call, in its own pooled session
    - created_at is set at insert time, never taken from the client
    - list_reviews_for_book() returns only that book's reviews, newest first,
      joined with the reviewer's username and profile image
    - list_reviews_for_user() returns only that user's reviews, joined with
      book title, author and cover; newest first unless asked otherwise
"""

import logging

from sqlalchemy import select

from librario.core.domain_types import ReviewOrder
from librario.infrastructure.database import DatabaseSessionManager
from librario.models.book import Book
from librario.models.review import Review
from librario.models.user import User

logger = logging.getLogger(__name__)


class ReviewStore:
    """Data access for the reviews table."""

    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    async def create_review(
        self, rating: int, user_id: int, book_id: int, text: str | None,
    ) -> int:
        review = Review(
            rating=rating, user_id=user_id, book_id=book_id, text=text,
        )
        async with self.db.session("create_review") as session:
            session.add(review)
            await session.commit()
        logger.info(
            f"Review created for book {book_id}",
            extra={"review_id": review.id, "user_id": user_id, "book_id": book_id},
        )
        return review.id

    async def list_reviews_for_book(self, book_id: int) -> list[dict]:
        async with self.db.session("list_reviews_for_book") as session:
            result = await session.execute(
                select(Review, User.username, User.profile_image)
                .join(User, Review.user_id == User.id)
                .where(Review.book_id == book_id)
                .order_by(Review.created_at.desc(), Review.id.desc()),
            )
            return [
                {
                    "review": review,
                    "username": username,
                    "profile_image": profile_image,
                }
                for review, username, profile_image in result.all()
            ]

    async def list_reviews_for_user(
        self, user_id: int, order: ReviewOrder = ReviewOrder.NEWEST_FIRST,
    ) -> list[dict]:
        if order is ReviewOrder.NEWEST_FIRST:
            ordering = (Review.created_at.desc(), Review.id.desc())
        else:
            ordering = (Review.created_at.asc(), Review.id.asc())
        async with self.db.session("list_reviews_for_user") as session:
            result = await session.execute(
                select(Review, Book.title, Book.author, Book.cover_url)
                .join(Book, Review.book_id == Book.id)
                .where(Review.user_id == user_id)
                .order_by(*ordering),
            )
            return [
                {
                    "review": review,
                    "title": title,
                    "author": author,
                    "cover_url": cover_url,
                }
                for review, title, author, cover_url in result.all()
            ]
