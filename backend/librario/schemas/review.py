"""Review Schemas — review creation payload and enriched listings.

Invariants:
    - ReviewCreate fields are optional at the schema level; presence checked in the route (400)
    - puntuacion, id_usuario and id_libro must be JSON integers; booleans and numeric
      strings are rejected (422). Ranges are checked in core (422)
    - Listings carry the review row plus reviewer (per book) or book metadata (per user)
"""

from datetime import datetime

from pydantic import BaseModel, StrictInt

from librario.models.review import Review


class ReviewCreate(BaseModel):
    """Body of POST /reviews/nueva."""
    puntuacion: StrictInt | None = None
    id_usuario: StrictInt | None = None
    id_libro: StrictInt | None = None
    texto: str | None = None


def _review_fields(review: Review) -> dict:
    return {
        "id": review.id,
        "creada_en": review.created_at,
        "puntuacion": review.rating,
        "id_usuario": review.user_id,
        "id_libro": review.book_id,
        "texto": review.text,
    }


class ReviewResponse(BaseModel):
    id: int
    creada_en: datetime
    puntuacion: int
    id_usuario: int
    id_libro: int
    texto: str | None = None


class BookReviewResponse(ReviewResponse):
    """A review of a book, with who wrote it."""
    nombre_usuario: str
    perfil: str | None = None

    @classmethod
    def from_row(cls, row: dict) -> "BookReviewResponse":
        return cls(
            **_review_fields(row["review"]),
            nombre_usuario=row["username"],
            perfil=row["profile_image"],
        )


class UserReviewResponse(ReviewResponse):
    """A review by a user, with the book it is about."""
    titulo: str
    autor: str
    url_portada: str | None = None

    @classmethod
    def from_row(cls, row: dict) -> "UserReviewResponse":
        return cls(
            **_review_fields(row["review"]),
            titulo=row["title"],
            autor=row["author"],
            url_portada=row["cover_url"],
        )
