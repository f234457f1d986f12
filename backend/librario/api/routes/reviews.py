"""Review Routes — per-book and per-user listings, review creation.

Invariants:
    - GET /reviews/usuario/{id} declared before GET /reviews/{id} so "usuario" is never
      parsed as a book id
    - Both listings newest first; an id no INTEGER column can hold lists nothing
    - POST /reviews/nueva is protected; missing fields (400), rating outside 1–5 or
      ids outside the INTEGER range (422)
"""

from fastapi import APIRouter, Depends, status

from librario.api.auth import require_user
from librario.api.dependencies import get_review_store
from librario.core.domain_types import ReviewOrder
from librario.core.enforce_fields import (
    check_rating, check_row_id, is_storable_id, require_fields,
)
from librario.schemas.book import CreatedResponse
from librario.schemas.review import (
    BookReviewResponse, ReviewCreate, UserReviewResponse,
)
from librario.services.review_store import ReviewStore

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get(
    "/usuario/{user_id}", response_model=list[UserReviewResponse],
)
async def list_user_reviews(
    user_id: int, reviews: ReviewStore = Depends(get_review_store),
):
    """Reviews written by a user, with the reviewed book's metadata."""
    if not is_storable_id(user_id):
        return []
    rows = await reviews.list_reviews_for_user(
        user_id, ReviewOrder.NEWEST_FIRST,
    )
    return [UserReviewResponse.from_row(r) for r in rows]


@router.get("/{book_id}", response_model=list[BookReviewResponse])
async def list_book_reviews(
    book_id: int, reviews: ReviewStore = Depends(get_review_store),
):
    """Reviews of a book, with the reviewer's identity."""
    if not is_storable_id(book_id):
        return []
    rows = await reviews.list_reviews_for_book(book_id)
    return [BookReviewResponse.from_row(r) for r in rows]


@router.post(
    "/nueva", response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_user)],
)
async def create_review(
    body: ReviewCreate,
    reviews: ReviewStore = Depends(get_review_store),
):
    require_fields({
        "puntuacion": body.puntuacion,
        "id_usuario": body.id_usuario,
        "id_libro": body.id_libro,
    })
    rating = check_rating(body.puntuacion)
    user_id = check_row_id(body.id_usuario, "id_usuario")
    book_id = check_row_id(body.id_libro, "id_libro")
    review_id = await reviews.create_review(
        rating, user_id, book_id, body.texto,
    )
    return CreatedResponse(id=review_id)
