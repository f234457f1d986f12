"""Book Routes — catalog listing, lookup, search and creation.

Invariants:
    - GET /libros newest first; GET /libro/{id} → 404 when absent, including ids
      no INTEGER column can hold
    - GET /busqueda requires ?texto= (400 when missing)
    - POST /libro/nuevo is protected; field presence (400) checked before format (422),
      and the cover is only written once every field has passed
    - A stored cover is removed again when the insert fails
"""

import logging

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from librario.api.auth import require_user
from librario.api.dependencies import get_book_store, get_cover_storage
from librario.core.enforce_fields import (
    is_storable_id, parse_page_count, parse_publication_date, require_fields,
)
from librario.core.errors import ResourceNotFoundError
from librario.infrastructure.cover_storage import CoverStorage
from librario.infrastructure.security import TokenIdentity
from librario.schemas.book import BookResponse, CreatedResponse
from librario.services.book_store import BookStore

logger = logging.getLogger(__name__)
router = APIRouter(tags=["books"])


@router.get("/libros", response_model=list[BookResponse])
async def list_books(books: BookStore = Depends(get_book_store)):
    """All books, newest first."""
    return [BookResponse.from_model(b) for b in await books.list_books()]


@router.get("/libro/{book_id}", response_model=BookResponse)
async def get_book(book_id: int, books: BookStore = Depends(get_book_store)):
    book = await books.find_book(book_id) if is_storable_id(book_id) else None
    if book is None:
        raise ResourceNotFoundError("Book", str(book_id))
    return BookResponse.from_model(book)


@router.get("/busqueda", response_model=list[BookResponse])
async def search_books(
    texto: str = Query(...),
    books: BookStore = Depends(get_book_store),
):
    """Books whose title, author or genre contains texto (case-insensitive)."""
    return [BookResponse.from_model(b) for b in await books.search_books(texto)]


@router.post(
    "/libro/nuevo", response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_book(
    titulo: str | None = Form(None),
    autor: str | None = Form(None),
    genero: str | None = Form(None),
    fecha_publicacion: str | None = Form(None),
    paginas: str | None = Form(None),
    sinopsis: str | None = Form(None),
    portada: UploadFile | None = File(None),
    identity: TokenIdentity = Depends(require_user),
    books: BookStore = Depends(get_book_store),
    covers: CoverStorage = Depends(get_cover_storage),
):
    """Create a catalog entry with an uploaded cover image."""
    require_fields({
        "titulo": titulo,
        "autor": autor,
        "genero": genero,
        "fecha_publicacion": fecha_publicacion,
        "paginas": paginas,
        "sinopsis": sinopsis,
        "portada": portada.filename if portada else None,
    })
    page_count = parse_page_count(paginas)
    publication_date = parse_publication_date(fecha_publicacion)

    cover_url = await covers.save(portada)
    try:
        book_id = await books.create_book(
            titulo, autor, cover_url, genero, publication_date, page_count, sinopsis,
        )
    except Exception:
        await covers.delete(cover_url)
        raise
    logger.info(
        f"Book {book_id} added by {identity.usuario}",
        extra={"book_id": book_id, "user_id": identity.id},
    )
    return CreatedResponse(id=book_id)
