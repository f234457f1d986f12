"""Book Schemas — catalog responses keyed by the platform's wire names.

Invariants:
    - fecha_publicacion serialized as YYYY-MM-DD
    - Built from ORM rows via from_model(); routes never hand-assemble dicts
"""

from datetime import date

from pydantic import BaseModel

from librario.models.book import Book


class BookResponse(BaseModel):
    id: int
    titulo: str
    autor: str
    url_portada: str | None = None
    genero: str
    fecha_publicacion: date
    paginas: int
    sinopsis: str

    @classmethod
    def from_model(cls, book: Book) -> "BookResponse":
        return cls(
            id=book.id,
            titulo=book.title,
            autor=book.author,
            url_portada=book.cover_url,
            genero=book.genre,
            fecha_publicacion=book.publication_date,
            paginas=book.page_count,
            sinopsis=book.synopsis,
        )


class CreatedResponse(BaseModel):
    """Generated id of a newly inserted row."""
    id: int
