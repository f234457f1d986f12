"""ORM Models — SQLAlchemy declarative models for users, books and reviews.

Invariants:
    - All models inherit from Base (db/base.py)
    - Importing this package registers every table on Base.metadata

Design Decisions:
    - One file per entity for locality
    - All models imported here so create_all() sees every table before startup runs it
"""

from librario.models.user import User  # noqa: F401
from librario.models.book import Book  # noqa: F401
from librario.models.review import Review  # noqa: F401
