"""Dependency Providers — build stores and infrastructure objects per request.

Invariants:
    - Every provider receives Settings explicitly (via get_settings) — no os.environ reads
    - Stores share the process-wide DatabaseSessionManager (connection pool)

Design Decisions:
    - Plain functions used with Depends(): tests swap any of them through
      app.dependency_overrides without patching module state
"""

from fastapi import Depends

from librario.config import Settings, get_settings
from librario.infrastructure.cover_storage import CoverStorage
from librario.infrastructure.database import (
    DatabaseSessionManager, get_db_manager,
)
from librario.infrastructure.security import TokenCodec
from librario.services.book_store import BookStore
from librario.services.review_store import ReviewStore
from librario.services.user_store import UserStore


def get_token_codec(settings: Settings = Depends(get_settings)) -> TokenCodec:
    return TokenCodec.from_settings(settings)


def get_cover_storage(
    settings: Settings = Depends(get_settings),
) -> CoverStorage:
    return CoverStorage.from_settings(settings)


def get_user_store(
    db: DatabaseSessionManager = Depends(get_db_manager),
    settings: Settings = Depends(get_settings),
) -> UserStore:
    return UserStore(db, settings)


def get_book_store(
    db: DatabaseSessionManager = Depends(get_db_manager),
) -> BookStore:
    return BookStore(db)


def get_review_store(
    db: DatabaseSessionManager = Depends(get_db_manager),
) -> ReviewStore:
    return ReviewStore(db)
