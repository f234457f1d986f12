"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, BookId, ReviewId wrap integer primary keys
    - Rating is bounded MIN_RATING–MAX_RATING
    - PageCount is strictly positive
    - Ids and page counts fit a 32-bit INTEGER column (MAX_INT_COLUMN)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

import re
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
BookId = NewType("BookId", int)
ReviewId = NewType("ReviewId", int)


# ─── Value Types ─────────────────────────────────────────────────

Rating = NewType("Rating", int)          # 1–5
PageCount = NewType("PageCount", int)    # > 0

MIN_RATING = 1
MAX_RATING = 5

MAX_INT_COLUMN = 2**31 - 1

PUBLICATION_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


# ─── Enums ───────────────────────────────────────────────────────

class ReviewOrder(str, Enum):
    """Listing order for reviews by created_at."""
    NEWEST_FIRST = "desc"
    OLDEST_FIRST = "asc"
