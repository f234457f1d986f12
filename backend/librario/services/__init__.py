"""Service Layer — stores that own all database access.

Invariants:
    - Routes never build queries; they call a store method
    - Every store call acquires and releases its own pooled session

Design Decisions:
    - One store per table (users, books, reviews)
"""
