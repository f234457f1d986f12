"""Infrastructure Layer — database, security, storage and logging.

Invariants:
    - Infrastructure never imports from api/ or services/
    - Library failures mapped to core/errors.py types at this boundary

Design Decisions:
    - Thin wrappers over SQLAlchemy, bcrypt and PyJWT, configured from Settings
"""
