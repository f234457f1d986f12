"""Database Package — declarative Base shared by models and schema creation.

Invariants:
    - Base.metadata lists every table once librario.models is imported
"""
