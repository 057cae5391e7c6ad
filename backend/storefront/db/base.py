"""Declarative Base — metadata shared by the catalog and intake tables.

Invariants:
    - Category, Product and ContactMessage all register on Base.metadata
    - Alembic autogenerate and the test suite's create_all read the same metadata
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
