"""Book repository — read projections over the books table.

Both projections return the whole table in storage order: no ORDER BY, no
filter, no pagination. Unbounded on large tables.
"""

from uuid import UUID

from fastapi import Depends
from sqlalchemy.orm import Session

from core.database import get_session
from patterns.repository import BaseRepository
from verticals.book.models.db_models import Book


class BookRepository(BaseRepository[Book]):
    """Repository for book persistence and listing projections."""

    model = Book

    def titles(self) -> list[tuple[UUID, str | None]]:
        """Return ``(id, title)`` for every book."""
        return [(row.id, row.title) for row in self.query(Book.id, Book.title)]

    def authors(self) -> list[tuple[UUID, str | None]]:
        """Return ``(id, author)`` for every book."""
        return [(row.id, row.author) for row in self.query(Book.id, Book.author)]


def get_book_repository(
    session: Session = Depends(get_session),
) -> BookRepository:
    """FastAPI dependency for BookRepository."""
    return BookRepository(session)
