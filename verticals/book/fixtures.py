"""Sample catalog used by `light load-fixtures` and the tests."""

from sqlalchemy.orm import Session

from verticals.book.models.db_models import Book

SAMPLE_BOOKS = [
    {"title": "A Game of Thrones", "author": "George Martin"},
    {"title": "The Lord of the Rings", "author": "J.R.R. Tolkien"},
    {"title": "Dune", "author": "Frank Herbert"},
]


def load_books(session: Session, books: list[dict] | None = None) -> list[Book]:
    """Persist the sample books in one unit of work. Caller commits."""
    loaded = []
    for values in books or SAMPLE_BOOKS:
        book = Book()
        book.hydrate(values)
        session.add(book)
        loaded.append(book)
    session.flush()
    return loaded
