"""Repository pattern for database access.

Provides a generic base repository bound to an explicit SQLAlchemy session
(the unit of work). Each write is staged and committed in one call, so
every save/delete is its own transaction. Verticals subclass this to add
domain-specific read projections.

Example: BookRepository extending BaseRepository.
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from core.models.base import Base

# ---------------------------------------------------------------------------
# Type variable for model classes
# ---------------------------------------------------------------------------

ModelT = TypeVar("ModelT", bound=Base)


# ---------------------------------------------------------------------------
# Base repository
# ---------------------------------------------------------------------------

class BaseRepository(Generic[ModelT]):
    """Generic repository with save/delete + query builder.

    Subclass and set `model` to your SQLAlchemy model::

        class BookRepository(BaseRepository[Book]):
            model = Book

            def titles(self):
                return [(r.id, r.title) for r in self.query(Book.id, Book.title)]
    """

    model: type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    # -- Writes --

    def save(self, entity: ModelT) -> None:
        """Stage the entity for insert/update and commit immediately."""
        self.session.add(entity)
        self._commit("save", entity)

    def delete(self, entity: ModelT) -> None:
        """Stage the entity for removal and commit immediately."""
        self.session.delete(entity)
        self._commit("delete", entity)

    def _commit(self, action: str, entity: ModelT) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.error(
                "{} {} failed, transaction rolled back",
                action,
                type(entity).__name__,
            )
            raise
        logger.debug("{} {} id={}", action, type(entity).__name__, getattr(entity, "id", None))

    # -- Reads --

    def query(self, *entities: Any) -> Query:
        """Return a fresh query builder bound to this repository's session."""
        return self.session.query(*(entities or (self.model,)))

    def find(self, item_id: UUID) -> ModelT | None:
        return self.session.get(self.model, item_id)

    def find_all(self) -> list[ModelT]:
        return list(self.session.scalars(select(self.model)).all())

    def find_by(self, **criteria: Any) -> list[ModelT]:
        """Equality match on mapped attributes. Unknown attributes raise."""
        stmt = select(self.model).filter_by(**criteria)
        return list(self.session.scalars(stmt).all())
