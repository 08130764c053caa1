"""SQLAlchemy models for the book vertical.

Each model inherits from Base and uses EntityMixin for identity and audit
timestamps. The to_dict() method provides the serialisation used by
fixtures and templates.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from core.models.base import Base, EntityMixin


class Book(EntityMixin, Base):
    """A book in the catalog."""

    __tablename__ = "books"

    title: Mapped[str | None] = mapped_column(String(500), nullable=True)
    author: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "author": self.author,
        }

    def __repr__(self) -> str:
        return f"Book(id={self.id!s}, title={self.title!r}, author={self.author!r})"
