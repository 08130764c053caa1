"""Base model and mixins for all SQLAlchemy models.

Provides:
- Base: Declarative base class for all models
- EntityMixin: time-ordered UUID primary key, created/updated timestamps
  and generic hydration from an untyped mapping

Timestamps are stamped by mapper events: ``created`` right before the first
INSERT, ``updated`` right before every UPDATE.
"""

import functools
import uuid
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, TypeDecorator, Uuid, event, inspect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid6 import uuid7

DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Columns owned by the mixin; hydration never writes them
PROTECTED_FIELDS = frozenset({"id", "created", "updated"})


def now() -> datetime:
    # this function is there so that we can mock it in tests
    return datetime.now(timezone.utc)


def new_id() -> uuid.UUID:
    """Return a version 7 UUID: 48-bit unix milliseconds, then random bits."""
    return uuid7()


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetime on every backend.

    SQLite drops the offset on storage; values are stored as UTC and come
    back tagged with UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return _as_utc(value)

    def process_result_value(self, value, dialect):
        return _as_utc(value)


def _as_utc(value: datetime | None) -> datetime | None:
    # naive values are taken to be UTC already
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base for all Light models."""
    pass


class EntityMixin:
    """Mixin providing identity, audit timestamps and hydration.

    Adds:
    - id: UUIDv7 primary key, assigned on construction
    - created: Timestamp set once, before the first insert
    - updated: Nullable timestamp set before every update
    """

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        nullable=False,
        default=new_id,
    )
    created: Mapped[datetime] = mapped_column(
        "created",
        UTCDateTime,
        nullable=False,
    )
    updated: Mapped[datetime | None] = mapped_column(
        "updated",
        UTCDateTime,
        nullable=True,
        default=None,
    )

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("id", new_id())
        super().__init__(**kwargs)

    def created_formatted(self, fmt: str = DEFAULT_DATE_FORMAT) -> str | None:
        if self.created is None:
            return None
        return self.created.strftime(fmt)

    def updated_formatted(self, fmt: str = DEFAULT_DATE_FORMAT) -> str | None:
        if self.updated is None:
            return None
        return self.updated.strftime(fmt)

    def hydrate(self, values: Mapping[str, Any]) -> None:
        """Populate fields from an untyped mapping.

        Collection values (sequences, and mappings by their values) go
        through the field's adder once per element, scalar values through
        its setter. Keys without a registered setter/adder are ignored.
        """
        setters, adders = hydration_table(type(self))
        for name, value in values.items():
            if _is_collection(value):
                adder = adders.get(name)
                if adder is None:
                    continue
                items = value.values() if isinstance(value, Mapping) else value
                for item in items:
                    adder(self, item)
            else:
                setter = setters.get(name)
                if setter is None:
                    continue
                setter(self, value)


def _is_collection(value: Any) -> bool:
    return isinstance(value, (list, tuple, set, frozenset, Mapping))


def _column_setter(name: str) -> Callable[[Any, Any], None]:
    def setter(entity: Any, value: Any) -> None:
        setattr(entity, name, value)

    return setter


@functools.cache
def hydration_table(
    cls: type,
) -> tuple[dict[str, Callable[[Any, Any], None]], dict[str, Callable[[Any, Any], None]]]:
    """Build the (setters, adders) registration table for an entity type.

    Setters cover every mapped column except the mixin-owned ones; adders
    are methods named ``add_<field>``. Computed once per class.
    """
    setters = {
        attr.key: _column_setter(attr.key)
        for attr in inspect(cls).column_attrs
        if attr.key not in PROTECTED_FIELDS
    }
    adders = {
        name[len("add_"):]: getattr(cls, name)
        for name in dir(cls)
        if name.startswith("add_") and callable(getattr(cls, name))
    }
    return setters, adders


# ---------------------------------------------------------------------------
# Lifecycle hooks
# ---------------------------------------------------------------------------

def stamp_created(entity: EntityMixin) -> None:
    entity.created = now()


def stamp_updated(entity: EntityMixin) -> None:
    entity.updated = now()


@event.listens_for(EntityMixin, "before_insert", propagate=True)
def _before_insert(mapper, connection, target: EntityMixin) -> None:
    stamp_created(target)


@event.listens_for(EntityMixin, "before_update", propagate=True)
def _before_update(mapper, connection, target: EntityMixin) -> None:
    stamp_updated(target)
