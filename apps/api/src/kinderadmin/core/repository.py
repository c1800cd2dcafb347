"""
Repository Abstraction

Stores expose the same async operations (get, list, add, update, remove)
whether they are backed by the database or by an in-process collection.
Services depend on the protocol only, so they can run against an
in-memory fake in tests and against SQLAlchemy in production.

Design Principles:
- Single responsibility: only data access, no business rules
- Each write commits on its own; there is no cross-store transaction
- Entities without an id get a UUID4 string on add
"""

from collections.abc import Sequence
from typing import Any, Generic, Protocol, TypeVar
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

T = TypeVar("T")


def new_id() -> str:
    """Generate a new entity identifier."""
    return str(uuid4())


class Repository(Protocol[T]):
    """Minimal store interface used by the services."""

    async def get(self, id: str) -> T | None: ...

    async def list(self) -> list[T]: ...

    async def add(self, entity: T) -> T: ...

    async def update(self, entity: T) -> T: ...

    async def remove(self, id: str) -> T | None: ...


class InMemoryRepository(Generic[T]):
    """
    Dict-backed repository.

    Keeps insertion order, so list() returns entities in the order they
    were added. Entities are stored by reference.
    """

    def __init__(self, entities: Sequence[T] = ()):
        self._items: dict[str, T] = {}
        for entity in entities:
            self._assign_id(entity)
            self._items[entity.id] = entity  # type: ignore[attr-defined]

    @staticmethod
    def _assign_id(entity: Any) -> None:
        if not getattr(entity, "id", None):
            entity.id = new_id()

    async def get(self, id: str) -> T | None:
        return self._items.get(id)

    async def list(self) -> list[T]:
        return list(self._items.values())

    async def add(self, entity: T) -> T:
        self._assign_id(entity)
        self._items[entity.id] = entity  # type: ignore[attr-defined]
        return entity

    async def update(self, entity: T) -> T:
        self._items[entity.id] = entity  # type: ignore[attr-defined]
        return entity

    async def remove(self, id: str) -> T | None:
        return self._items.pop(id, None)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, id: object) -> bool:
        return id in self._items


class SqlAlchemyRepository(Generic[T]):
    """
    Repository over an AsyncSession for a single mapped model.

    Args:
        db: Database session
        model: Mapped model class
        options: Loader options applied to get/list (e.g. selectinload)
        order_by: Column used to order list() results
    """

    def __init__(
        self,
        db: AsyncSession,
        model: type[T],
        *,
        options: Sequence[ORMOption] = (),
        order_by: Any = None,
    ):
        self.db = db
        self.model = model
        self.options = tuple(options)
        self.order_by = order_by

    async def get(self, id: str) -> T | None:
        return await self.db.get(self.model, id, options=self.options)

    async def list(self) -> list[T]:
        query = select(self.model).options(*self.options)
        if self.order_by is not None:
            query = query.order_by(self.order_by)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def add(self, entity: T) -> T:
        if not getattr(entity, "id", None):
            entity.id = new_id()  # type: ignore[attr-defined]
        self.db.add(entity)
        await self.db.commit()
        await self.db.refresh(entity)
        return entity

    async def update(self, entity: T) -> T:
        """Persist changes made to an entity loaded from this session."""
        await self.db.commit()
        await self.db.refresh(entity)
        return entity

    async def remove(self, id: str) -> T | None:
        entity = await self.get(id)
        if entity is None:
            return None
        await self.db.delete(entity)
        await self.db.commit()
        return entity
