"""Document-style storage over the mapped tables.

Services talk to a ``DocumentStore`` rather than to a session directly so the
same code runs against PostgreSQL in production and an in-memory store in
tests and local development.
"""

import copy
import logging
from typing import Any, Protocol

from sqlalchemy import inspect as sa_inspect
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import TABLES, Base

logger = logging.getLogger(__name__)

Item = dict[str, Any]


class ConditionalCheckFailedError(Exception):
    """Raised when a create-if-absent write finds the key already present."""


def _model(table: str) -> type[Base]:
    try:
        return TABLES[table]
    except KeyError:
        raise KeyError(f"Unknown table: {table}") from None


def key_field(table: str) -> str:
    return sa_inspect(_model(table)).primary_key[0].key


def column_names(table: str) -> set[str]:
    return {attr.key for attr in sa_inspect(_model(table)).column_attrs}


class DocumentStore(Protocol):
    async def get(self, table: str, key: str) -> Item | None: ...

    async def put(self, table: str, item: Item, *, if_not_exists: bool = False) -> Item: ...

    async def update(self, table: str, key: str, changes: Item) -> Item | None: ...

    async def delete(self, table: str, key: str) -> None: ...

    async def query(
        self,
        table: str,
        field: str,
        value: Any,
        *,
        sort_field: str | None = None,
        sort_value: Any = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Item]: ...

    async def scan(
        self, table: str, filters: Item | None = None, *, limit: int | None = None
    ) -> list[Item]: ...


class SqlStore:
    """DocumentStore backed by an AsyncSession. Commit is left to the caller."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @staticmethod
    def _to_item(obj: Base) -> Item:
        return {attr.key: getattr(obj, attr.key) for attr in sa_inspect(type(obj)).column_attrs}

    async def get(self, table: str, key: str) -> Item | None:
        obj = await self.db.get(_model(table), key)
        return self._to_item(obj) if obj is not None else None

    async def put(self, table: str, item: Item, *, if_not_exists: bool = False) -> Item:
        model = _model(table)
        columns = column_names(table)
        values = {k: v for k, v in item.items() if k in columns}

        if if_not_exists:
            if await self.db.get(model, values[key_field(table)]) is not None:
                raise ConditionalCheckFailedError(table)
            obj = model(**values)
            self.db.add(obj)
            try:
                await self.db.flush()
            except IntegrityError as exc:
                raise ConditionalCheckFailedError(table) from exc
        else:
            obj = await self.db.merge(model(**values))
            await self.db.flush()

        return self._to_item(obj)

    async def update(self, table: str, key: str, changes: Item) -> Item | None:
        obj = await self.db.get(_model(table), key)
        if obj is None:
            return None
        columns = column_names(table)
        for field, value in changes.items():
            if field in columns:
                setattr(obj, field, value)
        await self.db.flush()
        return self._to_item(obj)

    async def delete(self, table: str, key: str) -> None:
        obj = await self.db.get(_model(table), key)
        if obj is not None:
            await self.db.delete(obj)
            await self.db.flush()

    async def query(
        self,
        table: str,
        field: str,
        value: Any,
        *,
        sort_field: str | None = None,
        sort_value: Any = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Item]:
        model = _model(table)
        stmt = select(model).where(getattr(model, field) == value)
        if sort_field is not None:
            sort_col = getattr(model, sort_field)
            if sort_value is not None:
                stmt = stmt.where(sort_col == sort_value)
            stmt = stmt.order_by(sort_col.desc() if descending else sort_col.asc())
        if limit:
            stmt = stmt.limit(limit)
        result = await self.db.execute(stmt)
        return [self._to_item(obj) for obj in result.scalars().all()]

    async def scan(
        self, table: str, filters: Item | None = None, *, limit: int | None = None
    ) -> list[Item]:
        model = _model(table)
        stmt = select(model)
        for field, value in (filters or {}).items():
            stmt = stmt.where(getattr(model, field) == value)
        if limit:
            stmt = stmt.limit(limit)
        result = await self.db.execute(stmt)
        return [self._to_item(obj) for obj in result.scalars().all()]


class MemoryStore:
    """In-process DocumentStore. Items are copied on the way in and out."""

    def __init__(self, initial: dict[str, list[Item]] | None = None) -> None:
        self._tables: dict[str, dict[str, Item]] = {name: {} for name in TABLES}
        for table, items in (initial or {}).items():
            for item in items:
                self._put(table, item)

    def _put(self, table: str, item: Item) -> Item:
        columns = column_names(table)
        stored = {k: copy.deepcopy(v) for k, v in item.items() if k in columns}
        self._tables[table][stored[key_field(table)]] = stored
        return copy.deepcopy(stored)

    async def get(self, table: str, key: str) -> Item | None:
        item = self._tables[table].get(key)
        return copy.deepcopy(item) if item is not None else None

    async def put(self, table: str, item: Item, *, if_not_exists: bool = False) -> Item:
        if if_not_exists and item.get(key_field(table)) in self._tables[table]:
            raise ConditionalCheckFailedError(table)
        return self._put(table, item)

    async def update(self, table: str, key: str, changes: Item) -> Item | None:
        item = self._tables[table].get(key)
        if item is None:
            return None
        columns = column_names(table)
        item.update({k: copy.deepcopy(v) for k, v in changes.items() if k in columns})
        return copy.deepcopy(item)

    async def delete(self, table: str, key: str) -> None:
        self._tables[table].pop(key, None)

    async def query(
        self,
        table: str,
        field: str,
        value: Any,
        *,
        sort_field: str | None = None,
        sort_value: Any = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Item]:
        items = [i for i in self._tables[table].values() if i.get(field) == value]
        if sort_field is not None:
            if sort_value is not None:
                items = [i for i in items if i.get(sort_field) == sort_value]
            # Missing sort values order last ascending, matching PostgreSQL NULLs
            items.sort(
                key=lambda i: (i.get(sort_field) is None, i.get(sort_field)),
                reverse=descending,
            )
        if limit:
            items = items[:limit]
        return copy.deepcopy(items)

    async def scan(
        self, table: str, filters: Item | None = None, *, limit: int | None = None
    ) -> list[Item]:
        items = [
            i
            for i in self._tables[table].values()
            if all(i.get(k) == v for k, v in (filters or {}).items())
        ]
        if limit:
            items = items[:limit]
        return copy.deepcopy(items)


_memory_store_instance: MemoryStore | None = None


def get_memory_store() -> MemoryStore:
    """Singleton accessor for the process-wide MemoryStore."""
    global _memory_store_instance
    if _memory_store_instance is None:
        _memory_store_instance = MemoryStore()
        logger.info("Using in-memory document store")
    return _memory_store_instance
