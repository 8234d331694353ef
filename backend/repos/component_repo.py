"""Repositories for saved components: in-memory and Postgres."""

from __future__ import annotations

import builtins
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import asyncpg

from backend import db
from backend.config import settings
from backend.models.component import Component, ComponentStats

# Columns an update may touch; keys of `changes` are checked against this
UPDATABLE_FIELDS = ("code", "original_code", "properties", "title", "description", "updated_at")


def _row_to_component(row: asyncpg.Record) -> Component:
    """Convert a database row to a Component model."""
    return Component(
        id=row["id"],
        code=row["code"],
        original_code=row["original_code"],
        properties=row["properties"] or {},
        title=row["title"],
        description=row["description"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class ComponentRepo:
    """
    Abstract component store.
    Implement with Postgres for production, or in-memory for tests and local runs.
    """

    async def create(self, component: Component) -> Component:
        """Insert a new component. Raises ValueError if the id is taken."""
        raise NotImplementedError

    async def get(self, component_id: UUID) -> Component | None:
        raise NotImplementedError

    async def update(self, component_id: UUID, changes: dict[str, Any]) -> Component | None:
        """Apply field changes. Returns None when the component does not exist."""
        raise NotImplementedError

    async def delete(self, component_id: UUID) -> bool:
        raise NotImplementedError

    async def list(self, limit: int = 10, offset: int = 0) -> tuple[builtins.list[Component], int]:
        """Most recently updated first. Returns (page, total)."""
        raise NotImplementedError

    async def search(self, query: str, limit: int = 10, offset: int = 0) -> tuple[builtins.list[Component], int]:
        """Case-insensitive substring match over title, description and code."""
        raise NotImplementedError

    async def stats(self) -> ComponentStats:
        raise NotImplementedError


def _check_fields(changes: dict[str, Any]) -> None:
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValueError(f"Cannot update fields: {sorted(unknown)}")


class MemoryComponentRepo(ComponentRepo):
    """Dict-backed store. State lives for the life of the process."""

    def __init__(self):
        self._components: dict[UUID, Component] = {}

    async def create(self, component: Component) -> Component:
        if component.id in self._components:
            raise ValueError("Component with this ID already exists")
        self._components[component.id] = component.model_copy(deep=True)
        return component

    async def get(self, component_id: UUID) -> Component | None:
        component = self._components.get(component_id)
        return component.model_copy(deep=True) if component else None

    async def update(self, component_id: UUID, changes: dict[str, Any]) -> Component | None:
        _check_fields(changes)
        component = self._components.get(component_id)
        if component is None:
            return None
        updated = component.model_copy(update=changes, deep=True)
        self._components[component_id] = updated
        return updated.model_copy(deep=True)

    async def delete(self, component_id: UUID) -> bool:
        return self._components.pop(component_id, None) is not None

    async def list(self, limit: int = 10, offset: int = 0) -> tuple[builtins.list[Component], int]:
        return self._page(self._components.values(), limit, offset)

    async def search(self, query: str, limit: int = 10, offset: int = 0) -> tuple[builtins.list[Component], int]:
        needle = query.lower()
        matches = [
            c
            for c in self._components.values()
            if needle in c.title.lower() or needle in c.description.lower() or needle in c.code.lower()
        ]
        return self._page(matches, limit, offset)

    async def stats(self) -> ComponentStats:
        now = datetime.now(UTC)
        day, week, month = now - timedelta(days=1), now - timedelta(days=7), now - timedelta(days=30)
        components = list(self._components.values())
        return ComponentStats(
            total=len(components),
            created_today=sum(1 for c in components if c.created_at > day),
            created_this_week=sum(1 for c in components if c.created_at > week),
            created_this_month=sum(1 for c in components if c.created_at > month),
            updated_today=sum(1 for c in components if c.updated_at > day),
        )

    def clear(self) -> None:
        self._components.clear()

    @staticmethod
    def _page(components, limit: int, offset: int) -> tuple[builtins.list[Component], int]:
        ordered = sorted(components, key=lambda c: c.updated_at, reverse=True)
        page = [c.model_copy(deep=True) for c in ordered[offset : offset + limit]]
        return page, len(ordered)


class PostgresComponentRepo(ComponentRepo):
    """All component database operations. Table created by alembic migration 001."""

    async def create(self, component: Component) -> Component:
        async with db.conn() as conn:
            try:
                row = await conn.fetchrow(
                    """
                    INSERT INTO components
                        (id, code, original_code, properties, title, description, created_at, updated_at)
                    VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                    RETURNING *
                    """,
                    component.id,
                    component.code,
                    component.original_code,
                    component.properties,
                    component.title,
                    component.description,
                    component.created_at,
                    component.updated_at,
                )
            except asyncpg.UniqueViolationError as e:
                raise ValueError("Component with this ID already exists") from e
            return _row_to_component(row)

    async def get(self, component_id: UUID) -> Component | None:
        async with db.conn() as conn:
            row = await conn.fetchrow("SELECT * FROM components WHERE id = $1", component_id)
            return _row_to_component(row) if row else None

    async def update(self, component_id: UUID, changes: dict[str, Any]) -> Component | None:
        _check_fields(changes)
        if not changes:
            return await self.get(component_id)

        set_clause = ", ".join(f"{k} = ${i + 2}" for i, k in enumerate(changes))
        values = list(changes.values())

        async with db.conn() as conn:
            # set_clause only contains names from UPDATABLE_FIELDS
            row = await conn.fetchrow(
                f"UPDATE components SET {set_clause} WHERE id = $1 RETURNING *",  # noqa: S608
                component_id,
                *values,
            )
            return _row_to_component(row) if row else None

    async def delete(self, component_id: UUID) -> bool:
        async with db.conn() as conn:
            result = await conn.execute("DELETE FROM components WHERE id = $1", component_id)
            return result == "DELETE 1"

    async def list(self, limit: int = 10, offset: int = 0) -> tuple[builtins.list[Component], int]:
        async with db.conn() as conn:
            total = await conn.fetchval("SELECT count(*) FROM components")
            rows = await conn.fetch(
                "SELECT * FROM components ORDER BY updated_at DESC LIMIT $1 OFFSET $2",
                limit,
                offset,
            )
            return [_row_to_component(row) for row in rows], total

    async def search(self, query: str, limit: int = 10, offset: int = 0) -> tuple[builtins.list[Component], int]:
        where = "strpos(lower(title), $1) > 0 OR strpos(lower(description), $1) > 0 OR strpos(lower(code), $1) > 0"
        needle = query.lower()
        async with db.conn() as conn:
            total = await conn.fetchval(f"SELECT count(*) FROM components WHERE {where}", needle)  # noqa: S608
            rows = await conn.fetch(
                f"SELECT * FROM components WHERE {where} ORDER BY updated_at DESC LIMIT $2 OFFSET $3",  # noqa: S608
                needle,
                limit,
                offset,
            )
            return [_row_to_component(row) for row in rows], total

    async def stats(self) -> ComponentStats:
        async with db.conn() as conn:
            row = await conn.fetchrow(
                """
                SELECT
                    count(*) AS total,
                    count(*) FILTER (WHERE created_at > now() - interval '1 day') AS created_today,
                    count(*) FILTER (WHERE created_at > now() - interval '7 days') AS created_this_week,
                    count(*) FILTER (WHERE created_at > now() - interval '30 days') AS created_this_month,
                    count(*) FILTER (WHERE updated_at > now() - interval '1 day') AS updated_today
                FROM components
                """
            )
            return ComponentStats(**dict(row))


_memory_repo = MemoryComponentRepo()
_postgres_repo = PostgresComponentRepo()


def get_component_repo() -> ComponentRepo:
    """Postgres when DATABASE_URL is configured, the process-wide memory store otherwise."""
    if settings.DATABASE_URL:
        return _postgres_repo
    return _memory_repo
