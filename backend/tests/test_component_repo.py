"""
Tests for the component repositories.

Every test runs against the in-memory store, and against Postgres when
DATABASE_URL is set (the components table must already be migrated).
"""

from __future__ import annotations

import os
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
import pytest_asyncio

from backend import db
from backend.models.component import Component
from backend.repos.component_repo import MemoryComponentRepo, PostgresComponentRepo

pytestmark = pytest.mark.asyncio


def make_component(
    title: str = "Card",
    code: str = "<div>Card</div>",
    description: str = "",
    age: timedelta = timedelta(0),
    updated_age: timedelta | None = None,
) -> Component:
    now = datetime.now(UTC)
    return Component(
        id=uuid4(),
        code=code,
        original_code=code,
        properties={},
        title=title,
        description=description,
        created_at=now - age,
        updated_at=now - (age if updated_age is None else updated_age),
    )


@pytest_asyncio.fixture(params=["memory", "postgres"])
async def repo(request):
    if request.param == "memory":
        yield MemoryComponentRepo()
        return

    dsn = os.environ.get("DATABASE_URL")
    if not dsn:
        pytest.skip("DATABASE_URL not set")

    await db.init_pool(dsn)
    try:
        async with db.conn() as conn:
            await conn.execute("DELETE FROM components")
        yield PostgresComponentRepo()
    finally:
        await db.close_pool()


class TestCrud:
    async def test_create_and_get(self, repo):
        component = make_component(title="Hero")
        await repo.create(component)

        loaded = await repo.get(component.id)
        assert loaded is not None
        assert loaded.title == "Hero"
        assert loaded.code == component.code
        assert loaded.properties == {}

    async def test_get_missing(self, repo):
        assert await repo.get(uuid4()) is None

    async def test_duplicate_id_rejected(self, repo):
        component = make_component()
        await repo.create(component)
        with pytest.raises(ValueError, match="already exists"):
            await repo.create(component)

    async def test_update(self, repo):
        component = make_component()
        await repo.create(component)

        updated = await repo.update(
            component.id,
            {"code": "<p>new</p>", "properties": {"//p": {"textContent": "new"}}, "title": "Renamed"},
        )
        assert updated is not None
        assert updated.code == "<p>new</p>"
        assert updated.original_code == component.original_code
        assert updated.properties == {"//p": {"textContent": "new"}}
        assert (await repo.get(component.id)).title == "Renamed"

    async def test_update_missing(self, repo):
        assert await repo.update(uuid4(), {"title": "x"}) is None

    async def test_update_rejects_unknown_fields(self, repo):
        component = make_component()
        await repo.create(component)
        with pytest.raises(ValueError):
            await repo.update(component.id, {"id": uuid4()})

    async def test_delete(self, repo):
        component = make_component()
        await repo.create(component)
        assert await repo.delete(component.id) is True
        assert await repo.delete(component.id) is False
        assert await repo.get(component.id) is None


class TestListing:
    async def test_most_recently_updated_first(self, repo):
        old = make_component(title="old", age=timedelta(days=3))
        new = make_component(title="new")
        touched = make_component(title="touched", age=timedelta(days=10), updated_age=timedelta(hours=1))
        for c in (old, new, touched):
            await repo.create(c)

        items, total = await repo.list()
        assert total == 3
        assert [c.title for c in items] == ["new", "touched", "old"]

    async def test_limit_offset(self, repo):
        for i in range(5):
            await repo.create(make_component(title=f"c{i}", age=timedelta(minutes=i)))

        items, total = await repo.list(limit=2, offset=2)
        assert total == 5
        assert [c.title for c in items] == ["c2", "c3"]

    async def test_search_is_case_insensitive(self, repo):
        await repo.create(make_component(title="Pricing Table"))
        await repo.create(make_component(title="Hero", description="big PRICING banner"))
        await repo.create(make_component(title="Footer", code="<footer>pricing</footer>"))
        await repo.create(make_component(title="Nav"))

        items, total = await repo.search("Pricing")
        assert total == 3
        assert {c.title for c in items} == {"Pricing Table", "Hero", "Footer"}

    async def test_search_no_match(self, repo):
        await repo.create(make_component())
        assert await repo.search("nothing") == ([], 0)


class TestStats:
    async def test_counts(self, repo):
        await repo.create(make_component(title="today"))
        await repo.create(make_component(title="this week", age=timedelta(days=3)))
        await repo.create(make_component(title="this month", age=timedelta(days=20)))
        await repo.create(make_component(title="old", age=timedelta(days=90), updated_age=timedelta(hours=2)))

        stats = await repo.stats()
        assert stats.total == 4
        assert stats.created_today == 1
        assert stats.created_this_week == 2
        assert stats.created_this_month == 3
        assert stats.updated_today == 2
