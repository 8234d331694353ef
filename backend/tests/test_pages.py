"""Tests for the share page and its HTML generator."""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from backend.models.component import Component
from backend.services.preview import render_share_page
from engine.jsx.types import CompiledComponent


def stored(code: str, title: str = "Shared Card") -> Component:
    now = datetime.now(UTC)
    return Component(
        id=uuid4(),
        code=code,
        original_code=code,
        title=title,
        created_at=now,
        updated_at=now,
    )


@pytest.mark.asyncio
class TestShareRoute:
    async def test_renders_saved_component(self, async_client, memory_repo):
        component = stored("function Card() {\n  return <div>Hi</div>;\n}")
        await memory_repo.create(component)

        res = await async_client.get(f"/share/{component.id}")
        assert res.status_code == 200
        assert res.headers["content-type"].startswith("text/html")
        assert "<title>Shared Card</title>" in res.text
        assert "unpkg.com/@babel/standalone" in res.text
        assert 'const COMPONENT_NAME = "Card";' in res.text

    async def test_missing(self, async_client):
        res = await async_client.get(f"/share/{uuid4()}")
        assert res.status_code == 404
        assert "Component not found" in res.text

    async def test_stored_code_no_longer_compiles(self, async_client, memory_repo):
        component = stored("const a = 1;\nconst = 2;")
        await memory_repo.create(component)
        res = await async_client.get(f"/share/{component.id}")
        assert res.status_code == 422


class TestRenderSharePage:
    def test_source_cannot_close_script(self):
        html = render_share_page(CompiledComponent(name="Component", code="<div>a</div>"), "T")
        assert "<\\/div>" in html
        assert 'const SOURCE = "<div>a<\\/div>";' in html

    def test_title_escaped(self):
        html = render_share_page(CompiledComponent(name="Component", code="<p/>"), "<b>&</b>")
        assert "<title>&lt;b&gt;&amp;&lt;/b&gt;</title>" in html
